"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, Phone, Address, PhoneType, AddressType). No outer dependencies.
- application: use cases (ContactManager), port (ContactStore), validation rules and errors.
- infrastructure: adapters (InMemoryContactStore, Neo4jContactStore) and the HTTP client.
"""

from contactbook.application import (
    ContactManager,
    ContactStore,
    ContactValidationError,
    OutOfRangeError,
    RequiredFieldError,
)
from contactbook.domain import Address, AddressType, Contact, Phone, PhoneType
from contactbook.infrastructure import (
    ContactsApiClient,
    InMemoryContactStore,
    Neo4jContactStore,
)

__all__ = [
    "Address",
    "AddressType",
    "Contact",
    "ContactManager",
    "ContactStore",
    "ContactValidationError",
    "ContactsApiClient",
    "InMemoryContactStore",
    "Neo4jContactStore",
    "OutOfRangeError",
    "Phone",
    "PhoneType",
    "RequiredFieldError",
]
