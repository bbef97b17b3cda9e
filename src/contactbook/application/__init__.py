"""Application layer: use cases, ports, validation. Depends only on domain."""

from contactbook.application.contact_manager import ContactManager
from contactbook.application.errors import (
    ContactValidationError,
    OutOfRangeError,
    RequiredFieldError,
)
from contactbook.application.ports import ContactStore
from contactbook.application.validation import (
    validate_contact,
    validate_delete_contact,
    validate_name_search,
)

__all__ = [
    "ContactManager",
    "ContactStore",
    "ContactValidationError",
    "OutOfRangeError",
    "RequiredFieldError",
    "validate_contact",
    "validate_delete_contact",
    "validate_name_search",
]
