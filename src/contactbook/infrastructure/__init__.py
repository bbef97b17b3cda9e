"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.api_client import ContactsApiClient, ContactsApiError
from contactbook.infrastructure.memory_store import InMemoryContactStore
from contactbook.infrastructure.persistence.neo4j_store import (
    Neo4jContactStore,
    ensure_constraints,
)

__all__ = [
    "ContactsApiClient",
    "ContactsApiError",
    "InMemoryContactStore",
    "Neo4jContactStore",
    "ensure_constraints",
]
