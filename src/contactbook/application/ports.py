"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Address, Contact, Phone


class ContactStore(Protocol):
    """Persists and queries contacts together with their phones and addresses.

    "Nothing found" and "zero rows affected" are reported as None / False, never raised.
    """

    def get(self, contact_id: int) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def get_all(self) -> list[Contact]:
        """Return all contacts in a stable order chosen by the store."""
        ...

    def get_by_name(self, first_name: str, last_name: str) -> list[Contact]:
        """Return contacts whose first and last names both match exactly."""
        ...

    def save(self, contact: Contact) -> Contact | None:
        """Insert when contact_id is NEW_ID, otherwise replace the stored contact.
        Returns the contact with identifiers populated, or None when nothing was written."""
        ...

    def delete(self, contact_id: int) -> bool:
        """Delete the contact and all of its phones and addresses. True if anything was removed."""
        ...

    def remove(self, contact: Contact) -> bool:
        """Same as delete(contact.contact_id)."""
        ...

    def get_phones(self, contact_id: int) -> list[Phone]:
        ...

    def get_phone(self, contact_id: int, phone_id: int) -> Phone | None:
        ...

    def get_addresses(self, contact_id: int) -> list[Address]:
        ...

    def get_address(self, contact_id: int, address_id: int) -> Address | None:
        ...
