"""Contact use cases: validation in front of a ContactStore, otherwise pass-through."""

import logging
from collections.abc import Callable
from datetime import datetime

from contactbook.application.errors import ContactValidationError
from contactbook.application.ports import ContactStore
from contactbook.application.validation import (
    validate_contact,
    validate_delete_contact,
    validate_name_search,
)
from contactbook.domain import Address, Contact, Phone

logger = logging.getLogger(__name__)


class ContactManager:
    """Gatekeeper between untrusted input and the store. Owns all business rules."""

    def __init__(
        self,
        store: ContactStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now

    def get_contact(self, contact_id: int) -> Contact | None:
        """Return the contact, or None if the store has no match."""
        return self._store.get(contact_id)

    def get_contacts(self) -> list[Contact]:
        return self._store.get_all()

    def search_contacts(
        self, first_name: str | None, last_name: str | None
    ) -> list[Contact]:
        """Return contacts matching both names. Both are required."""
        try:
            validate_name_search(first_name, last_name)
        except ContactValidationError as e:
            logger.warning("Rejected contact search: %s", e)
            raise
        return self._store.get_by_name(first_name, last_name)

    def save_contact(self, contact: Contact | None) -> Contact | None:
        """Validate and persist. Returns the saved contact, or None if the store wrote nothing."""
        try:
            validate_contact(contact, self._clock())
        except ContactValidationError as e:
            logger.warning("Rejected contact %s: %s", e.param_name, e)
            raise
        saved = self._store.save(contact)
        if saved is None:
            logger.info("Store did not save contact %s", contact.contact_id)
        else:
            logger.info("Saved contact %s", saved.contact_id)
        return saved

    def delete_contact(self, contact_id: int) -> bool:
        """Delete by id (cascades to phones and addresses). True if a contact was removed."""
        deleted = self._store.delete(contact_id)
        logger.info("Delete contact %s: %s", contact_id, "done" if deleted else "not found")
        return deleted

    def remove_contact(self, contact: Contact | None) -> bool:
        """Delete the given contact. Returns False without touching the store when contact is None."""
        if not validate_delete_contact(contact):
            return False
        return self.delete_contact(contact.contact_id)

    def get_contact_phones(self, contact_id: int) -> list[Phone]:
        return self._store.get_phones(contact_id)

    def get_contact_phone(self, contact_id: int, phone_id: int) -> Phone | None:
        return self._store.get_phone(contact_id, phone_id)

    def get_contact_addresses(self, contact_id: int) -> list[Address]:
        return self._store.get_addresses(contact_id)

    def get_contact_address(self, contact_id: int, address_id: int) -> Address | None:
        return self._store.get_address(contact_id, address_id)
