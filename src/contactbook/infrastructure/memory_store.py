"""In-memory implementation of ContactStore (no DB)."""

import itertools
import logging
from dataclasses import replace

from contactbook.domain import NEW_ID, Address, Contact, Phone
from contactbook.infrastructure.identifiers import child_ids
from contactbook.infrastructure.phone import normalize_phone

logger = logging.getLogger(__name__)


class InMemoryContactStore:
    """Stores contacts in memory, keyed by integer id. Order preserved by insertion.
    Phones and addresses live inside their owning contact, so deleting a contact drops them too.
    """

    def __init__(self, default_region: str | None = None) -> None:
        self._contacts: dict[int, Contact] = {}
        self._contact_ids = itertools.count(1)
        self._phone_ids = itertools.count(1)
        self._address_ids = itertools.count(1)
        self._default_region = default_region

    def _copy(self, contact: Contact) -> Contact:
        return replace(contact, phones=list(contact.phones), addresses=list(contact.addresses))

    def get(self, contact_id: int) -> Contact | None:
        contact = self._contacts.get(contact_id)
        return self._copy(contact) if contact is not None else None

    def get_all(self) -> list[Contact]:
        return [self._copy(c) for c in self._contacts.values()]

    def get_by_name(self, first_name: str, last_name: str) -> list[Contact]:
        return [
            self._copy(c)
            for c in self._contacts.values()
            if c.first_name == first_name and c.last_name == last_name
        ]

    def save(self, contact: Contact) -> Contact | None:
        if contact.contact_id == NEW_ID:
            contact_id = next(self._contact_ids)
        elif contact.contact_id in self._contacts:
            contact_id = contact.contact_id
        else:
            logger.debug("No contact %s to update", contact.contact_id)
            return None

        existing = self._contacts.get(contact_id)
        phone_ids = child_ids(
            [p.phone_id for p in contact.phones],
            {p.phone_id for p in existing.phones} if existing else set(),
            self._phone_ids.__next__,
        )
        address_ids = child_ids(
            [a.address_id for a in contact.addresses],
            {a.address_id for a in existing.addresses} if existing else set(),
            self._address_ids.__next__,
        )
        phones = [
            normalize_phone(
                replace(p, phone_id=phone_id, contact_id=contact_id),
                self._default_region,
            )
            for p, phone_id in zip(contact.phones, phone_ids)
        ]
        addresses = [
            replace(a, address_id=address_id, contact_id=contact_id)
            for a, address_id in zip(contact.addresses, address_ids)
        ]
        stored = replace(contact, contact_id=contact_id, phones=phones, addresses=addresses)
        self._contacts[contact_id] = stored
        logger.debug("Stored contact %s", contact_id)
        return self._copy(stored)

    def delete(self, contact_id: int) -> bool:
        return self._contacts.pop(contact_id, None) is not None

    def remove(self, contact: Contact) -> bool:
        return self.delete(contact.contact_id)

    def get_phones(self, contact_id: int) -> list[Phone]:
        contact = self._contacts.get(contact_id)
        return list(contact.phones) if contact is not None else []

    def get_phone(self, contact_id: int, phone_id: int) -> Phone | None:
        return next(
            (p for p in self.get_phones(contact_id) if p.phone_id == phone_id), None
        )

    def get_addresses(self, contact_id: int) -> list[Address]:
        contact = self._contacts.get(contact_id)
        return list(contact.addresses) if contact is not None else []

    def get_address(self, contact_id: int, address_id: int) -> Address | None:
        return next(
            (a for a in self.get_addresses(contact_id) if a.address_id == address_id),
            None,
        )
