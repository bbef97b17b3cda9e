"""Domain entities: Contact and its owned Phone and Address records, plus lookup types."""

from dataclasses import dataclass, field
from datetime import datetime

# Identifier of a record that has not been persisted yet.
NEW_ID = 0


@dataclass(frozen=True)
class PhoneType:
    """Classification of a phone number (home, work, mobile...). Referenced, never owned."""

    id: int = 0
    name: str = ""


@dataclass(frozen=True)
class AddressType:
    """Classification of an address (home, work...). Referenced, never owned."""

    id: int = 0
    name: str = ""


@dataclass(frozen=True)
class Phone:
    """A phone number owned by exactly one Contact."""

    phone_id: int = NEW_ID
    phone_number: str | None = None
    extension: str | None = None
    phone_type: PhoneType | None = None
    contact_id: int = NEW_ID


@dataclass(frozen=True)
class Address:
    """A postal address owned by exactly one Contact."""

    address_id: int = NEW_ID
    street_address: str | None = None
    secondary_address: str | None = None
    unit: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    address_type: AddressType | None = None
    contact_id: int = NEW_ID


@dataclass(frozen=True)
class Contact:
    """
    A person with identity and contact details.
    Carries no rules of its own; ContactManager validates before persistence.
    contact_id == NEW_ID means the contact was never saved.
    """

    contact_id: int = NEW_ID
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    birthday: datetime | None = None
    anniversary: datetime | None = None
    phones: list[Phone] = field(default_factory=list)
    addresses: list[Address] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.contact_id == NEW_ID
