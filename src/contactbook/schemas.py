"""Wire shapes (pydantic) for the REST API and its HTTP client. Same field names as the domain."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from contactbook.domain import Address, AddressType, Contact, Phone, PhoneType


class _WireModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PhoneTypeBody(_WireModel):
    id: int = 0
    name: str = ""


class AddressTypeBody(_WireModel):
    id: int = 0
    name: str = ""


class PhoneBody(_WireModel):
    phone_id: int = 0
    phone_number: str | None = None
    extension: str | None = None
    phone_type: PhoneTypeBody | None = None
    contact_id: int = 0

    def to_domain(self) -> Phone:
        return Phone(
            phone_id=self.phone_id,
            phone_number=self.phone_number,
            extension=self.extension,
            phone_type=(
                PhoneType(id=self.phone_type.id, name=self.phone_type.name)
                if self.phone_type
                else None
            ),
            contact_id=self.contact_id,
        )


class AddressBody(_WireModel):
    address_id: int = 0
    street_address: str | None = None
    secondary_address: str | None = None
    unit: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    address_type: AddressTypeBody | None = None
    contact_id: int = 0

    def to_domain(self) -> Address:
        return Address(
            address_id=self.address_id,
            street_address=self.street_address,
            secondary_address=self.secondary_address,
            unit=self.unit,
            city=self.city,
            state=self.state,
            country=self.country,
            postal_code=self.postal_code,
            address_type=(
                AddressType(id=self.address_type.id, name=self.address_type.name)
                if self.address_type
                else None
            ),
            contact_id=self.contact_id,
        )


class ContactBody(_WireModel):
    contact_id: int = 0
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    birthday: datetime | None = None
    anniversary: datetime | None = None
    phones: list[PhoneBody] = Field(default_factory=list)
    addresses: list[AddressBody] = Field(default_factory=list)

    def to_domain(self) -> Contact:
        return Contact(
            contact_id=self.contact_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email_address=self.email_address,
            birthday=self.birthday,
            anniversary=self.anniversary,
            phones=[p.to_domain() for p in self.phones],
            addresses=[a.to_domain() for a in self.addresses],
        )
