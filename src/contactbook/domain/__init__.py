"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import (
    NEW_ID,
    Address,
    AddressType,
    Contact,
    Phone,
    PhoneType,
)

__all__ = ["NEW_ID", "Address", "AddressType", "Contact", "Phone", "PhoneType"]
