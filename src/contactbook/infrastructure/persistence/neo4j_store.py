"""Neo4j implementation of ContactStore.
Graph: (c:Contact)-[:HAS_PHONE]->(p:Phone)-[:OF_TYPE]->(:PhoneType),
       (c:Contact)-[:HAS_ADDRESS]->(a:Address)-[:OF_TYPE]->(:AddressType).
Phones and addresses are owned by their contact and deleted with it; type nodes are shared.
Integer ids come from (:Sequence {name}) counter nodes.
"""

import logging
from datetime import datetime

from contactbook.domain import NEW_ID, Address, AddressType, Contact, Phone, PhoneType
from contactbook.infrastructure.identifiers import child_ids
from contactbook.infrastructure.phone import normalize_phone

logger = logging.getLogger(__name__)

_CONSTRAINT_QUERIES = (
    "CREATE CONSTRAINT contact_id_unique IF NOT EXISTS FOR (c:Contact) REQUIRE c.id IS UNIQUE",
    "CREATE CONSTRAINT phone_id_unique IF NOT EXISTS FOR (p:Phone) REQUIRE p.id IS UNIQUE",
    "CREATE CONSTRAINT address_id_unique IF NOT EXISTS FOR (a:Address) REQUIRE a.id IS UNIQUE",
)

_NEXT_ID_QUERY = """
MERGE (s:Sequence {name: $name})
ON CREATE SET s.value = 0
SET s.value = s.value + 1
RETURN s.value AS value
"""

_CREATE_CONTACT_QUERY = """
CREATE (c:Contact {
    id: $id,
    first_name: $first_name,
    last_name: $last_name,
    email_address: $email_address,
    birthday: $birthday,
    anniversary: $anniversary
})
RETURN c.id AS id
"""

_UPDATE_CONTACT_QUERY = """
MATCH (c:Contact {id: $id})
SET c.first_name = $first_name,
    c.last_name = $last_name,
    c.email_address = $email_address,
    c.birthday = $birthday,
    c.anniversary = $anniversary
RETURN c.id AS id
"""

_OWNED_CHILD_IDS_QUERY = """
MATCH (c:Contact {id: $id})
OPTIONAL MATCH (c)-[:HAS_PHONE]->(p:Phone)
WITH c, collect(p.id) AS phone_ids
OPTIONAL MATCH (c)-[:HAS_ADDRESS]->(a:Address)
RETURN phone_ids, collect(a.id) AS address_ids
"""

_DELETE_CHILDREN_QUERY = """
MATCH (c:Contact {id: $id})-[:HAS_PHONE|HAS_ADDRESS]->(child)
DETACH DELETE child
"""

_CREATE_PHONE_QUERY = """
MATCH (c:Contact {id: $contact_id})
CREATE (c)-[:HAS_PHONE]->(p:Phone {
    id: $id,
    phone_number: $phone_number,
    extension: $extension
})
"""

_CREATE_ADDRESS_QUERY = """
MATCH (c:Contact {id: $contact_id})
CREATE (c)-[:HAS_ADDRESS]->(a:Address {
    id: $id,
    street_address: $street_address,
    secondary_address: $secondary_address,
    unit: $unit,
    city: $city,
    state: $state,
    country: $country,
    postal_code: $postal_code
})
"""

_LINK_PHONE_TYPE_QUERY = """
MATCH (p:Phone {id: $id})
MERGE (t:PhoneType {id: $type_id})
ON CREATE SET t.name = $type_name
MERGE (p)-[:OF_TYPE]->(t)
"""

_LINK_ADDRESS_TYPE_QUERY = """
MATCH (a:Address {id: $id})
MERGE (t:AddressType {id: $type_id})
ON CREATE SET t.name = $type_name
MERGE (a)-[:OF_TYPE]->(t)
"""

_DELETE_CONTACT_QUERY = """
MATCH (c:Contact {id: $id})
OPTIONAL MATCH (c)-[:HAS_PHONE|HAS_ADDRESS]->(child)
WITH c, collect(child) AS children
FOREACH (x IN children | DETACH DELETE x)
DETACH DELETE c
"""

# Appended to a MATCH on (c:Contact); returns one row per contact with its children.
_CONTACT_PROJECTION = """
OPTIONAL MATCH (c)-[:HAS_PHONE]->(p:Phone)
OPTIONAL MATCH (p)-[:OF_TYPE]->(pt:PhoneType)
WITH c, collect(p {.*, type_id: pt.id, type_name: pt.name}) AS phones
OPTIONAL MATCH (c)-[:HAS_ADDRESS]->(a:Address)
OPTIONAL MATCH (a)-[:OF_TYPE]->(at:AddressType)
WITH c, phones, collect(a {.*, type_id: at.id, type_name: at.name}) AS addresses
RETURN c, phones, addresses
ORDER BY c.id
"""

_GET_CONTACT_QUERY = "MATCH (c:Contact) WHERE c.id = $id" + _CONTACT_PROJECTION

_GET_ALL_CONTACTS_QUERY = "MATCH (c:Contact)" + _CONTACT_PROJECTION

_GET_CONTACTS_BY_NAME_QUERY = (
    "MATCH (c:Contact) WHERE c.first_name = $first_name AND c.last_name = $last_name"
    + _CONTACT_PROJECTION
)

_GET_PHONES_QUERY = """
MATCH (c:Contact {id: $contact_id})-[:HAS_PHONE]->(p:Phone)
WHERE $phone_id IS NULL OR p.id = $phone_id
OPTIONAL MATCH (p)-[:OF_TYPE]->(t:PhoneType)
RETURN p {.*, type_id: t.id, type_name: t.name} AS phone
ORDER BY p.id
"""

_GET_ADDRESSES_QUERY = """
MATCH (c:Contact {id: $contact_id})-[:HAS_ADDRESS]->(a:Address)
WHERE $address_id IS NULL OR a.id = $address_id
OPTIONAL MATCH (a)-[:OF_TYPE]->(t:AddressType)
RETURN a {.*, type_id: t.id, type_name: t.name} AS address
ORDER BY a.id
"""


def _datetime_to_iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _iso_to_datetime(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def ensure_constraints(driver) -> None:
    """Create unique-id constraints for Contact, Phone and Address if missing."""
    with driver.session() as session:
        for query in _CONSTRAINT_QUERIES:
            session.run(query)


class Neo4jContactStore:
    """Stores contacts, phones and addresses as nodes in Neo4j."""

    def __init__(self, driver: object, default_region: str | None = None) -> None:
        self._driver = driver
        self._default_region = default_region

    def get(self, contact_id: int) -> Contact | None:
        with self._driver.session() as session:
            result = session.run(_GET_CONTACT_QUERY, id=contact_id)
            record = result.single()
        if not record:
            return None
        return _record_to_contact(record)

    def get_all(self) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run(_GET_ALL_CONTACTS_QUERY)
            return [_record_to_contact(rec) for rec in result]

    def get_by_name(self, first_name: str, last_name: str) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run(
                _GET_CONTACTS_BY_NAME_QUERY,
                first_name=first_name,
                last_name=last_name,
            )
            return [_record_to_contact(rec) for rec in result]

    def save(self, contact: Contact) -> Contact | None:
        with self._driver.session() as session:
            contact_id = session.execute_write(self._save_tx, contact)
        if contact_id is None:
            logger.debug("No contact %s to update", contact.contact_id)
            return None
        return self.get(contact_id)

    def _save_tx(self, tx, contact: Contact) -> int | None:
        is_new = contact.contact_id == NEW_ID
        contact_id = _next_id(tx, "Contact") if is_new else contact.contact_id
        record = tx.run(
            _CREATE_CONTACT_QUERY if is_new else _UPDATE_CONTACT_QUERY,
            id=contact_id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email_address=contact.email_address,
            birthday=_datetime_to_iso(contact.birthday),
            anniversary=_datetime_to_iso(contact.anniversary),
        ).single()
        if record is None:
            return None

        owned_phones: set[int] = set()
        owned_addresses: set[int] = set()
        # Full replace: children not on the incoming contact are dropped.
        if not is_new:
            owned = tx.run(_OWNED_CHILD_IDS_QUERY, id=contact_id).single()
            owned_phones = set(owned["phone_ids"])
            owned_addresses = set(owned["address_ids"])
            tx.run(_DELETE_CHILDREN_QUERY, id=contact_id)
        phone_ids = child_ids(
            [p.phone_id for p in contact.phones],
            owned_phones,
            lambda: _next_id(tx, "Phone"),
        )
        address_ids = child_ids(
            [a.address_id for a in contact.addresses],
            owned_addresses,
            lambda: _next_id(tx, "Address"),
        )
        for phone, phone_id in zip(contact.phones, phone_ids):
            phone = normalize_phone(phone, self._default_region)
            tx.run(
                _CREATE_PHONE_QUERY,
                contact_id=contact_id,
                id=phone_id,
                phone_number=phone.phone_number,
                extension=phone.extension,
            )
            if phone.phone_type is not None:
                tx.run(
                    _LINK_PHONE_TYPE_QUERY,
                    id=phone_id,
                    type_id=phone.phone_type.id,
                    type_name=phone.phone_type.name,
                )
        for address, address_id in zip(contact.addresses, address_ids):
            tx.run(
                _CREATE_ADDRESS_QUERY,
                contact_id=contact_id,
                id=address_id,
                street_address=address.street_address,
                secondary_address=address.secondary_address,
                unit=address.unit,
                city=address.city,
                state=address.state,
                country=address.country,
                postal_code=address.postal_code,
            )
            if address.address_type is not None:
                tx.run(
                    _LINK_ADDRESS_TYPE_QUERY,
                    id=address_id,
                    type_id=address.address_type.id,
                    type_name=address.address_type.name,
                )
        return contact_id

    def delete(self, contact_id: int) -> bool:
        """Delete the contact with its phones and addresses. True if any node was removed."""
        with self._driver.session() as session:
            summary = session.run(_DELETE_CONTACT_QUERY, id=contact_id).consume()
        return summary.counters.nodes_deleted > 0

    def remove(self, contact: Contact) -> bool:
        return self.delete(contact.contact_id)

    def get_phones(self, contact_id: int) -> list[Phone]:
        with self._driver.session() as session:
            result = session.run(_GET_PHONES_QUERY, contact_id=contact_id, phone_id=None)
            return [_row_to_phone(rec["phone"], contact_id) for rec in result]

    def get_phone(self, contact_id: int, phone_id: int) -> Phone | None:
        with self._driver.session() as session:
            result = session.run(
                _GET_PHONES_QUERY, contact_id=contact_id, phone_id=phone_id
            )
            record = result.single()
        if not record:
            return None
        return _row_to_phone(record["phone"], contact_id)

    def get_addresses(self, contact_id: int) -> list[Address]:
        with self._driver.session() as session:
            result = session.run(
                _GET_ADDRESSES_QUERY, contact_id=contact_id, address_id=None
            )
            return [_row_to_address(rec["address"], contact_id) for rec in result]

    def get_address(self, contact_id: int, address_id: int) -> Address | None:
        with self._driver.session() as session:
            result = session.run(
                _GET_ADDRESSES_QUERY, contact_id=contact_id, address_id=address_id
            )
            record = result.single()
        if not record:
            return None
        return _row_to_address(record["address"], contact_id)


def _next_id(tx, name: str) -> int:
    return tx.run(_NEXT_ID_QUERY, name=name).single()["value"]


def _row_to_phone(row: dict, contact_id: int) -> Phone:
    phone_type = None
    if row.get("type_id") is not None:
        phone_type = PhoneType(id=row["type_id"], name=row.get("type_name") or "")
    return Phone(
        phone_id=row["id"],
        phone_number=row.get("phone_number"),
        extension=row.get("extension"),
        phone_type=phone_type,
        contact_id=contact_id,
    )


def _row_to_address(row: dict, contact_id: int) -> Address:
    address_type = None
    if row.get("type_id") is not None:
        address_type = AddressType(id=row["type_id"], name=row.get("type_name") or "")
    return Address(
        address_id=row["id"],
        street_address=row.get("street_address"),
        secondary_address=row.get("secondary_address"),
        unit=row.get("unit"),
        city=row.get("city"),
        state=row.get("state"),
        country=row.get("country"),
        postal_code=row.get("postal_code"),
        address_type=address_type,
        contact_id=contact_id,
    )


def _record_to_contact(record) -> Contact:
    c = record["c"]
    contact_id = c["id"]
    phones = sorted(
        (_row_to_phone(row, contact_id) for row in record["phones"]),
        key=lambda p: p.phone_id,
    )
    addresses = sorted(
        (_row_to_address(row, contact_id) for row in record["addresses"]),
        key=lambda a: a.address_id,
    )
    return Contact(
        contact_id=contact_id,
        first_name=c.get("first_name"),
        last_name=c.get("last_name"),
        email_address=c.get("email_address"),
        birthday=_iso_to_datetime(c.get("birthday")),
        anniversary=_iso_to_datetime(c.get("anniversary")),
        phones=phones,
        addresses=addresses,
    )
