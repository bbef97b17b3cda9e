"""HTTP client for the contacts REST API. Pure proxy: no rules of its own."""

import logging
import os

import httpx
from pydantic import TypeAdapter

from contactbook.domain import Address, Contact, Phone
from contactbook.schemas import AddressBody, ContactBody, PhoneBody

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/"

_contact_list = TypeAdapter(list[ContactBody])
_phone_list = TypeAdapter(list[PhoneBody])
_address_list = TypeAdapter(list[AddressBody])


class ContactsApiError(Exception):
    """The API answered with a status the client does not expect."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContactsApiClient:
    """Calls /contacts endpoints and maps JSON bodies back to domain objects.

    Pass client to reuse an existing httpx.Client (or a fastapi TestClient).
    base_url falls back to CONTACTS_API_URL, then to DEFAULT_API_URL.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        base = base_url or os.environ.get("CONTACTS_API_URL", "").strip() or DEFAULT_API_URL
        self._base_url = base if base.endswith("/") else base + "/"
        self._client = client or httpx.Client()

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _get(self, path: str, params: dict | None = None) -> httpx.Response | None:
        response = self._client.get(self._url(path), params=params)
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning("GET %s returned %s", path, response.status_code)
            raise ContactsApiError(
                response.status_code,
                f"Invalid status code in the response: {response.status_code}.",
            )
        return response

    def get_contacts(self) -> list[Contact]:
        response = self._get("contacts")
        if response is None:
            return []
        return [c.to_domain() for c in _contact_list.validate_python(response.json())]

    def get_contact(self, contact_id: int) -> Contact | None:
        response = self._get(f"contacts/{contact_id}")
        if response is None:
            return None
        return ContactBody.model_validate(response.json()).to_domain()

    def get_contacts_by_name(self, first_name: str, last_name: str) -> list[Contact]:
        response = self._get(
            "contacts/search", params={"firstname": first_name, "lastname": last_name}
        )
        if response is None:
            return []
        return [c.to_domain() for c in _contact_list.validate_python(response.json())]

    def save_contact(self, contact: Contact) -> Contact:
        body = ContactBody.model_validate(contact).model_dump(mode="json")
        response = self._client.post(self._url("contacts"), json=body)
        if response.status_code != 201:
            raise ContactsApiError(
                response.status_code,
                f"Invalid status code in the response: {response.status_code}.",
            )
        return ContactBody.model_validate(response.json()).to_domain()

    def delete_contact(self, contact_id: int) -> bool:
        response = self._client.delete(self._url(f"contacts/{contact_id}"))
        return response.status_code == 204

    def remove_contact(self, contact: Contact) -> bool:
        return self.delete_contact(contact.contact_id)

    def get_contact_phones(self, contact_id: int) -> list[Phone]:
        response = self._get(f"contacts/{contact_id}/phones")
        if response is None:
            return []
        return [p.to_domain() for p in _phone_list.validate_python(response.json())]

    def get_contact_phone(self, contact_id: int, phone_id: int) -> Phone | None:
        response = self._get(f"contacts/{contact_id}/phones/{phone_id}")
        if response is None:
            return None
        return PhoneBody.model_validate(response.json()).to_domain()

    def get_contact_addresses(self, contact_id: int) -> list[Address]:
        response = self._get(f"contacts/{contact_id}/addresses")
        if response is None:
            return []
        return [a.to_domain() for a in _address_list.validate_python(response.json())]

    def get_contact_address(self, contact_id: int, address_id: int) -> Address | None:
        response = self._get(f"contacts/{contact_id}/addresses/{address_id}")
        if response is None:
            return None
        return AddressBody.model_validate(response.json()).to_domain()
