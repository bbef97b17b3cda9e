"""ContactsApiClient against the real app, through fastapi's TestClient (an httpx.Client)."""

from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from api.main import app, get_manager
from contactbook.application import ContactManager
from contactbook.domain import Address, Contact, Phone
from contactbook.infrastructure import (
    ContactsApiClient,
    ContactsApiError,
    InMemoryContactStore,
)

NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def api():
    manager = ContactManager(InMemoryContactStore(), clock=lambda: NOW)
    app.dependency_overrides[get_manager] = lambda: manager
    try:
        yield ContactsApiClient("http://testserver", client=TestClient(app))
    finally:
        app.dependency_overrides.clear()


def _joseph(**overrides) -> Contact:
    fields = dict(
        first_name="Joseph",
        last_name="Guadagno",
        email_address="j@x.com",
        birthday=NOW - timedelta(days=10),
        phones=[Phone(phone_number="+12025551234", extension="7")],
        addresses=[Address(street_address="1 Main St", city="Phoenix")],
    )
    fields.update(overrides)
    return Contact(**fields)


def test_save_and_get(api):
    saved = api.save_contact(_joseph())
    assert saved.contact_id != 0
    assert saved.phones[0].contact_id == saved.contact_id

    assert api.get_contact(saved.contact_id) == saved
    assert api.get_contacts() == [saved]
    assert api.get_contacts_by_name("Joseph", "Guadagno") == [saved]


def test_get_missing_returns_none(api):
    assert api.get_contact(404) is None
    assert api.get_contact_phone(404, 1) is None
    assert api.get_contact_address(404, 1) is None
    assert api.get_contact_phones(404) == []


def test_save_invalid_contact_raises(api):
    with pytest.raises(ContactsApiError) as exc_info:
        api.save_contact(_joseph(email_address=""))
    assert exc_info.value.status_code == 400


def test_search_without_last_name_raises(api):
    with pytest.raises(ContactsApiError) as exc_info:
        api.get_contacts_by_name("Joseph", "")
    assert exc_info.value.status_code == 400


def test_nested_records(api):
    saved = api.save_contact(_joseph())
    phone = saved.phones[0]
    address = saved.addresses[0]
    assert api.get_contact_phones(saved.contact_id) == [phone]
    assert api.get_contact_phone(saved.contact_id, phone.phone_id) == phone
    assert api.get_contact_addresses(saved.contact_id) == [address]
    assert api.get_contact_address(saved.contact_id, address.address_id) == address


def test_delete(api):
    saved = api.save_contact(_joseph())
    assert api.remove_contact(saved) is True
    assert api.delete_contact(saved.contact_id) is False
    assert api.get_contacts() == []


def test_base_url_from_environment(monkeypatch):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=[])

    monkeypatch.setenv("CONTACTS_API_URL", "http://contacts.internal/api")
    client = ContactsApiClient(client=httpx.Client(transport=httpx.MockTransport(handler)))
    assert client.get_contacts() == []
    assert seen == ["http://contacts.internal/api/contacts"]


def test_unexpected_status_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    client = ContactsApiClient("http://x/", client=httpx.Client(transport=transport))
    with pytest.raises(ContactsApiError) as exc_info:
        client.get_contact(1)
    assert exc_info.value.status_code == 500
