"""
FastAPI backend: REST API over ContactManager.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
import threading
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase

from contactbook.application import ContactManager, ContactValidationError, OutOfRangeError
from contactbook.infrastructure import (
    InMemoryContactStore,
    Neo4jContactStore,
    ensure_constraints,
)
from contactbook.schemas import AddressBody, ContactBody, PhoneBody

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"


def _store_kind() -> str:
    return os.environ.get("CONTACTS_STORE", STORE_NEO4J).strip().lower() or STORE_NEO4J


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _build_manager(app: FastAPI) -> ContactManager:
    kind = _store_kind()
    if kind == STORE_MEMORY:
        return ContactManager(InMemoryContactStore())
    if kind != STORE_NEO4J:
        raise RuntimeError(f"Unknown CONTACTS_STORE: {kind!r}")
    if getattr(app.state, "driver", None) is None:
        app.state.driver = _get_driver()
        ensure_constraints(app.state.driver)
    return ContactManager(Neo4jContactStore(app.state.driver))


_manager_lock = threading.Lock()


def get_manager(request: Request) -> ContactManager:
    app = request.app
    manager = getattr(app.state, "manager", None)
    if manager is None:
        # Sync handlers run in a threadpool; build the manager and driver only once.
        with _manager_lock:
            manager = getattr(app.state, "manager", None)
            if manager is None:
                manager = app.state.manager = _build_manager(app)
    return manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    app.state.manager = None
    logger.info("Contacts API starting with %s store", _store_kind())
    try:
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Contacts API", lifespan=lifespan)


@app.exception_handler(ContactValidationError)
async def contact_validation_error(request: Request, exc: ContactValidationError):
    content = {"detail": exc.message, "field": exc.param_name}
    if isinstance(exc, OutOfRangeError):
        content["actual_value"] = jsonable_encoder(exc.actual_value)
    return JSONResponse(status_code=400, content=content)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


@app.get("/contacts")
def list_contacts(manager: ContactManager = Depends(get_manager)) -> list[ContactBody]:
    return [ContactBody.model_validate(c) for c in manager.get_contacts()]


@app.get("/contacts/search")
def search_contacts(
    firstname: str | None = None,
    lastname: str | None = None,
    manager: ContactManager = Depends(get_manager),
) -> list[ContactBody]:
    contacts = manager.search_contacts(firstname, lastname)
    return [ContactBody.model_validate(c) for c in contacts]


@app.get("/contacts/{contact_id}")
def get_contact(
    contact_id: int, manager: ContactManager = Depends(get_manager)
) -> ContactBody:
    contact = manager.get_contact(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return ContactBody.model_validate(contact)


@app.post("/contacts", status_code=201)
def save_contact(body: ContactBody, manager: ContactManager = Depends(get_manager)):
    saved = manager.save_contact(body.to_domain())
    if saved is None:
        raise HTTPException(status_code=400, detail="Failed to insert the contact")
    return JSONResponse(
        content=jsonable_encoder(ContactBody.model_validate(saved)),
        status_code=201,
        headers={"Location": f"/contacts/{saved.contact_id}"},
    )


@app.delete("/contacts/{contact_id}", status_code=204)
def delete_contact(contact_id: int, manager: ContactManager = Depends(get_manager)):
    if not manager.delete_contact(contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")
    return Response(status_code=204)


@app.get("/contacts/{contact_id}/phones")
def list_contact_phones(
    contact_id: int, manager: ContactManager = Depends(get_manager)
) -> list[PhoneBody]:
    return [PhoneBody.model_validate(p) for p in manager.get_contact_phones(contact_id)]


@app.get("/contacts/{contact_id}/phones/{phone_id}")
def get_contact_phone(
    contact_id: int, phone_id: int, manager: ContactManager = Depends(get_manager)
) -> PhoneBody:
    phone = manager.get_contact_phone(contact_id, phone_id)
    if phone is None:
        raise HTTPException(status_code=404, detail="Phone not found")
    return PhoneBody.model_validate(phone)


@app.get("/contacts/{contact_id}/addresses")
def list_contact_addresses(
    contact_id: int, manager: ContactManager = Depends(get_manager)
) -> list[AddressBody]:
    return [
        AddressBody.model_validate(a) for a in manager.get_contact_addresses(contact_id)
    ]


@app.get("/contacts/{contact_id}/addresses/{address_id}")
def get_contact_address(
    contact_id: int, address_id: int, manager: ContactManager = Depends(get_manager)
) -> AddressBody:
    address = manager.get_contact_address(contact_id, address_id)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")
    return AddressBody.model_validate(address)
