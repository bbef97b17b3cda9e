"""Business rules for contacts, as pure functions over the domain model.

Each check short-circuits: the first failing rule raises and nothing is aggregated.
"""

from datetime import date, datetime, time

from contactbook.application.errors import OutOfRangeError, RequiredFieldError
from contactbook.domain import Contact


def _is_empty(value: str | None) -> bool:
    return value is None or value == ""


def _as_aware(value: datetime | date) -> datetime:
    """Bring a date, naive datetime or aware datetime to one comparable form.
    Naive values are local time; a plain date means its local midnight."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return value if value.tzinfo is not None else value.astimezone()


def _is_future(value: datetime | date, now: datetime) -> bool:
    return _as_aware(value) > _as_aware(now)


def validate_name_search(first_name: str | None, last_name: str | None) -> None:
    """Both search parameters are required. first_name is checked before last_name."""
    if _is_empty(first_name):
        raise RequiredFieldError("firstName", "FirstName is a required field")
    if _is_empty(last_name):
        raise RequiredFieldError("lastName", "LastName is a required field")


def validate_contact(contact: Contact | None, now: datetime) -> None:
    """Raise RequiredFieldError or OutOfRangeError for the first rule the contact breaks.

    Order: contact, FirstName, LastName, EmailAddress, Birthday in the future,
    Anniversary in the future, Anniversary before Birthday.
    """
    if contact is None:
        raise RequiredFieldError("contact", "Contact is a required field")
    if _is_empty(contact.first_name):
        raise RequiredFieldError("FirstName", "FirstName is a required field")
    if _is_empty(contact.last_name):
        raise RequiredFieldError("LastName", "LastName is a required field")
    if _is_empty(contact.email_address):
        raise RequiredFieldError("EmailAddress", "EmailAddress is a required field")

    birthday = contact.birthday
    anniversary = contact.anniversary
    if birthday is not None and _is_future(birthday, now):
        raise OutOfRangeError(
            "Birthday", birthday, "The birthday can not be in the future"
        )
    if anniversary is not None:
        if _is_future(anniversary, now):
            raise OutOfRangeError(
                "Anniversary", anniversary, "The anniversary can not be in the future"
            )
        if birthday is not None and _as_aware(anniversary) < _as_aware(birthday):
            raise OutOfRangeError(
                "Anniversary",
                anniversary,
                "The anniversary can not be earlier than the birthday.",
            )


def validate_delete_contact(contact: Contact | None) -> bool:
    """Return True if the contact may be deleted. Only a missing contact is refused today."""
    return contact is not None
