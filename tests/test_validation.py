"""Tests for the pure validation rules. No store involved."""

from datetime import date, datetime, timedelta, timezone

import pytest

from contactbook.application import (
    OutOfRangeError,
    RequiredFieldError,
    validate_contact,
    validate_delete_contact,
    validate_name_search,
)
from contactbook.domain import Contact

NOW = datetime(2024, 6, 15, 12, 0, 0)


def _contact(**overrides) -> Contact:
    fields = dict(first_name="Joseph", last_name="Guadagno", email_address="j@x.com")
    fields.update(overrides)
    return Contact(**fields)


def test_valid_contact_passes():
    validate_contact(
        _contact(birthday=NOW - timedelta(days=10), anniversary=NOW - timedelta(days=1)),
        NOW,
    )


def test_none_contact_is_required():
    with pytest.raises(RequiredFieldError) as exc_info:
        validate_contact(None, NOW)
    assert exc_info.value.param_name == "contact"
    assert str(exc_info.value) == "Contact is a required field"


@pytest.mark.parametrize(
    "overrides, field, message",
    [
        ({"first_name": ""}, "FirstName", "FirstName is a required field"),
        ({"first_name": None}, "FirstName", "FirstName is a required field"),
        ({"last_name": ""}, "LastName", "LastName is a required field"),
        ({"email_address": None}, "EmailAddress", "EmailAddress is a required field"),
        # First offending field wins.
        ({"first_name": "", "last_name": "", "email_address": ""}, "FirstName", "FirstName is a required field"),
        ({"last_name": None, "email_address": None}, "LastName", "LastName is a required field"),
    ],
)
def test_required_fields_in_order(overrides, field, message):
    with pytest.raises(RequiredFieldError) as exc_info:
        validate_contact(_contact(**overrides), NOW)
    assert exc_info.value.param_name == field
    assert exc_info.value.message == message


def test_whitespace_name_is_not_empty():
    validate_contact(_contact(first_name=" "), NOW)


def test_required_field_checked_before_dates():
    with pytest.raises(RequiredFieldError):
        validate_contact(_contact(email_address="", birthday=datetime(2030, 12, 31)), NOW)


def test_birthday_in_future():
    future = datetime(2030, 12, 31, 23, 59, 59)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(_contact(birthday=future), NOW)
    assert exc_info.value.param_name == "Birthday"
    assert exc_info.value.actual_value == future
    assert str(exc_info.value).startswith("The birthday can not be in the future")


def test_birthday_equal_to_now_is_allowed():
    validate_contact(_contact(birthday=NOW, anniversary=NOW), NOW)


def test_anniversary_in_future():
    future = NOW + timedelta(seconds=1)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(_contact(anniversary=future), NOW)
    assert exc_info.value.param_name == "Anniversary"
    assert exc_info.value.actual_value == future
    assert str(exc_info.value).startswith("The anniversary can not be in the future")


def test_anniversary_before_birthday():
    anniversary = NOW - timedelta(days=1)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(_contact(birthday=NOW, anniversary=anniversary), NOW)
    assert exc_info.value.param_name == "Anniversary"
    assert exc_info.value.actual_value == anniversary
    assert str(exc_info.value).startswith(
        "The anniversary can not be earlier than the birthday."
    )


def test_future_birthday_reported_before_anniversary_order():
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(
            _contact(birthday=NOW + timedelta(days=5), anniversary=NOW - timedelta(days=5)),
            NOW,
        )
    assert exc_info.value.param_name == "Birthday"


def test_future_anniversary_with_past_birthday():
    anniversary = NOW + timedelta(days=5)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(
            _contact(birthday=NOW - timedelta(days=30), anniversary=anniversary), NOW
        )
    assert exc_info.value.param_name == "Anniversary"
    assert str(exc_info.value).startswith("The anniversary can not be in the future")


def test_anniversary_without_birthday_only_checks_future():
    validate_contact(_contact(anniversary=datetime(1990, 1, 1)), NOW)


def test_timezone_aware_dates_compare_in_their_own_zone():
    aware_now = NOW.replace(tzinfo=timezone.utc)
    plus_two = timezone(timedelta(hours=2))
    # 13:00 at +02:00 is 11:00 UTC: an hour in the past.
    validate_contact(_contact(birthday=datetime(2024, 6, 15, 13, 0, tzinfo=plus_two)), aware_now)
    with pytest.raises(OutOfRangeError):
        validate_contact(
            _contact(birthday=datetime(2024, 6, 15, 15, 0, tzinfo=plus_two)), aware_now
        )


def test_plain_dates_compare_against_today():
    validate_contact(_contact(birthday=date(2024, 6, 15)), NOW)
    with pytest.raises(OutOfRangeError):
        validate_contact(_contact(birthday=date(2024, 6, 16)), NOW)


def test_name_search_first_name_checked_first():
    with pytest.raises(RequiredFieldError) as exc_info:
        validate_name_search("", "")
    assert exc_info.value.param_name == "firstName"
    assert str(exc_info.value) == "FirstName is a required field"

    with pytest.raises(RequiredFieldError) as exc_info:
        validate_name_search(None, "Guadagno")
    assert exc_info.value.param_name == "firstName"


def test_name_search_last_name_required():
    with pytest.raises(RequiredFieldError) as exc_info:
        validate_name_search("Joseph", None)
    assert exc_info.value.param_name == "lastName"
    assert str(exc_info.value) == "LastName is a required field"


def test_name_search_valid():
    validate_name_search("Joseph", "Guadagno")


def test_validate_delete_contact():
    assert validate_delete_contact(None) is False
    assert validate_delete_contact(_contact()) is True


def test_anniversary_order_with_aware_birthday_and_naive_anniversary():
    birthday = datetime(2020, 1, 1, tzinfo=timezone.utc)
    validate_contact(_contact(birthday=birthday, anniversary=datetime(2021, 1, 1)), NOW)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(_contact(birthday=birthday, anniversary=datetime(2019, 1, 1)), NOW)
    assert exc_info.value.param_name == "Anniversary"
    assert exc_info.value.actual_value == datetime(2019, 1, 1)


def test_anniversary_order_with_date_birthday_and_datetime_anniversary():
    validate_contact(_contact(birthday=date(2020, 1, 1), anniversary=datetime(2021, 1, 1)), NOW)
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_contact(
            _contact(birthday=date(2020, 1, 1), anniversary=datetime(2019, 12, 31, 23, 0)),
            NOW,
        )
    assert str(exc_info.value).startswith(
        "The anniversary can not be earlier than the birthday."
    )
