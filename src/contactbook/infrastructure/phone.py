"""Phone number normalization to E.164 before storage."""

from dataclasses import replace

import phonenumbers

from contactbook.domain import Phone


def to_e164(raw: str | None, default_region: str | None = None) -> str | None:
    """Parse and return the E.164 form of the number, or None if it is not a valid number.

    default_region applies when the input has no leading + ("202 555 1234" with "US").
    """
    if not raw or not str(raw).strip():
        return None
    try:
        parsed = phonenumbers.parse(str(raw).strip(), default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def normalize_phone(phone: Phone, default_region: str | None = None) -> Phone:
    """Return phone with its number in E.164 when it parses; otherwise unchanged."""
    e164 = to_e164(phone.phone_number, default_region)
    if e164 is None or e164 == phone.phone_number:
        return phone
    return replace(phone, phone_number=e164)
