"""Input validators for user, profile and post payloads.

Every validator takes the raw request mapping, treats missing or ``None``
fields as empty strings, checks text fields after stripping them (the form
that gets stored) and returns a :class:`ValidationResult`. When a field
fails several checks the last one wins, so "required" replaces a length
message for an empty value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from email_validator import EmailNotValidError, validate_email
from pydantic import HttpUrl, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(HttpUrl)

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set)):
        return len(value) == 0
    return False


def _text(data: Mapping[str, Any], key: str) -> str:
    """The field as it will be stored: stripped, or "" when missing."""
    value = data.get(key)
    if is_empty(value):
        return ""
    return str(value).strip()


def _secret(data: Mapping[str, Any], key: str) -> str:
    # passwords are hashed exactly as typed
    value = data.get(key)
    return "" if value is None else str(value)


def parse_skills(value: Any) -> list[str]:
    """Split a comma separated skills string, keeping order and dropping blanks."""
    if is_empty(value):
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(s).strip() for s in items if s is not None and str(s).strip()]


def _length_between(value: str, lo: int, hi: int) -> bool:
    return lo <= len(value) <= hi


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_url(value: str) -> bool:
    """Accept absolute http(s) URLs and bare hosts such as ``example.com``."""
    candidate = value if "://" in value else f"http://{value}"
    try:
        url = _URL_ADAPTER.validate_python(candidate)
    except ValidationError:
        return False
    return bool(url.host) and "." in url.host


def is_iso_date(value: str) -> bool:
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_register(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    errors = result.errors
    name = _text(data, "name")
    email = _text(data, "email")
    password = _secret(data, "password")
    password2 = _secret(data, "password2")

    if not _length_between(name, 2, 30):
        errors["name"] = "Name must be between 2 and 30 characters"
    if not name:
        errors["name"] = "Name field is required"

    if not is_email(email):
        errors["email"] = "Email is invalid"
    if not email:
        errors["email"] = "Email field is required"

    if not _length_between(password, 6, 30):
        errors["password"] = "Password must be at least 6 characters"
    if not password:
        errors["password"] = "Password field is required"

    if password != password2:
        errors["password2"] = "Passwords must match"
    if not password2:
        errors["password2"] = "Confirm Password field is required"
    return result


def validate_login(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    email = _text(data, "email")
    password = _secret(data, "password")

    if not is_email(email):
        result.errors["email"] = "Email is invalid"
    if not email:
        result.errors["email"] = "Email field is required"
    if not password:
        result.errors["password"] = "Password field is required"
    return result


def validate_profile(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    errors = result.errors
    handle = _text(data, "handle")

    if not _length_between(handle, 2, 40):
        errors["handle"] = "Handle needs to be between 2 and 40 characters"
    if not handle:
        errors["handle"] = "Profile handle is required"
    if not _text(data, "status"):
        errors["status"] = "Status field is required"
    if not parse_skills(data.get("skills")):
        errors["skills"] = "Skills field is required"

    for key in ("website", *SOCIAL_FIELDS):
        value = _text(data, key)
        if value and not is_url(value):
            errors[key] = "Not a valid URL"
    return result


def _check_dates(data: Mapping[str, Any], errors: dict[str, str]) -> None:
    for key in ("from", "to"):
        value = _text(data, key)
        if value and not is_iso_date(value):
            errors[key] = "Not a valid date"


def validate_experience(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    errors = result.errors
    _check_dates(data, errors)
    if not _text(data, "title"):
        errors["title"] = "Job title field is required"
    if not _text(data, "company"):
        errors["company"] = "Company field is required"
    if not _text(data, "from"):
        errors["from"] = "From date field is required"
    return result


def validate_education(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    errors = result.errors
    _check_dates(data, errors)
    if not _text(data, "school"):
        errors["school"] = "School field is required"
    if not _text(data, "degree"):
        errors["degree"] = "Degree field is required"
    if not _text(data, "fieldofstudy"):
        errors["fieldofstudy"] = "Field of study field is required"
    if not _text(data, "from"):
        errors["from"] = "From date field is required"
    return result


def validate_post(data: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    text = _text(data, "text")
    if not _length_between(text, 8, 300):
        result.errors["text"] = "Length must be between 8 to 300 characters"
    if not text:
        result.errors["text"] = "Text field is required"
    return result
