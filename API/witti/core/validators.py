"""Input validators for signup and account forms.

Each validator is a pure function returning a ``ValidationResult``; none of
them raise. They run before any hashing or database work.
"""
from __future__ import annotations

import re
from typing import NamedTuple

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[0-9-]+$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'
PASSWORD_MIN_CHARACTER_CLASSES = 2

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

PHONE_DIGIT_LENGTHS = (10, 11)


class ValidationResult(NamedTuple):
    valid: bool
    reason: str


def validate_email(email: str | None) -> ValidationResult:
    if not email or not EMAIL_PATTERN.fullmatch(email):
        return ValidationResult(False, "Please enter a valid email address.")
    return ValidationResult(True, "Email address is valid.")


def validate_password(password: str | None) -> ValidationResult:
    password = password or ""
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult(False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.")
    if len(password) > PASSWORD_MAX_LENGTH:
        return ValidationResult(False, f"Password must be at most {PASSWORD_MAX_LENGTH} characters long.")

    has_letter = re.search(r"[a-zA-Z]", password) is not None
    has_digit = re.search(r"[0-9]", password) is not None
    has_symbol = any(ch in PASSWORD_SYMBOLS for ch in password)
    if sum((has_letter, has_digit, has_symbol)) < PASSWORD_MIN_CHARACTER_CLASSES:
        return ValidationResult(
            False,
            "Password must contain at least two of: letters, digits, symbols.",
        )
    return ValidationResult(True, "Password is valid.")


def validate_name(name: str | None) -> ValidationResult:
    trimmed = (name or "").strip()
    if not trimmed:
        return ValidationResult(False, "Please enter your name.")
    if len(trimmed) < NAME_MIN_LENGTH:
        return ValidationResult(False, f"Name must be at least {NAME_MIN_LENGTH} characters long.")
    if len(trimmed) > NAME_MAX_LENGTH:
        return ValidationResult(False, f"Name must be at most {NAME_MAX_LENGTH} characters long.")
    return ValidationResult(True, "Name is valid.")


def validate_phone(phone: str | None) -> ValidationResult:
    """Phone is optional: missing or blank values pass."""
    if phone is None or not phone.strip():
        return ValidationResult(True, "Phone number is optional.")
    if not PHONE_PATTERN.fullmatch(phone):
        return ValidationResult(False, "Phone number may only contain digits and hyphens.")
    digits = phone.replace("-", "")
    if len(digits) not in PHONE_DIGIT_LENGTHS:
        return ValidationResult(False, "Phone number must have 10 or 11 digits (e.g. 010-1234-5678).")
    return ValidationResult(True, "Phone number is valid.")
