"""Validation utilities for BJJ Bracket.

Field validators for competitor registration data and match counters.
Each validator returns a :class:`ValidationResult`; the ``*_strict``
variants raise instead.
"""

import re
from typing import Any, Optional

from bjjbracket.constants import (
    MAX_COMPETITOR_AGE,
    MAX_WEIGHT_KG,
    MIN_COMPETITOR_AGE,
    MIN_WEIGHT_KG,
)
from bjjbracket.exceptions import InvalidCompetitorDataException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Contact Validation ==========


def validate_email(email: Optional[str], required: bool = False) -> ValidationResult:
    """Validate an email address.

    Args:
        email: Email address to validate
        required: Whether email is required (empty = invalid)

    Returns:
        ValidationResult with validation status
    """
    if not email or not email.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Email address is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    email = email.strip()
    if re.match(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$", email):
        return ValidationResult(is_valid=True, sanitized_value=email)

    return ValidationResult(
        is_valid=False,
        error_message=f"Invalid email format: {email}",
    )


def validate_phone(phone: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a phone number.

    Formatting characters (spaces, dashes, dots, parentheses) are removed.
    What remains must be 10-15 digits with an optional leading ``+``.

    Args:
        phone: Phone number to validate
        required: Whether phone is required

    Returns:
        ValidationResult with the sanitized number
    """
    if not phone or not phone.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Phone number is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    phone = phone.strip()
    compact = re.sub(r"[\s\-\.\(\)]", "", phone)

    if not re.match(r"^\+?[0-9]{10,15}$", compact):
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid phone number format: {phone}",
        )

    return ValidationResult(is_valid=True, sanitized_value=compact)


# ========== Registration Validation ==========


def validate_name(name: Optional[str]) -> ValidationResult:
    """Validate a competitor's name (2-100 characters)."""
    if not name or not name.strip():
        return ValidationResult(is_valid=False, error_message="Name is required")

    name = name.strip()
    if not 2 <= len(name) <= 100:
        return ValidationResult(
            is_valid=False,
            error_message="Name must be between 2 and 100 characters",
        )
    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_age(age: Optional[int]) -> ValidationResult:
    """Validate a competitor's age in years."""
    if age is None:
        return ValidationResult(is_valid=False, error_message="Age is required")

    if age < MIN_COMPETITOR_AGE:
        return ValidationResult(
            is_valid=False,
            error_message=f"Athlete must be at least {MIN_COMPETITOR_AGE} years old",
        )
    if age > MAX_COMPETITOR_AGE:
        return ValidationResult(is_valid=False, error_message=f"Invalid age: {age}")

    return ValidationResult(is_valid=True, sanitized_value=age)


def validate_weight(weight: Optional[float]) -> ValidationResult:
    """Validate a body weight in kilograms.

    Args:
        weight: Weight to validate

    Returns:
        ValidationResult with the weight as a float
    """
    if weight is None:
        return ValidationResult(is_valid=False, error_message="Weight is required")

    try:
        weight_kg = float(weight)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Weight must be a number: {weight}",
        )

    if weight_kg < MIN_WEIGHT_KG:
        return ValidationResult(
            is_valid=False,
            error_message=f"Weight must be at least {MIN_WEIGHT_KG} kg",
        )
    if weight_kg > MAX_WEIGHT_KG:
        return ValidationResult(
            is_valid=False,
            error_message=f"Weight must be at most {MAX_WEIGHT_KG} kg",
        )

    return ValidationResult(is_valid=True, sanitized_value=weight_kg)


def validate_weight_strict(weight: float) -> float:
    """Validate weight and return it as a float or raise exception.

    Raises:
        InvalidCompetitorDataException: If weight is invalid
    """
    result = validate_weight(weight)
    if not result.is_valid:
        raise InvalidCompetitorDataException(result.error_message)
    return result.sanitized_value


# ========== Match Counter Validation ==========


def validate_counter(value: Any, field_name: str = "Counter") -> ValidationResult:
    """Validate a points/advantages/penalties counter (integer >= 0).

    Args:
        value: Counter value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with the counter as an int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be an integer: {value!r}",
        )
    if value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be negative: {value}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)

