"""Validation utilities for Ring Steward.

This module provides reusable validation functions with consistent error handling.
"""

import re
from typing import Any, Optional

from ringsteward.constants import (
    ADULT_AGE,
    ALT_RING_VALUES,
    MAX_POOLS,
    MIN_POOLS,
    POOL_PREFIX,
)
from ringsteward.exceptions import (
    AgeValidationException,
    AltRingValidationException,
    InvalidPoolException,
)

POOL_PATTERN = re.compile(rf"^{POOL_PREFIX}(\d+)$")


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


# ========== Age Validation ==========


def validate_age(age: Any, max_age: int = 120) -> ValidationResult:
    """Validate and normalize a competitor age.

    Roster exports mark adults with strings such as ``"18 and Up"`` or
    ``"Adult"``; those normalize to 18.

    Args:
        age: Age as an int or a roster string
        max_age: Largest plausible age

    Returns:
        ValidationResult whose sanitized_value is the age as int

    Example:
        >>> validate_age("18 and Up").sanitized_value
        18
    """
    if age is None or (isinstance(age, str) and not age.strip()):
        return ValidationResult(is_valid=False, error_message="Age is required")

    if isinstance(age, str):
        lowered = age.strip().lower()
        if "18" in lowered and not lowered.isdigit():
            return ValidationResult(is_valid=True, sanitized_value=ADULT_AGE)
        if "adult" in lowered or "up" in lowered:
            return ValidationResult(is_valid=True, sanitized_value=ADULT_AGE)

    try:
        age_int = int(age)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Age must be a number: {age}",
        )

    if age_int < 0 or age_int > max_age:
        return ValidationResult(
            is_valid=False,
            error_message=f"Age must be between 0 and {max_age}: {age_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=age_int)


def validate_age_strict(age: Any) -> int:
    """Validate age and return it as int or raise exception.

    Raises:
        AgeValidationException: If age is invalid
    """
    result = validate_age(age)
    if not result.is_valid:
        raise AgeValidationException(result.error_message)
    return result.sanitized_value


# ========== Name Validation ==========


def validate_name(name: Optional[str], required: bool = True) -> ValidationResult:
    """Validate one part of a person's name.

    Args:
        name: Name to validate
        required: Whether name is required

    Returns:
        ValidationResult with validation status
    """
    if not name or not name.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Name is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    name = " ".join(name.split())

    # Letters from any script, spaces, hyphens, apostrophes, periods
    if not re.match(r"^[^\W\d_]+([\s\-'\.][^\W\d_]*)*\.?$", name):
        return ValidationResult(
            is_valid=False,
            error_message=f"Name contains invalid characters: {name}",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


# ========== Pool Validation ==========


def parse_pool_number(pool: Optional[str]) -> Optional[int]:
    """Return the number in a pool label ("P3" -> 3), or None if malformed."""
    if not pool:
        return None
    match = POOL_PATTERN.match(pool)
    if not match:
        return None
    return int(match.group(1))


def pool_label(number: int) -> str:
    """Build the pool label for a 1-indexed pool number."""
    return f"{POOL_PREFIX}{number}"


def validate_pool(pool: Optional[str], num_pools: int) -> ValidationResult:
    """Validate that a pool label lies within ``1..num_pools``.

    Args:
        pool: Pool label such as "P2"
        num_pools: Pool capacity of the owning category

    Returns:
        ValidationResult with validation status
    """
    number = parse_pool_number(pool)
    if number is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid pool label: {pool!r}",
        )
    if number < 1 or number > num_pools:
        return ValidationResult(
            is_valid=False,
            error_message=f"Pool {pool} is outside 1..{num_pools}",
        )
    return ValidationResult(is_valid=True, sanitized_value=pool)


def validate_pool_strict(pool: Optional[str], num_pools: int) -> str:
    """Validate a pool label or raise exception.

    Raises:
        InvalidPoolException: If the pool is invalid
    """
    result = validate_pool(pool, num_pools)
    if not result.is_valid:
        raise InvalidPoolException(result.error_message)
    return result.sanitized_value


def validate_num_pools(num_pools: Any) -> ValidationResult:
    """Validate a category's pool count."""
    try:
        value = int(num_pools)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of pools must be a number: {num_pools}",
        )
    if value < MIN_POOLS or value > MAX_POOLS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of pools must be between {MIN_POOLS} and {MAX_POOLS}: {value}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


# ========== Alternate Ring Validation ==========


def validate_alt_ring(alt_ring: Optional[str]) -> ValidationResult:
    """Validate a sparring alternate ring tag ('', 'a' or 'b')."""
    value = (alt_ring or "").strip().lower()
    if value not in ALT_RING_VALUES:
        return ValidationResult(
            is_valid=False,
            error_message=f"Alternate ring must be one of {ALT_RING_VALUES}: {alt_ring!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_alt_ring_strict(alt_ring: Optional[str]) -> str:
    """Validate an alternate ring tag or raise exception.

    Raises:
        AltRingValidationException: If the tag is invalid
    """
    result = validate_alt_ring(alt_ring)
    if not result.is_valid:
        raise AltRingValidationException(result.error_message)
    return result.sanitized_value


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not value or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())
