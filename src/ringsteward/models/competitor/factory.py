"""Factory for creating Competitor objects with validation.

This module is the boundary between a roster import adapter and the core.
It validates incoming rows and normalizes the roster conventions the core
does not understand: the "18 and up" age marker and the "same as forms"
sparring division alias.
"""

import uuid
from typing import Any, Dict, List, Optional

from ringsteward.exceptions import InvalidCompetitorDataException
from ringsteward.models.competitor.competitor import Competitor, EventParticipation
from ringsteward.utils import setup_logger
from ringsteward.utils.validation import validate_age, validate_name

logger = setup_logger(__name__)

# Roster values meaning "not entered in this event"
NOT_COMPETING_VALUES = {"", "no", "n", "none", "not participating"}


def is_same_as_forms(value: Optional[str]) -> bool:
    """Whether a sparring division value is the legacy "same as forms" alias."""
    if not value:
        return False
    lowered = value.lower()
    return "same" in lowered and "form" in lowered


def resolve_division(value: Optional[str]) -> Optional[str]:
    """Turn a roster division value into a division name or None."""
    if value is None:
        return None
    value = str(value).strip()
    if value.lower() in NOT_COMPETING_VALUES:
        return None
    return value


class CompetitorFactory:
    """Factory for creating Competitor instances.

    Example:
        >>> factory = CompetitorFactory()
        >>> competitor = factory.create_competitor(
        ...     first_name="Ana", last_name="Lopez", age="18 and Up",
        ...     forms_division="Black Belt", sparring_division="Same as forms",
        ... )
        >>> competitor.age, competitor.sparring.division
        (18, 'Black Belt')
    """

    def __init__(self, validate: bool = True, strict: bool = False):
        """Initialize the CompetitorFactory.

        Args:
            validate: Whether to validate input data
            strict: Whether to raise exceptions on validation errors
        """
        self.validate = validate
        self.strict = strict

    def create_competitor(
        self,
        first_name: str,
        last_name: str,
        age: Any,
        gender: str = "",
        height_feet: int = 0,
        height_inches: int = 0,
        school: str = "",
        branch: Optional[str] = None,
        forms_division: Optional[str] = None,
        sparring_division: Optional[str] = None,
        competitor_id: Optional[str] = None,
    ) -> Competitor:
        """Create a Competitor from roster values.

        Args:
            first_name: First name
            last_name: Last name
            age: Age as int, or a roster string such as "18 and Up"
            gender: Gender as recorded on the roster
            height_feet: Height, feet part
            height_inches: Height, inches part
            school: School name
            branch: Optional school branch
            forms_division: Forms division, or a "not competing" value
            sparring_division: Sparring division, "same as forms", or a
                "not competing" value
            competitor_id: Identifier; generated when omitted

        Returns:
            Competitor instance

        Raises:
            InvalidCompetitorDataException: If validation fails and strict=True
        """
        age_result = validate_age(age)
        if self.validate:
            errors = self._validate_data(first_name, last_name, age_result)
            if errors and self.strict:
                error_msg = "; ".join(errors)
                raise InvalidCompetitorDataException(
                    f"Invalid competitor data: {error_msg}"
                )
            for error in errors:
                logger.warning(f"{first_name} {last_name}: {error}")

        forms = resolve_division(forms_division)
        if is_same_as_forms(sparring_division):
            sparring = forms
        else:
            sparring = resolve_division(sparring_division)

        return Competitor(
            id=competitor_id or str(uuid.uuid4()),
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            age=age_result.sanitized_value if age_result else 0,
            gender=(gender or "").strip(),
            height_feet=int(height_feet or 0),
            height_inches=int(height_inches or 0),
            school=(school or "").strip(),
            branch=branch.strip() if branch else None,
            forms=EventParticipation(division=forms, competing=forms is not None),
            sparring=EventParticipation(
                division=sparring, competing=sparring is not None
            ),
        )

    def create_from_dict(self, data: Dict[str, Any]) -> Competitor:
        """Create a competitor from a roster row dictionary.

        Raises:
            InvalidCompetitorDataException: If required fields are missing
        """
        if "first_name" not in data or "last_name" not in data:
            raise InvalidCompetitorDataException("Competitor name is required")
        if "age" not in data:
            raise InvalidCompetitorDataException("Competitor age is required")

        return self.create_competitor(
            first_name=data["first_name"],
            last_name=data["last_name"],
            age=data["age"],
            gender=data.get("gender", ""),
            height_feet=data.get("height_feet", 0),
            height_inches=data.get("height_inches", 0),
            school=data.get("school", ""),
            branch=data.get("branch"),
            forms_division=data.get("forms_division"),
            sparring_division=data.get("sparring_division"),
            competitor_id=data.get("id"),
        )

    def create_batch(self, rows: List[Dict[str, Any]]) -> List[Competitor]:
        """Create multiple competitors, skipping invalid rows unless strict."""
        competitors: List[Competitor] = []
        for data in rows:
            try:
                competitors.append(self.create_from_dict(data))
            except InvalidCompetitorDataException as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping invalid competitor data: {e}")
        return competitors

    def _validate_data(self, first_name, last_name, age_result) -> List[str]:
        """Validate competitor data and return list of errors."""
        errors = []

        for part in (first_name, last_name):
            name_result = validate_name(part, required=True)
            if not name_result:
                errors.append(name_result.error_message or "Invalid name")

        if not age_result:
            errors.append(age_result.error_message or "Invalid age")

        return errors


# Global factory instance for convenience
default_factory = CompetitorFactory(validate=True, strict=False)


def create_competitor(**kwargs) -> Competitor:
    """Convenience function to create a competitor using the default factory."""
    return default_factory.create_competitor(**kwargs)


def create_competitor_from_dict(data: Dict[str, Any]) -> Competitor:
    """Convenience function to create a competitor from dict using default factory."""
    return default_factory.create_from_dict(data)
