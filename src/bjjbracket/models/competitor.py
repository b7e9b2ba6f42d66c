"""A competitor registered for a tournament division."""

# BJJ Bracket
# Copyright (C) 2025  BJJ Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from dateutil.relativedelta import relativedelta

from bjjbracket.constants import GENDER_SEPARATION_AGE, KIDS_MAX_AGE
from bjjbracket.exceptions import InvalidCompetitorDataException
from bjjbracket.models.categories import BeltRank, Gender
from bjjbracket.utils import generate_id, setup_logger
from bjjbracket.utils.validation import (
    validate_age,
    validate_email,
    validate_name,
    validate_phone,
    validate_weight_strict,
)

logger = setup_logger(__name__)


class Competitor:
    """Represents an athlete enrolled in a division.

    Age is never stored: it is derived from the date of birth each time it is
    read, so an athlete registered months before the event is judged on
    their age on the day.

    Attributes:
        id: Unique identifier for the competitor
        name: Full name
        date_of_birth: Date of birth
        gender: Gender, ``NOT_APPLICABLE`` only for kids under 10
        belt_rank: Current belt
        weight: Body weight in kilograms
        team: Team/academy affiliation
        coach_name: Coach responsible for the athlete's matches
        email: Contact email (validated)
        phone: Contact phone number (validated)
        experience_notes: Free text to help coaches create fair matches
    """

    def __init__(
        self,
        name: str,
        date_of_birth: date,
        belt_rank: BeltRank,
        weight: float,
        gender: Optional[Gender] = None,
        team: Optional[str] = None,
        coach_name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        experience_notes: Optional[str] = None,
        competitor_id: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> None:
        self.id: str = competitor_id or generate_id(self.__class__.__name__)

        name_result = validate_name(name)
        if not name_result:
            raise InvalidCompetitorDataException(name_result.error_message)
        self.name: str = name_result.sanitized_value

        if date_of_birth is None:
            raise InvalidCompetitorDataException("Date of birth is required")
        self.date_of_birth: date = date_of_birth

        age = self.age_on(on_date or date.today())
        age_result = validate_age(age)
        if not age_result:
            raise InvalidCompetitorDataException(age_result.error_message)

        self.gender: Gender = self._resolve_gender(gender, age)
        self.belt_rank: BeltRank = belt_rank
        self.weight: float = validate_weight_strict(weight)

        self.team: Optional[str] = team
        self.coach_name: Optional[str] = coach_name
        self.experience_notes: Optional[str] = experience_notes
        self.email: Optional[str] = self._validate_and_set_email(email)
        self.phone: Optional[str] = self._validate_and_set_phone(phone)

    def _resolve_gender(self, gender: Optional[Gender], age: int) -> Gender:
        if gender is None:
            if age < GENDER_SEPARATION_AGE:
                return Gender.NOT_APPLICABLE
            raise InvalidCompetitorDataException(
                f"Gender is required for athletes aged {GENDER_SEPARATION_AGE} or older"
            )
        if gender == Gender.NOT_APPLICABLE and age >= GENDER_SEPARATION_AGE:
            raise InvalidCompetitorDataException(
                f"Gender can only be not-applicable for athletes under "
                f"{GENDER_SEPARATION_AGE} (age {age})"
            )
        return gender

    def _validate_and_set_email(self, email: Optional[str]) -> Optional[str]:
        result = validate_email(email)
        if result.is_valid:
            return result.sanitized_value
        logger.warning(
            f"Invalid email for {self.name}: {email} - {result.error_message}"
        )
        return None

    def _validate_and_set_phone(self, phone: Optional[str]) -> Optional[str]:
        result = validate_phone(phone)
        if result.is_valid:
            return result.sanitized_value
        logger.warning(
            f"Invalid phone number for {self.name}: {phone} - {result.error_message}"
        )
        return None

    def age_on(self, on_date: date) -> int:
        """Age in whole years on a given date."""
        return relativedelta(on_date, self.date_of_birth).years

    @property
    def age(self) -> int:
        """Current age, recomputed from the date of birth on every read."""
        return self.age_on(date.today())

    def requires_gender_separation(self, on_date: Optional[date] = None) -> bool:
        """Athletes aged 10 and over compete in gender-separated divisions."""
        age = self.age_on(on_date) if on_date else self.age
        return age >= GENDER_SEPARATION_AGE

    @property
    def is_kids(self) -> bool:
        return self.age <= KIDS_MAX_AGE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the competitor to a dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "date_of_birth": self.date_of_birth.isoformat(),
            "gender": self.gender.value,
            "belt_rank": self.belt_rank.name,
            "weight": self.weight,
            "team": self.team,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Competitor):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"Competitor({self.name!r}, {self.belt_rank.display_name}, "
            f"{self.weight}kg, team={self.team!r})"
        )
