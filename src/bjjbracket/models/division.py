"""Data model for a competition division."""

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

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bjjbracket.exceptions import (
    CompetitorNotFoundException,
    DivisionLockedException,
    DuplicateCompetitorException,
    InvalidDivisionException,
    MatchesAlreadyGeneratedException,
)
from bjjbracket.models.categories import (
    AgeCategory,
    BeltRank,
    BracketFormat,
    Gender,
    WeightClass,
)
from bjjbracket.models.competitor import Competitor
from bjjbracket.type_hints import CompetitorID
from bjjbracket.utils import generate_id


@dataclass(eq=False)
class Division:
    """A group of competitors sharing belt, age category, gender and weight.

    Attributes
    ----------
    belt_rank : BeltRank
        Belt every competitor must hold.
    age_category : AgeCategory
        Age range (and match duration) of the division.
    gender : Gender
        ``NOT_APPLICABLE`` is only allowed for mixed kids divisions.
    weight_class : WeightClass or None
        Optional weight ceiling; ``None`` means open weight.
    bracket_format : BracketFormat
        Structure used when matches are generated.
    competitors : list of Competitor
        Enrolled competitors, unique, in enrollment order.
    matches_generated : bool
        Set exactly once when matches are generated, never cleared. Once set
        the roster and the bracket format are frozen.
    completed : bool
        Set when the division's final (or last round-robin match) is decided.
    id : str
        Division identifier.
    """

    belt_rank: BeltRank
    age_category: AgeCategory
    gender: Gender
    weight_class: Optional[WeightClass] = None
    bracket_format: BracketFormat = BracketFormat.SINGLE_ELIMINATION
    competitors: List[Competitor] = field(default_factory=list)
    matches_generated: bool = False
    completed: bool = False
    id: str = field(default_factory=lambda: generate_id("Division"))
    _generation_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if (
            self.gender == Gender.NOT_APPLICABLE
            and self.age_category.requires_gender_separation
        ):
            raise InvalidDivisionException(
                f"Gender is required for the {self.age_category.display_name} "
                "age category"
            )
        if len({c.id for c in self.competitors}) != len(self.competitors):
            raise DuplicateCompetitorException("Division roster contains duplicates")

    @property
    def name(self) -> str:
        """Division name built from its criteria, e.g. "Adult Male Blue Light"."""
        parts = [self.age_category.display_name]
        if self.gender != Gender.NOT_APPLICABLE:
            parts.append(self.gender.display_name)
        parts.append(self.belt_rank.display_name)
        if self.weight_class is not None:
            parts.append(self.weight_class.display_name)
        return " ".join(parts)

    @property
    def match_duration_minutes(self) -> int:
        return self.age_category.match_duration_minutes

    def _ensure_unlocked(self, action: str) -> None:
        if self.matches_generated:
            raise DivisionLockedException(
                f"Cannot {action} after matches have been generated"
            )

    def has_competitor(self, competitor_id: CompetitorID) -> bool:
        return any(c.id == competitor_id for c in self.competitors)

    def get_competitor(self, competitor_id: CompetitorID) -> Competitor:
        for competitor in self.competitors:
            if competitor.id == competitor_id:
                return competitor
        raise CompetitorNotFoundException(
            f"Competitor {competitor_id} is not enrolled in {self.name}"
        )

    def add_competitor(self, competitor: Competitor) -> None:
        """Add a competitor to the roster (eligibility is checked by the caller)."""
        self._ensure_unlocked("enroll athletes")
        if self.has_competitor(competitor.id):
            raise DuplicateCompetitorException(
                f"{competitor.name} is already enrolled in {self.name}"
            )
        self.competitors.append(competitor)

    def remove_competitor(self, competitor_id: CompetitorID) -> Competitor:
        self._ensure_unlocked("remove athletes")
        competitor = self.get_competitor(competitor_id)
        self.competitors.remove(competitor)
        return competitor

    def set_bracket_format(self, bracket_format: BracketFormat) -> None:
        self._ensure_unlocked("change the bracket format")
        self.bracket_format = bracket_format

    def claim_generation(self) -> None:
        """Atomically flip ``matches_generated`` from False to True.

        Raises:
            MatchesAlreadyGeneratedException: If another generation got there first
        """
        with self._generation_lock:
            if self.matches_generated:
                raise MatchesAlreadyGeneratedException(
                    f"Matches have already been generated for {self.name}"
                )
            self.matches_generated = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the division snapshot to a dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "belt_rank": self.belt_rank.name,
            "age_category": self.age_category.name,
            "gender": self.gender.value,
            "weight_class": self.weight_class.name if self.weight_class else None,
            "bracket_format": self.bracket_format.value,
            "competitor_ids": [c.id for c in self.competitors],
            "matches_generated": self.matches_generated,
            "completed": self.completed,
        }
