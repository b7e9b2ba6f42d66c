"""Result reports, match outcomes and advancement results."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from bjjbracket.exceptions import InvalidResultException
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.match import Match
from bjjbracket.type_hints import Slot


@dataclass
class MatchResultReport:
    """A completed match's result, as reported by the mat table.

    Attributes:
        match_id: Match being reported
        competitor1_points, competitor2_points: Points per side
        competitor1_advantages, competitor2_advantages: Advantages per side
        competitor1_penalties, competitor2_penalties: Penalties per side
        finished_by_submission: Whether the match ended by submission
        submission_technique: e.g. "Armbar", "Triangle"
        winner_id: Explicit winner; overrides automatic resolution
        walkover: Opponent did not show up (requires ``winner_id``)
        notes: Free text (injuries, referee decisions, ...)
        duration_seconds: Fight time
    """

    match_id: str
    competitor1_points: int = 0
    competitor2_points: int = 0
    competitor1_advantages: int = 0
    competitor2_advantages: int = 0
    competitor1_penalties: int = 0
    competitor2_penalties: int = 0
    finished_by_submission: bool = False
    submission_technique: Optional[str] = None
    winner_id: Optional[str] = None
    walkover: bool = False
    notes: Optional[str] = None
    duration_seconds: Optional[int] = None

    COUNTER_FIELDS = (
        "competitor1_points",
        "competitor2_points",
        "competitor1_advantages",
        "competitor2_advantages",
        "competitor1_penalties",
        "competitor2_penalties",
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResultReport":
        """Deserialize a result report from a dictionary.

        Raises:
            InvalidResultException: If ``match_id`` is missing
        """
        if "match_id" not in data:
            raise InvalidResultException("A result report must name its match_id")
        counters = {name: data.get(name, 0) for name in cls.COUNTER_FIELDS}
        return cls(
            match_id=data["match_id"],
            finished_by_submission=data.get("finished_by_submission", False),
            submission_technique=data.get("submission_technique"),
            winner_id=data.get("winner_id"),
            walkover=data.get("walkover", False),
            notes=data.get("notes"),
            duration_seconds=data.get("duration_seconds"),
            **counters,
        )


class DecisionMethod(str, Enum):
    DISQUALIFICATION = "disqualification"
    SUBMISSION = "submission"
    POINTS = "points"
    ADVANTAGES = "advantages"
    REFEREE_DECISION = "referee_decision"
    WALKOVER = "walkover"
    MANUAL = "manual"


@dataclass(frozen=True)
class Outcome:
    """Result of resolving a match: a winner, or a pending referee decision."""

    winner: Optional[Competitor] = None
    method: Optional[DecisionMethod] = None

    @classmethod
    def resolved(cls, winner: Competitor, method: DecisionMethod) -> "Outcome":
        return cls(winner=winner, method=method)

    @classmethod
    def unresolved(cls) -> "Outcome":
        return cls()

    @property
    def is_resolved(self) -> bool:
        return self.winner is not None

    @property
    def awaiting_decision(self) -> bool:
        return self.winner is None


class AdvancementKind(str, Enum):
    NEXT_MATCH_UPDATED = "next_match_updated"
    DIVISION_COMPLETED = "division_completed"
    NO_ADVANCEMENT = "no_advancement"


@dataclass(frozen=True)
class AdvancementResult:
    """Where a winner went after a match was decided."""

    kind: AdvancementKind
    source_match: Match
    next_match: Optional[Match] = None
    slot: Optional[Slot] = None

    @property
    def division_completed(self) -> bool:
        return self.kind == AdvancementKind.DIVISION_COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "source_match_id": self.source_match.id,
            "next_match_id": self.next_match.id if self.next_match else None,
            "slot": self.slot,
        }


@dataclass
class ResultReport:
    """Everything that happened when a result was reported."""

    match: Match
    outcome: Outcome
    advancements: List[AdvancementResult] = field(default_factory=list)

    @property
    def division_completed(self) -> bool:
        return any(a.division_completed for a in self.advancements)
