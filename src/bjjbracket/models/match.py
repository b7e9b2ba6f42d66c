"""Match data class."""

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
from typing import Any, Dict, FrozenSet, Mapping, Optional

from bjjbracket.constants import FIRST_SLOT, PENALTY_POINTS, SECOND_SLOT
from bjjbracket.exceptions import InvalidWinnerException, MatchStateException
from bjjbracket.models.categories import MatchStatus
from bjjbracket.models.competitor import Competitor
from bjjbracket.type_hints import Slot
from bjjbracket.utils import generate_id

ALLOWED_TRANSITIONS: Mapping[MatchStatus, FrozenSet[MatchStatus]] = {
    MatchStatus.PENDING: frozenset(
        {
            MatchStatus.IN_PROGRESS,
            MatchStatus.COMPLETED,
            MatchStatus.WALKOVER,
            MatchStatus.CANCELLED,
        }
    ),
    MatchStatus.IN_PROGRESS: frozenset(
        {MatchStatus.COMPLETED, MatchStatus.WALKOVER, MatchStatus.CANCELLED}
    ),
    MatchStatus.COMPLETED: frozenset(),
    MatchStatus.WALKOVER: frozenset(),
    MatchStatus.CANCELLED: frozenset(),
}


@dataclass(eq=False)
class Match:
    """A head-to-head match inside a division's bracket.

    Either competitor slot may be empty until an earlier round resolves into
    it. Counters follow the IBJJF scoring system: each penalty gives the
    opponent two points, four penalties are a disqualification.

    Attributes
    ----------
    division_id : str
        Division the match belongs to.
    round_number : int
        Bracket round (1 is the entry round; round robin uses 1 throughout).
    position : int
        1-based position within the round, used for advancement.
    competitor1, competitor2 : Competitor or None
        The two slots.
    status : MatchStatus
        pending -> in progress -> completed | walkover | cancelled.
    winner : Competitor or None
        Set only once the match reaches a terminal state.
    """

    division_id: str
    round_number: int
    position: int
    competitor1: Optional[Competitor] = None
    competitor2: Optional[Competitor] = None
    status: MatchStatus = MatchStatus.PENDING

    competitor1_points: int = 0
    competitor2_points: int = 0
    competitor1_advantages: int = 0
    competitor2_advantages: int = 0
    competitor1_penalties: int = 0
    competitor2_penalties: int = 0

    finished_by_submission: bool = False
    submission_technique: Optional[str] = None
    winner: Optional[Competitor] = None
    notes: Optional[str] = None
    mat_number: Optional[int] = None
    duration_seconds: Optional[int] = None
    id: str = field(default_factory=lambda: generate_id("Match"))

    def __post_init__(self) -> None:
        if self.round_number < 1:
            raise ValueError(f"Round number must be at least 1: {self.round_number}")
        if self.position < 1:
            raise ValueError(f"Match position must be at least 1: {self.position}")

    # ========== Slots ==========

    def competitor_in(self, slot: Slot) -> Optional[Competitor]:
        return self.competitor1 if slot == FIRST_SLOT else self.competitor2

    def fill_slot(self, slot: Slot, competitor: Competitor) -> None:
        if slot == FIRST_SLOT:
            self.competitor1 = competitor
        elif slot == SECOND_SLOT:
            self.competitor2 = competitor
        else:
            raise ValueError(f"Invalid slot: {slot}")

    @property
    def is_placeholder(self) -> bool:
        return self.competitor1 is None and self.competitor2 is None

    @property
    def has_both_competitors(self) -> bool:
        return self.competitor1 is not None and self.competitor2 is not None

    def has_competitor(self, competitor: Optional[Competitor]) -> bool:
        return competitor is not None and competitor in (
            self.competitor1,
            self.competitor2,
        )

    def slot_of(self, competitor: Competitor) -> Slot:
        if self.competitor1 is not None and self.competitor1 == competitor:
            return FIRST_SLOT
        if self.competitor2 is not None and self.competitor2 == competitor:
            return SECOND_SLOT
        raise InvalidWinnerException(
            f"{competitor.name} is not a participant of match {self.id}"
        )

    def opponent_of(self, competitor: Competitor) -> Optional[Competitor]:
        """The other slot's occupant (None while it is still empty)."""
        if self.slot_of(competitor) == FIRST_SLOT:
            return self.competitor2
        return self.competitor1

    def find_competitor(self, competitor_id: str) -> Optional[Competitor]:
        for competitor in (self.competitor1, self.competitor2):
            if competitor is not None and competitor.id == competitor_id:
                return competitor
        return None

    # ========== Scoring ==========

    @property
    def competitor1_total_score(self) -> int:
        """Points plus two for each penalty given to the opponent."""
        return self.competitor1_points + self.competitor2_penalties * PENALTY_POINTS

    @property
    def competitor2_total_score(self) -> int:
        return self.competitor2_points + self.competitor1_penalties * PENALTY_POINTS

    def effective_score(self, slot: Slot) -> int:
        if slot == FIRST_SLOT:
            return self.competitor1_total_score
        return self.competitor2_total_score

    # ========== Status ==========

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def is_decided(self) -> bool:
        """Completed or walkover with a winner, i.e. ready to advance."""
        return (
            self.status in (MatchStatus.COMPLETED, MatchStatus.WALKOVER)
            and self.winner is not None
        )

    def transition(self, status: MatchStatus) -> None:
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise MatchStateException(
                f"Match {self.id} cannot move from {self.status.value} to {status.value}"
            )
        self.status = status

    def start(self) -> None:
        """Move a pending match to in progress."""
        if self.status != MatchStatus.PENDING:
            raise MatchStateException("Only pending matches can be started")
        if not self.has_both_competitors:
            raise MatchStateException(
                "Both athletes must be assigned before match can start"
            )
        self.transition(MatchStatus.IN_PROGRESS)

    def set_winner(self, competitor: Competitor) -> None:
        """Assign the winner, which must occupy one of the two slots."""
        if not self.has_competitor(competitor):
            raise InvalidWinnerException(
                f"Winner must be one of the match participants (match {self.id})"
            )
        if self.winner is not None and self.winner != competitor:
            raise InvalidWinnerException(
                f"Match {self.id} already has a different winner: {self.winner.name}"
            )
        self.winner = competitor

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the match to a dictionary of ids and counters."""

        def _id(competitor: Optional[Competitor]) -> Optional[str]:
            return competitor.id if competitor is not None else None

        return {
            "id": self.id,
            "division_id": self.division_id,
            "round_number": self.round_number,
            "position": self.position,
            "competitor1_id": _id(self.competitor1),
            "competitor2_id": _id(self.competitor2),
            "status": self.status.value,
            "competitor1_points": self.competitor1_points,
            "competitor2_points": self.competitor2_points,
            "competitor1_advantages": self.competitor1_advantages,
            "competitor2_advantages": self.competitor2_advantages,
            "competitor1_penalties": self.competitor1_penalties,
            "competitor2_penalties": self.competitor2_penalties,
            "competitor1_total_score": self.competitor1_total_score,
            "competitor2_total_score": self.competitor2_total_score,
            "finished_by_submission": self.finished_by_submission,
            "submission_technique": self.submission_technique,
            "winner_id": _id(self.winner),
            "notes": self.notes,
            "mat_number": self.mat_number,
            "duration_seconds": self.duration_seconds,
        }
