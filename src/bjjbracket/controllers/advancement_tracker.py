"""Winner advancement between bracket rounds.

This module moves the winner of a decided match into its next-round match,
or marks the division completed when the final has been decided.
"""

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

import math
from typing import Iterable, List, Optional, Tuple

from bjjbracket.constants import FIRST_SLOT, NOTE_SINGLE_FEEDER_WALKOVER, SECOND_SLOT
from bjjbracket.exceptions import (
    AdvancementConflictException,
    InvalidWinnerException,
    MatchNotFoundException,
    MatchStateException,
)
from bjjbracket.models.categories import BracketFormat, MatchStatus
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.division import Division
from bjjbracket.models.match import ALLOWED_TRANSITIONS, Match
from bjjbracket.models.results import AdvancementKind, AdvancementResult
from bjjbracket.type_hints import BracketIndex, Slot
from bjjbracket.utils import setup_logger

logger = setup_logger(__name__)


def index_matches(matches: Iterable[Match]) -> BracketIndex:
    """Map (round number, position) to match."""
    return {(m.round_number, m.position): m for m in matches}


def next_position(match: Match) -> Tuple[int, int, Slot]:
    """Round, position and slot a match's winner moves to.

    Positions 2k-1 and 2k feed position k of the next round; the odd
    position fills the first slot and the even position the second.
    """
    slot = FIRST_SLOT if match.position % 2 == 1 else SECOND_SLOT
    return match.round_number + 1, math.ceil(match.position / 2), slot


class AdvancementTracker:
    """Moves winners through single-elimination rounds.

    This class is responsible for:
    - Locating the next-round match and slot for a decided match
    - Rejecting invalid winners and double fills
    - Marking the division completed after the final
    - Closing placeholders that only one earlier match can feed
    """

    def advance(
        self, completed_match: Match, division: Division, matches: List[Match]
    ) -> AdvancementResult:
        """Advance the winner of a decided match by one round.

        Args:
            completed_match: A completed (or walkover) match with a winner
            division: The match's division
            matches: All matches of the division

        Returns:
            AdvancementResult describing the filled slot, or that the division
            completed, or that nothing advances (round robin)

        Raises:
            MatchStateException: The match is not decided yet
            InvalidWinnerException: The winner is not one of the match's competitors
            AdvancementConflictException: The target slot is already filled
        """
        index = index_matches(matches)
        winner = self._ensure_decided(completed_match)
        step = self._locate_target(completed_match, division, index)
        if step is None:
            return self._finish(completed_match, division, index)
        target, slot = step
        return self._fill(completed_match, target, slot, winner)

    def _ensure_decided(self, match: Match) -> Competitor:
        if match.status not in (MatchStatus.COMPLETED, MatchStatus.WALKOVER):
            raise MatchStateException(
                "Match must be completed before advancing winner "
                f"(match {match.id} is {match.status.value})"
            )
        winner = match.winner
        if winner is None:
            raise MatchStateException(
                f"Match {match.id} has no winner yet; "
                "a referee decision is required before advancing"
            )
        if not match.has_competitor(winner):
            raise InvalidWinnerException(
                f"Invalid winner {winner.name}: not a participant of match {match.id}"
            )
        return winner

    def _locate_target(
        self, match: Match, division: Division, index: BracketIndex
    ) -> Optional[Tuple[Match, Slot]]:
        """Next-round match and free slot, or None when there is no next round.

        Only reads the bracket.

        Raises:
            MatchNotFoundException: The next round exists but lacks the match
            AdvancementConflictException: The target slot is already filled
        """
        if division.bracket_format == BracketFormat.ROUND_ROBIN:
            return None

        target_round, target_position, slot = next_position(match)
        target = index.get((target_round, target_position))
        if target is None:
            if any(r == target_round for r, _ in index):
                raise MatchNotFoundException(
                    f"No round {target_round} match for the winner of match {match.id}"
                )
            return None

        occupant = target.competitor_in(slot)
        if occupant is not None:
            raise AdvancementConflictException(
                f"Slot {slot} of round {target_round} match {target_position} is "
                f"already filled by {occupant.name}"
            )
        return target, slot

    def _fill(
        self, source: Match, target: Match, slot: Slot, winner: Competitor
    ) -> AdvancementResult:
        target.fill_slot(slot, winner)
        logger.info(
            f"{winner.name} advanced to round {target.round_number} match "
            f"{target.position} (slot {slot})"
        )
        return AdvancementResult(AdvancementKind.NEXT_MATCH_UPDATED, source, target, slot)

    def _finish(
        self, match: Match, division: Division, index: BracketIndex
    ) -> AdvancementResult:
        if division.bracket_format == BracketFormat.ROUND_ROBIN:
            return AdvancementResult(AdvancementKind.NO_ADVANCEMENT, match)

        round_size = sum(1 for r, _ in index if r == match.round_number)
        if round_size > 1:
            # Flat brackets (manual pairings) have no later rounds to fill
            return AdvancementResult(AdvancementKind.NO_ADVANCEMENT, match)

        logger.info(
            f"No next round - match {match.id} was the final of {division.name}"
        )
        division.completed = True
        return AdvancementResult(AdvancementKind.DIVISION_COMPLETED, match)

    def advance_all(
        self, completed_match: Match, division: Division, matches: List[Match]
    ) -> List[AdvancementResult]:
        """Advance a winner and follow any single-feeder placeholders.

        When a round has an odd number of entrants, its last match is fed by a
        single earlier match. Once that feeder fills it there is no opponent
        to wait for, so it is closed as a walkover and its winner moves on.

        Every hop is checked before the first slot is filled, so a conflict
        anywhere along the chain leaves the bracket untouched.

        Returns:
            One AdvancementResult per hop, in order
        """
        index = index_matches(matches)
        winner = self._ensure_decided(completed_match)

        hops: List[Tuple[Match, Match, Slot]] = []
        current = completed_match
        reached_end = False
        while True:
            step = self._locate_target(current, division, index)
            if step is None:
                reached_end = True
                break
            target, slot = step
            hops.append((current, target, slot))
            if not self._is_single_feeder(target, index):
                break
            if MatchStatus.WALKOVER not in ALLOWED_TRANSITIONS[target.status]:
                raise MatchStateException(
                    f"Round {target.round_number} match {target.position} is "
                    f"already {target.status.value}"
                )
            current = target

        results = []
        for source, target, slot in hops:
            results.append(self._fill(source, target, slot, winner))
            if self._is_single_feeder(target, index):
                target.transition(MatchStatus.WALKOVER)
                target.winner = winner
                target.notes = NOTE_SINGLE_FEEDER_WALKOVER
                logger.debug(
                    f"Round {target.round_number} match {target.position} has a "
                    f"single feeder; {winner.name} advances by walkover"
                )

        if reached_end:
            results.append(self._finish(current, division, index))
        return results

    def _is_single_feeder(self, match: Match, index: BracketIndex) -> bool:
        previous_round = match.round_number - 1
        return (previous_round, 2 * match.position) not in index

    def pending_advancements(
        self, division: Division, matches: List[Match]
    ) -> List[Match]:
        """Decided matches whose winner has not reached the next round yet.

        A result can be recorded while its advancement fails; such matches
        show up here and can be advanced again.
        """
        if division.bracket_format == BracketFormat.ROUND_ROBIN:
            return []

        index = index_matches(matches)
        pending = []
        for match in matches:
            if not match.is_decided:
                continue
            target_round, target_position, slot = next_position(match)
            target: Optional[Match] = index.get((target_round, target_position))
            if target is not None and target.competitor_in(slot) is None:
                pending.append(match)

        if pending:
            logger.warning(
                f"{division.name}: {len(pending)} decided match(es) not yet advanced"
            )
        return pending
