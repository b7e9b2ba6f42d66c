"""Winner determination for completed matches.

This module applies the IBJJF priority order: disqualification, submission,
points (with penalty transfers), advantages, then referee decision.
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

from bjjbracket.constants import DISQUALIFICATION_PENALTIES, FIRST_SLOT, SECOND_SLOT
from bjjbracket.exceptions import MatchStateException
from bjjbracket.models.categories import MatchStatus
from bjjbracket.models.match import Match
from bjjbracket.models.results import DecisionMethod, Outcome
from bjjbracket.utils import setup_logger

logger = setup_logger(__name__)


class OutcomeResolver:
    """Determines the winner of a completed match.

    Priority order, each step short-circuiting:
    1. Disqualification: 4 penalties is an automatic loss
    2. Submission: the winner recorded with the submission stands
    3. Effective score: points + 2 per opponent penalty
    4. Advantages
    5. Unresolved: left to a referee decision

    The only side effect is setting ``match.winner`` when an outcome is found.
    """

    def resolve(self, match: Match) -> Outcome:
        """Resolve the winner of a match.

        Args:
            match: A completed match with both competitors

        Returns:
            Outcome with the winner and how it was decided, or an unresolved
            outcome awaiting a referee decision

        Raises:
            MatchStateException: If the match is not completed or a slot is empty
        """
        if match.status != MatchStatus.COMPLETED:
            raise MatchStateException(
                f"Only completed matches can be resolved (match {match.id} is "
                f"{match.status.value})"
            )
        if not match.has_both_competitors:
            raise MatchStateException(
                f"Match {match.id} needs both competitors to be resolved"
            )

        outcome = self._determine(match)
        if outcome.is_resolved:
            match.winner = outcome.winner
            logger.debug(
                f"Match {match.id}: {outcome.winner.name} wins by {outcome.method.value}"
            )
        else:
            logger.info(
                f"Match {match.id}: scores and advantages tied, awaiting referee decision"
            )
        return outcome

    def _determine(self, match: Match) -> Outcome:
        if match.competitor1_penalties >= DISQUALIFICATION_PENALTIES:
            return Outcome.resolved(match.competitor2, DecisionMethod.DISQUALIFICATION)
        if match.competitor2_penalties >= DISQUALIFICATION_PENALTIES:
            return Outcome.resolved(match.competitor1, DecisionMethod.DISQUALIFICATION)

        # Submission winners are recorded directly, bypassing the score
        if match.finished_by_submission:
            if match.winner is None:
                return Outcome.unresolved()
            return Outcome.resolved(match.winner, DecisionMethod.SUBMISSION)

        score1 = match.effective_score(FIRST_SLOT)
        score2 = match.effective_score(SECOND_SLOT)
        if score1 != score2:
            winner = match.competitor1 if score1 > score2 else match.competitor2
            return Outcome.resolved(winner, DecisionMethod.POINTS)

        advantages1 = match.competitor1_advantages
        advantages2 = match.competitor2_advantages
        if advantages1 != advantages2:
            winner = match.competitor1 if advantages1 > advantages2 else match.competitor2
            return Outcome.resolved(winner, DecisionMethod.ADVANTAGES)

        return Outcome.unresolved()
