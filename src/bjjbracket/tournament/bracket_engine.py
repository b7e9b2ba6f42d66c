"""Main BracketEngine class - orchestrates all bracket operations.

This is the primary interface of the package. It coordinates eligibility
checks, bracket construction, result recording, outcome resolution and
winner advancement. The engine holds no division or match state of its own:
callers hand it the division and its matches and persist whatever it returns.
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

from datetime import date
from typing import List, Optional, Sequence

from bjjbracket.controllers import (
    AdvancementTracker,
    BracketBuilder,
    EligibilityChecker,
    OutcomeResolver,
    ResultRecorder,
)
from bjjbracket.controllers.result_recorder import find_match
from bjjbracket.exceptions import (
    BjjBracketException,
    EligibilityViolationException,
    InvalidWinnerException,
    MatchesAlreadyGeneratedException,
    MatchNotFoundException,
    MatchStateException,
)
from bjjbracket.models.categories import MatchStatus
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.division import Division
from bjjbracket.models.engine_config import EngineConfig
from bjjbracket.models.match import Match
from bjjbracket.models.results import (
    AdvancementKind,
    AdvancementResult,
    DecisionMethod,
    MatchResultReport,
    Outcome,
    ResultReport,
)
from bjjbracket.type_hints import CompetitorID, ManualPairing, MatchID
from bjjbracket.utils import setup_logger

logger = setup_logger(__name__)


class BracketEngine:
    """Bracket management for a tournament's divisions.

    This class coordinates the specialized components:
    - EligibilityChecker: division eligibility rules
    - BracketBuilder: initial match sets
    - ResultRecorder: result entry and validation
    - OutcomeResolver: IBJJF winner determination
    - AdvancementTracker: winner advancement and division completion

    Generation is allowed once per division. The "matches generated" flag is
    claimed with an atomic check-and-set, so of two racing requests exactly
    one succeeds and the other fails with MatchesAlreadyGeneratedException.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

        self.eligibility_checker = EligibilityChecker()
        self.bracket_builder = BracketBuilder(self.config)
        self.result_recorder = ResultRecorder()
        self.outcome_resolver = OutcomeResolver()
        self.advancement_tracker = AdvancementTracker()

    # ========== Enrollment ==========

    def enroll(
        self,
        division: Division,
        competitor: Competitor,
        on_date: Optional[date] = None,
    ) -> None:
        """Enroll a competitor after checking eligibility.

        Raises:
            EligibilityViolationException: The competitor does not qualify
            DivisionLockedException: Matches were already generated
            DuplicateCompetitorException: Already enrolled
        """
        self.eligibility_checker.ensure_eligible(competitor, division, on_date)
        division.add_competitor(competitor)
        logger.info(f"Enrolled {competitor.name} in {division.name}")

    # ========== Generation ==========

    def generate(self, division: Division, on_date: Optional[date] = None) -> List[Match]:
        """Generate the matches of a division.

        Args:
            division: Division with its enrolled competitors
            on_date: Day ages are evaluated on for the eligibility re-check

        Returns:
            The generated matches, for the caller to store

        Raises:
            MatchesAlreadyGeneratedException: Generation already ran
            EligibilityViolationException: A rostered competitor no longer qualifies
            NotEnoughCompetitorsException: Fewer than two competitors
            UnsupportedBracketFormatException: Double elimination under "reject"
        """
        self._ensure_not_generated(division)
        logger.info(
            f"Generating matches for {division.name} ({len(division.competitors)} athletes)"
        )

        for competitor in division.competitors:
            try:
                self.eligibility_checker.ensure_eligible(competitor, division, on_date)
            except EligibilityViolationException as e:
                logger.error(
                    f"{competitor.name} is not eligible for {division.name}: {e.reason}"
                )
                raise

        matches = self.bracket_builder.build(
            division.bracket_format, division.competitors, division.id
        )
        if self.config.auto_advance_walkovers:
            self._advance_walkovers(division, matches)

        division.claim_generation()
        logger.info(f"Successfully generated {len(matches)} matches for {division.name}")
        return matches

    def generate_manual(
        self, division: Division, pairs: Sequence[ManualPairing]
    ) -> List[Match]:
        """Generate round-1 matches from coach-chosen pairings.

        Raises:
            MatchesAlreadyGeneratedException: Generation already ran
            InvalidPairingException: A pair is malformed or repeats a competitor
        """
        self._ensure_not_generated(division)
        matches = self.bracket_builder.build_manual(
            pairs, division.competitors, division.id
        )
        division.claim_generation()
        logger.info(
            f"Successfully generated {len(matches)} manual matches for {division.name}"
        )
        return matches

    def _ensure_not_generated(self, division: Division) -> None:
        if division.matches_generated:
            raise MatchesAlreadyGeneratedException(
                f"Matches have already been generated for {division.name}"
            )

    def _advance_walkovers(self, division: Division, matches: List[Match]) -> None:
        for match in list(matches):
            if match.round_number == 1 and match.status == MatchStatus.WALKOVER:
                self.advancement_tracker.advance_all(match, division, matches)

    # ========== Match lifecycle ==========

    def start_match(self, match: Match) -> None:
        """Move a pending match with both competitors to in progress."""
        match.start()
        logger.info(
            f"Started match {match.id}: {match.competitor1.name} vs {match.competitor2.name}"
        )

    def cancel_match(
        self,
        division: Division,
        matches: List[Match],
        match_id: MatchID,
        reason: Optional[str] = None,
    ) -> None:
        """Cancel a match that will not be fought.

        Cancelling the last unsettled match of a round robin or manual
        division completes it.
        """
        match = self._get_match(division, matches, match_id)
        match.transition(MatchStatus.CANCELLED)
        if reason:
            match.notes = reason
        logger.info(f"Cancelled match {match.id}")
        self._refresh_completion(division, matches)

    def assign_mat(self, match: Match, mat_number: int) -> None:
        if mat_number < 1:
            raise ValueError(f"Mat number must be at least 1: {mat_number}")
        match.mat_number = mat_number
        logger.debug(f"Match {match.id} assigned to mat {mat_number}")

    # ========== Results ==========

    def report_result(
        self, division: Division, matches: List[Match], report: MatchResultReport
    ) -> ResultReport:
        """Record a match result, resolve the winner and advance it.

        A reported winner overrides automatic resolution. A tie on effective
        score and advantages leaves the winner unset and returns an outcome
        awaiting a referee decision (see :meth:`assign_referee_decision`).

        Raises:
            MatchNotFoundException: The match is not part of the division
            DuplicateResultException: The match already finished
            InvalidResultException: Invalid counters or incomplete report
            InvalidWinnerException: The reported winner is not a participant
        """
        match = self._get_match(division, matches, report.match_id)
        manual_winner = self.result_recorder.record(match, report)

        if report.walkover:
            outcome = Outcome.resolved(manual_winner, DecisionMethod.WALKOVER)
        elif manual_winner is not None and not report.finished_by_submission:
            outcome = Outcome.resolved(manual_winner, DecisionMethod.MANUAL)
        else:
            outcome = self.outcome_resolver.resolve(match)

        advancements: List[AdvancementResult] = []
        if outcome.is_resolved:
            advancements = self._advance(division, matches, match)
        else:
            logger.info(f"Match {match.id} awaits a referee decision")

        return ResultReport(match=match, outcome=outcome, advancements=advancements)

    def record_walkover(
        self,
        division: Division,
        matches: List[Match],
        match_id: MatchID,
        winner_id: CompetitorID,
    ) -> ResultReport:
        """Record that one competitor did not show up."""
        report = MatchResultReport(match_id=match_id, winner_id=winner_id, walkover=True)
        result = self.report_result(division, matches, report)
        absent = result.match.opponent_of(result.outcome.winner)
        logger.info(f"{absent.name} did not show up for match {match_id}")
        return result

    def assign_referee_decision(
        self,
        division: Division,
        matches: List[Match],
        match_id: MatchID,
        winner_id: CompetitorID,
    ) -> ResultReport:
        """Set the winner of a completed match that ended in a full tie.

        Raises:
            MatchStateException: The match is not completed or already has a winner
            InvalidWinnerException: The winner is not a participant
        """
        match = self._get_match(division, matches, match_id)
        if match.status != MatchStatus.COMPLETED or match.winner is not None:
            raise MatchStateException(
                f"Match {match.id} is not awaiting a referee decision"
            )
        winner = match.find_competitor(winner_id)
        if winner is None:
            raise InvalidWinnerException(
                f"Winner must be one of the match participants ({winner_id})"
            )

        match.set_winner(winner)
        logger.info(f"Referee decision for match {match.id}: {winner.name}")
        outcome = Outcome.resolved(winner, DecisionMethod.REFEREE_DECISION)
        return ResultReport(
            match=match,
            outcome=outcome,
            advancements=self._advance(division, matches, match),
        )

    # ========== Advancement ==========

    def pending_advancements(
        self, division: Division, matches: List[Match]
    ) -> List[Match]:
        """Decided matches whose winner is missing from the next round."""
        return self.advancement_tracker.pending_advancements(division, matches)

    def retry_advancement(
        self, division: Division, matches: List[Match], match_id: MatchID
    ) -> List[AdvancementResult]:
        """Advance a decided match again after an earlier failure.

        Raises:
            AdvancementConflictException: The winner was already placed
        """
        match = self._get_match(division, matches, match_id)
        return self._advance(division, matches, match)

    def _advance(
        self, division: Division, matches: List[Match], match: Match
    ) -> List[AdvancementResult]:
        try:
            results = self.advancement_tracker.advance_all(match, division, matches)
        except BjjBracketException as e:
            logger.error(f"Error advancing winner of match {match.id}: {e}")
            raise
        if self._refresh_completion(division, matches):
            results.append(
                AdvancementResult(AdvancementKind.DIVISION_COMPLETED, match)
            )
        return results

    def _refresh_completion(self, division: Division, matches: List[Match]) -> bool:
        """Complete flat brackets (round robin, manual) once every match is settled.

        Returns True only when this call completed the division.
        """
        if division.completed:
            return False
        if not all(m.is_decided or m.status == MatchStatus.CANCELLED for m in matches):
            return False
        division.completed = True
        logger.info(f"All matches of {division.name} are finished")
        return True

    def _get_match(
        self, division: Division, matches: List[Match], match_id: MatchID
    ) -> Match:
        match = find_match(matches, match_id)
        if match.division_id != division.id:
            raise MatchNotFoundException(
                f"Match {match_id} does not belong to division {division.name}"
            )
        return match
