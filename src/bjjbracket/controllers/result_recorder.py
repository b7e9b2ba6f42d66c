"""Result recording and validation for matches.

This module applies a reported match result to a match, validating the whole
report before anything is written.
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

from typing import Dict, List, Optional

from bjjbracket.constants import NOTE_NO_SHOW_WALKOVER
from bjjbracket.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    InvalidWinnerException,
    MatchNotFoundException,
    MatchStateException,
)
from bjjbracket.models.categories import MatchStatus
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.match import Match
from bjjbracket.models.results import MatchResultReport
from bjjbracket.type_hints import MatchID
from bjjbracket.utils import setup_logger
from bjjbracket.utils.validation import validate_counter

logger = setup_logger(__name__)


def find_match(matches: List[Match], match_id: MatchID) -> Match:
    for match in matches:
        if match.id == match_id:
            return match
    raise MatchNotFoundException(f"Match not found with ID: {match_id}")


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating counters, submission data and manual winners
    - Refusing results for placeholders and already finished matches
    - Writing counters, submission info, notes and the final status

    A report is either applied in full or not at all.
    """

    def record(self, match: Match, report: MatchResultReport) -> Optional[Competitor]:
        """Apply a result report to a match.

        Args:
            match: The match the report belongs to
            report: Reported counters, submission info and optional winner

        Returns:
            The explicitly reported winner, or None when the winner must be
            resolved from the counters

        Raises:
            MatchStateException: A competitor slot is still empty
            DuplicateResultException: The match already reached a terminal state
            InvalidResultException: Negative counters or an incomplete report
            InvalidWinnerException: The reported winner is not a participant
        """
        manual_winner = self._validate(match, report)

        match.competitor1_points = report.competitor1_points
        match.competitor2_points = report.competitor2_points
        match.competitor1_advantages = report.competitor1_advantages
        match.competitor2_advantages = report.competitor2_advantages
        match.competitor1_penalties = report.competitor1_penalties
        match.competitor2_penalties = report.competitor2_penalties
        match.finished_by_submission = report.finished_by_submission
        match.submission_technique = report.submission_technique
        if report.duration_seconds is not None:
            match.duration_seconds = report.duration_seconds

        if report.walkover:
            match.transition(MatchStatus.WALKOVER)
            match.notes = report.notes or NOTE_NO_SHOW_WALKOVER
        else:
            match.transition(MatchStatus.COMPLETED)
            if report.notes is not None:
                match.notes = report.notes

        if manual_winner is not None:
            match.winner = manual_winner

        logger.debug(
            f"Recorded match {match.id}: "
            f"{match.competitor1.name} {match.competitor1_total_score} "
            f"({match.competitor1_advantages} adv, {match.competitor1_penalties} pen) vs "
            f"{match.competitor2.name} {match.competitor2_total_score} "
            f"({match.competitor2_advantages} adv, {match.competitor2_penalties} pen)"
        )
        return manual_winner

    def _validate(
        self, match: Match, report: MatchResultReport
    ) -> Optional[Competitor]:
        """Validate a report before recording; returns the manual winner if any."""
        if report.match_id != match.id:
            raise InvalidResultException(
                f"Report for match {report.match_id} applied to match {match.id}"
            )
        if match.is_terminal:
            raise DuplicateResultException(
                f"Match {match.id} is already {match.status.value}"
            )
        if not match.has_both_competitors:
            raise MatchStateException(
                f"Match {match.id} is waiting for earlier rounds; both athletes "
                "must be assigned before a result can be recorded"
            )

        errors: Dict[str, str] = {}
        for field_name in MatchResultReport.COUNTER_FIELDS:
            result = validate_counter(getattr(report, field_name), field_name)
            if not result:
                errors[field_name] = result.error_message
        if errors:
            raise InvalidResultException("; ".join(errors.values()))

        if report.duration_seconds is not None and report.duration_seconds < 0:
            raise InvalidResultException(
                f"Duration cannot be negative: {report.duration_seconds}"
            )

        manual_winner = None
        if report.winner_id is not None:
            manual_winner = match.find_competitor(report.winner_id)
            if manual_winner is None:
                raise InvalidWinnerException(
                    "Winner must be one of the match participants "
                    f"({report.winner_id} is not in match {match.id})"
                )

        if report.finished_by_submission and manual_winner is None:
            raise InvalidResultException(
                "A submission result must name the winning athlete"
            )
        if report.walkover and manual_winner is None:
            raise InvalidResultException("A walkover result must name the winner")

        return manual_winner
