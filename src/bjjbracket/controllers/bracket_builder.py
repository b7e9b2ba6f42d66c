"""Bracket construction for divisions.

This module turns a division's roster into its initial match set: round 1
plus empty placeholders for later rounds in single elimination, or every
pairing for round robin.
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
import random
from itertools import combinations
from typing import Dict, List, Optional, Sequence

from bjjbracket.constants import (
    DOUBLE_ELIMINATION_REJECT,
    FIRST_ROUND,
    MIN_COMPETITORS,
    NOTE_BYE_WALKOVER,
    ROUND_ROBIN_ROUND,
)
from bjjbracket.exceptions import (
    InvalidPairingException,
    NotEnoughCompetitorsException,
    UnsupportedBracketFormatException,
)
from bjjbracket.models.categories import BracketFormat, MatchStatus
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.engine_config import EngineConfig
from bjjbracket.models.match import Match
from bjjbracket.type_hints import ManualPairing
from bjjbracket.utils import setup_logger

logger = setup_logger(__name__)


def round_sizes(num_competitors: int) -> List[int]:
    """Number of matches in each single-elimination round.

    A round entered by R competitors has ceil(R/2) matches, and its winners
    enter the next round, until a single match (the final) remains.

    >>> round_sizes(6)
    [3, 2, 1]
    """
    sizes = []
    entrants = num_competitors
    while entrants > 1:
        matches = math.ceil(entrants / 2)
        sizes.append(matches)
        entrants = matches
    return sizes


class BracketBuilder:
    """Builds the initial match set for a division.

    This class is responsible for:
    - Pairing competitors into round-1 matches
    - Awarding walkovers to an unpaired competitor
    - Creating empty placeholder matches for later rounds
    - Building every pairing for round robin divisions

    It never checks whether a division was already generated; that guard
    belongs to the engine.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.rng = random.Random(self.config.seed)

    def build(
        self,
        bracket_format: BracketFormat,
        competitors: Sequence[Competitor],
        division_id: str,
    ) -> List[Match]:
        """Build the match set for a bracket format.

        Args:
            bracket_format: Structure of the division's bracket
            competitors: Enrolled competitors (at least two)
            division_id: Division the matches belong to

        Returns:
            List of matches ordered by round then position

        Raises:
            NotEnoughCompetitorsException: Fewer than two competitors
            UnsupportedBracketFormatException: Double elimination under the
                "reject" policy
        """
        if len(competitors) < MIN_COMPETITORS:
            raise NotEnoughCompetitorsException(
                "Not enough competitors to generate matches "
                f"(need at least {MIN_COMPETITORS}, got {len(competitors)})"
            )

        logger.info(
            f"Building {bracket_format.value} bracket for division {division_id} "
            f"with {len(competitors)} competitors"
        )

        if bracket_format == BracketFormat.SINGLE_ELIMINATION:
            return self._build_single_elimination(competitors, division_id)
        elif bracket_format == BracketFormat.DOUBLE_ELIMINATION:
            return self._build_double_elimination(competitors, division_id)
        elif bracket_format == BracketFormat.ROUND_ROBIN:
            return self._build_round_robin(competitors, division_id)
        else:
            raise UnsupportedBracketFormatException(
                f"Bracket format '{bracket_format}' is not implemented"
            )

    def _build_single_elimination(
        self, competitors: Sequence[Competitor], division_id: str
    ) -> List[Match]:
        """Round 1 from consecutive pairs, then placeholders for later rounds."""
        # TODO: seed by ranking instead of a uniform shuffle once results history exists
        order = list(competitors)
        if self.config.shuffle_single_elimination:
            self.rng.shuffle(order)

        matches: List[Match] = []
        position = 1
        for i in range(0, len(order) - 1, 2):
            matches.append(
                Match(
                    division_id=division_id,
                    round_number=FIRST_ROUND,
                    position=position,
                    competitor1=order[i],
                    competitor2=order[i + 1],
                )
            )
            position += 1

        # Odd competitor out gets a walkover instead of waiting for an opponent
        if len(order) % 2 == 1:
            lone = order[-1]
            matches.append(
                Match(
                    division_id=division_id,
                    round_number=FIRST_ROUND,
                    position=position,
                    competitor1=lone,
                    status=MatchStatus.WALKOVER,
                    winner=lone,
                    notes=NOTE_BYE_WALKOVER,
                )
            )
            logger.debug(f"{lone.name} receives a walkover at position {position}")

        sizes = round_sizes(len(order))
        for round_number, size in enumerate(sizes[1:], start=FIRST_ROUND + 1):
            for position in range(1, size + 1):
                matches.append(
                    Match(
                        division_id=division_id,
                        round_number=round_number,
                        position=position,
                    )
                )

        logger.info(
            f"Single elimination: {len(sizes)} rounds, {len(matches)} matches "
            f"({sizes[0]} in round 1)"
        )
        return matches

    def _build_double_elimination(
        self, competitors: Sequence[Competitor], division_id: str
    ) -> List[Match]:
        """Winners bracket only; the losers bracket is not built."""
        if self.config.double_elimination_policy == DOUBLE_ELIMINATION_REJECT:
            raise UnsupportedBracketFormatException(
                "Double elimination brackets are not supported: "
                "the losers bracket is not implemented"
            )

        logger.warning(
            f"Division {division_id}: double elimination is built as a single "
            "elimination bracket. Losers bracket not implemented."
        )
        return self._build_single_elimination(competitors, division_id)

    def _build_round_robin(
        self, competitors: Sequence[Competitor], division_id: str
    ) -> List[Match]:
        """Every unordered pair once, in roster order, all in round 1."""
        matches = [
            Match(
                division_id=division_id,
                round_number=ROUND_ROBIN_ROUND,
                position=position,
                competitor1=first,
                competitor2=second,
            )
            for position, (first, second) in enumerate(
                combinations(competitors, 2), start=1
            )
        ]
        logger.info(f"Round robin: {len(matches)} matches")
        return matches

    def build_manual(
        self,
        pairs: Sequence[ManualPairing],
        competitors: Sequence[Competitor],
        division_id: str,
    ) -> List[Match]:
        """Create round-1 matches from coach-chosen pairings.

        Args:
            pairs: (competitor_id, competitor_id) tuples, in position order
            competitors: Enrolled competitors
            division_id: Division the matches belong to

        Raises:
            InvalidPairingException: Malformed pair, unknown competitor,
                self-pairing or a competitor paired twice
        """
        if not pairs:
            raise InvalidPairingException("At least one match pair is required")

        roster: Dict[str, Competitor] = {c.id: c for c in competitors}
        used = set()
        matches: List[Match] = []

        for position, pair in enumerate(pairs, start=1):
            if len(pair) != 2:
                raise InvalidPairingException(
                    "Each match pair must contain exactly 2 athlete IDs"
                )
            first_id, second_id = pair
            if first_id not in roster or second_id not in roster:
                raise InvalidPairingException("Athlete not found in division")
            if first_id == second_id:
                raise InvalidPairingException(
                    f"An athlete cannot be paired with themself: {first_id}"
                )
            repeated = used.intersection(pair)
            if repeated:
                raise InvalidPairingException(
                    f"Athletes paired more than once: {', '.join(sorted(repeated))}"
                )
            used.update(pair)

            matches.append(
                Match(
                    division_id=division_id,
                    round_number=FIRST_ROUND,
                    position=position,
                    competitor1=roster[first_id],
                    competitor2=roster[second_id],
                )
            )

        unpaired = len(roster) - len(used)
        if unpaired:
            logger.info(f"{unpaired} competitor(s) left without a manual pairing")
        return matches
