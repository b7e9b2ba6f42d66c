"""Bracket engine components."""

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

from bjjbracket.controllers.advancement_tracker import AdvancementTracker
from bjjbracket.controllers.bracket_builder import BracketBuilder
from bjjbracket.controllers.eligibility_checker import (
    EligibilityChecker,
    EligibilityResult,
    EligibilityRule,
)
from bjjbracket.controllers.outcome_resolver import OutcomeResolver
from bjjbracket.controllers.result_recorder import ResultRecorder

__all__ = [
    "AdvancementTracker",
    "BracketBuilder",
    "EligibilityChecker",
    "EligibilityResult",
    "EligibilityRule",
    "OutcomeResolver",
    "ResultRecorder",
]
