"""Data models for BJJ Bracket."""

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

from bjjbracket.models.categories import (
    AGE_CATEGORIES,
    BELT_RANKS,
    WEIGHT_CLASSES,
    AgeCategory,
    BeltRank,
    BracketFormat,
    Gender,
    MatchStatus,
    WeightClass,
    age_category_for_age,
    find_weight_class,
    get_age_category,
    get_belt_rank,
    get_weight_class,
)
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

__all__ = [
    "AGE_CATEGORIES",
    "BELT_RANKS",
    "WEIGHT_CLASSES",
    "AgeCategory",
    "BeltRank",
    "BracketFormat",
    "Gender",
    "MatchStatus",
    "WeightClass",
    "age_category_for_age",
    "find_weight_class",
    "get_age_category",
    "get_belt_rank",
    "get_weight_class",
    "Competitor",
    "Division",
    "EngineConfig",
    "Match",
    "AdvancementKind",
    "AdvancementResult",
    "DecisionMethod",
    "MatchResultReport",
    "Outcome",
    "ResultReport",
]
