"""Division eligibility checks.

This module decides whether a competitor may join a division. Rules are
evaluated in a fixed order and only the first failure is reported.
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
from enum import Enum
from typing import Optional

from bjjbracket.exceptions import EligibilityViolationException
from bjjbracket.models.categories import Gender
from bjjbracket.models.competitor import Competitor
from bjjbracket.models.division import Division


class EligibilityRule(str, Enum):
    BELT_RANK = "belt_rank"
    GENDER = "gender"
    AGE = "age"
    WEIGHT = "weight"


class EligibilityResult:
    """Outcome of an eligibility check.

    Attributes:
        rule: The first rule that failed, or None when eligible
        reason: Human-readable explanation of the failure
    """

    def __init__(
        self, rule: Optional[EligibilityRule] = None, reason: Optional[str] = None
    ):
        self.rule = rule
        self.reason = reason

    @property
    def is_eligible(self) -> bool:
        return self.rule is None

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_eligible

    def __repr__(self) -> str:
        if self.is_eligible:
            return "EligibilityResult(ELIGIBLE)"
        return f"EligibilityResult({self.rule.value}, {self.reason!r})"


ELIGIBLE = EligibilityResult()


class EligibilityChecker:
    """Validates competitors against a division's requirements.

    Checks, in order:
    1. Belt rank must equal the division's belt rank
    2. Gender must match when the athlete is 10+ and the division is not mixed
    3. Age must fall within the age category's inclusive bounds
    4. Weight must not exceed a limited weight-class ceiling
    """

    def check(
        self,
        competitor: Competitor,
        division: Division,
        on_date: Optional[date] = None,
    ) -> EligibilityResult:
        """Check whether a competitor may join a division.

        Args:
            competitor: The athlete to check
            division: The target division
            on_date: Day the age is evaluated on (defaults to today)

        Returns:
            EligibilityResult, truthy when eligible
        """
        on_date = on_date or date.today()

        if competitor.belt_rank != division.belt_rank:
            return EligibilityResult(
                EligibilityRule.BELT_RANK,
                f"Athlete belt rank ({competitor.belt_rank.display_name}) does not "
                f"match division requirement ({division.belt_rank.display_name})",
            )

        if (
            competitor.requires_gender_separation(on_date)
            and division.gender != Gender.NOT_APPLICABLE
            and competitor.gender != division.gender
        ):
            return EligibilityResult(
                EligibilityRule.GENDER,
                f"Athlete gender ({competitor.gender.display_name}) does not "
                f"match division requirement ({division.gender.display_name})",
            )

        age = competitor.age_on(on_date)
        category = division.age_category
        if not category.contains(age):
            return EligibilityResult(
                EligibilityRule.AGE,
                f"Athlete age ({age}) does not match division age category "
                f"({category.display_name}: {category.min_age}-{category.max_age} years)",
            )

        weight_class = division.weight_class
        if (
            weight_class is not None
            and not weight_class.is_unlimited
            and competitor.weight > weight_class.max_weight_kg
        ):
            return EligibilityResult(
                EligibilityRule.WEIGHT,
                f"Athlete weight ({competitor.weight} kg) exceeds division weight "
                f"class maximum ({weight_class.max_weight_kg} kg)",
            )

        return ELIGIBLE

    def ensure_eligible(
        self,
        competitor: Competitor,
        division: Division,
        on_date: Optional[date] = None,
    ) -> None:
        """Check eligibility and raise if the competitor may not join.

        Raises:
            EligibilityViolationException: Carrying the failed rule and reason
        """
        result = self.check(competitor, division, on_date)
        if not result:
            raise EligibilityViolationException(result.rule, result.reason)
