"""Exceptions for use in BJJ Bracket"""

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


# ========== Base Application Exception ==========


class BjjBracketException(Exception):
    """Base exception for all BJJ Bracket errors.

    All custom exceptions in the package inherit from this class, so callers
    can reject any engine error with a single except clause.
    """

    pass


# ========== Eligibility Exceptions ==========


class EligibilityException(BjjBracketException):
    """Base exception for division eligibility errors."""

    pass


class EligibilityViolationException(EligibilityException):
    """Raised when a competitor does not meet a division's requirements.

    Attributes:
        rule: The first eligibility rule that failed
        reason: Human-readable explanation for the caller
    """

    def __init__(self, rule, reason: str):
        super().__init__(reason)
        self.rule = rule
        self.reason = reason


# ========== Bracket Exceptions ==========


class BracketException(BjjBracketException):
    """Base exception for bracket generation errors."""

    pass


class NotEnoughCompetitorsException(BracketException):
    """Raised when a division has fewer than two competitors."""

    pass


class MatchesAlreadyGeneratedException(BracketException):
    """Raised when matches have already been generated for a division."""

    pass


class UnsupportedBracketFormatException(BracketException):
    """Raised when a bracket format cannot be built under the current policy."""

    pass


class InvalidPairingException(BracketException):
    """Raised when a manual pairing is invalid."""

    pass


# ========== Division Exceptions ==========


class DivisionException(BjjBracketException):
    """Base exception for division-related errors."""

    pass


class InvalidDivisionException(DivisionException):
    """Raised when division settings are inconsistent."""

    pass


class DivisionLockedException(DivisionException):
    """Raised when changing a division whose matches are already generated."""

    pass


class DuplicateCompetitorException(DivisionException):
    """Raised when enrolling a competitor that is already enrolled."""

    pass


class CompetitorNotFoundException(DivisionException):
    """Raised when a competitor is not part of the division."""

    pass


# ========== Match Exceptions ==========


class MatchException(BjjBracketException):
    """Base exception for match-related errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match does not exist in the division."""

    pass


class MatchStateException(MatchException):
    """Raised when a match is in an invalid state for the requested operation."""

    pass


class InvalidWinnerException(MatchException):
    """Raised when a winner is not one of the match participants."""

    pass


class AdvancementConflictException(MatchException):
    """Raised when advancing into a slot that is already filled."""

    pass


# ========== Result Exceptions ==========


class ResultException(BjjBracketException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result report is invalid (e.g., negative counters)."""

    pass


class DuplicateResultException(ResultException):
    """Raised when recording a result for a match that is already finished."""

    pass


# ========== Competitor Exceptions ==========


class CompetitorException(BjjBracketException):
    """Base exception for competitor-related errors."""

    pass


class InvalidCompetitorDataException(CompetitorException):
    """Raised when competitor data is invalid or incomplete."""

    pass


# ========== Category Exceptions ==========


class CategoryException(BjjBracketException):
    """Base exception for belt, age and weight table lookups."""

    pass


class UnknownCategoryException(CategoryException):
    """Raised when a belt rank, age category or weight class name is unknown."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(BjjBracketException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
