"""Belt ranks, age categories and weight classes.

Each is a closed set of named records with fixed numeric attributes, kept in
read-only lookup tables keyed by name. Eligibility checks compare fields of
the looked-up records.
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

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from bjjbracket.constants import GENDER_SEPARATION_AGE, UNLIMITED_WEIGHT_KG
from bjjbracket.exceptions import UnknownCategoryException


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NOT_APPLICABLE = "not_applicable"  # Mixed divisions for kids under 10

    @property
    def display_name(self) -> str:
        return {"male": "Male", "female": "Female"}.get(self.value, "N/A")


class BracketFormat(str, Enum):
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"
    ROUND_ROBIN = "round_robin"


class MatchStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    WALKOVER = "walkover"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {MatchStatus.COMPLETED, MatchStatus.WALKOVER, MatchStatus.CANCELLED}
)


@dataclass(frozen=True)
class BeltRank:
    """A belt in the IBJJF ranking system.

    Attributes
    ----------
    name : str
        Lookup key, e.g. ``"BLUE"``.
    display_name : str
        Human readable name.
    rank : int
        Ordinal position from White-Grey (0) to Red (18).
    is_kids_belt : bool
        Whether the belt is only awarded to athletes under 16.
    """

    name: str
    display_name: str
    rank: int
    is_kids_belt: bool


@dataclass(frozen=True)
class AgeCategory:
    """A named, inclusive age range with its standard match duration."""

    name: str
    display_name: str
    min_age: int
    max_age: int
    match_duration_minutes: int

    @property
    def requires_gender_separation(self) -> bool:
        """Kids under 10 compete in mixed divisions."""
        return self.min_age >= GENDER_SEPARATION_AGE

    def contains(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


@dataclass(frozen=True)
class WeightClass:
    """A weight class ceiling (kg) for one population of athletes."""

    name: str
    display_name: str
    max_weight_kg: float
    gender: Gender
    is_adult: bool

    @property
    def is_unlimited(self) -> bool:
        return self.max_weight_kg >= UNLIMITED_WEIGHT_KG


def _table(records: Iterable) -> Mapping:
    return MappingProxyType({record.name: record for record in records})


BELT_RANKS: Mapping[str, BeltRank] = _table(
    BeltRank(name, display, rank, rank < 12)
    for rank, (name, display) in enumerate(
        [
            # Kids belts (under 16)
            ("WHITE_GREY", "White-Grey"),
            ("GREY", "Grey"),
            ("GREY_BLACK", "Grey-Black"),
            ("YELLOW_WHITE", "Yellow-White"),
            ("YELLOW", "Yellow"),
            ("YELLOW_BLACK", "Yellow-Black"),
            ("ORANGE_WHITE", "Orange-White"),
            ("ORANGE", "Orange"),
            ("ORANGE_BLACK", "Orange-Black"),
            ("GREEN_WHITE", "Green-White"),
            ("GREEN", "Green"),
            ("GREEN_BLACK", "Green-Black"),
            # Adult belts (16+)
            ("WHITE", "White"),
            ("BLUE", "Blue"),
            ("PURPLE", "Purple"),
            ("BROWN", "Brown"),
            ("BLACK", "Black"),
            # Red and black (7th/8th degree), red (9th/10th degree)
            ("CORAL", "Coral"),
            ("RED", "Red"),
        ]
    )
)

AGE_CATEGORIES: Mapping[str, AgeCategory] = _table(
    [
        AgeCategory("MIGHTY_MITE", "Mighty Mite", 4, 5, 3),
        AgeCategory("TINY_TOT", "Tiny Tot", 6, 7, 3),
        AgeCategory("WEE_ONE", "Wee One", 8, 9, 4),
        AgeCategory("LITTLE_ONE", "Little One", 10, 12, 4),
        AgeCategory("PRE_TEEN", "Pre-Teen", 13, 15, 5),
        AgeCategory("JUVENILE", "Juvenile", 16, 17, 5),
        AgeCategory("ADULT", "Adult", 18, 29, 5),
        AgeCategory("MASTER_1", "Master 1", 30, 35, 5),
        AgeCategory("MASTER_2", "Master 2", 36, 40, 5),
        AgeCategory("MASTER_3", "Master 3", 41, 45, 5),
        AgeCategory("MASTER_4", "Master 4", 46, 50, 5),
        AgeCategory("MASTER_5", "Master 5", 51, 55, 5),
        AgeCategory("MASTER_6", "Master 6", 56, 60, 4),
        AgeCategory("MASTER_7", "Master 7", 61, 150, 4),
    ]
)

# Ordered lightest to heaviest within each population
WEIGHT_CLASSES: Mapping[str, WeightClass] = _table(
    [
        # Adult male (gi)
        WeightClass("ADULT_MALE_ROOSTER", "Rooster", 57.5, Gender.MALE, True),
        WeightClass("ADULT_MALE_LIGHT_FEATHER", "Light Feather", 64.0, Gender.MALE, True),
        WeightClass("ADULT_MALE_FEATHER", "Feather", 70.0, Gender.MALE, True),
        WeightClass("ADULT_MALE_LIGHT", "Light", 76.0, Gender.MALE, True),
        WeightClass("ADULT_MALE_MIDDLE", "Middle", 82.3, Gender.MALE, True),
        WeightClass("ADULT_MALE_MEDIUM_HEAVY", "Medium Heavy", 88.3, Gender.MALE, True),
        WeightClass("ADULT_MALE_HEAVY", "Heavy", 94.3, Gender.MALE, True),
        WeightClass("ADULT_MALE_SUPER_HEAVY", "Super Heavy", 100.5, Gender.MALE, True),
        WeightClass("ADULT_MALE_ULTRA_HEAVY", "Ultra Heavy", 999.9, Gender.MALE, True),
        # Adult female (gi)
        WeightClass("ADULT_FEMALE_ROOSTER", "Rooster", 48.5, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_LIGHT_FEATHER", "Light Feather", 53.5, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_FEATHER", "Feather", 58.5, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_LIGHT", "Light", 64.0, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_MIDDLE", "Middle", 69.0, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_MEDIUM_HEAVY", "Medium Heavy", 74.0, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_HEAVY", "Heavy", 79.3, Gender.FEMALE, True),
        WeightClass("ADULT_FEMALE_SUPER_HEAVY", "Super Heavy", 999.9, Gender.FEMALE, True),
        # Kids (simplified)
        WeightClass("KIDS_LIGHT", "Light", 30.0, Gender.NOT_APPLICABLE, False),
        WeightClass("KIDS_MIDDLE", "Middle", 37.0, Gender.NOT_APPLICABLE, False),
        WeightClass("KIDS_MEDIUM_HEAVY", "Medium Heavy", 44.0, Gender.NOT_APPLICABLE, False),
        WeightClass("KIDS_HEAVY", "Heavy", 52.0, Gender.NOT_APPLICABLE, False),
        WeightClass("KIDS_SUPER_HEAVY", "Super Heavy", 999.9, Gender.NOT_APPLICABLE, False),
    ]
)


def _lookup(table: Mapping, name: str, kind: str):
    try:
        return table[name.upper()]
    except (KeyError, AttributeError):
        raise UnknownCategoryException(f"Unknown {kind}: {name!r}") from None


def get_belt_rank(name: str) -> BeltRank:
    """Look up a belt rank by name (case-insensitive)."""
    return _lookup(BELT_RANKS, name, "belt rank")


def get_age_category(name: str) -> AgeCategory:
    """Look up an age category by name (case-insensitive)."""
    return _lookup(AGE_CATEGORIES, name, "age category")


def get_weight_class(name: str) -> WeightClass:
    """Look up a weight class by name (case-insensitive)."""
    return _lookup(WEIGHT_CLASSES, name, "weight class")


def age_category_for_age(age: int) -> AgeCategory:
    """Find the age category whose inclusive bounds contain ``age``.

    Raises:
        UnknownCategoryException: If no category covers the age
    """
    for category in AGE_CATEGORIES.values():
        if category.contains(age):
            return category
    raise UnknownCategoryException(f"No age category found for age: {age}")


def find_weight_class(weight: float, gender: Gender, is_adult: bool) -> WeightClass:
    """Find the lightest weight class that fits an athlete.

    Adult classes are matched on gender; kids classes are mixed. Falls back to
    the heaviest class of the population when nothing else fits.
    """
    candidates = [
        wc
        for wc in WEIGHT_CLASSES.values()
        if wc.is_adult == is_adult
        and (wc.gender == gender or wc.gender == Gender.NOT_APPLICABLE)
    ]
    for weight_class in candidates:
        if weight <= weight_class.max_weight_kg:
            return weight_class

    if not is_adult:
        return WEIGHT_CLASSES["KIDS_SUPER_HEAVY"]
    if gender == Gender.MALE:
        return WEIGHT_CLASSES["ADULT_MALE_ULTRA_HEAVY"]
    return WEIGHT_CLASSES["ADULT_FEMALE_SUPER_HEAVY"]
