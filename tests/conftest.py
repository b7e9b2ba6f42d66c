"""Shared fixtures for the bracket engine tests."""

from datetime import date

import pytest

from bjjbracket.models import (
    BracketFormat,
    Competitor,
    Division,
    EngineConfig,
    Gender,
    get_age_category,
    get_belt_rank,
    get_weight_class,
)
from bjjbracket.tournament import BracketEngine

EVENT_DAY = date(2025, 6, 1)


def make_competitor(name, belt="BLUE", weight=72.0, gender=Gender.MALE, born=None):
    return Competitor(
        name=name,
        date_of_birth=born or date(2000, 3, 15),
        belt_rank=get_belt_rank(belt),
        weight=weight,
        gender=gender,
        team="Gracie Barra",
        on_date=EVENT_DAY,
    )


def make_division(bracket_format=BracketFormat.SINGLE_ELIMINATION, competitors=None):
    return Division(
        belt_rank=get_belt_rank("BLUE"),
        age_category=get_age_category("ADULT"),
        gender=Gender.MALE,
        weight_class=get_weight_class("ADULT_MALE_LIGHT"),
        bracket_format=bracket_format,
        competitors=list(competitors or []),
    )


def make_roster(count):
    return [make_competitor(f"Athlete {i + 1}") for i in range(count)]


@pytest.fixture
def engine():
    return BracketEngine(EngineConfig(seed=42))


@pytest.fixture
def division():
    return make_division(competitors=make_roster(8))


@pytest.fixture
def round_robin_division():
    return make_division(BracketFormat.ROUND_ROBIN, make_roster(4))
