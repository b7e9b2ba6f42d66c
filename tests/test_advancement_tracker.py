import pytest
from conftest import make_competitor, make_division, make_roster

from bjjbracket.constants import NOTE_SINGLE_FEEDER_WALKOVER
from bjjbracket.controllers import AdvancementTracker, BracketBuilder
from bjjbracket.controllers.advancement_tracker import index_matches, next_position
from bjjbracket.exceptions import (
    AdvancementConflictException,
    InvalidWinnerException,
    MatchStateException,
)
from bjjbracket.models import (
    AdvancementKind,
    BracketFormat,
    EngineConfig,
    Match,
    MatchStatus,
)


def _bracket(count, bracket_format=BracketFormat.SINGLE_ELIMINATION):
    division = make_division(bracket_format, make_roster(count))
    builder = BracketBuilder(EngineConfig(shuffle_single_elimination=False))
    matches = builder.build(bracket_format, division.competitors, division.id)
    return division, matches


def _decide(match, winner=None):
    match.status = MatchStatus.COMPLETED
    match.winner = winner or match.competitor1
    return match


def test_next_position():
    assert next_position(Match("d", 1, 3)) == (2, 2, 1)
    assert next_position(Match("d", 1, 4)) == (2, 2, 2)
    assert next_position(Match("d", 2, 1)) == (3, 1, 1)


def test_odd_position_fills_first_slot():
    division, matches = _bracket(8)
    index = index_matches(matches)
    source = _decide(index[(1, 3)])

    result = AdvancementTracker().advance(source, division, matches)

    assert result.kind == AdvancementKind.NEXT_MATCH_UPDATED
    assert result.next_match is index[(2, 2)]
    assert result.slot == 1
    assert index[(2, 2)].competitor1 is source.winner
    assert index[(2, 2)].competitor2 is None


def test_even_position_fills_second_slot():
    division, matches = _bracket(8)
    index = index_matches(matches)
    source = _decide(index[(1, 4)], index[(1, 4)].competitor2)

    AdvancementTracker().advance(source, division, matches)

    assert index[(2, 2)].competitor2 is source.winner


def test_final_completes_division():
    division, matches = _bracket(2)
    final = _decide(matches[0])

    result = AdvancementTracker().advance(final, division, matches)

    assert result.kind == AdvancementKind.DIVISION_COMPLETED
    assert result.division_completed
    assert division.completed


def test_filled_slot_is_a_conflict():
    division, matches = _bracket(8)
    index = index_matches(matches)
    tracker = AdvancementTracker()
    source = _decide(index[(1, 1)])
    tracker.advance(source, division, matches)

    with pytest.raises(AdvancementConflictException):
        tracker.advance(source, division, matches)
    assert index[(2, 1)].competitor1 is source.winner


def test_winner_must_be_a_participant():
    division, matches = _bracket(4)
    source = matches[0]
    source.status = MatchStatus.COMPLETED
    source.winner = make_competitor("Someone Else")

    with pytest.raises(InvalidWinnerException):
        AdvancementTracker().advance(source, division, matches)


def test_undecided_match_does_not_advance():
    division, matches = _bracket(4)
    with pytest.raises(MatchStateException):
        AdvancementTracker().advance(matches[0], division, matches)

    matches[0].status = MatchStatus.COMPLETED
    with pytest.raises(MatchStateException):
        AdvancementTracker().advance(matches[0], division, matches)


def test_round_robin_has_no_advancement():
    division, matches = _bracket(3, BracketFormat.ROUND_ROBIN)
    result = AdvancementTracker().advance(_decide(matches[0]), division, matches)

    assert result.kind == AdvancementKind.NO_ADVANCEMENT
    assert result.next_match is None
    assert not division.completed


def test_single_feeder_placeholder_closes_as_walkover():
    # 6 athletes: rounds of 3, 2, 1; round 2 match 2 is fed only by round 1 match 3
    division, matches = _bracket(6)
    index = index_matches(matches)
    source = _decide(index[(1, 3)])

    results = AdvancementTracker().advance_all(source, division, matches)

    assert [r.kind for r in results] == [AdvancementKind.NEXT_MATCH_UPDATED] * 2
    bye = index[(2, 2)]
    assert bye.status == MatchStatus.WALKOVER
    assert bye.winner is source.winner
    assert bye.notes == NOTE_SINGLE_FEEDER_WALKOVER
    assert index[(3, 1)].competitor2 is source.winner


def test_advance_all_stops_at_two_feeder_match():
    division, matches = _bracket(8)
    index = index_matches(matches)

    results = AdvancementTracker().advance_all(_decide(index[(1, 1)]), division, matches)

    assert len(results) == 1
    assert index[(2, 1)].status == MatchStatus.PENDING


def test_pending_advancements_lists_unplaced_winners():
    division, matches = _bracket(8)
    index = index_matches(matches)
    tracker = AdvancementTracker()
    placed = _decide(index[(1, 1)])
    tracker.advance(placed, division, matches)
    stranded = _decide(index[(1, 2)])

    assert tracker.pending_advancements(division, matches) == [stranded]


def test_cascade_conflict_leaves_bracket_untouched():
    division, matches = _bracket(6)
    index = index_matches(matches)
    intruder = make_competitor("Intruder")
    index[(3, 1)].competitor2 = intruder
    source = _decide(index[(1, 3)])

    with pytest.raises(AdvancementConflictException):
        AdvancementTracker().advance_all(source, division, matches)

    bye = index[(2, 2)]
    assert bye.is_placeholder
    assert bye.status == MatchStatus.PENDING
    assert bye.winner is None
    assert index[(3, 1)].competitor2 is intruder


def test_cascade_refuses_closed_single_feeder_match():
    division, matches = _bracket(6)
    index = index_matches(matches)
    index[(2, 2)].status = MatchStatus.CANCELLED
    source = _decide(index[(1, 3)])

    with pytest.raises(MatchStateException):
        AdvancementTracker().advance_all(source, division, matches)
    assert index[(2, 2)].is_placeholder
