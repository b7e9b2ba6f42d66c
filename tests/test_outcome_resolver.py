import pytest
from conftest import make_competitor

from bjjbracket.controllers import OutcomeResolver
from bjjbracket.exceptions import MatchStateException
from bjjbracket.models import DecisionMethod, Match, MatchStatus


@pytest.fixture
def athletes():
    return make_competitor("Athlete One"), make_competitor("Athlete Two")


def _completed(athletes, **counters):
    first, second = athletes
    return Match(
        division_id="d",
        round_number=1,
        position=1,
        competitor1=first,
        competitor2=second,
        status=MatchStatus.COMPLETED,
        **counters,
    )


def test_more_points_wins(athletes):
    match = _completed(athletes, competitor1_points=6, competitor2_points=2)
    outcome = OutcomeResolver().resolve(match)

    assert outcome.winner is athletes[0]
    assert outcome.method == DecisionMethod.POINTS
    assert match.winner is athletes[0]


def test_penalty_transfers_two_points(athletes):
    match = _completed(
        athletes, competitor1_points=5, competitor2_points=5, competitor1_penalties=1
    )
    outcome = OutcomeResolver().resolve(match)

    assert match.competitor2_total_score == 7
    assert outcome.winner is athletes[1]
    assert outcome.method == DecisionMethod.POINTS


def test_four_penalties_disqualify_regardless_of_score(athletes):
    match = _completed(
        athletes, competitor1_points=20, competitor2_points=0, competitor1_penalties=4
    )
    outcome = OutcomeResolver().resolve(match)

    assert outcome.winner is athletes[1]
    assert outcome.method == DecisionMethod.DISQUALIFICATION


def test_disqualification_overrides_submission(athletes):
    match = _completed(
        athletes, competitor2_penalties=4, finished_by_submission=True, winner=athletes[1]
    )
    outcome = OutcomeResolver().resolve(match)

    assert outcome.winner is athletes[0]
    assert match.winner is athletes[0]


def test_submission_winner_stands(athletes):
    match = _completed(
        athletes,
        competitor1_points=10,
        finished_by_submission=True,
        submission_technique="Triangle",
        winner=athletes[1],
    )
    outcome = OutcomeResolver().resolve(match)

    assert outcome.winner is athletes[1]
    assert outcome.method == DecisionMethod.SUBMISSION


def test_advantages_break_a_points_tie(athletes):
    match = _completed(
        athletes,
        competitor1_points=2,
        competitor2_points=2,
        competitor1_advantages=1,
        competitor2_advantages=3,
    )
    outcome = OutcomeResolver().resolve(match)

    assert outcome.winner is athletes[1]
    assert outcome.method == DecisionMethod.ADVANTAGES


def test_full_tie_is_unresolved(athletes):
    match = _completed(
        athletes,
        competitor1_points=4,
        competitor2_points=4,
        competitor1_advantages=1,
        competitor2_advantages=1,
    )
    outcome = OutcomeResolver().resolve(match)

    assert not outcome.is_resolved
    assert outcome.awaiting_decision
    assert match.winner is None


def test_penalties_on_both_sides_cancel_out(athletes):
    match = _completed(athletes, competitor1_penalties=2, competitor2_penalties=2)
    assert not OutcomeResolver().resolve(match).is_resolved


def test_pending_match_cannot_be_resolved(athletes):
    match = _completed(athletes)
    match.status = MatchStatus.PENDING
    with pytest.raises(MatchStateException):
        OutcomeResolver().resolve(match)


def test_match_with_empty_slot_cannot_be_resolved(athletes):
    match = Match(
        division_id="d",
        round_number=2,
        position=1,
        competitor1=athletes[0],
        status=MatchStatus.COMPLETED,
    )
    with pytest.raises(MatchStateException):
        OutcomeResolver().resolve(match)
