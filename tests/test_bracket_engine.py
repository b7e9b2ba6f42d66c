import threading
from datetime import date

import pytest
from conftest import EVENT_DAY, make_competitor, make_division, make_roster

from bjjbracket.controllers.advancement_tracker import index_matches
from bjjbracket.exceptions import (
    DivisionLockedException,
    DuplicateCompetitorException,
    DuplicateResultException,
    EligibilityViolationException,
    InvalidResultException,
    InvalidWinnerException,
    MatchesAlreadyGeneratedException,
    MatchNotFoundException,
    MatchStateException,
    NotEnoughCompetitorsException,
)
from bjjbracket.models import (
    AdvancementKind,
    BracketFormat,
    DecisionMethod,
    EngineConfig,
    MatchResultReport,
    MatchStatus,
)
from bjjbracket.tournament import BracketEngine


def _points_win(match, first_wins=True):
    if first_wins:
        return MatchResultReport(match.id, competitor1_points=6, competitor2_points=2)
    return MatchResultReport(match.id, competitor1_points=0, competitor2_points=3)


# ========== Enrollment ==========


def test_enroll_eligible_competitor(engine):
    division = make_division()
    athlete = make_competitor("Joao Silva")

    engine.enroll(division, athlete, EVENT_DAY)

    assert division.competitors == [athlete]


def test_enroll_rejects_ineligible_competitor(engine):
    division = make_division()
    with pytest.raises(EligibilityViolationException):
        engine.enroll(division, make_competitor("Heavy Guy", weight=95.0), EVENT_DAY)
    assert division.competitors == []


def test_enroll_rejects_duplicate(engine):
    division = make_division()
    athlete = make_competitor("Joao Silva")
    engine.enroll(division, athlete, EVENT_DAY)

    with pytest.raises(DuplicateCompetitorException):
        engine.enroll(division, athlete, EVENT_DAY)


def test_roster_is_locked_after_generation(engine, division):
    engine.generate(division, EVENT_DAY)

    with pytest.raises(DivisionLockedException):
        engine.enroll(division, make_competitor("Late Comer"), EVENT_DAY)
    with pytest.raises(DivisionLockedException):
        division.remove_competitor(division.competitors[0].id)
    with pytest.raises(DivisionLockedException):
        division.set_bracket_format(BracketFormat.ROUND_ROBIN)


# ========== Generation ==========


def test_generate_single_elimination(engine, division):
    matches = engine.generate(division, EVENT_DAY)

    assert len(matches) == 7
    assert division.matches_generated
    assert all(m.division_id == division.id for m in matches)


def test_generate_twice_is_rejected(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    snapshot = [m.to_dict() for m in matches]

    with pytest.raises(MatchesAlreadyGeneratedException):
        engine.generate(division, EVENT_DAY)
    with pytest.raises(MatchesAlreadyGeneratedException):
        engine.generate_manual(division, [])

    assert [m.to_dict() for m in matches] == snapshot


def test_concurrent_generation_has_one_winner(division):
    barrier = threading.Barrier(2)
    outcomes = []

    def run():
        engine = BracketEngine(EngineConfig(seed=1))
        barrier.wait()
        try:
            engine.generate(division, EVENT_DAY)
            outcomes.append("generated")
        except MatchesAlreadyGeneratedException:
            outcomes.append("rejected")

    threads = [threading.Thread(target=run) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["generated", "rejected"]


def test_generate_needs_two_competitors(engine):
    division = make_division(competitors=make_roster(1))
    with pytest.raises(NotEnoughCompetitorsException):
        engine.generate(division, EVENT_DAY)
    assert not division.matches_generated


def test_generate_rechecks_eligibility(engine, division):
    # Everyone has aged out of the adult category by then
    with pytest.raises(EligibilityViolationException):
        engine.generate(division, date(2040, 1, 1))
    assert not division.matches_generated


def test_generate_advances_walkovers(engine):
    division = make_division(competitors=make_roster(5))
    matches = engine.generate(division, EVENT_DAY)
    index = index_matches(matches)

    bye = index[(1, 3)]
    assert bye.status == MatchStatus.WALKOVER
    assert index[(2, 2)].status == MatchStatus.WALKOVER
    assert index[(3, 1)].competitor2 is bye.winner


def test_generate_without_walkover_advancement():
    engine = BracketEngine(EngineConfig(seed=1, auto_advance_walkovers=False))
    division = make_division(competitors=make_roster(5))
    matches = engine.generate(division, EVENT_DAY)

    assert index_matches(matches)[(2, 2)].is_placeholder
    assert engine.pending_advancements(division, matches) == [
        index_matches(matches)[(1, 3)]
    ]


def test_generate_manual(engine, division):
    roster = division.competitors
    matches = engine.generate_manual(
        division, [(roster[0].id, roster[1].id), (roster[2].id, roster[3].id)]
    )

    assert len(matches) == 2
    assert division.matches_generated


# ========== Match lifecycle ==========


def test_start_match(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    engine.start_match(matches[0])
    assert matches[0].status == MatchStatus.IN_PROGRESS


def test_placeholder_cannot_start(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    with pytest.raises(MatchStateException):
        engine.start_match(matches[-1])


def test_cancel_match(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    engine.cancel_match(division, matches, matches[0].id, "Injury during warm-up")

    assert matches[0].status == MatchStatus.CANCELLED
    assert matches[0].notes == "Injury during warm-up"
    with pytest.raises(MatchStateException):
        engine.start_match(matches[0])


def test_assign_mat(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    engine.assign_mat(matches[0], 3)
    assert matches[0].mat_number == 3
    with pytest.raises(ValueError):
        engine.assign_mat(matches[0], 0)


# ========== Results ==========


def test_report_result_advances_winner(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    index = index_matches(matches)
    first = index[(1, 1)]

    report = engine.report_result(division, matches, _points_win(first))

    assert first.status == MatchStatus.COMPLETED
    assert report.outcome.method == DecisionMethod.POINTS
    assert report.outcome.winner is first.competitor1
    assert report.advancements[0].kind == AdvancementKind.NEXT_MATCH_UPDATED
    assert index[(2, 1)].competitor1 is first.competitor1


def test_full_bracket_completes_division(engine):
    division = make_division(competitors=make_roster(4))
    matches = engine.generate(division, EVENT_DAY)
    index = index_matches(matches)

    engine.report_result(division, matches, _points_win(index[(1, 1)]))
    engine.report_result(division, matches, _points_win(index[(1, 2)], False))
    final = index[(2, 1)]
    assert final.has_both_competitors
    report = engine.report_result(division, matches, _points_win(final))

    assert report.division_completed
    assert division.completed
    assert final.winner is index[(1, 1)].winner


def test_submission_report(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    match = matches[0]
    result = MatchResultReport(
        match.id,
        competitor1_points=4,
        finished_by_submission=True,
        submission_technique="Armbar",
        winner_id=match.competitor2.id,
    )

    report = engine.report_result(division, matches, result)

    assert report.outcome.method == DecisionMethod.SUBMISSION
    assert match.winner is match.competitor2
    assert match.submission_technique == "Armbar"


def test_submission_requires_winner(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    with pytest.raises(InvalidResultException):
        engine.report_result(
            division,
            matches,
            MatchResultReport(matches[0].id, finished_by_submission=True),
        )
    assert matches[0].status == MatchStatus.PENDING


def test_negative_counter_is_rejected(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    with pytest.raises(InvalidResultException):
        engine.report_result(
            division, matches, MatchResultReport(matches[0].id, competitor1_points=-2)
        )
    assert matches[0].competitor1_points == 0


def test_winner_must_be_participant(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    outsider = matches[1].competitor1
    with pytest.raises(InvalidWinnerException):
        engine.report_result(
            division, matches, MatchResultReport(matches[0].id, winner_id=outsider.id)
        )


def test_result_reported_twice(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    engine.report_result(division, matches, _points_win(matches[0]))
    with pytest.raises(DuplicateResultException):
        engine.report_result(division, matches, _points_win(matches[0]))


def test_result_for_placeholder(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    with pytest.raises(MatchStateException):
        engine.report_result(division, matches, MatchResultReport(matches[-1].id))


def test_match_from_other_division(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    other = make_division(competitors=make_roster(2))
    with pytest.raises(MatchNotFoundException):
        engine.report_result(other, matches, _points_win(matches[0]))
    with pytest.raises(MatchNotFoundException):
        engine.report_result(division, matches, MatchResultReport("Match-missing"))


def test_tie_waits_for_referee_decision(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    index = index_matches(matches)
    match = index[(1, 2)]

    report = engine.report_result(
        division, matches, MatchResultReport(match.id, 2, 2, 1, 1)
    )

    assert report.outcome.awaiting_decision
    assert report.advancements == []
    assert match.status == MatchStatus.COMPLETED
    assert match.winner is None

    decision = engine.assign_referee_decision(
        division, matches, match.id, match.competitor2.id
    )

    assert decision.outcome.method == DecisionMethod.REFEREE_DECISION
    assert index[(2, 1)].competitor2 is match.competitor2
    with pytest.raises(MatchStateException):
        engine.assign_referee_decision(division, matches, match.id, match.competitor1.id)


def test_record_walkover(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    match = matches[0]

    report = engine.record_walkover(division, matches, match.id, match.competitor2.id)

    assert match.status == MatchStatus.WALKOVER
    assert report.outcome.method == DecisionMethod.WALKOVER
    assert report.advancements[0].next_match.competitor1 is match.competitor2


def test_manual_winner_overrides_score(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    match = matches[0]
    report = engine.report_result(
        division,
        matches,
        MatchResultReport(match.id, competitor1_points=8, winner_id=match.competitor2.id),
    )
    assert report.outcome.method == DecisionMethod.MANUAL
    assert match.winner is match.competitor2


def test_round_robin_completion(engine, round_robin_division):
    division = round_robin_division
    matches = engine.generate(division, EVENT_DAY)
    assert len(matches) == 6

    for match in matches[:-1]:
        report = engine.report_result(division, matches, _points_win(match))
        assert report.advancements[0].kind == AdvancementKind.NO_ADVANCEMENT
        assert not division.completed

    report = engine.report_result(division, matches, _points_win(matches[-1]))
    assert division.completed
    assert report.division_completed
    assert report.advancements[-1].kind == AdvancementKind.DIVISION_COMPLETED


def test_cancelling_last_round_robin_match_completes_division(engine):
    division = make_division(BracketFormat.ROUND_ROBIN, make_roster(3))
    matches = engine.generate(division, EVENT_DAY)

    for match in matches[:-1]:
        engine.report_result(division, matches, _points_win(match))
    assert not division.completed

    engine.cancel_match(division, matches, matches[-1].id, "Injury")

    assert matches[-1].status == MatchStatus.CANCELLED
    assert division.completed


def test_manual_bracket_completion_is_reported(engine, division):
    roster = division.competitors
    matches = engine.generate_manual(
        division, [(roster[0].id, roster[1].id), (roster[2].id, roster[3].id)]
    )

    first = engine.report_result(division, matches, _points_win(matches[0]))
    assert not first.division_completed

    last = engine.report_result(division, matches, _points_win(matches[1]))
    assert last.division_completed
    assert division.completed


def test_retry_advancement(engine, division):
    matches = engine.generate(division, EVENT_DAY)
    index = index_matches(matches)
    stranded = index[(1, 4)]
    stranded.status = MatchStatus.COMPLETED
    stranded.winner = stranded.competitor1

    assert engine.pending_advancements(division, matches) == [stranded]
    engine.retry_advancement(division, matches, stranded.id)

    assert index[(2, 2)].competitor2 is stranded.competitor1
    assert engine.pending_advancements(division, matches) == []
