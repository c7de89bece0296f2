# tests/services/test_polls.py
"""Service-level tests for poll aggregation."""

import pytest

from charcha_manch.core.errors import InvalidCategoryError, InvalidInputError, NotFoundError
from charcha_manch.schemas.constituency import PollSubmission
from charcha_manch.services.constituencies import apply_derived_scores, get_by_area_name, recompute_scores
from charcha_manch.services.polls import (
    parse_submission,
    submit_department_poll,
    submit_poll,
    submit_vidhayak_poll,
)
from charcha_manch.services.scoring import yes_no_score


def test_first_yes_vote_scores_one_hundred(db_session, constituency) -> None:
    scores = submit_vidhayak_poll(db_session, "Test Area", 0, "yes")

    assert (scores.yes_votes, scores.no_votes, scores.score) == (1, 0, 100)
    stored = get_by_area_name(db_session, "Test Area").survey_score[0]
    assert (stored.yes_votes, stored.no_votes, stored.score) == (1, 0, 100)


def test_vidhayak_score_tracks_every_vote(db_session, constituency) -> None:
    answers = ["yes", "no", "no", "yes", "yes", "no", "yes"]
    yes = no = 0
    for answer in answers:
        scores = submit_vidhayak_poll(db_session, "Test Area", 1, answer)
        yes += answer == "yes"
        no += answer == "no"
        assert scores.yes_votes == yes
        assert scores.no_votes == no
        assert scores.score == yes_no_score(yes, no)


def test_three_five_star_ratings_reach_one_hundred(db_session, constituency) -> None:
    for _ in range(3):
        scores = submit_department_poll(db_session, "Test Area", "health", 0, 5)

    assert scores.ratings == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 3}
    assert scores.question_score == 100
    assert scores.department_average_score == 100
    assert scores.manifesto_score == 100

    stored = get_by_area_name(db_session, "Test Area")
    assert stored.manifesto_score == 100
    assert stored.find_department("health").average_score == 100
    assert stored.find_department("roads").average_score == 0


def test_department_average_ignores_unrated_questions(db_session, constituency) -> None:
    submit_department_poll(db_session, "Test Area", "roads", 0, 3)
    scores = submit_department_poll(db_session, "Test Area", "roads", 0, 3)

    assert scores.question_score == 50
    assert scores.department_average_score == 50
    assert scores.manifesto_score == 50

    scores = submit_department_poll(db_session, "Test Area", "health", 0, 5)
    assert scores.manifesto_score == 75


def test_stored_scores_are_rederivable(db_session, constituency) -> None:
    submit_department_poll(db_session, "Test Area", "roads", 0, 4)
    submit_department_poll(db_session, "Test Area", "roads", 1, 2)
    submit_department_poll(db_session, "Test Area", "health", 0, 1)
    submit_vidhayak_poll(db_session, "Test Area", 0, "no")

    stored = get_by_area_name(db_session, "Test Area")
    assert apply_derived_scores(stored) is False
    db_session.rollback()


def test_recompute_repairs_drifted_scores(db_session, constituency) -> None:
    submit_department_poll(db_session, "Test Area", "health", 0, 5)
    stored = get_by_area_name(db_session, "Test Area")
    stored.manifesto_score = 7
    stored.find_department("health").average_score = 3
    db_session.commit()

    result = recompute_scores(db_session, constituency.id)

    assert result.changed is True
    assert result.manifesto_score == 100
    assert result.department_average_scores == {"health": 100, "roads": 0}
    again = recompute_scores(db_session, constituency.id)
    assert again.changed is False


def test_unknown_area_is_not_found(db_session, constituency) -> None:
    with pytest.raises(NotFoundError):
        submit_vidhayak_poll(db_session, "Nowhere", 0, "yes")


def test_unknown_department_is_not_found(db_session, constituency) -> None:
    with pytest.raises(NotFoundError):
        submit_department_poll(db_session, "Test Area", "education", 0, 5)


def test_out_of_range_department_question_is_invalid(db_session, constituency) -> None:
    with pytest.raises(InvalidInputError):
        submit_department_poll(db_session, "Test Area", "health", 5, 5)


def test_out_of_range_vidhayak_question_is_not_found(db_session, constituency) -> None:
    with pytest.raises(NotFoundError):
        submit_vidhayak_poll(db_session, "Test Area", 2, "yes")


def test_failed_submission_leaves_counters_untouched(db_session, constituency) -> None:
    with pytest.raises(InvalidInputError):
        submit_poll(
            db_session,
            "Test Area",
            PollSubmission(poll_category="dept", question_id=0, poll_response=9, dept_id="health"),
        )

    question = get_by_area_name(db_session, "Test Area").find_department("health").survey_score[0]
    assert sum(question.ratings.values()) == 0


@pytest.mark.parametrize(
    ("body", "error"),
    [
        ({"poll_category": "mla", "question_id": 0, "poll_response": "yes"}, InvalidCategoryError),
        ({"poll_category": "vidhayak", "question_id": 0, "poll_response": "maybe"}, InvalidInputError),
        ({"poll_category": "vidhayak", "question_id": "first", "poll_response": "yes"}, InvalidInputError),
        ({"poll_category": "vidhayak", "question_id": -1, "poll_response": "yes"}, InvalidInputError),
        ({"poll_category": "dept", "question_id": 0, "poll_response": 5}, InvalidInputError),
        ({"poll_category": "dept", "question_id": 0, "poll_response": 0, "dept_id": "x"}, InvalidInputError),
        ({"poll_category": "dept", "question_id": 0, "poll_response": "five", "dept_id": "x"}, InvalidInputError),
    ],
)
def test_parse_submission_rejects_bad_input(body, error) -> None:
    with pytest.raises(error):
        parse_submission(PollSubmission(**body))


def test_parse_submission_normalises_values() -> None:
    parsed = parse_submission(
        PollSubmission(poll_category="Department", question_id="1", poll_response="4", dept_id="roads")
    )
    assert parsed.category == "dept"
    assert parsed.question_index == 1
    assert parsed.response == 4

    parsed = parse_submission(PollSubmission(poll_category="vidhayak", question_id=0, poll_response="YES"))
    assert parsed.response == "yes"
