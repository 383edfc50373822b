import pytest

from quiz_player.core.models import Question, SessionStatus
from quiz_player.core.services.quiz_session import (
    EmptyQuizError,
    NoActiveSessionError,
    QuizSession,
    SessionCompletedError,
    option_label,
)


@pytest.fixture
def session(three_questions) -> QuizSession:
    started = QuizSession()
    started.start(three_questions, "Sample")
    return started


def test_new_session_is_loading():
    session = QuizSession()
    assert session.status is SessionStatus.LOADING
    with pytest.raises(NoActiveSessionError):
        session.current_question()
    with pytest.raises(NoActiveSessionError):
        session.submit_answer(0)
    with pytest.raises(NoActiveSessionError):
        session.advance()


def test_start_resets_position_and_score(session):
    assert session.status is SessionStatus.IN_PROGRESS
    assert session.position == 0
    assert session.score == 0
    assert session.title == "Sample"
    assert session.answered_count() == 0


def test_restart_discards_previous_answers(session, three_questions):
    session.submit_answer(0)
    session.advance()
    session.start(three_questions, "Again")
    assert session.position == 0
    assert session.score == 0
    assert all(not state.is_answered for state in session.answer_states())


def test_start_with_no_questions_keeps_prior_state(session):
    session.submit_answer(0)
    session.advance()

    with pytest.raises(EmptyQuizError):
        session.start([], "Empty")

    assert session.status is SessionStatus.IN_PROGRESS
    assert session.position == 1
    assert session.score == 1
    assert session.title == "Sample"


def test_start_empty_on_fresh_session_stays_loading():
    session = QuizSession()
    with pytest.raises(EmptyQuizError):
        session.start([], "Empty")
    assert session.status is SessionStatus.LOADING


def test_correct_answer_scores_exactly_one(session):
    state = session.submit_answer(0)
    assert state.chosen_index == 0
    assert state.is_correct
    assert session.score == 1


@pytest.mark.parametrize("choice", [1, 2])
def test_wrong_answer_leaves_score_unchanged(session, choice):
    state = session.submit_answer(choice)
    assert state.chosen_index == choice
    assert not state.is_correct
    assert session.score == 0


def test_second_submission_is_a_no_op(session):
    first = session.submit_answer(0)
    second = session.submit_answer(2)
    assert second == first
    assert session.current_question()[1].chosen_index == 0
    assert session.score == 1


def test_resubmitting_wrong_answer_cannot_earn_points(session):
    session.submit_answer(1)
    session.submit_answer(0)
    assert session.score == 0
    assert session.current_question()[1].chosen_index == 1


@pytest.mark.parametrize("choice", [-3, 3, 99])
def test_out_of_range_choice_is_recorded_as_wrong(session, choice):
    state = session.submit_answer(choice)
    assert state.chosen_index == choice
    assert not state.is_correct
    assert session.score == 0


def test_unresolved_correct_index_scores_every_choice_wrong(make_question):
    question = make_question(0)
    unresolved = Question(prompt="?", options=question.options, correct_index=-1, explanation="-")
    session = QuizSession()
    session.start([unresolved], "Unresolved")

    state = session.submit_answer(-1)

    assert not state.is_correct
    assert session.score == 0


def test_question_without_options_is_a_dead_end():
    session = QuizSession()
    session.start([Question(prompt="No choices", options=())], "Dead end")

    view = session.view()
    assert view.options == ()
    assert not view.selectable

    state = session.submit_answer(0)
    assert not state.is_answered
    assert session.score == 0
    assert session.advance() is None


def test_view_hides_answer_until_answered(session):
    view = session.view()
    assert view.correct_index is None
    assert view.explanation is None
    assert view.selectable

    session.submit_answer(2)
    view = session.view()
    assert view.correct_index == 0
    assert view.explanation == "Because of option 0"
    assert view.chosen_index == 2
    assert not view.selectable


def test_navigation_round_trip_keeps_answers(session):
    session.submit_answer(0)
    before = session.answer_states()

    session.advance()
    session.submit_answer(0)
    session.retreat()

    assert session.position == 0
    assert session.answer_states()[0] == before[0]
    assert session.score == 1


def test_revisiting_answered_question_shows_same_view(session):
    session.submit_answer(1)
    first_visit = session.view()
    session.advance()
    session.retreat()
    assert session.view() == first_visit


def test_retreat_at_first_question_is_a_no_op(session):
    view = session.retreat()
    assert view.position == 0
    assert session.position == 0


def test_advance_through_last_question_completes(session):
    assert session.advance().position == 1
    assert session.advance().position == 2
    assert session.advance() is None
    assert session.status is SessionStatus.COMPLETED
    assert session.position == 2


def test_completed_session_rejects_navigation_and_answers(session):
    session.end()
    with pytest.raises(SessionCompletedError):
        session.advance()
    with pytest.raises(SessionCompletedError):
        session.retreat()
    with pytest.raises(SessionCompletedError):
        session.submit_answer(0)
    assert session.view().position == 0


def test_end_completes_early_without_touching_answers(session):
    session.submit_answer(0)
    session.end()
    assert session.is_completed()
    assert session.answered_count() == 1
    assert session.score == 1


def test_option_labels():
    assert option_label(0) == "(அ)"
    assert option_label(4) == "(உ)"
    assert option_label(5) == "(6)"


def test_view_labels_every_option(make_question):
    session = QuizSession()
    session.start([make_question(0, option_count=6)], "Many")
    labels = [label for label, _ in session.view().options]
    assert labels == ["(அ)", "(ஆ)", "(இ)", "(ஈ)", "(உ)", "(6)"]
