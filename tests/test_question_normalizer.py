import pytest

from quiz_player.core.question_normalizer import normalize_question, normalize_questions

MISSING_PROMPT = "MISSING PROMPT"
MISSING_EXPLANATION = "NO EXPLANATION"


def _normalize(raw):
    return normalize_question(
        raw,
        missing_prompt=MISSING_PROMPT,
        missing_explanation=MISSING_EXPLANATION,
    )


def test_prompt_prefers_question_over_q():
    question = _normalize({"question": " Main ", "q": "Alias", "options": ["a"]})
    assert question.prompt == "Main"


def test_prompt_falls_back_to_q_alias():
    assert _normalize({"q": "Short form", "options": ["a"]}).prompt == "Short form"


def test_missing_prompt_uses_placeholder():
    assert _normalize({"options": ["a"]}).prompt == MISSING_PROMPT


@pytest.mark.parametrize("key", ["answerOptions", "options", "choices"])
def test_option_list_aliases(key):
    question = _normalize({"question": "?", key: ["one", "two"]})
    assert [option.text for option in question.options] == ["one", "two"]


def test_object_options_use_text_or_label():
    question = _normalize({"question": "?", "answerOptions": [{"text": " A "}, {"label": "B"}, {}]})
    assert [option.text for option in question.options] == ["A", "B", ""]


def test_correct_index_from_is_correct_flag():
    question = _normalize(
        {"question": "?", "answerOptions": [{"text": "a"}, {"text": "b", "isCorrect": True}]}
    )
    assert question.correct_index == 1


def test_correct_index_from_correct_flag_alias():
    question = _normalize({"question": "?", "options": [{"text": "a", "correct": 1}, {"text": "b"}]})
    assert question.correct_index == 0


def test_first_flagged_option_wins():
    question = _normalize(
        {"question": "?", "options": [{"text": "a"}, {"text": "b", "correct": True}, {"text": "c", "isCorrect": True}]}
    )
    assert question.correct_index == 1


def test_numeric_answer_takes_precedence_over_flags():
    question = _normalize(
        {"question": "?", "answer": 0, "answerOptions": [{"text": "a"}, {"text": "b", "isCorrect": True}]}
    )
    assert question.correct_index == 0


def test_integral_float_answer_is_accepted():
    assert _normalize({"question": "?", "options": ["a", "b", "c"], "answer": 2.0}).correct_index == 2


def test_boolean_answer_is_not_numeric():
    question = _normalize(
        {"question": "?", "answer": True, "options": [{"text": "a", "isCorrect": True}, {"text": "b"}]}
    )
    assert question.correct_index == 0


@pytest.mark.parametrize("answer", [5, -1, 1.5, float("nan")])
def test_unusable_numeric_answer_is_unresolved(answer):
    question = _normalize(
        {"question": "?", "answer": answer, "options": [{"text": "a", "isCorrect": True}, {"text": "b"}]}
    )
    assert question.correct_index == -1
    assert not question.has_correct_answer


def test_no_determinable_answer_is_unresolved():
    question = _normalize({"question": "?", "options": ["a", "b"]})
    assert question.correct_index == -1
    assert not question.is_correct_choice(0)
    assert not question.is_correct_choice(-1)


def test_zero_options_normalizes_to_dead_end():
    question = _normalize({"question": "Nothing to pick"})
    assert question.options == ()
    assert not question.has_options
    assert question.correct_index == -1


def test_explicit_explanation_wins():
    question = _normalize(
        {
            "question": "?",
            "explanation": "Explicit",
            "answerOptions": [{"text": "a", "isCorrect": True, "rationale": "Rationale"}],
        }
    )
    assert question.explanation == "Explicit"


def test_explanation_falls_back_to_correct_option_rationale():
    question = _normalize(
        {
            "question": "?",
            "answerOptions": [
                {"text": "a", "rationale": "Wrong one"},
                {"text": "b", "isCorrect": True, "rationale": "Right one"},
            ],
        }
    )
    assert question.explanation == "Right one"


def test_rationale_follows_numeric_answer():
    question = _normalize(
        {
            "question": "?",
            "answer": 0,
            "answerOptions": [{"text": "a", "rationale": "From answer"}, {"text": "b", "isCorrect": True}],
        }
    )
    assert question.explanation == "From answer"


def test_explanation_placeholder_when_nothing_available():
    assert _normalize({"question": "?", "options": ["a"]}).explanation == MISSING_EXPLANATION


def test_text_fields_are_sanitized():
    question = _normalize(
        {
            "question": " Wh\ufffdat? ",
            "explanation": " because\ufffd ",
            "options": [{"text": "\ufffdyes ", "isCorrect": True}],
        }
    )
    assert question.prompt == "What?"
    assert question.explanation == "because"
    assert question.options[0].text == "yes"


def test_non_mapping_record_becomes_empty_question():
    question = _normalize(["not", "a", "record"])
    assert question.prompt == MISSING_PROMPT
    assert question.options == ()


def test_default_placeholders_are_localized():
    question = normalize_question({})
    assert question.prompt == "வினா கிடைக்கவில்லை."
    assert question.explanation == "விளக்கம் வழங்கப்படவில்லை."


def test_normalize_questions_preserves_order():
    questions = normalize_questions([{"q": "one"}, {"q": "two"}])
    assert [question.prompt for question in questions] == ["one", "two"]


def test_empty_option_list_alias_still_wins():
    question = _normalize({"question": "?", "answerOptions": [], "options": ["a", "b"]})
    assert question.options == ()


def test_non_list_option_alias_is_skipped():
    question = _normalize({"question": "?", "answerOptions": "a, b", "choices": ["x"]})
    assert [option.text for option in question.options] == ["x"]
