from quiz_player.core.text_sanitizer import sanitize_text


class _Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no text for you")


def test_none_becomes_empty_string():
    assert sanitize_text(None) == ""


def test_strips_replacement_characters_and_whitespace():
    assert sanitize_text("  Ta\ufffdmil quiz \ufffd ") == "Tamil quiz"


def test_strips_lone_surrogates():
    assert sanitize_text("\ud800abc") == "abc"


def test_non_string_values_are_coerced():
    assert sanitize_text(42) == "42"


def test_never_raises_on_broken_objects():
    assert sanitize_text(_Unprintable()) == ""


def test_keeps_tamil_text_intact():
    assert sanitize_text(" வினா ") == "வினா"


def test_broken_object_is_logged(caplog):
    with caplog.at_level("WARNING", logger="quiz_player.core.text_sanitizer"):
        assert sanitize_text(_Unprintable()) == ""
    assert "Could not convert _Unprintable to text" in caplog.text
