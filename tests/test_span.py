from prologuepy.errors import InvalidSpan
from prologuepy.text import Span


def test_span_rejects_start_after_end() -> None:
    try:
        Span(5, 2)
    except InvalidSpan as exc:
        assert exc.start == 5
        assert exc.end == 2
        assert isinstance(exc, ValueError)
    else:
        raise AssertionError("expected InvalidSpan")


def test_span_rejects_negative_offsets() -> None:
    try:
        Span(-1, 3)
    except InvalidSpan as exc:
        assert "negative" in str(exc)
    else:
        raise AssertionError("expected InvalidSpan")


def test_span_constructors_and_length() -> None:
    span = Span.at(4, 3)

    assert span == Span(4, 7)
    assert span.len() == 3
    assert not span.is_empty()
    assert Span.empty(2) == Span(2, 2)
    assert Span.empty(2).is_empty()
    assert Span(1, 2) < Span(1, 3) < Span(2, 2)
