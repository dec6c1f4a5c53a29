import pytest

from hdhrctl.core.tokenizer import tokenize


def test_tokenize_strips_and_drops_empty_pieces() -> None:
    assert tokenize(" ", "  ss=100   snq=95 seq=100  ") == ["ss=100", "snq=95", "seq=100"]


def test_tokenize_empty_input_yields_nothing() -> None:
    assert tokenize("\n", "") == []
    assert tokenize("\n", "\n\n   \n") == []


def test_tokenize_trims_carriage_returns_from_lines() -> None:
    assert tokenize("\n", "first\r\n\r\nsecond\r\n") == ["first", "second"]


@pytest.mark.parametrize(
    ("separator", "text"),
    [
        (" ", "a b  c"),
        ("\n", "line one\n\nline two"),
        (":", "channelmap:us-bcast us-cable"),
        ("=", "ss=100"),
    ],
)
def test_tokenize_ignores_leading_and_trailing_separators(separator: str, text: str) -> None:
    padded = separator * 3 + text + separator * 2
    assert tokenize(separator, padded) == tokenize(separator, text)
    assert "" not in tokenize(separator, padded)
