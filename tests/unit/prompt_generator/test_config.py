import pytest

from prompt_generator.config import ENCODING_ALIASES, FALLBACK_CODECS, normalize_extensions


@pytest.mark.unit
@pytest.mark.parametrize(
    ("values", "expected"),
    [
        (None, {".py"}),
        ([], {".py"}),
        ([".py"], {".py"}),
        (["py"], {".py"}),
        ([".py", ".go"], {".py", ".go"}),
        ([".py, go", "ts"], {".py", ".go", ".ts"}),
        (["."], {"."}),
        ([".py,"], {".py"}),
        (".md", {".md"}),
    ],
)
def test_normalize_extensions(values: list[str] | str | None, expected: set[str]) -> None:
    assert normalize_extensions(values) == frozenset(expected)


@pytest.mark.unit
def test_fallback_order_is_japanese_codecs_then_utf16() -> None:
    assert [c.label for c in FALLBACK_CODECS] == [
        "shift-jis",
        "euc-jp",
        "iso-2022-jp",
        "utf-16le",
        "utf-16be",
    ]


@pytest.mark.unit
def test_aliases_share_codecs() -> None:
    assert ENCODING_ALIASES["sjis"] is ENCODING_ALIASES["shift-jis"]
    assert ENCODING_ALIASES["eucjp"] is ENCODING_ALIASES["euc-jp"]
    assert ENCODING_ALIASES["utf8"] is ENCODING_ALIASES["utf-8"]
