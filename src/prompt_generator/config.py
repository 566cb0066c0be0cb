from __future__ import annotations

from enum import StrEnum, auto
from typing import NamedTuple

DEFAULT_EXTENSION = ".py"
ALL_FILES = "."
IGNORE_FILE_NAME = ".gitignore"
HIDDEN_PREFIX = "."

ENV_PREFIX = "PROMPT_GENERATOR_"

PROMPT_PREAMBLE = (
    "Below are the contents of every file in the target repository.\n"
    "Use them as reference and modify the repository according to the instructions that follow.\n\n"
)
FILE_SEPARATOR = "----------"
INSTRUCTIONS_HEADER = "Instructions:"
STDIN_HINT = "Enter the change instructions (finish with Ctrl+D):"


class TraversalAction(StrEnum):
    """Outcome of inspecting one entry during a directory walk.

    CONTINUE keeps the entry: a file is read, a directory is entered.
    SKIP drops a single file. SKIP_SUBTREE prunes a directory and everything
    beneath it.
    """

    CONTINUE = auto()
    SKIP = auto()
    SKIP_SUBTREE = auto()


class Codec(NamedTuple):
    """A decoder choice: a Python codec name plus BOM handling for UTF-16."""

    label: str
    python_name: str
    honors_bom: bool = False


SHIFT_JIS = Codec("shift-jis", "shift_jis")
EUC_JP = Codec("euc-jp", "euc_jp")
ISO_2022_JP = Codec("iso-2022-jp", "iso2022_jp")
UTF16_LE = Codec("utf-16le", "utf-16-le", honors_bom=True)
UTF16_BE = Codec("utf-16be", "utf-16-be", honors_bom=True)
UTF8 = Codec("utf-8", "utf-8")

ENCODING_ALIASES: dict[str, Codec] = {
    "shift-jis": SHIFT_JIS,
    "shiftjis": SHIFT_JIS,
    "sjis": SHIFT_JIS,
    "euc-jp": EUC_JP,
    "eucjp": EUC_JP,
    "iso-2022-jp": ISO_2022_JP,
    "iso2022jp": ISO_2022_JP,
    "utf-16le": UTF16_LE,
    "utf-16be": UTF16_BE,
    "utf-8": UTF8,
    "utf8": UTF8,
}

# Order matters: the first codec that decodes cleanly wins.
FALLBACK_CODECS: tuple[Codec, ...] = (
    SHIFT_JIS,
    EUC_JP,
    ISO_2022_JP,
    UTF16_LE,
    UTF16_BE,
)


def normalize_extensions(values: list[str] | tuple[str, ...] | str | None) -> frozenset[str]:
    """Turn repeated and/or comma separated extension arguments into an Extension Set.

    Each piece is stripped and gets a leading dot if it lacks one, so ``py`` and
    ``.py`` are equivalent. A bare ``.`` is kept as the all-files sentinel.
    Empty pieces are ignored; if nothing remains the default extension is used.

    Args:
        values: raw ``-e`` values, e.g. ``[".py", "go,ts"]``, or a single string.

    Returns:
        frozenset[str]: the normalized extensions.
    """
    if values is None:
        values = []
    elif isinstance(values, str):
        values = [values]

    out: set[str] = set()
    for value in values:
        for piece in value.split(","):
            ext = piece.strip()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            out.add(ext)
    return frozenset(out or {DEFAULT_EXTENSION})
