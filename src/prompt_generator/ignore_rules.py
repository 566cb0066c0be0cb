"""Gitignore-style exclusion rules for the directory walk.

Only the ignore file at the scanned root is read. Patterns keep their file
order, so a later ``!pattern`` can re-include what an earlier one excluded.
A directory that ends up excluded is pruned together with its whole subtree
by the walker, which means negations cannot resurrect anything below it; this
is also how git itself behaves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pathspec

from prompt_generator.exceptions import IgnoreFileError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path


def parse_ignore_lines(lines: Iterable[str]) -> list[str]:
    """Keep the meaningful lines of an ignore file, in order.

    Blank lines and ``#`` comments are dropped; every other line is one pattern.

    Args:
        lines (Iterable[str]): raw lines, with or without line terminators

    Returns:
        list[str]: the patterns in file order
    """
    patterns: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


class IgnoreMatcher:
    """Answer whether a root-relative path is excluded by the ignore patterns."""

    def __init__(self, patterns: Sequence[str]) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def __repr__(self) -> str:
        return f"IgnoreMatcher(patterns={list(self.patterns)!r})"

    def match(self, parts: Sequence[str], *, is_dir: bool) -> bool:
        """Check whether a path should be excluded.

        Args:
            parts (Sequence[str]): the root-relative path split into segments
            is_dir (bool): True when the path is a directory, so that
                directory-only patterns (``build/``) apply to it

        Returns:
            bool: True if the last matching pattern excludes the path
        """
        segments = [p for p in parts if p and p != "."]
        if not segments:
            return False
        rel = "/".join(segments)
        if is_dir:
            rel += "/"
        return self._spec.match_file(rel)


def load_ignore_rules(path: Path) -> IgnoreMatcher | None:
    """Build a matcher from an ignore file.

    Args:
        path (Path): the ignore file, usually ``<root>/.gitignore``

    Raises:
        IgnoreFileError: if the file exists but cannot be read as text

    Returns:
        IgnoreMatcher | None: the matcher, or None when the file does not exist
    """
    try:
        with path.open(encoding="utf-8") as f:
            patterns = parse_ignore_lines(f)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileError(file=path, reason=str(e)) from e
    return IgnoreMatcher(patterns)
