from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from prompt_generator.config import ALL_FILES, HIDDEN_PREFIX, IGNORE_FILE_NAME, TraversalAction
from prompt_generator.encoding import detect_and_convert_encoding
from prompt_generator.exceptions import InvalidRootError, PromptGeneratorError
from prompt_generator.logging import logger

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from prompt_generator.ignore_rules import IgnoreMatcher


def is_hidden(name: str) -> bool:
    """Hidden entries are the ones whose name starts with a dot."""
    return name.startswith(HIDDEN_PREFIX)


def has_wanted_extension(name: str, extensions: Collection[str]) -> bool:
    """Check a file name against the Extension Set.

    Args:
        name (str): the file name
        extensions (Collection[str]): normalized extensions, possibly containing
            the ``.`` sentinel that accepts every file

    Returns:
        bool: True if the file should be kept
    """
    if ALL_FILES in extensions:
        return True
    return os.path.splitext(name)[1] in extensions


def classify_entry(
    parts: Sequence[str],
    *,
    is_dir: bool,
    extensions: Collection[str],
    matcher: IgnoreMatcher | None = None,
) -> TraversalAction:
    """Decide what the walk should do with one entry.

    The checks run in a fixed order: hidden names first (the root ignore file
    excepted), then the ignore rules, then, for files only, the extension filter.

    Args:
        parts (Sequence[str]): the root-relative path split into segments
        is_dir (bool): whether the entry is a directory
        extensions (Collection[str]): the Extension Set
        matcher (IgnoreMatcher | None): the ignore rules, if any

    Returns:
        TraversalAction: SKIP_SUBTREE for pruned directories, SKIP for dropped
            files, CONTINUE otherwise
    """
    excluded = TraversalAction.SKIP_SUBTREE if is_dir else TraversalAction.SKIP
    name = parts[-1]
    is_root_ignore_file = not is_dir and len(parts) == 1 and name == IGNORE_FILE_NAME

    if is_hidden(name) and not is_root_ignore_file:
        return excluded
    if matcher is not None and matcher.match(parts, is_dir=is_dir):
        return excluded
    if is_dir:
        return TraversalAction.CONTINUE
    if not has_wanted_extension(name, extensions):
        return TraversalAction.SKIP
    return TraversalAction.CONTINUE


def check_root(root: Path) -> None:
    """Make sure ``root`` is a directory we can list.

    Raises:
        InvalidRootError: if the directory is missing, not a directory or unreadable
    """
    if not root.exists():
        raise InvalidRootError(folder=root, reason="no such directory")
    if not root.is_dir():
        raise InvalidRootError(folder=root, reason="not a directory")
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise InvalidRootError(folder=root, reason=e.strerror or str(e)) from e


def read_file_content(path: Path, encoding_name: str | None = None) -> str | None:
    """Read one selected file and decode it.

    Failures are logged and reported as None so the walk can go on.

    Args:
        path (Path): the file to read
        encoding_name (str | None): an explicit encoding, or None to detect it

    Returns:
        str | None: the decoded text, or None if the file had to be dropped
    """
    if not path.is_file():
        logger.warning("Skipping %s: not a regular file", path)
        return None
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None
    try:
        return detect_and_convert_encoding(data, encoding_name, source=str(path))
    except PromptGeneratorError as e:
        logger.warning("Encoding conversion failed for %s: %s", path, e)
        return None


def _log_walk_error(error: OSError) -> None:
    logger.warning("Error accessing path %s: %s", error.filename, error.strerror or error)


def collect_files_content(
    root: Path,
    extensions: Collection[str],
    matcher: IgnoreMatcher | None = None,
    encoding_name: str | None = None,
) -> dict[str, str]:
    """Walk ``root`` and collect the decoded contents of every selected file.

    Directories and files are visited in sorted name order, so two runs over an
    unchanged tree produce the same mapping in the same order. Hidden and
    ignored directories are pruned, never descended into.

    Args:
        root (Path): the directory to scan (made absolute)
        extensions (Collection[str]): the Extension Set
        matcher (IgnoreMatcher | None): ignore rules built from the root ignore file
        encoding_name (str | None): an explicit encoding, or None to detect per file

    Raises:
        InvalidRootError: if ``root`` cannot be scanned at all

    Returns:
        dict[str, str]: absolute file path to decoded content
    """
    root = Path(os.path.abspath(root))
    check_root(root)

    files_content: dict[str, str] = {}
    for current, dirs, files in os.walk(root, onerror=_log_walk_error):
        base = Path(current)
        prefix = base.relative_to(root).parts

        kept_dirs: list[str] = []
        for d in sorted(dirs):
            action = classify_entry((*prefix, d), is_dir=True, extensions=extensions, matcher=matcher)
            if action is TraversalAction.CONTINUE:
                kept_dirs.append(d)
        dirs[:] = kept_dirs

        for f in sorted(files):
            action = classify_entry((*prefix, f), is_dir=False, extensions=extensions, matcher=matcher)
            if action is not TraversalAction.CONTINUE:
                continue
            path = base / f
            content = read_file_content(path, encoding_name)
            if content is not None:
                files_content[str(path)] = content

    return files_content
