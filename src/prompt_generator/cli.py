"""
prompt_generator: turn a source tree plus instructions into one LLM prompt.

Overview
--------
The tool walks a directory, keeps the files whose extension was asked for,
honors the root `.gitignore`, and normalizes every file to text (auto-detecting
Shift-JIS, EUC-JP, ISO-2022-JP and BOM-marked UTF-16 when a file is not UTF-8).
It then reads free-text instructions from standard input until end-of-file and
prints a single prompt made of every file followed by those instructions.

Hidden files and directories are skipped, except for the root `.gitignore`.
Warnings (unreadable files, undetectable encodings) go to stderr as JSON log
lines; fatal errors print `error: ...` and exit with status 1.

Usage
-----
Run `python -m prompt_generator.cli -h` for full options. Common examples:
    - Python files of the current directory:
        echo "Add type hints" | prompt-generator

    - Go and TypeScript files of another project:
        prompt-generator -p ../service -e .go -e ts < instructions.txt

    - Every file, decoded as Shift-JIS, also copied to the clipboard:
        prompt-generator -e . -encoding sjis --copy
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import pyperclip

from prompt_generator import __version__
from prompt_generator.config import DEFAULT_EXTENSION, IGNORE_FILE_NAME, STDIN_HINT
from prompt_generator.encoding import resolve_codec
from prompt_generator.exceptions import InstructionsReadError, NoFilesFoundError, PromptGeneratorError
from prompt_generator.file_manipulation import check_root, collect_files_content
from prompt_generator.ignore_rules import load_ignore_rules
from prompt_generator.logging import logger, setup_logging
from prompt_generator.output_construction import create_prompt
from prompt_generator.settings import Settings, env_defaults

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser, with defaults taken from the environment."""
    defaults = env_defaults()
    p = argparse.ArgumentParser(
        prog="prompt-generator",
        description="Concatenate a project's files and your instructions into one prompt.",
    )
    p.add_argument(
        "-p",
        dest="path",
        type=str,
        default="./",
        help="Input directory (absolute or relative).",
    )
    p.add_argument(
        "-e",
        dest="extensions",
        action="append",
        default=None,
        help=(
            f"Target extension, repeatable or comma separated (e.g. -e .py -e .go or -e .py,.go). "
            f"'.' selects every file. Default: {DEFAULT_EXTENSION}"
        ),
    )
    p.add_argument(
        "-encoding",
        dest="encoding",
        type=str,
        default=defaults.get("encoding"),
        help="Input file encoding (e.g. shift-jis, euc-jp, iso-2022-jp). Auto-detected when omitted.",
    )
    p.add_argument(
        "--copy",
        dest="copy_to_clipboard",
        action="store_true",
        help="Also copy the prompt to the clipboard.",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=defaults.get("log_file", ""),
        help="Log file path.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(env_extensions=defaults.get("extensions"))
    return p


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    values = vars(args)
    env_extensions = values.pop("env_extensions")
    if values["extensions"] is None:
        values["extensions"] = env_extensions
    return Settings(**values)


def read_instructions(stream: TextIO) -> str:
    """Read the instructions line by line until end-of-input.

    Every line is kept with a single trailing newline, whatever its original
    line terminator was.

    Raises:
        InstructionsReadError: if the stream cannot be read
    """
    if stream.isatty():
        print(STDIN_HINT, file=sys.stderr)
    lines: list[str] = []
    try:
        lines.extend(line.rstrip("\r\n") + "\n" for line in stream)
    except (OSError, UnicodeDecodeError) as e:
        raise InstructionsReadError(reason=str(e)) from e
    return "".join(lines)


def gather_files(settings: Settings) -> dict[str, str]:
    """Run the collection pipeline for ``settings``.

    Raises:
        UnsupportedEncodingError: if the requested encoding is unknown
        InvalidRootError: if the directory cannot be scanned
        IgnoreFileError: if the root ignore file exists but cannot be read
        NoFilesFoundError: if no file survived the filters

    Returns:
        dict[str, str]: absolute file path to decoded content
    """
    if settings.encoding:
        resolve_codec(settings.encoding)

    root = Path(os.path.abspath(settings.path))
    # Checked before loading the ignore file so a bad root is reported as such.
    check_root(root)
    matcher = load_ignore_rules(root / IGNORE_FILE_NAME)
    logger.info(
        "Collecting files from %s (extensions=%s, ignore_rules=%s)",
        root,
        "all" if settings.all_files else ",".join(sorted(settings.extensions)),
        "none" if matcher is None else len(matcher.patterns),
    )

    files_content = collect_files_content(root, settings.extensions, matcher, settings.encoding)
    if not files_content:
        raise NoFilesFoundError(folder=root)
    return files_content


def copy_to_clipboard(text: str) -> bool:
    """Put ``text`` on the system clipboard; failures are only logged."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning("Failed to copy the prompt to the clipboard: %s", e)
        return False
    logger.info("Copied the prompt to the clipboard")
    return True


def exit_with_error(error: PromptGeneratorError) -> int:
    print(f"error: {error}", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        files_content = gather_files(settings)
        instructions = read_instructions(sys.stdin if stdin is None else stdin)
    except PromptGeneratorError as e:
        return exit_with_error(e)

    final_prompt = create_prompt(files_content, instructions)
    print(final_prompt)

    if settings.copy_to_clipboard:
        copy_to_clipboard(final_prompt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
