from __future__ import annotations

import io
from typing import TYPE_CHECKING

from prompt_generator.config import FILE_SEPARATOR, INSTRUCTIONS_HEADER, PROMPT_PREAMBLE

if TYPE_CHECKING:
    from collections.abc import Mapping


def render_file_block(path: str, content: str) -> str:
    """Render one file of the prompt.

    Args:
        path (str): the file path shown in the header
        content (str): the decoded file content, inserted verbatim

    Returns:
        str: the delimited block, ending with a blank line
    """
    return f"{FILE_SEPARATOR}\n[File]: {path}\n[Content Start]\n{content}\n[Content End]\n\n"


def create_prompt(files_content: Mapping[str, str], instructions: str) -> str:
    """Combine collected file contents and the user's instructions into one prompt.

    Files are emitted sorted by path so the output does not depend on how the
    mapping was filled. Neither file contents nor instructions are escaped.

    Args:
        files_content (Mapping[str, str]): absolute file path to decoded content
        instructions (str): the free-text instructions, appended verbatim

    Returns:
        str: the assembled prompt
    """
    out = io.StringIO()
    out.write(PROMPT_PREAMBLE)

    for path in sorted(files_content):
        out.write(render_file_block(path, files_content[path]))

    out.write(f"{FILE_SEPARATOR}\n{INSTRUCTIONS_HEADER}\n")
    out.write(instructions)
    return out.getvalue()
