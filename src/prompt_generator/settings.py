from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from prompt_generator.config import ALL_FILES, ENV_PREFIX, normalize_extensions

ENV_FILE = find_dotenv(usecwd=True)


def env_defaults(env_file: str | Path | None = None) -> dict[str, str]:
    """Collect ``PROMPT_GENERATOR_*`` defaults from a ``.env`` file and the environment.

    Process environment variables take precedence over the ``.env`` file. Keys
    are returned lower-cased and without the prefix, e.g. ``encoding``.

    Args:
        env_file: the ``.env`` file to read. Defaults to the one found from the cwd.

    Returns:
        dict[str, str]: the non-empty defaults that were found.
    """
    source = ENV_FILE if env_file is None else str(env_file)
    values: dict[str, str | None] = dict(dotenv_values(source)) if source else {}
    values.update(os.environ)

    out: dict[str, str] = {}
    for key, value in values.items():
        if key.startswith(ENV_PREFIX) and value:
            out[key.removeprefix(ENV_PREFIX).lower()] = value
    return out


class Settings(BaseModel):
    """Configuration settings for one prompt generation run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    path: Path = Field(default_factory=Path.cwd, description="Directory to scan.")
    extensions: frozenset[str] = Field(
        default_factory=lambda: normalize_extensions(None),
        description="Extension Set; '.' selects every file.",
    )
    encoding: str | None = Field(default=None, description="Explicit input encoding.")
    copy_to_clipboard: bool = Field(default=False, description="Copy the prompt to the clipboard.")
    log_file: str = Field(default="", description="Log file path.")

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: object) -> frozenset[str]:
        if isinstance(value, (str, list, tuple)) or value is None:
            return normalize_extensions(value)
        if isinstance(value, (set, frozenset)):
            return normalize_extensions(sorted(value))
        msg = f"invalid extensions: {value!r}"
        raise ValueError(msg)

    @field_validator("encoding", mode="before")
    @classmethod
    def _blank_encoding_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def all_files(self) -> bool:
        """Whether the all-files sentinel is part of the Extension Set."""
        return ALL_FILES in self.extensions
