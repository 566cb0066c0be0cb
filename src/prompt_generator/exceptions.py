from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PromptGeneratorError(Exception):
    """Base exception for errors in the prompt_generator module."""

    def __str__(self) -> str:
        return getattr(self, "message", "") or self.__class__.__name__


@dataclass(frozen=True)
class InvalidRootError(PromptGeneratorError):
    """Raised when the directory to scan cannot be used."""

    folder: Path
    reason: str = "not a readable directory"

    @property
    def message(self) -> str:
        return f"cannot scan {self.folder}: {self.reason}"


@dataclass(frozen=True)
class IgnoreFileError(PromptGeneratorError):
    """Raised when an existing ignore file cannot be read."""

    file: Path
    reason: str

    @property
    def message(self) -> str:
        return f"failed to read {self.file}: {self.reason}"


@dataclass(frozen=True)
class UnsupportedEncodingError(PromptGeneratorError):
    """Raised when an encoding name has no known codec."""

    name: str

    @property
    def message(self) -> str:
        return f"unsupported encoding: {self.name}"


@dataclass(frozen=True)
class DecodeFailureError(PromptGeneratorError):
    """Raised when bytes cannot be decoded with an explicitly requested codec."""

    encoding: str
    reason: str

    @property
    def message(self) -> str:
        return f"could not decode with encoding '{self.encoding}': {self.reason}"


@dataclass(frozen=True)
class NoFilesFoundError(PromptGeneratorError):
    """Raised when a traversal completes without collecting any file."""

    folder: Path
    message: str = "no valid files found"


@dataclass(frozen=True)
class InstructionsReadError(PromptGeneratorError):
    """Raised when the instructions cannot be read from standard input."""

    reason: str

    @property
    def message(self) -> str:
        return f"failed to read instructions from standard input: {self.reason}"
