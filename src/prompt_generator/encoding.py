from __future__ import annotations

import codecs

from prompt_generator.config import ENCODING_ALIASES, FALLBACK_CODECS, UTF8, Codec
from prompt_generator.exceptions import DecodeFailureError, UnsupportedEncodingError
from prompt_generator.logging import logger

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


def resolve_codec(name: str) -> Codec:
    """Look up a codec by user-facing name, case-insensitively.

    Args:
        name (str): an encoding name such as ``Shift-JIS``, ``sjis`` or ``utf-16le``

    Raises:
        UnsupportedEncodingError: if the name is not a recognized alias

    Returns:
        Codec: the matching codec
    """
    codec = ENCODING_ALIASES.get(name.strip().lower())
    if codec is None:
        raise UnsupportedEncodingError(name=name)
    return codec


def decode_with(data: bytes, codec: Codec) -> str:
    """Strictly decode ``data`` with ``codec``.

    UTF-16 codecs honor a leading byte-order mark: when present it decides the
    byte order and is stripped from the result.

    Raises:
        UnicodeDecodeError: if the bytes are not valid for the codec
    """
    if codec.honors_bom and data.startswith(_UTF16_BOMS):
        return data.decode("utf-16")
    return data.decode(codec.python_name)


def is_valid_utf8_text(text: str) -> bool:
    """Check that decoded text can be written back out as well-formed UTF-8."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _try_decode(data: bytes, codec: Codec) -> str | None:
    try:
        return decode_with(data, codec)
    except UnicodeDecodeError:
        return None


def detect_and_convert_encoding(
    data: bytes,
    encoding_name: str | None = None,
    *,
    source: str = "",
) -> str:
    """Decode raw file bytes into text.

    With an explicit ``encoding_name`` only that codec is used. Otherwise valid
    UTF-8 is returned untouched, and anything else goes through a fixed list of
    candidate codecs (Shift-JIS, EUC-JP, ISO-2022-JP, UTF-16LE, UTF-16BE); the
    first one that decodes cleanly wins. That order is a guess: some byte
    sequences decode "successfully" under the wrong codec.

    If nothing fits, a warning is logged and the bytes are decoded as UTF-8 with
    replacement characters, so a single odd file never stops a run.

    Args:
        data (bytes): the raw file contents
        encoding_name (str | None): an explicit encoding name, or None to detect
        source (str): where the bytes came from, only used in log messages

    Raises:
        UnsupportedEncodingError: if ``encoding_name`` is not recognized
        DecodeFailureError: if the explicit codec rejects the bytes

    Returns:
        str: the decoded text
    """
    if encoding_name:
        codec = resolve_codec(encoding_name)
        try:
            return decode_with(data, codec)
        except UnicodeDecodeError as e:
            raise DecodeFailureError(encoding=encoding_name, reason=str(e)) from e

    text = _try_decode(data, UTF8)
    if text is not None:
        return text

    for codec in FALLBACK_CODECS:
        text = _try_decode(data, codec)
        if text is not None and is_valid_utf8_text(text):
            return text

    logger.warning("Could not detect the encoding of %s; treating it as UTF-8", source or "<bytes>")
    return data.decode("utf-8", errors="replace")
