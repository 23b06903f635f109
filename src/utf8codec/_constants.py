"""Shared constants for the encoder and decoder."""

from __future__ import annotations

#: U+FFFD, substituted for anything that cannot be encoded or decoded.
REPLACEMENT_CHARACTER: int = 0xFFFD

#: UTF-8 encoding of :data:`REPLACEMENT_CHARACTER`.
REPLACEMENT_BYTES: bytes = b"\xef\xbf\xbd"

HIGH_SURROGATE_MIN: int = 0xD800
HIGH_SURROGATE_MAX: int = 0xDBFF
LOW_SURROGATE_MIN: int = 0xDC00
LOW_SURROGATE_MAX: int = 0xDFFF

#: First scalar value that needs a surrogate pair (and a 4-byte sequence).
SUPPLEMENTARY_MIN: int = 0x10000
MAX_SCALAR: int = 0x10FFFF
MAX_CODE_UNIT: int = 0xFFFF

#: Error modes accepted by ``encode()`` and ``decode()``.
ERRORS_REPLACE: str = "replace"
ERRORS_STRICT: str = "strict"
DEFAULT_ERRORS: str = ERRORS_REPLACE
_ERROR_MODES: frozenset[str] = frozenset({ERRORS_REPLACE, ERRORS_STRICT})

#: Name under which :mod:`utf8codec.registration` exposes the pure codec.
CODEC_NAME: str = "pure-utf-8"


def _validate_errors(errors: str) -> None:
    """Raise ValueError if *errors* is not a supported error mode."""
    if errors not in _ERROR_MODES:
        msg = f"errors must be 'replace' or 'strict', not {errors!r}"
        raise ValueError(msg)
