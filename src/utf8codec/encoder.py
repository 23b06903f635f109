"""UTF-16 code units to UTF-8 bytes.

Encoding runs in two passes over the same scan: :func:`encoded_length`
computes the exact output size, then :func:`encode_units` fills a buffer of
that size.  Both passes classify units through :func:`_scan`, so a surrogate
handled one way when sizing is handled the same way when writing.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import NoReturn

from utf8codec._constants import (
    DEFAULT_ERRORS,
    ERRORS_STRICT,
    REPLACEMENT_BYTES,
    SUPPLEMENTARY_MIN,
    _validate_errors,
)
from utf8codec.errors import CodecMemoryError, Utf8EncodeError
from utf8codec.units import (
    code_units,
    combine_surrogates,
    is_high_surrogate,
    is_low_surrogate,
    validate_units,
)

#: Marker yielded by :func:`_scan` for a unit that cannot be encoded.
_INVALID = -1


def _scan(units: Sequence[int]) -> Iterator[tuple[int, int]]:
    """Yield ``(scalar, index)`` for each scalar value encoded by *units*.

    *index* is the position of the scalar's first code unit.  A surrogate that
    is not part of a (high, low) pair yields :data:`_INVALID` as its scalar.
    The unit following an unpaired high surrogate is not consumed.
    """
    length = len(units)
    i = 0
    while i < length:
        unit = units[i]
        if is_high_surrogate(unit):
            if i + 1 < length and is_low_surrogate(units[i + 1]):
                yield combine_surrogates(unit, units[i + 1]), i
                i += 2
                continue
            yield _INVALID, i
        elif is_low_surrogate(unit):
            yield _INVALID, i
        else:
            yield unit, i
        i += 1


def _sequence_length(scalar: int) -> int:
    if scalar < 0:
        return len(REPLACEMENT_BYTES)
    if scalar < 0x80:
        return 1
    if scalar < 0x800:
        return 2
    if scalar < 0x10000:
        return 3
    return 4


def encoded_length(units: Sequence[int]) -> int:
    """Return the number of bytes :func:`encode_units` writes for *units*.

    Lone surrogates count as the three bytes of U+FFFD.
    """
    return sum(_sequence_length(scalar) for scalar, _ in _scan(units))


def lone_surrogate_error(text: str, index: int) -> Utf8EncodeError:
    """Build the strict-mode error for the lone surrogate at ``text[index]``."""
    return Utf8EncodeError("utf-8", text, index, index + 1, "surrogates not allowed")


def _raise_lone_surrogate(units: Sequence[int], index: int) -> NoReturn:
    raise lone_surrogate_error("".join(map(chr, units)), index)


def _char_index(text: str, unit_index: int) -> int:
    """Map an index into ``code_units(text)`` back to an index into *text*."""
    position = 0
    for i, char in enumerate(text):
        if position >= unit_index:
            return i
        position += 2 if ord(char) >= SUPPLEMENTARY_MIN else 1
    return len(text)


def first_lone_surrogate(text: str) -> int:
    """Return the index in *text* of the first unpaired surrogate, or -1."""
    for scalar, index in _scan(code_units(text)):
        if scalar == _INVALID:
            return _char_index(text, index)
    return -1


def _allocate(size: int) -> bytearray:
    try:
        return bytearray(size)
    except MemoryError as e:
        msg = f"cannot allocate {size} bytes for the encoded output"
        raise CodecMemoryError(msg) from e


def encode_units(units: Sequence[int], errors: str = DEFAULT_ERRORS) -> bytes:
    """Encode a sequence of UTF-16 code units as UTF-8.

    :param units: 16-bit code units.  Adjacent (high, low) surrogates are
        encoded as one 4-byte sequence.
    :param errors: ``"replace"`` (the default) writes U+FFFD for each lone
        surrogate; ``"strict"`` raises instead.
    :returns: The UTF-8 bytes.
    :raises ValueError: If a unit is not an integer in ``range(0x10000)``, or
        *errors* is unknown.
    :raises Utf8EncodeError: In strict mode, on the first lone surrogate.
    :raises CodecMemoryError: If the output buffer cannot be allocated.
    """
    _validate_errors(errors)
    validate_units(units)

    size = encoded_length(units)
    buf = _allocate(size)
    j = 0
    for scalar, index in _scan(units):
        if scalar < 0:
            if errors == ERRORS_STRICT:
                _raise_lone_surrogate(units, index)
            buf[j : j + 3] = REPLACEMENT_BYTES
            j += 3
        elif scalar < 0x80:
            buf[j] = scalar
            j += 1
        elif scalar < 0x800:
            buf[j] = 0xC0 | (scalar >> 6)
            buf[j + 1] = 0x80 | (scalar & 0x3F)
            j += 2
        elif scalar < 0x10000:
            buf[j] = 0xE0 | (scalar >> 12)
            buf[j + 1] = 0x80 | ((scalar >> 6) & 0x3F)
            buf[j + 2] = 0x80 | (scalar & 0x3F)
            j += 3
        else:
            buf[j] = 0xF0 | (scalar >> 18)
            buf[j + 1] = 0x80 | ((scalar >> 12) & 0x3F)
            buf[j + 2] = 0x80 | ((scalar >> 6) & 0x3F)
            buf[j + 3] = 0x80 | (scalar & 0x3F)
            j += 4

    if j != size:
        msg = f"encoder wrote {j} bytes but sized the output for {size}"
        raise RuntimeError(msg)
    return bytes(buf)


def encode(text: str | Sequence[int], errors: str = DEFAULT_ERRORS) -> bytes:
    """Encode *text* as UTF-8.

    *text* may be a ``str`` or a sequence of UTF-16 code units.  Astral
    characters in a ``str`` are split into surrogate pairs first, so
    ``"\\U0001f600"`` and ``"\\ud83d\\ude00"`` encode identically.  Strict-mode
    errors for a ``str`` carry *text* itself and character offsets into it.
    """
    if isinstance(text, str):
        try:
            return encode_units(code_units(text), errors)
        except Utf8EncodeError as e:
            raise lone_surrogate_error(text, _char_index(text, e.start)) from None
    return encode_units(list(text), errors)
