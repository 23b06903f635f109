"""UTF-8 bytes to text.

The decoder drives :mod:`utf8codec.dfa` one byte at a time.  When the state
machine rejects, one U+FFFD stands in for the ill-formed bytes and decoding
resumes at the next byte that can start a sequence:

* a rejected lead byte (or stray continuation byte) is replaced together with
  the continuation bytes that immediately follow it;
* a sequence cut short by a byte that cannot continue it is replaced up to
  that byte.  The offending byte is then decoded afresh, unless it is itself a
  continuation byte, in which case it and the continuation bytes after it are
  absorbed into the same replacement;
* a sequence still open at the end of the input becomes one U+FFFD.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator

from utf8codec._constants import (
    DEFAULT_ERRORS,
    ERRORS_STRICT,
    REPLACEMENT_CHARACTER,
    SUPPLEMENTARY_MIN,
    _validate_errors,
)
from utf8codec.dfa import INITIAL_STATE, is_continuation_byte
from utf8codec.errors import CodecMemoryError, Utf8DecodeError
from utf8codec.units import split_scalar

INVALID_START_BYTE = "invalid start byte"
INVALID_CONTINUATION_BYTE = "invalid continuation byte"
UNEXPECTED_END = "unexpected end of data"


@dataclasses.dataclass(frozen=True, slots=True)
class DecodeIssue:
    """An ill-formed byte range, replaced by a single U+FFFD.

    ``start`` and ``end`` are byte offsets into the decoded buffer
    (``end`` exclusive).  ``reason`` uses CPython's wording.
    """

    start: int
    end: int
    reason: str

    def to_error(self, data: bytes) -> Utf8DecodeError:
        return Utf8DecodeError("utf-8", data, self.start, self.end, self.reason)


def _as_bytes(data: bytes | bytearray | memoryview | Iterable[int]) -> bytes:
    return data if isinstance(data, bytes) else bytes(data)


def _decode(data: bytes) -> Iterator[int | DecodeIssue]:
    """Yield decoded scalar values, or a :class:`DecodeIssue` per replacement."""
    length = len(data)
    current = INITIAL_STATE
    start = 0
    i = 0
    while i < length:
        byte = data[i]
        previous = current
        if previous.accepting:
            start = i
        current = previous.advance(byte)
        if current.accepting:
            yield current.scalar
            i += 1
            continue
        if current.pending:
            i += 1
            continue

        current = INITIAL_STATE
        if previous.accepting or is_continuation_byte(byte):
            reason = (
                INVALID_START_BYTE if previous.accepting else INVALID_CONTINUATION_BYTE
            )
            i += 1
            while i < length and is_continuation_byte(data[i]):
                i += 1
        else:
            # data[i] is read again as the start of the next sequence
            reason = INVALID_CONTINUATION_BYTE
        yield DecodeIssue(start, i, reason)

    if not current.accepting:
        yield DecodeIssue(start, length, UNEXPECTED_END)


def _scalars(data: bytes, errors: str) -> Iterator[int]:
    strict = errors == ERRORS_STRICT
    for item in _decode(data):
        if isinstance(item, DecodeIssue):
            if strict:
                raise item.to_error(data)
            yield REPLACEMENT_CHARACTER
        else:
            yield item


def decode(
    data: bytes | bytearray | memoryview | Iterable[int],
    errors: str = DEFAULT_ERRORS,
) -> str:
    """Decode UTF-8 *data* into a string.

    :param data: A bytes-like object or an iterable of ints in ``range(256)``.
    :param errors: ``"replace"`` (the default) substitutes U+FFFD for each
        ill-formed subpart; ``"strict"`` raises on the first one.
    :returns: The decoded text.  Supplementary characters are single code
        points; use :func:`decode_units` for UTF-16 code units.
    :raises Utf8DecodeError: In strict mode, on the first ill-formed subpart.
    :raises CodecMemoryError: If the output cannot be allocated.
    """
    _validate_errors(errors)
    buf = _as_bytes(data)
    try:
        return "".join(map(chr, _scalars(buf, errors)))
    except MemoryError as e:
        msg = f"cannot allocate the decoded output for {len(buf)} bytes"
        raise CodecMemoryError(msg) from e


def decode_units(
    data: bytes | bytearray | memoryview | Iterable[int],
    errors: str = DEFAULT_ERRORS,
) -> list[int]:
    """Decode UTF-8 *data* into UTF-16 code units.

    Scalar values above U+FFFF are emitted as surrogate pairs.  Never returns
    more units than *data* has bytes.
    """
    _validate_errors(errors)
    buf = _as_bytes(data)
    units: list[int] = []
    try:
        for scalar in _scalars(buf, errors):
            if scalar >= SUPPLEMENTARY_MIN:
                units.extend(split_scalar(scalar))
            else:
                units.append(scalar)
    except MemoryError as e:
        msg = f"cannot allocate the decoded output for {len(buf)} bytes"
        raise CodecMemoryError(msg) from e
    return units


def find_invalid(
    data: bytes | bytearray | memoryview | Iterable[int],
) -> list[DecodeIssue]:
    """Return every ill-formed range in *data*, in order.

    Each entry corresponds to exactly one U+FFFD in the output of
    :func:`decode`.  An empty list means *data* is well-formed UTF-8.
    """
    items = _decode(_as_bytes(data))
    return [item for item in items if isinstance(item, DecodeIssue)]
