"""UTF-16 code unit helpers.

Python strings hold code points, not 16-bit code units.  The codec works on
code units, so these helpers convert between the two views: astral characters
are split into surrogate pairs on the way in, and adjacent surrogate pairs are
recombined on the way out.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from utf8codec._constants import (
    HIGH_SURROGATE_MAX,
    HIGH_SURROGATE_MIN,
    LOW_SURROGATE_MAX,
    LOW_SURROGATE_MIN,
    MAX_CODE_UNIT,
    MAX_SCALAR,
    SUPPLEMENTARY_MIN,
)


def is_high_surrogate(unit: int) -> bool:
    return HIGH_SURROGATE_MIN <= unit <= HIGH_SURROGATE_MAX


def is_low_surrogate(unit: int) -> bool:
    return LOW_SURROGATE_MIN <= unit <= LOW_SURROGATE_MAX


def is_surrogate(unit: int) -> bool:
    return HIGH_SURROGATE_MIN <= unit <= LOW_SURROGATE_MAX


def combine_surrogates(high: int, low: int) -> int:
    """Return the scalar value encoded by the surrogate pair (*high*, *low*)."""
    offset = ((high - HIGH_SURROGATE_MIN) << 10) + (low - LOW_SURROGATE_MIN)
    return offset + SUPPLEMENTARY_MIN


def split_scalar(scalar: int) -> tuple[int, int]:
    """Split a supplementary scalar value into a (high, low) surrogate pair.

    :param scalar: A scalar value in ``[0x10000, 0x10FFFF]``.
    :raises ValueError: If *scalar* is outside the supplementary planes.
    """
    if not SUPPLEMENTARY_MIN <= scalar <= MAX_SCALAR:
        msg = f"scalar {scalar:#x} does not need a surrogate pair"
        raise ValueError(msg)
    offset = scalar - SUPPLEMENTARY_MIN
    return HIGH_SURROGATE_MIN + (offset >> 10), LOW_SURROGATE_MIN + (offset & 0x3FF)


def code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of *text*.

    Surrogate characters already present in *text* are passed through as-is,
    so a string holding an explicit surrogate pair and one holding the
    equivalent astral character yield the same units.
    """
    units: list[int] = []
    for char in text:
        cp = ord(char)
        if cp >= SUPPLEMENTARY_MIN:
            units.extend(split_scalar(cp))
        else:
            units.append(cp)
    return units


def validate_units(units: Sequence[int]) -> None:
    """Raise ValueError if any element of *units* is not a 16-bit integer."""
    for index, unit in enumerate(units):
        if (
            isinstance(unit, bool)
            or not isinstance(unit, int)
            or not 0 <= unit <= MAX_CODE_UNIT
        ):
            msg = f"code unit at index {index} is not in range(0x10000): {unit!r}"
            raise ValueError(msg)


def units_to_text(units: Iterable[int]) -> str:
    """Join UTF-16 code units into a string.

    Valid surrogate pairs become a single astral character; lone surrogates
    are kept as surrogate characters.
    """
    chars: list[str] = []
    pending_high = -1
    for unit in units:
        if pending_high >= 0:
            if is_low_surrogate(unit):
                chars.append(chr(combine_surrogates(pending_high, unit)))
                pending_high = -1
                continue
            chars.append(chr(pending_high))
            pending_high = -1
        if is_high_surrogate(unit):
            pending_high = unit
        else:
            chars.append(chr(unit))
    if pending_high >= 0:
        chars.append(chr(pending_high))
    return "".join(chars)
