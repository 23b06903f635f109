#!/usr/bin/env python
"""Derive the UTF-8 state machine tables from the well-formed byte ranges.

The ranges are those of Table 3-7 in the Unicode Standard.  Running the
script prints the tables as Python literals; ``tests/test_tables.py`` imports
:func:`derive_byte_classes` and :func:`derive_transitions` to check the
literals shipped in ``utf8codec.dfa``.
"""

from __future__ import annotations

import argparse

NUM_CLASSES = 16
ACCEPT = 0
REJECT = 1

# (first byte, last byte, class)
BYTE_RANGES: tuple[tuple[int, int, int], ...] = (
    (0x00, 0x7F, 0),
    (0x80, 0x8F, 1),
    (0x90, 0x9F, 9),
    (0xA0, 0xBF, 7),
    (0xC0, 0xC1, 8),
    (0xC2, 0xDF, 2),
    (0xE0, 0xE0, 10),
    (0xE1, 0xEC, 3),
    (0xED, 0xED, 4),
    (0xEE, 0xEF, 3),
    (0xF0, 0xF0, 11),
    (0xF1, 0xF3, 6),
    (0xF4, 0xF4, 5),
    (0xF5, 0xFF, 8),
)

# Continuation-byte classes covering each second-byte range of Table 3-7.
_CONT_80_BF = frozenset({1, 9, 7})
_CONT_A0_BF = frozenset({7})
_CONT_80_9F = frozenset({1, 9})
_CONT_90_BF = frozenset({9, 7})
_CONT_80_8F = frozenset({1})

# Lead-byte class -> state entered after reading it.
LEAD_STATES: dict[int, int] = {
    0: ACCEPT,
    2: 2,  # C2-DF: one continuation byte left
    3: 3,  # E1-EC, EE-EF: two left
    10: 4,  # E0: A0-BF, then one more
    4: 5,  # ED: 80-9F, then one more
    11: 6,  # F0: 90-BF, then two more
    6: 7,  # F1-F3: three left
    5: 8,  # F4: 80-8F, then two more
}

# Mid-sequence state -> (accepted continuation classes, next state).
CONTINUATIONS: dict[int, tuple[frozenset[int], int]] = {
    2: (_CONT_80_BF, ACCEPT),
    3: (_CONT_80_BF, 2),
    4: (_CONT_A0_BF, 2),
    5: (_CONT_80_9F, 2),
    6: (_CONT_90_BF, 3),
    7: (_CONT_80_BF, 3),
    8: (_CONT_80_8F, 3),
}

NUM_STATES = 2 + len(CONTINUATIONS)


def derive_byte_classes() -> tuple[int, ...]:
    """Return the 256-entry byte-to-class table."""
    classes = [-1] * 256
    for first, last, cls in BYTE_RANGES:
        for byte in range(first, last + 1):
            classes[byte] = cls
    if -1 in classes:
        msg = f"byte {classes.index(-1):#04x} has no class"
        raise ValueError(msg)
    return tuple(classes)


def derive_transitions() -> tuple[int, ...]:
    """Return the ``NUM_STATES * 16`` transition table."""
    table = [REJECT] * (NUM_STATES * NUM_CLASSES)
    for cls, state in LEAD_STATES.items():
        table[ACCEPT * NUM_CLASSES + cls] = state
    for state, (accepted, next_state) in CONTINUATIONS.items():
        for cls in accepted:
            table[state * NUM_CLASSES + cls] = next_state
    return tuple(table)


def _format(name: str, values: tuple[int, ...], width: int) -> str:
    lines = [f"{name}: tuple[int, ...] = ("]
    for i in range(0, len(values), width):
        row = ", ".join(str(v) for v in values[i : i + width])
        lines.append(f"    {row},")
    lines.append(")")
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--width", type=int, default=NUM_CLASSES, help="Entries per output row"
    )
    args = parser.parse_args()
    print(_format("BYTE_CLASSES", derive_byte_classes(), args.width))
    print()
    print(_format("TRANSITIONS", derive_transitions(), args.width))


if __name__ == "__main__":
    main()
