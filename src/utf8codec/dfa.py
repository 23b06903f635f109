"""UTF-8 validating state machine.

The tables are Bjoern Hoehrmann's "Flexible and Economical UTF-8 Decoder"
(http://bjoern.hoehrmann.de/utf-8/decoder/dfa/), in the variant with
unscaled state numbers indexed by ``state * 16 + byte_class``.

Byte classes:

====== ======================= ======================================
Class  Bytes                   Meaning
====== ======================= ======================================
0      00-7F                   ASCII
1      80-8F                   continuation
9      90-9F                   continuation
7      A0-BF                   continuation
8      C0-C1, F5-FF            never valid
2      C2-DF                   2-byte lead
10     E0                      3-byte lead, second byte A0-BF
3      E1-EC, EE-EF            3-byte lead
4      ED                      3-byte lead, second byte 80-9F
11     F0                      4-byte lead, second byte 90-BF
6      F1-F3                   4-byte lead
5      F4                      4-byte lead, second byte 80-8F
====== ======================= ======================================

States: 0 accepts, 1 rejects, 2 and 3 await one and two more arbitrary
continuation bytes, 4-8 await a second byte restricted by the lead byte.
"""

from __future__ import annotations

import dataclasses

ACCEPT: int = 0
REJECT: int = 1

NUM_STATES: int = 9
NUM_CLASSES: int = 16

# fmt: off
BYTE_CLASSES: tuple[int, ...] = (
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9,
    7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7,
    8, 8, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,
    10, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 4, 3, 3,
    11, 6, 6, 6, 5, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8,
)

TRANSITIONS: tuple[int, ...] = (
    0, 1, 2, 3, 5, 8, 7, 1, 1, 1, 4, 6, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 1, 1, 1, 1, 1,
    1, 2, 1, 1, 1, 1, 1, 2, 1, 2, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 2, 1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
    1, 3, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
    1, 3, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
)
# fmt: on


def is_continuation_byte(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def step(state: int, scalar: int, byte: int) -> tuple[int, int]:
    """Feed one byte to the state machine.

    :param state: The current state.
    :param scalar: The payload bits accumulated so far.
    :param byte: The next input byte.
    :returns: The ``(state, scalar)`` pair after consuming *byte*.
    """
    cls = BYTE_CLASSES[byte]
    if state != ACCEPT:
        scalar = (scalar << 6) | (byte & 0x3F)
    else:
        scalar = (0xFF >> cls) & byte
    return TRANSITIONS[state * NUM_CLASSES + cls], scalar


@dataclasses.dataclass(frozen=True, slots=True)
class DecoderState:
    """Decoder position between two bytes.

    ``state`` is a state-machine state and ``scalar`` the payload bits read
    so far for the sequence in progress.  Instances are immutable, so a state
    can be saved and resumed later without copying.
    """

    state: int = ACCEPT
    scalar: int = 0

    @property
    def accepting(self) -> bool:
        return self.state == ACCEPT

    @property
    def rejected(self) -> bool:
        return self.state == REJECT

    @property
    def pending(self) -> bool:
        """True while a multi-byte sequence is partially read."""
        return self.state not in (ACCEPT, REJECT)

    def advance(self, byte: int) -> DecoderState:
        state, scalar = step(self.state, self.scalar, byte)
        return DecoderState(state, scalar)


#: The state before any byte has been read.
INITIAL_STATE = DecoderState()
