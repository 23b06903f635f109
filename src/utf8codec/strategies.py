"""Interchangeable UTF-8 codec strategies.

Two strategies share one contract, ``encode(text, errors) -> bytes`` and
``decode(data, errors) -> str``:

* :class:`NativeCodec` delegates to CPython's built-in ``utf-8`` codec;
* :class:`PureCodec` runs :mod:`utf8codec.encoder` and
  :mod:`utf8codec.decoder`.

:func:`get_codec` picks one.  Without an explicit name it honours the
``UTF8CODEC_STRATEGY`` environment variable, and otherwise probes the
strategies in order and caches the first one that is available.
"""

from __future__ import annotations

import asyncio
import codecs
import functools
import logging
import os
from collections.abc import Iterable, Sequence
from typing import ClassVar, Protocol

from utf8codec import decoder, encoder
from utf8codec._constants import (
    DEFAULT_ERRORS,
    ERRORS_STRICT,
    REPLACEMENT_BYTES,
    _validate_errors,
)
from utf8codec.errors import Utf8DecodeError
from utf8codec.units import validate_units

logger = logging.getLogger(__name__)

#: Environment variable naming the strategy :func:`get_codec` returns.
STRATEGY_ENV_VAR = "UTF8CODEC_STRATEGY"
AUTO = "auto"

#: Error handler that encodes each lone surrogate as U+FFFD.
SURROGATE_REPLACE_HANDLER = "utf8codec.replace"


class Codec(Protocol):
    """The interface every strategy implements."""

    name: ClassVar[str]

    @staticmethod
    def is_available() -> bool: ...

    def encode(self, text: str | Sequence[int], errors: str = ...) -> bytes: ...

    def decode(
        self, data: bytes | bytearray | memoryview | Iterable[int], errors: str = ...
    ) -> str: ...


class PureCodec:
    """The table-driven codec implemented in this package."""

    name: ClassVar[str] = "pure"

    @staticmethod
    def is_available() -> bool:
        return True

    def encode(self, text: str | Sequence[int], errors: str = DEFAULT_ERRORS) -> bytes:
        return encoder.encode(text, errors)

    def decode(
        self,
        data: bytes | bytearray | memoryview | Iterable[int],
        errors: str = DEFAULT_ERRORS,
    ) -> str:
        return decoder.decode(data, errors)


def _replace_surrogates(exc: UnicodeError) -> tuple[bytes, int]:
    if not isinstance(exc, UnicodeEncodeError):
        raise exc
    # The utf-8 encoder only accepts bytes or ASCII text as a replacement.
    return REPLACEMENT_BYTES * (exc.end - exc.start), exc.end


codecs.register_error(SURROGATE_REPLACE_HANDLER, _replace_surrogates)


class NativeCodec:
    """CPython's built-in ``utf-8`` codec, adjusted to the pure codec's contract.

    Surrogate pairs spelled as two characters are joined before encoding, and
    lone surrogates encode as U+FFFD rather than failing.  Decoding follows
    CPython's substitution rules, which agree with :class:`PureCodec` except
    that CPython replaces each stray continuation byte separately.
    """

    name: ClassVar[str] = "native"

    @staticmethod
    def is_available() -> bool:
        try:
            codecs.lookup("utf-8")
        except LookupError:
            return False
        return True

    def encode(self, text: str | Sequence[int], errors: str = DEFAULT_ERRORS) -> bytes:
        _validate_errors(errors)
        if not isinstance(text, str):
            units = list(text)
            validate_units(units)
            text = "".join(map(chr, units))
        paired = text.encode("utf-16-le", "surrogatepass").decode(
            "utf-16-le", "surrogatepass"
        )
        handler = "strict" if errors == ERRORS_STRICT else SURROGATE_REPLACE_HANDLER
        try:
            return paired.encode("utf-8", handler)
        except UnicodeEncodeError as e:
            # CPython reports offsets into the re-paired copy and spans whole
            # surrogate runs; report the first lone surrogate in *text* instead.
            index = encoder.first_lone_surrogate(text)
            raise encoder.lone_surrogate_error(text, index) from e

    def decode(
        self,
        data: bytes | bytearray | memoryview | Iterable[int],
        errors: str = DEFAULT_ERRORS,
    ) -> str:
        _validate_errors(errors)
        buf = data if isinstance(data, bytes) else bytes(data)
        try:
            return buf.decode("utf-8", errors)
        except UnicodeDecodeError as e:
            raise Utf8DecodeError(e.encoding, buf, e.start, e.end, e.reason) from e


_STRATEGIES: dict[str, type[PureCodec] | type[NativeCodec]] = {
    NativeCodec.name: NativeCodec,
    PureCodec.name: PureCodec,
}

#: Order in which automatic selection probes the strategies.
PROBE_ORDER: tuple[str, ...] = (NativeCodec.name, PureCodec.name)


def available_codecs() -> list[str]:
    """Return the names of the strategies usable in this process, in probe order."""
    return [name for name in PROBE_ORDER if _STRATEGIES[name].is_available()]


@functools.lru_cache(maxsize=None)
def _instance(name: str) -> Codec:
    return _STRATEGIES[name]()


@functools.lru_cache(maxsize=None)
def _auto_select() -> Codec:
    name = available_codecs()[0]
    logger.debug("Selected %s UTF-8 codec strategy", name)
    return _instance(name)


def get_codec(name: str | None = None) -> Codec:
    """Return a codec strategy.

    :param name: ``"native"``, ``"pure"`` or ``"auto"``.  Defaults to the
        value of ``UTF8CODEC_STRATEGY``, or ``"auto"`` if that is unset.
    :raises ValueError: If *name* is not a known strategy.
    :raises LookupError: If the named strategy is unavailable here.
    """
    if name is None:
        name = os.environ.get(STRATEGY_ENV_VAR, "").strip().lower() or AUTO
    if name == AUTO:
        return _auto_select()
    if name not in _STRATEGIES:
        msg = f"unknown codec strategy {name!r}; expected one of {sorted(_STRATEGIES)}"
        raise ValueError(msg)
    if not _STRATEGIES[name].is_available():
        msg = f"codec strategy {name!r} is not available"
        raise LookupError(msg)
    return _instance(name)


def encode(
    text: str | Sequence[int],
    errors: str = DEFAULT_ERRORS,
    strategy: str | None = None,
) -> bytes:
    """Encode *text* with the strategy chosen by :func:`get_codec`."""
    return get_codec(strategy).encode(text, errors)


def decode(
    data: bytes | bytearray | memoryview | Iterable[int],
    errors: str = DEFAULT_ERRORS,
    strategy: str | None = None,
) -> str:
    """Decode *data* with the strategy chosen by :func:`get_codec`."""
    return get_codec(strategy).decode(data, errors)


async def aencode(
    text: str | Sequence[int],
    errors: str = DEFAULT_ERRORS,
    strategy: str | None = None,
) -> bytes:
    """Run :func:`encode` in a worker thread."""
    return await asyncio.to_thread(encode, text, errors, strategy)


async def adecode(
    data: bytes | bytearray | memoryview | Iterable[int],
    errors: str = DEFAULT_ERRORS,
    strategy: str | None = None,
) -> str:
    """Run :func:`decode` in a worker thread."""
    return await asyncio.to_thread(decode, data, errors, strategy)
