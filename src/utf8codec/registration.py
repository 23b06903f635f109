"""Expose the pure codec through Python's :mod:`codecs` registry.

After :func:`register`, ``"text".encode("pure-utf-8")`` and
``data.decode("pure-utf-8")`` run :class:`~utf8codec.strategies.PureCodec`.
Only the stateless encode / decode entry points are provided, so the name
cannot be used with ``open()`` or other incremental codec users.

The codec accepts two error handlers: ``"strict"`` (the default, as for any
Python codec) and ``"replace"``.  Any other handler name, including
``"ignore"``, ``"surrogateescape"`` and ``"surrogatepass"``, raises
:exc:`ValueError` before any input is processed.
"""

from __future__ import annotations

import codecs
import logging
import threading

from utf8codec import decoder, encoder
from utf8codec._constants import CODEC_NAME

logger = logging.getLogger(__name__)

#: Normalized spellings that resolve to the pure codec.
_NAMES = frozenset({"pure_utf_8", "pure_utf8", "pureutf8"})

_lock = threading.Lock()
_registered = False


def _encode(text: str, errors: str = "strict") -> tuple[bytes, int]:
    return encoder.encode(text, errors), len(text)


def _decode(data: bytes, errors: str = "strict") -> tuple[str, int]:
    buf = data if isinstance(data, bytes) else bytes(data)
    return decoder.decode(buf, errors), len(buf)


_CODEC_INFO = codecs.CodecInfo(_encode, _decode, name=CODEC_NAME)


def _search(name: str) -> codecs.CodecInfo | None:
    if name.replace("-", "_") in _NAMES:
        return _CODEC_INFO
    return None


def register() -> None:
    """Register the ``pure-utf-8`` codec.  Calling it again has no effect."""
    global _registered
    with _lock:
        if _registered:
            return
        codecs.register(_search)
        _registered = True
    logger.debug("Registered %s codec", CODEC_NAME)


def unregister() -> None:
    """Remove the ``pure-utf-8`` codec registered by :func:`register`."""
    global _registered
    with _lock:
        if not _registered:
            return
        codecs.unregister(_search)
        _registered = False
    logger.debug("Unregistered %s codec", CODEC_NAME)


def is_registered() -> bool:
    return _registered
