"""Exceptions raised by utf8codec.

The default ``replace`` mode never raises for malformed input.  These types
surface only in ``strict`` mode, or when the output buffer cannot be
allocated.
"""

from __future__ import annotations


class Utf8CodecError(Exception):
    """Base class for every error raised by utf8codec."""


class Utf8EncodeError(Utf8CodecError, UnicodeEncodeError):
    """A lone surrogate was found while encoding in strict mode."""


class Utf8DecodeError(Utf8CodecError, UnicodeDecodeError):
    """An ill-formed byte sequence was found while decoding in strict mode."""


class CodecMemoryError(Utf8CodecError, MemoryError):
    """The output buffer for an encode or decode call could not be allocated.

    This is a resource condition, not a statement about the input's validity.
    """
