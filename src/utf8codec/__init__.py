"""Pure-Python UTF-8 codec with a table-driven validating decoder."""

from __future__ import annotations

from utf8codec._constants import (
    DEFAULT_ERRORS,
    REPLACEMENT_BYTES,
    REPLACEMENT_CHARACTER,
)
from utf8codec.decoder import DecodeIssue, decode, decode_units, find_invalid
from utf8codec.encoder import encode, encode_units, encoded_length
from utf8codec.errors import (
    CodecMemoryError,
    Utf8CodecError,
    Utf8DecodeError,
    Utf8EncodeError,
)
from utf8codec.registration import register, unregister
from utf8codec.strategies import NativeCodec, PureCodec, get_codec

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_ERRORS",
    "REPLACEMENT_BYTES",
    "REPLACEMENT_CHARACTER",
    "CodecMemoryError",
    "DecodeIssue",
    "NativeCodec",
    "PureCodec",
    "Utf8CodecError",
    "Utf8DecodeError",
    "Utf8EncodeError",
    "decode",
    "decode_units",
    "encode",
    "encode_units",
    "encoded_length",
    "find_invalid",
    "get_codec",
    "register",
    "unregister",
]
