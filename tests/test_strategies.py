# tests/test_strategies.py
from __future__ import annotations

import asyncio
import logging

import pytest

from utf8codec import strategies
from utf8codec.errors import Utf8DecodeError, Utf8EncodeError
from utf8codec.strategies import (
    NativeCodec,
    PureCodec,
    adecode,
    aencode,
    available_codecs,
    get_codec,
)

_CODECS = [NativeCodec(), PureCodec()]

# Inputs on which every strategy must agree byte for byte.
_ENCODE_VECTORS = [
    ("test", [116, 101, 115, 116]),
    ("日本語", [230, 151, 165, 230, 156, 172, 232, 170, 158]),
    ("\U0001f600", [0xF0, 0x9F, 0x98, 0x80]),
    ("\ud83d\ude00", [0xF0, 0x9F, 0x98, 0x80]),
    ("\ud800", [0xEF, 0xBF, 0xBD]),
    ("a\udc00b", [0x61, 0xEF, 0xBF, 0xBD, 0x62]),
    ("", []),
]

_DECODE_VECTORS = [
    ([230, 151, 165, 230, 156, 172, 232, 170, 158], "日本語"),
    ([0xF0, 0x9F, 0x98, 0x80], "\U0001f600"),
    ([0xC0, 0x41], "\ufffdA"),
    ([0xE2, 0x82], "\ufffd"),
    ([0xE2, 0x82, 0x41], "\ufffdA"),
    ([], ""),
]


@pytest.mark.parametrize("codec", _CODECS, ids=lambda c: c.name)
@pytest.mark.parametrize(("text", "expected"), _ENCODE_VECTORS)
def test_encode_vectors(codec, text: str, expected: list[int]):
    assert list(codec.encode(text)) == expected


@pytest.mark.parametrize("codec", _CODECS, ids=lambda c: c.name)
@pytest.mark.parametrize(("data", "expected"), _DECODE_VECTORS)
def test_decode_vectors(codec, data: list[int], expected: str):
    assert codec.decode(data) == expected


@pytest.mark.parametrize("codec", _CODECS, ids=lambda c: c.name)
def test_encode_accepts_code_units(codec):
    assert codec.encode([0xD83D, 0xDE00, 0x41]) == b"\xf0\x9f\x98\x80A"


@pytest.mark.parametrize("codec", _CODECS, ids=lambda c: c.name)
def test_strict_errors_share_types(codec):
    with pytest.raises(Utf8EncodeError):
        codec.encode("a\udc00", errors="strict")
    with pytest.raises(Utf8DecodeError) as exc_info:
        codec.decode(b"a\xff", errors="strict")
    assert exc_info.value.start == 1
    assert exc_info.value.reason == "invalid start byte"


@pytest.mark.parametrize("codec", _CODECS, ids=lambda c: c.name)
def test_unknown_errors_mode(codec):
    with pytest.raises(ValueError):
        codec.encode("a", errors="xmlcharrefreplace")


def test_available_codecs_probe_order():
    assert available_codecs() == ["native", "pure"]


def test_auto_selects_first_available(no_strategy_env):
    assert isinstance(get_codec(), NativeCodec)
    assert get_codec() is get_codec("auto")


def test_auto_falls_back_to_pure(no_strategy_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(NativeCodec, "is_available", staticmethod(lambda: False))
    assert available_codecs() == ["pure"]
    assert isinstance(get_codec(), PureCodec)


def test_auto_selection_is_logged(no_strategy_env, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="utf8codec.strategies"):
        get_codec()
    assert "Selected native UTF-8 codec strategy" in caplog.text


def test_named_codec():
    assert isinstance(get_codec("pure"), PureCodec)
    assert get_codec("pure") is get_codec("pure")


def test_environment_override(no_strategy_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(strategies.STRATEGY_ENV_VAR, " Pure ")
    assert isinstance(get_codec(), PureCodec)


def test_unknown_codec_name():
    with pytest.raises(ValueError, match="unknown codec strategy"):
        get_codec("iconv")


def test_unavailable_named_codec(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(NativeCodec, "is_available", staticmethod(lambda: False))
    with pytest.raises(LookupError):
        get_codec("native")


def test_module_level_helpers_use_strategy():
    assert strategies.encode("€", strategy="pure") == b"\xe2\x82\xac"
    assert strategies.decode(b"\xc0\x80", strategy="pure") == "\ufffd"
    # CPython replaces each byte of an invalid run separately.
    assert strategies.decode(b"\xc0\x80", strategy="native") == "\ufffd\ufffd"


def test_async_adapters():
    async def run() -> tuple[bytes, str]:
        data = await aencode("日本語", strategy="pure")
        text = await adecode(data, strategy="pure")
        return data, text

    data, text = asyncio.run(run())
    assert data == "日本語".encode()
    assert text == "日本語"


def test_native_replaces_lone_surrogates():
    codec = NativeCodec()
    assert codec.encode("\ud800\ud800x") == b"\xef\xbf\xbd" * 2 + b"x"
    assert codec.encode([0xDC00, 0x41]) == b"\xef\xbf\xbdA"
    assert strategies.encode("\udfff", strategy="native") == b"\xef\xbf\xbd"


@pytest.mark.parametrize(
    ("text", "start"),
    [
        ("\U0001f600\udc00", 1),
        ("\ud83d\ude00\udc00", 2),
        ("ab\ud800\ud800", 2),
        ("\U0010ffffx\ud800y", 2),
    ],
)
def test_strict_encode_errors_agree(text: str, start: int):
    seen = []
    for codec in _CODECS:
        with pytest.raises(Utf8EncodeError) as exc_info:
            codec.encode(text, errors="strict")
        err = exc_info.value
        seen.append((err.start, err.end, err.object, err.reason))
    assert seen[0] == seen[1] == (start, start + 1, text, "surrogates not allowed")
