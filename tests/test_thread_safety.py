# tests/test_thread_safety.py
"""Concurrent encode() / decode() calls on independent buffers."""

from __future__ import annotations

import threading

from utf8codec import decode, encode

_TEXTS = [
    "これはテストです。日本語のテキスト。",
    "Die Größe des Gebäudes",
    "emoji \U0001f600\U0001f680",
]
_SAMPLES: list[tuple[str, bytes]] = [(text, text.encode()) for text in _TEXTS]


def _run_concurrent(n_workers: int, iterations: int) -> list[str]:
    """Spawn *n_workers* threads per sample, each round-tripping *iterations* times.

    Returns a list of error strings (empty = success).
    """
    errors: list[str] = []
    barrier = threading.Barrier(n_workers * len(_SAMPLES))

    def worker(text: str, data: bytes) -> None:
        barrier.wait()
        for _ in range(iterations):
            if encode(text) != data:
                errors.append(f"encode mismatch for {text!r}")
            if decode(data + b"\xe2\x82") != text + "\ufffd":
                errors.append(f"decode mismatch for {text!r}")

    threads = []
    for _ in range(n_workers):
        for text, data in _SAMPLES:
            t = threading.Thread(target=worker, args=(text, data))
            threads.append(t)
            t.start()

    for t in threads:
        t.join()
    return errors


def test_concurrent_round_trips():
    errors = _run_concurrent(n_workers=4, iterations=50)
    assert errors == []
