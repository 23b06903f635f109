#!/usr/bin/env python
"""Benchmark the codec strategies: encode and decode timing.

Times are measured with ``time.perf_counter()`` over generated text samples.
Run standalone for human-readable output, or with ``--json-only`` for one JSON
object per strategy.
"""

from __future__ import annotations

import argparse
import json
import random
import statistics
import time

from utf8codec.strategies import available_codecs, get_codec

# Sample alphabets, from single-byte to four-byte UTF-8.
_ALPHABETS = {
    "ascii": "abcdefghijklmnopqrstuvwxyz ABCDEFGHIJKLMNOPQRSTUVWXYZ.,",
    "latin": "àáâãäåæçèéêëìíîïðñòóôõöøùúûüýþÿ ",
    "cjk": "日本語中文한국어漢字仮名",
    "emoji": "😀😁😂🤣😃😄😅😆😉😊",
}


def format_bytes(n: int) -> str:
    """Format a byte count with a binary unit suffix."""
    value = float(n)
    for unit in ("B", "KiB", "MiB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


def _samples(size: int, seed: int) -> dict[str, str]:
    rng = random.Random(seed)
    return {
        name: "".join(rng.choice(alphabet) for _ in range(size))
        for name, alphabet in _ALPHABETS.items()
    }


def _time(func, arg, repeat: int) -> list[float]:  # noqa: ANN001
    times = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        func(arg)
        times.append(time.perf_counter() - t0)
    return times


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark UTF-8 codec strategies.")
    parser.add_argument(
        "--strategy",
        choices=["all", *available_codecs()],
        default="all",
        help="Strategy to benchmark (default: all)",
    )
    parser.add_argument(
        "--size", type=int, default=100_000, help="Characters per sample"
    )
    parser.add_argument("--repeat", type=int, default=5, help="Runs per measurement")
    parser.add_argument("--seed", type=int, default=0, help="Sample generator seed")
    parser.add_argument(
        "--json-only",
        action="store_true",
        default=False,
        help="Print only JSON output (for consumption by other scripts)",
    )
    args = parser.parse_args()

    names = available_codecs() if args.strategy == "all" else [args.strategy]
    samples = _samples(args.size, args.seed)

    for name in names:
        codec = get_codec(name)
        results: dict[str, dict[str, float]] = {}
        for sample_name, text in samples.items():
            data = codec.encode(text)
            encode_times = _time(codec.encode, text, args.repeat)
            decode_times = _time(codec.decode, data, args.repeat)
            results[sample_name] = {
                "bytes": len(data),
                "encode_median": statistics.median(encode_times),
                "decode_median": statistics.median(decode_times),
            }

        if args.json_only:
            print(json.dumps({"strategy": name, "results": results}))
            continue

        print(f"Strategy: {name}")
        for sample_name, r in results.items():
            mib = r["bytes"] / (1024 * 1024)
            print(
                f"  {sample_name:<6} {format_bytes(int(r['bytes'])):>10}"
                f"  encode={r['encode_median'] * 1000:.1f}ms"
                f" ({mib / r['encode_median']:.1f} MiB/s)"
                f"  decode={r['decode_median'] * 1000:.1f}ms"
                f" ({mib / r['decode_median']:.1f} MiB/s)"
            )
        print()


if __name__ == "__main__":
    main()
