"""Benchmark parse and render throughput.

Run:
    python benchmarks/benchmark_parse.py
"""

import time

from subrayado import Markdown, parse, render

CORPUS = {
    "plain": "just some words without any markup at all " * 50,
    "spans": "__word _word_ word__ w_ord_ word_12_ " * 50,
    "headers": "# header __bold__ _italic_\n" * 50,
    "literal": "__a _b__ c_ _never closed a_b c " * 50,
    "escapes": "\\_x\\_ \\\\ \\# " * 100,
}


def bench(fn, arg, iterations: int = 200) -> float:
    """Best-of-5 seconds per call."""
    for _ in range(10):
        fn(arg)
    best = float("inf")
    for _ in range(5):
        start = time.perf_counter()
        for _ in range(iterations):
            fn(arg)
        best = min(best, (time.perf_counter() - start) / iterations)
    return best


def main() -> None:
    md = Markdown()
    print(f"{'case':<10} {'chars':>7} {'parse µs':>10} {'render µs':>10} {'MB/s':>8}")
    for name, source in CORPUS.items():
        doc = parse(source)
        t_parse = bench(parse, source)
        t_render = bench(render, doc)
        total = bench(md, source)
        mbps = len(source) / total / 1e6
        print(
            f"{name:<10} {len(source):>7} {t_parse * 1e6:>10.1f} {t_render * 1e6:>10.1f} {mbps:>8.2f}"
        )


if __name__ == "__main__":
    main()
