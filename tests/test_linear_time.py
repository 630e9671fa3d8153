"""Parse time grows linearly with input size.

Each case parses the same repeated unit at two sizes and compares the best
of several runs. The tolerance is wide so shared CI machines do not flake;
quadratic behavior would exceed it by an order of magnitude.
"""

import time

import pytest

from subrayado import markdown

SMALL = 500
FACTOR = 8
# Linear growth gives ~FACTOR; quadratic would give ~FACTOR**2
MAX_RATIO = FACTOR * 4


def best_time(source: str, runs: int = 3) -> float:
    best = float("inf")
    for _ in range(runs):
        start = time.perf_counter()
        markdown(source)
        best = min(best, time.perf_counter() - start)
    return best


@pytest.mark.slow
@pytest.mark.parametrize(
    "unit",
    [
        pytest.param("_word_ __word__ ", id="resolved-spans"),
        pytest.param("_word ", id="unclosed-italics"),
        pytest.param("__a _b _c ", id="unclosed-nested"),
        pytest.param("a_b_c__d__e ", id="intraword"),
        pytest.param("__a _b__ c_ ", id="interleaved"),
        pytest.param("\\_\\\\\\# ", id="escapes"),
        pytest.param("# header _word_\n", id="repeated-lines"),
        pytest.param("_", id="bare-underscores"),
    ],
)
def test_linear_growth(unit: str) -> None:
    small = best_time(unit * SMALL)
    large = best_time(unit * SMALL * FACTOR)
    # Guard against timer resolution on very fast runs
    small = max(small, 1e-4)
    assert large / small < MAX_RATIO, f"{large:.4f}s vs {small:.4f}s"


@pytest.mark.slow
def test_deep_discard_is_linear() -> None:
    """An unclosed bold wrapping many resolved italics is flattened once."""
    body = "_x_ " * (SMALL * FACTOR)
    small = best_time("__" + body[: len(body) // FACTOR])
    large = best_time("__" + body)
    small = max(small, 1e-4)
    assert large / small < MAX_RATIO
