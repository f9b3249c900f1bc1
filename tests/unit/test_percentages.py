"""Completion percentage rounding."""

import pytest

from thinkscope.progress.aggregator import completion_percentage


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 0, 0),
        (3, 0, 0),
        (0, 5, 0),
        (5, 5, 100),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds up
        (1, 40, 3),  # 2.5 rounds up
        (7, 20, 35),
    ],
)
def test_completion_percentage(completed: int, total: int, expected: int) -> None:
    assert completion_percentage(completed, total) == expected


def test_percentage_stays_within_bounds() -> None:
    for total in range(1, 60):
        values = [completion_percentage(k, total) for k in range(total + 1)]
        assert values[0] == 0
        assert values[-1] == 100
        assert values == sorted(values)
