import pytest

from ..errors import InvalidScore
from .scores import check_score, round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0), (12.5, 13), (62.5, 63), (62.4999, 62), (99.5, 100), (30.0, 30)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_check_score_accepts_bounds():
    assert check_score(0, "low") == 0
    assert check_score(100, "high") == 100


@pytest.mark.parametrize("score", [-1, 101, 1000])
def test_check_score_rejects_out_of_range(score):
    with pytest.raises(InvalidScore, match=r"\[0; 100\]"):
        check_score(score, "relation")
