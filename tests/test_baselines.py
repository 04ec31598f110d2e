import pytest
import numpy as np
from cjrank.errors import InsufficientItemsError
from cjrank.models.baselines import WinCount


WIN_MATRIX = np.array([
    [0, 1, 0, 0],
    [0, 0, 2, 0],
    [1, 0, 0, 0],
    [0, 0, 0, 0],
])


def test_wins():
    model = WinCount(['A', 'B', 'C', 'D'], mode='wins')
    assert model.fit(WIN_MATRIX).tolist() == [1.0, 2.0, 1.0, 0.0]
    ranked = model.rank()
    assert [entry.item for entry in ranked] == ['B', 'A', 'C', 'D']
    assert [entry.win_count for entry in ranked] == [2, 1, 1, 0]


def test_win_rate():
    model = WinCount(['A', 'B', 'C', 'D'], mode='win_rate')
    scores = model.fit(WIN_MATRIX)
    assert scores[0] == pytest.approx(0.5)
    assert scores[1] == pytest.approx(2.0 / 3.0)
    assert scores[2] == pytest.approx(1.0 / 3.0)
    assert scores[3] == 0.0


def test_invalid_mode():
    with pytest.raises(ValueError):
        WinCount(['A', 'B'], mode='elo')


def test_not_enough_items():
    with pytest.raises(InsufficientItemsError):
        WinCount(['A'])
