import pytest
import numpy as np
from scipy.stats import norm
from cjrank.core.base import RankedItem, ranking_order
from cjrank.errors import InsufficientItemsError
from cjrank.models.thurstone import ThurstoneCaseV, rank_items, thurstone_scores
from cjrank.simulate import simulate_ranking


Z_99 = norm.ppf(0.99)


def random_win_matrix(num_items, max_count=3, seed=0):
    rng = np.random.default_rng(seed=seed)
    win_matrix = rng.integers(0, max_count + 1, size=(num_items, num_items))
    np.fill_diagonal(win_matrix, 0)
    return win_matrix


def test_three_items():
    # A beats B, A beats C, B beats C
    win_matrix = np.array([
        [0, 1, 1],
        [0, 0, 1],
        [0, 0, 0],
    ])
    scores = thurstone_scores(win_matrix)
    assert scores[0] > scores[1] > scores[2]
    assert scores.sum() == pytest.approx(0.0, abs=1e-9)
    assert scores[0] == pytest.approx(Z_99, abs=1e-9)
    assert scores[1] == pytest.approx(0.0, abs=1e-9)
    assert scores[2] == pytest.approx(-Z_99, abs=1e-9)

    ranked = rank_items(['A', 'B', 'C'], win_matrix)
    assert [entry.item for entry in ranked] == ['A', 'B', 'C']
    assert [entry.win_count for entry in ranked] == [2, 1, 0]


def test_two_items():
    scores = thurstone_scores(np.array([[0, 1], [0, 0]]))
    assert scores[0] == pytest.approx(2.326, abs=1e-3)
    assert scores[0] == pytest.approx(Z_99, abs=1e-9)
    assert scores[1] == pytest.approx(-Z_99, abs=1e-9)
    # deterministic
    assert np.array_equal(scores, thurstone_scores(np.array([[0, 1], [0, 0]])))


@pytest.mark.parametrize('win_matrix', [np.zeros((1, 1), dtype=int), np.zeros((0, 0), dtype=int)])
def test_not_enough_items(win_matrix):
    with pytest.raises(InsufficientItemsError):
        thurstone_scores(win_matrix)
    with pytest.raises(InsufficientItemsError):
        ThurstoneCaseV(['A'])


def test_no_comparisons():
    scores = thurstone_scores(np.zeros((4, 4), dtype=int))
    assert scores.tolist() == [0.0, 0.0, 0.0, 0.0]
    ranked = rank_items(['w', 'x', 'y', 'z'], np.zeros((4, 4), dtype=int))
    assert [entry.item for entry in ranked] == ['w', 'x', 'y', 'z']


def test_uncompared_pairs_are_skipped():
    win_matrix = np.zeros((4, 4), dtype=int)
    win_matrix[0, 1] = 1
    scores = thurstone_scores(win_matrix)
    # items 2 and 3 were never compared, so their raw scores are 0 rather than a mean over 0.5 probabilities
    assert scores[0] == pytest.approx(Z_99, abs=1e-9)
    assert scores[1] == pytest.approx(-Z_99, abs=1e-9)
    assert scores[2] == pytest.approx(0.0, abs=1e-9)
    assert scores[2] == scores[3]
    ranked = rank_items(['A', 'B', 'C', 'D'], win_matrix)
    assert [entry.item for entry in ranked] == ['A', 'C', 'D', 'B']


def test_repeated_trials():
    win_matrix = np.array([[0, 3], [1, 0]])
    scores = thurstone_scores(win_matrix)
    assert scores[0] == pytest.approx(norm.ppf(0.75), abs=1e-9)
    assert scores[1] == pytest.approx(-norm.ppf(0.75), abs=1e-9)


def test_even_split_scores_zero():
    win_matrix = np.array([[0, 2], [2, 0]])
    assert thurstone_scores(win_matrix) == pytest.approx([0.0, 0.0], abs=1e-12)


def test_clip_bounds_are_tunable():
    win_matrix = np.array([[0, 1], [0, 0]])
    scores = thurstone_scores(win_matrix, p_min=0.05, p_max=0.95)
    assert scores[0] == pytest.approx(norm.ppf(0.95), abs=1e-9)


@pytest.mark.parametrize('bounds', [(0.0, 0.99), (0.01, 1.0), (0.6, 0.9), (0.1, 0.4), (0.5, 0.5)])
def test_invalid_clip_bounds(bounds):
    with pytest.raises(ValueError):
        thurstone_scores(np.array([[0, 1], [0, 0]]), p_min=bounds[0], p_max=bounds[1])
    with pytest.raises(ValueError):
        ThurstoneCaseV(['A', 'B'], p_min=bounds[0], p_max=bounds[1])


@pytest.mark.parametrize(
    'win_matrix',
    [
        np.zeros((2, 3)),
        np.array([[0, -1], [1, 0]]),
        np.array([[1, 0], [0, 0]]),
        np.array([[0, 0.5], [0, 0]]),
    ],
)
def test_invalid_win_matrix(win_matrix):
    with pytest.raises(ValueError):
        thurstone_scores(win_matrix)


@pytest.mark.parametrize('seed', range(5))
def test_scores_are_centered(seed):
    _, state = simulate_ranking(num_items=8, seed=seed)
    assert thurstone_scores(state.win_matrix).sum() == pytest.approx(0.0, abs=1e-9)
    assert thurstone_scores(random_win_matrix(9, seed=seed)).sum() == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize('seed', range(5))
def test_monotonicity(seed):
    win_matrix = random_win_matrix(6, seed=seed)
    # item 0 beats everything and never loses, item 1 never wins
    win_matrix[0, 1:] = np.maximum(win_matrix[0, 1:], 1)
    win_matrix[1:, 0] = 0
    win_matrix[1, :] = 0
    scores = thurstone_scores(win_matrix)
    assert scores[0] >= scores[1]
    assert scores[0] == scores.max()


@pytest.mark.parametrize('seed', range(5))
def test_relabeling_symmetry(seed):
    win_matrix = random_win_matrix(7, seed=seed)
    perm = np.random.default_rng(seed=seed + 100).permutation(7)
    scores = thurstone_scores(win_matrix)
    permuted_scores = thurstone_scores(win_matrix[np.ix_(perm, perm)])
    np.testing.assert_allclose(permuted_scores, scores[perm], rtol=0.0, atol=1e-12)


def test_rank_items_length_mismatch():
    with pytest.raises(ValueError):
        rank_items(['A', 'B', 'C'], np.zeros((2, 2), dtype=int))


def test_ranking_order_tie_break():
    scores = np.array([0.5, 1.0, 0.5, -0.0, 0.0, 1.0 + 1e-15])
    assert ranking_order(scores).tolist() == [1, 5, 0, 2, 3, 4]


def test_model_fit_and_rank():
    model = ThurstoneCaseV(['A', 'B', 'C'])
    win_matrix = [[0, 0, 0], [1, 0, 1], [1, 0, 0]]
    scores = model.fit(win_matrix)
    assert model.ratings is scores
    ranked = model.rank()
    assert ranked[0] == RankedItem('B', pytest.approx(Z_99, abs=1e-9), 2)
    assert [entry.item for entry in ranked] == ['B', 'C', 'A']
    assert isinstance(ranked[0].score, float)
    assert isinstance(ranked[0].win_count, int)


def test_model_fit_is_idempotent():
    model = ThurstoneCaseV(list('abcde'))
    win_matrix = random_win_matrix(5, seed=1)
    np.testing.assert_array_equal(model.fit(win_matrix), model.fit(win_matrix))


def test_model_errors():
    model = ThurstoneCaseV(['A', 'B', 'C'])
    with pytest.raises(RuntimeError):
        model.rank()
    with pytest.raises(ValueError):
        model.fit(np.zeros((2, 2), dtype=int))


def test_print_leaderboard(capsys):
    model = ThurstoneCaseV(['first idea', 'second idea'])
    model.fit([[0, 1], [0, 0]])
    model.print_leaderboard(num_places=1)
    out = capsys.readouterr().out
    assert 'first idea' in out
    assert 'second idea' not in out
    assert '2.326' in out
