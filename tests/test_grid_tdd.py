from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given, settings, strategies as st

from show_bingo.errors import InsufficientPhrasesError
from show_bingo.grid import (
    CENTER_INDEX,
    DEFAULT_CENTER_LABEL,
    GridGenerator,
    fisher_yates_shuffle,
    generate_grid,
    grid_rows,
)
from show_bingo.rng import ScriptedRandomSource, create_rng


def phrases(n: int) -> list[str]:
    return [f"P{i}" for i in range(1, n + 1)]


def test_exactly_24_phrases_uses_each_once_around_center():
    pool = phrases(24)
    grid = generate_grid(pool, "X", create_rng("py_random", 1))
    assert len(grid) == 25
    assert grid[12] == "X"
    others = list(grid[:12]) + list(grid[13:])
    assert Counter(others) == Counter(pool)


def test_23_phrases_fail():
    with pytest.raises(InsufficientPhrasesError) as exc:
        generate_grid(phrases(23), "X", create_rng("py_random", 1))
    assert exc.value.phrase_count == 23
    assert "at least 24 phrases" in str(exc.value)


def test_insufficient_error_points_to_editor():
    with pytest.raises(InsufficientPhrasesError) as exc:
        GridGenerator(create_rng("py_random", 1)).generate(phrases(3), show_id=7)
    assert exc.value.edit_path == "/show/7/edit"


@pytest.mark.parametrize("center", [None, "", "   "])
def test_missing_center_uses_default_label(center):
    grid = generate_grid(phrases(24), center, create_rng("py_random", 3))
    assert grid[CENTER_INDEX] == DEFAULT_CENTER_LABEL


def test_input_sequence_untouched():
    pool = phrases(30)
    before = list(pool)
    generate_grid(pool, None, create_rng("py_random", 5))
    assert pool == before


def test_fisher_yates_walks_down_from_last_index():
    # With every draw pinned to 0, each step swaps position i with position 0.
    items = ["a", "b", "c", "d"]
    fisher_yates_shuffle(items, ScriptedRandomSource([0, 0, 0]))
    # i=3: d b c a; i=2: c b d a; i=1: b c d a
    assert items == ["b", "c", "d", "a"]


def test_fisher_yates_identity_when_each_draw_is_i():
    items = list(range(10))
    fisher_yates_shuffle(items, ScriptedRandomSource(list(range(9, 0, -1))))
    assert items == list(range(10))


def test_seeded_generation_is_reproducible():
    pool = phrases(40)
    g1 = GridGenerator(create_rng("py_random", 99)).generate(pool, "C")
    g2 = GridGenerator(create_rng("py_random", 99)).generate(pool, "C")
    assert g1 == g2


def test_large_pool_produces_different_subsets():
    pool = phrases(1000)
    gen = GridGenerator(create_rng("py_random", 2024))
    first = gen.generate(pool)
    second = gen.generate(pool)
    assert set(first) != set(second)


def test_shuffle_is_roughly_uniform_over_small_permutations():
    rng = create_rng("py_random", 11)
    counts: Counter = Counter()
    for _ in range(6000):
        items = [0, 1, 2]
        fisher_yates_shuffle(items, rng)
        counts[tuple(items)] += 1
    assert len(counts) == 6
    for c in counts.values():
        assert 800 < c < 1200


@settings(max_examples=60)
@given(
    n=st.integers(min_value=24, max_value=120),
    seed=st.integers(min_value=0, max_value=2**32),
    center=st.one_of(st.none(), st.text(min_size=1, max_size=20)),
)
def test_grid_is_a_24_subset_plus_center(n, seed, center):
    pool = phrases(n)
    grid = generate_grid(pool, center, create_rng("py_random", seed))
    assert len(grid) == 25
    expected_center = center if center and center.strip() else DEFAULT_CENTER_LABEL
    assert grid[12] == expected_center
    others = list(grid[:12]) + list(grid[13:])
    assert len(set(others)) == 24
    assert set(others) <= set(pool)


@given(n=st.integers(min_value=0, max_value=23))
def test_small_pools_always_fail(n):
    with pytest.raises(InsufficientPhrasesError):
        generate_grid(phrases(n), None, create_rng("py_random", 0))


def test_grid_rows_are_row_major():
    rows = grid_rows([str(i) for i in range(25)])
    assert rows[1] == ["5", "6", "7", "8", "9"]
    assert rows[2][2] == str(CENTER_INDEX)
