from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from show_bingo.selection import SelectionState, initial_selection


def test_starts_with_center_marked():
    assert SelectionState().current_selection() == {12}


def test_toggle_flips_membership():
    s = SelectionState()
    assert s.toggle(3) is True
    assert 3 in s.current_selection()
    assert s.toggle(3) is False
    assert 3 not in s.current_selection()


def test_center_can_be_unmarked():
    s = SelectionState()
    s.toggle(12)
    assert s.current_selection() == frozenset()


@pytest.mark.parametrize("bad", [-1, 25, 100])
def test_out_of_range_index_is_a_contract_error(bad):
    with pytest.raises(IndexError):
        SelectionState().toggle(bad)


def test_reset_and_regenerate_converge_to_same_state():
    a = SelectionState()
    b = SelectionState()
    for i in (0, 5, 12, 24):
        a.toggle(i)
        b.toggle(i)
    a.reset()
    b.regenerate()
    assert a.current_selection() == b.current_selection() == initial_selection() == {12}


def test_returned_selection_is_a_snapshot():
    s = SelectionState()
    snap = s.current_selection()
    s.toggle(0)
    assert snap == {12}


@given(
    prefix=st.lists(st.integers(min_value=0, max_value=24), max_size=30),
    index=st.integers(min_value=0, max_value=24),
)
def test_double_toggle_is_identity(prefix, index):
    s = SelectionState()
    for i in prefix:
        s.toggle(i)
    before = s.current_selection()
    s.toggle(index)
    s.toggle(index)
    assert s.current_selection() == before
