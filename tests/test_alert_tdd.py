from __future__ import annotations

from show_bingo.alert import AlertCoordinator


def test_hidden_until_count_grows():
    alerts = AlertCoordinator()
    assert alerts.on_toggle(set(), set()) is False
    assert alerts.visible is False
    assert alerts.on_toggle(set(), {"row-0"}) is True
    assert alerts.visible is True
    assert alerts.state.last_win_count == 1


def test_no_retrigger_after_dismiss_when_count_unchanged():
    alerts = AlertCoordinator()
    alerts.on_toggle(set(), {"row-0"})
    alerts.dismiss()
    alerts.on_toggle({"row-0"}, {"row-0"})
    assert alerts.visible is False


def test_decrease_does_not_raise_or_hide():
    alerts = AlertCoordinator()
    alerts.on_toggle(set(), {"row-0"})
    alerts.on_toggle({"row-0"}, set())
    assert alerts.visible is True


def test_second_line_raises_again_after_dismiss():
    alerts = AlertCoordinator()
    alerts.on_toggle(set(), {"row-0"})
    alerts.dismiss()
    alerts.on_toggle({"row-0"}, {"row-0", "col-0"})
    assert alerts.visible is True


def test_clear_returns_to_fresh_state():
    alerts = AlertCoordinator()
    alerts.on_toggle(set(), {"row-0", "col-0"})
    alerts.clear()
    assert alerts.visible is False
    assert alerts.state.last_win_count == 0
