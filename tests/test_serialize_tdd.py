from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from show_bingo.card import BingoCard
from show_bingo.rng import create_rng
from show_bingo.serialize import build_run_meta, card_snapshot, emit_card_json, grid_hash
from show_bingo.shows import InMemoryShowProvider, ShowRecord


def ready_card() -> BingoCard:
    provider = InMemoryShowProvider()
    provider.add(ShowRecord(id=2, phrases=tuple(f"P{i}" for i in range(30)), show_title="Lost"))
    card = BingoCard(provider, rng=create_rng("py_random", 8))
    asyncio.run(card.load(2))
    return card


def test_grid_hash_stable_and_distinct():
    a = ["a"] * 25
    b = ["b"] * 25
    assert grid_hash(a) == grid_hash(list(a))
    assert grid_hash(a) != grid_hash(b)
    assert grid_hash(a).startswith("sha256:")


def test_snapshot_reflects_play_state():
    card = ready_card()
    for i in (0, 6, 18, 24):
        card.toggle(i)
    snap = card_snapshot(card)
    assert snap["selection"] == [0, 6, 12, 18, 24]
    assert snap["winning_lines"] == ["diag-main"]
    assert snap["alert_visible"] is True
    assert snap["rows"][2][2] == "FREE SPACE"
    assert snap["show"]["show_title"] == "Lost"


def test_snapshot_requires_grid():
    with pytest.raises(ValueError):
        card_snapshot(BingoCard())


def test_emit_refuses_overwrite(tmp_path: Path):
    card = ready_card()
    meta = build_run_meta(app_version="0", params_hash="sha256:x", seed=8, rng_engine="py_random")
    out = tmp_path / "nested" / "card.json"
    emit_card_json(out, card=card, run_meta=meta, mkdirs=True, overwrite=False)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["run_meta"]["seed"] == 8
    assert len(data["card"]["grid"]) == 25
    with pytest.raises(FileExistsError):
        emit_card_json(out, card=card, run_meta=meta, mkdirs=True, overwrite=False)
    emit_card_json(out, card=card, run_meta=meta, mkdirs=True, overwrite=True)
