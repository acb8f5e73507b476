from __future__ import annotations

import hashlib
import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from .card import BingoCard
from .grid import CENTER_INDEX, grid_rows
from .lines import sorted_line_ids


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file without --force: {path}")
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def grid_hash(grid: Sequence[str]) -> str:
    payload = json.dumps(list(grid), ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def build_run_meta(
    *, app_version: str, params_hash: str, seed: Optional[int], rng_engine: str
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "hash_algorithm": "sha256",
    }


def card_snapshot(card: BingoCard) -> Dict[str, object]:
    grid = card.current_grid()
    show = card.show()
    if grid is None or show is None:
        raise ValueError("card has no grid to serialize")
    return {
        "show": {
            "id": show.id,
            "show_title": show.show_title,
            "game_title": show.game_title,
        },
        "grid": list(grid),
        "rows": grid_rows(grid),
        "center_index": CENTER_INDEX,
        "grid_hash": grid_hash(grid),
        "selection": sorted(card.current_selection()),
        "winning_lines": sorted_line_ids(card.current_winning_lines()),
        "alert_visible": card.alert_visible(),
    }


def emit_card_json(
    path: Path, *, card: BingoCard, run_meta: Dict[str, object], mkdirs: bool, overwrite: bool
) -> None:
    data = {"run_meta": run_meta, "card": card_snapshot(card)}
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)
