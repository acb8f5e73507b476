from __future__ import annotations

import asyncio
import dataclasses
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.console import Console

from .card import BingoCard, CardStatus
from .config import resolve_parameters
from .errors import CardNotReadyError, InsufficientPhrasesError
from .logging_setup import make_console, setup_logging
from .render import bingo_panel, card_table
from .rng import create_rng
from .serialize import build_run_meta, emit_card_json
from .shows import HttpShowProvider, InMemoryShowProvider, ShowProvider, load_show_file
from .version import __version__

app = typer.Typer(help="TV show bingo card CLI")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show application version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    pass


def _is_cell_number(text: str) -> bool:
    return text.isascii() and text.isdecimal()


def _parse_marks(raw: Optional[str]) -> List[int]:
    if not raw:
        return []
    marks: List[int] = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            marks.append(int(item))
        except ValueError:
            raise typer.BadParameter(f"not a cell index: {item!r}", param_hint="--mark") from None
        if not 0 <= marks[-1] <= 24:
            raise typer.BadParameter(f"cell index out of range: {item}", param_hint="--mark")
    return marks


def _prepare(
    *,
    config: Optional[str],
    show_file: Optional[str],
    show_id: Optional[str],
    api_url: Optional[str],
    seed: Optional[int],
    log_level: Optional[str],
    colors: Optional[str],
    out_card: Optional[str] = None,
) -> Tuple[BingoCard, Any, Dict[str, Any], str]:
    cli_overrides: Dict[str, Any] = {}
    if api_url:
        cli_overrides["api_base_url"] = api_url
    if seed is not None:
        cli_overrides["seed.value"] = seed
    if log_level:
        cli_overrides["log_level"] = log_level
    if colors:
        cli_overrides["colors"] = colors
    if out_card:
        cli_overrides["out_card"] = out_card

    resolved, params_hash, _cfg_path = resolve_parameters(
        config_path_str=config, cli_overrides=cli_overrides
    )
    setup_logging(
        level=str(resolved.get("log_level", "INFO")),
        log_file=resolved.get("log_file"),
        json_format=(str(resolved.get("log_format", "text")) == "json"),
        colors=str(resolved.get("colors", "auto")),
    )

    if bool(show_file) == bool(show_id):
        typer.echo("Pass exactly one of --show-file or --show-id", err=True)
        raise typer.Exit(code=2)

    provider: ShowProvider
    load_id: Any
    if show_file:
        record = load_show_file(Path(show_file))
        if record.id is None:
            record = dataclasses.replace(record, id=1)
        if resolved.get("center_label") and not record.center_square:
            record = dataclasses.replace(record, center_square=str(resolved["center_label"]))
        memory = InMemoryShowProvider()
        memory.add(record)
        provider = memory
        load_id = record.id
    else:
        provider = HttpShowProvider(
            str(resolved.get("api_base_url", "")),
            timeout=float(resolved.get("http_timeout_sec", 10.0)),
        )
        load_id = show_id

    seed_cfg = resolved.get("seed") or {}
    rng = create_rng(str(seed_cfg.get("engine", "py_random")), seed_cfg.get("value"))
    card = BingoCard(provider, rng=rng)
    return card, load_id, resolved, params_hash


def _load_or_exit(card: BingoCard, load_id: Any) -> None:
    status = asyncio.run(card.load(load_id))
    if status is CardStatus.READY:
        return
    failure = card.failure()
    typer.echo(f"Error: {failure}", err=True)
    if isinstance(failure, InsufficientPhrasesError) and failure.edit_path:
        typer.echo(f"Add phrases in the show editor: {failure.edit_path}", err=True)
    raise typer.Exit(code=1)


def _print_card(card: BingoCard, console: Console) -> None:
    console.print(card_table(card))
    if card.alert_visible():
        console.print(bingo_panel(card))


@app.command()
def card(
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    show_file: str = typer.Option(None, "--show-file", help="Show record file (YAML/JSON)"),
    show_id: str = typer.Option(None, "--show-id", help="Show id to fetch from the API"),
    api_url: str = typer.Option(None, "--api-url", help="Base URL of the show API"),
    seed: int = typer.Option(None, "--seed", help="Seed for a reproducible card"),
    mark: str = typer.Option(None, "--mark", help="Comma separated cell indices to toggle"),
    out_card: str = typer.Option(None, "--out-card", help="card.json output path"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
) -> None:
    """Deal one card, apply marks and print it."""
    marks = _parse_marks(mark)
    bingo, load_id, resolved, params_hash = _prepare(
        config=config,
        show_file=show_file,
        show_id=show_id,
        api_url=api_url,
        seed=seed,
        log_level=log_level,
        colors=colors,
        out_card=out_card,
    )
    _load_or_exit(bingo, load_id)
    console = make_console(str(resolved.get("colors", "auto")))

    for idx in marks:
        bingo.toggle(idx)
    _print_card(bingo, console)

    out_path = resolved.get("out_card")
    if out_path:
        seed_cfg = resolved.get("seed") or {}
        run_meta = build_run_meta(
            app_version=__version__,
            params_hash=params_hash,
            seed=seed_cfg.get("value"),
            rng_engine=str(seed_cfg.get("engine", "py_random")),
        )
        try:
            emit_card_json(Path(out_path), card=bingo, run_meta=run_meta, mkdirs=True, overwrite=force)
        except FileExistsError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Card written to {out_path}")

    raise typer.Exit(code=0)


PLAY_HELP = "t N: toggle cell N | g: new card | r: reset | d: dismiss | q: quit"


@app.command()
def play(
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    show_file: str = typer.Option(None, "--show-file", help="Show record file (YAML/JSON)"),
    show_id: str = typer.Option(None, "--show-id", help="Show id to fetch from the API"),
    api_url: str = typer.Option(None, "--api-url", help="Base URL of the show API"),
    seed: int = typer.Option(None, "--seed", help="Seed for a reproducible card"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
) -> None:
    """Interactive game in the terminal."""
    bingo, load_id, resolved, _hash = _prepare(
        config=config,
        show_file=show_file,
        show_id=show_id,
        api_url=api_url,
        seed=seed,
        log_level=log_level,
        colors=colors,
    )
    _load_or_exit(bingo, load_id)
    console = make_console(str(resolved.get("colors", "auto")))
    _print_card(bingo, console)
    typer.echo(PLAY_HELP)

    while True:
        try:
            line = typer.prompt(">", default="", show_default=False)
        except typer.Abort:
            break
        parts = line.strip().split()
        if not parts:
            continue
        cmd = parts[0].lower()
        try:
            if cmd in ("q", "quit"):
                break
            elif cmd in ("t", "toggle") and len(parts) == 2 and _is_cell_number(parts[1]):
                bingo.toggle(int(parts[1]))
            elif cmd in ("g", "regenerate"):
                bingo.regenerate()
            elif cmd in ("r", "reset"):
                bingo.reset()
            elif cmd in ("d", "dismiss"):
                bingo.dismiss_alert()
            else:
                typer.echo(PLAY_HELP)
                continue
        except IndexError as e:
            typer.echo(f"Error: {e}", err=True)
            continue
        except CardNotReadyError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
        _print_card(bingo, console)

    raise typer.Exit(code=0)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
