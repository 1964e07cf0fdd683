"""Typer-based admin CLI for the scorekeeper store."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from .exceptions import NotFoundError
from .loader import load_rules_from_yaml
from .models import Rule
from .runtime import create_store
from .settings import StoreSettings, get_settings
from .stores import GameStore
from .version import __version__

logger = logging.getLogger(__name__)

app = typer.Typer(help="Scorekeeper store administration.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    redis_url: Optional[str] = typer.Option(
        None,
        "--redis-url",
        help="Redis connection string (SCOREKEEPER_REDIS_URL).",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Store backend: redis or memory (SCOREKEEPER_BACKEND).",
    ),
) -> None:
    """Resolves settings shared by all commands."""

    overrides: dict[str, Any] = {}
    if redis_url is not None:
        overrides["redis_url"] = redis_url
    if backend is not None:
        overrides["backend"] = backend
    try:
        settings = StoreSettings(**overrides) if overrides else get_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid store settings: {exc}") from exc

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s - %(message)s")
    ctx.obj = settings


def _run(ctx: typer.Context, action: Callable[[GameStore], Awaitable[Any]], *, writes: bool = False) -> Any:
    settings: StoreSettings = ctx.obj
    if writes and settings.backend == "memory":
        typer.echo("The memory backend keeps nothing between runs; use --backend redis", err=True)
        raise typer.Exit(code=1)

    async def _main() -> Any:
        store = await create_store(settings)
        try:
            return await action(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_main())
    except NotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except RedisError as exc:
        logger.error("Store unavailable: %s", exc)
        raise typer.Exit(code=2) from exc


def _echo(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [p.model_dump(mode="json", by_alias=True) if isinstance(p, BaseModel) else p for p in payload]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command(name="ping")
def ping(ctx: typer.Context) -> None:
    """Checks that the store backend is reachable."""

    async def _ping(store: GameStore) -> None:
        await store.open()

    _run(ctx, _ping)
    _echo({"status": "ok", "backend": ctx.obj.backend})


@app.command(name="flush")
def flush(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", help="Confirm wiping every collection and index."),
) -> None:
    """Deletes all players, rules, events and indexes."""

    if not yes:
        typer.echo("Refusing to flush without --yes", err=True)
        raise typer.Exit(code=1)

    async def _flush(store: GameStore) -> None:
        await store.flush_db()

    _run(ctx, _flush, writes=True)
    typer.echo("Flushed")


@app.command(name="rules")
def list_rules(ctx: typer.Context) -> None:
    """Lists all rules."""

    _echo(_run(ctx, lambda store: store.list_rules()))


@app.command(name="rule")
def get_rule(ctx: typer.Context, code: str = typer.Argument(..., help="Rule code")) -> None:
    """Shows one rule."""

    _echo(_run(ctx, lambda store: store.get_rule(code)))


@app.command(name="save-rule")
def save_rule(
    ctx: typer.Context,
    code: str = typer.Option(..., "--code", help="Rule code"),
    desc: str = typer.Option("", "--desc", help="Rule description"),
    points: int = typer.Option(..., "--points", help="Points per trigger"),
) -> None:
    """Creates or replaces a rule."""

    rule = Rule(code=code, description=desc, points=points)

    async def _save(store: GameStore) -> None:
        await store.save_rule(rule)

    _run(ctx, _save, writes=True)
    _echo(rule)


@app.command(name="import-rules")
def import_rules(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="YAML file with rule definitions"),
) -> None:
    """Upserts every rule from a YAML file."""

    try:
        rules = load_rules_from_yaml(file_path)
    except (OSError, ValueError) as exc:
        typer.echo(f"Cannot load rules: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    async def _import(store: GameStore) -> None:
        for rule in rules:
            await store.save_rule(rule)

    _run(ctx, _import, writes=True)
    typer.echo(f"Imported {len(rules)} rules")


@app.command(name="players")
def list_players(ctx: typer.Context) -> None:
    """Lists all players."""

    _echo(_run(ctx, lambda store: store.list_players()))


@app.command(name="events")
def player_events(
    ctx: typer.Context,
    player: str = typer.Argument(..., help="Player name"),
    count: int = typer.Option(10, "--count", min=1, help="Max number of events, newest first"),
) -> None:
    """Shows the most recent events of a player."""

    _echo(_run(ctx, lambda store: store.get_player_events(player, count)))


@app.command(name="reindex")
def reindex(ctx: typer.Context, player: str = typer.Argument(..., help="Player name")) -> None:
    """Rebuilds a player's event index from stored events."""

    indexed = _run(ctx, lambda store: store.reindex_player_events(player), writes=True)
    typer.echo(f"Indexed {indexed} events for {player}")


@app.command(name="version")
def version() -> None:
    """Prints the package version."""

    typer.echo(__version__)


def main() -> None:
    """Entry point for python -m scorekeeper.cli."""

    app()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
