from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import typer

from .config import Settings
from .errors import PreferenceError
from .logging import configure_logging
from .preferences import Preferences
from .scopes import open_store
from .store.base import MappingStore
from .values import Long, PrefKind

app = typer.Typer(help="Inspect and edit persisted preference scopes")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@app.callback()
def main(
    ctx: typer.Context,
    prefs_dir: Path | None = typer.Option(None, help="Directory holding the scope files"),
    log_level: str | None = typer.Option(None, help="Logging level"),
) -> None:
    """Preference scope utility."""
    configure_logging(log_level)
    overrides: dict[str, object] = {}
    if prefs_dir is not None:
        overrides["prefs_dir"] = prefs_dir
    ctx.obj = Settings(**overrides)


def _fail(exc: PreferenceError) -> NoReturn:
    typer.echo(f"error [{exc.category.value}]: {exc}", err=True)
    raise typer.Exit(code=1)


def _open_store(ctx: typer.Context, scope: str) -> MappingStore:
    try:
        return open_store(scope, ctx.obj)
    except PreferenceError as exc:
        _fail(exc)


def _format(kind: PrefKind, value: object) -> str:
    if kind is PrefKind.STRING_SET:
        return json.dumps(sorted(value))
    return json.dumps(value)


def parse_value(kind: PrefKind, raw: str) -> object:
    """Turn command-line text into a value of ``kind``.

    Objects stay as their JSON text, which is how the object path stores them.
    """
    if kind is PrefKind.BOOLEAN:
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise typer.BadParameter(f"not a boolean: {raw!r}")
    if kind is PrefKind.STRING:
        return raw
    if kind is PrefKind.STRING_SET:
        return frozenset(part.strip() for part in raw.split(",") if part.strip())
    if kind is PrefKind.OBJECT:
        try:
            json.loads(raw)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"not valid JSON: {exc}") from exc
        return raw
    try:
        if kind is PrefKind.FLOAT:
            return float(raw)
        if kind is PrefKind.LONG:
            return Long(int(raw))
        return int(raw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def show(ctx: typer.Context, scope: str) -> None:
    """Print every entry in SCOPE with its kind."""
    store = _open_store(ctx, scope)
    for key, entry in sorted(store.entries().items()):
        typer.echo(f"{key} ({entry.kind.value}) = {_format(entry.kind, entry.value)}")


@app.command()
def get(ctx: typer.Context, scope: str, key: str) -> None:
    """Print the value stored under KEY."""
    entry = _open_store(ctx, scope).entries().get(key)
    if entry is None:
        typer.echo(f"{key} is not set in {scope}", err=True)
        raise typer.Exit(code=1)
    typer.echo(_format(entry.kind, entry.value))


@app.command("set")
def set_(
    ctx: typer.Context,
    scope: str,
    key: str,
    value: str,
    kind: PrefKind = typer.Option(PrefKind.STRING, help="Kind to store the value as"),
) -> None:
    """Store VALUE under KEY. Sets are comma separated; objects are JSON."""
    prefs = Preferences(_open_store(ctx, scope))
    parsed = parse_value(kind, value)
    try:
        prefs.put(key, parsed)
    except PreferenceError as exc:
        _fail(exc)


@app.command()
def remove(ctx: typer.Context, scope: str, key: str) -> None:
    """Delete KEY from SCOPE."""
    prefs = Preferences(_open_store(ctx, scope))
    try:
        prefs.remove(key)
    except PreferenceError as exc:
        _fail(exc)


if __name__ == "__main__":  # pragma: no cover
    app()
