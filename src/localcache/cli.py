from __future__ import annotations

import logging
from pathlib import Path

import typer

from localcache import CacheError, CacheSettings, LocalCache, load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = typer.Typer(help="Local directory cache CLI")

_PATH_OPTION = typer.Option(
    ...,
    "--path",
    "-p",
    help="Directory to cache. Repeatable; only the first path is used.",
)
_KEY_OPTION = typer.Option(..., "--key", "-k", help="Explicit cache key.")
_RESTORE_KEY_OPTION = typer.Option(
    None,
    "--restore-key",
    help="Ordered fallback key prefix. Repeatable.",
)
_CACHE_DIR_OPTION = typer.Option(
    None,
    "--cache-dir",
    help="Root cache directory. Defaults to $CACHE_DIR or /media/cache/.",
)
_SCOPE_OPTION = typer.Option(
    None,
    "--scope",
    help="Cache namespace below the root. Defaults to $GITHUB_REPOSITORY.",
)
_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Optional JSON/YAML settings file.",
    exists=True,
    dir_okay=False,
    readable=True,
)


@app.command("save")
def save(
    paths: list[str] = _PATH_OPTION,
    key: str = _KEY_OPTION,
    cache_dir: str | None = _CACHE_DIR_OPTION,
    scope: str | None = _SCOPE_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
) -> None:
    """Archive a directory into the cache under KEY."""
    cache = _build_cache(config_path=config_path, cache_dir=cache_dir, scope=scope)
    try:
        entry = cache.save(paths, key)
    except CacheError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"saved={entry.name} size={entry.size}")


@app.command("restore")
def restore(
    paths: list[str] = _PATH_OPTION,
    key: str = _KEY_OPTION,
    restore_keys: list[str] | None = _RESTORE_KEY_OPTION,
    cache_dir: str | None = _CACHE_DIR_OPTION,
    scope: str | None = _SCOPE_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
) -> None:
    """Restore a directory from the best matching cache entry."""
    cache = _build_cache(config_path=config_path, cache_dir=cache_dir, scope=scope)
    try:
        matched_key = cache.restore(paths, key, restore_keys)
    except CacheError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if matched_key is None:
        typer.echo(f"no cache entry found for key={key}")
        typer.echo("cache-hit=false")
        return

    typer.echo(f"matched-key={matched_key}")
    typer.echo(f"cache-hit={'true' if matched_key == key else 'false'}")


@app.command("resolve")
def resolve(
    key: str = _KEY_OPTION,
    restore_keys: list[str] | None = _RESTORE_KEY_OPTION,
    cache_dir: str | None = _CACHE_DIR_OPTION,
    scope: str | None = _SCOPE_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
) -> None:
    """Show which cache entry a restore would use, without extracting it."""
    cache = _build_cache(config_path=config_path, cache_dir=cache_dir, scope=scope)
    try:
        match = cache.resolve(key, restore_keys)
    except CacheError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if match is None:
        typer.echo("no cache entry found")
        return

    entry = match.entry
    typer.echo(
        f"matched-key={match.key} exact={str(match.exact).lower()} "
        f"entry={entry.name} size={entry.size} modified_at={entry.modified_at.isoformat()}"
    )


def _build_cache(
    *,
    config_path: Path | None,
    cache_dir: str | None,
    scope: str | None,
) -> LocalCache:
    try:
        settings = load_settings(config_path) if config_path else CacheSettings.from_env()
        overrides = {
            name: value
            for name, value in (("cache_dir", cache_dir), ("scope", scope))
            if value is not None
        }
        if overrides:
            settings = CacheSettings.model_validate(settings.model_dump() | overrides)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    logging.info("local cache directory=%s", settings.directory)
    return LocalCache(settings)


def main() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
