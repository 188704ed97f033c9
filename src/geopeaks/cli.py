from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.markup import escape

from geopeaks import api
from geopeaks.config import (
    StoreConfig,
    get_config,
    logger,
    set_log_level,
)
from geopeaks.console import (
    console,
    info,
    print_error_panel,
    print_key_value,
    print_logo,
    print_seed_table,
    success,
    warning,
)
from geopeaks.core.exceptions import (
    ConfigError,
    GeoPeaksError,
    LocationNotFoundError,
    SearchError,
    StoreConnectionError,
)
from geopeaks.core.locations import GeoSetRegistry
from geopeaks.core.store import GeoStore, get_store

app = typer.Typer(
    name="geopeaks",
    help="geopeaks CLI: Seed, query and export cities and peaks in a Redis geo index.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


def version_callback(value: bool):
    if value:
        print_logo(show_tagline=True, show_version=True)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    host: Annotated[
        str | None,
        typer.Option("--host", help="Store host (env: GEOPEAKS_REDIS_HOST)."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", help="Store port (env: GEOPEAKS_REDIS_PORT)."),
    ] = None,
    db: Annotated[
        int | None,
        typer.Option("--db", help="Logical database index (env: GEOPEAKS_REDIS_DB)."),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show CLI version.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-V", help="Enable DEBUG level logging for geopeaks."
        ),
    ] = False,
):
    """
    Main callback for the geopeaks CLI. Sets logging level and store address.
    """
    set_log_level(verbose)
    if verbose:
        logger.debug("Verbose mode enabled via CLI flag.")

    try:
        ctx.obj = {"config": get_config(host=host, port=port, db=db)}
    except ConfigError as e:
        print_error_panel("Invalid Configuration", str(e))
        raise typer.Exit(code=1)


def _config(ctx: typer.Context) -> StoreConfig:
    if isinstance(ctx.obj, dict) and isinstance(ctx.obj.get("config"), StoreConfig):
        return ctx.obj["config"]
    return get_config()


def _open_store(ctx: typer.Context) -> GeoStore:
    config = _config(ctx)
    try:
        return get_store(config)
    except StoreConnectionError as e:
        logger.debug(f"Connection failure: {e}", exc_info=True)
        print_error_panel(
            "Store Unreachable",
            f"Could not connect to Redis at {config.address}.",
            hint="Start Redis (6.2 or newer) or pass --host/--port.",
        )
        raise typer.Exit(code=1)
    except GeoPeaksError as e:
        _fail(e)


def _fail(e: GeoPeaksError) -> NoReturn:
    if isinstance(e, LocationNotFoundError):
        print_error_panel(
            "Location Not Found",
            str(e),
            hint="Run `geopeaks add` to load the sample cities and peaks.",
        )
    elif isinstance(e, SearchError):
        print_error_panel("Invalid Search", str(e))
    else:
        logger.debug(f"{type(e).__name__}: {e}", exc_info=True)
        print_error_panel("Command Failed", str(e))
    raise typer.Exit(code=1)


@app.command("add")
def add_cmd(ctx: typer.Context):
    """Add sample data for cities and peaks."""
    store = _open_store(ctx)
    info(f"Loading sample data into {store.address}")
    try:
        added = api.seed(store=store)
    except GeoPeaksError as e:
        _fail(e)

    totals = {gs.name: len(gs.seed) for gs in GeoSetRegistry.list_all()}
    print_seed_table(added, totals)
    success("Sample data loaded")


@app.command("lookup")
def lookup_cmd(
    ctx: typer.Context,
    city: Annotated[str, typer.Argument(help="City to look up.", metavar="CITY")],
):
    """Look up the coordinates of a city."""
    store = _open_store(ctx)
    try:
        loc = api.lookup(city, store=store)
    except GeoPeaksError as e:
        _fail(e)

    console.print(
        f"coordinates for {escape(city)}: {loc.longitude:f}, {loc.latitude:f}",
        highlight=False,
    )


@app.command("find")
def find_cmd(
    ctx: typer.Context,
    city: Annotated[
        str, typer.Argument(help="City to search around.", metavar="CITY")
    ],
    radius: Annotated[
        float | None,
        typer.Option("--radius", "-r", help="Search radius (default: 200)."),
    ] = None,
    unit: Annotated[
        str | None,
        typer.Option("--unit", "-u", help="Radius unit: m, km, mi or ft (default: km)."),
    ] = None,
):
    """Find the peaks closest to a city."""
    store = _open_store(ctx)
    try:
        radius, unit = api.resolve_search(radius, unit)
        results = api.find_nearby(city, radius=radius, unit=unit, store=store)
    except GeoPeaksError as e:
        _fail(e)

    console.print(f"Peaks closest to {escape(city)} in the database:", highlight=False)
    if not results:
        warning("No peaks within the search radius.")
        return
    for i, peak in enumerate(results, start=1):
        console.print(
            f"({i}) {escape(peak.name)}, {peak.distance:.0f} {unit}",
            highlight=False,
        )


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    file: Annotated[
        Path,
        typer.Argument(
            help="CSV file to write, suitable for geojson.io.", metavar="FILE"
        ),
    ],
):
    """Export cities and peaks to a CSV file."""
    store = _open_store(ctx)
    try:
        rows = api.export(file, store=store)
    except GeoPeaksError as e:
        _fail(e)

    success(f"Exported {rows} locations")
    print_key_value("File", escape(str(file.resolve())))


@app.command("flush")
def flush_cmd(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation."),
    ] = False,
):
    """Clear the database."""
    config = _config(ctx)
    if not yes:
        typer.confirm(
            f"Delete every key in database {config.db} at {config.host}:{config.port}?",
            abort=True,
        )

    store = _open_store(ctx)
    try:
        api.flush(store=store)
    except GeoPeaksError as e:
        _fail(e)

    success("Database cleared")


def main():
    app()


if __name__ == "__main__":
    main()
