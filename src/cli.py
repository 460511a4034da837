"""CLI interface for folio."""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content import ContentStore, RenderMode, highlight_css
from folio.errors import FolioError

app = typer.Typer(
    name="folio",
    help="Index and render a directory of Markdown posts.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Folio - Markdown content store for static blogs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .folio.toml file."),
]
DirOption = Annotated[
    Optional[Path],
    typer.Option("--dir", "-d", help="Content directory (overrides config)."),
]


def _build_store(config_path: Optional[Path], content_dir: Optional[Path]) -> ContentStore:
    config: FolioConfig = load_config(config_path)
    config = merge_cli_overrides(
        config,
        content_dir=str(content_dir) if content_dir is not None else None,
    )
    return ContentStore.from_config(config)


def _fail(exc: FolioError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(1)


@app.command("list")
def list_cmd(
    config: ConfigOption = None,
    directory: DirOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of a table.")] = False,
) -> None:
    """List posts sorted by date, then title."""
    store = _build_store(config, directory)
    try:
        items = store.list_summaries()
    except FolioError as exc:
        _fail(exc)

    if as_json:
        typer.echo(json.dumps([item.to_props() for item in items], indent=2, default=str))
        return

    if not items:
        console.print("[yellow]No posts found.[/yellow]")
        return

    table = Table(title=f"Posts in {store.content_dir}")
    table.add_column("Date")
    table.add_column("ID")
    table.add_column("Title")
    for item in items:
        table.add_row(item.date or "-", item.id, item.title or "-")
    console.print(table)


@app.command("paths")
def paths_cmd(
    config: ConfigOption = None,
    directory: DirOption = None,
) -> None:
    """Print routing descriptors for every post as JSON."""
    store = _build_store(config, directory)
    try:
        descriptors = store.list_identifiers()
    except FolioError as exc:
        _fail(exc)
    typer.echo(json.dumps([d.model_dump() for d in descriptors], indent=2))


@app.command("show")
def show_cmd(
    item_id: Annotated[str, typer.Argument(help="Post id (file name without extension).")],
    config: ConfigOption = None,
    directory: DirOption = None,
    raw: Annotated[bool, typer.Option("--raw", help="Print the raw Markdown body.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Emit page props as JSON.")] = False,
) -> None:
    """Show a single post, rendered to HTML unless --raw is given."""
    mode = RenderMode.RAW_BODY if raw else None
    store = _build_store(config, directory)
    try:
        item = store.get_item(item_id, mode=mode)
    except FolioError as exc:
        _fail(exc)

    if as_json:
        typer.echo(json.dumps(item.to_props(), indent=2, default=str))
        return

    for key, value in item.metadata.items():
        console.print(f"[bold]{key}:[/bold] {value}", highlight=False)
    console.print()
    typer.echo(item.body if item.body is not None else item.rendered_html or "")


@app.command("css")
def css_cmd(
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="Pygments style name."),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Print the stylesheet for highlighted code blocks."""
    cfg = load_config(config)
    try:
        css = highlight_css(style or cfg.render.highlight_style)
    except FolioError as exc:
        _fail(exc)
    typer.echo(css)


if __name__ == "__main__":
    app()
