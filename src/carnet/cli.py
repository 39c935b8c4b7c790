"""CLI interface for carnet."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from carnet.config import CarnetConfig, load_config, merge_cli_overrides
from carnet.core import build_indexes, check_posts, create_post
from carnet.errors import BuildReport
from carnet.posts.dates import format_date
from carnet.posts.listing import select_posts
from carnet.posts.models import Language
from carnet.posts.reader import PostReader
from carnet.publishers import PUBLISHERS

app = typer.Typer(
    name="carnet",
    help="List, check, and index the posts of a bilingual Markdown blog.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from carnet import __version__

        console.print(f"carnet {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _config(ctx: typer.Context) -> CarnetConfig:
    return ctx.obj["config"]


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .carnet.toml file."),
    ] = None,
    posts_dir: Annotated[
        Optional[Path],
        typer.Option("--posts", help="Directory holding the post files."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Carnet - listings for a bilingual blog."""
    _setup_logging(verbose)
    try:
        config = load_config(config_path)
        config = merge_cli_overrides(
            config, posts_dir=str(posts_dir) if posts_dir is not None else None
        )
    except (ValidationError, ValueError) as exc:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(1) from exc
    ctx.obj = {"config": config}


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    lang: Annotated[
        Optional[Language],
        typer.Option("--lang", "-l", help="Only posts in this language."),
    ] = None,
    category: Annotated[
        Optional[str],
        typer.Option("--category", help="Only posts in this category."),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Show at most this many posts."),
    ] = None,
    drafts: Annotated[
        bool,
        typer.Option("--drafts", help="Include draft posts."),
    ] = False,
) -> None:
    """List posts, newest first."""
    config = _config(ctx)
    posts = PostReader(config).read_all()
    selected = select_posts(
        posts, language=lang, category=category, limit=limit, include_drafts=drafts
    )
    if not selected:
        console.print("[yellow]No posts found.[/yellow]")
        raise typer.Exit(0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Lang")
    table.add_column("Category")
    table.add_column("Title")
    table.add_column("URL", overflow="fold")
    for post in selected:
        title = escape(post.title)
        if post.draft:
            title += " [dim](draft)[/dim]"
        table.add_row(
            format_date(post.date, post.language, config.listing.date_style),
            post.language.value,
            post.category,
            title,
            f"{config.site.base_url}{post.url}",
        )
    console.print(table)
    console.print(f"{len(selected)} post(s)")


@app.command()
def build(
    ctx: typer.Context,
    output_format: Annotated[
        Optional[list[str]],
        typer.Option("--format", "-f", help=f"Output format: {', '.join(PUBLISHERS)}."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Directory for the index pages."),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Posts on each language index."),
    ] = None,
) -> None:
    """Write the language and category index pages."""
    for name in output_format or []:
        if name.lower() not in PUBLISHERS:
            err_console.print(f"[red]Error:[/red] Unsupported format: {name}")
            raise typer.Exit(1)

    config = merge_cli_overrides(
        _config(ctx),
        output_directory=str(output) if output is not None else None,
        formats=output_format or None,
        latest_limit=limit,
    )
    report = BuildReport()
    try:
        written = build_indexes(config, report=report)
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    console.print(f"[green]Wrote {len(written)} index file(s):[/green]")
    for path in written:
        console.print(f"  - {path}")
    if report.has_errors:
        err_console.print("[red]Some files could not be processed:[/red]")
        err_console.print(report.summary(), markup=False)
        raise typer.Exit(1)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title of the post.")],
    lang: Annotated[
        Language,
        typer.Option("--lang", "-l", help="Language of the post."),
    ],
    category: Annotated[
        str,
        typer.Option("--category", help="Category of the post."),
    ],
    on: Annotated[
        Optional[str],
        typer.Option("--date", help="Publication date (YYYY-MM-DD). Defaults to today."),
    ] = None,
    ref: Annotated[
        str,
        typer.Option("--ref", help="Key shared with the translations of this post."),
    ] = "",
) -> None:
    """Create a new post file with its front matter."""
    day: date | None = None
    if on:
        try:
            day = date.fromisoformat(on)
        except ValueError:
            err_console.print(f"[red]Error:[/red] Invalid date format: {on}")
            err_console.print("Use YYYY-MM-DD format (e.g., 2016-05-12)")
            raise typer.Exit(1) from None

    try:
        path = create_post(_config(ctx), title, language=lang, category=category, day=day, ref=ref)
    except FileExistsError:
        err_console.print("[red]Error:[/red] A post with this title and date already exists.")
        raise typer.Exit(1) from None
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    console.print(f"[green]Created[/green] {path}")


@app.command()
def check(ctx: typer.Context) -> None:
    """Check every post file for metadata problems and URL clashes."""
    config = _config(ctx)
    result = check_posts(config)

    for err in result.report.errors:
        console.print(f"[red]✗[/red] {escape(err.source)}: {escape(err.message)}")
    for url, paths in result.duplicate_urls.items():
        console.print(f"[red]✗[/red] Duplicate URL {escape(url)}:")
        for path in paths:
            console.print(f"    {escape(path)}")
    for key, names in result.category_clashes.items():
        clash = ", ".join(escape(name) for name in names)
        console.print(f"[red]✗[/red] Categories share the index key {key!r}: {clash}")
    for ref, languages in result.incomplete_refs.items():
        found = ", ".join(lang.value for lang in languages)
        console.print(f"[yellow]![/yellow] Translation group {ref!r} only has: {found}")

    if not result.ok:
        console.print(f"[red]Check failed[/red] ({result.posts_count} post(s) read)")
        raise typer.Exit(1)
    console.print(f"[green]All good:[/green] {result.posts_count} post(s) checked")
