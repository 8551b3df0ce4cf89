"""CLI principal (Typer).

Comandos:
- `locate`: resuelve una coordenada y muestra el path local del JAR
- `render`: genera una página de fracción
- `book`: recorre un libro de páginas `.adoc` y escribe el resultado
- `doctor`: diagnósticos del entorno
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.book_hooks import BookHooks, load_book_config
from adapters.maven import MavenArtifactLocator
from cli import doctor
from cli.ui_components import build_pages_table, configure_logging, print_banner
from core.config import AppSettings
from core.domain.models import Coordinate, Page
from core.errors import ResolutionFailed
from core.services.fraction_docs import FractionDocsGenerator

app = typer.Typer(no_args_is_help=True, help="Fraction documentation from Maven artifacts.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Logging level (default from settings)."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


@app.command()
def locate(
    coordinate: str = typer.Argument(..., help="group:artifact[:version[:extension]]"),
    version: str = typer.Option(None, "--version", "-v", help="Version when the coordinate has none."),
) -> None:
    """Resolve a coordinate and print the local artifact path."""

    settings = AppSettings()
    try:
        parsed = Coordinate.parse(coordinate, version=version)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    locator = MavenArtifactLocator(settings)
    try:
        path = asyncio.run(locator.locate(parsed))
    except ResolutionFailed as exc:
        _console.print(f"[red]Resolution failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(str(path))


@app.command()
def render(
    path: str = typer.Argument(..., help="Page path, e.g. fractions/undertow.adoc"),
    version: str = typer.Option(..., "--version", "-v", help="Artifact version."),
    title: str = typer.Option(None, "--title", help="Page title (defaults to the artifactId)."),
    group_id: str = typer.Option(None, "--group-id", help="Override the default groupId."),
    artifact_id: str = typer.Option(None, "--artifact-id", help="Override the artifactId derived from the path."),
    output: Path = typer.Option(None, "--output", "-o", help="Write the page here instead of stdout."),
) -> None:
    """Generate a single fraction page."""

    settings = AppSettings()
    generator = FractionDocsGenerator(
        version=version,
        locator=MavenArtifactLocator(settings),
        settings=settings,
    )
    page = Page(
        title=title or generator.artifact_id_from_path(path),
        path=path,
        group_id=group_id,
        artifact_id=artifact_id,
    )
    page = asyncio.run(generator.generate(page))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(page.content, encoding="utf-8")
        _console.print(f"[green]Saved page to:[/green] {output}")
    else:
        typer.echo(page.content)


def _page_title(text: str, fallback: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(("# ", "= ")):
            return stripped[2:].strip() or fallback
    return fallback


async def _build_book(hooks: BookHooks, root: Path, output: Path) -> list[tuple[str, str, Path]]:
    rows: list[tuple[str, str, Path]] = []
    for source in sorted(root.rglob("*.adoc")):
        rel = source.relative_to(root).as_posix()
        text = source.read_text(encoding="utf-8")
        page = Page(title=_page_title(text, source.stem), path=rel, content=text)
        mode = "generated" if hooks.handles(page) else "verbatim"
        page = await hooks.page_before(page)

        target = output / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page.content, encoding="utf-8")
        rows.append((rel, mode, target))
    return rows


@app.command()
def book(
    root: Path = typer.Argument(..., exists=True, file_okay=False, help="Book source directory."),
    output: Path = typer.Option(Path("_book"), "--output", "-o", help="Output directory."),
    version: str = typer.Option(None, "--version", "-v", help="Artifact version for every page."),
    book_config: Path = typer.Option(None, "--book-config", help="book.json holding variables.versions.swarm."),
) -> None:
    """Process every page of a book, generating the fraction pages."""

    settings = AppSettings()
    hooks = BookHooks(settings)
    if version:
        hooks.set_version(version)
    else:
        config_path = book_config or (root / "book.json")
        if not config_path.is_file():
            raise typer.BadParameter("pass --version or a book.json with variables.versions.swarm")
        try:
            hooks.init(load_book_config(config_path))
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    print_banner(_console)
    rows = asyncio.run(_build_book(hooks, root, output))

    table = build_pages_table()
    for rel, mode, target in rows:
        table.add_row(rel, mode, str(target))
    _console.print(table)


def run() -> None:
    app()
