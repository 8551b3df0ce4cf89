"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return response.status_code < 400, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_scratch_dir(path: Path) -> tuple[bool, str]:
    """Create the scratch directory if needed and verify it is writable."""

    try:
        path.mkdir(parents=True, exist_ok=True)
        marker = path / ".doctor"
        marker.write_text("ok", encoding="utf-8")
        marker.unlink()
        return True, str(path.resolve())
    except OSError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="fraction-docs Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    local_repo = Path(settings.local_repository)
    if local_repo.is_dir():
        table.add_row("Local repository", "OK", str(local_repo))
    else:
        table.add_row("Local repository", "OPTIONAL", f"{local_repo} missing -> every artifact is downloaded")

    ok_scratch, detail_scratch = _check_scratch_dir(Path(settings.scratch_dir))
    table.add_row("Scratch dir", "OK" if ok_scratch else "FAIL", detail_scratch)

    ok_release, detail_release = asyncio.run(_check_http(settings.release_repo_url, settings))
    table.add_row("Release repository", "OK" if ok_release else "FAIL", f"{settings.release_repo_url} ({detail_release})")

    ok_snapshot, detail_snapshot = asyncio.run(_check_http(settings.snapshot_repo_url, settings))
    table.add_row(
        "Snapshot repository",
        "OK" if ok_snapshot else "FAIL",
        f"{settings.snapshot_repo_url} ({detail_snapshot})",
    )

    _console.print(table)

    if not (ok_release and ok_snapshot):
        _console.print(
            "\n[yellow]Note:[/yellow] Unreachable repositories only matter for artifacts missing from the local repository."
        )
