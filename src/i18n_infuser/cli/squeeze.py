from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from i18n_infuser.core.errors import InfuseError
from i18n_infuser.core.files import collect_sfc_files, dump_meta
from i18n_infuser.core.squeeze import squeeze as run_squeeze

console = Console()


def squeeze(
    target: Annotated[str, typer.Argument(help="Component file or directory to read.")] = ".",
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write the meta JSON here instead of stdout.")
    ] = None,
) -> None:
    """Squeeze the messages of every <i18n> block into a meta JSON document."""
    try:
        sources = collect_sfc_files(target)
        meta = run_squeeze(target, sources)
    except (InfuseError, FileNotFoundError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    text = dump_meta(meta)
    if output is None:
        typer.echo(text, nl=False)
        return

    Path(output).write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote[/green] meta for {len(meta.components)} component(s) to {escape(output)}")
