from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from i18n_infuser.core.errors import InfuseError
from i18n_infuser.core.files import collect_sfc_files, load_meta, write_sfc_files
from i18n_infuser.core.infuser import infuse as run_infuse

console = Console()


def infuse(
    target: Annotated[
        str | None, typer.Argument(help="Component file or directory. Defaults to the target recorded in the meta.")
    ] = None,
    meta: Annotated[str, typer.Option("--meta", "-m", help="Meta locale messages JSON file.")] = "meta.json",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report changes without writing files.")] = False,
) -> None:
    """Infuse meta locale messages into component files."""
    try:
        meta_doc = load_meta(meta)
        base_path = target or meta_doc.target
        sources = collect_sfc_files(base_path)
        rebuilt = run_infuse(base_path, sources, meta_doc.components)
    except (InfuseError, FileNotFoundError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    known = {source.path for source in sources}
    for path in sorted(set(meta_doc.components) - known):
        console.print(f"[yellow]No component[/yellow] found for meta path {escape(path)}")

    changed = []
    for source, result in zip(sources, rebuilt, strict=True):
        if result.skipped_blocks:
            indexes = ", ".join(f"#{i}" for i in result.skipped_blocks)
            console.print(
                f"[yellow]Kept[/yellow] i18n block(s) {indexes} of {escape(result.path)}: lang/locale differ from meta"
            )
        if result.content != source.content:
            changed.append(result)

    if dry_run:
        for result in changed:
            console.print(f"Would update {escape(result.path)}")
        console.print(f"{len(changed)} of {len(sources)} file(s) would change")
        return

    write_sfc_files(changed)
    for result in changed:
        console.print(f"[green]Updated[/green] {escape(result.path)}")
    console.print(f"{len(changed)} of {len(sources)} file(s) updated")
