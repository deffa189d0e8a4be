import logging
import os
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from i18n_infuser.cli.infuse import infuse
from i18n_infuser.cli.squeeze import squeeze

LOG_LEVEL_ENV = "I18N_INFUSER_LOG_LEVEL"

app = typer.Typer(
    name="i18n-infuser",
    help="i18n infuser: merge locale messages into Vue single-file components.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Trace every block decision.")] = False,
) -> None:
    """Merge locale messages into the <i18n> blocks of Vue components."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("infuse")(infuse)
app.command("squeeze")(squeeze)


def main() -> None:
    app()
