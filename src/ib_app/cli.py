# src/ib_app/cli.py
from __future__ import annotations

import typer

from ib_app.commands.browse import register as register_browse

# Plain help text: --help output goes through ctx.get_help() and exits 1.
app = typer.Typer(help="Image Browser CLI", add_completion=False, rich_markup_mode=None)

register_browse(app)


if __name__ == "__main__":
    app()
