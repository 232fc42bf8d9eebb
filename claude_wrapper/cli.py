"""Typer CLI entrypoint for claude-wrapper."""

from __future__ import annotations

import typer

from .app import run
from .config import load_settings
from .exceptions import WrapperError
from .log import configure_logging

app = typer.Typer(add_completion=False)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    add_help_option=False,
)
def main(ctx: typer.Context) -> None:
    """Run claude with per-branch personal files synced into the work tree.

    Every argument is passed through to the wrapped program unchanged.
    Configuration comes from CLAUDE_WRAPPER_* environment variables.
    """
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        exit_code = run(list(ctx.args), settings=settings)
    except WrapperError as err:
        _fail(str(err))
    raise typer.Exit(exit_code)


def _fail(message: str, code: int = 1) -> None:
    typer.secho(f"error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
