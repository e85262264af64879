"""Command line entry points for datemath."""

import logging

from typer import Option, Typer

from .expressions import parse_expression, render_expression, show_constants, validate_expression
from ..configuration.cli import config_app


cli = Typer(help="Evaluate and format date math expressions")


@cli.callback()
def main(
    verbose: bool = Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


cli.command("parse")(parse_expression)
cli.command("validate")(validate_expression)
cli.command("render")(render_expression)
cli.command("constants")(show_constants)
cli.add_typer(config_app, name="config")


__all__ = ["cli"]
