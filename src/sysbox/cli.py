"""
Command-line interface for sysbox.

Provides commands for:
- Evaluating floating-point arithmetic (calc)
- Fetching a remote URL (http-get)
"""

import logging
import sys

import click
import requests

from sysbox import __version__
from sysbox.http_get import fetch
from sysbox.runtime.core import RuntimeContext
from sysbox.runtime.session import run_calc
from sysbox.writer import IndentingWriter

logger = logging.getLogger(__name__)


@click.group(context_settings={"auto_envvar_prefix": "SYSBOX"})
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--trace", is_flag=True, help="Print each evaluation step to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool, trace: bool) -> None:
    """sysbox - small system utilities."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.obj = RuntimeContext(writer=IndentingWriter(enabled=trace))


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("expression", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def calc(context: RuntimeContext, expression: tuple[str, ...]) -> None:
    """A simple (floating-point) calculator.

    Evaluates `+ - * / %` with the usual precedence and parentheses. With no
    arguments an interactive `calc> ` prompt reads one expression per line
    until `exit`, `quit` or end of input.

    \b
    Examples:
       $ sysbox calc 3 + 3
       $ sysbox calc '1 / 3 * 9'

    Arguments are joined, so a quoted string works as well as separate
    tokens. Quote anything containing `*`, otherwise the shell's globbing
    will cause surprises.
    """
    sys.exit(run_calc(expression, context=context))


@main.command("http-get")
@click.argument("url")
def http_get(url: str) -> None:
    """Fetch a remote URL and print its body.

    Very much curl-lite, with no configuration options of any kind.

    \b
    Example:
       $ sysbox http-get https://example.com/
    """
    try:
        body = fetch(url)
    except requests.exceptions.RequestException as e:
        logger.debug("request for %s failed", url, exc_info=True)
        click.echo(f"error: {e}")
        sys.exit(1)

    click.echo(body)


if __name__ == "__main__":
    main()
