"""
Converts a Markdown file into an HTML fragment.
The HTML is printed to stdout, or written to the file given with --output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    write_output,
)
from .highlight import escape_highlighter, load_highlighter
from .parser import ConvertFileError, convert_file

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option()
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the HTML to this file instead of stdout",
)
@click.option("--highlighter", help="Code block highlighter as module:name")
@click.option("--escape-code", is_flag=True, help="HTML-escape fenced code blocks")
@click.option("--horizontal-rule", help="HTML emitted for horizontal rules")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    highlighter: str | None = None,
    escape_code: bool = False,
    horizontal_rule: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a Markdown file to HTML.

    Args:
        filepath: Path to the Markdown file to convert.
        output: Optional destination file; stdout is used when omitted.
        highlighter: ``module:name`` reference to a code block highlighter.
        escape_code: HTML-escape fenced code blocks when no highlighter is given.
        horizontal_rule: Override for the horizontal rule markup.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path, highlighter reference or configuration
            is invalid.
        click.ClickException: If the file is too large, changes during
            conversion, cannot be read, or the output cannot be written.

    Examples:
        md2html README.md -o README.html --escape-code
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        code_highlighter = load_highlighter(highlighter) if highlighter else None
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    if code_highlighter is None and escape_code:
        code_highlighter = escape_highlighter

    try:
        config = build_config(
            filepath.parent,
            horizontal_rule=horizontal_rule,
            highlighter=code_highlighter,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        html = convert_file(filepath, config)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        post_convert_stat = collect_file_stat(filepath)
        ensure_file_unchanged(initial_stat, post_convert_stat, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(html, nl=False)
        return

    try:
        write_output(Path(output), html)
    except IOError as error:
        raise click.ClickException(str(error)) from error
    logger.info("Wrote %d characters of HTML to %s", len(html), output)


if __name__ == "__main__":
    cli()
