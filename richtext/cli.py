from typing import Optional, TextIO

import click
from click.core import ParameterSource

from richtext.documents.html_utils import indent_html
from richtext.errors import RichTextError
from richtext.logger import get_logger
from richtext.staging.base import raw_blocks_from_json
from richtext.staging.html import blocks_to_html


@click.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="File to write the HTML to. Defaults to stdout.",
)
@click.option(
    "--escape/--no-escape",
    default=False,
    help="Escape &, < and > in block text. Defaults to the RICHTEXT_ESCAPE_TEXT env setting.",
)
@click.option(
    "--pretty",
    is_flag=True,
    default=False,
    help=(
        "Indent the HTML for reading. Indentation changes the text content; do not use the "
        "result as a rendering."
    ),
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "DETAIL", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level. Defaults to the LOG_LEVEL env setting, or WARNING.",
)
@click.pass_context
def main(
    ctx: click.Context,
    input_file: TextIO,
    output: Optional[str],
    escape: bool,
    pretty: bool,
    log_level: Optional[str],
):
    """Render the editor raw-content JSON in INPUT_FILE (default stdin) to HTML."""
    logger = get_logger(log_level or "")
    # -- neither flag given: leave the choice to the RICHTEXT_ESCAPE_TEXT env setting --
    escape_text = None if ctx.get_parameter_source("escape") == ParameterSource.DEFAULT else escape

    content = input_file.read()
    if not content.strip():
        raise click.ClickException("no input content")

    try:
        raw_blocks = raw_blocks_from_json(text=content)
        html = blocks_to_html(raw_blocks, escape_text=escape_text)
    except (ValueError, RichTextError) as e:
        logger.debug("render failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    if pretty:
        html = indent_html(html)

    if output is None:
        click.echo(html)
    else:
        with open(output, "w", encoding="utf-8") as f:
            f.write(html)
        logger.info("wrote %d characters of HTML to %s", len(html), output)


if __name__ == "__main__":
    main()
