"""CLI entry point for openapi-md."""

import logging
from pathlib import Path

import click
import httpx

from openapi_md.convert import RenderOptions, to_markdown
from openapi_md.errors import OpenApiMarkdownError
from openapi_md.parser.detect import load_document, probe_versions
from openapi_md.parser.validator import validate_document

FETCH_TIMEOUT = 30.0

FORMAT_CHOICE = click.Choice(["auto", "json", "yaml"])


def _read_input(file: str | None, url: str | None) -> bytes:
    """Read the raw document from exactly one of --file (``-`` for stdin) or --url."""
    if (file is None) == (url is None):
        raise click.UsageError("exactly one of --file or --url must be specified")

    if url is not None:
        return _fetch(url)
    if file == "-":
        return click.get_binary_stream("stdin").read()
    path = Path(file)
    if not path.is_file():
        raise click.BadParameter(f"file {file!r} does not exist", param_hint="--file")
    return path.read_bytes()


def _fetch(url: str) -> bytes:
    try:
        response = httpx.get(url, follow_redirects=True, timeout=FETCH_TIMEOUT)
    except httpx.HTTPError as exc:
        raise click.ClickException(f"failed to fetch URL: {exc}") from exc
    if not response.is_success:
        raise click.ClickException(f"non-success status code from URL: {response.status_code}")
    return response.content


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
def main(verbose: bool):
    """openapi-md — render OpenAPI / Swagger descriptions as Markdown."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--file", "file", default=None, help="Path to the spec file ('-' for stdin).")
@click.option("--url", default=None, help="URL of the spec.")
@click.option("-o", "--out", default=None, type=click.Path(path_type=Path), help="Output file (defaults to stdout).")
@click.option("--format", "fmt", default="auto", type=FORMAT_CHOICE, envvar="OPENAPI_MD_FORMAT", show_default=True, help="Input format.")
@click.option("--skip-validation", is_flag=True, envvar="OPENAPI_MD_SKIP_VALIDATION", help="Do not validate the document before rendering.")
def render(file: str | None, url: str | None, out: Path | None, fmt: str, skip_validation: bool):
    """Convert an OpenAPI 3.x or Swagger 2.0 document to Markdown."""
    data = _read_input(file, url)
    try:
        md = to_markdown(data, RenderOptions(format=fmt, skip_validation=skip_validation))
    except OpenApiMarkdownError as exc:
        raise click.ClickException(f"failed to convert spec to markdown: {exc}") from exc

    if out is None:
        click.echo(md, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(md, encoding="utf-8")
    click.echo(f"Markdown saved to {out}", err=True)


@main.command()
@click.option("--file", "file", default=None, help="Path to the spec file ('-' for stdin).")
@click.option("--url", default=None, help="URL of the spec.")
@click.option("--format", "fmt", default="auto", type=FORMAT_CHOICE, envvar="OPENAPI_MD_FORMAT", show_default=True, help="Input format.")
def validate(file: str | None, url: str | None, fmt: str):
    """Validate a document against its dialect and report the first problem."""
    data = _read_input(file, url)
    try:
        tree = load_document(data, fmt)
    except OpenApiMarkdownError as exc:
        raise click.ClickException(str(exc)) from exc

    swagger, openapi = probe_versions(tree)
    dialect = "swagger2" if swagger.startswith("2.0") else "openapi3"
    error = validate_document(tree, dialect)
    if error:
        raise click.ClickException(f"{dialect} validation failed: {error}")
    click.echo(f"{dialect} document is valid")
