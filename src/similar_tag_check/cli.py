"""Command-line interface for similar-tag-check."""

import asyncio
import logging
import os
import sys
from typing import Annotated

import typer
from docker_registry_client_async import ImageName

from .config import DEFAULT_CONCURRENCY, LOG_FORMAT, LOG_LEVEL
from .get_latest_tags_pkg.dispatcher import fetch_latest_similar_tags
from .get_latest_tags_pkg.structs import SimilarTagError

app = typer.Typer(
    help="Find the latest registry tag that follows the same format as each image's tag.",
    add_completion=False,
)


def parse_images(raw_images: list[str]) -> list[ImageName]:
    images = []
    for raw in raw_images:
        try:
            images.append(ImageName.parse(raw))
        except ValueError as e:
            raise typer.BadParameter(f"Invalid image reference '{raw}': {e}", param_hint="IMAGES") from e
    return images


def _silence_stdout() -> None:
    # Reader went away (e.g. piped into head); silence the flush at interpreter exit
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


@app.command()
def main(
    images: Annotated[list[str], typer.Argument(help="The images to check")],
    differences: Annotated[
        bool,
        typer.Option("--differences", "-d", help="Only print images whose newest tag differs"),
    ] = False,
    concurrency: Annotated[
        int,
        typer.Option(
            "--concurrency",
            min=1,
            help="The maximum number of images to check concurrently at any one time",
        ),
    ] = DEFAULT_CONCURRENCY,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log registry requests to stderr")
    ] = False,
) -> None:
    """Print the latest similar tag of each image, one tab-separated line per image."""
    logging.basicConfig(level=logging.DEBUG if verbose else LOG_LEVEL, format=LOG_FORMAT)

    parsed = parse_images(images)
    outcomes = asyncio.run(fetch_latest_similar_tags(parsed, concurrency))

    has_error = any(isinstance(outcome, SimilarTagError) for outcome in outcomes)
    stdout_open = True
    for outcome in outcomes:
        if isinstance(outcome, SimilarTagError):
            typer.echo(f"{outcome.image}\t{outcome.error}", err=True)
        elif stdout_open and (not differences or outcome.is_different):
            try:
                typer.echo(f"{outcome.image}\t{outcome.latest_tag}")
            except BrokenPipeError:
                stdout_open = False
                _silence_stdout()
    if stdout_open:
        try:
            sys.stdout.flush()
        except BrokenPipeError:
            _silence_stdout()

    if has_error:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
