"""MCP server exposing the similar tag lookup as a tool."""

import logging

from docker_registry_client_async import ImageName
from fastmcp import FastMCP

from .config import DEFAULT_CONCURRENCY, LOG_FORMAT, LOG_LEVEL
from .get_latest_tags_pkg.dispatcher import fetch_latest_similar_tags
from .get_latest_tags_pkg.structs import GetLatestSimilarTagsResponse, SimilarTagError

mcp = FastMCP("similar-tag-check")


@mcp.tool()
async def get_latest_similar_tags(
    images: list[str], concurrency: int = DEFAULT_CONCURRENCY
) -> GetLatestSimilarTagsResponse:
    """Find the latest tag of each container image that has the same format as its current tag.

    Only registry tags whose digit/non-digit structure matches the given tag are
    considered, e.g. for "nginx:1.25.3" the candidates are tags like "1.27.0" but not
    "latest", "1.27" or "1.27.0-alpine". Digit runs compare numerically.

    Args:
        images: Image references with a tag, e.g. "ghcr.io/org/app:v1.2.0" or "nginx:1.25.3"
        concurrency: Maximum number of images checked at the same time

    Returns:
        The latest similar tag of each image, and the lookups that failed
    """
    parsed = [ImageName.parse(image) for image in images]
    outcomes = await fetch_latest_similar_tags(parsed, concurrency)

    response = GetLatestSimilarTagsResponse()
    for outcome in outcomes:
        if isinstance(outcome, SimilarTagError):
            response.lookup_errors.append(outcome)
        else:
            response.result.append(outcome)
    return response


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    mcp.run()


if __name__ == "__main__":
    main()
