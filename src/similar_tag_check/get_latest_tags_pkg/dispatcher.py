"""Fan-out of tag lookups across many images."""

import asyncio
import logging
from typing import Optional, Sequence

from docker_registry_client_async import ImageName

from ..config import DEFAULT_CONCURRENCY, TAG_PAGE_SIZE
from .errors import TagLookupError
from .registry import RegistryTagLister, TagLister
from .selector import select_latest_similar_tag
from .structs import SimilarTagError, SimilarTagResult

logger = logging.getLogger(__name__)

LookupOutcome = SimilarTagResult | SimilarTagError


async def fetch_latest_similar_tag(
    image: ImageName, lister: TagLister, page_size: int = TAG_PAGE_SIZE
) -> LookupOutcome:
    """Look up the latest similar tag of one image.

    Args:
        image: The image reference
        lister: The registry collaborator
        page_size: Number of tags requested per page

    Returns:
        Either a SimilarTagResult on success or SimilarTagError on failure
    """
    try:
        latest_tag = await select_latest_similar_tag(image, lister, page_size)
    except TagLookupError as e:
        logger.warning("%s: %s", image, e)
        return SimilarTagError(image=str(image), kind=e.kind, error=str(e))

    logger.info("%s: latest similar tag is %s", image, latest_tag)
    return SimilarTagResult(image=str(image), current_tag=image.tag, latest_tag=latest_tag)


async def fetch_latest_similar_tags(
    images: Sequence[ImageName],
    concurrency: int = DEFAULT_CONCURRENCY,
    lister: Optional[TagLister] = None,
    page_size: int = TAG_PAGE_SIZE,
) -> list[LookupOutcome]:
    """Look up the latest similar tag of every image, at most ``concurrency`` at a time.

    A failure for one image is reported in its own outcome and never affects the
    others. Outcomes are returned in the order of ``images``.

    Args:
        images: The image references
        concurrency: Maximum number of lookups running at the same time
        lister: The registry collaborator; each lookup opens its own registry client if omitted
        page_size: Number of tags requested per page

    Returns:
        One SimilarTagResult or SimilarTagError per image, in input order

    Raises:
        ValueError: If concurrency is not positive
    """
    if concurrency < 1:
        raise ValueError(f"Concurrency must be a positive integer, got {concurrency}")

    gate = asyncio.Semaphore(concurrency)

    async def lookup(image: ImageName) -> LookupOutcome:
        async with gate:
            if lister is not None:
                return await fetch_latest_similar_tag(image, lister, page_size)
            # Each lookup gets its own registry session and tokens
            async with RegistryTagLister() as registry_lister:
                return await fetch_latest_similar_tag(image, registry_lister, page_size)

    tasks = [asyncio.create_task(lookup(image)) for image in images]
    return list(await asyncio.gather(*tasks))
