"""Selection of the latest tag sharing the formatting pattern of an image's tag."""

import logging
from typing import Optional

from docker_registry_client_async import ImageName

from ..config import TAG_PAGE_SIZE
from ..utils.version_parser import Version
from .errors import MissingReferenceTagError, NoMatchingTagError
from .registry import TagLister

logger = logging.getLogger(__name__)


async def list_all_tags(
    lister: TagLister, image: ImageName, page_size: int = TAG_PAGE_SIZE
) -> list[str]:
    """Drain the paginated tag listing of an image's repository.

    Each request uses the last tag collected so far as the continuation cursor. The
    listing ends with the first page that contributes no new tag, which also stops
    registries that ignore the cursor from being polled forever.

    Args:
        lister: The registry collaborator to page through
        image: The image whose repository is listed
        page_size: Number of tags requested per page

    Returns:
        All tags in the order the registry returned them

    Raises:
        RegistryError: If any page cannot be fetched
    """
    all_tags: list[str] = []
    seen: set[str] = set()
    while True:
        page = await lister.list_tags_page(image, all_tags[-1] if all_tags else None, page_size)
        added = 0
        for tag in page:
            if tag not in seen:
                seen.add(tag)
                all_tags.append(tag)
                added += 1
        if not added:
            return all_tags


def pick_latest_similar(start: Version, tags: list[str]) -> Optional[str]:
    """Return the greatest tag with the same formatting pattern as ``start``.

    Tags that compare equal (e.g. ``v1.050`` and ``v1.50``) resolve to the one seen first.
    """
    latest: Optional[Version] = None
    for tag in tags:
        version = Version(tag)
        if not version.is_same_pattern(start):
            continue
        if latest is None or version > latest:
            latest = version
    return str(latest) if latest is not None else None


async def select_latest_similar_tag(
    image: ImageName, lister: TagLister, page_size: int = TAG_PAGE_SIZE
) -> str:
    """Find the latest registry tag for an image that looks like its current tag.

    Args:
        image: The image reference; its tag is the pattern reference
        lister: The registry collaborator
        page_size: Number of tags requested per page

    Returns:
        The selected tag exactly as the registry returned it

    Raises:
        MissingReferenceTagError: If the reference has no tag
        NoMatchingTagError: If no registry tag shares the reference tag's pattern
        RegistryError: If the tags cannot be listed
    """
    if not image.tag:
        raise MissingReferenceTagError()

    start = Version(image.tag)
    tags = await list_all_tags(lister, image, page_size)
    logger.debug("%s: %d tags listed", image, len(tags))

    latest_tag = pick_latest_similar(start, tags)
    if latest_tag is None:
        raise NoMatchingTagError()
    return latest_tag
