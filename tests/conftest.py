"""Shared registry stubs."""

import asyncio
from typing import Optional

from docker_registry_client_async import ImageName

from similar_tag_check.get_latest_tags_pkg.errors import RegistryError


class StubTagLister:
    """In-memory registry serving sorted tags per repository, honoring the page cursor."""

    def __init__(
        self,
        tags: dict[str, list[str]],
        errors: Optional[dict[str, str]] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        self.tags = {repository: sorted(repo_tags) for repository, repo_tags in tags.items()}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, Optional[str], int]] = []
        self.active = 0
        self.max_active = 0
        self.completed: list[str] = []

    async def list_tags_page(
        self, image: ImageName, last: Optional[str], page_size: int
    ) -> list[str]:
        self.calls.append((image.image, last, page_size))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(image.image, 0))
            if image.image in self.errors:
                raise RegistryError(self.errors[image.image])
            tags = self.tags.get(image.image, [])
            start = 0 if last is None else tags.index(last) + 1
            page = tags[start:start + page_size]
            if not page:
                self.completed.append(image.image)
            return page
        finally:
            self.active -= 1


class CursorIgnoringTagLister:
    """A registry that answers every page request with the full listing."""

    def __init__(self, tags: list[str]):
        self.tags = tags
        self.calls = 0

    async def list_tags_page(
        self, image: ImageName, last: Optional[str], page_size: int
    ) -> list[str]:
        self.calls += 1
        return list(self.tags)
