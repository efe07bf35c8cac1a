"""Tag listing through the Docker registry API."""

import asyncio
import logging
from typing import Optional, Protocol

import aiohttp
from docker_registry_client_async import DockerRegistryClientAsync, ImageName

from ..config import INSECURE_REGISTRIES, REGISTRY_TIMEOUT_SECONDS
from .errors import RegistryError

logger = logging.getLogger(__name__)


class TagLister(Protocol):
    async def list_tags_page(
        self, image: ImageName, last: Optional[str], page_size: int
    ) -> list[str]:
        """Return the page of tags following ``last`` (or the first page), empty at the end."""
        ...


def create_registry_client(timeout: float = REGISTRY_TIMEOUT_SECONDS) -> DockerRegistryClientAsync:
    """Create a registry client with anonymous access and a request timeout.

    Args:
        timeout: Total timeout of each request in seconds

    Returns:
        Configured DockerRegistryClientAsync
    """
    return DockerRegistryClientAsync(
        client_session_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)}
    )


class RegistryTagLister:
    """Lists the tags of image repositories, one page per request.

    Token negotiation, the Docker Hub endpoint and the ``library/`` namespace of
    official images are handled by the registry client. Use as an async context
    manager to close the client's session.
    """

    def __init__(
        self,
        registry_client: Optional[DockerRegistryClientAsync] = None,
        insecure_registries: frozenset[str] = INSECURE_REGISTRIES,
    ) -> None:
        self._registry_client = registry_client or create_registry_client()
        self._insecure_registries = insecure_registries

    async def __aenter__(self) -> "RegistryTagLister":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._registry_client.close()

    async def list_tags_page(
        self, image: ImageName, last: Optional[str], page_size: int
    ) -> list[str]:
        """Fetch one page of tags.

        Args:
            image: The image whose repository is listed
            last: The last tag of the previous page, or None for the first page
            page_size: Maximum number of tags to request

        Returns:
            The tags of the page in registry order, empty once the listing is exhausted

        Raises:
            RegistryError: If the registry cannot be reached or answers with an error
        """
        endpoint = image.resolve_endpoint()
        protocol = "http" if endpoint.lower() in self._insecure_registries else "https"
        kwargs = {"n": page_size, "protocol": protocol}
        if last is not None:
            kwargs["last"] = last

        logger.debug("Listing tags of %s/%s after %r", endpoint, image.resolve_image(), last)
        try:
            response = await self._registry_client.get_tags(image, **kwargs)
        except aiohttp.ContentTypeError as e:
            raise RegistryError(f"Invalid tag list response: {e.message}") from e
        except aiohttp.ClientResponseError as e:
            raise RegistryError(f"HTTP error {e.status}: {e.message}") from e
        except aiohttp.ClientError as e:
            raise RegistryError(str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            raise RegistryError(f"Timed out listing tags of {image.resolve_image()} on {endpoint}") from e
        except ValueError as e:
            raise RegistryError(f"Invalid tag list response: {e}") from e

        # Some registries answer an exhausted listing with "tags": null
        data = response.tags
        tags = data.get("tags") if isinstance(data, dict) else None
        if tags is None:
            return []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise RegistryError("Invalid tag list response: 'tags' is not a list of strings")
        return tags
