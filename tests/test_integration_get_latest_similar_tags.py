"""Tests for the get_latest_similar_tags MCP tool."""

import pytest
from fastmcp import Client

from conftest import StubTagLister
from similar_tag_check import main
from similar_tag_check.get_latest_tags_pkg import dispatcher
from similar_tag_check.get_latest_tags_pkg.structs import GetLatestSimilarTagsResponse, TagErrorKind
from similar_tag_check.main import mcp


@pytest.fixture
async def mcp_client():
    """Create a FastMCP client for testing."""
    async with Client(mcp) as client:
        yield client


@pytest.fixture
def lister(monkeypatch):
    stub = StubTagLister(
        {
            "myimage": ["v1.2.0", "v1.3.0", "v1.9.9", "latest", "sha-abc123"],
            "library/busybox": ["1.36.0", "1.36.1", "1.37.0", "1.37.0-musl", "musl"],
        },
        errors={"missing": "HTTP error 404: Not Found"},
    )

    async def fetch_with_stub(images, concurrency):
        return await dispatcher.fetch_latest_similar_tags(images, concurrency, lister=stub)

    monkeypatch.setattr(main, "fetch_latest_similar_tags", fetch_with_stub)
    return stub


async def test_get_latest_similar_tags(mcp_client: Client, lister):
    result = await mcp_client.call_tool(
        name="get_latest_similar_tags",
        arguments={"images": ["myimage:v1.2.0", "library/busybox:1.36-musl", "library/busybox:1.36.0"]}
    )

    assert result.structured_content is not None
    response = GetLatestSimilarTagsResponse.model_validate(result.structured_content)
    assert [r.image for r in response.result] == ["myimage:v1.2.0", "library/busybox:1.36.0"], \
        f"Errors: {response.lookup_errors}"
    assert [r.latest_tag for r in response.result] == ["v1.9.9", "1.37.0"]
    assert len(response.lookup_errors) == 1
    assert response.lookup_errors[0].image == "library/busybox:1.36-musl"
    assert response.lookup_errors[0].kind is TagErrorKind.NoMatchingTag


async def test_get_latest_similar_tags_mixed_success_and_failure(mcp_client: Client, lister):
    result = await mcp_client.call_tool(
        name="get_latest_similar_tags",
        arguments={"images": ["missing:1.0", "myimage:v1.2.0", "myimage"], "concurrency": 1}
    )

    response = GetLatestSimilarTagsResponse.model_validate(result.structured_content)
    assert len(response.result) == 1
    assert response.result[0].latest_tag == "v1.9.9"
    assert [(e.image, e.kind) for e in response.lookup_errors] == [
        ("missing:1.0", TagErrorKind.Registry),
        ("myimage", TagErrorKind.MissingReferenceTag),
    ]
    assert response.lookup_errors[0].error == "HTTP error 404: Not Found"


async def test_get_latest_similar_tags_empty_input(mcp_client: Client, lister):
    result = await mcp_client.call_tool(
        name="get_latest_similar_tags",
        arguments={"images": []}
    )

    response = GetLatestSimilarTagsResponse.model_validate(result.structured_content)
    assert response.result == []
    assert response.lookup_errors == []
