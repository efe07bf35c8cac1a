"""Result records for tag lookups."""

from enum import Enum

from pydantic import BaseModel, Field


class TagErrorKind(str, Enum):
    MissingReferenceTag = "missing_reference_tag"
    NoMatchingTag = "no_matching_tag"
    Registry = "registry"


class SimilarTagResult(BaseModel):
    """The latest tag found for one image."""

    image: str = Field(description="The image reference as given, in canonical display form")
    current_tag: str = Field(description="The tag of the given reference, used as the pattern")
    latest_tag: str = Field(description="The greatest registry tag sharing the current tag's pattern")

    @property
    def is_different(self) -> bool:
        return self.current_tag != self.latest_tag


class SimilarTagError(BaseModel):
    """A failed lookup for one image."""

    image: str
    kind: TagErrorKind
    error: str


class GetLatestSimilarTagsResponse(BaseModel):
    result: list[SimilarTagResult] = Field(default_factory=list)
    lookup_errors: list[SimilarTagError] = Field(default_factory=list)
