"""Per-image lookup failures."""

from .structs import TagErrorKind


class TagLookupError(Exception):
    """Base class for failures that end the lookup of a single image."""

    kind: TagErrorKind


class MissingReferenceTagError(TagLookupError):
    kind = TagErrorKind.MissingReferenceTag

    def __init__(self) -> None:
        super().__init__("image reference has no tag to match on")


class NoMatchingTagError(TagLookupError):
    kind = TagErrorKind.NoMatchingTag

    def __init__(self) -> None:
        super().__init__("no similar tag format found in registry")


class RegistryError(TagLookupError):
    """The registry could not list tags. Carries the underlying message as-is."""

    kind = TagErrorKind.Registry
