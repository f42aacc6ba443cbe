class SimrankError(Exception):
    """Base class for every error raised by simrank."""


class ValidationError(SimrankError):
    """Document metadata or a vector failed validation."""


class ShapeError(SimrankError):
    """Embedding output does not have the expected [N, D] layout."""


class CountMismatchError(SimrankError):
    """Number of embedding rows does not match the number of documents."""


class DuplicateSlugError(SimrankError):
    """Two documents in one corpus share a slug."""

    def __init__(self, slug: str):
        super().__init__(f"Duplicate slug in corpus: {slug!r}")
        self.slug = slug


class EmbeddingError(SimrankError):
    """The external embedding model failed."""
