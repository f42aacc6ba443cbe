import numbers
from typing import Any, Mapping

from .errors import ValidationError
from .types import Vector


def validate_vector(vec: Vector) -> None:
    if len(vec) == 0:
        raise ValidationError("Vector is empty")

    if not all(isinstance(x, numbers.Real) for x in vec):
        raise ValidationError("Vector must contain only numbers")


def validate_batch(vectors: list[Vector]) -> None:
    if not vectors:
        raise ValidationError("Empty vector batch")

    dim = len(vectors[0])
    for v in vectors:
        validate_vector(v)
        if len(v) != dim:
            raise ValidationError("All vectors must have same dimension")


def validate_slug(frontmatter: Mapping[str, Any]) -> str:
    slug = frontmatter.get("slug")
    if slug is None or slug == "":
        raise ValidationError("Frontmatter has no slug")
    if not isinstance(slug, str):
        raise ValidationError(f"Slug must be a string, got {type(slug).__name__}")
    if not slug.strip():
        raise ValidationError("Slug is blank")
    return slug
