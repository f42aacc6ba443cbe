from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

import numpy as np

from simrank_core.types import Document, SimilarityResult, Vector

_CENTS = Decimal("0.01")


def similarity(a: Vector, b: Vector) -> float:
    """
    Dot product of two vectors.

    Both must already be unit length, in which case this is their cosine
    similarity. No normalization happens here.
    """
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")
    return float(np.dot(a, b))


def round_similarity(score: float) -> float:
    """
    Round to two decimals, halves away from zero, on the exact binary value.
    Negative zero collapses to 0.0.
    """
    rounded = Decimal(score).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0


def top_similar(
    source_index: int,
    documents: Sequence[Document],
    vectors: Sequence[Vector],
    k: int,
) -> list[SimilarityResult]:
    """
    Rank every other document against `documents[source_index]`.

    Scores are rounded before sorting; equal rounded scores keep corpus order.
    """
    if k <= 0:
        return []

    source = vectors[source_index]
    scored: list[SimilarityResult] = []
    for j, (doc, vec) in enumerate(zip(documents, vectors)):
        if j == source_index:
            continue
        scored.append(
            SimilarityResult(
                path=doc.path,
                similarity=round_similarity(similarity(source, vec)),
                fields=dict(doc.frontmatter),
            )
        )

    # list.sort is stable, also with reverse=True
    scored.sort(key=lambda r: r.similarity, reverse=True)
    return scored[:k]
