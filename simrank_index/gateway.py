import logging
from typing import Sequence

import numpy as np

from simrank_core.errors import (
    CountMismatchError,
    EmbeddingError,
    ShapeError,
    SimrankError,
)
from simrank_core.protocols import Embedder
from simrank_core.types import RawEmbedding

logger = logging.getLogger(__name__)


def normalize_vector(vec: np.ndarray) -> np.ndarray:
    """
    Scale to unit L2 norm. An all-zero vector is returned unchanged.
    """
    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        return vec
    return vec / norm


class EmbeddingGateway:
    """
    Adapter between the corpus and the external embedding model.

    The model is invoked once with the whole batch; its flattened [N, D]
    reply is sliced back into per-document vectors, each scaled to unit
    length so that a dot product equals cosine similarity.
    """

    __slots__ = ("embedder",)

    def __init__(self, *, embedder: Embedder):
        self.embedder = embedder

    def embed_all(self, texts: Sequence[str]) -> list[np.ndarray]:
        texts = list(texts)
        if not texts:
            return []

        logger.debug("Embedding %d texts in one batch", len(texts))
        try:
            raw = self.embedder.embed(texts)
        except SimrankError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding model failed: {e}") from e

        if not isinstance(raw, RawEmbedding):
            raise ShapeError(
                f"Embedder returned {type(raw).__name__}, expected RawEmbedding"
            )

        dims = tuple(int(d) for d in raw.dims)
        if len(dims) < 2:
            raise ShapeError(f"Expected [N, D] embedding output, got dims={list(dims)}")

        n, dim = dims[0], dims[1]
        if n != len(texts):
            raise CountMismatchError(
                f"Embedding count mismatch: texts={len(texts)}, vectors={n}"
            )
        if dim <= 0:
            raise ShapeError(f"Embedding dimension must be positive, got {dim}")

        data = np.asarray(raw.data, dtype=np.float64).reshape(-1)
        if data.size != n * dim:
            raise ShapeError(
                f"Embedding buffer has {data.size} values, expected {n} x {dim}"
            )

        vectors = []
        for i in range(n):
            vec = normalize_vector(data[i * dim:(i + 1) * dim].copy())
            vec.setflags(write=False)
            vectors.append(vec)
        return vectors
