import hashlib
from typing import Sequence

from simrank_core.types import RawEmbedding


class HashEmbedder:
    """
    Deterministic hash-based embedder.

    Reproducible vectors without downloading a model; identical texts map to
    identical vectors, anything else is effectively random. Meant for dry
    runs and tests, not for meaningful rankings.
    """

    def __init__(self, dimension: int = 384):
        if dimension <= 0:
            raise ValueError("dimension must be > 0")
        self.dimension = dimension
        self.calls = 0

    def _vector(self, text: str) -> list[float]:
        values: list[float] = []
        counter = 0
        while len(values) < self.dimension:
            digest = hashlib.sha256(f"{counter}:{text}".encode("utf-8")).digest()
            for i in range(0, len(digest), 4):
                value = int.from_bytes(digest[i:i + 4], "big")
                # map to [-1, 1)
                values.append((value / 2**32) * 2 - 1)
            counter += 1
        return values[:self.dimension]

    def embed(self, texts: Sequence[str]) -> RawEmbedding:
        self.calls += 1
        data: list[float] = []
        for text in texts:
            data.extend(self._vector(text))
        return RawEmbedding(dims=(len(texts), self.dimension), data=data)
