from typing import Protocol, Sequence, runtime_checkable

from .types import RawEmbedding


@runtime_checkable
class Embedder(Protocol):
    """
    External text encoder.

    Called once per run with the whole batch. Must return mean-pooled,
    unnormalized vectors as a row-major [N, D] buffer.
    """

    def embed(self, texts: Sequence[str]) -> RawEmbedding:
        ...
