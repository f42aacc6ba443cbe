import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from sentence_transformers import SentenceTransformer, models

from simrank_core.types import RawEmbedding

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """
    Embedder backed by a sentence-transformers model.

    The model is loaded on first use and released by `close()`; use the
    instance as a context manager to scope it to one run. The encoder is
    always topped with a mean-pooling layer, whatever pooling the checkpoint
    ships with.
    Output is left unnormalized; EmbeddingGateway does that step.
    """

    def __init__(
        self,
        model_name: str = "all-MiniLM-L6-v2",
        *,
        batch_size: int = 32,
        device: Optional[str] = None,
        trust_remote_code: bool = False,
        show_progress_bar: bool = False,
        model: Any = None,
    ):
        self.model_name = model_name
        self.batch_size = batch_size
        self.device = device
        self.trust_remote_code = trust_remote_code
        self.show_progress_bar = show_progress_bar
        self._model = model

    @property
    def model(self):
        if self._model is None:
            logger.info("Loading SentenceTransformer model: %s", self.model_name)
            self._model = self._load_model()
        return self._model

    def _resolve_name(self) -> str:
        # bare hub names live under the sentence-transformers organisation
        if "/" in self.model_name or Path(self.model_name).exists():
            return self.model_name
        return f"sentence-transformers/{self.model_name}"

    def _load_model(self):
        remote = {"trust_remote_code": self.trust_remote_code}
        encoder = models.Transformer(
            self._resolve_name(),
            model_args=dict(remote),
            tokenizer_args=dict(remote),
            config_args=dict(remote),
        )
        pooling = models.Pooling(
            encoder.get_word_embedding_dimension(),
            pooling_mode="mean",
        )
        return SentenceTransformer(modules=[encoder, pooling], device=self.device)

    def embed(self, texts: Sequence[str]) -> RawEmbedding:
        embeddings = self.model.encode(
            list(texts),
            batch_size=self.batch_size,
            show_progress_bar=self.show_progress_bar,
            convert_to_numpy=True,
            normalize_embeddings=False,
        )
        return RawEmbedding.from_array(embeddings)

    def close(self) -> None:
        self._model = None

    def __enter__(self) -> "SentenceTransformerEmbedder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
