import numpy as np
import pytest

from simrank_core.errors import (
    CountMismatchError,
    EmbeddingError,
    ShapeError,
)
from simrank_core.types import RawEmbedding
from simrank_index.gateway import EmbeddingGateway, normalize_vector


class DummyEmbedder:
    def __init__(self, raw=None, error=None):
        self.raw = raw
        self.error = error
        self.calls = []

    def embed(self, texts):
        self.calls.append(list(texts))
        if self.error is not None:
            raise self.error
        return self.raw


def test_gateway_empty_texts_skips_model():
    embedder = DummyEmbedder()
    gateway = EmbeddingGateway(embedder=embedder)

    assert gateway.embed_all([]) == []
    assert embedder.calls == []


def test_gateway_single_batched_call_and_unit_vectors():
    embedder = DummyEmbedder(RawEmbedding(dims=(2, 2), data=[3.0, 4.0, 0.0, 2.0]))
    gateway = EmbeddingGateway(embedder=embedder)

    vectors = gateway.embed_all(["a", "b"])

    assert embedder.calls == [["a", "b"]]
    assert np.allclose(vectors[0], [0.6, 0.8])
    assert np.allclose(vectors[1], [0.0, 1.0])
    for v in vectors:
        assert np.linalg.norm(v) == pytest.approx(1.0, abs=1e-5)


def test_gateway_slices_rows_by_stride():
    data = np.arange(1, 13, dtype=np.float64)
    embedder = DummyEmbedder(RawEmbedding(dims=(3, 4), data=data))

    vectors = EmbeddingGateway(embedder=embedder).embed_all(["x", "y", "z"])

    for i, v in enumerate(vectors):
        row = data[i * 4:(i + 1) * 4]
        assert np.allclose(v, row / np.linalg.norm(row))


def test_gateway_leaves_zero_vector_unchanged():
    embedder = DummyEmbedder(RawEmbedding(dims=(1, 3), data=[0.0, 0.0, 0.0]))

    [vec] = EmbeddingGateway(embedder=embedder).embed_all(["blank"])

    assert np.array_equal(vec, [0.0, 0.0, 0.0])


def test_gateway_accepts_raw_embedding_from_array():
    arr = np.array([[1.0, 1.0], [2.0, 0.0]], dtype=np.float32)
    embedder = DummyEmbedder(RawEmbedding.from_array(arr))

    vectors = EmbeddingGateway(embedder=embedder).embed_all(["a", "b"])

    assert np.allclose(vectors[1], [1.0, 0.0])


def test_gateway_vectors_are_read_only():
    embedder = DummyEmbedder(RawEmbedding(dims=(1, 2), data=[1.0, 0.0]))
    [vec] = EmbeddingGateway(embedder=embedder).embed_all(["a"])

    with pytest.raises(ValueError):
        vec[0] = 5.0


def test_gateway_rejects_one_dimensional_output():
    embedder = DummyEmbedder(RawEmbedding(dims=(4,), data=[1.0, 2.0, 3.0, 4.0]))

    with pytest.raises(ShapeError):
        EmbeddingGateway(embedder=embedder).embed_all(["a"])


def test_gateway_rejects_row_count_mismatch():
    embedder = DummyEmbedder(RawEmbedding(dims=(3, 2), data=[1.0] * 6))

    with pytest.raises(CountMismatchError):
        EmbeddingGateway(embedder=embedder).embed_all(["a", "b"])


def test_gateway_rejects_short_buffer():
    embedder = DummyEmbedder(RawEmbedding(dims=(2, 3), data=[1.0] * 5))

    with pytest.raises(ShapeError):
        EmbeddingGateway(embedder=embedder).embed_all(["a", "b"])


def test_gateway_rejects_token_level_output():
    embedder = DummyEmbedder(RawEmbedding(dims=(2, 3, 4), data=[1.0] * 24))

    with pytest.raises(ShapeError):
        EmbeddingGateway(embedder=embedder).embed_all(["a", "b"])


def test_gateway_wraps_model_failure():
    boom = RuntimeError("CUDA out of memory")
    embedder = DummyEmbedder(error=boom)

    with pytest.raises(EmbeddingError) as info:
        EmbeddingGateway(embedder=embedder).embed_all(["a"])

    assert info.value.__cause__ is boom


def test_normalize_vector():
    assert np.allclose(normalize_vector(np.array([0.0, 5.0])), [0.0, 1.0])


def test_gateway_rejects_non_raw_embedding_reply():
    embedder = DummyEmbedder(raw=[[1.0, 0.0]])

    with pytest.raises(ShapeError, match="expected RawEmbedding"):
        EmbeddingGateway(embedder=embedder).embed_all(["a"])
