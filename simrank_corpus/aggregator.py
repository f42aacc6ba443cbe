from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from simrank_core.errors import CountMismatchError, DuplicateSlugError
from simrank_core.types import CorpusResult, Document, Vector
from simrank_core.validators import validate_batch
from simrank_index.ranker import top_similar


def ensure_unique_slugs(documents: Sequence[Document]) -> None:
    seen: set[str] = set()
    for doc in documents:
        if doc.slug in seen:
            raise DuplicateSlugError(doc.slug)
        seen.add(doc.slug)


def build_corpus_result(
    documents: Sequence[Document],
    vectors: Sequence[Vector],
    k: int,
    *,
    max_workers: int = 1,
) -> CorpusResult:
    """
    Top-k neighbours for every document, keyed by slug in corpus order.

    Each row is independent and only reads the shared vectors, so rows may
    be computed on a thread pool without changing the result.
    """
    if len(documents) != len(vectors):
        raise CountMismatchError(
            f"documents/vectors length mismatch: {len(documents)} != {len(vectors)}"
        )
    ensure_unique_slugs(documents)
    if not documents:
        return {}
    validate_batch(list(vectors))

    indices = range(len(documents))
    if max_workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            rows = list(pool.map(lambda i: top_similar(i, documents, vectors, k), indices))
    else:
        rows = [top_similar(i, documents, vectors, k) for i in indices]

    return {doc.slug: row for doc, row in zip(documents, rows)}
