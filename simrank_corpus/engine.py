import logging
from typing import Callable, Iterable, Optional, Sequence

from simrank_core.protocols import Embedder
from simrank_core.text import normalize
from simrank_core.types import (
    CorpusResult,
    CorpusRun,
    Document,
    LoadReport,
    SourceRecord,
)
from simrank_index.gateway import EmbeddingGateway

from .aggregator import build_corpus_result, ensure_unique_slugs
from .loader import log_exclusions, prepare_documents
from .policies import RankingPolicy

logger = logging.getLogger(__name__)


class SimilarityEngine:
    """
    Related-documents pipeline: admit -> normalize -> embed -> rank.
    Deterministic and synchronous; the model is called at most once per run.
    """

    __slots__ = ("gateway", "policy", "normalizer")

    def __init__(
        self,
        *,
        embedder: Embedder,
        policy: Optional[RankingPolicy] = None,
        normalizer: Callable[[str], str] = normalize,
    ):
        self.gateway = EmbeddingGateway(embedder=embedder)
        self.policy = policy or RankingPolicy()
        self.normalizer = normalizer

    def prepare(self, records: Iterable[SourceRecord]) -> LoadReport:
        report = prepare_documents(records, self.normalizer)
        log_exclusions(report)
        return report

    def rank(self, documents: Sequence[Document]) -> CorpusResult:
        # fail before paying for inference
        ensure_unique_slugs(documents)

        vectors = self.gateway.embed_all([d.plain_text for d in documents])
        result = build_corpus_result(
            documents,
            vectors,
            self.policy.top_k,
            max_workers=self.policy.max_workers,
        )
        logger.info("Ranked %d document(s), top_k=%d", len(result), self.policy.top_k)
        return result

    def run(self, records: Iterable[SourceRecord]) -> CorpusRun:
        report = self.prepare(records)
        return CorpusRun(result=self.rank(report.documents), report=report)
