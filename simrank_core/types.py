from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

import numpy as np

Vector = Sequence[float]


@dataclass(frozen=True)
class SourceRecord:
    """
    Raw input tuple, as read from the content tree.
    """
    path: str
    body: str
    frontmatter: Mapping[str, Any]


@dataclass(frozen=True)
class Document:
    """
    Admitted corpus member.
    `plain_text` is the normalized body that gets embedded.
    """
    slug: str
    path: str
    frontmatter: Mapping[str, Any]
    plain_text: str


@dataclass(frozen=True)
class RawEmbedding:
    """
    Reply of the embedding model: row-major buffer of shape `dims`.
    """
    dims: tuple[int, ...]
    data: Sequence[float]

    @classmethod
    def from_array(cls, array) -> "RawEmbedding":
        arr = np.asarray(array)
        return cls(dims=tuple(int(d) for d in arr.shape), data=arr.reshape(-1))


@dataclass(frozen=True)
class SimilarityResult:
    """
    One ranked neighbour of an (implicit) source document.
    """
    path: str
    similarity: float
    fields: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {**self.fields, "path": self.path, "similarity": self.similarity}


CorpusResult = dict[str, list[SimilarityResult]]


class ExclusionReason(str, Enum):
    MISSING_SLUG = "missing_slug"
    INVALID_SLUG = "invalid_slug"
    DRAFT = "draft"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Exclusion:
    path: str
    reason: ExclusionReason
    detail: str = ""


@dataclass(frozen=True)
class LoadReport:
    """
    Outcome of admitting raw records into a corpus.
    """
    documents: list[Document]
    exclusions: list[Exclusion]

    def counts(self) -> dict[ExclusionReason, int]:
        counts: dict[ExclusionReason, int] = {}
        for exclusion in self.exclusions:
            counts[exclusion.reason] = counts.get(exclusion.reason, 0) + 1
        return counts


@dataclass(frozen=True)
class CorpusRun:
    result: CorpusResult
    report: LoadReport
