import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence, Union

import frontmatter

from simrank_core.errors import ValidationError
from simrank_core.text import normalize
from simrank_core.types import (
    Document,
    Exclusion,
    ExclusionReason,
    LoadReport,
    SourceRecord,
)
from simrank_core.validators import validate_slug

logger = logging.getLogger(__name__)

Normalizer = Callable[[str], str]


# ----------------------------
# Admission
# ----------------------------

def admit(
    record: SourceRecord,
    normalizer: Normalizer = normalize,
) -> Union[Document, Exclusion]:
    """
    Turn a raw record into a Document, or explain why it stays out.
    """
    meta = record.frontmatter
    try:
        slug = validate_slug(meta)
    except ValidationError as e:
        reason = (
            ExclusionReason.MISSING_SLUG
            if meta.get("slug") in (None, "")
            else ExclusionReason.INVALID_SLUG
        )
        return Exclusion(path=record.path, reason=reason, detail=str(e))

    if meta.get("draft"):
        return Exclusion(path=record.path, reason=ExclusionReason.DRAFT)

    return Document(
        slug=slug,
        path=record.path,
        frontmatter=dict(meta),
        plain_text=normalizer(record.body),
    )


def prepare_documents(
    records: Iterable[SourceRecord],
    normalizer: Normalizer = normalize,
) -> LoadReport:
    documents: list[Document] = []
    exclusions: list[Exclusion] = []
    for record in records:
        outcome = admit(record, normalizer)
        if isinstance(outcome, Exclusion):
            logger.debug("Excluded %s (%s)", outcome.path, outcome.reason.value)
            exclusions.append(outcome)
        else:
            documents.append(outcome)
    return LoadReport(documents=documents, exclusions=exclusions)


# ----------------------------
# Filesystem
# ----------------------------

def collect_paths(root: str, patterns: Sequence[str]) -> list[Path]:
    """
    Files under `root` matching any glob pattern, sorted and de-duplicated.
    """
    base = Path(root)
    found = {p for pattern in patterns for p in base.glob(pattern) if p.is_file()}
    return sorted(found)


def read_source(path: Union[str, Path]) -> SourceRecord:
    try:
        post = frontmatter.loads(Path(path).read_text(encoding="utf-8"))
    except Exception as e:
        raise ValidationError(f"Cannot parse {path}: {e}") from e
    return SourceRecord(path=str(path), body=post.content, frontmatter=dict(post.metadata))


def load_corpus(
    paths: Iterable[Union[str, Path]],
    normalizer: Normalizer = normalize,
) -> LoadReport:
    """
    Read and admit files in the given order. Unreadable files become
    MALFORMED exclusions; the run continues.
    """
    records: list[SourceRecord] = []
    malformed: list[Exclusion] = []
    for path in paths:
        try:
            records.append(read_source(path))
        except ValidationError as e:
            logger.warning("Skipping %s: %s", path, e)
            malformed.append(
                Exclusion(path=str(path), reason=ExclusionReason.MALFORMED, detail=str(e))
            )

    report = prepare_documents(records, normalizer)
    return LoadReport(
        documents=report.documents,
        exclusions=malformed + report.exclusions,
    )


def log_exclusions(report: LoadReport) -> None:
    for reason, count in report.counts().items():
        logger.info("Excluded %d document(s): %s", count, reason.value)
