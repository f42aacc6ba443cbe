import json
import logging
from pathlib import Path
from typing import Union

from simrank_core.types import CorpusResult

logger = logging.getLogger(__name__)


def to_serializable(result: CorpusResult) -> dict:
    return {slug: [r.to_dict() for r in rows] for slug, rows in result.items()}


def save_json(result: CorpusResult, out: Union[str, Path]) -> Path:
    """
    Write the result mapping as indented JSON, creating parent directories.
    Values JSON cannot represent (e.g. frontmatter dates) are written via str().
    """
    path = Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(to_serializable(result), indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    logger.info("Wrote similarities for %d document(s) to %s", len(result), path)
    return path
