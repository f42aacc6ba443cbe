import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Callable, Iterable, Optional

from .policies import RankingPolicy


def _env_bool(value: str) -> bool:
    return value.lower() == "true"


def _env_patterns(value: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in value.split(",") if p.strip())


# field -> (environment variable, parser)
_ENV_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "root": ("SIMRANK_ROOT", str),
    "patterns": ("SIMRANK_PATTERNS", _env_patterns),
    "output": ("SIMRANK_OUTPUT", str),
    "top_k": ("SIMRANK_TOP_K", int),
    "model_name": ("SIMRANK_MODEL", str),
    "batch_size": ("SIMRANK_BATCH_SIZE", int),
    "device": ("SIMRANK_DEVICE", str),
    "trust_remote_code": ("SIMRANK_TRUST_REMOTE_CODE", _env_bool),
    "max_workers": ("SIMRANK_MAX_WORKERS", int),
}


@dataclass(frozen=True)
class CorpusConfig:
    """
    Configuration for one related-documents run.
    """
    root: str = "."
    patterns: tuple[str, ...] = ("src/content/**/*.md", "src/content/**/*.mdx")
    output: str = "src/assets/similarities.json"
    top_k: int = 5
    model_name: str = "all-MiniLM-L6-v2"
    batch_size: int = 32
    device: Optional[str] = None
    trust_remote_code: bool = False
    max_workers: int = 1

    def __post_init__(self) -> None:
        if not self.patterns:
            raise ValueError("patterns must not be empty")
        for pattern in self.patterns:
            if not pattern or not pattern.strip():
                raise ValueError("patterns must not contain blank entries")
            if PurePath(pattern).anchor:
                raise ValueError(f"pattern must be relative to root: {pattern}")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be a positive integer")
        # top_k / max_workers are checked by RankingPolicy
        self.policy()

    def policy(self) -> RankingPolicy:
        return RankingPolicy(top_k=self.top_k, max_workers=self.max_workers)

    @staticmethod
    def env_values(skip: Iterable[str] = ()) -> dict[str, Any]:
        """
        Parsed SIMRANK_* values that are set, keyed by field name.
        Fields in `skip` are not read, so a bad value there cannot fail.
        """
        skipped = set(skip)
        values: dict[str, Any] = {}
        for name, (var, parse) in _ENV_FIELDS.items():
            raw = os.getenv(var)
            if name in skipped or not raw:
                continue
            values[name] = parse(raw)
        return values

    @classmethod
    def from_env(cls) -> "CorpusConfig":
        return cls(**cls.env_values())
