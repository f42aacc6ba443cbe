from dataclasses import dataclass


@dataclass(frozen=True)
class RankingPolicy:
    """
    Controls how many neighbours are kept per document and how the
    all-pairs pass is scheduled.
    """
    top_k: int = 5
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.top_k <= 0:
            raise ValueError("top_k must be a positive integer")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be a positive integer")
