"""
Command-line entry point: rank every Markdown/MDX document under a content
tree against every other and write the top matches per slug as JSON.
"""
import argparse
import logging
import sys
from contextlib import nullcontext
from typing import Optional, Sequence

from simrank_core.errors import SimrankError

from .adapters import HashEmbedder, SentenceTransformerEmbedder
from .config import CorpusConfig
from .engine import SimilarityEngine
from .loader import collect_paths, load_corpus, log_exclusions
from .writer import save_json

logger = logging.getLogger("simrank")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simrank",
        description="Compute semantically related documents for a Markdown corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # defaults, content under src/content
  %(prog)s --root site --top-k 3            # different tree, fewer matches
  %(prog)s --embedder hash --out /tmp/s.json  # offline dry run

Environment variables (SIMRANK_ROOT, SIMRANK_TOP_K, SIMRANK_MODEL, ...)
provide defaults; flags win.
        """,
    )
    parser.add_argument("--root", help="Directory the glob patterns are relative to")
    parser.add_argument(
        "--pattern",
        action="append",
        dest="patterns",
        help="Glob pattern for content files (repeatable)",
    )
    parser.add_argument("--out", help="Output JSON file")
    parser.add_argument("--top-k", type=int, help="Neighbours kept per document")
    parser.add_argument("--model", help="sentence-transformers model name")
    parser.add_argument("--batch-size", type=int, help="Encoder batch size")
    parser.add_argument("--device", help="Torch device, e.g. cpu or cuda")
    parser.add_argument(
        "--trust-remote-code",
        action="store_true",
        default=None,
        help="Allow models that ship custom code",
    )
    parser.add_argument(
        "--embedder",
        choices=["sentence-transformers", "hash"],
        default="sentence-transformers",
        help="Embedding backend (hash needs no model download)",
    )
    parser.add_argument("--workers", type=int, help="Threads for the ranking pass")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> CorpusConfig:
    overrides = {
        "root": args.root,
        "patterns": tuple(args.patterns) if args.patterns else None,
        "output": args.out,
        "top_k": args.top_k,
        "model_name": args.model,
        "batch_size": args.batch_size,
        "device": args.device,
        "trust_remote_code": args.trust_remote_code,
        "max_workers": args.workers,
    }
    flags = {key: value for key, value in overrides.items() if value is not None}
    return CorpusConfig(**{**CorpusConfig.env_values(skip=flags), **flags})


def open_embedder(kind: str, config: CorpusConfig):
    """Context manager yielding the configured embedder; the model is released on exit."""
    if kind == "hash":
        return nullcontext(HashEmbedder())
    return SentenceTransformerEmbedder(
        config.model_name,
        batch_size=config.batch_size,
        device=config.device,
        trust_remote_code=config.trust_remote_code,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    paths = collect_paths(config.root, config.patterns)
    if not paths:
        logger.warning("No content files found.")
        return 0

    report = load_corpus(paths)
    log_exclusions(report)
    if not report.documents:
        logger.error("No documents loaded.")
        return 0

    try:
        with open_embedder(args.embedder, config) as embedder:
            engine = SimilarityEngine(embedder=embedder, policy=config.policy())
            result = engine.rank(report.documents)
        save_json(result, config.output)
    except (SimrankError, OSError) as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("Similarity results saved to %s", config.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
