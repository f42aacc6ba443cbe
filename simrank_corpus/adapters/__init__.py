from .hashing import HashEmbedder
from .transformer import SentenceTransformerEmbedder

__all__ = [
    "HashEmbedder",
    "SentenceTransformerEmbedder",
]
