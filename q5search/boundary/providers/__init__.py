"""
Model provider adapters (embeddings and text generation).
"""

from q5search.boundary.providers.embedding_provider import EmbeddingProvider, create_embeddings
from q5search.boundary.providers.generation_provider import GenerationProvider, create_chat_model

__all__ = [
    "EmbeddingProvider",
    "GenerationProvider",
    "create_chat_model",
    "create_embeddings",
]
