"""OpenAI embeddings for search queries, with dimension validation."""

import asyncio
import logging
from typing import Any

from openai import OpenAI

from content_engine.core.config import get_settings
from content_engine.core.logging import get_logger, log_with_context

logger = get_logger(__name__)


class EmbeddingProvider:
    """Turn text into fixed-length vectors with an injected OpenAI client."""

    def __init__(self, client: Any, model: str, dim: int):
        self.client = client
        self.model = model
        self.dim = dim

    @classmethod
    def from_settings(cls) -> "EmbeddingProvider":
        """Build a provider backed by a real OpenAI client."""
        settings = get_settings()
        return cls(
            client=OpenAI(api_key=settings.OPENAI_API_KEY),
            model=settings.EMBEDDING_MODEL,
            dim=settings.EMBEDDING_DIM,
        )

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors in the same order as texts

        Raises:
            ValueError: If an embedding dimension doesn't match the configured dim
            Exception: If the OpenAI API call fails
        """
        if not texts:
            return []

        try:
            response = self.client.embeddings.create(model=self.model, input=texts)

            embeddings = []
            for i, embedding_obj in enumerate(response.data):
                embedding = list(embedding_obj.embedding)
                if len(embedding) != self.dim:
                    raise ValueError(
                        f"Embedding dimension mismatch for text {i}: "
                        f"expected {self.dim}, got {len(embedding)}"
                    )
                embeddings.append(embedding)

            log_with_context(
                logger,
                logging.DEBUG,
                f"Generated {len(embeddings)} embeddings using {self.model}",
                model=self.model,
                count=len(embeddings),
            )
            return embeddings

        except Exception as e:
            logger.error(f"Failed to generate embeddings: {e}")
            raise

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query string."""
        return self.embed_texts([query])[0]

    async def embed_query_async(self, query: str) -> list[float]:
        """Async wrapper around embed_query using thread pool."""
        return await asyncio.to_thread(self.embed_query, query)
