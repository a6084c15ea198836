"""
Query-time retrieval.

Embeds a free-text query with the configured provider and runs the
similarity search against search_documents. Guards against comparing a
query vector with documents embedded by a different provider.

Dependencies: q5search.boundary.vdb, q5search.boundary.providers, q5search.core.exceptions
System role: Retrieval business logic shared by every consumer
"""

import logging

from q5search.boundary.vdb.vector_schemas import EntityType, SearchResult
from q5search.core.exceptions import (
    ProviderMismatchError,
    Q5SearchException,
    RetrievalError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Embed-then-match retrieval.

    Results are returned in store order: descending similarity, ties by
    insertion order.
    """

    def __init__(self, embedder, document_store, strict_provider_check: bool = True) -> None:
        """
        Initialize retrieval service.

        Args:
            embedder: EmbeddingProvider (must match the provider that built the index)
            document_store: DocumentStore exposing match()
            strict_provider_check: Raise on foreign-provider rows instead of dropping them
        """
        self.embedder = embedder
        self.document_store = document_store
        self.strict_provider_check = strict_provider_check

    async def search(self, query: str, threshold: float, top_k: int) -> list[SearchResult]:
        """
        Return documents whose similarity to the query exceeds threshold.

        Args:
            query: Free-text query (blank returns [] without embedding)
            threshold: Minimum cosine similarity, in [-1, 1]
            top_k: Maximum number of results, >= 1

        Returns:
            list[SearchResult]: Ranked documents

        Raises:
            ValidationError: Threshold or top_k out of range
            ProviderMismatchError: Strict mode and a row was embedded by another provider
            RetrievalError: Embedding or store failure
        """
        if not -1.0 <= threshold <= 1.0:
            raise ValidationError(f"threshold must be in [-1, 1], got {threshold}", field="threshold")
        if top_k < 1:
            raise ValidationError(f"top_k must be >= 1, got {top_k}", field="top_k")
        if not query or not query.strip():
            return []

        try:
            query_embedding = await self.embedder.embed(query)
            results = await self.document_store.match(query_embedding, threshold, top_k)
        except Q5SearchException as e:
            raise RetrievalError(
                f"Retrieval failed: {e.message}",
                details={"cause": type(e).__name__, **e.details},
            ) from e

        return self._check_providers(results)

    def _check_providers(self, results: list[SearchResult]) -> list[SearchResult]:
        expected = self.embedder.provider_id
        kept = []
        untagged = 0
        for result in results:
            found = result.metadata.provider
            if found is None:
                untagged += 1
                kept.append(result)
            elif found != expected:
                if self.strict_provider_check:
                    raise ProviderMismatchError(
                        expected=expected.value,
                        found=found.value,
                        details={"link": result.metadata.link},
                    )
                logger.warning(
                    f"{__name__}:_check_providers - Dropping link={result.metadata.link} "
                    f"embedded by {found.value}, query uses {expected.value}"
                )
            else:
                kept.append(result)

        if untagged:
            logger.warning(
                f"{__name__}:_check_providers - {untagged} result(s) carry no provider tag, "
                f"assuming {expected.value}"
            )
        return kept

    async def search_links(
        self,
        query: str,
        entity_type: EntityType,
        threshold: float,
        top_k: int,
    ) -> list[str]:
        """
        Search and keep the distinct links of one entity type, in rank order.

        Args:
            query: Free-text query
            entity_type: Entity type to keep
            threshold: Minimum cosine similarity
            top_k: Number of rows requested from the store before filtering

        Returns:
            list[str]: Deduplicated links
        """
        results = await self.search(query, threshold, top_k)
        links: list[str] = []
        for result in results:
            if result.metadata.type == entity_type and result.metadata.link not in links:
                links.append(result.metadata.link)
        return links
