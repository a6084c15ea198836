"""
Search indexing pipeline.

Walks jobs, products, organizations, profiles and questions, renders each
into labeled text, embeds it and stores it in search_documents unless a
document with the same link already exists. Also refreshes or removes the
document of a single entity on demand.

Dependencies: q5search.boundary.vdb, q5search.boundary.providers, q5search.core.indexing
System role: Index maintenance for retrieval
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Protocol

from q5search.boundary.vdb.vector_schemas import (
    EntityType,
    ProviderId,
    SearchDocument,
    SearchMetadata,
)
from q5search.core.exceptions import Q5SearchException, ValidationError
from q5search.core.indexing.renderers import (
    INDEXABLE_TYPES,
    IneligibleEntity,
    RenderedEntity,
    entity_link,
    field,
    normalize_for_embedding,
    render_entity,
)
from q5search.models.indexing import IndexingSummary, ItemError, TypeSummary
from q5search.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    provider_id: ProviderId

    async def embed(self, text: str) -> list[float]: ...


class IndexingPipeline:
    """
    Batch and single-entity indexing.

    Type batches run concurrently. Inside a batch, items run one at a time
    so each item's existence check precedes its own insert. The check and
    the insert are separate round trips, so two overlapping runs may both
    insert a link.
    """

    def __init__(self, document_store, embedder: Embedder, source_reader) -> None:
        """
        Initialize indexing pipeline.

        Args:
            document_store: DocumentStore (exists/insert/replace/delete)
            embedder: EmbeddingProvider used for every document
            source_reader: SourceReader returning indexable rows per type
        """
        self.document_store = document_store
        self.embedder = embedder
        self.source_reader = source_reader

    async def run(self, entity_types: Iterable[EntityType] | None = None) -> IndexingSummary:
        """
        Index every eligible entity not yet in the store.

        Args:
            entity_types: Types to index (all indexable types if None)

        Returns:
            IndexingSummary: Inserted/skipped/ineligible counts and errors
        """
        types = list(entity_types) if entity_types is not None else list(INDEXABLE_TYPES)
        for entity_type in types:
            if entity_type not in INDEXABLE_TYPES:
                raise ValidationError(
                    f"Entity type '{entity_type.value}' is not indexable",
                    field="entity_types",
                )

        logger.info(f"{__name__}:run - START types={[t.value for t in types]}")
        batches = await asyncio.gather(*(self._index_type(t) for t in types))

        summary = IndexingSummary()
        for entity_type, (counts, errors) in zip(types, batches):
            summary.merge(entity_type, counts, errors)

        logger.info(
            f"{__name__}:run - END inserted={summary.inserted_count} "
            f"skipped={summary.skipped_count} ineligible={summary.ineligible_count} "
            f"errors={len(summary.errors)}"
        )
        return summary

    async def _index_type(self, entity_type: EntityType) -> tuple[TypeSummary, list[ItemError]]:
        counts = TypeSummary()
        errors: list[ItemError] = []

        try:
            rows = await self.source_reader.fetch(entity_type)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_index_type - Failed to fetch {entity_type.value} rows",
                e,
                entity_type=entity_type.value,
            )
            errors.append(ItemError(entity_type=entity_type, error=f"fetch failed: {e}"))
            return counts, errors

        counts.fetched = len(rows)
        for row in rows:
            link = _safe_link(entity_type, row)
            try:
                rendered = render_entity(entity_type, row)
                if await self.document_store.exists(rendered.link):
                    counts.skipped += 1
                    continue
                if await self.document_store.insert(await self._build_document(rendered)):
                    counts.inserted += 1
                else:
                    counts.skipped += 1
            except IneligibleEntity:
                counts.ineligible += 1
            except Q5SearchException as e:
                counts.failed += 1
                logger.warning(
                    f"{__name__}:_index_type - {entity_type.value} link={link} failed: {e.message}"
                )
                errors.append(ItemError(entity_type=entity_type, link=link, error=e.message))
            except Exception as e:
                counts.failed += 1
                log_exception_with_context(
                    logger,
                    f"{__name__}:_index_type - Unexpected failure indexing {entity_type.value}",
                    e,
                    link=link,
                )
                errors.append(
                    ItemError(entity_type=entity_type, link=link, error=f"{type(e).__name__}: {e}")
                )

        logger.info(
            f"{__name__}:_index_type - {entity_type.value}: fetched={counts.fetched} "
            f"inserted={counts.inserted} skipped={counts.skipped} "
            f"ineligible={counts.ineligible} failed={counts.failed}"
        )
        return counts, errors

    async def _build_document(self, rendered: RenderedEntity) -> SearchDocument:
        embedding = await self.embedder.embed(normalize_for_embedding(rendered.content))
        return SearchDocument(
            content=rendered.content,
            embedding=embedding,
            metadata=SearchMetadata(
                type=rendered.entity_type,
                link=rendered.link,
                title=rendered.title,
                provider=self.embedder.provider_id,
            ),
        )

    async def sync_entity(self, entity_type: EntityType, data: dict[str, Any]) -> SearchDocument:
        """
        Re-render one entity and replace its stored document.

        Args:
            entity_type: Entity type (post is not syncable)
            data: Entity columns

        Returns:
            SearchDocument: The stored document

        Raises:
            ValidationError: Unsupported type, missing link or missing required field
            EmbeddingError: If embedding fails
            DocumentStoreError: If the replace fails
        """
        try:
            rendered = render_entity(entity_type, data)
        except IneligibleEntity as e:
            raise ValidationError(f"{entity_type.value} cannot be indexed: {e}") from e

        document = await self._build_document(rendered)
        await self.document_store.replace(document)
        logger.info(f"{__name__}:sync_entity - Synced {entity_type.value} link={rendered.link}")
        return document

    async def remove_entity(self, entity_type: EntityType, data: dict[str, Any]) -> int:
        """
        Delete the stored document of one entity.

        Returns:
            int: Number of deleted documents

        Raises:
            ValidationError: Unsupported type or missing link
        """
        if entity_type not in INDEXABLE_TYPES:
            raise ValidationError(f"Entity type '{entity_type.value}' is not indexable", field="type")
        link = entity_link(entity_type, data)
        deleted = await self.document_store.delete(link)
        logger.info(f"{__name__}:remove_entity - Removed {deleted} document(s) for link={link}")
        return deleted


def _safe_link(entity_type: EntityType, row: Any) -> str | None:
    key = "slug" if entity_type == EntityType.ORGANIZATION else "id"
    value = field(row, key)
    return str(value) if value is not None else None
