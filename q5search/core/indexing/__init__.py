"""
Search indexing: entity rendering, source reads and the indexing pipeline.
"""

from q5search.core.indexing.pipeline import IndexingPipeline
from q5search.core.indexing.renderers import (
    INDEXABLE_TYPES,
    IneligibleEntity,
    RenderedEntity,
    normalize_for_embedding,
    render_entity,
)
from q5search.core.indexing.sources import SourceReader

__all__ = [
    "INDEXABLE_TYPES",
    "IndexingPipeline",
    "IneligibleEntity",
    "RenderedEntity",
    "SourceReader",
    "normalize_for_embedding",
    "render_entity",
]
