"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_chat_service,
    get_feed_service,
    get_indexing_pipeline,
    get_recommendation_service,
    get_retrieval_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_feed_service",
    "get_indexing_pipeline",
    "get_recommendation_service",
    "get_retrieval_service",
    "get_service_cache",
    "get_settings_dependency",
]
