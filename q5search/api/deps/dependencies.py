"""
Dependency injection container.

Lazily built, process-wide service instances and the FastAPI dependency
functions that hand them to routers.

Dependencies: q5search.configs, q5search.boundary, q5search.core, q5search.application
System role: DI container for service injection
"""

from q5search.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._instances: dict[str, object] = {}

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _get(self, name: str, build):
        if name not in self._instances:
            self._instances[name] = build()
        return self._instances[name]

    @property
    def session_factory(self):
        """Shared async session factory."""
        from q5search.boundary.db.connection import get_async_engine, get_async_session_factory

        return self._get(
            "session_factory",
            lambda: get_async_session_factory(get_async_engine(self.settings.database)),
        )

    @property
    def embedder(self):
        """Get cached embedding provider."""
        from q5search.boundary.providers import EmbeddingProvider

        return self._get("embedder", lambda: EmbeddingProvider(self.settings.embedding))

    @property
    def generator(self):
        """Get cached answer generator."""
        from q5search.boundary.providers import GenerationProvider, create_chat_model

        return self._get(
            "generator",
            lambda: GenerationProvider(
                self.settings.generation,
                chat_model=create_chat_model(self.settings.generation),
            ),
        )

    @property
    def title_generator(self):
        """Get cached title generator (lighter model)."""
        from q5search.boundary.providers import GenerationProvider, create_chat_model

        return self._get(
            "title_generator",
            lambda: GenerationProvider(
                self.settings.generation,
                chat_model=create_chat_model(self.settings.generation, title=True),
            ),
        )

    @property
    def document_store(self):
        from q5search.boundary.vdb import DocumentStore

        return self._get(
            "document_store",
            lambda: DocumentStore(
                self.session_factory,
                skip_on_conflict=self.settings.indexing.enforce_unique_links,
            ),
        )

    @property
    def retrieval_service(self):
        from q5search.core.retriever import RetrievalService

        return self._get(
            "retrieval_service",
            lambda: RetrievalService(
                self.embedder,
                self.document_store,
                strict_provider_check=self.settings.retrieval.strict_provider_check,
            ),
        )

    @property
    def platform_reader(self):
        from q5search.core.platform_reader import PlatformReader

        return self._get("platform_reader", lambda: PlatformReader(self.session_factory))

    @property
    def indexing_pipeline(self):
        from q5search.core.indexing import IndexingPipeline, SourceReader

        return self._get(
            "indexing_pipeline",
            lambda: IndexingPipeline(
                document_store=self.document_store,
                embedder=self.embedder,
                source_reader=SourceReader(self.session_factory),
            ),
        )

    @property
    def chat_service(self):
        from q5search.application.services import ChatService

        return self._get(
            "chat_service",
            lambda: ChatService(
                retrieval_service=self.retrieval_service,
                platform_reader=self.platform_reader,
                generator=self.generator,
                title_generator=self.title_generator,
                settings=self.settings.retrieval,
            ),
        )

    @property
    def recommendation_service(self):
        from q5search.application.services import RecommendationService

        return self._get(
            "recommendation_service",
            lambda: RecommendationService(
                self.retrieval_service, self.platform_reader, self.settings.retrieval
            ),
        )

    @property
    def feed_service(self):
        from q5search.application.services import FeedService

        return self._get(
            "feed_service",
            lambda: FeedService(self.retrieval_service, self.platform_reader, self.settings.retrieval),
        )

    def clear(self) -> None:
        """Clear all cached instances."""
        self._instances.clear()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    return get_service_cache().settings


def get_indexing_pipeline():
    return get_service_cache().indexing_pipeline


def get_retrieval_service():
    return get_service_cache().retrieval_service


def get_chat_service():
    """Get cached chat service."""
    return get_service_cache().chat_service


def get_recommendation_service():
    return get_service_cache().recommendation_service


def get_feed_service():
    return get_service_cache().feed_service
