"""
Search document ORM model.

The unit of the semantic index: normalized text, its embedding and a tagged
metadata blob ({type, link, title, provider}).

Dependencies: sqlalchemy, pgvector, q5search.boundary.db.base
System role: Vector document persistence
"""

from pgvector.sqlalchemy import Vector
from sqlalchemy import BigInteger, JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from q5search.boundary.db.base import Base


class SearchDocumentModel(Base):
    """
    Row of the search_documents table.

    At most one row is expected per metadata link. That is enforced by the
    indexing pipeline's existence check, not by the schema, unless the
    optional unique (type, link) index has been created.

    Attributes:
        id: Auto-incrementing primary key (insertion order breaks similarity ties)
        content: Labeled-field rendering of the source entity
        embedding: Provider embedding of the content (dimension set at table creation)
        document_metadata: JSONB column "metadata" with type, link, title, provider
    """

    __tablename__ = "search_documents"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(Vector(), nullable=False)
    document_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
        doc="Tagged metadata: type, link, title, provider",
    )
