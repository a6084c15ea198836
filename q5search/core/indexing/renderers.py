"""
Canonical text rendering of platform entities.

Each indexable entity type has a template of labeled fields, one per line.
The same rendering is used by the batch indexing pipeline and by
single-entity sync, so a document's content never depends on which path
wrote it.

Dependencies: q5search.boundary.vdb.vector_schemas, q5search.core.exceptions
System role: Entity -> search document content
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.core.exceptions import ValidationError

DEFAULT_JOB_LOCATION = "Remote"


class IneligibleEntity(Exception):
    """Raised for an entity that is deliberately left out of the index."""


@dataclass(frozen=True)
class RenderedEntity:
    """Rendered entity ready for embedding."""

    entity_type: EntityType
    link: str
    title: str
    content: str


def field(entity: Any, name: str) -> Any:
    """Read a field from an ORM row or a plain mapping."""
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None and str(v).strip())
    return str(value).strip()


def _require(entity: Any, entity_type: EntityType, *names: str) -> None:
    missing = [name for name in names if not _text(field(entity, name))]
    if missing:
        raise ValidationError(
            f"{entity_type.value} is missing required field(s): {', '.join(missing)}",
            field=missing[0],
        )


def entity_link(entity_type: EntityType, entity: Any) -> str:
    """
    Stable identifier of an entity: the slug for organizations, the primary key otherwise.

    Raises:
        ValidationError: If the identifier is missing
    """
    key = "slug" if entity_type == EntityType.ORGANIZATION else "id"
    link = _text(field(entity, key))
    if not link:
        raise ValidationError(f"Missing {key} for {entity_type.value} search document", field=key)
    return link


def render_job(job: Any) -> tuple[str, str]:
    _require(job, EntityType.JOB, "title", "organisation_name")
    title = _text(field(job, "title"))
    content = "\n".join([
        "Type: Job",
        f"Title: {title}",
        f"Company: {_text(field(job, 'organisation_name'))}",
        f"Location: {_text(field(job, 'location')) or DEFAULT_JOB_LOCATION}",
        f"Employment Type: {_text(field(job, 'employment_type'))}",
        f"Details: {_text(field(job, 'additional_description'))}",
    ])
    return title, content


def render_product(product: Any) -> tuple[str, str]:
    _require(product, EntityType.PRODUCT, "name", "company_name")
    name = _text(field(product, "name"))
    content = "\n".join([
        "Type: Product",
        f"Name: {name}",
        f"Company: {_text(field(product, 'company_name'))}",
        f"Category: {_text(field(product, 'category'))}",
        f"Description: {_text(field(product, 'short_description'))}",
    ])
    return name, content


def render_organization(org: Any) -> tuple[str, str]:
    _require(org, EntityType.ORGANIZATION, "name")
    name = _text(field(org, "name"))
    content = "\n".join([
        "Type: Organization",
        f"Name: {name}",
        f"Industry: {_text(field(org, 'industry'))}",
        f"Focus: {_text(field(org, 'focus_areas'))}",
        f"Description: {_text(field(org, 'description'))}",
    ])
    return name, content


def render_profile(profile: Any) -> tuple[str, str]:
    name = _text(field(profile, "full_name"))
    if not name:
        raise IneligibleEntity("profile has no full name")
    content = "\n".join([
        "Type: User Profile",
        f"Name: {name}",
        f"Role: {_text(field(profile, 'role'))}",
        f"Affiliation: {_text(field(profile, 'affiliation'))}",
        f"Bio: {_text(field(profile, 'short_bio'))}",
        f"Skills: {_text(field(profile, 'skills'))}",
    ])
    return name, content


def render_question(question: Any) -> tuple[str, str]:
    _require(question, EntityType.QUESTION, "title", "body")
    title = _text(field(question, "title"))
    content = "\n".join([
        "Type: Q&A Question",
        f"Title: {title}",
        f"Body: {_text(field(question, 'body'))}",
        f"Tags: {_text(field(question, 'tags'))}",
    ])
    return title, content


RENDERERS: dict[EntityType, Callable[[Any], tuple[str, str]]] = {
    EntityType.JOB: render_job,
    EntityType.PRODUCT: render_product,
    EntityType.ORGANIZATION: render_organization,
    EntityType.PROFILE: render_profile,
    EntityType.QUESTION: render_question,
}

INDEXABLE_TYPES: tuple[EntityType, ...] = tuple(RENDERERS)


def render_entity(entity_type: EntityType, entity: Any) -> RenderedEntity:
    """
    Render an entity with its type template.

    Args:
        entity_type: Kind of entity
        entity: ORM row or mapping with the entity's columns

    Returns:
        RenderedEntity: Link, title and content

    Raises:
        ValidationError: Unsupported type, missing required field or missing link
        IneligibleEntity: Entity is intentionally not indexed (profile without a name)
    """
    renderer = RENDERERS.get(entity_type)
    if renderer is None:
        raise ValidationError(f"Entity type '{entity_type.value}' is not indexable", field="type")
    title, content = renderer(entity)
    return RenderedEntity(
        entity_type=entity_type,
        link=entity_link(entity_type, entity),
        title=title,
        content=content,
    )


def normalize_for_embedding(content: str) -> str:
    """Flatten newlines to spaces before embedding."""
    return content.replace("\r\n", " ").replace("\n", " ")
