"""
Profile text for profile-driven retrieval (job recommendations, feed).

Dependencies: None
System role: Profile -> query text
"""

from collections.abc import Mapping
from typing import Any

from q5search.core.indexing.renderers import field

PROFILE_QUERY_FIELDS: tuple[tuple[str, str], ...] = (
    ("Role", "role"),
    ("Skills", "skills"),
    ("Focus", "focus_areas"),
    ("Bio", "short_bio"),
)


def build_profile_query(profile: Mapping[str, Any] | Any | None) -> str:
    """
    Join the profile's non-blank role, skills, focus areas and bio as labeled lines.

    Returns:
        str: Query text, empty when none of the fields are filled
    """
    if profile is None:
        return ""
    lines = []
    for label, name in PROFILE_QUERY_FIELDS:
        value = field(profile, name)
        if value is not None and str(value).strip():
            lines.append(f"{label}: {str(value).strip()}")
    return "\n".join(lines)
