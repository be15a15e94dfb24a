"""Business capability taxonomy and query capability detection.

The table order below is the detection priority: when keyword sets overlap,
the first capability in the table wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

Capability = Literal[
    # Foundational Strategy
    "narrative-frameworks",
    "positioning-messaging",
    "gtm-strategy",
    "journey-persona",
    # Content & Engagement
    "editorial-strategy",
    "thought-leadership",
    "copywriting",
    "social-strategy",
    # Visual & Design
    "brand-design",
    "design-systems",
    "video-production",
    # Sales Enablement & Events
    "sales-collateral",
    "keynote-events",
    "partner-marketing",
]

CAPABILITY_SLUGS: frozenset[str] = frozenset(get_args(Capability))


@dataclass(frozen=True)
class CapabilityInfo:
    """Display data and detection keywords for a capability."""

    slug: Capability
    name: str
    category: str
    keywords: tuple[str, ...]


CAPABILITY_TABLE: tuple[CapabilityInfo, ...] = (
    CapabilityInfo(
        slug="narrative-frameworks",
        name="Narrative Frameworks",
        category="Foundational Strategy",
        keywords=("narrative", "story", "storytelling", "framework", "three-layer", "hero journey", "arc"),
    ),
    CapabilityInfo(
        slug="positioning-messaging",
        name="Positioning & Messaging",
        category="Foundational Strategy",
        keywords=(
            "positioning",
            "messaging",
            "value prop",
            "differentiation",
            "competitive",
            "market position",
            "brand voice",
        ),
    ),
    CapabilityInfo(
        slug="gtm-strategy",
        name="GTM Strategy",
        category="Foundational Strategy",
        keywords=("go-to-market", "gtm", "launch", "product launch", "market entry", "rollout"),
    ),
    CapabilityInfo(
        slug="journey-persona",
        name="Journey Mapping & Personas",
        category="Foundational Strategy",
        keywords=("journey", "persona", "customer", "empathy map", "user research", "audience", "buyer"),
    ),
    CapabilityInfo(
        slug="editorial-strategy",
        name="Editorial Strategy",
        category="Content & Engagement",
        keywords=("editorial", "content strategy", "content calendar", "content arc", "blog", "article"),
    ),
    CapabilityInfo(
        slug="thought-leadership",
        name="Thought Leadership",
        category="Content & Engagement",
        keywords=(
            "thought leadership",
            "executive",
            "authority",
            "expertise",
            "industry voice",
            "point of view",
            "pov",
        ),
    ),
    CapabilityInfo(
        slug="copywriting",
        name="Copywriting & Scriptwriting",
        category="Content & Engagement",
        keywords=("copy", "script", "writing", "headline", "tagline", "creative writing"),
    ),
    CapabilityInfo(
        slug="social-strategy",
        name="Social Strategy",
        category="Content & Engagement",
        keywords=("social", "linkedin", "twitter", "engagement", "community", "viral"),
    ),
    CapabilityInfo(
        slug="brand-design",
        name="Brand Design",
        category="Visual & Design",
        keywords=("brand", "visual identity", "logo", "rebrand", "brand refresh", "identity system"),
    ),
    CapabilityInfo(
        slug="design-systems",
        name="Design Systems",
        category="Visual & Design",
        keywords=("design system", "component library", "style guide", "ui kit", "scalable design"),
    ),
    CapabilityInfo(
        slug="video-production",
        name="Video Production",
        category="Visual & Design",
        keywords=("video", "production", "motion", "animation", "film", "documentary", "explainer"),
    ),
    CapabilityInfo(
        slug="sales-collateral",
        name="Sales Collateral",
        category="Sales Enablement & Events",
        keywords=("sales deck", "one-pager", "collateral", "sales enablement", "pitch deck", "proposal"),
    ),
    CapabilityInfo(
        slug="keynote-events",
        name="Keynote & Event Strategy",
        category="Sales Enablement & Events",
        keywords=(
            "keynote",
            "conference",
            "event",
            "stage",
            "presentation",
            "reinvent",
            "summit",
            "mainstage",
        ),
    ),
    CapabilityInfo(
        slug="partner-marketing",
        name="Partner Marketing",
        category="Sales Enablement & Events",
        keywords=("partner", "alliance", "channel", "ecosystem", "co-marketing", "joint"),
    ),
)

_INFO_BY_SLUG: dict[str, CapabilityInfo] = {info.slug: info for info in CAPABILITY_TABLE}


def is_capability(value: object) -> bool:
    """Return True if *value* is a known capability slug."""
    return isinstance(value, str) and value in CAPABILITY_SLUGS


def get_capability_info(capability: str) -> CapabilityInfo | None:
    """Look up display name and category for a capability slug."""
    return _INFO_BY_SLUG.get(capability)


def detect_capability(query: str) -> Capability | None:
    """
    Detect the business capability a free-text query is about.

    Substring keyword match over the lower-cased query. The first capability
    in CAPABILITY_TABLE with any matching keyword is returned.

    Args:
        query: Raw visitor query

    Returns:
        Capability slug, or None when no keyword matches
    """
    lowered = query.lower()
    for info in CAPABILITY_TABLE:
        if any(keyword in lowered for keyword in info.keywords):
            return info.slug
    return None
