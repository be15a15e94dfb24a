"""Sample assets and pinning rules shared by search tests."""

from typing import Any

from content_engine.core.schemas_assets import Asset, PinningRule, SearchResult


def make_asset(
    asset_id: str,
    asset_type: str = "article",
    title: str | None = None,
    client: str | None = None,
    **metadata: Any,
) -> Asset:
    """Build an Asset with metadata fields passed as keyword arguments."""
    return Asset.model_validate(
        {
            "id": asset_id,
            "type": asset_type,
            "title": title or f"Asset {asset_id}",
            "client": client,
            "metadata": metadata,
        }
    )


def make_result(asset: Asset, similarity: float, chunk_text: str = "") -> SearchResult:
    return SearchResult(asset=asset, similarity=similarity, chunk_text=chunk_text or asset.title)


CROWDSTRIKE = make_asset(
    "asset-crowdstrike",
    "case_study",
    title="CrowdStrike: Narrative for the Falcon platform",
    client="CrowdStrike",
    primary_capability="narrative-frameworks",
    quality_score=5,
)
KEYNOTE = make_asset(
    "asset-keynote",
    "video",
    title="re:Invent keynote production",
    client="AWS",
    primary_capability="keynote-events",
    secondary_capabilities=["video-production"],
    quality_score=4,
)
LAUNCH_PLAYBOOK = make_asset(
    "asset-launch",
    "guide",
    title="Product launch playbook",
    primary_capability="gtm-strategy",
    quality_score=3,
)
BRAND_ARTICLE = make_asset(
    "asset-brand",
    "article",
    title="When to rebrand",
    primary_capability="brand-design",
    secondary_capabilities=["positioning-messaging"],
)
SALES_DECK = make_asset(
    "asset-deck",
    "deck",
    title="Sales deck teardown",
    client="Snowflake",
    primary_capability="sales-collateral",
    is_case_study=True,
)

ALL_ASSETS = [CROWDSTRIKE, KEYNOTE, LAUNCH_PLAYBOOK, BRAND_ARTICLE, SALES_DECK]

PINNING_RULES = [
    PinningRule(keyword="crowdstrike", asset_id=CROWDSTRIKE.id, priority=10),
    PinningRule(keyword="keynote", asset_id=KEYNOTE.id, priority=5),
]
