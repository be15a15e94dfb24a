"""Reranking and deduplication of vector search results.

Raw similarity from the store is adjusted with additive boosts for
content-quality signals, clamped to 1.0, re-sorted, then collapsed to one
result per asset.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from content_engine.core.config import Settings
from content_engine.core.schemas_assets import Asset, SearchResult

MAX_SIMILARITY = 1.0


@dataclass(frozen=True)
class BoostConfig:
    """Additive boosts applied on top of raw similarity."""

    case_study: float = 0.10
    quality: float = 0.05
    quality_min_score: int = 4
    capability: float = 0.15

    @classmethod
    def from_settings(cls, settings: Settings) -> BoostConfig:
        return cls(
            case_study=settings.CASE_STUDY_BOOST,
            quality=settings.QUALITY_BOOST,
            quality_min_score=settings.QUALITY_BOOST_MIN_SCORE,
            capability=settings.CAPABILITY_BOOST,
        )


def compute_boost(
    asset: Asset,
    capability: str | None = None,
    config: BoostConfig = BoostConfig(),
) -> float:
    """Sum the boosts an asset earns for a query."""
    boost = 0.0
    if asset.is_case_study:
        boost += config.case_study
    score = asset.metadata.quality_score
    if score is not None and score >= config.quality_min_score:
        boost += config.quality
    # Primary tag only; secondary matches get no boost
    if capability and asset.metadata.primary_capability == capability:
        boost += config.capability
    return boost


def rerank(
    results: Iterable[SearchResult],
    capability: str | None = None,
    config: BoostConfig = BoostConfig(),
) -> list[SearchResult]:
    """
    Boost and re-sort search results.

    Boosts are added to the raw similarity and the sum is capped at 1.0.
    The sort is stable, so equal scores keep the store's order.

    Args:
        results: Raw results in store order (similarity descending)
        capability: Capability to reward on primary-tag match, if any
        config: Boost amounts

    Returns:
        New results with boosted similarity, highest first
    """
    boosted = [
        result.model_copy(
            update={
                "similarity": min(
                    MAX_SIMILARITY,
                    result.similarity + compute_boost(result.asset, capability, config),
                )
            }
        )
        for result in results
    ]
    return sorted(boosted, key=lambda r: r.similarity, reverse=True)


def dedupe_by_asset(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Keep the first occurrence of each asset id."""
    seen: set[str] = set()
    unique = []
    for result in results:
        if result.asset.id in seen:
            continue
        seen.add(result.asset.id)
        unique.append(result)
    return unique


def exclude_assets(results: Iterable[SearchResult], asset_ids: set[str]) -> list[SearchResult]:
    """Drop results whose asset id is in *asset_ids*."""
    return [result for result in results if result.asset.id not in asset_ids]
