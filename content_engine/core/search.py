"""Asset search: vector retrieval, reranking and keyword pinning.

Usage:
    service = AssetSearchService.from_clients(supabase, EmbeddingProvider.from_settings())

    result = await service.search_with_pinning("CrowdStrike case study", limit=8)
    result.pinned     # curated assets, rule-priority order
    result.searched   # ranked SearchResults, pinned assets excluded
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from content_engine.core.capabilities import Capability, detect_capability, get_capability_info
from content_engine.core.config import Settings, get_settings
from content_engine.core.embeddings import EmbeddingProvider
from content_engine.core.logging import get_logger, log_with_context
from content_engine.core.pinning import PinningResolver
from content_engine.core.ranking import BoostConfig, dedupe_by_asset, exclude_assets, rerank
from content_engine.core.schemas_assets import AssetType, PinnedSearchResult, SearchResult
from content_engine.db.assets import AssetStore
from content_engine.db.vector_store import VectorStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchOptions:
    """Tunables for search_assets and search_with_pinning."""

    default_limit: int = 10
    min_similarity: float = 0.2
    overfetch_factor: int = 2
    # The resolved capability may be used as a store predicate, a boost
    # signal, or both; each is switched independently.
    filter_by_capability: bool = True
    boost_by_capability: bool = True
    boosts: BoostConfig = field(default_factory=BoostConfig)

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchOptions:
        return cls(
            default_limit=settings.SEARCH_DEFAULT_LIMIT,
            min_similarity=settings.SEARCH_MIN_SIMILARITY,
            overfetch_factor=settings.SEARCH_OVERFETCH_FACTOR,
            filter_by_capability=settings.CAPABILITY_FILTER_ENABLED,
            boost_by_capability=settings.CAPABILITY_BOOST_ENABLED,
            boosts=BoostConfig.from_settings(settings),
        )


class AssetSearchService:
    """Entry point for the retrieval-and-ranking pipeline."""

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        vector_store: VectorStore,
        pinning: PinningResolver,
        options: SearchOptions | None = None,
    ):
        self.embeddings = embeddings
        self.vector_store = vector_store
        self.pinning = pinning
        self.options = options or SearchOptions()

    @classmethod
    def from_clients(
        cls,
        supabase: Any,
        embeddings: EmbeddingProvider,
        settings: Settings | None = None,
    ) -> AssetSearchService:
        """Wire stores and resolver around an existing Supabase client."""
        settings = settings or get_settings()
        asset_store = AssetStore(
            supabase,
            assets_table=settings.ASSETS_TABLE,
            pinning_rules_table=settings.PINNING_RULES_TABLE,
        )
        vector_store = VectorStore(
            supabase,
            v2_function=settings.SEARCH_RPC_V2,
            v1_function=settings.SEARCH_RPC_V1,
        )
        return cls(
            embeddings=embeddings,
            vector_store=vector_store,
            pinning=PinningResolver(asset_store),
            options=SearchOptions.from_settings(settings),
        )

    async def search_assets(
        self,
        query: str,
        limit: int | None = None,
        asset_types: list[AssetType] | None = None,
        client_filter: str | None = None,
        min_similarity: float | None = None,
        capability: Capability | None = None,
    ) -> list[SearchResult]:
        """
        Vector search with reranking and per-asset deduplication.

        Args:
            query: Query text to embed
            limit: Maximum results (defaults to options.default_limit)
            asset_types: Only return assets of these types
            client_filter: Case-insensitive partial match on client name
            min_similarity: Floor on raw similarity, applied before boosts
            capability: Capability to filter and/or boost by

        Returns:
            Results ordered by boosted similarity, at most one per asset

        Raises:
            Exception: If embedding fails or the store query fails
        """
        limit = max(limit if limit is not None else self.options.default_limit, 1)
        floor = self.options.min_similarity if min_similarity is None else min_similarity

        query_embedding = await self.embeddings.embed_query_async(query)

        raw = await asyncio.to_thread(
            self.vector_store.match_chunks,
            query_embedding,
            limit * self.options.overfetch_factor,
            floor,
            list(asset_types) if asset_types else None,
            client_filter,
            capability if self.options.filter_by_capability else None,
        )

        ranked = rerank(
            raw,
            capability=capability if self.options.boost_by_capability else None,
            config=self.options.boosts,
        )
        results = dedupe_by_asset(ranked)[:limit]

        log_with_context(
            logger,
            logging.INFO,
            f"Vector search returned {len(results)} assets from {len(raw)} chunks",
            limit=limit,
            capability=capability,
        )
        return results

    async def search_with_pinning(
        self,
        query: str,
        limit: int | None = None,
        asset_types: list[AssetType] | None = None,
        capability: Capability | None = None,
    ) -> PinnedSearchResult:
        """
        Pinned assets first, then vector search for the remaining slots.

        A failing vector search degrades to an empty searched list so that
        pinned content still reaches the caller.

        Args:
            query: Raw visitor query
            limit: Total results wanted (defaults to options.default_limit)
            asset_types: Only search assets of these types
            capability: Explicit capability; detected from the query if omitted

        Returns:
            PinnedSearchResult with pinned, searched and detected_capability
        """
        limit = max(limit if limit is not None else self.options.default_limit, 1)
        resolved_capability = capability or detect_capability(query)
        if resolved_capability and capability is None:
            info = get_capability_info(resolved_capability)
            log_with_context(
                logger,
                logging.DEBUG,
                f"Detected capability {info.name}",
                capability=resolved_capability,
                category=info.category,
            )

        pinned = await asyncio.to_thread(self.pinning.get_pinned_assets, query)
        pinned_ids = {asset.id for asset in pinned}

        search_limit = max(1, limit - len(pinned))
        try:
            candidates = await self.search_assets(
                query,
                limit=search_limit + len(pinned),
                asset_types=asset_types,
                capability=resolved_capability,
            )
        except Exception as e:
            log_with_context(
                logger,
                logging.ERROR,
                f"Vector search failed, returning pinned assets only: {e}",
                query=query[:50],
                pinned=len(pinned),
            )
            candidates = []

        searched = exclude_assets(candidates, pinned_ids)[:search_limit]

        return PinnedSearchResult(
            pinned=pinned,
            searched=searched,
            detected_capability=resolved_capability,
        )
