"""Keyword pinning: curated assets that always appear for matching queries."""

import logging

from content_engine.core.logging import get_logger, log_with_context
from content_engine.core.schemas_assets import Asset
from content_engine.db.assets import AssetStore

logger = get_logger(__name__)


class PinningResolver:
    """Resolve pinning rules against a query into ordered assets."""

    def __init__(self, store: AssetStore):
        self.store = store

    def match_asset_ids(self, query: str) -> list[str]:
        """Asset ids of all rules matching the query, highest priority first.

        Raises:
            Exception: If the rules cannot be read
        """
        rules = sorted(self.store.list_pinning_rules(), key=lambda r: r.priority, reverse=True)
        asset_ids: list[str] = []
        for rule in rules:
            if rule.matches(query) and rule.asset_id not in asset_ids:
                asset_ids.append(rule.asset_id)
        return asset_ids

    def get_pinned_assets(self, query: str) -> list[Asset]:
        """
        Get assets pinned for a query, ordered by rule priority.

        Pinning is best-effort: any failure reading rules or assets is
        logged and treated as no pins.

        Args:
            query: Raw visitor query

        Returns:
            Pinned assets (possibly empty)
        """
        try:
            asset_ids = self.match_asset_ids(query)
            if not asset_ids:
                return []
            assets = self.store.get_assets_by_ids(asset_ids)
        except Exception as e:
            logger.warning(f"Pinning lookup failed, continuing without pins: {e}")
            return []

        by_id = {asset.id: asset for asset in assets}
        missing = [asset_id for asset_id in asset_ids if asset_id not in by_id]
        if missing:
            logger.warning(f"Pinned assets not found: {missing}")

        pinned = [by_id[asset_id] for asset_id in asset_ids if asset_id in by_id]
        if pinned:
            log_with_context(
                logger,
                logging.INFO,
                f"Pinned {len(pinned)} assets",
                asset_ids=[asset.id for asset in pinned],
            )
        return pinned
