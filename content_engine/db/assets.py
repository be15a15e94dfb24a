"""Database operations for assets and pinning rules."""

import logging
from typing import Any

from pydantic import ValidationError

from content_engine.core.logging import get_logger, log_with_context
from content_engine.core.schemas_assets import Asset, PinningRule

logger = get_logger(__name__)


class AssetStore:
    """Read-only access to the assets and pinning_rules tables."""

    def __init__(
        self,
        client: Any,
        assets_table: str = "assets",
        pinning_rules_table: str = "pinning_rules",
    ):
        self.client = client
        self.assets_table = assets_table
        self.pinning_rules_table = pinning_rules_table

    def get_asset(self, asset_id: str) -> Asset | None:
        """
        Get a single asset by id.

        Args:
            asset_id: Asset id

        Returns:
            Asset or None if not found

        Raises:
            Exception: If database query fails
        """
        try:
            response = (
                self.client.table(self.assets_table)
                .select("*")
                .eq("id", asset_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get asset {asset_id}: {e}")
            raise

        if not response.data:
            return None
        return Asset.model_validate(response.data[0])

    def get_assets_by_ids(self, asset_ids: list[str]) -> list[Asset]:
        """
        Batch fetch assets by id.

        The returned order is whatever the store returns; callers that care
        about order must re-sort.

        Raises:
            Exception: If database query fails
        """
        if not asset_ids:
            return []

        try:
            response = (
                self.client.table(self.assets_table)
                .select("*")
                .in_("id", asset_ids)
                .execute()
            )
        except Exception as e:
            log_with_context(logger, logging.ERROR, f"Failed to get assets: {e}", count=len(asset_ids))
            raise

        assets = []
        for row in response.data or []:
            try:
                assets.append(Asset.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed asset row {row.get('id')}: {e}")
                continue
        return assets

    def list_pinning_rules(self) -> list[PinningRule]:
        """
        List all pinning rules, highest priority first.

        Raises:
            Exception: If database query fails
        """
        try:
            response = (
                self.client.table(self.pinning_rules_table)
                .select("keyword, asset_id, priority")
                .order("priority", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list pinning rules: {e}")
            raise

        rules = []
        for row in response.data or []:
            try:
                rules.append(PinningRule.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed pinning rule: {e}")
                continue
        return rules
