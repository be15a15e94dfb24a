"""Vector similarity search over asset chunk embeddings.

Similarity is computed in Postgres (pgvector) by two RPC functions that
return rows of ``{asset, similarity, chunk_text}`` where
``similarity = 1 - (embedding <=> query_embedding)``:

- ``search_assets_v2(query_embedding, match_count, min_similarity,
  filter_types, filter_client, filter_capability)``
- ``search_assets(query_embedding, match_count, min_similarity,
  filter_types, filter_client)``, the legacy signature without capability
  filtering, still deployed on databases that predate the v2 migration.
"""

from typing import Any

from pydantic import ValidationError

from content_engine.core.logging import get_logger
from content_engine.core.schemas_assets import Asset, SearchResult

logger = get_logger(__name__)

# PostgREST "function not found in schema cache" and Postgres undefined_function
MISSING_FUNCTION_CODES = frozenset({"PGRST202", "42883"})
_MISSING_FUNCTION_PHRASES = ("could not find the function", "does not exist", "not found")


def _error_text(error: Exception) -> str:
    parts = [
        getattr(error, "message", None),
        getattr(error, "details", None),
        getattr(error, "hint", None),
        str(error),
    ]
    return " ".join(str(part) for part in parts if part).lower()


def is_missing_function_error(error: Exception, function_name: str) -> bool:
    """
    Return True if *error* reports that the RPC *function_name* does not exist.

    Prefers the structured error code; falls back to matching the message
    text, which must mention the function by name.
    """
    if getattr(error, "code", None) in MISSING_FUNCTION_CODES:
        return True
    text = _error_text(error)
    if function_name.lower() not in text:
        return False
    return any(phrase in text for phrase in _MISSING_FUNCTION_PHRASES)


class VectorStore:
    """Supabase RPC adapter that negotiates which search signature exists."""

    def __init__(
        self,
        client: Any,
        v2_function: str = "search_assets_v2",
        v1_function: str = "search_assets",
    ):
        self.client = client
        self.v2_function = v2_function
        self.v1_function = v1_function
        # None until the first probe or search settles it
        self.supports_capability_filter: bool | None = None

    def negotiate(self, dim: int) -> bool | None:
        """
        Probe once whether the capability-aware search function is deployed.

        Returns the cached decision, or None if the probe failed for an
        unrelated reason (the next search settles it instead).
        """
        try:
            self._rpc(
                self.v2_function,
                {
                    "query_embedding": [0.0] * dim,
                    "match_count": 0,
                    "min_similarity": 1.0,
                    "filter_types": None,
                    "filter_client": None,
                    "filter_capability": None,
                },
            )
        except Exception as e:
            if is_missing_function_error(e, self.v2_function):
                self._use_legacy(e)
            else:
                logger.warning(f"Search function probe failed: {e}")
            return self.supports_capability_filter

        self.supports_capability_filter = True
        logger.info(f"Using {self.v2_function} for vector search")
        return True

    def match_chunks(
        self,
        query_embedding: list[float],
        match_count: int,
        min_similarity: float,
        filter_types: list[str] | None = None,
        filter_client: str | None = None,
        filter_capability: str | None = None,
    ) -> list[SearchResult]:
        """
        Return the nearest chunk matches, most similar first.

        Rows below min_similarity are excluded by the store. When only the
        legacy function exists the capability filter is silently dropped.

        Raises:
            Exception: If the store query fails for any reason other than a
                missing v2 function
        """
        params: dict[str, Any] = {
            "query_embedding": query_embedding,
            "match_count": match_count,
            "min_similarity": min_similarity,
            "filter_types": filter_types or None,
            "filter_client": filter_client or None,
        }

        if self.supports_capability_filter is not False:
            try:
                rows = self._rpc(
                    self.v2_function, {**params, "filter_capability": filter_capability}
                )
            except Exception as e:
                if not is_missing_function_error(e, self.v2_function):
                    logger.error(f"Vector search failed: {e}")
                    raise
                self._use_legacy(e)
            else:
                self.supports_capability_filter = True
                return self._parse_rows(rows)

        try:
            rows = self._rpc(self.v1_function, params)
        except Exception as e:
            logger.error(f"Vector search failed: {e}")
            raise
        return self._parse_rows(rows)

    def _rpc(self, function_name: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        response = self.client.rpc(function_name, params).execute()
        return response.data or []

    def _use_legacy(self, error: Exception) -> None:
        if self.supports_capability_filter is not False:
            logger.warning(
                f"{self.v2_function} unavailable, falling back to {self.v1_function}: {error}"
            )
        self.supports_capability_filter = False

    @staticmethod
    def _parse_rows(rows: list[dict[str, Any]]) -> list[SearchResult]:
        results = []
        for row in rows:
            try:
                asset = Asset.model_validate(row["asset"])
            except (KeyError, TypeError, ValidationError) as e:
                logger.warning(f"Skipping malformed search row: {e}")
                continue
            results.append(
                SearchResult(
                    asset=asset,
                    similarity=float(row.get("similarity") or 0.0),
                    chunk_text=row.get("chunk_text") or "",
                )
            )
        return results
