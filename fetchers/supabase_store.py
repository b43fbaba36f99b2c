"""Supabase (PostgREST) store over httpx."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from trend_engine.models import Post, PostTrendLink, Trend, TrendLink, parse_rows

from .errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

M = TypeVar("M", bound=BaseModel)


class SupabaseStore:
    """Reads the dashboard tables through the Supabase REST endpoint.

    Parameters
    ----------
    base_url:
        Project url, e.g. ``https://abc.supabase.co``.
    api_key:
        Anon key; sent both as ``apikey`` and as bearer token.
    client:
        Optional pre-built :class:`httpx.Client` (tests pass one with a mock transport).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"apikey": api_key, "Authorization": f"Bearer {api_key}", "Accept": "application/json"}
        if client is None:
            client = httpx.Client(timeout=timeout)
        client.headers.update(headers)
        self._client = client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SupabaseStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _select(self, table: str, model: Type[M], params: Dict[str, str]) -> List[M]:
        url = f"{self.base_url}/rest/v1/{table}"
        query = {"select": "*", "order": "created_at.desc", **params}
        try:
            response = self._client.get(url, params=query)
            response.raise_for_status()
            rows: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise StoreError(f"Supabase returned {exc.response.status_code} for {table}") from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"Could not reach Supabase for {table}: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"Supabase sent invalid JSON for {table}") from exc

        if not isinstance(rows, list):
            raise StoreError(f"Expected a list of rows for {table}, got {type(rows).__name__}")

        logger.info("Fetched %d rows from %s", len(rows), table)
        return parse_rows(model, rows)

    def list_trends(self) -> List[Trend]:
        return self._select("trends", Trend, {"is_active": "eq.true"})

    def list_posts(self) -> List[Post]:
        return self._select("posts", Post, {})

    def list_post_trend_links(self) -> List[PostTrendLink]:
        return self._select("post_trends", PostTrendLink, {})

    def list_trend_links(self, trend_id: Optional[str] = None) -> List[TrendLink]:
        params = {"trend_id": f"eq.{trend_id}"} if trend_id is not None else {}
        return self._select("trend_links", TrendLink, params)
