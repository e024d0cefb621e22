from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pitchside.core.text import parse_int
from pitchside.ingestion.providers.base.client import BaseHttpClient
from pitchside.ingestion.providers.base.errors import (
    ProviderRateLimited,
    ProviderResponseError,
)
from pitchside.ingestion.providers.base.types import ResponsePage

logger = logging.getLogger(__name__)

RATE_LIMITED_BACKOFF_S = 60.0


@dataclass
class ApiFootballRateLimiter:
    """Spaces requests according to the per-minute quota API-Football reports.

    Every response carries `X-RateLimit-Limit` (requests per minute) and
    `X-RateLimit-Remaining`. The next request may not start before
    `not_before` (a monotonic timestamp).
    """

    low_remaining: int = 2
    spacing_s: float = 0.0
    not_before: float | None = None

    _sleep: Callable[[float], Any] = field(default=time.sleep, repr=False)
    _clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def wait(self) -> None:
        if self.not_before is None:
            return
        delay = self.not_before - self._clock()
        if delay > 0:
            self._sleep(delay)

    def observe(self, headers: Mapping[str, str]) -> None:
        per_minute = parse_int(headers.get("X-RateLimit-Limit"))
        left = parse_int(headers.get("X-RateLimit-Remaining"))

        if per_minute and per_minute > 0:
            self.spacing_s = max(self.spacing_s, 60.0 / per_minute)

        # No reset header is sent, so an almost empty bucket means waiting it out.
        if left is not None and left <= self.low_remaining:
            pause = 60.0 if left <= 1 else 10.0
            logger.info("api-football quota low (remaining=%s); pausing %.0fs", left, pause)
            self._sleep(pause)

        self.not_before = self._clock() + self.spacing_s


def _listing(payload: Mapping[str, Any]) -> ResponsePage:
    items = payload.get("response")
    paging = payload.get("paging")
    if not isinstance(paging, dict):
        paging = {}
    return ResponsePage(
        items=[i for i in items if isinstance(i, dict)] if isinstance(items, list) else [],
        current_page=parse_int(paging.get("current")),
        total_pages=parse_int(paging.get("total")),
    )


@dataclass
class ApiFootballClient:
    http: BaseHttpClient
    api_key: str
    rate_limiter: ApiFootballRateLimiter = field(default_factory=ApiFootballRateLimiter)
    max_rate_limit_attempts: int = 5

    _sleep: Callable[[float], Any] = field(default=time.sleep, repr=False)

    def _send(self, path: str, params: Mapping[str, Any] | None) -> dict[str, Any]:
        for attempt in range(1, self.max_rate_limit_attempts + 1):
            try:
                data, headers = self.http.get_json_with_headers(
                    path, params=params, headers={"x-apisports-key": self.api_key}
                )
            except ProviderRateLimited:
                if attempt == self.max_rate_limit_attempts:
                    raise
                logger.warning(
                    "api-football returned 429 on %s (attempt %d/%d)",
                    path,
                    attempt,
                    self.max_rate_limit_attempts,
                )
                self._sleep(RATE_LIMITED_BACKOFF_S)
                continue
            self.rate_limiter.observe(headers)
            return data
        raise ProviderRateLimited(f"api-football kept rate limiting {path}")

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        self.rate_limiter.wait()
        data = self._send(path, params)

        # Application errors arrive as HTTP 200 with a non-empty `errors` list or dict.
        errors = data.get("errors") or []
        if errors:
            raise ProviderResponseError(f"api-football returned errors: {errors}")
        return data

    def fetch_players_page(
        self, *, season: int, league: int, team: int, page: int = 1
    ) -> ResponsePage:
        params = {"season": season, "league": league, "team": team, "page": page}
        listing = _listing(self.get("/players", params=params))
        logger.debug("Fetched api-football players %s items=%d", params, len(listing.items))
        return listing

    def fetch_teams_page(self, *, league: int, season: int) -> ResponsePage:
        # `/teams` is not paginated; the whole league is one response.
        params = {"league": league, "season": season}
        listing = _listing(self.get("/teams", params=params))
        logger.debug("Fetched api-football teams %s items=%d", params, len(listing.items))
        return listing

    def fetch_leagues(
        self,
        *,
        league: int | None = None,
        season: int | None = None,
        country: str | None = None,
    ) -> ResponsePage:
        params = {
            k: v
            for k, v in (("id", league), ("season", season), ("country", country))
            if v is not None
        }
        listing = _listing(self.get("/leagues", params=params))
        logger.debug("Fetched api-football leagues %s items=%d", params, len(listing.items))
        return listing
