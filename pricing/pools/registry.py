"""Venue cache for issue pools.

Pools are immutable values held in a cache keyed by pool id. Readers take
the current value and quote against it without holding any lock; settled
balance updates build a new pool and swap it into the cache atomically.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from pricing.config import DEFAULT_PRICING_CONFIG, PricingConfig
from pricing.models.snapshot import VenueSnapshot
from pricing.models.types import normalize_address
from pricing.pools.base import PoolType
from pricing.pools.common import coerce_snapshot, find_token_index
from pricing.pools.errors import MissingFieldError, UnknownPoolTypeError
from pricing.pools.primary_issue import PrimaryIssuePool
from pricing.pools.secondary_issue import SecondaryIssuePool
from pricing.pools.types import AnyPool

logger = structlog.get_logger()


def _raw_pool_id(snapshot: object) -> Any:
    return snapshot.get("id") if isinstance(snapshot, Mapping) else None


def parse_pool(
    snapshot: VenueSnapshot | Mapping[str, Any],
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> AnyPool:
    """Build the pool matching a snapshot's poolType.

    Raises:
        UnknownPoolTypeError: If poolType is not an issue pool type
        MissingFieldError: If the snapshot lacks a field the pool type requires
    """
    snap = coerce_snapshot(snapshot)
    if snap.pool_type == PoolType.PRIMARY_ISSUE.value:
        return PrimaryIssuePool.from_venue_snapshot(snap, config)
    if snap.pool_type == PoolType.SECONDARY_ISSUE.value:
        return SecondaryIssuePool.from_venue_snapshot(snap, config)
    raise UnknownPoolTypeError(f"Pool {snap.id} has unsupported type {snap.pool_type!r}")


class VenueCache:
    """Issue pools keyed by pool id.

    `get` hands out the current immutable pool. `apply_balance_update`
    replaces the entry with an updated copy; callers holding the previous
    value keep a consistent view.
    """

    def __init__(self, pools: Iterable[AnyPool] | None = None) -> None:
        self._pools: dict[str, AnyPool] = {}
        self._lock = threading.Lock()

        if pools:
            for pool in pools:
                self.add(pool)

    def add(self, pool: AnyPool) -> None:
        """Add a pool, replacing any pool with the same id."""
        with self._lock:
            if pool.id in self._pools:
                logger.debug("issue_pool_replaced", pool_id=pool.id)
            self._pools[pool.id] = pool

    def get(self, pool_id: str) -> AnyPool | None:
        return self._pools.get(pool_id)

    def __contains__(self, pool_id: object) -> bool:
        return pool_id in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    @property
    def pool_ids(self) -> list[str]:
        return list(self._pools)

    def get_pools_for_pair(self, token_a: str, token_b: str) -> list[AnyPool]:
        """Pools holding both tokens (any case, order independent)."""
        if normalize_address(token_a) == normalize_address(token_b):
            return []
        return [
            pool
            for pool in list(self._pools.values())
            if find_token_index(pool.tokens, token_a) is not None
            and find_token_index(pool.tokens, token_b) is not None
        ]

    def apply_balance_update(self, pool_id: str, token: str, new_balance: int) -> AnyPool:
        """Apply a settled balance change and publish the new pool.

        Args:
            pool_id: Id of the cached pool
            token: Pool token address, or the pool address for total shares
            new_balance: New balance in the token's native units

        Returns:
            The pool now held by the cache

        Raises:
            KeyError: If no pool with this id is cached
            TokenNotInPoolError: If token is not held by the pool
        """
        with self._lock:
            current = self._pools.get(pool_id)
            if current is None:
                raise KeyError(pool_id)
            updated = current.update_token_balance_for_pool(token, new_balance)
            self._pools[pool_id] = updated
        return updated


def build_cache_from_snapshots(
    snapshots: Iterable[VenueSnapshot | Mapping[str, Any]],
    config: PricingConfig = DEFAULT_PRICING_CONFIG,
) -> VenueCache:
    """Build a VenueCache from venue snapshots.

    Snapshots of other pool types are skipped. Issue pool snapshots that
    are malformed or lack required fields are logged and skipped so one bad
    venue does not hide the rest.
    """
    cache = VenueCache()
    for snapshot in snapshots:
        try:
            snap = coerce_snapshot(snapshot)
        except ValidationError as e:
            logger.warning(
                "issue_pool_snapshot_invalid",
                pool_id=_raw_pool_id(snapshot),
                fields=[".".join(str(part) for part in err["loc"]) for err in e.errors()],
            )
            continue
        try:
            pool = parse_pool(snap, config)
        except UnknownPoolTypeError:
            logger.debug("issue_pool_type_skipped", pool_id=snap.id, pool_type=snap.pool_type)
            continue
        except MissingFieldError as e:
            logger.warning(
                "issue_pool_snapshot_incomplete",
                pool_id=snap.id,
                pool_type=e.pool_type,
                field=e.field,
            )
            continue
        cache.add(pool)

    logger.info("issue_pool_cache_built", pool_count=len(cache))
    return cache
