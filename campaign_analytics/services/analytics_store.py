"""
Analytics Store

In-memory, client-scoped home of the monthly campaign data. initialize() is
the only writer; every get_* accessor is synchronous and reads whatever
snapshot is currently published.

Load protocol:
- same client, store ready, nothing in flight  -> cached snapshot, no fetch
- same client already loading                  -> await that load
- other client / forced refresh / empty store  -> new load, next generation

Each load takes the next generation number and its result is published only
if that generation is newer than the published one, so a slow superseded
load can never overwrite a newer result. Superseded loads are not cancelled.
Publishing swaps one snapshot reference that carries both the data and the
client id; readers see the old snapshot or the new one, never a mix.

All of this assumes a single asyncio event loop.
"""
import asyncio
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import Awaitable, Callable, Dict, List, Optional

from campaign_analytics.config import Settings, get_settings
from campaign_analytics.models.campaign import AnalyticsSnapshot, CampaignRecord, MonthlyAggregate
from campaign_analytics.services.analytics_service import fetch_analytics_data, resolve_client_id
from campaign_analytics.utils.logger import log

Loader = Callable[[Optional[str]], Awaitable[AnalyticsSnapshot]]


@dataclass
class _PendingLoad:
    client_id: Optional[str]
    generation: int
    task: "asyncio.Task[AnalyticsSnapshot]"


class AnalyticsStore:
    """
    Client-scoped cache of {month -> records} and {month -> aggregate}

    Usage:
        store = AnalyticsStore(loader)
        await store.initialize("client-1")
        store.get_monthly_aggregate("2025-08")
    """

    def __init__(self, loader: Loader):
        self._loader = loader
        self._snapshot = AnalyticsSnapshot()
        self._pending: Optional[_PendingLoad] = None
        self._generation = 0
        self.load_count = 0

    @classmethod
    def from_connector(
        cls,
        connector,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> "AnalyticsStore":
        """Store whose loads go through fetch_analytics_data()."""
        settings = settings or get_settings()

        async def loader(client_id: Optional[str]) -> AnalyticsSnapshot:
            return await fetch_analytics_data(connector, client_id, settings=settings, rng=rng)

        return cls(loader)

    # ==================== STATE ====================

    @property
    def snapshot(self) -> AnalyticsSnapshot:
        return self._snapshot

    @property
    def active_client_id(self) -> Optional[str]:
        """Client the published snapshot belongs to (None = unscoped)"""
        return self._snapshot.client_id

    @property
    def is_loading(self) -> bool:
        return self._pending is not None

    @property
    def state(self) -> str:
        if self._pending is not None:
            return "loading"
        return "ready" if self._snapshot.generation > 0 else "empty"

    # ==================== LOADING ====================

    async def initialize(self, client_id: Optional[str] = None, force_refresh: bool = False) -> AnalyticsSnapshot:
        """
        Make sure the store holds data for a client

        Args:
            client_id: Client identity; blank or None means the unscoped dataset
            force_refresh: Start a new load even if the cache matches

        Returns:
            The snapshot produced for this request (or the cached one)
        """
        resolved = resolve_client_id(client_id)
        current = self._snapshot
        pending = self._pending

        if not force_refresh:
            if pending is None and current.has_data and current.client_id == resolved:
                log.debug(f"Analytics cache hit for client {resolved or '<unscoped>'}")
                return current

            if pending is not None and pending.client_id == resolved:
                log.debug(f"Joining in-flight analytics load for client {resolved or '<unscoped>'}")
                return await asyncio.shield(pending.task)

        load = self._start_load(resolved)
        return await asyncio.shield(load.task)

    def _start_load(self, client_id: Optional[str]) -> _PendingLoad:
        self._generation += 1
        generation = self._generation
        self.load_count += 1

        if self._pending is not None:
            log.info(
                f"Analytics load #{generation} for client {client_id or '<unscoped>'} "
                f"supersedes in-flight load #{self._pending.generation}"
            )

        task = asyncio.ensure_future(self._run_load(client_id, generation))
        load = _PendingLoad(client_id=client_id, generation=generation, task=task)
        self._pending = load
        return load

    async def _run_load(self, client_id: Optional[str], generation: int) -> AnalyticsSnapshot:
        try:
            result = await self._loader(client_id)
        except Exception as e:
            log.error(
                f"Analytics load #{generation} for client {client_id or '<unscoped>'} failed, "
                f"keeping previous data: {str(e)}"
            )
            return self._snapshot
        finally:
            if self._pending is not None and self._pending.generation == generation:
                self._pending = None

        snapshot = result.with_identity(client_id, generation)

        if generation > self._snapshot.generation:
            self._snapshot = snapshot
            log.info(
                f"Published analytics load #{generation} for client {client_id or '<unscoped>'} "
                f"({len(snapshot.monthly_aggregates)} months)"
            )
        else:
            log.warning(
                f"Discarding stale analytics load #{generation} for client {client_id or '<unscoped>'}; "
                f"load #{self._snapshot.generation} is already published"
            )

        return snapshot

    # ==================== QUERIES ====================

    def get_monthly_aggregate(self, month: str) -> Optional[MonthlyAggregate]:
        return self._snapshot.monthly_aggregates.get(month)

    def get_all_monthly_aggregates(self) -> Dict[str, MonthlyAggregate]:
        return dict(self._snapshot.monthly_aggregates)

    def get_available_months(self) -> List[str]:
        return self._snapshot.months

    def get_monthly_raw_data(self, month: str) -> List[CampaignRecord]:
        """Records for a month; [] for months the store does not hold."""
        return list(self._snapshot.monthly_raw_data.get(month, []))

    def is_synthetic_month(self, month: str) -> bool:
        return month in self._snapshot.synthetic_months


@lru_cache()
def get_analytics_store() -> AnalyticsStore:
    """Process-wide store wired to the configured client data endpoint"""
    from campaign_analytics.connectors.client_data import ClientDataConnector

    settings = get_settings()
    return AnalyticsStore.from_connector(ClientDataConnector(settings), settings=settings)
