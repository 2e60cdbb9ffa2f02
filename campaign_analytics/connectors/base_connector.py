"""
Base connector class for remote data sources
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from datetime import datetime
from campaign_analytics.utils.logger import log
from campaign_analytics.utils.retry import RetryStats, is_retryable_error, calculate_backoff
import asyncio
import time


class BaseConnector(ABC):
    """Base class for remote data source connectors"""

    # Retry configuration (can be overridden by subclasses or per instance)
    RETRY_MAX_ATTEMPTS = 3
    RETRY_BASE_DELAY = 1.0  # seconds
    RETRY_MAX_DELAY = 30.0  # seconds

    def __init__(self, name: str):
        self.name = name
        self.last_fetch = None
        self.fetch_count = 0
        self.error_count = 0
        self.retry_count = 0  # Total retries across all fetches

    @abstractmethod
    async def fetch_client_data(self, client_id: Optional[str]) -> Any:
        """Fetch the raw payload for one client"""
        pass

    async def fetch(self, client_id: Optional[str]) -> Dict[str, Any]:
        """
        Fetch a client's payload with retry logic and logging

        Args:
            client_id: Resolved client identity, or None for the unscoped load

        Returns:
            Dict with keys: success, source, client_id, data/error, fetch_time,
            duration, retry_stats
        """
        log.info(f"Fetching {self.name} data for client {client_id or '<unscoped>'}")
        start_time = time.time()
        stats = RetryStats()

        try:
            data = await self._retry_operation(
                lambda: self.fetch_client_data(client_id),
                operation_name="fetch_client_data",
                stats=stats
            )

            self.last_fetch = datetime.utcnow()
            self.fetch_count += 1
            elapsed = time.time() - start_time

            if stats.retries > 0:
                log.info(
                    f"Fetch completed for {self.name} in {elapsed:.2f}s "
                    f"(after {stats.retries} retries, {stats.total_delay_seconds:.1f}s delay)"
                )
            else:
                log.info(f"Fetch completed for {self.name} in {elapsed:.2f}s")

            return {
                "success": True,
                "source": self.name,
                "client_id": client_id,
                "data": data,
                "fetch_time": self.last_fetch,
                "duration": elapsed,
                "retry_stats": stats.to_dict()
            }

        except Exception as e:
            self.error_count += 1
            elapsed = time.time() - start_time
            log.error(f"Fetch failed for {self.name} after {stats.retries} retries: {str(e)}")

            return {
                "success": False,
                "source": self.name,
                "client_id": client_id,
                "error": str(e),
                "fetch_time": datetime.utcnow(),
                "duration": elapsed,
                "retry_stats": stats.to_dict()
            }

    async def _retry_operation(
        self,
        operation,
        operation_name: str = "operation",
        stats: Optional[RetryStats] = None
    ) -> Any:
        """
        Execute an async operation, retrying transient failures.

        Args:
            operation: Callable returning an awaitable
            operation_name: Name for logging
            stats: RetryStats updated in place
        """
        stats = stats or RetryStats()

        for attempt in range(1, self.RETRY_MAX_ATTEMPTS + 1):
            try:
                result = await operation()
                stats.record_attempt()
                stats.mark_success()
                if attempt > 1:
                    self.retry_count += attempt - 1
                return result

            except Exception as e:
                if attempt >= self.RETRY_MAX_ATTEMPTS or not is_retryable_error(e):
                    stats.record_attempt(error=e)
                    raise

                delay = calculate_backoff(
                    attempt,
                    base_delay=self.RETRY_BASE_DELAY,
                    max_delay=self.RETRY_MAX_DELAY
                )
                stats.record_attempt(error=e, delay=delay)

                log.warning(
                    f"{self.name} {operation_name} attempt {attempt} failed: {e}. "
                    f"Retrying in {delay:.1f}s..."
                )

                await asyncio.sleep(delay)

        raise RuntimeError("Retry exhausted")

    def get_status(self) -> Dict[str, Any]:
        """Get connector status"""
        return {
            "name": self.name,
            "last_fetch": self.last_fetch,
            "fetch_count": self.fetch_count,
            "error_count": self.error_count,
            "retry_count": self.retry_count,
            "error_rate": self.error_count / max(self.fetch_count + self.error_count, 1),
            "retry_config": {
                "max_attempts": self.RETRY_MAX_ATTEMPTS,
                "base_delay": self.RETRY_BASE_DELAY,
                "max_delay": self.RETRY_MAX_DELAY
            }
        }
