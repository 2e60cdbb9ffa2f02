"""
Retry utilities with exponential backoff for client-data requests.

Decides which failures are transient and how long to wait between attempts.
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Type

import httpx


@dataclass
class RetryStats:
    """Tracks retry statistics for a single fetch."""
    attempts: int = 0
    retries: int = 0
    total_delay_seconds: float = 0.0
    last_error: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    success: bool = False

    def record_attempt(self, error: Optional[Exception] = None, delay: float = 0.0):
        """Record an attempt; a delay means another attempt follows."""
        self.attempts += 1
        if delay:
            self.retries += 1
            self.total_delay_seconds += delay
        if error:
            error_str = f"{type(error).__name__}: {str(error)}"
            self.last_error = error_str
            self.errors.append(error_str)

    def mark_success(self):
        self.success = True

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/responses."""
        return {
            "attempts": self.attempts,
            "retries": self.retries,
            "total_delay_seconds": round(self.total_delay_seconds, 2),
            "success": self.success,
            "last_error": self.last_error,
            "errors": self.errors[:5]  # Cap at 5 errors
        }


# Network-level failures worth another attempt
DEFAULT_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    httpx.TransportError,  # connect/read errors and timeouts
    ConnectionError,
    TimeoutError,
)

RETRYABLE_STATUS_CODES: Tuple[int, ...] = (429, 500, 502, 503, 504)


def calculate_backoff(
    attempt: int,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True
) -> float:
    """
    Calculate delay for exponential backoff.

    Args:
        attempt: Current attempt number (1-indexed)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay cap
        exponential_base: Base for exponential calculation
        jitter: Add 0-25% randomness to the delay

    Returns:
        Delay in seconds
    """
    delay = min(base_delay * (exponential_base ** (attempt - 1)), max_delay)

    if jitter:
        delay += delay * random.uniform(0, 0.25)

    return delay


def is_retryable_error(
    error: Exception,
    retryable_exceptions: Tuple[Type[Exception], ...] = DEFAULT_RETRYABLE_EXCEPTIONS,
    retryable_status_codes: Tuple[int, ...] = RETRYABLE_STATUS_CODES
) -> bool:
    """
    Check if an error is retryable.

    Transport errors are always retried; HTTP status errors only for rate
    limiting and server-side failures. Anything else (bad JSON, 4xx) is final.
    """
    if isinstance(error, retryable_exceptions):
        return True

    status_code = getattr(error, "status_code", None)
    if status_code is None and isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code

    return status_code in retryable_status_codes
