"""
Retry logic and catalog fetch error handling with exponential backoff.
Handles transient failures and validates remote catalog payloads.
"""

import logging
import random
import time
from typing import Callable, Optional, TypeVar
from functools import wraps

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

T = TypeVar('T')


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 3,
        initial_backoff: float = 1.0,
        backoff_multiplier: float = 2.0,
        max_backoff: float = 32.0,
        jitter: bool = True
    ):
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.backoff_multiplier = backoff_multiplier
        self.max_backoff = max_backoff
        self.jitter = jitter

    def get_backoff_time(self, attempt: int) -> float:
        """Calculate backoff time for attempt number."""
        backoff = min(
            self.initial_backoff * (self.backoff_multiplier ** attempt),
            self.max_backoff
        )

        if self.jitter:
            backoff = backoff * (0.5 + random.random())

        return backoff


class CatalogFetchError(Exception):
    """Base exception for catalog feed errors."""

    def __init__(self, message: str, source: str, retry_possible: bool = True):
        self.message = message
        self.source = source
        self.retry_possible = retry_possible
        super().__init__(self.message)


class TransientError(CatalogFetchError):
    """Error that might be transient (temporary)."""
    pass


class PermanentError(CatalogFetchError):
    """Error that won't be resolved by retrying."""

    def __init__(self, message: str, source: str):
        super().__init__(message, source, retry_possible=False)


def retry_with_backoff(
    func: Callable[..., T] = None,
    config: RetryConfig = None,
    error_handler: Optional[Callable[[Exception, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep
):
    """
    Decorator to retry a function with exponential backoff.

    Usable bare (``@retry_with_backoff``) or with arguments
    (``@retry_with_backoff(config=RetryConfig(max_retries=1))``).

    Args:
        func: Function to retry
        config: Retry configuration
        error_handler: Callback on errors
        sleep: Function used to wait between attempts

    Returns:
        Wrapped function with retry logic
    """
    if func is None:
        return lambda f: retry_with_backoff(f, config, error_handler, sleep)

    if config is None:
        config = RetryConfig()

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        last_exception = None

        for attempt in range(config.max_retries + 1):
            try:
                result = func(*args, **kwargs)
                if attempt > 0:
                    logger.info(f"Retry succeeded on attempt {attempt + 1}")
                return result

            except PermanentError as e:
                logger.error(f"Permanent error from {func.__name__}: {e.message}")
                raise

            except (TransientError, ConnectionError, TimeoutError) as e:
                last_exception = e

                if attempt < config.max_retries:
                    backoff = config.get_backoff_time(attempt)
                    logger.warning(
                        f"Attempt {attempt + 1} failed: {str(e)}. "
                        f"Retrying in {backoff:.2f} seconds..."
                    )

                    if error_handler:
                        error_handler(e, attempt)

                    sleep(backoff)
                else:
                    logger.error(f"All {config.max_retries + 1} attempts failed")

            except Exception as e:
                logger.error(f"Unexpected error in {func.__name__}: {str(e)}")
                raise

        if last_exception:
            raise last_exception

        raise RuntimeError(f"Failed to execute {func.__name__}")

    return wrapper


class CatalogResponseValidator:
    """Validates realtime-database payloads before using them."""

    @staticmethod
    def validate_keyed_collection(payload, source: str) -> dict:
        """
        Validate a keyed collection ({key: record}) returned by the feed.

        Args:
            payload: Decoded JSON body
            source: Name of the collection, for error messages

        Returns:
            The payload as a dict ({} for an empty node), raises otherwise
        """
        if payload is None:
            return {}

        # arrays come back for sequential numeric keys
        if isinstance(payload, list):
            payload = {str(i): record for i, record in enumerate(payload) if record is not None}

        if not isinstance(payload, dict):
            raise PermanentError(f"Invalid response type: {type(payload)}", source)

        for key, record in payload.items():
            if not isinstance(record, dict):
                raise PermanentError(f"Invalid record under key {key}", source)

        logger.info(f"Catalog response validation passed for {source}")
        return payload

    @staticmethod
    def validate_product_record(record: dict) -> bool:
        """Validate an individual product record."""
        if not record.get("name"):
            return False

        price = record.get("price")
        if not isinstance(price, (int, float)) or isinstance(price, bool) or price < 0:
            return False

        return True
