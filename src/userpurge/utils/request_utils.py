"""Request utilities for HTTP operations with rate limiting."""

import time
from typing import Any

import requests

from ..core.config import API_RATE_LIMIT, API_TIMEOUT
from ..core.exceptions import UserStoreError
from .logging_utils import get_logger

logger = get_logger(__name__)

# Upper bound on a server-requested Retry-After wait, in seconds
MAX_RETRY_AFTER = 60.0


def _retry_after_seconds(response: requests.Response) -> float:
    """Read the Retry-After header as seconds, falling back to the rate limit."""
    header = response.headers.get("Retry-After")
    try:
        delay = float(header) if header is not None else API_RATE_LIMIT
    except ValueError:
        delay = API_RATE_LIMIT
    return min(max(delay, 0.0), MAX_RETRY_AFTER)


def make_rate_limited_request(
    method: str, url: str, headers: dict[str, str], **kwargs: Any
) -> requests.Response:
    """Make an HTTP request with rate limiting.

    A 429 response is retried once after the server's Retry-After delay.

    Args:
        method: HTTP method (GET, DELETE, etc.)
        url: Request URL
        headers: Request headers
        **kwargs: Additional request parameters

    Returns:
        requests.Response: Successful response

    Raises:
        UserStoreError: If the request fails or returns an error status
    """
    for attempt in (1, 2):
        try:
            response = requests.request(
                method, url, headers=headers, timeout=API_TIMEOUT, **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise UserStoreError(
                f"{method} request failed", endpoint=url, details=str(e)
            ) from e

        # Always apply rate limiting regardless of response status
        time.sleep(API_RATE_LIMIT)

        if response.status_code == 429 and attempt == 1:
            delay = _retry_after_seconds(response)
            logger.warning(
                f"Rate limit exceeded, retrying in {delay:.1f}s",
                extra={"api_endpoint": url, "status_code": 429},
            )
            time.sleep(delay)
            continue

        if response.status_code >= 400:
            raise UserStoreError(
                f"{method} request returned an error",
                status_code=response.status_code,
                endpoint=url,
                details=response.text[:200] or None,
            )

        logger.debug(
            f"{method} {url} -> {response.status_code}",
            extra={"api_endpoint": url, "status_code": response.status_code},
        )
        return response

    raise UserStoreError("Rate limit exceeded", status_code=429, endpoint=url)
