"""Retry utilities for handling transient failures and rate limits."""

import time
import functools
import requests

from mediautils.config.settings import BASE_DELAY, MAX_RETRIES, MAX_DELAY

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def get_status_code(error):
    """Extract the HTTP status code carried by an error, if any.

    Args:
        error: The exception object

    Returns:
        Status code as int, or None
    """
    status_code = getattr(error, 'status_code', None)
    if status_code is None:
        response = getattr(error, 'response', None)
        status_code = getattr(response, 'status_code', None)
    return status_code


def parse_retry_after(value):
    """Parse a Retry-After header value given in seconds.

    Args:
        value: Header value (HTTP dates are not supported)

    Returns:
        Delay in seconds, or None if the value is missing or not numeric
    """
    if value is None:
        return None
    try:
        delay = float(value)
    except (TypeError, ValueError):
        return None
    return delay if delay >= 0 else None


def get_retry_delay(error):
    """Return the delay the service asked for, if the error carries one."""
    retry_after = getattr(error, 'retry_after', None)
    if retry_after is not None:
        return parse_retry_after(retry_after)

    response = getattr(error, 'response', None)
    headers = getattr(response, 'headers', None)
    if headers:
        return parse_retry_after(headers.get('Retry-After'))
    return None


def is_rate_limit_error(error):
    """Check if the error is a rate limit error.

    Args:
        error: The exception object

    Returns:
        bool: True if it's a rate limit error
    """
    return get_status_code(error) == 429


def is_retryable_error(error):
    """Check if the error is retryable.

    Args:
        error: The exception object

    Returns:
        bool: True if the error should be retried
    """
    if isinstance(error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return True
    return get_status_code(error) in RETRYABLE_STATUS_CODES


def retry_with_backoff(func):
    """Decorator retrying transient HTTP failures with exponential backoff.

    Rate limit responses wait for the service's Retry-After delay when one
    is given. Non-retryable errors are raised immediately.

    Args:
        func: Function to retry

    Returns:
        Decorated function with retry logic
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        retry_count = 0
        delay = BASE_DELAY

        while True:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                retry_count += 1

                print(f"[WARNING] {func.__name__} failed (attempt {retry_count}/{MAX_RETRIES}): {e}")

                if retry_count >= MAX_RETRIES:
                    print(f"[ERROR] Maximum retries ({MAX_RETRIES}) reached")
                    raise

                if not is_retryable_error(e):
                    print("[ERROR] Non-retryable error encountered")
                    raise

                wait = delay
                if is_rate_limit_error(e):
                    suggested_delay = get_retry_delay(e)
                    if suggested_delay is not None:
                        wait = min(suggested_delay, MAX_DELAY)
                        print(f"[INFO] Rate limited, using service-suggested delay of {wait} seconds")
                    else:
                        print(f"[INFO] Rate limited, retrying in {wait} seconds")
                else:
                    print(f"[INFO] Retrying with exponential backoff: {wait} seconds")

                time.sleep(wait)
                delay = min(delay * 2, MAX_DELAY)

    return wrapper
