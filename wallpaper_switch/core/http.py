# wallpaper_switch/core/http.py
import logging

import requests

from .errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds

# Add a user-agent to potentially avoid blocking
HEADERS = {
    'User-Agent': 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/100.0.0.0 Safari/537.36'
}


def get(url: str, timeout: float = DEFAULT_TIMEOUT, stream: bool = False) -> requests.Response:
    """
    Performs a blocking GET request and checks the response status.

    Args:
        url (str): The URL to fetch.
        timeout (float): Seconds to wait for the server before giving up.
        stream (bool): Passed through to requests for large bodies.

    Returns:
        requests.Response: The successful (2xx) response.

    Raises:
        NetworkError: On connection errors, timeouts and non-2xx responses.
    """
    logger.debug(f"GET {url}")
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout, stream=stream)
        response.raise_for_status()  # Raise an exception for bad status codes (4xx or 5xx)
        return response
    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout occurred while fetching {url}")
        raise NetworkError(f"Timeout fetching {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error fetching {url}: {e}")
        raise NetworkError(f"Error fetching {url}: {e}") from e
