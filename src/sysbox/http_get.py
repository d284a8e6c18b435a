import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def fetch(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the body of ``url``.

    The response status is not checked; error pages are returned like any
    other body. Connection failures raise ``requests.RequestException``.
    """
    logger.debug("GET %s", url)
    response = requests.get(url, timeout=timeout)
    logger.debug("GET %s -> %s", url, response.status_code)
    return response.text
