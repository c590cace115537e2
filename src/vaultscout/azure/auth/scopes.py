from typing import Final
from urllib.parse import urlparse

ARM_DEFAULT_ENDPOINT: Final[str] = "https://management.azure.com"


def authority_from_url(url: str) -> str:
    """Return the URL authority (scheme + host).

    Args:
        url: Absolute endpoint URL (e.g., "https://management.azure.com/").

    Returns:
        The "<scheme>://<host>" portion of the URL.

    Raises:
        ValueError: If ``url`` is not absolute or lacks a host.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("url must be an absolute URL")
    return f"{parsed.scheme}://{parsed.netloc}"


def arm_scope_from_endpoint(endpoint: str = ARM_DEFAULT_ENDPOINT) -> str:
    """Return the ``/.default`` scope for the ARM endpoint of a cloud."""
    return f"{authority_from_url(endpoint)}/.default"
