#!/usr/bin/env python3
"""
Public IP resolver.

Asks a "what is my IP" HTTP service for this host's public address.
"""

import ipaddress
import logging

import requests

from k3s_wordpress.infrastructure.config import PUBLIC_IP_URL

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "public_ip",
        "description": "Public IP resolver",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


def resolve_public_ip(
    url: str = PUBLIC_IP_URL,
    timeout: float = 5.0,
    session: requests.Session | None = None,
) -> str | None:
    """Look up this host's public IP address.

    Failures never raise: the caller substitutes a placeholder.

    Args:
        url: IP lookup service returning the address as plain text
        timeout: Request timeout in seconds
        session: Optional requests session

    Returns:
        IP address string, or None if the lookup failed
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Could not determine public IP from {url}: {e}")
        return None

    address = response.text.strip()
    try:
        ipaddress.ip_address(address)
    except ValueError:
        logger.warning(f"IP service {url} returned an unexpected response: {address[:40]!r}")
        return None
    return address


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
