"""
SSRF guard for outbound fetches.

A target is only fetched when its scheme is http(s) and every address its
hostname resolves to is publicly routable. The check runs before the first
request and again for every redirect target. The connection itself is not
pinned to the validated addresses.
"""

import ipaddress
import socket
from dataclasses import dataclass
from urllib.parse import urlsplit

import anyio
import structlog

from metadata_party.exceptions import BlockedAddressError, InvalidURLError, ResolutionError

logger = structlog.get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")

# RFC 1918 and IPv6 unique-local
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)

# "This network" and everything from 240.0.0.0 up
RESERVED_NETWORKS = (
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("240.0.0.0/4"),
)


@dataclass(frozen=True)
class ValidatedTarget:
    """A URL that passed the guard, with the addresses it resolved to."""

    url: str
    scheme: str
    host: str
    hostname: str
    addresses: tuple[str, ...]


def is_blocked_address(address: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    """
    Check if an IP address is loopback, private, link-local, multicast or reserved.

    Args:
        address: IP address (string or ipaddress object)

    Returns:
        True if the address must not be fetched
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        # Unparseable addresses are never fetched
        return True

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if ip.is_loopback or ip.is_link_local or ip.is_multicast or ip.is_unspecified:
        return True

    networks = PRIVATE_NETWORKS + RESERVED_NETWORKS
    return any(ip in network for network in networks)


async def resolve_host(hostname: str) -> list[str]:
    """
    Resolve a hostname to all of its IP addresses.

    Args:
        hostname: Hostname or IP literal

    Returns:
        Unique addresses in resolver order

    Raises:
        OSError: If resolution fails
    """
    infos = await anyio.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)

    addresses: list[str] = []
    for _family, _type, _proto, _canonname, sockaddr in infos:
        address = str(sockaddr[0])
        if address not in addresses:
            addresses.append(address)
    return addresses


def parse_target(url: str) -> tuple[str, str, str]:
    """
    Parse a URL into (scheme, host, hostname).

    `host` keeps an explicit port and drops any userinfo.

    Raises:
        InvalidURLError: If the URL is malformed or not http(s)
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(url, "only http and https are supported")
    if not hostname:
        raise InvalidURLError(url, "missing hostname")

    host = parts.netloc.rpartition("@")[2]
    return parts.scheme, host, hostname


async def validate_url(url: str) -> ValidatedTarget:
    """
    Check that a URL is safe to fetch.

    Args:
        url: URL to validate

    Returns:
        ValidatedTarget with the resolved addresses

    Raises:
        InvalidURLError: If the URL is malformed or not http(s)
        ResolutionError: If the hostname does not resolve
        BlockedAddressError: If any resolved address is internal
    """
    scheme, host, hostname = parse_target(url)

    try:
        addresses = await resolve_host(hostname)
    except (OSError, UnicodeError) as e:
        raise ResolutionError(url, hostname, str(e)) from e

    if not addresses:
        raise ResolutionError(url, hostname, "no addresses returned")

    for address in addresses:
        if is_blocked_address(address):
            logger.warning("ssrf_blocked", url=url, hostname=hostname, address=address)
            raise BlockedAddressError(url, address)

    return ValidatedTarget(
        url=url,
        scheme=scheme,
        host=host,
        hostname=hostname,
        addresses=tuple(addresses),
    )
