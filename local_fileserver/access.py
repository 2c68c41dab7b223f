"""Local-network access policy."""

import ipaddress
import logging

log = logging.getLogger(__name__)

PRIVATE_NETWORKS = [
    ipaddress.ip_network("10.0.0.0/8"),       # RFC 1918
    ipaddress.ip_network("172.16.0.0/12"),    # RFC 1918
    ipaddress.ip_network("192.168.0.0/16"),   # RFC 1918
    ipaddress.ip_network("169.254.0.0/16"),   # RFC 3927 link-local
    ipaddress.ip_network("fd00::/8"),         # RFC 4193 unique local
]


def strip_port(address):
    """Drop a trailing port from ``host:port`` or ``[v6]:port`` forms."""
    address = address.strip()
    if address.startswith("["):
        end = address.find("]")
        return address[1:end] if end != -1 else address
    # a bare IPv6 address has more than one colon
    if address.count(":") == 1:
        return address.rsplit(":", 1)[0]
    return address


def is_local_ip(address):
    """True for loopback and private-range addresses; False if unparsable."""
    try:
        ip = ipaddress.ip_address(strip_port(address))
    except ValueError:
        log.debug("Could not parse client address %r", address)
        return False

    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if ip.is_loopback:
        log.debug("IP %s is loopback", ip)
        return True

    for network in PRIVATE_NETWORKS:
        if ip.version == network.version and ip in network:
            log.debug("IP %s is in private range %s", ip, network)
            return True
    return False


def is_permitted(client_address, local_only):
    if not local_only:
        return True
    if not client_address:
        return False
    return is_local_ip(client_address)
