"""
Access control for internal-only endpoints.

Internal routers (ingestion, maintenance) are attached with
``dependencies=[Depends(require_localhost)]`` so that only callers on the
loopback interface reach their handlers.
"""
import ipaddress
import logging
from typing import Optional

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

LOCALHOST_ONLY_MESSAGE = "Access denied - Internal API endpoints are restricted to localhost only"

IPV4_LOOPBACK = ipaddress.ip_address("127.0.0.1")
IPV6_LOOPBACK = ipaddress.ip_address("::1")


def is_loopback_address(host: Optional[str]) -> bool:
    """
    Return True when ``host`` is a loopback IP literal.

    Accepts 127.0.0.1, ::1, anything in 127.0.0.0/8 and IPv4-mapped IPv6
    loopback (::ffff:127.0.0.1). Hostnames, empty values and None are not
    loopback.
    """
    if not host:
        return False

    # Strip an IPv6 zone id ("::1%lo0") before parsing
    candidate = host.split("%", 1)[0].strip("[]")
    try:
        address = ipaddress.ip_address(candidate)
    except ValueError:
        return False

    if address in (IPV4_LOOPBACK, IPV6_LOOPBACK) or address.is_loopback:
        return True

    mapped = getattr(address, "ipv4_mapped", None)
    return mapped is not None and mapped.is_loopback


def require_localhost(request: Request) -> None:
    """FastAPI dependency that rejects non-loopback callers with 403."""
    host = request.client.host if request.client else None

    if not is_loopback_address(host):
        logger.warning(f"Rejected internal API request to {request.url.path} from {host or 'unknown address'}")
        raise HTTPException(status_code=403, detail=LOCALHOST_ONLY_MESSAGE)
