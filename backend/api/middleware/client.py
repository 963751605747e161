"""
Client identification from the HTTP request.
"""

from fastapi import Request

from shared.models import RequestContext

UNKNOWN = "unknown"


def get_client_ip(request: Request) -> str:
    """
    Resolve the client IP address.

    Proxies put the original client first in X-Forwarded-For; X-Real-IP and
    the socket peer are the fallbacks.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency describing the inbound request for admission checks."""
    return RequestContext(
        method=request.method,
        path=request.url.path,
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("user-agent") or UNKNOWN,
        content_type=request.headers.get("content-type"),
        origin=request.headers.get("origin"),
    )
