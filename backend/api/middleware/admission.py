"""
Transport checks for guarded routes.

FastAPI validates the request body before a handler runs, so a wrong
content type would otherwise surface as a 400 body error instead of the
guard's 403. Running the guard's transport checks as a route dependency
puts them ahead of body parsing.
"""

from typing import Callable

from fastapi import Depends

from modules.security.guard import AdmissionGuard
from shared.models import RequestContext

from ..dependencies import get_admission_guard
from .client import get_request_context


def guarded_transport(route: str) -> Callable[..., None]:
    """
    Build a dependency that enforces the transport policy of ``route``.

    Usage:
        @router.post("", dependencies=[Depends(guarded_transport(ROUTE_CHAT))])
    """

    def check(
        ctx: RequestContext = Depends(get_request_context),
        guard: AdmissionGuard = Depends(get_admission_guard),
    ) -> None:
        guard.check_transport(ctx, route)

    return check
