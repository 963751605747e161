"""
Auth log API endpoints.

- ``POST /auth/track``: public beacon used by the browser after sign-in,
  sign-out and sign-up; admission-guarded under the ``auth_track`` bucket.
- ``GET /admin/logs`` and ``POST /admin/logs/purge``: admin only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_auth_event_log, get_auth_tracking_service
from api.middleware.admission import guarded_transport
from api.middleware.auth import get_optional_user, require_admin
from api.middleware.client import get_request_context
from modules.security import ROUTE_AUTH_TRACK
from shared.config import get_settings
from shared.models import AuthenticatedUser, RequestContext

from .interfaces import IAuthEventLog
from .models import (
    AuthEventType,
    AuthLogFilter,
    AuthLogsResponse,
    PurgeResponse,
    TrackEventRequest,
    TrackEventResponse,
)
from .service import AuthTrackingService, purge_old_events

router = APIRouter()
admin_router = APIRouter()


@router.post(
    "/track",
    response_model=TrackEventResponse,
    dependencies=[Depends(guarded_transport(ROUTE_AUTH_TRACK))],
)
async def track_auth_event(
    request: TrackEventRequest,
    ctx: RequestContext = Depends(get_request_context),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: AuthTrackingService = Depends(get_auth_tracking_service),
) -> TrackEventResponse:
    """
    Record an authentication event reported by the client.

    Storage is best-effort: the response is a success even when the event
    could not be persisted.
    """
    await service.track(ctx, request, user)
    return TrackEventResponse(success=True)


@admin_router.get("/logs", response_model=AuthLogsResponse)
async def get_auth_logs(
    event: Optional[AuthEventType] = Query(default=None, description="Filter by event kind"),
    user_id: Optional[str] = Query(default=None, alias="userId", description="Filter by user ID"),
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum logs to return"),
    admin: AuthenticatedUser = Depends(require_admin),
    log: IAuthEventLog = Depends(get_auth_event_log),
) -> AuthLogsResponse:
    """
    List authentication events, newest first, with overall statistics.

    ``userId`` takes precedence over ``event`` when both are given.
    """
    logs = await log.query(AuthLogFilter(user_id=user_id, event=event), limit)
    stats = await log.stats()
    return AuthLogsResponse(logs=logs, stats=stats, count=len(logs), total=stats.total_logs)


@admin_router.post("/logs/purge", response_model=PurgeResponse)
async def purge_auth_logs(
    days: Optional[int] = Query(default=None, description="Delete events older than this many days"),
    admin: AuthenticatedUser = Depends(require_admin),
    log: IAuthEventLog = Depends(get_auth_event_log),
) -> PurgeResponse:
    """Delete events older than the retention period (default AUTH_LOG_RETENTION_DAYS)."""
    max_age_days = days if days is not None else get_settings().auth_log_retention_days
    removed = await purge_old_events(log, max_age_days)
    return PurgeResponse(removed=removed)
