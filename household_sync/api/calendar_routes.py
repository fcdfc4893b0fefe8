"""
Callable calendar API routes used by the web client.

Handles the OAuth 2.0 bootstrap and direct event management:
1. /calendar/auth/init - Start OAuth flow (returns Google authorization URL)
2. /calendar/auth/complete - Exchange the authorization code for tokens
3. /calendar/status - Check if user has connected calendar
4. /calendar/disconnect - Remove stored tokens
5. /calendar/events - Create, update and delete events

Failures are raised as typed errors (household_sync.errors) and rendered by
the application's exception handler.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from household_sync.api.dependencies import get_caller_id, get_calendar_operations
from household_sync.api.models import (
    AuthUrlResponse,
    CompleteAuthRequest,
    CreateEventResponse,
    ErrorResponse,
    EventRequest,
    StatusResponse,
    SuccessResponse,
)
from household_sync.sync.operations import CalendarOperations

_error_responses = {
    400: {"model": ErrorResponse, "description": "invalid-argument"},
    401: {"model": ErrorResponse, "description": "unauthenticated"},
    412: {"model": ErrorResponse, "description": "failed-precondition"},
    500: {"model": ErrorResponse, "description": "internal"},
}

router = APIRouter(prefix="/calendar", tags=["calendar"], responses=_error_responses)


@router.post("/auth/init", response_model=AuthUrlResponse)
async def init_calendar_auth(
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> AuthUrlResponse:
    """
    Start the Google OAuth flow.

    Returns the authorization URL the client should redirect to. Consent is
    always requested so Google issues a refresh token, even on re-auth.
    """
    result = await operations.init_auth(caller_id)
    return AuthUrlResponse(**result)


@router.post("/auth/complete", response_model=SuccessResponse)
async def complete_calendar_auth(
    request: Optional[CompleteAuthRequest] = None,
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> SuccessResponse:
    """
    Complete the Google OAuth flow.

    Exchanges the authorization code for tokens and stores them on the
    caller's profile.
    """
    result = await operations.complete_auth(caller_id, request.code if request else None)
    return SuccessResponse(**result)


@router.get("/status", response_model=StatusResponse)
async def calendar_status(
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> StatusResponse:
    """Check if the caller has connected their Google Calendar."""
    result = await operations.get_status(caller_id)
    return StatusResponse(**result)


@router.post("/disconnect", response_model=SuccessResponse)
async def disconnect_calendar(
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> SuccessResponse:
    """
    Disconnect the caller's Google Calendar.

    Removes the stored OAuth tokens. The user will need to re-authorize to
    use calendar features again.
    """
    result = await operations.disconnect(caller_id)
    return SuccessResponse(**result)


@router.post("/events", response_model=CreateEventResponse)
async def create_calendar_event(
    request: Optional[EventRequest] = None,
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> CreateEventResponse:
    """Create an event on the caller's primary calendar."""
    event = request.event.to_input() if request and request.event else None
    result = await operations.create_event(caller_id, event)
    return CreateEventResponse(**result)


@router.put("/events/{event_id}", response_model=SuccessResponse)
async def update_calendar_event(
    event_id: str,
    request: Optional[EventRequest] = None,
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> SuccessResponse:
    """
    Update an event on the caller's primary calendar.

    Only the fields present in the request are changed.
    """
    event = request.event.to_input() if request and request.event else None
    result = await operations.update_event(caller_id, event_id, event)
    return SuccessResponse(**result)


@router.delete("/events/{event_id}", response_model=SuccessResponse)
async def delete_calendar_event(
    event_id: str,
    caller_id: Optional[str] = Depends(get_caller_id),
    operations: CalendarOperations = Depends(get_calendar_operations),
) -> SuccessResponse:
    """Delete an event from the caller's primary calendar."""
    result = await operations.delete_event(caller_id, event_id)
    return SuccessResponse(**result)
