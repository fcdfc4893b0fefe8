"""
Trigger delivery routes.

The document store's trigger runtime posts every mutation of a plant care
task, project or simple task here. Sync is best-effort, so these routes
always answer 200 with the handler outcome; failures are logged and reported
in the body rather than surfaced as HTTP errors, which would only cause the
runtime to redeliver.
"""

from fastapi import APIRouter, Depends

from household_sync.api.dependencies import get_sync_dispatcher
from household_sync.api.models import RecordChangeRequest, SyncResultResponse
from household_sync.integrations.base import RecordKind
from household_sync.sync.dispatcher import RecordChange, SyncDispatcher, TriggerPhase

router = APIRouter(prefix="/triggers", tags=["triggers"])


@router.post("/{kind}/{phase}", response_model=SyncResultResponse)
async def deliver_trigger(
    kind: RecordKind,
    phase: TriggerPhase,
    request: RecordChangeRequest,
    dispatcher: SyncDispatcher = Depends(get_sync_dispatcher),
) -> SyncResultResponse:
    """
    Handle one record mutation.

    ``before`` is expected for updates and deletes, ``after`` for creates
    and updates.
    """
    change = RecordChange(
        kind=kind,
        user_id=request.user_id,
        record_id=request.record_id,
        before=(
            request.before.to_record(kind, request.user_id, request.record_id)
            if request.before
            else None
        ),
        after=(
            request.after.to_record(kind, request.user_id, request.record_id)
            if request.after
            else None
        ),
    )

    result = await dispatcher.handle(phase, change)
    return SyncResultResponse(
        action=result.action.value,
        event_id=result.event_id,
        reason=result.reason,
        error_code=result.error.code if result.error else None,
    )
