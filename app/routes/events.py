from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import AuthenticationError, EventValidationError, PersistenceError
from app.schemas.events import EventModelsUpdate, EventOut
from app.schemas.metrics import EventMetrics
from app.services.event_service import EventService, get_event_service

router = APIRouter(prefix="/event", tags=["events"])


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, EventValidationError):
        return HTTPException(status_code=422, detail=exc.errors)
    if isinstance(exc, AuthenticationError):
        return HTTPException(status_code=401, detail="Not authenticated")
    return HTTPException(status_code=503, detail="Event store unavailable")


@router.post("", response_model=EventOut)
def create_event(payload: dict, service: EventService = Depends(get_event_service)):
    try:
        return service.create_event(payload)
    except (EventValidationError, AuthenticationError, PersistenceError) as e:
        raise _to_http_error(e)


@router.get("", response_model=list[EventOut])
def list_my_events(service: EventService = Depends(get_event_service)):
    try:
        return service.list_owner_events()
    except (AuthenticationError, PersistenceError) as e:
        raise _to_http_error(e)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    try:
        event = service.get_event(event_id)
    except PersistenceError as e:
        raise _to_http_error(e)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.put("/{event_id}", response_model=EventOut)
def update_event(event_id: str, payload: dict, service: EventService = Depends(get_event_service)):
    try:
        event = service.update_event(event_id, payload)
    except (EventValidationError, PersistenceError) as e:
        raise _to_http_error(e)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.put("/{event_id}/models", response_model=EventOut)
def update_event_models(
    event_id: str, payload: EventModelsUpdate, service: EventService = Depends(get_event_service)
):
    try:
        event = service.update_models_for_event(event_id, payload.model_ids)
    except PersistenceError as e:
        raise _to_http_error(e)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/{event_id}/metrics", response_model=EventMetrics)
def event_metrics(event_id: str, service: EventService = Depends(get_event_service)):
    try:
        return service.get_event_metrics(event_id)
    except PersistenceError as e:
        raise _to_http_error(e)
