import logging
from typing import Any, Generator, Iterable, Mapping
from uuid import UUID

from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from app.core.auth import AuthProvider, get_auth_provider
from app.core.errors import EventValidationError
from app.database.db import SessionLocal
from app.models.events import Event
from app.schemas.events import EventEditor
from app.schemas.metrics import EventMetrics
from app.services import events, metrics

logger = logging.getLogger(__name__)


def validate_event_input(payload: EventEditor | Mapping[str, Any]) -> EventEditor:
    if isinstance(payload, EventEditor):
        return payload
    try:
        return EventEditor.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise EventValidationError(errors) from exc


class EventService:
    """
    Per-request entry point for event administration.

    Holds one database session, opened on first use and released by close()
    or on leaving the ``with`` block. Instances are not shared between
    requests, so nothing here is locked.
    """

    def __init__(self, auth: AuthProvider, session_factory: sessionmaker = SessionLocal) -> None:
        self._auth = auth
        self._session_factory = session_factory
        self._session: Session | None = None

    @property
    def db(self) -> Session:
        if self._session is None:
            logger.debug("Opening database session")
            self._session = self._session_factory()
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "EventService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_event(self, payload: EventEditor | Mapping[str, Any]) -> Event:
        editor = validate_event_input(payload)
        owner_id = self._auth.get_current_identity()
        return events.create_event(self.db, owner_id=owner_id, editor=editor)

    def get_event(self, event_id: str) -> Event | None:
        return events.get_event(self.db, event_id)

    def list_owner_events(self) -> list[Event]:
        owner_id = self._auth.get_current_identity()
        return events.list_owner_events(self.db, owner_id)

    def update_event(self, event_id: str, payload: EventEditor | Mapping[str, Any]) -> Event | None:
        editor = validate_event_input(payload)
        return events.update_event(self.db, event_id, editor)

    def update_models_for_event(self, event_id: str, model_ids: Iterable[UUID]) -> Event | None:
        return events.update_models_for_event(self.db, event_id, model_ids)

    def get_event_metrics(self, event_id: str) -> EventMetrics:
        return metrics.get_event_metrics(self.db, event_id)


def get_event_service(auth: AuthProvider = Depends(get_auth_provider)) -> Generator[EventService, None, None]:
    with EventService(auth) as service:
        yield service
