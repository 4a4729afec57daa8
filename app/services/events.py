import logging
import uuid
from typing import Iterable
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Integer, Select, String, Text, bindparam, func, literal_column, select
from sqlalchemy.orm import Session, selectinload

from app.core.config import get_database_schema
from app.core.errors import PersistenceError
from app.database.db import persistence_guard
from app.models.events import Event, Owner, OwnerCatalog, OwnerEventMap
from app.schemas.events import EventEditor

logger = logging.getLogger(__name__)


def build_add_event_statement(owner_id: str, editor: EventEditor, schema: str | None = None) -> Select:
    """
    Build ``SELECT * FROM <schema>.add_event(...)``.

    Parameters are bound positionally in the procedure's order. Optional text
    fields carry an explicit Text type so an absent value reaches the server
    as a typed NULL rather than an empty string.
    """
    procedure = getattr(func, schema).add_event if schema else func.add_event
    call = procedure(
        bindparam("owner_id", owner_id, type_=String),
        bindparam("event_code", editor.name, type_=String),
        bindparam("event_shared_code", editor.shared_code, type_=Text),
        bindparam("event_markdown", editor.description, type_=Text),
        bindparam("start_timestamp", editor.start, type_=DateTime(timezone=True)),
        bindparam("end_timestamp", editor.end, type_=DateTime(timezone=True)),
        bindparam("time_zone_offset", editor.time_zone_offset_minutes(), type_=Integer),
        bindparam("time_zone_label", editor.time_zone_label, type_=String),
        bindparam("organizer_name", editor.organizer_name, type_=String),
        bindparam("organizer_email", editor.organizer_email, type_=String),
        bindparam("max_token_cap", editor.max_token_cap, type_=Integer),
        bindparam("daily_request_cap", editor.daily_request_cap, type_=Integer),
        bindparam("active", editor.active, type_=Boolean),
        bindparam("event_image_url", editor.image_url, type_=Text),
    )
    return select(literal_column("*")).select_from(call)


def _apply_editor(event: Event, editor: EventEditor) -> None:
    event.event_code = editor.name
    event.event_shared_code = editor.shared_code
    event.event_image_url = editor.image_url
    event.event_markdown = editor.description
    event.start_timestamp = editor.start
    event.end_timestamp = editor.end
    event.time_zone_offset = editor.time_zone_offset_minutes()
    event.time_zone_label = editor.time_zone_label
    event.organizer_name = editor.organizer_name
    event.organizer_email = editor.organizer_email
    event.max_token_cap = editor.max_token_cap
    event.daily_request_cap = editor.daily_request_cap
    event.active = editor.active


def _add_event_locally(db: Session, owner_id: str, editor: EventEditor) -> str:
    """Same effect as the add_event procedure, for databases without one (SQLite)."""
    if db.get(Owner, owner_id) is None:
        db.add(Owner(owner_id=owner_id))

    event = Event(event_id=str(uuid.uuid4()))
    _apply_editor(event, editor)
    db.add(event)
    db.add(OwnerEventMap(owner_id=owner_id, event_id=event.event_id, creator=True))
    db.flush()
    return event.event_id


def _call_add_event(db: Session, owner_id: str, editor: EventEditor) -> str:
    if db.get_bind().dialect.name != "postgresql":
        return _add_event_locally(db, owner_id, editor)

    stmt = build_add_event_statement(owner_id, editor, get_database_schema())
    row = db.execute(stmt).first()
    if row is None:
        raise PersistenceError("create_event", "add_event returned no rows")
    return row[0]


def create_event(db: Session, *, owner_id: str, editor: EventEditor) -> Event:
    with persistence_guard(db, "create_event"):
        event_id = _call_add_event(db, owner_id, editor)
        db.commit()
        logger.info("Created event %s for owner %s", event_id, owner_id)
        return get_event(db, event_id)


def get_event(db: Session, event_id: str) -> Event | None:
    with persistence_guard(db, "get_event"):
        return db.scalars(
            select(Event).options(selectinload(Event.catalogs)).where(Event.event_id == event_id)
        ).first()


def list_owner_events(db: Session, owner_id: str) -> list[Event]:
    """Events mapped to the owner, active ones first, each group by start time."""
    stmt = (
        select(Event)
        .options(selectinload(Event.catalogs))
        .where(Event.owner_event_maps.any(OwnerEventMap.owner_id == owner_id))
        .order_by(Event.active.desc(), Event.start_timestamp)
    )
    with persistence_guard(db, "list_owner_events"):
        return list(db.scalars(stmt))


def update_event(db: Session, event_id: str, editor: EventEditor) -> Event | None:
    with persistence_guard(db, "update_event"):
        event = db.get(Event, event_id)
        if event is None:
            return None

        _apply_editor(event, editor)
        db.commit()
        logger.info("Updated event %s", event_id)
        return event


def update_models_for_event(db: Session, event_id: str, model_ids: Iterable[UUID]) -> Event | None:
    """Replace the event's catalog assignments. Unknown catalog ids are ignored."""
    model_ids = list(model_ids)
    with persistence_guard(db, "update_models_for_event"):
        event = get_event(db, event_id)
        if event is None:
            return None

        event.catalogs.clear()
        catalogs = db.scalars(select(OwnerCatalog).where(OwnerCatalog.catalog_id.in_(model_ids))).all()
        event.catalogs.extend(catalogs)

        db.commit()
        logger.info("Assigned %d catalogs to event %s", len(catalogs), event_id)
        return event
