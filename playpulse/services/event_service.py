"""Event service layer. Owner-run institute events and parent sign-ups."""

import logging
from typing import List

from sqlalchemy.orm import Session

from playpulse.errors import ForbiddenError, NotFoundError, ValidationError
from playpulse.models.event import Event, EventEnrollment
from playpulse.models.user import User
from playpulse.services.notification_service import add_notification, deliver_email
from playpulse.utils.permissions import get_owned_institute
from playpulse.utils.time_utils import to_naive_utc

logger = logging.getLogger(__name__)

EVENT_UPCOMING = "upcoming"


def create_event(db: Session, owner: User, data: dict, image_urls: List[str] | None = None) -> Event:
    institute = get_owned_institute(db, owner)
    payload = dict(data)
    payload["date"] = to_naive_utc(payload["date"])
    event = Event(institute_id=institute.institute_id, images=list(image_urls or []), **payload)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("[event] created %s for institute %s", event.event_id, institute.institute_id)
    return event


def list_institute_events(db: Session, owner: User) -> List[Event]:
    institute = get_owned_institute(db, owner)
    return (
        db.query(Event)
        .filter(Event.institute_id == institute.institute_id)
        .order_by(Event.date.asc())
        .all()
    )


def get_institute_event(db: Session, owner: User, event_id: int) -> Event:
    institute = get_owned_institute(db, owner)
    event = db.query(Event).filter(
        Event.event_id == event_id,
        Event.institute_id == institute.institute_id,
    ).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def update_event(db: Session, owner: User, event_id: int, data: dict, image_urls: List[str] | None = None) -> Event:
    """Apply the given fields. New images replace the stored ones; none keeps them."""
    event = get_institute_event(db, owner, event_id)
    for key, value in data.items():
        if value is None:
            continue
        if key == "date":
            value = to_naive_utc(value)
        setattr(event, key, value)
    if image_urls:
        event.images = list(image_urls)
    db.commit()
    db.refresh(event)
    logger.info("[event] updated %s", event_id)
    return event


def delete_event(db: Session, owner: User, event_id: int) -> None:
    event = get_institute_event(db, owner, event_id)
    db.query(EventEnrollment).filter(EventEnrollment.event_id == event.event_id).delete(synchronize_session=False)
    db.delete(event)
    db.commit()
    logger.info("[event] deleted %s", event_id)


def list_event_enrollments(db: Session, owner: User, event_id: int) -> List[EventEnrollment]:
    institute = get_owned_institute(db, owner)
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    if event.institute_id != institute.institute_id:
        raise ForbiddenError("Unauthorized access to this event")
    return (
        db.query(EventEnrollment)
        .filter(EventEnrollment.event_id == event_id)
        .order_by(EventEnrollment.event_enrollment_id.asc())
        .all()
    )


def list_upcoming_events(db: Session) -> List[Event]:
    return (
        db.query(Event)
        .filter(Event.status == EVENT_UPCOMING)
        .order_by(Event.date.asc())
        .all()
    )


def enroll(db: Session, mailer, parent: User, data) -> EventEnrollment:
    event = db.query(Event).filter(Event.event_id == data.event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    if event.status != EVENT_UPCOMING:
        raise ValidationError("Cannot enroll in a completed event")

    registration = EventEnrollment(
        parent_id=parent.user_id,
        event_id=event.event_id,
        name=data.name.strip(),
        contact_number=data.contact_number,
        age=data.age,
        status="pending",
    )
    db.add(registration)
    noti = add_notification(
        db,
        parent.user_id,
        "event_enrollment",
        f"Enrollment request for {registration.name} in {event.name} submitted",
        "Pending approval",
    )
    db.commit()
    db.refresh(registration)

    deliver_email(db, mailer, noti)
    return registration
