"""Calendar service layer. Projects stored coach schedules into calendar events.

``project_calendar_events`` is a pure transform: it reads schedule records and
a reference time and returns event dicts, touching neither the store nor the
clock. Output follows record order, then entry order. Callers that need
chronological order sort by ``start``.

Computed ``end`` depends only on the entry ``date`` and the record
``duration`` (hours). The entry ``time`` is an opaque display label.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from playpulse.models.enrollment import Enrollment
from playpulse.models.program import Program
from playpulse.models.schedule import ProgramSchedule
from playpulse.models.user import User
from playpulse.utils.permissions import get_coach_profile, get_owned_institute, is_coach, is_owner, is_parent
from playpulse.utils.time_utils import as_utc, parse_datetime, utc_now

logger = logging.getLogger(__name__)

DEFAULT_DURATION_HOURS = 2
EVENT_TYPE = "coach-schedule"
EVENT_COLOR = "#38a169"
UNKNOWN_PROGRAM = "Unknown Program"
UNKNOWN_COACH = "Unknown Coach"
DEFAULT_ACTIVITY = "Training"
DEFAULT_TIME = "TBD"


def _get(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def duration_hours(value: Any) -> float:
    """Record duration in hours. Only a missing or non-numeric value defaults."""
    if value is None or isinstance(value, bool):
        return DEFAULT_DURATION_HOURS
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return DEFAULT_DURATION_HOURS
    if math.isnan(hours) or math.isinf(hours):
        return DEFAULT_DURATION_HOURS
    return hours


def _entries_to_events(record: Any, program: Any) -> List[dict]:
    schedule_id = _get(record, "schedule_id")
    program_name = _get(program, "name") or UNKNOWN_PROGRAM
    coach_name = _get(_get(record, "coach"), "name") or UNKNOWN_COACH
    hours = duration_hours(_get(record, "duration"))

    events = []
    for index, entry in enumerate(_get(record, "schedule")):
        start = parse_datetime(_get(entry, "date"))
        if start is None:
            logger.warning(
                "[calendar] invalid date %r in schedule %s entry %s",
                _get(entry, "date"), schedule_id, index,
            )
            continue
        try:
            end = start + timedelta(hours=hours)
        except OverflowError:
            logger.warning(
                "[calendar] schedule %s entry %s ends out of range (%r + %sh), skipped",
                schedule_id, index, _get(entry, "date"), hours,
            )
            continue
        activity = _get(entry, "activity") or DEFAULT_ACTIVITY
        events.append({
            "id": f"{schedule_id}-{index}",
            "title": f"{program_name} - {activity}",
            "start": start,
            "end": end,
            "event_type": EVENT_TYPE,
            "program_id": _get(program, "program_id"),
            "program_name": program_name,
            "coach_name": coach_name,
            "time": _get(entry, "time") or DEFAULT_TIME,
            "activity": activity,
            "color": EVENT_COLOR,
        })
    return events


def project_calendar_events(records: Iterable[Any], now: datetime) -> List[dict]:
    now = as_utc(now)
    events: List[dict] = []
    for record in records:
        program = _get(record, "program")
        if program is None:
            logger.warning("[calendar] schedule %s has no program, skipped", _get(record, "schedule_id"))
            continue
        if not isinstance(_get(record, "schedule"), (list, tuple)):
            logger.warning("[calendar] schedule %s has no entry list, skipped", _get(record, "schedule_id"))
            continue
        events.extend(_entries_to_events(record, program))
    return [event for event in events if event["end"] > now]


def _schedules_for(db: Session, user: User) -> List[ProgramSchedule]:
    q = db.query(ProgramSchedule)
    if is_parent(user):
        program_ids = db.query(Enrollment.program_id).filter(Enrollment.parent_id == user.user_id)
        q = q.filter(ProgramSchedule.program_id.in_(program_ids))
    elif is_coach(user):
        coach = get_coach_profile(db, user)
        q = q.filter(ProgramSchedule.coach_id == coach.coach_id)
    elif is_owner(user):
        institute = get_owned_institute(db, user)
        program_ids = db.query(Program.program_id).filter(Program.institute_id == institute.institute_id)
        q = q.filter(ProgramSchedule.program_id.in_(program_ids))
    else:
        return []
    return q.order_by(ProgramSchedule.schedule_id.asc()).all()


def get_calendar_events(db: Session, user: User, now: Optional[datetime] = None) -> List[dict]:
    events = project_calendar_events(_schedules_for(db, user), now or utc_now())
    logger.info("[calendar] %s events for user %s", len(events), user.user_id)
    return events
