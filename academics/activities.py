"""Student participation in extracurricular activities."""
from __future__ import annotations

import datetime
import logging

from .exceptions import ConstraintViolation
from .models import StudentActivity
from .store import atomic_with_retry, get, validate_and_save

logger = logging.getLogger(__name__)


@atomic_with_retry
def join_activity(student, activity, join_date: datetime.date, role: str = "") -> StudentActivity:
    if StudentActivity.objects.filter(student=student, activity=activity, end_date__isnull=True).exists():
        raise ConstraintViolation(
            f"Student {student.pk} already participates in activity {activity.pk}",
            errors={"activity": ["An open participation already exists."]},
        )
    participation = validate_and_save(
        StudentActivity(student=student, activity=activity, join_date=join_date, role=role)
    )
    logger.info("Student %s joined activity %s as %s", student.pk, activity.pk, role or "member")
    return participation


@atomic_with_retry
def end_participation(participation: StudentActivity, end_date: datetime.date) -> StudentActivity:
    current = get(StudentActivity.objects.select_for_update(), pk=participation.pk)
    if current.end_date is not None:
        raise ConstraintViolation(
            f"Participation {current.pk} already ended on {current.end_date}",
            errors={"end_date": ["Participation already closed."]},
        )
    current.end_date = end_date
    validate_and_save(current, update_fields=["end_date", "updated_at"])
    logger.info("Participation %s ended on %s", current.pk, end_date)
    return current
