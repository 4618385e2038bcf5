"""Daily attendance capture and the per-enrollment attendance percentage."""
from __future__ import annotations

import datetime
import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError

from . import conf
from .exceptions import ConstraintViolation, DateOutsideSemester, DuplicateAttendanceRecord
from .models import Attendance, Enrollment
from .store import atomic_with_retry, get, validate_and_save

logger = logging.getLogger(__name__)

VALID_STATUSES = {status for status, _ in Attendance.STATUS_CHOICES}


def _check_status(status: str) -> None:
    if status not in VALID_STATUSES:
        raise ConstraintViolation(
            f"Unknown attendance status {status!r}",
            errors={"status": [f"Must be one of {', '.join(sorted(VALID_STATUSES))}."]},
        )


def refresh_attendance_percentage(enrollment: Enrollment) -> Decimal | None:
    weights = conf.attendance_weights()
    counts = Counter(Attendance.objects.filter(enrollment=enrollment).values_list("status", flat=True))
    if not conf.attendance_counts_excused():
        counts.pop("Excused", None)
    days = sum(counts.values())

    if days:
        credited = sum(weights.get(status, Decimal("0")) * count for status, count in counts.items())
        percentage = (credited / days * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    else:
        percentage = None

    Enrollment.objects.filter(pk=enrollment.pk).update(attendance_percentage=percentage)
    enrollment.attendance_percentage = percentage
    return percentage


@atomic_with_retry
def record_attendance(enrollment, date: datetime.date, status: str, comment: str = "") -> Attendance:
    _check_status(status)
    current = get(Enrollment.objects.select_for_update().select_related("offering__semester"), pk=enrollment.pk)
    semester = current.offering.semester
    if not semester.covers(date):
        raise DateOutsideSemester(f"{date} is outside {semester.name} ({semester.start_date} to {semester.end_date})")
    if Attendance.objects.filter(enrollment=current, attendance_date=date).exists():
        raise DuplicateAttendanceRecord(f"Attendance for enrollment {current.pk} on {date} already recorded")

    try:
        record = Attendance.objects.create(enrollment=current, attendance_date=date, status=status, comment=comment)
    except IntegrityError as exc:
        raise DuplicateAttendanceRecord(
            f"Attendance for enrollment {current.pk} on {date} already recorded"
        ) from exc

    percentage = refresh_attendance_percentage(current)
    logger.info("Recorded %s for enrollment %s on %s (attendance now %s%%)", status, current.pk, date, percentage)
    return record


@atomic_with_retry
def correct_attendance(record: Attendance, status: str, comment: str | None = None) -> Attendance:
    """Change the status of an existing record and refresh the percentage."""
    _check_status(status)
    current = get(Attendance.objects.select_for_update().select_related("enrollment"), pk=record.pk)
    current.status = status
    if comment is not None:
        current.comment = comment
    validate_and_save(current, update_fields=["status", "comment", "updated_at"])
    refresh_attendance_percentage(current.enrollment)
    logger.info("Corrected attendance %s to %s", current.pk, status)
    return current


@atomic_with_retry
def compute_attendance_percentage(enrollment) -> Decimal | None:
    """(credited days / counted days) * 100, stored on the enrollment.

    Each status credits the weight from ``ACADEMICS_ATTENDANCE_WEIGHTS``; with
    ``ACADEMICS_ATTENDANCE_COUNT_EXCUSED`` off, excused days are left out of
    the denominator. With no counted days the percentage is cleared.
    """
    current = get(Enrollment.objects.select_for_update(), pk=enrollment.pk)
    percentage = refresh_attendance_percentage(current)
    enrollment.attendance_percentage = percentage
    return percentage


@atomic_with_retry
def delete_attendance(record: Attendance) -> Decimal | None:
    """Remove a record and return the enrollment's refreshed percentage."""
    current = get(Attendance.objects.select_for_update().select_related("enrollment"), pk=record.pk)
    enrollment = current.enrollment
    current.delete()
    percentage = refresh_attendance_percentage(enrollment)
    logger.info("Deleted attendance %s for enrollment %s (attendance now %s%%)", record.pk, enrollment.pk, percentage)
    return percentage
