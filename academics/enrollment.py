"""Enrollment and withdrawal with offering capacity kept consistent."""
from __future__ import annotations

import datetime
import logging

from django.db.models import F
from django.utils import timezone

from .attendance import refresh_attendance_percentage
from .exceptions import (
    AlreadyEnrolled,
    CapacityExceeded,
    ConstraintViolation,
    OfferingClosed,
    PrerequisiteNotMet,
    RegistrationWindowClosed,
    StudentInactive,
)
from .models import CourseOffering, Enrollment
from .prerequisites import check_prerequisites
from .store import atomic_with_retry, get

logger = logging.getLogger(__name__)


def _lock_offering(offering_id: int) -> CourseOffering:
    return get(CourseOffering.objects.select_for_update().select_related("course", "semester"), pk=offering_id)


@atomic_with_retry
def enroll(student, offering, on: datetime.date | None = None) -> Enrollment:
    """Enroll ``student`` in ``offering``.

    The offering row is locked for the whole check-then-write sequence and the
    seat is taken with a conditional increment, so two requests racing for the
    last seat cannot both succeed. A previously withdrawn enrollment for the
    same pair is reactivated rather than duplicated.
    """
    today = on or timezone.localdate()
    offering = _lock_offering(offering.pk)
    existing = Enrollment.objects.select_for_update().filter(student=student, offering=offering).first()

    if existing is not None and existing.status != "Withdrawn":
        raise AlreadyEnrolled(f"Student {student.pk} already holds enrollment {existing.pk} in offering {offering.pk}")

    if student.status != "Active":
        raise StudentInactive(f"Student {student.pk} is {student.status} and cannot enroll")

    eligibility = check_prerequisites(student, offering.course)
    if not eligibility:
        raise PrerequisiteNotMet(eligibility.reason, missing_course=eligibility.missing_course)

    if offering.current_enrollment >= offering.max_capacity:
        raise CapacityExceeded(f"Offering {offering.pk} is full ({offering.max_capacity} seats)")

    semester = offering.semester
    if not semester.registration_open_on(today):
        raise RegistrationWindowClosed(
            f"Registration for {semester.name} runs {semester.registration_start} to {semester.registration_end}"
        )

    if offering.status in CourseOffering.CLOSED_STATUSES:
        raise OfferingClosed(f"Offering {offering.pk} is {offering.status}")

    taken = CourseOffering.objects.filter(
        pk=offering.pk, current_enrollment__lt=F("max_capacity")
    ).update(current_enrollment=F("current_enrollment") + 1)
    if not taken:
        raise CapacityExceeded(f"Offering {offering.pk} is full ({offering.max_capacity} seats)")

    if existing is not None:
        existing.status = "Enrolled"
        existing.enrollment_date = today
        existing.grade = ""
        existing.grade_points = None
        existing.final_percentage = None
        existing.save()
        # Attendance rows from the earlier stint stay attached and still count.
        refresh_attendance_percentage(existing)
        enrollment = existing
    else:
        enrollment = Enrollment.objects.create(student=student, offering=offering, enrollment_date=today)

    logger.info("Enrolled student %s in offering %s (enrollment %s)", student.pk, offering.pk, enrollment.pk)
    return enrollment


@atomic_with_retry
def withdraw(enrollment) -> Enrollment:
    """Withdraw an enrollment and release its seat; repeating it is a no-op."""
    offering_id = get(Enrollment.objects.values_list("offering_id", flat=True), pk=enrollment.pk)
    # Same lock order as enroll(): offering first, then the enrollment row.
    _lock_offering(offering_id)
    current = get(Enrollment.objects.select_for_update(), pk=enrollment.pk)

    if current.status == "Withdrawn":
        logger.debug("Enrollment %s already withdrawn", current.pk)
        return current
    if current.status in Enrollment.GRADED_STATUSES:
        raise ConstraintViolation(
            f"Enrollment {current.pk} is {current.status} and can no longer be withdrawn",
            errors={"status": [f"Cannot withdraw a {current.status} enrollment."]},
        )

    CourseOffering.objects.filter(pk=offering_id, current_enrollment__gt=0).update(
        current_enrollment=F("current_enrollment") - 1
    )
    current.status = "Withdrawn"
    current.save(update_fields=["status", "updated_at"])
    logger.info("Withdrew enrollment %s from offering %s", current.pk, offering_id)
    return current


def active_enrollment_count(offering) -> int:
    return Enrollment.objects.filter(offering=offering).exclude(status="Withdrawn").count()


@atomic_with_retry
def reconcile_enrollment_count(offering) -> tuple[int, int]:
    """Reset ``current_enrollment`` from the detail rows; returns (stored, actual)."""
    locked = _lock_offering(offering.pk)
    actual = active_enrollment_count(locked)
    stored = locked.current_enrollment
    if stored != actual:
        logger.warning("Offering %s head-count drifted: stored %s, actual %s", locked.pk, stored, actual)
        CourseOffering.objects.filter(pk=locked.pk).update(current_enrollment=actual)
    return stored, actual
