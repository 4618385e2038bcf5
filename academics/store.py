"""Entity store: validated CRUD, transactions and read accessors.

The rule modules (prerequisites, enrollment, grading, attendance) never talk
to ``Model.save`` for anything the caller controls directly; they go through
the helpers here so every write is validated and every operation commits or
rolls back as one unit.
"""
from __future__ import annotations

import functools
import logging
import random
import time
from collections import Counter

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import ProtectedError, RestrictedError

from . import conf
from .exceptions import ConstraintViolation, RecordNotFound, StoreUnavailable
from .models import (
    AcademicRecord,
    AcademicYear,
    Assessment,
    AssessmentResult,
    Attendance,
    CourseOffering,
    Enrollment,
    Prerequisite,
    Semester,
    StudentActivity,
)

logger = logging.getLogger(__name__)

# Projections and links maintained by the engine; callers cannot write them directly.
DERIVED_FIELDS = {
    CourseOffering: {"current_enrollment"},
    Enrollment: {"student", "offering", "status", "grade", "grade_points", "final_percentage", "attendance_percentage"},
    AcademicRecord: {"gpa", "credits_attempted", "credits_earned", "academic_standing"},
    AcademicYear: {"is_current"},
    Semester: {"is_current"},
    Prerequisite: {"course", "prerequisite_course"},
    Assessment: {"offering", "weight_percentage", "max_score"},
    AssessmentResult: {"score", "assessment", "enrollment"},
    Attendance: {"status", "attendance_date", "enrollment"},
}

# Rows that only the engine operations may create.
ENGINE_MANAGED = {
    Enrollment: "enrollments are created by academics.enrollment.enroll()",
    AcademicRecord: "academic records are written by academics.grading.compute_semester_gpa()",
    Prerequisite: "prerequisite edges are added by academics.prerequisites.add_prerequisite()",
    Assessment: "assessments are added by academics.grading.add_assessment()",
    AssessmentResult: "results are recorded by academics.grading.record_result()",
    Attendance: "attendance is recorded by academics.attendance.record_attendance()",
    StudentActivity: "participations are opened by academics.activities.join_activity()",
}

# Rows whose removal changes a derived projection.
ENGINE_DELETED = {
    Attendance: "use academics.attendance.delete_attendance()",
    AssessmentResult: "use academics.grading.delete_result()",
    Assessment: "use academics.grading.delete_assessment()",
}


def run_atomic(func, *args, **kwargs):
    """Run ``func`` in one transaction, retrying transient store failures.

    Lock timeouts, deadlocks and serialization failures surface from Django as
    ``OperationalError``. They are retried with exponential backoff; once the
    attempts are spent the caller gets ``StoreUnavailable``. When already
    inside a caller's transaction there is nothing safe to retry, so the
    function runs exactly once.
    """
    attempts = conf.store_retry_attempts()
    backoff = conf.store_retry_backoff()
    if transaction.get_connection().in_atomic_block:
        attempts = 1

    for attempt in range(1, attempts + 1):
        try:
            with transaction.atomic():
                return func(*args, **kwargs)
        except OperationalError as exc:
            if attempt >= attempts:
                logger.error("Store unavailable after %s attempt(s) in %s: %s", attempt, func.__name__, exc)
                raise StoreUnavailable(f"Store unavailable: {exc}") from exc
            delay = backoff * (2 ** (attempt - 1))
            delay += random.uniform(0, delay)
            logger.warning(
                "Transient store failure in %s (attempt %s/%s), retrying in %.2fs: %s",
                func.__name__,
                attempt,
                attempts,
                delay,
                exc,
            )
            time.sleep(delay)


def atomic_with_retry(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return run_atomic(func, *args, **kwargs)

    return wrapper


def _error_map(exc: ValidationError) -> dict:
    if hasattr(exc, "error_dict"):
        return {field: [str(message) for message in messages] for field, messages in exc.message_dict.items()}
    return {"__all__": [str(message) for message in exc.messages]}


def _describe(errors: dict) -> str:
    parts = []
    for field, messages in errors.items():
        label = "" if field == "__all__" else f"{field}: "
        parts.append(label + " ".join(messages))
    return "; ".join(parts)


def validate_and_save(instance, update_fields=None):
    """Run full model validation, then save, mapping failures to ConstraintViolation."""
    try:
        instance.full_clean()
    except ValidationError as exc:
        errors = _error_map(exc)
        raise ConstraintViolation(_describe(errors), errors=errors) from exc
    try:
        instance.save(update_fields=update_fields)
    except IntegrityError as exc:
        raise ConstraintViolation(str(exc)) from exc
    return instance


def _reject_derived(model, fields) -> None:
    requested = {name[:-3] if name.endswith("_id") else name for name in fields}
    blocked = sorted(DERIVED_FIELDS.get(model, set()) & requested)
    if blocked:
        errors = {name: ["This field is maintained by the engine."] for name in blocked}
        raise ConstraintViolation(_describe(errors), errors=errors)


@atomic_with_retry
def create(model, **fields):
    if model in ENGINE_MANAGED:
        raise ConstraintViolation(f"{model.__name__} cannot be created directly: {ENGINE_MANAGED[model]}.")
    _reject_derived(model, fields)
    return validate_and_save(model(**fields))


@atomic_with_retry
def update(instance, **fields):
    _reject_derived(type(instance), fields)
    for name, value in fields.items():
        setattr(instance, name, value)
    # Write only what the caller changed so engine-maintained columns are never overwritten.
    changed = list(fields) + ["updated_at"]
    return validate_and_save(instance, update_fields=changed)


@atomic_with_retry
def delete(instance) -> None:
    label = f"{type(instance).__name__} {instance.pk}"
    if type(instance) in ENGINE_DELETED:
        raise ConstraintViolation(f"{label} cannot be deleted directly: {ENGINE_DELETED[type(instance)]}.")
    try:
        instance.delete()
    except (ProtectedError, RestrictedError) as exc:
        blocking = Counter(type(obj).__name__ for obj in exc.args[1])
        summary = ", ".join(f"{count} {name}" for name, count in sorted(blocking.items()))
        raise ConstraintViolation(f"Cannot delete {label}: still referenced by {summary}.") from exc
    except IntegrityError as exc:
        raise ConstraintViolation(f"Cannot delete {label}: {exc}") from exc
    logger.info("Deleted %s", label)


def get(model, **lookup):
    """Fetch one row from a model or queryset, raising RecordNotFound when absent."""
    queryset = model._default_manager.all() if isinstance(model, type) else model
    try:
        return queryset.get(**lookup)
    except ObjectDoesNotExist as exc:
        raise RecordNotFound(f"{queryset.model.__name__} matching {lookup} not found") from exc


def _set_current(model, instance):
    model.objects.select_for_update().filter(is_current=True).exclude(pk=instance.pk).update(is_current=False)
    model.objects.filter(pk=instance.pk).update(is_current=True)
    instance.is_current = True
    logger.info("%s %s is now current", model.__name__, instance.pk)
    return instance


@atomic_with_retry
def set_current_academic_year(year: AcademicYear) -> AcademicYear:
    return _set_current(AcademicYear, year)


@atomic_with_retry
def set_current_semester(semester: Semester) -> Semester:
    return _set_current(Semester, semester)


def current_semester() -> Semester | None:
    return Semester.objects.filter(is_current=True).first()


def academic_record_for(student, semester) -> AcademicRecord:
    return get(AcademicRecord, student=student, semester=semester)


def enrollments_for(student, semester=None, include_withdrawn=True):
    queryset = Enrollment.objects.filter(student=student).select_related(
        "offering__course", "offering__semester"
    )
    if semester is not None:
        queryset = queryset.filter(offering__semester=semester)
    if not include_withdrawn:
        queryset = queryset.exclude(status="Withdrawn")
    return queryset


def offering_roster(offering):
    return (
        Enrollment.objects.filter(offering=offering)
        .exclude(status="Withdrawn")
        .select_related("student")
        .order_by("student__last_name", "student__first_name")
    )


def attendance_summary(enrollment) -> dict:
    counts = Counter(
        Attendance.objects.filter(enrollment=enrollment).values_list("status", flat=True)
    )
    summary = {status: counts.get(status, 0) for status, _ in Attendance.STATUS_CHOICES}
    summary["total"] = sum(counts.values())
    enrollment.refresh_from_db(fields=["attendance_percentage"])
    summary["percentage"] = enrollment.attendance_percentage
    return summary
