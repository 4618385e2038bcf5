"""Assessment results, final grades, semester GPA and academic standing."""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Max, Sum
from django.utils import timezone

from . import conf
from .exceptions import (
    ConstraintViolation,
    IncompleteWeights,
    MissingAssessmentResult,
    NoCompletedCourses,
    ScoreOutOfRange,
)
from .models import AcademicRecord, Assessment, AssessmentResult, Enrollment
from .prerequisites import grade_rank
from .store import atomic_with_retry, get, validate_and_save

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
FULL_WEIGHT = Decimal("100.00")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def weight_total(offering) -> Decimal:
    total = Assessment.objects.filter(offering=offering).aggregate(total=Sum("weight_percentage")).get("total")
    return _quantize(Decimal(total or 0))


def weighted_percentage(enrollment) -> tuple[Decimal, list[Assessment]]:
    """Weighted percentage over the recorded results, plus the assessments still unscored."""
    scores = dict(AssessmentResult.objects.filter(enrollment=enrollment).values_list("assessment_id", "score"))
    total = Decimal("0")
    missing = []
    for assessment in Assessment.objects.filter(offering_id=enrollment.offering_id).order_by("pk"):
        score = scores.get(assessment.pk)
        if score is None:
            missing.append(assessment)
            continue
        total += score / assessment.max_score * assessment.weight_percentage
    return _quantize(total), missing


def letter_for(percentage: Decimal) -> str:
    for floor, letter in conf.grade_scale():
        if percentage >= floor:
            return letter
    raise ConstraintViolation(f"No grade band covers {percentage}%")


def standing_for(gpa: Decimal) -> str:
    for limit, standing in conf.standing_thresholds():
        if gpa < limit:
            return standing
    return conf.default_standing()


@atomic_with_retry
def add_assessment(offering, **fields) -> Assessment:
    """Create an assessment, refusing weights that would push the offering past 100%."""
    weight = Decimal(str(fields.get("weight_percentage", 0)))
    if weight_total(offering) + weight > FULL_WEIGHT:
        raise ConstraintViolation(
            f"Assessment weights for offering {offering.pk} would exceed 100%",
            errors={"weight_percentage": ["Total weight would exceed 100%."]},
        )
    assessment = validate_and_save(Assessment(offering=offering, **fields))
    logger.info("Added assessment %s (%s%%) to offering %s", assessment.pk, assessment.weight_percentage, offering.pk)
    return assessment


def _finalize(enrollment: Enrollment) -> Enrollment:
    if enrollment.status == "Withdrawn":
        raise ConstraintViolation(
            f"Enrollment {enrollment.pk} is withdrawn and cannot be graded",
            errors={"status": ["Withdrawn enrollments cannot be graded."]},
        )

    total = weight_total(enrollment.offering_id)
    if total != FULL_WEIGHT:
        raise IncompleteWeights(
            f"Assessment weights for offering {enrollment.offering_id} total {total}%, not 100%", total=total
        )

    percentage, missing = weighted_percentage(enrollment)
    if missing and conf.missing_result_policy() == "reject":
        names = ", ".join(assessment.name for assessment in missing)
        raise MissingAssessmentResult(f"No result recorded for: {names}", assessments=missing)

    letter = letter_for(percentage)
    enrollment.final_percentage = percentage
    enrollment.grade = letter
    enrollment.grade_points = _quantize(conf.grade_points()[letter])
    enrollment.status = "Completed" if grade_rank(letter) >= grade_rank(conf.passing_grade()) else "Failed"
    enrollment.save(update_fields=["final_percentage", "grade", "grade_points", "status", "updated_at"])
    logger.info(
        "Finalized enrollment %s: %s%% -> %s (%s), %s",
        enrollment.pk,
        percentage,
        letter,
        enrollment.grade_points,
        enrollment.status,
    )
    return enrollment


@atomic_with_retry
def record_result(assessment, enrollment, score, feedback: str = "", submitted=None) -> AssessmentResult:
    """Record (or correct) a score; an already graded enrollment is regraded in the same transaction."""
    assessment = get(Assessment, pk=assessment.pk)
    score = Decimal(str(score))
    if score < 0 or score > assessment.max_score:
        raise ScoreOutOfRange(f"Score {score} is outside 0..{assessment.max_score} for assessment {assessment.pk}")

    current = get(Enrollment.objects.select_for_update(), pk=enrollment.pk)
    if current.status == "Withdrawn":
        raise ConstraintViolation(
            f"Enrollment {current.pk} is withdrawn",
            errors={"enrollment": ["Cannot record results for a withdrawn enrollment."]},
        )

    result = AssessmentResult.objects.filter(assessment=assessment, enrollment=current).first()
    if result is None:
        result = AssessmentResult(assessment=assessment, enrollment=current)
    result.score = score
    result.feedback = feedback
    result.submitted_date = submitted or timezone.now()
    validate_and_save(result)
    logger.info("Recorded %s/%s on assessment %s for enrollment %s", score, assessment.max_score, assessment.pk, current.pk)

    if current.grade:
        _finalize(current)
    return result


@atomic_with_retry
def finalize_grade(enrollment) -> Enrollment:
    current = get(Enrollment.objects.select_for_update(), pk=enrollment.pk)
    return _finalize(current)


def _regrade_offering(offering_id: int) -> int:
    graded = Enrollment.objects.select_for_update().filter(offering_id=offering_id).exclude(grade="")
    count = 0
    for enrollment in graded:
        _finalize(enrollment)
        count += 1
    return count


@atomic_with_retry
def update_assessment(assessment, **fields) -> Assessment:
    """Edit an assessment; finalized grades in its offering are recomputed in the same transaction.

    The 100% weight cap applies as in ``add_assessment``, ``max_score`` cannot
    drop below a recorded score, and an assessment never moves to another
    offering. A change that leaves graded enrollments unfinalizable (weights no
    longer totalling 100%) fails and rolls back.
    """
    current = get(Assessment.objects.select_for_update(), pk=assessment.pk)
    if "offering" in fields or "offering_id" in fields:
        raise ConstraintViolation(
            f"Assessment {current.pk} cannot move to another offering",
            errors={"offering": ["Assessments stay with their offering."]},
        )

    if "weight_percentage" in fields:
        weight = Decimal(str(fields["weight_percentage"]))
        if weight_total(current.offering_id) - current.weight_percentage + weight > FULL_WEIGHT:
            raise ConstraintViolation(
                f"Assessment weights for offering {current.offering_id} would exceed 100%",
                errors={"weight_percentage": ["Total weight would exceed 100%."]},
            )

    if "max_score" in fields:
        max_score = Decimal(str(fields["max_score"]))
        top = AssessmentResult.objects.filter(assessment=current).aggregate(top=Max("score"))["top"]
        if top is not None and top > max_score:
            raise ConstraintViolation(
                f"Assessment {current.pk} already has a score of {top}",
                errors={"max_score": [f"Cannot be below the recorded score {top}."]},
            )

    for name, value in fields.items():
        setattr(current, name, value)
    validate_and_save(current, update_fields=list(fields) + ["updated_at"])

    if {"weight_percentage", "max_score"} & set(fields):
        regraded = _regrade_offering(current.offering_id)
        logger.info("Updated assessment %s; regraded %s enrollment(s)", current.pk, regraded)
    return current


@atomic_with_retry
def delete_assessment(assessment) -> None:
    """Delete an assessment and its results; refused while graded enrollments depend on it."""
    current = get(Assessment.objects.select_for_update(), pk=assessment.pk)
    offering_id = current.offering_id
    current.delete()
    _regrade_offering(offering_id)
    logger.info("Deleted assessment %s from offering %s", assessment.pk, offering_id)


@atomic_with_retry
def delete_result(result) -> None:
    """Delete a result; a finalized enrollment is regraded (or the delete refused) in the same transaction."""
    current = get(AssessmentResult.objects.all(), pk=result.pk)
    enrollment = get(Enrollment.objects.select_for_update(), pk=current.enrollment_id)
    current.delete()
    if enrollment.grade:
        _finalize(enrollment)
    logger.info("Deleted result %s for enrollment %s", result.pk, enrollment.pk)


@atomic_with_retry
def compute_semester_gpa(student, semester) -> AcademicRecord:
    """Compute the semester GPA and standing and write the student's AcademicRecord.

    GPA = sum(grade_points * credit_hours) / sum(credit_hours) over enrollments
    whose status is in ``ACADEMICS_GPA_STATUSES``.
    """
    statuses = conf.gpa_statuses()
    quality_points = Decimal("0")
    gpa_hours = Decimal("0")
    attempted = Decimal("0")
    earned = Decimal("0")

    enrollments = (
        Enrollment.objects.filter(student=student, offering__semester=semester)
        .exclude(status="Withdrawn")
        .select_related("offering__course")
    )
    for enrollment in enrollments:
        hours = enrollment.offering.course.credit_hours
        if enrollment.status in Enrollment.ATTEMPTED_STATUSES:
            attempted += hours
        if enrollment.status == "Completed":
            earned += hours
        if enrollment.status in statuses and enrollment.grade_points is not None:
            quality_points += enrollment.grade_points * hours
            gpa_hours += hours

    if not gpa_hours:
        raise NoCompletedCourses(f"Student {student.pk} has no graded credit hours in semester {semester.pk}")

    gpa = _quantize(quality_points / gpa_hours)
    standing = standing_for(gpa)
    record, created = AcademicRecord.objects.update_or_create(
        student=student,
        semester=semester,
        defaults={
            "gpa": gpa,
            "credits_attempted": attempted,
            "credits_earned": earned,
            "academic_standing": standing,
        },
    )
    logger.info(
        "%s academic record for student %s, semester %s: GPA %s, %s",
        "Created" if created else "Updated",
        student.pk,
        semester.pk,
        gpa,
        standing,
    )
    return record


def compute_cumulative_gpa(student) -> Decimal | None:
    statuses = conf.gpa_statuses()
    quality_points = Decimal("0")
    hours_total = Decimal("0")
    enrollments = Enrollment.objects.filter(
        student=student, status__in=statuses, grade_points__isnull=False
    ).select_related("offering__course")
    for enrollment in enrollments:
        hours = enrollment.offering.course.credit_hours
        quality_points += enrollment.grade_points * hours
        hours_total += hours
    if not hours_total:
        return None
    return _quantize(quality_points / hours_total)
