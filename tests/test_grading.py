from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from academics import store
from academics.enrollment import enroll, withdraw
from academics.exceptions import (
    ConstraintViolation,
    IncompleteWeights,
    MissingAssessmentResult,
    NoCompletedCourses,
    ScoreOutOfRange,
)
from academics.grading import (
    add_assessment,
    compute_cumulative_gpa,
    compute_semester_gpa,
    delete_assessment,
    delete_result,
    finalize_grade,
    letter_for,
    record_result,
    standing_for,
    update_assessment,
    weight_total,
    weighted_percentage,
)
from academics.models import AcademicRecord, Assessment, AssessmentResult

from .conftest import REGISTRATION_DAY


def make_assessments(offering, *layout):
    return [
        add_assessment(
            offering,
            name=f"Part {index}",
            assessment_type="Assignment",
            max_score=max_score,
            weight_percentage=weight,
        )
        for index, (weight, max_score) in enumerate(layout, start=1)
    ]


def test_finalize_requires_weights_to_total_100(offering, enrollment):
    midterm, final = make_assessments(offering, (40, 100), (50, 100))
    record_result(midterm, enrollment, 80)
    record_result(final, enrollment, 90)

    with pytest.raises(IncompleteWeights) as excinfo:
        finalize_grade(enrollment)
    assert excinfo.value.total == Decimal("90.00")

    (quiz,) = make_assessments(offering, (10, 10))
    record_result(quiz, enrollment, 10)
    graded = finalize_grade(enrollment)

    # 32 + 45 + 10
    assert graded.final_percentage == Decimal("87.00")
    assert graded.grade == "B+"
    assert graded.status == "Completed"


def test_weights_cannot_exceed_100(offering):
    make_assessments(offering, (60, 100), (40, 100))
    assert weight_total(offering) == Decimal("100.00")

    with pytest.raises(ConstraintViolation):
        make_assessments(offering, (5, 100))


def test_weighted_percentage_with_missing_result(offering, enrollment):
    parts = make_assessments(offering, (10, 20), (15, 50), (30, 100), (25, 100), (20, 100))
    for assessment, score in zip(parts, ("18.5", 50, 45, 80)):
        record_result(assessment, enrollment, score)

    percentage, missing = weighted_percentage(enrollment)
    assert percentage == Decimal("57.75")
    assert missing == [parts[4]]

    with pytest.raises(MissingAssessmentResult) as excinfo:
        finalize_grade(enrollment)
    assert excinfo.value.assessments == [parts[4]]
    enrollment.refresh_from_db()
    assert enrollment.grade == ""


def test_zero_policy_counts_missing_results_as_zero(settings, offering, enrollment):
    settings.ACADEMICS_MISSING_RESULT_POLICY = "zero"
    parts = make_assessments(offering, (10, 20), (15, 50), (30, 100), (25, 100), (20, 100))
    for assessment, score in zip(parts, ("18.5", 50, 45, 80)):
        record_result(assessment, enrollment, score)

    graded = finalize_grade(enrollment)

    assert graded.final_percentage == Decimal("57.75")
    assert graded.grade == "F"
    assert graded.grade_points == Decimal("0.00")
    assert graded.status == "Failed"


@pytest.mark.parametrize("score", [-1, "100.01"])
def test_score_out_of_range(offering, enrollment, score):
    (exam,) = make_assessments(offering, (100, 100))

    with pytest.raises(ScoreOutOfRange):
        record_result(exam, enrollment, score)
    assert not AssessmentResult.objects.exists()


def test_result_for_another_offering_is_rejected(course, make_offering, enrollment):
    other = make_offering(course)
    (exam,) = make_assessments(other, (100, 100))

    with pytest.raises(ConstraintViolation):
        record_result(exam, enrollment, 50)


def test_withdrawn_enrollment_cannot_be_graded(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    record_result(exam, enrollment, 70)
    withdraw(enrollment)

    with pytest.raises(ConstraintViolation):
        finalize_grade(enrollment)
    with pytest.raises(ConstraintViolation):
        record_result(exam, enrollment, 75)


def test_corrected_result_regrades_finalized_enrollment(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    record_result(exam, enrollment, 55)
    assert finalize_grade(enrollment).status == "Failed"

    record_result(exam, enrollment, 94)

    enrollment.refresh_from_db()
    assert enrollment.grade == "A"
    assert enrollment.status == "Completed"
    assert AssessmentResult.objects.get().score == Decimal("94.00")


def test_grade_fields_are_not_editable_directly(offering, enrollment):
    with pytest.raises(ConstraintViolation):
        store.update(enrollment, grade_points=Decimal("4.00"))


def test_semester_gpa(student, make_course, complete_course, semester):
    complete_course(student, make_course("CS201", credit_hours="4.0"), 91)
    complete_course(student, make_course("MATH101", credit_hours="3.0"), 96)

    record = compute_semester_gpa(student, semester)

    # (4.0 * 3.7 + 3.0 * 4.0) / 7.0
    assert record.gpa == Decimal("3.83")
    assert record.credits_attempted == Decimal("7.0")
    assert record.credits_earned == Decimal("7.0")
    assert record.academic_standing == "Good Standing"
    assert store.academic_record_for(student, semester).pk == record.pk


def test_semester_gpa_updates_existing_record(student, make_course, complete_course, semester):
    complete_course(student, make_course("CS101"), 95)
    compute_semester_gpa(student, semester)
    complete_course(student, make_course("CS102"), 65)

    record = compute_semester_gpa(student, semester)

    assert AcademicRecord.objects.count() == 1
    assert record.gpa == Decimal("2.50")


def test_failed_course_counts_as_attempted_only(student, make_course, complete_course, semester):
    complete_course(student, make_course("CS101"), 95)
    complete_course(student, make_course("CS102"), 40)

    record = compute_semester_gpa(student, semester)

    assert record.gpa == Decimal("4.00")
    assert record.credits_attempted == Decimal("6.0")
    assert record.credits_earned == Decimal("3.0")


def test_failed_courses_enter_gpa_when_configured(settings, student, make_course, complete_course, semester):
    settings.ACADEMICS_GPA_STATUSES = ("Completed", "Failed")
    complete_course(student, make_course("CS101"), 95)
    complete_course(student, make_course("CS102"), 40)

    record = compute_semester_gpa(student, semester)

    assert record.gpa == Decimal("2.00")
    assert record.academic_standing == "Good Standing"


def test_no_completed_courses(student, enrollment, semester):
    with pytest.raises(NoCompletedCourses):
        compute_semester_gpa(student, semester)
    assert not AcademicRecord.objects.exists()


def test_low_gpa_sets_standing(student, make_course, complete_course, semester):
    complete_course(student, make_course("CS101"), 68)

    record = compute_semester_gpa(student, semester)

    assert record.gpa == Decimal("1.30")
    assert record.academic_standing == "Probation"


@pytest.mark.parametrize(
    "gpa, standing",
    [("0.99", "Suspended"), ("1.00", "Probation"), ("1.99", "Probation"), ("2.00", "Good Standing")],
)
def test_standing_thresholds(gpa, standing):
    assert standing_for(Decimal(gpa)) == standing


def test_standing_thresholds_are_configurable(settings):
    settings.ACADEMICS_STANDING_THRESHOLDS = [("2.50", "Warning")]
    assert standing_for(Decimal("2.40")) == "Warning"
    assert standing_for(Decimal("1.00")) == "Warning"
    assert standing_for(Decimal("2.50")) == "Good Standing"


def test_grade_scale_is_configurable(settings):
    assert letter_for(Decimal("89.99")) == "B+"
    settings.ACADEMICS_GRADE_SCALE = [(90, "A"), (80, "B"), (70, "C"), (60, "D"), (0, "F")]
    assert letter_for(Decimal("89.99")) == "B"


def test_cumulative_gpa(student, make_course, complete_course, make_semester, make_offering):
    assert compute_cumulative_gpa(student) is None
    complete_course(student, make_course("CS101", credit_hours="4.0"), 91)
    spring = make_semester(
        name="Spring 2026",
        start_date=datetime.date(2026, 1, 12),
        end_date=datetime.date(2026, 5, 8),
        registration_start=datetime.date(2025, 8, 1),
        registration_end=datetime.date(2026, 1, 23),
    )
    later = make_offering(make_course("MATH101"), semester=spring)
    (exam,) = make_assessments(later, (100, 100))
    enrollment = enroll(student, later, on=REGISTRATION_DAY)
    record_result(exam, enrollment, 96)
    finalize_grade(enrollment)

    assert compute_cumulative_gpa(student) == Decimal("3.83")


def test_update_assessment_keeps_weights_within_100(offering):
    exam, project = make_assessments(offering, (60, 100), (40, 100))

    with pytest.raises(ConstraintViolation) as excinfo:
        update_assessment(exam, weight_percentage=100)
    assert "weight_percentage" in excinfo.value.errors
    assert weight_total(offering) == Decimal("100.00")

    update_assessment(exam, weight_percentage=50)
    assert weight_total(offering) == Decimal("90.00")


def test_raising_max_score_regrades_finalized_enrollments(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    record_result(exam, enrollment, 95)
    assert finalize_grade(enrollment).grade == "A"

    update_assessment(exam, max_score=200)

    enrollment.refresh_from_db()
    assert enrollment.final_percentage == Decimal("47.50")
    assert enrollment.grade == "F"
    assert enrollment.status == "Failed"


def test_max_score_cannot_drop_below_a_recorded_score(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    record_result(exam, enrollment, 95)

    with pytest.raises(ConstraintViolation) as excinfo:
        update_assessment(exam, max_score=90)
    assert "max_score" in excinfo.value.errors
    exam.refresh_from_db()
    assert exam.max_score == Decimal("100.00")


def test_assessment_stays_with_its_offering(course, make_offering, offering):
    (exam,) = make_assessments(offering, (100, 100))
    other = make_offering(course)

    with pytest.raises(ConstraintViolation):
        update_assessment(exam, offering=other)
    with pytest.raises(ConstraintViolation):
        store.update(exam, offering_id=other.pk)
    assert Assessment.objects.get().offering_id == offering.pk


def test_weight_change_that_breaks_graded_enrollments_rolls_back(offering, enrollment):
    exam, project = make_assessments(offering, (60, 100), (40, 100))
    record_result(exam, enrollment, 80)
    record_result(project, enrollment, 90)
    finalize_grade(enrollment)

    with pytest.raises(IncompleteWeights):
        update_assessment(project, weight_percentage=30)

    project.refresh_from_db()
    assert project.weight_percentage == Decimal("40.00")
    enrollment.refresh_from_db()
    assert enrollment.final_percentage == Decimal("84.00")


def test_delete_assessment_on_ungraded_offering(offering, enrollment):
    exam, quiz = make_assessments(offering, (90, 100), (10, 10))
    record_result(quiz, enrollment, 7)

    delete_assessment(quiz)

    assert list(Assessment.objects.all()) == [exam]
    assert not AssessmentResult.objects.exists()


def test_delete_assessment_refused_while_grades_depend_on_it(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    record_result(exam, enrollment, 95)
    finalize_grade(enrollment)

    with pytest.raises(IncompleteWeights):
        delete_assessment(exam)
    assert Assessment.objects.filter(pk=exam.pk).exists()
    assert AssessmentResult.objects.count() == 1


def test_delete_result_of_finalized_enrollment_is_refused(offering, enrollment):
    (exam,) = make_assessments(offering, (100, 100))
    result = record_result(exam, enrollment, 95)
    finalize_grade(enrollment)

    with pytest.raises(MissingAssessmentResult):
        delete_result(result)
    assert AssessmentResult.objects.filter(pk=result.pk).exists()
    enrollment.refresh_from_db()
    assert enrollment.grade == "A"


def test_delete_result_regrades_under_zero_policy(settings, offering, enrollment):
    settings.ACADEMICS_MISSING_RESULT_POLICY = "zero"
    exam, quiz = make_assessments(offering, (90, 100), (10, 10))
    record_result(exam, enrollment, 95)
    quiz_result = record_result(quiz, enrollment, 10)
    assert finalize_grade(enrollment).final_percentage == Decimal("95.50")

    delete_result(quiz_result)

    enrollment.refresh_from_db()
    # 85.5 + 0
    assert enrollment.final_percentage == Decimal("85.50")
    assert enrollment.grade == "B"
