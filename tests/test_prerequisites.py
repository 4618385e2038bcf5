from __future__ import annotations

import pytest

from academics.enrollment import enroll
from academics.exceptions import ConstraintViolation, CyclicPrerequisiteError, PrerequisiteNotMet
from academics.models import Prerequisite
from academics.prerequisites import (
    Eligible,
    add_prerequisite,
    check_prerequisites,
    grade_rank,
    meets_grade,
    remove_prerequisite,
)

from .conftest import REGISTRATION_DAY


def test_grade_ordering_follows_grade_points():
    assert grade_rank("A") > grade_rank("A-") > grade_rank("B+") > grade_rank("F")
    assert meets_grade("B+", "B")
    assert not meets_grade("C", "B")
    assert meets_grade("", "")


def test_unknown_grade_is_a_constraint_violation():
    with pytest.raises(ConstraintViolation):
        grade_rank("E")


def test_no_prerequisites_is_eligible(student, course):
    assert check_prerequisites(student, course) == Eligible()


def test_grade_below_minimum_blocks_enrollment(student, make_course, make_offering, complete_course):
    intro = make_course("CS101")
    structures = make_course("CS201", credit_hours="4.0")
    add_prerequisite(structures, intro, min_grade="B")
    completed = complete_course(student, intro, 75)
    assert completed.grade == "C"

    result = check_prerequisites(student, structures)
    assert not result
    assert result.missing_course == intro
    assert "best recorded grade is C" in result.reason

    target = make_offering(structures)
    with pytest.raises(PrerequisiteNotMet) as excinfo:
        enroll(student, target, on=REGISTRATION_DAY)
    assert excinfo.value.missing_course == intro
    target.refresh_from_db()
    assert target.current_enrollment == 0


def test_sufficient_grade_allows_enrollment(student, make_course, make_offering, complete_course):
    intro = make_course("CS101")
    structures = make_course("CS201")
    add_prerequisite(structures, intro, min_grade="B")
    complete_course(student, intro, 88)

    assert check_prerequisites(student, structures)
    enrollment = enroll(student, make_offering(structures), on=REGISTRATION_DAY)
    assert enrollment.status == "Enrolled"


def test_prerequisite_without_completion_is_missing(student, make_course):
    intro = make_course("CS101")
    structures = make_course("CS201")
    add_prerequisite(structures, intro)

    result = check_prerequisites(student, structures)
    assert not result
    assert "has not been completed" in result.reason


def test_every_edge_must_hold(student, make_course, complete_course):
    intro = make_course("CS101")
    calculus = make_course("MATH101")
    structures = make_course("CS201")
    add_prerequisite(structures, intro, min_grade="C")
    add_prerequisite(structures, calculus, min_grade="C")
    complete_course(student, intro, 95)

    result = check_prerequisites(student, structures)
    assert not result
    assert result.missing_course == calculus


def test_two_course_cycle_is_rejected(make_course):
    a = make_course("CS101")
    b = make_course("CS201")
    add_prerequisite(a, b)

    with pytest.raises(CyclicPrerequisiteError) as excinfo:
        add_prerequisite(b, a)
    assert excinfo.value.path == ["CS201", "CS101", "CS201"]
    assert Prerequisite.objects.count() == 1


def test_transitive_cycle_is_rejected(make_course):
    a, b, c = make_course("A100"), make_course("B100"), make_course("C100")
    add_prerequisite(a, b)
    add_prerequisite(b, c)

    with pytest.raises(CyclicPrerequisiteError):
        add_prerequisite(c, a)


def test_self_prerequisite_is_rejected(course):
    with pytest.raises(CyclicPrerequisiteError):
        add_prerequisite(course, course)


def test_duplicate_edge_and_bad_min_grade(make_course):
    a = make_course("CS101")
    b = make_course("CS201")
    add_prerequisite(b, a, min_grade="C")

    with pytest.raises(ConstraintViolation):
        add_prerequisite(b, a, min_grade="B")
    with pytest.raises(ConstraintViolation):
        add_prerequisite(make_course("CS301"), a, min_grade="Z")


def test_remove_prerequisite(make_course):
    a = make_course("CS101")
    b = make_course("CS201")
    add_prerequisite(b, a)

    assert remove_prerequisite(b, a) is True
    assert remove_prerequisite(b, a) is False
