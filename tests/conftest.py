from __future__ import annotations

import datetime
import itertools

import pytest

from academics import store
from academics.enrollment import enroll
from academics.grading import add_assessment, finalize_grade, record_result
from academics.models import AcademicYear, Course, CourseOffering, Department, Faculty, Semester, Student

REGISTRATION_DAY = datetime.date(2025, 8, 15)
FIRST_CLASS_DAY = datetime.date(2025, 9, 1)


@pytest.fixture
def department(db):
    return store.create(Department, code="CS", name="Computer Science")


@pytest.fixture
def faculty(department):
    return store.create(
        Faculty,
        department=department,
        first_name="Alan",
        last_name="Turing",
        title="Professor",
        email="turing@campus.example.edu",
        hire_date=datetime.date(2015, 8, 15),
    )


@pytest.fixture
def make_course(department):
    def _make(code, credit_hours="3.0", **extra):
        extra.setdefault("name", f"Course {code}")
        extra.setdefault("level", "Freshman")
        return store.create(Course, department=department, code=code, credit_hours=credit_hours, **extra)

    return _make


@pytest.fixture
def course(make_course):
    return make_course("CS101")


@pytest.fixture
def make_student(db):
    counter = itertools.count(1)

    def _make(first_name="Ada", last_name="Lovelace", **extra):
        n = next(counter)
        extra.setdefault("email", f"{first_name.lower()}{n}@students.example.edu")
        extra.setdefault("date_of_birth", datetime.date(2005, 3, 1))
        extra.setdefault("admission_date", datetime.date(2025, 8, 20))
        extra.setdefault("student_type", "Undergraduate")
        return store.create(Student, first_name=first_name, last_name=last_name, **extra)

    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def academic_year(db):
    return store.create(
        AcademicYear, name="2025-2026", start_date=datetime.date(2025, 8, 25), end_date=datetime.date(2026, 6, 30)
    )


@pytest.fixture
def make_semester(academic_year):
    def _make(name="Fall 2025", **extra):
        extra.setdefault("start_date", FIRST_CLASS_DAY)
        extra.setdefault("end_date", datetime.date(2025, 12, 19))
        extra.setdefault("registration_start", datetime.date(2025, 8, 1))
        extra.setdefault("registration_end", datetime.date(2025, 9, 12))
        return store.create(Semester, academic_year=academic_year, name=name, **extra)

    return _make


@pytest.fixture
def semester(make_semester):
    return make_semester()


@pytest.fixture
def make_offering(semester, faculty):
    sections = itertools.count(1)

    def _make(course, max_capacity=30, **extra):
        extra.setdefault("semester", semester)
        return store.create(
            CourseOffering,
            course=course,
            faculty=faculty,
            section_number=f"{next(sections):02d}",
            max_capacity=max_capacity,
            **extra,
        )

    return _make


@pytest.fixture
def offering(make_offering, course):
    return make_offering(course)


@pytest.fixture
def enrollment(student, offering):
    return enroll(student, offering, on=REGISTRATION_DAY)


@pytest.fixture
def complete_course(make_offering):
    """Take ``student`` through ``course`` with a single 100% assessment scored ``score``."""

    def _complete(student, course, score):
        offering = make_offering(course)
        exam = add_assessment(offering, name="Final", assessment_type="Final", max_score=100, weight_percentage=100)
        enrollment = enroll(student, offering, on=REGISTRATION_DAY)
        record_result(exam, enrollment, score)
        return finalize_grade(enrollment)

    return _complete
