from __future__ import annotations

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from academics.models import AcademicRecord, CourseOffering, Enrollment, Semester, Student


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


@pytest.fixture
def seeded(db):
    run("seed_records")


def test_seed_records_builds_consistent_dataset(seeded):
    assert Student.objects.count() == 3
    assert Semester.objects.get(is_current=True).name == "Spring 2026"

    for offering in CourseOffering.objects.all():
        active = Enrollment.objects.filter(offering=offering).exclude(status="Withdrawn").count()
        assert offering.current_enrollment == active

    ada = AcademicRecord.objects.get(student__last_name="Lovelace")
    assert ada.academic_standing == "Good Standing"
    goedel = AcademicRecord.objects.get(student__last_name="Goedel")
    # F in CS101 (not counted), D+ in MATH101
    assert goedel.gpa == Decimal("1.30")
    assert not Enrollment.objects.filter(student__last_name="Goedel", offering__course__code="CS201").exists()


def test_seed_records_is_skipped_when_data_exists(seeded):
    output = run("seed_records")

    assert "nothing seeded" in output
    assert Student.objects.count() == 3


def test_audit_reports_and_fixes_drift(seeded):
    assert "All enrollment counts match" in run("audit_enrollment_counts")

    drifted = CourseOffering.objects.get(course__code="CS201")
    CourseOffering.objects.filter(pk=drifted.pk).update(current_enrollment=0)

    with pytest.raises(CommandError):
        run("audit_enrollment_counts")

    output = run("audit_enrollment_counts", "--fix")
    assert "stored 0, actual 2 [fixed]" in output
    drifted.refresh_from_db()
    assert drifted.current_enrollment == 2


def test_compute_semester_records_by_name(seeded):
    AcademicRecord.objects.all().delete()

    output = run("compute_semester_records", "Fall 2025")

    assert "3 record(s) written" in output
    assert AcademicRecord.objects.count() == 3


def test_compute_semester_records_defaults_to_current(seeded):
    output = run("compute_semester_records")

    assert "Spring 2026: 0 record(s) written, 2 student(s) skipped." in output


def test_compute_semester_records_unknown_semester(seeded):
    with pytest.raises(CommandError):
        run("compute_semester_records", "Summer 1999")
