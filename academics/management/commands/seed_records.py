"""Load a small, internally consistent sample dataset through the engine operations."""
from __future__ import annotations

import datetime
import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from academics import store
from academics.activities import join_activity
from academics.attendance import record_attendance
from academics.enrollment import enroll
from academics.exceptions import PrerequisiteNotMet
from academics.grading import add_assessment, compute_semester_gpa, finalize_grade, record_result
from academics.models import (
    AcademicYear,
    Course,
    CourseOffering,
    Department,
    ExtracurricularActivity,
    Faculty,
    Semester,
    Student,
)
from academics.prerequisites import add_prerequisite

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Seed departments, courses, two semesters, graded enrollments and attendance"

    def handle(self, *args, **options):
        if Department.objects.exists():
            self.stdout.write(self.style.WARNING("Records already present; nothing seeded."))
            return

        self.stdout.write(self.style.WARNING("Creating sample academic records..."))
        with transaction.atomic():
            self._seed()
        self.stdout.write(self.style.SUCCESS("Sample records ready."))

    def _seed(self):
        cs = store.create(Department, code="CS", name="Computer Science", office_location="Hall A 210")
        math = store.create(Department, code="MATH", name="Mathematics", office_location="Hall B 105")

        faculty = {}
        for key, dept, first, last, title in [
            ("turing", cs, "Alan", "Turing", "Professor"),
            ("noether", math, "Emmy", "Noether", "Associate Professor"),
        ]:
            faculty[key] = store.create(
                Faculty,
                department=dept,
                first_name=first,
                last_name=last,
                title=title,
                email=f"{key}@campus.example.edu",
                hire_date=datetime.date(2015, 8, 15),
            )

        courses = {}
        for code, name, dept, hours, level in [
            ("CS101", "Introduction to Programming", cs, "3.0", "Freshman"),
            ("CS201", "Data Structures", cs, "4.0", "Sophomore"),
            ("MATH101", "Calculus I", math, "3.0", "Freshman"),
        ]:
            courses[code] = store.create(
                Course, code=code, name=name, department=dept, credit_hours=hours, level=level
            )
        add_prerequisite(courses["CS201"], courses["CS101"], min_grade="C")

        year = store.create(
            AcademicYear, name="2025-2026", start_date=datetime.date(2025, 8, 25), end_date=datetime.date(2026, 6, 30)
        )
        store.set_current_academic_year(year)
        fall = store.create(
            Semester,
            academic_year=year,
            name="Fall 2025",
            start_date=datetime.date(2025, 9, 1),
            end_date=datetime.date(2025, 12, 19),
            registration_start=datetime.date(2025, 8, 1),
            registration_end=datetime.date(2025, 9, 12),
            final_exam_start=datetime.date(2025, 12, 8),
            final_exam_end=datetime.date(2025, 12, 19),
        )
        spring = store.create(
            Semester,
            academic_year=year,
            name="Spring 2026",
            start_date=datetime.date(2026, 1, 12),
            end_date=datetime.date(2026, 5, 8),
            registration_start=datetime.date(2025, 12, 1),
            registration_end=datetime.date(2026, 1, 23),
        )
        store.set_current_semester(spring)

        students = []
        for first, last, country in [
            ("Ada", "Lovelace", "United Kingdom"),
            ("Grace", "Hopper", "United States"),
            ("Kurt", "Goedel", "Austria"),
        ]:
            students.append(
                store.create(
                    Student,
                    first_name=first,
                    last_name=last,
                    date_of_birth=datetime.date(2005, 3, 1),
                    email=f"{first.lower()}.{last.lower()}@students.example.edu",
                    country=country,
                    admission_date=datetime.date(2025, 8, 20),
                    major_department=cs,
                    student_type="Undergraduate",
                )
            )

        cs101 = store.create(
            CourseOffering,
            course=courses["CS101"],
            semester=fall,
            faculty=faculty["turing"],
            section_number="01",
            room_location="A-101",
            schedule="Mon/Wed 09:00-10:15",
            max_capacity=30,
        )
        math101 = store.create(
            CourseOffering,
            course=courses["MATH101"],
            semester=fall,
            faculty=faculty["noether"],
            section_number="01",
            room_location="B-12",
            schedule="Tue/Thu 11:00-12:15",
            max_capacity=25,
        )
        cs201 = store.create(
            CourseOffering,
            course=courses["CS201"],
            semester=spring,
            faculty=faculty["turing"],
            section_number="01",
            room_location="A-204",
            schedule="Mon/Wed 13:00-14:40",
            max_capacity=2,
        )

        for offering in (cs101, math101):
            add_assessment(offering, name="Midterm", assessment_type="Midterm", max_score=100, weight_percentage=40)
            add_assessment(offering, name="Final", assessment_type="Final", max_score=100, weight_percentage=60)

        # (midterm, final) per student for CS101 and MATH101
        scores = [((92, 95), (88, 91)), ((80, 78), (71, 75)), ((50, 55), (64, 70))]
        first_day = fall.start_date
        for student, per_offering in zip(students, scores):
            for offering, (midterm, final) in zip((cs101, math101), per_offering):
                enrollment = enroll(student, offering, on=fall.registration_start)
                midterm_exam, final_exam = offering.assessments.order_by("pk")
                record_result(midterm_exam, enrollment, midterm)
                record_result(final_exam, enrollment, final)
                for offset, status in enumerate(["Present", "Present", "Late", "Present", "Absent"]):
                    record_attendance(enrollment, first_day + datetime.timedelta(days=offset * 7), status)
                finalize_grade(enrollment)
            compute_semester_gpa(student, fall)

        for student in students:
            try:
                enroll(student, cs201, on=spring.registration_start)
            except PrerequisiteNotMet as exc:
                self.stdout.write(f"  {student.first_name} {student.last_name} not enrolled in CS201: {exc.message}")

        chess = store.create(
            ExtracurricularActivity, name="Chess Club", activity_type="Club", faculty_advisor=faculty["noether"]
        )
        join_activity(students[0], chess, datetime.date(2025, 9, 10), role="President")
        join_activity(students[1], chess, datetime.date(2025, 9, 17))

        logger.info("Seeded %s students across %s offerings", len(students), CourseOffering.objects.count())
