"""Recompute GPA and academic standing for every student enrolled in a semester."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from academics import store
from academics.exceptions import NoCompletedCourses
from academics.grading import compute_semester_gpa
from academics.models import Semester, Student


class Command(BaseCommand):
    help = "Write AcademicRecord rows (GPA, credits, standing) for one semester"

    def add_arguments(self, parser):
        parser.add_argument("semester", nargs="?", help="Semester id or name; defaults to the current semester")

    def _resolve(self, value):
        if value is None:
            semester = store.current_semester()
            if semester is None:
                raise CommandError("No current semester; pass a semester id or name.")
            return semester
        lookup = {"pk": int(value)} if value.isdigit() else {"name": value}
        matches = list(Semester.objects.filter(**lookup)[:2])
        if not matches:
            raise CommandError(f"Semester {value!r} not found.")
        if len(matches) > 1:
            raise CommandError(f"Semester name {value!r} is ambiguous; pass its id instead.")
        return matches[0]

    def handle(self, *args, **options):
        semester = self._resolve(options["semester"])
        students = Student.objects.filter(enrollments__offering__semester=semester).distinct().order_by("pk")

        written = skipped = 0
        for student in students:
            try:
                record = compute_semester_gpa(student, semester)
            except NoCompletedCourses:
                skipped += 1
                self.stdout.write(f"  {student.first_name} {student.last_name}: no graded courses yet")
                continue
            written += 1
            self.stdout.write(
                f"  {student.first_name} {student.last_name}: GPA {record.gpa}, {record.academic_standing}"
            )

        self.stdout.write(
            self.style.SUCCESS(f"{semester.name}: {written} record(s) written, {skipped} student(s) skipped.")
        )
