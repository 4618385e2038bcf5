"""Compare each offering's stored head-count against its enrollment rows."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from academics.enrollment import active_enrollment_count, reconcile_enrollment_count
from academics.models import CourseOffering


class Command(BaseCommand):
    help = "Report (and optionally repair) offerings whose current_enrollment drifted from the enrollment rows"

    def add_arguments(self, parser):
        parser.add_argument("--fix", action="store_true", help="Rewrite drifted counts from the enrollment rows")
        parser.add_argument("--semester", type=int, help="Only audit offerings of this semester id")

    def handle(self, *args, **options):
        offerings = CourseOffering.objects.select_related("course", "semester").order_by("pk")
        if options["semester"] is not None:
            offerings = offerings.filter(semester_id=options["semester"])

        drifted = 0
        for offering in offerings:
            if options["fix"]:
                stored, actual = reconcile_enrollment_count(offering)
            else:
                stored, actual = offering.current_enrollment, active_enrollment_count(offering)
            if stored == actual:
                continue
            drifted += 1
            label = f"{offering.course.code}-{offering.section_number} ({offering.semester.name})"
            action = "fixed" if options["fix"] else "drift"
            self.stdout.write(self.style.WARNING(f"{label}: stored {stored}, actual {actual} [{action}]"))

        if not drifted:
            self.stdout.write(self.style.SUCCESS("All enrollment counts match."))
        elif options["fix"]:
            self.stdout.write(self.style.SUCCESS(f"Repaired {drifted} offering(s)."))
        else:
            raise CommandError(f"{drifted} offering(s) have drifted counts; rerun with --fix to repair them.")
