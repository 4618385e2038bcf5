import datetime

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=10, unique=True, verbose_name="Department code")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Department name")),
                ("head_name", models.CharField(blank=True, max_length=100, verbose_name="Head of department")),
                ("office_location", models.CharField(blank=True, max_length=50, verbose_name="Office")),
                ("contact_email", models.EmailField(blank=True, max_length=100, verbose_name="Contact email")),
                ("contact_phone", models.CharField(blank=True, max_length=20, verbose_name="Contact phone")),
                ("establishment_date", models.DateField(blank=True, null=True, verbose_name="Established")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "department",
                "verbose_name_plural": "departments",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="Faculty",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=50, verbose_name="First name")),
                ("last_name", models.CharField(max_length=50, verbose_name="Last name")),
                (
                    "title",
                    models.CharField(
                        choices=[
                            ("Professor", "Professor"),
                            ("Associate Professor", "Associate Professor"),
                            ("Assistant Professor", "Assistant Professor"),
                            ("Lecturer", "Lecturer"),
                            ("Instructor", "Instructor"),
                        ],
                        max_length=30,
                        verbose_name="Title",
                    ),
                ),
                ("email", models.EmailField(max_length=100, unique=True, verbose_name="Email")),
                ("phone", models.CharField(blank=True, max_length=20, verbose_name="Phone")),
                ("hire_date", models.DateField(verbose_name="Hire date")),
                ("specialization", models.CharField(blank=True, max_length=150, verbose_name="Specialization")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Active", "Active"),
                            ("On Leave", "On Leave"),
                            ("Retired", "Retired"),
                            ("Terminated", "Terminated"),
                        ],
                        default="Active",
                        max_length=20,
                        verbose_name="Employment status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "department",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="faculty",
                        to="academics.department",
                        verbose_name="Department",
                    ),
                ),
            ],
            options={
                "verbose_name": "faculty member",
                "verbose_name_plural": "faculty",
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True, verbose_name="Course code")),
                ("name", models.CharField(max_length=150, verbose_name="Course name")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("credit_hours", models.DecimalField(decimal_places=1, max_digits=3, verbose_name="Credit hours")),
                (
                    "level",
                    models.CharField(
                        choices=[
                            ("Freshman", "Freshman"),
                            ("Sophomore", "Sophomore"),
                            ("Junior", "Junior"),
                            ("Senior", "Senior"),
                            ("Graduate", "Graduate"),
                        ],
                        max_length=20,
                        verbose_name="Level",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "department",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="courses",
                        to="academics.department",
                        verbose_name="Department",
                    ),
                ),
            ],
            options={
                "verbose_name": "course",
                "verbose_name_plural": "courses",
                "ordering": ["code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("credit_hours__gt", 0)),
                        name="course_credit_hours_positive",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=50, verbose_name="First name")),
                ("last_name", models.CharField(max_length=50, verbose_name="Last name")),
                ("date_of_birth", models.DateField(verbose_name="Date of birth")),
                (
                    "gender",
                    models.CharField(
                        blank=True,
                        choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")],
                        max_length=10,
                        verbose_name="Gender",
                    ),
                ),
                ("email", models.EmailField(max_length=100, unique=True, verbose_name="Email")),
                ("phone", models.CharField(blank=True, max_length=20, verbose_name="Phone")),
                ("country", models.CharField(blank=True, max_length=50, verbose_name="Country")),
                ("admission_date", models.DateField(verbose_name="Admission date")),
                ("graduation_date", models.DateField(blank=True, null=True, verbose_name="Graduation date")),
                (
                    "student_type",
                    models.CharField(
                        choices=[
                            ("Undergraduate", "Undergraduate"),
                            ("Graduate", "Graduate"),
                            ("PhD", "PhD"),
                            ("Exchange", "Exchange"),
                            ("Certificate", "Certificate"),
                        ],
                        max_length=20,
                        verbose_name="Student type",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Active", "Active"),
                            ("On Leave", "On Leave"),
                            ("Graduated", "Graduated"),
                            ("Withdrawn", "Withdrawn"),
                            ("Suspended", "Suspended"),
                        ],
                        default="Active",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "major_department",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="majors",
                        to="academics.department",
                        verbose_name="Major",
                    ),
                ),
            ],
            options={
                "verbose_name": "student",
                "verbose_name_plural": "students",
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="AcademicYear",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=20, unique=True, verbose_name="Academic year")),
                ("start_date", models.DateField(verbose_name="Start date")),
                ("end_date", models.DateField(verbose_name="End date")),
                ("is_current", models.BooleanField(default=False, verbose_name="Current")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "academic year",
                "verbose_name_plural": "academic years",
                "ordering": ["-start_date"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="academicyear_end_after_start",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("is_current", True)),
                        fields=("is_current",),
                        name="academicyear_single_current",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Semester",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, verbose_name="Semester name")),
                ("start_date", models.DateField(verbose_name="Start date")),
                ("end_date", models.DateField(verbose_name="End date")),
                ("registration_start", models.DateField(verbose_name="Registration opens")),
                ("registration_end", models.DateField(verbose_name="Registration closes")),
                ("final_exam_start", models.DateField(blank=True, null=True, verbose_name="Final exams start")),
                ("final_exam_end", models.DateField(blank=True, null=True, verbose_name="Final exams end")),
                ("is_current", models.BooleanField(default=False, verbose_name="Current")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "academic_year",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="semesters",
                        to="academics.academicyear",
                        verbose_name="Academic year",
                    ),
                ),
            ],
            options={
                "verbose_name": "semester",
                "verbose_name_plural": "semesters",
                "ordering": ["-start_date"],
                "constraints": [
                    models.UniqueConstraint(fields=("academic_year", "name"), name="semester_unique_name_per_year"),
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gt", models.F("start_date"))),
                        name="semester_end_after_start",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("registration_end__gt", models.F("registration_start"))),
                        name="semester_registration_end_after_start",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("is_current", True)),
                        fields=("is_current",),
                        name="semester_single_current",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CourseOffering",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("section_number", models.CharField(max_length=10, verbose_name="Section")),
                ("room_location", models.CharField(blank=True, max_length=50, verbose_name="Room")),
                ("schedule", models.CharField(blank=True, max_length=100, verbose_name="Schedule")),
                ("max_capacity", models.PositiveIntegerField(verbose_name="Capacity")),
                ("current_enrollment", models.PositiveIntegerField(default=0, editable=False, verbose_name="Enrolled")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Scheduled", "Scheduled"),
                            ("In Progress", "In Progress"),
                            ("Completed", "Completed"),
                            ("Cancelled", "Cancelled"),
                        ],
                        default="Scheduled",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("syllabus_url", models.URLField(blank=True, max_length=255, verbose_name="Syllabus")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="offerings",
                        to="academics.course",
                        verbose_name="Course",
                    ),
                ),
                (
                    "faculty",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="offerings",
                        to="academics.faculty",
                        verbose_name="Instructor",
                    ),
                ),
                (
                    "semester",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="offerings",
                        to="academics.semester",
                        verbose_name="Semester",
                    ),
                ),
            ],
            options={
                "verbose_name": "course offering",
                "verbose_name_plural": "course offerings",
                "ordering": ["course__code", "section_number"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("course", "semester", "section_number"),
                        name="offering_unique_section",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("current_enrollment__lte", models.F("max_capacity"))),
                        name="offering_enrollment_within_capacity",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("enrollment_date", models.DateField(default=datetime.date.today, verbose_name="Enrolled on")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Enrolled", "Enrolled"),
                            ("Withdrawn", "Withdrawn"),
                            ("Completed", "Completed"),
                            ("Incomplete", "Incomplete"),
                            ("Failed", "Failed"),
                        ],
                        default="Enrolled",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("grade", models.CharField(blank=True, editable=False, max_length=2, verbose_name="Grade")),
                (
                    "grade_points",
                    models.DecimalField(
                        blank=True, decimal_places=2, editable=False, max_digits=3, null=True, verbose_name="Grade points"
                    ),
                ),
                (
                    "final_percentage",
                    models.DecimalField(
                        blank=True, decimal_places=2, editable=False, max_digits=5, null=True, verbose_name="Final percentage"
                    ),
                ),
                (
                    "attendance_percentage",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        editable=False,
                        max_digits=5,
                        null=True,
                        verbose_name="Attendance percentage",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "offering",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="enrollments",
                        to="academics.courseoffering",
                        verbose_name="Offering",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="enrollments",
                        to="academics.student",
                        verbose_name="Student",
                    ),
                ),
            ],
            options={
                "verbose_name": "enrollment",
                "verbose_name_plural": "enrollments",
                "ordering": ["offering__semester__start_date", "student__last_name"],
                "constraints": [
                    models.UniqueConstraint(fields=("student", "offering"), name="enrollment_unique_student_offering"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Attendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("attendance_date", models.DateField(verbose_name="Date")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Present", "Present"),
                            ("Absent", "Absent"),
                            ("Late", "Late"),
                            ("Excused", "Excused"),
                        ],
                        max_length=10,
                        verbose_name="Status",
                    ),
                ),
                ("comment", models.TextField(blank=True, verbose_name="Comment")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "enrollment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendance_records",
                        to="academics.enrollment",
                        verbose_name="Enrollment",
                    ),
                ),
            ],
            options={
                "verbose_name": "attendance record",
                "verbose_name_plural": "attendance records",
                "ordering": ["attendance_date"],
                "constraints": [
                    models.UniqueConstraint(fields=("enrollment", "attendance_date"), name="attendance_unique_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Assessment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Assessment name")),
                (
                    "assessment_type",
                    models.CharField(
                        choices=[
                            ("Quiz", "Quiz"),
                            ("Assignment", "Assignment"),
                            ("Project", "Project"),
                            ("Midterm", "Midterm"),
                            ("Final", "Final"),
                            ("Presentation", "Presentation"),
                            ("Lab", "Lab"),
                            ("Other", "Other"),
                        ],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("max_score", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Maximum score")),
                ("weight_percentage", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Weight (%)")),
                ("due_date", models.DateTimeField(blank=True, null=True, verbose_name="Due")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "offering",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assessments",
                        to="academics.courseoffering",
                        verbose_name="Offering",
                    ),
                ),
            ],
            options={
                "verbose_name": "assessment",
                "verbose_name_plural": "assessments",
                "ordering": ["offering_id", "due_date", "pk"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("max_score__gt", 0)),
                        name="assessment_max_score_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("weight_percentage__gt", 0), ("weight_percentage__lte", 100)),
                        name="assessment_weight_in_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AssessmentResult",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.DecimalField(decimal_places=2, max_digits=5, verbose_name="Score")),
                ("submitted_date", models.DateTimeField(blank=True, null=True, verbose_name="Submitted")),
                ("feedback", models.TextField(blank=True, verbose_name="Feedback")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assessment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="results",
                        to="academics.assessment",
                        verbose_name="Assessment",
                    ),
                ),
                (
                    "enrollment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assessment_results",
                        to="academics.enrollment",
                        verbose_name="Enrollment",
                    ),
                ),
            ],
            options={
                "verbose_name": "assessment result",
                "verbose_name_plural": "assessment results",
                "constraints": [
                    models.UniqueConstraint(fields=("assessment", "enrollment"), name="result_unique_per_enrollment"),
                    models.CheckConstraint(condition=models.Q(("score__gte", 0)), name="result_score_not_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AcademicRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("gpa", models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True, verbose_name="GPA")),
                (
                    "credits_attempted",
                    models.DecimalField(decimal_places=1, default=0, max_digits=4, verbose_name="Credits attempted"),
                ),
                (
                    "credits_earned",
                    models.DecimalField(decimal_places=1, default=0, max_digits=4, verbose_name="Credits earned"),
                ),
                (
                    "academic_standing",
                    models.CharField(
                        choices=[
                            ("Good Standing", "Good Standing"),
                            ("Warning", "Warning"),
                            ("Probation", "Probation"),
                            ("Suspended", "Suspended"),
                            ("Dismissed", "Dismissed"),
                        ],
                        default="Good Standing",
                        max_length=20,
                        verbose_name="Academic standing",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "semester",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="academic_records",
                        to="academics.semester",
                        verbose_name="Semester",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="academic_records",
                        to="academics.student",
                        verbose_name="Student",
                    ),
                ),
            ],
            options={
                "verbose_name": "academic record",
                "verbose_name_plural": "academic records",
                "ordering": ["semester__start_date"],
                "constraints": [
                    models.UniqueConstraint(fields=("student", "semester"), name="record_unique_student_semester"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Prerequisite",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("min_grade", models.CharField(blank=True, max_length=2, verbose_name="Minimum grade")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="prerequisites",
                        to="academics.course",
                        verbose_name="Course",
                    ),
                ),
                (
                    "prerequisite_course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="required_for",
                        to="academics.course",
                        verbose_name="Prerequisite",
                    ),
                ),
            ],
            options={
                "verbose_name": "prerequisite",
                "verbose_name_plural": "prerequisites",
                "ordering": ["course_id", "prerequisite_course_id"],
                "constraints": [
                    models.UniqueConstraint(fields=("course", "prerequisite_course"), name="prerequisite_unique_edge"),
                    models.CheckConstraint(
                        condition=models.Q(("course", models.F("prerequisite_course")), _negated=True),
                        name="prerequisite_not_self",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ExtracurricularActivity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="Activity name")),
                (
                    "activity_type",
                    models.CharField(
                        choices=[
                            ("Club", "Club"),
                            ("Sport", "Sport"),
                            ("Organization", "Organization"),
                            ("Volunteer", "Volunteer"),
                            ("Competition", "Competition"),
                            ("Other", "Other"),
                        ],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "faculty_advisor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="advised_activities",
                        to="academics.faculty",
                        verbose_name="Faculty advisor",
                    ),
                ),
            ],
            options={
                "verbose_name": "extracurricular activity",
                "verbose_name_plural": "extracurricular activities",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="StudentActivity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("join_date", models.DateField(verbose_name="Joined")),
                ("end_date", models.DateField(blank=True, null=True, verbose_name="Left")),
                ("role", models.CharField(blank=True, max_length=100, verbose_name="Role")),
                ("achievements", models.TextField(blank=True, verbose_name="Achievements")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="participants",
                        to="academics.extracurricularactivity",
                        verbose_name="Activity",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="academics.student",
                        verbose_name="Student",
                    ),
                ),
            ],
            options={
                "verbose_name": "activity participation",
                "verbose_name_plural": "activity participations",
                "ordering": ["-join_date"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__isnull", True), ("end_date__gte", models.F("join_date")), _connector="OR"),
                        name="participation_end_after_join",
                    ),
                ],
            },
        ),
    ]
