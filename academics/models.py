"""Django models for the student academic records domain."""
from __future__ import annotations

import datetime

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from . import conf

GENDER_CHOICES = [
    ("Male", "Male"),
    ("Female", "Female"),
    ("Other", "Other"),
]


class Department(models.Model):
    code = models.CharField("Department code", max_length=10, unique=True)
    name = models.CharField("Department name", max_length=100, unique=True)
    head_name = models.CharField("Head of department", max_length=100, blank=True)
    office_location = models.CharField("Office", max_length=50, blank=True)
    contact_email = models.EmailField("Contact email", max_length=100, blank=True)
    contact_phone = models.CharField("Contact phone", max_length=20, blank=True)
    establishment_date = models.DateField("Established", null=True, blank=True)
    description = models.TextField("Description", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "department"
        verbose_name_plural = "departments"
        ordering = ["code"]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.code} - {self.name}"


class Faculty(models.Model):
    TITLE_CHOICES = [
        ("Professor", "Professor"),
        ("Associate Professor", "Associate Professor"),
        ("Assistant Professor", "Assistant Professor"),
        ("Lecturer", "Lecturer"),
        ("Instructor", "Instructor"),
    ]
    STATUS_CHOICES = [
        ("Active", "Active"),
        ("On Leave", "On Leave"),
        ("Retired", "Retired"),
        ("Terminated", "Terminated"),
    ]

    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name="faculty", verbose_name="Department")
    first_name = models.CharField("First name", max_length=50)
    last_name = models.CharField("Last name", max_length=50)
    title = models.CharField("Title", max_length=30, choices=TITLE_CHOICES)
    email = models.EmailField("Email", max_length=100, unique=True)
    phone = models.CharField("Phone", max_length=20, blank=True)
    hire_date = models.DateField("Hire date")
    specialization = models.CharField("Specialization", max_length=150, blank=True)
    status = models.CharField("Employment status", max_length=20, choices=STATUS_CHOICES, default="Active")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "faculty member"
        verbose_name_plural = "faculty"
        ordering = ["last_name", "first_name"]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.title} {self.first_name} {self.last_name}"


class Course(models.Model):
    LEVEL_CHOICES = [
        ("Freshman", "Freshman"),
        ("Sophomore", "Sophomore"),
        ("Junior", "Junior"),
        ("Senior", "Senior"),
        ("Graduate", "Graduate"),
    ]

    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name="courses", verbose_name="Department")
    code = models.CharField("Course code", max_length=20, unique=True)
    name = models.CharField("Course name", max_length=150)
    description = models.TextField("Description", blank=True)
    credit_hours = models.DecimalField("Credit hours", max_digits=3, decimal_places=1)
    level = models.CharField("Level", max_length=20, choices=LEVEL_CHOICES)
    is_active = models.BooleanField("Active", default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "course"
        verbose_name_plural = "courses"
        ordering = ["code"]
        constraints = [
            models.CheckConstraint(
                condition=Q(credit_hours__gt=0),
                name="course_credit_hours_positive",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.code} - {self.name}"


class Student(models.Model):
    TYPE_CHOICES = [
        ("Undergraduate", "Undergraduate"),
        ("Graduate", "Graduate"),
        ("PhD", "PhD"),
        ("Exchange", "Exchange"),
        ("Certificate", "Certificate"),
    ]
    STATUS_CHOICES = [
        ("Active", "Active"),
        ("On Leave", "On Leave"),
        ("Graduated", "Graduated"),
        ("Withdrawn", "Withdrawn"),
        ("Suspended", "Suspended"),
    ]

    first_name = models.CharField("First name", max_length=50)
    last_name = models.CharField("Last name", max_length=50)
    date_of_birth = models.DateField("Date of birth")
    gender = models.CharField("Gender", max_length=10, choices=GENDER_CHOICES, blank=True)
    email = models.EmailField("Email", max_length=100, unique=True)
    phone = models.CharField("Phone", max_length=20, blank=True)
    country = models.CharField("Country", max_length=50, blank=True)
    admission_date = models.DateField("Admission date")
    graduation_date = models.DateField("Graduation date", null=True, blank=True)
    major_department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        related_name="majors",
        verbose_name="Major",
        null=True,
        blank=True,
    )
    student_type = models.CharField("Student type", max_length=20, choices=TYPE_CHOICES)
    status = models.CharField("Status", max_length=20, choices=STATUS_CHOICES, default="Active")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "student"
        verbose_name_plural = "students"
        ordering = ["last_name", "first_name"]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.first_name} {self.last_name} <{self.email}>"

    def clean(self):
        super().clean()
        if self.graduation_date and self.admission_date and self.graduation_date < self.admission_date:
            raise ValidationError({"graduation_date": "Graduation date cannot precede admission."})


class AcademicYear(models.Model):
    name = models.CharField("Academic year", max_length=20, unique=True)
    start_date = models.DateField("Start date")
    end_date = models.DateField("End date")
    is_current = models.BooleanField("Current", default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "academic year"
        verbose_name_plural = "academic years"
        ordering = ["-start_date"]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gt=F("start_date")),
                name="academicyear_end_after_start",
            ),
            models.UniqueConstraint(
                fields=["is_current"],
                condition=Q(is_current=True),
                name="academicyear_single_current",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return self.name

    def clean(self):
        super().clean()
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({"end_date": "End date must be after the start date."})


class Semester(models.Model):
    academic_year = models.ForeignKey(
        AcademicYear, on_delete=models.PROTECT, related_name="semesters", verbose_name="Academic year"
    )
    name = models.CharField("Semester name", max_length=50)
    start_date = models.DateField("Start date")
    end_date = models.DateField("End date")
    registration_start = models.DateField("Registration opens")
    registration_end = models.DateField("Registration closes")
    final_exam_start = models.DateField("Final exams start", null=True, blank=True)
    final_exam_end = models.DateField("Final exams end", null=True, blank=True)
    is_current = models.BooleanField("Current", default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "semester"
        verbose_name_plural = "semesters"
        ordering = ["-start_date"]
        constraints = [
            models.UniqueConstraint(fields=["academic_year", "name"], name="semester_unique_name_per_year"),
            models.CheckConstraint(
                condition=Q(end_date__gt=F("start_date")),
                name="semester_end_after_start",
            ),
            models.CheckConstraint(
                condition=Q(registration_end__gt=F("registration_start")),
                name="semester_registration_end_after_start",
            ),
            models.UniqueConstraint(
                fields=["is_current"],
                condition=Q(is_current=True),
                name="semester_single_current",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.name} ({self.academic_year_id})"

    def clean(self):
        super().clean()
        errors = {}
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            errors["end_date"] = "End date must be after the start date."
        if self.registration_start and self.registration_end and self.registration_end <= self.registration_start:
            errors["registration_end"] = "Registration must close after it opens."
        if self.final_exam_start and self.final_exam_end and self.final_exam_end < self.final_exam_start:
            errors["final_exam_end"] = "Final exams cannot end before they start."
        if errors:
            raise ValidationError(errors)

    def covers(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date

    def registration_open_on(self, day: datetime.date) -> bool:
        return self.registration_start <= day <= self.registration_end


class CourseOffering(models.Model):
    STATUS_CHOICES = [
        ("Scheduled", "Scheduled"),
        ("In Progress", "In Progress"),
        ("Completed", "Completed"),
        ("Cancelled", "Cancelled"),
    ]
    CLOSED_STATUSES = ("Completed", "Cancelled")

    course = models.ForeignKey(Course, on_delete=models.PROTECT, related_name="offerings", verbose_name="Course")
    semester = models.ForeignKey(Semester, on_delete=models.PROTECT, related_name="offerings", verbose_name="Semester")
    faculty = models.ForeignKey(
        Faculty,
        on_delete=models.SET_NULL,
        related_name="offerings",
        verbose_name="Instructor",
        null=True,
        blank=True,
    )
    section_number = models.CharField("Section", max_length=10)
    room_location = models.CharField("Room", max_length=50, blank=True)
    schedule = models.CharField("Schedule", max_length=100, blank=True)
    max_capacity = models.PositiveIntegerField("Capacity")
    current_enrollment = models.PositiveIntegerField("Enrolled", default=0, editable=False)
    status = models.CharField("Status", max_length=20, choices=STATUS_CHOICES, default="Scheduled")
    syllabus_url = models.URLField("Syllabus", max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "course offering"
        verbose_name_plural = "course offerings"
        ordering = ["course__code", "section_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["course", "semester", "section_number"],
                name="offering_unique_section",
            ),
            models.CheckConstraint(
                condition=Q(current_enrollment__lte=F("max_capacity")),
                name="offering_enrollment_within_capacity",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.course_id}-{self.section_number} ({self.semester_id})"

    @property
    def remaining_capacity(self) -> int:
        return max(self.max_capacity - self.current_enrollment, 0)


class Enrollment(models.Model):
    STATUS_CHOICES = [
        ("Enrolled", "Enrolled"),
        ("Withdrawn", "Withdrawn"),
        ("Completed", "Completed"),
        ("Incomplete", "Incomplete"),
        ("Failed", "Failed"),
    ]
    GRADED_STATUSES = ("Completed", "Failed")
    ATTEMPTED_STATUSES = ("Completed", "Failed", "Incomplete")

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments", verbose_name="Student")
    offering = models.ForeignKey(
        CourseOffering, on_delete=models.CASCADE, related_name="enrollments", verbose_name="Offering"
    )
    enrollment_date = models.DateField("Enrolled on", default=datetime.date.today)
    status = models.CharField("Status", max_length=20, choices=STATUS_CHOICES, default="Enrolled")
    grade = models.CharField("Grade", max_length=2, blank=True, editable=False)
    grade_points = models.DecimalField("Grade points", max_digits=3, decimal_places=2, null=True, blank=True, editable=False)
    final_percentage = models.DecimalField(
        "Final percentage", max_digits=5, decimal_places=2, null=True, blank=True, editable=False
    )
    attendance_percentage = models.DecimalField(
        "Attendance percentage", max_digits=5, decimal_places=2, null=True, blank=True, editable=False
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "enrollment"
        verbose_name_plural = "enrollments"
        ordering = ["offering__semester__start_date", "student__last_name"]
        constraints = [
            models.UniqueConstraint(fields=["student", "offering"], name="enrollment_unique_student_offering"),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.student_id} -> {self.offering_id} ({self.status})"

    @property
    def is_active(self) -> bool:
        return self.status != "Withdrawn"


class Attendance(models.Model):
    STATUS_CHOICES = [
        ("Present", "Present"),
        ("Absent", "Absent"),
        ("Late", "Late"),
        ("Excused", "Excused"),
    ]

    enrollment = models.ForeignKey(
        Enrollment, on_delete=models.CASCADE, related_name="attendance_records", verbose_name="Enrollment"
    )
    attendance_date = models.DateField("Date")
    status = models.CharField("Status", max_length=10, choices=STATUS_CHOICES)
    comment = models.TextField("Comment", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "attendance record"
        verbose_name_plural = "attendance records"
        ordering = ["attendance_date"]
        constraints = [
            models.UniqueConstraint(fields=["enrollment", "attendance_date"], name="attendance_unique_day"),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.enrollment_id} {self.attendance_date}: {self.status}"


class Assessment(models.Model):
    TYPE_CHOICES = [
        ("Quiz", "Quiz"),
        ("Assignment", "Assignment"),
        ("Project", "Project"),
        ("Midterm", "Midterm"),
        ("Final", "Final"),
        ("Presentation", "Presentation"),
        ("Lab", "Lab"),
        ("Other", "Other"),
    ]

    offering = models.ForeignKey(
        CourseOffering, on_delete=models.CASCADE, related_name="assessments", verbose_name="Offering"
    )
    name = models.CharField("Assessment name", max_length=100)
    assessment_type = models.CharField("Type", max_length=20, choices=TYPE_CHOICES)
    max_score = models.DecimalField("Maximum score", max_digits=5, decimal_places=2)
    weight_percentage = models.DecimalField("Weight (%)", max_digits=5, decimal_places=2)
    due_date = models.DateTimeField("Due", null=True, blank=True)
    description = models.TextField("Description", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "assessment"
        verbose_name_plural = "assessments"
        ordering = ["offering_id", "due_date", "pk"]
        constraints = [
            models.CheckConstraint(condition=Q(max_score__gt=0), name="assessment_max_score_positive"),
            models.CheckConstraint(
                condition=Q(weight_percentage__gt=0, weight_percentage__lte=100),
                name="assessment_weight_in_range",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.name} ({self.weight_percentage}%)"


class AssessmentResult(models.Model):
    assessment = models.ForeignKey(
        Assessment, on_delete=models.CASCADE, related_name="results", verbose_name="Assessment"
    )
    enrollment = models.ForeignKey(
        Enrollment, on_delete=models.CASCADE, related_name="assessment_results", verbose_name="Enrollment"
    )
    score = models.DecimalField("Score", max_digits=5, decimal_places=2)
    submitted_date = models.DateTimeField("Submitted", null=True, blank=True)
    feedback = models.TextField("Feedback", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "assessment result"
        verbose_name_plural = "assessment results"
        constraints = [
            models.UniqueConstraint(fields=["assessment", "enrollment"], name="result_unique_per_enrollment"),
            models.CheckConstraint(condition=Q(score__gte=0), name="result_score_not_negative"),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.assessment_id}/{self.enrollment_id}: {self.score}"

    def clean(self):
        super().clean()
        if not (self.assessment_id and self.enrollment_id):
            return
        if self.score is not None and self.score > self.assessment.max_score:
            raise ValidationError({"score": f"Score cannot exceed {self.assessment.max_score}."})
        if self.assessment.offering_id != self.enrollment.offering_id:
            raise ValidationError("Assessment and enrollment belong to different offerings.")


class AcademicRecord(models.Model):
    STANDING_CHOICES = [
        ("Good Standing", "Good Standing"),
        ("Warning", "Warning"),
        ("Probation", "Probation"),
        ("Suspended", "Suspended"),
        ("Dismissed", "Dismissed"),
    ]

    student = models.ForeignKey(
        Student, on_delete=models.CASCADE, related_name="academic_records", verbose_name="Student"
    )
    semester = models.ForeignKey(
        Semester, on_delete=models.PROTECT, related_name="academic_records", verbose_name="Semester"
    )
    gpa = models.DecimalField("GPA", max_digits=3, decimal_places=2, null=True, blank=True)
    credits_attempted = models.DecimalField("Credits attempted", max_digits=4, decimal_places=1, default=0)
    credits_earned = models.DecimalField("Credits earned", max_digits=4, decimal_places=1, default=0)
    academic_standing = models.CharField(
        "Academic standing", max_length=20, choices=STANDING_CHOICES, default="Good Standing"
    )
    notes = models.TextField("Notes", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "academic record"
        verbose_name_plural = "academic records"
        ordering = ["semester__start_date"]
        constraints = [
            models.UniqueConstraint(fields=["student", "semester"], name="record_unique_student_semester"),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.student_id} {self.semester_id}: {self.gpa} ({self.academic_standing})"


class Prerequisite(models.Model):
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="prerequisites", verbose_name="Course")
    prerequisite_course = models.ForeignKey(
        Course, on_delete=models.CASCADE, related_name="required_for", verbose_name="Prerequisite"
    )
    min_grade = models.CharField("Minimum grade", max_length=2, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "prerequisite"
        verbose_name_plural = "prerequisites"
        ordering = ["course_id", "prerequisite_course_id"]
        constraints = [
            models.UniqueConstraint(fields=["course", "prerequisite_course"], name="prerequisite_unique_edge"),
            models.CheckConstraint(
                condition=~Q(course=F("prerequisite_course")),
                name="prerequisite_not_self",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.course_id} requires {self.prerequisite_course_id} (>= {self.min_grade or 'any'})"

    def clean(self):
        super().clean()
        if self.min_grade and self.min_grade not in conf.grade_points():
            raise ValidationError({"min_grade": f"Unknown grade {self.min_grade!r}."})


class ExtracurricularActivity(models.Model):
    TYPE_CHOICES = [
        ("Club", "Club"),
        ("Sport", "Sport"),
        ("Organization", "Organization"),
        ("Volunteer", "Volunteer"),
        ("Competition", "Competition"),
        ("Other", "Other"),
    ]

    name = models.CharField("Activity name", max_length=100)
    activity_type = models.CharField("Type", max_length=20, choices=TYPE_CHOICES)
    description = models.TextField("Description", blank=True)
    faculty_advisor = models.ForeignKey(
        Faculty,
        on_delete=models.SET_NULL,
        related_name="advised_activities",
        verbose_name="Faculty advisor",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "extracurricular activity"
        verbose_name_plural = "extracurricular activities"
        ordering = ["name"]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.name} ({self.activity_type})"


class StudentActivity(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="activities", verbose_name="Student")
    activity = models.ForeignKey(
        ExtracurricularActivity, on_delete=models.CASCADE, related_name="participants", verbose_name="Activity"
    )
    join_date = models.DateField("Joined")
    end_date = models.DateField("Left", null=True, blank=True)
    role = models.CharField("Role", max_length=100, blank=True)
    achievements = models.TextField("Achievements", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "activity participation"
        verbose_name_plural = "activity participations"
        ordering = ["-join_date"]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__isnull=True) | Q(end_date__gte=F("join_date")),
                name="participation_end_after_join",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.student_id} in {self.activity_id} since {self.join_date}"

    @property
    def is_open(self) -> bool:
        return self.end_date is None
