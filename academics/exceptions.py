"""Typed failures raised by the academic records engine."""
from __future__ import annotations


class AcademicsError(Exception):
    """Base class for every failure the engine reports to its callers."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ConstraintViolation(AcademicsError):
    """Uniqueness, enum, date-order or referential breach at the entity store."""

    def __init__(self, message: str = "", errors: dict | None = None):
        super().__init__(message)
        self.errors = errors or {}


class RecordNotFound(AcademicsError):
    pass


class CyclicPrerequisiteError(AcademicsError):
    def __init__(self, message: str = "", path: list | None = None):
        super().__init__(message)
        self.path = path or []


class StoreUnavailable(AcademicsError):
    """The store kept failing transiently after the bounded number of retries."""


class EnrollmentError(AcademicsError):
    pass


class AlreadyEnrolled(EnrollmentError):
    pass


class StudentInactive(EnrollmentError):
    pass


class PrerequisiteNotMet(EnrollmentError):
    def __init__(self, message: str = "", missing_course=None):
        super().__init__(message)
        self.missing_course = missing_course


class CapacityExceeded(EnrollmentError):
    pass


class RegistrationWindowClosed(EnrollmentError):
    pass


class OfferingClosed(EnrollmentError):
    pass


class GradingError(AcademicsError):
    pass


class ScoreOutOfRange(GradingError):
    pass


class IncompleteWeights(GradingError):
    def __init__(self, message: str = "", total=None):
        super().__init__(message)
        self.total = total


class MissingAssessmentResult(GradingError):
    def __init__(self, message: str = "", assessments: list | None = None):
        super().__init__(message)
        self.assessments = assessments or []


class NoCompletedCourses(GradingError):
    pass


class AttendanceError(AcademicsError):
    pass


class DuplicateAttendanceRecord(AttendanceError):
    pass


class DateOutsideSemester(AttendanceError):
    pass
