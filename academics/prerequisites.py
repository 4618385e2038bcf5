"""Prerequisite graph maintenance and enrollment eligibility checks."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from . import conf
from .exceptions import ConstraintViolation, CyclicPrerequisiteError
from .models import Course, Enrollment, Prerequisite
from .store import atomic_with_retry, validate_and_save

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Eligible:
    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Ineligible:
    reason: str
    missing_course: Course

    def __bool__(self) -> bool:
        return False


def grade_rank(letter: str):
    """Return the grade points used to order ``letter`` against other grades."""
    points = conf.grade_points()
    try:
        return points[letter]
    except KeyError:
        raise ConstraintViolation(f"Unknown grade {letter!r}", errors={"grade": [f"Unknown grade {letter!r}"]}) from None


def meets_grade(actual: str, minimum: str) -> bool:
    if not minimum:
        return True
    if not actual:
        return False
    return grade_rank(actual) >= grade_rank(minimum)


def check_prerequisites(student, course) -> Eligible | Ineligible:
    """Check the direct prerequisites of ``course`` against the student's history.

    Every edge is checked on its own and all must hold. An edge is satisfied by
    any Completed enrollment in the prerequisite course whose grade ranks at or
    above the edge's minimum grade.
    """
    edges = Prerequisite.objects.filter(course=course).select_related("prerequisite_course")
    for edge in edges:
        required = edge.prerequisite_course
        grades = list(
            Enrollment.objects.filter(
                student=student,
                offering__course=required,
                status="Completed",
            ).values_list("grade", flat=True)
        )
        if not grades:
            return Ineligible(f"{required.code} has not been completed", required)
        if not any(meets_grade(grade, edge.min_grade) for grade in grades):
            best = max(grades, key=lambda g: grade_rank(g) if g else -1)
            return Ineligible(
                f"{required.code} requires at least {edge.min_grade}, best recorded grade is {best or 'none'}",
                required,
            )
    return Eligible()


def _find_path(start_id: int, target_id: int) -> list[int] | None:
    """Depth-first search along prerequisite edges from ``start_id`` to ``target_id``."""
    stack = [(start_id, [start_id])]
    seen = set()
    while stack:
        node, path = stack.pop()
        if node == target_id:
            return path
        if node in seen:
            continue
        seen.add(node)
        for nxt in Prerequisite.objects.filter(course_id=node).values_list("prerequisite_course_id", flat=True):
            if nxt not in seen:
                stack.append((nxt, path + [nxt]))
    return None


@atomic_with_retry
def add_prerequisite(course, prerequisite_course, min_grade: str = "") -> Prerequisite:
    """Insert the edge ``course`` requires ``prerequisite_course``.

    The edge is refused with ``CyclicPrerequisiteError`` if the prerequisite
    already (transitively) requires ``course``, so the graph stays acyclic and
    eligibility checks never need cycle protection.
    """
    # Lock both ends so two concurrent inserts cannot close a cycle between them.
    list(Course.objects.select_for_update().filter(pk__in=[course.pk, prerequisite_course.pk]))

    if course.pk == prerequisite_course.pk:
        raise CyclicPrerequisiteError(f"{course.code} cannot require itself", path=[course.code])

    path = _find_path(prerequisite_course.pk, course.pk)
    if path is not None:
        codes = dict(Course.objects.filter(pk__in=path).values_list("pk", "code"))
        cycle = [course.code] + [codes[pk] for pk in path]
        raise CyclicPrerequisiteError("Prerequisite cycle: " + " -> ".join(cycle), path=cycle)

    edge = validate_and_save(
        Prerequisite(course=course, prerequisite_course=prerequisite_course, min_grade=min_grade or "")
    )
    logger.info("Added prerequisite %s -> %s (min %s)", course.code, prerequisite_course.code, min_grade or "any")
    return edge


@atomic_with_retry
def remove_prerequisite(course, prerequisite_course) -> bool:
    deleted, _ = Prerequisite.objects.filter(course=course, prerequisite_course=prerequisite_course).delete()
    if deleted:
        logger.info("Removed prerequisite %s -> %s", course.code, prerequisite_course.code)
    return bool(deleted)
