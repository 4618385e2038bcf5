from __future__ import annotations

import datetime

import pytest

from academics import store
from academics.activities import end_participation, join_activity
from academics.exceptions import ConstraintViolation
from academics.models import ExtracurricularActivity, StudentActivity

JOINED = datetime.date(2025, 9, 10)


@pytest.fixture
def chess(faculty):
    return store.create(ExtracurricularActivity, name="Chess Club", activity_type="Club", faculty_advisor=faculty)


def test_join_and_end(student, chess):
    participation = join_activity(student, chess, JOINED, role="Captain")
    assert participation.is_open

    ended = end_participation(participation, datetime.date(2026, 5, 1))

    assert not ended.is_open
    assert ended.end_date == datetime.date(2026, 5, 1)


def test_second_open_participation_is_rejected(student, chess):
    join_activity(student, chess, JOINED)

    with pytest.raises(ConstraintViolation):
        join_activity(student, chess, JOINED + datetime.timedelta(days=30))


def test_rejoining_after_leaving_is_allowed(student, chess):
    first = join_activity(student, chess, JOINED)
    end_participation(first, JOINED + datetime.timedelta(days=60))

    join_activity(student, chess, JOINED + datetime.timedelta(days=90))

    assert StudentActivity.objects.filter(student=student, activity=chess).count() == 2


def test_end_before_join_is_rejected(student, chess):
    participation = join_activity(student, chess, JOINED)

    with pytest.raises(ConstraintViolation):
        end_participation(participation, JOINED - datetime.timedelta(days=1))
    participation.refresh_from_db()
    assert participation.end_date is None


def test_participation_cannot_end_twice(student, chess):
    participation = join_activity(student, chess, JOINED)
    end_participation(participation, JOINED + datetime.timedelta(days=1))

    with pytest.raises(ConstraintViolation):
        end_participation(participation, JOINED + datetime.timedelta(days=2))


def test_participations_are_created_through_join(student, chess):
    with pytest.raises(ConstraintViolation):
        store.create(StudentActivity, student=student, activity=chess, join_date=JOINED)


def test_deleting_advisor_keeps_activity(faculty, chess):
    store.delete(faculty)

    chess.refresh_from_db()
    assert chess.faculty_advisor is None
