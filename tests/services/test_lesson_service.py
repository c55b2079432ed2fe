"""Tests for LessonService inventory operations."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from afterschool.core.exceptions import (
    InsufficientCapacityException,
    LessonNotFoundException,
    ValidationException,
)
from afterschool.core.ulid_helper import generate_ulid
from afterschool.models.lesson import Lesson
from afterschool.services.lesson_service import LessonService


class TestReserve:
    def test_reserve_returns_remaining(self, db, make_lesson):
        lesson = make_lesson(space=3)

        reserved = LessonService(db).reserve(lesson.id, 2)

        assert reserved.space == 1

    def test_insufficient_capacity_leaves_count(self, db, make_lesson):
        lesson = make_lesson(subject="Science", space=1)
        service = LessonService(db)

        with pytest.raises(InsufficientCapacityException) as exc_info:
            service.reserve(lesson.id, 2)

        assert exc_info.value.message == "Not enough spaces for Science"
        assert service.get_lesson(lesson.id).space == 1

    def test_unknown_lesson(self, db):
        with pytest.raises(LessonNotFoundException):
            LessonService(db).reserve(generate_ulid(), 1)

    def test_quantity_beyond_integer_column_is_insufficient(self, db, make_lesson):
        lesson = make_lesson(subject="Science", space=3)
        service = LessonService(db)

        with pytest.raises(InsufficientCapacityException):
            service.reserve(lesson.id, 2**70)

        assert service.get_lesson(lesson.id).space == 3

    def test_oversized_quantity_for_unknown_lesson(self, db):
        with pytest.raises(LessonNotFoundException):
            LessonService(db).reserve(generate_ulid(), 2**70)

    def test_largest_storable_space_is_accepted(self, db, make_lesson):
        lesson = make_lesson()

        updated = LessonService(db).update_lesson(lesson.id, {"space": 2**63 - 1})

        assert updated.space == 2**63 - 1

    def test_concurrent_reservations_never_oversell(self, session_factory, make_lesson):
        lesson = make_lesson(space=5)

        def attempt(_):
            session = session_factory()
            try:
                LessonService(session).reserve(lesson.id, 1)
                return True
            except InsufficientCapacityException:
                return False
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(attempt, range(10)))

        check = session_factory()
        try:
            remaining = check.get(Lesson, lesson.id).space
        finally:
            check.close()

        assert outcomes.count(True) == 5
        assert remaining == 0

    def test_concurrent_multi_space_reservations(self, session_factory, make_lesson):
        lesson = make_lesson(space=5)

        def attempt(_):
            session = session_factory()
            try:
                LessonService(session).reserve(lesson.id, 2)
                return True
            except InsufficientCapacityException:
                return False
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(attempt, range(4)))

        check = session_factory()
        try:
            remaining = check.get(Lesson, lesson.id).space
        finally:
            check.close()

        assert outcomes.count(True) == 2
        assert remaining == 1


class TestUpdateLesson:
    def test_partial_update_keeps_other_fields(self, db, make_lesson):
        lesson = make_lesson(subject="Mathematics", location="London", price=100, space=5)
        service = LessonService(db)

        updated = service.update_lesson(lesson.id, {"space": 10})

        assert updated.space == 10
        assert updated.subject == "Mathematics"
        assert updated.location == "London"
        assert updated.price == 100

        fetched = service.get_lesson(lesson.id)
        assert fetched.space == 10

    def test_multiple_fields(self, db, make_lesson):
        lesson = make_lesson()

        updated = LessonService(db).update_lesson(
            lesson.id, {"price": 120.5, "location": "Oxford", "icon": "fa-square-root"}
        )

        assert updated.price == 120.5
        assert updated.location == "Oxford"
        assert updated.icon == "fa-square-root"

    def test_unknown_lesson(self, db):
        with pytest.raises(LessonNotFoundException):
            LessonService(db).update_lesson(generate_ulid(), {"space": 1})

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"id": "01ARZ3NDEKTSV4RRFFQ69G5FAV"},
            {"space": -1},
            {"space": 1.5},
            {"space": True},
            {"space": 2**63},
            {"price": -0.01},
            {"price": "100"},
            {"price": float("inf")},
            {"price": float("nan")},
            {"subject": "   "},
            {"location": 3},
            {"icon": 7},
        ],
    )
    def test_invalid_fields(self, db, make_lesson, fields):
        lesson = make_lesson(space=5)
        service = LessonService(db)

        with pytest.raises(ValidationException) as exc_info:
            service.update_lesson(lesson.id, fields)

        assert exc_info.value.code == "INVALID_REQUEST"
        assert service.get_lesson(lesson.id).space == 5


class TestSeedAndMaintenance:
    def test_seed_only_when_empty(self, db):
        service = LessonService(db)

        assert service.seed_sample_lessons() == 12
        assert service.seed_sample_lessons() == 0
        assert len(service.list_lessons()) == 12

    def test_restock_sold_out(self, db, make_lesson):
        empty = make_lesson(subject="Music", space=0)
        full = make_lesson(subject="Drama", space=3)
        service = LessonService(db)

        restocked = service.restock_sold_out(5)

        assert [lesson.id for lesson in restocked] == [empty.id]
        assert service.get_lesson(empty.id).space == 5
        assert service.get_lesson(full.id).space == 3

    def test_set_space_by_subject(self, db, make_lesson):
        lesson = make_lesson(subject="English Literature", space=0)

        updated = LessonService(db).set_space_by_subject("English Literature", 8)

        assert updated.id == lesson.id
        assert updated.space == 8

    def test_set_space_unknown_subject(self, db):
        with pytest.raises(LessonNotFoundException):
            LessonService(db).set_space_by_subject("Astronomy", 3)
