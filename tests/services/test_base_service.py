"""Tests for BaseService transaction handling and metrics."""

import pytest

from afterschool.core.exceptions import (
    LessonNotFoundException,
    RepositoryException,
    ServiceException,
)
from afterschool.core.ulid_helper import generate_ulid
from afterschool.models.lesson import Lesson
from afterschool.services.base import BaseService
from afterschool.services.lesson_service import LessonService


class TestTransaction:
    def test_commits_on_success(self, db, session_factory):
        service = BaseService(db)

        with service.transaction():
            db.add(Lesson(subject="Music", location="York", price=50, space=2, icon="fa-music"))

        other = session_factory()
        try:
            assert other.query(Lesson).filter_by(subject="Music").count() == 1
        finally:
            other.close()

    def test_repository_errors_become_service_errors(self, db):
        service = BaseService(db)

        with pytest.raises(ServiceException):
            with service.transaction():
                raise RepositoryException("boom")

    def test_domain_errors_propagate_and_roll_back(self, db):
        service = BaseService(db)

        with pytest.raises(LessonNotFoundException):
            with service.transaction():
                db.add(Lesson(subject="Music", location="York", price=50, space=2))
                db.flush()
                raise LessonNotFoundException("missing")

        assert db.query(Lesson).count() == 0


class TestMetrics:
    def test_measured_operations_are_counted(self, db, make_lesson):
        lesson = make_lesson()
        service = LessonService(db)
        service.reset_metrics()

        service.get_lesson(lesson.id)
        with pytest.raises(LessonNotFoundException):
            service.get_lesson(generate_ulid())

        metrics = service.get_metrics()["get_lesson"]
        assert metrics["count"] == 2
        assert metrics["success_count"] == 1
        assert metrics["failure_count"] == 1
        assert metrics["avg_time"] >= 0

        service.reset_metrics()
        assert service.get_metrics() == {}
