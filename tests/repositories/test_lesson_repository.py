from __future__ import annotations

from afterschool.core.ulid_helper import generate_ulid
from afterschool.models.lesson import Lesson
from afterschool.repositories.lesson_repository import LessonRepository


class TestReserve:
    def test_reserve_decrements_and_returns_fresh_row(self, db, make_lesson):
        lesson = make_lesson(space=5)
        repo = LessonRepository(db)

        reserved = repo.reserve(lesson.id, 2)
        db.commit()

        assert reserved is not None
        assert reserved.id == lesson.id
        assert reserved.space == 3

    def test_reserve_exact_remaining_empties_lesson(self, db, make_lesson):
        lesson = make_lesson(space=2)
        repo = LessonRepository(db)

        reserved = repo.reserve(lesson.id, 2)
        db.commit()

        assert reserved.space == 0

    def test_reserve_more_than_remaining_changes_nothing(self, db, make_lesson):
        lesson = make_lesson(space=1)
        repo = LessonRepository(db)

        assert repo.reserve(lesson.id, 2) is None
        db.commit()

        assert db.get(Lesson, lesson.id, populate_existing=True).space == 1

    def test_reserve_unknown_lesson_returns_none(self, db):
        assert LessonRepository(db).reserve(generate_ulid(), 1) is None


class TestSearch:
    def test_text_matches_subject_case_insensitively(self, db, sample_lessons):
        rows = LessonRepository(db).search("MATH")
        assert [r.id for r in rows] == [sample_lessons["maths"].id]

    def test_text_matches_location(self, db, sample_lessons):
        rows = LessonRepository(db).search("london")
        assert {r.id for r in rows} == {sample_lessons["maths"].id, sample_lessons["science"].id}

    def test_like_wildcards_are_literal(self, db, sample_lessons):
        assert LessonRepository(db).search("%") == []
        assert LessonRepository(db).search("_") == []

    def test_ampersand_is_plain_text(self, db, sample_lessons):
        rows = LessonRepository(db).search("& d")
        assert [r.id for r in rows] == [sample_lessons["art"].id]

    def test_price_alternative(self, db, sample_lessons):
        rows = LessonRepository(db).search("90", price=90.0, space=90)
        assert [r.id for r in rows] == [sample_lessons["english"].id]

    def test_price_and_space_alternatives_union_with_text(self, db, sample_lessons):
        rows = LessonRepository(db).search("100", price=100.0, space=100)
        assert {r.id for r in rows} == {
            sample_lessons["maths"].id,
            sample_lessons["art"].id,
            sample_lessons["cooking"].id,
        }


class TestLookups:
    def test_get_by_subject(self, db, sample_lessons):
        repo = LessonRepository(db)
        assert repo.get_by_subject("Science").id == sample_lessons["science"].id
        assert repo.get_by_subject("Astronomy") is None

    def test_get_sold_out(self, db, make_lesson):
        empty = make_lesson(subject="Music", space=0)
        make_lesson(subject="Drama", space=3)

        assert [r.id for r in LessonRepository(db).get_sold_out()] == [empty.id]

    def test_update_unknown_returns_none(self, db):
        assert LessonRepository(db).update(generate_ulid(), space=1) is None

    def test_count(self, db, sample_lessons):
        assert LessonRepository(db).count() == len(sample_lessons)


class TestUnicodeSearch:
    def test_accented_subject_matches_other_case(self, db, make_lesson):
        lesson = make_lesson(subject="Économie", location="Paris")

        rows = LessonRepository(db).search("éCONOMIE")

        assert [r.id for r in rows] == [lesson.id]

    def test_accented_location_matches_upper_case(self, db, make_lesson):
        lesson = make_lesson(subject="Geography", location="Zürich")

        rows = LessonRepository(db).search("ZÜRICH")

        assert [r.id for r in rows] == [lesson.id]

    def test_sharp_s_folds_to_ss(self, db, make_lesson):
        lesson = make_lesson(subject="Straße Art", location="Berlin")

        assert [r.id for r in LessonRepository(db).search("STRASSE")] == [lesson.id]
