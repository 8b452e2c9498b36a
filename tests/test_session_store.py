"""
Test suite for SessionStore

Tests creator-only edits, cascading deletes, and the one response per
(question, author) upsert behavior.
"""

import math

import pytest

from database.id_generation import generate_participant_id, validate_participant_id
from exceptions import PermissionDeniedError, QuestionNotFoundError, ValidationError
from opinions import compute_question_stats


class TestQuestions:

    def test_create_cleans_text_and_tags(self, store):
        question = store.create_question("  Pineapple belongs on pizza ", "alice", ["Pizza", "pizza ", ""])
        assert question.text == "Pineapple belongs on pizza"
        assert question.tags == ["pizza"]
        assert question.created_by == "alice"
        assert question.id.startswith("q_")
        assert question.updated_at is None

    def test_blank_text_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.create_question("   ", "alice")
        assert exc_info.value.field == "text"

    def test_oversized_text_rejected(self, store):
        with pytest.raises(ValidationError):
            store.create_question("x" * 10_000, "alice")

    def test_questions_listed_in_creation_order(self, store):
        first = store.create_question("First", "alice")
        second = store.create_question("Second", "bob")
        assert [q.id for q in store.get_questions()] == [first.id, second.id]

    def test_creator_can_edit(self, store):
        question = store.create_question("Remote work helps", "alice", ["work"])
        created_at = question.created_at

        updated = store.update_question(question.id, "alice", text="Remote work helps a lot")

        assert updated.text == "Remote work helps a lot"
        assert updated.tags == ["work"]
        assert updated.created_at == created_at
        assert updated.updated_at is not None

    def test_non_creator_cannot_edit(self, store):
        question = store.create_question("Remote work helps", "alice")
        with pytest.raises(PermissionDeniedError):
            store.update_question(question.id, "bob", text="Hijacked")
        assert store.get_question(question.id).text == "Remote work helps"

    def test_edit_unknown_question(self, store):
        with pytest.raises(QuestionNotFoundError):
            store.update_question("q_missing", "alice", text="anything")


class TestDeletion:

    def test_delete_cascades_responses(self, store):
        question = store.create_question("Carbonara needs cream", "alice")
        other = store.create_question("Pineapple on pizza", "bob")
        store.submit_response(question.id, "alice", 30, 70)
        store.submit_response(question.id, "bob", 80, 40)
        store.submit_response(other.id, "alice", 20, 20)

        removed = store.delete_question(question.id, "alice")

        assert removed == 2
        assert store.get_question(question.id) is None
        assert store.get_responses(question.id) == []
        # No orphan left anywhere in the keyed map
        assert all(qid != question.id for qid, _ in store.state.responses)
        assert len(store.get_responses(other.id)) == 1

    def test_non_creator_cannot_delete(self, store):
        question = store.create_question("Carbonara needs cream", "alice")
        store.submit_response(question.id, "bob", 80, 40)

        with pytest.raises(PermissionDeniedError):
            store.delete_question(question.id, "bob")

        assert store.get_question(question.id) is not None
        assert len(store.get_responses(question.id)) == 1

    def test_delete_unknown_question(self, store):
        with pytest.raises(QuestionNotFoundError):
            store.delete_question("q_missing", "alice")


class TestResponses:

    def test_first_submission_creates(self, store):
        question = store.create_question("Q", "alice")
        response, created = store.submit_response(question.id, "bob", 30, 70)

        assert created is True
        assert response.agreement == 30
        assert response.importance == 70
        assert response.updated_at is None
        assert store.responses.count(question.id) == 1

    def test_resubmission_updates_in_place(self, store):
        question = store.create_question("Q", "alice")
        first, _ = store.submit_response(question.id, "bob", 30, 70)
        created_at = first.created_at

        second, created = store.submit_response(question.id, "bob", 60, 10)

        assert created is False
        assert second.id == first.id
        assert second.agreement == 60
        assert second.importance == 10
        assert second.created_at == created_at
        assert second.updated_at is not None
        assert store.responses.count(question.id) == 1

    def test_identical_resubmission_is_idempotent(self, store):
        question = store.create_question("Q", "alice")
        store.submit_response(question.id, "bob", 30, 70)
        store.submit_response(question.id, "bob", 30, 70)
        store.submit_response(question.id, "bob", 30, 70)

        responses = store.get_responses(question.id)
        assert len(responses) == 1
        assert (responses[0].agreement, responses[0].importance) == (30, 70)
        assert responses[0].updated_at >= responses[0].created_at

    def test_unknown_question_rejected(self, store):
        with pytest.raises(QuestionNotFoundError):
            store.submit_response("q_missing", "bob", 50, 50)
        assert store.responses.count() == 0

    @pytest.mark.parametrize("agreement,importance", [
        (-1, 50),
        (50, 100.5),
        (math.nan, 50),
        ("lots", 50),
        (True, 50),
    ])
    def test_out_of_range_rejected(self, store, agreement, importance):
        question = store.create_question("Q", "alice")
        with pytest.raises(ValidationError):
            store.submit_response(question.id, "bob", agreement, importance)
        assert store.responses.count() == 0

    def test_scale_bounds_accepted(self, store):
        question = store.create_question("Q", "alice")
        store.submit_response(question.id, "bob", 0, 100)
        store.submit_response(question.id, "carol", 100, 0)
        assert store.responses.count(question.id) == 2

    def test_responses_by_author(self, store):
        q1 = store.create_question("Q1", "alice")
        q2 = store.create_question("Q2", "alice")
        store.submit_response(q1.id, "bob", 10, 10)
        store.submit_response(q2.id, "bob", 20, 20)
        store.submit_response(q2.id, "carol", 30, 30)
        assert len(store.responses.get_responses_by_author("bob")) == 2


class TestSnapshot:

    def test_snapshot_groups_responses(self, store):
        q1 = store.create_question("Q1", "alice")
        q2 = store.create_question("Q2", "alice")
        store.submit_response(q1.id, "bob", 10, 10)

        questions, grouped = store.snapshot()

        assert [q.id for q in questions] == [q1.id, q2.id]
        assert len(grouped[q1.id]) == 1
        assert grouped[q2.id] == []

    def test_get_stats(self, store):
        q1 = store.create_question("Q1", "alice")
        store.submit_response(q1.id, "bob", 10, 10)
        store.submit_response(q1.id, "carol", 10, 10)
        assert store.get_stats() == {"questions": 1, "responses": 2, "participants": 2}

    def test_snapshot_unchanged_by_later_resubmission(self, store):
        question = store.create_question("Q", "alice")
        store.submit_response(question.id, "alice", 30, 70)
        store.submit_response(question.id, "bob", 80, 40)

        _, grouped = store.snapshot()
        before = compute_question_stats(grouped[question.id]).std_dev_global

        store.submit_response(question.id, "alice", 80, 40)

        assert compute_question_stats(grouped[question.id]).std_dev_global == before == 20
        assert compute_question_stats(store.get_responses(question.id)).std_dev_global == 0

    def test_snapshot_unchanged_by_later_edit(self, store):
        question = store.create_question("Original", "alice", ["a"])
        questions, _ = store.snapshot()

        store.update_question(question.id, "alice", text="Edited", tags=["b"])

        assert (questions[0].text, questions[0].tags) == ("Original", ["a"])
        assert store.get_question(question.id).text == "Edited"


class TestParticipantIds:

    def test_generated_ids_are_unique_and_valid(self):
        ids = {generate_participant_id() for _ in range(50)}
        assert len(ids) == 50
        assert all(pid.startswith("user_") and validate_participant_id(pid) for pid in ids)

    @pytest.mark.parametrize("participant_id,valid", [
        ("user_abc123", True),
        ("demo1", True),
        ("", False),
        ("has space", False),
        ("x" * 200, False),
    ])
    def test_validation(self, participant_id, valid):
        assert validate_participant_id(participant_id) is valid
