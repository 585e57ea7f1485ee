"""
Forum Comments API: Comment Model & Schema Tests
==================================================

What:  Tests for document helpers (ids, timestamps) and JSON serialization.
"""

from datetime import datetime, timezone

from bson import ObjectId

from forum_api.models.comment import new_comment_document, parse_object_id, utc_now
from forum_api.schemas.comment import Comment


class TestParseObjectId:

    def test_valid_hex(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    def test_uppercase_hex_accepted(self):
        oid = ObjectId()
        assert parse_object_id(str(oid).upper()) == oid

    def test_invalid_values(self):
        for value in ["", "abc", "x" * 24, str(ObjectId()) + "0"]:
            assert parse_object_id(value) is None


class TestNewDocument:

    def test_fields(self):
        doc = new_comment_document("hello")
        assert set(doc) == {"_id", "time", "comment"}
        assert isinstance(doc["_id"], ObjectId)
        assert doc["comment"] == "hello"

    def test_utc_now_is_millisecond_precision(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc
        assert now.microsecond % 1000 == 0


class TestCommentSerialization:

    def test_aliases_used_in_json(self):
        oid = ObjectId()
        comment = Comment.from_document(
            {"_id": oid, "time": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc), "comment": "hi"}
        )
        data = comment.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert data["_id"] == str(oid)
        assert data["_time"].startswith("2024-01-15T12:00:00")
        assert data["comment"] == "hi"

    def test_empty_comment_serializes_to_empty_object(self):
        assert Comment.empty().model_dump(by_alias=True, exclude_none=True) == {}

    def test_missing_text_reads_as_empty_string(self):
        comment = Comment.from_document({"_id": ObjectId(), "time": utc_now()})
        assert comment.comment == ""

    def test_validates_from_aliases(self):
        comment = Comment.model_validate({"_id": "abc", "comment": "x"})
        assert comment.id == "abc"
