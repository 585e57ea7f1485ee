"""
Forum Comments API: Comment Document Model
============================================

What:  Shape of a comment as stored in MongoDB, plus helpers to build new
       documents and parse identifiers.
Who:   Used by CommentService for every store call.

Stored layout (one document per comment):
    {
        "_id":     ObjectId("65a4f0c2e1b2c3d4e5f60718"),
        "time":    ISODate("2024-01-15T12:00:00.123Z"),
        "comment": "hello"
    }

    - _id:     generated in the application at create, never updated
    - time:    UTC creation time, never updated
    - comment: the only field a client can change
"""

from datetime import datetime, timezone
from typing import Optional, TypedDict

from bson import ObjectId
from bson.errors import InvalidId

# Field names inside the stored document
ID_FIELD = "_id"
TIME_FIELD = "time"
TEXT_FIELD = "comment"


class CommentDocument(TypedDict):
    _id: ObjectId
    time: datetime
    comment: str


def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    BSON datetimes hold millisecond precision, so truncating before insert
    makes the create response identical to what later reads return.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_comment_document(text: str) -> CommentDocument:
    """Builds a fresh document with a generated id and creation time."""
    return CommentDocument(_id=ObjectId(), time=utc_now(), comment=text)


def parse_object_id(value: str) -> Optional[ObjectId]:
    """
    Parses a 24-character hex string into an ObjectId.

    Returns None for anything else (wrong length, non-hex characters).
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
