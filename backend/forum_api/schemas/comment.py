"""
Forum Comments API: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI serializes return values through these models (by alias) and
       generates the OpenAPI document from them.

JSON names differ from Python names:
    _id   → Comment.id    (24-char hex ObjectId)
    _time → Comment.time  (RFC 3339 UTC timestamp)
Pydantic treats leading-underscore attributes as private, hence the aliases.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

# Body of DELETE /comments/{id}, returned whether or not a record was removed
DELETE_CONFIRMATION = "Comment Deleted"


class Comment(BaseModel):
    """
    What:  A stored comment as returned to clients.
    Who:   Returned by every comment route except DELETE.

    All fields are optional: the empty comment returned on a lookup miss
    serializes as `{}` because routes exclude None fields.
    """
    id: Optional[str] = Field(
        default=None, alias="_id", description="Comment identifier (24-char hex)"
    )
    time: Optional[datetime] = Field(
        default=None, alias="_time", description="Creation time (UTC, RFC 3339)"
    )
    comment: Optional[str] = Field(default=None, description="Comment text")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Comment":
        """Converts a stored BSON document into the response model."""
        raw_id = document.get("_id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            time=document.get("time"),
            comment=document.get("comment", ""),
        )

    @classmethod
    def empty(cls) -> "Comment":
        """The value returned in place of a missing comment (legacy mode)."""
        return cls()


class CommentPayload(BaseModel):
    """
    What:  Body of POST /comments and PATCH /comments/{id}.

    Only `comment` is read; `_id`, `_time` and any other keys are ignored
    because the server owns those fields.
    """
    comment: str = Field(default="", description="New comment text")

    model_config = {"extra": "ignore"}


class ErrorResponse(BaseModel):
    """
    What:  Error body for explicit error statuses (400, 404, 500).

    Example:
        {
            "error": "not_found",
            "message": "comment with ID '65a4f0c2e1b2c3d4e5f60718' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Document store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
