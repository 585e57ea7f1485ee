"""
Forum Comments API: Comment Service
=====================================

What:  The five comment operations, each issuing exactly one store call.
How:   Receives the comments collection for every call (injected by FastAPI),
       converts between BSON documents and response models, and maps
       driver errors to DatabaseError.
Who:   Called by the comment route handlers.

Operation → store call:
    list_comments   → collection.find({})
    get_comment     → collection.find_one({"_id": oid})
    create_comment  → collection.insert_one(document)
    update_comment  → collection.find_one_and_update(..., ReturnDocument.AFTER)
    delete_comment  → collection.delete_one({"_id": oid})

Input handling:
    With strict_validation off (the default), undecodable bodies become an
    empty payload and unparsable ids behave like a lookup miss, matching what
    existing clients expect. With it on, both raise ValidationError (400) and
    a GET miss raises NotFoundError (404).
"""

import logging
from typing import List, Optional

import pydantic
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from forum_api.config import settings
from forum_api.exceptions import DatabaseError, NotFoundError, ValidationError
from forum_api.models.comment import (
    ID_FIELD,
    TEXT_FIELD,
    new_comment_document,
    parse_object_id,
)
from forum_api.schemas.comment import DELETE_CONFIRMATION, Comment, CommentPayload

logger = logging.getLogger(__name__)


class CommentService:
    """
    CRUD operations for comments.

    Stateless apart from the `strict_validation` flag; the collection is
    passed in on each call so the same instance serves every request.
    """

    def __init__(self, strict_validation: bool = False):
        self.strict_validation = strict_validation

    # ── Input decoding ────────────────────────────────────────────────────

    def parse_payload(self, body: bytes) -> CommentPayload:
        """
        Decodes a request body into a CommentPayload.

        Accepts any JSON object; unknown keys are ignored. Empty bodies,
        invalid JSON, non-object JSON and a non-string `comment` are
        malformed.

        Raises:
            ValidationError: Malformed body while strict_validation is on.
        """
        try:
            return CommentPayload.model_validate_json(body)
        except pydantic.ValidationError as e:
            if self.strict_validation:
                raise ValidationError(
                    message="Request body must be a JSON object with a string 'comment' field",
                    field="comment",
                )
            logger.warning("Ignoring malformed comment body (%s)", e.errors()[0]["type"])
            return CommentPayload()

    def _object_id(self, comment_id: str) -> Optional[ObjectId]:
        oid = parse_object_id(comment_id)
        if oid is None and self.strict_validation:
            raise ValidationError(
                message=f"'{comment_id}' is not a valid comment ID",
                field="id",
            )
        return oid

    # ── Operations ────────────────────────────────────────────────────────

    async def list_comments(self, collection: AsyncCollection) -> List[Comment]:
        """
        Returns every stored comment in store-native order.

        Raises:
            DatabaseError: The query or cursor iteration failed.
        """
        logger.info("Listing all comments")
        try:
            return [Comment.from_document(doc) async for doc in collection.find({})]
        except PyMongoError as e:
            logger.error("Database error listing comments: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve comments. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_comment(self, collection: AsyncCollection, comment_id: str) -> Comment:
        """
        Returns a single comment.

        An unparsable id or a miss returns `Comment.empty()` unless
        strict_validation is on.

        Raises:
            ValidationError: Unparsable id (strict mode).
            NotFoundError:   No such comment (strict mode).
            DatabaseError:   The query failed.
        """
        logger.info("Fetching comment %s", comment_id)
        oid = self._object_id(comment_id)
        if oid is None:
            return Comment.empty()

        try:
            document = await collection.find_one({ID_FIELD: oid})
        except PyMongoError as e:
            logger.error("Database error fetching comment %s: %s", comment_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the comment. Please try again.",
                context={"comment_id": comment_id, "error_type": type(e).__name__},
            )

        if document is None:
            if self.strict_validation:
                raise NotFoundError(resource="comment", resource_id=comment_id)
            return Comment.empty()
        return Comment.from_document(document)

    async def create_comment(
        self, collection: AsyncCollection, payload: CommentPayload
    ) -> Comment:
        """
        Inserts a new comment with a generated id and creation time.

        Raises:
            DatabaseError: The insert failed.
        """
        document = new_comment_document(payload.comment)
        logger.info("Creating comment %s", document[ID_FIELD])
        try:
            await collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Database error creating comment: %s", str(e))
            raise DatabaseError(
                message="Could not save the comment. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return Comment.from_document(document)

    async def update_comment(
        self,
        collection: AsyncCollection,
        comment_id: str,
        payload: CommentPayload,
    ) -> Comment:
        """
        Replaces the text of an existing comment and returns the updated record.

        Only the `comment` field is written; `_id` and `time` are untouched.

        Raises:
            ValidationError: Unparsable id (strict mode).
            NotFoundError:   No such comment (unparsable ids count as missing
                             outside strict mode).
            DatabaseError:   The update failed.
        """
        logger.info("Updating comment %s", comment_id)
        oid = self._object_id(comment_id)
        if oid is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)

        try:
            document = await collection.find_one_and_update(
                {ID_FIELD: oid},
                {"$set": {TEXT_FIELD: payload.comment}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Database error updating comment %s: %s", comment_id, str(e))
            raise DatabaseError(
                message="Could not update the comment. Please try again.",
                context={"comment_id": comment_id, "error_type": type(e).__name__},
            )

        if document is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return Comment.from_document(document)

    async def delete_comment(self, collection: AsyncCollection, comment_id: str) -> str:
        """
        Deletes a comment if it exists.

        Returns the same confirmation whether or not a document was removed.

        Raises:
            ValidationError: Unparsable id (strict mode).
            DatabaseError:   The delete failed.
        """
        logger.info("Deleting comment %s", comment_id)
        oid = self._object_id(comment_id)
        if oid is None:
            return DELETE_CONFIRMATION

        try:
            result = await collection.delete_one({ID_FIELD: oid})
        except PyMongoError as e:
            logger.error("Database error deleting comment %s: %s", comment_id, str(e))
            raise DatabaseError(
                message="Could not delete the comment. Please try again.",
                context={"comment_id": comment_id, "error_type": type(e).__name__},
            )

        if result.deleted_count == 0:
            logger.debug("Delete of %s matched no document", comment_id)
        return DELETE_CONFIRMATION


comment_service = CommentService(strict_validation=settings.strict_validation)
