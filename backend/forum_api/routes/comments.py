"""
Forum Comments API: Comment Route Handlers
============================================

What:  The five CRUD endpoints under /comments.
How:   Extracts the path id / raw body, delegates to CommentService with the
       injected collection, and returns the response model.

Bodies are read as raw bytes rather than declared as a Pydantic body
parameter so that malformed JSON reaches CommentService.parse_payload,
which decides between tolerating it and rejecting it with 400.

Every route answers 200 on success; None fields are left out of the JSON so
a missing comment renders as {}.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from pymongo.asynchronous.collection import AsyncCollection

from forum_api.config import settings
from forum_api.database import get_comments_collection
from forum_api.schemas.comment import Comment, ErrorResponse
from forum_api.services.comment_service import comment_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix=f"/{settings.mongo_collection}", tags=["Comments"])

_SERVER_ERROR = {500: {"description": "Document store error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[Comment],
    response_model_exclude_none=True,
    responses=_SERVER_ERROR,
    summary="List all comments",
    description="Returns every stored comment in the store's natural order. No pagination.",
)
async def list_comments(
    collection: AsyncCollection = Depends(get_comments_collection),
) -> List[Comment]:
    return await comment_service.list_comments(collection)


@router.post(
    "",
    response_model=Comment,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed body (strict mode)", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create a comment",
    description=(
        "Creates a comment from `{\"comment\": string}`. The server assigns `_id` "
        "and `_time`; client-supplied values for them are ignored."
    ),
)
async def create_comment(
    request: Request,
    collection: AsyncCollection = Depends(get_comments_collection),
) -> Comment:
    payload = comment_service.parse_payload(await request.body())
    return await comment_service.create_comment(collection, payload)


@router.get(
    "/{comment_id}",
    response_model=Comment,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid ID (strict mode)", "model": ErrorResponse},
        404: {"description": "Comment not found (strict mode)", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Get a single comment",
    description=(
        "Returns the comment with the given ID. Unknown or invalid IDs return an "
        "empty object unless strict validation is enabled."
    ),
)
async def get_comment(
    comment_id: str,
    collection: AsyncCollection = Depends(get_comments_collection),
) -> Comment:
    return await comment_service.get_comment(collection, comment_id)


@router.patch(
    "/{comment_id}",
    response_model=Comment,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed body or ID (strict mode)", "model": ErrorResponse},
        404: {"description": "Comment not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Update a comment's text",
    description="Replaces the `comment` field. `_id` and `_time` never change.",
)
async def update_comment(
    comment_id: str,
    request: Request,
    collection: AsyncCollection = Depends(get_comments_collection),
) -> Comment:
    payload = comment_service.parse_payload(await request.body())
    return await comment_service.update_comment(collection, comment_id, payload)


@router.delete(
    "/{comment_id}",
    response_model=str,
    responses={
        400: {"description": "Invalid ID (strict mode)", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Delete a comment",
    description="Deletes the comment if it exists and always returns the same confirmation.",
)
async def delete_comment(
    comment_id: str,
    collection: AsyncCollection = Depends(get_comments_collection),
) -> str:
    return await comment_service.delete_comment(collection, comment_id)
