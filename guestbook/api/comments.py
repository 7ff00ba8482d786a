"""
Comments API Endpoints.

GET  /api/comments/{comment_id}  one comment
GET  /api/comments               ten newest comments
POST /api/comments               submit a comment (form or JSON body)
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from guestbook.core.dependencies import CommentServiceDep
from guestbook.core.exceptions import RequestDecodeError
from guestbook.schemas.base import ErrorResponse
from guestbook.schemas.comment import CommentCreate, CommentResponse

router = APIRouter()

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPES = frozenset({
    "application/x-www-form-urlencoded",
    "multipart/form-data",
})


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def _read_json(request: Request) -> dict[str, Any]:
    try:
        payload = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestDecodeError(f"invalid JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise RequestDecodeError("JSON body must be an object")
    return payload


async def _read_form(request: Request) -> dict[str, Any]:
    form = await request.form()
    payload = {}
    for key, value in form.items():
        if isinstance(value, UploadFile):
            raise RequestDecodeError(f"field {key!r} must not be a file")
        payload[key] = value
    return payload


async def decode_comment(request: Request) -> CommentCreate:
    """
    Decode a comment submission from a JSON or form body.

    An empty body decodes to all defaults so that validation, not
    decoding, reports the missing text.

    Raises:
        RequestDecodeError: Malformed body, wrong field types or an
            unsupported content type
    """
    media_type = _media_type(request)
    body = await request.body()

    if not body:
        payload: dict[str, Any] = {}
    elif media_type == JSON_MEDIA_TYPE:
        payload = await _read_json(request)
    elif media_type in FORM_MEDIA_TYPES:
        payload = await _read_form(request)
    else:
        raise RequestDecodeError(f"unsupported media type {media_type or 'none'!r}")

    try:
        return CommentCreate.model_validate(payload)
    except PydanticValidationError as e:
        fields = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
        )
        raise RequestDecodeError(f"invalid field type: {fields}") from e


CommentPayload = Annotated[CommentCreate, Depends(decode_comment)]


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Get a comment",
    responses={404: {"description": "Not Found"}},
)
async def get_comment(
    comment_id: int,
    service: CommentServiceDep,
) -> CommentResponse:
    """Get a comment by ID."""
    comment = await service.get_comment(comment_id)
    return CommentResponse.model_validate(comment)


@router.get(
    "",
    response_model=list[CommentResponse],
    summary="List recent comments",
    description="Get the ten newest comments, newest first.",
)
async def list_comments(service: CommentServiceDep) -> list[CommentResponse]:
    """List the most recent comments."""
    comments = await service.list_comments()
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.post(
    "",
    status_code=201,
    response_class=Response,
    summary="Submit a comment",
    responses={400: {"model": ErrorResponse, "description": "Validation failed"}},
)
async def insert_comment(
    data: CommentPayload,
    service: CommentServiceDep,
) -> Response:
    """Validate and store a comment. Responds with an empty body."""
    await service.create_comment(data)
    return Response(status_code=201)
