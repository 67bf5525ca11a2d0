"""
Request validation shared by every endpoint.

Each entity declares a rule set; handlers call `require_fields` with the
payload and the rule set instead of repeating presence checks per route.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from forum_service.core.exceptions import ClientInputError
from forum_service.models.dtos import MAX_ID

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class FieldRules:
    """Required fields of one entity and the message returned when any is missing."""
    entity: str
    required: Tuple[str, ...]
    message: str


POST_RULES = FieldRules(
    entity="post",
    required=("title", "body", "subreddit_id"),
    message="title, body and subredditId are required",
)
SUBREDDIT_RULES = FieldRules(
    entity="subreddit",
    required=("name",),
    message="name is required",
)
SUBREDDIT_ASSET_RULES = FieldRules(
    entity="subreddit",
    required=("icon", "banner"),
    message="icon and banner files are required",
)


def is_blank(value: Any) -> bool:
    """None, empty and whitespace-only strings, and empty byte strings count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bytes, bytearray)):
        return len(value) == 0
    return False


def require_fields(payload: Mapping[str, Any], rules: FieldRules) -> None:
    """
    Check that every field named by `rules` is present and non-blank.

    Raises:
        ClientInputError: With `rules.message` if any required field is missing.
    """
    missing = [field for field in rules.required if is_blank(payload.get(field))]
    if missing:
        logger.debug(f"Rejected {rules.entity} payload, missing: {', '.join(missing)}")
        raise ClientInputError(rules.message)


def parse_id(raw: str, entity: str) -> int:
    """
    Parse a numeric path id.

    Raises:
        ClientInputError: If `raw` is not a positive integer that fits an INTEGER column.
    """
    if not (raw.isascii() and raw.isdigit()):
        raise ClientInputError(f"Invalid {entity} id")
    value = int(raw)
    if value < 1 or value > MAX_ID:
        raise ClientInputError(f"Invalid {entity} id")
    return value


def describe_validation_error(errors) -> str:
    """Turn pydantic/FastAPI error entries into a single readable message."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def parse_model(data: Any, model: Type[ModelT]) -> ModelT:
    """
    Validate an already-decoded body against a DTO.

    Raises:
        ClientInputError: If the body does not match the DTO's types.
    """
    if not isinstance(data, dict):
        raise ClientInputError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ClientInputError(describe_validation_error(e.errors())) from e


async def read_json_body(request: Request, model: Type[ModelT]) -> ModelT:
    """Decode the request's JSON body and validate it against `model`."""
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ClientInputError("Request body must be valid JSON") from e
    return parse_model(data, model)


async def read_upload(upload: Any, max_size_mb: int) -> bytes:
    """
    Read an uploaded file completely.

    Returns:
        The file content; empty bytes when `upload` is not a file.

    Raises:
        ClientInputError: If the file exceeds `max_size_mb`.
    """
    if not isinstance(upload, UploadFile):
        return b""
    limit = max_size_mb * 1024 * 1024
    # Size reported by the multipart parser; lets oversized files be rejected unread.
    if upload.size is not None and upload.size > limit:
        raise ClientInputError(f"File size exceeds {max_size_mb}MB limit")
    content = await upload.read()
    if len(content) > limit:
        raise ClientInputError(f"File size exceeds {max_size_mb}MB limit")
    return content
