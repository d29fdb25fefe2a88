"""Request body parsing for the record endpoints.

Bodies are read inside the handlers, after the path id has been checked, so a
malformed id is reported before anything about the body. JSON and form
encoded (urlencoded or multipart) bodies are accepted; a missing body or any
other content type counts as an empty record.
"""

import json
from typing import Any

from fastapi import Request
from pydantic import BaseModel

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class InvalidRecordBodyError(Exception):
    """Raised when a JSON body cannot be parsed or is not an object."""
    pass


async def _read_raw_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {name: value for name, value in form.items() if isinstance(value, str)}

    if not content_type.startswith("application/json"):
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError as e:
        raise InvalidRecordBodyError(f"Malformed JSON body: {e}")

    if not isinstance(body, dict):
        raise InvalidRecordBodyError("JSON body must be an object")
    return body


async def read_record_fields(request: Request, model: type[BaseModel]) -> dict[str, Any]:
    """
    Read the body and keep only the fields the model declares.

    Values are cast to the declared types (form values arrive as text). A
    value that cannot be cast raises pydantic's ValidationError, which the
    handlers treat like any other storage failure.

    Returns:
        dict: The fields present in the body, cast.

    Raises:
        InvalidRecordBodyError: If a JSON body is malformed or not an object.
        ValidationError: If a field value cannot be cast.
    """
    body = await _read_raw_body(request)
    return model.model_validate(body).model_dump(exclude_unset=True)
