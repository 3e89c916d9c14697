"""Response body parsing -- maps raw bytes to a :data:`~datamanager.models.ResponseEnvelope`.

The client never interprets the HTTP status code; the body alone decides
the outcome:

=============================  ===========================================
Body                           Outcome
=============================  ===========================================
empty                          ``Failure(BadResponseError)``
not JSON                       ``Failure(InvalidJSONError)``
JSON scalar (``5``, ``"x"``)   ``Failure(InvalidFormatError)``
JSON object                    ``Success(JSONObject)``
JSON array                     ``Success(JSONArray)``
=============================  ===========================================
"""

from __future__ import annotations

import json
from typing import Optional

from datamanager.exceptions import BadResponseError, InvalidFormatError, InvalidJSONError
from datamanager.models import JSONArray, JSONObject, ResponseEnvelope
from datamanager.outcome import Failure, Outcome, Success


def parse_envelope(content: Optional[bytes]) -> Outcome[ResponseEnvelope]:
    """Parse a response body into a tagged JSON envelope.

    Parsing is permissive: any top-level JSON value is accepted by the
    decoder, and only then checked for shape.

    Args:
        content: The raw response body.

    Returns:
        The envelope on success, or one of the failures listed in the
        module docstring.
    """
    if not content:
        return Failure(BadResponseError())

    try:
        deserialized = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return Failure(InvalidJSONError(f"Response body is not valid JSON: {exc}"))

    if isinstance(deserialized, dict):
        return Success(JSONObject(value=deserialized))
    if isinstance(deserialized, list):
        return Success(JSONArray(value=deserialized))
    return Failure(
        InvalidFormatError(
            f"Expected a JSON object or array, got {type(deserialized).__name__}"
        )
    )
