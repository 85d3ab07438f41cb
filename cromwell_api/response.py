# response.py - validation of engine responses into ApiResponse envelopes
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import requests

from .errors import CromwellAPIError, NonJsonResponseError

JSON_MEDIA_TYPE = "application/json"


@dataclass
class ApiResponse:
    """Parsed JSON body plus the raw response it came from."""

    content: Any
    response: requests.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self):
        return self.response.headers


def media_type(resp: requests.Response) -> Optional[str]:
    """Content type without parameters, e.g. ``application/json; charset=UTF-8`` -> ``application/json``."""
    content_type = resp.headers.get("Content-Type")
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


def process_response(resp: requests.Response, ok_statuses: Iterable[int] = (200,)) -> ApiResponse:
    """
    Check a Cromwell response and wrap it.

    Raises NonJsonResponseError when the body is not JSON (checked before
    parsing) and CromwellAPIError when the status code is not one of
    ``ok_statuses``. Only exact matches are accepted: with the default,
    201 and 202 are failures too.
    """
    if media_type(resp) != JSON_MEDIA_TYPE:
        raise NonJsonResponseError(resp.headers.get("Content-Type"), response=resp)

    accepted = resp.status_code in tuple(ok_statuses)
    try:
        parsed = resp.json()
    except ValueError:
        # gateways answer 502/504 with an empty or HTML body under a json content type
        if accepted:
            raise
        raise CromwellAPIError(resp.status_code, response=resp)

    if not accepted:
        message = documentation_url = None
        if isinstance(parsed, dict):
            message = parsed.get("message")
            documentation_url = parsed.get("documentation_url")
        raise CromwellAPIError(resp.status_code, message, documentation_url, response=resp)

    return ApiResponse(content=parsed, response=resp)
