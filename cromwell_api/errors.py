# errors.py - exceptions raised by the Cromwell client
from typing import Optional


class CromwellError(Exception):
    """Base class for errors raised by this package."""


class NonJsonResponseError(CromwellError):
    def __init__(self, content_type: Optional[str], response=None):
        self.content_type = content_type
        self.response = response
        super().__init__(f"API did not return json (content-type: {content_type})")


class CromwellAPIError(CromwellError):
    """The engine answered with a status the client does not accept."""

    def __init__(self, status_code: int, message: Optional[str] = None,
                 documentation_url: Optional[str] = None, response=None):
        self.status_code = status_code
        self.message = message
        self.documentation_url = documentation_url
        self.response = response
        super().__init__(
            f"Cromwell API request failed [{status_code}]\n{message}\n<{documentation_url}>"
        )


class PayloadError(CromwellError, ValueError):
    """Invalid caller input, detected before any request is sent."""
