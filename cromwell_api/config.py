# config.py - base URL resolution and client/request option values
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import requests

DEFAULT_BASE_URL = "http://localhost:8000"
BASE_URL_OPTION = "cromwell_base"
BASE_URL_ENV = "CROMWELL_BASE"
DEFAULT_TIMEOUT = 30.0
DEFAULT_BATCH_TIMEOUT = 120.0

# process-wide option store, written by the hosting process
_options: Dict[str, Any] = {}


def set_option(name: str, value: Any) -> None:
    """Set a process-wide option. A value of ``None`` clears it."""
    if value is None:
        _options.pop(name, None)
    else:
        _options[name] = value


def get_option(name: str, default: Any = None) -> Any:
    return _options.get(name, default)


def cromwell_base() -> str:
    """
    Return the base URL of the Cromwell server.

    The URL has the form ``http://EXAMPLE.COM:PORT``. There are two override
    layers: the ``cromwell_base`` option, then the ``CROMWELL_BASE``
    environment variable. With neither set the result is exactly
    ``http://localhost:8000``; an exported ``CROMWELL_BASE`` counts as an
    override, so clearing the option falls back to it rather than to the
    default.
    The value is not validated; a malformed URL shows up as a connection
    error when a request is made.
    """
    base_url = get_option(BASE_URL_OPTION)
    if base_url is None:
        base_url = os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
    return base_url


@dataclass
class ClientConfig:
    """Settings for one APIClient. ``base_url=None`` defers to ``cromwell_base()`` on every request."""

    base_url: Optional[str] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=lambda: {"accept": "application/json"})
    ok_statuses: Tuple[int, ...] = (200,)

    def resolve_base_url(self) -> str:
        return self.base_url if self.base_url is not None else cromwell_base()


@dataclass
class RequestOptions:
    """Per-call transport options.

    ``timeout`` overrides the client timeout, ``session`` reuses a
    caller-owned ``requests.Session`` and ``headers`` are merged over the
    client headers.
    """

    timeout: Optional[float] = None
    session: Optional[requests.Session] = None
    headers: Dict[str, str] = field(default_factory=dict)
