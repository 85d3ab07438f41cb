# api_client.py - HTTP client for the Cromwell REST API, wrapping requests
from dataclasses import replace
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig, RequestOptions
from .response import ApiResponse, process_response
from .utils.payload_loader import get_logger

logger = get_logger("cromwell-api")


class APIClient:
    """
    Issue GET and multipart POST requests against a Cromwell server.

    The base URL is resolved on every request, so a client built without an
    explicit ``base_url`` follows later changes to the ``cromwell_base``
    option. Transport errors from requests (connection refused, DNS,
    timeouts) are not caught here.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None,
                 base_url: Optional[str] = None, timeout: Optional[float] = None):
        config = config or ClientConfig()
        if base_url is not None:
            config = replace(config, base_url=base_url)
        if timeout is not None:
            config = replace(config, timeout=timeout)
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.resolve_base_url().rstrip('/')

    def _url(self, endpoint):
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request_kwargs(self, options: Optional[RequestOptions]) -> Dict[str, Any]:
        headers = dict(self.config.headers)
        timeout = self.config.timeout
        if options is not None:
            headers.update(options.headers)
            if options.timeout is not None:
                timeout = options.timeout
        return {"headers": headers, "timeout": timeout}

    def _session(self, options: Optional[RequestOptions]) -> requests.Session:
        if options is not None and options.session is not None:
            return options.session
        return self.session

    def get(self, endpoint, params=None, options: Optional[RequestOptions] = None) -> ApiResponse:
        url = self._url(endpoint)
        logger.debug("GET %s params=%s", url, params)
        resp = self._session(options).get(url, params=params, **self._request_kwargs(options))
        logger.debug("-> status %s (%s)", resp.status_code, resp.headers.get("Content-Type"))
        return process_response(resp, self.config.ok_statuses)

    def post(self, endpoint, data=None, files=None, options: Optional[RequestOptions] = None) -> ApiResponse:
        url = self._url(endpoint)
        logger.debug("POST %s fields=%s", url, sorted((files or {}).keys()))
        resp = self._session(options).post(url, data=data, files=files, **self._request_kwargs(options))
        logger.debug("-> status %s (%s)", resp.status_code, resp.headers.get("Content-Type"))
        return process_response(resp, self.config.ok_statuses)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
