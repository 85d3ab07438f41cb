# results.py - typed results returned by the endpoint operations
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from .query_table import QueryTable


class CromwellResult:
    """
    Content returned by one Cromwell endpoint call.

    ``content`` keeps the shape of the data (dict, list or QueryTable),
    ``when`` is the UTC time of the call, ``path`` the request path and
    ``response`` the raw requests.Response.
    """

    kind = "api"

    def __init__(self, content: Any, path: str, response: Optional[requests.Response] = None,
                 when: Optional[datetime] = None):
        self.content = content
        self.path = path
        self.response = response
        self.when = when or datetime.now(timezone.utc)

    def __len__(self) -> int:
        return 0 if self.content is None else len(self.content)

    def __iter__(self):
        return iter(()) if self.content is None else iter(self.content)

    def __getitem__(self, key):
        return self.content[key]

    def __contains__(self, item) -> bool:
        return self.content is not None and item in self.content

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, when={self.when.isoformat()})"


class QueryResult(CromwellResult):
    kind = "query"
    content: QueryTable

    @property
    def table(self) -> QueryTable:
        return self.content


class MetadataResult(CromwellResult):
    kind = "metadata"


class AbortResult(CromwellResult):
    kind = "abort"


class OutputsResult(CromwellResult):
    kind = "outputs"


class LogsResult(CromwellResult):
    kind = "logs"


class BatchResult(CromwellResult):
    kind = "batch"


class BackendsResult(CromwellResult):
    kind = "backends"


class StatsResult(CromwellResult):
    kind = "stats"
