"""cromwell_api: a requests-based client for the Cromwell workflow engine REST API."""

from .api_client import APIClient
from .config import ClientConfig, RequestOptions, cromwell_base, get_option, set_option
from .endpoints import (
    abort_workflow,
    build_batch_body,
    get_logs,
    get_metadata,
    get_outputs,
    get_stats,
    list_backends,
    query_workflows,
    submit_batch,
)
from .errors import CromwellAPIError, CromwellError, NonJsonResponseError, PayloadError
from .query_table import QueryTable
from .response import ApiResponse, process_response
from .results import (
    AbortResult,
    BackendsResult,
    BatchResult,
    CromwellResult,
    LogsResult,
    MetadataResult,
    OutputsResult,
    QueryResult,
    StatsResult,
)
from .utils.payload_loader import load_inputs

__version__ = "0.1.0"
__all__ = [
    "APIClient",
    "ApiResponse",
    "ClientConfig",
    "RequestOptions",
    "cromwell_base",
    "get_option",
    "set_option",
    "process_response",
    "query_workflows",
    "get_metadata",
    "abort_workflow",
    "get_outputs",
    "get_logs",
    "submit_batch",
    "build_batch_body",
    "list_backends",
    "get_stats",
    "load_inputs",
    "QueryTable",
    "CromwellResult",
    "QueryResult",
    "MetadataResult",
    "AbortResult",
    "OutputsResult",
    "LogsResult",
    "BatchResult",
    "BackendsResult",
    "StatsResult",
    "CromwellError",
    "CromwellAPIError",
    "NonJsonResponseError",
    "PayloadError",
]
