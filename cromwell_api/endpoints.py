# endpoints.py - one function per Cromwell REST endpoint
import json
from collections.abc import Mapping
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from .api_client import APIClient
from .config import DEFAULT_BATCH_TIMEOUT, RequestOptions
from .errors import PayloadError
from .query_table import QueryTable
from .response import ApiResponse
from .results import (
    AbortResult,
    BackendsResult,
    BatchResult,
    LogsResult,
    MetadataResult,
    OutputsResult,
    QueryResult,
    StatsResult,
)

QUERY_PATH = "api/workflows/v1/query"
METADATA_PATH = "api/workflows/v1/{id}/metadata"
ABORT_PATH = "api/workflows/v1/{id}/abort"
OUTPUTS_PATH = "api/workflows/v1/{id}/outputs"
LOGS_PATH = "api/workflows/v1/{id}/logs"
BATCH_PATH = "api/workflows/v1/batch"
BACKENDS_PATH = "api/workflows/v1/backends"
STATS_PATH = "api/engine/v1/stats"

QUERY_TERMS = ("name", "status", "id", "start", "end", "page", "pagesize")


def _get(path, params=None, client: Optional[APIClient] = None,
         options: Optional[RequestOptions] = None) -> ApiResponse:
    if client is not None:
        return client.get(path, params=params, options=options)
    with APIClient() as own:
        return own.get(path, params=params, options=options)


def _post(path, files, client: Optional[APIClient] = None,
          options: Optional[RequestOptions] = None) -> ApiResponse:
    if client is not None:
        return client.post(path, files=files, options=options)
    with APIClient() as own:
        return own.post(path, files=files, options=options)


def _workflow_path(template: str, workflow_id: str) -> str:
    if not workflow_id or not isinstance(workflow_id, str):
        raise PayloadError(f"workflow id must be a non-empty string, got {workflow_id!r}")
    return template.format(id=quote(workflow_id, safe=""))


def query_workflows(terms=None, *, client: Optional[APIClient] = None,
                    options: Optional[RequestOptions] = None) -> QueryResult:
    """
    Query workflows known to the engine.

    ``terms`` is a mapping or a sequence of ``(name, value)`` pairs using
    the names in ``QUERY_TERMS``:

    - name: a workflow name; may be given more than once
    - status: one of Succeeded, Failed, Running, ...
    - id: a workflow id
    - start, end: timestamps like ``2015-11-01T07:45:52.000-05:00`` (offset required)
    - page, pagesize: paging controls

    A list value repeats the parameter. Terms are sent as given, the server
    does the validation.

    Example:
        query_workflows({"status": "Succeeded", "name": ["wf_a", "wf_b"]})
    """
    resp = _get(QUERY_PATH, params=terms, client=client, options=options)
    content = resp.content if isinstance(resp.content, dict) else {}
    table = QueryTable.from_records(content.get("results") or [])
    return QueryResult(table, QUERY_PATH, response=resp.response)


def get_metadata(workflow_id: str, *, client: Optional[APIClient] = None,
                 options: Optional[RequestOptions] = None) -> MetadataResult:
    path = _workflow_path(METADATA_PATH, workflow_id)
    resp = _get(path, client=client, options=options)
    return MetadataResult(resp.content, path, response=resp.response)


def abort_workflow(workflow_id: str, *, client: Optional[APIClient] = None,
                   options: Optional[RequestOptions] = None) -> AbortResult:
    path = _workflow_path(ABORT_PATH, workflow_id)
    resp = _get(path, client=client, options=options)
    return AbortResult(resp.content, path, response=resp.response)


def get_outputs(workflow_id: str, *, client: Optional[APIClient] = None,
                options: Optional[RequestOptions] = None) -> OutputsResult:
    path = _workflow_path(OUTPUTS_PATH, workflow_id)
    resp = _get(path, client=client, options=options)
    return OutputsResult(resp.content, path, response=resp.response)


def get_logs(workflow_id: str, *, client: Optional[APIClient] = None,
             options: Optional[RequestOptions] = None) -> LogsResult:
    """Log file locations per call, i.e. the ``calls`` field of the response."""
    path = _workflow_path(LOGS_PATH, workflow_id)
    resp = _get(path, client=client, options=options)
    calls = resp.content.get("calls") if isinstance(resp.content, dict) else None
    if calls is None:
        calls = {}
    return LogsResult(calls, path, response=resp.response)


def list_backends(*, client: Optional[APIClient] = None,
                  options: Optional[RequestOptions] = None) -> BackendsResult:
    resp = _get(BACKENDS_PATH, client=client, options=options)
    return BackendsResult(resp.content, BACKENDS_PATH, response=resp.response)


def get_stats(*, client: Optional[APIClient] = None,
              options: Optional[RequestOptions] = None) -> StatsResult:
    resp = _get(STATS_PATH, client=client, options=options)
    return StatsResult(resp.content, STATS_PATH, response=resp.response)


def _is_tabular(value: Any) -> bool:
    if isinstance(value, QueryTable):
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(r, Mapping) for r in value)


def _encode_json(value: Any, field: str) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise PayloadError(f"{field} could not be encoded as JSON: {exc}") from exc


def _encode_inputs(workflow_inputs: Any) -> Union[str, Path]:
    if isinstance(workflow_inputs, (str, Path)):
        return workflow_inputs
    if not _is_tabular(workflow_inputs):
        raise PayloadError("workflowInputs should be a list of rows, a QueryTable, a JSON string or a file path")
    if isinstance(workflow_inputs, QueryTable):
        rows = workflow_inputs.to_records()
    else:
        rows = [dict(r) for r in workflow_inputs]
    # missing cells are left out so the engine applies workflow defaults
    rows = [{k: v for k, v in row.items() if v is not None} for row in rows]
    return _encode_json(rows, "workflowInputs")


def _encode_options(workflow_options: Any) -> Union[str, Path, None]:
    if workflow_options is None or isinstance(workflow_options, (str, Path)):
        return workflow_options
    if not isinstance(workflow_options, Mapping):
        raise PayloadError("workflowOptions should be a mapping, a JSON string or a file path")
    return _encode_json(dict(workflow_options), "workflowOptions")


def build_batch_body(wdl_source, workflow_inputs, workflow_options=None) -> Dict[str, Union[str, Path]]:
    """
    Validate and encode the fields of a batch submission.

    Strings are passed through untouched and ``Path`` values are uploaded
    as files. Tabular inputs (a list of row mappings or a QueryTable) become
    a JSON array and a mapping of options becomes a JSON object. The
    ``workflowOptions`` field is left out when no options are given.
    """
    if not isinstance(wdl_source, (str, Path)):
        raise PayloadError("wdlSource should be a string or a file path")
    body: Dict[str, Union[str, Path]] = {
        "wdlSource": wdl_source,
        "workflowInputs": _encode_inputs(workflow_inputs),
    }
    opts = _encode_options(workflow_options)
    if opts is not None:
        body["workflowOptions"] = opts
    return body


def _multipart(body: Dict[str, Union[str, Path]], stack: ExitStack) -> Dict[str, tuple]:
    files = {}
    for name, value in body.items():
        if isinstance(value, Path):
            files[name] = (value.name, stack.enter_context(value.open("rb")))
        else:
            files[name] = (None, value)
    return files


def submit_batch(wdl_source, workflow_inputs, workflow_options=None, timeout: float = DEFAULT_BATCH_TIMEOUT,
                 *, client: Optional[APIClient] = None, options: Optional[RequestOptions] = None) -> BatchResult:
    """
    Submit one workflow with one or more sets of inputs.

    A batch can take the engine a long time to accept, so ``timeout``
    (seconds) is applied to this request and usually needs to be large.
    The engine reports successful creation with 201, which the default
    client status policy rejects; pass a client whose config accepts 201
    when submitting to such a server.
    """
    body = build_batch_body(wdl_source, workflow_inputs, workflow_options)
    options = replace(options, timeout=timeout) if options is not None else RequestOptions(timeout=timeout)
    with ExitStack() as stack:
        resp = _post(BATCH_PATH, _multipart(body, stack), client=client, options=options)
    return BatchResult(resp.content, BATCH_PATH, response=resp.response)
