# utils/payload_loader.py - logger helper and CSV/TSV loader for workflow inputs
import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union


def get_logger(name: str = "cromwell-api"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def _sniff_delimiter(path: Path) -> str:
    return "\t" if path.suffix.lower() in (".tsv", ".txt") else ","


def load_inputs(path: Union[str, Path], delimiter: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Read a delimited file of workflow inputs, one row per workflow.

    The header row holds the fully qualified input names
    (e.g. ``wf.sample_name``). Empty cells are dropped from the row so the
    engine falls back to the workflow's own defaults. The result can be
    passed directly as ``workflow_inputs`` to ``submit_batch``.
    """
    path = Path(path)
    if delimiter is None:
        delimiter = _sniff_delimiter(path)
    rows: List[Dict[str, str]] = []
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh, delimiter=delimiter)
        for r in reader:
            row = {k.strip(): v for k, v in r.items() if k and v not in (None, "")}
            if row:
                rows.append(row)
    return rows
