"""Schema summaries inferred from the first records of a file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from json_query.core.logging import get_logger
from json_query.core.metrics import RECORDS_SCANNED
from json_query.query.models import StructureSummary
from json_query.query.source import RecordStream, open_records
from json_query.utils.text import is_number

logger = get_logger(__name__)

DEFAULT_MAX_SAMPLES = 10


def json_type(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    return "null"


def collect_fields(obj: dict[str, Any], fields: dict[str, None], prefix: str = "") -> None:
    """Add every dot-path key of ``obj`` to ``fields``; arrays are not descended."""
    for key, value in obj.items():
        full_key = f"{prefix}.{key}" if prefix else key
        fields[full_key] = None
        if isinstance(value, dict):
            collect_fields(value, fields, full_key)


def sample_structure(
    path: Path,
    max_samples: int = DEFAULT_MAX_SAMPLES,
    opener: Callable[[Path], RecordStream] = open_records,
) -> StructureSummary:
    """Summarize at most ``max_samples`` leading records, leaving the rest unread."""
    # dict keeps first-seen order for stable output
    fields: dict[str, None] = {}
    sample: Any = None
    root_type: str | None = None
    with opener(path) as stream:
        for record in stream:
            if stream.consumed == 1:
                sample = record
                root_type = json_type(record)
            if isinstance(record, dict):
                collect_fields(record, fields)
            if stream.consumed >= max_samples:
                break
        count = stream.consumed
    RECORDS_SCANNED.labels(operation="structure").inc(count)
    logger.debug("Sampled %s records from %s", count, path.name)
    return StructureSummary(
        root_element_type=root_type,
        fields=list(fields),
        sample=sample,
        count=count,
    )


__all__ = ["DEFAULT_MAX_SAMPLES", "collect_fields", "json_type", "sample_structure"]
