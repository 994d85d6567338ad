"""JSON export of fetched records.

Records are dumped with their upstream (camelCase) keys so the output reads
like the Kitsu `data` payload.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from core.domain.models import KitsuRecord


def to_payload(records: KitsuRecord | Sequence[KitsuRecord] | None) -> Any:
    """One record, a list of records, or `None` as JSON-ready data."""

    if records is None:
        return None
    if isinstance(records, KitsuRecord):
        return records.model_dump(mode="json", by_alias=True)
    return [record.model_dump(mode="json", by_alias=True) for record in records]


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def records_to_json(records: KitsuRecord | Sequence[KitsuRecord] | None) -> str:
    return dumps(to_payload(records))


def export_records_json(*, records: KitsuRecord | Sequence[KitsuRecord] | None, output_path: Path) -> Path:
    """Write `records_to_json(records)` to `output_path` (UTF-8, stable format)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(records_to_json(records) + "\n", encoding="utf-8")
    return output_path
