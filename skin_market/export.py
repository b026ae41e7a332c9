# -*- coding: utf-8 -*-
"""
Skin Market Suite | Export Module

JSON and CSV serializations of a pipeline result. The PDF report lives in
pdf_export.py.
"""

from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from skin_market.errors import ExportError
from skin_market.models import DomainModel

logger = logging.getLogger(__name__)

FORMAT_JSON = "json"
FORMAT_CSV = "csv"
FORMAT_PDF = "pdf"
EXPORT_FORMATS = (FORMAT_JSON, FORMAT_CSV, FORMAT_PDF)

MIME_TYPES = {
    FORMAT_JSON: "application/json",
    FORMAT_CSV: "text/csv",
    FORMAT_PDF: "application/pdf",
}

CSV_HEADER = ["Region", "Segment Type", "Segment Name", "Year", "Value (USD Million)"]


def export_filename(fmt: str, now: Optional[datetime] = None, prefix: str = "market-data-export") -> str:
    """e.g. market-data-export-2024-05-01.json"""
    now = now or datetime.now()
    return f"{prefix}-{now:%Y-%m-%d}.{fmt}"


# ==============================================================================
# JSON
# ==============================================================================

def to_json_document(result, data_source: Optional[str] = None,
                     exported_at: Optional[datetime] = None) -> Dict:
    """
    Export document: metadata block plus the serialized model.

    Args:
        result: PipelineResult
        data_source: Overrides result.source in the metadata
        exported_at: Export timestamp (defaults to now, UTC)

    Returns:
        Plain dict ready for json.dumps
    """
    if result is None or result.model is None:
        raise ExportError("No data available to export")
    exported_at = exported_at or datetime.now(timezone.utc)
    return {
        "metadata": {
            "exportDate": exported_at.isoformat(),
            "dataSource": data_source or result.source,
            "lastUpdated": result.processed_at.isoformat(),
            "validationResults": result.validation_results(),
        },
        "data": result.model.to_dict(),
    }


def to_json_text(result, data_source: Optional[str] = None) -> str:
    return json.dumps(to_json_document(result, data_source), indent=2, ensure_ascii=False)


# ==============================================================================
# CSV
# ==============================================================================

def to_csv_rows(model: DomainModel) -> List[Dict]:
    """One row per time-series point, in region/segment order."""
    return [
        {
            "Region": region,
            "Segment Type": segment_type,
            "Segment Name": segment_name,
            "Year": p.year,
            "Value (USD Million)": p.value,
        }
        for region, types in model.time_series.items()
        for segment_type, segments in types.items()
        for segment_name, points in segments.items()
        for p in points
    ]


def to_csv_text(model: DomainModel) -> str:
    df = pd.DataFrame(to_csv_rows(model), columns=CSV_HEADER)
    return df.to_csv(index=False)


# ==============================================================================
# DISPATCH
# ==============================================================================

def export_result(result, fmt: str) -> bytes:
    """
    Serialize a result in one of EXPORT_FORMATS.

    Raises:
        ExportError: Unknown format or nothing to export
    """
    fmt = (fmt or "").lower()
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt!r}")
    if result is None or result.model is None:
        raise ExportError("No data available to export")

    if fmt == FORMAT_JSON:
        payload = to_json_text(result).encode("utf-8")
    elif fmt == FORMAT_CSV:
        payload = to_csv_text(result.model).encode("utf-8")
    else:
        from skin_market.pdf_export import build_pdf_bytes
        payload = build_pdf_bytes(result.model)

    logger.info("Exported %s (%d bytes)", fmt.upper(), len(payload))
    return payload
