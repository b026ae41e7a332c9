# -*- coding: utf-8 -*-
"""
Skin Market Suite | Validation

Data-quality scoring of parsed records and consistency checks on the
finished model. Findings are reported next to the result and never block
producing it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from skin_market.config import APP_VERSION, PipelineConfig
from skin_market.errors import SEVERITY_ERROR, ValidationWarning
from skin_market.grouping import find_duplicates
from skin_market.models import DomainModel, Record

logger = logging.getLogger(__name__)

YEAR_RANGE = (2020, 2035)
# Raw source units (USD thousand)
VALUE_RANGE = (0.0, 10_000_000.0)
SHARE_TOLERANCE = 5.0


@dataclass
class QualityReport:
    """Row-level data-quality findings for one parsed source."""

    total_rows: int = 0
    valid_rows: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[Dict[str, Any]] = field(default_factory=list)
    completeness: float = 0.0
    consistency: float = 0.0
    accuracy: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "quality": {
                "completeness": self.completeness,
                "consistency": self.consistency,
                "accuracy": self.accuracy,
            },
        }


def check_data_quality(records: Sequence[Record]) -> QualityReport:
    """
    Score parsed records for range violations and duplicates.

    Years outside YEAR_RANGE and values outside VALUE_RANGE (in source
    thousands) are errors; repeated (region, segment type, segment name,
    year) rows are warnings.

    Returns:
        QualityReport with completeness/consistency/accuracy in percent
    """
    report = QualityReport(total_rows=len(records))
    if not records:
        return report

    lo_value, hi_value = VALUE_RANGE
    for i, r in enumerate(records):
        ok = True
        if not YEAR_RANGE[0] <= r.year <= YEAR_RANGE[1]:
            report.errors.append({
                "row": r.row or i + 1, "column": "Year", "value": r.year,
                "message": f"Value {r.year} is outside expected range [{YEAR_RANGE[0]}, {YEAR_RANGE[1]}]",
            })
            ok = False
        raw_value = r.value * 1000
        if not lo_value <= raw_value <= hi_value:
            report.errors.append({
                "row": r.row or i + 1, "column": "Value (USD Thousand)", "value": raw_value,
                "message": f"Value {raw_value:g} is outside expected range [{lo_value:g}, {hi_value:g}]",
            })
            ok = False
        if ok:
            report.valid_rows += 1

    for region, segment_type, segment_name, year in find_duplicates(records):
        report.warnings.append({
            "key": [region, segment_type, segment_name, year],
            "message": f"Duplicate entry for {region} - {segment_name} ({year}); last value kept",
        })

    n = report.total_rows
    report.completeness = report.valid_rows / n * 100
    report.consistency = max(0.0, 100 - len(report.warnings) / n * 100)
    report.accuracy = max(0.0, 100 - len(report.errors) / n * 100)
    return report


def validate_model(model: Optional[DomainModel]) -> List[ValidationWarning]:
    """Consistency checks on a finished model."""
    findings: List[ValidationWarning] = []

    if model is None or model.overview is None:
        findings.append(ValidationWarning("missing_overview", "Missing overview data", SEVERITY_ERROR))
        return findings

    if not model.regions:
        findings.append(ValidationWarning("no_regions", "No regional data available"))

    if not model.product_types:
        findings.append(ValidationWarning("no_product_types", "No product type data available"))

    if model.regions:
        total_share = sum(r.market_share_forecast for r in model.regions)
        if abs(total_share - 100) > SHARE_TOLERANCE:
            findings.append(ValidationWarning(
                "regional_share_sum",
                f"Regional market shares sum to {total_share:.1f}%, expected ~100%",
            ))

    for w in findings:
        logger.log(logging.ERROR if w.is_error else logging.WARNING, "Validation: %s", w.message)
    return findings


def build_metadata(records: Sequence[Record], quality: QualityReport,
                   config: Optional[PipelineConfig] = None,
                   processed_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Coverage and processing summary for a parsed source."""
    config = config or PipelineConfig()
    processed_at = processed_at or datetime.now(timezone.utc)
    years = sorted({r.year for r in records})
    countries = {r.segment_name for r in records if r.segment_type == config.country_segment}

    return {
        "totalRecords": len(records),
        "validRecords": quality.valid_rows,
        "dataQuality": quality.to_dict()["quality"],
        "coverage": {
            "regions": len({r.region for r in records}),
            "segmentTypes": len({r.segment_type for r in records}),
            "yearRange": {"start": years[0], "end": years[-1]} if years else None,
            "countries": len(countries),
        },
        "processing": {
            "timestamp": processed_at.isoformat(),
            "version": APP_VERSION,
        },
    }
