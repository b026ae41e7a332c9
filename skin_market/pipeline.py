# -*- coding: utf-8 -*-
"""
Skin Market Suite | Pipeline

Parse -> Group -> Aggregate -> Transform -> Validate, strictly in sequence.
Each call returns a fresh PipelineResult owned by the caller; nothing is
cached at module level.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from skin_market.analytics import compute_market_totals
from skin_market.config import PipelineConfig
from skin_market.errors import ParseWarning, ValidationWarning
from skin_market.grouping import group_records
from skin_market.models import DomainModel, MarketTotals
from skin_market.parser import parse_frame, read_csv_text
from skin_market.sources import read_source
from skin_market.transform import transform
from skin_market.validation import QualityReport, build_metadata, check_data_quality, validate_model

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything one transformation call produced."""

    model: DomainModel
    totals: MarketTotals
    parse_warnings: List[ParseWarning] = field(default_factory=list)
    validation_warnings: List[ValidationWarning] = field(default_factory=list)
    quality: QualityReport = field(default_factory=QualityReport)
    metadata: Dict[str, Any] = field(default_factory=dict)
    source: str = ""
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_warnings(self) -> bool:
        return bool(self.parse_warnings or self.validation_warnings)

    def validation_results(self) -> Dict[str, Any]:
        """Diagnostics in the shape exported alongside the model."""
        return {
            "parseWarnings": [w.to_dict() for w in self.parse_warnings],
            "validationWarnings": [w.to_dict() for w in self.validation_warnings],
            **self.quality.to_dict(),
        }


def transform_frame(df: pd.DataFrame, config: Optional[PipelineConfig] = None,
                    source_label: str = "frame") -> PipelineResult:
    """
    Run the pipeline on an already materialized table.

    Args:
        df: Raw table (header row already applied)
        config: Pipeline settings; defaults to PipelineConfig()
        source_label: Free-form label carried into the result and exports

    Returns:
        PipelineResult

    Raises:
        SourceError: If required columns are missing
    """
    config = config or PipelineConfig()
    processed_at = datetime.now(timezone.utc)

    parsed = parse_frame(df, config)
    grouped = group_records(parsed.records)
    totals = compute_market_totals(grouped, config)
    model = transform(grouped, totals, config)

    quality = check_data_quality(parsed.records)
    findings = validate_model(model)
    metadata = build_metadata(parsed.records, quality, config, processed_at)
    metadata["dataSource"] = source_label

    logger.info(
        "Pipeline finished for %s: %d records, market %.2f -> %.2f (CAGR %.2f%%)",
        source_label, len(parsed.records),
        totals.market_size_base, totals.market_size_forecast, totals.cagr,
    )
    return PipelineResult(
        model=model,
        totals=totals,
        parse_warnings=list(parsed.warnings),
        validation_warnings=findings,
        quality=quality,
        metadata=metadata,
        source=source_label,
        processed_at=processed_at,
    )


def transform_text(text: str, config: Optional[PipelineConfig] = None,
                   source_label: str = "text") -> PipelineResult:
    return transform_frame(read_csv_text(text), config, source_label)


def run_pipeline(source, config: Optional[PipelineConfig] = None,
                 source_label: Optional[str] = None) -> PipelineResult:
    """
    Read a whole source and run the pipeline on it.

    Args:
        source: Path, URL, raw bytes or uploaded file (see read_source)
        config: Pipeline settings
        source_label: Label for the result; defaults to the source name

    Raises:
        SourceError: The source is missing, unreadable or lacks required columns
    """
    if source_label is None:
        if isinstance(source, (str, Path)):
            source_label = str(source)
        elif isinstance(source, (bytes, bytearray)):
            source_label = "bytes"
        else:
            source_label = getattr(source, "name", None) or str(source)
    df = read_source(source)
    return transform_frame(df, config, source_label)
