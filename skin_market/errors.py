# -*- coding: utf-8 -*-
"""
Skin Market Suite | Errors & Diagnostics

Exceptions abort the current pipeline call; diagnostics are collected and
returned alongside the result.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ==============================================================================
# EXCEPTIONS
# ==============================================================================

class MarketSuiteError(Exception):
    """Base exception for all Skin Market Suite failures."""


class SourceError(MarketSuiteError):
    """Raised when the input source is missing, unreadable or unsupported."""


class ConfigError(MarketSuiteError):
    """Raised for invalid runtime or editorial configuration."""


class ExportError(MarketSuiteError):
    """Raised when the processed data cannot be exported."""


# ==============================================================================
# DIAGNOSTICS
# ==============================================================================

SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class ParseWarning:
    """One malformed input row that was dropped or defaulted."""

    row: int
    column: str
    value: Optional[str]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidationWarning:
    """Post-hoc consistency finding on a processed model."""

    code: str
    message: str
    severity: str = SEVERITY_WARNING

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
