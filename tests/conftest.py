"""Shared fixtures for the skin_market test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from skin_market.config import PipelineConfig
from skin_market.grouping import group_records
from skin_market.parser import parse_csv_text
from skin_market.pipeline import run_pipeline

PROJECT_ROOT = Path(__file__).resolve().parent.parent
BUNDLED_CSV = PROJECT_ROOT / "data" / "market-data.csv"

HEADER = "Region,Segment Type,Segment Name,Year,Value (USD Thousand)"

SMALL_CSV = "\n".join([
    HEADER,
    "Global,Type,Mesotherapy,2024,823932.7502",
    "Global,Type,Mesotherapy,2032,2015525.275",
    "Global,Type,Micro-needle,2024,534317.2498",
    "Global,Type,Micro-needle,2032,1187917.396",
    "Global,Ingredient,Hyaluronic acid (HA),2024,862913.4863",
    "Global,Ingredient,Hyaluronic acid (HA),2032,2001352.599",
    "Global,Ingredient,Polydeoxyribonucleotides (PDRN),2024,121057.4355",
    "Global,Ingredient,Polydeoxyribonucleotides (PDRN),2032,319473.9204",
    "Global,Gender,Female,2024,1126722.013",
    "Global,Gender,Female,2032,2594909.143",
    "Global,Gender,Male,2024,231527.9873",
    "Global,Gender,Male,2032,608533.5278",
    "North America,Type,Mesotherapy,2024,300000",
    "North America,Type,Mesotherapy,2032,700000",
    "Europe,Type,Mesotherapy,2024,250000",
    "Europe,Type,Mesotherapy,2032,500000",
    "North America,Country,US,2024,322251.8754",
    "North America,Country,US,2032,693816.4619",
    "North America,Country,Canada,2024,66486.58199",
    "North America,Country,Canada,2032,138639.981",
    "North America,End User,Medspas,2024,150000",
    "North America,End User,Medspas,2032,400000",
    "",
])


@pytest.fixture
def config() -> PipelineConfig:
    return PipelineConfig()


@pytest.fixture
def small_csv() -> str:
    return SMALL_CSV


@pytest.fixture
def small_records(small_csv: str):
    return parse_csv_text(small_csv).records


@pytest.fixture
def small_grouped(small_records):
    return group_records(small_records)


@pytest.fixture
def small_csv_path(tmp_path: Path, small_csv: str) -> Path:
    path = tmp_path / "market.csv"
    path.write_text(small_csv, encoding="utf-8")
    return path


@pytest.fixture
def bundled_csv() -> Path:
    return BUNDLED_CSV


@pytest.fixture
def bundled_result():
    return run_pipeline(BUNDLED_CSV)


@pytest.fixture
def small_result(small_csv_path: Path):
    return run_pipeline(small_csv_path)
