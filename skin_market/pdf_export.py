# -*- coding: utf-8 -*-
"""
Skin Market Suite | PDF Export Module

Executive report: KPI box plus ranking tables for regions, product types
and ingredients.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional, Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from skin_market.config import APP_TITLE
from skin_market.errors import ExportError
from skin_market.models import DomainModel


# ==============================================================================
# PDF UTILITIES
# ==============================================================================

def human_money(millions: float) -> str:
    """Format a USD-million figure as human-readable money."""
    if abs(millions) >= 1000:
        return f"${millions / 1000:,.2f} B"
    return f"${millions:,.2f} M"


def pdf_sanitize(text) -> str:
    """Core PDF fonts only cover latin-1."""
    return str(text).encode("latin-1", "replace").decode("latin-1")


NEXT_LINE = {"new_x": XPos.LMARGIN, "new_y": YPos.NEXT}
SAME_LINE = {"new_x": XPos.RIGHT, "new_y": YPos.TOP}


# ==============================================================================
# PDF CLASS
# ==============================================================================

class ExecutivePDF(FPDF):
    """Header/footer for executive reports."""

    def __init__(self, generated_at: Optional[datetime] = None, **kwargs):
        super().__init__(**kwargs)
        self.generated_at = generated_at or datetime.now()

    def header(self):
        self.set_font("Helvetica", "B", 13)
        self.set_text_color(59, 130, 246)
        self.cell(0, 8, pdf_sanitize(f"{APP_TITLE} - Executive Report"), align="C", **NEXT_LINE)
        self.ln(2)

    def footer(self):
        self.set_y(-14)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(120)
        stamp = self.generated_at.strftime("%Y-%m-%d %H:%M")
        self.cell(0, 10, f"Page {self.page_no()} | Generated {stamp} | Confidential", align="C")


def _section_title(pdf: ExecutivePDF, text: str) -> None:
    pdf.ln(4)
    pdf.set_font("Helvetica", "B", 12)
    pdf.set_text_color(59, 130, 246)
    pdf.cell(0, 8, pdf_sanitize(text), **NEXT_LINE)
    pdf.ln(1)


def _ranking_table(pdf: ExecutivePDF, label: str, rows: Sequence, forecast_year: int) -> None:
    """Name / forecast size / forecast share / CAGR, zebra-striped."""
    widths = (80, 40, 35, 35)
    headers = (label, f"Size {forecast_year}", "Share", "CAGR")

    pdf.set_font("Helvetica", "B", 9)
    pdf.set_text_color(255)
    pdf.set_fill_color(44, 62, 80)
    for i, (w, h) in enumerate(zip(widths, headers)):
        pdf.cell(w, 7, pdf_sanitize(h), border=1, align="L" if i == 0 else "R", fill=True,
                 **(NEXT_LINE if i == len(widths) - 1 else SAME_LINE))

    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(0)
    alt = False
    for row in rows:
        pdf.set_fill_color(240, 240, 240)
        values = (
            pdf_sanitize(row.name)[:45],
            human_money(row.market_size_forecast),
            f"{row.market_share_forecast:.1f}%",
            f"{row.cagr:.1f}%",
        )
        for i, (w, v) in enumerate(zip(widths, values)):
            pdf.cell(w, 7, v, border=1, align="L" if i == 0 else "R", fill=alt,
                     **(NEXT_LINE if i == len(widths) - 1 else SAME_LINE))
        alt = not alt


# ==============================================================================
# PDF BUILDER
# ==============================================================================

def build_pdf_bytes(model: DomainModel, generated_at: Optional[datetime] = None) -> bytes:
    """
    Build the executive PDF report for a model.

    Args:
        model: Transformed DomainModel
        generated_at: Timestamp printed in the footer

    Returns:
        PDF bytes ready for download
    """
    if model is None or model.overview is None:
        raise ExportError("No data available to export")
    ov = model.overview

    pdf = ExecutivePDF(generated_at=generated_at, orientation="P", unit="mm", format="A4")
    pdf.add_page()

    # Title block
    pdf.set_font("Helvetica", "B", 16)
    pdf.set_text_color(0)
    pdf.cell(0, 10, pdf_sanitize(ov.market_name), **NEXT_LINE)
    pdf.set_font("Helvetica", "I", 10)
    pdf.set_text_color(90)
    pdf.cell(0, 7, pdf_sanitize(f"Base year {ov.base_year} | Forecast year {ov.forecast_year}"), **NEXT_LINE)
    pdf.ln(3)

    # KPI box
    top = pdf.get_y()
    pdf.set_fill_color(245, 245, 245)
    pdf.set_draw_color(220, 220, 220)
    pdf.rect(10, top, 190, 20, "FD")
    pdf.set_y(top + 5)
    pdf.set_font("Helvetica", "B", 11)
    pdf.set_text_color(0)
    pdf.cell(63, 8, pdf_sanitize(f"{ov.base_year}: {human_money(ov.market_size_base)}"), align="C", **SAME_LINE)
    pdf.cell(63, 8, pdf_sanitize(f"{ov.forecast_year}: {human_money(ov.market_size_forecast)}"), align="C", **SAME_LINE)
    pdf.cell(63, 8, pdf_sanitize(f"CAGR: {ov.cagr:.1f}%"), align="C", **NEXT_LINE)
    pdf.set_y(top + 24)

    sections = (
        ("Regional Markets", "Region", model.regions),
        ("Product Types", "Product Type", model.product_types),
        ("Ingredients", "Ingredient", model.ingredients),
    )
    for title, label, rows in sections:
        _section_title(pdf, title)
        if rows:
            _ranking_table(pdf, label, rows, ov.forecast_year)
        else:
            pdf.set_font("Helvetica", "", 10)
            pdf.set_text_color(0)
            pdf.multi_cell(0, 6, "No data available for this section.")

    if ov.key_drivers:
        _section_title(pdf, "Key Drivers")
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(0)
        for driver in ov.key_drivers:
            pdf.cell(0, 6, pdf_sanitize(f"- {driver}")[:110], **NEXT_LINE)

    return bytes(pdf.output())
