"""
Formatting helpers for displaying an estimate: summary table, cash flow
chart and PDF export. Nothing here calculates; values come from Result.
"""

from typing import List, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .catalog_data import (
    COMPANY_NAME,
    COMPANY_PHONE,
    COMPANY_WEBSITE,
    DISCLAIMER,
)
from .report import Result

PLACEHOLDER = '-'
CHART_COLOR = '#3571B8'
PDF_FILENAME = 'Solar_Thermal_Estimate.pdf'


def format_usd(value: float) -> str:
    """Format dollars as $ plus a grouped whole number."""
    return f"${value:,.0f}"


def format_count(value: float) -> str:
    """Format a count or quantity as a grouped whole number."""
    return f"{value:,.0f}"


def format_percent(value: float) -> str:
    return f"{value:.0f}%"


def format_payback(years: Optional[int]) -> str:
    return PLACEHOLDER if years is None else f"{years:.1f}"


def format_payback_years(years: Optional[int]) -> str:
    """e.g. '18.0 years', or the placeholder when the system never pays back."""
    return PLACEHOLDER if years is None else f"{format_payback(years)} years"


def format_roi(percent: Optional[float]) -> str:
    return PLACEHOLDER if percent is None else f"{percent:.0f}"


def format_co2(tons: float) -> str:
    return f"{tons:.2f}"


def system_description(result: Result) -> str:
    """e.g. '10 x 4x10 panels'."""
    return f"{result.system.panels_used} x {result.system.panel_variant} panels"


def warning_messages(result: Result) -> List[str]:
    """Advisories to show above the summary."""
    warnings = []
    if result.north_orientation:
        warnings.append("Warning: North-facing roofs are not recommended for solar thermal.")
    if result.roof_limited:
        warnings.append(
            f"Note: Roof area limits system to {result.system.actual_coverage_percent}% of DHW load."
        )
    return warnings


def summary_rows(result: Result) -> List[Tuple[str, str]]:
    """
    Labelled, formatted summary values.

    The local incentive row is only included when an incentive applies.

    Args:
        result: Computed estimate

    Returns:
        List of (label, value) pairs in display order
    """
    system = result.system
    incentives = result.incentives
    financials = result.financials
    environment = result.environment

    rows = [
        ("System Size", system_description(result)),
        ("Storage Size", f"{format_count(system.storage_gallons)} gallons"),
        ("DHW Load (GPD)", format_count(result.demand.daily_demand_gallons)),
        ("Coverage", format_percent(system.actual_coverage_percent)),
        ("Pre-incentive Cost", format_usd(result.costs.total_cost)),
        ("Federal Incentive (ITC)", format_usd(incentives.federal_itc)),
        ("Federal Depreciation (100% Year 1)", format_usd(incentives.depreciation_benefit)),
    ]
    if incentives.local_incentive > 0:
        rows.append(("Local Incentive", format_usd(incentives.local_incentive)))
    rows.extend([
        ("Net System Cost", format_usd(incentives.net_cost)),
        (
            "Annual Savings",
            f"{format_count(financials.annual_therms)} therms, "
            f"{format_usd(financials.first_year_savings)}"
        ),
        ("Simple Payback", format_payback_years(financials.simple_payback_years)),
        ("20-Year ROI", f"{format_roi(financials.roi_20_year_percent)}%"),
        (
            "Annual CO2 Offset",
            f"{format_co2(environment.annual_co2_tons)} tons "
            f"(~{format_count(environment.equivalent_trees)} trees)"
        ),
    ])
    return rows


def summary_table(result: Result) -> pd.DataFrame:
    """Summary rows as a two-column DataFrame."""
    return pd.DataFrame(summary_rows(result), columns=['Item', 'Value'])


def cash_flow_frame(result: Result) -> pd.DataFrame:
    """Cumulative cash flow by year, year 0 through 25."""
    series = result.financials.cumulative_cash_flow
    return pd.DataFrame({
        'Year': list(range(len(series))),
        'Cumulative': list(series),
    })


def cash_flow_chart(result: Result) -> go.Figure:
    """Bar chart of cumulative cash flow."""
    df = cash_flow_frame(result)

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=df['Year'],
        y=df['Cumulative'],
        name='Cumulative',
        marker_color=CHART_COLOR,
        hovertemplate='Year %{x}<br>$%{y:,.0f}<extra></extra>'
    ))

    # Add break-even line
    fig.add_hline(y=0, line_dash="dash", line_color="red",
                  annotation_text="Break-even")

    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Cumulative Cash Flow ($)",
        hovermode='x unified',
        height=400
    )
    return fig


def _pdf_text(text: str) -> str:
    # Core PDF fonts only cover latin-1
    return text.encode('latin-1', 'replace').decode('latin-1')


def _pdf_line(pdf: FPDF, text: str, height: float = 7) -> None:
    pdf.cell(0, height, _pdf_text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def build_pdf_report(result: Result) -> bytes:
    """
    Render the estimate as a one-page PDF.

    Args:
        result: Computed estimate

    Returns:
        PDF document bytes
    """
    site = result.site
    system = result.system
    costs = result.costs
    incentives = result.incentives
    financials = result.financials
    environment = result.environment

    pdf = FPDF(format='letter')
    pdf.set_margins(10, 15)
    pdf.add_page()

    pdf.set_font('Helvetica', 'B', 18)
    _pdf_line(pdf, "Commercial Solar Thermal Estimate", height=12)
    pdf.ln(4)

    pdf.set_font('Helvetica', '', 11)
    _pdf_line(pdf, f"Address/ZIP: {site.address}")
    _pdf_line(pdf, f"System: {system_description(result)}")
    _pdf_line(pdf, f"Storage Size: {format_count(system.storage_gallons)} gallons")
    _pdf_line(pdf, f"DHW Load: {format_count(result.demand.daily_demand_gallons)} gal/day")
    coverage_note = "Limited by roof area" if result.roof_limited else "Target"
    _pdf_line(pdf, f"Coverage: {format_percent(system.actual_coverage_percent)} ({coverage_note})")
    _pdf_line(
        pdf,
        f"Orientation: {site.orientation.upper()}, Roof: {site.roof_type}, "
        f"Space: {format_count(site.roof_area_sqft)} sqft"
    )
    pdf.ln(3)

    pdf.set_font('Helvetica', 'B', 11)
    _pdf_line(pdf, f"Total System Cost: {format_usd(costs.total_cost)}", height=8)
    pdf.set_font('Helvetica', '', 11)
    _pdf_line(pdf, f"Federal ITC (30%): {format_usd(incentives.federal_itc)}", height=6)
    _pdf_line(pdf, f"Depreciation Tax Benefit: {format_usd(incentives.depreciation_benefit)}", height=6)
    if incentives.local_incentive:
        _pdf_line(pdf, f"Local Incentive: {format_usd(incentives.local_incentive)}", height=6)
    _pdf_line(pdf, f"Net System Cost: {format_usd(incentives.net_cost)}", height=8)

    _pdf_line(
        pdf,
        f"Annual Savings (Year 1): {format_count(financials.annual_therms)} therms, "
        f"{format_usd(financials.first_year_savings)}",
        height=6
    )
    _pdf_line(pdf, f"Simple Payback: {format_payback_years(financials.simple_payback_years)}", height=6)
    _pdf_line(pdf, f"20-year ROI: {format_roi(financials.roi_20_year_percent)}%", height=6)
    _pdf_line(
        pdf,
        f"Annual CO2 Offset: {format_co2(environment.annual_co2_tons)} tons "
        f"(~{environment.equivalent_trees} trees)",
        height=6
    )
    pdf.ln(4)

    pdf.set_font('Helvetica', 'B', 11)
    pdf.set_text_color(200, 0, 0)
    pdf.multi_cell(0, 6, _pdf_text(DISCLAIMER), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(0, 0, 0)
    pdf.ln(2)

    pdf.set_font('Helvetica', '', 9)
    _pdf_line(pdf, f"{COMPANY_NAME} | Tel: {COMPANY_PHONE} | {COMPANY_WEBSITE}", height=5)

    return bytes(pdf.output())
