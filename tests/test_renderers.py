"""
Tests for the summary table, cash flow chart data and PDF export.
"""

import dataclasses

import pytest

from solar_thermal.renderers import (
    build_pdf_report,
    cash_flow_chart,
    cash_flow_frame,
    format_co2,
    format_count,
    format_payback,
    format_payback_years,
    format_percent,
    format_roi,
    format_usd,
    summary_rows,
    summary_table,
    warning_messages,
)
from solar_thermal.report import compute_result
from solar_thermal.site_inputs import LocalIncentive


class TestFormatting:

    @pytest.mark.parametrize("value, expected", [
        (155000.00000000003, '$155,000'),
        (85715, '$85,715'),
        (0, '$0'),
        (-1234.4, '$-1,234'),
    ])
    def test_usd(self, value, expected):
        assert format_usd(value) == expected

    def test_count(self):
        assert format_count(1946.67) == '1,947'

    def test_percent(self):
        assert format_percent(76) == '76%'

    def test_placeholders(self):
        assert format_payback(None) == '-'
        assert format_roi(None) == '-'

    def test_payback_and_roi(self):
        assert format_payback(18) == '18.0'
        assert format_roi(22.049) == '22'

    def test_payback_years(self):
        assert format_payback_years(18) == '18.0 years'
        assert format_payback_years(None) == '-'

    def test_co2(self):
        assert format_co2(10.317333) == '10.32'


class TestSummary:

    def test_reference_rows(self, reference_result):
        rows = dict(summary_rows(reference_result))
        assert rows['System Size'] == '10 x 4x10 panels'
        assert rows['Storage Size'] == '500 gallons'
        assert rows['DHW Load (GPD)'] == '700'
        assert rows['Coverage'] == '76%'
        assert rows['Pre-incentive Cost'] == '$155,000'
        assert rows['Federal Incentive (ITC)'] == '$46,500'
        assert rows['Federal Depreciation (100% Year 1)'] == '$22,785'
        assert rows['Net System Cost'] == '$85,715'
        assert rows['Annual Savings'] == '1,947 therms, $3,893'
        assert rows['Simple Payback'] == '18.0 years'
        assert rows['Simple Payback'] == format_payback_years(
            reference_result.financials.simple_payback_years
        )
        assert rows['20-Year ROI'] == '22%'
        assert rows['Annual CO2 Offset'] == '10.32 tons (~455 trees)'
        assert 'Local Incentive' not in rows

    def test_local_incentive_row(self, reference_site):
        site = dataclasses.replace(reference_site, local_incentive=LocalIncentive('percent', 10))
        rows = dict(summary_rows(compute_result(site)))
        assert rows['Local Incentive'] == '$15,500'

    def test_table_frame(self, reference_result):
        df = summary_table(reference_result)
        assert list(df.columns) == ['Item', 'Value']
        assert len(df) == len(summary_rows(reference_result))

    def test_summary_without_payback(self):
        rows = dict(summary_rows(compute_result({'apartments': 0})))
        assert rows['Simple Payback'] == '-'


class TestWarnings:

    def test_no_warnings(self, reference_result):
        assert warning_messages(reference_result) == []

    def test_roof_limited_warning(self, small_roof_site):
        messages = warning_messages(compute_result(small_roof_site))
        assert messages == ["Note: Roof area limits system to 43% of DHW load."]

    def test_north_warning(self, reference_site):
        result = compute_result(dataclasses.replace(reference_site, orientation='north'))
        assert any('North-facing' in m for m in warning_messages(result))


class TestCashFlow:

    def test_frame_matches_series(self, reference_result):
        df = cash_flow_frame(reference_result)
        assert list(df['Year']) == list(range(26))
        assert list(df['Cumulative']) == list(reference_result.financials.cumulative_cash_flow)

    def test_chart(self, reference_result):
        fig = cash_flow_chart(reference_result)
        assert len(fig.data) == 1
        assert len(fig.data[0].y) == 26
        assert fig.data[0].y[0] == pytest.approx(-85715)


class TestPdfReport:

    def test_pdf_bytes(self, reference_result):
        pdf = build_pdf_report(reference_result)
        assert isinstance(pdf, bytes)
        assert pdf.startswith(b'%PDF')

    def test_pdf_with_non_latin_address(self, reference_site):
        site = dataclasses.replace(reference_site, address='12 Sonnenstraße ☀, 94110')
        pdf = build_pdf_report(compute_result(site))
        assert pdf.startswith(b'%PDF')

    def test_pdf_without_payback(self):
        result = compute_result({'apartments': 0})
        assert result.financials.simple_payback_years is None
        assert build_pdf_report(result).startswith(b'%PDF')
