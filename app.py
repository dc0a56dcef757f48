"""
Commercial Solar Thermal Calculator
Streamlit application for sizing solar domestic hot water systems and
estimating cost, incentives, payback and CO2 offset.
"""

import streamlit as st

from solar_thermal.catalog_data import (
    COMPANY_NAME,
    COMPANY_PHONE,
    COMPANY_WEBSITE,
    DEFAULT_SITE_INPUTS,
    DISCLAIMER,
    ORIENTATION_NAMES,
    PANEL_CATALOG,
    ROOF_TYPES,
    get_panel_label
)
from solar_thermal.site_inputs import (
    DEMAND_MODE_APARTMENT,
    DEMAND_MODE_DIRECT,
    INCENTIVE_FIXED_AMOUNT,
    INCENTIVE_PERCENT,
    PANEL_MODE_AUTO,
    PANEL_MODE_MANUAL,
    InputValidationError
)
from solar_thermal.report import compute_result
from solar_thermal.renderers import (
    PDF_FILENAME,
    build_pdf_report,
    cash_flow_chart,
    format_payback_years,
    format_usd,
    summary_table,
    warning_messages
)

# Page configuration
st.set_page_config(
    page_title="Commercial Solar Thermal Calculator",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def initialize_session_state():
    """Initialize session state variables."""
    defaults = dict(DEFAULT_SITE_INPUTS)
    defaults.update({
        'local_incentive_enabled': False,
        'local_incentive_kind': INCENTIVE_PERCENT,
        'local_incentive_value': 0.0,
        'panel_auto': DEFAULT_SITE_INPUTS['panel_mode'] == PANEL_MODE_AUTO,
    })
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def render_inputs() -> dict:
    """Render the project input form and return the raw values."""
    st.header("📝 Project Inputs")

    st.text_input("Address or ZIP", key='address')

    demand_mode = st.selectbox(
        "DHW Input Method",
        options=[DEMAND_MODE_APARTMENT, DEMAND_MODE_DIRECT],
        format_func=lambda x: {
            DEMAND_MODE_APARTMENT: "Apartment Building",
            DEMAND_MODE_DIRECT: "Total GPD (enter manually)",
        }[x],
        key='demand_mode'
    )

    if demand_mode == DEMAND_MODE_APARTMENT:
        st.number_input("Number of Apartments", min_value=0, step=1, key='apartments')
        st.number_input(
            "Avg. Bedrooms per Apartment",
            min_value=0.0,
            step=0.5,
            key='bedrooms_per_apartment'
        )
        st.caption("Rule: 20 gal (1st bed), 15 gal (2nd), 10 gal (each additional)")
    else:
        st.number_input(
            "Total DHW (Gallons/day)",
            min_value=0.0,
            step=50.0,
            key='direct_gallons_per_day'
        )

    st.number_input(
        "Natural Gas Cost ($/therm)",
        min_value=0.01,
        step=0.05,
        format="%.2f",
        key='gas_price_per_therm'
    )

    st.number_input(
        "Available Roof Space (sqft)",
        min_value=1,
        step=50,
        key='roof_area_sqft'
    )

    st.selectbox(
        "Roof Type",
        options=list(ROOF_TYPES.keys()),
        format_func=lambda x: ROOF_TYPES[x],
        key='roof_type'
    )

    st.selectbox(
        "Roof Orientation",
        options=list(ORIENTATION_NAMES.keys()),
        format_func=lambda x: ORIENTATION_NAMES[x],
        key='orientation'
    )

    panel_auto = st.checkbox("Auto-select best fit panel", key='panel_auto')
    st.session_state.panel_mode = PANEL_MODE_AUTO if panel_auto else PANEL_MODE_MANUAL
    if not panel_auto:
        st.selectbox(
            "Panel Size",
            options=list(PANEL_CATALOG.keys()),
            format_func=get_panel_label,
            key='manual_panel'
        )

    st.number_input(
        "DHW Coverage Target (%)",
        min_value=20,
        max_value=100,
        step=5,
        key='coverage_target_percent'
    )

    incentive_enabled = st.checkbox("Local Incentive", key='local_incentive_enabled')
    if incentive_enabled:
        col1, col2 = st.columns([1, 2])
        with col1:
            st.selectbox(
                "Type",
                options=[INCENTIVE_PERCENT, INCENTIVE_FIXED_AMOUNT],
                format_func=lambda x: "%" if x == INCENTIVE_PERCENT else "$",
                key='local_incentive_kind'
            )
        with col2:
            st.number_input("Value", min_value=0.0, step=1.0, key='local_incentive_value')

    values = {key: st.session_state[key] for key in DEFAULT_SITE_INPUTS}
    if incentive_enabled:
        values['local_incentive'] = {
            'kind': st.session_state.local_incentive_kind,
            'value': st.session_state.local_incentive_value,
        }
    return values


def render_results(result):
    """Render the summary table, cash flow chart and PDF download."""
    st.header("📊 Summary & Results")

    for message in warning_messages(result):
        st.warning(message)

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            "System Size",
            f"{result.system.panels_used} x {result.system.panel_variant}",
            help="Collector panels installed"
        )

    with col2:
        st.metric(
            "Coverage",
            f"{result.system.actual_coverage_percent}%",
            help="Share of daily hot water heating covered by solar"
        )

    with col3:
        st.metric("Net System Cost", format_usd(result.incentives.net_cost))

    with col4:
        st.metric(
            "Simple Payback",
            format_payback_years(result.financials.simple_payback_years),
            help="Years until escalated gas savings cover net cost (20-year horizon)"
        )

    st.dataframe(summary_table(result), hide_index=True, use_container_width=True)

    st.subheader("Cost")
    st.markdown(f"**Total System Cost: {format_usd(result.costs.total_cost)}**")

    st.subheader("📈 Cumulative Cash Flow (25 Years)")
    st.plotly_chart(cash_flow_chart(result), use_container_width=True)

    st.download_button(
        "📄 Download PDF Report",
        data=build_pdf_report(result),
        file_name=PDF_FILENAME,
        mime="application/pdf",
        type="primary"
    )

    st.divider()
    st.caption(DISCLAIMER)


def main():
    """Main application entry point."""

    # Initialize session state
    initialize_session_state()

    # Sidebar
    with st.sidebar:
        st.title("☀️ Solar Thermal Calculator")
        st.markdown(f"**{COMPANY_NAME}**")
        st.markdown(f"Tel: {COMPANY_PHONE} | [{COMPANY_WEBSITE}](https://{COMPANY_WEBSITE})")
        st.divider()

        st.markdown("### About")
        st.markdown("""
        This tool helps you estimate:
        - Solar thermal system size for building hot water
        - Installed cost and federal/local incentives
        - Payback, 20-year ROI and CO₂ offset

        **Assumptions:**
        - 90°F temperature rise
        - 75% efficient gas water heating displaced
        - 3% annual gas price escalation
        """)

    # Main content
    st.title("☀️ Commercial Solar Thermal Calculator")

    col1, col2 = st.columns([1, 2])

    with col1:
        values = render_inputs()

    with col2:
        try:
            result = compute_result(values)
        except InputValidationError as e:
            st.error(f"Invalid input - {e}")
            return
        render_results(result)


if __name__ == "__main__":
    main()
