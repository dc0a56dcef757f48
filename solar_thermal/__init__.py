"""Calculation modules for the Commercial Solar Thermal Calculator."""

from .site_inputs import (
    SiteInputs,
    LocalIncentive,
    InputValidationError,
    DEMAND_MODE_APARTMENT,
    DEMAND_MODE_DIRECT,
    PANEL_MODE_AUTO,
    PANEL_MODE_MANUAL,
    INCENTIVE_PERCENT,
    INCENTIVE_FIXED_AMOUNT
)

from .catalog_data import (
    PANEL_CATALOG,
    ORIENTATION_NAMES,
    ROOF_TYPES,
    DEFAULT_SITE_INPUTS,
    PanelSpec,
    get_panel_spec,
    get_panel_area,
    get_panel_btu,
    get_panel_label
)

from .sizing_calcs import (
    estimate_demand,
    select_panel,
    size_system,
    DemandProfile,
    SystemConfiguration
)

from .financial_calcs import (
    calculate_costs,
    calculate_incentives,
    calculate_savings,
    calculate_environmental_impact,
    escalate,
    CostBreakdown,
    IncentivePackage,
    FinancialProjection,
    EnvironmentalImpact
)

from .report import (
    compute_result,
    assemble_result,
    Result
)

from .renderers import (
    summary_table,
    cash_flow_frame,
    cash_flow_chart,
    build_pdf_report,
    warning_messages,
    PDF_FILENAME
)
