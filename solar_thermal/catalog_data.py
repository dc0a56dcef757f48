"""
Panel catalog, unit prices and fixed rates for commercial solar thermal estimates.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PanelSpec:
    """Physical characteristics of a collector panel variant."""
    variant: str
    area_flat_sqft: float
    area_pitched_sqft: float
    base_btu_per_day: float  # South-facing


# Collector panel catalog
# Roof footprint per panel (sqft) on flat vs non-flat roofs and base daily
# output (BTU/day) for a south-facing installation
PANEL_CATALOG = {
    '4x10': {
        'label': "4'x10'",
        'area_flat_sqft': 32,
        'area_pitched_sqft': 40,
        'base_btu_per_day': 40000,
    },
    '4x8': {
        'label': "4'x8'",
        'area_flat_sqft': 26,
        'area_pitched_sqft': 32,
        'base_btu_per_day': 32000,
    },
}

# Unrecognized panel variants
FALLBACK_PANEL_AREA_SQFT = 40
FALLBACK_PANEL_BTU_PER_DAY = 32000

# Panel used for the auto-selection feasibility check
PREFERRED_PANEL = '4x10'
ALTERNATE_PANEL = '4x8'

# Output multiplier by roof orientation; anything not listed gets the north factor
ORIENTATION_FACTORS = {
    'south': 1.0,
    'west': 0.8,
    'east': 0.8,
}
NORTH_ORIENTATION_FACTOR = 0.5

# Display names for the input form
ORIENTATION_NAMES = {
    'south': 'South (Best)',
    'west': 'West',
    'east': 'East',
    'north': 'North (Not recommended)',
}

ROOF_TYPES = {
    'composite': 'Composite Shingles',
    'flat': 'Flat',
    'metal': 'Metal',
    'tile': 'Tile',
    'other': 'Other',
}
FLAT_ROOF = 'flat'

# Hot water demand (gallons/day per apartment)
GALLONS_FIRST_BEDROOM = 20
GALLONS_SECOND_BEDROOM = 15
GALLONS_EXTRA_BEDROOM = 10

# Water heating
WATER_LB_PER_GALLON = 8.33
TEMPERATURE_RISE_F = 90  # Fixed cold-to-hot rise

# Storage sizing: 50 gallons per 40,000 BTU/day of installed output
STORAGE_GALLONS_PER_BLOCK = 50
STORAGE_BTU_BLOCK = 40000

# Direct material unit prices ($)
PANEL_PRICE = 1600          # per panel
STORAGE_PRICE_PER_GALLON = 25
CONTROLS_PRICE = 5000       # flat, per project
RACKING_PRICE = 350         # per panel
PIPING_PRICE = 950          # per panel

# Cost structure: direct materials are 30% of the installed price
MATERIALS_SHARE = 0.30
LABOR_SHARE = 0.30          # Labor includes soft costs
PROFIT_SHARE = 0.40

# Federal incentives
FEDERAL_ITC_RATE = 0.30
CORPORATE_TAX_RATE = 0.21   # 100% first-year depreciation

# Gas displacement
BTU_PER_THERM = 100000
BOILER_EFFICIENCY = 0.75
DAYS_PER_YEAR = 365

# Gas price escalation
GAS_ESCALATION_RATE = 0.03
ROI_HORIZON_YEARS = 20
CASH_FLOW_HORIZON_YEARS = 25

# Environmental
CO2_TONS_PER_THERM = 0.0053
CO2_TONS_PER_TREE = 0.0227  # Absorbed per tree per year

# Report footer
COMPANY_NAME = 'Maktinta Energy'
COMPANY_PHONE = '408-432-9900'
COMPANY_WEBSITE = 'www.maktinta.com'
DISCLAIMER = (
    "Disclaimer: This tool provides a preliminary estimate for informational "
    f"purposes only. For a more accurate proposal, contact {COMPANY_NAME} at "
    f"{COMPANY_PHONE} or visit {COMPANY_WEBSITE}."
)

# Form defaults
DEFAULT_SITE_INPUTS = {
    'address': '',
    'demand_mode': 'apartment',
    'apartments': 0,
    'bedrooms_per_apartment': 0.0,
    'direct_gallons_per_day': 0.0,
    'gas_price_per_therm': 2.0,
    'roof_area_sqft': 800,
    'roof_type': 'flat',
    'orientation': 'south',
    'panel_mode': 'auto',
    'manual_panel': '4x10',
    'coverage_target_percent': 75,
}


def get_panel_spec(variant: str) -> PanelSpec:
    """
    Look up a panel variant in the catalog.

    Unrecognized variants get a 40 sqft footprint on any roof and
    32,000 BTU/day base output.

    Args:
        variant: Panel variant ('4x10', '4x8')

    Returns:
        PanelSpec for the variant
    """
    entry = PANEL_CATALOG.get(variant)
    if entry is None:
        return PanelSpec(
            variant=variant,
            area_flat_sqft=FALLBACK_PANEL_AREA_SQFT,
            area_pitched_sqft=FALLBACK_PANEL_AREA_SQFT,
            base_btu_per_day=FALLBACK_PANEL_BTU_PER_DAY
        )
    return PanelSpec(
        variant=variant,
        area_flat_sqft=entry['area_flat_sqft'],
        area_pitched_sqft=entry['area_pitched_sqft'],
        base_btu_per_day=entry['base_btu_per_day']
    )


def get_panel_area(variant: str, roof_type: str) -> float:
    """
    Get roof footprint of one panel.

    Args:
        variant: Panel variant ('4x10', '4x8')
        roof_type: Roof type; only 'flat' uses the flat-roof footprint

    Returns:
        Area per panel in sqft
    """
    spec = get_panel_spec(variant)
    if roof_type == FLAT_ROOF:
        return spec.area_flat_sqft
    return spec.area_pitched_sqft


def get_orientation_factor(orientation: str) -> float:
    """Get output multiplier for roof orientation."""
    return ORIENTATION_FACTORS.get(orientation, NORTH_ORIENTATION_FACTOR)


def get_panel_btu(variant: str, orientation: str) -> float:
    """
    Get daily output of one panel at the given orientation.

    Args:
        variant: Panel variant ('4x10', '4x8')
        orientation: Roof orientation ('south', 'west', 'east', 'north')

    Returns:
        Output in BTU/day
    """
    return get_panel_spec(variant).base_btu_per_day * get_orientation_factor(orientation)


def get_panel_label(variant: str) -> str:
    """Get display label for a panel variant."""
    spec = PANEL_CATALOG.get(variant)
    return spec['label'] if spec else variant
