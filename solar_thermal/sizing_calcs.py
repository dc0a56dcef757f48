"""
Hot water demand estimation and collector array sizing.
"""

import math
from dataclasses import dataclass

from .catalog_data import (
    ALTERNATE_PANEL,
    GALLONS_EXTRA_BEDROOM,
    GALLONS_FIRST_BEDROOM,
    GALLONS_SECOND_BEDROOM,
    PREFERRED_PANEL,
    STORAGE_BTU_BLOCK,
    STORAGE_GALLONS_PER_BLOCK,
    TEMPERATURE_RISE_F,
    WATER_LB_PER_GALLON,
    get_panel_area,
    get_panel_btu,
)
from .site_inputs import DEMAND_MODE_APARTMENT, PANEL_MODE_AUTO, SiteInputs


@dataclass(frozen=True)
class DemandProfile:
    """Daily hot water demand and the heat needed to meet it."""
    daily_demand_gallons: float
    daily_energy_btu: float
    target_energy_btu: float  # Share of daily energy the system should cover


@dataclass(frozen=True)
class SystemConfiguration:
    """Selected panel variant and array size."""
    panel_variant: str
    panel_btu_per_day: float
    panels_needed: int
    max_panels_fitting_roof: int
    panels_used: int
    actual_energy_btu: float
    actual_coverage_percent: int
    storage_gallons: int
    roof_limited: bool


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def apartment_demand_gallons(apartments: float, bedrooms: float) -> float:
    """
    Estimate daily hot water use for an apartment building.

    Each apartment uses 20 gal for the first bedroom, 15 gal for the second
    and 10 gal for each additional bedroom.

    Args:
        apartments: Number of apartments
        bedrooms: Average bedrooms per apartment

    Returns:
        Gallons per day (0 if either input is zero or missing)
    """
    if not apartments or not bedrooms:
        return 0
    per_apartment = GALLONS_FIRST_BEDROOM
    if bedrooms > 1:
        per_apartment += GALLONS_SECOND_BEDROOM
    if bedrooms > 2:
        per_apartment += GALLONS_EXTRA_BEDROOM * (bedrooms - 2)
    return apartments * per_apartment


def estimate_demand(site: SiteInputs) -> DemandProfile:
    """Compute daily demand, heating energy and the coverage target."""
    if site.demand_mode == DEMAND_MODE_APARTMENT:
        gallons = apartment_demand_gallons(site.apartments, site.bedrooms_per_apartment)
    else:
        gallons = site.direct_gallons_per_day

    daily_btu = gallons * WATER_LB_PER_GALLON * TEMPERATURE_RISE_F
    target_btu = daily_btu * (site.coverage_target_percent / 100)

    return DemandProfile(
        daily_demand_gallons=gallons,
        daily_energy_btu=daily_btu,
        target_energy_btu=target_btu
    )


def select_panel(site: SiteInputs, target_energy_btu: float) -> str:
    """
    Pick the panel variant.

    In auto mode the larger 4x10 panel is used whenever enough of them fit on
    the roof to meet the target; otherwise the 4x8 panel is used. This only
    checks 4x10 feasibility and does not compare cost across variants.

    Args:
        site: Site inputs
        target_energy_btu: Daily energy the system should deliver

    Returns:
        Panel variant
    """
    if site.panel_mode != PANEL_MODE_AUTO:
        return site.manual_panel

    roof_capacity = site.roof_area_sqft / get_panel_area(PREFERRED_PANEL, site.roof_type)
    needed = math.ceil(target_energy_btu / get_panel_btu(PREFERRED_PANEL, site.orientation))
    return PREFERRED_PANEL if roof_capacity >= needed else ALTERNATE_PANEL


def size_system(site: SiteInputs, demand: DemandProfile) -> SystemConfiguration:
    """
    Size the collector array and storage tank.

    Args:
        site: Site inputs
        demand: Demand profile for the site

    Returns:
        SystemConfiguration with the panel count limited by roof area
    """
    variant = select_panel(site, demand.target_energy_btu)
    panel_btu = get_panel_btu(variant, site.orientation)

    panels_needed = math.ceil(demand.target_energy_btu / panel_btu)
    max_panels = math.floor(site.roof_area_sqft / get_panel_area(variant, site.roof_type))
    panels_used = min(panels_needed, max_panels)

    actual_btu = panels_used * panel_btu
    if demand.daily_energy_btu == 0:
        coverage = 0
    else:
        coverage = round_half_up(actual_btu / demand.daily_energy_btu * 100)

    storage = round_half_up(actual_btu / STORAGE_BTU_BLOCK * STORAGE_GALLONS_PER_BLOCK)

    return SystemConfiguration(
        panel_variant=variant,
        panel_btu_per_day=panel_btu,
        panels_needed=panels_needed,
        max_panels_fitting_roof=max_panels,
        panels_used=panels_used,
        actual_energy_btu=actual_btu,
        actual_coverage_percent=coverage,
        storage_gallons=storage,
        roof_limited=panels_used < panels_needed
    )
