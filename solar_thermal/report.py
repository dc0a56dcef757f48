"""
Runs the estimate pipeline and bundles every stage into one result record.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Union

from .financial_calcs import (
    CostBreakdown,
    EnvironmentalImpact,
    FinancialProjection,
    IncentivePackage,
    calculate_costs,
    calculate_environmental_impact,
    calculate_incentives,
    calculate_savings,
)
from .site_inputs import DEMAND_MODE_APARTMENT, InputValidationError, SiteInputs
from .sizing_calcs import DemandProfile, SystemConfiguration, estimate_demand, size_system

logger = logging.getLogger(__name__)

NORTH = 'north'


@dataclass(frozen=True)
class Result:
    """Complete estimate for one set of site inputs."""
    site: SiteInputs
    demand: DemandProfile
    system: SystemConfiguration
    costs: CostBreakdown
    incentives: IncentivePackage
    financials: FinancialProjection
    environment: EnvironmentalImpact
    roof_limited: bool
    north_orientation: bool


def assemble_result(
    site: SiteInputs,
    demand: DemandProfile,
    system: SystemConfiguration,
    costs: CostBreakdown,
    incentives: IncentivePackage,
    financials: FinancialProjection,
    environment: EnvironmentalImpact
) -> Result:
    """Bundle stage outputs with the advisory flags."""
    return Result(
        site=site,
        demand=demand,
        system=system,
        costs=costs,
        incentives=incentives,
        financials=financials,
        environment=environment,
        roof_limited=system.roof_limited,
        north_orientation=site.orientation == NORTH
    )


def _estimate_finite_demand(site: SiteInputs) -> DemandProfile:
    """Estimate demand, rejecting inputs too large to size a system for."""
    if site.demand_mode == DEMAND_MODE_APARTMENT:
        demand_field = 'apartments'
    else:
        demand_field = 'direct_gallons_per_day'

    try:
        demand = estimate_demand(site)
    except OverflowError as e:
        raise InputValidationError(demand_field, "demand is too large to estimate") from e

    if not math.isfinite(demand.daily_energy_btu):
        logger.debug("Rejected %s: daily energy overflowed", demand_field)
        raise InputValidationError(demand_field, "demand is too large to estimate")
    if not math.isfinite(demand.target_energy_btu):
        raise InputValidationError('coverage_target_percent', "coverage target is too large")
    return demand


def compute_result(site: Union[SiteInputs, Mapping[str, Any]]) -> Result:
    """
    Compute a full solar thermal estimate.

    Inputs are validated before any calculation runs. Calling this twice with
    the same inputs returns equal results.

    Args:
        site: SiteInputs, or a mapping of raw form values

    Returns:
        Result with sizing, costs, incentives, savings and CO2 offset

    Raises:
        InputValidationError: If an input has the wrong type, or is too
            large for the demand to be estimated
    """
    if isinstance(site, SiteInputs):
        site.validate()
    else:
        site = SiteInputs.from_mapping(site)

    demand = _estimate_finite_demand(site)
    system = size_system(site, demand)
    costs = calculate_costs(system.panels_used, system.storage_gallons)
    incentives = calculate_incentives(costs.total_cost, site.local_incentive)
    financials = calculate_savings(
        system.actual_energy_btu,
        site.gas_price_per_therm,
        incentives.net_cost
    )
    environment = calculate_environmental_impact(financials.annual_therms)

    logger.debug(
        "Estimate: %d x %s panels, %d gal storage, net cost %.0f, payback %s",
        system.panels_used, system.panel_variant, system.storage_gallons,
        incentives.net_cost, financials.simple_payback_years
    )

    return assemble_result(
        site, demand, system, costs, incentives, financials, environment
    )
