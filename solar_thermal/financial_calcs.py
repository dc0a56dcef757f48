"""
Financial calculations for commercial solar thermal projects.
Covers installed cost, federal/local incentives, escalated gas savings,
payback, ROI and avoided CO2.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .catalog_data import (
    BOILER_EFFICIENCY,
    BTU_PER_THERM,
    CASH_FLOW_HORIZON_YEARS,
    CO2_TONS_PER_THERM,
    CO2_TONS_PER_TREE,
    CONTROLS_PRICE,
    CORPORATE_TAX_RATE,
    DAYS_PER_YEAR,
    FEDERAL_ITC_RATE,
    GAS_ESCALATION_RATE,
    LABOR_SHARE,
    MATERIALS_SHARE,
    PANEL_PRICE,
    PIPING_PRICE,
    PROFIT_SHARE,
    RACKING_PRICE,
    ROI_HORIZON_YEARS,
    STORAGE_PRICE_PER_GALLON,
)
from .site_inputs import INCENTIVE_PERCENT, LocalIncentive
from .sizing_calcs import round_half_up


@dataclass(frozen=True)
class CostBreakdown:
    """Direct material line items and the fully loaded project price."""
    panels: float
    storage: float
    controls: float
    racking: float
    piping: float
    directs_subtotal: float
    total_cost: float
    materials: float
    labor: float  # Includes soft costs
    profit: float


@dataclass(frozen=True)
class IncentivePackage:
    """Tax credits and incentives netted against installed cost."""
    federal_itc: float
    depreciation_benefit: float
    local_incentive: float
    total_incentives: float
    net_cost: float  # Not floored; negative when incentives exceed cost


@dataclass(frozen=True)
class EscalatedSeries:
    """Yearly values growing at a fixed rate, year 1 first."""
    values: Tuple[float, ...]
    total: float


@dataclass(frozen=True)
class FinancialProjection:
    """Savings, payback and cash flow projections."""
    annual_therms: float
    first_year_savings: float
    annual_savings_20yr: Tuple[float, ...]
    total_savings_20yr: float
    annual_savings_25yr: Tuple[float, ...]
    total_savings_25yr: float
    simple_payback_years: Optional[int]  # None if not reached within 20 years
    roi_20_year_percent: Optional[float]  # None if net cost is zero
    cumulative_cash_flow: Tuple[float, ...]  # Year 0 through 25


@dataclass(frozen=True)
class EnvironmentalImpact:
    """Avoided emissions from displaced natural gas."""
    annual_co2_tons: float
    equivalent_trees: int


def calculate_costs(panels_used: int, storage_gallons: int) -> CostBreakdown:
    """
    Calculate direct material costs and the installed project price.

    Direct materials are modeled as 30% of the installed price; the remaining
    70% is split into labor (30%) and profit (40%).

    Args:
        panels_used: Number of collector panels
        storage_gallons: Storage tank size in gallons

    Returns:
        CostBreakdown with line items and price buckets
    """
    panels = panels_used * PANEL_PRICE
    storage = storage_gallons * STORAGE_PRICE_PER_GALLON
    controls = CONTROLS_PRICE
    racking = panels_used * RACKING_PRICE
    piping = panels_used * PIPING_PRICE

    directs_subtotal = panels + storage + controls + racking + piping
    total_cost = directs_subtotal / MATERIALS_SHARE

    return CostBreakdown(
        panels=panels,
        storage=storage,
        controls=controls,
        racking=racking,
        piping=piping,
        directs_subtotal=directs_subtotal,
        total_cost=total_cost,
        materials=total_cost * MATERIALS_SHARE,
        labor=total_cost * LABOR_SHARE,
        profit=total_cost * PROFIT_SHARE
    )


def calculate_local_incentive(
    total_cost: float,
    incentive: Optional[LocalIncentive]
) -> float:
    """
    Calculate the local incentive amount.

    Args:
        total_cost: Installed project price
        incentive: Local incentive, or None when not offered

    Returns:
        Incentive in dollars (0 when absent or zero-valued)
    """
    if incentive is None or not incentive.value:
        return 0
    if incentive.kind == INCENTIVE_PERCENT:
        return total_cost * (incentive.value / 100)
    return incentive.value


def calculate_incentives(
    total_cost: float,
    local_incentive: Optional[LocalIncentive] = None
) -> IncentivePackage:
    """
    Calculate federal ITC, depreciation benefit and local incentive.

    Depreciation assumes the full depreciable basis (cost less ITC) is
    expensed in year one at the federal corporate tax rate.

    Args:
        total_cost: Installed project price
        local_incentive: Optional local incentive

    Returns:
        IncentivePackage with net cost
    """
    federal_itc = FEDERAL_ITC_RATE * total_cost
    depreciation_base = total_cost - federal_itc
    depreciation_benefit = depreciation_base * CORPORATE_TAX_RATE
    local = calculate_local_incentive(total_cost, local_incentive)

    total_incentives = federal_itc + depreciation_benefit + local

    return IncentivePackage(
        federal_itc=federal_itc,
        depreciation_benefit=depreciation_benefit,
        local_incentive=local,
        total_incentives=total_incentives,
        net_cost=total_cost - total_incentives
    )


def escalate(base: float, rate: float, years: int) -> EscalatedSeries:
    """
    Grow a yearly value at a fixed compound rate.

    Args:
        base: Year 1 value
        rate: Annual growth rate (e.g., 0.03 for 3%)
        years: Number of years

    Returns:
        EscalatedSeries of base * (1 + rate) ** (year - 1) and its sum
    """
    values = base * (1 + rate) ** np.arange(years)
    running = np.cumsum(values)
    return EscalatedSeries(
        values=tuple(float(v) for v in values),
        total=float(running[-1]) if years > 0 else 0.0
    )


def annual_therms_displaced(actual_energy_btu: float) -> float:
    """Convert daily solar output to therms of gas avoided per year."""
    return actual_energy_btu * DAYS_PER_YEAR / (BTU_PER_THERM * BOILER_EFFICIENCY)


def calculate_payback(annual_savings, net_cost: float) -> Optional[int]:
    """
    Find the first year cumulative savings cover the net cost.

    Args:
        annual_savings: Yearly savings, year 1 first
        net_cost: Net project cost

    Returns:
        1-based year, or None if not reached
    """
    cumulative = np.cumsum(annual_savings)
    reached = np.nonzero(cumulative >= net_cost)[0]
    if reached.size == 0:
        return None
    return int(reached[0]) + 1


def calculate_savings(
    actual_energy_btu: float,
    gas_price_per_therm: float,
    net_cost: float
) -> FinancialProjection:
    """
    Project gas savings with 3% annual price escalation.

    The 20-year and 25-year series are escalated independently from the same
    first-year savings. Payback and ROI use the 20-year series; the cash flow
    uses the 25-year series.

    Args:
        actual_energy_btu: Installed system output (BTU/day)
        gas_price_per_therm: Natural gas price ($/therm)
        net_cost: Project cost after incentives

    Returns:
        FinancialProjection with payback, ROI and cumulative cash flow
    """
    annual_therms = annual_therms_displaced(actual_energy_btu)
    first_year_savings = annual_therms * gas_price_per_therm

    savings_20 = escalate(first_year_savings, GAS_ESCALATION_RATE, ROI_HORIZON_YEARS)
    savings_25 = escalate(first_year_savings, GAS_ESCALATION_RATE, CASH_FLOW_HORIZON_YEARS)

    payback = calculate_payback(savings_20.values, net_cost)

    if net_cost == 0:
        roi_20 = None
    else:
        roi_20 = (savings_20.total - net_cost) / net_cost * 100

    # Start negative (initial investment)
    cash_flow = [-net_cost]
    for year_savings in savings_25.values:
        cash_flow.append(cash_flow[-1] + year_savings)

    return FinancialProjection(
        annual_therms=annual_therms,
        first_year_savings=first_year_savings,
        annual_savings_20yr=savings_20.values,
        total_savings_20yr=savings_20.total,
        annual_savings_25yr=savings_25.values,
        total_savings_25yr=savings_25.total,
        simple_payback_years=payback,
        roi_20_year_percent=roi_20,
        cumulative_cash_flow=tuple(cash_flow)
    )


def calculate_environmental_impact(annual_therms: float) -> EnvironmentalImpact:
    """
    Calculate avoided CO2 and equivalent trees.

    Args:
        annual_therms: Therms of natural gas displaced per year

    Returns:
        EnvironmentalImpact in tons CO2 per year
    """
    co2_tons = annual_therms * CO2_TONS_PER_THERM
    return EnvironmentalImpact(
        annual_co2_tons=co2_tons,
        equivalent_trees=round_half_up(co2_tons / CO2_TONS_PER_TREE)
    )
