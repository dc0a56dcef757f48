"""Shared fixtures for the solar thermal calculation tests."""

import pytest

from solar_thermal.report import compute_result
from solar_thermal.site_inputs import SiteInputs


@pytest.fixture
def reference_site():
    """20 two-bedroom apartments (700 gal/day) on a 2,000 sqft flat south roof."""
    return SiteInputs(
        demand_mode='apartment',
        apartments=20,
        bedrooms_per_apartment=2,
        coverage_target_percent=75,
        roof_area_sqft=2000,
        roof_type='flat',
        orientation='south',
        panel_mode='auto',
        gas_price_per_therm=2.0,
    )


@pytest.fixture
def small_roof_site(reference_site):
    """Same building with only 200 sqft of roof."""
    return SiteInputs(**{**reference_site.__dict__, 'roof_area_sqft': 200})


@pytest.fixture
def reference_result(reference_site):
    return compute_result(reference_site)
