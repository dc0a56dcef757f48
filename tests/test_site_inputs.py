"""
Tests for building SiteInputs from form values and type validation.
"""

import numpy as np
import pytest

from solar_thermal.catalog_data import DEFAULT_SITE_INPUTS
from solar_thermal.site_inputs import InputValidationError, LocalIncentive, SiteInputs


class TestDefaults:

    def test_documented_defaults(self):
        site = SiteInputs()
        assert site.coverage_target_percent == 75
        assert site.panel_mode == 'auto'
        assert site.roof_type == 'flat'
        assert site.orientation == 'south'
        assert site.local_incentive is None

    def test_empty_mapping_matches_defaults(self):
        assert SiteInputs.from_mapping({}) == SiteInputs()

    def test_to_dict_round_trips_defaults(self):
        data = SiteInputs().to_dict()
        for key, value in DEFAULT_SITE_INPUTS.items():
            assert data[key] == value


class TestFromMapping:

    def test_numeric_strings_are_converted(self):
        site = SiteInputs.from_mapping({'apartments': '12', 'gas_price_per_therm': '1.75'})
        assert site.apartments == 12
        assert site.gas_price_per_therm == pytest.approx(1.75)

    @pytest.mark.parametrize("blank", [None, '', '   '])
    def test_blank_values_use_defaults(self, blank):
        site = SiteInputs.from_mapping({'roof_area_sqft': blank})
        assert site.roof_area_sqft == DEFAULT_SITE_INPUTS['roof_area_sqft']

    def test_unknown_keys_are_ignored(self):
        site = SiteInputs.from_mapping({'step': 3, 'apartments': 4})
        assert site.apartments == 4

    def test_text_is_stripped(self):
        site = SiteInputs.from_mapping({'orientation': ' north '})
        assert site.orientation == 'north'

    def test_numpy_scalars_are_numbers(self):
        site = SiteInputs.from_mapping({
            'apartments': np.int64(5),
            'roof_area_sqft': np.float64(800.0),
            'local_incentive': {'kind': 'percent', 'value': np.float32(10)},
        })
        assert site.apartments == 5
        assert site.roof_area_sqft == 800
        assert site.local_incentive.value == 10

    def test_negative_values_are_not_rejected(self):
        site = SiteInputs.from_mapping({'roof_area_sqft': -50, 'bedrooms_per_apartment': -1})
        assert site.roof_area_sqft == -50
        assert site.bedrooms_per_apartment == -1

    def test_local_incentive_mapping(self):
        site = SiteInputs.from_mapping({'local_incentive': {'kind': 'fixed-amount', 'value': '2500'}})
        assert site.local_incentive == LocalIncentive('fixed-amount', 2500.0)

    def test_disabled_local_incentive(self):
        site = SiteInputs.from_mapping({'local_incentive': {'enabled': False, 'value': 10}})
        assert site.local_incentive is None

    def test_blank_incentive_value_is_zero(self):
        site = SiteInputs.from_mapping({'local_incentive': {'kind': 'percent', 'value': ''}})
        assert site.local_incentive.value == 0


class TestValidation:

    @pytest.mark.parametrize("field, value", [
        ('apartments', 'ten'),
        ('gas_price_per_therm', [2.0]),
        ('roof_area_sqft', True),
        ('coverage_target_percent', 'nan'),
        ('direct_gallons_per_day', float('inf')),
    ])
    def test_bad_numbers(self, field, value):
        with pytest.raises(InputValidationError) as excinfo:
            SiteInputs.from_mapping({field: value})
        assert excinfo.value.field == field

    def test_bad_text(self):
        with pytest.raises(InputValidationError) as excinfo:
            SiteInputs.from_mapping({'orientation': 180})
        assert excinfo.value.field == 'orientation'

    def test_bad_local_incentive(self):
        with pytest.raises(InputValidationError):
            SiteInputs.from_mapping({'local_incentive': 500})

    def test_bad_local_incentive_value(self):
        with pytest.raises(InputValidationError):
            SiteInputs.from_mapping({'local_incentive': {'value': 'lots'}})

    def test_direct_construction_is_checked(self):
        site = SiteInputs(apartments=None)
        with pytest.raises(InputValidationError):
            site.validate()

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match='apartments'):
            SiteInputs(apartments='x').validate()

    def test_valid_inputs_pass(self, reference_site):
        reference_site.validate()

    def test_numpy_scalars_pass_direct_validation(self):
        SiteInputs(apartments=np.int64(5), gas_price_per_therm=np.float64(2.0),
                   local_incentive=LocalIncentive('fixed-amount', np.int32(500))).validate()

    def test_numpy_bool_is_not_a_number(self):
        with pytest.raises(InputValidationError):
            SiteInputs(roof_area_sqft=np.bool_(True)).validate()

    def test_int_too_large_for_float_is_rejected(self):
        with pytest.raises(InputValidationError) as excinfo:
            SiteInputs(apartments=10**400, bedrooms_per_apartment=2).validate()
        assert excinfo.value.field == 'apartments'
        assert 'finite' in str(excinfo.value)

    @pytest.mark.parametrize("value", [10**400, str(10**400)])
    def test_int_too_large_for_float_in_mapping(self, value):
        with pytest.raises(InputValidationError) as excinfo:
            SiteInputs.from_mapping({'apartments': value})
        assert excinfo.value.field == 'apartments'

    def test_huge_incentive_value_is_rejected(self):
        with pytest.raises(InputValidationError) as excinfo:
            SiteInputs.from_mapping({'local_incentive': {'kind': 'fixed-amount', 'value': 10**400}})
        assert excinfo.value.field == 'local_incentive.value'

    def test_non_finite_incentive_rejected_on_direct_construction(self):
        site = SiteInputs(local_incentive=LocalIncentive('fixed-amount', float('inf')))
        with pytest.raises(InputValidationError) as excinfo:
            site.validate()
        assert excinfo.value.field == 'local_incentive.value'
