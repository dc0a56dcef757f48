"""
Site inputs for a solar thermal estimate and their structural validation.

Values are checked for type only. Out-of-range numbers (negative roof area,
zero gas price, ...) are passed through to the calculations unchanged.
"""

import logging
import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .catalog_data import DEFAULT_SITE_INPUTS

logger = logging.getLogger(__name__)

DEMAND_MODE_APARTMENT = 'apartment'
DEMAND_MODE_DIRECT = 'direct-gpd'

PANEL_MODE_AUTO = 'auto'
PANEL_MODE_MANUAL = 'manual'

INCENTIVE_PERCENT = 'percent'
INCENTIVE_FIXED_AMOUNT = 'fixed-amount'

NUMERIC_FIELDS = (
    'apartments',
    'bedrooms_per_apartment',
    'direct_gallons_per_day',
    'gas_price_per_therm',
    'roof_area_sqft',
    'coverage_target_percent',
)

TEXT_FIELDS = (
    'address',
    'demand_mode',
    'roof_type',
    'orientation',
    'panel_mode',
    'manual_panel',
)


class InputValidationError(ValueError):
    """Raised when a site input has the wrong structural type."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


@dataclass(frozen=True)
class LocalIncentive:
    """Optional local incentive, either a percent of installed cost or a fixed amount."""
    kind: str = INCENTIVE_PERCENT
    value: float = 0.0


@dataclass(frozen=True)
class SiteInputs:
    """Raw inputs describing the building and roof."""
    demand_mode: str = DEFAULT_SITE_INPUTS['demand_mode']
    apartments: float = DEFAULT_SITE_INPUTS['apartments']
    bedrooms_per_apartment: float = DEFAULT_SITE_INPUTS['bedrooms_per_apartment']
    direct_gallons_per_day: float = DEFAULT_SITE_INPUTS['direct_gallons_per_day']
    gas_price_per_therm: float = DEFAULT_SITE_INPUTS['gas_price_per_therm']
    roof_area_sqft: float = DEFAULT_SITE_INPUTS['roof_area_sqft']
    roof_type: str = DEFAULT_SITE_INPUTS['roof_type']
    orientation: str = DEFAULT_SITE_INPUTS['orientation']
    panel_mode: str = DEFAULT_SITE_INPUTS['panel_mode']
    manual_panel: str = DEFAULT_SITE_INPUTS['manual_panel']
    coverage_target_percent: float = DEFAULT_SITE_INPUTS['coverage_target_percent']
    local_incentive: Optional[LocalIncentive] = None
    address: str = DEFAULT_SITE_INPUTS['address']

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'SiteInputs':
        """
        Build SiteInputs from loosely typed form values.

        Missing, None or blank values fall back to the defaults. Numeric
        strings are accepted. Keys that are not site inputs are ignored.

        Args:
            values: Mapping of field name to raw value

        Returns:
            Validated SiteInputs

        Raises:
            InputValidationError: If a value has the wrong type
        """
        kwargs = {}
        for name in NUMERIC_FIELDS:
            raw = values.get(name)
            if _is_blank(raw):
                continue
            kwargs[name] = _to_number(name, raw)

        for name in TEXT_FIELDS:
            raw = values.get(name)
            if raw is None:
                continue
            if not isinstance(raw, str):
                logger.debug("Rejected %s=%r", name, raw)
                raise InputValidationError(name, f"expected text, got {type(raw).__name__}")
            kwargs[name] = raw.strip() if name != 'address' else raw

        kwargs['local_incentive'] = _to_local_incentive(values.get('local_incentive'))

        site = cls(**kwargs)
        site.validate()
        return site

    def validate(self) -> None:
        """
        Check field types without judging values.

        Raises:
            InputValidationError: If a field has the wrong type
        """
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if not _is_number(value):
                logger.debug("Rejected %s=%r", name, value)
                raise InputValidationError(name, f"expected a number, got {type(value).__name__}")
            if not _is_finite(value):
                raise InputValidationError(name, "expected a finite number")

        for name in TEXT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                logger.debug("Rejected %s=%r", name, value)
                raise InputValidationError(name, f"expected text, got {type(value).__name__}")

        incentive = self.local_incentive
        if incentive is None:
            return
        if not isinstance(incentive, LocalIncentive):
            raise InputValidationError(
                'local_incentive',
                f"expected LocalIncentive, got {type(incentive).__name__}"
            )
        if not isinstance(incentive.kind, str):
            raise InputValidationError('local_incentive.kind', "expected text")
        if not _is_number(incentive.value):
            raise InputValidationError('local_incentive.value', "expected a number")
        if not _is_finite(incentive.value):
            raise InputValidationError('local_incentive.value', "expected a finite number")

    def to_dict(self) -> dict:
        """Plain dict of field values, e.g. for seeding a form."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if self.local_incentive is not None:
            data['local_incentive'] = {
                'kind': self.local_incentive.kind,
                'value': self.local_incentive.value,
            }
        return data


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    # numpy scalars register as numbers.Real; bool is an int subclass
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def _to_number(name: str, value: Any) -> float:
    """Convert a form value to a number, keeping ints as ints."""
    if isinstance(value, bool):
        raise InputValidationError(name, "expected a number, got bool")
    if _is_number(value):
        number = value
    else:
        try:
            number = float(value)
        except OverflowError as e:
            raise InputValidationError(name, "expected a finite number") from e
        except (TypeError, ValueError) as e:
            logger.debug("Rejected %s=%r", name, value)
            raise InputValidationError(name, f"expected a number, got {value!r}") from e
    if not _is_finite(number):
        raise InputValidationError(name, "expected a finite number")
    return number


def _to_local_incentive(value: Any) -> Optional[LocalIncentive]:
    if value is None or value is False:
        return None
    if isinstance(value, LocalIncentive):
        return value
    if isinstance(value, Mapping):
        if value.get('enabled') is False:
            return None
        kind = value.get('kind', INCENTIVE_PERCENT)
        if not isinstance(kind, str):
            raise InputValidationError('local_incentive.kind', "expected text")
        raw = value.get('value')
        amount = 0.0 if _is_blank(raw) else _to_number('local_incentive.value', raw)
        return LocalIncentive(kind=kind, value=amount)
    raise InputValidationError(
        'local_incentive',
        f"expected a mapping or LocalIncentive, got {type(value).__name__}"
    )
