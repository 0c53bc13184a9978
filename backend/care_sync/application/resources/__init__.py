from .base import DimensionRule, ResourceConfig, no_expected_dimensions
from .vital_signs import VITAL_SIGNS
from .bathing_records import BATHING_RECORDS
from .round_records import ROUND_RECORDS
from .staff_management import STAFF_MANAGEMENT

RESOURCES: dict[str, ResourceConfig] = {
    config.name: config
    for config in (VITAL_SIGNS, BATHING_RECORDS, ROUND_RECORDS, STAFF_MANAGEMENT)
}

__all__ = [
    "DimensionRule",
    "ResourceConfig",
    "no_expected_dimensions",
    "VITAL_SIGNS",
    "BATHING_RECORDS",
    "ROUND_RECORDS",
    "STAFF_MANAGEMENT",
    "RESOURCES",
]
