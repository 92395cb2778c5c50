"""Client-side pieces for the clearing-house canister.

The ic-py transport lives in :mod:`.canister` and is not imported here.
"""

from .actor import ClearingHouseActor, ClearingHouseService
from .conversion import PRECISION_DECIMALS, to_parse_units, to_precision
from .principal import Principal

__all__ = [
    "ClearingHouseActor",
    "ClearingHouseService",
    "PRECISION_DECIMALS",
    "Principal",
    "to_parse_units",
    "to_precision",
]
