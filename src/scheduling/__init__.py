"""
Trade scheduling utilities.
"""

from .drip import (
    DripEvent,
    ScheduleValidationError,
    allocate_wallet_amounts,
    build_drip_schedule,
    jiggle_amounts,
    split_evenly,
)

__all__ = [
    'DripEvent',
    'ScheduleValidationError',
    'allocate_wallet_amounts',
    'build_drip_schedule',
    'jiggle_amounts',
    'split_evenly',
]
