"""
Drip scheduling: split per-wallet trade amounts into time-distributed sub-trades.

The duration is cut into `intervals` equal windows and every wallet gets
exactly one sub-trade per window, so early windows always contain events
from every wallet instead of one wallet's sequence running before another's.
Amounts are split either evenly or with a random "jiggle", and per-wallet
sums are always exact.

The scheduler is pure: no I/O, no clock. Randomness comes from an injectable
random.Random so schedules are reproducible under a fixed seed.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_JIGGLE_FACTOR = 0.15

# Fixed-point scale for jiggle weights; amounts are wei-sized integers and
# must not go through float division.
_WEIGHT_SCALE = 10**9

_default_rng = random.Random()


class ScheduleValidationError(ValueError):
    """Raised when scheduling inputs are invalid."""
    pass


@dataclass(frozen=True)
class DripEvent:
    """One scheduled sub-trade."""

    wallet_id: int
    amount: int
    delay_ms: int


def split_evenly(total: int, count: int) -> List[int]:
    """Split `total` into `count` integers differing by at most one."""
    if count <= 0:
        raise ScheduleValidationError("count must be > 0")
    base, remainder = divmod(total, count)
    return [base + 1 if index < remainder else base for index in range(count)]


def jiggle_amounts(
    total: int,
    count: int,
    factor: float = DEFAULT_JIGGLE_FACTOR,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Split `total` into `count` randomly perturbed parts that sum to `total`.

    Each part starts from a multiplier drawn in [1 - factor, 1 + factor];
    multipliers are normalized so the parts sum exactly, and the integer
    rounding remainder is spread one unit at a time.

    Args:
        total: Amount to split
        count: Number of parts
        factor: Maximum relative deviation from the even split, in [0, 1)
        rng: Randomness source (process-wide generator if omitted)
    """
    if count <= 0:
        raise ScheduleValidationError("count must be > 0")
    if not 0 <= factor < 1:
        raise ScheduleValidationError(f"jiggle factor must be in [0, 1), got {factor}")
    if count == 1:
        return [total]

    rng = rng if rng is not None else _default_rng
    weights = [
        int((1 - factor + rng.random() * 2 * factor) * _WEIGHT_SCALE) for _ in range(count)
    ]
    weight_sum = sum(weights)

    amounts = [total * weight // weight_sum for weight in weights]
    remainder = total - sum(amounts)
    for index in range(remainder):
        amounts[index] += 1
    return amounts


def allocate_wallet_amounts(
    total: int,
    wallet_count: int,
    jiggle: bool = True,
    factor: float = DEFAULT_JIGGLE_FACTOR,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Split one trade across `wallet_count` wallets.

    Raises:
        ScheduleValidationError: If any wallet would receive nothing
    """
    if jiggle:
        amounts = jiggle_amounts(total, wallet_count, factor, rng)
    else:
        amounts = split_evenly(total, wallet_count)

    if any(amount <= 0 for amount in amounts):
        raise ScheduleValidationError("total amount is too small for the selected wallet count")
    return amounts


def _validate_inputs(
    wallet_ids: Sequence[int], amounts: Sequence[int], duration_ms: int, intervals: int
):
    if len(wallet_ids) != len(amounts):
        raise ScheduleValidationError(
            f"wallet_ids and amounts must have the same length "
            f"({len(wallet_ids)} != {len(amounts)})"
        )
    if duration_ms <= 0:
        raise ScheduleValidationError("duration_ms must be > 0")
    if intervals <= 0:
        raise ScheduleValidationError("intervals must be > 0")
    if len(set(wallet_ids)) != len(wallet_ids):
        raise ScheduleValidationError("wallet_ids must be unique")
    if any(amount < 0 for amount in amounts):
        raise ScheduleValidationError("amounts must be non-negative")


def build_drip_schedule(
    wallet_ids: Sequence[int],
    amounts: Sequence[int],
    duration_ms: int,
    intervals: int,
    jiggle: bool = True,
    jiggle_factor: float = DEFAULT_JIGGLE_FACTOR,
    rng: Optional[random.Random] = None,
) -> List[DripEvent]:
    """
    Build a drip schedule for a set of wallets.

    Args:
        wallet_ids: Wallet identifiers
        amounts: Total amount per wallet, same order as wallet_ids
        duration_ms: Time span the schedule covers
        intervals: Sub-trades per wallet
        jiggle: Perturb sub-amounts and offsets randomly
        jiggle_factor: Maximum relative deviation of a sub-amount
        rng: Randomness source (process-wide generator if omitted)

    Returns:
        len(wallet_ids) * intervals events sorted by delay_ms, each delay
        within [0, duration_ms]
    """
    _validate_inputs(wallet_ids, amounts, duration_ms, intervals)
    rng = rng if rng is not None else _default_rng
    wallet_count = len(wallet_ids)

    events: List[DripEvent] = []
    for wallet_index, (wallet_id, total) in enumerate(zip(wallet_ids, amounts)):
        if jiggle:
            sub_amounts = jiggle_amounts(total, intervals, jiggle_factor, rng)
        else:
            sub_amounts = split_evenly(total, intervals)

        for interval, sub_amount in enumerate(sub_amounts):
            window_start = interval * duration_ms // intervals
            window_width = (interval + 1) * duration_ms // intervals - window_start
            if jiggle:
                offset = int(rng.random() * window_width)
            else:
                # Stagger wallets evenly inside each window
                offset = window_width * wallet_index // wallet_count
            delay_ms = min(window_start + offset, duration_ms)
            events.append(DripEvent(wallet_id=wallet_id, amount=sub_amount, delay_ms=delay_ms))

    events.sort(key=lambda event: event.delay_ms)
    logger.debug(
        f"Built drip schedule: {wallet_count} wallets x {intervals} intervals over {duration_ms}ms"
    )
    return events
