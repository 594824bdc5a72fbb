from dataclasses import dataclass


@dataclass(slots=True)
class PendingRevert:
    """Scheduled swap-back of a rejected swap.

    The positions are captured when the revert is scheduled, so later clicks cannot
    change what gets swapped back.
    """

    first: int
    second: int
    remaining: float
