"""
Scheduling core: interval overlap detection and commission arithmetic.

Both appointment booking and walk-in recording build on these helpers.
"""

from .availability import compute_end_time, has_conflict, intervals_overlap
from .commission import compute_commission, quantize_money, resolve_charged_price, summarize_commissions

__all__ = [
    "compute_commission",
    "compute_end_time",
    "has_conflict",
    "intervals_overlap",
    "quantize_money",
    "resolve_charged_price",
    "summarize_commissions",
]
