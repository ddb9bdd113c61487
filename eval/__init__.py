# -*- coding: utf-8 -*-
"""
Evaluation utilities: route metrics and the exhaustive small-map oracle.
"""

from __future__ import annotations

from .metrics import (
    is_valid_route,
    route_metrics,
    optimal_set_agreement,
    sum_time_sec,
    runtime_statistics,
)
from .exact_small import exact_optimal

__all__ = [
    "is_valid_route",
    "route_metrics",
    "optimal_set_agreement",
    "sum_time_sec",
    "runtime_statistics",
    "exact_optimal",
]
