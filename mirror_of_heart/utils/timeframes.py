# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta

TIMEFRAME_DAYS = {"1d": 1, "7d": 7, "30d": 30, "90d": 90}
TIMEFRAMES = list(TIMEFRAME_DAYS)

# Export's "all" reaches back one year
ALL_TIME_DAYS = 365


def timeframe_start(timeframe: str, default_days: int = 30) -> datetime:
    """Lower bound for a timeframe label. Unknown labels fall back to `default_days`."""
    if timeframe == "all":
        days = ALL_TIME_DAYS
    else:
        days = TIMEFRAME_DAYS.get(timeframe, default_days)
    return datetime.utcnow() - timedelta(days=days)
