"""
Subscription Periods - Current billing period of a Stripe subscription

Works on the subscription object as a plain mapping (the shape returned by
the Stripe API or stored from a webhook); no Stripe calls are made.

When Stripe reports current_period_start/current_period_end they are used
as-is. Older API versions omit them, so the period is derived by stepping from
the billing cycle anchor by the price's recurring interval until the next step
would pass `now`.
"""

import calendar
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

DEFAULT_INTERVAL = "month"

INTERVALS = ("day", "week", "month", "year")


@dataclass(frozen=True)
class BillingPeriod:
    """Start (inclusive) and end (exclusive) of a billing period, in UTC"""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


def _from_epoch(seconds: Any) -> datetime:
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc)


def add_interval(moment: datetime, interval: str, count: int) -> datetime:
    """
    Add `count` billing intervals to a datetime

    Month and year steps clamp to the last day of the target month
    (Jan 31 + 1 month = Feb 28/29).

    Args:
        moment: Start datetime
        interval: "day", "week", "month" or "year"
        count: Number of intervals (may be 0)

    Returns:
        Shifted datetime
    """
    if interval == "day":
        return moment + timedelta(days=count)
    if interval == "week":
        return moment + timedelta(weeks=count)

    months = count * 12 if interval == "year" else count
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _recurring(subscription: Mapping[str, Any]) -> Mapping[str, Any]:
    items = (subscription.get("items") or {}).get("data") or []
    if not items:
        return {}
    price = items[0].get("price") or {}
    return price.get("recurring") or {}


def calculate_subscription_periods(
    subscription: Mapping[str, Any], now: datetime | None = None
) -> BillingPeriod:
    """
    Work out the billing period a subscription is currently in

    Args:
        subscription: Stripe subscription object as a mapping
        now: Reference time (default: current UTC time)

    Returns:
        BillingPeriod for the period containing `now` (or the first period
        when the anchor is in the future)

    Raises:
        ValueError: If the subscription has neither period bounds nor an anchor,
            or its recurring interval or interval_count is unsupported
    """
    period_start = subscription.get("current_period_start")
    period_end = subscription.get("current_period_end")
    if period_start and period_end:
        return BillingPeriod(start=_from_epoch(period_start), end=_from_epoch(period_end))

    anchor_ts = subscription.get("billing_cycle_anchor") or subscription.get("created")
    if not anchor_ts:
        raise ValueError("Subscription has no billing_cycle_anchor or created timestamp")

    recurring = _recurring(subscription)
    interval = recurring.get("interval") or DEFAULT_INTERVAL
    if interval not in INTERVALS:
        raise ValueError(f"Unsupported billing interval: {interval}")
    count = int(recurring.get("interval_count") or 1)
    if count < 1:
        raise ValueError(f"Unsupported interval_count: {count}")

    now = now or datetime.now(timezone.utc)
    anchor = _from_epoch(anchor_ts)

    # Step from the anchor each time so month clamping never drifts
    steps = 0
    while add_interval(anchor, interval, (steps + 1) * count) <= now:
        steps += 1

    start = add_interval(anchor, interval, steps * count)
    return BillingPeriod(start=start, end=add_interval(anchor, interval, (steps + 1) * count))
