# pos_ledger/business_logic/period_aggregator.py

from datetime import date, timedelta
from typing import Any, Callable, Dict, Iterable, Optional
from operator import attrgetter

from pos_ledger.constants import Granularity
from pos_ledger.utils.date_converter import (
    DateLike, as_date, day_key, month_key, month_start, add_months, next_month_start,
    iter_days, iter_month_keys,
)


AmountGetter = Callable[[Any], float]


class PeriodAggregator:
    """
    Buckets dated monetary records into calendar day or month buckets and sums them.

    Two flavors exist and callers must pick the one their view needs:
      * aggregate()        - "group everything" views (cash flow, net profit report);
                             only buckets that received at least one record are emitted.
      * aggregate_seeded() - trailing-window views (last 30 days, last 12 months);
                             every bucket in the range is present, gaps are 0.0.

    Range filters are half-open: start <= record date < end. Records dated in the
    future are kept when they fall inside the range. Nothing here raises.
    """

    def __init__(self, amount_of: AmountGetter = attrgetter("amount"), date_of: Callable[[Any], DateLike] = attrgetter("date")):
        self.amount_of = amount_of
        self.date_of = date_of

    @staticmethod
    def bucket_key(value: DateLike, granularity: Granularity) -> str:
        return day_key(value) if granularity == Granularity.DAY else month_key(value)

    def _in_range(self, record_date: date, start: Optional[date], end: Optional[date]) -> bool:
        if start is not None and record_date < start:
            return False
        if end is not None and record_date >= end:
            return False
        return True

    def aggregate(self,
                  records: Iterable[Any],
                  granularity: Granularity,
                  start: Optional[DateLike] = None,
                  end: Optional[DateLike] = None,
                  amount_of: Optional[AmountGetter] = None) -> Dict[str, float]:
        get_amount = amount_of or self.amount_of
        start_d = as_date(start) if start is not None else None
        end_d = as_date(end) if end is not None else None

        buckets: Dict[str, float] = {}
        for record in records:
            record_date = as_date(self.date_of(record))
            if not self._in_range(record_date, start_d, end_d):
                continue
            key = self.bucket_key(record_date, granularity)
            buckets[key] = buckets.get(key, 0.0) + get_amount(record)
        return buckets

    def seed_buckets(self, granularity: Granularity, start: DateLike, end: DateLike) -> Dict[str, float]:
        if granularity == Granularity.DAY:
            return {day_key(d): 0.0 for d in iter_days(start, end)}
        return {key: 0.0 for key in iter_month_keys(start, end)}

    def aggregate_seeded(self,
                         records: Iterable[Any],
                         granularity: Granularity,
                         start: DateLike,
                         end: DateLike,
                         amount_of: Optional[AmountGetter] = None) -> Dict[str, float]:
        buckets = self.seed_buckets(granularity, start, end)
        for key, value in self.aggregate(records, granularity, start, end, amount_of).items():
            buckets[key] = buckets.get(key, 0.0) + value
        return buckets

    def trailing_days(self,
                      records: Iterable[Any],
                      days: int = 30,
                      today: Optional[DateLike] = None,
                      amount_of: Optional[AmountGetter] = None) -> Dict[str, float]:
        """The last `days` calendar days ending with today, oldest first."""
        today_d = as_date(today) if today is not None else date.today()
        start = today_d - timedelta(days=days - 1)
        return self.aggregate_seeded(records, Granularity.DAY, start, today_d + timedelta(days=1), amount_of)

    def trailing_months(self,
                        records: Iterable[Any],
                        months: int = 12,
                        today: Optional[DateLike] = None,
                        amount_of: Optional[AmountGetter] = None) -> Dict[str, float]:
        """The last `months` calendar months including the current one, oldest first."""
        today_d = as_date(today) if today is not None else date.today()
        start = add_months(month_start(today_d), -(months - 1))
        return self.aggregate_seeded(records, Granularity.MONTH, start, next_month_start(today_d), amount_of)
