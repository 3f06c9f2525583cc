# pos_ledger/business_logic/affordability_projector.py

from datetime import date
from typing import List, Optional, Sequence

from pos_ledger.business_logic.entities import AffordabilityProjectionEntry, AffordabilityResult
from pos_ledger.utils.date_converter import DateLike, add_months, month_key, month_start
import logging

logger = logging.getLogger(__name__)


class AffordabilityProjector:
    """
    Rolls a cash balance forward month by month to decide whether a new fixed
    monthly cost can be carried.

    The net cash-flow forecast comes from an outside collaborator (trend model,
    language model or manual entry) and is used as given.
    """

    def project(self,
                current_balance: float,
                monthly_net_cash_flow_forecast: Sequence[float],
                new_monthly_expense: float,
                duration_months: int,
                start_month: Optional[DateLike] = None) -> AffordabilityResult:
        """
        balance[i] = balance[i-1] + forecast[i] - new_monthly_expense, starting from
        current_balance. The expense is affordable only if no month in the horizon
        ends negative; a later recovery does not change that.

        Projection months start with the month after `start_month` (default: today).
        """
        if duration_months <= 0:
            return AffordabilityResult(is_affordable=True, projection=[])

        forecast = list(monthly_net_cash_flow_forecast[:duration_months])
        if len(forecast) < duration_months:
            logger.warning(f"Forecast covers {len(forecast)} of {duration_months} months; "
                           f"remaining months are projected with zero net cash flow.")
            forecast.extend([0.0] * (duration_months - len(forecast)))

        first_month = add_months(month_start(start_month or date.today()), 1)
        balance = current_balance
        projection: List[AffordabilityProjectionEntry] = []
        for offset, net_flow in enumerate(forecast):
            balance = balance + net_flow - new_monthly_expense
            projection.append(AffordabilityProjectionEntry(
                month=month_key(add_months(first_month, offset)),
                projected_cash_balance=balance,
                is_negative=balance < 0,
            ))

        is_affordable = not any(entry.is_negative for entry in projection)
        logger.info(f"Affordability of {new_monthly_expense:.2f}/month over {duration_months} months "
                    f"from balance {current_balance:.2f}: {'affordable' if is_affordable else 'not affordable'}.")
        return AffordabilityResult(is_affordable=is_affordable, projection=projection)
