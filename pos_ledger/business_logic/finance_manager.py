# pos_ledger/business_logic/finance_manager.py

from datetime import date, datetime
from typing import Dict, List, Optional

from pos_ledger.business_logic.affordability_projector import AffordabilityProjector
from pos_ledger.business_logic.entities import (
    AffordabilityResult, CashAccountEntity, CashTransactionEntity,
)
from pos_ledger.business_logic.forecast import ForecastProvider, TrendForecaster
from pos_ledger.config import FORECAST_LOOKBACK_MONTHS
from pos_ledger.constants import CashAccountType, CashTransactionType
from pos_ledger.data_access.data_store import FinancialDataStore
from pos_ledger.utils.date_converter import DateLike
import logging

logger = logging.getLogger(__name__)


class FinanceManager:
    def __init__(self, store: FinancialDataStore, projector: Optional[AffordabilityProjector] = None):
        if store is None: raise ValueError("store cannot be None")
        self.store = store
        self.projector = projector or AffordabilityProjector()

    # --- cash accounts ---
    def add_cash_account(self, name: str,
                         account_type: CashAccountType = CashAccountType.CASH,
                         starting_balance: float = 0.0) -> CashAccountEntity:
        if not name or not name.strip(): raise ValueError("Account name is required.")
        account = self.store.add_cash_account(CashAccountEntity(
            name=name.strip(), account_type=CashAccountType(account_type), balance=float(starting_balance),
        ))
        logger.info(f"Cash account '{account.name}' ({account.account_type.value}) added with ID {account.id}.")
        return account

    def total_cash_balance(self) -> float:
        return self.store.get_cash_balance_total()

    def transactions_for(self, account_id: int) -> List[CashTransactionEntity]:
        """Transactions of one account, newest first."""
        return sorted(self.store.get_cash_transactions_for(account_id), key=lambda t: t.date, reverse=True)

    def balances_by_type(self) -> Dict[CashAccountType, float]:
        totals = {account_type: 0.0 for account_type in CashAccountType}
        for account in self.store.get_cash_accounts():
            totals[account.account_type] += account.balance
        return totals

    def apply_cash_transaction(self,
                               account_id: int,
                               transaction_type: CashTransactionType,
                               amount: float,
                               description: str = "",
                               on: Optional[DateLike] = None) -> CashAccountEntity:
        """
        Records the transaction and returns the account with its new balance.
        Deposits add, withdrawals subtract, adjustments set the balance to `amount`.
        """
        transaction_type = CashTransactionType(transaction_type)
        if transaction_type == CashTransactionType.ADJUSTMENT:
            if amount < 0: raise ValueError("Adjusted balance cannot be negative.")
        elif amount <= 0:
            raise ValueError("Transaction amount must be positive.")

        account = self.store.get_cash_account(account_id)
        if account is None:
            raise ValueError(f"Cash account with ID {account_id} not found.")

        if transaction_type == CashTransactionType.DEPOSIT:
            new_balance = account.balance + amount
        elif transaction_type == CashTransactionType.WITHDRAWAL:
            new_balance = account.balance - amount
            if new_balance < 0:
                logger.warning(f"Withdrawal of {amount:.2f} overdraws cash account ID {account_id} "
                               f"(new balance {new_balance:.2f}).")
        else:
            new_balance = float(amount)

        when = on if on is not None else datetime.now()
        if not isinstance(when, datetime):
            when = datetime.combine(when, datetime.min.time())

        _, updated = self.store.record_cash_transaction(
            CashTransactionEntity(date=when, account_id=account_id, transaction_type=transaction_type,
                                  amount=float(amount), description=description),
            CashAccountEntity(id=account.id, name=account.name, account_type=account.account_type,
                              balance=new_balance),
        )
        logger.info(f"{transaction_type.value.capitalize()} of {amount:.2f} on cash account ID {account_id}; "
                    f"balance {account.balance:.2f} -> {new_balance:.2f}.")
        return updated

    # --- affordability ---
    def default_forecaster(self, today: Optional[DateLike] = None) -> TrendForecaster:
        return TrendForecaster(self.store.get_sales(), self.store.get_expenses(),
                               lookback_months=FORECAST_LOOKBACK_MONTHS, today=today)

    def check_affordability(self,
                            new_monthly_expense: float,
                            duration_months: int,
                            forecast_provider: Optional[ForecastProvider] = None,
                            today: Optional[DateLike] = None) -> AffordabilityResult:
        """
        Projects the combined cash balance of all accounts forward with the given
        forecast (a trend over recent history when none is supplied).
        """
        if new_monthly_expense < 0: raise ValueError("New monthly expense cannot be negative.")
        if duration_months < 0: raise ValueError("Duration cannot be negative.")

        provider = forecast_provider or self.default_forecaster(today)
        forecast = provider.forecast_net_cash_flow(duration_months)
        return self.projector.project(
            current_balance=self.total_cash_balance(),
            monthly_net_cash_flow_forecast=forecast,
            new_monthly_expense=new_monthly_expense,
            duration_months=duration_months,
            start_month=today or date.today(),
        )
