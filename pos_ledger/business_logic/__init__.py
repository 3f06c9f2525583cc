# pos_ledger/business_logic/__init__.py
from .period_aggregator import PeriodAggregator
from .profit_calculator import ProfitCalculator, compute_change, filter_sales
from .affordability_projector import AffordabilityProjector
from .forecast import ForecastProvider, StaticForecast, TrendForecaster
from .report_manager import ReportManager
from .payroll_manager import PayrollManager
from .finance_manager import FinanceManager
