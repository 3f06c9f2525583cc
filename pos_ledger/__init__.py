# pos_ledger/__init__.py
"""Financial ledger aggregation for a small-business point-of-sale system."""

__version__ = "0.1.0"
