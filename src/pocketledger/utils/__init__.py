"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date, parse_month, month_key, month_bounds
from pocketledger.utils.amount_parser import parse_amount, to_cents

__all__ = ["parse_date", "parse_month", "month_key", "month_bounds", "parse_amount", "to_cents"]
