"""Shared utilities for the service."""
from utils.case import dict_keys_to_camel, pick
from utils.dates import date_part, parse_date

__all__ = [
    "date_part",
    "dict_keys_to_camel",
    "parse_date",
    "pick",
]
