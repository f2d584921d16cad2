"""Utility functions for vozruta."""

from vozruta.utils.amount_parser import extract_amount, normalize_amount, parse_amount
from vozruta.utils.date_parser import extract_date, parse_date
from vozruta.utils.time_parser import extract_time
from vozruta.utils.name_splitter import split_passenger_destination
from vozruta.utils.package_type import detect_package_type

__all__ = [
    "extract_amount",
    "normalize_amount",
    "parse_amount",
    "extract_date",
    "parse_date",
    "extract_time",
    "split_passenger_destination",
    "detect_package_type",
]
