"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, today_utc, to_utc, parse_iso
from utils.debounce import Debouncer
from utils.passwords import hash_password, verify_password
