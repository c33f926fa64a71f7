"""
You First tracker: streaks, formation stages and health scores for habits,
rules and goals.
"""

from you_first.db import init_db
from you_first.errors import InvalidInputError

__all__ = ["init_db", "InvalidInputError"]
