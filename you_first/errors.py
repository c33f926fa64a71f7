"""
Errors raised by the derivation core.
"""


class InvalidInputError(ValueError):
    """Malformed date or streak value passed to a derivation function."""
