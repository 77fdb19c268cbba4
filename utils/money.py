"""
Integer-cents money helpers.

Every amount handled by the order engine is an ``int`` number of cents.
Conversion to euros happens only when a message is rendered for a human.
"""

# Difference (in cents) accepted between a client-computed amount and the server one
CENT_TOLERANCE = 1


def format_euros(cents: int) -> str:
    """
    Render cents as a euro amount with two decimals.

    Examples:
        >>> format_euros(1234)
        '12.34'
        >>> format_euros(5)
        '0.05'
        >>> format_euros(-250)
        '-2.50'
    """
    sign = "-" if cents < 0 else ""
    euros, remainder = divmod(abs(cents), 100)
    return f"{sign}{euros}.{remainder:02d}"


def percentage_of(cents: int, percent: int | float) -> int:
    """Floor of ``cents * percent / 100`` (a discount never rounds up)."""
    return int((cents * percent) // 100)


def within_tolerance(expected_cents: int, claimed_cents: int, tolerance: int = CENT_TOLERANCE) -> bool:
    return abs(expected_cents - claimed_cents) <= tolerance


def clamp_non_negative(cents: int) -> int:
    return max(0, cents)
