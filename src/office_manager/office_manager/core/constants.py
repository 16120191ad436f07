"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MINUTES_PER_HOUR = 60

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Tolerance for the installment sum check, in cents.
ALLOCATION_TOLERANCE_CENTS = 1

MIN_YEAR = 2000
MAX_YEAR = 2100

# Collaborators with this login are excluded from payment reports.
ADMIN_LOGIN = "admin"
