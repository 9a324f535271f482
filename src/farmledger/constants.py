"""Default farm settings."""

DEFAULT_FARM_NAME = "My Farm"
DEFAULT_CURRENCY = "USD"

DEFAULT_INCOME_CATEGORIES = (
    "Crop Sale",
    "Livestock Sale",
    "Government Grant",
    "Other",
)

DEFAULT_EXPENSE_CATEGORIES = (
    "Seeds",
    "Fertilizer",
    "Pesticides",
    "Fuel",
    "Labor",
    "Repairs",
    "Rent",
    "Utilities",
    "Insurance",
    "Other",
)

# Days ahead that count as "upcoming" for harvests
UPCOMING_HORIZON_DAYS = 30

# Months shown in the monthly financial flow
MONTHLY_FLOW_MONTHS = 12
