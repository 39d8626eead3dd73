"""Default seed data for a fresh ledger."""

from ledger.models.ledger import Category, Currency, TransactionType


INITIAL_INCOME_CATEGORIES: tuple[Category, ...] = (
    Category(id="inc-1", name="Salary", icon="💰", color="#10b981", type=TransactionType.INCOME),
    Category(id="inc-2", name="Bonus", icon="✨", color="#3b82f6", type=TransactionType.INCOME),
    Category(id="inc-3", name="Freelance", icon="💻", color="#8b5cf6", type=TransactionType.INCOME),
    Category(id="inc-4", name="Business", icon="💼", color="#f59e0b", type=TransactionType.INCOME),
)

INITIAL_EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category(id="exp-1", name="Rent", icon="🏠", color="#f43f5e", type=TransactionType.EXPENSE),
    Category(id="exp-2", name="Food", icon="🍕", color="#ec4899", type=TransactionType.EXPENSE),
    Category(id="exp-3", name="Household", icon="🛒", color="#0ea5e9", type=TransactionType.EXPENSE),
    Category(id="exp-4", name="Cig.", icon="🚬", color="#64748b", type=TransactionType.EXPENSE),
    Category(id="exp-5", name="Transport", icon="🚗", color="#6366f1", type=TransactionType.EXPENSE),
    Category(id="exp-6", name="Utilities", icon="⚡", color="#fbbf24", type=TransactionType.EXPENSE),
    Category(id="exp-7", name="Health", icon="🏥", color="#14b8a6", type=TransactionType.EXPENSE),
    Category(id="exp-8", name="Personal care", icon="🧴", color="#f472b6", type=TransactionType.EXPENSE),
    Category(id="exp-9", name="Investments", icon="📈", color="#8b5cf6", type=TransactionType.EXPENSE),
)

CURRENCIES: tuple[Currency, ...] = (
    Currency(code="PKR", symbol="Rs", name="Pakistani Rupee"),
    Currency(code="USD", symbol="$", name="US Dollar"),
    Currency(code="EUR", symbol="€", name="Euro"),
    Currency(code="GBP", symbol="£", name="British Pound"),
    Currency(code="INR", symbol="₹", name="Rupee"),
    Currency(code="AED", symbol="د.إ", name="UAE Dirham"),
)

# Icon shown for a transaction whose category matches no known Category
FALLBACK_CATEGORY_ICON = "🏷️"
FALLBACK_CATEGORY_COLOR = "#64748b"

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Sunday-based, matching the week boundaries
DAYS_SHORT = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def find_currency(code: str) -> Currency:
    """Look up a currency by ISO code. Unknown codes fall back to the first entry."""
    code = code.upper()
    for currency in CURRENCIES:
        if currency.code == code:
            return currency
    return CURRENCIES[0]
