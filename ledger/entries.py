"""
Entry Construction

Wraps collaborator input into Transaction records. Manual entries and
magic entries become identical transactions once they carry an id, a
creation timestamp and today's date.

DESIGN DECISION: A missing parse result is not an error. When the
natural-language parser is unavailable or produces nothing, the magic
entry path yields no transaction and the rest of the engine is unaffected.
"""

import time
from datetime import date
from decimal import Decimal
from typing import Optional

from ledger.constants import FALLBACK_CATEGORY_COLOR, FALLBACK_CATEGORY_ICON
from ledger.models.ledger import (
    Category,
    ParsedEntry,
    Transaction,
    TransactionType,
)


def now_ms() -> int:
    """Current instant in epoch milliseconds."""
    return int(time.time() * 1000)


def new_transaction(
    type: TransactionType,
    category: str,
    amount: Decimal,
    note: Optional[str] = None,
    today: Optional[date] = None,
    created_ms: Optional[int] = None,
) -> Transaction:
    """Manual entry dated today and stamped with the creation instant."""
    return Transaction(
        type=type,
        category=category,
        amount=amount,
        note=note,
        date=today or date.today(),
        timestamp=created_ms if created_ms is not None else now_ms(),
    )


def transaction_from_parsed(
    parsed: Optional[ParsedEntry],
    today: Optional[date] = None,
    created_ms: Optional[int] = None,
) -> Optional[Transaction]:
    """
    Magic entry: wrap a parser result into a transaction.

    Returns None when the parser produced nothing.
    """
    if parsed is None:
        return None
    return new_transaction(
        type=parsed.type,
        category=parsed.category,
        amount=parsed.amount,
        note=parsed.note,
        today=today,
        created_ms=created_ms,
    )


def make_custom_category(
    name: str,
    icon: str,
    type: TransactionType,
    color: str = FALLBACK_CATEGORY_COLOR,
) -> Category:
    """User-created category with a generated id."""
    return Category(name=name, icon=icon or FALLBACK_CATEGORY_ICON, color=color, type=type)
