"""Mini README: Bookkeeping operations shared by the HTTP interface.

Exports ``BookkeepingService`` which wraps a record store with payload
validation, outcome logging and summaries.
"""

from .service import BookkeepingService, TransactionKind

__all__ = ["BookkeepingService", "TransactionKind"]
