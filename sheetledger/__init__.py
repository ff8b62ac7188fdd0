"""Mini README: Core package initializer for the Sheet Ledger backend.

Sheet Ledger records sheet sales and business expenses and reports period
summaries such as net profit and margin. Subpackages:

    * records - domain dataclasses, payload validation and error types.
    * storage - memory and MongoDB record stores behind one async interface.
    * ledger - the bookkeeping service used by the HTTP layer.
    * reporting - period resolution and financial summaries.
    * interface - FastAPI application factory.
"""

from .logging_utils import get_logger

__version__ = "0.1.0"

__all__ = ["get_logger", "__version__"]
