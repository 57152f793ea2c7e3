# Service modules

from . import ledger

__all__ = ["ledger"]
