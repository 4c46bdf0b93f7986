"""
infrastructure package

Shared infrastructure for the Ackermann engine.

Modules:
    - interfaces: InputPair and the BaseResultCache interface
    - table_store: whole-table JSON persistence for the result cache
"""

from infrastructure.interfaces import BaseResultCache, InputPair
from infrastructure.table_store import TableStore

__all__ = [
    "BaseResultCache",
    "InputPair",
    "TableStore",
]
