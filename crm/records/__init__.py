"""
Bounded, code-keyed record storage.
"""

from crm.records.store import RecordStore, StoreError

__all__ = ["RecordStore", "StoreError"]
