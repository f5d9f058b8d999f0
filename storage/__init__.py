"""
Storage module.

Provides the record layer the visualizations read from:
- In-memory record store (numpy rows, ids, labels)
- Per-record score annotation
- Parquet import/export of record tables
"""

from storage.record_store import InMemoryRecordStore, ScoreAnnotation
from storage.parquet_records import load_records, save_records

__all__ = ['InMemoryRecordStore', 'ScoreAnnotation', 'load_records', 'save_records']
