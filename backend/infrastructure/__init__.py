"""Infrastructure layer exports."""

from .layout_storage import InMemoryLayoutStorage, JsonFileLayoutStorage, LayoutStorage
from .records import InMemoryRecordRepository, RecordRepository
from .seed import load_chart_of_accounts, seed_for

__all__ = [
    "InMemoryLayoutStorage",
    "InMemoryRecordRepository",
    "JsonFileLayoutStorage",
    "LayoutStorage",
    "RecordRepository",
    "load_chart_of_accounts",
    "seed_for",
]
