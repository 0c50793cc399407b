"""Application services."""

from .layout import (
    WorkspaceTabStore,
    build_tab_store,
    configure_tab_store,
    get_tab_store,
    reset_layout_state,
)
from .records import (
    LedgerService,
    RecordService,
    RecordServices,
    configure_record_services,
    get_ledger_service,
    get_record_services,
    reset_record_state,
)
from .tab_sync import TabLocationSynchronizer, match_tab

__all__ = [
    "LedgerService",
    "RecordService",
    "RecordServices",
    "TabLocationSynchronizer",
    "WorkspaceTabStore",
    "build_tab_store",
    "configure_record_services",
    "configure_tab_store",
    "get_ledger_service",
    "get_record_services",
    "get_tab_store",
    "match_tab",
    "reset_layout_state",
    "reset_record_state",
]
