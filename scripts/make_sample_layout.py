#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.application import WorkspaceTabStore
from backend.domain import Tab
from backend.infrastructure import JsonFileLayoutStorage

SAMPLE_TABS = [
    Tab(id="dashboard", title="대시보드", href="/dashboard", icon="home", is_pinned=True),
    Tab(id="ledgers", title="전표 관리", href="/finance/ledgers", icon="receipt"),
    Tab(id="projects", title="프로젝트", href="/pms/projects", icon="folder"),
    Tab(id="tasks", title="태스크", href="/pms/tasks", icon="check"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a sample persisted workspace layout")
    parser.add_argument("--root", required=True, help="storage directory (LAYOUT_STORAGE_ROOT)")
    parser.add_argument("--name", default="erp-layout-storage", help="storage slot name")
    parser.add_argument("--active", default="ledgers", help="id of the tab to activate")
    args = parser.parse_args()

    store = WorkspaceTabStore(JsonFileLayoutStorage(Path(args.root)), storage_name=args.name)
    store.close_all_tabs()
    for tab in SAMPLE_TABS:
        store.add_tab(tab)
    store.set_active_tab(args.active)

    print(f"sample layout written: {Path(args.root) / (args.name + '.json')}")


if __name__ == "__main__":
    main()
