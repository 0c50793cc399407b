import pytest

from backend.application import TabLocationSynchronizer, WorkspaceTabStore, match_tab
from backend.domain import Tab
from backend.infrastructure import InMemoryLayoutStorage


@pytest.fixture()
def store():
    return WorkspaceTabStore(InMemoryLayoutStorage())


def test_prefix_match_activates_tab(store):
    store.add_tab(Tab(id="a", title="Projects", href="/pms/projects"))
    store.add_tab(Tab(id="b", title="Tasks", href="/pms/tasks"))
    synchronizer = TabLocationSynchronizer(store)

    matched = synchronizer.on_location_change("/pms/projects/42")
    assert matched is not None and matched.id == "a"
    assert store.active_tab_id == "a"


def test_exact_match_and_query_string(store):
    store.add_tab(Tab(id="a", title="Projects", href="/pms/projects"))
    store.add_tab(Tab(id="b", title="Tasks", href="/pms/tasks"))
    TabLocationSynchronizer(store).on_location_change("/pms/projects?page=2")
    assert store.active_tab_id == "a"


def test_no_match_is_a_no_op(store):
    store.add_tab(Tab(id="a", title="Projects", href="/pms/projects"))
    before = store.snapshot()
    assert TabLocationSynchronizer(store).on_location_change("/finance/ledgers") is None
    assert TabLocationSynchronizer(store).on_location_change("/pms/projects-archive") is None
    assert store.snapshot() == before


def test_empty_store_is_a_no_op(store):
    assert TabLocationSynchronizer(store).on_location_change("/pms/projects") is None
    assert store.tabs == []


def test_longest_prefix_wins_over_sequence_order():
    tabs = [
        Tab(id="pms", title="PMS", href="/pms"),
        Tab(id="projects", title="Projects", href="/pms/projects"),
    ]
    assert match_tab(tabs, "/pms/projects/7/edit").id == "projects"
    assert match_tab(tabs, "/pms/tasks").id == "pms"


def test_exact_match_beats_prefix():
    tabs = [
        Tab(id="pms", title="PMS", href="/pms"),
        Tab(id="pms-dup", title="PMS", href="/pms/"),
    ]
    assert match_tab(tabs, "/pms").id == "pms"


def test_root_tab_only_matches_root():
    tabs = [Tab(id="home", title="Dashboard", href="/")]
    assert match_tab(tabs, "/").id == "home"
    assert match_tab(tabs, "/pms/projects") is None
