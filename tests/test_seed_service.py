from Data.database import today
from Data.store import MemoryStore
from services import seed_service

USER = "default-user"


def test_seed_defaults_only():
    store = MemoryStore()
    assert seed_service.seed(store, USER, with_samples=False) is True

    assert len(store.list("settings", USER)) == 1
    assert len(store.list("widget-config", USER)) == len(seed_service.DEFAULT_WIDGETS)
    assert store.list("tasks", USER) == []
    assert store.list("schedule", USER) == []


def test_seed_is_idempotent():
    store = MemoryStore()
    seed_service.seed(store, USER)
    assert seed_service.seed(store, USER) is False
    assert len(store.list("settings", USER)) == 1
    assert len(store.list("habits", USER)) == 1


def test_seed_samples():
    store = MemoryStore()
    seed_service.seed(store, USER)

    schedule = store.list("schedule", USER)
    assert schedule[0]["title"] == "Team meeting"
    assert schedule[0]["date"] == today()
    assert len(store.list("website-usage", USER)) == 3
    assert len(store.list("ai-insights", USER)) == 3
    assert {e["amount"] for e in store.list("expenses", USER)} == {1250, 4999}


def test_seed_is_per_user():
    store = MemoryStore()
    seed_service.seed(store, "alice")
    assert store.list("settings", "bob") == []
    assert seed_service.seed(store, "bob", with_samples=False) is True
