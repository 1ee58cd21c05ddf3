import pytest

from hexlayout.layout.models import PositionState
from hexlayout.layout.placement import PlacementEngine
from hexlayout.layout.stabilizer import PositionStabilizer


def test_large_jump_is_clamped(memory_store):
    stabilizer = PositionStabilizer(memory_store)
    assert stabilizer.adjust("app", 20, lambda key: 5) == 7


def test_small_move_is_taken_fully(memory_store):
    stabilizer = PositionStabilizer(memory_store)
    assert stabilizer.adjust("app", 3, lambda key: 5) == 3


def test_unseen_item_takes_its_target(memory_store):
    stabilizer = PositionStabilizer(memory_store)
    assert stabilizer.adjust("new", 42) == 42
    assert stabilizer.indices["new"] == 42


def test_repeated_passes_converge(memory_store):
    memory_store.save("default", PositionState(indices={"app": 5}))
    stabilizer = PositionStabilizer(memory_store)

    assert [stabilizer.adjust("app", 11) for _ in range(4)] == [7, 9, 11, 11]


def test_moves_toward_lower_index(memory_store):
    memory_store.save("default", PositionState(indices={"app": 30}))
    stabilizer = PositionStabilizer(memory_store, max_move=3)
    assert stabilizer.adjust("app", 0) == 27


def test_zero_max_move_freezes_known_items(memory_store):
    memory_store.save("default", PositionState(indices={"app": 4}))
    stabilizer = PositionStabilizer(memory_store, max_move=0)
    assert stabilizer.adjust("app", 40) == 4


def test_negative_max_move_rejected(memory_store):
    with pytest.raises(ValueError):
        PositionStabilizer(memory_store, max_move=-1)


def test_nothing_persisted_until_commit(memory_store):
    stabilizer = PositionStabilizer(memory_store, namespace="home")
    stabilizer.adjust("app", 3)
    assert memory_store.namespaces() == []

    stabilizer.commit()
    state = memory_store.load("home")
    assert state.indices == {"app": 3}
    assert state.namespace == "home"
    assert state.updated_at > 0


def test_committed_positions_survive_a_new_stabilizer(memory_store):
    first = PositionStabilizer(memory_store)
    first.adjust("app", 10)
    first.commit()

    second = PositionStabilizer(memory_store)
    assert second.adjust("app", 0) == 8


def test_reset_forgets_everything(memory_store):
    stabilizer = PositionStabilizer(memory_store)
    stabilizer.adjust("app", 10)
    stabilizer.commit()

    stabilizer.reset()
    assert stabilizer.indices == {}
    assert memory_store.namespaces() == []
    assert stabilizer.adjust("app", 0) == 0


def test_namespaces_are_isolated(memory_store):
    work = PositionStabilizer(memory_store, namespace="work")
    work.adjust("app", 10)
    work.commit()

    home = PositionStabilizer(memory_store, namespace="home")
    assert home.adjust("app", 0) == 0


def test_adjust_result_skips_placeholders(memory_store, make_item):
    result = PlacementEngine().place([make_item(f"app{i}", usage_count=9 - i) for i in range(3)])
    committed = PositionStabilizer(memory_store).adjust_result(result)
    assert committed == {"app0": 0, "app1": 1, "app2": 2}
