"""Tests for the simulated world, quest log and DirectNavigator."""
import pytest

from src.navigation import DirectNavigator
from src.world import (
    World,
    WorldConfig,
    WorldObject,
    Position,
    Quest,
    QuestLog,
    QuestStatus,
    ObjectCategory,
    SpawnGroup,
    Spawner,
)


def test_direct_navigator_moves_at_speed_and_arrives():
    nav = DirectNavigator(arrival_threshold=0.25)
    start = Position(0.0, 0.0, 0.0)
    assert nav.set_goal(start, Position(3.0, 4.0, 0.0))
    assert nav.is_moving

    pos = nav.update(start, 1.0)
    assert pos.x == pytest.approx(0.6)
    assert pos.y == pytest.approx(0.8)
    assert nav.get_state().distance_remaining == pytest.approx(4.0)

    for _ in range(10):
        pos = nav.update(pos, 1.0)
    assert pos.to_tuple() == (3.0, 4.0, 0.0)
    assert not nav.is_moving
    assert nav.get_state().is_complete


def test_direct_navigator_stop():
    nav = DirectNavigator()
    nav.set_goal(Position(0.0, 0.0), Position(50.0, 0.0))
    nav.stop()

    assert not nav.is_moving
    assert nav.get_current_target() is None
    assert nav.update(Position(1.0, 1.0), 1.0) == Position(1.0, 1.0)


def test_world_step_moves_agent_toward_goal():
    world = World(config=WorldConfig(agent_speed=0.5))
    world.move_agent_to(Position(10.0, 0.0, 0.0))

    for _ in range(4):
        world.step()

    assert world.agent.position.x == pytest.approx(2.0)
    assert world.agent_is_moving
    world.stop_agent()
    world.step()
    assert world.agent.position.x == pytest.approx(2.0)
    assert world.tick_count == 5


def test_enumerate_reports_distance_and_range():
    world = World(config=WorldConfig(interact_range=5.0))
    world.add_object(WorldObject(position=Position(0.0, 4.0, 3.0), entity_id="a", entry_id=1))
    world.add_object(WorldObject(position=Position(6.0, 0.0, 0.0), entity_id="b", entry_id=1))
    world.add_object(WorldObject(position=Position(1.0, 0.0, 0.0), entity_id="n", entry_id=1,
                                 category=ObjectCategory.NPC))

    rows = world.enumerate(ObjectCategory.GAMEOBJECT)

    assert [r["entity_id"] for r in rows] == ["a", "b"]
    assert rows[0]["distance"] == pytest.approx(5.0)
    assert rows[0]["in_range"] is True
    assert rows[1]["in_range"] is False
    assert rows[0]["category"] == "gameobject"
    assert world.enumerate(ObjectCategory.NPC)[0]["entity_id"] == "n"


def test_interact_rules():
    quests = QuestLog([Quest(7, "Test", required=1)])
    world = World(config=WorldConfig(interact_range=5.0), quest_log=quests)
    world.add_object(WorldObject(position=Position(2.0, 0.0), entity_id="near", entry_id=1,
                                 despawn_on_interact=True, quest_credit=7))
    world.add_object(WorldObject(position=Position(20.0, 0.0), entity_id="far", entry_id=1))

    assert not world.interact("far")
    assert not world.interact("missing")
    assert quests.status(7) == QuestStatus.ACTIVE

    assert world.interact("near")
    assert world.get_object_by_id("near") is None
    assert world.interaction_log == ["near"]
    assert quests.status(7) == QuestStatus.COMPLETED


def test_quest_log_statuses():
    log = QuestLog([Quest(1, "Gather", required=2)])

    assert log.status(1) == QuestStatus.ACTIVE
    assert log.status(99) == QuestStatus.NOT_FOUND
    log.credit(1)
    log.credit(99)  # ignored
    assert log.status(1) == QuestStatus.ACTIVE
    log.credit(1)
    assert log.status(1) == QuestStatus.COMPLETED
    assert log.turn_in(1).name == "Gather"
    assert log.status(1) == QuestStatus.NOT_FOUND


def test_spawner_is_deterministic_and_separated():
    def spawn():
        return Spawner(anchor=Position(100.0, 100.0, 5.0), spread=20.0, seed=11).spawn_group(
            5, 42, ObjectCategory.GAMEOBJECT, [], name="Crate"
        )

    first, second = spawn(), spawn()
    assert [o.position for o in first] == [o.position for o in second]
    assert [o.entity_id for o in first] == [f"obj_42_{i}" for i in range(5)]
    for i, a in enumerate(first):
        assert abs(a.position.x - 100.0) <= 20.0 and a.position.z == 5.0
        for b in first[i + 1:]:
            assert a.position.distance_to(b.position) >= 3.0


def test_populate_keeps_clear_of_agent():
    world = World(config=WorldConfig(spread=15.0, min_separation=2.0))
    world.populate([SpawnGroup(entry_id=1, count=4), SpawnGroup(entry_id=2, count=2)], seed=5)

    assert len(world.objects) == 6
    for obj in world.objects:
        assert world.agent.position.distance_to(obj.position) >= 2.0


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"{name}: ok")
