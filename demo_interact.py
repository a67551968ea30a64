"""
Demo: run the InteractWith task in the simulated world.

Spawns a handful of quest objects (plus some decoys with another entry id),
then lets the task walk to and interact with them until the quest objective
is complete.

Run from project root:
    python demo_interact.py
    python demo_interact.py --count 5 --lag 0.3 --verbose
    python demo_interact.py QuestId=12 MobId=9001 NumOfTimes=3 ObjectType=Gameobject X=0 Y=0 Z=0
"""
import argparse
import logging
import sys

from src.controller import InteractWithTask, TaskConfig
from src.runtime import TaskRunner, RuntimeConfig, SimulatedGameBridge
from src.world import World, WorldConfig, SpawnGroup, Quest, QuestLog, ObjectCategory

QUEST_ID = 12
QUEST_ENTRY = 9001
DECOY_ENTRY = 9002


def build_profile(args: argparse.Namespace) -> dict:
    profile = {
        "QuestId": str(QUEST_ID),
        "MobId": str(QUEST_ENTRY),
        "NumOfTimes": str(args.count),
        "ObjectType": "Gameobject",
        "CollectionDistance": str(args.distance),
        "X": "0", "Y": "0", "Z": "0",
    }
    for item in args.attributes:
        key, _, value = item.partition("=")
        profile[key] = value
    return profile


def build_world(config: TaskConfig, args: argparse.Namespace) -> World:
    quests = QuestLog([Quest(config.quest_id, "Crates of Supplies", required=config.num_of_times)])
    world = World(config=WorldConfig(spread=args.spread), quest_log=quests)
    world.populate(
        [
            SpawnGroup(
                entry_id=config.entry_id,
                count=args.objects,
                category=config.object_category,
                name="Supply Crate",
                despawn_on_interact=args.despawn,
                quest_credit=config.quest_id,
            ),
            SpawnGroup(entry_id=DECOY_ENTRY, count=3, category=ObjectCategory.GAMEOBJECT, name="Barrel"),
        ],
        anchor=config.anchor,
        seed=args.seed,
    )
    return world


def main() -> int:
    parser = argparse.ArgumentParser(description="InteractWith task demo")
    parser.add_argument("attributes", nargs="*", help="Profile attributes as Key=Value")
    parser.add_argument("--count", type=int, default=3, help="NumOfTimes")
    parser.add_argument("--objects", type=int, default=5, help="Quest objects to spawn")
    parser.add_argument("--distance", type=int, default=100, help="CollectionDistance")
    parser.add_argument("--spread", type=float, default=40.0, help="Spawn half-width")
    parser.add_argument("--lag", type=float, default=0.2, help="Lag compensation (s)")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--despawn", action="store_true", help="Objects vanish after use")
    parser.add_argument("--max-ticks", type=int, default=20000)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = TaskConfig.from_profile_args(build_profile(args))
    if not result.ok:
        print("Refusing to start, please check your profile:")
        for problem in result.problems:
            print(f"  - {problem}")
        return 2
    config = result.config

    world = build_world(config, args)
    bridge = SimulatedGameBridge(world, lag_seconds=args.lag)
    task = InteractWithTask(config, bridge)
    runner = TaskRunner(task, world, RuntimeConfig(max_ticks=args.max_ticks))

    print("=== InteractWith Demo ===\n")
    print(f"Agent at {world.agent.position.to_tuple()}")
    for obj in world.objects:
        dist = world.agent.position.distance_to(obj.position)
        print(f"  {obj.entity_id}: {obj.name} (entry {obj.entry_id}) at distance {dist:.1f}")

    summary = runner.run()

    print(f"\nGoal: {bridge.goal_text}")
    print(f"Last status: {bridge.status_text}")
    print(f"Quest status: {bridge.get_quest_status(config.quest_id).name}")
    print(f"Summary: {summary.to_dict()}")
    print("\nEvents:")
    for event in task.events.get_processed_history():
        if event["event_type"] != "move_requested":
            print(f"  [{event['tick']:5d}] {event['event_type']} {event['data']}")
    return 0 if summary.finished else 1


if __name__ == "__main__":
    sys.exit(main())
