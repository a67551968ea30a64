"""
Tests for target selection and WorldQuery.

Usage:
    pytest test_world_query.py
    python test_world_query.py
"""
import random

from src.controller import Candidate, WorldQuery, select_target, Blacklist
from src.world import World, WorldObject, Position, ObjectCategory

ENTRY = 100


def make_candidate(identity, distance, entry_id=ENTRY, in_range=False,
                   category=ObjectCategory.GAMEOBJECT):
    return Candidate(
        identity=identity,
        entry_id=entry_id,
        category=category,
        distance=distance,
        position=Position(distance, 0.0, 0.0),
        in_range=in_range,
        name=f"thing {identity}",
    )


def test_picks_nearest():
    snapshot = [make_candidate("a", 40.0), make_candidate("b", 12.5), make_candidate("c", 80.0)]
    chosen = select_target(snapshot, ENTRY, 100.0, set())
    assert chosen is not None and chosen.identity == "b"


def test_empty_snapshot_returns_none():
    assert select_target([], ENTRY, 100.0, set()) is None


def test_no_matching_entry_returns_none():
    snapshot = [make_candidate("a", 5.0, entry_id=7)]
    assert select_target(snapshot, ENTRY, 100.0, set()) is None


def test_distance_limit_is_exclusive():
    snapshot = [make_candidate("edge", 100.0), make_candidate("far", 150.0)]
    assert select_target(snapshot, ENTRY, 100.0, set()) is None

    snapshot.append(make_candidate("inside", 99.9))
    assert select_target(snapshot, ENTRY, 100.0, set()).identity == "inside"


def test_blacklisted_identity_is_skipped():
    snapshot = [make_candidate("a", 1.0), make_candidate("b", 2.0)]
    blacklist = Blacklist()
    blacklist.add("a")
    assert select_target(snapshot, ENTRY, 100.0, blacklist).identity == "b"

    blacklist.add("b")
    assert select_target(snapshot, ENTRY, 100.0, blacklist) is None


def test_category_filter():
    snapshot = [
        make_candidate("npc", 3.0, category=ObjectCategory.NPC),
        make_candidate("crate", 9.0, category=ObjectCategory.GAMEOBJECT),
    ]
    chosen = select_target(snapshot, ENTRY, 100.0, set(), category=ObjectCategory.GAMEOBJECT)
    assert chosen.identity == "crate"
    chosen = select_target(snapshot, ENTRY, 100.0, set(), category=ObjectCategory.NPC)
    assert chosen.identity == "npc"


def test_ties_keep_snapshot_order():
    snapshot = [make_candidate("first", 10.0), make_candidate("second", 10.0)]
    assert select_target(snapshot, ENTRY, 100.0, set()).identity == "first"


def test_selection_is_idempotent():
    snapshot = [make_candidate(str(i), float(30 - i)) for i in range(10)]
    blacklist = {"9", "8"}
    first = select_target(snapshot, ENTRY, 100.0, blacklist)
    second = select_target(snapshot, ENTRY, 100.0, blacklist)
    assert first == second
    assert first.identity == "7"


def test_selection_never_violates_filters():
    """Randomized snapshots: the result always satisfies every filter."""
    rng = random.Random(7)
    for _ in range(300):
        snapshot = [
            make_candidate(
                f"id{i}",
                rng.uniform(0.0, 200.0),
                entry_id=rng.choice([ENTRY, ENTRY + 1]),
                category=rng.choice(list(ObjectCategory)),
            )
            for i in range(rng.randint(0, 12))
        ]
        blacklist = {c.identity for c in snapshot if rng.random() < 0.3}
        max_distance = rng.uniform(10.0, 150.0)

        chosen = select_target(snapshot, ENTRY, max_distance, blacklist,
                               category=ObjectCategory.GAMEOBJECT)
        eligible = [
            c for c in snapshot
            if c.entry_id == ENTRY
            and c.category == ObjectCategory.GAMEOBJECT
            and c.identity not in blacklist
            and c.distance < max_distance
        ]
        if not eligible:
            assert chosen is None
            continue
        assert chosen in eligible
        assert chosen.distance == min(c.distance for c in eligible)


def test_world_query_builds_candidates_from_world_rows():
    world = World()
    world.add_object(WorldObject(
        position=Position(3.0, 4.0, 0.0), entity_id="near", entry_id=ENTRY, name="Crate",
    ))
    world.add_object(WorldObject(
        position=Position(30.0, 40.0, 0.0), entity_id="far", entry_id=ENTRY, name="Crate",
    ))
    world.add_object(WorldObject(
        position=Position(1.0, 0.0, 0.0), entity_id="npc", entry_id=ENTRY,
        category=ObjectCategory.NPC, name="Guard",
    ))

    query = WorldQuery(world.enumerate(ObjectCategory.GAMEOBJECT))
    candidates = query.find_candidates(ENTRY)
    print(f"  Candidates: {[c.describe() for c in candidates]}")

    assert [c.identity for c in candidates] == ["near", "far"]
    near, far = candidates
    assert abs(near.distance - 5.0) < 1e-9
    assert near.in_range and not far.in_range
    assert near.category == ObjectCategory.GAMEOBJECT
    assert near.position.to_tuple() == (3.0, 4.0, 0.0)

    assert query.get_nearest(ENTRY, 100.0, blacklist={"near"}).identity == "far"
    assert query.get_nearest(ENTRY, 10.0, blacklist={"near"}) is None


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"{name}: ok")
