"""Tests for profile validation of the InteractWith task."""
import pytest

from src.controller import (
    ConfigurationError,
    DEFAULT_COLLECTION_DISTANCE,
    TaskConfig,
)
from src.world import ObjectCategory, Position


def profile(**overrides):
    args = {
        "QuestId": "12",
        "MobId": "9001",
        "NumOfTimes": "4",
        "ObjectType": "Gameobject",
        "X": "10.5",
        "Y": "-3",
        "Z": "0.25",
    }
    for key, value in overrides.items():
        if value is None:
            args.pop(key, None)
        else:
            args[key] = value
    return args


def test_valid_profile():
    result = TaskConfig.from_profile_args(profile(CollectionDistance="40"))

    assert result.ok
    config = result.unwrap()
    assert config.quest_id == 12
    assert config.entry_id == 9001
    assert config.num_of_times == 4
    assert config.object_category == ObjectCategory.GAMEOBJECT
    assert config.anchor == Position(10.5, -3.0, 0.25)
    assert config.collection_distance == 40.0


def test_object_type_is_case_insensitive():
    assert TaskConfig.from_profile_args(profile(ObjectType="npc")).unwrap().object_category == ObjectCategory.NPC
    assert TaskConfig.from_profile_args(profile(ObjectType="GAMEOBJECT")).ok


@pytest.mark.parametrize("raw", [None, "", "abc", "0"])
def test_collection_distance_defaults(raw):
    config = TaskConfig.from_profile_args(profile(CollectionDistance=raw)).unwrap()
    assert config.collection_distance == DEFAULT_COLLECTION_DISTANCE


def test_every_bad_field_is_reported():
    result = TaskConfig.from_profile_args(profile(
        QuestId="-1", MobId=None, NumOfTimes="many", ObjectType="Chest", Z=None,
    ))

    assert not result.ok
    assert result.config is None
    fields = [p.attribute for p in result.problems]
    assert fields == ["QuestId", "MobId", "NumOfTimes", "ObjectType", "Z"]


def test_unwrap_raises_with_field_names():
    result = TaskConfig.from_profile_args(profile(X="west", ObjectType=None))

    with pytest.raises(ConfigurationError) as excinfo:
        result.unwrap()

    message = str(excinfo.value)
    assert "X" in message and "ObjectType" in message
    assert len(excinfo.value.problems) == 2


def test_direct_construction_rejects_bad_values():
    with pytest.raises(ValueError):
        TaskConfig(
            quest_id=1,
            entry_id=2,
            num_of_times=1,
            object_category=ObjectCategory.NPC,
            anchor=Position(0.0, 0.0),
            collection_distance=0.0,
        )


@pytest.mark.parametrize("raw", ["-5", "-1"])
def test_negative_num_of_times_is_rejected(raw):
    result = TaskConfig.from_profile_args(profile(NumOfTimes=raw))

    assert not result.ok
    assert [p.attribute for p in result.problems] == ["NumOfTimes"]


def test_direct_construction_rejects_negative_count():
    with pytest.raises(ValueError):
        TaskConfig(
            quest_id=1,
            entry_id=2,
            num_of_times=-5,
            object_category=ObjectCategory.NPC,
            anchor=Position(0.0, 0.0),
        )


def test_zero_num_of_times_is_accepted():
    assert TaskConfig.from_profile_args(profile(NumOfTimes="0")).unwrap().num_of_times == 0


if __name__ == "__main__":
    for raw in [None, "", "abc", "0"]:
        test_collection_distance_defaults(raw)
    for raw in ["-5", "-1"]:
        test_negative_num_of_times_is_rejected(raw)
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn) and fn.__code__.co_argcount == 0:
            fn()
            print(f"{name}: ok")
