from src.world.quests import QuestStatus


def is_task_done(done_flag: bool, quest_status: QuestStatus) -> bool:
    """
    Whether an interaction task should stop.

    The counter-based flag is a heuristic; the quest log is authoritative.
    A quest that is completed, or no longer in the log at all (turned in
    some other way), ends the task whatever the counter says.
    """
    return (
        done_flag
        or quest_status == QuestStatus.COMPLETED
        or quest_status == QuestStatus.NOT_FOUND
    )
