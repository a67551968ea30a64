"""
WorldQuery turns raw object snapshots into interaction candidates.

This class isolates snapshot parsing from the interaction task, allowing:
- Clean separation of concerns
- Easy testing with hand-built snapshots
- A single place for the target selection policy (select_target)
"""
from dataclasses import dataclass
from typing import Optional, List, Dict, Any, Collection

from src.world.entities import ObjectCategory, Position


@dataclass(frozen=True)
class Candidate:
    """A world object considered for interaction this tick."""
    identity: str
    entry_id: int
    category: ObjectCategory
    distance: float
    position: Position
    in_range: bool
    name: str = ""

    def describe(self) -> str:
        """Human-readable label (e.g., 'Mysterious Crate (obj_7)')."""
        return f"{self.name or 'object'} ({self.identity})"


def select_target(
    snapshot: List[Candidate],
    entry_id: int,
    max_distance: float,
    blacklist: Collection[str],
    category: Optional[ObjectCategory] = None,
) -> Optional[Candidate]:
    """
    Pick the nearest eligible candidate.

    Eligible means: matching entry id (and category, if given), identity not
    blacklisted and distance strictly below max_distance. Equal distances
    keep the first one in snapshot order.

    Returns:
        The closest eligible candidate, or None
    """
    best: Optional[Candidate] = None
    for candidate in snapshot:
        if candidate.entry_id != entry_id:
            continue
        if category is not None and candidate.category != category:
            continue
        if candidate.identity in blacklist:
            continue
        if not candidate.distance < max_distance:
            continue
        if best is None or candidate.distance < best.distance:
            best = candidate
    return best


class WorldQuery:
    """
    Read-only view over one object snapshot.

    Takes rows as produced by World.enumerate() (dicts with entity_id,
    entry_id, category, name, position, distance and in_range).

    Usage:
        query = WorldQuery(world.enumerate(ObjectCategory.GAMEOBJECT))
        candidates = query.candidates()
        nearest = query.get_nearest(entry_id=1234, max_distance=100.0)
    """

    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows

    @staticmethod
    def to_candidate(row: Dict[str, Any]) -> Candidate:
        pos = row["position"]
        return Candidate(
            identity=row["entity_id"],
            entry_id=int(row["entry_id"]),
            category=ObjectCategory.parse(row["category"]),
            distance=float(row["distance"]),
            position=Position(pos["x"], pos["y"], pos.get("z", 0.0)),
            in_range=bool(row["in_range"]),
            name=row.get("name", ""),
        )

    def candidates(self) -> List[Candidate]:
        return [self.to_candidate(row) for row in self._rows]

    def find_candidates(self, entry_id: int) -> List[Candidate]:
        """All candidates sharing one entry id, nearest first."""
        matches = [c for c in self.candidates() if c.entry_id == entry_id]
        matches.sort(key=lambda c: c.distance)
        return matches

    def get_nearest(
        self,
        entry_id: int,
        max_distance: float,
        blacklist: Collection[str] = (),
    ) -> Optional[Candidate]:
        return select_target(self.candidates(), entry_id, max_distance, blacklist)
