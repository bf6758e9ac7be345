from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from models.competitor import Competitor


@dataclass
class Roster:
    """Fixed-size, id-indexed arena of competitors.

    Slots are never appended to or removed after construction; retirement
    overwrites a slot in place via :meth:`replace_slot` so the population
    size stays constant.  Iteration always follows slot order.
    """

    slots: List[Competitor] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._reindex()

    def _reindex(self) -> None:
        self._index = {}
        for slot, competitor in enumerate(self.slots):
            if competitor.competitor_id in self._index:
                raise ValueError(f"Duplicate competitor id {competitor.competitor_id}")
            self._index[competitor.competitor_id] = slot

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[Competitor]:
        return iter(self.slots)

    def __contains__(self, competitor_id: object) -> bool:
        return competitor_id in self._index

    def get(self, competitor_id: str) -> Optional[Competitor]:
        slot = self._index.get(competitor_id)
        return self.slots[slot] if slot is not None else None

    def slot_of(self, competitor_id: str) -> int:
        try:
            return self._index[competitor_id]
        except KeyError:
            raise KeyError(f"{competitor_id} not on roster") from None

    def replace_slot(self, slot: int, competitor: Competitor) -> Competitor:
        """Overwrite ``slot`` with ``competitor`` and return the previous occupant."""

        previous = self.slots[slot]
        owner = self._index.get(competitor.competitor_id)
        if owner is not None and owner != slot:
            raise ValueError(f"Duplicate competitor id {competitor.competitor_id}")
        del self._index[previous.competitor_id]
        self.slots[slot] = competitor
        self._index[competitor.competitor_id] = slot
        return previous

    def user(self) -> Optional[Competitor]:
        return next((c for c in self.slots if c.is_user_controlled), None)

    def simulated(self) -> List[Competitor]:
        return [c for c in self.slots if not c.is_user_controlled]

    def snapshot(self) -> List[Competitor]:
        """Return detached copies of every competitor in slot order."""

        return [competitor.copy() for competitor in self.slots]
