"""
Aggregation of stats: tag queries and priority-ordered totals.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Union

from stat_engine.stats.stat_base import Stat, as_tag_set
from stat_engine.utils.logging_config import get_logger

logger = get_logger("STATS")


def total_stats(stats_to_total: Iterable[Stat]) -> float:
    """
    Total the provided stats.

    Stats are sorted by priority from low to high (stats with equal priority
    keep their relative order) and applied to a running total starting at 0:
    multiplicative stats multiply it, additive stats add to it. A
    multiplicative stat applied before any additive one therefore yields 0.
    """
    running_total = 0.0
    for stat in sorted(stats_to_total, key=lambda s: s.priority):
        if stat.multiplicative:
            running_total *= stat.value
        else:
            running_total += stat.value
    return running_total


class StatBlock:
    """
    Collection of stats keyed by stat name.

    Query results are returned in the order the stats were added. Tag
    arguments may be a single tag string or an iterable of tags.
    """

    def __init__(self):
        self._stats: Dict[str, Stat] = {}

    def add(self, stat: Optional[Stat]) -> bool:
        """
        Add a stat if a stat with the same name is not already present.

        Returns:
            True if the stat was added, False if it was None or the name was taken.
        """
        if stat is None:
            return False
        if stat.name in self._stats:
            logger.warning(f"Stat '{stat.name}' already present in stat block, not added")
            return False

        self._stats[stat.name] = stat
        logger.debug(f"Added stat '{stat.name}'")
        return True

    def remove(self, stat: Optional[Stat]) -> bool:
        """
        Remove the stat with the same name as ``stat``.

        Returns:
            True if a stat was removed.
        """
        if stat is None or stat.name not in self._stats:
            return False
        del self._stats[stat.name]
        logger.debug(f"Removed stat '{stat.name}'")
        return True

    def get_by_name(self, name: str) -> Optional[Stat]:
        """The stat called ``name``, or None."""
        return self._stats.get(name)

    def get_with_any_of_tags(self, tags: Union[str, Iterable[str]]) -> List[Stat]:
        """Stats having at least one of ``tags``."""
        wanted = as_tag_set(tags)
        return [stat for stat in self._stats.values() if not wanted.isdisjoint(stat.tags)]

    def get_with_all_of_tags(self, tags: Union[str, Iterable[str]]) -> List[Stat]:
        """Stats having every one of ``tags``."""
        wanted = as_tag_set(tags)
        return [stat for stat in self._stats.values() if wanted.issubset(stat.tags)]

    def total_with_any_of_tags(self, tags: Union[str, Iterable[str]]) -> float:
        return total_stats(self.get_with_any_of_tags(tags))

    def total_with_all_of_tags(self, tags: Union[str, Iterable[str]]) -> float:
        return total_stats(self.get_with_all_of_tags(tags))

    def names(self) -> List[str]:
        return list(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, name: object) -> bool:
        return name in self._stats

    def __iter__(self) -> Iterator[Stat]:
        return iter(list(self._stats.values()))

    def __repr__(self) -> str:
        return f"StatBlock({', '.join(self._stats)})"
