"""
A named, tagged, prioritized stat value with change observers.
"""

from typing import Callable, FrozenSet, Iterable, List, Optional, Set, Union

from stat_engine.base.config import get_config
from stat_engine.utils.logging_config import get_logger

logger = get_logger("STATS")

ValueObserver = Callable[[float], None]
TagObserver = Callable[[Set[str]], None]


def as_tag_set(tags: Union[str, Iterable[str], None]) -> Set[str]:
    """Normalize a tag argument to a set. A bare string is a single tag."""
    if tags is None:
        return set()
    if isinstance(tags, str):
        return {tags}
    return set(tags)


class Stat:
    """
    A stat: a name, a value, a priority, a set of tags and an
    additive/multiplicative flag.

    The stat's name is always one of its tags and cannot be removed.

    Observers are called synchronously, in registration order, after every
    value or tag mutation. Each notification pass iterates over a snapshot of
    the registered observers, so observers added or removed during a pass are
    only affected from the next mutation on. An observer that mutates the same
    stat starts a nested notification pass which completes before the outer
    pass continues; callers should avoid relying on that ordering.
    """

    def __init__(self, name: str, initial_value: float, priority: float,
                 initial_tags: Union[str, Iterable[str], None] = None,
                 multiplicative: bool = False):
        """
        Args:
            name: Name for the stat, also added to its tags.
            initial_value: Initial value.
            priority: Order for applying the stat when totalling. Lower priorities are applied first.
            initial_tags: Initial tags.
            multiplicative: If True the stat multiplies the running total, otherwise it adds to it.
        """
        self._name = name
        self._value = initial_value
        self._priority = priority
        self._multiplicative = multiplicative
        self._tags: Set[str] = {name}
        self._tags.update(as_tag_set(initial_tags))

        self._value_observers: List[ValueObserver] = []
        self._tag_observers: List[TagObserver] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        self.set_value(new_value)

    @property
    def priority(self) -> float:
        return self._priority

    @property
    def multiplicative(self) -> bool:
        return self._multiplicative

    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset(self._tags)

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    def set_value(self, new_value: float) -> None:
        """Set the value and notify every value observer with it."""
        self._value = new_value
        logger.debug(f"Stat '{self._name}' value set to {new_value}")
        self._notify(self._value_observers, new_value)

    def add_tags(self, tags_to_add: Union[str, Iterable[str]]) -> None:
        """Add tags and notify every tag observer with the resulting tags."""
        self._tags.update(as_tag_set(tags_to_add))
        self._notify(self._tag_observers, set(self._tags))

    def remove_tags(self, tags_to_remove: Union[str, Iterable[str]]) -> None:
        """Remove tags and notify every tag observer. The stat's own name is never removed."""
        removable = as_tag_set(tags_to_remove)
        removable.discard(self._name)
        self._tags.difference_update(removable)
        self._notify(self._tag_observers, set(self._tags))

    def add_value_observer(self, observer: ValueObserver) -> None:
        self._value_observers.append(observer)

    def remove_value_observer(self, observer: ValueObserver) -> bool:
        """Returns True if ``observer`` was registered and has been removed."""
        return self._remove_observer(self._value_observers, observer)

    def add_tag_observer(self, observer: TagObserver) -> None:
        self._tag_observers.append(observer)

    def remove_tag_observer(self, observer: TagObserver) -> bool:
        """Returns True if ``observer`` was registered and has been removed."""
        return self._remove_observer(self._tag_observers, observer)

    @staticmethod
    def _remove_observer(observers: list, observer: Callable) -> bool:
        if observer in observers:
            observers.remove(observer)
            return True
        return False

    def _notify(self, observers: list, payload) -> None:
        if not observers:
            return

        # "raise" lets the first observer error propagate to the mutator, the
        # mutation itself has already been applied
        log_errors = get_config().get("stats.observer_error_policy", "raise") == "log"
        for observer in list(observers):
            if not log_errors:
                observer(payload)
                continue
            try:
                observer(payload)
            except Exception as e:
                logger.error(f"Error in observer for stat '{self._name}': {e}", exc_info=True)

    def __repr__(self) -> str:
        mode = "multiplicative" if self._multiplicative else "additive"
        return (f"Stat(name={self._name!r}, value={self._value}, priority={self._priority}, "
                f"tags={sorted(self._tags)}, {mode})")
