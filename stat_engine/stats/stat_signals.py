"""
Qt bridge for stat changes.

Re-emits the observer callbacks of the stats in a StatBlock as Qt signals so
GUI code can connect to a single object instead of registering observers on
every stat.
"""

from typing import Callable, Dict, Optional, Set, Tuple

from PySide6.QtCore import QObject, Signal

from stat_engine.stats.stat_base import Stat
from stat_engine.stats.stat_block import StatBlock
from stat_engine.utils.logging_config import get_logger

logger = get_logger("STATS")


class StatBlockSignals(QObject):
    """
    Signals for a StatBlock.

    Stats must be added and removed through :meth:`add_stat` and
    :meth:`remove_stat` for their changes to be emitted. Stats already in the
    block when the bridge is created are attached immediately.
    """

    stat_added = Signal(str)
    stat_removed = Signal(str)
    # name, new value
    stat_value_changed = Signal(str, float)
    # name, set of tags
    stat_tags_changed = Signal(str, object)

    def __init__(self, stat_block: StatBlock, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._stat_block = stat_block
        self._attached: Dict[str, Tuple[Stat, Callable[[float], None], Callable[[Set[str]], None]]] = {}

        for stat in stat_block:
            self._attach(stat)

    @property
    def stat_block(self) -> StatBlock:
        return self._stat_block

    def add_stat(self, stat: Stat) -> bool:
        """Add ``stat`` to the block and start emitting its changes."""
        if not self._stat_block.add(stat):
            return False
        self._attach(stat)
        self.stat_added.emit(stat.name)
        return True

    def remove_stat(self, stat: Stat) -> bool:
        """Remove ``stat`` from the block and stop emitting its changes."""
        if not self._stat_block.remove(stat):
            return False
        self._detach(stat.name)
        self.stat_removed.emit(stat.name)
        return True

    def detach_all(self) -> None:
        """Stop emitting changes for every attached stat. The block is left unchanged."""
        for name in list(self._attached):
            self._detach(name)

    def _attach(self, stat: Stat) -> None:
        name = stat.name

        def on_value(value: float) -> None:
            self.stat_value_changed.emit(name, float(value))

        def on_tags(tags: Set[str]) -> None:
            self.stat_tags_changed.emit(name, set(tags))

        stat.add_value_observer(on_value)
        stat.add_tag_observer(on_tags)
        self._attached[name] = (stat, on_value, on_tags)
        logger.debug(f"Attached signals to stat '{name}'")

    def _detach(self, name: str) -> None:
        entry = self._attached.pop(name, None)
        if entry is None:
            return
        stat, on_value, on_tags = entry
        stat.remove_value_observer(on_value)
        stat.remove_tag_observer(on_tags)
        logger.debug(f"Detached signals from stat '{name}'")
