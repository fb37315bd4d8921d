"""
Keyed container of attributes and the combine-or-insert merge.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from stat_engine.attributes.attribute import Attribute
from stat_engine.utils.logging_config import get_logger

logger = get_logger("ATTRIBUTES")


class AttributeData:
    """
    Container for multiple attributes, keyed by attribute name.

    Every key equals the name of the attribute stored under it. Lookups and
    removals of absent names report through the return value and never raise.
    """

    def __init__(self, attributes: Optional[Iterable[Attribute]] = None):
        """
        Args:
            attributes: Optional initial attributes. On duplicate names the
                first one seen is kept.
        """
        self._attributes: Dict[str, Attribute] = {}
        for attribute in attributes or ():
            self.add(attribute)

    def add(self, attribute: Optional[Attribute]) -> bool:
        """
        Add an attribute. Does not add if an attribute with the same name is present.

        Returns:
            True if the attribute was added, False if it was None or already present.
        """
        if attribute is None:
            return False
        if attribute.name in self._attributes:
            logger.debug(f"Attribute '{attribute.name}' already present, not added")
            return False

        self._attributes[attribute.name] = attribute
        return True

    def combine(self, attribute: Optional[Attribute]) -> bool:
        """
        Combine an attribute into the stored attribute with the same name.

        The incoming attribute's rule is used when it has one, otherwise the
        configured default rule.

        Returns:
            True if the attribute was combined, False if it was None or not present.
        """
        if attribute is None:
            return False
        stored = self._attributes.get(attribute.name)
        if stored is None:
            return False

        self._attributes[attribute.name] = stored.combine(attribute)
        return True

    def combine_or_add(self, attribute: Optional[Attribute]) -> bool:
        """Combine ``attribute`` if its name is present, otherwise add it."""
        if attribute is None:
            return False
        if attribute.name in self._attributes:
            return self.combine(attribute)
        return self.add(attribute)

    def remove(self, name: Optional[str]) -> bool:
        """
        Remove an attribute by name.

        Returns:
            True if the attribute was removed, False otherwise.
        """
        if name is None or name not in self._attributes:
            return False
        del self._attributes[name]
        return True

    def get(self, name: Optional[str]) -> Optional[Attribute]:
        """Get the attribute called ``name``, or None if it is not present."""
        if name is None:
            return None
        return self._attributes.get(name)

    def get_value(self, name: str, default: float = 0.0) -> float:
        """Value of the attribute called ``name``, or ``default`` if it is absent."""
        attribute = self.get(name)
        return attribute.value if attribute is not None else default

    def names(self) -> List[str]:
        return list(self._attributes)

    def copy(self) -> "AttributeData":
        return AttributeData(self._attributes.values())

    def __len__(self) -> int:
        return len(self._attributes)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(list(self._attributes.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeData):
            return NotImplemented
        return self._attributes == other._attributes

    def __repr__(self) -> str:
        contents = ", ".join(str(a) for a in self._attributes.values())
        return f"AttributeData({contents})"

    @classmethod
    def combine_all(cls, base: Optional["AttributeData"],
                    incoming: Union["AttributeData", Sequence["AttributeData"], None]) -> Optional["AttributeData"]:
        """Alias for :func:`combine_attribute_data`."""
        return combine_attribute_data(base, incoming)


def _combine_pair(base: AttributeData, incoming: AttributeData) -> AttributeData:
    combined = base.copy()
    # Per-name results depend on incoming order only when a custom rule is
    # order-sensitive; incoming is applied in its insertion order.
    for attribute in incoming:
        combined.combine_or_add(attribute)
    return combined


def combine_attribute_data(base: Optional[AttributeData],
                           incoming: Union[AttributeData, Sequence[Optional[AttributeData]], None]) -> Optional[AttributeData]:
    """
    Combine attribute data: combine if present, insert if absent.

    Neither argument is modified. With a single container the result is seeded
    from ``base`` and every attribute of ``incoming`` is combined into it when
    its name exists there, otherwise inserted. With a sequence of containers
    the merge is folded left to right.

    Returns:
        The combined data, or None when ``base`` or ``incoming`` is None,
        ``incoming`` is an empty sequence, or any element of the sequence is None.
    """
    if base is None or incoming is None:
        return None

    if isinstance(incoming, AttributeData):
        return _combine_pair(base, incoming)

    incoming = list(incoming)
    if not incoming or any(data is None for data in incoming):
        return None

    combined = base
    for data in incoming:
        combined = _combine_pair(combined, data)

    logger.debug(f"Combined {len(incoming)} attribute sets into {len(combined)} attributes")
    return combined
