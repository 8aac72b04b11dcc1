"""Object dictionary of a device node. Built once from the node's device
description.
"""
import collections
from typing import Dict, Iterable, Iterator, Optional, Union

from lxml import etree

from odsync.error import ConstructionError
from odsync.logging import get_logger
from odsync.od.entries import DictionaryEntry, SubEntry
from odsync.xdd.xpath import OBJECT_TAG, IndexLike, parse_index, qualify


LOGGER = get_logger(__name__, parent=None)

Entry = Union[DictionaryEntry, SubEntry]


class ObjectDictionary(collections.abc.Mapping):

    """Read-only mapping object index -> :class:`DictionaryEntry`. Keeps
    document order.

    Example:
        >>> od = ObjectDictionary.from_node(node)
        ... od['0x1006'].name
        'NMT_CycleLen_U32'
    """

    def __init__(self, node, entries: Iterable[DictionaryEntry] = ()):
        """Args:
            node: Owning device node.
            entries (optional): Dictionary entries.
        """
        self.node = node
        self._entries: Dict[int, DictionaryEntry] = {}
        for entry in entries:
            if entry.index in self._entries:
                LOGGER.warning('Duplicate object %s. Keeping the first one', entry.indexStr)
                continue

            self._entries[entry.index] = entry

    @classmethod
    def from_node(cls, node, strict: bool = False) -> 'ObjectDictionary':
        """Build object dictionary from all objects of the node's device
        description (document order).

        Args:
            node: Device node.
            strict (optional): Re-raise construction errors. Otherwise faulty
                objects get skipped.

        Returns:
            New object dictionary.
        """
        xdc = node.xdc
        entries = []
        for element in xdc.find_all('//' + qualify(OBJECT_TAG, xdc.prefix)):
            try:
                entries.append(DictionaryEntry(node, element))
            except ConstructionError as err:
                if strict:
                    raise

                LOGGER.error('Skipping object in line %s: %s', element.sourceline, err)

        return cls(node, entries)

    def __getitem__(self, index: IndexLike) -> DictionaryEntry:
        try:
            key = parse_index(index)
        except ValueError:
            raise KeyError(index) from None

        return self._entries[key]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, index) -> bool:
        try:
            return parse_index(index) in self._entries
        except ValueError:
            return False

    def find(self, index: IndexLike, subIndex: Optional[IndexLike] = None) -> Optional[Entry]:
        """Look up entry or sub-entry.

        Args:
            index: Object index (decimal int, bytes or hex string).
            subIndex (optional): Sub-index.

        Returns:
            Entry, sub-entry or None if not found.
        """
        entry = self.get(index)
        if entry is None or subIndex is None:
            return entry

        return entry.sub_entry(subIndex)

    def rpdo_mappable(self) -> Iterator[Entry]:
        """All RPDO mappable entries and sub-entries."""
        for entry in self._entries.values():
            if entry.is_rpdo_mappable():
                yield entry

            yield from entry.rpdoMappableSubEntries

    def tpdo_mappable(self) -> Iterator[Entry]:
        """All TPDO mappable entries and sub-entries."""
        for entry in self._entries.values():
            if entry.is_tpdo_mappable():
                yield entry

            yield from entry.tpdoMappableSubEntries

    def resolve_reference(self, entry: Entry) -> Optional[etree._Element]:
        """Resolve unique ID cross reference of an entry against the device
        description. Looked up on demand, no references are kept.

        Args:
            entry: Entry with a uniqueIdRef.

        Returns:
            Referenced element or None if the entry has no reference or it does
            not resolve.
        """
        ref = entry.uniqueIdRef
        if ref is None:
            return None

        if "'" in ref:
            LOGGER.warning('Can not resolve unique ID %r', ref)
            return None

        element = self.node.xdc.find_first(f"//*[@uniqueID='{ref}']")
        if element is None:
            LOGGER.debug('Unique ID %r of %s does not resolve', ref, entry)

        return element

    def __str__(self):
        return f'{type(self).__name__}(node {self.node.nodeId}, {len(self)} objects)'
