"""Object dictionary entries and sub-entries.

Entries get constructed once per loaded device description. Every attribute of
the raw ``Object`` / ``SubObject`` element is read at construction time, the
XPath locator and the PDO mapping classification are derived right away and
never change afterwards. Only the actual value is mutable (see
:mod:`odsync.pipeline`).

PDO mapping classification (same for entries and sub-entries):
  1. PDO mapping *default*, *optional* or *RPDO*: RPDO candidate. Mappable if
     the entry references a unique ID or if it is writable (rw, wo).
  2. Else PDO mapping *default*, *optional* or *TPDO*: TPDO candidate.
     Mappable if the entry references a unique ID or if it is readable (ro,
     rw).
  3. Otherwise neither.

Note:
    The branches are mutually exclusive. A *default* or *optional* entry never
    reaches the TPDO branch. So such an entry can not be TPDO mappable, even if
    it is read-only.
"""
import threading
from typing import Any, Optional, Tuple

from lxml import etree

from odsync.constants import HEX_PREFIX, INDEX_BYTES, SUBINDEX_BYTES
from odsync.error import ConstructionError
from odsync.logging import get_logger
from odsync.od.definitions import (
    AccessType,
    ObjectType,
    PdoMapping,
    data_type_name,
    parse_access_type,
    parse_object_type,
    parse_pdo_mapping,
)
from odsync.xdd.xpath import (
    SUBOBJECT_TAG,
    IndexLike,
    hex_raw,
    object_xpath,
    parse_index,
    subobject_xpath,
)


LOGGER = get_logger(__name__, parent=None)

RPDO_CANDIDATES = {PdoMapping.DEFAULT, PdoMapping.OPTIONAL, PdoMapping.RPDO}
"""PDO mappings which make an entry a RPDO candidate."""

TPDO_CANDIDATES = {PdoMapping.DEFAULT, PdoMapping.OPTIONAL, PdoMapping.TPDO}
"""PDO mappings which make an entry a TPDO candidate."""

WRITABLE = {AccessType.RW, AccessType.WO}
"""Access types allowing writes."""

READABLE = {AccessType.RO, AccessType.RW}
"""Access types allowing reads."""


def classify_pdo_mapping(
        pdoMapping: Optional[PdoMapping],
        accessType: Optional[AccessType],
        uniqueIdRef: Optional[str],
    ) -> Tuple[bool, bool]:
    """Classify PDO mappability.

    Args:
        pdoMapping: PDO mapping directive.
        accessType: Access type.
        uniqueIdRef: Unique ID cross reference.

    Returns:
        (RPDO mappable, TPDO mappable) tuple.
    """
    if pdoMapping in RPDO_CANDIDATES:
        if uniqueIdRef is not None:
            return True, False

        return accessType in WRITABLE, False

    elif pdoMapping in TPDO_CANDIDATES:
        if uniqueIdRef is not None:
            return False, True

        return False, accessType in READABLE

    return False, False


def is_actual_value_editable(objectType, dataTypeCode: Optional[int], accessType: Optional[AccessType]) -> bool:
    """Only VAR objects with a data type and rw / wo access can be edited."""
    if objectType != ObjectType.VAR:
        return False

    if dataTypeCode is None:
        return False

    return accessType in WRITABLE


def _required_index(element: etree._Element, attribute: str, nBytes: int) -> int:
    """Parse mandatory (sub-)index attribute. ConstructionError if missing or
    malformed.
    """
    raw = element.get(attribute)
    if raw is None:
        raise ConstructionError(f'{attribute!r} attribute missing in line {element.sourceline}')

    try:
        value = parse_index(raw)
        canonical = hex_raw(value, nBytes)
    except ValueError as err:
        raise ConstructionError(f'Malformed {attribute} {raw!r} in line {element.sourceline}') from err

    if raw != canonical:
        LOGGER.warning('%s %r is not in canonical form %r. XPath will not resolve', attribute, raw, canonical)

    return value


def _optional(element: etree._Element, attribute: str, parse) -> Any:
    """Parse optional attribute. Missing or malformed values are None."""
    raw = element.get(attribute)
    if raw is None:
        return None

    try:
        return parse(raw)
    except ValueError:
        LOGGER.warning('Ignoring malformed %s %r in line %s', attribute, raw, element.sourceline)
        return None


class _Entry:

    """Common part of dictionary entries and sub-entries."""

    def __init__(self, node, element: etree._Element, index: int, subIndex: Optional[int], xpath: str):
        self.node = node
        self._index = index
        self._subIndex = subIndex
        self._xpath = xpath
        self.lock = threading.RLock()
        """Guards the actual value. Held for a whole edit."""

        self.name: str = element.get('name', '')
        self.objectType = _optional(element, 'objectType', parse_object_type)
        self.dataTypeCode: Optional[int] = _optional(element, 'dataType', parse_index)
        self.dataType: str = data_type_name(self.dataTypeCode)
        self.lowLimit: Optional[str] = element.get('lowLimit')
        self.highLimit: Optional[str] = element.get('highLimit')
        self.accessType: Optional[AccessType] = _optional(element, 'accessType', parse_access_type)
        self.defaultValue: Optional[str] = element.get('defaultValue')
        self._actualValue: Optional[str] = element.get('actualValue')
        self.denotation: Optional[str] = element.get('denotation')
        self.pdoMapping: Optional[PdoMapping] = _optional(element, 'PDOmapping', parse_pdo_mapping)
        self.objFlags: Optional[str] = element.get('objFlags')
        self.uniqueIdRef: Optional[str] = element.get('uniqueIDRef')

        self._rpdoMappable, self._tpdoMappable = classify_pdo_mapping(
            self.pdoMapping,
            self.accessType,
            self.uniqueIdRef,
        )

    @property
    def index(self) -> int:
        """Object index."""
        return self._index

    @property
    def subIndex(self) -> Optional[int]:
        """Sub-index. None for entries."""
        return self._subIndex

    @property
    def xpath(self) -> str:
        """Locator inside the device description."""
        return self._xpath

    @property
    def indexRaw(self) -> str:
        """Object index in document form, e.g. ``'1006'``."""
        return hex_raw(self._index, INDEX_BYTES)

    @property
    def indexStr(self) -> str:
        """Object index in display form, e.g. ``'0x1006'``."""
        return HEX_PREFIX + self.indexRaw

    @property
    def actualValue(self) -> Optional[str]:
        """Current actual value. None if not set.

        Note:
            Reading waits for an edit in progress, including its configuration
            engine call (see :func:`odsync.pipeline.propose_actual_value`).
        """
        with self.lock:
            return self._actualValue

    def assign_actual_value(self, value: Optional[str]):
        """Set in-memory actual value. Model only, document stays untouched.
        Use :func:`odsync.pipeline.propose_actual_value` for edits.
        """
        with self.lock:
            self._actualValue = value

    def is_rpdo_mappable(self) -> bool:
        return self._rpdoMappable

    def is_tpdo_mappable(self) -> bool:
        return self._tpdoMappable

    def is_actual_value_editable(self) -> bool:
        """Check if the actual value can be edited."""
        return is_actual_value_editable(self.objectType, self.dataTypeCode, self.accessType)

    def is_forced(self) -> bool:
        """Check if the actual value is forced in the project file."""
        return self.node.is_forced(self._index, self._subIndex)


class SubEntry(_Entry):

    """Sub-entry of a dictionary entry. Addressed by (index, sub-index)."""

    def __init__(self, node, parent: 'DictionaryEntry', element: etree._Element):
        """Args:
            node: Owning device node.
            parent: Parent entry.
            element: Raw ``SubObject`` element.
        """
        if node is None or parent is None or element is None:
            raise ConstructionError('Node context, parent entry or raw sub-object missing!')

        subIndex = _required_index(element, 'subIndex', SUBINDEX_BYTES)
        xpath = subobject_xpath(parent.index, subIndex, node.xdc.prefix)
        super().__init__(node, element, parent.index, subIndex, xpath)
        self.parent = parent

    @property
    def subIndexRaw(self) -> str:
        """Sub-index in document form, e.g. ``'01'``."""
        return hex_raw(self._subIndex, SUBINDEX_BYTES)

    @property
    def subIndexStr(self) -> str:
        return HEX_PREFIX + self.subIndexRaw

    @property
    def text(self) -> str:
        return f'{self.name} ({self.subIndexStr})'

    def __str__(self):
        return f'{type(self).__name__}({self.indexStr}/{self.subIndexStr}, {self.name!r})'


class DictionaryEntry(_Entry):

    """Dictionary entry (object) with its sub-entries."""

    def __init__(self, node, element: etree._Element):
        """Args:
            node: Owning device node.
            element: Raw ``Object`` element.
        """
        if node is None or element is None:
            raise ConstructionError('Node context or raw object missing!')

        index = _required_index(element, 'index', INDEX_BYTES)
        xpath = object_xpath(index, node.xdc.prefix)
        super().__init__(node, element, index, None, xpath)

        subEntries = []
        rpdoMappable = []
        tpdoMappable = []
        for child in element.iterchildren(etree.Element):
            if etree.QName(child).localname != SUBOBJECT_TAG:
                continue

            try:
                sub = SubEntry(node, self, child)
            except ConstructionError as err:
                LOGGER.warning('Skipping sub-object of %s: %s', self.indexStr, err)
                continue

            subEntries.append(sub)
            if sub.is_rpdo_mappable():
                rpdoMappable.append(sub)
            elif sub.is_tpdo_mappable():
                tpdoMappable.append(sub)

        self.subEntries: Tuple[SubEntry, ...] = tuple(subEntries)
        self.rpdoMappableSubEntries: Tuple[SubEntry, ...] = tuple(rpdoMappable)
        self.tpdoMappableSubEntries: Tuple[SubEntry, ...] = tuple(tpdoMappable)

    @property
    def text(self) -> str:
        """Name with index, e.g. ``'NMT_CycleLen_U32 (0x1006)'``."""
        return f'{self.name} ({self.indexStr})'

    def has_rpdo_mappable_sub_entries(self) -> bool:
        return bool(self.rpdoMappableSubEntries)

    def has_tpdo_mappable_sub_entries(self) -> bool:
        return bool(self.tpdoMappableSubEntries)

    def sub_entry(self, subIndex: IndexLike) -> Optional[SubEntry]:
        """Look up sub-entry.

        Args:
            subIndex: Sub-index (any :func:`odsync.xdd.xpath.parse_index`
                form).

        Returns:
            Sub-entry or None if there is no such sub-index.
        """
        try:
            wanted = parse_index(subIndex)
        except ValueError:
            return None

        for sub in self.subEntries:
            if sub.subIndex == wanted:
                return sub

        return None

    def __str__(self):
        return f'{type(self).__name__}({self.indexStr}, {self.name!r})'

