"""Project file. Records user overrides next to the device descriptions. For
now forced actual values: objects / sub-objects whose actual value gets forced
into the network configuration.

Forced objects live under the node element of the project file (matched by its
``nodeID`` attribute)::

    <CN nodeID="1" ...>
      <ForcedObjects>
        <Object index="1006"/>
        <Object index="1A00" subIndex="01"/>
      </ForcedObjects>
    </CN>

Indices use the same raw hex form as the device descriptions.
"""
from typing import List, Optional, Tuple

from lxml import etree

from odsync.configuration import CONFIG
from odsync.error import AddressingError
from odsync.logging import get_logger
from odsync.xdd.document import XmlDocument
from odsync.xdd.mutation import add_element, remove_element
from odsync.xdd.xpath import OBJECT_TAG, index_raw, parse_index, qualify, subindex_raw


FORCED_OBJECTS_TAG: str = 'ForcedObjects'
"""Container element for forced objects."""

PREFIX = CONFIG['Project']['NAMESPACE_PREFIX']


class ProjectFile:

    """Project file wrapper.

    Attributes:
        document: Underlying project document.
    """

    def __init__(self, document: XmlDocument):
        self.document = document
        self.logger = get_logger(__name__, parent=None)

    @classmethod
    def load(cls, filepath: str) -> 'ProjectFile':
        return cls(XmlDocument.load(filepath, prefix=PREFIX))

    @classmethod
    def from_string(cls, string) -> 'ProjectFile':
        return cls(XmlDocument.from_string(string, prefix=PREFIX))

    def _qualify(self, name: str) -> str:
        return qualify(name, self.document.prefix)

    def node_xpath(self, nodeId: int) -> str:
        """Locator of the (first) node element."""
        return f"(//{self._qualify('*')}[@nodeID='{int(nodeId)}'])[1]"

    def forced_objects_xpath(self, nodeId: int) -> str:
        """Locator of the forced objects container of a node."""
        return f'{self.node_xpath(nodeId)}/{self._qualify(FORCED_OBJECTS_TAG)}'

    def forced_object_xpath(self, nodeId: int, index: int, subIndex: Optional[int] = None) -> str:
        """Locator of a forced object entry."""
        if subIndex is None:
            predicate = f"@index='{index_raw(index)}' and not(@subIndex)"
        else:
            predicate = f"@index='{index_raw(index)}' and @subIndex='{subindex_raw(subIndex)}'"

        return f'{self.forced_objects_xpath(nodeId)}/{self._qualify(OBJECT_TAG)}[{predicate}]'

    def is_forced(self, nodeId: int, index: int, subIndex: Optional[int] = None) -> bool:
        """Check if actual value of object / sub-object is forced."""
        xpath = self.forced_object_xpath(nodeId, index, subIndex)
        return self.document.find_first(xpath) is not None

    def force(self, nodeId: int, index: int, subIndex: Optional[int] = None, force: bool = True) -> bool:
        """Force or unforce actual value of object / sub-object.

        Args:
            nodeId: Node ID.
            index: Object index.
            subIndex (optional): Sub-index.
            force (optional): Force or unforce.

        Returns:
            If the project document changed.

        Raises:
            AddressingError: Node does not exist in the project file.
        """
        doc = self.document
        with doc.lock:
            if self.is_forced(nodeId, index, subIndex) == force:
                return False

            if not force:
                remove_element(doc, self.forced_object_xpath(nodeId, index, subIndex))
                return True

            nodeXpath = self.node_xpath(nodeId)
            if doc.find_first(nodeXpath) is None:
                raise AddressingError(f'Node {nodeId} does not exist in project file!')

            container = self.forced_objects_xpath(nodeId)
            if doc.find_first(container) is None:
                add_element(doc, nodeXpath, etree.Element(FORCED_OBJECTS_TAG))

            attrib = {'index': index_raw(index)}
            if subIndex is not None:
                attrib['subIndex'] = subindex_raw(subIndex)

            add_element(doc, container, etree.Element(OBJECT_TAG, attrib))
            self.logger.info('Forced %s of node %d', attrib, nodeId)
            return True

    def forced_objects(self, nodeId: int) -> List[Tuple[int, Optional[int]]]:
        """All forced (index, sub-index) pairs of a node. Sub-index None for
        objects.
        """
        xpath = f'{self.forced_objects_xpath(nodeId)}/{self._qualify(OBJECT_TAG)}'
        forced = []
        for element in self.document.find_all(xpath):
            subIndex = element.get('subIndex')
            forced.append((
                parse_index(element.get('index')),
                None if subIndex is None else parse_index(subIndex),
            ))

        return forced
