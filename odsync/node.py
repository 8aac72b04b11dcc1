"""Device node. Owning context of an object dictionary: network, node ID,
device description and project file.
"""
import threading
from typing import Optional

from odsync.od.dictionary import ObjectDictionary
from odsync.project import ProjectFile
from odsync.xdd.document import XmlDocument


class DeviceNode:

    """Device node inside a network.

    Attributes:
        networkId: Network / project identifier for the configuration engine.
        nodeId: Node ID.
        xdc: Device description document.
        project: Project file with user overrides (if any).
    """

    def __init__(self, networkId: str, nodeId: int, xdc: XmlDocument, project: Optional[ProjectFile] = None):
        self.networkId = networkId
        self.nodeId = nodeId
        self.xdc = xdc
        self.project = project
        self._od: Optional[ObjectDictionary] = None
        self._odLock = threading.Lock()

    @property
    def objectDictionary(self) -> ObjectDictionary:
        """Object dictionary. Built on first access."""
        with self._odLock:
            if self._od is None:
                self._od = ObjectDictionary.from_node(self)

            return self._od

    def reload(self):
        """Drop object dictionary. Gets re-built from the device description
        on next access.
        """
        with self._odLock:
            self._od = None

    def is_forced(self, index: int, subIndex: Optional[int] = None) -> bool:
        """Check project file if an actual value is forced."""
        if self.project is None:
            return False

        return self.project.is_forced(self.nodeId, index, subIndex)

    def __str__(self):
        return f'{type(self).__name__}({self.networkId!r}, nodeId={self.nodeId})'
