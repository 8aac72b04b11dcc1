"""Object dictionary entity model. Entries, sub-entries, PDO mapping
classification and lookups.

Quick primer: the addresses of a device's configuration values are stored in
its *object dictionary* with an *index* and optionally with a *sub-index*. The
index is commonly noted in hex. Whether a value can be carried in a process
data object depends on its PDO mapping directive and its access type. Receive
direction (RPDO) needs a writable entry, transmit direction (TPDO) a readable
one.
"""
