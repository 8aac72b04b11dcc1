#!/usr/local/python3
"""List the object dictionary of a device description."""
import argparse

from odsync.logging import setup_logging, suppress_other_loggers, verbosity_level
from odsync.node import DeviceNode
from odsync.xdd.document import XmlDocument


def cli():
    """Command line interface."""
    parser = argparse.ArgumentParser(description='Odsync object dictionary listing')
    parser.add_argument('xdc', help='Device description file (XDD / XDC)')
    parser.add_argument('--nodeId', type=int, default=1, help='Node ID')
    parser.add_argument('--mappable', choices=['rpdo', 'tpdo'], help='Only list PDO mappable entries')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Verbose logging (-vv for debug)')
    return parser.parse_args()


def format_entry(entry) -> str:
    """One line summary of an entry / sub-entry."""
    if entry.subIndex is None:
        address = entry.indexStr
    else:
        address = f'{entry.indexStr}/{entry.subIndexStr}'

    accessType = entry.accessType.value if entry.accessType else '-'
    flags = ''.join([
        'R' if entry.is_rpdo_mappable() else '-',
        'T' if entry.is_tpdo_mappable() else '-',
        'E' if entry.is_actual_value_editable() else '-',
    ])
    return f'{address:<14} {flags} {accessType:<6} {entry.dataType:<16} {entry.name}'


if __name__ == '__main__':
    args = cli()
    setup_logging(verbosity_level(args.verbose))
    suppress_other_loggers()
    node = DeviceNode('cli', args.nodeId, XmlDocument.load(args.xdc))
    od = node.objectDictionary
    if args.mappable == 'rpdo':
        entries = od.rpdo_mappable()
    elif args.mappable == 'tpdo':
        entries = od.tpdo_mappable()
    else:
        entries = (
            ele
            for entry in od.values()
            for ele in (entry,) + entry.subEntries
        )

    for entry in entries:
        print(format_entry(entry))
