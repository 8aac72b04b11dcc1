#!/usr/local/python3
"""Set the actual value of an object / sub-object in a device description. The
value gets checked by the offline limits engine.
"""
import argparse
import logging
import sys

from odsync.engine import limits_validator
from odsync.error import OdSyncError
from odsync.logging import setup_logging, verbosity_level
from odsync.node import DeviceNode
from odsync.pipeline import propose_actual_value
from odsync.xdd.document import XmlDocument


LOGGER = logging.getLogger('Actual Value Setter')


def cli():
    """Command line interface."""
    parser = argparse.ArgumentParser(description='Odsync actual value editor')
    parser.add_argument('xdc', help='Device description file (XDD / XDC)')
    parser.add_argument('index', help='Object index, e.g. 0x1006')
    parser.add_argument('value', help='New actual value')
    parser.add_argument('--subIndex', help='Sub-index, e.g. 0x01')
    parser.add_argument('--nodeId', type=int, default=1, help='Node ID')
    parser.add_argument('--dry-run', action='store_true', help='Do not save document')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Verbose logging (-vv for debug)')
    return parser.parse_args()


if __name__ == '__main__':
    args = cli()
    setup_logging(verbosity_level(args.verbose + 1))
    doc = XmlDocument.load(args.xdc)
    node = DeviceNode('cli', args.nodeId, doc)
    entry = node.objectDictionary.find(args.index, args.subIndex)
    if entry is None:
        LOGGER.error('No object %s %s', args.index, args.subIndex or '')
        sys.exit(1)

    try:
        propose_actual_value(entry, args.value, limits_validator(node))
    except OdSyncError as err:
        LOGGER.error('%s', err)
        sys.exit(1)

    if not args.dry_run:
        doc.save()
        LOGGER.info('Saved %s', args.xdc)
