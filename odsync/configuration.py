"""Odsync configuration and default values. Searches the *current working
directory* for an ``odsync.yaml`` configuration file. If present default
configuration values get updated.

Notes:
  - :attr:`odsync.configuration.CONFIG` is a plain dict in order to catch
    :exc:`KeyError` pre-runtime.
"""
import logging
import os
from typing import Dict, Any

from odsync.configs import ConfigFile
from odsync.utils import update_dict_recursively


CONFIG: Dict[str, Any] = {
    'Document': {
        'NAMESPACE_PREFIX': 'plk',  # XPath prefix for the device description namespace
        'ENCODING': 'UTF-8',  # Encoding when saving documents
        'PRETTY_PRINT': False,  # Re-indent documents when saving
        'AUTOSAVE': False,  # Save device description after every actual value edit
    },
    'Project': {
        'NAMESPACE_PREFIX': 'oc',  # XPath prefix for the project file namespace
    },
    'Logging': {
        'LEVEL': logging.WARNING,
        'LEVELS': {},  # Logger name -> level, e.g. {'odsync.xdd': logging.DEBUG}
        'DIRECTORY': None,
        'FILENAME': 'odsync.log',
    },
}
"""Global odsync default configuration."""

for fp in [
    os.path.join(os.getcwd(), 'odsync.yaml'),
]:
    if os.path.exists(fp):
        update_dict_recursively(CONFIG, ConfigFile(fp))
