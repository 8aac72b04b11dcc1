"""Object dictionary model kept in sync with XML device descriptions."""


__author__ = 'atheler'
__version__ = '0.3.0'
