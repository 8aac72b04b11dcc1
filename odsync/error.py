"""Odsync exceptions."""


class OdSyncError(Exception):

    """Base class for all odsync errors."""


class ConstructionError(OdSyncError):

    """Raw object data or owning node context missing / malformed. Rejects a
    single dictionary entry.
    """


class ValidationError(OdSyncError):

    """Proposed value got rejected. No state was mutated."""


class NotEditable(ValidationError):

    """Actual value of entry can not be edited."""


class AddressingError(OdSyncError):

    """XPath did not resolve to an expected element."""


class DivergenceError(OdSyncError):

    """In-memory model got updated but the document could not be written. Model
    and document are out of sync.
    """
