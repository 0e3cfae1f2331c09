class ScanError(Exception):
    """Base class for scan pipeline failures."""


class NoSessionsError(ScanError):
    def __init__(self, message: str = "No recent trading days found in NSE archives."):
        super().__init__(message)


class EmptyArchiveError(ScanError):
    def __init__(self, message: str = "Empty ZIP"):
        super().__init__(message)


class MalformedArchiveError(ScanError):
    """Archive could be opened but its member could not be decompressed."""
