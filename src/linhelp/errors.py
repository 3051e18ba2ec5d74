"""
Error types for lin-help.

Every error is fatal to the current invocation. Each class carries the
sysexits code the CLI exits with.
"""

# BSD sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_CONFIG = 78


class LinHelpError(Exception):
    """Base class for all lin-help errors."""

    exit_code = EX_SOFTWARE


class UsageError(LinHelpError):
    """Unrecognized or malformed invocation."""

    exit_code = EX_USAGE


class DataFormatError(LinHelpError):
    """Persisted content exists but is not a valid entries document."""

    exit_code = EX_DATAERR


class StorageError(LinHelpError):
    """Reading or writing the backing store failed."""

    exit_code = EX_SOFTWARE


class ConflictError(StorageError):
    """The remote object changed between load and save."""


class IdExhaustedError(LinHelpError):
    """The id allocator ran past the largest representable id."""

    exit_code = EX_SOFTWARE


class ConfigError(LinHelpError):
    """Configuration is missing or unreadable."""

    exit_code = EX_CONFIG
