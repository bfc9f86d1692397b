"""
Exception hierarchy for kvstreams.

Stream usage errors are fatal to the call that raised them, never to the
process: a consumer may catch them and keep driving other streams.
"""


class KVStreamsError(Exception):
    """Base class for every error raised by kvstreams."""


class StreamError(KVStreamsError):
    """Misuse of the sorted stream protocol."""


class PushbackError(StreamError):
    """Raised when a record is pushed back twice without an intervening pull."""


class RewindError(StreamError):
    """Raised when a stream's underlying source can no longer be repositioned."""


class ConfigError(KVStreamsError):
    """Base class for configuration loading failures."""


class ConfigFileNotFoundError(ConfigError):
    """The configuration file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """The configuration file is not valid YAML, or its root is not a mapping."""


class ConfigSectionError(ConfigError):
    """A requested section is missing, misnamed, or not a mapping."""
