class LeagueBotException(Exception):
    """Base exception for all league-bot errors."""


class CorruptStateError(LeagueBotException):
    """Raised when a snapshot file exists but cannot be read as a league snapshot."""


class PersistenceError(LeagueBotException):
    """Raised when a snapshot cannot be written to disk."""


class ConfigurationError(LeagueBotException):
    """Raised when required configuration is missing or invalid."""
