class RedactorError(Exception):
    """Base exception for all bundle-redactor errors."""


class ConfigurationError(RedactorError, ValueError):
    """Raised when an obfuscator or config document cannot be set up as requested."""
