"""Domain error types."""


class ValidationError(Exception):
    """Raised when account input has an invalid shape."""


class CryptoError(Exception):
    """Raised when hashing or signing fails."""


class ConfigError(Exception):
    """Raised when required runtime configuration is missing or invalid."""


__all__ = ["ConfigError", "CryptoError", "ValidationError"]
