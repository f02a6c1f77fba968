"""
Exception types raised by Backup Verifier.
"""


class VerifierError(Exception):
    """Base exception for verification failures."""

    pass


class ConfigurationError(VerifierError):
    """Raised when settings cannot be loaded or hold invalid values."""

    pass


class LockWaitTimeout(VerifierError):
    """Raised when a file stays locked past the configured attempt cap."""

    def __init__(self, path, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(f"{path} still locked after {attempts} attempts")
