from __future__ import annotations


class ContextBankError(Exception):
    """Base error for the context bank server."""


class ValidationError(ContextBankError):
    """Raised when user input is invalid."""


class ConfigurationError(ContextBankError):
    """Raised when no repository (or other required setting) can be resolved."""


class RepositoryFetchError(ContextBankError):
    """Raised when the remote repository cannot be cloned."""


class PathTraversalError(ContextBankError):
    """Raised when a path resolves outside its workspace."""


class NotFoundError(ContextBankError, FileNotFoundError):
    """Raised when a requested file is not present in the repository."""


class ExternalServiceError(ContextBankError):
    """Raised when an external service (GitHub API) fails."""
