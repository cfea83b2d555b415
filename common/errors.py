"""Exceptions surfaced by the résumé assistant core.

Loader and normalizer problems never raise; they degrade to empty values.
Only backend calls and misconfiguration produce these errors.
"""


class ResumeAssistantError(Exception):
    """Base class for all assistant failures."""


class ConfigurationError(ResumeAssistantError):
    """A required backend cannot be built from the current settings."""


class BackendError(ResumeAssistantError):
    """An external model call failed. Callers may retry."""


class EmbeddingBackendError(BackendError):
    pass


class CompletionBackendError(BackendError):
    pass
