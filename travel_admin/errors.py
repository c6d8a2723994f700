"""
Failure taxonomy for proposal generation.

Validation errors are the caller's fault (400). Template, render and
persistence errors abort the request (500). Audit write errors are caught by
the recorder and only logged.
"""

from typing import Optional


class ProposalError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ProposalValidationError(ProposalError):
    """A required proposal field is missing or invalid."""
    status_code = 400


class TemplateConfigurationError(ProposalError):
    """The proposal template is missing or cannot be parsed."""


class RenderError(ProposalError):
    """Headless browser launch, navigation or rasterization failed."""


class PersistenceError(ProposalError):
    """The generated document could not be written to storage."""


class AuditWriteError(ProposalError):
    """The audit row could not be inserted."""
