"""Exception taxonomy shared by the core services and view-models."""

from __future__ import annotations


class ReportViewerError(Exception):
    """Base class for all report viewer errors."""


class NormalizationError(ReportViewerError):
    """Raised when a raw record carries no usable identifier."""


class TransportError(ReportViewerError):
    """Raised by report clients when the remote collaborator fails."""


class ReportNotFoundError(TransportError):
    """Raised when a single report does not exist on the server."""


class InvalidSelectionError(ReportViewerError):
    """Raised when a bulk action is requested with nothing selected."""


class InvalidPageError(ReportViewerError):
    """Raised when a collection view is requested for an out-of-range page."""
