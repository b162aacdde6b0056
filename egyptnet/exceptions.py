"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used by the rendering pipeline to represent its
failure modes: configuration problems, resource fetch failures, undecodable
bodies, records with a missing required shape, and templates that could not
be rendered by any strategy. Using a centralized hierarchy keeps the section
error boundary, the offline validator and the tests consistent.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'SHAPE_FAILURE'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'})
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context
        )


class FetchFailure(AppError):
    """Raised when a resource cannot be retrieved.

    Covers non-success HTTP statuses, missing local files and transport
    errors. ``status`` is ``None`` when no response was received.
    """

    def __init__(self, path: str, status: int | None, *, detail: str = "") -> None:
        message = f"{path} ({status})" if status is not None else f"{path} (unreachable)"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            "FETCH_FAILURE",
            message,
            context={"path": path, "status": status},
        )
        self.path = path
        self.status = status


class DecodeFailure(AppError):
    """Raised when a fetched body is not valid UTF-8 JSON."""

    def __init__(self, path: str, *, detail: str = "") -> None:
        message = f"{path} is not valid JSON"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            "DECODE_FAILURE", message, context={"path": path}
        )
        self.path = path


class ShapeFailure(AppError):
    """Raised for decoded data that lacks the shape a renderer requires.

    Parameters
    ----------
    message : str
        Human-readable description naming the location of the problem.
    source_label : str
        Label of the data source (e.g. ``'home.snapshots'``).
    index : int | None, optional
        Index of the first offending record, if any.
    missing : Sequence[str], optional
        Keys missing (or empty) on the offending record.
    """

    def __init__(
        self,
        message: str,
        *,
        source_label: str,
        index: int | None = None,
        missing: Sequence[str] = (),
    ) -> None:
        super().__init__(
            "SHAPE_FAILURE",
            message,
            context={
                "source_label": source_label,
                "index": index,
                "missing": list(missing),
            },
        )
        self.source_label = source_label
        self.index = index
        self.missing = list(missing)


class TemplateFailure(AppError):
    """Raised when no rendering strategy could produce a template's output."""

    def __init__(self, template_name: str, cause: BaseException | None) -> None:
        detail = str(cause) if cause is not None else "no output"
        super().__init__(
            "TEMPLATE_FAILURE",
            f"Template {template_name!r} could not be rendered: {detail}",
            context={"template": template_name},
        )
        self.template_name = template_name
        self.cause = cause
