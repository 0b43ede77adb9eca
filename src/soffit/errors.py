"""Soffit exception hierarchy.

Shared across the decoder, view selector, dispatcher and ASGI layer so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class SoffitError(Exception):
    """Base for all soffit-specific errors."""


class ConfigurationError(SoffitError):
    """Raised when renderer configuration is invalid.

    Typically raised while wiring the dispatcher at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SoffitError):
    """An error that maps directly to an HTTP status code.

    The ASGI layer catches these and turns them into a response with
    ``status`` and ``headers``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — the path is not a render endpoint."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — render endpoint exists but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class DispatchError(HTTPError):
    """Base for failures raised while dispatching a render request."""


class MissingTypeIdentifier(DispatchError):  # noqa: N818
    """400 — the request did not say which payload type it carries."""

    def __init__(self, header: str = "X-Soffit-PayloadClass") -> None:
        super().__init__(status=400, detail=f"HTTP Header '{header}' not specified")
        object.__setattr__(self, "header", header)


class DecodeFailure(DispatchError):  # noqa: N818
    """400 — the body is not a valid instance of the declared payload type.

    Also raised for type identifiers the decoder does not know.  The
    underlying exception is kept on ``cause`` and chained via ``from``.
    """

    def __init__(self, type_identifier: str, detail: str, cause: Exception | None = None) -> None:
        super().__init__(status=400, detail=detail)
        object.__setattr__(self, "type_identifier", type_identifier)
        object.__setattr__(self, "cause", cause)


class MalformedPayload(DispatchError):  # noqa: N818
    """500 — the decoded payload lacks a facet needed to pick a view."""

    def __init__(self, facet: str) -> None:
        super().__init__(status=500, detail=f"Payload does not specify a {facet}")
        object.__setattr__(self, "facet", facet)


class NoMatchingView(DispatchError):  # noqa: N818
    """500 — no template exists for the module, mode and window state."""

    def __init__(self, module_path: str, mode: str, window_state: str) -> None:
        super().__init__(
            status=500,
            detail=(
                f"Unable to select a view in {module_path!r} "
                f"for mode={mode!r} and windowState={window_state!r}"
            ),
        )
        object.__setattr__(self, "module_path", module_path)
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "window_state", window_state)
