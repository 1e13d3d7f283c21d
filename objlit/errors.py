from __future__ import annotations

from typing import Iterable, Sequence


class ObjlitError(Exception):
    """Base exception for objlit."""


class ConfigError(ObjlitError):
    pass


class TargetResolutionError(ObjlitError):
    pass


class RenderError(ObjlitError):
    """Raised when a value cannot be turned into literal text."""


class ConstructorResolutionError(RenderError):
    """
    No single constructor of ``target`` can be bound to the available properties.

    The remedy is usually to provide an explicit builder-style type for the value
    (see ``LiteralGenerator(builders=...)``).

    Parameters
    ----------
    target : type
        The resolved target type whose constructors were examined.
    candidates : Sequence
        The constructors still in the pool when resolution gave up (may be empty).
    unmatched : Iterable[str]
        Names of the properties that were available for binding.
    """

    reason = "cannot resolve constructor"

    def __init__(
        self,
        target: type,
        candidates: "Sequence[object]" = (),
        unmatched: Iterable[str] = (),
        message: str | None = None,
    ) -> None:
        self.target = target
        self.candidates = list(candidates)
        self.unmatched = sorted(unmatched)
        if message is None:
            name = getattr(target, "__qualname__", repr(target))
            parts = [f"{self.reason} for {name}"]
            if self.candidates:
                parts.append("candidates: " + "; ".join(str(c) for c in self.candidates))
            parts.append("properties: " + (", ".join(self.unmatched) or "<none>"))
            parts.append("provide an explicit builder type to disambiguate")
            message = " | ".join(parts)
        super().__init__(message)


class ResolutionAmbiguityError(ConstructorResolutionError):
    reason = "ambiguous constructors"


class ResolutionExhaustionError(ConstructorResolutionError):
    reason = "no suitable constructor"


class MissingParameterMetadataError(RenderError):
    """
    A constructor's parameter names cannot be obtained (positional-only
    parameters, or a signature ``inspect`` cannot produce). Name-based binding
    needs a signature with keyword-addressable parameters.
    """

    def __init__(self, target: type, detail: str = "") -> None:
        self.target = target
        name = getattr(target, "__qualname__", repr(target))
        msg = f"parameter names unavailable for a constructor of {name}"
        if detail:
            msg += f" ({detail})"
        msg += "; declare keyword-addressable __init__ parameters or register a builder"
        super().__init__(msg)


class UnclassifiedArrayElementError(RenderError):
    """Array element type outside the fixed per-kind dispatch."""

    def __init__(self, element_type: object) -> None:
        self.element_type = element_type
        super().__init__(f"unsupported array element type: {element_type}")
