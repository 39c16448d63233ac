"""
Exceptions raised while generating shader sources.

Non-applicability of a node is never an exception: nodes return ``None`` for
that. Everything here signals a malformed material graph or a host failure.
"""

from typing import Any


class ShaderGenError(Exception):
    """Base exception for build-time inconsistencies in a shader graph.

    Examples:
        >>> raise ShaderGenError("Unknown channel: shininess")
        ShaderGenError: Unknown channel: shininess
    """

    def __init__(self, message: str, node: Any | None = None):
        """Initialize the exception with a message and optional graph node.

        Args:
            message: The error message
            node: Optional shader node where the error was detected
        """
        self.message = message
        self.node = node
        location_info = f" (at {type(node).__name__})" if node is not None else ""
        super().__init__(f"{message}{location_info}")


class TypeConversionError(ShaderGenError):
    """A value cannot be coerced to the type a node declares."""


class DuplicateTempError(ShaderGenError):
    """A temporary name was registered twice with different bodies."""

    def __init__(self, name: str, existing: str, body: str):
        self.name = name
        self.existing = existing
        self.body = body
        super().__init__(
            f"Temporary '{name}' already registered as '{existing}', "
            f"refusing to redefine it as '{body}'"
        )


class TempCycleError(ShaderGenError):
    """Registered temporaries depend on each other in a cycle."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(
            "Dependency cycle among temporaries: " + ", ".join(sorted(names))
        )


class GraphCycleError(ShaderGenError):
    """A node was reached again while it was still being generated."""


class LayoutError(ShaderGenError):
    """Stage inputs and outputs do not fit together."""


class ShaderCompileError(ShaderGenError):
    """The host failed to compile or link the generated sources."""
