"""Target abstraction for stage source assembly.

A Target encapsulates the GLSL dialect rules needed to turn a generated stage
into complete shader text:
- Version directive and default precision statements
- Storage qualifiers for stage inputs and outputs
- Precision prefixes for hoisted temporaries
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from shadergraph.constants import DEFAULT_PRECISION, POSITION_CHANNEL
from shadergraph.layout import ShaderVar, Stage, Storage
from shadergraph.models import StageSource
from shadergraph.types import VarType

# =============================================================================
# Target ABC
# =============================================================================


class Target(ABC):
    """Base class for all GLSL dialects."""

    @abstractmethod
    def version_directive(self) -> str | None:
        """Return the version directive (e.g., '#version 330 core')."""
        ...

    def precision_qualifiers(self) -> list[str]:
        """Return default precision statements (for ES targets). Default: empty."""
        return []

    @property
    def uses_precision(self) -> bool:
        """Whether temporaries carry explicit precision prefixes."""
        return False

    def precision_prefix(self, var_type: VarType) -> str:
        """Prefix for a temporary declaration of the given type."""
        del var_type  # unused
        return ""

    def storage_qualifier(self, stage: Stage, storage: Storage) -> str:
        """Map a variable's storage to its qualifier in the given stage."""
        if storage == Storage.VARYING:
            return "out" if stage == Stage.VERTEX else "in"
        mapping = {
            Storage.ATTRIBUTE: "in",
            Storage.UNIFORM: "uniform",
            Storage.OUTPUT: "out",
        }
        return mapping[storage]

    def output_target(self, stage: Stage, channel: str) -> str:
        """Name assigned to for an output channel."""
        if stage == Stage.VERTEX and channel == POSITION_CHANNEL:
            return "gl_Position"
        return channel

    # --- Assembly ---

    def assemble(self, source: StageSource) -> str:
        """Generate complete shader text for one stage."""
        lines: list[str] = []

        version = self.version_directive()
        if version:
            lines.append(version)
            lines.extend(self.precision_qualifiers())
            lines.append("")

        # Inputs first (uniforms before per-vertex/per-fragment inputs), then outputs
        declared = sorted(source.inputs, key=lambda v: v.storage != Storage.UNIFORM)
        for var in declared:
            lines.append(self._emit_variable_decl(source.stage, var))
        multiple_outputs = source.stage == Stage.PIXEL and len(source.outputs) > 1
        for location, var in enumerate(source.outputs):
            decl = self._emit_variable_decl(source.stage, var)
            if multiple_outputs:
                decl = f"layout(location = {location}) {decl}"
            lines.append(decl)
        if declared or source.outputs:
            lines.append("")

        for func in source.functions:
            lines.append(func)
            lines.append("")

        lines.append("void main() {")
        for decl in source.declarations:
            lines.append(f"    {decl}")
        for channel, expr in source.assignments:
            lines.append(f"    {self.output_target(source.stage, channel)} = {expr};")
        lines.append("}")

        return "\n".join(lines) + "\n"

    def _emit_variable_decl(self, stage: Stage, var: ShaderVar) -> str:
        qualifier = self.storage_qualifier(stage, var.storage)
        return f"{qualifier} {var.type.glsl} {var.name};"


# =============================================================================
# OpenGL Base Target (shared implementation for OpenGL targets)
# =============================================================================


class OpenGLTarget(Target):
    """Base class for OpenGL-based targets.

    Subclasses only need to define ``_version``, the GLSL version string
    (e.g., "460 core", "330 core", "300 es").
    """

    _version: str

    def version_directive(self) -> str | None:
        return f"#version {self._version}"


class OpenGL46Target(OpenGLTarget):
    """Standard OpenGL 4.6 desktop target."""

    _version = "460 core"


class OpenGL33Target(OpenGLTarget):
    """OpenGL 3.3 desktop target for older systems."""

    _version = "330 core"


class WebGL2Target(OpenGLTarget):
    """WebGL 2.0 / GLSL ES 3.00 target, with explicit precision."""

    _version = "300 es"

    def __init__(self, precision: str = DEFAULT_PRECISION):
        self.precision = precision

    def precision_qualifiers(self) -> list[str]:
        return [f"precision {self.precision} float;"]

    @property
    def uses_precision(self) -> bool:
        return True

    def precision_prefix(self, var_type: VarType) -> str:
        return f"{self.precision} " if var_type.is_float else ""


# =============================================================================
# Target Type Enum and Factory
# =============================================================================


class TargetType(Enum):
    """Supported compilation targets."""

    OPENGL46 = auto()
    OPENGL33 = auto()
    WEBGL2 = auto()

    def create(self) -> Target:
        """Create a Target instance for this type."""
        factories: dict[TargetType, type[Target]] = {
            TargetType.OPENGL46: OpenGL46Target,
            TargetType.OPENGL33: OpenGL33Target,
            TargetType.WEBGL2: WebGL2Target,
        }
        return factories[self]()


# Default target
DEFAULT_TARGET = TargetType.OPENGL33
