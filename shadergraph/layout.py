"""Variables visible to a shader stage, and the material that supplies them."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

from shadergraph.types import VarType


class Stage(Enum):
    """Shader pipeline stage."""

    VERTEX = auto()
    PIXEL = auto()


class Storage(Enum):
    """How a variable reaches the stage that reads it."""

    ATTRIBUTE = auto()
    UNIFORM = auto()
    VARYING = auto()
    OUTPUT = auto()


@dataclass(frozen=True)
class ShaderVar:
    """A named, typed variable.

    Attributes:
        name: Identifier used in the generated source
        type: Value type
        storage: Attribute (vertex only), uniform (both stages), varying
            (vertex output read by the pixel stage) or stage output
    """

    name: str
    type: VarType
    storage: Storage = Storage.UNIFORM


class ShaderLayout:
    """Ordered set of variables visible at a point in generation.

    Lookups through :meth:`use` record which variables ended up referenced so
    that only those get declared. The layout grows when a node requires an
    input it assumes to be present.
    """

    def __init__(self, variables: Iterable[ShaderVar] = ()):
        self._vars: dict[str, ShaderVar] = {}
        self._used: dict[str, None] = {}
        for var in variables:
            self.add(var)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[ShaderVar]:
        return iter(self._vars.values())

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        names = ", ".join(self._vars)
        return f"ShaderLayout([{names}])"

    def add(self, var: ShaderVar) -> None:
        self._vars[var.name] = var

    def get(self, name: str) -> ShaderVar | None:
        return self._vars.get(name)

    def use(self, name: str) -> ShaderVar | None:
        """Look up a variable and mark it consumed."""
        var = self._vars.get(name)
        if var is not None:
            self._used[name] = None
        return var

    def require(self, var: ShaderVar) -> ShaderVar:
        """Mark a mandatory input consumed, adding it if the material omits it."""
        if var.name not in self._vars:
            self.add(var)
        self._used[var.name] = None
        return self._vars[var.name]

    def is_used(self, name: str) -> bool:
        return name in self._used

    def used(self) -> list[ShaderVar]:
        """Consumed variables, in declaration order."""
        return [var for name, var in self._vars.items() if name in self._used]


@dataclass
class ShaderMaterial:
    """Inputs a renderable supplies at shading time.

    Attributes:
        variables: Named inputs; attributes are visible to the vertex stage
            only, uniforms to both stages
        ivars: Integer switches enabling or configuring optional effects
    """

    variables: dict[str, ShaderVar] = field(default_factory=dict)
    ivars: dict[str, int] = field(default_factory=dict)

    def add_attribute(self, name: str, var_type: VarType) -> "ShaderMaterial":
        self.variables[name] = ShaderVar(name, var_type, Storage.ATTRIBUTE)
        return self

    def add_uniform(self, name: str, var_type: VarType) -> "ShaderMaterial":
        self.variables[name] = ShaderVar(name, var_type, Storage.UNIFORM)
        return self

    def set_ivar(self, name: str, value: int) -> "ShaderMaterial":
        self.ivars[name] = value
        return self

    def get_ivar(self, name: str, default: int = 0) -> int:
        return self.ivars.get(name, default)

    def layout_for(self, stage: Stage) -> ShaderLayout:
        """Build a fresh layout of the variables the given stage can see."""
        if stage == Stage.VERTEX:
            return ShaderLayout(self.variables.values())
        return ShaderLayout(
            var for var in self.variables.values() if var.storage == Storage.UNIFORM
        )
