"""Node protocol and stage definitions."""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from shadergraph.layout import ShaderLayout, Stage
from shadergraph.types import VarType, convert

if TYPE_CHECKING:
    from shadergraph.context import ShaderContext


class ShaderNode(ABC):
    """A code generator for one typed GLSL expression.

    Nodes are built once, when a material's graph is assembled, and never
    change afterwards; all generation-time state lives in the context. The
    same node object may appear under several parents.

    Subclasses are frozen dataclasses compared by identity and declare a
    ``type`` field holding the result type.
    """

    type: VarType

    @abstractmethod
    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        """Generate an expression of type ``self.type``.

        Args:
            ctx: Compilation context (temp tables, material switches)
            layout: Variables visible to ``stage``; usage is recorded on it
            stage: Stage being generated

        Returns:
            The expression, or None if this node does not apply to the
            current material
        """
        ...


def generate_operands(
    ctx: "ShaderContext",
    layout: ShaderLayout,
    stage: Stage,
    *operands: tuple[ShaderNode, VarType],
) -> list[str] | None:
    """Generate every operand as the requested type, or None if any is missing."""
    results = []
    for node, var_type in operands:
        result = ctx.generate_node(node, layout, stage)
        if result is None:
            return None
        results.append(convert(result, node.type, var_type))
    return results


class ShaderDef(Mapping[str, ShaderNode]):
    """Immutable mapping from output channel name to its root node.

    Definitions are shared between compilations and compared by identity.
    """

    __slots__ = ("_def",)

    def __init__(self, definition: Mapping[str, ShaderNode]):
        self._def = MappingProxyType(dict(definition))

    def __getitem__(self, channel: str) -> ShaderNode:
        return self._def[channel]

    def __iter__(self) -> Iterator[str]:
        return iter(self._def)

    def __len__(self) -> int:
        return len(self._def)

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self) -> "ShaderDef":
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> "ShaderDef":
        return self

    def __repr__(self) -> str:
        return f"ShaderDef({list(self._def)})"
