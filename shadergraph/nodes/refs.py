"""Leaf and reference nodes: variables, constants, switches, fallbacks."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadergraph.constants import (
    MVP_UNIFORM,
    POSITION_ATTRIBUTE,
    POSITION_ATTRIBUTE_TYPE,
)
from shadergraph.layout import ShaderLayout, ShaderVar, Stage, Storage
from shadergraph.nodes.base import ShaderNode
from shadergraph.types import VarType, convert

if TYPE_CHECKING:
    from shadergraph.context import ShaderContext


def _reference(layout: ShaderLayout, name: str, node_type: VarType) -> str | None:
    """Reference a visible variable as ``node_type``, marking it used."""
    var = layout.use(name)
    if var is None:
        return None
    return convert(var.name, var.type, node_type)


@dataclass(frozen=True, eq=False)
class ShaderIVarCheck(ShaderNode):
    """Generate ``node`` only when the material switch ``name`` is non-zero."""

    name: str
    node: ShaderNode

    @property
    def type(self) -> VarType:  # type: ignore[override]
        return self.node.type

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        if ctx.get_ivar(self.name, 0) == 0:
            return None
        return ctx.generate_node(self.node, layout, stage)


@dataclass(frozen=True, eq=False)
class ShaderVarRef(ShaderNode):
    """Use a variable if present, else a constant, else nothing."""

    name: str
    constant: str | None = None
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        ref = _reference(layout, self.name, self.type)
        if ref is not None:
            return ref
        return self.constant


@dataclass(frozen=True, eq=False)
class ShaderFallbackRef(ShaderNode):
    """Use the first variable that's present, or a constant, or nothing."""

    first: str
    second: str
    constant: str | None = None
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        for name in (self.first, self.second):
            ref = _reference(layout, name, self.type)
            if ref is not None:
                return ref
        return self.constant


@dataclass(frozen=True, eq=False, init=False)
class ShaderFallbackNode(ShaderNode):
    """Try each child in order; the first one that applies wins."""

    nodes: tuple[ShaderNode, ...]
    result_type: VarType | None

    def __init__(self, nodes: Sequence[ShaderNode], type: VarType | None = None):
        object.__setattr__(self, "nodes", tuple(nodes))
        object.__setattr__(self, "result_type", type)

    @property
    def type(self) -> VarType:  # type: ignore[override]
        if self.result_type is not None:
            return self.result_type
        return self.nodes[0].type if self.nodes else VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        for node in self.nodes:
            result = ctx.generate_node(node, layout, stage)
            if result is not None:
                return convert(result, node.type, self.type)
        return None


@dataclass(frozen=True, eq=False)
class ShaderPosRef(ShaderNode):
    """Input position transformed by the model-view-projection matrix."""

    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        position = layout.require(
            ShaderVar(POSITION_ATTRIBUTE, POSITION_ATTRIBUTE_TYPE, Storage.ATTRIBUTE)
        )
        mvp = layout.require(ShaderVar(MVP_UNIFORM, VarType.MAT4, Storage.UNIFORM))
        pos = convert(position.name, position.type, VarType.FLOAT4)
        return f"{mvp.name} * {pos}"


@dataclass(frozen=True, eq=False)
class ShaderCustom(ShaderNode):
    """Literal text, optionally wrapped around another node's expression."""

    before: str
    after: str = ""
    inner: ShaderNode | None = None
    use_inner: bool = True
    type: VarType = VarType.FLOAT4

    @classmethod
    def literal(cls, var_type: VarType, text: str) -> "ShaderCustom":
        """Fixed expression of a fixed type that always applies."""
        return cls(text, "", None, False, var_type)

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        if not self.use_inner:
            return self.before + self.after
        if self.inner is None:
            return None
        inner = ctx.generate_node(self.inner, layout, stage)
        if inner is None:
            return None
        return f"{self.before}{inner}{self.after}"
