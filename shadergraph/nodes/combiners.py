"""Arithmetic and combination nodes."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadergraph.layout import ShaderLayout, Stage
from shadergraph.nodes.base import ShaderNode
from shadergraph.temps import TempKind
from shadergraph.types import VarType, convert

if TYPE_CHECKING:
    from shadergraph.context import ShaderContext


@dataclass(frozen=True, eq=False, init=False)
class ShaderAdditiveCombiner(ShaderNode):
    """Sum of every child that applies."""

    nodes: tuple[ShaderNode, ...]
    type: VarType

    def __init__(self, nodes: Sequence[ShaderNode] = (), type: VarType = VarType.FLOAT4):
        object.__setattr__(self, "nodes", tuple(nodes))
        object.__setattr__(self, "type", type)

    def with_node(self, node: ShaderNode) -> "ShaderAdditiveCombiner":
        """Return a combiner with ``node`` appended."""
        return ShaderAdditiveCombiner((*self.nodes, node), self.type)

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        terms = []
        for node in self.nodes:
            result = ctx.generate_node(node, layout, stage)
            if result is not None:
                terms.append(convert(result, node.type, self.type))

        if not terms:
            return None
        if len(terms) == 1:
            return terms[0]
        return "(" + " + ".join(terms) + ")"


@dataclass(frozen=True, eq=False)
class ShaderOp(ShaderNode):
    """Binary operation, written infix or as a call.

    Unless ``needs_all`` is set, a missing operand drops out and the other
    operand is used alone.
    """

    n1: ShaderNode
    n2: ShaderNode
    op: str
    is_operator: bool
    needs_all: bool = False
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        a = ctx.generate_node(self.n1, layout, stage)
        if a is None and self.needs_all:
            return None
        b = ctx.generate_node(self.n2, layout, stage)

        match (a, b):
            case (None, None):
                return None
            case (_, None):
                return None if self.needs_all else convert(a, self.n1.type, self.type)
            case (None, _):
                return convert(b, self.n2.type, self.type)

        if self.is_operator:
            # Same-typed infix operands produce their own type; mixed ones
            # (matrix times vector) already yield the declared type.
            expr = f"({a} {self.op} {b})"
            if self.n1.type == self.n2.type:
                return convert(expr, self.n1.type, self.type)
            return expr
        return f"{self.op}({a}, {b})"


@dataclass(frozen=True, eq=False)
class ShaderAffineBlend(ShaderNode):
    """Interpolate from n1 to n2 by blend; n2 alone when blend or n1 is missing."""

    blend: ShaderNode
    n1: ShaderNode
    n2: ShaderNode
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        b = ctx.generate_node(self.n2, layout, stage)
        if b is None:
            return None
        b = convert(b, self.n2.type, self.type)

        blend = ctx.generate_node(self.blend, layout, stage)
        if blend is None:
            return b
        a = ctx.generate_node(self.n1, layout, stage)
        if a is None:
            return b

        a = convert(a, self.n1.type, self.type)
        blend = convert(blend, self.blend.type, VarType.FLOAT)
        return f"mix({a}, {b}, {blend})"


@dataclass(frozen=True, eq=False)
class ShaderTempRef(ShaderNode):
    """Save a body into a named temporary and reference it by name.

    Only valuable when the same node is reused more than once.
    """

    type: VarType
    name: str
    body: ShaderNode
    kind: TempKind = TempKind.VALUE

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        body = ctx.generate_node(self.body, layout, stage)
        if body is None:
            return None
        body = convert(body, self.body.type, self.type)

        if self.kind == TempKind.FUNCTION:
            ctx.add_temp_func(stage, self.type, self.name, body)
            return f"{self.name}()"
        ctx.add_temp_val(stage, self.type, self.name, body)
        return self.name
