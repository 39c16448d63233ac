"""Lighting and atmosphere nodes.

All of these need every operand: a light without a direction or a fog
without a depth simply does not apply.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shadergraph.constants import DEFAULT_FOG_RANGE, DEFAULT_SHININESS
from shadergraph.layout import ShaderLayout, Stage
from shadergraph.nodes.base import ShaderNode, generate_operands
from shadergraph.nodes.refs import ShaderVarRef
from shadergraph.types import VarType, convert, swizzle

if TYPE_CHECKING:
    from shadergraph.context import ShaderContext


@dataclass(frozen=True, eq=False)
class ShaderAttenuator(ShaderNode):
    """Distance falloff from (constant, linear, quadratic) coefficients."""

    to_light: ShaderNode
    atten: ShaderNode
    type: VarType = VarType.FLOAT

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx,
            layout,
            stage,
            (self.to_light, VarType.FLOAT3),
            (self.atten, VarType.FLOAT3),
        )
        if operands is None:
            return None
        to_light, atten = operands
        return (
            f"(1.0 / dot({atten}, "
            f"vec3(1.0, length({to_light}), dot({to_light}, {to_light}))))"
        )


@dataclass(frozen=True, eq=False)
class ShaderReflNode(ShaderNode):
    """Reflection of ``src`` about ``norm``."""

    norm: ShaderNode
    src: ShaderNode
    type: VarType = VarType.FLOAT3

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx, layout, stage, (self.norm, VarType.FLOAT3), (self.src, VarType.FLOAT3)
        )
        if operands is None:
            return None
        norm, src = operands
        return convert(f"reflect({src}, normalize({norm}))", VarType.FLOAT3, self.type)


@dataclass(frozen=True, eq=False)
class ShaderLighter(ShaderNode):
    """Lambertian diffuse contribution of one light."""

    light_dir: ShaderNode
    normal: ShaderNode
    color: ShaderNode
    atten: ShaderNode
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx,
            layout,
            stage,
            (self.light_dir, VarType.FLOAT3),
            (self.normal, VarType.FLOAT3),
            (self.color, self.type),
            (self.atten, VarType.FLOAT),
        )
        if operands is None:
            return None
        light_dir, normal, color, atten = operands
        return (
            f"(max(dot(normalize({normal}), normalize({light_dir})), 0.0)"
            f" * {atten} * {color})"
        )


@dataclass(frozen=True, eq=False)
class ShaderSpecLighter(ShaderNode):
    """Blinn-Phong specular contribution of one light."""

    light_dir: ShaderNode
    camera_dir: ShaderNode
    normal: ShaderNode
    color: ShaderNode
    atten: ShaderNode
    shininess: ShaderNode = ShaderVarRef(
        "shininess", DEFAULT_SHININESS, type=VarType.FLOAT
    )
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx,
            layout,
            stage,
            (self.light_dir, VarType.FLOAT3),
            (self.camera_dir, VarType.FLOAT3),
            (self.normal, VarType.FLOAT3),
            (self.color, self.type),
            (self.atten, VarType.FLOAT),
            (self.shininess, VarType.FLOAT),
        )
        if operands is None:
            return None
        light_dir, camera_dir, normal, color, atten, shininess = operands
        half_vec = f"normalize(normalize({light_dir}) + normalize({camera_dir}))"
        return (
            f"(pow(max(dot(normalize({normal}), {half_vec}), 0.0), {shininess})"
            f" * {atten} * {color})"
        )


@dataclass(frozen=True, eq=False)
class ShaderSpotlightAtten(ShaderNode):
    """Cone falloff from (cos cutoff, exponent) spotlight parameters."""

    light_dir: ShaderNode
    params: ShaderNode
    dir: ShaderNode
    type: VarType = VarType.FLOAT

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx,
            layout,
            stage,
            (self.light_dir, VarType.FLOAT3),
            (self.params, VarType.FLOAT2),
            (self.dir, VarType.FLOAT3),
        )
        if operands is None:
            return None
        light_dir, params, spot_dir = operands
        cos_angle = f"dot(-normalize({light_dir}), normalize({spot_dir}))"
        return (
            f"(step({swizzle(params, 'x')}, {cos_angle})"
            f" * pow(max({cos_angle}, 0.0), {swizzle(params, 'y')}))"
        )


@dataclass(frozen=True, eq=False)
class ShaderLinearFog(ShaderNode):
    """Linear fog factor from (start, end) distances; 1 means no fog."""

    depth_ref: ShaderNode
    fog_params: ShaderNode
    type: VarType = VarType.FLOAT

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        depth = ctx.generate_node(self.depth_ref, layout, stage)
        if depth is None:
            return None
        depth = convert(depth, self.depth_ref.type, VarType.FLOAT)

        params = ctx.generate_node(self.fog_params, layout, stage)
        if params is None:
            params = DEFAULT_FOG_RANGE
        else:
            params = convert(params, self.fog_params.type, VarType.FLOAT2)

        start, end = swizzle(params, "x"), swizzle(params, "y")
        return f"clamp(({end} - {depth}) / ({end} - {start}), 0.0, 1.0)"


@dataclass(frozen=True, eq=False)
class ShaderExpFog(ShaderNode):
    """Exponential (or squared exponential) fog factor; 1 means no fog."""

    depth_ref: ShaderNode
    density_ref: ShaderNode
    squared: bool = False
    type: VarType = VarType.FLOAT

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        operands = generate_operands(
            ctx,
            layout,
            stage,
            (self.depth_ref, VarType.FLOAT),
            (self.density_ref, VarType.FLOAT),
        )
        if operands is None:
            return None
        depth, density = operands
        amount = f"({density} * {depth})"
        if self.squared:
            return f"exp(-({amount} * {amount}))"
        return f"exp(-{amount})"
