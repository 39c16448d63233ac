"""Texture sampling nodes.

Texture nodes chain: ``next_ref`` is what the material looks like without
this texture (an earlier texture unit, a vertex colour, a constant). A
texture whose sampler or coordinates are missing defers to it entirely.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, ClassVar

from shadergraph.errors import ShaderGenError
from shadergraph.layout import ShaderLayout, Stage
from shadergraph.nodes.base import ShaderNode
from shadergraph.types import VarType, convert

if TYPE_CHECKING:
    from shadergraph.context import ShaderContext


class TextureMode(IntEnum):
    """How a texture sample is combined with the value beneath it."""

    REPLACE = 0
    MODULATE = 1
    DECAL = 2
    ADD = 3


@dataclass(frozen=True, eq=False)
class ShaderTexRef(ShaderNode):
    """Texture lookup, falling through to ``next_ref`` when not applicable."""

    tex_var: str
    uv_ref: ShaderNode
    mode_var: str | None = None
    next_ref: ShaderNode | None = None
    type: VarType = VarType.FLOAT4

    uv_type: ClassVar[VarType] = VarType.FLOAT2

    def gen_tex_lookup(
        self,
        tex_var: str,
        uv: str,
        ctx: "ShaderContext",
        layout: ShaderLayout,
        stage: Stage,
    ) -> str:
        layout.use(tex_var)
        return f"texture({tex_var}, {uv})"

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        if self.tex_var in layout:
            uv = ctx.generate_node(self.uv_ref, layout, stage)
            if uv is not None:
                uv = convert(uv, self.uv_ref.type, self.uv_type)
                sample = self.gen_tex_lookup(self.tex_var, uv, ctx, layout, stage)
                result = self._apply_mode(sample, ctx, layout, stage)
                return convert(result, VarType.FLOAT4, self.type)

        return self._generate_next(ctx, layout, stage, self.type)

    def _generate_next(
        self,
        ctx: "ShaderContext",
        layout: ShaderLayout,
        stage: Stage,
        var_type: VarType,
    ) -> str | None:
        if self.next_ref is None:
            return None
        prev = ctx.generate_node(self.next_ref, layout, stage)
        if prev is None:
            return None
        return convert(prev, self.next_ref.type, var_type)

    def _texture_mode(self, ctx: "ShaderContext") -> TextureMode:
        mode_value = ctx.get_ivar(self.mode_var, TextureMode.REPLACE)
        try:
            return TextureMode(mode_value)
        except ValueError:
            raise ShaderGenError(
                f"Unknown texture mode {mode_value} in '{self.mode_var}'", self
            ) from None

    def _apply_mode(
        self, sample: str, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str:
        if self.mode_var is None:
            return sample
        mode = self._texture_mode(ctx)
        # REPLACE leaves next_ref ungenerated
        if mode == TextureMode.REPLACE:
            return sample
        prev = self._generate_next(ctx, layout, stage, VarType.FLOAT4)
        if prev is None:
            return sample

        match mode:
            case TextureMode.MODULATE:
                return f"({sample} * {prev})"
            case TextureMode.DECAL:
                return (
                    f"vec4(mix(({prev}).rgb, ({sample}).rgb, ({sample}).a), "
                    f"({prev}).a)"
                )
            case _:
                return (
                    f"vec4(({prev}).rgb + ({sample}).rgb, "
                    f"({prev}).a * ({sample}).a)"
                )


@dataclass(frozen=True, eq=False)
class ShaderCubeRef(ShaderTexRef):
    """Cube map lookup along a reflection vector.

    When ``refl_alpha`` applies, it replaces the sample's alpha, so a DECAL
    mode blends the direct and reflected colours by that factor.
    """

    refl_alpha: ShaderNode | None = None

    uv_type: ClassVar[VarType] = VarType.FLOAT3

    def gen_tex_lookup(
        self,
        tex_var: str,
        uv: str,
        ctx: "ShaderContext",
        layout: ShaderLayout,
        stage: Stage,
    ) -> str:
        sample = super().gen_tex_lookup(tex_var, uv, ctx, layout, stage)
        if self.refl_alpha is None:
            return sample
        alpha = ctx.generate_node(self.refl_alpha, layout, stage)
        if alpha is None:
            return sample
        alpha = convert(alpha, self.refl_alpha.type, VarType.FLOAT)
        return f"vec4({sample}.rgb, {alpha})"


@dataclass(frozen=True, eq=False)
class ShaderSpecularTex(ShaderNode):
    """Specular intensity map lookup, falling through to ``next_ref``."""

    tex_var: str
    uv_ref: ShaderNode
    next_ref: ShaderNode | None = None
    type: VarType = VarType.FLOAT4

    def generate(
        self, ctx: "ShaderContext", layout: ShaderLayout, stage: Stage
    ) -> str | None:
        if self.tex_var in layout:
            uv = ctx.generate_node(self.uv_ref, layout, stage)
            if uv is not None:
                layout.use(self.tex_var)
                uv = convert(uv, self.uv_ref.type, VarType.FLOAT2)
                return convert(
                    f"vec4(texture({self.tex_var}, {uv}).rgb, 1.0)",
                    VarType.FLOAT4,
                    self.type,
                )

        if self.next_ref is None:
            return None
        result = ctx.generate_node(self.next_ref, layout, stage)
        if result is None:
            return None
        return convert(result, self.next_ref.type, self.type)
