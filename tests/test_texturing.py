"""Tests for texture sampling nodes."""

import pytest

from shadergraph import (
    ShaderCubeRef,
    ShaderGenError,
    ShaderLayout,
    ShaderMaterial,
    ShaderSpecularTex,
    ShaderTexRef,
    ShaderVar,
    ShaderVarRef,
    Stage,
    Storage,
    TextureMode,
    VarType,
)

SAMPLE = "texture(tex, uv)"


@pytest.fixture
def uv():
    return ShaderVarRef("uv", type=VarType.FLOAT2)


def _with_mode(ctx, mode):
    ctx.input_material = ShaderMaterial(ivars={"texMode": mode})


class TestTexRef:
    """Test 2D texture lookups."""

    def test_lookup(self, generate, layout, uv):
        assert generate(ShaderTexRef("tex", uv)) == SAMPLE
        assert layout.is_used("tex")
        assert layout.is_used("uv")

    def test_missing_texture_falls_through(self, generate, layout, uv):
        node = ShaderTexRef("missing", uv, next_ref=ShaderVarRef("color"))
        assert generate(node) == "color"
        assert not layout.is_used("uv")

    def test_missing_coordinates_fall_through(self, generate, layout):
        node = ShaderTexRef(
            "tex",
            ShaderVarRef("missing", type=VarType.FLOAT2),
            next_ref=ShaderVarRef("color"),
        )
        assert generate(node) == "color"
        assert not layout.is_used("tex")

    def test_nothing_to_fall_through_to(self, generate, uv):
        assert generate(ShaderTexRef("missing", uv)) is None

    def test_coordinates_are_converted(self, generate):
        node = ShaderTexRef("tex", ShaderVarRef("color"))
        assert generate(node) == "texture(tex, color.xy)"

    def test_default_mode_replaces(self, generate, layout, uv):
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("color"))
        assert generate(node) == SAMPLE
        assert not layout.is_used("color")

    def test_replace_leaves_value_beneath_unused(self, ctx, generate, layout, uv):
        _with_mode(ctx, TextureMode.REPLACE)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("normal"))
        assert generate(node) == SAMPLE
        assert not layout.is_used("normal")

    def test_result_is_converted(self, generate, uv):
        node = ShaderTexRef("tex", uv, type=VarType.FLOAT3)
        assert generate(node) == f"({SAMPLE}).xyz"

    def test_fall_through_is_converted(self, generate):
        node = ShaderTexRef(
            "missing",
            ShaderVarRef("uv", type=VarType.FLOAT2),
            next_ref=ShaderVarRef("color"),
            type=VarType.FLOAT3,
        )
        assert generate(node) == "color.xyz"

    def test_modulate(self, ctx, generate, uv):
        _with_mode(ctx, TextureMode.MODULATE)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("color"))
        assert generate(node) == f"({SAMPLE} * color)"

    def test_decal(self, ctx, generate, uv):
        _with_mode(ctx, TextureMode.DECAL)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("color"))
        assert generate(node) == (
            f"vec4(mix((color).rgb, ({SAMPLE}).rgb, ({SAMPLE}).a), (color).a)"
        )

    def test_add(self, ctx, generate, uv):
        _with_mode(ctx, TextureMode.ADD)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("color"))
        assert generate(node) == (
            f"vec4((color).rgb + ({SAMPLE}).rgb, (color).a * ({SAMPLE}).a)"
        )

    def test_mode_without_value_beneath(self, ctx, generate, uv):
        _with_mode(ctx, TextureMode.MODULATE)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("missing"))
        assert generate(node) == SAMPLE

    def test_unknown_mode(self, ctx, generate, uv):
        _with_mode(ctx, 7)
        node = ShaderTexRef("tex", uv, "texMode", ShaderVarRef("color"))
        with pytest.raises(ShaderGenError, match="Unknown texture mode 7"):
            generate(node)

    def test_chained_textures(self, ctx, generate, layout, uv):
        layout.add(ShaderVar("tex1", VarType.SAMPLER2D))
        ctx.input_material = ShaderMaterial(ivars={"tex1Mode": TextureMode.MODULATE})
        base = ShaderTexRef("tex", uv)
        node = ShaderTexRef("tex1", uv, "tex1Mode", base)
        assert generate(node) == f"(texture(tex1, uv) * {SAMPLE})"


class TestCubeRef:
    """Test cube map lookups."""

    @pytest.fixture
    def cube_layout(self):
        return ShaderLayout(
            [
                ShaderVar("env", VarType.SAMPLERCUBE),
                ShaderVar("refl", VarType.FLOAT3, Storage.VARYING),
                ShaderVar("reflAlpha", VarType.FLOAT),
            ]
        )

    def test_lookup(self, ctx, cube_layout):
        node = ShaderCubeRef("env", ShaderVarRef("refl", type=VarType.FLOAT3))
        assert ctx.generate_node(node, cube_layout, Stage.PIXEL) == (
            "texture(env, refl)"
        )

    def test_coordinates_are_three_component(self, ctx, cube_layout):
        cube_layout.add(ShaderVar("dir4", VarType.FLOAT4))
        node = ShaderCubeRef("env", ShaderVarRef("dir4"))
        assert ctx.generate_node(node, cube_layout, Stage.PIXEL) == (
            "texture(env, dir4.xyz)"
        )

    def test_reflection_alpha(self, ctx, cube_layout):
        node = ShaderCubeRef(
            "env",
            ShaderVarRef("refl", type=VarType.FLOAT3),
            refl_alpha=ShaderVarRef("reflAlpha", type=VarType.FLOAT),
        )
        assert ctx.generate_node(node, cube_layout, Stage.PIXEL) == (
            "vec4(texture(env, refl).rgb, reflAlpha)"
        )

    def test_missing_reflection_alpha(self, ctx, cube_layout):
        node = ShaderCubeRef(
            "env",
            ShaderVarRef("refl", type=VarType.FLOAT3),
            refl_alpha=ShaderVarRef("missing", type=VarType.FLOAT),
        )
        assert ctx.generate_node(node, cube_layout, Stage.PIXEL) == (
            "texture(env, refl)"
        )


class TestSpecularTex:
    """Test specular map lookups."""

    def test_lookup(self, generate, layout, uv):
        assert generate(ShaderSpecularTex("tex", uv)) == (
            "vec4(texture(tex, uv).rgb, 1.0)"
        )
        assert layout.is_used("tex")

    def test_falls_through(self, generate, uv):
        node = ShaderSpecularTex("missing", uv, ShaderVarRef("tint"))
        assert generate(node) == "tint"

    def test_nothing_applies(self, generate, uv):
        assert generate(ShaderSpecularTex("missing", uv)) is None
