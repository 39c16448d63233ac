"""Tests for leaf and reference nodes."""

from shadergraph import (
    ShaderCustom,
    ShaderFallbackNode,
    ShaderFallbackRef,
    ShaderIVarCheck,
    ShaderLayout,
    ShaderMaterial,
    ShaderPosRef,
    ShaderVar,
    ShaderVarRef,
    Stage,
    Storage,
    VarType,
)


class TestVarRef:
    """Test variable references."""

    def test_present_variable(self, generate, layout):
        assert generate(ShaderVarRef("color")) == "color"
        assert layout.is_used("color")

    def test_missing_variable_uses_constant(self, generate):
        assert generate(ShaderVarRef("missing", "vec4(1.0)")) == "vec4(1.0)"

    def test_missing_variable_without_constant_fails(self, generate):
        assert generate(ShaderVarRef("missing")) is None

    def test_variable_is_coerced_to_node_type(self, generate):
        assert generate(ShaderVarRef("normal")) == "vec4(normal, 1.0)"
        assert generate(ShaderVarRef("color", type=VarType.FLOAT3)) == "color.xyz"

    def test_unused_variables_stay_unused(self, generate, layout):
        generate(ShaderVarRef("color"))
        assert [var.name for var in layout.used()] == ["color"]


class TestFallbackRef:
    """Test two-name fallback references."""

    def test_only_second_present(self, generate, layout):
        node = ShaderFallbackRef("missing", "tint", "vec4(0.0)")
        assert generate(node) == "tint"
        assert not layout.is_used("missing")

    def test_first_wins(self, generate, layout):
        assert generate(ShaderFallbackRef("color", "tint")) == "color"
        assert not layout.is_used("tint")

    def test_constant_when_neither_present(self, generate):
        assert generate(ShaderFallbackRef("a", "b", "vec4(0.5)")) == "vec4(0.5)"

    def test_fails_without_constant(self, generate):
        assert generate(ShaderFallbackRef("a", "b")) is None


class TestFallbackNode:
    """Test ordered alternatives."""

    def test_first_success_wins(self, generate, layout):
        node = ShaderFallbackNode(
            [ShaderVarRef("missing"), ShaderVarRef("tint"), ShaderVarRef("color")]
        )
        assert generate(node) == "tint"
        assert not layout.is_used("color")

    def test_all_fail(self, generate):
        node = ShaderFallbackNode([ShaderVarRef("a"), ShaderVarRef("b")])
        assert generate(node) is None

    def test_type_follows_first_child(self):
        node = ShaderFallbackNode([ShaderVarRef("a", type=VarType.FLOAT3)])
        assert node.type == VarType.FLOAT3

    def test_explicit_type_converts_children(self, generate):
        node = ShaderFallbackNode(
            [ShaderVarRef("depth", type=VarType.FLOAT)], type=VarType.FLOAT4
        )
        assert generate(node) == "vec4(depth)"


class TestIVarCheck:
    """Test material switch gates."""

    def test_missing_switch_fails(self, generate, layout):
        assert generate(ShaderIVarCheck("enabled", ShaderVarRef("color"))) is None
        assert not layout.is_used("color")

    def test_zero_switch_fails(self, ctx, generate):
        ctx.input_material = ShaderMaterial(ivars={"enabled": 0})
        assert generate(ShaderIVarCheck("enabled", ShaderVarRef("color"))) is None

    def test_nonzero_switch_delegates(self, ctx, generate):
        ctx.input_material = ShaderMaterial(ivars={"enabled": 2})
        assert generate(ShaderIVarCheck("enabled", ShaderVarRef("color"))) == "color"

    def test_type_follows_inner(self):
        node = ShaderIVarCheck("x", ShaderVarRef("depth", type=VarType.FLOAT))
        assert node.type == VarType.FLOAT


class TestPosRef:
    """Test the transformed position."""

    def test_adds_mandatory_inputs(self, ctx):
        layout = ShaderLayout()
        assert ctx.generate_node(ShaderPosRef(), layout, Stage.VERTEX) == (
            "mvp * position"
        )
        assert [var.name for var in layout.used()] == ["position", "mvp"]
        assert layout.get("position").storage == Storage.ATTRIBUTE
        assert layout.get("mvp").type == VarType.MAT4

    def test_vec3_position(self, ctx):
        layout = ShaderLayout(
            [
                ShaderVar("mvp", VarType.MAT4),
                ShaderVar("position", VarType.FLOAT3, Storage.ATTRIBUTE),
            ]
        )
        assert ctx.generate_node(ShaderPosRef(), layout, Stage.VERTEX) == (
            "mvp * vec4(position, 1.0)"
        )


class TestCustom:
    """Test literal text nodes."""

    def test_wraps_inner(self, generate):
        node = ShaderCustom(
            "normalize(",
            ")",
            ShaderVarRef("normal", type=VarType.FLOAT3),
            type=VarType.FLOAT3,
        )
        assert generate(node) == "normalize(normal)"

    def test_fails_with_inner(self, generate):
        assert generate(ShaderCustom("-", "", ShaderVarRef("missing"))) is None

    def test_missing_inner_node_fails(self, generate):
        assert generate(ShaderCustom("-")) is None

    def test_literal_always_succeeds(self, generate):
        node = ShaderCustom.literal(VarType.FLOAT, "0.5")
        assert node.type == VarType.FLOAT
        assert generate(node) == "0.5"
