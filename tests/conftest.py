"""Fixtures and configuration for pytest."""

import pytest

from shadergraph import (
    ShaderAdditiveCombiner,
    ShaderContext,
    ShaderCustom,
    ShaderDef,
    ShaderIVarCheck,
    ShaderLayout,
    ShaderLighter,
    ShaderMaterial,
    ShaderOp,
    ShaderPosRef,
    ShaderSpecLighter,
    ShaderVar,
    ShaderVarRef,
    Stage,
    Storage,
    VarType,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "gpu: mark test as requiring a GPU")


@pytest.fixture
def ctx():
    """Context with empty stage definitions, for generating single nodes."""
    return ShaderContext(ShaderDef({}), ShaderDef({}))


@pytest.fixture
def layout():
    """Pixel-stage layout with a handful of typed variables."""
    return ShaderLayout(
        [
            ShaderVar("color", VarType.FLOAT4),
            ShaderVar("tint", VarType.FLOAT4),
            ShaderVar("uv", VarType.FLOAT2, Storage.VARYING),
            ShaderVar("normal", VarType.FLOAT3, Storage.VARYING),
            ShaderVar("toLight", VarType.FLOAT3, Storage.VARYING),
            ShaderVar("depth", VarType.FLOAT, Storage.VARYING),
            ShaderVar("density", VarType.FLOAT),
            ShaderVar("tex", VarType.SAMPLER2D),
        ]
    )


@pytest.fixture
def generate(ctx, layout):
    """Generate a node in the pixel stage against the default layout."""

    def _generate(node, stage=Stage.PIXEL):
        return ctx.generate_node(node, layout, stage)

    return _generate


@pytest.fixture
def lit_defs():
    """Minimal per-pixel lit material graph with an optional specular term."""
    to_light = ShaderVarRef("v_toLight", type=VarType.FLOAT3)
    normal = ShaderVarRef("v_normal", type=VarType.FLOAT3)
    one = ShaderCustom.literal(VarType.FLOAT, "1.0")

    vertex_def = ShaderDef(
        {
            "position": ShaderPosRef(),
            "v_normal": ShaderVarRef("normal", type=VarType.FLOAT3),
            "v_toLight": ShaderVarRef("lightDir", type=VarType.FLOAT3),
            "v_toCamera": ShaderVarRef("cameraDir", type=VarType.FLOAT3),
        }
    )
    diffuse = ShaderLighter(to_light, normal, ShaderVarRef("lightColor"), one)
    specular = ShaderIVarCheck(
        "specularEnabled",
        ShaderSpecLighter(
            to_light,
            ShaderVarRef("v_toCamera", type=VarType.FLOAT3),
            normal,
            ShaderVarRef("specularColor"),
            one,
        ),
    )
    pixel_def = ShaderDef(
        {
            "fragColor": ShaderOp(
                ShaderVarRef("diffuseColor", "vec4(1.0)"),
                ShaderAdditiveCombiner([diffuse, specular]),
                "*",
                is_operator=True,
            )
        }
    )
    return vertex_def, pixel_def


@pytest.fixture
def lit_material():
    """Material for the lit graph, without specular inputs."""
    return (
        ShaderMaterial()
        .add_attribute("position", VarType.FLOAT4)
        .add_attribute("normal", VarType.FLOAT3)
        .add_attribute("lightDir", VarType.FLOAT3)
        .add_attribute("cameraDir", VarType.FLOAT3)
        .add_uniform("mvp", VarType.MAT4)
        .add_uniform("lightColor", VarType.FLOAT4)
    )
