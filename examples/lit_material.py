"""Per-pixel lit, textured, fogged material.

Usage:
    shadergraph export-code examples/lit_material.py
    shadergraph export-code examples/lit_material.py -i specularEnabled=1
    shadergraph export-code examples/lit_material.py -i fogEnabled=1 -t webgl2
"""

from shadergraph import (
    ShaderAdditiveCombiner,
    ShaderAffineBlend,
    ShaderAttenuator,
    ShaderCustom,
    ShaderDef,
    ShaderFallbackNode,
    ShaderFallbackRef,
    ShaderIVarCheck,
    ShaderLighter,
    ShaderLinearFog,
    ShaderMaterial,
    ShaderOp,
    ShaderPosRef,
    ShaderSpecLighter,
    ShaderTempRef,
    ShaderTexRef,
    ShaderVarRef,
    TextureMode,
    VarType,
)

# --- Vertex stage ---

eye_pos = ShaderTempRef(
    VarType.FLOAT4,
    "eyePos",
    ShaderOp(
        ShaderVarRef("modelView", type=VarType.MAT4),
        ShaderVarRef("position"),
        "*",
        is_operator=True,
        needs_all=True,
    ),
)

vertex_def = ShaderDef(
    {
        "position": ShaderPosRef(),
        "v_texCoord0": ShaderVarRef("texCoord0", type=VarType.FLOAT2),
        "v_color": ShaderVarRef("color"),
        "v_normal": ShaderOp(
            ShaderVarRef("normalMatrix", type=VarType.MAT3),
            ShaderVarRef("normal", type=VarType.FLOAT3),
            "*",
            is_operator=True,
            needs_all=True,
            type=VarType.FLOAT3,
        ),
        "v_toLight": ShaderOp(
            ShaderVarRef("lightPos"),
            eye_pos,
            "-",
            is_operator=True,
            needs_all=True,
        ),
        "v_toCamera": ShaderCustom("-", "", eye_pos),
        "v_depth": ShaderCustom("-", ".z", eye_pos, type=VarType.FLOAT),
    }
)

# --- Pixel stage ---

to_light = ShaderVarRef("v_toLight", type=VarType.FLOAT3)
normal = ShaderVarRef("v_normal", type=VarType.FLOAT3)
one = ShaderCustom.literal(VarType.FLOAT, "1.0")

base_color = ShaderTexRef(
    "tex0",
    ShaderVarRef("v_texCoord0", type=VarType.FLOAT2),
    mode_var="tex0Mode",
    next_ref=ShaderFallbackRef("v_color", "diffuseColor", "vec4(1.0)"),
)

attenuation = ShaderFallbackNode(
    [ShaderAttenuator(to_light, ShaderVarRef("lightAtten", type=VarType.FLOAT3)), one]
)

diffuse = ShaderLighter(
    to_light, normal, ShaderVarRef("lightColor", "vec4(1.0)"), attenuation
)

specular = ShaderIVarCheck(
    "specularEnabled",
    ShaderSpecLighter(
        to_light,
        ShaderVarRef("v_toCamera", type=VarType.FLOAT3),
        normal,
        ShaderVarRef("specularColor"),
        attenuation,
    ),
)

lit = ShaderAdditiveCombiner(
    [
        ShaderOp(
            base_color,
            ShaderAdditiveCombiner([ShaderVarRef("ambientColor"), diffuse]),
            "*",
            is_operator=True,
        ),
        specular,
    ]
)

fog_factor = ShaderIVarCheck(
    "fogEnabled",
    ShaderLinearFog(
        ShaderVarRef("v_depth", type=VarType.FLOAT),
        ShaderVarRef("fogParams", type=VarType.FLOAT2),
    ),
)

pixel_def = ShaderDef(
    {"fragColor": ShaderAffineBlend(fog_factor, ShaderVarRef("fogColor"), lit)}
)

# --- Material ---

material = (
    ShaderMaterial()
    .add_attribute("position", VarType.FLOAT4)
    .add_attribute("normal", VarType.FLOAT3)
    .add_attribute("texCoord0", VarType.FLOAT2)
    .add_uniform("mvp", VarType.MAT4)
    .add_uniform("modelView", VarType.MAT4)
    .add_uniform("normalMatrix", VarType.MAT3)
    .add_uniform("lightPos", VarType.FLOAT4)
    .add_uniform("lightColor", VarType.FLOAT4)
    .add_uniform("ambientColor", VarType.FLOAT4)
    .add_uniform("specularColor", VarType.FLOAT4)
    .add_uniform("shininess", VarType.FLOAT)
    .add_uniform("fogColor", VarType.FLOAT4)
    .add_uniform("fogParams", VarType.FLOAT2)
    .add_uniform("tex0", VarType.SAMPLER2D)
    .set_ivar("tex0Mode", TextureMode.MODULATE)
)
