"""Shader graph node library."""

from shadergraph.nodes.base import ShaderDef, ShaderNode, generate_operands
from shadergraph.nodes.combiners import (
    ShaderAdditiveCombiner,
    ShaderAffineBlend,
    ShaderOp,
    ShaderTempRef,
)
from shadergraph.nodes.lighting import (
    ShaderAttenuator,
    ShaderExpFog,
    ShaderLighter,
    ShaderLinearFog,
    ShaderReflNode,
    ShaderSpecLighter,
    ShaderSpotlightAtten,
)
from shadergraph.nodes.refs import (
    ShaderCustom,
    ShaderFallbackNode,
    ShaderFallbackRef,
    ShaderIVarCheck,
    ShaderPosRef,
    ShaderVarRef,
)
from shadergraph.nodes.texturing import (
    ShaderCubeRef,
    ShaderSpecularTex,
    ShaderTexRef,
    TextureMode,
)

__all__ = [
    "ShaderAdditiveCombiner",
    "ShaderAffineBlend",
    "ShaderAttenuator",
    "ShaderCubeRef",
    "ShaderCustom",
    "ShaderDef",
    "ShaderExpFog",
    "ShaderFallbackNode",
    "ShaderFallbackRef",
    "ShaderIVarCheck",
    "ShaderLighter",
    "ShaderLinearFog",
    "ShaderNode",
    "ShaderOp",
    "ShaderPosRef",
    "ShaderReflNode",
    "ShaderSpecLighter",
    "ShaderSpecularTex",
    "ShaderSpotlightAtten",
    "ShaderTempRef",
    "ShaderTexRef",
    "ShaderVarRef",
    "TextureMode",
    "generate_operands",
]
