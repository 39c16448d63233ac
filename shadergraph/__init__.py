from shadergraph.context import ShaderContext
from shadergraph.errors import (
    DuplicateTempError,
    GraphCycleError,
    LayoutError,
    ShaderCompileError,
    ShaderGenError,
    TempCycleError,
    TypeConversionError,
)
from shadergraph.host import CompiledShaderPair, ModernGLHost, ShaderHost, SourceHost
from shadergraph.layout import ShaderLayout, ShaderMaterial, ShaderVar, Stage, Storage
from shadergraph.models import ShaderPair, StageSource
from shadergraph.nodes import (
    ShaderAdditiveCombiner,
    ShaderAffineBlend,
    ShaderAttenuator,
    ShaderCubeRef,
    ShaderCustom,
    ShaderDef,
    ShaderExpFog,
    ShaderFallbackNode,
    ShaderFallbackRef,
    ShaderIVarCheck,
    ShaderLighter,
    ShaderLinearFog,
    ShaderNode,
    ShaderOp,
    ShaderPosRef,
    ShaderReflNode,
    ShaderSpecLighter,
    ShaderSpecularTex,
    ShaderSpotlightAtten,
    ShaderTempRef,
    ShaderTexRef,
    ShaderVarRef,
    TextureMode,
)
from shadergraph.target import TargetType
from shadergraph.temps import TempInfo, TempKind
from shadergraph.types import VarType

__version__ = "0.1.0"


__all__ = [
    "CompiledShaderPair",
    "DuplicateTempError",
    "GraphCycleError",
    "LayoutError",
    "ModernGLHost",
    "ShaderCompileError",
    "ShaderContext",
    "ShaderGenError",
    "ShaderHost",
    "ShaderLayout",
    "ShaderMaterial",
    "ShaderPair",
    "ShaderVar",
    "SourceHost",
    "Stage",
    "StageSource",
    "Storage",
    "TargetType",
    "TempCycleError",
    "TempInfo",
    "TempKind",
    "TypeConversionError",
    "VarType",
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
]
