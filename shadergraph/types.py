"""Shading value types and the conversions between them.

Every node declares a result type; references to material variables whose
declared type differs are coerced through the table below so that a
successful expression always has the node's type.
"""

from collections.abc import Callable
from enum import Enum

from shadergraph.errors import TypeConversionError


class VarType(Enum):
    """Closed set of shading value types."""

    FLOAT = "float"
    FLOAT2 = "vec2"
    FLOAT3 = "vec3"
    FLOAT4 = "vec4"
    INT = "int"
    MAT3 = "mat3"
    MAT4 = "mat4"
    SAMPLER2D = "sampler2D"
    SAMPLERCUBE = "samplerCube"

    @property
    def glsl(self) -> str:
        return self.value

    @property
    def is_float(self) -> bool:
        """True for the types a precision qualifier applies to."""
        return self in (
            VarType.FLOAT,
            VarType.FLOAT2,
            VarType.FLOAT3,
            VarType.FLOAT4,
            VarType.MAT3,
            VarType.MAT4,
        )

    @property
    def is_sampler(self) -> bool:
        return self in (VarType.SAMPLER2D, VarType.SAMPLERCUBE)


# Conversion rules: (source_type, target_type) -> conversion_function
CONVERSION_RULES: dict[tuple[VarType, VarType], Callable[[str], str]] = {
    # Scalar conversions
    (VarType.INT, VarType.FLOAT): lambda x: f"float({x})",
    (VarType.FLOAT, VarType.INT): lambda x: f"int({x})",
    # Widening
    (VarType.FLOAT, VarType.FLOAT2): lambda x: f"vec2({x})",
    (VarType.FLOAT, VarType.FLOAT3): lambda x: f"vec3({x})",
    (VarType.FLOAT, VarType.FLOAT4): lambda x: f"vec4({x})",
    (VarType.FLOAT2, VarType.FLOAT3): lambda x: f"vec3({x}, 0.0)",
    (VarType.FLOAT2, VarType.FLOAT4): lambda x: f"vec4({x}, 0.0, 1.0)",
    (VarType.FLOAT3, VarType.FLOAT4): lambda x: f"vec4({x}, 1.0)",
    # Matrices
    (VarType.MAT4, VarType.MAT3): lambda x: f"mat3({x})",
    (VarType.MAT3, VarType.MAT4): lambda x: f"mat4({x})",
}

# Narrowing keeps the leading components
SWIZZLES: dict[tuple[VarType, VarType], str] = {
    (VarType.FLOAT2, VarType.FLOAT): "x",
    (VarType.FLOAT3, VarType.FLOAT): "x",
    (VarType.FLOAT4, VarType.FLOAT): "x",
    (VarType.FLOAT3, VarType.FLOAT2): "xy",
    (VarType.FLOAT4, VarType.FLOAT2): "xy",
    (VarType.FLOAT4, VarType.FLOAT3): "xyz",
}


def swizzle(expr: str, components: str) -> str:
    """Select vector components, parenthesizing compound expressions."""
    if expr.isidentifier():
        return f"{expr}.{components}"
    return f"({expr}).{components}"


def can_convert(source: VarType, target: VarType) -> bool:
    """Check if conversion from source to target is possible."""
    return (
        source == target
        or (source, target) in CONVERSION_RULES
        or (source, target) in SWIZZLES
    )


def convert(expr: str, source: VarType, target: VarType) -> str:
    """Convert an expression from source type to target type.

    Args:
        expr: GLSL expression of type ``source``
        source: Type of the expression
        target: Type the caller needs

    Returns:
        An expression of type ``target``

    Raises:
        TypeConversionError: If no conversion rule exists
    """
    if source == target:
        return expr

    components = SWIZZLES.get((source, target))
    if components is not None:
        return swizzle(expr, components)

    conversion_fn = CONVERSION_RULES.get((source, target))
    if conversion_fn is None:
        raise TypeConversionError(
            f"Cannot convert {source.glsl} to {target.glsl}: {expr}"
        )
    return conversion_fn(expr)
