"""Tests for value types and conversions."""

import pytest

from shadergraph.errors import TypeConversionError
from shadergraph.types import VarType, can_convert, convert, swizzle


@pytest.mark.parametrize(
    "expr, source, target, expected",
    [
        ("a", VarType.FLOAT4, VarType.FLOAT4, "a"),
        ("a", VarType.FLOAT, VarType.FLOAT4, "vec4(a)"),
        ("a", VarType.FLOAT3, VarType.FLOAT4, "vec4(a, 1.0)"),
        ("a", VarType.FLOAT2, VarType.FLOAT4, "vec4(a, 0.0, 1.0)"),
        ("a", VarType.FLOAT4, VarType.FLOAT3, "a.xyz"),
        ("a", VarType.FLOAT4, VarType.FLOAT, "a.x"),
        ("a", VarType.FLOAT3, VarType.FLOAT2, "a.xy"),
        ("a", VarType.INT, VarType.FLOAT, "float(a)"),
        ("m", VarType.MAT4, VarType.MAT3, "mat3(m)"),
    ],
)
def test_convert(expr, source, target, expected):
    assert convert(expr, source, target) == expected


def test_convert_parenthesizes_compound_swizzle():
    assert convert("a * b", VarType.FLOAT4, VarType.FLOAT3) == "(a * b).xyz"


def test_convert_rejects_unknown_conversion():
    with pytest.raises(TypeConversionError, match="sampler2D to vec4"):
        convert("tex", VarType.SAMPLER2D, VarType.FLOAT4)


def test_can_convert():
    assert can_convert(VarType.FLOAT3, VarType.FLOAT4)
    assert can_convert(VarType.FLOAT4, VarType.FLOAT3)
    assert can_convert(VarType.SAMPLER2D, VarType.SAMPLER2D)
    assert not can_convert(VarType.SAMPLERCUBE, VarType.FLOAT3)


def test_swizzle():
    assert swizzle("params", "y") == "params.y"
    assert swizzle("vec2(0.0, 1.0)", "x") == "(vec2(0.0, 1.0)).x"


def test_type_properties():
    assert VarType.FLOAT3.glsl == "vec3"
    assert VarType.MAT4.is_float
    assert not VarType.INT.is_float
    assert VarType.SAMPLERCUBE.is_sampler
