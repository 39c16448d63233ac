"""
Names and defaults shared by the node library and the stage assembler.
"""

from shadergraph.types import VarType

# Vertex channel written to gl_Position instead of a varying
POSITION_CHANNEL = "position"

# Mandatory inputs assumed by ShaderPosRef
POSITION_ATTRIBUTE = "position"
POSITION_ATTRIBUTE_TYPE = VarType.FLOAT4
MVP_UNIFORM = "mvp"

# Fallbacks for optional node parameters
DEFAULT_SHININESS = "16.0"
DEFAULT_FOG_RANGE = "vec2(0.0, 1.0)"

# Float precision used by ES targets when precision qualifiers are requested
DEFAULT_PRECISION = "mediump"
