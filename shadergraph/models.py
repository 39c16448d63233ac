"""
Data models passed between the generator, the target and the host.
"""

from dataclasses import dataclass, field

from shadergraph.layout import ShaderVar, Stage, Storage


@dataclass
class StageSource:
    """Everything generated for one stage, before assembly into text.

    Attributes:
        stage: Stage this source belongs to
        inputs: Input variables the stage actually reads
        outputs: Output variables the stage writes (varyings or fragment outputs)
        functions: Function-style temporaries, in dependency order
        declarations: Value-style temporary declarations, in dependency order
        assignments: (channel, expression) pairs for the channels that applied
    """

    stage: Stage
    inputs: list[ShaderVar] = field(default_factory=list)
    outputs: list[ShaderVar] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    declarations: list[str] = field(default_factory=list)
    assignments: list[tuple[str, str]] = field(default_factory=list)

    def channels(self) -> list[str]:
        return [channel for channel, _ in self.assignments]

    def inputs_with(self, storage: Storage) -> list[ShaderVar]:
        return [var for var in self.inputs if var.storage == storage]


@dataclass
class ShaderPair:
    """Generated vertex and pixel sources with their declared interface.

    Attributes:
        vertex_source: Complete vertex shader text
        pixel_source: Complete pixel (fragment) shader text
        attributes: Vertex attributes the pair reads
        uniforms: Uniforms read by either stage
        varyings: Values passed from the vertex to the pixel stage
        outputs: Pixel stage outputs
    """

    vertex_source: str
    pixel_source: str
    attributes: list[ShaderVar] = field(default_factory=list)
    uniforms: list[ShaderVar] = field(default_factory=list)
    varyings: list[ShaderVar] = field(default_factory=list)
    outputs: list[ShaderVar] = field(default_factory=list)

    @classmethod
    def from_stages(
        cls,
        vertex: StageSource,
        pixel: StageSource,
        vertex_source: str,
        pixel_source: str,
    ) -> "ShaderPair":
        uniforms: dict[str, ShaderVar] = {}
        for var in vertex.inputs_with(Storage.UNIFORM) + pixel.inputs_with(
            Storage.UNIFORM
        ):
            uniforms.setdefault(var.name, var)

        return cls(
            vertex_source=vertex_source,
            pixel_source=pixel_source,
            attributes=vertex.inputs_with(Storage.ATTRIBUTE),
            uniforms=list(uniforms.values()),
            varyings=list(vertex.outputs),
            outputs=list(pixel.outputs),
        )
