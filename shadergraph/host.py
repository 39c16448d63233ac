"""Hosts that turn two generated stage texts into a shader-pair object."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import moderngl
from loguru import logger

from shadergraph.errors import ShaderCompileError
from shadergraph.models import ShaderPair, StageSource


class ShaderHost(ABC):
    """Builds the artifact returned by ``ShaderContext.generate``."""

    @abstractmethod
    def build(
        self,
        vertex: StageSource,
        pixel: StageSource,
        vertex_source: str,
        pixel_source: str,
    ) -> Any:
        """Build the shader pair from the assembled stage sources."""
        ...


class SourceHost(ShaderHost):
    """Returns the generated sources and their interface without compiling."""

    def build(
        self,
        vertex: StageSource,
        pixel: StageSource,
        vertex_source: str,
        pixel_source: str,
    ) -> ShaderPair:
        return ShaderPair.from_stages(vertex, pixel, vertex_source, pixel_source)


@dataclass
class CompiledShaderPair:
    """Linked GPU program together with the sources it was built from."""

    program: moderngl.Program
    sources: ShaderPair


class ModernGLHost(ShaderHost):
    """Compiles and links the pair with a ModernGL context."""

    def __init__(self, ctx: moderngl.Context):
        """Initialize the host.

        Args:
            ctx: ModernGL context the program is created in
        """
        self.ctx = ctx

    def build(
        self,
        vertex: StageSource,
        pixel: StageSource,
        vertex_source: str,
        pixel_source: str,
    ) -> CompiledShaderPair:
        sources = ShaderPair.from_stages(vertex, pixel, vertex_source, pixel_source)
        try:
            program = self.ctx.program(
                vertex_shader=vertex_source,
                fragment_shader=pixel_source,
            )
        except Exception as e:
            raise ShaderCompileError(f"Failed to create shader program: {e}") from e

        logger.debug(
            f"Linked shader program with {len(sources.attributes)} attributes "
            f"and {len(sources.uniforms)} uniforms"
        )
        return CompiledShaderPair(program=program, sources=sources)
