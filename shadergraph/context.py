"""
Shader context: compiles one material against a vertex and pixel definition.

The context owns all generation-time state: the four temporary tables (one
value table and one function table per stage), the material being compiled
and the path of nodes currently being generated. Nodes themselves are
immutable and may be shared between contexts.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from shadergraph.constants import POSITION_CHANNEL
from shadergraph.errors import (
    DuplicateTempError,
    GraphCycleError,
    LayoutError,
    ShaderGenError,
)
from shadergraph.host import ShaderHost, SourceHost
from shadergraph.layout import ShaderLayout, ShaderMaterial, ShaderVar, Stage, Storage
from shadergraph.models import StageSource
from shadergraph.nodes.base import ShaderDef, ShaderNode
from shadergraph.target import DEFAULT_TARGET, Target
from shadergraph.temps import TempInfo, TempKind, TempMap, order_temps
from shadergraph.types import VarType


class ShaderContext:
    """Generates a vertex/pixel shader pair for a material.

    Example:
        >>> ctx = ShaderContext(vertex_def, pixel_def)
        >>> pair = ctx.generate(material)
        >>> print(pair.pixel_source)
    """

    def __init__(
        self,
        vertex: ShaderDef,
        pixel: ShaderDef,
        target: Target | None = None,
        host: ShaderHost | None = None,
    ):
        """Initialize the context.

        Args:
            vertex: Channel definitions for the vertex stage
            pixel: Channel definitions for the pixel stage
            target: GLSL dialect to assemble for (default: OpenGL 3.3 core)
            host: Builder for the final artifact (default: sources only)
        """
        self.vs = vertex
        self.ps = pixel
        self.target = target or DEFAULT_TARGET.create()
        self.host = host or SourceHost()
        self.input_material: ShaderMaterial | None = None

        self._temps: dict[tuple[Stage, TempKind], TempMap] = {}
        self._active: list[ShaderNode] = []
        for stage in Stage:
            self._reset_stage(stage)

    def _reset_stage(self, stage: Stage) -> None:
        for kind in TempKind:
            self._temps[(stage, kind)] = {}

    def temps(
        self, stage: Stage, kind: TempKind = TempKind.VALUE
    ) -> Mapping[str, TempInfo]:
        """Read-only view of one temporary table."""
        return MappingProxyType(self._temps[(stage, kind)])

    # --- Temporaries ---

    def add_temp_func(
        self, stage: Stage, var_type: VarType, name: str, body: str
    ) -> None:
        """Register a temporary emitted as a function, evaluated where called."""
        self._add_temp(stage, TempKind.FUNCTION, var_type, name, body)

    def add_temp_val(
        self, stage: Stage, var_type: VarType, name: str, body: str
    ) -> None:
        """Register a temporary declared once at the top of main()."""
        self._add_temp(stage, TempKind.VALUE, var_type, name, body)

    def _add_temp(
        self, stage: Stage, kind: TempKind, var_type: VarType, name: str, body: str
    ) -> None:
        info = TempInfo(var_type, body)
        for other_kind in TempKind:
            existing = self._temps[(stage, other_kind)].get(name)
            if existing is None:
                continue
            if other_kind == kind and existing == info:
                # Shared node generated again: same temp, nothing to do
                return
            raise DuplicateTempError(name, existing.body, body)

        self._temps[(stage, kind)][name] = info
        logger.debug(
            f"Registered {kind.name.lower()} temp '{name}' "
            f"for {stage.name.lower()} stage"
        )

    def ordered_temp_vals(self, temps: TempMap, use_precision: bool) -> list[str]:
        """Declarations for a value table, dependencies first.

        Raises:
            TempCycleError: If the temporaries depend on each other in a cycle
        """
        lines = []
        for name in order_temps(temps):
            info = temps[name]
            precision = self.target.precision_prefix(info.type) if use_precision else ""
            lines.append(f"{precision}{info.type.glsl} {name} = {info.body};")
        return lines

    def ordered_temp_funcs(self, temps: TempMap, values: TempMap) -> list[str]:
        """Function definitions for a function table, callees first.

        Raises:
            ShaderGenError: If a function reads a value temporary, which is
                local to main()
            TempCycleError: If the functions call each other in a cycle
        """
        for name, info in temps.items():
            locals_read = info.references(set(values))
            if locals_read:
                raise ShaderGenError(
                    f"Function temporary '{name}' reads local temporaries: "
                    + ", ".join(sorted(locals_read))
                )

        funcs = []
        for name in order_temps(temps):
            info = temps[name]
            funcs.append(
                f"{info.type.glsl} {name}() {{\n    return {info.body};\n}}"
            )
        return funcs

    # --- Material access ---

    def get_ivar(self, name: str, default: int = 0) -> int:
        """Read an integer switch of the material being compiled."""
        if self.input_material is None:
            return default
        return self.input_material.get_ivar(name, default)

    # --- Generation ---

    def generate_node(
        self, node: ShaderNode, layout: ShaderLayout, stage: Stage
    ) -> str | None:
        """Generate a node, guarding against true cycles in the graph.

        Reaching a node through several parents is fine; reaching it again
        from inside its own generation is not.
        """
        if any(active is node for active in self._active):
            raise GraphCycleError(
                f"Node graph loops back to {type(node).__name__} "
                f"in {stage.name.lower()} stage",
                node,
            )

        self._active.append(node)
        try:
            return node.generate(self, layout, stage)
        finally:
            self._active.pop()

    def generate_stage(
        self,
        outputs: ShaderLayout,
        inputs: ShaderLayout,
        shader: ShaderDef,
        stage: Stage,
        used_outputs: set[str] | None = None,
    ) -> StageSource:
        """Generate the requested channels of one stage.

        Args:
            outputs: Receives one variable per channel that applied
            inputs: Variables visible to the stage; usage is recorded on it
            shader: Channel definitions for the stage
            stage: Stage being generated
            used_outputs: Channels to generate (default: all of them)

        Returns:
            The stage's inputs, outputs, temporaries and channel assignments

        Raises:
            LayoutError: If an unknown channel is requested or an output
                collides with an input name
        """
        if used_outputs is None:
            channels = list(shader)
        else:
            unknown = used_outputs - set(shader)
            if unknown:
                raise LayoutError(
                    f"Unknown {stage.name.lower()} channels requested: "
                    + ", ".join(sorted(unknown))
                )
            channels = [channel for channel in shader if channel in used_outputs]

        logger.debug(f"Generating {stage.name.lower()} stage: {channels}")
        storage = Storage.VARYING if stage == Stage.VERTEX else Storage.OUTPUT

        assignments = []
        for channel in channels:
            node = shader[channel]
            expr = self.generate_node(node, inputs, stage)
            if expr is None:
                logger.debug(f"Omitting {stage.name.lower()} channel '{channel}'")
                continue
            assignments.append((channel, expr))

            if stage == Stage.VERTEX and channel == POSITION_CHANNEL:
                continue
            if channel in inputs:
                raise LayoutError(
                    f"{stage.name.capitalize()} output '{channel}' "
                    "collides with an input of the same name"
                )
            outputs.add(ShaderVar(channel, node.type, storage))

        values = self._temps[(stage, TempKind.VALUE)]
        functions = self._temps[(stage, TempKind.FUNCTION)]
        return StageSource(
            stage=stage,
            inputs=inputs.used(),
            outputs=list(outputs),
            functions=self.ordered_temp_funcs(functions, values),
            declarations=self.ordered_temp_vals(values, self.target.uses_precision),
            assignments=assignments,
        )

    def generate(self, material: ShaderMaterial) -> Any:
        """Compile a material into a shader pair.

        The vertex stage is generated once first to learn which varyings it can
        produce, the pixel stage is generated against them, and the vertex
        stage is then regenerated for only the varyings the pixel stage read.

        Returns:
            Whatever the host builds (a ``ShaderPair`` by default)
        """
        self.input_material = material
        for stage in Stage:
            self._reset_stage(stage)

        varyings = ShaderLayout()
        self.generate_stage(
            varyings, material.layout_for(Stage.VERTEX), self.vs, Stage.VERTEX
        )

        ps_inputs = material.layout_for(Stage.PIXEL)
        for var in varyings:
            ps_inputs.add(var)
        pixel = self.generate_stage(ShaderLayout(), ps_inputs, self.ps, Stage.PIXEL)

        used_outputs = {var.name for var in varyings if ps_inputs.is_used(var.name)}
        if POSITION_CHANNEL in self.vs:
            used_outputs.add(POSITION_CHANNEL)
        logger.debug(f"Pixel stage reads varyings: {sorted(used_outputs)}")

        self._reset_stage(Stage.VERTEX)
        vertex = self.generate_stage(
            ShaderLayout(),
            material.layout_for(Stage.VERTEX),
            self.vs,
            Stage.VERTEX,
            used_outputs,
        )

        vertex_source = self.target.assemble(vertex)
        pixel_source = self.target.assemble(pixel)
        return self.host.build(vertex, pixel, vertex_source, pixel_source)
