"""Command line interface for shadergraph.

This module provides a command-line interface for generating vertex and pixel
shader sources from a material graph file. A graph file is a Python module
defining ``vertex_def`` and ``pixel_def`` (ShaderDef instances) and
``material`` (a ShaderMaterial).
"""

import importlib.util
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import arrow
import typer
from loguru import logger

from shadergraph import __version__
from shadergraph.context import ShaderContext
from shadergraph.errors import ShaderGenError
from shadergraph.layout import ShaderMaterial
from shadergraph.models import ShaderPair
from shadergraph.nodes.base import ShaderDef
from shadergraph.target import TargetType

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="shadergraph",
    help=(
        "Generate vertex and pixel shaders from material graphs. "
        "Commands: export-code, check."
    ),
    add_completion=False,
)

STAGES = ("both", "vertex", "pixel")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")


def _load_graph_module(file_path: str) -> Any:
    """Load a Python file as a module.

    Args:
        file_path: Path to the Python file

    Returns:
        Loaded module
    """
    abs_path = os.path.abspath(file_path)
    module_dir = os.path.dirname(abs_path)
    module_name = os.path.splitext(os.path.basename(abs_path))[0]

    # Add module directory to path so graph files can share helpers
    if module_dir not in sys.path:
        sys.path.insert(0, module_dir)

    spec = importlib.util.spec_from_file_location(module_name, abs_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {file_path}")

    graph_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(graph_module)

    return graph_module


def _find_graph(module: Any) -> tuple[ShaderDef, ShaderDef, ShaderMaterial]:
    """Pull the vertex def, pixel def and material out of a graph module.

    Raises:
        ValueError: If a required name is missing or has the wrong type
    """
    expected = {
        "vertex_def": ShaderDef,
        "pixel_def": ShaderDef,
        "material": ShaderMaterial,
    }
    found = []
    for name, expected_type in expected.items():
        obj = getattr(module, name, None)
        if not isinstance(obj, expected_type):
            raise ValueError(
                f"Graph module must define '{name}' as a {expected_type.__name__}"
            )
        found.append(obj)

    vertex_def, pixel_def, material = found
    return vertex_def, pixel_def, material


def _parse_ivars(ivars: list[str]) -> dict[str, int]:
    """Parse NAME=VALUE switch overrides."""
    parsed = {}
    for item in ivars:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got '{item}'")
        try:
            parsed[name] = int(value)
        except ValueError as e:
            raise typer.BadParameter(f"Switch value must be an integer: '{item}'") from e
    return parsed


def _map_target(target: str) -> TargetType:
    """Map a target string to a target type."""
    try:
        return TargetType[target.upper()]
    except KeyError:
        logger.warning(f"Unknown target: {target}. Using OPENGL33 as default.")
        return TargetType.OPENGL33


def _generate_pair(
    graph_file: str, target_type: TargetType, overrides: dict[str, int]
) -> ShaderPair:
    """Load a graph file and generate its shader pair.

    Raises:
        typer.Exit: If the module cannot be loaded or the graph is malformed
    """
    try:
        module = _load_graph_module(graph_file)
        vertex_def, pixel_def, material = _find_graph(module)
    except ImportError as e:
        logger.error(f"Failed to load graph module: {e}")
        raise typer.Exit(1) from e
    except ValueError as e:
        logger.error(f"Invalid graph module: {e}")
        raise typer.Exit(1) from e

    for name, value in overrides.items():
        material.set_ivar(name, value)

    ctx = ShaderContext(vertex_def, pixel_def, target=target_type.create())
    try:
        pair: ShaderPair = ctx.generate(material)
    except ShaderGenError as e:
        logger.error(f"Shader generation error: {e}")
        raise typer.Exit(1) from e
    return pair


def _add_header_comments(
    code: str,
    graph_file: str,
    target_type: TargetType,
    overrides: dict[str, int],
) -> str:
    """Add header comments to the code.

    Args:
        code: Generated shader code
        graph_file: Source graph file
        target_type: Target dialect
        overrides: Material switches set on the command line

    Returns:
        Code with header comments
    """
    timestamp = arrow.utcnow().format("YYYY-MM-DD HH:mm:ss UTC")
    header = f"// Generated by shadergraph v{__version__}\n"
    header += f"// Generation time: {timestamp}\n"
    header += f"// Graph file: {os.path.basename(graph_file)}\n"
    header += f"// Target: {target_type.name}\n"
    if overrides:
        switches = ", ".join(f"{name}={value}" for name, value in overrides.items())
        header += f"// Switches: {switches}\n"

    header += "\n"
    return header + code


def _format_pair(pair: ShaderPair, stage: str) -> str:
    if stage == "vertex":
        return pair.vertex_source
    if stage == "pixel":
        return pair.pixel_source
    return (
        "// --- vertex shader ---\n"
        + pair.vertex_source
        + "\n// --- pixel shader ---\n"
        + pair.pixel_source
    )


# Define reusable arguments
GRAPH_FILE_ARG = typer.Argument(
    ..., help="Python file defining vertex_def, pixel_def and material"
)
OUTPUT_CODE_ARG = typer.Argument(None, help="Output code file path (default: stdout)")
TARGET_OPTION = typer.Option(
    "opengl33",
    "--target",
    "-t",
    envvar="SHADERGRAPH_TARGET",
    help="GLSL dialect (opengl33, opengl46, webgl2)",
)
IVAR_OPTION = typer.Option(
    None, "--ivar", "-i", help="Override a material switch, as NAME=VALUE"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log generation steps")


@typed_command(app.command("export-code"))
def export_shader_code(
    graph_file: str = GRAPH_FILE_ARG,
    output: Optional[Path] = OUTPUT_CODE_ARG,
    target: str = TARGET_OPTION,
    ivar: Optional[list[str]] = IVAR_OPTION,
    stage: str = typer.Option(
        "both", "--stage", "-s", help="Stage to export (both, vertex, pixel)"
    ),
    header: bool = typer.Option(
        False, "--header/--no-header", help="Prepend a generation header comment"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Export generated shader code.

    Example: shadergraph export-code examples/lit_material.py lit.glsl -i fogEnabled=1
    """
    _configure_logging(verbose)
    if stage not in STAGES:
        raise typer.BadParameter(f"Stage must be one of {', '.join(STAGES)}")

    target_type = _map_target(target)
    overrides = _parse_ivars(ivar or [])
    pair = _generate_pair(graph_file, target_type, overrides)
    code = _format_pair(pair, stage)
    if header:
        code = _add_header_comments(code, graph_file, target_type, overrides)

    if output is None:
        typer.echo(code, nl=False)
        return

    logger.info(f"Exporting shader code to {output}...")
    output.write_text(code)
    logger.info(f"Shader code exported to {output}")


@typed_command(app.command("check"))
def check_graph(
    graph_file: str = GRAPH_FILE_ARG,
    target: str = TARGET_OPTION,
    ivar: Optional[list[str]] = IVAR_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate a material graph and summarize its interface.

    Exits with code 1 if the graph is malformed (temporary cycles, duplicate
    temporaries, node loops, name collisions).
    """
    _configure_logging(verbose)
    pair = _generate_pair(graph_file, _map_target(target), _parse_ivars(ivar or []))

    def names(variables: list[Any]) -> str:
        return ", ".join(f"{v.type.glsl} {v.name}" for v in variables) or "-"

    typer.echo(f"attributes: {names(pair.attributes)}")
    typer.echo(f"uniforms:   {names(pair.uniforms)}")
    typer.echo(f"varyings:   {names(pair.varyings)}")
    typer.echo(f"outputs:    {names(pair.outputs)}")


if __name__ == "__main__":
    app()
