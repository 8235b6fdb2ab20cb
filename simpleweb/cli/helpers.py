"""Shared CLI helpers."""

import importlib
import sys
from pathlib import Path

import typer

from simpleweb.handlers import HandlerRegistry


def load_registry(target: str) -> HandlerRegistry:
    """Import a handler registry given as ``module:attribute``.

    The current working directory is put on ``sys.path`` first so local
    application modules can be found.

    Raises:
        typer.BadParameter: If the target cannot be imported or is not a registry
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise typer.BadParameter(
            f"Expected 'module:attribute', got '{target}'", param_hint="TARGET"
        )

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(
            f"Cannot import module '{module_name}': {e}", param_hint="TARGET"
        ) from e

    registry = getattr(module, attribute, None)
    if not isinstance(registry, HandlerRegistry):
        raise typer.BadParameter(
            f"'{target}' is not a HandlerRegistry", param_hint="TARGET"
        )
    return registry
