"""Module loading for the `import` builtin.

    (import "./lib/util" "shared")

Each operand names a module file. Paths starting with ./ or ../ are resolved
against the directory of the importing file (its FILE binding); any other path
is searched for in the module roots from irl.config. A path not ending in .irl
gets .irl appended. The module runs to completion in a fresh Interpreter, whose
root bindings are then merged into the importing environment.
"""

from __future__ import annotations

import logging
from pathlib import Path

from irl import Value
from irl.config import FILE_BINDING, SOURCE_EXTENSION, get_module_roots
from irl.errors import IrlArityError, IrlError, IrlImportError, IrlTypeError
from irl.evaluation.operand_stack import pop_operands
from irl.types.environment import Binding, Environment
from irl.types.nil import Nil
from irl.types.values import to_source

logger = logging.getLogger(__name__)

# Modules currently being executed, to report import cycles
_loading: set[Path] = set()


def _with_extension(path: Path) -> Path:
    if path.suffix == SOURCE_EXTENSION:
        return path
    return path.with_name(path.name + SOURCE_EXTENSION)


def resolve_module_path(env: Environment, module: str) -> Path:
    if module.startswith("./") or module.startswith("../"):
        current = env.find(FILE_BINDING)
        if not isinstance(current, str):
            raise IrlTypeError(f"{FILE_BINDING} must be bound to a string to import {module}")
        return _with_extension(Path(current).parent / module)

    roots = get_module_roots()
    for root in roots:
        candidate = _with_extension(root / module)
        if candidate.is_file():
            return candidate
    raise IrlImportError(
        f"Module {module} not found in {', '.join(str(r) for r in roots)}"
    )


def load_module(path: Path) -> dict[str, Binding]:
    """Execute the module at `path` in a fresh interpreter and return its root bindings."""
    # Lazy import to avoid circular imports
    from irl.interpreter import Interpreter

    key = path.resolve()
    if key in _loading:
        raise IrlImportError(f"Circular import of {path}")

    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IrlImportError(f"Cannot read module {path}: {e}") from e

    logger.debug("importing %s", path)
    interp = Interpreter()
    interp.set_file(str(path))
    interp.load_code(source)
    _loading.add(key)
    try:
        interp.run()
    except IrlError as e:
        raise IrlImportError(f"Error while importing {path}: {e}") from e
    finally:
        _loading.discard(key)

    bindings = dict(interp.env.vars)
    # The importer keeps its own FILE so later relative imports still resolve
    bindings.pop(FILE_BINDING, None)
    return bindings


def import_builtin(env: Environment, stack: list[Value], ops: int) -> Value:
    """(import path...): merge each module's bindings into the current environment."""
    if ops == 0:
        raise IrlArityError("import requires at least one operand")
    for module in pop_operands(stack, ops):
        if not isinstance(module, str):
            raise IrlTypeError(f"import expects module path strings, got {to_source(module)}")
        env.update(load_module(resolve_module_path(env, module)))
    return Nil
