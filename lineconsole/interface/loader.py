#!/usr/bin/env python3
# lineconsole/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all public modules under a given package.
- Supports 'entrypoint.py' inside a subpackage exporting COMMAND/COMMANDS.
- Adds every exported Command to the registry (subject to freeze/collision rules).
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable

from lineconsole.commands import Command, CommandRegistry

logger = logging.getLogger(__name__)


def _register_from_module(registry: CommandRegistry, module: ModuleType) -> int:
    """Add COMMAND/COMMANDS exported by a module, if present."""
    registered_count = 0
    obj = getattr(module, "COMMAND", None)
    if isinstance(obj, Command):
        registry.add(obj)
        registered_count += 1
    objs = getattr(module, "COMMANDS", None)
    if isinstance(objs, Iterable):
        for item in objs:
            if isinstance(item, Command):
                registry.add(item)
                registered_count += 1
    return registered_count


def load_commands(registry: CommandRegistry, commands_package: str = "plugins") -> int:
    """
    Import all modules under the given package and register their commands.

    Supported layouts:
      1) Plain modules: plugins/foo.py  -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint
      3) Packages without one: plugins/baz/__init__.py -> import plugins.baz

    Returns the number of commands added.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(f"'{commands_package}' must be a package (folder) with modules.")

    registered_count = 0
    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            target = f"{commands_package}.{module_name}"
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                target = f"{target}.entrypoint"

            module = importlib.import_module(target)
            registered_count += _register_from_module(registry, module)

    logger.debug("Loaded %d command(s) from '%s'", registered_count, commands_package)
    return registered_count
