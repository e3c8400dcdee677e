"""Executable detection and run commands."""

from __future__ import annotations

from typing import Any, List, Mapping

from .binary_detection import get_package_base_name
from .install import resolve_dialect, get_execute_command_parts, get_package_specifier
from .models import ExecutableInfo, ExecuteCommandOptions


def get_executable_info(package_name: str, bin_field: Any) -> ExecutableInfo:
    """Describe the commands a package's ``bin`` field declares.

    A string ``bin`` installs one command named after the package. For a
    mapping, the command matching the package's base name is primary,
    otherwise the first declared one.
    """
    base_name = get_package_base_name(package_name)
    if isinstance(bin_field, str) and bin_field:
        return ExecutableInfo(has_executable=True, commands=[base_name], primary_command=base_name)
    if not isinstance(bin_field, Mapping) or not bin_field:
        return ExecutableInfo()

    commands = [str(name) for name in bin_field.keys()]
    primary = base_name if base_name in commands else commands[0]
    return ExecutableInfo(has_executable=True, commands=commands, primary_command=primary)


def get_run_command_parts(options: ExecuteCommandOptions) -> List[str]:
    """Like the execute command, but aware of a selected binary.

    A command equal to the package's base name runs through the package
    specifier (so ``@scope/app`` is not looked up as a bare ``app``); any
    other command is passed as is.
    """
    if not options.command or options.is_create_package:
        return get_execute_command_parts(options)
    pm = resolve_dialect(options)
    if pm is None:
        return []
    execute = pm.execute_remote if options.is_binary_only else pm.execute_local
    if options.command == get_package_base_name(options.package_name):
        return [*execute, get_package_specifier(options)]
    return [*execute, options.command]


def get_run_command(options: ExecuteCommandOptions) -> str:
    return " ".join(get_run_command_parts(options))
