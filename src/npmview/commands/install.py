"""Install and execute commands per package manager dialect."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from .binary_detection import get_create_short_name
from .models import ExecuteCommandOptions, InstallCommandOptions, JsrPackageInfo
from .package_managers import PackageManagerDialect, PackageManagerId, get_package_manager

logger = logging.getLogger(__name__)


def _jsr_info(value: Any) -> Optional[JsrPackageInfo]:
    if value is None or isinstance(value, JsrPackageInfo):
        return value
    return JsrPackageInfo.from_mapping(value)


def resolve_dialect(options: InstallCommandOptions) -> Optional[PackageManagerDialect]:
    pm = get_package_manager(options.package_manager)
    if pm is None and is_debug_enabled(logger):
        logger.debug(
            "Unknown package manager",
            extra=extra_context(
                event="decision",
                component="commands",
                action="lookup_dialect",
                outcome="unknown",
                package_manager=str(options.package_manager),
            ),
        )
    return pm


def get_package_specifier(options: InstallCommandOptions) -> str:
    """Package reference as the dialect expects it.

    deno addresses JSR-native packages as ``jsr:@scope/name`` and everything
    else through npm compatibility (``npm:<name>``); other dialects take the
    plain name.
    """
    pm = get_package_manager(options.package_manager)
    if pm is not None and pm.id is PackageManagerId.DENO:
        jsr = _jsr_info(options.jsr_info)
        if jsr is not None and jsr.is_available:
            return f"jsr:@{jsr.scope}/{jsr.name}"
        return f"npm:{options.package_name}"
    return options.package_name


def get_install_command_parts(options: InstallCommandOptions) -> List[str]:
    """``[label, action, specifier[@version]]``; empty for an unknown dialect."""
    pm = resolve_dialect(options)
    if pm is None:
        return []
    specifier = get_package_specifier(options)
    version = f"@{options.version}" if options.version else ""
    return [pm.label, pm.action, f"{specifier}{version}"]


def get_install_command(options: InstallCommandOptions) -> str:
    return " ".join(get_install_command_parts(options))


def get_execute_command_parts(options: ExecuteCommandOptions) -> List[str]:
    """Command that runs the package's binary.

    Initializers use the dialect's ``create`` shorthand when the short name
    actually differs from the package name. Otherwise binary-only packages are
    downloaded and run, and anything else runs from the local install.
    """
    pm = resolve_dialect(options)
    if pm is None:
        return []

    if options.is_create_package:
        short_name = get_create_short_name(options.package_name)
        if short_name != options.package_name:
            return [*pm.create, short_name]

    execute = pm.execute_remote if options.is_binary_only else pm.execute_local
    return [*execute, get_package_specifier(options)]


def get_execute_command(options: ExecuteCommandOptions) -> str:
    return " ".join(get_execute_command_parts(options))
