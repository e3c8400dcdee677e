"""Install / execute / run command synthesis for npm-compatible package managers."""

from .binary_detection import (
    get_create_short_name,
    get_package_base_name,
    is_binary_only_package,
    is_create_package,
)
from .install import (
    get_execute_command,
    get_execute_command_parts,
    get_install_command,
    get_install_command_parts,
    get_package_specifier,
)
from .models import ExecutableInfo, ExecuteCommandOptions, InstallCommandOptions, JsrPackageInfo
from .package_managers import PACKAGE_MANAGERS, PackageManagerDialect, PackageManagerId, get_package_manager
from .run import get_executable_info, get_run_command, get_run_command_parts

__all__ = [
    "get_create_short_name",
    "get_package_base_name",
    "is_binary_only_package",
    "is_create_package",
    "get_execute_command",
    "get_execute_command_parts",
    "get_install_command",
    "get_install_command_parts",
    "get_package_specifier",
    "ExecutableInfo",
    "ExecuteCommandOptions",
    "InstallCommandOptions",
    "JsrPackageInfo",
    "PACKAGE_MANAGERS",
    "PackageManagerDialect",
    "PackageManagerId",
    "get_package_manager",
    "get_executable_info",
    "get_run_command",
    "get_run_command_parts",
]
