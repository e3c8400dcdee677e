"""Inputs and outputs of command synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .package_managers import PackageManagerId


@dataclass(frozen=True)
class JsrPackageInfo:
    """Result of looking a package up on JSR."""
    exists: bool = False
    scope: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    latest_version: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Only a JSR hit with both scope and name can be addressed as ``jsr:``."""
        return bool(self.exists and self.scope and self.name)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["JsrPackageInfo"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            exists=bool(data.get("exists")),
            scope=data.get("scope") or None,
            name=data.get("name") or None,
            url=data.get("url") or None,
            latest_version=data.get("latestVersion", data.get("latest_version")) or None,
        )


@dataclass
class InstallCommandOptions:
    package_name: str
    package_manager: Union[PackageManagerId, str]
    version: Optional[str] = None
    jsr_info: Optional[JsrPackageInfo] = None


@dataclass
class ExecuteCommandOptions(InstallCommandOptions):
    """Install options plus the package shape.

    ``is_binary_only`` selects download-and-run over running an installed
    binary; ``command`` names a specific binary of a multi-bin package.
    """
    is_binary_only: bool = False
    is_create_package: bool = False
    command: Optional[str] = None


@dataclass
class ExecutableInfo:
    has_executable: bool = False
    commands: List[str] = field(default_factory=list)
    primary_command: str = ""
