"""Static table of supported package manager dialects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class PackageManagerId(Enum):
    """Package managers commands can be generated for.

    Args:
        Enum (string): Dialect identifiers.
    """

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"
    DENO = "deno"
    VLT = "vlt"


@dataclass(frozen=True)
class PackageManagerDialect:
    """Command vocabulary of one package manager.

    ``execute_local`` runs a binary from an installed package,
    ``execute_remote`` downloads and runs it.
    """
    id: PackageManagerId
    label: str
    action: str
    execute_local: Tuple[str, ...]
    execute_remote: Tuple[str, ...]
    create: Tuple[str, ...]


PACKAGE_MANAGERS: Dict[PackageManagerId, PackageManagerDialect] = {
    PackageManagerId.NPM: PackageManagerDialect(
        id=PackageManagerId.NPM,
        label="npm",
        action="install",
        execute_local=("npx",),
        execute_remote=("npx",),
        create=("npm", "create"),
    ),
    PackageManagerId.PNPM: PackageManagerDialect(
        id=PackageManagerId.PNPM,
        label="pnpm",
        action="add",
        execute_local=("pnpm", "exec"),
        execute_remote=("pnpm", "dlx"),
        create=("pnpm", "create"),
    ),
    # yarn classic has no local exec equivalent, so local execution defers to npx.
    PackageManagerId.YARN: PackageManagerDialect(
        id=PackageManagerId.YARN,
        label="yarn",
        action="add",
        execute_local=("npx",),
        execute_remote=("yarn", "dlx"),
        create=("yarn", "create"),
    ),
    PackageManagerId.BUN: PackageManagerDialect(
        id=PackageManagerId.BUN,
        label="bun",
        action="add",
        execute_local=("bunx",),
        execute_remote=("bunx",),
        create=("bun", "create"),
    ),
    PackageManagerId.DENO: PackageManagerDialect(
        id=PackageManagerId.DENO,
        label="deno",
        action="add",
        execute_local=("deno", "run"),
        execute_remote=("deno", "run"),
        create=("deno", "run"),
    ),
    PackageManagerId.VLT: PackageManagerDialect(
        id=PackageManagerId.VLT,
        label="vlt",
        action="install",
        execute_local=("vlx",),
        execute_remote=("vlx",),
        create=("vlx",),
    ),
}


def to_package_manager_id(value: Union[str, PackageManagerId, None]) -> Optional[PackageManagerId]:
    """Normalize a dialect given as enum or string; None when unknown."""
    if isinstance(value, PackageManagerId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return PackageManagerId(value.strip().lower())
    except ValueError:
        return None


def get_package_manager(value: Union[str, PackageManagerId, None]) -> Optional[PackageManagerDialect]:
    pm_id = to_package_manager_id(value)
    return PACKAGE_MANAGERS.get(pm_id) if pm_id is not None else None
