"""Classify packages by how they are meant to be consumed."""

from __future__ import annotations

import re
from typing import Any, Mapping

_CREATE_RE = re.compile(r"^create-.+")
_SCOPED_CREATE_RE = re.compile(r"^(@[^/]+/)create-(.+)$")


def get_package_base_name(package_name: str) -> str:
    """Unscoped part of a package name: ``@scope/foo`` -> ``foo``."""
    if package_name.startswith("@") and "/" in package_name:
        return package_name.split("/", 1)[1]
    return package_name


def is_create_package(package_name: str) -> bool:
    """True for ``create-*`` and ``@scope/create-*`` initializer packages."""
    return bool(_CREATE_RE.match(package_name) or _SCOPED_CREATE_RE.match(package_name))


def get_create_short_name(package_name: str) -> str:
    """Name accepted by ``<pm> create``: ``create-vite`` -> ``vite``.

    Scoped initializers drop the scope too (``@vue/create-app`` -> ``app``).
    Names without the prefix come back unchanged.
    """
    scoped = _SCOPED_CREATE_RE.match(package_name)
    if scoped:
        return scoped.group(2)
    if _CREATE_RE.match(package_name):
        return package_name[len("create-"):]
    return package_name


def is_binary_only_package(pkg: Mapping[str, Any]) -> bool:
    """True when a package is consumed by running it rather than importing it.

    Initializers always are; otherwise a package qualifies when it declares
    ``bin`` but neither ``main`` nor ``exports``.
    """
    name = pkg.get("name")
    if isinstance(name, str) and is_create_package(name):
        return True
    return bool(pkg.get("bin")) and not pkg.get("main") and not pkg.get("exports")
