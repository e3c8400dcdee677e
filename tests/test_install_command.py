"""Tests for install and execute command generation."""

import pytest

from npmview.commands import (
    ExecuteCommandOptions,
    InstallCommandOptions,
    JsrPackageInfo,
    PackageManagerId,
    get_execute_command,
    get_execute_command_parts,
    get_install_command,
    get_install_command_parts,
    get_package_manager,
    get_package_specifier,
)

JSR_AVAILABLE = JsrPackageInfo(
    exists=True,
    scope="trpc",
    name="server",
    url="https://jsr.io/@trpc/server",
    latest_version="10.0.0",
)
JSR_MISSING = JsrPackageInfo(exists=False)


class TestPackageSpecifier:
    """Package references per dialect."""

    @pytest.mark.parametrize(
        "pm,expected",
        [("npm", "lodash"), ("pnpm", "lodash"), ("yarn", "lodash"), ("bun", "lodash"), ("deno", "npm:lodash"), ("vlt", "lodash")],
    )
    def test_unscoped_not_on_jsr(self, pm, expected):
        opts = InstallCommandOptions(package_name="lodash", package_manager=pm, jsr_info=JSR_MISSING)
        assert get_package_specifier(opts) == expected

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", "@trpc/server"),
            ("pnpm", "@trpc/server"),
            ("yarn", "@trpc/server"),
            ("bun", "@trpc/server"),
            ("deno", "jsr:@trpc/server"),
            ("vlt", "@trpc/server"),
        ],
    )
    def test_scoped_on_jsr(self, pm, expected):
        opts = InstallCommandOptions(package_name="@trpc/server", package_manager=pm, jsr_info=JSR_AVAILABLE)
        assert get_package_specifier(opts) == expected

    def test_scoped_not_on_jsr_uses_npm_compat(self):
        opts = InstallCommandOptions(package_name="@trpc/server", package_manager="deno", jsr_info=JSR_MISSING)
        assert get_package_specifier(opts) == "npm:@trpc/server"

    def test_missing_jsr_info(self):
        opts = InstallCommandOptions(package_name="lodash", package_manager="deno", jsr_info=None)
        assert get_package_specifier(opts) == "npm:lodash"

    def test_jsr_hit_without_scope_and_name(self):
        """exists alone is not enough to address the package on JSR."""
        opts = InstallCommandOptions(
            package_name="@foo/bar", package_manager="deno", jsr_info=JsrPackageInfo(exists=True)
        )
        assert get_package_specifier(opts) == "npm:@foo/bar"

    def test_jsr_info_as_mapping(self):
        opts = InstallCommandOptions(
            package_name="@trpc/server",
            package_manager="deno",
            jsr_info={"exists": True, "scope": "trpc", "name": "server", "latestVersion": "10.0.0"},
        )
        assert get_package_specifier(opts) == "jsr:@trpc/server"


class TestInstallCommand:
    """Install commands."""

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", "npm install lodash"),
            ("pnpm", "pnpm add lodash"),
            ("yarn", "yarn add lodash"),
            ("bun", "bun add lodash"),
            ("deno", "deno add npm:lodash"),
            ("vlt", "vlt install lodash"),
        ],
    )
    def test_without_version(self, pm, expected):
        opts = InstallCommandOptions(package_name="lodash", package_manager=pm, jsr_info=JSR_MISSING)
        assert get_install_command(opts) == expected

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", "npm install lodash@4.17.21"),
            ("pnpm", "pnpm add lodash@4.17.21"),
            ("yarn", "yarn add lodash@4.17.21"),
            ("bun", "bun add lodash@4.17.21"),
            ("deno", "deno add npm:lodash@4.17.21"),
            ("vlt", "vlt install lodash@4.17.21"),
        ],
    )
    def test_with_version(self, pm, expected):
        opts = InstallCommandOptions(package_name="lodash", package_manager=pm, version="4.17.21")
        assert get_install_command(opts) == expected

    def test_deno_jsr_with_version(self):
        opts = InstallCommandOptions(
            package_name="@trpc/server", package_manager="deno", version="10.0.0", jsr_info=JSR_AVAILABLE
        )
        assert get_install_command_parts(opts) == ["deno", "add", "jsr:@trpc/server@10.0.0"]

    def test_parts_join_to_command(self):
        opts = InstallCommandOptions(
            package_name="@trpc/server", package_manager="pnpm", version="10.0.0", jsr_info=JSR_AVAILABLE
        )
        assert " ".join(get_install_command_parts(opts)) == get_install_command(opts)

    def test_enum_dialect_accepted(self):
        opts = InstallCommandOptions(package_name="lodash", package_manager=PackageManagerId.BUN)
        assert get_install_command_parts(opts) == ["bun", "add", "lodash"]

    def test_unknown_dialect(self):
        opts = InstallCommandOptions(package_name="lodash", package_manager="invalid")
        assert get_install_command_parts(opts) == []
        assert get_install_command(opts) == ""


class TestExecuteCommand:
    """Execute commands: local, remote and create shorthand."""

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", ["npx", "eslint"]),
            ("pnpm", ["pnpm", "exec", "eslint"]),
            ("yarn", ["npx", "eslint"]),
            ("bun", ["bunx", "eslint"]),
            ("deno", ["deno", "run", "npm:eslint"]),
            ("vlt", ["vlx", "eslint"]),
        ],
    )
    def test_local_execute(self, pm, expected):
        opts = ExecuteCommandOptions(package_name="eslint", package_manager=pm, is_binary_only=False)
        assert get_execute_command_parts(opts) == expected

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", ["npx", "degit"]),
            ("pnpm", ["pnpm", "dlx", "degit"]),
            ("yarn", ["yarn", "dlx", "degit"]),
            ("bun", ["bunx", "degit"]),
            ("deno", ["deno", "run", "npm:degit"]),
            ("vlt", ["vlx", "degit"]),
        ],
    )
    def test_remote_execute(self, pm, expected):
        opts = ExecuteCommandOptions(package_name="degit", package_manager=pm, is_binary_only=True)
        assert get_execute_command_parts(opts) == expected

    @pytest.mark.parametrize(
        "pm,expected",
        [
            ("npm", ["npm", "create", "vite"]),
            ("pnpm", ["pnpm", "create", "vite"]),
            ("yarn", ["yarn", "create", "vite"]),
            ("bun", ["bun", "create", "vite"]),
            ("deno", ["deno", "run", "vite"]),
            ("vlt", ["vlx", "vite"]),
        ],
    )
    def test_create_shorthand(self, pm, expected):
        opts = ExecuteCommandOptions(package_name="create-vite", package_manager=pm, is_create_package=True)
        assert get_execute_command_parts(opts) == expected

    def test_scoped_create_package(self):
        opts = ExecuteCommandOptions(package_name="@vue/create-app", package_manager="npm", is_create_package=True)
        assert get_execute_command_parts(opts) == ["npm", "create", "app"]

    def test_create_flag_without_prefix_falls_back(self):
        """A package flagged as an initializer but lacking the prefix uses plain execute."""
        opts = ExecuteCommandOptions(
            package_name="degit", package_manager="pnpm", is_create_package=True, is_binary_only=True
        )
        assert get_execute_command_parts(opts) == ["pnpm", "dlx", "degit"]

    def test_execute_ignores_version(self):
        opts = ExecuteCommandOptions(package_name="eslint", package_manager="npm", version="9.0.0")
        assert get_execute_command_parts(opts) == ["npx", "eslint"]

    def test_execute_strings(self):
        assert get_execute_command(ExecuteCommandOptions("eslint", "pnpm")) == "pnpm exec eslint"
        assert get_execute_command(ExecuteCommandOptions("degit", "pnpm", is_binary_only=True)) == "pnpm dlx degit"
        assert get_execute_command(ExecuteCommandOptions("create-vite", "pnpm", is_create_package=True)) == "pnpm create vite"

    def test_unknown_dialect(self):
        assert get_execute_command_parts(ExecuteCommandOptions("eslint", "invalid")) == []


class TestPackageManagers:
    """Dialect table lookups."""

    def test_lookup_by_string_and_enum(self):
        assert get_package_manager("PNPM").id is PackageManagerId.PNPM
        assert get_package_manager(PackageManagerId.DENO).label == "deno"

    def test_unknown(self):
        assert get_package_manager("pip") is None
        assert get_package_manager(None) is None

    def test_yarn_local_execute_defers_to_npx(self):
        yarn = get_package_manager("yarn")
        assert yarn.execute_local == ("npx",)
        assert yarn.execute_remote == ("yarn", "dlx")
