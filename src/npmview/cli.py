"""npmview CLI: render README / version listing / commands from local files.

All inputs are files already fetched from the registry; nothing here talks
to the network.
"""
import asyncio
import json
import logging
import os
import sys

from .args import parse_args
from .commands import (
    ExecuteCommandOptions,
    JsrPackageInfo,
    PACKAGE_MANAGERS,
    get_executable_info,
    get_install_command,
    get_run_command,
    is_binary_only_package,
    is_create_package,
)
from .common.logging_utils import configure_logging, extra_context, is_debug_enabled
from .constants import Constants, ExitCodes, load_config
from .readme import render_readme_html
from .versioning.history import VersionHistoryLoader, VersionIndex
from .versioning.packument import dist_tags_of, latest_version

logger = logging.getLogger(__name__)


def _read_text(path):
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _read_json(path):
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _setup_logging(args):
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)


def run_readme(args):
    html = render_readme_html(_read_text(args.README_FILE), args.PACKAGE)
    sys.stdout.write(html)
    return ExitCodes.SUCCESS.value


def run_versions(args):
    doc = _read_json(args.PACKUMENT)
    if not isinstance(doc, dict) or not isinstance(doc.get("versions"), dict):
        logger.error("%s is not a registry package document", args.PACKUMENT)
        return ExitCodes.INPUT_ERROR.value

    loader = None
    if args.HISTORY:
        history = _read_json(args.HISTORY)

        async def _fetch_history(_name):
            return history

        loader = VersionHistoryLoader(_fetch_history)

    name = str(doc.get("name", ""))
    index = VersionIndex(name, doc["versions"], dist_tags_of(doc), loader=loader, time=doc.get("time"))
    listing = asyncio.run(index.load_full_history())

    for group in listing.groups:
        sys.stdout.write(f"{group.key} ({group.count} versions)\n")
        for record in group.versions:
            tags = ", ".join(group.tags.get(record.version, []))
            line = f"  {record.version}"
            if tags:
                line += f"  [{tags}]"
            if record.time:
                line += f"  {record.time}"
            sys.stdout.write(line + "\n")
    return ExitCodes.SUCCESS.value


def _manifest_of(doc):
    """The version manifest to inspect: latest from a packument, or the doc itself."""
    versions = doc.get("versions")
    if isinstance(versions, dict):
        latest = latest_version(dist_tags_of(doc))
        manifest = versions.get(latest) if latest else None
        if isinstance(manifest, dict):
            return manifest
    return doc


def run_install(args):
    doc = _read_json(args.PACKUMENT)
    if not isinstance(doc, dict) or not isinstance(doc.get("name"), str):
        logger.error("%s has no package name", args.PACKUMENT)
        return ExitCodes.INPUT_ERROR.value

    manifest = _manifest_of(doc)
    name = doc["name"]
    jsr_info = JsrPackageInfo.from_mapping(_read_json(args.JSR_FILE)) if args.JSR_FILE else None
    executable = get_executable_info(name, manifest.get("bin"))
    binary_only = is_binary_only_package({**manifest, "name": name})
    if is_debug_enabled(logger):
        logger.debug(
            "Package shape",
            extra=extra_context(
                event="decision",
                component="cli",
                action="install",
                binary_only=binary_only,
                has_executable=executable.has_executable,
            ),
        )

    managers = [args.PACKAGE_MANAGER] if args.PACKAGE_MANAGER else [pm.value for pm in PACKAGE_MANAGERS]
    for pm in managers:
        options = ExecuteCommandOptions(
            package_name=name,
            package_manager=pm,
            version=args.VERSION,
            jsr_info=jsr_info,
            is_binary_only=binary_only,
            is_create_package=is_create_package(name),
            command=executable.primary_command or None,
        )
        sys.stdout.write(f"{pm}\n  install: {get_install_command(options)}\n")
        if executable.has_executable:
            sys.stdout.write(f"  run:     {get_run_command(options)}\n")
    return ExitCodes.SUCCESS.value


ACTIONS = {
    "readme": run_readme,
    "versions": run_versions,
    "install": run_install,
}


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    load_config(getattr(args, "CONFIG", None))
    logger.debug("Arguments parsed", extra=extra_context(event="function_entry", component="cli", action=args.ACTION))
    return ACTIONS[args.ACTION](args)


if __name__ == "__main__":
    sys.exit(main())
