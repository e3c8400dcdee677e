"""Argument parsing for the npmview CLI."""

import argparse

from .commands.package_managers import PackageManagerId


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="npmview",
        description="Render npm package metadata (README, versions, commands) from local files",
        add_help=True,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="ACTION", required=True)

    readme = sub.add_parser("readme", help="Render a README Markdown file to sanitized HTML")
    readme.add_argument("README_FILE", help="Markdown file to render")
    readme.add_argument("-p", "--package",
                        dest="PACKAGE",
                        help="Package name used to resolve relative URLs",
                        action="store", type=str, required=True)

    versions = sub.add_parser("versions", help="Group a packument's versions by release line")
    versions.add_argument("PACKUMENT", help="Registry package document (JSON)")
    versions.add_argument("--history",
                          dest="HISTORY",
                          help="JSON list of {version, time, hasProvenance} covering all versions",
                          action="store", type=str)

    install = sub.add_parser("install", help="Print install and run commands")
    install.add_argument("PACKUMENT", help="Registry package document or package.json (JSON)")
    install.add_argument("--pm",
                         dest="PACKAGE_MANAGER",
                         help="Only this package manager (default: all)",
                         action="store", type=str,
                         choices=[pm.value for pm in PackageManagerId])
    install.add_argument("--version",
                         dest="VERSION",
                         help="Pin a version in the install command",
                         action="store", type=str)
    install.add_argument("--jsr",
                         dest="JSR_FILE",
                         help="JSON file with the JSR lookup result",
                         action="store", type=str)

    return parser.parse_args(argv)
