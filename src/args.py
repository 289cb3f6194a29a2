"""Argument parsing functionality for asdf-go-install."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="agi",
        description=(
            "asdf-go-install - install Go command-line tools with asdf"
        ),
        add_help=True,
    )

    parser.add_argument("--data-dir",
                        dest="DATA_DIR",
                        help="asdf data directory (default: $ASDF_DATA_DIR or ~/.asdf)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="action", metavar="COMMAND")
    sub.required = True

    list_all = sub.add_parser("list-all",
                              help="Print every available version of a Go package, oldest first")
    list_all.add_argument("PACKAGE", help="Go package path, e.g. golang.org/x/vuln/cmd/govulncheck")

    latest = sub.add_parser("latest",
                            help="Print the latest stable version of a Go package")
    latest.add_argument("PACKAGE", help="Go package path")

    resolve = sub.add_parser("resolve",
                             help="Resolve the latest stable version and write the plugin manifest")
    resolve.add_argument("PLUGIN", help="Plugin name")
    resolve.add_argument("PACKAGE", help="Go package path")
    resolve.add_argument("--no-reference",
                         dest="NO_REFERENCE",
                         help="Do not resolve the selected tag to a Git commit",
                         action="store_true")

    show = sub.add_parser("show",
                          help="Validate and print a plugin's manifest")
    show.add_argument("PLUGIN", help="Plugin name")

    return parser.parse_args(argv)
