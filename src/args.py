"""Argument parsing functionality for cratefind."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cratefind",
        description=(
            "Find the name a dependency is imported under in Cargo.toml"
        ),
        add_help=True,
    )

    parser.add_argument("names",
                        metavar="NAME",
                        help="Acceptable dependency names; the first declared match wins",
                        nargs="+")

    parser.add_argument("-m", "--manifest-path",
                        dest="MANIFEST_PATH",
                        help="Path to Cargo.toml (default: $CARGO_MANIFEST_DIR/Cargo.toml)",
                        action="store",
                        type=str)
    parser.add_argument("-d", "--dependencies",
                        dest="DEPENDENCIES",
                        help="Sections to search: default, runtime, dev, build, release, all "
                             "or a '+'-joined combination such as build+no-target",
                        action="store",
                        type=str)

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument("--original",
                              dest="ORIGINAL",
                              help="Print the upstream package name instead of the import identifier",
                              action="store_true")
    output_group.add_argument("--json",
                              dest="JSON",
                              help="Print the matching package as JSON",
                              action="store_true")
    parser.add_argument("--all",
                        dest="ALL_MATCHES",
                        help="Print every matching declaration, not only the first",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
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

    return parser.parse_args(argv)
