"""Argument parsing functionality for Rope."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="rope-recipes",
        description=(
            "Rope - plan which recipes apply to a batch of Composer package operations"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--project",
                        dest="PROJECT",
                        help="Composer project directory (default: current directory)",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("-O", "--operations",
                        dest="OPERATIONS",
                        help="File listing the operations (YAML or JSON list of {job, package, from})",
                        action="store",
                        type=str,
                        required=True)
    parser.add_argument("--vendor-dir",
                        dest="VENDOR_DIR",
                        help="Vendor directory relative to the project (default: from composer.json or vendor)",
                        action="store",
                        type=str)
    parser.add_argument("--lock-file",
                        dest="LOCK_FILE",
                        help="Recipe lock file (default: <project>/symfony.lock)",
                        action="store",
                        type=str)
    parser.add_argument("--force",
                        dest="FORCE",
                        help="Pass the force flag to the recipe installs.",
                        action="store_true")
    parser.add_argument("--write-lock",
                        dest="WRITE_LOCK",
                        help="Write the updated recipe lock back to disk.",
                        action="store_true")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to the JSON plan output file (default: stdout)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
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
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output the plan to the console.",
                        action="store_true")

    return parser.parse_args(argv)
