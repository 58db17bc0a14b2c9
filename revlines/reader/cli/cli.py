import argparse
import os
import sys
from typing import Dict, Tuple

from revlines.reader.config import DEFAULT_BLOCK_SIZE, Config, loadConfig, newConfig
from revlines.reader.version import getVersion


def getArgumentParser():
    parser = argparse.ArgumentParser(
        description="Print the lines of a file from the last one to the first."
    )

    # General params
    parser.add_argument("-v", "--version", action="version", version=getVersion())
    parser.add_argument(
        "target", help="path or http(s):// URL of the file to read backwards"
    )
    parser.add_argument(
        "--config",
        metavar="revlines.json",
        help="JSON config file, command line options override it",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default=None,
        help="directory to write errors.log to",
    )

    # Scan params
    groupScan = parser.add_argument_group("Scan", "How the file is read")
    groupScan.add_argument(
        "-e",
        "--encoding",
        default=None,
        help="encoding of the file (platform default if not given)",
    )
    groupScan.add_argument(
        "-b",
        "--block-size",
        dest="block_size",
        metavar=str(DEFAULT_BLOCK_SIZE),
        type=int,
        default=None,
        help="bytes read per step backwards",
    )
    groupScan.add_argument(
        "-n",
        "--lines",
        metavar="10",
        type=int,
        default=None,
        help="print only the last N lines, in file order",
    )

    # HTTP params
    groupHTTP = parser.add_argument_group("HTTP", "Reading remote files")
    groupHTTP.add_argument(
        "--retries",
        metavar="5",
        type=int,
        default=None,
        help="Maximum number of retries per range request",
    )
    groupHTTP.add_argument(
        "--insecure", action="store_true", help="Disable SSL certificate verification"
    )
    return parser


def checkParameters(args=argparse.Namespace()) -> bool:
    passed = True

    if args.block_size is not None and args.block_size <= 0:
        print("ERROR: --block-size must be a positive number")
        passed = False

    if args.lines is not None and args.lines < 0:
        print("ERROR: --lines must not be negative")
        passed = False

    if args.retries is not None and args.retries < 0:
        print("ERROR: --retries must not be negative")
        passed = False

    if args.config and not os.path.isfile(args.config):
        print("ERROR: config file %s does not exist" % args.config)
        passed = False

    return passed


def getParameters(params=None) -> Tuple[Config, Dict]:
    parser = getArgumentParser()
    args = parser.parse_args(params)
    if checkParameters(args) is not True:
        print("\n\n")
        parser.print_help()
        sys.exit(1)

    config = loadConfig(args.config) if args.config else newConfig({})
    # explicit options win over the config file
    for key in ["encoding", "block_size", "lines", "retries", "log_dir"]:
        value = getattr(args, key)
        if value is not None:
            setattr(config, key, value)
    if args.insecure:
        config.insecure = True

    other = {
        "target": args.target,
    }
    return config, other
