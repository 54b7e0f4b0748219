"""Describe or normalize BCP-47 language tags."""

import argparse
import importlib.resources
import logging
import sys
import traceback
from importlib.metadata import PackageNotFoundError, version
from logging.config import dictConfig
from typing import Optional, Sequence

import requests
import toml

from . import __version__ as package_version
from .download_registry import download_registry
from .exceptions import LangTagError
from .languages import get_default_index
from .registry_parser import RegistryIndex, load
from .resolver import PRIVATE_USE_LABEL, describe, file_date, normalize

try:
    __version__ = version("langtag_registry")
except PackageNotFoundError:  # running from a source checkout
    __version__ = package_version


logger = logging.getLogger(__name__)
with (
    importlib.resources.as_file(
        importlib.resources.files("langtag_registry").joinpath("logging.toml")
    ) as config_path,
    open(config_path, "rb") as f,
):
    log_config = toml.loads(f.read().decode("utf-8"))
dictConfig(log_config)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    :return: parsed arguments
    :rtype: argparse.Namespace
    """
    parser = argparse.ArgumentParser(
        description=__doc__.strip() if __doc__ else None,
        prog="langtag_registry",
    )
    parser.add_argument("tags", nargs="*", metavar="TAG", help="language tag, e.g. zh-Hant-TW")
    parser.add_argument(
        "-n",
        "--normalize",
        action="store_true",
        help="print the normalized tag instead of its description",
    )
    parser.add_argument(
        "-r",
        "--registry",
        metavar="PATH",
        help="language subtag registry file (default: cached IANA registry)",
    )
    parser.add_argument(
        "--file-date",
        action="store_true",
        help="print the File-Date of the registry",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="download the registry again before loading it",
    )
    parser.add_argument(
        "--private-use-label",
        metavar="TEXT",
        default=PRIVATE_USE_LABEL,
        help=f'text shown for private-use subtags (default: "{PRIVATE_USE_LABEL}")',
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="show version",
    )
    parser.add_argument("--verbose", action="store_true", help="enable verbose output")

    args = parser.parse_args(argv)

    if not args.tags and not (args.file_date or args.download):
        parser.error("at least one TAG is required unless --file-date or --download is given")

    return args


def print_exception(exc: Exception, debug: bool) -> None:
    """
    Print an exception message to stderr, optionally including a stack trace.

    :param exc: The exception to print.
    :type exc: Exception
    :param debug: Whether to include a stack trace.
    :type debug: bool
    """
    if debug:
        traceback.print_exc()
    else:
        print(exc, file=sys.stderr)


def get_index(registry: Optional[str], refresh: bool) -> RegistryIndex:
    """
    Load the registry named on the command line, or the default one.

    :param registry: The registry file given with ``--registry``, if any.
    :type registry: Optional[str]
    :param refresh: Whether to download the registry again first.
    :type refresh: bool
    :return: The registry index.
    :rtype: RegistryIndex
    """
    if refresh:
        download_registry(force=True)
    if registry is not None:
        return load(registry)
    return get_default_index()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function to parse arguments, load the registry and resolve each tag.

    :return: Exit status code: 0 if every tag was matched, 1 if some tag was
             not, 2 if the registry could not be loaded.
    :rtype: int
    """
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        index = get_index(args.registry, args.download)
    except (LangTagError, TimeoutError, requests.RequestException) as exception:
        print_exception(exception, args.verbose)
        return 2

    if args.file_date:
        print(file_date(index) or "")

    status = 0
    for tag in args.tags:
        if args.normalize:
            result = normalize(index, tag)
        else:
            result = describe(index, tag, args.private_use_label)
        if not result:
            logger.debug("No match for %r", tag)
            status = 1
        print(f"{tag}\t{result}")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
