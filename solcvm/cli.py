"""Command line interface."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import SolcvmConfig
from .core import CompilerManager
from .errors import ConfigError, SolcvmError
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solcvm", description="Solidity compiler version manager")
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("-d", "--download", metavar="VERSION",
                         help="Download the chosen version of solidity ('latest' for the newest release)")
    actions.add_argument("-u", "--use", metavar="VERSION",
                         help="Use the chosen version of solidity ('newest' for the newest download)")
    actions.add_argument("-l", "--list", action="store_true", help="List downloaded versions")
    actions.add_argument("--latest", action="store_true", help="Download and use the latest release")
    actions.add_argument("--status", action="store_true", help="Show storage root and installed versions")
    parser.add_argument("--root", help="Storage root (defaults to the installed solc package)")
    parser.add_argument("--force", action="store_true", help="Download again even if already cached")
    parser.add_argument("--manifest-url", help="Release manifest URL")
    parser.add_argument("--binary-base-url", help="Base URL for release files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(args: argparse.Namespace, config: SolcvmConfig) -> int:
    async with CompilerManager(config) as manager:
        if args.download is not None:
            await manager.download(args.download, force=args.force)
        elif args.use is not None:
            await manager.use(args.use)
        elif args.list:
            for version in sorted(manager.list_versions()):
                print(version)
        elif args.latest:
            await manager.download_and_use_latest()
        elif args.status:
            status = manager.status()
            print(f"root: {status['root']}")
            print(f"active: {status['active'] or '-'}")
            print(f"installed: {', '.join(status['installed']) or '-'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        try:
            setup_logging(verbose=args.verbose)
        except OSError as e:
            raise ConfigError(f"Could not set up logging: {e}") from e
        config = SolcvmConfig.from_env(
            storage_root=args.root,
            manifest_url=args.manifest_url,
            binary_base_url=args.binary_base_url,
        )
        return asyncio.run(run(args, config))
    except SolcvmError as e:
        logger.error("%s", e)
        if e.__cause__ is not None and isinstance(e.__cause__, SolcvmError):
            logger.error("Caused by: %s", e.__cause__)
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
