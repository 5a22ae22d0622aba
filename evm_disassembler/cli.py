"""
Command-line wrapper: disassemble bytecode given as an argument or a file.

Usage:
    evm-disasm 0x6080604052...
    evm-disasm --file runtime.hex --json
    evm-disasm --file runtime.bin --binary --config listing.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .config import ListingConfig
from .disassembler import decode_bytes, decode_hex
from .errors import DisassemblyError
from .listing import format_listing

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for console output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evm-disasm",
        description="Disassemble EVM bytecode into an offset-addressed instruction listing.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("bytecode", nargs="?",
                        help="Bytecode as hex, with or without a 0x prefix.")
    source.add_argument("--file", type=str, default=None,
                        help="Read bytecode from a file (hex text unless --binary).")
    parser.add_argument("--binary", action="store_true",
                        help="Treat --file as raw bytes instead of hex text.")
    parser.add_argument("--json", action="store_true",
                        help="Print instructions as JSON instead of a listing.")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML file with listing options.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging.")
    return parser


def _load(args: argparse.Namespace):
    if args.file is None:
        return decode_hex(args.bytecode.strip())
    path = Path(args.file)
    if args.binary:
        return decode_bytes(path.read_bytes())
    return decode_hex(path.read_text().strip())


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.binary and args.file is None:
        parser.error("--binary requires --file")

    setup_logging(args.verbose)

    try:
        config = ListingConfig.from_yaml(args.config) if args.config else ListingConfig()
        disassembly = _load(args)
    except (DisassemblyError, OSError, ValueError, yaml.YAMLError) as e:
        logger.debug("Disassembly failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(disassembly.to_list(), indent=2))
    else:
        print(format_listing(disassembly, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
