#!/usr/bin/env python3
"""
Aranet4 command line reader
Scans for Aranet4 CO2 monitors or reads one of them through aranetctl
"""

import argparse
import asyncio
import json
import logging
import sys

from custom_components.aranet4.aranet_api import Aranet4API
from custom_components.aranet4.const import DEFAULT_COMMAND_TIMEOUT, DEFAULT_EXECUTABLE
from custom_components.aranet4.exceptions import Aranet4Exception

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read Aranet4 monitors through aranetctl")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("address", nargs="?", help="device address to read")
    target.add_argument("--scan", action="store_true", help="scan for nearby devices (default)")
    parser.add_argument("--executable", default=DEFAULT_EXECUTABLE, help="path to aranetctl")
    parser.add_argument("--timeout", type=float, default=DEFAULT_COMMAND_TIMEOUT,
                        help="seconds to wait for aranetctl")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


async def run(args: argparse.Namespace, api: Aranet4API) -> dict:
    """Scan or read one device and return the JSON document to print"""
    if args.address:
        device = await api.async_read_device(args.address)
        return {
            "device": device.as_dict(),
            "reading": device.current_reading().as_dict(),
        }

    devices = await api.async_scan()
    logger.info(f"Found {len(devices)} device(s)")
    return {"devices": [device.as_dict() for device in devices]}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    api = Aranet4API(executable=args.executable, timeout=args.timeout)
    try:
        result = asyncio.run(run(args, api))
    except Aranet4Exception as e:
        logger.error(f"Failed: {e}")
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
