"""
kubewatch command line.

Usage:
    kubewatch config dingtalk --token TOKEN [--sign SECRET]
    kubewatch test
    kubewatch notify created --file pod.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from kubewatch.config import Config
from kubewatch.handlers import HANDLERS, ConfigurationError, get_handler
from kubewatch.logging_setup import VALID_LOG_LEVELS, setup_logging

logger = logging.getLogger(__name__)


def configure_dingtalk(config: Config, token: str, sign: str) -> Path:
    """Store DingTalk credentials, keeping current values for empty flags."""
    if token:
        config.handler.dingtalk.token = token
    if sign:
        config.handler.dingtalk.sign = sign
    return config.write()


def cmd_config_dingtalk(args: argparse.Namespace) -> int:
    config = Config.load(args.config_file)
    path = configure_dingtalk(config, args.token, args.sign)
    logger.info(f"DingTalk configuration saved to {path}")
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    config = Config.load(args.config_file)
    handler = get_handler(args.handler)
    handler.init(config)

    logger.info(f"Testing {args.handler} handler configuration...")
    handler.test_handler()

    stats = handler.get_stats()
    logger.info(f"sent: {stats['sent']}, failed: {stats['failed']}")
    return 0 if stats["failed"] == 0 else 2


def cmd_notify(args: argparse.Namespace) -> int:
    try:
        obj = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read Kubernetes object from {args.file}: {e}")
        return 1

    config = Config.load(args.config_file)
    handler = get_handler(args.handler)
    handler.init(config)

    if args.action == "created":
        handler.object_created(obj)
    elif args.action == "deleted":
        handler.object_deleted(obj)
    else:
        handler.object_updated(obj, obj)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kubewatch", description="Send Kubernetes lifecycle notifications to DingTalk"
    )
    parser.add_argument(
        "--config-file", help="Configuration file (default: $KW_CONFIG or ~/.kubewatch.json)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="Log level (default: $KW_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    subparsers = parser.add_subparsers(dest="command", required=True)

    config_parser = subparsers.add_parser("config", help="Modify handler configuration")
    config_sub = config_parser.add_subparsers(dest="handler", required=True)
    dingtalk_parser = config_sub.add_parser("dingtalk", help="Specific dingtalk configuration")
    dingtalk_parser.add_argument("-t", "--token", default="", help="Specify dingtalk token")
    dingtalk_parser.add_argument("-s", "--sign", default="", help="Specify dingtalk sign")
    dingtalk_parser.set_defaults(func=cmd_config_dingtalk)

    test_parser = subparsers.add_parser("test", help="Send a test message")
    test_parser.add_argument(
        "--handler", default="dingtalk", choices=sorted(HANDLERS), help="Handler to test"
    )
    test_parser.set_defaults(func=cmd_test)

    notify_parser = subparsers.add_parser("notify", help="Send a notification for an object")
    notify_parser.add_argument("action", choices=["created", "deleted", "updated"])
    notify_parser.add_argument(
        "-f", "--file", required=True, help="Kubernetes object as JSON"
    )
    notify_parser.add_argument(
        "--handler", default="dingtalk", choices=sorted(HANDLERS), help="Handler to notify"
    )
    notify_parser.set_defaults(func=cmd_notify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level, args.json_logs)
    except ValueError as e:
        # KW_LOG_LEVEL is bad; report it at the default level
        setup_logging("INFO", args.json_logs)
        logger.error(str(e))
        return 1

    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
