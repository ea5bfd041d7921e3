import argparse
import sys

from loguru import logger

from vipbalance.application.orchestrator import RequestOrchestrator
from vipbalance.core.config import Config
from vipbalance.core.logging import configure_logging
from vipbalance.infrastructure.api.auth import VipAuthGateway
from vipbalance.infrastructure.api.balance import VipBalanceGateway
from vipbalance.infrastructure.api.requests import VipRequestClient
from vipbalance.infrastructure.session import SessionManager
from vipbalance.infrastructure.session_store import SessionStore
from vipbalance.shared.constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_SESSION_FILE,
)
from vipbalance.shared.exceptions import VipBalanceError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vip-balance",
        description="Print the contract balance from the VIP billing API",
    )
    parser.add_argument(
        "-v",
        type=int,
        default=0,
        dest="verbosity",
        help="Log verbosity: 0 - errors only, 1 - info, 2 - debug",
    )
    parser.add_argument(
        "--log",
        default="",
        dest="log_file",
        help="Append log records to this file instead of stderr",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--session-file",
        default=None,
        help=f"Session cache file (default: {DEFAULT_SESSION_FILE})",
    )
    return parser


def build_orchestrator(
    config: Config, request_client: VipRequestClient
) -> RequestOrchestrator:
    """Wire gateways, session store and manager for one run"""
    store = SessionStore(config.session_file)
    session_manager = SessionManager(
        config, VipAuthGateway(request_client), store
    )
    return RequestOrchestrator(
        config, session_manager, VipBalanceGateway(request_client)
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbosity, args.log_file or None)

    try:
        config = Config.from_file(args.config, session_file=args.session_file)
    except VipBalanceError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    request_client = VipRequestClient(config.api_site, config.timeout_seconds)
    try:
        result = build_orchestrator(config, request_client).run()
    except VipBalanceError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 1
    finally:
        request_client.close()

    if not result.is_success:
        logger.error(f"Balance request failed with code {result.status_code}")
        for error in result.errors:
            logger.error(f"Server message: {error.message}")
        return 1

    print(result.balance)
    return 0


if __name__ == "__main__":
    sys.exit(main())
