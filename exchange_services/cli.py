"""
Exchange Services - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line access to the public market data of every
supported exchange.

- argparse-based CLI
- Service configuration comes from the environment
  (``KUCOIN_*`` / ``YOBIT_*``, ``.env`` included)
- Prints normalized results as JSON on stdout

============================================================
USAGE
============================================================
python -m exchange_services order-book ETH BTC --exchange kucoin --limit 5
python -m exchange_services trades eth btc --exchange yobit --log-format json

============================================================
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from core.exceptions import ExchangeServiceError
from core.logging_config import setup_logging
from core.models import CurrencyPair
from core.transport import HttpTransport
from exchange_services.base import BaseExchangeService
from exchange_services.kucoin import KuCoinService
from exchange_services.yobit import YobitService


logger = logging.getLogger(__name__)

SERVICES = {
    "kucoin": KuCoinService,
    "yobit": YobitService,
}


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="exchange-services",
        description="Normalized exchange market data",
    )

    parser.add_argument(
        "command",
        choices=["order-book", "trades"],
        help="Market data to fetch",
    )
    parser.add_argument("base", help="Base currency, e.g. ETH")
    parser.add_argument("quote", help="Quote currency, e.g. BTC")

    parser.add_argument(
        "--exchange", "-e",
        choices=sorted(SERVICES),
        default="kucoin",
        help="Exchange to query (default: kucoin)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        metavar="N",
        help="Maximum number of entries",
    )

    # --------------------------------------------------------
    # Logging Options
    # --------------------------------------------------------
    logging_group = parser.add_argument_group("Logging Options")

    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument(
        "--log-format",
        choices=["json", "text"],
        default="text",
        help="Logging format (default: text)",
    )

    return parser


# ============================================================
# COMMANDS
# ============================================================

def build_service(exchange: str, transport: Optional[HttpTransport] = None) -> BaseExchangeService:
    """Service for ``exchange``, configured from the environment."""
    return SERVICES[exchange].from_env(transport=transport)


async def run_command(args: argparse.Namespace, service: BaseExchangeService) -> Dict[str, Any]:
    """Fetch what ``args.command`` asks for and return it as plain data."""
    pair = CurrencyPair(args.base, args.quote)

    if args.command == "order-book":
        book = await service.get_order_book(pair, max_limit=args.limit)
        return {
            "exchange": args.exchange,
            "pair": list(pair),
            "buy_orders": [order.to_dict() for order in book.buy_orders],
            "sell_orders": [order.to_dict() for order in book.sell_orders],
        }

    trades = await service.get_trades(pair, max_limit=args.limit)
    return {
        "exchange": args.exchange,
        "pair": list(pair),
        "trades": [trade.to_dict() for trade in trades],
    }


# ============================================================
# MAIN ENTRY POINT
# ============================================================

async def async_main(args: argparse.Namespace, transport: Optional[HttpTransport] = None) -> int:
    """
    Async main entry point.

    Returns:
        Exit code
    """
    try:
        async with build_service(args.exchange, transport) as service:
            result = await run_command(args, service)
    except ExchangeServiceError as e:
        logger.error(f"[cli] {args.command} on {args.exchange} failed: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_format=args.log_format)
    return asyncio.run(async_main(args))


if __name__ == "__main__":
    sys.exit(main())
