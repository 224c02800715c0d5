#!/usr/bin/env python3
"""
Backtest Runner

Runs one backtest from the command line and prints the report. The series
comes from a CSV file with date/open/high/low/close/volume columns, or is
fetched from an exchange (falling back to a simulated series).
"""

import argparse
import json
import sys
from pathlib import Path

import pandas as pd
from loguru import logger

from neuroquant.core.enums import AiProvider, Asset, Exchange, StrategyMode
from neuroquant.core.exceptions.backtest import BacktestException
from neuroquant.core.models.backtest import BacktestResult, StrategyConfig
from neuroquant.core.models.market import PricePoint, frame_to_series
from neuroquant.core.utils.log_config import setup_logging
from neuroquant.engine import run_backtest
from neuroquant.infrastructure.market import MarketDataService
from neuroquant.infrastructure.signals import AiSettings, AiSignalClient
from neuroquant.settings import get_settings


def load_series(args: argparse.Namespace) -> list[PricePoint]:
    """Load the price series from a CSV file or the market data service."""
    if args.csv:
        logger.info(f"Loading series from {args.csv}")
        return frame_to_series(pd.read_csv(args.csv, parse_dates=["date"]))

    settings = get_settings()
    service = MarketDataService(
        simulation_seed=args.seed,
        timeout=settings.http_timeout,
        max_retries=settings.max_retries,
    )
    market = service.simulate(args.asset, args.exchange) if args.simulate else service.fetch(
        args.asset, args.exchange
    )
    if market.is_simulation:
        logger.warning(f"Using simulated data for {market.symbol}")
    return market.data


def load_signals(args: argparse.Namespace, series: list[PricePoint]) -> list[dict] | None:
    """Read signals from a JSON file, or generate them with an AI provider."""
    if args.signals:
        with open(args.signals) as f:
            payload = json.load(f)
        return payload["signals"] if isinstance(payload, dict) else payload

    if args.mode == StrategyMode.AI and args.ai_provider:
        client = AiSignalClient(
            AiSettings(
                provider=args.ai_provider,
                api_key=args.ai_key or "",
                model_name=args.ai_model or "",
                base_url=args.ai_base_url or "",
            )
        )
        return [signal.to_dict() for signal in client.generate_signals(series)]
    return None


def print_report(result: BacktestResult) -> None:
    """Print the summary and the trade log."""
    print(f"Final balance : {result.final_balance:,.2f}")
    print(f"Total return  : {result.total_return:.2f}%")
    print(f"Win rate      : {result.win_rate:.2f}%")
    print(f"Max drawdown  : {result.max_drawdown:.2f}%")
    print(
        f"Trades        : {len(result.trades)} "
        f"({result.buy_count} buys, {result.sell_count} sells)"
    )
    for trade in result.trades:
        print(
            f"  {trade.date.isoformat()} {trade.type:<4} {trade.amount:.8f} @ {trade.price:,.2f}"
            f"  balance={trade.balance_after:,.2f}  {trade.reason}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Run an SMA/RSI or AI-signal backtest over a daily series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Crossover strategy on live Binance data
  python scripts/run_backtest.py --asset BTC --exchange BINANCE

  # RSI-filtered crossover on a local CSV, saving the full result
  python scripts/run_backtest.py --csv data/eth.csv --use-rsi-filter --output result.json

  # AI mode with signals from a JSON file
  python scripts/run_backtest.py --mode AI --signals signals.json --simulate --seed 7
        """,
    )

    parser.add_argument("--csv", type=Path, help="CSV file with date/open/high/low/close/volume")
    parser.add_argument(
        "--asset", type=str, default=Asset.BTC.value, help="Base asset (default: BTC)"
    )
    parser.add_argument(
        "--exchange",
        type=Exchange,
        choices=list(Exchange),
        default=Exchange.BINANCE,
        help="Exchange to fetch from (default: BINANCE)",
    )
    parser.add_argument(
        "--simulate", action="store_true", help="Skip the exchange, use simulated data"
    )
    parser.add_argument("--seed", type=int, help="Seed for the simulated series")

    parser.add_argument(
        "--mode", type=StrategyMode, choices=list(StrategyMode), default=StrategyMode.ALGO
    )
    parser.add_argument("--initial-capital", type=float, default=StrategyConfig.initial_capital)
    parser.add_argument("--short-window", type=int, default=StrategyConfig.short_window)
    parser.add_argument("--long-window", type=int, default=StrategyConfig.long_window)
    parser.add_argument("--rsi-period", type=int, default=StrategyConfig.rsi_period)
    parser.add_argument("--rsi-overbought", type=float, default=StrategyConfig.rsi_overbought)
    parser.add_argument("--rsi-oversold", type=float, default=StrategyConfig.rsi_oversold)
    parser.add_argument(
        "--use-rsi-filter", action="store_true", help="Gate buys and force sells on RSI"
    )

    parser.add_argument(
        "--signals", type=Path, help="JSON file with dated BUY/SELL signals (AI mode)"
    )
    parser.add_argument("--ai-provider", type=AiProvider, choices=list(AiProvider))
    parser.add_argument(
        "--ai-key", type=str, help="API key (a server-side env key takes precedence)"
    )
    parser.add_argument("--ai-model", type=str, help="Model name override")
    parser.add_argument("--ai-base-url", type=str, help="Base URL, required for CUSTOM")

    parser.add_argument("--output", type=Path, help="Write the full result as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    config = StrategyConfig(
        mode=args.mode,
        initial_capital=args.initial_capital,
        short_window=args.short_window,
        long_window=args.long_window,
        rsi_period=args.rsi_period,
        rsi_overbought=args.rsi_overbought,
        rsi_oversold=args.rsi_oversold,
        use_rsi_filter=args.use_rsi_filter,
    )

    try:
        series = load_series(args)
        signals = load_signals(args, series)
        result = run_backtest(series, config, signals)
    except (BacktestException, OSError, ValueError) as e:
        logger.error(f"Backtest failed: {e}")
        return 1

    print_report(result)

    if args.output:
        args.output.write_text(json.dumps(result.to_dict(), indent=2))
        logger.success(f"Saved result to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
