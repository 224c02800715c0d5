"""
Core constants and limits.

Defines the fixed policies of the backtest engine and the defaults used by
the strategy configuration and the market data collaborators.
"""

# Position Sizing
BUY_CASH_FRACTION = 0.99  # Share of cash committed on BUY; the rest covers fees/rounding
DEFAULT_TRADE_REASON = "Technical Signal"

# Strategy Defaults
DEFAULT_INITIAL_CAPITAL = 10000.0
DEFAULT_SHORT_WINDOW = 10
DEFAULT_LONG_WINDOW = 50
DEFAULT_RSI_PERIOD = 14
DEFAULT_RSI_OVERBOUGHT = 70.0
DEFAULT_RSI_OVERSOLD = 30.0

# Market Data Limits
BINANCE_KLINE_LIMIT = 500
OKX_CANDLE_LIMIT = 300
COINBASE_DAILY_GRANULARITY = 86400  # Seconds per daily candle
MARKET_DATA_CACHE_SIZE = 64
MARKET_DATA_CACHE_TTL = 300  # 5 minutes

# Synthetic Series
SIMULATION_DAYS = 365
SIMULATION_DRIFT = 0.0003
SIMULATION_VOLATILITY = 0.03  # Higher volatility for crypto feel
SIMULATION_WICK_RANGE = 0.02  # Max high/low excursion beyond open/close
SIMULATION_MIN_PRICE = 0.000001
SIMULATION_MIN_VOLUME = 100000
SIMULATION_VOLUME_RANGE = 1000000
SIMULATION_PRICE_DECIMALS = 8

# AI Signals
AI_PROMPT_BARS = 100  # Most recent bars sent to the model
AI_DEFAULT_CONFIDENCE = 85.0
AI_TEMPERATURE = 0.7
