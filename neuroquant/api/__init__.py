"""HTTP API for the backtesting platform."""
