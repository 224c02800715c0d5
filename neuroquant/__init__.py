"""NeuroQuant: daily crypto strategy backtesting with SMA/RSI and AI signals."""

__version__ = "1.0.0"
