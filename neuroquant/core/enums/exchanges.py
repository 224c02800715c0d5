"""
Exchange and asset enumerations.

This module defines the supported exchanges, their symbol conventions and
the assets offered by the market data layer.
"""

from enum import StrEnum


class Exchange(StrEnum):
    """Supported spot exchanges for daily candles."""

    BINANCE = "BINANCE"
    OKX = "OKX"
    COINBASE = "COINBASE"

    def symbol_for(self, asset: str) -> str:
        """
        Map a base asset to this exchange's instrument identifier.

        Args:
            asset: Base asset code (e.g., "BTC")

        Returns:
            Exchange symbol (BTCUSDT, BTC-USDT or BTC-USD)
        """
        base = asset.upper()
        if self == self.OKX:
            return f"{base}-USDT"
        if self == self.COINBASE:
            return f"{base}-USD"
        return f"{base}USDT"


class Asset(StrEnum):
    """
    Assets offered by the market data layer.

    Any other base asset can still be requested by its code; these are the
    ones with a display label and a realistic synthetic start price.
    """

    BTC = "BTC"
    ETH = "ETH"
    SOL = "SOL"
    DOGE = "DOGE"
    XRP = "XRP"
    BNB = "BNB"
    ADA = "ADA"
    PEPE = "PEPE"

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Bitcoin (BTC)'."""
        names = {
            self.BTC: "Bitcoin",
            self.ETH: "Ethereum",
            self.SOL: "Solana",
            self.DOGE: "Dogecoin",
            self.XRP: "XRP",
            self.BNB: "BNB",
            self.ADA: "Cardano",
            self.PEPE: "Pepe",
        }
        return f"{names[self]} ({self.value})"

    @classmethod
    def simulation_start_price(cls, asset: str) -> float:
        """
        Get the synthetic series start price for an asset code.

        Args:
            asset: Base asset code

        Returns:
            Start price; 100.0 for assets without a calibrated value
        """
        start_prices = {
            cls.BTC.value: 65000.0,
            cls.ETH.value: 3500.0,
            cls.SOL.value: 150.0,
            cls.DOGE.value: 0.15,
            cls.PEPE.value: 0.00001,
        }
        return start_prices.get(asset.upper(), 100.0)
