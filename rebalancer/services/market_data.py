import logging
from decimal import Decimal

import pandas as pd
import yfinance as yf

from rebalancer.exceptions import MarketDataError

logger = logging.getLogger(__name__)

CASH_TICKERS = frozenset({"CASH"})


class MarketDataService:
    @staticmethod
    def get_prices(tickers: list[str]) -> dict[str, Decimal | None]:
        """
        Fetch the latest close for each ticker.

        Tickers without data map to None. Blank tickers are ignored.

        Raises:
            MarketDataError: If the download itself fails.

        Example:
            >>> MarketDataService.get_prices(["VTI", "BND"])
            {'VTI': Decimal('245.67'), 'BND': Decimal('72.10')}
        """
        wanted = [t.strip() for t in tickers if t and t.strip()]
        if not wanted:
            return {}

        prices: dict[str, Decimal | None] = {t: None for t in wanted}

        to_fetch = []
        for ticker in wanted:
            if ticker in CASH_TICKERS:
                prices[ticker] = Decimal("1.00")
            else:
                to_fetch.append(ticker)

        if not to_fetch:
            return prices

        try:
            data = yf.download(to_fetch, period="1d", progress=False, auto_adjust=True)["Close"]
        except Exception as e:
            logger.error("Price download failed for %s: %s", to_fetch, e)
            raise MarketDataError(f"Could not fetch prices for {', '.join(to_fetch)}") from e

        if isinstance(data, pd.Series):
            data = data.to_frame(name=to_fetch[0])

        for ticker in to_fetch:
            if ticker not in data.columns:
                logger.warning("No price data returned for %s", ticker)
                continue
            series = data[ticker].dropna()
            if series.empty:
                logger.warning("No price data returned for %s", ticker)
                continue
            value = series.iloc[-1]
            value = value.item() if hasattr(value, "item") else value
            prices[ticker] = Decimal(str(value))

        return prices
