"""Render CoinCap records as chat replies.

Pure functions: typed payloads in, display text out. Currency and quantity
fields use 4 decimals, percentages 2; dates are DD.MM.YYYY HH:MM:SS in the
display time zone.
"""

from __future__ import annotations

from typing import Optional

from coinbot.schemas.coincap import AssetPayload, HistoryPoint, parse_decimal
from coinbot.utils.time import format_local, from_epoch_ms


DEFAULT_TIMEZONE = "Europe/Kyiv"
UNBOUNDED = "∞"


def format_price(asset: AssetPayload, tz_name: str = DEFAULT_TIMEZONE) -> str:
    price = parse_decimal("priceUsd", asset.data.price_usd)
    captured_at = format_local(from_epoch_ms(asset.timestamp), tz_name)
    return f"Price of {asset.data.name} at {captured_at}\n{price:.4f} USD"


def format_info(asset: AssetPayload) -> str:
    data = asset.data

    supply = parse_decimal("supply", data.supply)
    if data.max_supply is None:
        max_supply = UNBOUNDED
    else:
        max_supply = f"{parse_decimal('maxSupply', data.max_supply):.4f}"
    market_cap = parse_decimal("marketCapUsd", data.market_cap_usd)
    volume = parse_decimal("volumeUsd24Hr", data.volume_usd_24h)
    price = parse_decimal("priceUsd", data.price_usd)
    change = parse_decimal("changePercent24Hr", data.change_percent_24h)

    lines = [
        f"Here is what I found about {data.name}",
        "",
        f"Rank: {data.rank}",
        f"Symbol: {data.symbol}",
        f"Total supply: {supply:.4f}",
        f"Max supply: {max_supply}",
        f"Market cap: {market_cap:.4f} USD",
        f"Volume (24h): {volume:.4f} USD",
        f"Price: {price:.4f} USD",
        f"Price change (24h): {change:.2f}%",
    ]
    return "\n".join(lines) + "\n"


def history_change_percent(current_price: float, previous_price: float) -> Optional[float]:
    """
    Percent change between two history points, relative to the CURRENT price.

    Returns None when the current price is zero.
    """
    if current_price == 0:
        return None
    return (current_price - previous_price) / current_price * 100


def format_history(
    asset_id: str,
    current: HistoryPoint,
    previous: HistoryPoint,
    tz_name: str = DEFAULT_TIMEZONE,
) -> str:
    current_price = parse_decimal("priceUsd", current.price_usd)
    previous_price = parse_decimal("priceUsd", previous.price_usd)

    change = history_change_percent(current_price, previous_price)
    change_text = "n/a" if change is None else f"{change:.2f}%"

    return (
        f"Price of {asset_id} at {format_local(previous.date, tz_name)}: {previous_price:.4f}\n"
        f"Price of {asset_id} at {format_local(current.date, tz_name)}: {current_price:.4f}\n"
        f"Price change: {change_text}"
    )
