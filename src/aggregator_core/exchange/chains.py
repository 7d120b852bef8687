"""Chain and token reference data."""

from __future__ import annotations

NATIVE_TOKEN = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"

NATIVE_TOKEN_METADATA = {
    "symbol": "ETH",
    "name": "Ethereum",
    "decimals": 18,
    "logoURI": "https://assets.coingecko.com/coins/images/279/small/ethereum.png",
}

UNKNOWN_TOKEN_METADATA = {
    "symbol": "UNKNOWN",
    "name": "Unknown Token",
    "decimals": 18,
    "logoURI": None,
}

# Chains served by the 1inch History API
SUPPORTED_CHAINS: dict[int, str] = {
    1: "Ethereum",
    10: "Optimism",
    56: "BSC",
    137: "Polygon",
    250: "Fantom",
    8453: "Base",
    42161: "Arbitrum",
    43114: "Avalanche",
}

# Mainnet addresses (lowercase) -> symbol, used to label order-book pairs
KNOWN_TOKENS: dict[str, str] = {
    "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2": "WETH",
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC",
    "0xdac17f958d2ee523a2206206994597c13d831ec7": "USDT",
    "0x6b175474e89094c44da98b954eedeac495271d0f": "DAI",
    "0x1f9840a85d5af5bf1d1762f925bdaddc4201f984": "UNI",
    "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599": "WBTC",
    "0x514910771af9ca656af840dff83e8264ecf986ca": "LINK",
    "0x7fc66500c84a76ad7e9c93437bfc5ac33e2ddae9": "AAVE",
    "0x0b3f868e0be5597d5db7feb59e1cadbb0fdda50a": "SUSHI",
    "0x95ad61b0a150d79219dcf64e1e6cc01f0b64c4ce": "SHIB",
    "0x111111111117dc0aa78b770fa6a738034120c302": "1INCH",
    "0x4fabb145d64652a948d72533023f6e7a623c7c53": "BUSD",
    "0x853d955acef822db058eb8505911ed77f175b99e": "FRAX",
    "0x7d1afa7b718fb893db30a3abc0cfc608aacfebb0": "MATIC",
    "0xd533a949740bb3306d119cc777fa900ba034cd52": "CRV",
    "0xc011a73ee8576fb46f5e1c5751ca3b9fe0af2a6f": "SNX",
    "0x0bc529c00c6401aef6d220be8c6ea1667f6ad93e": "YFI",
    NATIVE_TOKEN: "ETH",
}


def token_symbol(address: str) -> str:
    """Best-effort symbol for a token address; ``"TOKEN"`` when unknown."""
    return KNOWN_TOKENS.get(address.lower(), "TOKEN")


def is_native(address: str) -> bool:
    return address.lower() == NATIVE_TOKEN
