from typing import Dict, Optional, Protocol

DEFAULT_DECIMAL_DIGITS = 2

# ISO 4217 minor units that differ from the default
_DECIMAL_DIGITS: Dict[str, int] = {
    "BIF": 0, "CLP": 0, "DJF": 0, "GNF": 0, "ISK": 0, "JPY": 0, "KMF": 0,
    "KRW": 0, "PYG": 0, "RWF": 0, "UGX": 0, "VND": 0, "VUV": 0, "XAF": 0,
    "XOF": 0, "XPF": 0,
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
}


class CurrencyMetadataProvider(Protocol):
    def decimal_digits(self, currency_code: Optional[str]) -> int:
        ...


class StaticCurrencyProvider:
    """Display precision lookup; analytics math never uses it."""

    def __init__(self, overrides: Optional[Dict[str, int]] = None):
        self._digits = {**_DECIMAL_DIGITS, **{k.upper(): v for k, v in (overrides or {}).items()}}

    def decimal_digits(self, currency_code: Optional[str]) -> int:
        if not currency_code:
            return DEFAULT_DECIMAL_DIGITS
        return self._digits.get(currency_code.upper(), DEFAULT_DECIMAL_DIGITS)
