"""
Currency catalog: which codes are fiat, which are crypto, and how
network-suffixed crypto codes map to their base code.
"""

FIAT_CURRENCIES: tuple[str, ...] = (
    "AED", "ARS","AUD", "BAM", "BDT", "BGN", "BHD", "BOB", "BRL", "BYN",
    "CAD", "CHF", "CLP", "CNY", "COP", "CRC", "CZK", "DKK", "DOP", "DZD",
    "EGP", "EUR", "GBP", "GEL", "GHS", "GTQ", "HKD", "HNL", "HRK", "HUF",
    "IDR", "ILS", "INR", "IRR", "ISK", "JMD", "JOD", "JPY", "KES", "KRW",
    "KWD", "KZT", "LBP", "LKR", "MAD", "MXN", "MYR", "NAD", "NGN", "NIO",
    "NOK", "NPR", "NZD", "OMR", "PAB", "PEN", "PHP", "PKR", "PLN", "PYG",
    "QAR", "RON", "RSD", "RUB", "SAR", "SEK", "SGD", "THB", "TND", "TRY",
    "TWD", "TZS", "UAH", "UGX", "USD", "UYU", "VES", "VND", "XAF", "XOF",
    "ZAR",
)

CRYPTO_CURRENCIES: tuple[str, ...] = (
    "BTC", "BCH", "ETH", "LTC", "XMR",
    "DAI-ERC20", "USDT-ERC20", "USDT-TRC20", "USDC-ERC20",
)


class CurrencyCatalog:
    def __init__(
        self,
        fiat_codes: tuple[str, ...] | list[str] = FIAT_CURRENCIES,
        crypto_codes: tuple[str, ...] | list[str] = CRYPTO_CURRENCIES,
    ):
        self._fiat = sorted(code.upper() for code in fiat_codes)
        self._crypto = sorted(code.upper() for code in crypto_codes)

    def all_fiat_codes(self) -> list[str]:
        return list(self._fiat)

    def all_crypto_codes(self) -> list[str]:
        return list(self._crypto)

    def is_fiat(self, code: str) -> bool:
        return code.upper() in self._fiat

    def is_crypto(self, code: str) -> bool:
        return code.upper() in self._crypto

    @staticmethod
    def canonicalize(code: str) -> str:
        """USDT-ERC20 -> USDT; codes without a network suffix pass through"""
        return code.upper().split("-", 1)[0]


default_catalog = CurrencyCatalog()
