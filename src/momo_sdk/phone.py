"""Phone number normalisation.

MoMo expects MSISDNs in international format without a leading ``+``.
Resources take any ``str -> str`` callable, so other numbering plans can be
plugged in without touching call sites.
"""
from __future__ import annotations

import re
from typing import Callable

PhoneNormalizer = Callable[[str], str]

_NON_DIGITS = re.compile(r"\D")


class CountryCodeNormalizer:
    """Canonicalise numbers for one country.

    Non-digits are stripped. A leading trunk prefix is replaced by the
    country code; otherwise the country code is prepended unless the number
    already starts with it.
    """

    def __init__(self, country_code: str = "231", trunk_prefix: str = "0"):
        if not country_code.isdigit():
            raise ValueError(f"country code must be digits, got {country_code!r}")
        self.country_code = country_code
        self.trunk_prefix = trunk_prefix

    def __call__(self, phone: str) -> str:
        digits = _NON_DIGITS.sub("", phone)
        if self.trunk_prefix and digits.startswith(self.trunk_prefix):
            return self.country_code + digits[len(self.trunk_prefix):]
        if digits.startswith(self.country_code):
            return digits
        return self.country_code + digits

    def __repr__(self) -> str:
        return f"CountryCodeNormalizer(country_code={self.country_code!r}, trunk_prefix={self.trunk_prefix!r})"


# Liberia
format_phone_number: PhoneNormalizer = CountryCodeNormalizer("231")
