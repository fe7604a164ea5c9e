"""
Country lookup for task addresses.

Addresses in instruction documents carry the country as an ISO code in
front of the postcode ("DE-68219 Mannheim", "FR 75001 Paris"). The chat
readout shows the country name with its flag.
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    flag: str


COUNTRIES: dict[str, Country] = {
    c.code: c for c in (
        Country("BE", "Belgium", "🇧🇪"),
        Country("DE", "Germany", "🇩🇪"),
        Country("NL", "Netherlands", "🇳🇱"),
        Country("FR", "France", "🇫🇷"),
        Country("PL", "Poland", "🇵🇱"),
        Country("CZ", "Czechia", "🇨🇿"),
        Country("AT", "Austria", "🇦🇹"),
        Country("SK", "Slovakia", "🇸🇰"),
        Country("HU", "Hungary", "🇭🇺"),
        Country("SI", "Slovenia", "🇸🇮"),
        Country("HR", "Croatia", "🇭🇷"),
        Country("RO", "Romania", "🇷🇴"),
        Country("BG", "Bulgaria", "🇧🇬"),
        Country("RS", "Serbia", "🇷🇸"),
        Country("UA", "Ukraine", "🇺🇦"),
        Country("LT", "Lithuania", "🇱🇹"),
        Country("LV", "Latvia", "🇱🇻"),
        Country("EE", "Estonia", "🇪🇪"),
        Country("CH", "Switzerland", "🇨🇭"),
        Country("LU", "Luxembourg", "🇱🇺"),
    )
}

# "DE 68219" or "DE-68219"
POSTCODE_PREFIX_PATTERN = re.compile(r"\b([A-Z]{2})[\s-]\d")


def get_country_by_code(code: str) -> Optional[Country]:
    return COUNTRIES.get(code.upper())


def get_country_name(code: str) -> str:
    country = get_country_by_code(code)
    return country.name if country else ""


def get_country_emoji(code: str) -> str:
    country = get_country_by_code(code)
    return country.flag if country else ""


def extract_country_code(address: str) -> Optional[str]:
    """
    Find the country code in an address.

    The code in front of a postcode wins. Otherwise a standalone
    upper-case two-letter word that is a known code is used, so "de" in
    "Rue de la Gare" is not Germany.

    Args:
        address: Address text, possibly several lines joined by ", "

    Returns:
        Two-letter code, or None
    """
    match = POSTCODE_PREFIX_PATTERN.search(address)
    if match and match.group(1) in COUNTRIES:
        return match.group(1)

    for word in address.split():
        cleaned = word.strip(",.")
        if len(cleaned) == 2 and cleaned.isupper() and cleaned in COUNTRIES:
            return cleaned

    return None


def extract_country(address: str) -> Optional[Country]:
    """Country of an address, or None if no known code is found."""
    code = extract_country_code(address)
    if code is None:
        return None
    return COUNTRIES[code]
