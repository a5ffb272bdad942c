"""
Aviasales booking link builder and city to airport code lookup.

Search path format: {ORIGIN}{DD}{MM}{DESTINATION}{DD}{MM}{ADULTS}
e.g. FCO1912BCN22124 for Rome -> Barcelona, 19/12 - 22/12, 4 adults.
Dates are read straight from the canonical string, never through datetime.
"""

import logging
from typing import Optional

from tripdates.config import Config
from tripdates.normalization.date_parser import is_canonical_date

logger = logging.getLogger(__name__)


def _day_month(date_str: str) -> Optional[str]:
    """DDMM part of the search path, or None for a non-canonical date"""
    if not is_canonical_date(date_str):
        return None
    return f"{date_str[8:10]}{date_str[5:7]}"


def get_city_iata(city: str) -> Optional[str]:
    """
    Resolve a city name to an airport code.

    Known Italian and English city names map through Config.CITY_IATA.
    Anything else falls back to its first three letters, upper-cased, which
    also passes IATA codes through unchanged.

    Returns:
        Airport code, or None for missing or too-short input
    """
    if not city or not isinstance(city, str):
        return None

    normalized = city.strip().lower()
    if normalized in Config.CITY_IATA:
        return Config.CITY_IATA[normalized]

    if len(normalized) < 3:
        return None

    fallback = normalized[:3].upper()
    if len(normalized) > 3:
        logger.info(f"No IATA mapping for '{city.strip()}', using fallback: {fallback}")
    return fallback


def build_aviasales_url(
    origin_iata: str,
    destination_iata: str,
    depart_date: str,
    return_date: Optional[str] = None,
    adults: int = 1,
    marker: Optional[str] = None
) -> Optional[str]:
    """
    Build an Aviasales search URL.

    Args:
        origin_iata: Departure airport code
        destination_iata: Arrival airport code
        depart_date: Departure date (YYYY-MM-DD)
        return_date: Return date (YYYY-MM-DD), None for one-way
        adults: Number of passengers, at least 1
        marker: Partner marker, defaults to Config.AVIASALES_MARKER

    Returns:
        Search URL, or None if the route, passengers or departure date is unusable

    Example:
        >>> build_aviasales_url("FCO", "BCN", "2025-12-19", "2025-12-22", 4)
        'https://www.aviasales.com/search/FCO1912BCN22124?marker=byebi'
    """
    origin = (origin_iata or "").strip().upper()
    destination = (destination_iata or "").strip().upper()
    if not origin or not destination:
        logger.warning("Missing origin or destination IATA code")
        return None

    if not isinstance(adults, int) or adults < 1:
        logger.warning(f"Cannot build Aviasales URL: invalid passenger count {adults!r}")
        return None

    depart = _day_month(depart_date)
    if depart is None:
        logger.warning(f"Cannot build Aviasales URL: invalid depart date '{depart_date}'")
        return None

    search_path = f"{origin}{depart}{destination}"

    if return_date:
        ret = _day_month(return_date)
        if ret is None:
            logger.warning(f"Ignoring invalid return date '{return_date}', building one-way link")
        else:
            search_path += ret

    search_path += str(adults)

    url = f"{Config.AVIASALES_BASE_URL}{search_path}?marker={marker or Config.AVIASALES_MARKER}"
    logger.debug(f"Built Aviasales URL: {url}")
    return url
