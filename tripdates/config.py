"""
Central configuration for the trip dates library and CLI.

This module contains all application settings, paths, and constants.
All other modules import configuration from here to maintain consistency.
"""

import os
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Config:
    """Application configuration and constants"""

    # ==========================================
    # Project Paths
    # ==========================================
    PROJECT_ROOT = Path(__file__).parent.parent
    PACKAGE_DIR = PROJECT_ROOT / "tripdates"
    DATA_DIR = PROJECT_ROOT / "data"
    RAW_DATA_DIR = DATA_DIR / "raw"
    PROCESSED_DATA_DIR = DATA_DIR / "processed"
    GROUND_TRUTH_DIR = DATA_DIR / "ground_truth"
    SCRIPTS_DIR = PROJECT_ROOT / "scripts"
    TESTS_DIR = PROJECT_ROOT / "tests"

    # ==========================================
    # Application Settings
    # ==========================================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")          # DEBUG, INFO, WARNING, ERROR

    # ==========================================
    # Trip Date Policy
    # ==========================================
    # Years outside this window are rejected as implausible trip dates
    MIN_TRIP_YEAR = int(os.getenv("MIN_TRIP_YEAR", "2024"))
    MAX_TRIP_YEAR = int(os.getenv("MAX_TRIP_YEAR", "2100"))

    # Languages handed to dateparser for free-text dates typed in the chat flow
    DATEPARSER_LANGUAGES: List[str] = ["it", "en"]

    # ==========================================
    # Display Settings
    # ==========================================
    DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "it")

    # Indexed by month number - 1
    MONTH_NAMES: Dict[str, Tuple[str, ...]] = {
        "it": (
            "Gennaio", "Febbraio", "Marzo", "Aprile", "Maggio", "Giugno",
            "Luglio", "Agosto", "Settembre", "Ottobre", "Novembre", "Dicembre"
        ),
        "en": (
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December"
        ),
    }

    # ==========================================
    # Aviasales Booking Links
    # ==========================================
    AVIASALES_BASE_URL = "https://www.aviasales.com/search/"
    AVIASALES_MARKER = os.getenv("AVIASALES_MARKER", "byebi")

    # Lower-case city names (Italian and English) to airport codes
    CITY_IATA: Mapping[str, str] = MappingProxyType({
        # Italian airports
        "roma": "FCO", "rome": "FCO",
        "milano": "MXP", "milan": "MXP",
        "napoli": "NAP", "naples": "NAP",
        "venezia": "VCE", "venice": "VCE",
        "firenze": "FLR", "florence": "FLR",
        "bologna": "BLQ",
        "torino": "TRN", "turin": "TRN",
        "palermo": "PMO",
        "catania": "CTA",
        "bari": "BRI",
        "cagliari": "CAG",
        "verona": "VRN",
        "pisa": "PSA",
        "bergamo": "BGY",
        "genova": "GOA", "genoa": "GOA",
        "trieste": "TRS",
        # European destinations
        "barcellona": "BCN", "barcelona": "BCN",
        "ibiza": "IBZ",
        "amsterdam": "AMS",
        "praga": "PRG", "prague": "PRG",
        "budapest": "BUD",
        "berlino": "BER", "berlin": "BER",
        "lisbona": "LIS", "lisbon": "LIS",
        "cracovia": "KRK", "krakow": "KRK",
        "atene": "ATH", "athens": "ATH",
    })

    # ==========================================
    # Test Data Settings
    # ==========================================
    # For scripts/generate_trip_dates.py
    NUM_TEST_TRIPS = int(os.getenv("NUM_TEST_TRIPS", "200"))

    # Shapes mixed into the messy sample data (all accepted by the parser)
    SAMPLE_DATE_FORMATS = [
        "%Y-%m-%d",           # 2026-01-20
        "%d/%m/%Y",           # 20/01/2026
        "%d-%m-%Y",           # 20-01-2026
    ]

    # Strings the sample generator uses for broken rows
    SAMPLE_INVALID_DATES = [
        "",
        "garbage",
        "2026-13-40",
        "31/04/2026",
        "29/02/2027",
        "15/06/1999",
    ]

    # IATA pairs used for sample booking links
    SAMPLE_ROUTES = [
        ("FCO", "BCN"),
        ("MXP", "IBZ"),
        ("NAP", "PRG"),
        ("BLQ", "BUD"),
        ("VCE", "AMS"),
    ]

    # ==========================================
    # Logging Configuration
    # ==========================================
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # Log directory
    LOGS_DIR = PROJECT_ROOT / "logs"

    # ==========================================
    # Output Formatting
    # ==========================================
    CLI_MAX_WIDTH = 100

    # ==========================================
    # Class Methods
    # ==========================================
    @classmethod
    def ensure_directories(cls) -> None:
        """
        Create all necessary directories if they don't exist.

        The CLI calls this at startup; the library functions never touch
        the file system.
        """
        directories = [
            cls.DATA_DIR,
            cls.RAW_DATA_DIR,
            cls.PROCESSED_DATA_DIR,
            cls.GROUND_TRUTH_DIR,
            cls.LOGS_DIR
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def month_names(cls, locale: str) -> Tuple[str, ...]:
        """
        Month names for a locale.

        Returns:
            Tuple of 12 names, or None if the locale is unknown
        """
        return cls.MONTH_NAMES.get(locale)

    @classmethod
    def print_config_summary(cls) -> None:
        """Print configuration summary for debugging"""
        print("=" * 60)
        print("Trip Dates - Configuration Summary")
        print("=" * 60)
        print(f"Accepted years:       {cls.MIN_TRIP_YEAR}-{cls.MAX_TRIP_YEAR}")
        print(f"Default locale:       {cls.DEFAULT_LOCALE}")
        print(f"Free-text languages:  {', '.join(cls.DATEPARSER_LANGUAGES)}")
        print(f"Aviasales marker:     {cls.AVIASALES_MARKER}")
        print(f"Log level:            {cls.LOG_LEVEL}")
        print(f"Data directory:       {cls.DATA_DIR}")
        print("=" * 60)
