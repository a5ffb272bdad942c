"""
Trip date processing pipeline.

Ingests a CSV of trip requests, validates it, normalizes the dates and
returns a clean DataFrame ready for the itinerary and checkout pages.

1. Ingest CSV (start_date, end_date and optionally origin, destination, adults;
   origin and destination may be city names or airport codes)
2. Validate each row and note issues
3. Normalize dates (strict shapes first, free-text fallback)
4. Derive trip length, range validity, display phrase and booking link
5. Return clean DataFrame and processing metadata
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional, Tuple

import pandas as pd

from tripdates.formatting.aviasales import build_aviasales_url, get_city_iata
from tripdates.formatting.display import format_date_range_it
from tripdates.normalization.date_normalizer import TripDateNormalizer
from tripdates.validation.date_range import calculate_trip_days, is_valid_date_range
from tripdates.validation.trip_validator import get_trip_validator

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['start_date', 'end_date']


class TripDatePipeline:
    """
    Pipeline for cleaning trip dates in bulk.

    Rows with unusable dates are kept with empty normalized values so the
    output lines up with the input row by row.
    """

    def __init__(self, normalizer: Optional[TripDateNormalizer] = None):
        """Initialize pipeline with all components"""
        self.validator = get_trip_validator()
        self.normalizer = normalizer or TripDateNormalizer()

        logger.info("Pipeline initialized")

    def process_csv(self, csv_path: Path) -> Tuple[pd.DataFrame, Dict]:
        """
        Process a CSV file through the complete pipeline.

        Args:
            csv_path: Path to trip CSV file

        Returns:
            Tuple of (clean_dataframe, metadata_dict)
        """
        start_time = time.time()
        metadata = {
            'input_file': str(csv_path),
            'total_rows': 0,
            'valid_ranges': 0,
            'invalid_ranges': 0,
            'validation_errors': [],
            'average_trip_days': 0.0,
            'processing_time_seconds': 0.0
        }

        logger.info(f"Processing CSV: {csv_path}")

        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        try:
            df = pd.read_csv(csv_path, dtype=str)
        except Exception as e:
            raise ValueError(f"Failed to read CSV file: {e}")

        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns: {missing_columns}")

        df = df.fillna("")
        df['original_row_index'] = df.index

        metadata['total_rows'] = len(df)
        logger.info(f"Loaded {len(df)} rows from CSV")

        # validation on the raw values
        logger.info("Starting trip validation")
        summary = self.validator.validate_batch(df[REQUIRED_COLUMNS].to_dict('records'))
        metadata['validation_errors'].extend([f"Row {idx}: {', '.join(issues)}"
                                              for idx, issues in summary['issues_by_index'].items()])
        logger.info(f"Trip validation complete: {summary['with_issues']} rows with issues")

        # date normalization
        logger.info("Starting date normalization")
        df['start_date'] = df['start_date'].apply(self.normalizer.normalize_date)
        df['end_date'] = df['end_date'].apply(self.normalizer.normalize_date)
        df = df.fillna("")
        logger.info("Date normalization complete")

        pairs = list(zip(df['start_date'], df['end_date']))
        df['trip_days'] = pd.Series(
            [calculate_trip_days(start, end) for start, end in pairs], index=df.index, dtype=int
        )
        df['valid_range'] = pd.Series(
            [is_valid_date_range(start, end) for start, end in pairs], index=df.index, dtype=bool
        )
        df['display_range'] = [
            format_date_range_it(start, end) if valid else ""
            for (start, end), valid in zip(pairs, df['valid_range'])
        ]

        output_columns = ['start_date', 'end_date', 'trip_days', 'valid_range', 'display_range']

        if 'origin' in df.columns and 'destination' in df.columns:
            df['aviasales_url'] = [self._booking_link(row) for _, row in df.iterrows()]
            output_columns.append('aviasales_url')

        clean_df = df[output_columns + ['original_row_index']].copy()

        valid_mask = clean_df['valid_range']
        metadata['valid_ranges'] = int(valid_mask.sum())
        metadata['invalid_ranges'] = int((~valid_mask).sum())
        if metadata['valid_ranges']:
            metadata['average_trip_days'] = float(clean_df.loc[valid_mask, 'trip_days'].mean())

        metadata['processing_time_seconds'] = time.time() - start_time
        logger.info(f"Pipeline complete in {metadata['processing_time_seconds']:.2f}s: "
                    f"{metadata['valid_ranges']}/{metadata['total_rows']} valid ranges")

        return clean_df, metadata

    @staticmethod
    def _booking_link(row: pd.Series) -> str:
        """Aviasales link for one row, "" when it cannot be built"""
        if not row['valid_range']:
            return ""

        adults_raw = str(row.get('adults', "") or "").strip()
        adults = int(adults_raw) if adults_raw.isdigit() and int(adults_raw) > 0 else 1

        url = build_aviasales_url(
            get_city_iata(row['origin']),
            get_city_iata(row['destination']),
            row['start_date'],
            row['end_date'],
            adults=adults
        )
        return url or ""


# Helper function for CLI
def process_trip_dates(csv_path: str) -> Tuple[pd.DataFrame, Dict]:
    """
    Helper function to process a CSV file.

    Args:
        csv_path: Path to CSV file (string)

    Returns:
        Tuple of (clean_dataframe, metadata)
    """
    pipeline = TripDatePipeline()
    return pipeline.process_csv(Path(csv_path))
