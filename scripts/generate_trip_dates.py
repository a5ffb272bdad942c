#!/usr/bin/env python3
"""
Generate messy trip date data for testing.

This script creates a CSV file with intentionally inconsistent formatting:
- ISO and European day-first dates mixed in the same column
- Stray whitespace around values
- Broken rows (empty, unparseable, impossible calendar dates, old years)

Usage:
    python scripts/generate_trip_dates.py [num_trips]

Output:
    data/raw/messy_trips.csv (start_date, end_date, origin, destination, adults)
    data/ground_truth/trips_ground_truth.csv (expected canonical dates)
"""

import random
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Tuple

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd
from tripdates.config import Config


class MessyTripGenerator:
    """Generates intentionally messy trip date data for testing"""

    def __init__(
        self,
        num_trips: Optional[int] = None,
        output_dir: Optional[Path] = None,
        seed: Optional[int] = None,
        today: Optional[date] = None
    ):
        """
        Initialize generator

        Args:
            num_trips: Number of trips to generate
            output_dir: Directory for both CSVs, defaults to the data directories
            seed: Random seed for reproducible output
            today: First possible departure is a week after this date
        """
        self.num_trips = num_trips if num_trips else Config.NUM_TEST_TRIPS
        self.rng = random.Random(seed)
        self.today = today or date.today()

        if output_dir:
            self.output_path = Path(output_dir) / "messy_trips.csv"
            self.ground_truth_path = Path(output_dir) / "trips_ground_truth.csv"
        else:
            self.output_path = Config.RAW_DATA_DIR / "messy_trips.csv"
            self.ground_truth_path = Config.GROUND_TRUTH_DIR / "trips_ground_truth.csv"

    def format_messy(self, value: date) -> str:
        """Render a date in a random accepted shape, sometimes padded"""
        date_str = value.strftime(self.rng.choice(Config.SAMPLE_DATE_FORMATS))

        if self.rng.random() < 0.1:  # 10% chance
            date_str = self.rng.choice([
                f" {date_str} ",
                f"{date_str}  ",
                f"  {date_str}",
            ])

        return date_str

    def generate_dates(self) -> Tuple[str, str, str, str]:
        """
        Generate one departure/return pair.

        Returns:
            Tuple of (messy_start, messy_end, expected_start, expected_end);
            expected values are "" for rows that must not normalize
        """
        start = self.today + timedelta(days=self.rng.randint(7, 300))
        end = start + timedelta(days=self.rng.randint(1, 7))

        messy_start, expected_start = self.format_messy(start), start.isoformat()
        messy_end, expected_end = self.format_messy(end), end.isoformat()

        # 10% broken rows
        if self.rng.random() < 0.1:
            broken = self.rng.choice(Config.SAMPLE_INVALID_DATES)
            if self.rng.random() < 0.5:
                messy_start, expected_start = broken, ""
            else:
                messy_end, expected_end = broken, ""

        return messy_start, messy_end, expected_start, expected_end

    def generate_csv(self) -> Tuple[Path, Path]:
        """
        Generate both messy CSV and ground truth CSV.

        Returns:
            Tuple of (messy_csv_path, ground_truth_csv_path)
        """
        print(f"Generating {self.num_trips} messy trips...")

        trips = []
        ground_truths = []

        for i in range(self.num_trips):
            messy_start, messy_end, expected_start, expected_end = self.generate_dates()
            origin, destination = self.rng.choice(Config.SAMPLE_ROUTES)

            trips.append({
                "start_date": messy_start,
                "end_date": messy_end,
                "origin": origin,
                "destination": destination,
                "adults": self.rng.randint(2, 12)
            })
            ground_truths.append({
                "row_index": i,
                "expected_start": expected_start,
                "expected_end": expected_end
            })

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.ground_truth_path.parent.mkdir(parents=True, exist_ok=True)

        pd.DataFrame(trips).to_csv(self.output_path, index=False)
        pd.DataFrame(ground_truths).to_csv(self.ground_truth_path, index=False)

        broken_rows = sum(1 for gt in ground_truths if not gt["expected_start"] or not gt["expected_end"])
        print(f"   Generated messy data: {self.output_path}")
        print(f"   Generated ground truth: {self.ground_truth_path}")
        print(f"   Broken rows: {broken_rows}")

        return self.output_path, self.ground_truth_path


def main():
    """Main entry point"""
    print("=" * 70)
    print("Messy Trip Date Generator")
    print("=" * 70)

    Config.ensure_directories()

    num_trips = int(sys.argv[1]) if len(sys.argv) > 1 else None
    generator = MessyTripGenerator(num_trips=num_trips)
    messy_csv_path, ground_truth_path = generator.generate_csv()

    print("\n" + "=" * 70)
    print(f"  Messy CSV: {messy_csv_path}")
    print(f"  Ground Truth: {ground_truth_path}")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    sys.exit(main())
