"""
Trip Dates CLI

A CLI tool for normalizing and checking trip dates.

Usage:
    python -m tripdates.cli <trips.csv>    # Process a CSV of trips
    python -m tripdates.cli                # Interactive mode
"""

import logging
import sys
from pathlib import Path
from typing import Dict

import pandas as pd

from tripdates.config import Config
from tripdates.formatting.display import format_date_it, format_date_range_it
from tripdates.normalization.date_normalizer import TripDateNormalizer
from tripdates.pipeline.trip_pipeline import process_trip_dates
from tripdates.validation.date_range import calculate_trip_days, is_valid_date_range

# Configure logging for CLI
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format=Config.LOG_FORMAT,
    datefmt=Config.LOG_DATE_FORMAT
)
logger = logging.getLogger(__name__)


def compare_with_ground_truth(clean_df: pd.DataFrame, ground_truth_csv_path: Path) -> Dict:
    """
    Compare normalized dates with the expected ones written by the generator.

    Rows are matched on original_row_index. A row counts as correct when
    both dates equal the expected canonical strings (empty when the input was
    meant to be rejected).
    """
    try:
        gt_df = pd.read_csv(ground_truth_csv_path, dtype=str).fillna("")
        gt_df['row_index'] = gt_df['row_index'].astype(int)

        merged_df = clean_df.merge(
            gt_df,
            left_on='original_row_index',
            right_on='row_index',
            how='inner'
        )

        start_matches = int((merged_df['start_date'] == merged_df['expected_start']).sum())
        end_matches = int((merged_df['end_date'] == merged_df['expected_end']).sum())
        total = len(merged_df)

        return {
            'total': total,
            'start_matches': start_matches,
            'end_matches': end_matches,
            'accuracy': ((start_matches + end_matches) / (2 * total)) * 100 if total > 0 else 0.0
        }

    except Exception as e:
        logger.error(f"Error comparing with ground truth: {e}", exc_info=True)
        return {'total': 0, 'start_matches': 0, 'end_matches': 0, 'accuracy': 0.0, 'error': str(e)}


def display_accuracy_metrics(metrics: Dict):
    """Display accuracy metrics comparing pipeline output with ground truth"""
    if 'error' in metrics:
        print(f"\nWarning: Could not calculate accuracy metrics: {metrics['error']}")
        return

    print("\n" + "=" * Config.CLI_MAX_WIDTH)
    print("Accuracy Metrics (vs Ground Truth)")
    print("=" * Config.CLI_MAX_WIDTH)
    print(f"  Departure dates: {metrics['start_matches']}/{metrics['total']}")
    print(f"  Return dates:    {metrics['end_matches']}/{metrics['total']}")
    print(f"  Accuracy:        {metrics['accuracy']:.2f}%")
    print("=" * Config.CLI_MAX_WIDTH + "\n")


def display_results(df: pd.DataFrame, metadata: Dict):
    """Display processing results"""
    print("\n" + "=" * Config.CLI_MAX_WIDTH)
    print("PROCESSING RESULTS")
    print("=" * Config.CLI_MAX_WIDTH)
    print(f"Total trips: {metadata.get('total_rows', len(df))}")
    print(f"Processing time: {metadata.get('processing_time_seconds', 0):.2f} seconds")
    print(f"Valid ranges: {metadata.get('valid_ranges', 0)}")
    print(f"Invalid ranges: {metadata.get('invalid_ranges', 0)}")
    print(f"Average trip length: {metadata.get('average_trip_days', 0):.1f} days")

    errors = metadata.get('validation_errors', [])
    if errors:
        print(f"\nValidation issues (first 10 of {len(errors)}):")
        print("-" * Config.CLI_MAX_WIDTH)
        for error in errors[:10]:
            print(f"  {error}")

    print("\nSample Trips (first 10):")
    print("-" * Config.CLI_MAX_WIDTH)
    print(df.head(10).to_string(index=False))


def process_file(csv_path: str) -> bool:
    """
    Process a trip CSV and save the clean output.

    Returns:
        True if successful, False otherwise
    """
    try:
        df, metadata = process_trip_dates(csv_path)
        display_results(df, metadata)

        output_path = Config.PROCESSED_DATA_DIR / "clean_trips.csv"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        print(f"\nResults saved to: {output_path}")
        return True

    except Exception as e:
        logger.error(f"Error processing {csv_path}: {e}", exc_info=True)
        print(f"\nError: Failed to process {csv_path}: {e}")
        return False


def generate_and_process(num_trips: int) -> bool:
    """
    Generate random test trips and process them.

    Returns:
        True if successful, False otherwise
    """
    # scripts/ is only importable from a source checkout
    from scripts.generate_trip_dates import MessyTripGenerator

    try:
        generator = MessyTripGenerator(num_trips=num_trips)
        messy_csv_path, ground_truth_path = generator.generate_csv()

        df, metadata = process_trip_dates(str(messy_csv_path))
        display_results(df, metadata)
        display_accuracy_metrics(compare_with_ground_truth(df, ground_truth_path))
        return True

    except Exception as e:
        logger.error(f"Error generating/processing data: {e}", exc_info=True)
        print(f"\nError: Failed to generate or process data: {e}")
        return False


def describe_date(raw: str, normalizer: TripDateNormalizer) -> str:
    """One-line summary of how a raw date normalizes"""
    normalized = normalizer.normalize_date(raw)
    if normalized is None:
        return f"'{raw}' is not a usable trip date"
    return f"'{raw}' -> {normalized} ({format_date_it(normalized)})"


def describe_range(start: str, end: str, normalizer: TripDateNormalizer) -> str:
    """One-line summary of a departure/return pair"""
    start_norm = normalizer.normalize_date(start)
    end_norm = normalizer.normalize_date(end)
    if not start_norm or not end_norm:
        return "Both dates must be valid trip dates"
    if not is_valid_date_range(start_norm, end_norm):
        return "Return date must be after departure date"
    days = calculate_trip_days(start_norm, end_norm)
    return f"{format_date_range_it(start_norm, end_norm)}: {days} days"


def interactive_loop():
    """Menu-driven mode"""
    normalizer = TripDateNormalizer()

    print("\n" + "=" * Config.CLI_MAX_WIDTH)
    print("Trip Dates")
    print("=" * Config.CLI_MAX_WIDTH)
    print("Interactive Mode")
    print("-" * Config.CLI_MAX_WIDTH)

    while True:
        print("\nOptions:")
        print("  0. Exit")
        print("  1. Normalize a date")
        print("  2. Check a trip range")
        print("  3. Process a CSV file")
        print("  4. Generate and process sample trips")
        print("  5. Show configuration")

        try:
            choice = input("\nEnter your choice: ").strip()

            if choice == "0":
                print("\nExiting. Goodbye!")
                break
            elif choice == "1":
                print(describe_date(input("Date: "), normalizer))
            elif choice == "2":
                print(describe_range(input("Departure: "), input("Return: "), normalizer))
            elif choice == "3":
                if not process_file(input("CSV path: ").strip()):
                    print("Error: Processing failed. Please try again.")
            elif choice == "4":
                try:
                    num_trips = int(input("Enter number of trips to generate: ").strip())
                    if num_trips <= 0:
                        print("Error: Number of trips must be positive")
                        continue
                    if not generate_and_process(num_trips):
                        print("Error: Processing failed. Please try again.")
                except ValueError:
                    print("Error: Invalid number. Please enter a positive integer.")
            elif choice == "5":
                Config.print_config_summary()
            else:
                print("Error: Invalid choice. Please enter a number from 0 to 5.")

        except KeyboardInterrupt:
            print("\n\nInterrupted by user. Exiting...")
            break
        except Exception as e:
            logger.error(f"Unexpected error: {e}", exc_info=True)
            print(f"Error: {e}. Please try again.")


def main():
    """Main entry point for CLI"""
    Config.ensure_directories()

    if len(sys.argv) > 1:
        try:
            success = process_file(sys.argv[1])
        except KeyboardInterrupt:
            print("\n\nInterrupted by user. Shutting down...")
            sys.exit(1)
        sys.exit(0 if success else 1)

    interactive_loop()


if __name__ == '__main__':
    main()
