"""
Tests for the trip date CSV pipeline, the sample generator and the
ground-truth comparison used by the CLI.
"""

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from scripts.generate_trip_dates import MessyTripGenerator
from tripdates.cli import compare_with_ground_truth
from tripdates.normalization.date_normalizer import TripDateNormalizer
from tripdates.pipeline.trip_pipeline import TripDatePipeline, process_trip_dates

TRIPS_CSV = """start_date,end_date,origin,destination,adults
2026-01-20,2026-01-22,FCO,BCN,4
20/01/2026,25-01-2026,MXP,IBZ,
2026-01-22,2026-01-20,NAP,PRG,2
garbage,2026-01-20,FCO,BCN,3
15 giugno 2026,18 giugno 2026,VCE,AMS,6
,2026-02-01,FCO,BCN,2
"""


@pytest.fixture
def trips_csv(tmp_path: Path) -> Path:
    path = tmp_path / "trips.csv"
    path.write_text(TRIPS_CSV, encoding="utf-8")
    return path


class TestTripDatePipeline:
    """Test suite for TripDatePipeline"""

    def test_normalized_output(self, trips_csv):
        df, metadata = process_trip_dates(str(trips_csv))

        assert df['start_date'].tolist() == [
            "2026-01-20", "2026-01-20", "2026-01-22", "", "2026-06-15", ""
        ]
        assert df['end_date'].tolist() == [
            "2026-01-22", "2026-01-25", "2026-01-20", "2026-01-20", "2026-06-18", "2026-02-01"
        ]
        assert df['trip_days'].tolist() == [2, 5, 0, 0, 3, 0]
        assert df['valid_range'].tolist() == [True, True, False, False, True, False]
        assert df['display_range'].tolist() == [
            "20-22 Gennaio 2026", "20-25 Gennaio 2026", "", "", "15-18 Giugno 2026", ""
        ]
        assert df['original_row_index'].tolist() == [0, 1, 2, 3, 4, 5]

    def test_booking_links(self, trips_csv):
        df, _ = process_trip_dates(str(trips_csv))
        urls = df['aviasales_url'].tolist()

        assert "/search/FCO2001BCN22014?" in urls[0]
        assert "/search/MXP2001IBZ25011?" in urls[1]
        assert urls[2] == ""
        assert urls[3] == ""
        assert "/search/VCE1506AMS18066?" in urls[4]

    def test_metadata(self, trips_csv):
        _, metadata = process_trip_dates(str(trips_csv))

        assert metadata['total_rows'] == 6
        assert metadata['valid_ranges'] == 3
        assert metadata['invalid_ranges'] == 3
        assert metadata['average_trip_days'] == pytest.approx(10 / 3)
        assert len(metadata['validation_errors']) == 4
        assert metadata['validation_errors'][0] == "Row 2: range:inverted_range"
        assert metadata['processing_time_seconds'] >= 0

    def test_strict_normalizer_drops_free_text(self, trips_csv):
        pipeline = TripDatePipeline(TripDateNormalizer(allow_free_text=False))
        df, _ = pipeline.process_csv(trips_csv)
        assert df['start_date'].tolist()[4] == ""

    def test_calendar_invalid_rows_stay_empty(self, tmp_path):
        path = tmp_path / "invalid.csv"
        path.write_text(
            "start_date,end_date,origin,destination,adults\n"
            "2026-13-01,2026-01-20,FCO,BCN,2\n"
            "2026-02,2026-02-10,FCO,BCN,2\n",
            encoding="utf-8"
        )

        df, metadata = process_trip_dates(str(path))

        assert df['start_date'].tolist() == ["", ""]
        assert df['valid_range'].tolist() == [False, False]
        assert df['aviasales_url'].tolist() == ["", ""]
        assert metadata['validation_errors'][0].startswith("Row 0: start_date:invalid_month")

    def test_city_names_resolve_to_airports(self, tmp_path):
        path = tmp_path / "cities.csv"
        path.write_text(
            "start_date,end_date,origin,destination,adults\n"
            "2026-01-20,2026-01-22,Roma,Barcellona,4\n"
            "2026-01-20,2026-01-22,   ,Barcellona,4\n",
            encoding="utf-8"
        )

        df, _ = process_trip_dates(str(path))
        urls = df['aviasales_url'].tolist()

        assert "/search/FCO2001BCN22014?" in urls[0]
        assert urls[1] == ""

    def test_without_route_columns(self, tmp_path):
        path = tmp_path / "dates_only.csv"
        path.write_text("start_date,end_date\n2026-01-10,2026-01-15\n", encoding="utf-8")

        df, metadata = process_trip_dates(str(path))

        assert 'aviasales_url' not in df.columns
        assert df['display_range'].tolist() == ["10-15 Gennaio 2026"]
        assert metadata['validation_errors'] == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            process_trip_dates(str(tmp_path / "missing.csv"))

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("departure,return\n2026-01-10,2026-01-15\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Missing required columns"):
            process_trip_dates(str(path))


class TestSampleData:
    """Generated sample data and ground-truth comparison"""

    @pytest.fixture
    def generated(self, tmp_path):
        generator = MessyTripGenerator(num_trips=50, output_dir=tmp_path, seed=7, today=date(2026, 1, 1))
        return generator.generate_csv()

    def test_generator_writes_both_files(self, generated):
        messy_path, truth_path = generated

        messy_df = pd.read_csv(messy_path, dtype=str)
        truth_df = pd.read_csv(truth_path, dtype=str)

        assert len(messy_df) == 50
        assert len(truth_df) == 50
        assert list(messy_df.columns) == ["start_date", "end_date", "origin", "destination", "adults"]

    def test_strict_pipeline_matches_ground_truth(self, generated):
        messy_path, truth_path = generated

        pipeline = TripDatePipeline(TripDateNormalizer(allow_free_text=False))
        df, _ = pipeline.process_csv(messy_path)
        metrics = compare_with_ground_truth(df, truth_path)

        assert metrics['total'] == 50
        assert metrics['accuracy'] == pytest.approx(100.0)

    def test_same_seed_same_data(self, tmp_path):
        first = MessyTripGenerator(num_trips=10, output_dir=tmp_path / "a", seed=3, today=date(2026, 1, 1))
        second = MessyTripGenerator(num_trips=10, output_dir=tmp_path / "b", seed=3, today=date(2026, 1, 1))

        first_path, _ = first.generate_csv()
        second_path, _ = second.generate_csv()

        assert first_path.read_text() == second_path.read_text()

    def test_comparison_error_is_reported(self, tmp_path):
        metrics = compare_with_ground_truth(pd.DataFrame(), tmp_path / "missing.csv")
        assert 'error' in metrics
        assert metrics['accuracy'] == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
