"""
Trip record validation module.

Validates trip records for:
- Missing departure or return dates
- Unrecognized date shapes
- Invalid calendar dates and implausible years
- Zero-length or inverted date ranges

Flags issues without stopping processing
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from tripdates.normalization.date_parser import parse_trip_date_with_reason
from tripdates.normalization.day_count import to_day_count

logger = logging.getLogger(__name__)

DATE_FIELDS = ['start_date', 'end_date']


def _clean_value(value: Any) -> str:
    """Turn None, NaN (from pandas) and non-string cells into a stripped string"""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


class TripDateValidator:
    """Validates trip date records"""

    def __init__(self, today: Optional[date] = None):
        """
        Initialize trip validator.

        Args:
            today: Reference date for DD/MM inputs, defaults to the local date
        """
        self.today = today

    def validate_date(self, date_str: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a single trip date.

        Args:
            date_str: Date string to validate

        Returns:
            Tuple of (is_valid, issue_description)
        """
        _, issue = parse_trip_date_with_reason(_clean_value(date_str), self.today)
        return (issue is None, issue)

    def validate_range(self, start_date: str, end_date: str) -> Tuple[bool, List[str]]:
        """
        Validate a departure/return pair.

        Returns:
            Tuple of (is_valid, issues) where issues look like
            "start_date:invalid_day" or "range:inverted_range"
        """
        issues = []

        start, start_issue = parse_trip_date_with_reason(_clean_value(start_date), self.today)
        if start_issue:
            issues.append(f"start_date:{start_issue}")

        end, end_issue = parse_trip_date_with_reason(_clean_value(end_date), self.today)
        if end_issue:
            issues.append(f"end_date:{end_issue}")

        if start and end:
            span = to_day_count(end) - to_day_count(start)
            if span == 0:
                issues.append("range:empty_range")
            elif span < 0:
                issues.append("range:inverted_range")

        return (not issues, issues)

    def validate_trip(self, trip: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate a complete trip record.

        A record with issues is still processed (graceful degradation); only
        a missing date makes it critical.

        Args:
            trip: Dict with keys 'start_date' and 'end_date'

        Returns:
            Tuple of (has_critical_issues, list_of_all_issues)
        """
        _, issues = self.validate_range(trip.get('start_date'), trip.get('end_date'))
        critical = any(issue.endswith(":missing_date") for issue in issues)

        if issues:
            logger.debug(f"Trip validation issues: {issues}")

        return (critical, issues)

    def validate_batch(self, trips: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate a batch of trip records.

        Args:
            trips: List of trip dicts

        Returns:
            Dict with validation summary:
            {
                'total': int,
                'valid': int,
                'with_issues': int,
                'critical': int,
                'issues_by_type': dict,
                'issues_by_index': dict,
                'critical_indices': list
            }
        """
        total = len(trips)
        valid_count = 0
        with_issues_count = 0
        critical_count = 0
        critical_indices = []
        issues_by_type = {}
        issues_by_index = {}

        for idx, trip in enumerate(trips):
            has_critical, issues = self.validate_trip(trip)

            if not issues:
                valid_count += 1
            else:
                with_issues_count += 1
                issues_by_index[idx] = issues
                for issue in issues:
                    issues_by_type[issue] = issues_by_type.get(issue, 0) + 1

            if has_critical:
                critical_count += 1
                critical_indices.append(idx)

        summary = {
            'total': total,
            'valid': valid_count,
            'with_issues': with_issues_count,
            'critical': critical_count,
            'issues_by_type': issues_by_type,
            'issues_by_index': issues_by_index,
            'critical_indices': critical_indices
        }

        logger.info(f"Batch validation: {valid_count}/{total} fully valid, "
                    f"{with_issues_count} with issues, {critical_count} critical")

        return summary

    def check_completeness(self, trip: Dict[str, Any]) -> float:
        """
        Fraction of date fields present in a trip record.

        Returns:
            Float between 0.0 and 1.0
        """
        present = sum(1 for field in DATE_FIELDS if _clean_value(trip.get(field)))
        return present / len(DATE_FIELDS)


# Global instance (singleton)
_trip_validator_instance = None


def get_trip_validator() -> TripDateValidator:
    """Get global TripDateValidator instance"""
    global _trip_validator_instance
    if _trip_validator_instance is None:
        _trip_validator_instance = TripDateValidator()
    return _trip_validator_instance
