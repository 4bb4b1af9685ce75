"""
Tests for month helpers.
"""
from datetime import datetime
import pytest
from budgetly.core.utils import current_month, month_bounds, format_error
from budgetly.services.budget_service import low_budget_message


def test_month_bounds():
    assert month_bounds("2024-05") == (datetime(2024, 5, 1), datetime(2024, 6, 1))
    assert month_bounds("2024-12") == (datetime(2024, 12, 1), datetime(2025, 1, 1))


@pytest.mark.parametrize("month", ["2024-13", "2024-00", "24-05", "2024/05", ""])
def test_month_bounds_invalid(month):
    with pytest.raises(ValueError):
        month_bounds(month)


def test_current_month():
    assert current_month(datetime(2024, 2, 29, 23, 59)) == "2024-02"


def test_format_error():
    assert format_error("oops") == {"error": "oops"}
    assert format_error("oops", [1]) == {"error": "oops", "details": [1]}


def test_low_budget_message():
    assert low_budget_message(0.2) == "Warning: You have less than 20% of your budget remaining"
    assert low_budget_message(0.15) == "Warning: You have less than 15% of your budget remaining"
