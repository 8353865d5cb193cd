from datetime import date, datetime
from decimal import Decimal

import pytest

from fintracker.errors import MalformedInputError
from fintracker.models import (
    Budget,
    FinancialData,
    SavingGoal,
    Transaction,
    new_budget,
    new_saving_goal,
    parse_amount,
    parse_date,
)


def test_weekly_budget_ends_seven_days_later():
    b = new_budget("Food", "weekly", date(2024, 1, 1), Decimal("100"))
    assert b.end_date == date(2024, 1, 8)
    assert b.period_kind == "weekly"


def test_monthly_budget_ends_one_calendar_month_later():
    b = new_budget("Rent", "Monthly", date(2024, 1, 15), Decimal("1000"))
    assert b.end_date == date(2024, 2, 15)
    assert b.period_kind == "monthly"


def test_monthly_budget_clamps_to_month_end():
    assert new_budget("Food", "monthly", date(2024, 1, 31), Decimal("1")).end_date == date(2024, 2, 29)
    assert new_budget("Food", "monthly", date(2023, 1, 31), Decimal("1")).end_date == date(2023, 2, 28)
    assert new_budget("Food", "monthly", date(2024, 12, 10), Decimal("1")).end_date == date(2025, 1, 10)


def test_unknown_budget_period_rejected():
    with pytest.raises(MalformedInputError):
        new_budget("Food", "yearly", date(2024, 1, 1), Decimal("1"))


def test_saving_goal_window_must_not_be_reversed():
    goal = new_saving_goal("Car", Decimal("600"), date(2024, 1, 1), date(2024, 1, 1))
    assert goal.end_date == goal.start_date

    with pytest.raises(MalformedInputError):
        new_saving_goal("Car", Decimal("600"), date(2024, 2, 1), date(2024, 1, 1))


def test_parse_date_formats():
    assert parse_date("2024-01-30") == date(2024, 1, 30)
    assert parse_date(" 2024/01/30 ") == date(2024, 1, 30)
    assert parse_date("30.01.2024") == date(2024, 1, 30)
    assert parse_date("30/01/2024") == date(2024, 1, 30)
    assert parse_date("2024-01-30T00:00:00") == date(2024, 1, 30)
    assert parse_date(datetime(2024, 1, 30, 12, 0)) == date(2024, 1, 30)
    assert parse_date(date(2024, 1, 30)) == date(2024, 1, 30)


@pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01", None])
def test_parse_date_rejects_garbage(value):
    with pytest.raises(MalformedInputError):
        parse_date(value)


def test_parse_amount_keeps_decimal_precision():
    assert parse_amount("0.10") == Decimal("0.10")
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount(" -15 ") == Decimal("-15")
    assert parse_amount(7) == Decimal(7)
    assert parse_amount(0.1) == Decimal("0.1")


@pytest.mark.parametrize("value", ["", "abc", "NaN", None, True])
def test_parse_amount_rejects_garbage(value):
    with pytest.raises(MalformedInputError):
        parse_amount(value)


def test_transaction_dict_uses_stored_keys():
    t = Transaction(date(2024, 1, 10), "Food", Decimal("15.00"), "expense")
    assert t.to_dict() == {"date": "2024-01-10", "category": "Food", "amount": "15.00", "type": "expense"}


def test_from_dict_is_case_insensitive():
    b = Budget.from_dict({
        "Category": "Food", "Type": "monthly", "StartDate": "2024-01-01T00:00:00",
        "EndDate": "2024-02-01T00:00:00", "Amount": Decimal("300.5"),
    })
    assert b == Budget("Food", "monthly", date(2024, 1, 1), date(2024, 2, 1), Decimal("300.5"))


def test_from_dict_missing_field():
    with pytest.raises(MalformedInputError):
        SavingGoal.from_dict({"name": "Car", "startDate": "2024-01-01", "endDate": "2024-03-01"})


def test_financial_data_dict_round_trip():
    data = FinancialData(
        transactions=[
            Transaction(date(2024, 1, 10), "Food", Decimal("15.00"), "expense"),
            Transaction(date(2024, 1, 11), "Car", Decimal("100.005"), "income"),
        ],
        budgets=[Budget("Food", "monthly", date(2024, 1, 1), date(2024, 2, 1), Decimal("300"))],
        saving_goals=[SavingGoal("Car", Decimal("6000"), date(2024, 1, 1), date(2024, 7, 1))],
    )
    document = data.to_dict()

    assert set(document) == {"transactions", "budgets", "savingGoals"}
    assert FinancialData.from_dict(document) == data


def test_financial_data_missing_arrays_are_empty():
    assert FinancialData.from_dict({}) == FinancialData()
