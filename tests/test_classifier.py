from fintracker.classifier import is_income, is_expense, is_weekly, is_monthly


def test_income_and_expense_ignore_case():
    assert is_income("income")
    assert is_income("INCOME")
    assert is_expense("Expense")
    assert not is_income("expense")
    assert not is_expense("income")


def test_unrecognized_kind_is_neither():
    for kind in ["salary", "", " income", None, 5]:
        assert not is_income(kind)
        assert not is_expense(kind)


def test_budget_periods():
    assert is_weekly("Weekly")
    assert is_monthly("MONTHLY")
    assert not is_weekly("monthly")
    assert not is_monthly("yearly")
    assert not is_monthly(None)
