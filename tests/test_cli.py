import json

import pytest

from finance_tool import main


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "data")


def run(data_dir, *args):
    return main(["--data-dir", data_dir, *args])


def stored(data_dir):
    with open(f"{data_dir}/financialData.json", encoding='utf-8') as f:
        return json.load(f)


def test_add_transaction_and_duplicate(data_dir, capsys):
    assert run(data_dir, "add", "2024-01-10", "Food", "15.50", "Expense") == 0
    assert "Transaction added successfully." in capsys.readouterr().out

    # Same date, category and type: kept as the first one
    assert run(data_dir, "add", "2024-01-10", "Food", "99", "expense") == 0
    assert "already exists" in capsys.readouterr().out

    assert stored(data_dir)["transactions"] == [
        {"date": "2024-01-10", "category": "Food", "amount": "15.50", "type": "expense"},
    ]


def test_add_rejects_unknown_type(data_dir, capsys):
    assert run(data_dir, "add", "2024-01-10", "Food", "15", "refund") == 1
    assert "Error:" in capsys.readouterr().out


def test_budget_derives_end_date(data_dir, capsys):
    assert run(data_dir, "budget", "Food", "MONTHLY", "2024-01-31", "300") == 0
    assert "End Date: 2024-02-29" in capsys.readouterr().out

    assert run(data_dir, "budget", "Food", "monthly", "2024-03-01", "500") == 0
    assert "already exists" in capsys.readouterr().out
    assert len(stored(data_dir)["budgets"]) == 1


def test_goal_prints_monthly_savings(data_dir, capsys):
    assert run(data_dir, "goal", "Car", "600", "2024-01-01", "2024-03-01") == 0
    assert "You need to save 300.00 per month" in capsys.readouterr().out


def test_goal_with_reversed_dates_fails(data_dir, capsys):
    assert run(data_dir, "goal", "Car", "600", "2024-03-01", "2024-01-01") == 1
    assert "before start date" in capsys.readouterr().out


def test_import_reports_new_records(tmp_path, data_dir, capsys):
    csv_path = tmp_path / "jan.csv"
    csv_path.write_text("date,category,amount,type\n"
                        "2024-01-01,Food,10,expense\n"
                        "2024-01-15,Food,20,expense\n", encoding='utf-8')

    assert run(data_dir, "import", str(csv_path)) == 0
    assert "Imported 2 new transactions (of 2 parsed)" in capsys.readouterr().out

    assert run(data_dir, "import", str(csv_path)) == 0
    assert "Imported 0 new transactions (of 2 parsed)" in capsys.readouterr().out


def test_import_missing_and_bad_files(tmp_path, data_dir, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('[{"date": "soon", "category": "Food", "amount": 1, "type": "expense"}]', encoding='utf-8')

    assert run(data_dir, "import", str(tmp_path / "missing.csv"), str(bad)) == 1
    out = capsys.readouterr().out
    assert "File not found" in out
    assert "Error processing" in out


def test_views_after_data_entry(tmp_path, data_dir, capsys):
    run(data_dir, "add", "2024-01-10", "Food", "15", "expense")
    run(data_dir, "add", "2024-01-10", "Food", "100", "income")
    run(data_dir, "budget", "Food", "monthly", "2024-01-01", "100")
    capsys.readouterr()

    assert run(data_dir, "transactions", "--category", "Food") == 0
    assert "2024-01-10" in capsys.readouterr().out

    assert run(data_dir, "budgets") == 0
    assert "Budget utilization is around 15.00%." in capsys.readouterr().out

    assert run(data_dir, "analytics") == 0
    assert "Transactions Summary:" in capsys.readouterr().out

    assert run(data_dir, "summary") == 0
    assert "Net: 85.00" in capsys.readouterr().out

    assert run(data_dir, "export", str(tmp_path / "export")) == 0
    assert (tmp_path / "export" / "FinancialReport.json").exists()

    assert run(data_dir, "report", "--format", "csv,json", "--output", str(tmp_path / "reports")) == 0
    assert (tmp_path / "reports" / "financial_report.csv").exists()


def test_zero_limit_budget_surfaces_as_error(data_dir, capsys):
    run(data_dir, "budget", "Food", "weekly", "2024-01-01", "0")
    capsys.readouterr()

    assert run(data_dir, "budgets") == 1
    assert "Budget limit is zero" in capsys.readouterr().out


def test_unknown_report_format(data_dir, capsys):
    assert run(data_dir, "report", "--format", "pdf") == 1
    assert "Unknown report format" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_import_json_with_list_date_reports_error(tmp_path, data_dir, capsys):
    bad = tmp_path / "nested.json"
    bad.write_text('[{"date": ["2024-01-01", "x"], "category": "Food", "amount": 1, "type": "expense"}]',
                   encoding='utf-8')

    assert run(data_dir, "import", str(bad)) == 1
    assert "Error processing" in capsys.readouterr().out
