"""Tests for the command-line interface."""

import pytest

from ledgerlens.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _invoke


@pytest.fixture
def pdf_file(tmp_path, cgd_pdf):
    path = tmp_path / "cgd.pdf"
    path.write_bytes(cgd_pdf)
    return str(path)


def test_init(invoke):
    result = invoke("init", "--name", "Home")
    assert result.exit_code == 0
    assert "Created workspace 'Home' (ID: 1) with 16 categories" in result.output


def test_init_portuguese(invoke):
    assert invoke("init", "--locale", "pt").exit_code == 0
    result = invoke("category", "list")
    assert "Mercearia" in result.output


def test_banks(invoke):
    result = invoke("banks")
    assert result.exit_code == 0
    assert "novo_banco" in result.output
    assert "cgd" in result.output


def test_upload_and_list(invoke, pdf_file):
    invoke("init")
    result = invoke("upload", pdf_file, "--bank", "cgd", "-v")
    assert result.exit_code == 0
    assert "Transactions: 3" in result.output
    assert "Period: 2024-11-01 to 2024-11-30" in result.output
    assert "COMPRA CONTINENTE LISBOA" in result.output

    result = invoke("upload", pdf_file, "--bank", "cgd")
    assert "Replaced earlier upload" in result.output

    result = invoke("ledger", "list")
    assert "Ledgers (1 of 1)" in result.output

    result = invoke("transaction", "list")
    assert result.exit_code == 0
    assert "Found 3 transaction(s)" in result.output
    assert "-45.20" in result.output
    assert "+1,500.00" in result.output


def test_upload_unsupported_bank(invoke, pdf_file):
    invoke("init")
    result = invoke("upload", pdf_file, "--bank", "nowhere")
    assert result.exit_code == 1
    assert "Error [UNSUPPORTED_BANK]" in result.output


def test_upload_invalid_document(invoke, tmp_path):
    invoke("init")
    path = tmp_path / "notes.pdf"
    path.write_text("just text")
    result = invoke("upload", str(path), "--bank", "cgd")
    assert result.exit_code == 1
    assert "Error [INVALID_DOCUMENT]" in result.output


def test_pattern_commands(invoke):
    invoke("init")
    result = invoke("pattern", "check", "Lidl", "--bank", "cgd")
    assert 'exists in category "Groceries"' in result.output

    result = invoke("pattern", "add", "2", "Lidl", "--bank", "cgd")
    assert result.exit_code == 1
    assert "Error [DUPLICATE_PATTERN]" in result.output

    result = invoke("pattern", "add", "2", "Supermercado", "--bank", "cgd")
    assert result.exit_code == 0
    assert "recategorized 0 transaction(s)" in result.output

    result = invoke("pattern", "quick-add", "2", "Minipreco", "--bank", "cgd")
    assert result.exit_code == 0


def test_category_show(invoke):
    invoke("init")
    result = invoke("category", "show", "2", "--bank", "cgd")
    assert result.exit_code == 0
    assert "Groceries" in result.output
    assert "Continente" in result.output

    result = invoke("category", "show", "999")
    assert result.exit_code == 1
    assert "Error [CATEGORY_NOT_FOUND]" in result.output


def test_transaction_categorize_and_clear(invoke, pdf_file):
    invoke("init")
    invoke("upload", pdf_file, "--bank", "cgd")

    result = invoke("transaction", "categorize", "1", "8")
    assert result.exit_code == 0
    result = invoke("transaction", "list")
    assert "[manual]" in result.output

    result = invoke("transaction", "clear-manual", "1")
    assert result.exit_code == 0
    assert "[manual]" not in invoke("transaction", "list").output

    result = invoke("transaction", "categorize", "999", "8")
    assert "Error [TRANSACTION_NOT_FOUND]" in result.output


def test_transaction_list_filters(invoke, pdf_file):
    invoke("init")
    invoke("upload", pdf_file, "--bank", "cgd")

    result = invoke("transaction", "list", "--direction", "income")
    assert "Found 1 transaction(s)" in result.output
    assert "TRF SALARIO EMPRESA" in result.output

    result = invoke("transaction", "list", "--search", "spotify", "--year", "2024", "--month", "11")
    assert "Found 1 transaction(s)" in result.output
    assert "COMPRA SPOTIFY" in result.output

    result = invoke("transaction", "list", "--year", "2023")
    assert "No transactions found." in result.output

    result = invoke("transaction", "list", "--month", "11")
    assert result.exit_code == 1
    assert "Error [VALIDATION_ERROR]" in result.output


def test_transaction_delete(cli_runner, temp_db, invoke, pdf_file):
    invoke("init")
    invoke("upload", pdf_file, "--bank", "cgd")
    base_args = ["--db-path", temp_db.database_path, "transaction", "delete"]

    result = cli_runner.invoke(cli, [*base_args, "1"], input="n\n")
    assert "Deletion cancelled." in result.output

    result = cli_runner.invoke(cli, [*base_args, "1"], input="y\n")
    assert result.exit_code == 0
    assert "Deleted transaction 1" in result.output
    assert "Found 2 transaction(s)" in invoke("transaction", "list").output

    result = cli_runner.invoke(cli, [*base_args, "1"], input="y\n")
    assert result.exit_code == 1
    assert "Error [TRANSACTION_NOT_FOUND]" in result.output


def test_recurring_commands(invoke):
    invoke("init")
    result = invoke("recurring", "detect")
    assert result.exit_code == 0
    assert "Detected 0 new recurring pattern(s)" in result.output

    result = invoke("recurring", "summary")
    assert "Active patterns: 0" in result.output
    assert "Estimated monthly cost: 0.00" in result.output

    result = invoke("recurring", "deactivate", "5")
    assert result.exit_code == 1
    assert "Error [RECURRING_PATTERN_NOT_FOUND]" in result.output


def test_unexpected_error_is_generic(invoke, monkeypatch):
    from ledgerlens.domain.recurring import RecurringService

    def broken(self, workspace_id):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(RecurringService, "get_summary", broken)
    invoke("init")
    result = invoke("recurring", "summary")
    assert result.exit_code == 1
    assert "Error: internal error" in result.output
    assert "secret internals" not in result.output


def test_log_level_option(invoke):
    result = invoke("--log-level", "DEBUG", "banks")
    assert result.exit_code == 0
    assert "cgd" in result.output


def test_invalid_log_level_rejected(invoke):
    result = invoke("--log-level", "LOUD", "banks")
    assert result.exit_code == 2
