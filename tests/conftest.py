"""Shared pytest fixtures for ledgerlens tests."""

import io
import os
import tempfile
from decimal import Decimal

import pytest

from ledgerlens.database.factories import create_sqlite_database
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import ParsedTransaction, TransactionDirection
from ledgerlens.domain.recurring import RecurringService
from ledgerlens.domain.transaction import TransactionService
from ledgerlens.domain.upload import UploadService
from ledgerlens.domain.workspace import WorkspaceService


NOVO_BANCO_LINES = [
    "Extrato Integrado",
    "Periodo de 01.11.2024 a 30.11.2024",
    "MOVIMENTOS DE CONTA",
    "Data Descritivo Debito Credito Saldo",
    "SALDO ANTERIOR 1.234,56",
    "02.11.24 02.11.24 Compra Cartao Lidl Lisboa 24,30 1.210,26",
    "05.11.24 05.11.24 Trf Sepa+ De Joao Silva 500,00 1.710,26",
    "12.11.24 12.11.24 Netflix Com 13,99 1.696,27",
    "TOTAL 38,29 500,00",
]

CGD_LINES = [
    "Extrato de Conta",
    "Periodo 2024-11-01 a 2024-11-30",
    "- - 2024-11-15 COMPRA CONTINENTE LISBOA -45,20 1.154,80",
    "- - 2024-11-20 TRF SALARIO EMPRESA 1.500,00 2.654,80",
    "- - 2024-11-25 COMPRA SPOTIFY -10,99 2.643,81",
]


def build_statement_pdf(lines: list[str]) -> bytes:
    """Render text lines into a PDF, one line per row, like a simple statement."""
    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    _, height = A4
    y = height - 50
    for line in lines:
        if y < 50:
            pdf.showPage()
            y = height - 50
        pdf.setFont("Helvetica", 10)
        pdf.drawString(40, y, line)
        y -= 16
    pdf.save()
    return buffer.getvalue()


def make_parsed(
    description: str,
    amount: str,
    date: str = "2024-11-01",
    direction: TransactionDirection = TransactionDirection.EXPENSE,
    balance: str | None = None,
) -> ParsedTransaction:
    """Build a ParsedTransaction with sensible defaults."""
    return ParsedTransaction(
        date=date,
        description=description,
        amount=Decimal(amount),
        balance=Decimal(balance) if balance is not None else None,
        direction=direction,
        raw_text=f"{date} {description} {amount}",
        value_date=date,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def workspace_service(temp_db):
    return WorkspaceService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def upload_service(temp_db):
    """Create an UploadService with a temporary database."""
    return UploadService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringService with a temporary database."""
    return RecurringService(temp_db)


@pytest.fixture
def workspace_id(workspace_service):
    """Create an empty workspace."""
    return workspace_service.create_workspace("Test Workspace")


@pytest.fixture
def seeded_workspace(workspace_id, category_service):
    """Create a workspace with the default categories and bank patterns."""
    category_service.seed_workspace(workspace_id)
    return workspace_id


@pytest.fixture
def add_ledger(temp_db):
    """Store parsed transactions in a new ledger and return their IDs."""
    counter = {"n": 0}

    def _add(workspace_id: int, transactions: list[ParsedTransaction], bank_id: str = "cgd"):
        counter["n"] += 1
        ledger_id = temp_db.create_ledger(
            workspace_id, f"statement-{counter['n']}.pdf", bank_id, f"{counter['n']:064x}"
        )
        ids = [temp_db.create_transaction(ledger_id, txn) for txn in transactions]
        return ledger_id, ids

    return _add


@pytest.fixture
def statement_pdf():
    """Return the PDF builder for synthetic statements."""
    return build_statement_pdf


@pytest.fixture
def novo_banco_pdf():
    return build_statement_pdf(NOVO_BANCO_LINES)


@pytest.fixture
def cgd_pdf():
    return build_statement_pdf(CGD_LINES)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
