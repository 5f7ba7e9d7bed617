"""Tests for TransactionService."""

import pytest

from conftest import make_parsed
from ledgerlens.domain.entities import TransactionDirection
from ledgerlens.domain.errors import CategoryNotFoundError, TransactionNotFoundError, ValidationError


def test_list_transactions_ordered_by_date(transaction_service, workspace_id, add_ledger):
    add_ledger(
        workspace_id,
        [
            make_parsed("B", "2.00", date="2024-11-05"),
            make_parsed("A", "1.00", date="2024-11-01"),
        ],
    )
    assert [t.description for t in transaction_service.list_transactions(workspace_id)] == ["A", "B"]


def test_list_transactions_filters(transaction_service, category_service, workspace_id, add_ledger):
    food = category_service.create_category(workspace_id, "Food")
    ledger_a, ids_a = add_ledger(workspace_id, [make_parsed("LIDL", "1.00"), make_parsed("X", "2.00")])
    ledger_b, _ = add_ledger(workspace_id, [make_parsed("Y", "3.00")])
    transaction_service.set_category(ids_a[0], food, workspace_id)

    assert len(transaction_service.list_transactions(workspace_id, ledger_id=ledger_a)) == 2
    assert len(transaction_service.list_transactions(workspace_id, ledger_id=ledger_b)) == 1
    assert [t.id for t in transaction_service.list_transactions(workspace_id, category_id=food)] == [ids_a[0]]
    assert len(transaction_service.list_transactions(workspace_id, uncategorized=True)) == 2


def test_list_transactions_by_period(transaction_service, workspace_id, add_ledger):
    add_ledger(
        workspace_id,
        [
            make_parsed("DEC", "1.00", date="2023-12-31"),
            make_parsed("JAN", "1.00", date="2024-01-01"),
            make_parsed("FEB", "1.00", date="2024-02-29"),
            make_parsed("DEC2", "1.00", date="2024-12-31"),
        ],
    )

    def descriptions(**filters):
        return [t.description for t in transaction_service.list_transactions(workspace_id, **filters)]

    assert descriptions(year=2024) == ["JAN", "FEB", "DEC2"]
    assert descriptions(year=2024, month=2) == ["FEB"]
    assert descriptions(year=2024, month=12) == ["DEC2"]
    assert descriptions(year=2023) == ["DEC"]

    with pytest.raises(ValidationError):
        transaction_service.list_transactions(workspace_id, month=2)
    with pytest.raises(ValidationError):
        transaction_service.list_transactions(workspace_id, year=2024, month=13)


def test_list_transactions_by_direction_and_search(transaction_service, workspace_id, add_ledger):
    add_ledger(
        workspace_id,
        [
            make_parsed("Compra Lidl Lisboa", "5.00"),
            make_parsed("TRF DE JOAO", "50.00", direction=TransactionDirection.INCOME),
            make_parsed("Compra Continente", "7.00"),
        ],
    )

    income = transaction_service.list_transactions(workspace_id, direction=TransactionDirection.INCOME)
    assert [t.description for t in income] == ["TRF DE JOAO"]

    found = transaction_service.list_transactions(workspace_id, search="  lidl ")
    assert [t.description for t in found] == ["Compra Lidl Lisboa"]

    expenses = transaction_service.list_transactions(
        workspace_id, direction=TransactionDirection.EXPENSE, search="compra"
    )
    assert len(expenses) == 2


def test_delete_transaction(transaction_service, upload_service, workspace_service, workspace_id, add_ledger):
    ledger_id, ids = add_ledger(workspace_id, [make_parsed("LIDL", "1.00"), make_parsed("X", "2.00")])

    transaction_service.delete_transaction(ids[0], workspace_id)

    assert [t.id for t in transaction_service.list_transactions(workspace_id)] == [ids[1]]
    assert upload_service.get_ledger(ledger_id, workspace_id).transaction_count == 1
    with pytest.raises(TransactionNotFoundError):
        transaction_service.delete_transaction(ids[0], workspace_id)

    other = workspace_service.create_workspace("Other")
    with pytest.raises(TransactionNotFoundError):
        transaction_service.delete_transaction(ids[1], other)
    assert len(transaction_service.list_transactions(workspace_id)) == 1


def test_transactions_scoped_to_workspace(transaction_service, workspace_service, workspace_id, add_ledger):
    other = workspace_service.create_workspace("Other")
    _, ids = add_ledger(other, [make_parsed("LIDL", "1.00")])

    assert transaction_service.list_transactions(workspace_id) == []
    with pytest.raises(TransactionNotFoundError):
        transaction_service.get_transaction(ids[0], workspace_id)


def test_set_category_marks_manual(transaction_service, category_service, workspace_id, add_ledger):
    food = category_service.create_category(workspace_id, "Food")
    _, ids = add_ledger(workspace_id, [make_parsed("LIDL", "1.00")])

    transaction_service.set_category(ids[0], food, workspace_id)

    txn = transaction_service.get_transaction(ids[0], workspace_id)
    assert txn.category_id == food
    assert txn.is_manual


def test_set_category_errors(transaction_service, workspace_service, category_service, workspace_id, add_ledger):
    _, ids = add_ledger(workspace_id, [make_parsed("LIDL", "1.00")])
    other = workspace_service.create_workspace("Other")
    foreign = category_service.create_category(other, "Food")

    with pytest.raises(TransactionNotFoundError):
        transaction_service.set_category(999, None, workspace_id)
    with pytest.raises(CategoryNotFoundError):
        transaction_service.set_category(ids[0], foreign, workspace_id)


def test_clear_manual_allows_sweeps_again(
    transaction_service, category_service, workspace_id, add_ledger
):
    food = category_service.create_category(workspace_id, "Food")
    misc = category_service.create_category(workspace_id, "Misc")
    _, ids = add_ledger(workspace_id, [make_parsed("LIDL", "1.00")])
    transaction_service.set_category(ids[0], misc, workspace_id)

    transaction_service.clear_manual(ids[0], workspace_id)
    txn = transaction_service.get_transaction(ids[0], workspace_id)
    assert not txn.is_manual
    assert txn.category_id == misc

    category_service.create_pattern(food, workspace_id, "cgd", "lidl")
    assert transaction_service.get_transaction(ids[0], workspace_id).category_id == food


def test_list_needing_review(transaction_service, upload_service, seeded_workspace, statement_pdf):
    data = statement_pdf(
        [
            "MOVIMENTOS DE CONTA",
            "SALDO ANTERIOR 100,00",
            "03.11.24 03.11.24 Movimento Ambiguo 10,00 20,00 110,00",
            "04.11.24 04.11.24 Compra Lidl 10,00 100,00",
        ]
    )
    upload_service.process_upload(data, "nb.pdf", "novo_banco", seeded_workspace)

    review = transaction_service.list_needing_review(seeded_workspace)
    assert [t.description for t in review] == ["Movimento Ambiguo"]
