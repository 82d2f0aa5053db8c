"""
Tests para los modelos de dominio.

Verifican que las validaciones, propiedades derivadas e inmutabilidad
funcionan correctamente.
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from treasury_statements.domain.exceptions import FormatError
from treasury_statements.domain.models import (
    SkippedLine,
    Statement,
    StatementFormat,
    StatementSummary,
    Transaction,
    TransactionType,
)
from treasury_statements.domain.models.skipped_line import MAX_RAW_LENGTH


def _tx(amount: str, tipo: TransactionType = TransactionType.CREDIT, **kwargs) -> Transaction:
    return Transaction(
        date="2024-01-01",
        value_date="2024-01-01",
        amount=Decimal(amount),
        type=tipo,
        description=kwargs.pop("description", "Movimiento"),
        **kwargs,
    )


class TestTransaction:
    """Pruebas para el modelo Transaction."""

    def test_crear_abono(self):
        tx = _tx("500.00")
        assert tx.is_credit
        assert tx.signed_amount == Decimal("500.00")

    def test_crear_cargo(self):
        tx = _tx("250.00", TransactionType.DEBIT)
        assert not tx.is_credit
        assert tx.signed_amount == Decimal("-250.00")

    def test_monto_negativo_lanza_error(self):
        with pytest.raises(ValueError, match="negativo"):
            _tx("-1.00")

    def test_monto_float_lanza_error(self):
        with pytest.raises(TypeError, match="Decimal"):
            Transaction(
                date="2024-01-01",
                value_date="2024-01-01",
                amount=1.5,
                type=TransactionType.CREDIT,
                description="X",
            )

    def test_tipo_string_lanza_error(self):
        with pytest.raises(TypeError):
            Transaction(
                date="",
                value_date="",
                amount=Decimal("1"),
                type="credit",
                description="X",
            )

    def test_descripcion_vacia_lanza_error(self):
        with pytest.raises(ValueError, match="descripción"):
            _tx("1.00", description="   ")

    def test_es_inmutable(self):
        tx = _tx("1.00")
        with pytest.raises(FrozenInstanceError):
            tx.amount = Decimal("2.00")

    def test_to_dict_omite_opcionales_vacios(self):
        data = _tx("500.00", bank_reference="REF001").to_dict()
        assert data == {
            "date": "2024-01-01",
            "valueDate": "2024-01-01",
            "amount": "500.00",
            "type": "credit",
            "description": "Movimiento",
            "bankReference": "REF001",
        }


class TestSkippedLine:
    def test_recorta_texto_largo(self):
        skipped = SkippedLine.of(3, "16", "X" * 500, "Monto inválido")
        assert len(skipped.raw) == MAX_RAW_LENGTH
        assert skipped.raw.endswith("...")

    def test_texto_corto_se_conserva(self):
        skipped = SkippedLine.of(3, "16", "  16,ABC/  ", "Monto inválido")
        assert skipped.raw == "16,ABC/"


class TestStatementSummary:
    def test_neto_y_diferencia(self):
        summary = StatementSummary(
            total_credits=Decimal("500.00"),
            total_debits=Decimal("250.00"),
            num_credits=1,
            num_debits=1,
            opening_balance=Decimal("1000.00"),
            closing_balance=Decimal("1250.00"),
        )
        assert summary.net_movement == Decimal("250.00")
        assert summary.balance_difference == Decimal("250.00")
        assert summary.is_reconciled is True

    def test_no_concilia(self):
        summary = StatementSummary(
            total_credits=Decimal("500.00"),
            total_debits=Decimal("0"),
            num_credits=1,
            num_debits=0,
            opening_balance=Decimal("0"),
            closing_balance=Decimal("100.00"),
        )
        assert summary.is_reconciled is False

    def test_sin_saldos_no_hay_conciliacion(self):
        summary = StatementSummary(
            total_credits=Decimal("0"),
            total_debits=Decimal("0"),
            num_credits=0,
            num_debits=0,
            opening_balance=Decimal("10"),
        )
        assert summary.balance_difference is None
        assert summary.is_reconciled is None


class TestStatement:
    """Pruebas para el modelo Statement."""

    @pytest.fixture
    def statement(self):
        return Statement(
            format=StatementFormat.BAI2,
            account_number="ACCT123",
            currency="USD",
            statement_date="2024-01-01",
            opening_balance=Decimal("1000.00"),
            closing_balance=Decimal("1250.00"),
            transactions=[_tx("500.00"), _tx("250.00", TransactionType.DEBIT)],
        )

    def test_lista_se_convierte_en_tupla(self, statement):
        assert isinstance(statement.transactions, tuple)

    def test_summary(self, statement):
        summary = statement.summary
        assert summary.total_credits == Decimal("500.00")
        assert summary.total_debits == Decimal("250.00")
        assert summary.num_credits == 1
        assert summary.num_debits == 1
        assert summary.is_reconciled is True

    def test_moneda_invalida(self):
        with pytest.raises(ValueError, match="Moneda"):
            Statement(format=StatementFormat.MT940, account_number="1", currency="usd")

    def test_moneda_con_letras_no_ascii(self):
        with pytest.raises(ValueError, match="Moneda"):
            Statement(format=StatementFormat.MT940, account_number="1", currency="ÉUR")

    def test_formato_unknown_no_permitido(self):
        with pytest.raises(ValueError, match="UNKNOWN"):
            Statement(format=StatementFormat.UNKNOWN, account_number="1", currency="USD")

    def test_skipped_lines_no_participan_en_igualdad(self, statement):
        con_diagnostico = Statement(
            format=statement.format,
            account_number=statement.account_number,
            currency=statement.currency,
            statement_date=statement.statement_date,
            opening_balance=statement.opening_balance,
            closing_balance=statement.closing_balance,
            transactions=statement.transactions,
            skipped_lines=(SkippedLine.of(4, "16", "16,XYZ", "Monto inválido"),),
        )
        assert con_diagnostico == statement

    def test_to_dict(self, statement):
        data = statement.to_dict()
        assert data["format"] == "BAI2"
        assert data["accountNumber"] == "ACCT123"
        assert data["openingBalance"] == "1000.00"
        assert data["closingBalance"] == "1250.00"
        assert len(data["transactions"]) == 2
        assert "accountName" not in data
        assert "skippedLines" not in data

    def test_to_dict_saldo_ausente_es_none(self):
        data = Statement(format=StatementFormat.CAMT053, account_number="X", currency="EUR").to_dict()
        assert data["openingBalance"] is None
        assert data["transactions"] == []


class TestStatementFormatHint:
    @pytest.mark.parametrize("hint", [None, "", "AUTO", "auto", " Auto "])
    def test_deteccion_automatica(self, hint):
        assert StatementFormat.from_hint(hint) is None

    @pytest.mark.parametrize(
        "hint, esperado",
        [
            ("BAI2", StatementFormat.BAI2),
            ("bai2", StatementFormat.BAI2),
            ("MT940", StatementFormat.MT940),
            ("mt-940", StatementFormat.MT940),
            ("camt.053", StatementFormat.CAMT053),
            ("CAMT_053", StatementFormat.CAMT053),
            (StatementFormat.MT940, StatementFormat.MT940),
        ],
    )
    def test_formatos_soportados(self, hint, esperado):
        assert StatementFormat.from_hint(hint) is esperado

    @pytest.mark.parametrize(
        "hint", ["UNKNOWN", StatementFormat.UNKNOWN, "MT942", "CSV", 940, b"MT940"]
    )
    def test_formato_no_soportado(self, hint):
        with pytest.raises(FormatError):
            StatementFormat.from_hint(hint)
