"""
Tests para el decodificador BAI2.

Los fixtures son strings en línea: cada registro en su propia línea para
que los números de línea de los SkippedLine sean fáciles de verificar.
"""

import random
from decimal import Decimal

import pytest

from treasury_statements.adapters.input.decoders.bai2_decoder import Bai2Decoder
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.models.transaction import TransactionType


def _bai2(*records: str) -> str:
    return "\n".join(records)


HEADER = (
    "01,BANK,CUSTOMER,240101,0800,1,80,1,2/",
    "02,CUSTOMER,BANK,1,240101,0800,USD,2/",
)

TRAILER = (
    "49,175000,4/",
    "98,175000,1,6/",
    "99,175000,1,8/",
)


class TestBai2Decoder:
    """Tests unitarios para Bai2Decoder."""

    @pytest.fixture
    def decoder(self):
        return Bai2Decoder()

    def test_formato(self, decoder):
        assert decoder.format is StatementFormat.BAI2

    # === Escenario completo ===

    def test_fixture_de_punta_a_punta(self, decoder):
        content = _bai2(
            *HEADER,
            "03,ACCT123,USD,010,100000,0,,,/",
            "16,115,50000,0,240101,,REF001,Payment received/",
            "16,475,25000,0,240101,,REF002,Wire transfer/",
            *TRAILER,
        )

        statements = decoder.decode(content)

        assert len(statements) == 1
        stmt = statements[0]
        assert stmt.account_number == "ACCT123"
        assert stmt.currency == "USD"
        assert stmt.opening_balance == Decimal("1000.00")
        assert stmt.closing_balance is None
        assert stmt.statement_date == "2024-01-01"

        credit, debit = stmt.transactions
        assert credit.amount == Decimal("500.00")
        assert credit.type is TransactionType.CREDIT
        assert credit.bank_reference == "REF001"
        assert credit.reference == "Payment received"
        assert credit.transaction_code == "115"
        assert credit.description == "Incoming Money Transfer"
        assert credit.date == "2024-01-01"

        assert debit.amount == Decimal("250.00")
        assert debit.type is TransactionType.DEBIT
        assert debit.bank_reference == "REF002"
        assert stmt.skipped_lines == ()

    # === Saldos del registro 03 ===

    def test_saldo_inicial_y_final_con_continuacion(self, decoder):
        content = _bai2(
            *HEADER,
            "03,ACCT9,USD,010,500000,1,0/",
            "88,040,750000,,0/",
            *TRAILER,
        )
        stmt = decoder.decode(content)[0]
        assert stmt.opening_balance == Decimal("5000.00")
        assert stmt.closing_balance == Decimal("7500.00")

    def test_saldo_negativo(self, decoder):
        stmt = decoder.decode(_bai2(*HEADER, "03,ACCT9,USD,015,-5000,,0/", *TRAILER))[0]
        assert stmt.opening_balance == Decimal("-50.00")

    def test_gana_la_primera_aparicion(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD,010,100,,0,015,999,,0/", *TRAILER)
        assert decoder.decode(content)[0].opening_balance == Decimal("1.00")

    def test_saldo_invalido_queda_registrado(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD,010,12A,,0/", *TRAILER)
        stmt = decoder.decode(content)[0]
        assert stmt.opening_balance is None
        assert stmt.skipped_lines[0].record == "03"

    # === Detalle 16 y tipos de fondos ===

    def test_texto_libre_y_continuacion_88(self, decoder):
        content = _bai2(
            *HEADER,
            "03,ACCT9,USD/",
            "16,399,12345,0,REF9,CUST9,Misc deposit/",
            "88,from branch 12/",
            *TRAILER,
        )
        tx = decoder.decode(content)[0].transactions[0]
        assert tx.amount == Decimal("123.45")
        assert tx.bank_reference == "REF9"
        assert tx.reference == "CUST9"
        assert tx.description == "Misc deposit from branch 12"
        assert tx.value_date == "2024-01-01"

    def test_texto_con_comas(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,475,100,0,B1,C1,PAGO, FACTURA 1/", *TRAILER)
        assert decoder.decode(content)[0].transactions[0].description == "PAGO,FACTURA 1"

    def test_fondos_s(self, decoder):
        content = _bai2(
            *HEADER, "03,ACCT9,USD/", "16,115,10000,S,5000,3000,2000,BREF,CREF,Texto/", *TRAILER
        )
        tx = decoder.decode(content)[0].transactions[0]
        assert (tx.bank_reference, tx.reference, tx.description) == ("BREF", "CREF", "Texto")

    def test_fondos_v_con_fecha_valor(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,115,10000,V,240105,1200,BREF,CREF/", *TRAILER)
        tx = decoder.decode(content)[0].transactions[0]
        assert tx.date == "2024-01-01"
        assert tx.value_date == "2024-01-05"
        assert tx.bank_reference == "BREF"

    def test_fondos_d(self, decoder):
        content = _bai2(
            *HEADER, "03,ACCT9,USD/", "16,115,10000,D,2,1,5000,2,5000,BREF,CREF/", *TRAILER
        )
        tx = decoder.decode(content)[0].transactions[0]
        assert (tx.bank_reference, tx.reference) == ("BREF", "CREF")

    def test_codigo_sin_descripcion_conocida(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,123,100,0,,/", *TRAILER)
        assert decoder.decode(content)[0].transactions[0].description == "Transaction Code: 123"

    # === Degradación ===

    def test_monto_invalido_se_omite(self, decoder):
        content = _bai2(
            *HEADER,
            "03,ACCT9,USD/",
            "16,115,ABC,0,REF1,,/",
            "16,475,100,0,REF2,,/",
            *TRAILER,
        )
        stmt = decoder.decode(content)[0]
        assert [tx.bank_reference for tx in stmt.transactions] == ["REF2"]
        assert len(stmt.skipped_lines) == 1
        skipped = stmt.skipped_lines[0]
        assert skipped.line_number == 4
        assert skipped.record == "16"

    def test_monto_faltante_se_omite(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,115/", *TRAILER)
        stmt = decoder.decode(content)[0]
        assert stmt.transactions == ()
        assert "monto" in stmt.skipped_lines[0].reason

    def test_archivo_truncado_sin_99(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD,010,100,,0/", "16,115,100,0,REF1,,/")
        statements = decoder.decode(content)
        assert len(statements) == 1
        assert len(statements[0].transactions) == 1

    def test_registro_desconocido(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "77,basura/", *TRAILER)
        stmt = decoder.decode(content)[0]
        assert "desconocido" in stmt.skipped_lines[0].reason

    def test_detalle_huerfano_va_al_primer_statement(self, decoder):
        content = _bai2(*HEADER, "16,115,100,0,X,,/", "03,ACCT9,USD/", *TRAILER)
        stmt = decoder.decode(content)[0]
        assert stmt.transactions == ()
        assert stmt.skipped_lines[0].line_number == 3

    def test_sin_cuentas_devuelve_lista_vacia(self, decoder):
        assert decoder.decode(_bai2(*HEADER, *TRAILER)) == []

    def test_contenido_vacio(self, decoder):
        assert decoder.decode("") == []

    # === Varias cuentas y monedas ===

    def test_varias_cuentas(self, decoder):
        content = _bai2(
            *HEADER,
            "03,ACCT1,USD,010,100,,0/",
            "16,115,100,0,R1,,/",
            "49,200,3/",
            "03,ACCT2,,010,200,,0/",
            "16,475,50,0,R2,,/",
            "16,475,50,0,R3,,/",
            *TRAILER,
        )
        first, second = decoder.decode(content)
        assert first.account_number == "ACCT1"
        assert len(first.transactions) == 1
        assert second.account_number == "ACCT2"
        assert second.currency == "USD"
        assert [tx.bank_reference for tx in second.transactions] == ["R2", "R3"]

    def test_moneda_por_defecto_sin_grupo(self, decoder):
        content = _bai2("01,BANK,CUSTOMER,240101,0800,1,80,1,2/", "03,ACCT1,,010,100,,0/")
        stmt = decoder.decode(content)[0]
        assert stmt.currency == "USD"
        assert stmt.statement_date == "2024-01-01"

    def test_moneda_de_la_cuenta(self, decoder):
        stmt = decoder.decode(_bai2(*HEADER, "03,ACCT1,CAD/", *TRAILER))[0]
        assert stmt.currency == "CAD"

    def test_saltos_de_linea_windows(self, decoder):
        content = "\r\n".join(
            [*HEADER, "03,ACCT1,USD/", "16,115,100,0,R1,,/", *TRAILER]
        )
        assert len(decoder.decode(content)[0].transactions) == 1

    def test_moneda_no_ascii_usa_la_del_grupo(self, decoder):
        stmt = decoder.decode(_bai2(*HEADER, "03,ACCT1,ÉUR,010,100/", *TRAILER))[0]
        assert stmt.currency == "USD"

    def test_moneda_no_ascii_sin_grupo_usa_usd(self, decoder):
        stmt = decoder.decode(_bai2("01,B,C,240101/", "03,ACCT,ÉUR,010,100/", "99/"))[0]
        assert stmt.currency == "USD"
        assert stmt.opening_balance == Decimal("1.00")

    def test_codigo_con_superindice_es_cargo(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,²,100,0/", *TRAILER)
        tx = decoder.decode(content)[0].transactions[0]
        assert tx.type is TransactionType.DEBIT
        assert tx.description == "Transaction Code: ²"

    def test_fondos_d_con_conteo_no_ascii(self, decoder):
        content = _bai2(*HEADER, "03,ACCT9,USD/", "16,115,100,D,²/", *TRAILER)
        tx = decoder.decode(content)[0].transactions[0]
        assert tx.amount == Decimal("1.00")


class TestBai2DecoderTextoArbitrario:
    """decode() nunca lanza, reciba lo que reciba."""

    @pytest.mark.parametrize(
        "content",
        [
            "01,B,C,240101/\n03,ACCT,ÉUR,010,100/\n99/",
            "02,C,B,1,240101,0800,ÜSD/\n03,ACCT/",
            "03,A,USD,010,²,0,040,١٠٠,0/",
            "03,A/\n16,²,100,0/\n16,115,100,D,²/\n16,115,100,D,9999/",
            "03,A/\n16,115,100,S/\n16,115,100,V/\n88/\n88,,,/",
            "03,A/\n16",
            "01,\n02,\n03,\n16,\n88,\n99,",
            ",,,,/\n/\n//\n03,,,,,,,,/",
            bytes(range(256)).decode("latin-1"),
            random.Random(7).randbytes(2048).decode("utf-8", errors="replace"),
        ],
    )
    def test_nunca_lanza(self, content):
        statements = Bai2Decoder().decode(content)
        assert all(stmt.format is StatementFormat.BAI2 for stmt in statements)
