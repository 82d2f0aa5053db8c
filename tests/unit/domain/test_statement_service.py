"""
Tests para StatementService (despachador).

Se usa el registro y el detector reales: el servicio solo orquesta, así que
probarlo con dobles escondería justamente los errores de cableado.
"""

import logging
from decimal import Decimal

import pytest

from treasury_statements import detect_format, parse_statement
from treasury_statements.adapters.input.format_detectors.signature_detector import (
    SignatureFormatDetector,
)
from treasury_statements.adapters.input.payload_readers.file_payload_reader import (
    FilePayloadReader,
)
from treasury_statements.adapters.output.loggers.logging_logger import LoggingProcessLogger
from treasury_statements.domain.exceptions import FormatError
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.services.statement_service import StatementService
from treasury_statements.infrastructure.registry import DecoderRegistry, create_default_registry

BAI2_FIXTURE = "\n".join(
    [
        "01,BANK,CUSTOMER,240101,0800,1,80,1,2/",
        "02,CUSTOMER,BANK,1,240101,0800,USD,2/",
        "03,ACCT123,USD,010,100000,0,,,/",
        "16,115,50000,0,240101,,REF001,Payment received/",
        "16,475,25000,0,240101,,REF002,Wire transfer/",
        "49,175000,4/",
        "98,175000,1,6/",
        "99,175000,1,8/",
    ]
)

MT940_DESCUADRADO = "\n".join(
    [
        ":20:STMT001",
        ":25:NL91ABNA0417164300",
        ":60F:C240101EUR1000,00",
        ":61:2401020102C100,00NTRFNONREF",
        ":62F:C240102EUR2000,00",
    ]
)


CAMT053_FIXTURE = """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:camt.053.001.08">
  <BkToCstmrStmt>
    <GrpHdr><CreDtTm>2024-01-31T18:00:00</CreDtTm></GrpHdr>
    <Stmt>
      <Acct><Id><IBAN>DE89370400440532013000</IBAN></Id><Ccy>EUR</Ccy></Acct>
      <Bal>
        <Tp><CdOrPrtry><Cd>OPBD</Cd></CdOrPrtry></Tp>
        <Amt Ccy="EUR">100.00</Amt><CdtDbtInd>CRDT</CdtDbtInd>
      </Bal>
      <Ntry>
        <Amt Ccy="EUR">25.50</Amt><CdtDbtInd>DBIT</CdtDbtInd>
        <AddtlNtryInf>Comision</AddtlNtryInf>
      </Ntry>
    </Stmt>
  </BkToCstmrStmt>
</Document>
"""


@pytest.fixture
def logger():
    return LoggingProcessLogger()


@pytest.fixture
def service(logger):
    return StatementService(
        detector=SignatureFormatDetector(),
        registry=create_default_registry(),
        logger=logger,
        payload_readers=[FilePayloadReader()],
    )


class TestParse:
    def test_deteccion_automatica_bai2(self, service):
        statements = service.parse(BAI2_FIXTURE)
        assert len(statements) == 1
        assert statements[0].format is StatementFormat.BAI2
        assert statements[0].opening_balance == Decimal("1000.00")

    def test_deteccion_automatica_camt053(self, service, caplog):
        with caplog.at_level(logging.DEBUG, logger="treasury_statements"):
            statements = service.parse(CAMT053_FIXTURE.encode("utf-8"), source="enero.xml")

        assert len(statements) == 1
        stmt = statements[0]
        assert stmt.format is StatementFormat.CAMT053
        assert stmt.account_number == "DE89370400440532013000"
        assert stmt.opening_balance == Decimal("100.00")
        assert stmt.transactions[0].amount == Decimal("25.50")
        assert stmt.transactions[0].type.value == "debit"
        assert "Decodificado enero.xml: 1 estados, 1 movimientos" in caplog.messages

    def test_moneda_no_ascii_no_escapa_del_decodificador(self, service):
        statements = service.parse("01,B,C,240101/\n03,ACCT,ÉUR,010,100/\n99/")
        assert statements[0].currency == "USD"

    def test_formato_declarado(self, service):
        statements = service.parse(BAI2_FIXTURE, declared_format="bai2")
        assert statements[0].account_number == "ACCT123"

    def test_formato_declarado_gana_sobre_deteccion(self, service):
        """Declarar MT940 sobre un BAI2 no lanza: el decodificador no
        encuentra bloques y devuelve lista vacía."""
        assert service.parse(BAI2_FIXTURE, declared_format="MT940") == []

    def test_acepta_bytes_con_bom(self, service):
        statements = service.parse(b"\xef\xbb\xbf" + BAI2_FIXTURE.encode("utf-8"))
        assert statements[0].account_number == "ACCT123"

    def test_formato_no_detectado(self, service):
        with pytest.raises(FormatError) as exc_info:
            service.parse("hola mundo", source="basura.txt")
        assert exc_info.value.source == "basura.txt"

    def test_formato_declarado_invalido(self, service):
        with pytest.raises(FormatError, match="MT942"):
            service.parse(BAI2_FIXTURE, declared_format="MT942", source="feed.sta")

    def test_unknown_declarado_lanza_error(self, service):
        with pytest.raises(FormatError):
            service.parse(BAI2_FIXTURE, declared_format=StatementFormat.UNKNOWN)

    def test_formato_sin_decodificador(self, logger):
        service = StatementService(SignatureFormatDetector(), DecoderRegistry(), logger)
        with pytest.raises(FormatError, match="sin decodificador"):
            service.parse(BAI2_FIXTURE)

    def test_devuelve_resultado_sin_modificar(self, service):
        decoder = create_default_registry().get(StatementFormat.BAI2)
        assert service.parse(BAI2_FIXTURE) == decoder.decode(BAI2_FIXTURE)


class TestBitacora:
    def test_contadores(self, service, logger):
        service.parse(BAI2_FIXTURE)
        summary = logger.get_summary()
        assert summary["payloads_recibidos"] == 1
        assert summary["payloads_procesados"] == 1
        assert summary["total_statements"] == 1
        assert summary["total_movimientos"] == 2
        assert summary["errores"] == []

    def test_lineas_omitidas_se_registran(self, service, logger):
        service.parse(BAI2_FIXTURE.replace("16,475,25000", "16,475,25X00"))
        assert logger.get_summary()["lineas_omitidas"] == 1

    def test_discrepancia_de_saldos(self, service, caplog):
        with caplog.at_level(logging.WARNING, logger="treasury_statements"):
            service.parse(MT940_DESCUADRADO, source="descuadre.sta")
        assert "Discrepancia en descuadre.sta" in caplog.text
        assert "1,000.00" in caplog.text
        assert "100.00" in caplog.text

    def test_formato_no_detectado_se_registra(self, service, caplog):
        with caplog.at_level(logging.ERROR, logger="treasury_statements"):
            with pytest.raises(FormatError):
                service.parse("hola mundo", source="basura.txt")
        assert "Formato no identificado: basura.txt" in caplog.text


class TestProcessFile:
    def test_archivo_valido(self, service, tmp_path):
        archivo = tmp_path / "estado.bai2"
        archivo.write_text(BAI2_FIXTURE, encoding="utf-8")
        statements = service.process_file(archivo)
        assert statements is not None
        assert statements[0].account_number == "ACCT123"

    def test_extension_no_soportada(self, service, logger, tmp_path):
        archivo = tmp_path / "estado.pdf"
        archivo.write_bytes(b"%PDF-1.4")
        assert service.process_file(archivo) is None
        assert logger.get_summary()["payloads_descartados"] == 1

    def test_archivo_vacio_se_registra_como_error(self, service, logger, tmp_path):
        archivo = tmp_path / "vacio.txt"
        archivo.write_text("", encoding="utf-8")
        assert service.process_file(archivo) is None
        assert logger.get_summary()["payloads_con_error"] == 1

    def test_formato_desconocido_se_registra_como_error(self, service, logger, tmp_path):
        archivo = tmp_path / "notas.txt"
        archivo.write_text("lista del super", encoding="utf-8")
        assert service.process_file(archivo) is None
        assert logger.get_summary()["errores"][0]["source"] == "notas.txt"

    def test_directorio(self, service, tmp_path):
        (tmp_path / "a.bai2").write_text(BAI2_FIXTURE, encoding="utf-8")
        (tmp_path / "b.sta").write_text(MT940_DESCUADRADO, encoding="utf-8")
        (tmp_path / "ignorar.pdf").write_bytes(b"%PDF")
        resultados = service.process_directory(tmp_path)
        assert sorted(resultados) == ["a.bai2", "b.sta"]

    def test_directorio_inexistente(self, service, tmp_path):
        with pytest.raises(ValueError):
            service.process_directory(tmp_path / "no_existe")


class TestPuntoDeEntradaLibreria:
    def test_parse_statement(self):
        statements = parse_statement(BAI2_FIXTURE)
        assert [t.bank_reference for t in statements[0].transactions] == ["REF001", "REF002"]

    def test_detect_format(self):
        assert detect_format(BAI2_FIXTURE) is StatementFormat.BAI2
        assert detect_format("nada") is StatementFormat.UNKNOWN
