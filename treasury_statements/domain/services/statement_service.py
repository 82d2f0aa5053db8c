"""
Servicio de dominio: Despachador de estados de cuenta.

Orquesta la decodificación de un payload:
1. Convierte bytes a texto si hace falta.
2. Resuelve el formato: el declarado por el llamador o, en modo
   automático, el que devuelve el FormatDetector.
3. Obtiene el decodificador del registro.
4. Decodifica y devuelve la lista de Statements TAL CUAL la produce el
   decodificador (sin filtrar ni reordenar).
5. Reporta a la bitácora las líneas omitidas y las cuentas cuyos
   movimientos no concilian con la variación de saldos.

Lo único que se le reporta al llamador como error es no saber con qué
decodificar (FormatError). Todo lo demás se degrada localmente.
"""

from collections.abc import Sequence
from pathlib import Path

from treasury_statements.domain.exceptions import ExtractionError, FormatError
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.ports.format_detector import FormatDetector
from treasury_statements.domain.ports.payload_reader import PayloadReader
from treasury_statements.domain.ports.process_logger import ProcessLogger
from treasury_statements.domain.shared.money import format_money
from treasury_statements.domain.shared.text_cleaner import decode_payload
from treasury_statements.infrastructure.registry import DecoderRegistry


class StatementService:
    """Decodifica payloads y produce listas de Statement.

    Recibe sus dependencias por constructor. No sabe qué decodificadores
    concretos existen: solo conoce el registro y los puertos.
    """

    def __init__(
        self,
        detector: FormatDetector,
        registry: DecoderRegistry,
        logger: ProcessLogger,
        payload_readers: Sequence[PayloadReader] = (),
    ) -> None:
        """
        Args:
            detector: Detector de formato para el modo automático.
            registry: Registro de decodificadores disponibles.
            logger: Bitácora de procesamiento.
            payload_readers: Lectores de archivo, en orden de prioridad. Solo
                            los necesitan process_file y process_directory.
        """
        self._detector = detector
        self._registry = registry
        self._logger = logger
        self._readers = payload_readers

    def parse(
        self,
        content: str | bytes,
        declared_format: str | StatementFormat | None = None,
        source: str = "<payload>",
    ) -> list[Statement]:
        """Decodifica un payload completo.

        Args:
            content: Contenido crudo. Los bytes se decodifican con la
                     cascada utf-8 (con BOM) → cp1252 → latin-1.
            declared_format: "BAI2", "MT940", "CAMT053" (o variantes como
                            "camt.053"), un StatementFormat, o None/"AUTO"
                            para detección automática.
            source: Nombre del archivo o identificador para la bitácora.

        Returns:
            Lista de Statements (vacía si el contenido no trae ninguno).

        Raises:
            FormatError: Si el formato declarado no es válido, si el
                         detector no reconoce el contenido o si no hay
                         decodificador registrado para el formato.
        """
        text = decode_payload(content) if isinstance(content, bytes) else content
        self._logger.log_payload_received(source, len(text))

        fmt = self._resolve_format(text, declared_format, source)

        decoder = self._registry.get(fmt)
        if decoder is None:
            raise FormatError(
                source,
                f"formato '{fmt.value}' sin decodificador registrado. "
                f"Disponibles: {self._registry.available_formats}",
            )

        statements = decoder.decode(text)

        for statement in statements:
            for skipped in statement.skipped_lines:
                self._logger.log_line_skipped(source, skipped)
            self._check_reconciliation(statement, source)

        self._logger.log_decode_complete(
            source, len(statements), sum(len(s.transactions) for s in statements)
        )
        return statements

    def detect(self, content: str) -> StatementFormat:
        """Expone el detector sin decodificar. Nunca lanza."""
        return self._detector.detect(content)

    def process_file(
        self, file_path: Path, declared_format: str | StatementFormat | None = None
    ) -> list[Statement] | None:
        """Lee y decodifica un archivo.

        Returns:
            Lista de Statements si el procesamiento fue exitoso.
            None si el archivo fue descartado o hubo un error no fatal
            (ya registrado en la bitácora).
        """
        reader = self._find_reader(file_path)
        if reader is None:
            self._logger.log_payload_skipped(
                file_path.name, f"Ningún lector puede manejar '{file_path.suffix}'"
            )
            return None

        try:
            content = reader.read(file_path)
            return self.parse(content, declared_format, source=file_path.name)
        except (ExtractionError, FormatError) as e:
            self._logger.log_error(file_path.name, e)
            return None

    def process_directory(
        self, dir_path: Path, declared_format: str | StatementFormat | None = None
    ) -> dict[str, list[Statement]]:
        """Procesa todos los archivos soportados de un directorio (recursivo).

        Returns:
            Nombre de archivo → Statements, solo para los exitosos.
        """
        if not dir_path.is_dir():
            raise ValueError(f"No es un directorio: {dir_path}")

        archivos = sorted(
            p for p in dir_path.glob("**/*") if p.is_file() and self._find_reader(p) is not None
        )

        resultados: dict[str, list[Statement]] = {}
        for archivo in archivos:
            statements = self.process_file(archivo, declared_format)
            if statements is not None:
                resultados[str(archivo.relative_to(dir_path))] = statements
        return resultados

    # =================================================================
    # MÉTODOS PRIVADOS
    # =================================================================

    def _resolve_format(
        self,
        text: str,
        declared_format: str | StatementFormat | None,
        source: str,
    ) -> StatementFormat:
        try:
            declared = StatementFormat.from_hint(declared_format)
        except FormatError as e:
            raise FormatError(source, e.detalle)

        if declared is not None:
            self._logger.log_format_detected(source, declared, declared=True)
            return declared

        detected = self._detector.detect(text)
        if detected is StatementFormat.UNKNOWN:
            self._logger.log_format_not_detected(source)
            raise FormatError(source, "ninguna firma BAI2, MT940 o camt.053 coincide")

        self._logger.log_format_detected(source, detected, declared=False)
        return detected

    def _find_reader(self, file_path: Path) -> PayloadReader | None:
        for reader in self._readers:
            if reader.can_handle(file_path):
                return reader
        return None

    def _check_reconciliation(self, statement: Statement, source: str) -> None:
        """Saldo inicial + neto de movimientos debería dar el saldo final."""
        summary = statement.summary
        if summary.is_reconciled is False:
            self._logger.log_validation_mismatch(
                source,
                statement.account_number,
                expected=format_money(summary.balance_difference),
                actual=format_money(summary.net_movement),
            )
