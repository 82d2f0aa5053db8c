"""
Adaptador de salida: Logger sobre el módulo `logging`.

Misma interfaz que ConsoleLogger, pero los eventos se emiten como
registros del logger "treasury_statements" para que la aplicación que
usa la librería decida handlers, niveles y formato.

Niveles:
    DEBUG    payload recibido, formato detectado, línea omitida
    INFO     decodificación completa, archivo generado
    WARNING  payload descartado, discrepancia de saldos
    ERROR    formato no identificado, errores
"""

import logging

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.ports.process_logger import ProcessLogger

LOGGER_NAME = "treasury_statements"


class LoggingProcessLogger(ProcessLogger):
    """ProcessLogger que delega en `logging` y lleva los mismos contadores
    que ConsoleLogger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._contadores = {
            "payloads_recibidos": 0,
            "payloads_procesados": 0,
            "payloads_descartados": 0,
            "total_statements": 0,
            "total_movimientos": 0,
            "lineas_omitidas": 0,
        }
        self._errores: list[dict] = []

    def log_payload_received(self, source: str, size: int) -> None:
        self._contadores["payloads_recibidos"] += 1
        self._logger.debug("Payload recibido: %s (%d caracteres)", source, size)

    def log_payload_skipped(self, source: str, reason: str) -> None:
        self._contadores["payloads_descartados"] += 1
        self._logger.warning("Payload descartado: %s: %s", source, reason)

    def log_format_detected(self, source: str, fmt: StatementFormat, declared: bool) -> None:
        self._logger.debug(
            "Formato %s: %s (%s)", "declarado" if declared else "detectado", fmt.value, source
        )

    def log_format_not_detected(self, source: str) -> None:
        self._logger.error("Formato no identificado: %s", source)

    def log_line_skipped(self, source: str, skipped: SkippedLine) -> None:
        self._contadores["lineas_omitidas"] += 1
        self._logger.debug(
            "Línea %d (%s) omitida en %s: %s",
            skipped.line_number,
            skipped.record,
            source,
            skipped.reason,
        )

    def log_decode_complete(
        self, source: str, num_statements: int, num_transactions: int
    ) -> None:
        self._contadores["payloads_procesados"] += 1
        self._contadores["total_statements"] += num_statements
        self._contadores["total_movimientos"] += num_transactions
        self._logger.info(
            "Decodificado %s: %d estados, %d movimientos", source, num_statements, num_transactions
        )

    def log_validation_mismatch(
        self, source: str, account: str, expected: str, actual: str
    ) -> None:
        self._logger.warning(
            "Discrepancia en %s, cuenta %s: variación de saldos %s, neto de movimientos %s",
            source,
            account,
            expected,
            actual,
        )

    def log_error(self, source: str, error: Exception) -> None:
        self._errores.append({"source": source, "error": str(error)})
        self._logger.error("Error procesando %s: %s", source, error)

    def log_export_complete(self, output_path: str, num_statements: int) -> None:
        self._logger.info("Generado %s (%d estados)", output_path, num_statements)

    def get_summary(self) -> dict:
        return {
            **self._contadores,
            "payloads_con_error": len(self._errores),
            "errores": list(self._errores),
        }
