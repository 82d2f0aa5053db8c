"""
Puerto de salida: Bitácora de procesamiento (Process Logger).

Define el contrato para registrar eventos durante la decodificación de
estados de cuenta.

¿Por qué no usar directamente el módulo `logging` de Python?
Porque `logging` es una herramienta de infraestructura (HOW), mientras que
este puerto define los EVENTOS de negocio (WHAT):
- "Se recibió un payload" (no "INFO: payload recibido")
- "Se descartó una línea :61:" (no "WARNING: regex no matcheó")

Implementaciones:
- ConsoleLogger: imprime a consola con resumen final (CLI).
- LoggingProcessLogger: delega en `logging` (uso como librería).

`source` es el nombre del archivo o un identificador del payload.
"""

from abc import ABC, abstractmethod

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement_format import StatementFormat


class ProcessLogger(ABC):
    """Interfaz para la bitácora de procesamiento."""

    # --- Entrada ---

    @abstractmethod
    def log_payload_received(self, source: str, size: int) -> None:
        """Registra que se recibió un payload.

        Args:
            source: Nombre del archivo o identificador del payload.
            size: Tamaño en caracteres.
        """
        ...

    @abstractmethod
    def log_payload_skipped(self, source: str, reason: str) -> None:
        """Registra que un archivo se descartó antes de decodificar
        (ningún lector lo soporta, está vacío, etc.)."""
        ...

    # --- Detección ---

    @abstractmethod
    def log_format_detected(self, source: str, fmt: StatementFormat, declared: bool) -> None:
        """Registra el formato con el que se va a decodificar.

        Args:
            declared: True si lo declaró el llamador, False si lo detectó
                      el FormatDetector.
        """
        ...

    @abstractmethod
    def log_format_not_detected(self, source: str) -> None:
        """Registra que ninguna firma coincidió."""
        ...

    # --- Decodificación ---

    @abstractmethod
    def log_line_skipped(self, source: str, skipped: SkippedLine) -> None:
        """Registra una línea descartada por estar mal formada."""
        ...

    @abstractmethod
    def log_decode_complete(
        self, source: str, num_statements: int, num_transactions: int
    ) -> None:
        """Registra el fin exitoso de la decodificación."""
        ...

    @abstractmethod
    def log_validation_mismatch(
        self,
        source: str,
        account: str,
        expected: str,
        actual: str,
    ) -> None:
        """Registra que los movimientos no explican la variación de saldos.

        Args:
            account: Cuenta del Statement con discrepancia.
            expected: closing - opening reportado por el banco.
            actual: neto de movimientos decodificados.
        """
        ...

    @abstractmethod
    def log_error(self, source: str, error: Exception) -> None:
        """Registra un error durante el procesamiento."""
        ...

    # --- Salida ---

    @abstractmethod
    def log_export_complete(self, output_path: str, num_statements: int) -> None:
        """Registra la generación de un archivo de salida."""
        ...

    # --- Resumen ---

    @abstractmethod
    def get_summary(self) -> dict:
        """Devuelve un resumen de todo el procesamiento.

        Returns:
            Diccionario con métricas:
            {
                'payloads_recibidos': int,
                'payloads_procesados': int,
                'payloads_descartados': int,
                'payloads_con_error': int,
                'total_statements': int,
                'total_movimientos': int,
                'lineas_omitidas': int,
                'errores': list[dict],  # [{source, error}]
            }
        """
        ...
