"""
Adaptador de salida: Logger a consola.

Implementación simple de ProcessLogger que imprime eventos a stdout, con
un formato consistente y un resumen final.

Útil para:
- Ejecución manual desde terminal (CLI).
- Debugging de un feed puntual.

Para uso como librería está LoggingProcessLogger, que implementa la misma
interfaz sobre el módulo `logging`.
"""

from typing import TextIO

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.ports.process_logger import ProcessLogger


class ConsoleLogger(ProcessLogger):
    """Logger que imprime eventos de procesamiento a consola."""

    def __init__(self, verbose: bool = True, stream: TextIO | None = None) -> None:
        """
        Args:
            verbose: Si es False solo se imprimen errores y discrepancias
                     (las líneas omitidas se cuentan igual).
            stream: Destino de los mensajes. None = stdout.
        """
        self._verbose = verbose
        self._stream = stream
        self._payloads_recibidos: int = 0
        self._payloads_procesados: int = 0
        self._payloads_descartados: int = 0
        self._total_statements: int = 0
        self._total_movimientos: int = 0
        self._lineas_omitidas: int = 0
        self._errores: list[dict] = []

    def _print(self, message: str) -> None:
        if self._verbose:
            self._emit(message)

    def _emit(self, message: str) -> None:
        print(message, file=self._stream)

    # --- Entrada ---

    def log_payload_received(self, source: str, size: int) -> None:
        self._payloads_recibidos += 1
        self._print(f"  📄 Recibido: {source} ({size} caracteres)")

    def log_payload_skipped(self, source: str, reason: str) -> None:
        self._payloads_descartados += 1
        self._print(f"  ⏭️  Descartado: {source}: {reason}")

    # --- Detección ---

    def log_format_detected(self, source: str, fmt: StatementFormat, declared: bool) -> None:
        origen = "declarado" if declared else "detectado"
        self._print(f"  🔎 Formato {origen}: {fmt.value} ({source})")

    def log_format_not_detected(self, source: str) -> None:
        self._emit(f"  ❌ Formato NO identificado: {source}")

    # --- Decodificación ---

    def log_line_skipped(self, source: str, skipped: SkippedLine) -> None:
        self._lineas_omitidas += 1
        self._print(
            f"  ⚠️  Línea {skipped.line_number} ({skipped.record}) omitida en {source}: "
            f"{skipped.reason}"
        )

    def log_decode_complete(
        self, source: str, num_statements: int, num_transactions: int
    ) -> None:
        self._payloads_procesados += 1
        self._total_statements += num_statements
        self._total_movimientos += num_transactions
        self._print(
            f"  ✅ Completado: {source} ({num_statements} estados, "
            f"{num_transactions} movimientos)"
        )

    def log_validation_mismatch(
        self, source: str, account: str, expected: str, actual: str
    ) -> None:
        self._emit(
            f"  ⚠️  Discrepancia en {source}, cuenta {account}: "
            f"variación de saldos {expected}, neto de movimientos {actual}"
        )

    def log_error(self, source: str, error: Exception) -> None:
        self._errores.append({"source": source, "error": str(error)})
        self._emit(f"  ❌ Error: {source}: {error}")

    # --- Salida ---

    def log_export_complete(self, output_path: str, num_statements: int) -> None:
        self._print(f"  💾 Generado: {output_path} ({num_statements} estados)")

    # --- Resumen ---

    def get_summary(self) -> dict:
        return {
            "payloads_recibidos": self._payloads_recibidos,
            "payloads_procesados": self._payloads_procesados,
            "payloads_descartados": self._payloads_descartados,
            "payloads_con_error": len(self._errores),
            "total_statements": self._total_statements,
            "total_movimientos": self._total_movimientos,
            "lineas_omitidas": self._lineas_omitidas,
            "errores": list(self._errores),
        }

    def print_summary(self) -> None:
        """Imprime el resumen final del procesamiento."""
        print("\n" + "=" * 60)
        print("RESUMEN DE PROCESAMIENTO")
        print("=" * 60)
        print(f"  Payloads recibidos:   {self._payloads_recibidos}")
        print(f"  Payloads procesados:  {self._payloads_procesados}")
        print(f"  Payloads descartados: {self._payloads_descartados}")
        print(f"  Payloads con error:   {len(self._errores)}")
        print(f"  Estados de cuenta:    {self._total_statements}")
        print(f"  Total movimientos:    {self._total_movimientos}")
        print(f"  Líneas omitidas:      {self._lineas_omitidas}")

        if self._errores:
            print("\n  ERRORES:")
            for err in self._errores:
                print(f"    - {err['source']}: {err['error']}")

        print("=" * 60)
