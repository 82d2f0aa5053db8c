"""
Adaptador de salida: Escritor de Excel.

Genera archivos Excel con el layout estándar de 2 hojas:
- Hoja 1 (Resumen): una fila por Statement con saldos, totales y si los
  movimientos concilian con la variación de saldos.
- Hoja 2 (Movimientos): una fila por movimiento, con cargos y abonos en
  columnas separadas.

Los montos se escriben como números (float) con formato "#,##0.00" para que
tesorería pueda sumar y filtrar en Excel. La precisión exacta vive en los
Decimal del dominio y en la salida JSON; esta hoja es solo de consulta.
"""

from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

import pandas as pd

from treasury_statements.domain.exceptions import OutputError
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.ports.output_writer import OutputWriter

RESUMEN_COLUMNS = [
    "Formato",
    "Cuenta",
    "Moneda",
    "Periodo",
    "Saldo Inicial",
    "Saldo Final",
    "Total Abonos",
    "Num Abonos",
    "Total Cargos",
    "Num Cargos",
    "Conciliado",
    "Archivo",
]

MOVIMIENTOS_COLUMNS = [
    "Cuenta",
    "Moneda",
    "Fecha",
    "Fecha Valor",
    "Descripción",
    "Referencia",
    "Ref. Banco",
    "Código",
    "Contraparte",
    "Cargos",
    "Abonos",
]


class ExcelWriter(OutputWriter):
    """Genera archivos Excel con formato estandarizado."""

    def write_single(
        self, statements: Sequence[Statement], output_path: Path, source: str = ""
    ) -> Path:
        """Escribe los Statements de un payload a Excel.

        Args:
            statements: Resultado de decodificar un archivo.
            output_path: Ruta donde crear el archivo. Si no termina en .xlsx,
                        se le agrega la extensión.
            source: Nombre del archivo origen.

        Returns:
            Ruta del archivo creado.
        """
        return self._write({source: statements}, output_path)

    def write_consolidated(
        self, statements_by_source: dict[str, Sequence[Statement]], output_path: Path
    ) -> Path:
        """Escribe la consolidación de varios payloads en las mismas 2 hojas.

        Returns:
            Ruta del archivo creado.
        """
        if not any(statements_by_source.values()):
            raise OutputError(str(output_path), "No hay estados de cuenta para consolidar")
        return self._write(statements_by_source, output_path)

    # =================================================================
    # MÉTODOS PRIVADOS: Generación del Excel
    # =================================================================

    def _write(self, statements_by_source: dict[str, Sequence[Statement]], output_path: Path) -> Path:
        if output_path.suffix.lower() != ".xlsx":
            output_path = output_path.with_suffix(".xlsx")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._escribir_excel(statements_by_source, output_path)
        except (OSError, ValueError, TypeError) as e:
            # xlsxwriter reporta datos no escribibles como ValueError/TypeError.
            raise OutputError(str(output_path), str(e))

        return output_path

    def _escribir_excel(
        self, statements_by_source: dict[str, Sequence[Statement]], output_path: Path
    ) -> None:
        filas_resumen = []
        filas_movimientos = []
        for source, statements in statements_by_source.items():
            for statement in statements:
                filas_resumen.append(_fila_resumen(statement, source))
                filas_movimientos.extend(_filas_movimientos(statement))

        df_resumen = pd.DataFrame(filas_resumen, columns=RESUMEN_COLUMNS)
        df_movimientos = pd.DataFrame(filas_movimientos, columns=MOVIMIENTOS_COLUMNS)

        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            df_resumen.to_excel(writer, index=False, sheet_name="Resumen")
            df_movimientos.to_excel(writer, index=False, sheet_name="Movimientos")

            workbook = writer.book
            ws_resumen = writer.sheets["Resumen"]
            ws_movimientos = writer.sheets["Movimientos"]

            # Texto para no perder ceros iniciales en cuentas y referencias
            text_format = workbook.add_format({"num_format": "@"})
            money_format = workbook.add_format({"num_format": "#,##0.00"})

            # --- Formato Hoja Resumen ---
            ws_resumen.set_column("A:A", 10)  # Formato
            ws_resumen.set_column("B:B", 26, text_format)  # Cuenta
            ws_resumen.set_column("C:C", 8)  # Moneda
            ws_resumen.set_column("D:D", 24)  # Periodo
            ws_resumen.set_column("E:F", 18, money_format)  # Saldos
            ws_resumen.set_column("G:G", 18, money_format)  # Total Abonos
            ws_resumen.set_column("H:H", 12)  # Num Abonos
            ws_resumen.set_column("I:I", 18, money_format)  # Total Cargos
            ws_resumen.set_column("J:J", 12)  # Num Cargos
            ws_resumen.set_column("K:K", 11)  # Conciliado
            ws_resumen.set_column("L:L", 30)  # Archivo

            # --- Formato Hoja Movimientos ---
            ws_movimientos.set_column("A:A", 26, text_format)  # Cuenta
            ws_movimientos.set_column("B:B", 8)  # Moneda
            ws_movimientos.set_column("C:D", 12)  # Fechas
            ws_movimientos.set_column("E:E", 50)  # Descripción
            ws_movimientos.set_column("F:G", 20, text_format)  # Referencias
            ws_movimientos.set_column("H:H", 10, text_format)  # Código
            ws_movimientos.set_column("I:I", 30)  # Contraparte
            ws_movimientos.set_column("J:K", 15, money_format)  # Cargos/Abonos


# =================================================================
# FUNCIONES INTERNAS
# =================================================================


def _fila_resumen(statement: Statement, source: str) -> dict:
    summary = statement.summary
    reconciled = summary.is_reconciled
    return {
        "Formato": statement.format.value,
        "Cuenta": statement.account_number,
        "Moneda": statement.currency,
        "Periodo": _periodo(statement),
        "Saldo Inicial": _to_float(statement.opening_balance),
        "Saldo Final": _to_float(statement.closing_balance),
        "Total Abonos": float(summary.total_credits),
        "Num Abonos": summary.num_credits,
        "Total Cargos": float(summary.total_debits),
        "Num Cargos": summary.num_debits,
        "Conciliado": "N/D" if reconciled is None else ("Sí" if reconciled else "No"),
        "Archivo": source,
    }


def _filas_movimientos(statement: Statement) -> list[dict]:
    filas = []
    for tx in statement.transactions:
        filas.append(
            {
                "Cuenta": statement.account_number,
                "Moneda": statement.currency,
                "Fecha": tx.date,
                "Fecha Valor": tx.value_date,
                "Descripción": tx.description,
                "Referencia": tx.reference or "",
                "Ref. Banco": tx.bank_reference or "",
                "Código": tx.transaction_code or "",
                "Contraparte": tx.counterparty or "",
                "Cargos": 0 if tx.is_credit else float(tx.amount),
                "Abonos": float(tx.amount) if tx.is_credit else 0,
            }
        )
    return filas


def _periodo(statement: Statement) -> str:
    """'2024-01-01 a 2024-01-31', o la fecha única si inicio = fin."""
    if statement.period_start and statement.period_end:
        if statement.period_start == statement.period_end:
            return statement.period_start
        return f"{statement.period_start} a {statement.period_end}"
    return statement.period_start or statement.period_end or statement.statement_date


def _to_float(value: Decimal | None) -> float | None:
    return None if value is None else float(value)
