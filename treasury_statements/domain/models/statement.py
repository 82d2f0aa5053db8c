"""
Modelo de dominio: Estado de cuenta normalizado.

Este es el objeto central que fluye por toda la arquitectura:
- Lo PRODUCE cada StatementDecoder (BAI2, MT940, camt.053).
- Lo DEVUELVE el StatementService al llamador.
- Lo CONSUME el OutputWriter (Excel) o la salida JSON del CLI.

Convención de signos de los saldos: positivo = aumenta el activo, sin
importar el formato de origen. BAI2 trae saldos con signo opcional; MT940 y
camt.053 traen magnitud + indicador C/D (CRDT/DBIT). Cada decodificador los
normaliza a un Decimal con signo antes de construir el Statement.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.models.summary import StatementSummary
from treasury_statements.domain.models.transaction import Transaction
from treasury_statements.domain.shared.money import is_currency_code


@dataclass(frozen=True)
class Statement:
    """Un estado de cuenta bancario de una cuenta en un periodo."""

    format: StatementFormat

    account_number: str
    """Identificador tal como aparece en el origen (IBAN, cuenta enmascarada o
    número local). No se normaliza."""

    currency: str
    """Código ISO 4217 de 3 letras. 'XXX' cuando el origen no lo indica."""

    account_name: str | None = None
    """Nombre de la cuenta. Solo camt.053 lo trae."""

    statement_date: str = ""
    """Fecha (u hora) del estado en ISO 8601. Vacía si el origen no la trae."""

    period_start: str = ""

    period_end: str = ""

    opening_balance: Decimal | None = None
    """Saldo inicial con signo. None si el origen no lo reporta."""

    closing_balance: Decimal | None = None
    """Saldo final con signo. None si el origen no lo reporta."""

    transactions: tuple[Transaction, ...] = ()
    """Movimientos en el mismo orden en que aparecen en el origen."""

    skipped_lines: tuple[SkippedLine, ...] = field(default=(), compare=False)
    """Líneas descartadas por estar mal formadas. No participan en la
    igualdad: dos estados con los mismos datos son iguales aunque uno haya
    llegado con basura intercalada."""

    @property
    def summary(self) -> StatementSummary:
        """Totales calculados a partir de los movimientos."""
        credits = [t.amount for t in self.transactions if t.is_credit]
        debits = [t.amount for t in self.transactions if not t.is_credit]
        return StatementSummary(
            total_credits=sum(credits, Decimal("0")),
            total_debits=sum(debits, Decimal("0")),
            num_credits=len(credits),
            num_debits=len(debits),
            opening_balance=self.opening_balance,
            closing_balance=self.closing_balance,
        )

    def to_dict(self) -> dict:
        """Forma de salida serializable, con las claves camelCase que usan
        los consumidores del flujo (n8n / conciliación)."""
        data = {
            "format": self.format.value,
            "accountNumber": self.account_number,
            "currency": self.currency,
            "statementDate": self.statement_date,
            "periodStart": self.period_start,
            "periodEnd": self.period_end,
            "openingBalance": _decimal_or_none(self.opening_balance),
            "closingBalance": _decimal_or_none(self.closing_balance),
            "transactions": [t.to_dict() for t in self.transactions],
        }
        if self.account_name is not None:
            data["accountName"] = self.account_name
        if self.skipped_lines:
            data["skippedLines"] = [
                {
                    "lineNumber": s.line_number,
                    "record": s.record,
                    "raw": s.raw,
                    "reason": s.reason,
                }
                for s in self.skipped_lines
            ]
        return data

    def __post_init__(self) -> None:
        if self.format is StatementFormat.UNKNOWN:
            raise ValueError("Un Statement no puede tener formato UNKNOWN")
        if not is_currency_code(self.currency):
            raise ValueError(
                f"Moneda no reconocida: '{self.currency}'. Se espera código ISO 4217 de 3 letras"
            )
        # Se aceptan listas por comodidad, pero se guardan como tuplas
        # para que el Statement sea realmente inmutable.
        if not isinstance(self.transactions, tuple):
            object.__setattr__(self, "transactions", tuple(self.transactions))
        if not isinstance(self.skipped_lines, tuple):
            object.__setattr__(self, "skipped_lines", tuple(self.skipped_lines))


def _decimal_or_none(value: Decimal | None) -> str | None:
    return None if value is None else str(value)
