"""
Modelo de dominio: Movimiento de un estado de cuenta.

Un Transaction representa una operación individual reportada por el banco:
un abono, un cargo, una transferencia, una comisión, etc.

Decisiones de diseño:
- `amount` es SIEMPRE una magnitud no negativa y la dirección va aparte en
  `type`. Los tres formatos de origen (BAI2, MT940, camt.053) codifican así
  los movimientos; plegar el signo en el monto es la fuente clásica de bugs
  de convención de signos en la conciliación.
- `Decimal` para montos, nunca `float`.
- Las fechas se guardan como strings ISO 8601 porque la precisión depende del
  formato (fecha en BAI2/MT940, fecha u hora en camt.053).
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Dirección del movimiento."""

    CREDIT = "credit"
    DEBIT = "debit"


@dataclass(frozen=True)
class Transaction:
    """Representa un movimiento individual dentro de un Statement."""

    # --- Campos obligatorios ---

    date: str
    """Fecha contable en ISO 8601. Cadena vacía si el origen no trae fecha."""

    value_date: str
    """Fecha valor en ISO 8601. Igual a `date` cuando el origen no la separa."""

    amount: Decimal
    """Magnitud del movimiento en unidades mayores. Siempre >= 0."""

    type: TransactionType
    """credit o debit."""

    description: str
    """Narrativa legible. Nunca vacía: si el origen no trae texto libre se usa
    la descripción del código o un texto genérico."""

    # --- Campos opcionales ---

    transaction_code: str | None = None
    """Código propio del formato: código BAI2, tipo SWIFT (MT940) o código
    de dominio/propietario ISO (camt.053)."""

    reference: str | None = None
    """Referencia del cliente (customer reference / end-to-end id)."""

    bank_reference: str | None = None
    """Referencia asignada por el banco."""

    counterparty: str | None = None
    """Nombre de la contraparte. Solo camt.053 trae datos estructurados."""

    @property
    def is_credit(self) -> bool:
        return self.type is TransactionType.CREDIT

    @property
    def signed_amount(self) -> Decimal:
        """Monto con signo (positivo = abono). Útil solo para totales."""
        return self.amount if self.is_credit else -self.amount

    def to_dict(self) -> dict:
        """Forma de salida serializable (JSON). Los montos van como string
        para no perder centavos en el camino."""
        data = {
            "date": self.date,
            "valueDate": self.value_date,
            "amount": str(self.amount),
            "type": self.type.value,
            "description": self.description,
        }
        optional = {
            "transactionCode": self.transaction_code,
            "reference": self.reference,
            "bankReference": self.bank_reference,
            "counterparty": self.counterparty,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise TypeError(f"amount debe ser Decimal, recibió {type(self.amount).__name__}")
        if self.amount < Decimal("0"):
            raise ValueError(f"amount no puede ser negativo: {self.amount}")
        if not isinstance(self.type, TransactionType):
            raise TypeError(f"type debe ser TransactionType, recibió {self.type!r}")
        if not self.description or not self.description.strip():
            raise ValueError("La descripción del movimiento no puede estar vacía")
