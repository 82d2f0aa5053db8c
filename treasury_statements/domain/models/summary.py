"""
Modelo de dominio: Resumen de abonos y cargos de un Statement.

El resumen cumple dos funciones:
1. Alimenta la hoja "Resumen" del Excel de salida.
2. Permite la validación cruzada entre los saldos que reporta el banco y
   los movimientos que decodificamos: saldo inicial + neto de movimientos
   debería ser igual al saldo final. Si no coincide, el servicio lo registra
   en la bitácora (faltan o sobran movimientos).
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class StatementSummary:
    """Totales de un estado de cuenta."""

    total_credits: Decimal
    """Suma de todos los abonos decodificados."""

    total_debits: Decimal
    """Suma de todos los cargos decodificados."""

    num_credits: int

    num_debits: int

    opening_balance: Decimal | None = None
    """Saldo inicial reportado. None si el origen no lo trae."""

    closing_balance: Decimal | None = None
    """Saldo final reportado. Mismo caso que opening_balance."""

    @property
    def net_movement(self) -> Decimal:
        """Calcula: total_credits - total_debits."""
        return self.total_credits - self.total_debits

    @property
    def balance_difference(self) -> Decimal | None:
        """Calcula: closing_balance - opening_balance.

        Retorna None si no se tienen ambos saldos.
        """
        if self.opening_balance is not None and self.closing_balance is not None:
            return self.closing_balance - self.opening_balance
        return None

    @property
    def is_reconciled(self) -> bool | None:
        """True si los movimientos explican la variación de saldos.

        None cuando falta alguno de los saldos (no hay con qué comparar).
        """
        difference = self.balance_difference
        if difference is None:
            return None
        return difference == self.net_movement
