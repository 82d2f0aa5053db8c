"""
Modelos de dominio del proyecto treasury-statements.

Todos los modelos son dataclasses inmutables (frozen=True) que representan
los datos del negocio sin dependencias externas.

Uso:
    from treasury_statements.domain.models import Statement, Transaction
"""

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import AUTO_DETECT, StatementFormat
from treasury_statements.domain.models.summary import StatementSummary
from treasury_statements.domain.models.transaction import Transaction, TransactionType

__all__ = [
    "AUTO_DETECT",
    "SkippedLine",
    "Statement",
    "StatementFormat",
    "StatementSummary",
    "Transaction",
    "TransactionType",
]
