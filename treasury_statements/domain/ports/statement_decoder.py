"""
Puerto de entrada: Decodificador de estados de cuenta.

Define el contrato que cada decodificador de formato debe cumplir.
Hay exactamente un StatementDecoder por cada formato soportado:

    StatementDecoder (interfaz)
    ├── Bai2Decoder
    ├── Mt940Decoder
    └── Camt053Decoder

¿Por qué devuelve una lista y no un solo Statement?
Porque los tres formatos permiten varios estados de cuenta por archivo:
varias cuentas (registros 03) en un BAI2, varios bloques :20: en un MT940,
varios <Stmt> en un camt.053.

Contrato de robustez: decode() es una función TOTAL. Con texto basura
devuelve una lista vacía; con líneas corruptas las omite y las deja
registradas en Statement.skipped_lines. Nunca lanza excepción.
"""

from abc import ABC, abstractmethod

from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import StatementFormat


class StatementDecoder(ABC):
    """Interfaz para decodificar el contenido de un formato específico."""

    @property
    @abstractmethod
    def format(self) -> StatementFormat:
        """Formato que este decodificador maneja.

        Se usa como clave en el registro de decodificadores (Registry).
        """
        ...

    @abstractmethod
    def decode(self, content: str) -> list[Statement]:
        """Decodifica el payload completo.

        Args:
            content: Texto del payload tal como llegó (ya decodificado a str).

        Returns:
            Statements en el orden en que aparecen en el origen. Lista vacía
            si no se reconoce ninguno.
        """
        ...
