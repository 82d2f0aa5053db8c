"""
Puerto de entrada: Detector de formato.

Define el contrato para determinar en qué formato viene un payload cuando
el llamador no lo declara.

La implementación actual es por firmas estructurales (prefijo "01,", tags
":20:", namespace camt.053). La interfaz permite cambiarla por algo más
estricto sin tocar el servicio.
"""

from abc import ABC, abstractmethod

from treasury_statements.domain.models.statement_format import StatementFormat


class FormatDetector(ABC):
    """Interfaz para identificar el formato de un estado de cuenta."""

    @abstractmethod
    def detect(self, content: str) -> StatementFormat:
        """Identifica el formato a partir del contenido crudo.

        Debe ser una función pura: el mismo contenido siempre produce el
        mismo resultado.

        Returns:
            BAI2, MT940 o CAMT053 si alguna firma coincide.
            StatementFormat.UNKNOWN si no (nunca None).
        """
        ...
