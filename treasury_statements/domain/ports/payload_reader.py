"""
Puerto de entrada: Lector de payloads.

Define el contrato para obtener el texto de un estado de cuenta a partir de
un archivo. El motor de decodificación no lee archivos: recibe texto. Este
puerto es lo que usa el CLI (y cualquier integración basada en archivos)
para llegar a ese texto.

    PayloadReader (interfaz)
    └── FilePayloadReader    → .bai, .bai2, .txt, .sta, .mt940, .xml, ...
"""

from abc import ABC, abstractmethod
from pathlib import Path


class PayloadReader(ABC):
    """Interfaz para leer el contenido de un archivo de estado de cuenta."""

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """Determina si este lector puede manejar el archivo dado.

        El StatementService itera por los lectores registrados y usa el
        primero cuyo can_handle devuelva True.
        """
        ...

    @abstractmethod
    def read(self, file_path: Path) -> str:
        """Lee el archivo y devuelve su contenido como texto.

        Raises:
            ExtractionError: Si el archivo no se puede leer o está vacío.
        """
        ...

    @property
    def name(self) -> str:
        """Nombre legible del lector."""
        return type(self).__name__
