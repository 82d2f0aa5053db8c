"""
Puerto de salida: Escritor de resultados.

Define el contrato para persistir los Statements decodificados en algún
formato (Excel hoy). El motor de decodificación no escribe archivos; este
puerto solo lo usa el CLI.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from treasury_statements.domain.models.statement import Statement


class OutputWriter(ABC):
    """Interfaz para escribir resultados de decodificación."""

    @abstractmethod
    def write_single(
        self, statements: Sequence[Statement], output_path: Path, source: str = ""
    ) -> Path:
        """Escribe los Statements de un solo payload.

        Args:
            statements: Resultado de decodificar un archivo.
            output_path: Ruta donde crear el archivo de salida.
            source: Nombre del archivo origen (columna "Archivo").

        Returns:
            Ruta real del archivo creado (puede diferir si se añadió extensión).

        Raises:
            OutputError: Si falla la escritura (permisos, disco lleno, etc.)
        """
        ...

    @abstractmethod
    def write_consolidated(
        self, statements_by_source: dict[str, Sequence[Statement]], output_path: Path
    ) -> Path:
        """Escribe la consolidación de varios payloads en un solo archivo.

        Args:
            statements_by_source: Nombre del archivo origen → Statements.
            output_path: Ruta donde crear el archivo consolidado.

        Raises:
            OutputError: Si falla la escritura o no hay nada que consolidar.
        """
        ...
