"""
Adaptador de entrada: Lector de payloads desde archivo.

Lee el archivo completo en memoria (los estados de cuenta pesan a lo sumo
unos pocos MB) y lo convierte a texto con la misma cascada de encodings
que usa el servicio para payloads binarios.
"""

from pathlib import Path

from treasury_statements.domain.exceptions import ExtractionError
from treasury_statements.domain.ports.payload_reader import PayloadReader
from treasury_statements.domain.shared.text_cleaner import decode_payload

# Extensiones habituales de los portales bancarios. Se comparan en minúsculas.
DEFAULT_EXTENSIONS: frozenset[str] = frozenset(
    {".bai", ".bai2", ".txt", ".dat", ".sta", ".mt940", ".940", ".fin", ".xml", ".camt"}
)


class FilePayloadReader(PayloadReader):
    """Lee archivos de texto / XML de estados de cuenta."""

    def __init__(self, extensions: frozenset[str] = DEFAULT_EXTENSIONS) -> None:
        """
        Args:
            extensions: Extensiones aceptadas (con punto, en minúsculas).
        """
        self._extensions = frozenset(ext.lower() for ext in extensions)

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self._extensions

    def read(self, file_path: Path) -> str:
        """Lee el archivo completo.

        Raises:
            ExtractionError: Si no se puede leer o está vacío.
        """
        try:
            payload = file_path.read_bytes()
        except OSError as e:
            raise ExtractionError(str(file_path), str(e))

        if not payload.strip():
            raise ExtractionError(str(file_path), "El archivo está vacío")

        return decode_payload(payload)
