"""
Modelo de dominio: Línea omitida durante la decodificación.

Los decodificadores descartan las líneas mal formadas en lugar de fallar.
Cada descarte queda registrado como un SkippedLine dentro del Statement al
que pertenecía, para que la degradación sea observable: el llamador puede
ignorarlos (comportamiento por defecto) o revisarlos / registrarlos en
bitácora.
"""

from dataclasses import dataclass

MAX_RAW_LENGTH = 120


@dataclass(frozen=True)
class SkippedLine:
    """Diagnóstico de una línea, campo o elemento descartado."""

    line_number: int
    """Número de línea (1-based) dentro del payload. 0 si el formato no es
    direccionable por línea (XML)."""

    record: str
    """Tipo de registro BAI2, tag MT940 o elemento camt.053. Ej: '16', '61', 'Ntry'."""

    raw: str
    """Texto original (recortado a MAX_RAW_LENGTH caracteres)."""

    reason: str
    """Motivo del descarte, legible por humanos."""

    @classmethod
    def of(cls, line_number: int, record: str, raw: str, reason: str) -> "SkippedLine":
        """Crea el diagnóstico recortando el texto original."""
        raw = raw.strip()
        if len(raw) > MAX_RAW_LENGTH:
            raw = raw[: MAX_RAW_LENGTH - 3] + "..."
        return cls(line_number=line_number, record=record, raw=raw, reason=reason)
