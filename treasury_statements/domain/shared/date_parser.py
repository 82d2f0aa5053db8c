"""
Conversión de fechas de los formatos bancarios a ISO 8601.

BAI2 y MT940 escriben las fechas como YYMMDD (el :61: de MT940 además trae
una fecha MMDD que reutiliza el año de la fecha principal). camt.053 ya
usa ISO 8601 y no necesita conversión.

Regla del siglo: año de 2 dígitos + 2000, sin ventana de 100 años. No hay
estados de cuenta operativos anteriores al 2000 en este flujo.
"""

import re
from datetime import date

_YYMMDD_PATTERN = re.compile(r"^(\d{2})(\d{2})(\d{2})$")
_MMDD_PATTERN = re.compile(r"^(\d{2})(\d{2})$")

CENTURY_OFFSET = 2000


def parse_yymmdd(date_text: str) -> date:
    """Parsea una fecha YYMMDD.

    Raises:
        ValueError: Si no son 6 dígitos o la fecha no existe (ej: 240230).

    Ejemplos:
        >>> parse_yymmdd("240101")
        datetime.date(2024, 1, 1)
    """
    text = date_text.strip()
    m = _YYMMDD_PATTERN.match(text)
    if not m:
        raise ValueError(f"Fecha YYMMDD esperada, recibido: '{date_text}'")
    year = CENTURY_OFFSET + int(m.group(1))
    return _build_date(year, int(m.group(2)), int(m.group(3)), text)


def parse_mmdd(date_text: str, year: int) -> date:
    """Parsea una fecha MMDD usando el año indicado.

    Ejemplos:
        >>> parse_mmdd("0105", 2024)
        datetime.date(2024, 1, 5)
    """
    text = date_text.strip()
    m = _MMDD_PATTERN.match(text)
    if not m:
        raise ValueError(f"Fecha MMDD esperada, recibido: '{date_text}'")
    return _build_date(year, int(m.group(1)), int(m.group(2)), text)


def yymmdd_to_iso(date_text: str) -> str | None:
    """Variante tolerante: devuelve la fecha ISO o None si no es válida.

    Se usa en campos opcionales de BAI2 (fecha de archivo, as-of date,
    fecha valor) donde una fecha corrupta simplemente se ignora.
    """
    try:
        return parse_yymmdd(date_text).isoformat()
    except ValueError:
        return None


def _build_date(year: int, month: int, day: int, original_text: str) -> date:
    """Construye un objeto date con un mensaje de error que incluye el texto
    original (ej: 31 de febrero)."""
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(
            f"Fecha inválida construida de '{original_text}': "
            f"año={year}, mes={month}, día={day}: {e}"
        )
