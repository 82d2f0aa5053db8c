"""
Utilidades para manejo de montos monetarios.

CONTEXTO DEL PROBLEMA:
Cada formato de estado de cuenta escribe los montos a su manera:

- BAI2:     enteros en unidades menores, sin punto decimal: "123456" = 1234.56
            Los saldos pueden llevar signo: "-5000" = -50.00
- MT940:    coma como separador decimal: "100000,00", "1234," (sin centavos)
- camt.053: notación XML estándar con punto: "1234.56"

Hacer `float(x) / 100` produce 1234.5599999... y rompe la conciliación
centavo a centavo. Todas las funciones de este módulo devuelven Decimal y
escalan con aritmética exacta.

Las funciones lanzan ValueError ante texto no parseable. Son los
decodificadores quienes deciden si eso descarta la línea completa.
"""

import re
from decimal import Decimal, InvalidOperation

_MINOR_UNITS_PATTERN = re.compile(r"^([+-]?)(\d+)$")
_SWIFT_AMOUNT_PATTERN = re.compile(r"^(\d+)(?:[,.](\d*))?$")
_CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")

# Tope de dígitos enteros de un monto. Por encima se desborda el contexto
# decimal por defecto.
MAX_INTEGER_DIGITS = 18


def parse_minor_units(text: str, decimals: int = 2) -> Decimal:
    """Convierte un monto BAI2 en unidades menores a unidades mayores.

    Args:
        text: Dígitos con signo opcional. Ejemplo: "123456", "-5000", "+10".
        decimals: Posiciones decimales implícitas (2 para centavos).

    Returns:
        Decimal exacto en unidades mayores.

    Raises:
        ValueError: Si el texto está vacío o no es un entero.

    Ejemplos:
        >>> parse_minor_units("123456")
        Decimal('1234.56')
        >>> parse_minor_units("-5000")
        Decimal('-50.00')
    """
    cleaned = text.strip()
    match = _MINOR_UNITS_PATTERN.match(cleaned)
    if not match:
        raise ValueError(f"Monto en unidades menores inválido: '{text}'")

    sign, digits = match.groups()
    if len(digits.lstrip("0")) > MAX_INTEGER_DIGITS + decimals:
        raise ValueError(f"Monto fuera de rango: '{text}'")
    # scaleb mueve el exponente sin pasar por binario: 123456E-2 = 1234.56
    amount = Decimal(int(digits)).scaleb(-decimals)
    return -amount if sign == "-" else amount


def parse_swift_amount(text: str) -> Decimal:
    """Convierte un monto SWIFT (coma decimal) a Decimal.

    El estándar exige coma como separador y permite omitir los decimales
    ("1234,"). Se acepta también punto porque algunos bancos lo emiten.

    Ejemplos:
        >>> parse_swift_amount("100000,00")
        Decimal('100000.00')
        >>> parse_swift_amount("1234,")
        Decimal('1234')
    """
    cleaned = text.strip()
    match = _SWIFT_AMOUNT_PATTERN.match(cleaned)
    if not match:
        raise ValueError(f"Monto SWIFT inválido: '{text}'")

    integer, fraction = match.groups()
    if len(integer.lstrip("0")) > MAX_INTEGER_DIGITS:
        raise ValueError(f"Monto SWIFT fuera de rango: '{text}'")
    if fraction:
        return Decimal(f"{integer}.{fraction}")
    return Decimal(integer)


def parse_decimal(text: str) -> Decimal:
    """Convierte un monto XML (xs:decimal) a Decimal.

    Raises:
        ValueError: Si el texto no es un decimal finito.
    """
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("El texto del monto está vacío")
    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"No se pudo convertir a monto: '{text}'")
    if not result.is_finite():
        raise ValueError(f"Monto no finito: '{text}'")
    if result.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValueError(f"Monto fuera de rango: '{text}'")
    return result


def format_money(amount: Decimal) -> str:
    """Formatea un Decimal como string monetario legible.

    Útil para la bitácora de discrepancias.

    Ejemplos:
        >>> format_money(Decimal("1234567.89"))
        '1,234,567.89'
        >>> format_money(Decimal("-50"))
        '-50.00'
    """
    amount = amount.quantize(Decimal("0.01"))
    if amount < 0:
        return f"-{abs(amount):,.2f}"
    return f"{amount:,.2f}"


def is_currency_code(text: str) -> bool:
    """Indica si el texto es un código de moneda ISO 4217 (3 letras ASCII).

    `str.isalpha()` no basta: acepta letras como 'É'.

    Ejemplos:
        >>> is_currency_code("USD")
        True
        >>> is_currency_code("ÉUR")
        False
    """
    return _CURRENCY_PATTERN.fullmatch(text) is not None


def normalize_currency(text: str | None) -> str:
    """Código de moneda en mayúsculas, o "" si el texto no es uno válido."""
    text = (text or "").strip().upper()
    return text if is_currency_code(text) else ""
