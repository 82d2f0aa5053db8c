"""
Utilidades de limpieza de texto.

Funciones reutilizables para normalizar el payload crudo antes de que los
decodificadores lo procesen, y para armar narrativas de varias líneas.

Estas funciones NO tienen lógica de negocio (no saben de formatos ni montos).
Solo operan sobre strings puros.
"""

import re

# Orden de prueba al decodificar bytes. utf-8-sig quita el BOM que agregan
# algunos portales bancarios; cp1252 cubre los archivos generados en Windows.
_PAYLOAD_ENCODINGS = ("utf-8-sig", "cp1252")


def clean_whitespace(text: str) -> str:
    """Reemplaza múltiples espacios/tabs/saltos por un solo espacio y hace strip.

    Ejemplos:
        >>> clean_whitespace("  PAGO   NOMINA \\n ENERO ")
        'PAGO NOMINA ENERO'
    """
    return re.sub(r"\s+", " ", text).strip()


def normalize_line_endings(text: str) -> str:
    """Normaliza todos los saltos de línea a \\n.

    Los archivos bancarios llegan con \\r\\n (Windows), \\r (mainframe / Mac
    antiguo) o \\n (Unix).
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def join_narrative(parts: list[str]) -> str:
    """Une fragmentos de texto libre (continuaciones) con un espacio.

    Ejemplos:
        >>> join_narrative(["PAGO PROVEEDOR", "  FACTURA 123  ", ""])
        'PAGO PROVEEDOR FACTURA 123'
    """
    return clean_whitespace(" ".join(parts))


def decode_payload(payload: bytes) -> str:
    """Convierte el payload binario en texto.

    latin-1 nunca falla (todo byte es un carácter), así que esta función
    siempre devuelve un str.
    """
    for encoding in _PAYLOAD_ENCODINGS:
        try:
            return payload.decode(encoding)
        except UnicodeDecodeError:
            continue
    return payload.decode("latin-1")
