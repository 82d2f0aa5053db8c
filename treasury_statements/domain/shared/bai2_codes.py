"""
Tablas de códigos BAI2.

BAI2 no trae un indicador C/D en el registro 16: la dirección del
movimiento se deduce del código de tipo de 3 dígitos. Esta tabla es la que
usa conciliación aguas abajo, así que debe mantenerse EXACTA:

- Conjunto explícito de códigos de abono heredado del flujo de tesorería
  (incluye códigos de resumen 010-018 que algunos bancos mandan en el 16).
- Rangos del estándar BAI: 100-399 son abonos, 400-699 son cargos.
- Todo lo demás (700-999, códigos no numéricos) se trata como cargo.

Para MT940 y camt.053 no hace falta tabla: ambos traen indicador explícito.
"""

# Códigos de resumen del registro 03 que alimentan los saldos del Statement.
OPENING_BALANCE_CODES: frozenset[str] = frozenset({"010", "015"})
CLOSING_BALANCE_CODES: frozenset[str] = frozenset({"040", "045"})

_CREDIT_CODES: frozenset[str] = frozenset(
    {
        "010", "015", "016", "018", "100", "108", "115", "116", "118",
        "142", "165", "169", "195", "200", "201", "202", "206", "207",
        "208", "212", "213", "214", "215", "216", "218", "221", "222",
        "224", "226", "227", "229", "230", "231", "232", "233", "234",
        "235", "236", "237", "238", "239", "240", "241", "242", "243",
    }
)

_CREDIT_RANGE = range(100, 400)

_CODE_DESCRIPTIONS: dict[str, str] = {
    # --- Abonos ---
    "010": "Credit - Unknown",
    "015": "Lockbox Deposit",
    "016": "Item in Lockbox Deposit",
    "108": "Wire Transfer Credit",
    "115": "Incoming Money Transfer",
    "116": "ACH Settlement",
    "118": "ACH Credit Received",
    "142": "Book Transfer Credit",
    "165": "Preauthorized ACH Credit",
    "169": "Miscellaneous ACH Credit",
    "175": "Check Deposit Package",
    "195": "Check Deposit",
    "201": "Individual Automatic Transfer Credit",
    "206": "Book Transfer Credit",
    "208": "Individual International Money Transfer Credit",
    "275": "ZBA Credit",
    "301": "Commercial Deposit",
    "399": "Miscellaneous Credit",
    # --- Cargos ---
    "400": "Debit - Unknown",
    "408": "Wire Transfer Debit",
    "416": "ACH Debit Settlement",
    "421": "ACH Debit Return",
    "451": "ACH Debit Received",
    "455": "Outgoing Money Transfer",
    "475": "Check Paid",
    "495": "Check Paid",
    "501": "Individual Automatic Transfer Debit",
    "506": "Book Transfer Debit",
    "560": "Account Analysis Fee",
    "561": "Account Maintenance Fee",
    "566": "Wire Transfer Fee",
    "575": "ZBA Debit",
    "699": "Miscellaneous Debit",
    "890": "Miscellaneous Fee",
}


def is_credit_code(code: str) -> bool:
    """Indica si un código de tipo BAI2 representa un abono.

    Ejemplos:
        >>> is_credit_code("115")
        True
        >>> is_credit_code("475")
        False
        >>> is_credit_code("ABC")
        False
    """
    code = code.strip()
    if code in _CREDIT_CODES:
        return True
    if code.isascii() and code.isdigit():
        return int(code) in _CREDIT_RANGE
    return False


def describe_code(code: str) -> str:
    """Descripción legible de un código BAI2. Nunca devuelve cadena vacía.

    Ejemplos:
        >>> describe_code("495")
        'Check Paid'
        >>> describe_code("123")
        'Transaction Code: 123'
    """
    code = code.strip()
    return _CODE_DESCRIPTIONS.get(code) or f"Transaction Code: {code or 'N/A'}"
