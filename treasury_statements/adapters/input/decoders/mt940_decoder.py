"""
Adaptador de entrada: Decodificador MT940 (SWIFT Customer Statement).

Un MT940 es una secuencia de campos con tag ":NN[A]:" al inicio de línea.
El valor de un campo puede ocupar varias líneas, hasta el siguiente tag:

    :20:  Referencia de la transacción → inicia un estado de cuenta
    :25:  Cuenta (ruta con '/', el último segmento es el número)
    :28C: Número de estado / secuencia (se ignora)
    :60F: Saldo inicial (:60M: intermedio)
    :61:  Línea de estado (un movimiento)
    :86:  Información para el titular (narrativa del :61: anterior)
    :62F: Saldo final (:62M: intermedio)
    :64:  Saldo disponible (se ignora)

GRAMÁTICA DE SALDOS (:60F: / :62F:):
    [C|D] YYMMDD CCY monto       Ejemplo: C240101USD100000,00

GRAMÁTICA DEL :61:
    YYMMDD [MMDD] marca [fondos] monto [N|F|S tipo] [ref_cliente] [//ref_banco]
    [\\n detalles suplementarios]
    Ejemplo: 2401020102CR50000,00NTRFINV-2024-001//BNK123

Los saldos son el ÚNICO lugar donde se guarda un monto con signo: el propio
formato los firma con C/D. Los movimientos conservan magnitud + tipo.

Un :61: mal formado se omite (queda en skipped_lines) y el resto del bloque
se decodifica normalmente.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.models.transaction import Transaction, TransactionType
from treasury_statements.domain.ports.statement_decoder import StatementDecoder
from treasury_statements.domain.shared.date_parser import parse_mmdd, parse_yymmdd
from treasury_statements.domain.shared.money import parse_swift_amount
from treasury_statements.domain.shared.text_cleaner import join_narrative, normalize_line_endings

NO_CURRENCY = "XXX"
DEFAULT_DESCRIPTION = "Transaction"

_BLOCK_START = re.compile(r"^:20:", re.MULTILINE)
_TAG_PATTERN = re.compile(r"^:(\d{2}[A-Z]?):", re.MULTILINE)

_BALANCE_PATTERN = re.compile(
    r"^(?P<mark>[CD])(?P<date>\d{6})(?P<currency>[A-Z]{3})(?P<amount>\d+(?:[,.]\d*)?)"
)

_STATEMENT_LINE_PATTERN = re.compile(
    r"^(?P<date>\d{6})"
    r"(?P<entry_date>\d{4})?"
    r"(?P<mark>RC|RD|CR|DR|C|D)"
    r"(?P<funds>[A-Z])?"
    r"(?P<amount>\d+(?:[,.]\d*)?)"
    r"(?P<type>[NFS][A-Z0-9]{3})?"
    r"(?P<customer_ref>.*?)"
    r"(?://(?P<bank_ref>.*))?$"
)

# Marcas que representan un abono: crédito normal y reverso de débito.
_CREDIT_MARKS = frozenset({"C", "CR", "RD"})


class MtField(NamedTuple):
    """Un campo tag/valor del mensaje."""

    tag: str
    value: str
    offset: int
    """Posición del tag dentro del bloque (para calcular el número de línea)."""


class _Balance(NamedTuple):
    amount: Decimal
    currency: str
    date: str


@dataclass
class _PendingLine:
    """:61: ya parseado que espera su posible :86:."""

    date: str
    value_date: str
    amount: Decimal
    is_credit: bool
    transaction_code: str | None
    reference: str | None
    bank_reference: str | None
    supplementary: str


class _SkipLine(Exception):
    """Señal interna: el :61: actual está mal formado y se omite."""


# =================================================================
# TOKENIZADOR (sin estado)
# =================================================================


def next_field(block: str, pos: int = 0) -> tuple[MtField, int] | None:
    """Devuelve el siguiente campo a partir de `pos` y la nueva posición.

    No guarda estado entre llamadas: toda la información de avance viaja en
    el valor de retorno.

    Returns:
        (campo, nueva_posición) o None si no hay más tags.

    Ejemplos:
        >>> field, pos = next_field(":20:REF\\n:25:ACCT\\n")
        >>> field.tag, field.value
        ('20', 'REF')
    """
    match = _TAG_PATTERN.search(block, pos)
    if match is None:
        return None

    following = _TAG_PATTERN.search(block, match.end())
    end = following.start() if following else len(block)
    value = _strip_envelope(block[match.end() : end])
    return MtField(tag=match.group(1), value=value, offset=match.start()), end


def iter_fields(block: str) -> Iterator[MtField]:
    """Itera todos los campos de un bloque usando next_field."""
    pos = 0
    while True:
        result = next_field(block, pos)
        if result is None:
            return
        field_, pos = result
        yield field_


def _strip_envelope(value: str) -> str:
    """Quita las líneas del sobre SWIFT ('-}', '-', '}') y espacios finales."""
    kept = []
    for line in value.split("\n"):
        stripped = line.strip()
        if stripped == "-" or stripped.startswith("-}") or stripped == "}":
            continue
        kept.append(line.rstrip())
    return "\n".join(kept).strip()


# =================================================================
# DECODIFICADOR
# =================================================================


class Mt940Decoder(StatementDecoder):
    """Decodificador de mensajes MT940."""

    @property
    def format(self) -> StatementFormat:
        return StatementFormat.MT940

    def decode(self, content: str) -> list[Statement]:
        """Decodifica todos los bloques :20: del contenido.

        Los bloques sin :25: (sin cuenta) se descartan completos.
        """
        text = normalize_line_endings(content)
        starts = [m.start() for m in _BLOCK_START.finditer(text)]

        statements: list[Statement] = []
        for i, start in enumerate(starts):
            end = starts[i + 1] if i + 1 < len(starts) else len(text)
            first_line = text.count("\n", 0, start) + 1
            statement = self._decode_block(text[start:end], first_line)
            if statement is not None:
                statements.append(statement)
        return statements

    def _decode_block(self, block: str, first_line: int) -> Statement | None:
        account_number = ""
        balances: dict[str, _Balance] = {}
        transactions: list[Transaction] = []
        skipped: list[SkippedLine] = []
        pending: _PendingLine | None = None

        for mt_field in iter_fields(block):
            line_number = first_line + block.count("\n", 0, mt_field.offset)
            tag = mt_field.tag

            if tag == "86":
                if pending is not None:
                    transactions.append(_build_transaction(pending, mt_field.value))
                    pending = None
                continue

            # Cualquier otro tag cierra el :61: pendiente sin narrativa.
            if pending is not None:
                transactions.append(_build_transaction(pending, ""))
                pending = None

            if tag in ("25", "25P"):
                account_number = _account_from_path(mt_field.value)

            elif tag in ("60F", "60M", "62F", "62M"):
                try:
                    balances[tag] = _parse_balance(mt_field.value)
                except ValueError as e:
                    skipped.append(SkippedLine.of(line_number, tag, mt_field.value, str(e)))

            elif tag == "61":
                try:
                    pending = _parse_statement_line(mt_field.value)
                except _SkipLine as e:
                    skipped.append(SkippedLine.of(line_number, tag, mt_field.value, str(e)))

        if pending is not None:
            transactions.append(_build_transaction(pending, ""))

        if not account_number:
            return None

        opening = balances.get("60F") or balances.get("60M")
        closing = balances.get("62F") or balances.get("62M")
        reference_balance = opening or closing
        currency = reference_balance.currency if reference_balance else NO_CURRENCY

        return Statement(
            format=StatementFormat.MT940,
            account_number=account_number,
            currency=currency,
            statement_date=closing.date if closing else (opening.date if opening else ""),
            period_start=opening.date if opening else "",
            period_end=closing.date if closing else "",
            opening_balance=opening.amount if opening else None,
            closing_balance=closing.amount if closing else None,
            transactions=tuple(transactions),
            skipped_lines=tuple(skipped),
        )


# =================================================================
# FUNCIONES INTERNAS
# =================================================================


def _account_from_path(value: str) -> str:
    """':25:' puede ser 'BIC/CUENTA' o solo 'CUENTA'. Gana el último segmento."""
    first_line = value.split("\n")[0].strip()
    last_segment = first_line.split("/")[-1].strip()
    return last_segment or first_line


def _parse_balance(value: str) -> _Balance:
    """Parsea un saldo :60F:/:62F:. D produce un monto negativo.

    Raises:
        ValueError: Si no cumple la gramática o la fecha no existe.
    """
    match = _BALANCE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Saldo no cumple [C|D]YYMMDDCCYmonto: '{value}'")

    amount = parse_swift_amount(match.group("amount"))
    if match.group("mark") == "D":
        amount = -amount
    return _Balance(
        amount=amount,
        currency=match.group("currency"),
        date=parse_yymmdd(match.group("date")).isoformat(),
    )


def _parse_statement_line(value: str) -> _PendingLine:
    """Parsea un :61:. Solo la primera línea lleva la gramática; las
    siguientes son detalles suplementarios.

    Raises:
        _SkipLine: Si faltan la fecha, la marca C/D o el monto.
    """
    lines = value.split("\n")
    main = lines[0].strip()

    match = _STATEMENT_LINE_PATTERN.match(main)
    if not match:
        if not re.match(r"^\d{6}", main):
            raise _SkipLine("Falta la fecha YYMMDD")
        raise _SkipLine("No se encontró la marca C/D seguida de un monto")

    try:
        booking = parse_yymmdd(match.group("date"))
    except ValueError as e:
        raise _SkipLine(str(e))

    value_date = booking
    if match.group("entry_date"):
        try:
            value_date = parse_mmdd(match.group("entry_date"), booking.year)
        except ValueError:
            # Fecha MMDD corrupta: se conserva la fecha principal.
            value_date = booking

    try:
        amount = parse_swift_amount(match.group("amount"))
    except ValueError as e:
        raise _SkipLine(str(e))

    type_code = match.group("type")
    customer_ref = (match.group("customer_ref") or "").strip()
    bank_ref = (match.group("bank_ref") or "").strip()

    return _PendingLine(
        date=booking.isoformat(),
        value_date=value_date.isoformat(),
        amount=amount,
        is_credit=match.group("mark") in _CREDIT_MARKS,
        transaction_code=type_code[1:] if type_code else None,
        reference=customer_ref if customer_ref and customer_ref != "NONREF" else None,
        bank_reference=bank_ref or None,
        supplementary=join_narrative(lines[1:]),
    )


def _build_transaction(pending: _PendingLine, narrative: str) -> Transaction:
    description = join_narrative(narrative.split("\n")) or pending.supplementary or DEFAULT_DESCRIPTION
    return Transaction(
        date=pending.date,
        value_date=pending.value_date,
        amount=pending.amount,
        type=TransactionType.CREDIT if pending.is_credit else TransactionType.DEBIT,
        transaction_code=pending.transaction_code,
        reference=pending.reference,
        bank_reference=pending.bank_reference,
        description=description,
    )
