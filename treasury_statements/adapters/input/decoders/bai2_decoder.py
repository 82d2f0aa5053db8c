"""
Adaptador de entrada: Decodificador BAI2.

BAI2 (Bank Administration Institute) es el formato de reportería de cash
management de los bancos de EE.UU. Cada línea es un registro delimitado por
comas cuyo primer campo es el TIPO de registro:

    01  Encabezado de archivo   → fecha de creación (fallback de fecha)
    02  Encabezado de grupo     → as-of date y moneda del grupo
    03  Identificador de cuenta → abre un Statement nuevo + saldos resumen
    16  Detalle de movimiento   → agrega un Transaction
    88  Continuación            → extiende el 03 o el 16 anterior
    49  Fin de cuenta           → totales de control (se ignoran)
    98  Fin de grupo            → totales de control (se ignoran)
    99  Fin de archivo          → cierra el Statement abierto

Los montos son enteros en unidades menores (centavos) sin signo en el 16 y
con signo opcional en los saldos del 03.

POLÍTICA DE RESILIENCIA:
Los feeds BAI2 llegan truncados con frecuencia por errores de transmisión.
Si falta el registro 99 se emiten igualmente los Statements armados hasta
ese punto. Un 16 corrupto se omite (queda en skipped_lines) sin afectar al
resto de la cuenta.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.models.transaction import Transaction, TransactionType
from treasury_statements.domain.ports.statement_decoder import StatementDecoder
from treasury_statements.domain.shared.bai2_codes import (
    CLOSING_BALANCE_CODES,
    OPENING_BALANCE_CODES,
    describe_code,
    is_credit_code,
)
from treasury_statements.domain.shared.date_parser import yymmdd_to_iso
from treasury_statements.domain.shared.money import normalize_currency, parse_minor_units
from treasury_statements.domain.shared.text_cleaner import join_narrative, normalize_line_endings

DEFAULT_CURRENCY = "USD"

_IGNORED_RECORDS = frozenset({"49", "98"})


class _SkipRecord(Exception):
    """Señal interna: el registro actual está mal formado y se omite."""


@dataclass
class _DetailDraft:
    """Registro 16 en construcción (puede recibir continuaciones 88)."""

    line_number: int
    type_code: str
    amount: Decimal
    value_date: str | None
    bank_reference: str | None
    reference: str | None
    text_parts: list[str] = field(default_factory=list)


@dataclass
class _AccountDraft:
    """Registro 03 en construcción, con sus movimientos."""

    line_number: int
    account_number: str
    currency: str
    as_of_date: str
    summary_fields: list[str] = field(default_factory=list)
    details: list[_DetailDraft] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)


class Bai2Decoder(StatementDecoder):
    """Decodificador de archivos BAI2."""

    @property
    def format(self) -> StatementFormat:
        return StatementFormat.BAI2

    def decode(self, content: str) -> list[Statement]:
        """Decodifica un archivo BAI2 completo.

        Nunca lanza: registros desconocidos o mal formados se omiten y se
        registran en el Statement más cercano.
        """
        accounts: list[_AccountDraft] = []
        orphans: list[SkippedLine] = []

        current: _AccountDraft | None = None
        last_record = ""
        file_date = ""
        group_date = ""
        group_currency = ""

        lines = normalize_line_endings(content).split("\n")
        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()
            if not line:
                continue

            fields = _split_record(line)
            record_type = fields[0]

            if record_type == "01":
                file_date = yymmdd_to_iso(_field(fields, 3)) or ""

            elif record_type == "02":
                group_date = yymmdd_to_iso(_field(fields, 4)) or ""
                group_currency = normalize_currency(_field(fields, 6))

            elif record_type == "03":
                current = _AccountDraft(
                    line_number=line_number,
                    account_number=_field(fields, 1),
                    currency=normalize_currency(_field(fields, 2))
                    or group_currency
                    or DEFAULT_CURRENCY,
                    as_of_date=group_date or file_date,
                    summary_fields=fields[3:],
                )
                accounts.append(current)

            elif record_type == "16":
                if current is None:
                    orphans.append(
                        SkippedLine.of(line_number, "16", line, "Detalle 16 sin cuenta 03 abierta")
                    )
                    last_record = ""
                    continue
                try:
                    current.details.append(_parse_detail(fields, line_number))
                except _SkipRecord as e:
                    current.skipped.append(SkippedLine.of(line_number, "16", line, str(e)))
                    last_record = ""
                    continue

            elif record_type == "88":
                if not self._apply_continuation(current, last_record, fields):
                    skipped = SkippedLine.of(
                        line_number, "88", line, "Continuación 88 sin registro 03/16 previo"
                    )
                    (current.skipped if current else orphans).append(skipped)
                # Una cadena de 88 sigue extendiendo el mismo registro.
                continue

            elif record_type == "99":
                current = None

            elif record_type not in _IGNORED_RECORDS:
                skipped = SkippedLine.of(
                    line_number, record_type, line, f"Tipo de registro desconocido: '{record_type}'"
                )
                (current.skipped if current else orphans).append(skipped)

            last_record = record_type

        if not accounts:
            return []

        # Líneas huérfanas: las anteriores al primer 03 van al primer
        # Statement, el resto (fuera de cualquier cuenta) al último.
        first_line = accounts[0].line_number
        accounts[0].skipped[:0] = [s for s in orphans if s.line_number < first_line]
        accounts[-1].skipped.extend(s for s in orphans if s.line_number > first_line)

        return [self._build_statement(account) for account in accounts]

    # =================================================================
    # MÉTODOS PRIVADOS
    # =================================================================

    @staticmethod
    def _apply_continuation(
        current: _AccountDraft | None, last_record: str, fields: list[str]
    ) -> bool:
        """Aplica un registro 88 al registro lógico anterior.

        Returns:
            False si no hay a qué aplicarlo.
        """
        if current is None:
            return False
        if last_record == "03":
            current.summary_fields.extend(fields[1:])
            return True
        if last_record == "16" and current.details:
            current.details[-1].text_parts.append(",".join(fields[1:]))
            return True
        return False

    def _build_statement(self, account: _AccountDraft) -> Statement:
        opening, closing, summary_skipped = _parse_summary(account)

        transactions = []
        for detail in account.details:
            tx_date = account.as_of_date or detail.value_date or ""
            transactions.append(
                Transaction(
                    date=tx_date,
                    value_date=detail.value_date or tx_date,
                    amount=detail.amount,
                    type=(
                        TransactionType.CREDIT
                        if is_credit_code(detail.type_code)
                        else TransactionType.DEBIT
                    ),
                    transaction_code=detail.type_code,
                    reference=detail.reference,
                    bank_reference=detail.bank_reference,
                    description=join_narrative(detail.text_parts) or describe_code(detail.type_code),
                )
            )

        skipped = sorted(summary_skipped + account.skipped, key=lambda s: s.line_number)
        return Statement(
            format=StatementFormat.BAI2,
            account_number=account.account_number,
            currency=account.currency,
            statement_date=account.as_of_date,
            period_start=account.as_of_date,
            period_end=account.as_of_date,
            opening_balance=opening,
            closing_balance=closing,
            transactions=tuple(transactions),
            skipped_lines=tuple(skipped),
        )


# =================================================================
# FUNCIONES INTERNAS
# =================================================================


def _split_record(line: str) -> list[str]:
    """Separa un registro en campos, quitando el delimitador final '/'."""
    if line.endswith("/"):
        line = line[:-1]
    return [part.strip() for part in line.split(",")]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def _skip_funds_distribution(fields: list[str], index: int, funds_type: str) -> int:
    """Avanza el índice sobre los campos extra del tipo de fondos.

    S = tres montos (inmediato, 1 día, 2+ días)
    D = cantidad N seguida de N pares (días, monto)
    V se maneja aparte porque trae la fecha valor.
    """
    if funds_type == "S":
        return index + 3
    if funds_type == "D":
        count_text = _field(fields, index)
        count = int(count_text) if count_text.isascii() and count_text.isdigit() else 0
        return index + 1 + 2 * count
    return index


def _parse_detail(fields: list[str], line_number: int) -> _DetailDraft:
    """Parsea un registro 16.

    Layout: 16,tipo,monto,tipo_fondos,[distribución],[fecha_valor,hora],
            ref_banco,ref_cliente,texto

    Raises:
        _SkipRecord: Si falta el código o el monto no es válido.
    """
    type_code = _field(fields, 1)
    if not type_code:
        raise _SkipRecord("Falta el código de tipo")

    amount_text = _field(fields, 2)
    if not amount_text:
        raise _SkipRecord("Falta el monto")
    try:
        amount = parse_minor_units(amount_text)
    except ValueError as e:
        raise _SkipRecord(str(e))
    if amount < 0:
        raise _SkipRecord(f"Monto con signo en detalle: '{amount_text}'")

    funds_type = _field(fields, 3).upper()
    index = _skip_funds_distribution(fields, 4, funds_type)

    value_date = None
    if funds_type == "V":
        value_date = yymmdd_to_iso(_field(fields, index))
        index += 2
    else:
        # Muchos bancos mandan fecha valor + hora aunque el tipo de fondos
        # no sea V. Solo se consume si es una fecha YYMMDD válida.
        candidate = yymmdd_to_iso(_field(fields, index))
        if candidate is not None:
            value_date = candidate
            index += 2

    text = ",".join(fields[index + 2 :])
    return _DetailDraft(
        line_number=line_number,
        type_code=type_code,
        amount=amount,
        value_date=value_date,
        bank_reference=_field(fields, index) or None,
        reference=_field(fields, index + 1) or None,
        text_parts=[text] if text else [],
    )


def _parse_summary(
    account: _AccountDraft,
) -> tuple[Decimal | None, Decimal | None, list[SkippedLine]]:
    """Recorre los grupos resumen del 03: tipo,monto,conteo,tipo_fondos[...]

    010/015 alimentan el saldo inicial y 040/045 el final. Gana la primera
    aparición de cada uno.
    """
    opening: Decimal | None = None
    closing: Decimal | None = None
    skipped: list[SkippedLine] = []

    fields = account.summary_fields
    index = 0
    while index < len(fields):
        type_code = fields[index]
        amount_text = _field(fields, index + 1)
        funds_type = _field(fields, index + 3).upper()
        index = _skip_funds_distribution(fields, index + 4, funds_type)
        if funds_type == "V":
            index += 2

        if not type_code or not amount_text:
            continue
        try:
            amount = parse_minor_units(amount_text)
        except ValueError as e:
            skipped.append(
                SkippedLine.of(account.line_number, "03", ",".join(fields), f"Resumen {type_code}: {e}")
            )
            continue

        if type_code in OPENING_BALANCE_CODES and opening is None:
            opening = amount
        elif type_code in CLOSING_BALANCE_CODES and closing is None:
            closing = amount

    return opening, closing, skipped
