"""
Adaptador de entrada: Decodificador camt.053 (ISO 20022 Bank to Customer
Statement).

Estructura que se recorre:

    Document
    └── BkToCstmrStmt
        ├── GrpHdr/CreDtTm
        └── Stmt (1..n)
            ├── Acct/Id/IBAN | Acct/Id/Othr/Id, Acct/Ccy, Acct/Nm
            ├── FrToDt/FrDtTm, FrToDt/ToDtTm
            ├── Bal (0..n)   Tp/CdOrPrtry/Cd = OPBD | CLBD, Amt, CdtDbtInd
            └── Ntry (0..n)  Amt, CdtDbtInd, BookgDt, ValDt, BkTxCd,
                             AddtlNtryInf, NtryDtls/TxDtls/...

DECISIONES:
- Se usa xml.etree.ElementTree y se comparan NOMBRES LOCALES: el namespace
  cambia con cada versión del esquema (camt.053.001.02, .001.08, ...) y no
  aporta nada para leer los datos.
- Los atributos se ignoran (incluido Amt/@Ccy).
- Todo elemento repetible se obtiene SIEMPRE como lista (_children), así un
  solo <Stmt> se trata igual que varios.
- XML inválido → lista vacía (el decodificador es una función total).
"""

import xml.etree.ElementTree as ET
from decimal import Decimal

from treasury_statements.domain.models.skipped_line import SkippedLine
from treasury_statements.domain.models.statement import Statement
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.models.transaction import Transaction, TransactionType
from treasury_statements.domain.ports.statement_decoder import StatementDecoder
from treasury_statements.domain.shared.money import normalize_currency, parse_decimal
from treasury_statements.domain.shared.text_cleaner import clean_whitespace, join_narrative

NO_CURRENCY = "XXX"
DEFAULT_DESCRIPTION = "Transaction"

OPENING_BALANCE_CODE = "OPBD"
CLOSING_BALANCE_CODE = "CLBD"
CREDIT_INDICATOR = "CRDT"

# Referencias que el estándar usa como "sin valor".
_EMPTY_REFERENCES = frozenset({"NOTPROVIDED", "NONREF"})


class Camt053Decoder(StatementDecoder):
    """Decodificador de mensajes camt.053."""

    @property
    def format(self) -> StatementFormat:
        return StatementFormat.CAMT053

    def decode(self, content: str) -> list[Statement]:
        """Decodifica todos los <Stmt> del documento."""
        try:
            root = ET.fromstring(content.lstrip("\ufeff").strip())
        except (ET.ParseError, ValueError):
            # ValueError: declaraciones de codificación que expat no soporta.
            return []

        if _local(root.tag) == "BkToCstmrStmt":
            container = root
        else:
            container = _find(root, "BkToCstmrStmt")
        if container is None:
            return []

        group_date = _text(container, "GrpHdr/CreDtTm") or ""
        return [self._decode_statement(stmt, group_date) for stmt in _children(container, "Stmt")]

    def _decode_statement(self, stmt: ET.Element, group_date: str) -> Statement:
        statement_date = _text(stmt, "CreDtTm") or group_date
        skipped: list[SkippedLine] = []

        opening: Decimal | None = None
        closing: Decimal | None = None
        opening_date = closing_date = ""
        for bal in _children(stmt, "Bal"):
            code = _text(bal, "Tp/CdOrPrtry/Cd", "Tp/CdOrPrtry/Prtry")
            if code not in (OPENING_BALANCE_CODE, CLOSING_BALANCE_CODE):
                continue
            try:
                amount = _signed_amount(bal)
            except ValueError as e:
                skipped.append(SkippedLine.of(0, "Bal", _text(bal, "Amt") or "", f"{code}: {e}"))
                continue
            balance_date = _text(bal, "Dt/Dt", "Dt/DtTm") or ""
            if code == OPENING_BALANCE_CODE:
                opening, opening_date = amount, balance_date
            else:
                closing, closing_date = amount, balance_date

        transactions: list[Transaction] = []
        for entry in _children(stmt, "Ntry"):
            try:
                transactions.append(_parse_entry(entry, statement_date))
            except ValueError as e:
                raw = _text(entry, "NtryRef", "AcctSvcrRef", "Amt") or ""
                skipped.append(SkippedLine.of(0, "Ntry", raw, str(e)))

        return Statement(
            format=StatementFormat.CAMT053,
            account_number=_text(stmt, "Acct/Id/IBAN", "Acct/Id/Othr/Id") or "",
            account_name=_text(stmt, "Acct/Nm", "Acct/Ownr/Nm"),
            currency=normalize_currency(_text(stmt, "Acct/Ccy")) or NO_CURRENCY,
            statement_date=statement_date,
            period_start=_text(stmt, "FrToDt/FrDtTm") or opening_date,
            period_end=_text(stmt, "FrToDt/ToDtTm") or closing_date,
            opening_balance=opening,
            closing_balance=closing,
            transactions=tuple(transactions),
            skipped_lines=tuple(skipped),
        )


# =================================================================
# RECORRIDO DEL ÁRBOL (sensible al esquema, sin namespaces)
# =================================================================


def _local(tag: str) -> str:
    """'{urn:iso:...camt.053.001.08}Stmt' → 'Stmt'"""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    """Hijos directos con ese nombre local. Siempre una lista."""
    return [child for child in element if _local(child.tag) == name]


def _find(element: ET.Element, path: str) -> ET.Element | None:
    """Primer elemento que sigue la ruta 'A/B/C' de nombres locales."""
    node = element
    for name in path.split("/"):
        matches = _children(node, name)
        if not matches:
            return None
        node = matches[0]
    return node


def _text(element: ET.Element | None, *paths: str) -> str | None:
    """Texto del primer path que exista y no esté vacío."""
    if element is None:
        return None
    for path in paths:
        node = _find(element, path)
        if node is not None and node.text and node.text.strip():
            return node.text.strip()
    return None


# =================================================================
# FUNCIONES INTERNAS
# =================================================================


def _signed_amount(element: ET.Element) -> Decimal:
    """Monto de un Bal con signo según CdtDbtInd (CRDT positivo)."""
    amount_text = _text(element, "Amt")
    if amount_text is None:
        raise ValueError("Falta el monto (Amt)")
    amount = abs(parse_decimal(amount_text))
    return amount if _text(element, "CdtDbtInd") == CREDIT_INDICATOR else -amount


def _parse_entry(entry: ET.Element, statement_date: str) -> Transaction:
    """Convierte un <Ntry> en Transaction.

    Raises:
        ValueError: Si falta el monto o no es un decimal válido.
    """
    amount_text = _text(entry, "Amt")
    if amount_text is None:
        raise ValueError("Falta el monto (Amt)")
    amount = abs(parse_decimal(amount_text))

    details = _find(entry, "NtryDtls/TxDtls")
    booking_date = _text(entry, "BookgDt/Dt", "BookgDt/DtTm") or statement_date

    return Transaction(
        date=booking_date,
        value_date=_text(entry, "ValDt/Dt", "ValDt/DtTm") or booking_date,
        amount=amount,
        type=(
            TransactionType.CREDIT
            if _text(entry, "CdtDbtInd") == CREDIT_INDICATOR
            else TransactionType.DEBIT
        ),
        transaction_code=_text(entry, "BkTxCd/Domn/Cd", "BkTxCd/Prtry/Cd"),
        reference=_reference(_text(entry, "NtryRef") or _text(details, "Refs/EndToEndId")),
        bank_reference=_reference(
            _text(entry, "AcctSvcrRef") or _text(details, "Refs/AcctSvcrRef")
        ),
        description=_description(entry, details),
        counterparty=_counterparty(details),
    )


def _reference(value: str | None) -> str | None:
    if value is None or value.upper() in _EMPTY_REFERENCES:
        return None
    return value


def _description(entry: ET.Element, details: ET.Element | None) -> str:
    """AddtlNtryInf → RmtInf/Ustrd (todas las líneas) → AddtlTxInf → genérico."""
    additional = _text(entry, "AddtlNtryInf")
    if additional:
        return clean_whitespace(additional)

    if details is not None:
        remittance = _find(details, "RmtInf")
        if remittance is not None:
            unstructured = join_narrative(
                [node.text or "" for node in _children(remittance, "Ustrd")]
            )
            if unstructured:
                return unstructured
        tx_info = _text(details, "AddtlTxInf")
        if tx_info:
            return clean_whitespace(tx_info)

    return DEFAULT_DESCRIPTION


def _counterparty(details: ET.Element | None) -> str | None:
    """Nombre de la contraparte: acreedor primero, deudor como respaldo.

    Soporta el layout de camt.053.001.02 (Cdtr/Nm) y el de .001.08
    (Cdtr/Pty/Nm), además de Id/OrgId/Nm.
    """
    if details is None:
        return None
    for role in ("RltdPties/Cdtr", "RltdPties/Dbtr"):
        party = _find(details, role)
        if party is None:
            continue
        name = _text(party, "Nm", "Pty/Nm", "Id/OrgId/Nm")
        if name:
            return clean_whitespace(name)
    return None
