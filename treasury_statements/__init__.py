"""
treasury-statements: decodificación de estados de cuenta bancarios
(BAI2, SWIFT MT940 e ISO 20022 camt.053) a un modelo normalizado.

Uso como librería:

    from treasury_statements import parse_statement

    statements = parse_statement(payload)              # detección automática
    statements = parse_statement(payload, "MT940")     # formato declarado

Los eventos de procesamiento se emiten por el logger "treasury_statements"
del módulo `logging`.
"""

from treasury_statements.adapters.input.format_detectors.signature_detector import (
    SignatureFormatDetector,
)
from treasury_statements.adapters.output.loggers.logging_logger import LoggingProcessLogger
from treasury_statements.domain.exceptions import (
    ExtractionError,
    FormatError,
    OutputError,
    StatementParserError,
)
from treasury_statements.domain.models import (
    AUTO_DETECT,
    SkippedLine,
    Statement,
    StatementFormat,
    StatementSummary,
    Transaction,
    TransactionType,
)
from treasury_statements.domain.services.statement_service import StatementService
from treasury_statements.infrastructure.registry import create_default_registry

__version__ = "0.1.0"

__all__ = [
    "AUTO_DETECT",
    "ExtractionError",
    "FormatError",
    "OutputError",
    "SkippedLine",
    "Statement",
    "StatementFormat",
    "StatementParserError",
    "StatementService",
    "StatementSummary",
    "Transaction",
    "TransactionType",
    "detect_format",
    "parse_statement",
]


def parse_statement(
    content: str | bytes, declared_format: str | StatementFormat | None = None
) -> list[Statement]:
    """Decodifica un payload con el registro y el detector por defecto.

    Raises:
        FormatError: Si no se puede determinar o no se soporta el formato.
    """
    service = StatementService(
        detector=SignatureFormatDetector(),
        registry=create_default_registry(),
        logger=LoggingProcessLogger(),
    )
    return service.parse(content, declared_format)


def detect_format(content: str) -> StatementFormat:
    """Devuelve el formato detectado, o StatementFormat.UNKNOWN."""
    return SignatureFormatDetector().detect(content)
