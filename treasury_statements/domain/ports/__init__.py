"""
Puertos (interfaces) del dominio.

Los puertos definen QUÉ necesita el dominio, sin decir CÓMO se implementa.
Cada puerto tiene uno o más adaptadores que lo implementan.

Uso:
    from treasury_statements.domain.ports import StatementDecoder, FormatDetector
"""

from treasury_statements.domain.ports.format_detector import FormatDetector
from treasury_statements.domain.ports.output_writer import OutputWriter
from treasury_statements.domain.ports.payload_reader import PayloadReader
from treasury_statements.domain.ports.process_logger import ProcessLogger
from treasury_statements.domain.ports.statement_decoder import StatementDecoder

__all__ = [
    "FormatDetector",
    "OutputWriter",
    "PayloadReader",
    "ProcessLogger",
    "StatementDecoder",
]
