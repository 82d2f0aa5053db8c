"""
Adaptador de entrada: Detector de formato por firmas estructurales.

Busca huellas estructurales en el contenido crudo para decidir qué
decodificador usar. NO valida la gramática completa: solo identifica.
Los llamadores que ya conocen el formato lo declaran y se saltan este paso.

Firmas, en orden (gana la primera que coincide):
1. BAI2:     el contenido (sin espacios iniciales) empieza con "01,"
             (registro de encabezado de archivo).
2. MT940:    contiene ":20:" Y además ":60" o ":61:"
             (referencia + saldo o línea de estado).
3. CAMT053:  contiene "<Document" Y "camt.053".
4. UNKNOWN:  ninguna de las anteriores.

Limitación conocida: MT940 se evalúa antes que camt.053, así que un XML
camt.053 que traiga ":20:" y ":61:" (o ":60") en un texto libre se detecta
como MT940. En ese caso el llamador debe declarar el formato.
"""

from collections.abc import Callable

from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.ports.format_detector import FormatDetector


def _looks_like_bai2(content: str) -> bool:
    return content.strip().startswith("01,")


def _looks_like_mt940(content: str) -> bool:
    return ":20:" in content and (":60" in content or ":61:" in content)


def _looks_like_camt053(content: str) -> bool:
    return "<Document" in content and "camt.053" in content


class SignatureFormatDetector(FormatDetector):
    """Identifica el formato por firmas estructurales.

    Las firmas están en una lista de tuplas (formato, predicado) porque el
    orden de evaluación importa.
    """

    _SIGNATURES: list[tuple[StatementFormat, Callable[[str], bool]]] = [
        (StatementFormat.BAI2, _looks_like_bai2),
        (StatementFormat.MT940, _looks_like_mt940),
        (StatementFormat.CAMT053, _looks_like_camt053),
    ]

    def detect(self, content: str) -> StatementFormat:
        """Devuelve el primer formato cuya firma coincide, o UNKNOWN."""
        for fmt, matches in self._SIGNATURES:
            if matches(content):
                return fmt
        return StatementFormat.UNKNOWN

    @property
    def supported_formats(self) -> list[StatementFormat]:
        """Formatos que este detector sabe reconocer."""
        return [fmt for fmt, _ in self._SIGNATURES]
