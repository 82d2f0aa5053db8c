"""
Modelo de dominio: Formato de estado de cuenta.

Los tres formatos soportados más el valor UNKNOWN que devuelve el detector
cuando ninguna firma coincide. UNKNOWN nunca es un formato "declarable":
el llamador puede pedir BAI2, MT940, CAMT053 o detección automática.
"""

from enum import Enum

from treasury_statements.domain.exceptions import FormatError

AUTO_DETECT = "AUTO"
"""Centinela de detección automática. También cuentan None y ""."""


class StatementFormat(str, Enum):
    """Formato de origen de un estado de cuenta."""

    BAI2 = "BAI2"
    MT940 = "MT940"
    CAMT053 = "CAMT053"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_hint(cls, hint: "str | StatementFormat | None") -> "StatementFormat | None":
        """Convierte la pista de formato del llamador en un StatementFormat.

        Se normaliza a mayúsculas y se quitan '.', '_', '-' y espacios, así
        "camt.053", "Camt_053" y "CAMT053" son equivalentes.

        Returns:
            None si la pista pide detección automática.

        Raises:
            FormatError: Si la pista no es uno de los formatos soportados.

        Ejemplos:
            >>> StatementFormat.from_hint("mt940")
            <StatementFormat.MT940: 'MT940'>
            >>> StatementFormat.from_hint("auto") is None
            True
        """
        if hint is None:
            return None
        if isinstance(hint, StatementFormat):
            if hint is cls.UNKNOWN:
                raise FormatError("<declarado>", "UNKNOWN no es un formato declarable")
            return hint
        if not isinstance(hint, str):
            raise FormatError(
                "<declarado>", f"la pista de formato debe ser texto, recibió {type(hint).__name__}"
            )

        normalized = hint.upper()
        for char in "._- ":
            normalized = normalized.replace(char, "")

        if not normalized or normalized == AUTO_DETECT:
            return None
        if normalized == cls.UNKNOWN.value:
            raise FormatError("<declarado>", "UNKNOWN no es un formato declarable")

        try:
            return cls(normalized)
        except ValueError:
            raise FormatError(
                "<declarado>",
                f"formato '{hint}' no soportado. Esperado: BAI2, MT940, CAMT053 o AUTO",
            )
