"""
Registro de decodificadores disponibles.

Centraliza la relación formato → decodificador.
Agregar un formato nuevo al sistema requiere solo 2 pasos:
1. Crear la clase XxxDecoder que implemente StatementDecoder.
2. Registrarla aquí con register() o agregarla a create_default_registry().

El servicio no sabe qué decodificadores existen. Solo pide "dame el
decodificador para MT940" y el registro se lo da.
"""

from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.ports.statement_decoder import StatementDecoder


class DecoderRegistry:
    """Registro de decodificadores por formato."""

    def __init__(self) -> None:
        self._decoders: dict[StatementFormat, StatementDecoder] = {}

    def register(self, decoder: StatementDecoder) -> None:
        """Registra un decodificador bajo decoder.format.

        Raises:
            ValueError: Si ya existe un decodificador para ese formato o si
                        el decodificador dice ser UNKNOWN.
        """
        fmt = decoder.format
        if fmt is StatementFormat.UNKNOWN:
            raise ValueError(f"{type(decoder).__name__} no puede registrarse como UNKNOWN")
        if fmt in self._decoders:
            raise ValueError(
                f"Ya existe un decodificador registrado para '{fmt.value}': "
                f"{type(self._decoders[fmt]).__name__}. "
                f"No se puede registrar {type(decoder).__name__}."
            )
        self._decoders[fmt] = decoder

    def get(self, fmt: StatementFormat) -> StatementDecoder | None:
        """Obtiene el decodificador para un formato.

        Returns:
            StatementDecoder si existe, None si no hay uno registrado.
        """
        return self._decoders.get(fmt)

    @property
    def available_formats(self) -> list[str]:
        """Formatos con decodificador disponible."""
        return sorted(fmt.value for fmt in self._decoders)

    def __len__(self) -> int:
        return len(self._decoders)


def create_default_registry() -> DecoderRegistry:
    """Crea un registro con los tres decodificadores soportados."""
    registry = DecoderRegistry()

    from treasury_statements.adapters.input.decoders.bai2_decoder import Bai2Decoder

    registry.register(Bai2Decoder())

    from treasury_statements.adapters.input.decoders.mt940_decoder import Mt940Decoder

    registry.register(Mt940Decoder())

    from treasury_statements.adapters.input.decoders.camt053_decoder import Camt053Decoder

    registry.register(Camt053Decoder())

    return registry
