"""
Excepciones de dominio del proyecto treasury-statements.

¿Por qué tan pocas excepciones?
Porque los decodificadores son funciones totales: una línea corrupta en un
BAI2 o un :61: mal formado NO deben tumbar un estado de cuenta de cientos de
movimientos. Esos casos se degradan localmente (se omite la línea y se
registra un SkippedLine). Lo único que se le reporta al llamador como error
duro es no saber QUÉ formato tiene el contenido.

Jerarquía:
    StatementParserError
    ├── FormatError        → No se pudo determinar / no se soporta el formato
    ├── ExtractionError    → Error al leer el archivo del payload
    └── OutputError        → Error al generar el archivo de salida
"""


class StatementParserError(Exception):
    """Excepción base del proyecto. Todas las demás heredan de esta.

    Permite capturar cualquier error del proyecto con un solo
    `except StatementParserError` en el CLI o en el servicio.
    """


class FormatError(StatementParserError):
    """Se lanza cuando no se puede decidir con qué decodificador procesar
    un payload.

    Esto puede pasar porque:
    - El detector no reconoce ninguna firma (BAI2, MT940, camt.053).
    - El formato declarado por el llamador no es uno de los soportados.
    - El formato es válido pero no hay decodificador registrado para él.
    """

    def __init__(self, source: str, detalle: str = ""):
        self.source = source
        self.detalle = detalle
        mensaje = f"No se pudo determinar el formato del estado de cuenta: {source}"
        if detalle:
            mensaje += f" ({detalle})"
        super().__init__(mensaje)


class ExtractionError(StatementParserError):
    """Se lanza cuando falla la lectura del archivo que contiene el payload.

    Esto puede pasar porque:
    - El archivo no existe o no hay permisos de lectura.
    - El archivo está vacío.
    """

    def __init__(self, archivo: str, causa: str):
        self.archivo = archivo
        self.causa = causa
        super().__init__(f"Error leyendo '{archivo}': {causa}")


class OutputError(StatementParserError):
    """Se lanza cuando falla la generación del archivo de salida.

    Esto puede pasar porque:
    - No hay permisos de escritura en el directorio de salida.
    - El disco está lleno.
    - Hay un error en el formato del Excel.
    """

    def __init__(self, ruta_salida: str, causa: str):
        self.ruta_salida = ruta_salida
        self.causa = causa
        super().__init__(f"Error generando salida en '{ruta_salida}': {causa}")
