"""
Punto de entrada CLI: treasury-statements.

Uso:
    # Decodificar un solo archivo (detección automática de formato)
    treasury-statements /ruta/estado.bai2 -o /ruta/salida

    # Todos los archivos soportados de una carpeta, formato declarado
    treasury-statements /ruta/carpeta -f MT940 -o /ruta/salida

    # Sin Excel: imprime los Statements como JSON en stdout
    treasury-statements /ruta/estado.xml --json

Este módulo es el ÚNICO lugar donde se ensamblan los componentes:
- Crea las instancias concretas (FilePayloadReader, ExcelWriter, etc.)
- Las inyecta en el StatementService.
- Ejecuta el procesamiento.

No contiene lógica de negocio, solo "fontanería" (wiring).
"""

import argparse
import json
import sys
from pathlib import Path

from treasury_statements.adapters.input.format_detectors.signature_detector import (
    SignatureFormatDetector,
)
from treasury_statements.adapters.input.payload_readers.file_payload_reader import (
    FilePayloadReader,
)
from treasury_statements.adapters.output.loggers.console_logger import ConsoleLogger
from treasury_statements.adapters.output.writers.excel_writer import ExcelWriter
from treasury_statements.domain.exceptions import FormatError, OutputError
from treasury_statements.domain.models.statement_format import StatementFormat
from treasury_statements.domain.services.statement_service import StatementService
from treasury_statements.infrastructure.registry import create_default_registry


def main(argv: list[str] | None = None) -> int:
    """Punto de entrada principal del CLI.

    Returns:
        Código de salida: 0 si se procesó al menos un archivo, 1 si no.
    """
    args = _parse_args(argv)

    input_path = Path(args.input_path)

    try:
        StatementFormat.from_hint(args.format)
    except FormatError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    # --- Ensamblar componentes ---
    # En modo --json stdout queda reservado para el JSON.
    logger = ConsoleLogger(verbose=not args.json, stream=sys.stderr if args.json else None)
    registry = create_default_registry()
    service = StatementService(
        detector=SignatureFormatDetector(),
        registry=registry,
        logger=logger,
        payload_readers=[FilePayloadReader()],
    )

    if input_path.is_file():
        statements = service.process_file(input_path, args.format)
        resultados = {input_path.name: statements} if statements is not None else {}
    elif input_path.is_dir():
        if not args.json:
            print(f"📂 Procesando {input_path}")
        resultados = service.process_directory(input_path, args.format)
    else:
        print(f"❌ La ruta no existe: {input_path}", file=sys.stderr)
        return 1

    if not resultados:
        print("\n❌ No se procesó ningún archivo.", file=sys.stderr)
        if not args.json:
            logger.print_summary()
        return 1

    if args.json:
        _print_json(resultados)
        return 0

    output_dir = Path(args.output_dir) if args.output_dir else None
    if output_dir is None:
        output_dir = input_path.parent if input_path.is_file() else input_path

    print("=" * 60)
    print("TREASURY STATEMENTS")
    print("=" * 60)
    print(f"  Entrada:  {input_path}")
    print(f"  Salida:   {output_dir}")
    print(f"  Formatos disponibles: {', '.join(registry.available_formats)}")
    print()

    try:
        _write_excel(resultados, output_dir, logger)
    except OutputError as e:
        logger.log_error(str(output_dir), e)
        logger.print_summary()
        return 1

    logger.print_summary()
    return 0


def _write_excel(resultados: dict, output_dir: Path, logger: ConsoleLogger) -> None:
    """Un Excel por archivo y un consolidado si hay más de uno."""
    writer = ExcelWriter()
    for source, statements in resultados.items():
        output_file = output_dir / f"movimientos_{Path(source).stem}.xlsx"
        written = writer.write_single(statements, output_file, source=source)
        logger.log_export_complete(str(written), len(statements))

    if len(resultados) > 1:
        consolidado = writer.write_consolidated(resultados, output_dir / "consolidado.xlsx")
        logger.log_export_complete(
            str(consolidado), sum(len(s) for s in resultados.values())
        )


def _print_json(resultados: dict) -> None:
    payload = {
        source: [statement.to_dict() for statement in statements]
        for source, statements in resultados.items()
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parsea los argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        description="Decodificador de estados de cuenta BAI2, MT940 y camt.053",
        epilog="Ejemplo: treasury-statements /ruta/feeds -o /ruta/salida",
    )

    parser.add_argument(
        "input_path",
        help="Ruta a un archivo de estado de cuenta o a un directorio",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        help="Directorio de salida para los Excel generados. "
        "Si no se especifica, se usa el mismo directorio de la entrada.",
    )

    parser.add_argument(
        "-f",
        "--format",
        default=None,
        help="Formato declarado: BAI2, MT940, CAMT053 o AUTO (por defecto AUTO).",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Imprime los estados de cuenta como JSON en vez de generar Excel.",
    )

    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(main())
