from __future__ import annotations
import argparse
import logging
import sys

from .config import DEFAULT_WIKI_URL, ImportOptions
from .main import wikitext_to_csv
from .parser import WikitextParseError
from .reconcile import DEFAULT_BATCH_SIZE
from .recon_client import DEFAULT_SERVICE_URL

log = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extraer tablas de páginas wikitext a CSV.")
    parser.add_argument("wikitext_path", type=str, help="Ruta al archivo de entrada con wikitext")
    parser.add_argument("csv_path", type=str, help="Ruta al archivo de salida .csv")
    parser.add_argument("--echo-spanning-cells", action="store_true",
                        help="Repetir el valor de las celdas con rowspan/colspan en lugar de dejarlas en blanco")
    parser.add_argument("--wiki-url", type=str, default=DEFAULT_WIKI_URL,
                        help="URL base de la wiki para reconciliar enlaces ('null' desactiva la reconciliación)")
    parser.add_argument("--recon-service", type=str, default=DEFAULT_SERVICE_URL,
                        help="Endpoint del servicio de reconciliación")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE,
                        help=f"Consultas por lote de reconciliación (default: {DEFAULT_BATCH_SIZE})")
    parser.add_argument("--limit", type=int, default=-1, help="Máximo de filas de datos a importar")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def options_from_args(args: argparse.Namespace) -> ImportOptions:
    return ImportOptions(
        blank_spanning_cells=not args.echo_spanning_cells,
        wiki_base_url=args.wiki_url,
        recon_service_url=args.recon_service,
        batch_size=args.batch_size,
        limit=args.limit,
    )


def main(argv=None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.batch_size < 1:
        parser.error("--batch-size debe ser >= 1")

    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')
    log.info("WIKITEXT: %s", args.wikitext_path)
    log.info("CSV : %s", args.csv_path)

    try:
        wikitext_to_csv(args.wikitext_path, args.csv_path, options=options_from_args(args))
        log.info("✔ Proceso completado.")
    except FileNotFoundError:
        log.error("Error: No se encontró el archivo de entrada: %s", args.wikitext_path)
        sys.exit(1)
    except WikitextParseError as e:
        log.error("Error de análisis: %s", e)
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
