#!/usr/bin/env python3
"""
Ejecuta un barrido de tienda campeona.

Procesa una página de clientes sin tienda asignada por empresa. Para vaciar
un backlog grande hay que ejecutarlo repetidamente (por ejemplo desde cron).

Uso:
    python scripts/run_champion_store_sweep.py
    python scripts/run_champion_store_sweep.py --company-id <id> --page-size 500
"""

import argparse
import asyncio
import logging
import sys

from champion_store.core.config import get_settings
from champion_store.core.logging_config import setup_logging
from champion_store.db.connection import close_database, initialize_database
from champion_store.services.champion_store.factories import create_sweep_orchestrator
from champion_store.utils.error_handler import ChampionStoreException, ValidationException

logger = logging.getLogger("champion_store.scripts.sweep")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Barrido de tienda campeona por empresa")
    parser.add_argument("--company-id", help="Procesar solo esta empresa")
    parser.add_argument("--chunk-size", type=int, help="Tamaño de lote de escritura")
    parser.add_argument("--page-size", type=int, help="Teléfonos por empresa en esta ejecución")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Nivel de log",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """Ejecuta el barrido y retorna el código de salida."""
    conn_db = await initialize_database()
    try:
        try:
            orchestrator = create_sweep_orchestrator(
                conn_db=conn_db,
                chunk_size=args.chunk_size,
                page_size=args.page_size,
            )
        except ValidationException as e:
            logger.error(f"Parámetros inválidos: {e}")
            return 2

        if args.company_id:
            company = await orchestrator.company_reader.get_company(args.company_id)
            if company is None:
                logger.error(f"Empresa {args.company_id} no encontrada")
                return 2
            try:
                result = await orchestrator.process_company(company)
            except ChampionStoreException as e:
                logger.error(f"Error procesando empresa {company.id}: {e}")
                return 1
            if result is None:
                logger.info(f"Empresa {company.id} bloqueada, sin cambios")
            else:
                logger.info(f"Empresa {company.id}: {result.to_dict()}")
            return 0

        summary = await orchestrator.execute()
        logger.info(
            f"Resumen: {summary['companies_processed']} procesadas, "
            f"{summary['companies_skipped']} omitidas, {summary['companies_failed']} con error, "
            f"{summary['customers_assigned']} clientes asignados"
        )
        return 1 if summary["companies_failed"] else 0

    finally:
        await close_database()


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(update={"LOG_LEVEL": args.log_level})
    setup_logging(settings)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
