"""
CLI: Google Sheets -> Supabase (one-way sync, una corrida).

Uso recomendado:
  - Ejecutar como job (cron de la plataforma / systemd timer).
  - Cada ejecución hace exactamente una corrida y termina.

Variables de entorno requeridas:
  - GOOGLE_SERVICE_ACCOUNT_EMAIL
  - GOOGLE_PRIVATE_KEY
  - GOOGLE_SHEET_ID
  - SUPABASE_URL
  - SUPABASE_SERVICE_ROLE_KEY

Ejecución:
  python scripts/sheets_to_supabase_sync.py
  python scripts/sheets_to_supabase_sync.py --sheet-name Leads --batch-size 100
  python scripts/sheets_to_supabase_sync.py --schema-only

Exit code: 0 si la corrida fue exitosa, 1 si falló.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `sheets_dialer/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o repo_root/.env).
_REPO_ROOT = _API_ROOT.parent
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_REPO_ROOT / ".env", override=False)

from sheets_dialer.core.config import settings
from sheets_dialer.infrastructure.external.sheets_sync.sync_config import SyncOptions
from sheets_dialer.infrastructure.external.sheets_sync.sync_service import build_from_settings


def _read_schema_sql() -> str:
    sql_path = _API_ROOT / "sheets_dialer" / "infrastructure" / "external" / "sheets_sync" / "schema.sql"
    return sql_path.read_text(encoding="utf-8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync Google Sheets -> Supabase (una corrida)")
    parser.add_argument(
        "--schema-only",
        action="store_true",
        help="Solo imprime el DDL recomendado de la tabla leads (no ejecuta sync).",
    )
    parser.add_argument(
        "--sheet-name",
        default=None,
        help="Hoja a leer (default: SYNC_SHEET_NAME).",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Filas por lectura a Google Sheets (default: SYNC_BATCH_SIZE).",
    )
    parser.add_argument(
        "--force-full-sync",
        action="store_true",
        help="Aceptado por compatibilidad; cada corrida ya es completa.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.schema_only:
        print(_read_schema_sql())
        return 0

    try:
        options = SyncOptions(
            sheet_name=args.sheet_name or settings.SYNC_SHEET_NAME,
            batch_size=args.batch_size if args.batch_size is not None else settings.SYNC_BATCH_SIZE,
            force_full_sync=args.force_full_sync,
        )
        service, _, _ = build_from_settings(settings)
        result = service.run_sync(options)
    except Exception as e:
        logger.error(f"Sync failed: {e}")
        return 1

    logger.info(f"Sync completed: {result.to_dict()}")
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
