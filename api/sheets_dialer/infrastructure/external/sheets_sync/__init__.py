"""
Pipeline de sincronización one-way: Google Sheets -> Supabase (tabla leads).

Puede ejecutarse como job (cron / scheduler de la plataforma) vía
scripts/sheets_to_supabase_sync.py, o desde el endpoint /api/v1/sync-sheets.

Objetivos de diseño:
- Idempotencia por sheet_row_id: se puede ejecutar N veces sin duplicar datos.
- Todo o nada: las lecturas terminan antes de escribir; un solo UPSERT.
- Esquema dinámico: los campos salen del header de la hoja en cada corrida.
- Sin reintentos: una corrida fallida se vuelve a disparar desde afuera.
"""
