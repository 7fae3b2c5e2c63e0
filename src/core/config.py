"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# FEED CONFIGURATION
# =============================================================================

SHEET_ID = os.environ.get("SHEET_ID", "1iU_X2DpMN2wmPE0-V69NvATwQX7PE_q15IYMcj5EYXY")
GVIZ_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq"

# "training" (web training sheet) or "process" (process simulator sheet)
FEED_SCHEMA = os.environ.get("FEED_SCHEMA", "training")
RECORDS_SHEET = os.environ.get("RECORDS_SHEET", "Base_WT25")
HOLIDAYS_SHEET = os.environ.get("HOLIDAYS_SHEET", "DATA")
NOVELTIES_SHEET = os.environ.get("NOVELTIES_SHEET", "Novedades")

FEED_REQUEST_TIMEOUT = int(os.environ.get("FEED_REQUEST_TIMEOUT", "20"))
REFRESH_INTERVAL_SECONDS = int(os.environ.get("REFRESH_INTERVAL_SECONDS", "120"))

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

WEEKDAY_LABELS = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"]
MAX_GROUPS_PER_LANE = 6
NO_CAMPAIGN_LABEL = "Sin campaña"

# Development type marking catalogue updates, and the status marking breaches
UPDATE_DEVELOPMENT_TYPE = "ACTUALIZACION"
BREACH_STATUS = "incumplimiento"

# =============================================================================
# STATUS TAXONOMY
# =============================================================================

# Checked in order; the first category whose keyword appears in the status wins
COMPLETED_KEYWORDS = ("completado", "terminado")
IN_PROGRESS_KEYWORDS = ("curso", "proceso")
PENDING_KEYWORDS = ("pendiente",)

# =============================================================================
# COLORS
# =============================================================================

NEUTRAL_COLOR = "bg-gray-500"

CAMPAIGN_PALETTE = [
    "bg-blue-500", "bg-green-500", "bg-pink-500", "bg-indigo-500",
    "bg-red-500", "bg-purple-500", "bg-yellow-500", "bg-teal-500",
    "bg-orange-500", "bg-cyan-500", "bg-lime-500", "bg-amber-500",
    "bg-emerald-500", "bg-violet-500", "bg-sky-500", "bg-rose-500",
    "bg-green-600", "bg-sky-500", "bg-slate-500", "bg-blue-600",
    "bg-pink-600", "bg-red-900", "bg-indigo-600", "bg-purple-600",
    "bg-red-800", "bg-teal-600", "bg-yellow-400", "bg-cyan-600",
    "bg-blue-900", "bg-amber-600", "bg-emerald-600", "bg-red-500",
    "bg-fuchsia-600", "bg-rose-600", "bg-red-700", "bg-blue-700",
    "bg-green-700", "bg-cyan-500", "bg-indigo-700", "bg-red-900",
    "bg-purple-700", "bg-yellow-700", "bg-teal-700", "bg-orange-700",
    "bg-cyan-700", "bg-lime-700", "bg-amber-700", "bg-emerald-700",
    "bg-violet-700", "bg-fuchsia-700", "bg-rose-700", "bg-sky-700",
]

DEVELOPER_PALETTE = [
    "bg-green-500", "bg-pink-500", "bg-red-500", "bg-indigo-500",
    "bg-purple-500", "bg-yellow-500", "bg-teal-500", "bg-orange-500",
    "bg-cyan-500", "bg-blue-500",
]

STATUS_COLORS = {
    "entregado": "bg-green-500",
    "finalizado": "bg-blue-500",
    "cancelado": "bg-orange-800",
    "en proceso": "bg-yellow-500",
    "proyectado": "bg-gray-500",
    "sin material": "bg-red-500",
}

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

MONTH_NAMES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]
TOP_N_REPORT = 10
TOP_N_LOOKUP = 5

# Export column order, matching the training sheet layout
EXPORT_HEADERS = [
    ("Fecha Solicitud", "request_date"),
    ("Coordinador", "coordinator"),
    ("Cliente", "client"),
    ("Segmento", "segment"),
    ("Desarrollador", "developer"),
    ("Segmento Menu", "menu_segment"),
    ("Desarrollo", "development_type"),
    ("Nombre", "name"),
    ("Cantidad", "quantity"),
    ("Fecha Material", "material_date"),
    ("Fecha Inicio", "start_date"),
    ("Fecha Fin", "end_date"),
    ("Estado", "status"),
    ("Observaciones", "observations"),
    ("Campaña", "campaign"),
]

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
