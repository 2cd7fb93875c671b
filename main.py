import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO

from services.expense_service import ExpenseService
from services.stats_service import StatsService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level
from utils.log_config import configure_logging

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: logging and DB folder from pre-DB config ──────────────────
    configure_logging(get_log_level())
    db_folder = get_db_folder()

    # ── Settings store ───────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=db_folder)

    # ── Services ─────────────────────────────────────────────────────────────
    expense_svc = ExpenseService(ExpenseDAO(db))
    records = expense_svc.load_or_empty()
    stats_svc = StatsService(expense_svc)
    logger.info("Starting with %d expense(s)", len(records))

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(expense_service=expense_svc, stats_service=stats_svc, db=db)

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
