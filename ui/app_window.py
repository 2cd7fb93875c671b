import customtkinter as ctk
from database.db_manager import DatabaseManager
from services.expense_service import ExpenseService
from services.stats_service import StatsService
from ui.tabs.expenses_tab import ExpensesTab
from ui.tabs.stats_tab import StatsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT


class AppWindow(ctk.CTk):
    def __init__(
        self,
        expense_service: ExpenseService,
        stats_service: StatsService,
        db: DatabaseManager,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._expense_svc = expense_service
        self._stats_svc = stats_service
        self._db = db

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self._build_tabs()

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=0, column=0, sticky="nsew", padx=8, pady=8)

        for tab_name in ("Expenses", "Stats"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._expenses_tab = ExpensesTab(
            self._tabview.tab("Expenses"),
            expense_service=self._expense_svc,
            notify_refresh=self.notify_tabs_refresh,
            get_setting=self._db.get_setting,
        )
        self._expenses_tab.grid(row=0, column=0, sticky="nsew")

        self._stats_tab = StatsTab(
            self._tabview.tab("Stats"),
            stats_service=self._stats_svc,
        )
        self._stats_tab.grid(row=0, column=0, sticky="nsew")

    def notify_tabs_refresh(self):
        self._expenses_tab.refresh()
        self._stats_tab.refresh()
