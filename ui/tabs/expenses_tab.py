import customtkinter as ctk
from models.expense import ExpenseRecord
from services.expense_service import ExpenseService
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.expense_form import ExpenseForm
from utils.currency import format_currency
from utils.date_helpers import format_list_date, now


_MAX_RENDERED_ROWS = 200


class ExpensesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        notify_refresh,   # callable
        get_setting,      # callable(key, default) → str
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._expense_svc = expense_service
        self._notify_refresh = notify_refresh
        self._get_setting = get_setting

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=(4, 8))
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        self._count_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._count_label.pack(side="left", padx=12, pady=8)
        ctk.CTkButton(bar, text="+ Add Expense", width=120, command=self._open_add_form).pack(
            side="right", padx=8, pady=6
        )

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        rows = self._expense_svc.sorted_records()
        self._count_label.configure(text=f"{len(rows)} expense{'s' if len(rows) != 1 else ''}")
        if not rows:
            ctk.CTkLabel(
                self._scroll, text="No expenses yet. Use “+ Add Expense” to record one.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        ref = now()
        for idx, record in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, record, ref)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing the newest {_MAX_RENDERED_ROWS} of {len(rows)} expenses.",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, record: ExpenseRecord, ref):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(row, text=record.category.emoji, width=32, font=ctk.CTkFont(size=18)).grid(
            row=0, column=0, rowspan=2, padx=(8, 4), pady=4
        )
        ctk.CTkLabel(
            row, text=record.name or "—", anchor="w", font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=1, sticky="ew", padx=4, pady=(4, 0))
        ctk.CTkLabel(
            row, text=f"{format_list_date(record.date, ref)} · {record.store}",
            anchor="w", text_color="gray60",
        ).grid(row=1, column=1, sticky="ew", padx=4, pady=(0, 4))
        ctk.CTkLabel(
            row, text=format_currency(record.amount, record.currency),
            anchor="e", width=110, font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=2, rowspan=2, padx=4)
        ctk.CTkButton(
            row, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda r=record: self._delete(r),
        ).grid(row=0, column=3, rowspan=2, padx=(4, 8))

    def _open_add_form(self):
        form = ExpenseForm(
            self.winfo_toplevel(),
            self._expense_svc,
            default_currency=self._get_setting("default_currency", "USD"),
            date_format=self._get_setting("date_format", "MM/DD/YYYY"),
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh()

    def _delete(self, record: ExpenseRecord):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Expense",
            f"Delete “{record.name or 'expense'}” "
            f"({format_currency(record.amount, record.currency)})?",
        )
        if dlg.result:
            self._expense_svc.delete_by_ids([record.id])
            self._notify_refresh()
