import customtkinter as ctk
from tkinter import messagebox
from models.category import ExpenseCategory
from models.expense import filter_stores
from services.expense_service import ExpenseService
from ui.components.confirm_dialog import center_on_master
from ui.components.date_picker import DateTimePickerWidget
from utils.constants import CURRENCIES, DEFAULT_CURRENCY
from utils.currency import InvalidAmountError

_NO_STORE = "Select…"


class ExpenseForm(ctk.CTkToplevel):
    """Add a new expense. Records are immutable, so there is no edit mode."""

    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        default_currency: str = DEFAULT_CURRENCY,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._expense_svc = expense_service
        self.saved = False

        self.title("Add New Expense")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._categories = list(ExpenseCategory)
        self._category_labels = [c.label for c in self._categories]

        r = 0
        self._label("Name:", r)
        self._name_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._name_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        self._label("Category:", r)
        self._category_var = ctk.StringVar(value=ExpenseCategory.OTHER.label)
        ctk.CTkComboBox(
            self, values=self._category_labels,
            variable=self._category_var, width=240, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._label("Amount:", r)
        amount_row = ctk.CTkFrame(self, fg_color="transparent")
        amount_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._amount_var = ctk.StringVar()
        ctk.CTkEntry(amount_row, textvariable=self._amount_var, width=160).pack(side="left")
        currency = default_currency if default_currency in CURRENCIES else DEFAULT_CURRENCY
        self._currency_var = ctk.StringVar(value=currency)
        ctk.CTkComboBox(
            amount_row, values=CURRENCIES,
            variable=self._currency_var, width=76, state="readonly",
        ).pack(side="left", padx=(4, 0))
        r += 1

        # Date/time defaults to now, editable
        self._label("Date & Time:", r)
        self._date_picker = DateTimePickerWidget(self, date_format=date_format)
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        self._label("Store:", r)
        self._store_search_var = ctk.StringVar()
        self._store_search_var.trace_add("write", lambda *_: self._on_store_search())
        ctk.CTkEntry(
            self, textvariable=self._store_search_var,
            placeholder_text="Search stores", width=240,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1
        self._store_var = ctk.StringVar(value=_NO_STORE)
        self._store_combo = ctk.CTkComboBox(
            self, values=[_NO_STORE] + filter_stores(""),
            variable=self._store_var, width=240, state="readonly",
        )
        self._store_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1
        ctk.CTkLabel(
            self, text="Pick a store (or choose “Other”).",
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=r, column=1, padx=(0, 16), sticky="w")
        r += 1

        self._label("Description:", r)
        self._details_box = ctk.CTkTextbox(self, width=240, height=72)
        self._details_box.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=r, column=0, columnspan=2, padx=16, pady=(8, 16), sticky="ew")
        ctk.CTkButton(
            buttons, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(buttons, text="Save", width=110, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()
        center_on_master(self)

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _on_store_search(self):
        matches = filter_stores(self._store_search_var.get())
        self._store_combo.configure(values=[_NO_STORE] + matches)
        if self._store_var.get() not in matches:
            self._store_var.set(_NO_STORE)

    def _selected_category(self) -> ExpenseCategory:
        label = self._category_var.get()
        return next(
            (c for c in self._categories if c.label == label), ExpenseCategory.OTHER
        )

    def _on_save(self):
        when = self._date_picker.get()
        if when is None:
            messagebox.showerror("Invalid date", "Please enter a valid date and time (HH:MM).", parent=self)
            return
        store = self._store_var.get()
        try:
            self._expense_svc.create_expense(
                name=self._name_var.get(),
                category=self._selected_category(),
                amount_text=self._amount_var.get(),
                currency=self._currency_var.get(),
                date=when,
                store="" if store == _NO_STORE else store,
                details=self._details_box.get("1.0", "end-1c"),
            )
        except InvalidAmountError as e:
            messagebox.showerror("Invalid amount", str(e), parent=self)
            return
        except ValueError as e:
            messagebox.showerror("Could not save", str(e), parent=self)
            return
        self.saved = True
        self.destroy()
