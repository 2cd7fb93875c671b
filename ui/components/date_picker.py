import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from datetime import datetime
from utils.date_helpers import (
    format_date, format_display_date, now, parse_date, parse_display_date, parse_time,
)


class DateTimePickerWidget(ctk.CTkFrame):
    """Date entry (display format) + calendar popup + HH:MM entry.

    .get() returns a naive datetime, or None when either part is invalid.
    """

    def __init__(
        self,
        master,
        initial: datetime | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None

        self._date_var = tk.StringVar()
        self._time_var = tk.StringVar()

        self._date_entry = ctk.CTkEntry(self, textvariable=self._date_var, width=110)
        self._date_entry.grid(row=0, column=0, sticky="ew")
        self._date_entry.bind("<FocusOut>", self._on_date_focus_out)
        self._date_entry.bind("<Return>", self._on_date_focus_out)

        ctk.CTkButton(self, text="📅", width=32, command=self._open_popup).grid(
            row=0, column=1, padx=(4, 8)
        )

        self._time_entry = ctk.CTkEntry(self, textvariable=self._time_var, width=64)
        self._time_entry.grid(row=0, column=2)
        self._time_entry.bind("<FocusOut>", self._on_time_focus_out)

        self.set(initial or now())

    def set(self, dt: datetime):
        self._date_var.set(format_display_date(format_date(dt), self._date_format))
        self._time_var.set(dt.strftime("%H:%M"))
        self._reset_borders()

    def get(self) -> datetime | None:
        d = self._parse_date_text()
        t = parse_time(self._time_var.get())
        if d is None or t is None:
            return None
        return datetime(d.year, d.month, d.day, t[0], t[1])

    def is_valid(self) -> bool:
        return self.get() is not None

    def _parse_date_text(self):
        raw = self._date_var.get().strip()
        if not raw:
            return None
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def _on_date_focus_out(self, _event=None):
        d = self._parse_date_text()
        if d:
            self._date_var.set(format_display_date(format_date(d), self._date_format))
            self._date_entry.configure(border_color=("gray65", "gray35"))
        else:
            self._date_entry.configure(border_color="#F44336")

    def _on_time_focus_out(self, _event=None):
        ok = parse_time(self._time_var.get()) is not None
        self._time_entry.configure(border_color=("gray65", "gray35") if ok else "#F44336")

    def _reset_borders(self):
        for entry in (self._date_entry, self._time_entry):
            entry.configure(border_color=("gray65", "gray35"))

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        # Theme the calendar to match CTk appearance
        dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if dark else "#ffffff"
        fg = "#ffffff" if dark else "#000000"
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self._parse_date_text() or now().date()

        # Calendar always uses yyyy-mm-dd internally; we format the result ourselves
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal, popup))

        self._date_entry.update_idletasks()
        x = self._date_entry.winfo_rootx()
        y = self._date_entry.winfo_rooty() + self._date_entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

    def _on_date_selected(self, cal, popup):
        d = parse_date(cal.get_date())
        if d:
            self._date_var.set(format_display_date(format_date(d), self._date_format))
            self._date_entry.configure(border_color=("gray65", "gray35"))
        popup.destroy()
        self._popup = None
