import customtkinter as ctk
from models.stats import DEFAULT_RANGE, CurrencyReport, PieSlice, StatsRange, TrendPoint
from services.stats_service import StatsService
from utils.currency import format_currency, format_percent
from utils.date_helpers import format_range_caption


class StatsTab(ctk.CTkFrame):
    """Per-currency overview, trends and breakdowns rendered as bar tables."""

    def __init__(self, master, stats_service: StatsService, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._stats_svc = stats_service
        self._range_var = ctk.StringVar(value=DEFAULT_RANGE.value)

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
        ctk.CTkLabel(bar, text="Time Range:").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkComboBox(
            bar, values=[r.value for r in StatsRange],
            variable=self._range_var, width=150, state="readonly",
            command=lambda _: self._load(),
        ).pack(side="left", padx=(0, 12))
        self._caption = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._caption.pack(side="left", padx=8)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        stats_range = StatsRange(self._range_var.get())
        start, end = self._stats_svc.get_window(stats_range)
        self._caption.configure(text=format_range_caption(start, end))

        reports = self._stats_svc.get_reports(stats_range)
        if not reports:
            ctk.CTkLabel(
                self._scroll,
                text="No expenses in this range.\nTry a wider range like Last 30 days.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=30)
            return

        row = 0
        for report in reports:
            row = self._add_report(report, row)

    def _add_report(self, report: CurrencyReport, row: int) -> int:
        code = report.currency

        card = self._section(f"Overview ({code})", row)
        self._kv(card, "Total", format_currency(report.summary.total, code))
        self._kv(card, "Transactions", str(report.summary.count))
        row += 1

        card = self._section(f"Trends ({code})", row)
        self._trend_table(card, "Month-by-month (last 12 months)", report.monthly, code)
        self._kv(card, "Total last 12 months", format_currency(report.monthly_total, code))
        self._trend_table(card, "Week-by-week (last 12 weeks)", report.weekly, code)
        self._kv(card, "Total last 12 weeks", format_currency(report.weekly_total, code))
        row += 1

        for title, slices in (
            ("Spending by Company", report.by_store),
            ("Spending by Category", report.by_category),
            ("Spending by Time of Day", report.by_time),
        ):
            card = self._section(title, row)
            self._slice_table(card, slices, code)
            row += 1
        return row

    def _section(self, title: str, row: int) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=row, column=0, sticky="ew", padx=4, pady=6)
        ctk.CTkLabel(
            card, text=title, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(fill="x", padx=12, pady=(8, 4))
        return card

    def _kv(self, card, label: str, value: str):
        f = ctk.CTkFrame(card, fg_color="transparent")
        f.pack(fill="x", padx=12, pady=(0, 6))
        ctk.CTkLabel(f, text=label, anchor="w").pack(side="left")
        ctk.CTkLabel(f, text=value, anchor="e", text_color="gray60").pack(side="right")

    def _bar_row(self, card, label: str, value_text: str, fraction: float):
        f = ctk.CTkFrame(card, fg_color="transparent")
        f.pack(fill="x", padx=12, pady=2)
        f.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(f, text=label, anchor="w", width=150).grid(row=0, column=0, sticky="w")
        bar = ctk.CTkProgressBar(f, height=10)
        bar.grid(row=0, column=1, sticky="ew", padx=8)
        bar.set(max(0.0, min(fraction, 1.0)))
        ctk.CTkLabel(f, text=value_text, anchor="e", width=150, text_color="gray60").grid(
            row=0, column=2, sticky="e"
        )

    def _trend_table(self, card, title: str, points: list[TrendPoint], code: str):
        ctk.CTkLabel(card, text=title, anchor="w", text_color="gray60").pack(fill="x", padx=12, pady=(4, 2))
        peak = max((p.total for p in points), default=0.0)
        for p in points:
            self._bar_row(card, p.label, format_currency(p.total, code), p.total / peak if peak > 0 else 0.0)

    def _slice_table(self, card, slices: list[PieSlice], code: str):
        if not slices:
            ctk.CTkLabel(card, text="No data.", text_color="gray60").pack(padx=12, pady=(0, 8))
            return
        total = sum(s.value for s in slices)
        peak = max(s.value for s in slices)
        for s in slices:
            pct = format_percent(s.value, total)
            text = f"{format_currency(s.value, code)}  {pct}".rstrip()
            self._bar_row(card, s.label, text, s.value / peak if peak > 0 else 0.0)
        ctk.CTkFrame(card, fg_color="transparent", height=6).pack()
