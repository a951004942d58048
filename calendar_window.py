"""Month picker window (tkinter) rendering a PickerState."""

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk
from typing import Callable

from calendar_logic import drag_delta
from picker_state import PickerState
from settings import load_settings

logger = logging.getLogger(__name__)

_MAX_ROWS = 6

# Colours
LIGHT = {
    "bg": "white",
    "header_bg": "#F3F3F3",
    "fg": "#333333",
    "outside_fg": "#AAAAAA",
    "weekend_fg": "#CC0000",
    "today_bg": "#D22F20",
    "today_fg": "white",
    "accent": "#0078D4",
    "wn_fg": "#888888",
}
DARK = {
    "bg": "#1E1E1E",
    "header_bg": "#2B2B2B",
    "fg": "white",
    "outside_fg": "#7F7F7F",
    "weekend_fg": "#FF6B6B",
    "today_bg": "#D22F20",
    "today_fg": "white",
    "accent": "#4FA3E0",
    "wn_fg": "#888888",
}


class _GridPanel:
    """Pre-allocated widget pool for one month (headers + 6 weeks max)."""

    __slots__ = ("frame", "wk_header", "day_headers", "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, palette: dict,
                 show_week_numbers: bool, on_press, on_release) -> None:
        bg = palette["bg"]
        self.frame = tk.Frame(parent, bg=bg)
        first_col = 1 if show_week_numbers else 0

        self.wk_header: tk.Label | None = None
        if show_week_numbers:
            self.wk_header = tk.Label(
                self.frame, text="Wk", font=fonts["bold"], bg=bg,
                fg=palette["wn_fg"], width=3,
            )
            self.wk_header.grid(row=0, column=0)

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=bg, width=3)
            lbl.grid(row=0, column=col + first_col)
            self.day_headers.append(lbl)

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(_MAX_ROWS):
            grid_row = r + 1
            if show_week_numbers:
                wn = tk.Label(
                    self.frame, font=fonts["wn"], bg=bg, fg=palette["wn_fg"], width=3,
                )
                wn.grid(row=grid_row, column=0)
                self.week_nums.append(wn)

            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=bg, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=grid_row, column=c + first_col, pady=1)
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<ButtonRelease-1>", on_release)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarPickerWindow:
    """Single-month date picker: click a day to select it, drag to change month."""

    def __init__(
        self,
        settings: dict | None = None,
        today: date | None = None,
        on_select: Callable[[date], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.on_select = on_select
        self.on_cancel = on_cancel
        self._palette = DARK if self.settings["dark_mode"] else LIGHT

        self.root = tk.Tk()
        self.root.title("Calendar Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=self._palette["bg"])
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        today = today or date.today()
        self.state = PickerState(
            today, today, self.settings["week_starts_on"], on_select=self._on_selected,
        )

        # Widget-to-date mapping (filled during _refresh)
        self._widget_dates: dict[int, date] = {}
        # (widget id, x_root) of the cell under the last button press
        self._press: tuple[int, int] | None = None
        self._btn_today: tk.Label | None = None

        self._build_shell()
        self._refresh()

        self.root.bind("<Escape>", lambda _e: self.cancel())
        self.root.bind("<Left>", lambda _e: self._navigate(-1))
        self.root.bind("<Right>", lambda _e: self._navigate(1))
        self.root.bind("<Home>", lambda _e: self._go_today())
        self.root.protocol("WM_DELETE_WINDOW", self.cancel)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=10)
        self.font_bold = tkfont.Font(family=base, size=10, weight="bold")
        self.font_header = tkfont.Font(family=base, size=11, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)

        # Measure cell size to match a Label width=3
        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        self._panel_fonts = {
            "bold": self.font_bold, "wn": self.font_wn,
            "cell_w": _tmp.winfo_reqwidth(), "cell_h": _tmp.winfo_reqheight(),
        }
        _tmp.destroy()

    # ------------------------------------------------------------------
    # Build shell (once): nav bar, grid panel, jump buttons
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        p = self._palette
        outer = tk.Frame(self.root, bg=p["bg"])
        outer.pack(padx=6, pady=4)

        # Navigation row: ◀  January 2021  ▶
        nav = tk.Frame(outer, bg=p["header_bg"])
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=p["header_bg"], fg=p["fg"],
            cursor="hand2",
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=p["header_bg"], fg=p["fg"],
            cursor="hand2",
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        self._title_label = tk.Label(
            nav, font=self.font_header, bg=p["header_bg"], fg=p["fg"],
        )
        self._title_label.pack(side="left", expand=True, fill="x")

        self._panel = _GridPanel(
            outer, self._panel_fonts, p, self.settings["show_week_numbers"],
            self._on_press, self._on_release,
        )
        self._panel.frame.pack()

        if self.settings["show_jump_buttons"]:
            jump = tk.Frame(outer, bg=p["bg"])
            jump.pack(fill="x", pady=(6, 0))
            self._btn_today = tk.Label(
                jump, text="Go To Today", font=self.font_bold, bg=p["bg"],
                fg=p["accent"], cursor="hand2",
            )
            self._btn_today.pack(side="left", padx=6)
            self._btn_today.bind("<Button-1>", lambda _e: self._select_today())

            btn_cancel = tk.Label(
                jump, text="Cancel", font=self.font_normal, bg=p["bg"],
                fg=p["fg"], cursor="hand2",
            )
            btn_cancel.pack(side="right", padx=6)
            btn_cancel.bind("<Button-1>", lambda _e: self.cancel())

    # ------------------------------------------------------------------
    # Refill pooled widgets from the current grid
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        p = self._palette
        panel = self._panel
        grid = self.state.grid
        self._title_label.configure(text=self.state.title)
        self._widget_dates.clear()

        for lbl, abbr in zip(panel.day_headers, self.state.headers):
            lbl.configure(text=abbr, fg=p["weekend_fg"] if abbr in ("Sat", "Sun") else p["fg"])

        weeks = self.state.week_numbers
        for r in range(_MAX_ROWS):
            if panel.week_nums:
                panel.week_nums[r].configure(text=weeks[r] if r < len(grid) else "")
            for c in range(7):
                cell = panel.day_cells[r][c]
                if r >= len(grid):
                    cell.delete("all")
                    cell.configure(bg=p["bg"], cursor="")
                    continue
                day = grid[r][c]
                bg, fg = self._day_colors(p, day.is_today, day.outside_month)
                self._draw_cell(
                    cell, str(day.day), bg, fg,
                    self.font_bold if day.is_today else self.font_normal,
                    cursor="hand2",
                )
                self._widget_dates[id(cell)] = day.date

    @staticmethod
    def _day_colors(palette: dict, is_today: bool, outside_month: bool) -> tuple[str, str]:
        if is_today:
            return palette["today_bg"], palette["today_fg"]
        if outside_month:
            return palette["bg"], palette["outside_fg"]
        return palette["bg"], palette["fg"]

    def _draw_cell(self, cell: tk.Canvas, text: str, bg: str, fg: str,
                   font, cursor: str = "") -> None:
        cell.delete("all")
        w = cell.winfo_width()
        h = cell.winfo_height()
        if w <= 1:
            w = int(cell["width"]) + 2
        if h <= 1:
            h = int(cell["height"]) + 2
        cell.configure(bg=bg, cursor=cursor)
        cell.create_text(w // 2, h // 2, text=text, fill=fg, font=font)

    # ------------------------------------------------------------------
    # Press/release: short press selects, horizontal drag navigates
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        if id(event.widget) in self._widget_dates:
            self._press = (id(event.widget), event.x_root)

    def _on_release(self, event: tk.Event) -> None:
        if self._press is None:
            return
        widget_id, start_x = self._press
        self._press = None
        delta = drag_delta(event.x_root - start_x, self.settings["drag_min_distance"])
        if delta:
            self._navigate(delta)
            return
        d = self._widget_dates.get(widget_id)
        if d is not None:
            self.state.select(d)

    def _on_selected(self, d: date) -> None:
        logger.debug("Picked %s", d.isoformat())
        self.hide()
        if self.on_select is not None:
            self.on_select(d)

    def cancel(self) -> None:
        self.hide()
        if self.on_cancel is not None:
            self.on_cancel()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, delta: int) -> None:
        if self.state.shift(delta):
            self._refresh()
        else:
            self.root.bell()

    def _go_today(self) -> None:
        if self.state.go_to_today():
            self._refresh()
        else:
            self.root.bell()

    def _select_today(self) -> None:
        self._go_today()
        self.state.select(self.state.today)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self, today: date | None = None) -> None:
        self.state.set_today(today or date.today())
        self._go_today()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._press = None
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position next to the pointer, kept on screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_pointerx() - win_w // 2
        y = self.root.winfo_pointery() - win_h - 12
        x = max(0, min(x, self.root.winfo_screenwidth() - win_w))
        y = max(0, min(y, self.root.winfo_screenheight() - win_h))
        self.root.geometry(f"+{x}+{y}")
