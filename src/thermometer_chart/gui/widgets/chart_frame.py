# src/thermometer_chart/gui/widgets/chart_frame.py
"""
ThermometerChartFrame - customtkinter host for a thermometer chart.

Embeds the chart's matplotlib figure with a navigation toolbar, an export
button and responsive resizing. Properties are changed on ``frame.chart``;
call ``refresh()`` to redraw the canvas afterwards.
"""

import logging
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Any, Dict, Optional, Union

import customtkinter as ctk
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk
from matplotlib.figure import Figure

from thermometer_chart.core.config import ChartConfig, get_config
from thermometer_chart.core.exceptions import RenderError
from thermometer_chart.gui.theme_helper import ThemeHelper
from thermometer_chart.gui.widgets.charts.thermometer import ThermometerChart
from thermometer_chart.utils.logging_utils import log_exception

logger = logging.getLogger(__name__)


class ThermometerChartFrame(ctk.CTkFrame):
    """
    Frame hosting a ThermometerChart.

    Features:
    - Matplotlib figure/canvas integration
    - Theme-aware figure background
    - Toolbar and export functionality
    - Debounced resize handling
    """

    def __init__(self, parent, *chart_args: Any, config: Optional[ChartConfig] = None,
                 **chart_kwargs: Any):
        super().__init__(parent)

        self.config = config or get_config().chart
        self._resize_job = None

        colors = ThemeHelper.get_theme_colors()
        self.figure = Figure(figsize=self.config.figsize, dpi=self.config.dpi,
                             facecolor=colors["bg"]["primary"])
        self.figure.subplots_adjust(left=0.35, right=0.65, bottom=0.08, top=0.92)

        self.canvas = FigureCanvasTkAgg(self.figure, master=self)
        self.canvas.get_tk_widget().configure(bg=colors["bg"]["primary"])
        self.canvas.get_tk_widget().pack(fill='both', expand=True)

        # Chart is created after the canvas so its updates reach this canvas
        self.chart = ThermometerChart(self.figure, *chart_args, config=self.config, **chart_kwargs)
        ThemeHelper.style_axes(self.chart.ax)

        toolbar_frame = ctk.CTkFrame(self)
        toolbar_frame.pack(fill='x', side='bottom')

        self.toolbar = NavigationToolbar2Tk(self.canvas, toolbar_frame, pack_toolbar=False)
        self.toolbar.update()
        self.toolbar.pack(side='left')

        export_btn = ctk.CTkButton(toolbar_frame, text="Export",
                                   command=self._export_dialog, width=80, height=25)
        export_btn.pack(side='left', padx=2, pady=2)

        self.bind("<Configure>", self._on_resize)
        self.canvas.draw()

    def refresh(self) -> None:
        """Redraw the canvas after property changes."""
        self.canvas.draw_idle()

    def export(self, path: Union[str, Path]) -> Path:
        """Export the chart to PNG, SVG or PDF."""
        return self.chart.savefig(path)

    def _export_dialog(self) -> None:
        filetypes = [
            ('PNG files', '*.png'),
            ('SVG files', '*.svg'),
            ('PDF files', '*.pdf'),
        ]
        filename = filedialog.asksaveasfilename(
            parent=self.winfo_toplevel(),
            defaultextension='.png',
            filetypes=filetypes,
            title='Export Chart'
        )
        if not filename:
            return

        try:
            self.export(filename)
            messagebox.showinfo("Export Successful", f"Chart exported to {filename}")
        except RenderError as e:
            log_exception(logger, e, "Export failed")
            messagebox.showerror("Export Error", str(e))

    def _on_resize(self, event) -> None:
        """Debounce resize events to avoid excessive redraws."""
        if self._resize_job:
            self.after_cancel(self._resize_job)
        self._resize_job = self.after(100, self._do_resize)

    def _do_resize(self) -> None:
        self._resize_job = None
        width = self.winfo_width()
        height = self.winfo_height()
        if width < 100 or height < 100:
            return

        dpi = self.figure.dpi
        self.figure.set_size_inches(max(2.0, width / dpi), max(3.0, height / dpi), forward=True)
        self.canvas.draw_idle()


def launch_viewer(properties: Dict[str, Any], config: Optional[ChartConfig] = None,
                  appearance_mode: str = "system") -> None:
    """
    Open a window showing a thermometer chart and run the Tk main loop.

    Args:
        properties: Chart properties by name
        config: Drawing configuration
        appearance_mode: customtkinter appearance ('light', 'dark', 'system')
    """
    ctk.set_appearance_mode(appearance_mode)

    root = ctk.CTk()
    root.title(properties.get('title_text') or "Thermometer Chart")
    root.geometry("420x820")

    frame = ThermometerChartFrame(root, config=config, **properties)
    frame.pack(fill='both', expand=True, padx=10, pady=10)

    logger.info("Thermometer chart viewer started")
    root.mainloop()
