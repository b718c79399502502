# src/thermometer_chart/gui/theme_helper.py
"""
Theme Helper for the thermometer chart viewer.

Provides consistent theme colors for the host frame and the matplotlib figure.
"""

from typing import Dict

import customtkinter as ctk


class ThemeHelper:
    """Helper class for consistent theming across the viewer."""

    @staticmethod
    def is_dark() -> bool:
        return ctk.get_appearance_mode().lower() == "dark"

    @staticmethod
    def get_theme_colors() -> Dict[str, Dict[str, str]]:
        """Get theme colors for current appearance mode."""
        if ThemeHelper.is_dark():
            return {
                "bg": {"primary": "#212121", "secondary": "#2b2b2b"},
                "fg": {"primary": "#ffffff", "secondary": "#e0e0e0"},
                "border": {"primary": "#404040"},
                "error": "#F44336",
            }
        else:  # light mode
            return {
                "bg": {"primary": "#ffffff", "secondary": "#f5f5f5"},
                "fg": {"primary": "#000000", "secondary": "#333333"},
                "border": {"primary": "#e0e0e0"},
                "error": "#F44336",
            }

    @staticmethod
    def style_axes(ax) -> None:
        """Apply theme colors to the stem axes' text and spines."""
        colors = ThemeHelper.get_theme_colors()
        text_color = colors["fg"]["primary"]

        ax.tick_params(colors=text_color, labelcolor=text_color)
        ax.title.set_color(text_color)
        for spine in ax.spines.values():
            spine.set_color(colors["border"]["primary"] if ThemeHelper.is_dark() else text_color)
        ax.yaxis.grid(True, color=colors["border"]["primary"])
        ax.set_facecolor(colors["bg"]["secondary"])
