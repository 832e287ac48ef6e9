from __future__ import annotations

from schedule_viewer.core.export_png import badge_color
from schedule_viewer.core.state import DisplayStatus

PALETTE = {
    "bg0": "#0B0F14",
    "bg1": "#111827",
    "panel": "#161E2A",
    "panel_alt": "#1A2432",
    "border": "#263041",
    "text": "#E5E7EB",
    "muted": "#9CA3AF",
    "blue": "#2563EB",
    "blue_hover": "#1D4ED8",
    "blue_pressed": "#1E40AF",
    "red": "#EF4444",
    "cyan": "#22D3EE",
    "input_bg": "#0F172A",
}


def app_stylesheet() -> str:
    p = PALETTE
    return f"""
    QWidget {{
        color: {p["text"]};
        font-family: 'Segoe UI', 'Inter', sans-serif;
        font-size: 12px;
    }}
    QMainWindow {{
        background: qlineargradient(x1:0,y1:0,x2:1,y2:1, stop:0 {p["bg0"]}, stop:1 {p["bg1"]});
    }}
    QWidget#RootWidget, QWidget#CardList, QScrollArea#CardScroll {{
        background: transparent;
        border: none;
    }}
    QFrame#TopBar {{
        background: rgba(22, 30, 42, 0.94);
        border: 1px solid {p["border"]};
        border-radius: 12px;
    }}
    QLabel#TitleLabel {{
        font-size: 18px;
        font-weight: 700;
    }}
    QLabel#MutedLabel {{
        color: {p["muted"]};
    }}
    QFrame#ClassItem {{
        background: rgba(22, 30, 42, 0.95);
        border: 1px solid {p["border"]};
        border-radius: 12px;
    }}
    QLabel#PeriodMarker {{
        background: qlineargradient(x1:0,y1:0,x2:1,y2:1, stop:0 #1D4ED8, stop:1 #0EA5E9);
        color: white;
        border-radius: 10px;
        font-size: 26px;
        font-weight: 800;
        min-width: 64px;
        max-width: 64px;
        min-height: 64px;
    }}
    QLabel#ClassName {{
        font-size: 16px;
        font-weight: 700;
    }}
    QLabel#DetailLabel {{
        color: {p["muted"]};
        font-weight: 600;
        min-width: 60px;
    }}
    QComboBox {{
        background: {p["input_bg"]};
        border: 1px solid {p["border"]};
        border-radius: 8px;
        padding: 6px 8px;
        min-width: 180px;
    }}
    QComboBox:focus {{
        border: 1px solid {p["blue"]};
    }}
    QPushButton {{
        background: {p["panel_alt"]};
        border: 1px solid {p["border"]};
        border-radius: 10px;
        padding: 8px 12px;
        font-weight: 600;
    }}
    QPushButton:hover {{
        border-color: {p["blue"]};
        background: #1E293B;
    }}
    QPushButton:pressed {{
        background: #0F172A;
    }}
    QPushButton#PrimaryButton {{
        background: {p["blue"]};
        border-color: {p["blue"]};
        color: white;
    }}
    QPushButton#PrimaryButton:hover {{
        background: {p["blue_hover"]};
        border-color: {p["blue_hover"]};
    }}
    QPushButton#PrimaryButton:pressed {{
        background: {p["blue_pressed"]};
        border-color: {p["blue_pressed"]};
    }}
    QScrollBar:vertical {{
        width: 12px;
        background: transparent;
        margin: 2px;
    }}
    QScrollBar::handle:vertical {{
        min-height: 24px;
        background: #263244;
        border-radius: 6px;
    }}
    QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
        height: 0px;
    }}
    QToolTip {{
        background: #111827;
        color: {p["text"]};
        border: 1px solid {p["border"]};
        padding: 6px;
    }}
    """


def subject_badge_style(category: str) -> str:
    color = badge_color(category)
    return (
        f"background: {color}; color: white; border-radius: 10px; "
        "padding: 3px 10px; font-weight: 700;"
    )


def status_notice_style(status: DisplayStatus) -> str:
    if status == DisplayStatus.ERROR:
        return (
            "background: rgba(239,68,68,0.18); border: 1px solid rgba(239,68,68,0.55); "
            "color: #FCA5A5; border-radius: 10px; padding: 10px 12px;"
        )
    if status == DisplayStatus.LOADING:
        return (
            "background: rgba(37,99,235,0.18); border: 1px solid rgba(37,99,235,0.55); "
            "color: #BFDBFE; border-radius: 10px; padding: 10px 12px;"
        )
    return ""
