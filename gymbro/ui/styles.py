"""Централизованные стили для Streamlit приложения."""

from typing import Final

# ===== SIDEBAR STYLES =====
SIDEBAR_HIDE_STYLE: Final[str] = """
<style>
    [data-testid="stSidebar"] {
        display: none;
    }
    [data-testid="stSidebarNav"] {
        display: none;
    }
</style>
"""


def get_progress_card_html(
    title: str,
    icon: str,
    current: float,
    goal: float,
    unit: str,
    percentage: float,
    color: str,
) -> str:
    """HTML карточки прогресса с полосой заполнения"""
    return f"""
    <div style="background:#fff;border-radius:12px;padding:16px;margin-bottom:12px;
                box-shadow:0 2px 4px rgba(0,0,0,0.1);">
        <div style="display:flex;justify-content:space-between;margin-bottom:12px;">
            <span style="font-weight:600;color:#333;">{title}</span>
            <span style="font-size:20px;">{icon}</span>
        </div>
        <div style="height:6px;background:#f0f0f0;border-radius:3px;margin-bottom:8px;">
            <div style="height:100%;width:{percentage}%;background:{color};border-radius:3px;"></div>
        </div>
        <div>
            <span style="font-size:18px;font-weight:bold;color:#333;">{current:g}{unit}</span>
            <span style="font-size:14px;color:#666;"> / {goal:g}{unit}</span>
        </div>
        <div style="font-size:12px;color:#999;">{percentage:.0f}%</div>
    </div>
    """


def get_streak_card_html(
    title: str,
    icon: str,
    current: int,
    longest: int,
    color: str,
) -> str:
    """HTML карточки стрика"""
    return f"""
    <div style="background:#fff;border-radius:12px;padding:16px;margin-bottom:12px;
                border-left:4px solid {color};box-shadow:0 2px 4px rgba(0,0,0,0.1);">
        <div style="font-size:24px;margin-bottom:8px;">{icon}</div>
        <div style="font-size:12px;font-weight:600;color:#666;">{title}</div>
        <div style="font-size:18px;font-weight:bold;color:#333;">{current} days</div>
        <div style="font-size:12px;color:#999;">Best: {longest} days</div>
    </div>
    """
