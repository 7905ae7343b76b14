"""
Логика экранов без привязки к Streamlit

Каждый экран собирает ввод формы, вызывает одну операцию API клиента
и показывает одно из состояний: idle, loading, done или error.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from gymbro.api_client import APIClient
from gymbro.constants import (
    MSG_DASHBOARD_LOAD_FAILED,
    MSG_EMPTY_ENTRY,
    MSG_INVALID_NUMBER,
    TRACKER_MESSAGES,
)
from gymbro.exceptions import APIError
from gymbro.models import Dashboard, MetricProgress, Streak

logger = logging.getLogger(__name__)


class ScreenState(str, Enum):
    """Состояние экрана"""
    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class ScreenResult:
    state: ScreenState
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == ScreenState.DONE


IDLE = ScreenResult(ScreenState.IDLE)


def parse_positive_number(value: Any) -> Optional[float]:
    """
    Разбор числа из поля формы.

    Returns:
        Положительное число или None если ввод невалидный
    """
    if value is None:
        return None
    try:
        number = float(str(value).strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_optional_number(value: Any) -> Optional[float]:
    """Пустое поле даёт None, иначе как parse_positive_number"""
    if value is None or not str(value).strip():
        return None
    return parse_positive_number(value)


def _run(activity: str, call: Callable[[], Any]) -> ScreenResult:
    success, failure = TRACKER_MESSAGES[activity]
    try:
        call()
    except APIError as e:
        logger.warning(f"[TRACK] {activity} failed: {e.message}")
        return ScreenResult(ScreenState.ERROR, f"{failure}: {e.message}")
    logger.info(f"[TRACK] {activity} tracked")
    return ScreenResult(ScreenState.DONE, success)


def _text_entry(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def track_food(client: APIClient, food: str) -> ScreenResult:
    entry = _text_entry(food)
    if entry is None:
        return ScreenResult(ScreenState.ERROR, MSG_EMPTY_ENTRY)
    return _run("food", lambda: client.track_food(entry))


def track_water(client: APIClient, amount: Any) -> ScreenResult:
    """Записать воду; amount в миллилитрах, как ввёл пользователь"""
    number = parse_positive_number(amount)
    if number is None:
        return ScreenResult(ScreenState.ERROR, MSG_INVALID_NUMBER)
    return _run("water", lambda: client.track_water(number))


def track_sleep(client: APIClient, hours: Any) -> ScreenResult:
    number = parse_positive_number(hours)
    if number is None:
        return ScreenResult(ScreenState.ERROR, MSG_INVALID_NUMBER)
    return _run("sleep", lambda: client.track_sleep(number))


def track_workout(
    client: APIClient,
    workout: str,
    duration: Any = None,
) -> ScreenResult:
    entry = _text_entry(workout)
    if entry is None:
        return ScreenResult(ScreenState.ERROR, MSG_EMPTY_ENTRY)

    minutes = parse_optional_number(duration)
    if duration is not None and str(duration).strip() and minutes is None:
        return ScreenResult(ScreenState.ERROR, MSG_INVALID_NUMBER)
    return _run("workout", lambda: client.track_workout(entry, minutes))


def track_junk(client: APIClient, junk: str) -> ScreenResult:
    entry = _text_entry(junk)
    if entry is None:
        return ScreenResult(ScreenState.ERROR, MSG_EMPTY_ENTRY)
    return _run("junk", lambda: client.track_junk(entry))


# ===== DASHBOARD =====

@dataclass(frozen=True)
class ProgressCard:
    title: str
    current: float
    goal: float
    unit: str
    icon: str
    color: str
    percentage: float


@dataclass(frozen=True)
class StreakCard:
    title: str
    current: int
    longest: int
    icon: str
    color: str


# metric -> (заголовок, единица, иконка, цвет)
_PROGRESS_LAYOUT = {
    "calories": ("Calories", " cal", "🔥", "#FF6B6B"),
    "protein": ("Protein", "g", "🥩", "#4ECDC4"),
    "water": ("Water", " glasses", "💧", "#45B7D1"),
    "sleep": ("Sleep", "h", "😴", "#96CEB4"),
}

_STREAK_LAYOUT = {
    "food": ("Food Tracking", "🍽️", "#FF6B6B"),
    "water": ("Water Intake", "💧", "#45B7D1"),
    "workout": ("Workouts", "🏋️", "#FFA726"),
    "sleep": ("Sleep", "😴", "#96CEB4"),
}


@dataclass
class DashboardView:
    progress_cards: List[ProgressCard]
    streak_cards: List[StreakCard]
    errors: Dict[str, str]

    @property
    def error_message(self) -> Optional[str]:
        if not self.errors:
            return None
        return f"{MSG_DASHBOARD_LOAD_FAILED}: " + "; ".join(
            f"{name}: {message}" for name, message in self.errors.items()
        )


def build_dashboard_view(dashboard: Dashboard) -> DashboardView:
    """Карточки прогресса и стриков из данных главного экрана"""
    progress_cards: List[ProgressCard] = []
    if dashboard.progress is not None:
        for metric, (title, unit, icon, color) in _PROGRESS_LAYOUT.items():
            value: MetricProgress = getattr(dashboard.progress.progress, metric)
            progress_cards.append(
                ProgressCard(
                    title=title,
                    current=value.current,
                    goal=value.goal,
                    unit=unit,
                    icon=icon,
                    color=color,
                    percentage=round(value.percentage),
                )
            )

    streak_cards: List[StreakCard] = []
    if dashboard.streaks is not None:
        for activity, (title, icon, color) in _STREAK_LAYOUT.items():
            streak: Streak = getattr(dashboard.streaks.streaks, activity)
            streak_cards.append(
                StreakCard(
                    title=title,
                    current=streak.current,
                    longest=streak.longest,
                    icon=icon,
                    color=color,
                )
            )

    return DashboardView(
        progress_cards=progress_cards,
        streak_cards=streak_cards,
        errors=dict(dashboard.errors),
    )


def load_dashboard(client: APIClient) -> DashboardView:
    return build_dashboard_view(client.get_dashboard())
