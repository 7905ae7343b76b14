"""
Модели данных клиента: профиль пользователя, сессия, прогресс и стрики
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gymbro.constants import (
    DEFAULT_CALORIES_GOAL,
    DEFAULT_PROTEIN_GOAL,
    DEFAULT_SLEEP_GOAL,
    DEFAULT_WATER_GOAL,
)


class BodyType(str, Enum):
    """Текущий тип телосложения"""
    SKINNY = "skinny"
    SKINNY_FAT = "skinny-fat"
    FAT = "fat"
    LEAN = "lean"
    MUSCULAR = "muscular"


class DesiredOutcome(str, Enum):
    """Желаемый результат тренировок"""
    LEAN_BULK = "lean-bulk"
    MUSCULAR = "muscular"
    WEIGHT_LOSS = "weight-loss"
    MAINTENANCE = "maintenance"
    STRENGTH = "strength"


class _Frozen(BaseModel):
    """Неизменяемая модель: обновление только полной заменой"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """null от backend означает значение по умолчанию"""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class BodyProfile(_Frozen):
    """
    Физические параметры пользователя.

    Attributes:
        height: Рост в сантиметрах
        weight: Вес в килограммах
        body_type: Текущий тип телосложения
        desired_outcome: Желаемый результат
    """

    height: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    body_type: BodyType = Field(default=BodyType.LEAN, alias="bodyType")
    desired_outcome: DesiredOutcome = Field(
        default=DesiredOutcome.MUSCULAR,
        alias="desiredOutcome",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Тело запроса PUT /auth/profile (пустые значения не отправляются)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Goals(_Frozen):
    """Дневные цели"""

    protein: float = Field(default=DEFAULT_PROTEIN_GOAL, ge=0)
    calories: float = Field(default=DEFAULT_CALORIES_GOAL, ge=0)
    water: float = Field(default=DEFAULT_WATER_GOAL, ge=0)
    sleep: float = Field(default=DEFAULT_SLEEP_GOAL, ge=0)

    def to_payload(self) -> Dict[str, Any]:
        """Тело запроса PUT /auth/goals"""
        return self.model_dump(mode="json")


class UserProfile(_Frozen):
    """Профиль пользователя, принадлежит сессии"""

    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    profile: BodyProfile = Field(default_factory=BodyProfile)
    goals: Goals = Field(default_factory=Goals)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "UserProfile":
        """
        Разбор профиля из ответа backend.

        Backend возвращает либо {"user": {...}}, либо сам объект пользователя.
        """
        payload = data.get("user", data) if isinstance(data, dict) else data
        return cls.model_validate(payload)


@dataclass(frozen=True)
class Session:
    """
    Снимок сессии.

    user имеет смысл только при наличии token.
    """

    token: Optional[str] = None
    user: Optional[UserProfile] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class MetricProgress(_Frozen):
    """Прогресс по одной метрике за день"""

    current: float = 0
    goal: float = 0

    @property
    def percentage(self) -> float:
        """Процент выполнения цели в пределах [0, 100]"""
        if self.goal <= 0:
            return 0.0
        return max(0.0, min(self.current / self.goal * 100, 100.0))


class DailyProgress(_Frozen):
    calories: MetricProgress = Field(default_factory=MetricProgress)
    protein: MetricProgress = Field(default_factory=MetricProgress)
    water: MetricProgress = Field(default_factory=MetricProgress)
    sleep: MetricProgress = Field(default_factory=MetricProgress)


class Progress(_Frozen):
    """Ответ GET /auth/progress"""

    progress: DailyProgress = Field(default_factory=DailyProgress)


class Streak(_Frozen):
    """Стрик: количество дней подряд с записью активности"""

    current: int = 0
    longest: int = 0


class StreakSet(_Frozen):
    food: Streak = Field(default_factory=Streak)
    water: Streak = Field(default_factory=Streak)
    workout: Streak = Field(default_factory=Streak)
    sleep: Streak = Field(default_factory=Streak)


class Streaks(_Frozen):
    """Ответ GET /track/streak"""

    streaks: StreakSet = Field(default_factory=StreakSet)


@dataclass
class Dashboard:
    """
    Данные главного экрана.

    Прогресс и стрики загружаются параллельно; ошибка одного запроса
    не мешает отобразить другой.
    """

    progress: Optional[Progress] = None
    streaks: Optional[Streaks] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class AuthResponse(_Frozen):
    """Ответ POST /auth/login и POST /auth/signup"""

    token: str = Field(..., min_length=1)
    user: Optional[UserProfile] = None
