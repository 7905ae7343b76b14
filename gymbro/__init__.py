"""GymBro: клиент трекера питания, воды, сна и тренировок."""

__version__ = "0.1.0"
