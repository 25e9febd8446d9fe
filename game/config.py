"""Timer and pacing configuration for Solo Mafia."""

import logging
import os
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

# Default env var names
ENV_DAY_SECONDS = "MAFIA_DAY_SECONDS"
ENV_VOTING_SECONDS = "MAFIA_VOTING_SECONDS"
ENV_LAST_WORD_SECONDS = "MAFIA_LAST_WORD_SECONDS"
ENV_MAFIA_CHAT_SECONDS = "MAFIA_MAFIA_CHAT_SECONDS"
ENV_MAFIA_TURN_SECONDS = "MAFIA_MAFIA_TURN_SECONDS"
ENV_SHERIFF_TURN_SECONDS = "MAFIA_SHERIFF_TURN_SECONDS"
ENV_BOT_DELAY_MIN = "MAFIA_BOT_DELAY_MIN"
ENV_BOT_DELAY_MAX = "MAFIA_BOT_DELAY_MAX"
ENV_TIME_SCALE = "MAFIA_TIME_SCALE"


@dataclass(frozen=True)
class GameConfig:
    """Phase timers (whole simulated seconds) and bot pacing (simulated seconds)."""

    day_seconds: int = 30
    voting_seconds: int = 10
    last_word_seconds: int = 15
    mafia_chat_seconds: int = 20
    mafia_turn_seconds: int = 15
    sheriff_turn_seconds: int = 15
    bot_delay_min: float = 1.5
    bot_delay_max: float = 4.5
    reaction_delay: float = 1.5
    day_chatter_min: float = 2.0
    day_chatter_max: float = 5.0
    mafia_chatter_min: float = 2.0
    mafia_chatter_max: float = 4.0
    night_delay: float = 2.0
    results_delay: float = 1.0
    # Simulated seconds per wall-clock second
    time_scale: float = 1.0

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_CONFIG = GameConfig()


def _env_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


def load_config() -> GameConfig:
    """Build GameConfig from env (MAFIA_DAY_SECONDS, etc.), falling back to defaults."""
    d = DEFAULT_CONFIG
    delay_min = _env_number(ENV_BOT_DELAY_MIN, d.bot_delay_min, float)
    delay_max = _env_number(ENV_BOT_DELAY_MAX, d.bot_delay_max, float)
    if delay_max < delay_min:
        logger.warning("%s < %s; swapping", ENV_BOT_DELAY_MAX, ENV_BOT_DELAY_MIN)
        delay_min, delay_max = delay_max, delay_min
    return GameConfig(
        day_seconds=_env_number(ENV_DAY_SECONDS, d.day_seconds, int),
        voting_seconds=_env_number(ENV_VOTING_SECONDS, d.voting_seconds, int),
        last_word_seconds=_env_number(ENV_LAST_WORD_SECONDS, d.last_word_seconds, int),
        mafia_chat_seconds=_env_number(ENV_MAFIA_CHAT_SECONDS, d.mafia_chat_seconds, int),
        mafia_turn_seconds=_env_number(ENV_MAFIA_TURN_SECONDS, d.mafia_turn_seconds, int),
        sheriff_turn_seconds=_env_number(ENV_SHERIFF_TURN_SECONDS, d.sheriff_turn_seconds, int),
        bot_delay_min=delay_min,
        bot_delay_max=delay_max,
        time_scale=_env_number(ENV_TIME_SCALE, d.time_scale, float),
    )
