"""Game configuration.

`GameConfig` is a plain dataclass; `load_config` layers an optional YAML file
and dotlist overrides (``["size=3", "win_threshold=64"]``) on top of the
defaults using OmegaConf, then validates the result.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from tilt2048.core.board import SIZE, WIN_THRESHOLD
from tilt2048.errors import ConfigError


@dataclass
class GameConfig:
    size: int = SIZE
    win_threshold: int = WIN_THRESHOLD
    spawn_prob_2: float = 0.9
    start_tiles: int = 2
    seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        if self.size < 2:
            raise ConfigError(f"size must be at least 2, got {self.size}")
        t = self.win_threshold
        if t < 4 or t & (t - 1):
            raise ConfigError(f"win_threshold must be a power of two >= 4, got {t}")
        if not 0.0 <= self.spawn_prob_2 <= 1.0:
            raise ConfigError(f"spawn_prob_2 must be in [0, 1], got {self.spawn_prob_2}")
        if not 1 <= self.start_tiles <= self.size * self.size:
            raise ConfigError(
                f"start_tiles must be in [1, {self.size * self.size}], got {self.start_tiles}"
            )
        return self


def from_omegaconf(cfg: DictConfig | Mapping[str, Any]) -> GameConfig:
    """Convert a (Hydra) config node into a validated GameConfig."""
    base = OmegaConf.structured(GameConfig)
    try:
        merged = OmegaConf.merge(base, cfg)
    except OmegaConfBaseException as e:
        raise ConfigError(str(e)) from e
    config: GameConfig = OmegaConf.to_object(merged)
    return config.validate()


def load_config(path: str | None = None, overrides: Sequence[str] | None = None) -> GameConfig:
    layers = []
    try:
        if path is not None:
            layers.append(OmegaConf.load(path))
        if overrides:
            layers.append(OmegaConf.from_dotlist(list(overrides)))
    except OmegaConfBaseException as e:
        raise ConfigError(str(e)) from e
    if not layers:
        return GameConfig().validate()
    return from_omegaconf(OmegaConf.merge(*layers))
