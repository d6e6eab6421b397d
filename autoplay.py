import logging

import hydra
import numpy as np
from omegaconf import DictConfig, OmegaConf

from tilt2048.config import from_omegaconf
from tilt2048.game.events import GameListener, LoggingListener
from tilt2048.game.loop import GameLoop
from tilt2048.game.sources import DIRECTION_SIGNALS, RandomTileSource, Signal

log = logging.getLogger(__name__)


def player_rng(seed: int) -> np.random.Generator:
    """Move stream for the autoplayer, independent of the tile stream for `seed`."""
    return np.random.default_rng([int(seed), 1])


class AutoPlayer(GameListener):
    """Plays random directions, starting a new game after each game over
    until `games` games have finished, then quits."""

    def __init__(self, games: int, rng: np.random.Generator, events: GameListener | None = None):
        self.games = int(games)
        self.rng = rng
        self.events = events
        self.finished: list[int] = []
        self._score = 0
        self._over = False

    def __call__(self) -> Signal:
        if not self._over:
            return DIRECTION_SIGNALS[int(self.rng.integers(len(DIRECTION_SIGNALS)))]
        self._over = False
        if len(self.finished) >= self.games:
            return Signal.QUIT
        return Signal.NEW_GAME

    def tile_placed(self, value, row, col):
        if self.events is not None:
            self.events.tile_placed(value, row, col)

    def tile_moved(self, value, source, dest):
        if self.events is not None:
            self.events.tile_moved(value, source, dest)

    def tile_merged(self, old_value, new_value, source, dest):
        if self.events is not None:
            self.events.tile_merged(old_value, new_value, source, dest)

    def score_updated(self, current, max_score):
        self._score = current
        if self.events is not None:
            self.events.score_updated(current, max_score)

    def game_over(self):
        self._over = True
        self.finished.append(self._score)
        log.info("game %d finished with score %d", len(self.finished), self._score)


@hydra.main(config_path="./conf", config_name="autoplay", version_base=None)
def main(cfg: DictConfig):
    log.info("config:\n%s", OmegaConf.to_yaml(cfg))
    game_cfg = from_omegaconf(cfg.game)

    tiles = RandomTileSource(game_cfg.size, game_cfg.spawn_prob_2, seed=game_cfg.seed)
    player = AutoPlayer(
        games=int(cfg.games),
        rng=player_rng(tiles.seed),
        events=LoggingListener() if bool(cfg.get("log_events", False)) else None,
    )
    loop = GameLoop(tiles, player, listener=player, config=game_cfg)
    session = loop.run()

    if player.finished:
        log.info(
            "played %d games: mean score %.1f, best %d",
            len(player.finished),
            float(np.mean(player.finished)),
            session.max,
        )


if __name__ == "__main__":
    main()
