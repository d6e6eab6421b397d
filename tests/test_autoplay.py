import numpy as np

from autoplay import AutoPlayer, player_rng
from tilt2048.config import GameConfig
from tilt2048.game.events import EventRecorder, TilePlaced
from tilt2048.game.loop import GameLoop
from tilt2048.game.sources import RandomTileSource


def test_autoplayer_plays_requested_games():
    config = GameConfig(size=3, seed=11)
    tiles = RandomTileSource(config.size, config.spawn_prob_2, seed=config.seed)
    recorder = EventRecorder()
    player = AutoPlayer(games=2, rng=player_rng(11), events=recorder)
    session = GameLoop(tiles, player, listener=player, config=config).run()

    assert len(player.finished) == 2
    assert session.max == max(player.finished)
    assert recorder.of_type(TilePlaced)


def test_player_rng_is_separate_from_tile_stream():
    tiles = RandomTileSource(4, seed=3)
    a = player_rng(tiles.seed).random(8)
    b = player_rng(3).random(8)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, np.random.default_rng(3).random(8))
