import sys, os
import logging
import random
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
from tilt2048.components.side import Side
from tilt2048.events.bus import EventBus, EVENT_TILE_MERGED, EVENT_GAME_OVER
from tilt2048.factories.tiles import spawn_random_tile
from tilt2048.model import Model

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

seed = int(sys.argv[1]) if len(sys.argv) > 1 else 2048
rng = random.Random(seed)
bus = EventBus()
model = Model(4, event_bus=bus, rng=rng)

received = []
bus.subscribe(EVENT_TILE_MERGED, lambda s, **k: received.append(('merge', k['tile'].value)))
bus.subscribe(EVENT_GAME_OVER, lambda s, **k: received.append(('over', k['reason'])))

spawn_random_tile(model.world)
spawn_random_tile(model.world)
print(model)

moves = 0
while not model.game_over() and moves < 500:
    side = rng.choice(list(Side))
    if model.tilt(side):
        spawn_random_tile(model.world)
        moves += 1
        print('tilt', side.name, 'events', received)
        received.clear()
        print(model)

print('finished after', moves, 'moves; score', model.score(), 'max', model.max_score())
