from __future__ import annotations

from delve.config import GenerationConfig
from delve.engine import LEVEL_GENERATED, TURN_CHANGED, EventBus, GameSession, PlayerIntent, TurnState, TurnSystems
from delve.roster import SpawnCategory

SIGNALS = [
    (PlayerIntent.move(0, 1), False),
    (None, False),
    (None, False),
    (None, True),
    (None, False),
    (PlayerIntent.pick_up(), False),
    (None, True),
    (None, False),
]


def _config(seed="crumbs"):
    return GenerationConfig(
        architect="drunkard",
        width=30,
        height=20,
        entity_distance=3,
        num_monsters=6,
        num_items=3,
        num_npcs=2,
        seed=seed,
    )


class RespawnRecorder(TurnSystems):
    def __init__(self):
        self.respawns = []

    def respawn(self, level, orders):
        self.respawns.append((level.level, list(orders)))


def test_first_level_is_generated_on_start():
    systems = RespawnRecorder()
    session = GameSession(_config(), systems=systems)
    assert session.level_index == 0
    assert session.level.level == 0
    assert session.state is TurnState.AWAITING_INPUT
    assert len(systems.respawns) == 1
    level_no, orders = systems.respawns[0]
    assert level_no == 0
    assert {o.position for o in orders} == session.level.all_spawns()


def test_level_complete_regenerates_and_respawns():
    systems = RespawnRecorder()
    session = GameSession(_config(), systems=systems)
    first = session.level

    assert session.tick(level_complete=True) is TurnState.NEXT_LEVEL
    assert session.level is first
    assert session.tick() is TurnState.AWAITING_INPUT
    assert session.level_index == 1
    assert session.level.level == 1
    assert session.level is not first
    assert [lvl for lvl, _ in systems.respawns] == [0, 1]


def test_spawn_orders_match_categories():
    session = GameSession(_config())
    level = session.level
    by_cat = {cat: {o.position for o in session.spawn_orders if o.category is cat} for cat in SpawnCategory}
    assert by_cat[SpawnCategory.MONSTER] == level.monster_spawns
    assert by_cat[SpawnCategory.ITEM] == level.item_spawns
    assert by_cat[SpawnCategory.NPC] == level.npc_spawns


def test_replay_is_deterministic():
    a = GameSession(_config())
    b = GameSession(_config())
    states_a = a.replay(SIGNALS)
    states_b = b.replay(SIGNALS)

    assert states_a == states_b
    assert states_a[-1] is TurnState.AWAITING_INPUT
    assert a.level_index == b.level_index == 2
    assert a.level.grid.snapshot() == b.level.grid.snapshot()
    assert a.level.all_spawns() == b.level.all_spawns()
    assert a.spawn_orders == b.spawn_orders


def test_events_are_published():
    bus = EventBus()
    changes = []
    levels = []
    bus.subscribe(TURN_CHANGED, lambda e: changes.append((e.payload["from"], e.payload["to"])))
    bus.subscribe(LEVEL_GENERATED, lambda e: levels.append(e.payload["level"]))

    session = GameSession(_config(), bus=bus)
    session.tick()  # no intent, no change
    session.tick(PlayerIntent.move(1, 0))
    session.tick(level_complete=True)
    session.tick()

    assert levels == [0, 1]
    assert changes == [
        (TurnState.AWAITING_INPUT, TurnState.PLAYER_TURN),
        (TurnState.PLAYER_TURN, TurnState.NEXT_LEVEL),
        (TurnState.NEXT_LEVEL, TurnState.AWAITING_INPUT),
    ]


def test_unsubscribed_callback_is_not_called():
    bus = EventBus()
    seen = []

    def cb(event):
        seen.append(event.name)

    bus.subscribe(TURN_CHANGED, cb)
    bus.unsubscribe(TURN_CHANGED, cb)
    bus.publish(TURN_CHANGED, {})
    assert seen == []
