"""Turn engine.

``Game`` owns the authoritative :class:`GameState` and is its only mutator.
Every player intent (``move``, ``rest``, ``click``) resolves one full turn
synchronously: player action, pickups and objective checks, healing, the
monster pass and a visibility refresh.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from rogulator import narrative
from rogulator.config import GameConfig, RunConfig, get_run_config
from rogulator.content.templates import TemplateRegistry, default_templates
from rogulator.log import get_logger
from rogulator.mapgen import generate_floor
from rogulator.narrative import Narrator, build_context
from rogulator.rng import RNG, new_rng
from rogulator.state.actors import create_player
from rogulator.state.entities import Monster
from rogulator.state.game_state import (
    COMBAT,
    INFO,
    LOST,
    PICKUP,
    SYSTEM,
    WON,
    GameState,
    MessageLog,
)
from rogulator.state.world import STAIRS_DOWN
from rogulator.systems.ai import choose_action
from rogulator.systems.fov import update_visibility
from rogulator.systems.geometry import chebyshev, direction_toward, step

logger = get_logger(__name__)

Pos = Tuple[int, int]


@dataclass(frozen=True)
class TurnResult:
    took_turn: bool = False
    entered_room: Optional[str] = None  # id of a room entered this turn


NO_TURN = TurnResult()


class Game:
    def __init__(
        self,
        cfg: Optional[GameConfig] = None,
        rng: Optional[RNG] = None,
        templates: Optional[TemplateRegistry] = None,
        narrator: Optional[Narrator] = None,
    ) -> None:
        self.cfg = cfg or GameConfig()
        self.rng = rng or new_rng(self.cfg.seed)
        self.templates = templates or default_templates()
        self.narrator = narrator
        self._next_id = 1
        self._state: Optional[GameState] = None

    # --- lifecycle ---

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("No game in progress; call start() first")
        return self._state

    @property
    def floor_number(self) -> int:
        return self.state.floor_number

    def start(self, run_config: Union[RunConfig, str]) -> GameState:
        """Generate floor 1 and place the player at the entry room."""
        if isinstance(run_config, str):
            run_config = get_run_config(run_config)
        cfg = self.cfg

        run_id = f"run-{self.rng.getrandbits(32):08x}"
        floor, start = generate_floor(1, run_config, self.rng, cfg, self.templates, self._new_id)
        player = create_player(start, cfg.player_starting_hp)
        state = GameState(
            run_id=run_id,
            config=run_config,
            player=player,
            floor=floor,
            messages=MessageLog(cfg.max_messages),
        )
        room = floor.room_at(start)
        state.current_room_id = room.id if room else None

        goal = floor.macguffin.name if floor.macguffin else "exit"
        state.messages.add(f"You enter the dungeon. Find the {goal} and escape!", SYSTEM, 0)

        self._state = state
        update_visibility(floor, player.pos, cfg.view_radius)
        logger.info(
            "run %s started: size=%s rooms=%d monsters=%d items=%d",
            run_id, run_config.size, len(floor.rooms), len(floor.monsters), len(floor.items),
        )
        return state

    def resume(self, state: GameState) -> GameState:
        """Adopt an existing state (a loaded save or a hand-built scenario)."""
        self._state = state
        update_visibility(state.floor, state.player.pos, self.cfg.view_radius)
        return state

    def _new_id(self, prefix: str) -> str:
        iid = f"{prefix}_{self._next_id}"
        self._next_id += 1
        return iid

    # --- intents ---

    def move(self, direction: str) -> TurnResult:
        state = self.state
        if not state.playing:
            return NO_TURN
        target = step(state.player.pos, direction)

        floor = state.floor
        monster = floor.monster_at(target)
        if monster is not None:
            self._player_attack(monster)
            self._end_turn(resting=False)
            return TurnResult(took_turn=True)

        if not floor.is_walkable(*target):
            return NO_TURN

        state.player.pos = target
        entered = self._track_room()
        self._pickup_item()
        self._pickup_macguffin()
        self._check_win()
        self._end_turn(resting=False)

        if entered and state.playing:
            self._narrate(narrative.ROOM_ENTERED)
        return TurnResult(took_turn=True, entered_room=entered)

    def rest(self) -> TurnResult:
        state = self.state
        if not state.playing:
            return NO_TURN
        state.messages.add("You rest for a moment.", INFO, state.turn)
        self._end_turn(resting=True)
        return TurnResult(took_turn=True)

    def click(self, target: Pos) -> TurnResult:
        """Adjacent click steps or attacks, a click on the player rests."""
        state = self.state
        if not state.playing:
            return NO_TURN
        pos = state.player.pos
        if tuple(target) == pos:
            return self.rest()
        if chebyshev(pos, target) == 1:
            return self.move(direction_toward(pos, target))
        # TODO: path toward distant clicks with find_path once the front end shows a route preview
        return NO_TURN

    # --- turn resolution ---

    def _end_turn(self, resting: bool) -> None:
        state = self.state
        cfg = self.cfg
        state.turn += 1

        player = state.player
        interval = cfg.heal_interval_resting if resting else cfg.heal_interval_moving
        if state.playing and player.hp < player.max_hp and state.turn % interval == 0:
            player.hp = min(player.max_hp, player.hp + cfg.heal_amount)
            if resting:
                state.messages.add("You feel a little better.", INFO, state.turn)

        if state.playing:
            self._monsters_act()

        update_visibility(state.floor, player.pos, cfg.view_radius)

    def _monsters_act(self) -> None:
        state = self.state
        floor = state.floor
        cfg = self.cfg
        snapshot = [m.pos for m in floor.living_monsters()]

        for monster in list(floor.monsters.values()):
            if not state.playing:
                break
            if not monster.alive:
                continue
            action, params = choose_action(
                monster,
                state.player.pos,
                floor,
                self.rng,
                blocked=snapshot,
                detection_range=cfg.monster_detection_range,
                max_depth=cfg.pathfinding_max_depth,
            )
            if action == "attack":
                self._monster_attack(monster)
            elif action == "move":
                dest = params["to"]
                # an earlier mover may have claimed the cell this turn
                if dest != state.player.pos and floor.monster_at(dest) is None:
                    monster.pos = dest

    def _player_attack(self, monster: Monster) -> None:
        state = self.state
        dmg = self.cfg.player_base_damage + state.player.weapon_bonus
        monster.hp -= dmg
        state.messages.add(f"You hit the {monster.name} for {dmg} damage!", COMBAT, state.turn)
        if monster.hp <= 0:
            state.messages.add(f"The {monster.name} is defeated!", COMBAT, state.turn)
            del state.floor.monsters[monster.id]
            state.monsters_defeated += 1
            logger.debug("%s (%s) killed on turn %d", monster.name, monster.id, state.turn)
            self._narrate(
                narrative.MONSTER_SLAIN,
                {"attacker": "Player", "target": monster.name, "damage": dmg, "target_hp": 0, "was_kill": True},
            )

    def _monster_attack(self, monster: Monster) -> None:
        state = self.state
        player = state.player
        dmg = max(self.cfg.min_damage, monster.damage - player.armor_bonus)
        player.hp -= dmg
        state.messages.add(f"The {monster.name} hits you for {dmg} damage!", COMBAT, state.turn)
        if not player.alive:
            player.hp = 0
            state.status = LOST
            state.killed_by = monster.name
            state.messages.add("You have been defeated...", SYSTEM, state.turn)
            logger.info("run %s lost on turn %d to %s", state.run_id, state.turn, monster.name)
            self._narrate(narrative.DEFEAT)

    # --- pickups / objectives ---

    def _pickup_item(self) -> None:
        state = self.state
        player = state.player
        item = state.floor.item_at(player.pos)
        if item is None:
            return
        msgs = state.messages
        turn = state.turn

        if item.type == "weapon":
            if player.weapon:
                msgs.add(f"You swap your {player.weapon.name} for {item.name}.", PICKUP, turn)
            else:
                msgs.add(f"You pick up {item.name}.", PICKUP, turn)
            player.weapon = item.template
        elif item.type == "armor":
            if player.armor:
                msgs.add(f"You swap your {player.armor.name} for {item.name}.", PICKUP, turn)
            else:
                msgs.add(f"You pick up {item.name}.", PICKUP, turn)
            player.armor = item.template
        elif item.type == "consumable":
            healed = min(item.effect, player.max_hp - player.hp)
            player.hp += healed
            msgs.add(f"You drink {item.name} and heal {healed} HP.", PICKUP, turn)
        elif item.type == "gold":
            player.gold += item.effect
            msgs.add(f"You pick up {item.effect} gold.", PICKUP, turn)
        elif item.type == "key":
            player.keys += 1
            msgs.add(f"You pick up {item.name}.", PICKUP, turn)

        del state.floor.items[item.id]

    def _pickup_macguffin(self) -> None:
        state = self.state
        macguffin = state.floor.macguffin
        if macguffin is None or macguffin.collected or macguffin.pos != state.player.pos:
            return
        macguffin.collected = True
        state.player.has_macguffin = True
        state.messages.add(f"You pick up the {macguffin.name}!", PICKUP, state.turn)
        self._narrate(narrative.MACGUFFIN_PICKUP)

    def _check_win(self) -> None:
        state = self.state
        if state.floor.kind_at(state.player.pos) != STAIRS_DOWN or not state.player.has_macguffin:
            return
        state.status = WON
        state.messages.add("You escaped with the treasure! Victory!", SYSTEM, state.turn)
        logger.info("run %s won on turn %d", state.run_id, state.turn)
        self._narrate(narrative.VICTORY)

    def _track_room(self) -> Optional[str]:
        """Shift current -> previous when the player's room changes.

        Leaving into a corridor counts as a change (current becomes None) but
        only a real room is reported as entered.
        """
        state = self.state
        room = state.floor.room_at(state.player.pos)
        room_id = room.id if room else None
        if room_id == state.current_room_id:
            return None
        state.previous_room_id = state.current_room_id
        state.current_room_id = room_id
        return room_id

    # --- narration ---

    def _narrate(self, event: str, combat: Optional[dict] = None) -> None:
        if self.narrator is None:
            return
        state = self.state
        context = build_context(state, self.cfg.narrative_monster_radius, self.cfg.narrative_recent_events)
        if combat is not None:
            context["combat"] = combat
        context["prompt"] = narrative.prompt_for(event, state, context)
        try:
            text = self.narrator.narrate(event, context)
        except Exception:
            logger.warning("narrator failed on %s; continuing without text", event, exc_info=True)
            return
        if text:
            state.messages.add(text, INFO, state.turn)


def new_game(
    run_config: Union[RunConfig, str] = "quick",
    seed: Optional[int] = None,
    cfg: Optional[GameConfig] = None,
    templates: Optional[TemplateRegistry] = None,
    narrator: Optional[Narrator] = None,
) -> Game:
    cfg = cfg or GameConfig()
    rng = new_rng(seed if seed is not None else cfg.seed)
    game = Game(cfg, rng, templates, narrator)
    game.start(run_config)
    return game
