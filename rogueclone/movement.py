"""Moving the player, running, resting, hunger and natural healing.

Other parts of the game are reached through optional callables that a
level may carry as attributes:

``rogue_hit(monster)``
    the player attacks a monster
``tele()``
    the player is teleported
``trap_player(row, col)``
    the player sets off the trap at ``row``, ``col``
``search(n, is_auto)``
    the player searches the surroundings
``hallucinate()``, ``unhallucinate()``, ``unblind()``, ``unconfuse()``
    redraw the screen as a condition goes on or ends
``print_stats(what)``
    redraw part of the status line
``killed_by(monster, reason)``
    end the game
``describe(item)``
    return the text that names an item to the player

Absent callables do nothing, except ``killed_by``: without it starving
raises RuntimeError.
"""

import enum
import weakref
from dataclasses import dataclass

from .dungeon import MIN_ROW, PASSAGE, ROGUE_COLUMNS, ROGUE_LINES, Cell, object_at
from .items import Catalog, Category
from .monsters import mv_mons, wake_room, wanderer
from .pack import CANCEL, ActionError, pick_up

HUNGRY = 300
WEAK = 150
FAINT = 20
STARVE = 0
R_TELE_PERCENT = 8
WANDERER_INTERVAL = 120

HELD_MESSAGE = "you are being held"
BEAR_TRAP_MESSAGE = "you are still stuck in the bear trap"
MOVED_ONTO = "moved onto "
HUNGRY_MESSAGE = "you are hungry"
WEAK_MESSAGE = "you feel weak with hunger"
FAINT_MESSAGE = "you feel faint"
FAINTED_MESSAGE = "you faint"
YOU_CAN_MOVE_AGAIN = "you can move again"
LANDED_MESSAGE = "you float gently to the ground"
SLOWING_MESSAGE = "you feel yourself slowing down"

_DIRECTIONS = {
    "h": (0, -1),
    "j": (1, 0),
    "k": (-1, 0),
    "l": (0, 1),
    "y": (-1, -1),
    "u": (-1, 1),
    "b": (1, -1),
    "n": (1, 1),
}
_RANDOM_DIRECTIONS = "jklhyubn"
_RUN_UNTIL_SOMETHING = "\010\012\013\014\031\025\016\002"
_RUN_UNTIL_BLOCKED = "HJKLBYUN"
_HEAL_INTERVALS = (0, 20, 18, 17, 14, 13, 10, 9, 8, 7, 4, 3)


class MoveResult(enum.IntEnum):
    """How a single step of the player ended."""

    MOVE_FAILED = -1
    MOVED = 0
    STOPPED_ON_SOMETHING = 1


@dataclass
class _Timers:
    move_left_cou: int = 0
    heal_exp: int = -1
    heal_interval: int = 0
    heal_count: int = 0
    heal_alt: bool = False


_timers = weakref.WeakKeyDictionary()


def _timers_of(level):
    timers = _timers.get(level)
    if timers is None:
        timers = _timers[level] = _Timers()
    return timers


def _hook(level, name, *args):
    fn = getattr(level, name, None)
    if fn is not None:
        return fn(*args)
    return None


def _describe(level, item):
    describe = getattr(level, "describe", None)
    if describe is not None:
        return describe(item)
    if item.what_is == Category.GOLD:
        return f"{item.quantity} pieces of gold"
    if level.catalog is None:
        level.catalog = Catalog()
    return level.catalog.name_of(item).rstrip()


def _delta(dirch):
    try:
        return _DIRECTIONS[dirch]
    except KeyError:
        raise ValueError(f"{dirch!r} is not a direction") from None


def is_direction(c):
    """Tell whether ``c`` is a direction key or the cancel key."""
    return len(c) == 1 and c in "hjklbyun\033"


def gr_dir(rng):
    """Return a random direction key."""
    return _RANDOM_DIRECTIONS[rng.get_rand(1, 8) - 1]


def _step_on_object(level, row, col, pickup):
    """Handle the player arriving on an item; None means carry on as a plain step."""
    if pickup and level.levitate:
        return MoveResult.STOPPED_ON_SOMETHING
    desc = None
    if pickup:
        try:
            item = pick_up(level, row, col)
        except ActionError as err:
            level.message(str(err))
        else:
            if item is None:
                return None
            desc = _describe(level, item)
            if item.what_is != Category.GOLD:
                desc += f"({item.ichar})"
    if desc is None:
        desc = MOVED_ONTO + _describe(level, object_at(level.items, row, col))
    level.message(desc)
    reg_move(level)
    return MoveResult.STOPPED_ON_SOMETHING


def one_move_rogue(level, dirch, pickup):
    """Move the player one square in direction ``dirch`` and report how it went."""
    rogue = level.rogue
    d = level.dungeon
    level.bent_passage = False
    if level.confused:
        dirch = gr_dir(level.rng)
    dr, dc = _delta(dirch)
    row, col = rogue.row + dr, rogue.col + dc

    if not level.can_move(rogue.row, rogue.col, row, col):
        if (
            level.cur_room == PASSAGE
            and not level.blind
            and not level.confused
            and dirch not in "yubn"
        ):
            level.bent_passage = True
        return MoveResult.MOVE_FAILED
    if (level.being_held or level.bear_trap) and not d[row][col] & Cell.MONSTER:
        if level.being_held:
            level.message(HELD_MESSAGE)
        else:
            level.message(BEAR_TRAP_MESSAGE)
            reg_move(level)
        return MoveResult.MOVE_FAILED
    if level.r_teleport and level.rng.rand_percent(R_TELE_PERCENT):
        _hook(level, "tele")
        return MoveResult.STOPPED_ON_SOMETHING
    if d[row][col] & Cell.MONSTER:
        _hook(level, "rogue_hit", object_at(level.monsters, row, col))
        reg_move(level)
        return MoveResult.MOVE_FAILED

    if d[row][col] & Cell.DOOR:
        if level.cur_room == PASSAGE:
            level.cur_room = level.get_room_number(row, col)
            level.light_up_room(level.cur_room)
            wake_room(level, level.cur_room, True, row, col)
        else:
            level.light_passage(row, col)
    elif d[rogue.row][rogue.col] & Cell.DOOR and d[row][col] & Cell.TUNNEL:
        level.light_passage(row, col)
        if level.cur_room != PASSAGE:
            wake_room(level, level.cur_room, False, rogue.row, rogue.col)
            level.darken_room(level.cur_room)
        level.cur_room = PASSAGE
    elif d[row][col] & Cell.TUNNEL:
        level.light_passage(row, col)

    level.screen.addch(rogue.row, rogue.col, level.get_dungeon_char(rogue.row, rogue.col))
    level.screen.addch(row, col, rogue.fchar)
    rogue.row, rogue.col = row, col

    if d[row][col] & Cell.OBJECT:
        result = _step_on_object(level, row, col, pickup)
        if result is not None:
            return result
    elif d[row][col] & (Cell.DOOR | Cell.STAIRS | Cell.TRAP):
        if not level.levitate and d[row][col] & Cell.TRAP:
            _hook(level, "trap_player", row, col)
        reg_move(level)
        return MoveResult.STOPPED_ON_SOMETHING

    if reg_move(level):
        return MoveResult.STOPPED_ON_SOMETHING
    return MoveResult.STOPPED_ON_SOMETHING if level.confused else MoveResult.MOVED


def _turn_in_passage(level, dirch):
    """Return the only way a bent passage continues, or None."""
    rogue = level.rogue
    keys = "hjkl"
    choices = [
        key
        for i, key in enumerate(keys)
        if level.is_passable(rogue.row + _DIRECTIONS[key][0], rogue.col + _DIRECTIONS[key][1])
        and dirch != keys[3 - i]
    ]
    return choices[0] if len(choices) == 1 else None


def multiple_move_rogue(level, dirch):
    """Run in a direction.

    A control key runs until something interesting is next to the player;
    an upper-case key runs until the way is blocked. Either follows a bent
    passage when ``pass_go`` is set.
    """
    if dirch in _RUN_UNTIL_SOMETHING:
        dirch = chr(ord(dirch) + 96)
        rogue = level.rogue
        while True:
            row, col = rogue.row, rogue.col
            m = one_move_rogue(level, dirch, True)
            if m == MoveResult.STOPPED_ON_SOMETHING or level.interrupted:
                break
            if m != MoveResult.MOVE_FAILED:
                if next_to_something(level, row, col):
                    break
                continue
            if not level.pass_go or not level.bent_passage:
                break
            turn = _turn_in_passage(level, dirch)
            if turn is None:
                break
            dirch = turn
    elif dirch in _RUN_UNTIL_BLOCKED:
        dirch = chr(ord(dirch) + 32)
        while True:
            m = one_move_rogue(level, dirch, True)
            if level.interrupted:
                break
            if m == MoveResult.MOVED:
                continue
            if m != MoveResult.MOVE_FAILED or not level.pass_go or not level.bent_passage:
                break
            turn = _turn_in_passage(level, dirch)
            if turn is None:
                break
            dirch = turn


def next_to_something(level, drow, dcol):
    """Tell whether a run should stop; ``drow``, ``dcol`` is where the player came from."""
    if level.confused:
        return True
    if level.blind:
        return False
    rogue = level.rogue
    i_end = 1 if rogue.row < ROGUE_LINES - 2 else 0
    j_end = 1 if rogue.col < ROGUE_COLUMNS - 1 else 0
    pass_count = 0
    for i in range(-1 if rogue.row > MIN_ROW else 0, i_end + 1):
        for j in range(-1 if rogue.col > 0 else 0, j_end + 1):
            row, col = rogue.row + i, rogue.col + j
            if (i == 0 and j == 0) or (row == drow and col == dcol):
                continue
            s = level.dungeon[row][col]
            if s & Cell.HIDDEN:
                continue
            if s & (Cell.MONSTER | Cell.OBJECT | Cell.STAIRS | Cell.TRAP):
                # Things the player was already beside before this step do not stop a run.
                if (row == drow or col == dcol) and not (row == rogue.row or col == rogue.col):
                    continue
                return True
            if abs(i - j) == 1 and s & Cell.TUNNEL:
                pass_count += 1
                if pass_count > 1:
                    return True
            if s & Cell.DOOR and (i == 0 or j == 0):
                return True
    return False


def move_onto(level, dirch):
    """Step in direction ``dirch`` without picking anything up; None if cancelled."""
    if dirch == CANCEL:
        return None
    return one_move_rogue(level, dirch, False)


def check_hunger(level, messages_only):
    """Report hunger, let the player faint, and use up food; tell whether they fainted."""
    rogue = level.rogue
    timers = _timers_of(level)
    fainted = False

    if rogue.moves_left == HUNGRY:
        level.hunger_str = "Hungry"
        level.message(HUNGRY_MESSAGE)
        _hook(level, "print_stats", "hunger")
    if rogue.moves_left == WEAK:
        level.hunger_str = "Weak"
        level.message(WEAK_MESSAGE)
        _hook(level, "print_stats", "hunger")
    if rogue.moves_left <= FAINT:
        if rogue.moves_left == FAINT:
            level.hunger_str = "Faint"
            level.message(FAINT_MESSAGE)
            _hook(level, "print_stats", "hunger")
        n = level.rng.get_rand(0, FAINT - rogue.moves_left)
        if n > 0:
            fainted = True
            if level.rng.rand_percent(40):
                rogue.moves_left += 1
            level.message(FAINTED_MESSAGE)
            for _ in range(n):
                if level.rng.coin_toss():
                    mv_mons(level)
            level.message(YOU_CAN_MOVE_AGAIN)
    if messages_only:
        return fainted

    if rogue.moves_left <= STARVE:
        if getattr(level, "killed_by", None) is None:
            raise RuntimeError("starved to death")
        level.killed_by(None, "starvation")

    if level.e_rings == -1:
        rogue.moves_left -= timers.move_left_cou
    elif level.e_rings == 0:
        rogue.moves_left -= 1
    elif level.e_rings == 1:
        rogue.moves_left -= 1
        check_hunger(level, True)
        rogue.moves_left -= timers.move_left_cou
    elif level.e_rings == 2:
        rogue.moves_left -= 1
        check_hunger(level, True)
        rogue.moves_left -= 1
    timers.move_left_cou ^= 1
    return fainted


def reg_move(level):
    """Let one turn pass; tell whether the player fainted."""
    rogue = level.rogue
    if rogue.moves_left <= HUNGRY or level.cur_level >= level.max_level:
        fainted = check_hunger(level, False)
    else:
        fainted = False

    mv_mons(level)

    level.m_moves += 1
    if level.m_moves >= WANDERER_INTERVAL:
        level.m_moves = 0
        wanderer(level)
    if level.halluc:
        level.halluc -= 1
        if not level.halluc:
            _hook(level, "unhallucinate")
        else:
            _hook(level, "hallucinate")
    if level.blind:
        level.blind -= 1
        if not level.blind:
            _hook(level, "unblind")
    if level.confused:
        level.confused -= 1
        if not level.confused:
            _hook(level, "unconfuse")
    if level.bear_trap:
        level.bear_trap -= 1
    if level.levitate:
        level.levitate -= 1
        if not level.levitate:
            level.message(LANDED_MESSAGE)
            if level.dungeon[rogue.row][rogue.col] & Cell.TRAP:
                _hook(level, "trap_player", rogue.row, rogue.col)
    if level.haste_self:
        level.haste_self -= 1
        if not level.haste_self:
            level.message(SLOWING_MESSAGE)
    heal(level)
    if level.auto_search > 0:
        _hook(level, "search", level.auto_search, level.auto_search)
    return fainted


def rest(level, count):
    """Let up to ``count`` turns pass, stopping early when interrupted."""
    level.interrupted = False
    for _ in range(count):
        if level.interrupted:
            break
        reg_move(level)


def heal(level):
    """Restore hit points slowly, faster at higher experience levels."""
    rogue = level.rogue
    timers = _timers_of(level)
    if rogue.hp_current == rogue.hp_max:
        timers.heal_count = 0
        return
    if rogue.exp != timers.heal_exp:
        timers.heal_exp = rogue.exp
        exp = timers.heal_exp
        timers.heal_interval = 2 if exp < 1 or exp > 11 else _HEAL_INTERVALS[exp]
    timers.heal_count += 1
    if timers.heal_count >= timers.heal_interval:
        timers.heal_count = 0
        rogue.hp_current += 1
        timers.heal_alt = not timers.heal_alt
        if timers.heal_alt:
            rogue.hp_current += 1
        rogue.hp_current += level.regeneration
        if rogue.hp_current > rogue.hp_max:
            rogue.hp_current = rogue.hp_max
        _hook(level, "print_stats", "hp")