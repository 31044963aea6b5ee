"""Monster creation, movement and waking.

Attacks and special abilities are carried out by other parts of the game.
A level may carry these optional callables, each taking the monster and
returning True when it used up the monster's turn:

``monster_hit``
    the monster attacks the player
``flame_broil``
    the monster breathes fire
``seek_gold``
    the monster heads for gold
``m_confuse``
    the monster's gaze confuses the player

When a callable is absent the ability does nothing.
"""

from .dungeon import (
    MIN_ROW,
    MAXROOMS,
    NO_ROOM,
    ROGUE_COLUMNS,
    ROGUE_LINES,
    Cell,
    Monster,
    MonsterFlag,
    RoomKind,
    object_at,
)
from .items import Category, ScrollKind

AMULET_LEVEL = 26
WAKE_PERCENT = 45
PARTY_WAKE_PERCENT = 75
STEALTH_FACTOR = 3
FLIT_PERCENT = 33

_F = MonsterFlag

_MONSTER_TABLE = (
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.RUSTS, "0d0", 25, "A", 20, 9, 18, 100, 0, 0),
    (_F.ASLEEP | _F.WANDERS | _F.FLITS, "1d3", 10, "B", 2, 1, 8, 60, 0, 0),
    (_F.ASLEEP | _F.WANDERS, "3d3/2d5", 32, "C", 15, 7, 16, 85, 0, 10),
    (_F.ASLEEP | _F.WAKENS | _F.FLAMES, "4d6/4d9", 145, "D", 5000, 21, 126, 100, 0, 90),
    (_F.ASLEEP | _F.WAKENS, "1d3", 11, "E", 2, 1, 7, 65, 0, 0),
    (_F.HOLDS | _F.STATIONARY, "5d5", 73, "F", 91, 12, 126, 80, 0, 0),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.FLIES, "5d5/5d5", 115, "G", 2000, 20, 126, 85, 0, 10),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "1d3/1d2", 15, "H", 3, 1, 10, 67, 0, 0),
    (_F.ASLEEP | _F.FREEZES, "0d0", 15, "I", 5, 2, 11, 68, 0, 0),
    (_F.ASLEEP | _F.WANDERS, "3d10/4d5", 132, "J", 3000, 21, 126, 100, 0, 0),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.FLIES, "1d4", 10, "K", 2, 1, 6, 60, 0, 0),
    (_F.ASLEEP | _F.STEALS_GOLD, "0d0", 25, "L", 21, 6, 16, 75, 0, 0),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.CONFUSES, "4d4/3d7", 97, "M", 250, 18, 126, 85, 0, 25),
    (_F.ASLEEP | _F.STEALS_ITEM, "0d0", 25, "N", 39, 10, 19, 75, 0, 100),
    (_F.ASLEEP | _F.WANDERS | _F.WAKENS | _F.SEEKS_GOLD, "1d6", 25, "O", 5, 4, 13, 70, 0, 10),
    (_F.ASLEEP | _F.INVISIBLE | _F.WANDERS | _F.FLITS, "5d4", 76, "P", 120, 15, 24, 80, 0, 50),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "3d5", 30, "Q", 20, 8, 17, 78, 0, 20),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.STINGS, "2d5", 19, "R", 10, 3, 12, 70, 0, 0),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "1d3", 8, "S", 2, 1, 9, 50, 0, 0),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "4d6/1d4", 75, "T", 125, 13, 22, 75, 0, 33),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "4d10", 90, "U", 200, 17, 26, 85, 0, 33),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS | _F.DRAINS_LIFE, "1d14/1d4", 55, "V", 350, 19, 126, 85, 0, 18),
    (_F.ASLEEP | _F.WANDERS | _F.DROPS_LEVEL, "2d8", 45, "W", 55, 14, 23, 75, 0, 0),
    (_F.ASLEEP | _F.IMITATES, "4d6", 42, "X", 110, 16, 25, 75, 0, 0),
    (_F.ASLEEP | _F.WANDERS, "3d6", 35, "Y", 50, 11, 20, 80, 0, 20),
    (_F.ASLEEP | _F.WAKENS | _F.WANDERS, "1d7", 21, "Z", 8, 5, 14, 69, 0, 0),
)

MONSTER_NAMES = (
    "aquator", "bat", "centaur", "dragon", "emu", "venus fly-trap",
    "griffin", "hobgoblin", "ice monster", "jabberwock", "kestrel",
    "leprechaun", "medusa", "nymph", "orc", "phantom", "quagga",
    "rattlesnake", "snake", "troll", "black unicorn", "vampire", "wraith",
    "xeroc", "yeti", "zombie",
)

_UNSEEN_NAME = "something"
_NO_ROOM_MESSAGE = "you hear a faint cry of anguish in the distance"
_AGGRAVATE_MESSAGE = "you hear a high pitched humming noise"
_DISGUISES = "%!?]=/):*"


def _special(level, name, monster):
    hook = getattr(level, name, None)
    return bool(hook(monster)) if hook is not None else False


def _sees_invisible(level):
    return level.detect_monster or level.see_invisible or level.r_see_invisible


def _around(rng, row, col):
    """Return the nine squares centred on ``row``, ``col`` in a random order."""
    squares = [(row + dr, col + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)]
    for i in range(len(squares) - 1, 0, -1):
        j = rng.get_rand(0, i)
        squares[i], squares[j] = squares[j], squares[i]
    return squares


def _random_kind(level, shift=0):
    while True:
        kind = level.rng.get_rand(0, len(_MONSTER_TABLE) - 1)
        first, last = _MONSTER_TABLE[kind][5], _MONSTER_TABLE[kind][6]
        if first - shift <= level.cur_level <= last:
            return kind


def _build(level, kind):
    monster = Monster(*_MONSTER_TABLE[kind])
    if monster.m_flags & MonsterFlag.IMITATES:
        monster.disguise = gr_obj_char(level.rng)
    if level.cur_level > AMULET_LEVEL + 2:
        monster.m_flags |= MonsterFlag.HASTED
    monster.trow = NO_ROOM
    return monster


def gr_monster(level, kind=None):
    """Return a new monster of ``kind``, or of a random kind fit for the level."""
    if kind is None:
        kind = _random_kind(level)
    elif not 0 <= kind < len(_MONSTER_TABLE):
        raise ValueError(f"no monster kind {kind}")
    return _build(level, kind)


def put_mons(level):
    """Scatter the level's starting monsters."""
    mask = Cell.FLOOR | Cell.TUNNEL | Cell.STAIRS | Cell.OBJECT
    for _ in range(level.rng.get_rand(4, 6)):
        monster = gr_monster(level)
        if monster.m_flags & MonsterFlag.WANDERS and level.rng.coin_toss():
            wake_up(monster)
        row, col = level.gr_row_col(mask)
        put_m_at(level, row, col, monster)


def mv_mons(level):
    """Give every monster on the level its turn."""
    if level.haste_self % 2:
        return
    rogue = level.rogue
    for monster in list(level.monsters):
        if not any(m is monster for m in level.monsters):
            continue
        if monster.m_flags & MonsterFlag.HASTED:
            level.mon_disappeared = False
            mv_monster(level, monster, rogue.row, rogue.col)
            if level.mon_disappeared:
                continue
        elif monster.m_flags & MonsterFlag.SLOWED:
            monster.slowed_toggle = not monster.slowed_toggle
            if monster.slowed_toggle:
                continue
        if monster.m_flags & MonsterFlag.CONFUSED and move_confused(level, monster):
            continue
        flew = False
        if (
            monster.m_flags & MonsterFlag.FLIES
            and not monster.m_flags & MonsterFlag.NAPPING
            and not mon_can_go(level, monster, rogue.row, rogue.col)
        ):
            flew = True
            mv_monster(level, monster, rogue.row, rogue.col)
        if not (flew and mon_can_go(level, monster, rogue.row, rogue.col)):
            mv_monster(level, monster, rogue.row, rogue.col)


def party_monsters(level, rn, n):
    """Fill room ``rn`` with up to twice ``n`` awake-prone monsters."""
    shift = level.cur_level % 3
    room = level.rooms[rn]
    rng = level.rng
    for _ in range(n + n):
        if no_room_for_monster(level, rn):
            break
        spot = None
        for _ in range(250):
            row = rng.get_rand(room.top_row + 1, room.bottom_row - 1)
            col = rng.get_rand(room.left_col + 1, room.right_col - 1)
            cell = level.dungeon[row][col]
            if not cell & Cell.MONSTER and cell & (Cell.FLOOR | Cell.TUNNEL):
                spot = (row, col)
                break
        if spot is not None:
            monster = _build(level, _random_kind(level, shift))
            if not monster.m_flags & MonsterFlag.IMITATES:
                monster.m_flags |= MonsterFlag.WAKENS
            put_m_at(level, spot[0], spot[1], monster)


def mv_monster(level, monster, row, col):
    """Move ``monster`` one step towards ``row``, ``col`` or its own target."""
    flags = monster.m_flags
    rogue = level.rogue
    rng = level.rng
    if flags & MonsterFlag.ASLEEP:
        if flags & MonsterFlag.NAPPING:
            monster.nap_length -= 1
            if monster.nap_length <= 0:
                monster.m_flags &= ~(MonsterFlag.NAPPING | MonsterFlag.ASLEEP)
            return
        if flags & MonsterFlag.WAKENS and level.rogue_is_around(monster.row, monster.col):
            percent = (
                WAKE_PERCENT // (STEALTH_FACTOR + level.stealthy)
                if level.stealthy > 0 else WAKE_PERCENT
            )
            if rng.rand_percent(percent):
                wake_up(monster)
        return
    if flags & MonsterFlag.ALREADY_MOVED:
        monster.m_flags &= ~MonsterFlag.ALREADY_MOVED
        return
    if flags & MonsterFlag.FLITS and flit(level, monster):
        return
    if flags & MonsterFlag.STATIONARY and not mon_can_go(level, monster, rogue.row, rogue.col):
        return
    if flags & MonsterFlag.FREEZING_ROGUE:
        return
    if flags & MonsterFlag.CONFUSES and _special(level, "m_confuse", monster):
        return
    if mon_can_go(level, monster, rogue.row, rogue.col):
        _special(level, "monster_hit", monster)
        return
    if flags & MonsterFlag.FLAMES and _special(level, "flame_broil", monster):
        return
    if flags & MonsterFlag.SEEKS_GOLD and _special(level, "seek_gold", monster):
        return

    if monster.trow == monster.row and monster.tcol == monster.col:
        monster.trow = NO_ROOM
    elif monster.trow != NO_ROOM:
        row, col = monster.trow, monster.tcol

    if monster.row > row:
        row = monster.row - 1
    elif monster.row < row:
        row = monster.row + 1
    if level.dungeon[row][monster.col] & Cell.DOOR and mtry(level, monster, row, monster.col):
        return
    if monster.col > col:
        col = monster.col - 1
    elif monster.col < col:
        col = monster.col + 1
    if level.dungeon[monster.row][col] & Cell.DOOR and mtry(level, monster, monster.row, col):
        return
    if mtry(level, monster, row, col):
        return

    tried = set()
    for _ in range(6):
        n = rng.get_rand(0, 5)
        while n in tried:
            n = rng.get_rand(0, 5)
        targets = (
            (row, monster.col - 1),
            (row, monster.col),
            (row, monster.col + 1),
            (monster.row - 1, col),
            (monster.row, col),
            (monster.row + 1, col),
        )
        if mtry(level, monster, *targets[n]):
            break
        tried.add(n)

    if monster.row == monster.o_row and monster.col == monster.o_col:
        monster.o += 1
        if monster.o > 4:
            if monster.trow == NO_ROOM and not mon_sees(level, monster, rogue.row, rogue.col):
                monster.trow = rng.get_rand(1, ROGUE_LINES - 2)
                monster.tcol = rng.get_rand(0, ROGUE_COLUMNS - 1)
            else:
                monster.trow = NO_ROOM
                monster.o = 0
    else:
        monster.o_row = monster.row
        monster.o_col = monster.col
        monster.o = 0


def mtry(level, monster, row, col):
    """Move ``monster`` to ``row``, ``col`` if it may go there; tell whether it did."""
    if mon_can_go(level, monster, row, col):
        move_mon_to(level, monster, row, col)
        return True
    return False


def move_mon_to(level, monster, row, col):
    """Move ``monster`` to ``row``, ``col``, redrawing the squares it leaves and enters."""
    d = level.dungeon
    screen = level.screen
    mrow, mcol = monster.row, monster.col
    d[mrow][mcol] &= ~Cell.MONSTER
    d[row][col] |= Cell.MONSTER

    shown = screen.inch(mrow, mcol)
    if "A" <= shown <= "Z":
        if level.detect_monster and not level.rogue_can_see(mrow, mcol):
            if monster.trail_char == ".":
                monster.trail_char = " "
        screen.addch(mrow, mcol, monster.trail_char)
    monster.trail_char = screen.inch(row, col)
    if not level.blind and (level.detect_monster or level.rogue_can_see(row, col)):
        if not monster.m_flags & MonsterFlag.INVISIBLE or _sees_invisible(level):
            screen.addch(row, col, level.monster_char(monster))
    if (
        d[row][col] & Cell.DOOR
        and level.get_room_number(row, col) != level.cur_room
        and d[mrow][mcol] == Cell.FLOOR
        and not level.blind
    ):
        screen.addch(mrow, mcol, " ")
    if d[row][col] & Cell.DOOR:
        dr_course(level, monster, bool(d[mrow][mcol] & Cell.TUNNEL), row, col)
    else:
        monster.row = row
        monster.col = col


def mon_can_go(level, monster, row, col):
    """Tell whether ``monster`` may step onto ``row``, ``col``."""
    if not (0 <= row < ROGUE_LINES and 0 <= col < ROGUE_COLUMNS):
        return False
    dr = monster.row - row
    dc = monster.col - col
    if dr >= 2 or dr <= -2 or dc >= 2 or dc <= -2:
        return False
    d = level.dungeon
    if (
        not d[monster.row][col]
        or not d[row][monster.col]
        or not level.is_passable(row, col)
        or d[row][col] & Cell.MONSTER
    ):
        return False
    if (
        monster.row != row
        and monster.col != col
        and (d[row][col] & Cell.DOOR or d[monster.row][monster.col] & Cell.DOOR)
    ):
        return False
    rogue = level.rogue
    if (
        not monster.m_flags & (MonsterFlag.FLITS | MonsterFlag.CONFUSED | MonsterFlag.CAN_FLIT)
        and monster.trow == NO_ROOM
    ):
        if (
            (monster.row < rogue.row and row < monster.row)
            or (monster.row > rogue.row and row > monster.row)
            or (monster.col < rogue.col and col < monster.col)
            or (monster.col > rogue.col and col > monster.col)
        ):
            return False
    if d[row][col] & Cell.OBJECT:
        item = object_at(level.items, row, col)
        if (
            item is not None
            and item.what_is == Category.SCROLL
            and item.which_kind == ScrollKind.SCARE_MONSTER
        ):
            return False
    return True


def wake_up(monster):
    """Wake ``monster`` unless it is in a magical nap."""
    if not monster.m_flags & MonsterFlag.NAPPING:
        monster.m_flags &= ~(MonsterFlag.ASLEEP | MonsterFlag.IMITATES | MonsterFlag.WAKENS)


def wake_room(level, rn, entering, row, col):
    """Alert the monsters of room ``rn`` as the player enters or leaves it."""
    wake_percent = PARTY_WAKE_PERCENT if rn == level.party_room else WAKE_PERCENT
    if level.stealthy > 0:
        wake_percent //= STEALTH_FACTOR + level.stealthy
    for monster in level.monsters:
        in_room = rn == level.get_room_number(monster.row, monster.col)
        if in_room:
            if entering:
                monster.trow = NO_ROOM
            else:
                monster.trow = row
                monster.tcol = col
        if monster.m_flags & MonsterFlag.WAKENS and in_room:
            if level.rng.rand_percent(wake_percent):
                wake_up(monster)


def mon_name(level, monster):
    """Return the name the player knows ``monster`` by."""
    if level.blind or (
        monster.m_flags & MonsterFlag.INVISIBLE and not _sees_invisible(level)
    ):
        return _UNSEEN_NAME
    if level.halluc:
        return MONSTER_NAMES[level.rng.get_rand(ord("A"), ord("Z")) - ord("A")]
    return MONSTER_NAMES[ord(monster.m_char) - ord("A")]


def wanderer(level):
    """Bring an awake wandering monster onto the level out of the player's sight."""
    monster = None
    for _ in range(15):
        candidate = gr_monster(level)
        if candidate.m_flags & (MonsterFlag.WAKENS | MonsterFlag.WANDERS):
            monster = candidate
            break
    if monster is None:
        return
    wake_up(monster)
    mask = Cell.FLOOR | Cell.TUNNEL | Cell.STAIRS | Cell.OBJECT
    for _ in range(25):
        row, col = level.gr_row_col(mask)
        if not level.rogue_can_see(row, col):
            put_m_at(level, row, col, monster)
            return


def show_monsters(level):
    """Reveal every monster on the level."""
    level.detect_monster = True
    if level.blind:
        return
    for monster in level.monsters:
        level.screen.addch(monster.row, monster.col, monster.m_char)
        if monster.m_flags & MonsterFlag.IMITATES:
            monster.m_flags &= ~MonsterFlag.IMITATES
            monster.m_flags |= MonsterFlag.WAKENS


def create_monster(level):
    """Create a monster on a free square next to the player."""
    rogue = level.rogue
    spot = None
    for row, col in _around(level.rng, rogue.row, rogue.col):
        if (
            (row == rogue.row and col == rogue.col)
            or row < MIN_ROW
            or row > ROGUE_LINES - 2
            or col < 0
            or col > ROGUE_COLUMNS - 1
        ):
            continue
        cell = level.dungeon[row][col]
        if not cell & Cell.MONSTER and cell & (Cell.FLOOR | Cell.TUNNEL | Cell.STAIRS | Cell.DOOR):
            spot = (row, col)
            break
    if spot is None:
        level.message(_NO_ROOM_MESSAGE)
        return
    monster = gr_monster(level)
    put_m_at(level, spot[0], spot[1], monster)
    level.screen.addch(spot[0], spot[1], level.monster_char(monster))
    if monster.m_flags & (MonsterFlag.WANDERS | MonsterFlag.WAKENS):
        wake_up(monster)


def put_m_at(level, row, col, monster):
    """Place ``monster`` on the level at ``row``, ``col``."""
    monster.row = row
    monster.col = col
    level.dungeon[row][col] |= Cell.MONSTER
    monster.trail_char = level.screen.inch(row, col)
    level.monsters.append(monster)
    aim_monster(level, monster)


def aim_monster(level, monster):
    """Point ``monster`` at one of the doors of the room it stands in."""
    rn = level.get_room_number(monster.row, monster.col)
    r = level.rng.get_rand(0, 12)
    if rn == NO_ROOM:
        return
    doors = level.rooms[rn].doors
    for i in range(4):
        door = doors[(r + i) % 4]
        if door.oth_room != NO_ROOM:
            monster.trow = door.door_row
            monster.tcol = door.door_col
            break


def move_confused(level, monster):
    """Move a confused ``monster`` at random; tell whether its turn is used."""
    if monster.m_flags & MonsterFlag.ASLEEP:
        return False
    monster.moves_confused -= 1
    if monster.moves_confused <= 0:
        monster.m_flags &= ~MonsterFlag.CONFUSED
    if monster.m_flags & MonsterFlag.STATIONARY:
        return level.rng.coin_toss()
    if level.rng.rand_percent(15):
        return True
    rogue = level.rogue
    for row, col in _around(level.rng, monster.row, monster.col):
        if row == rogue.row and col == rogue.col:
            return False
        if mtry(level, monster, row, col):
            return True
    return False


def flit(level, monster):
    """Let ``monster`` flutter about; tell whether its turn is used."""
    if not level.rng.rand_percent(FLIT_PERCENT):
        return False
    if level.rng.rand_percent(10):
        return True
    rogue = level.rogue
    for row, col in _around(level.rng, monster.row, monster.col):
        if row == rogue.row and col == rogue.col:
            continue
        if mtry(level, monster, row, col):
            return True
    return True


def gr_obj_char(rng):
    """Return a random item character for an imitating monster to show."""
    return _DISGUISES[rng.get_rand(0, len(_DISGUISES) - 1)]


def no_room_for_monster(level, rn):
    """Tell whether every square inside room ``rn`` already holds a monster."""
    room = level.rooms[rn]
    return all(
        level.dungeon[i][j] & Cell.MONSTER
        for i in range(room.top_row + 1, room.bottom_row)
        for j in range(room.left_col + 1, room.right_col)
    )


def aggravate(level):
    """Wake every monster on the level and strip their disguises."""
    level.message(_AGGRAVATE_MESSAGE)
    for monster in level.monsters:
        wake_up(monster)
        monster.m_flags &= ~MonsterFlag.IMITATES
        if level.rogue_can_see(monster.row, monster.col):
            level.screen.addch(monster.row, monster.col, monster.m_char)


def mon_sees(level, monster, row, col):
    """Tell whether ``monster`` can see the square ``row``, ``col``."""
    rn = level.get_room_number(row, col)
    if (
        rn != NO_ROOM
        and rn == level.get_room_number(monster.row, monster.col)
        and not level.rooms[rn].is_room & RoomKind.MAZE
    ):
        return True
    return abs(row - monster.row) <= 1 and abs(col - monster.col) <= 1


def mv_aquatars(level):
    """Let aquators next to the player strike before armor comes off."""
    rogue = level.rogue
    for monster in level.monsters:
        if monster.m_char == "A" and mon_can_go(level, monster, rogue.row, rogue.col):
            mv_monster(level, monster, rogue.row, rogue.col)
            monster.m_flags |= MonsterFlag.ALREADY_MOVED


def dr_course(level, monster, entering, row, col):
    """Set where ``monster`` heads after stepping onto the door at ``row``, ``col``."""
    monster.row = row
    monster.col = col
    rogue = level.rogue
    if mon_sees(level, monster, rogue.row, rogue.col):
        monster.trow = NO_ROOM
        return
    rn = level.get_room_number(row, col)
    rooms = level.rooms

    if not entering:
        target = level.get_oth_room(rn, row, col)
        if target is None:
            monster.trow = NO_ROOM
        else:
            monster.trow, monster.tcol = target
        return

    r = level.rng.get_rand(0, MAXROOMS - 1)
    for i in range(MAXROOMS):
        rr = (r + i) % MAXROOMS
        if not rooms[rr].is_room & (RoomKind.ROOM | RoomKind.MAZE) or rr == rn:
            continue
        for door in rooms[rr].doors:
            if door.oth_room == rn:
                monster.trow = door.oth_row
                monster.tcol = door.oth_col
                if monster.trow == row and monster.tcol == col:
                    continue
                return

    room = rooms[rn]
    for i in range(room.top_row, room.bottom_row + 1):
        for j in range(room.left_col, room.right_col + 1):
            if i != monster.row and j != monster.col and level.dungeon[i][j] & Cell.DOOR:
                monster.trow = i
                monster.tcol = j
                return

    for i, other in enumerate(rooms):
        if any(door.oth_room == rn for door in other.doors):
            for door in rooms[rn].doors:
                if door.oth_room == i:
                    monster.trow = door.oth_row
                    monster.tcol = door.oth_col
                    return

    monster.trow = NO_ROOM