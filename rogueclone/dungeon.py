"""The dungeon map, its rooms, the creatures in it and what the player sees."""

import enum
from dataclasses import dataclass, field

from .items import Category, get_mask_char
from .rng import Random

ROGUE_LINES = 24
ROGUE_COLUMNS = 80
MIN_ROW = 1
MAXROOMS = 9
NO_ROOM = -1
PASSAGE = -3
INIT_HP = 12

UPWARD = 0
RIGHT = 2
DOWN = 4
LEFT = 6


class Cell(enum.IntFlag):
    """What occupies one square of the dungeon."""

    NOTHING = 0
    OBJECT = 0o1
    MONSTER = 0o2
    STAIRS = 0o4
    HORWALL = 0o10
    VERTWALL = 0o20
    DOOR = 0o40
    FLOOR = 0o100
    TUNNEL = 0o200
    TRAP = 0o400
    HIDDEN = 0o1000


class RoomKind(enum.IntFlag):
    """The shape a slot of the room grid has taken."""

    NOTHING = 0o1
    ROOM = 0o2
    MAZE = 0o4
    DEADEND = 0o10
    CROSS = 0o20


class MonsterFlag(enum.IntFlag):
    """Abilities and states of a monster."""

    HASTED = 0o1
    SLOWED = 0o2
    INVISIBLE = 0o4
    ASLEEP = 0o10
    WAKENS = 0o20
    WANDERS = 0o40
    FLIES = 0o100
    FLITS = 0o200
    CAN_FLIT = 0o400
    CONFUSED = 0o1000
    RUSTS = 0o2000
    HOLDS = 0o4000
    FREEZES = 0o10000
    STEALS_GOLD = 0o20000
    STEALS_ITEM = 0o40000
    STINGS = 0o100000
    DRAINS_LIFE = 0o200000
    DROPS_LEVEL = 0o400000
    SEEKS_GOLD = 0o1000000
    FREEZING_ROGUE = 0o2000000
    RUST_VANISHED = 0o4000000
    CONFUSES = 0o10000000
    IMITATES = 0o20000000
    FLAMES = 0o40000000
    STATIONARY = 0o100000000
    NAPPING = 0o200000000
    ALREADY_MOVED = 0o400000000


@dataclass
class Door:
    """A door in a room wall and where it leads."""

    oth_room: int = NO_ROOM
    oth_row: int = 0
    oth_col: int = 0
    door_row: int = 0
    door_col: int = 0


@dataclass
class Room:
    """One slot of the room grid; doors are indexed up, right, down, left."""

    top_row: int = -1
    bottom_row: int = -1
    left_col: int = -1
    right_col: int = -1
    is_room: RoomKind = RoomKind.NOTHING
    doors: list = field(default_factory=lambda: [Door() for _ in range(4)])


@dataclass(eq=False)
class Monster:
    """A creature on the level."""

    m_flags: MonsterFlag = MonsterFlag(0)
    damage: str = "1d1"
    hp_to_kill: int = 0
    m_char: str = "A"
    kill_exp: int = 0
    first_level: int = 0
    last_level: int = 0
    m_hit_chance: int = 0
    stationary_damage: int = 0
    drop_percent: int = 0
    row: int = 0
    col: int = 0
    trail_char: str = " "
    trow: int = NO_ROOM
    tcol: int = 0
    o_row: int = 0
    o_col: int = 0
    o: int = 0
    disguise: str = " "
    nap_length: int = 0
    moves_confused: int = 0
    slowed_toggle: bool = False


@dataclass(eq=False)
class Rogue:
    """The player character."""

    armor: object = None
    weapon: object = None
    left_ring: object = None
    right_ring: object = None
    hp_current: int = INIT_HP
    hp_max: int = INIT_HP
    str_current: int = 16
    str_max: int = 16
    pack: list = field(default_factory=list)
    gold: int = 0
    exp: int = 1
    exp_points: int = 0
    row: int = 0
    col: int = 0
    fchar: str = "@"
    moves_left: int = 1250


class Screen:
    """A grid of characters standing for the terminal display."""

    def __init__(self, lines=ROGUE_LINES, columns=ROGUE_COLUMNS):
        self.lines = lines
        self.columns = columns
        self._cells = [[" "] * columns for _ in range(lines)]

    def _check(self, row, col):
        if not (0 <= row < self.lines and 0 <= col < self.columns):
            raise IndexError(f"position ({row}, {col}) is off the screen")

    def inch(self, row, col):
        """Return the character shown at ``row``, ``col``."""
        self._check(row, col)
        return self._cells[row][col]

    def addch(self, row, col, ch):
        """Show ``ch`` at ``row``, ``col``."""
        self._check(row, col)
        self._cells[row][col] = ch

    def clear(self):
        """Blank the whole screen."""
        for line in self._cells:
            line[:] = [" "] * self.columns

    def row_text(self, row):
        """Return one screen line as a string."""
        self._check(row, 0)
        return "".join(self._cells[row])


def object_at(items, row, col):
    """Return the first thing in ``items`` standing at ``row``, ``col``, or None."""
    return next((thing for thing in items if thing.row == row and thing.col == col), None)


def _blank_dungeon():
    return [[Cell.NOTHING] * ROGUE_COLUMNS for _ in range(ROGUE_LINES)]


@dataclass(eq=False)
class Level:
    """One dungeon level together with the state of the game that acts on it."""

    rng: Random = field(default_factory=Random)
    screen: Screen = field(default_factory=Screen)
    rogue: Rogue = field(default_factory=Rogue)
    dungeon: list = field(default_factory=_blank_dungeon)
    rooms: list = field(default_factory=lambda: [Room() for _ in range(MAXROOMS)])
    items: list = field(default_factory=list)
    monsters: list = field(default_factory=list)
    messages: list = field(default_factory=list)
    catalog: object = None

    cur_level: int = 1
    max_level: int = 1
    cur_room: int = PASSAGE
    party_room: int = NO_ROOM
    party_counter: int = 0

    blind: int = 0
    halluc: int = 0
    confused: int = 0
    levitate: int = 0
    haste_self: int = 0
    bear_trap: int = 0
    being_held: bool = False
    detect_monster: bool = False
    see_invisible: bool = False
    interrupted: bool = False
    trap_door: bool = False
    wizard: bool = False

    stealthy: int = 0
    r_rings: int = 0
    e_rings: int = 0
    regeneration: int = 0
    auto_search: int = 0
    add_strength: int = 0
    ring_exp: int = 0
    r_teleport: bool = False
    r_see_invisible: bool = False
    sustain_strength: bool = False
    maintain_armor: bool = False

    pass_go: bool = True
    jump: bool = False
    bent_passage: bool = False
    m_moves: int = 0
    mon_disappeared: bool = False
    hunger_str: str = ""

    def message(self, text):
        """Record a message for the player."""
        self.messages.append(text)

    def get_room_number(self, row, col):
        """Return the index of the room covering ``row``, ``col``, or NO_ROOM."""
        for i, room in enumerate(self.rooms):
            if room.top_row <= row <= room.bottom_row and room.left_col <= col <= room.right_col:
                return i
        return NO_ROOM

    def get_dungeon_char(self, row, col):
        """Return the character the map shows for ``row``, ``col``."""
        mask = self.dungeon[row][col]
        if mask & Cell.MONSTER:
            return self.monster_char_at(row, col)
        if mask & Cell.OBJECT:
            item = object_at(self.items, row, col)
            return get_mask_char(item.what_is if item is not None else Category(0))
        if mask & (Cell.TUNNEL | Cell.STAIRS | Cell.HORWALL | Cell.VERTWALL | Cell.FLOOR | Cell.DOOR):
            if mask & (Cell.TUNNEL | Cell.STAIRS) and not mask & Cell.HIDDEN:
                return "%" if mask & Cell.STAIRS else "#"
            if mask & Cell.HORWALL:
                return "-"
            if mask & Cell.VERTWALL:
                return "|"
            if mask & Cell.FLOOR:
                if mask & Cell.TRAP and not mask & Cell.HIDDEN:
                    return "^"
                return "."
            if mask & Cell.DOOR:
                if not mask & Cell.HIDDEN:
                    return "+"
                line = self.dungeon[row]
                if (col > 0 and line[col - 1] & Cell.HORWALL) or (
                    col < ROGUE_COLUMNS - 1 and line[col + 1] & Cell.HORWALL
                ):
                    return "-"
                return "|"
        return " "

    def is_passable(self, row, col):
        """Tell whether the player could stand on ``row``, ``col``."""
        if row < MIN_ROW or row > ROGUE_LINES - 2 or col < 0 or col > ROGUE_COLUMNS - 1:
            return False
        cell = self.dungeon[row][col]
        if cell & Cell.HIDDEN:
            return bool(cell & Cell.TRAP)
        return bool(cell & (Cell.FLOOR | Cell.TUNNEL | Cell.DOOR | Cell.STAIRS | Cell.TRAP))

    def can_move(self, row1, col1, row2, col2):
        """Tell whether a step from one square to a neighbouring one is allowed."""
        if not self.is_passable(row2, col2):
            return False
        if row1 != row2 and col1 != col2:
            d = self.dungeon
            if (
                d[row1][col1] & Cell.DOOR
                or d[row2][col2] & Cell.DOOR
                or not d[row1][col2]
                or not d[row2][col1]
            ):
                return False
        return True

    def gr_row_col(self, mask):
        """Return a random ``(row, col)`` in a room whose cell lies wholly within ``mask``."""
        mask = int(mask)
        while True:
            r = self.rng.get_rand(MIN_ROW, ROGUE_LINES - 2)
            c = self.rng.get_rand(0, ROGUE_COLUMNS - 1)
            rn = self.get_room_number(r, c)
            cell = int(self.dungeon[r][c])
            if (
                rn == NO_ROOM
                or not cell & mask
                or cell & ~mask
                or not self.rooms[rn].is_room & (RoomKind.ROOM | RoomKind.MAZE)
                or (r == self.rogue.row and c == self.rogue.col)
            ):
                continue
            return r, c

    def gr_room(self):
        """Return the index of a random room or maze."""
        while True:
            i = self.rng.get_rand(0, MAXROOMS - 1)
            if self.rooms[i].is_room & (RoomKind.ROOM | RoomKind.MAZE):
                return i

    def is_all_connected(self):
        """Tell whether every room and maze can be reached from every other."""
        starting_room = 0
        for i, room in enumerate(self.rooms):
            if room.is_room & (RoomKind.ROOM | RoomKind.MAZE):
                starting_room = i
        visited = set()
        pending = [starting_room]
        while pending:
            rn = pending.pop()
            if rn in visited:
                continue
            visited.add(rn)
            pending.extend(
                door.oth_room
                for door in self.rooms[rn].doors
                if door.oth_room >= 0 and door.oth_room not in visited
            )
        return all(
            i in visited
            for i, room in enumerate(self.rooms)
            if room.is_room & (RoomKind.ROOM | RoomKind.MAZE)
        )

    def light_up_room(self, rn):
        """Draw the whole of room ``rn``, refreshing the trails of monsters in it."""
        if self.blind:
            return
        room = self.rooms[rn]
        for i in range(room.top_row, room.bottom_row + 1):
            for j in range(room.left_col, room.right_col + 1):
                if self.dungeon[i][j] & Cell.MONSTER:
                    monster = object_at(self.monsters, i, j)
                    if monster is not None:
                        mr, mc = monster.row, monster.col
                        self.dungeon[mr][mc] &= ~Cell.MONSTER
                        monster.trail_char = self.get_dungeon_char(mr, mc)
                        self.dungeon[mr][mc] |= Cell.MONSTER
                self.screen.addch(i, j, self.get_dungeon_char(i, j))
        self.screen.addch(self.rogue.row, self.rogue.col, self.rogue.fchar)

    def light_passage(self, row, col):
        """Draw the squares around ``row``, ``col`` that can be stepped onto."""
        if self.blind:
            return
        i_end = 1 if row < ROGUE_LINES - 2 else 0
        j_end = 1 if col < ROGUE_COLUMNS - 1 else 0
        for i in range(-1 if row > MIN_ROW else 0, i_end + 1):
            for j in range(-1 if col > 0 else 0, j_end + 1):
                if self.can_move(row, col, row + i, col + j):
                    self.screen.addch(row + i, col + j, self.get_dungeon_char(row + i, col + j))

    def darken_room(self, rn):
        """Blank the inside of room ``rn``, keeping what stays remembered."""
        room = self.rooms[rn]
        for i in range(room.top_row + 1, room.bottom_row):
            for j in range(room.left_col + 1, room.right_col):
                if self.blind:
                    self.screen.addch(i, j, " ")
                    continue
                cell = self.dungeon[i][j]
                if cell & (Cell.OBJECT | Cell.STAIRS):
                    continue
                if self.detect_monster and cell & Cell.MONSTER:
                    continue
                if not self.imitating(i, j):
                    self.screen.addch(i, j, " ")
                if cell & Cell.TRAP and not cell & Cell.HIDDEN:
                    self.screen.addch(i, j, "^")

    def draw_magic_map(self):
        """Reveal walls, doors, passages, traps and stairs of the whole level."""
        mask = (
            Cell.HORWALL | Cell.VERTWALL | Cell.DOOR | Cell.TUNNEL
            | Cell.TRAP | Cell.STAIRS | Cell.MONSTER
        )
        glyphs = (
            (Cell.HORWALL, "-"),
            (Cell.VERTWALL, "|"),
            (Cell.DOOR, "+"),
            (Cell.TRAP, "^"),
            (Cell.STAIRS, "%"),
            (Cell.TUNNEL, "#"),
        )
        for i, line in enumerate(self.dungeon):
            for j, s in enumerate(line):
                if not s & mask:
                    continue
                shown = self.screen.inch(i, j)
                if not (shown == " " or "A" <= shown <= "Z" or s & (Cell.TRAP | Cell.HIDDEN)):
                    continue
                line[j] = s & ~Cell.HIDDEN
                ch = next((glyph for flag, glyph in glyphs if s & flag), None)
                if ch is None:
                    continue
                if not s & Cell.MONSTER or shown == " ":
                    self.screen.addch(i, j, ch)
                if s & Cell.MONSTER:
                    monster = object_at(self.monsters, i, j)
                    if monster is not None:
                        monster.trail_char = ch

    def get_oth_room(self, rn, row, col):
        """Return where the door of room ``rn`` at ``row``, ``col`` leads, or None."""
        room = self.rooms[rn]
        if row == room.top_row:
            d = UPWARD // 2
        elif row == room.bottom_row:
            d = DOWN // 2
        elif col == room.left_col:
            d = LEFT // 2
        elif col == room.right_col:
            d = RIGHT // 2
        else:
            return None
        door = room.doors[d]
        if door.oth_room >= 0:
            return door.oth_row, door.oth_col
        return None

    def _sees_invisible(self):
        return self.detect_monster or self.see_invisible or self.r_see_invisible

    def monster_char(self, monster):
        """Return the character shown for ``monster``."""
        if self.blind or (monster.m_flags & MonsterFlag.INVISIBLE and not self._sees_invisible()):
            return monster.trail_char
        if monster.m_flags & MonsterFlag.IMITATES:
            return monster.disguise
        return monster.m_char

    def monster_char_at(self, row, col):
        """Return the character of the monster at ``row``, ``col``; '&' if none is there."""
        monster = object_at(self.monsters, row, col)
        if monster is None:
            return "&"
        return self.monster_char(monster)

    def rogue_is_around(self, row, col):
        """Tell whether ``row``, ``col`` is the player's square or next to it."""
        return abs(row - self.rogue.row) <= 1 and abs(col - self.rogue.col) <= 1

    def rogue_can_see(self, row, col):
        """Tell whether the player can see ``row``, ``col``."""
        if self.blind:
            return False
        in_lit_room = (
            self.get_room_number(row, col) == self.cur_room
            and not self.rooms[self.cur_room].is_room & RoomKind.MAZE
        )
        return in_lit_room or self.rogue_is_around(row, col)

    def imitating(self, row, col):
        """Tell whether a monster disguised as an item stands at ``row``, ``col``."""
        if self.dungeon[row][col] & Cell.MONSTER:
            monster = object_at(self.monsters, row, col)
            if monster is not None and monster.m_flags & MonsterFlag.IMITATES:
                return True
        return False