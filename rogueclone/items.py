"""Items, their identification tables and random item generation."""

import enum
from dataclasses import dataclass, field


class Category(enum.IntFlag):
    """What an item is; values are bit flags so that masks can combine them."""

    ARMOR = 0o1
    WEAPON = 0o2
    SCROLL = 0o4
    POTION = 0o10
    GOLD = 0o20
    FOOD = 0o40
    WAND = 0o100
    RING = 0o200
    AMULET = 0o400
    ALL = 0o777


class IdStatus(enum.IntEnum):
    UNIDENTIFIED = 0
    IDENTIFIED = 1
    CALLED = 2


class ScrollKind(enum.IntEnum):
    PROTECT_ARMOR = 0
    HOLD_MONSTER = 1
    ENCH_WEAPON = 2
    ENCH_ARMOR = 3
    IDENTIFY = 4
    TELEPORT = 5
    SLEEP = 6
    SCARE_MONSTER = 7
    REMOVE_CURSE = 8
    CREATE_MONSTER = 9
    AGGRAVATE_MONSTER = 10
    MAGIC_MAPPING = 11


class PotionKind(enum.IntEnum):
    INCREASE_STRENGTH = 0
    RESTORE_STRENGTH = 1
    HEALING = 2
    EXTRA_HEALING = 3
    POISON = 4
    RAISE_LEVEL = 5
    BLINDNESS = 6
    HALLUCINATION = 7
    DETECT_MONSTER = 8
    DETECT_OBJECTS = 9
    CONFUSION = 10
    LEVITATION = 11
    HASTE_SELF = 12
    SEE_INVISIBLE = 13


class WeaponKind(enum.IntEnum):
    BOW = 0
    DART = 1
    ARROW = 2
    DAGGER = 3
    SHURIKEN = 4
    MACE = 5
    LONG_SWORD = 6
    TWO_HANDED_SWORD = 7


class ArmorKind(enum.IntEnum):
    LEATHER = 0
    RINGMAIL = 1
    SCALE = 2
    CHAIN = 3
    BANDED = 4
    SPLINT = 5
    PLATE = 6


class WandKind(enum.IntEnum):
    TELE_AWAY = 0
    SLOW_MONSTER = 1
    CONFUSE_MONSTER = 2
    INVISIBILITY = 3
    POLYMORPH = 4
    HASTE_MONSTER = 5
    PUT_TO_SLEEP = 6
    MAGIC_MISSILE = 7
    CANCELLATION = 8
    DO_NOTHING = 9


class RingKind(enum.IntEnum):
    STEALTH = 0
    R_TELEPORT = 1
    REGENERATION = 2
    SLOW_DIGEST = 3
    ADD_STRENGTH = 4
    SUSTAIN_STRENGTH = 5
    DEXTERITY = 6
    ADORNMENT = 7
    R_SEE_INVISIBLE = 8
    MAINTAIN_ARMOR = 9
    SEARCHING = 10


class FoodKind(enum.IntEnum):
    RATION = 0
    FRUIT = 1


NOT_USED = 0o0
BEING_WIELDED = 0o1
BEING_WORN = 0o2
ON_LEFT_HAND = 0o4
ON_RIGHT_HAND = 0o10
ON_EITHER_HAND = ON_LEFT_HAND | ON_RIGHT_HAND

MISSILE_KINDS = frozenset(
    {WeaponKind.DART, WeaponKind.ARROW, WeaponKind.DAGGER, WeaponKind.SHURIKEN}
)

_WEAPON_DAMAGE = ("1d1", "1d1", "1d2", "1d3", "1d4", "2d3", "3d4", "4d5")


@dataclass(eq=False)
class Item:
    """A thing that can lie on the floor or sit in a pack.

    ``klass`` holds the armor class of armor, the charges of a wand and the
    bonus of a ring.
    """

    what_is: Category = Category(0)
    which_kind: int = 0
    quantity: int = 1
    ichar: str = "L"
    picked_up: bool = False
    is_cursed: bool = False
    in_use_flags: int = NOT_USED
    identified: bool = False
    damage: str = "1d1"
    hit_enchant: int = 0
    d_enchant: int = 0
    klass: int = 0
    quiver: int = 0
    is_protected: bool = False
    row: int = 0
    col: int = 0


@dataclass
class IdInfo:
    """One entry of an identification table."""

    value: int
    title: str
    real: str
    id_status: IdStatus = IdStatus.UNIDENTIFIED


_POTION_COLORS = (
    "blue ", "red ", "green ", "grey ", "brown ", "clear ", "pink ",
    "white ", "purple ", "black ", "yellow ", "plaid ", "burgundy ", "beige ",
)

_POTIONS = (
    (100, "of increase strength "), (250, "of restore strength "),
    (100, "of healing "), (200, "of extra healing "), (10, "of poison "),
    (300, "of raise level "), (10, "of blindness "), (25, "of hallucination "),
    (100, "of detect monster "), (100, "of detect things "),
    (10, "of confusion "), (80, "of levitation "), (150, "of haste self "),
    (145, "of see invisible "),
)

_SCROLLS = (
    (505, "of protect armor "), (200, "of hold monster "),
    (235, "of enchant weapon "), (235, "of enchant armor "),
    (175, "of identify "), (190, "of teleportation "), (25, "of sleep "),
    (610, "of scare monster "), (210, "of remove curse "),
    (100, "of create monster "), (25, "of aggravate monster "),
    (180, "of magic mapping "),
)

_WEAPONS = (
    (150, "short bow "), (8, "darts "), (15, "arrows "), (27, "daggers "),
    (35, "shurikens "), (360, "mace "), (470, "long sword "),
    (580, "two-handed sword "),
)

_ARMORS = (
    (300, "leather armor "), (300, "ring mail "), (400, "scale mail "),
    (500, "chain mail "), (600, "banded mail "), (600, "splint mail "),
    (700, "plate mail "),
)

_WANDS = (
    (25, "of teleport away "), (50, "of slow monster "),
    (45, "of confuse monster "), (8, "of invisibility "),
    (55, "of polymorph "), (2, "of haste monster "), (25, "of sleep "),
    (20, "of magic missile "), (20, "of cancellation "), (0, "of do nothing "),
)

_RINGS = (
    (250, "of stealth "), (100, "of teleportation "), (255, "of regeneration "),
    (295, "of slow digestion "), (200, "of add strength "),
    (250, "of sustain strength "), (250, "of dexterity "), (25, "of adornment "),
    (300, "of see invisible "), (290, "of maintain armor "),
    (270, "of searching "),
)

_CATEGORY_NAMES = {
    Category.SCROLL: ("scroll ", "scrolls "),
    Category.POTION: ("potion ", "potions "),
    Category.ARMOR: ("armor ", "armor "),
    Category.RING: ("ring ", "rings "),
    Category.AMULET: ("amulet ", "amulet "),
}


def _secret_table(entries, titles=None):
    titles = titles or ("",) * len(entries)
    return [IdInfo(value, title, real) for (value, real), title in zip(entries, titles)]


def _named_table(entries):
    return [IdInfo(value, title, "") for value, title in entries]


@dataclass
class Catalog:
    """Identification tables and naming for every kind of item."""

    potions: list = field(default_factory=lambda: _secret_table(_POTIONS, _POTION_COLORS))
    scrolls: list = field(default_factory=lambda: _secret_table(_SCROLLS))
    weapons: list = field(default_factory=lambda: _named_table(_WEAPONS))
    armors: list = field(default_factory=lambda: _named_table(_ARMORS))
    wands: list = field(default_factory=lambda: _secret_table(_WANDS))
    rings: list = field(default_factory=lambda: _secret_table(_RINGS))
    is_wood: list = field(default_factory=lambda: [False] * len(WandKind))
    fruit: str = "slime-mold "

    def table_for(self, category):
        """Return the identification table for ``category``."""
        tables = {
            Category.ARMOR: self.armors,
            Category.WEAPON: self.weapons,
            Category.SCROLL: self.scrolls,
            Category.POTION: self.potions,
            Category.WAND: self.wands,
            Category.RING: self.rings,
        }
        try:
            return tables[category]
        except KeyError:
            raise ValueError(f"no identification table for {category!r}") from None

    def name_of(self, item):
        """Return the generic name of ``item``, pluralised where it applies."""
        if item.what_is == Category.WAND:
            return "staff " if self.is_wood[item.which_kind] else "wand "
        if item.what_is == Category.WEAPON:
            title = self.weapons[item.which_kind].title
            if item.which_kind in MISSILE_KINDS and item.quantity == 1:
                return title[:-2] + " "
            return title
        if item.what_is == Category.FOOD:
            return "food " if item.which_kind == FoodKind.RATION else self.fruit
        names = _CATEGORY_NAMES.get(item.what_is)
        if names is None:
            return "unknown "
        return names[1] if item.quantity > 1 else names[0]


_WHAT_IS_TABLE = (
    (30, Category.SCROLL),
    (60, Category.POTION),
    (64, Category.WAND),
    (74, Category.WEAPON),
    (83, Category.ARMOR),
    (88, Category.FOOD),
    (91, Category.RING),
)

_SCROLL_PERCENTS = (5, 11, 16, 21, 36, 44, 51, 56, 65, 74, 80, 85)
_POTION_PERCENTS = (10, 20, 30, 40, 50, 55, 65, 75, 85, 95, 105, 110, 114, 118)


def _first_at_or_above(percent, thresholds):
    return next(i for i, limit in enumerate(thresholds) if percent <= limit)


def gr_what_is(rng):
    """Pick a random item category with the game's weighting."""
    percent = rng.get_rand(1, 91)
    return next(category for limit, category in _WHAT_IS_TABLE if percent <= limit)


def gr_scroll(item, rng):
    """Turn ``item`` into a random scroll."""
    percent = rng.get_rand(0, 85)
    item.what_is = Category.SCROLL
    item.which_kind = _first_at_or_above(percent, _SCROLL_PERCENTS)


def gr_potion(item, rng):
    """Turn ``item`` into a random potion."""
    percent = rng.get_rand(1, 118)
    item.what_is = Category.POTION
    item.which_kind = _first_at_or_above(percent, _POTION_PERCENTS)


def gr_weapon(item, rng, assign_kind=True):
    """Turn ``item`` into a weapon, choosing its kind unless told not to."""
    item.what_is = Category.WEAPON
    if assign_kind:
        item.which_kind = rng.get_rand(0, len(WeaponKind) - 1)
    if item.which_kind in MISSILE_KINDS:
        item.quantity = rng.get_rand(3, 15)
        item.quiver = rng.get_rand(0, 126)
    else:
        item.quantity = 1
    item.hit_enchant = item.d_enchant = 0

    percent = rng.get_rand(1, 96)
    blessing = rng.get_rand(1, 3)
    if percent <= 32:
        increment = 1 if percent <= 16 else -1
        if increment < 0:
            item.is_cursed = True
        for _ in range(blessing):
            if rng.coin_toss():
                item.hit_enchant += increment
            else:
                item.d_enchant += increment
    item.damage = _WEAPON_DAMAGE[item.which_kind]


def gr_armor(item, rng, assign_kind=True):
    """Turn ``item`` into armor, choosing its kind unless told not to."""
    item.what_is = Category.ARMOR
    if assign_kind:
        item.which_kind = rng.get_rand(0, len(ArmorKind) - 1)
    item.klass = item.which_kind + 2
    if item.which_kind in (ArmorKind.PLATE, ArmorKind.SPLINT):
        item.klass -= 1
    item.is_protected = False
    item.d_enchant = 0

    percent = rng.get_rand(1, 100)
    blessing = rng.get_rand(1, 3)
    if percent <= 16:
        item.is_cursed = True
        item.d_enchant -= blessing
    elif percent <= 33:
        item.d_enchant += blessing


def gr_wand(item, rng):
    """Turn ``item`` into a random wand with charges."""
    item.what_is = Category.WAND
    item.which_kind = rng.get_rand(0, len(WandKind) - 1)
    if item.which_kind == WandKind.MAGIC_MISSILE:
        item.klass = rng.get_rand(6, 12)
    elif item.which_kind == WandKind.CANCELLATION:
        item.klass = rng.get_rand(5, 9)
    else:
        item.klass = rng.get_rand(3, 6)


def get_food(item, rng, force_ration=False):
    """Turn ``item`` into food: a ration, or now and then a fruit."""
    item.what_is = Category.FOOD
    if force_ration or rng.rand_percent(80):
        item.which_kind = FoodKind.RATION
    else:
        item.which_kind = FoodKind.FRUIT


def gr_ring(item, rng, assign_kind=True):
    """Turn ``item`` into a ring, choosing its kind unless told not to."""
    item.what_is = Category.RING
    if assign_kind:
        item.which_kind = rng.get_rand(0, len(RingKind) - 1)
    item.klass = 0

    if item.which_kind == RingKind.R_TELEPORT:
        item.is_cursed = True
    elif item.which_kind in (RingKind.ADD_STRENGTH, RingKind.DEXTERITY):
        while item.klass == 0:
            item.klass = rng.get_rand(0, 4) - 2
        item.is_cursed = item.klass < 0
    elif item.which_kind == RingKind.ADORNMENT:
        item.is_cursed = rng.coin_toss()


def get_armor_class(item):
    """Return the protection ``item`` gives, or 0 when nothing is worn."""
    if item is None:
        return 0
    return item.klass + item.d_enchant


_MASK_CHARS = {
    Category.SCROLL: "?",
    Category.POTION: "!",
    Category.GOLD: "*",
    Category.FOOD: ":",
    Category.WAND: "/",
    Category.ARMOR: "]",
    Category.WEAPON: ")",
    Category.RING: "=",
    Category.AMULET: ",",
}


def get_mask_char(category):
    """Return the map character for an item category."""
    return _MASK_CHARS.get(category, "~")


class ItemFactory:
    """Creates fresh and random items, keeping count of forced food."""

    def __init__(self, rng, catalog=None):
        self.rng = rng
        self.catalog = catalog if catalog is not None else Catalog()
        self.foods = 0

    def new_item(self):
        """Return a blank item with the default settings."""
        return Item()

    def gr_object(self, cur_level):
        """Return a random item fit for dungeon level ``cur_level``."""
        item = self.new_item()
        if self.foods < cur_level // 3:
            item.what_is = Category.FOOD
            self.foods += 1
        else:
            item.what_is = gr_what_is(self.rng)

        rng = self.rng
        makers = {
            Category.SCROLL: lambda: gr_scroll(item, rng),
            Category.POTION: lambda: gr_potion(item, rng),
            Category.WEAPON: lambda: gr_weapon(item, rng, True),
            Category.ARMOR: lambda: gr_armor(item, rng, True),
            Category.WAND: lambda: gr_wand(item, rng),
            Category.FOOD: lambda: get_food(item, rng, False),
            Category.RING: lambda: gr_ring(item, rng, True),
        }
        maker = makers.get(item.what_is)
        if maker is not None:
            maker()
        return item