"""The player's pack: adding, picking up, dropping, wearing and wielding.

A level may carry two optional callables used here:

``describe``
    takes an item and returns the text that names it to the player
``reg_move``
    takes no arguments and lets one turn of game time pass

Refused actions raise :class:`ActionError` carrying the text to show.
"""

import copy

from .dungeon import Cell, object_at
from .items import (
    BEING_WIELDED,
    BEING_WORN,
    MISSILE_KINDS,
    ON_EITHER_HAND,
    Catalog,
    Category,
    FoodKind,
    IdStatus,
    ScrollKind,
)
from .monsters import mv_aquatars

MAX_PACK_COUNT = 24
CANCEL = "\033"
LIST = "*"

CURSE_MESSAGE = "you can't, it appears to be cursed"
NOTHING_APPROPRIATE = "nothing appropriate"
NO_SUCH_ITEM = "no such item."

_PACK_LETTER_MASKS = {
    "?": Category.SCROLL,
    "!": Category.POTION,
    ":": Category.FOOD,
    ")": Category.WEAPON,
    "]": Category.ARMOR,
    "/": Category.WAND,
    "=": Category.RING,
    ",": Category.AMULET,
}


class ActionError(Exception):
    """An action the player asked for cannot be done."""


def _catalog(level):
    if level.catalog is None:
        level.catalog = Catalog()
    return level.catalog


def _describe(level, item):
    describe = getattr(level, "describe", None)
    if describe is not None:
        return describe(item)
    if item.what_is == Category.GOLD:
        return f"{item.quantity} pieces of gold"
    return _catalog(level).name_of(item).rstrip()


def _take_turn(level):
    hook = getattr(level, "reg_move", None)
    if hook is not None:
        hook()


def check_duplicate(item, pack):
    """Merge ``item`` into a matching stack in ``pack`` and return that stack, or None."""
    if not item.what_is & (Category.WEAPON | Category.FOOD | Category.SCROLL | Category.POTION):
        return None
    if item.what_is == Category.FOOD and item.which_kind == FoodKind.FRUIT:
        return None
    for other in pack:
        if other.what_is != item.what_is or other.which_kind != item.which_kind:
            continue
        if item.what_is != Category.WEAPON or (
            item.which_kind in MISSILE_KINDS and item.quiver == other.quiver
        ):
            other.quantity += item.quantity
            return other
    return None


def next_avail_ichar(pack):
    """Return the first inventory letter not used in ``pack``, or '?' when all are."""
    used = {item.ichar for item in pack}
    return next((chr(c) for c in range(ord("a"), ord("z") + 1) if chr(c) not in used), "?")


def add_to_pack(pack, item, condense):
    """Add ``item`` to ``pack`` keeping categories together; return the item held.

    With ``condense`` the item may merge into a stack already there, and a
    new item is given an inventory letter.
    """
    if condense:
        existing = check_duplicate(item, pack)
        if existing is not None:
            return existing
        item.ichar = next_avail_ichar(pack)
    position = next((i for i, other in enumerate(pack) if other.what_is > item.what_is), len(pack))
    pack.insert(position, item)
    return item


def take_from_pack(pack, item):
    """Remove ``item`` from ``pack``; ValueError if it is not there."""
    for i, other in enumerate(pack):
        if other is item:
            del pack[i]
            return
    raise ValueError("item is not in the pack")


def pack_count(pack, new_item):
    """Count the pack's load, as it would stand for taking ``new_item`` in."""
    count = 0
    for item in pack:
        if item.what_is != Category.WEAPON:
            count += item.quantity
        elif new_item is None:
            count += 1
        elif (
            new_item.what_is != Category.WEAPON
            or item.which_kind not in MISSILE_KINDS
            or new_item.which_kind != item.which_kind
            or item.quiver != new_item.quiver
        ):
            count += 1
    return count


def mask_pack(pack, mask):
    """Tell whether anything in ``pack`` falls within ``mask``."""
    return any(item.what_is & mask for item in pack)


def pack_letter_mask(ch):
    """Return the category a listing character stands for.

    Inventory letters, CANCEL and LIST give None; other characters are not
    answers to an item prompt and raise ValueError.
    """
    if ch in _PACK_LETTER_MASKS:
        return _PACK_LETTER_MASKS[ch]
    if ("a" <= ch <= "z" and len(ch) == 1) or ch in (CANCEL, LIST):
        return None
    raise ValueError(f"{ch!r} does not name an item")


def has_amulet(pack):
    """Tell whether the amulet is in ``pack``."""
    return mask_pack(pack, Category.AMULET)


def get_letter_object(pack, ch):
    """Return the item in ``pack`` with inventory letter ``ch``, or None."""
    return next((item for item in pack if item.ichar == ch), None)


def _place_at(level, item, row, col):
    item.row = row
    item.col = col
    level.dungeon[row][col] |= Cell.OBJECT
    add_to_pack(level.items, item, False)


def pick_up(level, row, col):
    """Pick up what lies at ``row``, ``col``.

    Return the item now in the pack (or the gold taken), or None when a
    scroll of scare monster crumbled away. A full pack raises ActionError.
    """
    item = object_at(level.items, row, col)
    if item is None:
        raise ValueError(f"nothing lies at ({row}, {col})")
    rogue = level.rogue
    if item.what_is == Category.SCROLL and item.which_kind == ScrollKind.SCARE_MONSTER and item.picked_up:
        level.message("the scroll turns to dust as you pick it up")
        level.dungeon[row][col] &= ~Cell.OBJECT
        take_from_pack(level.items, item)
        entry = _catalog(level).scrolls[ScrollKind.SCARE_MONSTER]
        if entry.id_status == IdStatus.UNIDENTIFIED:
            entry.id_status = IdStatus.IDENTIFIED
        return None
    if item.what_is == Category.GOLD:
        rogue.gold += item.quantity
        level.dungeon[row][col] &= ~Cell.OBJECT
        take_from_pack(level.items, item)
        return item
    if pack_count(rogue.pack, item) >= MAX_PACK_COUNT:
        raise ActionError("pack too full")
    level.dungeon[row][col] &= ~Cell.OBJECT
    take_from_pack(level.items, item)
    item = add_to_pack(rogue.pack, item, True)
    item.picked_up = True
    return item


def unwear(rogue):
    """Take off the armor ``rogue`` wears."""
    if rogue.armor is not None:
        rogue.armor.in_use_flags &= ~BEING_WORN
    rogue.armor = None


def do_wear(rogue, item):
    """Make ``rogue`` wear ``item``."""
    rogue.armor = item
    item.in_use_flags |= BEING_WORN
    item.identified = True


def unwield(rogue):
    """Put away the weapon ``rogue`` wields."""
    if rogue.weapon is not None:
        rogue.weapon.in_use_flags &= ~BEING_WIELDED
    rogue.weapon = None


def do_wield(rogue, item):
    """Make ``rogue`` wield ``item``."""
    rogue.weapon = item
    item.in_use_flags |= BEING_WIELDED


def drop(level, ch):
    """Drop one of the item lettered ``ch`` on the player's square; return what was dropped."""
    from .rings import un_put_on

    rogue = level.rogue
    if level.dungeon[rogue.row][rogue.col] & (Cell.OBJECT | Cell.STAIRS | Cell.TRAP):
        raise ActionError("there's already something there")
    if not rogue.pack:
        raise ActionError("you have nothing to drop")
    item = get_letter_object(rogue.pack, ch)
    if item is None:
        raise ActionError(NO_SUCH_ITEM)
    if item.in_use_flags & BEING_WIELDED:
        if item.is_cursed:
            raise ActionError(CURSE_MESSAGE)
        unwield(rogue)
    elif item.in_use_flags & BEING_WORN:
        if item.is_cursed:
            raise ActionError(CURSE_MESSAGE)
        mv_aquatars(level)
        unwear(rogue)
    elif item.in_use_flags & ON_EITHER_HAND:
        if item.is_cursed:
            raise ActionError(CURSE_MESSAGE)
        un_put_on(level, item)
    item.row = rogue.row
    item.col = rogue.col
    if item.quantity > 1 and item.what_is != Category.WEAPON:
        item.quantity -= 1
        item = copy.copy(item)
        item.quantity = 1
    else:
        item.ichar = "L"
        take_from_pack(rogue.pack, item)
    _place_at(level, item, rogue.row, rogue.col)
    level.message("dropped " + _describe(level, item))
    _take_turn(level)
    return item


def take_off(level):
    """Take off the armor being worn and return it."""
    rogue = level.rogue
    if rogue.armor is None:
        raise ActionError("not wearing any")
    if rogue.armor.is_cursed:
        raise ActionError(CURSE_MESSAGE)
    mv_aquatars(level)
    item = rogue.armor
    unwear(rogue)
    level.message("was wearing " + _describe(level, item))
    _take_turn(level)
    return item


def wear(level, ch):
    """Put on the armor lettered ``ch`` and return it."""
    rogue = level.rogue
    if rogue.armor is not None:
        raise ActionError("your already wearing some")
    if not mask_pack(rogue.pack, Category.ARMOR):
        raise ActionError(NOTHING_APPROPRIATE)
    item = get_letter_object(rogue.pack, ch)
    if item is None:
        raise ActionError(NO_SUCH_ITEM)
    if item.what_is != Category.ARMOR:
        raise ActionError("you can't wear that")
    item.identified = True
    level.message("you are now wearing " + _describe(level, item))
    do_wear(rogue, item)
    _take_turn(level)
    return item


def wield(level, ch):
    """Wield the item lettered ``ch`` and return it."""
    rogue = level.rogue
    if rogue.weapon is not None and rogue.weapon.is_cursed:
        raise ActionError(CURSE_MESSAGE)
    if not mask_pack(rogue.pack, Category.WEAPON):
        raise ActionError(NOTHING_APPROPRIATE)
    item = get_letter_object(rogue.pack, ch)
    if item is None:
        raise ActionError(NO_SUCH_ITEM)
    if item.what_is & (Category.ARMOR | Category.RING):
        what = "armor" if item.what_is == Category.ARMOR else "rings"
        raise ActionError(f"you can't wield {what}")
    if item.in_use_flags & BEING_WIELDED:
        raise ActionError("in use")
    unwield(rogue)
    level.message("you are now wielding " + _describe(level, item))
    do_wield(rogue, item)
    _take_turn(level)
    return item


def call_it(catalog, item, name):
    """Give the kind of ``item`` the player's own ``name``; return the title set.

    An empty name changes nothing and gives None.
    """
    if not item.what_is & (Category.SCROLL | Category.POTION | Category.WAND | Category.RING):
        raise ActionError("surely you already know what that's called")
    name = name.rstrip(" ")
    if not name:
        return None
    entry = catalog.table_for(item.what_is)[item.which_kind]
    entry.id_status = IdStatus.CALLED
    entry.title = name + " "
    return entry.title


def kick_into_pack(level):
    """Pick up what lies under the player; return it, or None if nothing was taken."""
    rogue = level.rogue
    if not level.dungeon[rogue.row][rogue.col] & Cell.OBJECT:
        raise ActionError("there's nothing here to pick up")
    if level.levitate:
        raise ActionError("you're floating in the air!")
    item = pick_up(level, rogue.row, rogue.col)
    if item is not None:
        desc = _describe(level, item)
        if item.what_is != Category.GOLD:
            desc += f"({item.ichar})"
        level.message(desc)
    _take_turn(level)
    return item