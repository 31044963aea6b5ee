import pytest

from rogueclone.dungeon import Cell, Level
from rogueclone.items import (
    BEING_WIELDED,
    BEING_WORN,
    Catalog,
    Category,
    FoodKind,
    IdStatus,
    Item,
    RingKind,
    ScrollKind,
    WeaponKind,
)
from rogueclone.pack import (
    CURSE_MESSAGE,
    MAX_PACK_COUNT,
    ActionError,
    add_to_pack,
    call_it,
    check_duplicate,
    do_wear,
    do_wield,
    drop,
    get_letter_object,
    has_amulet,
    kick_into_pack,
    mask_pack,
    next_avail_ichar,
    pack_count,
    pack_letter_mask,
    pick_up,
    take_from_pack,
    take_off,
    unwear,
    unwield,
    wear,
    wield,
)
from rogueclone.rings import put_on_ring
from rogueclone.rng import Random


def make_level():
    level = Level(rng=Random(1))
    level.rogue.row, level.rogue.col = 5, 5
    level.dungeon[5][5] = Cell.FLOOR
    level.turns = []
    level.reg_move = lambda: level.turns.append(True)
    return level


def lay(level, item, row=5, col=5):
    item.row, item.col = row, col
    level.dungeon[row][col] |= Cell.OBJECT
    level.items.append(item)
    return item


def test_add_to_pack_groups_by_category():
    pack = []
    for category in (Category.POTION, Category.ARMOR, Category.SCROLL, Category.WEAPON):
        add_to_pack(pack, Item(what_is=category), True)
    kinds = [item.what_is for item in pack]
    assert kinds == sorted(kinds)


def test_condense_merges_stacks():
    pack = []
    first = add_to_pack(pack, Item(what_is=Category.POTION, which_kind=2, quantity=1), True)
    again = add_to_pack(pack, Item(what_is=Category.POTION, which_kind=2, quantity=2), True)
    assert again is first
    assert len(pack) == 1
    assert first.quantity == 3


def test_condense_assigns_distinct_letters():
    pack = []
    a = add_to_pack(pack, Item(what_is=Category.ARMOR), True)
    b = add_to_pack(pack, Item(what_is=Category.ARMOR), True)
    assert a.ichar == "a"
    assert b.ichar != a.ichar
    assert get_letter_object(pack, b.ichar) is b


def test_next_avail_ichar_fills_gap_and_runs_out():
    pack = [Item(ichar="a"), Item(ichar="c")]
    assert next_avail_ichar(pack) == "b"
    full = [Item(ichar=chr(c)) for c in range(ord("a"), ord("z") + 1)]
    assert next_avail_ichar(full) == "?"


def test_check_duplicate_rules():
    fruit = Item(what_is=Category.FOOD, which_kind=FoodKind.FRUIT)
    assert check_duplicate(fruit, [Item(what_is=Category.FOOD, which_kind=FoodKind.FRUIT)]) is None
    darts = Item(what_is=Category.WEAPON, which_kind=WeaponKind.DART, quantity=4, quiver=7)
    pack = [darts]
    same = Item(what_is=Category.WEAPON, which_kind=WeaponKind.DART, quantity=2, quiver=7)
    assert check_duplicate(same, pack) is darts
    other = Item(what_is=Category.WEAPON, which_kind=WeaponKind.DART, quiver=8)
    assert check_duplicate(other, pack) is None
    mace = Item(what_is=Category.WEAPON, which_kind=WeaponKind.MACE)
    assert check_duplicate(mace, [Item(what_is=Category.WEAPON, which_kind=WeaponKind.MACE)]) is None


def test_pack_count():
    arrows = Item(what_is=Category.WEAPON, which_kind=WeaponKind.ARROW, quantity=10, quiver=3)
    pack = [Item(what_is=Category.POTION, quantity=3), arrows]
    assert pack_count(pack, None) == 4
    more = Item(what_is=Category.WEAPON, which_kind=WeaponKind.ARROW, quiver=3)
    assert pack_count(pack, more) == pack_count(pack, None) - 1


def test_mask_pack_and_amulet():
    pack = [Item(what_is=Category.SCROLL)]
    assert mask_pack(pack, Category.SCROLL | Category.POTION)
    assert not mask_pack(pack, Category.ARMOR)
    assert not has_amulet(pack)
    pack.append(Item(what_is=Category.AMULET))
    assert has_amulet(pack)


def test_pack_letter_mask():
    assert pack_letter_mask("?") == Category.SCROLL
    assert pack_letter_mask("=") == Category.RING
    assert pack_letter_mask("q") is None
    with pytest.raises(ValueError):
        pack_letter_mask("#")


def test_take_from_pack_missing_raises():
    with pytest.raises(ValueError):
        take_from_pack([Item()], Item())


def test_pick_up_gold():
    level = make_level()
    gold = lay(level, Item(what_is=Category.GOLD, quantity=40))
    assert pick_up(level, 5, 5) is gold
    assert level.rogue.gold == gold.quantity
    assert level.items == []
    assert not level.dungeon[5][5] & Cell.OBJECT


def test_pick_up_item_goes_to_pack():
    level = make_level()
    potion = lay(level, Item(what_is=Category.POTION))
    got = pick_up(level, 5, 5)
    assert got is potion
    assert level.rogue.pack == [potion]
    assert potion.picked_up and potion.ichar == "a"


def test_pick_up_scare_monster_crumbles():
    level = make_level()
    level.catalog = Catalog()
    lay(level, Item(what_is=Category.SCROLL, which_kind=ScrollKind.SCARE_MONSTER, picked_up=True))
    assert pick_up(level, 5, 5) is None
    assert level.items == [] and level.rogue.pack == []
    assert level.catalog.scrolls[ScrollKind.SCARE_MONSTER].id_status == IdStatus.IDENTIFIED


def test_pick_up_full_pack_refused():
    level = make_level()
    level.rogue.pack.append(Item(what_is=Category.POTION, quantity=MAX_PACK_COUNT, ichar="a"))
    scroll = lay(level, Item(what_is=Category.SCROLL))
    with pytest.raises(ActionError):
        pick_up(level, 5, 5)
    assert level.items == [scroll]


def test_drop_places_item_and_takes_turn():
    level = make_level()
    armor = add_to_pack(level.rogue.pack, Item(what_is=Category.ARMOR), True)
    dropped = drop(level, armor.ichar)
    assert dropped is armor
    assert level.rogue.pack == []
    assert level.items == [armor]
    assert (armor.row, armor.col) == (5, 5)
    assert level.dungeon[5][5] & Cell.OBJECT
    assert len(level.turns) == 1


def test_drop_splits_stack():
    level = make_level()
    stack = add_to_pack(level.rogue.pack, Item(what_is=Category.POTION, quantity=3), True)
    dropped = drop(level, stack.ichar)
    assert dropped is not stack
    assert dropped.quantity == 1
    assert stack.quantity + dropped.quantity == 3


def test_drop_refusals():
    level = make_level()
    with pytest.raises(ActionError):
        drop(level, "a")
    sword = add_to_pack(level.rogue.pack, Item(what_is=Category.WEAPON, is_cursed=True), True)
    do_wield(level.rogue, sword)
    with pytest.raises(ActionError, match=CURSE_MESSAGE):
        drop(level, sword.ichar)
    with pytest.raises(ActionError):
        drop(level, "z")
    level.dungeon[5][5] |= Cell.STAIRS
    with pytest.raises(ActionError):
        drop(level, sword.ichar)


def test_drop_worn_ring_takes_it_off():
    level = make_level()
    ring = add_to_pack(level.rogue.pack, Item(what_is=Category.RING, which_kind=RingKind.STEALTH), True)
    put_on_ring(level, ring, "l")
    drop(level, ring.ichar)
    assert level.rogue.left_ring is None
    assert level.stealthy == 0


def test_wear_and_take_off_round_trip():
    level = make_level()
    armor = add_to_pack(level.rogue.pack, Item(what_is=Category.ARMOR), True)
    assert wear(level, armor.ichar) is armor
    assert level.rogue.armor is armor and armor.in_use_flags & BEING_WORN
    assert armor.identified
    assert take_off(level) is armor
    assert level.rogue.armor is None and not armor.in_use_flags & BEING_WORN
    assert len(level.turns) == 2


def test_wear_refusals():
    level = make_level()
    with pytest.raises(ActionError):
        wear(level, "a")
    add_to_pack(level.rogue.pack, Item(what_is=Category.ARMOR), True)
    potion = add_to_pack(level.rogue.pack, Item(what_is=Category.POTION), True)
    with pytest.raises(ActionError):
        wear(level, potion.ichar)
    with pytest.raises(ActionError):
        take_off(level)


def test_cursed_armor_stays_on():
    level = make_level()
    armor = Item(what_is=Category.ARMOR, is_cursed=True)
    do_wear(level.rogue, armor)
    with pytest.raises(ActionError, match=CURSE_MESSAGE):
        take_off(level)
    unwear(level.rogue)
    assert level.rogue.armor is None


def test_wield():
    level = make_level()
    mace = add_to_pack(level.rogue.pack, Item(what_is=Category.WEAPON, which_kind=WeaponKind.MACE), True)
    armor = add_to_pack(level.rogue.pack, Item(what_is=Category.ARMOR), True)
    with pytest.raises(ActionError, match="armor"):
        wield(level, armor.ichar)
    assert wield(level, mace.ichar) is mace
    assert mace.in_use_flags & BEING_WIELDED
    with pytest.raises(ActionError):
        wield(level, mace.ichar)
    unwield(level.rogue)
    assert level.rogue.weapon is None and not mace.in_use_flags & BEING_WIELDED


def test_call_it():
    catalog = Catalog()
    potion = Item(what_is=Category.POTION, which_kind=4)
    assert call_it(catalog, potion, "fizzy") == "fizzy "
    assert catalog.potions[4].id_status == IdStatus.CALLED
    assert call_it(catalog, potion, "   ") is None
    with pytest.raises(ActionError):
        call_it(catalog, Item(what_is=Category.ARMOR), "shiny")


def test_kick_into_pack():
    level = make_level()
    with pytest.raises(ActionError):
        kick_into_pack(level)
    potion = lay(level, Item(what_is=Category.POTION))
    level.levitate = 3
    with pytest.raises(ActionError):
        kick_into_pack(level)
    level.levitate = 0
    assert kick_into_pack(level) is potion
    assert level.messages[-1].endswith("(a)")
    assert len(level.turns) == 1