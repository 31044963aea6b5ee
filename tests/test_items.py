import pytest

from rogueclone.items import (
    ArmorKind,
    Catalog,
    Category,
    FoodKind,
    IdStatus,
    Item,
    ItemFactory,
    PotionKind,
    RingKind,
    ScrollKind,
    WandKind,
    WeaponKind,
    get_armor_class,
    get_food,
    get_mask_char,
    gr_armor,
    gr_potion,
    gr_ring,
    gr_scroll,
    gr_wand,
    gr_weapon,
    gr_what_is,
)
from rogueclone.rng import Random

SEEDS = range(300)


def test_gr_what_is_yields_the_seven_generated_categories():
    rng = Random(1)
    seen = {gr_what_is(rng) for _ in range(2000)}
    assert seen == {
        Category.SCROLL, Category.POTION, Category.WAND, Category.WEAPON,
        Category.ARMOR, Category.FOOD, Category.RING,
    }


def test_gr_scroll_kinds_valid():
    rng = Random(2)
    for _ in range(500):
        item = Item()
        gr_scroll(item, rng)
        assert item.what_is == Category.SCROLL
        assert 0 <= item.which_kind < len(ScrollKind)


def test_gr_potion_kinds_cover_table():
    rng = Random(3)
    kinds = set()
    for _ in range(2000):
        item = Item()
        gr_potion(item, rng)
        kinds.add(item.which_kind)
    assert kinds == set(range(len(PotionKind)))


def test_gr_weapon_quantities_and_damage():
    rng = Random(4)
    for _ in range(500):
        item = Item()
        gr_weapon(item, rng, True)
        if item.which_kind in (WeaponKind.DART, WeaponKind.ARROW,
                               WeaponKind.DAGGER, WeaponKind.SHURIKEN):
            assert 3 <= item.quantity <= 15
            assert 0 <= item.quiver <= 126
        else:
            assert item.quantity == 1


def test_gr_weapon_keeps_kind_when_not_assigning():
    item = Item(which_kind=WeaponKind.TWO_HANDED_SWORD)
    gr_weapon(item, Random(5), False)
    assert item.which_kind == WeaponKind.TWO_HANDED_SWORD
    assert item.damage == "4d5"


def test_gr_weapon_curse_matches_enchantment_sign():
    cursed_seen = False
    for seed in SEEDS:
        item = Item()
        gr_weapon(item, Random(seed), True)
        total = item.hit_enchant + item.d_enchant
        if item.is_cursed:
            cursed_seen = True
            assert -3 <= total <= -1
        else:
            assert 0 <= total <= 3
    assert cursed_seen


def test_gr_armor_class_follows_kind():
    for seed in SEEDS:
        item = Item()
        gr_armor(item, Random(seed), True)
        expected_base = item.which_kind + (1 if item.which_kind in (ArmorKind.PLATE, ArmorKind.SPLINT) else 2)
        assert item.klass == expected_base
        assert -3 <= item.d_enchant <= 3
        assert item.is_cursed == (item.d_enchant < 0)


def test_gr_wand_charges():
    for seed in SEEDS:
        item = Item()
        gr_wand(item, Random(seed))
        if item.which_kind == WandKind.MAGIC_MISSILE:
            assert 6 <= item.klass <= 12
        elif item.which_kind == WandKind.CANCELLATION:
            assert 5 <= item.klass <= 9
        else:
            assert 3 <= item.klass <= 6


def test_get_food_forced_ration_uses_no_randomness():
    used, untouched = Random(6), Random(6)
    item = Item()
    get_food(item, used, True)
    assert item.which_kind == FoodKind.RATION
    assert used.next() == untouched.next()


def test_get_food_produces_both_kinds():
    rng = Random(7)
    kinds = set()
    for _ in range(300):
        item = Item()
        get_food(item, rng, False)
        kinds.add(item.which_kind)
    assert kinds == {FoodKind.RATION, FoodKind.FRUIT}


@pytest.mark.parametrize("kind", [RingKind.ADD_STRENGTH, RingKind.DEXTERITY])
def test_gr_ring_bonus_rings(kind):
    for seed in range(100):
        ring = Item(which_kind=kind)
        gr_ring(ring, Random(seed), False)
        assert ring.which_kind == kind
        assert ring.klass in (-2, -1, 1, 2)
        assert ring.is_cursed == (ring.klass < 0)


def test_gr_ring_teleport_is_cursed():
    ring = Item(which_kind=RingKind.R_TELEPORT)
    gr_ring(ring, Random(8), False)
    assert ring.is_cursed and ring.klass == 0


def test_get_armor_class():
    assert get_armor_class(None) == 0
    armor = Item(klass=4, d_enchant=-1)
    assert get_armor_class(armor) == armor.klass + armor.d_enchant


@pytest.mark.parametrize(
    "category,char",
    [(Category.SCROLL, "?"), (Category.POTION, "!"), (Category.GOLD, "*"),
     (Category.AMULET, ","), (Category.WEAPON, ")")],
)
def test_get_mask_char(category, char):
    assert get_mask_char(category) == char


def test_get_mask_char_unknown():
    assert get_mask_char(Category(0)) == "~"


def test_table_for_lengths_and_errors():
    catalog = Catalog()
    assert len(catalog.table_for(Category.POTION)) == len(PotionKind)
    assert len(catalog.table_for(Category.RING)) == len(RingKind)
    assert all(e.id_status == IdStatus.UNIDENTIFIED for e in catalog.table_for(Category.SCROLL))
    with pytest.raises(ValueError):
        catalog.table_for(Category.GOLD)


def test_name_of_single_missile_drops_plural():
    catalog = Catalog()
    many = catalog.name_of(Item(what_is=Category.WEAPON, which_kind=WeaponKind.DART, quantity=4))
    one = catalog.name_of(Item(what_is=Category.WEAPON, which_kind=WeaponKind.DART, quantity=1))
    assert one == many[:-2] + " "


def test_name_of_plural_scrolls_and_wood():
    catalog = Catalog()
    one = catalog.name_of(Item(what_is=Category.SCROLL, quantity=1))
    two = catalog.name_of(Item(what_is=Category.SCROLL, quantity=2))
    assert two == one[:-1] + "s "
    wand = Item(what_is=Category.WAND, which_kind=WandKind.POLYMORPH)
    metal = catalog.name_of(wand)
    catalog.is_wood[WandKind.POLYMORPH] = True
    assert catalog.name_of(wand) != metal
    fruit = Item(what_is=Category.FOOD, which_kind=FoodKind.FRUIT)
    assert catalog.name_of(fruit) == catalog.fruit


def test_factory_new_item_defaults():
    item = ItemFactory(Random(1)).new_item()
    assert (item.quantity, item.ichar, item.damage) == (1, "L", "1d1")
    assert not item.is_cursed and not item.picked_up


def test_factory_forces_food_on_deep_levels():
    factory = ItemFactory(Random(9))
    forced = [factory.gr_object(9) for _ in range(3)]
    assert all(item.what_is == Category.FOOD for item in forced)
    assert factory.foods == 3
    factory.gr_object(9)
    assert factory.foods == 3


def test_factory_objects_are_generated_categories():
    factory = ItemFactory(Random(10))
    items = [factory.gr_object(1) for _ in range(200)]
    assert factory.foods == 0
    assert all(item.what_is not in (Category.GOLD, Category.AMULET, Category(0)) for item in items)