from rogueclone.dungeon import Cell, Level, Monster, MonsterFlag, RoomKind
from rogueclone.items import Catalog, Category, ItemFactory, get_mask_char
from rogueclone.population import (
    make_party,
    next_party,
    party_objects,
    place_at,
    plant_gold,
    put_amulet,
    put_gold,
    put_objects,
    put_stairs,
    rand_place,
    show_objects,
)


def make_level(kind=RoomKind.ROOM, inside=Cell.FLOOR):
    level = Level()
    room = level.rooms[0]
    room.top_row, room.bottom_row, room.left_col, room.right_col = 2, 8, 10, 30
    room.is_room = kind
    for r in range(2, 9):
        for c in range(10, 31):
            if r in (2, 8):
                level.dungeon[r][c] = Cell.HORWALL
            elif c in (10, 30):
                level.dungeon[r][c] = Cell.VERTWALL
            else:
                level.dungeon[r][c] = inside
    level.rogue.row, level.rogue.col = 5, 15
    return level


def factory_for(level):
    return ItemFactory(level.rng, Catalog())


def inside_room(item):
    return 2 < item.row < 8 and 10 < item.col < 30


def test_next_party_range():
    level = make_level()
    for cur in (1, 10):
        level.cur_level = cur
        for _ in range(50):
            assert 11 <= next_party(level) <= 20
    level.cur_level = 11
    assert 21 <= next_party(level) <= 30


def test_plant_gold_bounds():
    level = make_level()
    level.cur_level = 3
    gold = plant_gold(level, 4, 12, False)
    assert gold.what_is == Category.GOLD
    assert 6 <= gold.quantity <= 48
    assert level.dungeon[4][12] & Cell.OBJECT
    assert gold in level.items


def test_plant_gold_maze_bonus():
    level = make_level()
    level.cur_level = 2
    for _ in range(30):
        gold = plant_gold(level, 4, 12, True)
        assert 6 <= gold.quantity <= 48


def test_place_at():
    level = make_level()
    item = factory_for(level).new_item()
    item.what_is = Category.POTION
    place_at(level, item, 6, 20)
    assert (item.row, item.col) == (6, 20)
    assert level.dungeon[6][20] & Cell.OBJECT
    assert level.items == [item]


def test_put_stairs():
    level = make_level()
    row, col = put_stairs(level)
    assert level.dungeon[row][col] & Cell.STAIRS
    assert level.get_room_number(row, col) == 0
    assert (row, col) != (level.rogue.row, level.rogue.col)


def test_rand_place_on_free_floor():
    level = make_level()
    item = factory_for(level).new_item()
    item.what_is = Category.WAND
    rand_place(level, item)
    assert inside_room(item)
    assert level.dungeon[item.row][item.col] == Cell.FLOOR | Cell.OBJECT


def test_put_gold_in_maze():
    level = make_level(RoomKind.MAZE, Cell.TUNNEL)
    put_gold(level)
    golds = [i for i in level.items if i.what_is == Category.GOLD]
    assert len(golds) == 1
    assert inside_room(golds[0])


def test_put_amulet():
    level = make_level()
    amulet = put_amulet(level, factory_for(level))
    assert amulet.what_is == Category.AMULET
    assert amulet in level.items
    assert inside_room(amulet)


def test_put_objects_skips_visited_level():
    level = make_level()
    level.cur_level = 1
    level.max_level = 3
    put_objects(level, factory_for(level))
    assert level.items == []


def test_put_objects_stocks_level():
    level = make_level()
    put_objects(level, factory_for(level))
    assert len(level.items) >= 2
    positions = {(i.row, i.col) for i in level.items}
    assert len(positions) == len(level.items)
    assert all(level.dungeon[r][c] & Cell.OBJECT for r, c in positions)
    assert all(inside_room(i) for i in level.items)


def test_party_objects_count_matches_items():
    level = make_level()
    placed = party_objects(level, factory_for(level), 0)
    assert placed == len(level.items)
    assert 5 <= placed <= 10
    assert all(inside_room(i) for i in level.items)


def test_make_party_uses_room():
    level = make_level()
    make_party(level, factory_for(level))
    assert level.party_room == 0
    assert all(inside_room(i) for i in level.items)
    assert all(2 < m.row < 8 and 10 < m.col < 30 for m in level.monsters)


def test_show_objects_draws_items():
    level = make_level()
    item = factory_for(level).new_item()
    item.what_is = Category.POTION
    place_at(level, item, 4, 12)
    under = factory_for(level).new_item()
    under.what_is = Category.SCROLL
    place_at(level, under, 5, 15)
    show_objects(level)
    assert level.screen.inch(4, 12) == "!"
    assert level.screen.inch(5, 15) == " "


def test_show_objects_updates_monster_trail_and_disguise():
    level = make_level()
    item = factory_for(level).new_item()
    item.what_is = Category.FOOD
    place_at(level, item, 4, 12)
    monster = Monster(row=4, col=12, m_char="B")
    level.monsters.append(monster)
    level.dungeon[4][12] |= Cell.MONSTER
    level.screen.addch(4, 12, "B")
    mimic = Monster(row=6, col=20, m_flags=MonsterFlag.IMITATES, disguise="=")
    level.monsters.append(mimic)
    show_objects(level)
    assert monster.trail_char == get_mask_char(Category.FOOD)
    assert level.screen.inch(4, 12) == "B"
    assert level.screen.inch(6, 20) == "="