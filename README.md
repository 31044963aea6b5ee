# rogueclone

The rules engine of a classic Rogue-style dungeon crawler, as a library. It holds the
state of one dungeon level (map, rooms, items, monsters, the rogue) and carries out the
game's rules on it. What the player would see is kept in an in-memory `Screen` of
characters, and messages are collected in `Level.messages`.

## Modules

- `rogueclone.rng`: `Random`, the game's additive-feedback generator. A given seed
  always gives the same sequence; unseeded generators all start from the same built-in
  table. It offers `next()`, `get_rand(x, y)`, `rand_percent(p)` and `coin_toss()`.
- `rogueclone.items`: the `Category` flags and the kind enums (`ScrollKind`,
  `PotionKind`, `WeaponKind`, `ArmorKind`, `WandKind`, `RingKind`, `FoodKind`), the
  `Item` dataclass, the identification `Catalog` (`table_for`, `name_of`), the
  generators `gr_what_is`, `gr_scroll`, `gr_potion`, `gr_weapon`, `gr_armor`,
  `gr_wand`, `get_food`, `gr_ring`, and `ItemFactory.gr_object(cur_level)` for a
  random item fit for a level.
- `rogueclone.dungeon`: `Cell` and `RoomKind` flags, `Room`, `Door`, `Monster`,
  `MonsterFlag`, `Rogue`, `Screen` and `Level`. `Level` answers map questions
  (`get_room_number`, `is_passable`, `can_move`, `get_dungeon_char`, `rogue_can_see`)
  and draws onto its screen (`light_up_room`, `light_passage`, `darken_room`,
  `draw_magic_map`).
- `rogueclone.monsters`: monster creation (`gr_monster`, `put_mons`,
  `party_monsters`, `wanderer`, `create_monster`), movement (`mv_mons`, `mv_monster`,
  `flit`, `move_confused`, `dr_course`), waking (`wake_up`, `wake_room`,
  `aggravate`) and `mon_name`.
- `rogueclone.rings`: `put_on_ring`, `remove_ring`, `inv_rings`, and `ring_stats`,
  which returns the combined `RingEffects` of the rings worn.
- `rogueclone.pack`: the rogue's pack as a list: `add_to_pack` (stacking and
  inventory letters), `pick_up`, `drop`, `wear`, `take_off`, `wield`, `call_it`,
  `kick_into_pack`, `pack_count` and friends. Refused actions raise `ActionError`
  carrying the message to show.
- `rogueclone.movement`: `one_move_rogue` (returning a `MoveResult`),
  `multiple_move_rogue` for running, `rest`, `check_hunger`, `heal` and `reg_move`,
  the upkeep of one turn.
- `rogueclone.population`: stocking a level with `put_objects`, `put_gold`,
  `put_stairs`, `put_amulet`, `make_party` and `show_objects`.

## Example

```python
from rogueclone.items import Catalog, ItemFactory
from rogueclone.pack import add_to_pack
from rogueclone.rng import Random

rng = Random(42)
catalog = Catalog()
factory = ItemFactory(rng, catalog)

item = factory.gr_object(3)
print(item.what_is, item.which_kind, catalog.name_of(item))

pack = []
add_to_pack(pack, item, True)
print(item.ichar)  # "a"
```

## Hooks

Parts of play that this package does not carry out are reached through optional
callables set as attributes on a `Level`. Monsters use `monster_hit`, `flame_broil`,
`seek_gold` and `m_confuse`; movement uses `rogue_hit`, `tele`, `trap_player`,
`search`, `hallucinate`, `unhallucinate`, `unblind`, `unconfuse`, `print_stats` and
`killed_by`; the pack and ring actions use `describe` and `reg_move`. An absent hook
does nothing, except that starving without `killed_by` raises `RuntimeError`.

## What it does not do

There is no program to run and no terminal display: nothing reads keys or draws to a
real screen. The package does not build the rooms and passages of a level, carry out
combat, traps, eating, reading, quaffing, zapping or throwing, and does not save or
restore games or keep a score file. Those are left to the code that uses it, through
the hooks above.

## Installing and testing

Install with `pip install .`; install with `pip install .[test]` and run `pytest` to
run the tests.