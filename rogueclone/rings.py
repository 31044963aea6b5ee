"""Putting rings on, taking them off, and the effects that worn rings give.

A level may carry two optional callables used here:

``describe``
    takes an item and returns the text that names it to the player
``reg_move``
    takes no arguments and lets one turn of game time pass

When ``describe`` is absent the generic name of the item is used; when
``reg_move`` is absent no time passes.
"""

from dataclasses import dataclass, fields

from .items import (
    ON_EITHER_HAND,
    ON_LEFT_HAND,
    ON_RIGHT_HAND,
    Catalog,
    Category,
    RingKind,
)
from .pack import CURSE_MESSAGE, ActionError

LEFT_OR_RIGHT = "left or right hand?"
NO_RING = "there's no ring on that hand"
TWO_RINGS = "wearing two rings already"
NOT_A_RING = "that's not a ring"
ALREADY_WORN = "that ring is already being worn"
HAND_TAKEN = "there's already a ring on that hand"
NO_RINGS_WORN = "not wearing any rings"
REMOVED = "removed "


@dataclass
class RingEffects:
    """The combined effect of the rings the player wears."""

    stealthy: int = 0
    r_rings: int = 0
    e_rings: int = 0
    r_teleport: bool = False
    sustain_strength: bool = False
    add_strength: int = 0
    regeneration: int = 0
    ring_exp: int = 0
    r_see_invisible: bool = False
    maintain_armor: bool = False
    auto_search: int = 0


def ring_stats(rogue):
    """Return the effects of the rings on the hands of ``rogue``."""
    effects = RingEffects()
    for ring in (rogue.left_ring, rogue.right_ring):
        if ring is None:
            continue
        effects.r_rings += 1
        effects.e_rings += 1
        kind = ring.which_kind
        if kind == RingKind.STEALTH:
            effects.stealthy += 1
        elif kind == RingKind.R_TELEPORT:
            effects.r_teleport = True
        elif kind == RingKind.REGENERATION:
            effects.regeneration += 1
        elif kind == RingKind.SLOW_DIGEST:
            effects.e_rings -= 2
        elif kind == RingKind.ADD_STRENGTH:
            effects.add_strength += ring.klass
        elif kind == RingKind.SUSTAIN_STRENGTH:
            effects.sustain_strength = True
        elif kind == RingKind.DEXTERITY:
            effects.ring_exp += ring.klass
        elif kind == RingKind.R_SEE_INVISIBLE:
            effects.r_see_invisible = True
        elif kind == RingKind.MAINTAIN_ARMOR:
            effects.maintain_armor = True
        elif kind == RingKind.SEARCHING:
            effects.auto_search += 2
    return effects


def _refresh(level):
    effects = ring_stats(level.rogue)
    for f in fields(effects):
        setattr(level, f.name, getattr(effects, f.name))


def _describe(level, item):
    describe = getattr(level, "describe", None)
    if describe is not None:
        return describe(item)
    if level.catalog is None:
        level.catalog = Catalog()
    return level.catalog.name_of(item).rstrip()


def _take_turn(level):
    hook = getattr(level, "reg_move", None)
    if hook is not None:
        hook()


def do_put_on(rogue, ring, on_left):
    """Slip ``ring`` onto the left or right hand of ``rogue``."""
    if on_left:
        ring.in_use_flags |= ON_LEFT_HAND
        rogue.left_ring = ring
    else:
        ring.in_use_flags |= ON_RIGHT_HAND
        rogue.right_ring = ring


def un_put_on(level, ring):
    """Take ``ring`` off whichever hand wears it and recompute ring effects."""
    rogue = level.rogue
    if ring is not None:
        if ring.in_use_flags & ON_LEFT_HAND:
            ring.in_use_flags &= ~ON_LEFT_HAND
            rogue.left_ring = None
        elif ring.in_use_flags & ON_RIGHT_HAND:
            ring.in_use_flags &= ~ON_RIGHT_HAND
            rogue.right_ring = None
    _refresh(level)


def put_on_ring(level, ring, hand=None):
    """Put ``ring`` on the hand ``'l'`` or ``'r'``.

    With one hand already ringed the free hand is taken whatever ``hand``
    says. Any other ``hand`` cancels and None is returned.
    """
    rogue = level.rogue
    if level.r_rings == 2:
        raise ActionError(TWO_RINGS)
    if not ring.what_is & Category.RING:
        raise ActionError(NOT_A_RING)
    if ring.in_use_flags & ON_EITHER_HAND:
        raise ActionError(ALREADY_WORN)
    if level.r_rings == 1:
        hand = "r" if rogue.left_ring is not None else "l"
    if hand not in ("l", "r"):
        return None
    if (hand == "l" and rogue.left_ring is not None) or (
        hand == "r" and rogue.right_ring is not None
    ):
        raise ActionError(HAND_TAKEN)
    do_put_on(rogue, ring, hand == "l")
    _refresh(level)
    level.message(_describe(level, ring))
    _take_turn(level)
    return ring


def remove_ring(level, hand=None):
    """Take a ring off; ``hand`` chooses when both hands wear one.

    Return the ring taken off, or None when nothing was removed.
    """
    rogue = level.rogue
    if level.r_rings == 0:
        inv_rings(level)
        return None
    if rogue.left_ring is not None and rogue.right_ring is None:
        hand = "l"
    elif rogue.left_ring is None and rogue.right_ring is not None:
        hand = "r"
    elif hand not in ("l", "r"):
        return None
    ring = rogue.left_ring if hand == "l" else rogue.right_ring
    if ring is None:
        raise ActionError(NO_RING)
    if ring.is_cursed:
        raise ActionError(CURSE_MESSAGE)
    un_put_on(level, ring)
    level.message(REMOVED + _describe(level, ring))
    _take_turn(level)
    return ring


def inv_rings(level):
    """Report the rings being worn and return them, left hand first."""
    rogue = level.rogue
    if level.r_rings == 0:
        level.message(NO_RINGS_WORN)
        return []
    worn = [r for r in (rogue.left_ring, rogue.right_ring) if r is not None]
    for ring in worn:
        level.message(_describe(level, ring))
    return worn