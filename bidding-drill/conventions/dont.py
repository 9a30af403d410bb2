"""
DONT (Disturbing Opponents' No Trump)
Overcalls after an opponent's 1NT opening, and partner's advances.

Overcaller: 2H both majors, 2D diamonds + a major, 2C clubs + a higher suit,
2S natural (6+), double for a single long suit other than spades.
Advancer: pass with support for the shown suit, otherwise bid the next step;
after the double, relay 2C.
"""

from endplay.types import Denom, Player

from auction import build_auction
from bridge_model import Call, parse_call
from conditions import (advance_after_double, advance_lack_support, advance_support_for, auction_matches,
                        both_majors, clubs_plus_higher, diamonds_plus_major, has_single_long_suit, suit_min)
from rule_tree import ConventionCategory, ConventionConfig, NodeMetadata, bid, decision, fallback

# (overcall, suit advancer must support to pass, cards needed, next-step ask)
PASS_WITH_SUPPORT = NodeMetadata("Pass partner's DONT overcall with support for the shown suit")
NEXT_STEP = NodeMetadata("Bid next step to ask partner for their second or actual suit")

ADVANCES = [
    ('2H', Denom.hearts, 3, '2S'),
    ('2D', Denom.diamonds, 3, '2H'),
    ('2C', Denom.clubs, 3, '2D'),
]


overcall_branch = decision(
    'both-majors',
    both_majors(),
    bid('dont-2h', parse_call('2H'), NodeMetadata("2H showing both majors (hearts and spades)")),
    decision(
        'diamonds-and-major',
        diamonds_plus_major(),
        bid('dont-2d', parse_call('2D'), NodeMetadata("2D showing diamonds and a 4-card major")),
        decision(
            'clubs-and-higher',
            clubs_plus_higher(),
            bid('dont-2c', parse_call('2C'), NodeMetadata("2C showing clubs and a higher-ranking suit")),
            decision(
                'six-spades',
                suit_min(Denom.spades, 6),
                bid('dont-2s', parse_call('2S'), NodeMetadata("2S natural showing 6+ spades")),
                decision(
                    'single-suited',
                    has_single_long_suit(),
                    bid('dont-double', Call.double(),
                        NodeMetadata("Double showing a single-suited hand (not spades, partner bids 2C relay)")),
                    fallback('no-dont-shape'),
                ),
            ),
        ),
    ),
)


def _advance_chain(advances, otherwise):
    """Support -> pass, shortage -> next step, for each overcall in turn"""
    node = otherwise
    for overcall, suit, support, ask in reversed(advances):
        pattern = ['1NT', overcall, 'P']
        node = decision(
            f"support-after-{overcall.lower()}",
            advance_support_for(pattern, suit, support),
            bid('dont-advance-pass', Call.pass_(), PASS_WITH_SUPPORT),
            decision(
                f"shortage-after-{overcall.lower()}",
                advance_lack_support(pattern, suit, support),
                bid('dont-advance-next-step', parse_call(ask), NEXT_STEP),
                node,
            ),
        )
    return node


advance_branch = decision(
    'after-double',
    advance_after_double(),
    bid('dont-advance-next-step', parse_call('2C'), NEXT_STEP),
    _advance_chain(
        ADVANCES,
        decision(
            'tolerance-after-2s',
            advance_support_for(['1NT', '2S', 'P'], Denom.spades, 2),
            bid('dont-advance-pass', Call.pass_(), PASS_WITH_SUPPORT),
            fallback('not-dont-auction'),
        ),
    ),
)

dont_tree = decision(
    'after-1nt',
    auction_matches(['1NT']),
    overcall_branch,
    advance_branch,
)


def dont_default_auction(seat):
    """Overcaller practises after East's 1NT"""
    if seat == Player.south:
        return build_auction(Player.east, ['1NT'])
    return None


dont_config = ConventionConfig(
    id='dont',
    name='DONT',
    description="DONT (Disturbing Opponent's No Trump): overcalls against 1NT openings",
    category=ConventionCategory.DEFENSIVE,
    rule_tree=dont_tree,
    default_auction=dont_default_auction,
)
