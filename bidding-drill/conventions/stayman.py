"""
Stayman
2C (or 3C over 2NT) asks opener for a 4-card major.

Responder: 8+ HCP and a 4-card major asks.
Opener: 2H with four hearts, else 2S with four spades, else 2D.
Responder's rebid: raise a fit (game with 10+, invite otherwise),
Smolen 3H/3S after 2D with 5-4 majors and game values, else notrump.
"""

from endplay.types import Denom, Player

from auction import build_auction
from bridge_model import parse_call
from conditions import and_, any_suit_min, auction_matches, hcp_min, suit_min
from rule_tree import ConventionCategory, ConventionConfig, NodeMetadata, bid, decision, fallback


def _ask(suffix, ask_call):
    """Responder's ask over 1NT or 2NT"""
    return decision(
        f"hcp-8-plus{suffix}",
        hcp_min(8),
        decision(
            f"has-4-card-major{suffix}",
            any_suit_min([Denom.spades, Denom.hearts], 4),
            bid('stayman-ask', parse_call(ask_call),
                NodeMetadata(f"Bid {ask_call} (Stayman) to ask opener for a 4-card major")),
            fallback(f"no-major{suffix}"),
        ),
        fallback(f"too-weak{suffix}"),
    )


def _response(suffix, level):
    """Opener shows hearts first, then spades, else denies"""
    return decision(
        f"has-4-hearts{suffix}",
        suit_min(Denom.hearts, 4),
        bid('stayman-response-hearts', parse_call(f"{level}H"),
            NodeMetadata(f"Opener bids {level}H showing a 4-card heart suit")),
        decision(
            f"has-4-spades{suffix}",
            suit_min(Denom.spades, 4),
            bid('stayman-response-spades', parse_call(f"{level}S"),
                NodeMetadata(f"Opener bids {level}S showing a 4-card spade suit (no 4 hearts)")),
            bid('stayman-response-denial', parse_call(f"{level}D"),
                NodeMetadata(f"Opener bids {level}D denying a 4-card major")),
        ),
    )


def _notrump_rebid(name):
    return decision(
        name,
        hcp_min(10),
        bid('stayman-rebid-no-fit', parse_call('3NT'),
            NodeMetadata("Responder bids 3NT when no major fit is found")),
        bid('stayman-rebid-no-fit-invite', parse_call('2NT'),
            NodeMetadata("Responder invites with 2NT when no major fit is found")),
    )


def _rebid_after_major(suit, letter):
    """Responder's rebid once opener has shown `suit`"""
    return decision(
        f"fit-{letter}",
        suit_min(suit, 4),
        decision(
            f"game-hcp-fit-{letter}",
            hcp_min(10),
            bid('stayman-rebid-major-fit', parse_call(f"4{letter.upper()}"),
                NodeMetadata("Responder raises to game in the agreed major suit")),
            bid('stayman-rebid-major-fit-invite', parse_call(f"3{letter.upper()}"),
                NodeMetadata("Responder invites game in the agreed major suit")),
        ),
        _notrump_rebid(f"game-hcp-nofit-{letter}"),
    )


# After a 2D denial: Smolen shows the 4-card major by jumping in the 5-card one
rebid_after_denial = decision(
    'smolen-hearts',
    and_(hcp_min(10), suit_min(Denom.spades, 4), suit_min(Denom.hearts, 5)),
    bid('stayman-rebid-smolen-hearts', parse_call('3H'),
        NodeMetadata("Smolen: 3H shows four spades and five hearts with game values")),
    decision(
        'smolen-spades',
        and_(hcp_min(10), suit_min(Denom.spades, 5), suit_min(Denom.hearts, 4)),
        bid('stayman-rebid-smolen-spades', parse_call('3S'),
            NodeMetadata("Smolen: 3S shows four hearts and five spades with game values")),
        _notrump_rebid('game-hcp-denial'),
    ),
)

stayman_tree = decision(
    'after-1nt-p',
    auction_matches(['1NT', 'P']),
    _ask('', '2C'),
    decision(
        'after-2nt-p',
        auction_matches(['2NT', 'P']),
        _ask('-2nt', '3C'),
        decision(
            'after-1nt-p-2c-p',
            auction_matches(['1NT', 'P', '2C', 'P']),
            _response('', 2),
            decision(
                'after-2nt-p-3c-p',
                auction_matches(['2NT', 'P', '3C', 'P']),
                _response('-2nt', 3),
                decision(
                    'after-2h-response',
                    auction_matches(['1NT', 'P', '2C', 'P', '2H', 'P']),
                    _rebid_after_major(Denom.hearts, 'h'),
                    decision(
                        'after-2s-response',
                        auction_matches(['1NT', 'P', '2C', 'P', '2S', 'P']),
                        _rebid_after_major(Denom.spades, 's'),
                        decision(
                            'after-2d-denial',
                            auction_matches(['1NT', 'P', '2C', 'P', '2D', 'P']),
                            rebid_after_denial,
                            fallback('not-stayman-auction'),
                        ),
                    ),
                ),
            ),
        ),
    ),
)


def stayman_default_auction(seat):
    """Responder practises after North's 1NT - P"""
    if seat in (Player.south, Player.east):
        return build_auction(Player.north, ['1NT', 'P'])
    return None


stayman_config = ConventionConfig(
    id='stayman',
    name='Stayman',
    description='Stayman convention: 2C response to 1NT asking for 4-card majors',
    category=ConventionCategory.ASKING,
    rule_tree=stayman_tree,
    default_auction=stayman_default_auction,
)
