"""
Landy
2C over an opponent's 1NT shows both majors (5-4 or better).

Advancer: 2NT asks with 12+, invites in a 4-card major with 10-12,
passes with 5+ clubs, otherwise picks a major or bids 2D to let partner choose.
After 2NT the overcaller shows shape and strength: 3NT/3S with 5-5, 3D/3C with 5-4.
"""

from endplay.types import Denom, Player

from auction import build_auction
from bridge_model import Call, parse_call
from conditions import and_, auction_matches, both_majors, hcp_min, hcp_range, suit_min
from rule_tree import ConventionCategory, ConventionConfig, NodeMetadata, bid, decision, fallback

overcaller_after_2nt = decision(
    '5-5-majors',
    and_(suit_min(Denom.spades, 5), suit_min(Denom.hearts, 5)),
    decision(
        'max-12+',
        hcp_min(12),
        bid('landy-rebid-3nt', parse_call('3NT'), NodeMetadata("3NT shows 5-5 in the majors with a maximum")),
        bid('landy-rebid-3s', parse_call('3S'), NodeMetadata("3S shows 5-5 in the majors with a minimum")),
    ),
    decision(
        'max-12+-54',
        hcp_min(12),
        bid('landy-rebid-3d', parse_call('3D'), NodeMetadata("3D shows 5-4 in the majors with a maximum")),
        bid('landy-rebid-3c', parse_call('3C'), NodeMetadata("3C shows 5-4 in the majors with a minimum")),
    ),
)

advancer_branch = decision(
    'has-12-plus',
    hcp_min(12),
    bid('landy-response-2nt', parse_call('2NT'), NodeMetadata("2NT asks partner to describe the Landy hand")),
    decision(
        'invite-3h',
        and_(hcp_range(10, 12), suit_min(Denom.hearts, 4)),
        bid('landy-response-3h', parse_call('3H'), NodeMetadata("3H invites game with four hearts")),
        decision(
            'invite-3s',
            and_(hcp_range(10, 12), suit_min(Denom.spades, 4)),
            bid('landy-response-3s', parse_call('3S'), NodeMetadata("3S invites game with four spades")),
            decision(
                'has-5-clubs',
                suit_min(Denom.clubs, 5),
                bid('landy-response-pass', Call.pass_(), NodeMetadata("Pass 2C with long clubs")),
                decision(
                    'has-4-hearts',
                    suit_min(Denom.hearts, 4),
                    bid('landy-response-2h', parse_call('2H'), NodeMetadata("2H chooses hearts")),
                    decision(
                        'has-4-spades',
                        suit_min(Denom.spades, 4),
                        bid('landy-response-2s', parse_call('2S'), NodeMetadata("2S chooses spades")),
                        bid('landy-response-2d', parse_call('2D'),
                            NodeMetadata("2D asks partner to bid the longer major")),
                    ),
                ),
            ),
        ),
    ),
)

landy_tree = decision(
    'after-1nt',
    auction_matches(['1NT']),
    decision(
        'both-majors',
        both_majors(),
        bid('landy-2c', parse_call('2C'), NodeMetadata("2C showing both majors (5-4 or better)")),
        fallback('not-suited'),
    ),
    decision(
        'after-1nt-2c-p-2nt-p',
        auction_matches(['1NT', '2C', 'P', '2NT', 'P']),
        overcaller_after_2nt,
        decision(
            'after-1nt-2c-p',
            auction_matches(['1NT', '2C', 'P']),
            advancer_branch,
            fallback('not-landy-auction'),
        ),
    ),
)


def landy_default_auction(seat):
    """Overcaller practises after East's 1NT"""
    if seat == Player.south:
        return build_auction(Player.east, ['1NT'])
    return None


landy_config = ConventionConfig(
    id='landy',
    name='Landy',
    description="Landy: 2C overcall over opponent's 1NT showing both major suits (5-4+)",
    category=ConventionCategory.DEFENSIVE,
    rule_tree=landy_tree,
    default_auction=landy_default_auction,
)
