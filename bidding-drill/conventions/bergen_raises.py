"""
Bergen Raises
Coded raises of partner's 1H/1S opening with 4+ card support:
4M game (13+ HCP), 3D limit (10-12), 3C constructive (7-9), 3M preemptive (0-6).
"""

from endplay.types import Denom, Player

from auction import auction_matches_exact, build_auction
from bridge_model import Call, parse_call
from conditions import auction_matches_any, hcp_min, hcp_range, major_support
from rule_tree import ConventionCategory, ConventionConfig, NodeMetadata, bid, decision, fallback


def opened_major(ctx):
    if auction_matches_exact(ctx.auction, ['1H', 'P']):
        return Denom.hearts
    return Denom.spades


def raise_to(level):
    """Call function raising opener's major to `level`"""
    def call(ctx):
        return Call.bid(level, opened_major(ctx))
    return call


bergen_tree = decision(
    'after-1m-p',
    auction_matches_any([['1H', 'P'], ['1S', 'P']]),
    decision(
        'four-card-support',
        major_support(4, or_more=True),
        decision(
            'game-values',
            hcp_min(13),
            bid('bergen-game-raise', raise_to(4),
                NodeMetadata("Bid 4 of opener's major with 13+ HCP and 4+ card support")),
            decision(
                'limit-values',
                hcp_range(10, 12),
                bid('bergen-limit-raise', parse_call('3D'),
                    NodeMetadata("Bid 3D showing a limit raise (10-12 HCP) with 4+ card support")),
                decision(
                    'constructive-values',
                    hcp_range(7, 9),
                    bid('bergen-constructive-raise', parse_call('3C'),
                        NodeMetadata("Bid 3C showing a constructive raise (7-9 HCP) with 4+ card support")),
                    bid('bergen-preemptive-raise', raise_to(3),
                        NodeMetadata("Bid 3 of opener's major as a preemptive raise "
                                     "(0-6 HCP) with 4+ card support")),
                ),
            ),
        ),
        fallback('no-support'),
    ),
    fallback('not-bergen-auction'),
)


def bergen_default_auction(seat):
    """Responder practises after North's 1H - P"""
    if seat == Player.south:
        return build_auction(Player.north, ['1H', 'P'])
    return None


bergen_config = ConventionConfig(
    id='bergen-raises',
    name='Bergen Raises',
    description='Bergen Raises: coded responses to 1M opening showing support and strength',
    category=ConventionCategory.CONSTRUCTIVE,
    rule_tree=bergen_tree,
    default_auction=bergen_default_auction,
)
