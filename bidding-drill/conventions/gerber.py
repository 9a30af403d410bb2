"""
Gerber
4C over a 1NT/2NT opening asks for aces; 5C then asks for kings.

Step responses: 4D = 0 or 4, 4H = 1, 4S = 2, 4NT = 3 (kings one level higher).
Responder places the contract in notrump from the combined count.
"""

from endplay.types import Denom, Player

from auction import auction_matches_exact, build_auction
from bridge_model import Call, parse_call
from conditions import (GERBER_ACE_RESPONSES, NT_OPENINGS, ace_count, and_, auction_matches_any, count_aces,
                        count_kings, gerber_king_ask_condition, gerber_king_response_patterns,
                        gerber_signoff_condition, hcp_min, infer_opener_aces, infer_opener_kings, king_count,
                        no_void)
from rule_tree import ConventionCategory, ConventionConfig, NodeMetadata, bid, decision, fallback

ACE_ASK_PATTERNS = [[opening, 'P', '4C', 'P'] for opening in NT_OPENINGS]
KING_ASK_PATTERNS = [[opening, 'P', '4C', 'P', ace, 'P', '5C', 'P']
                     for opening in NT_OPENINGS for ace in GERBER_ACE_RESPONSES]
KING_RESPONSE_PATTERNS = gerber_king_response_patterns()


def _nt(level):
    return Call.bid(level, Denom.nt)


def gerber_signoff_call(ctx):
    """
    After kings: 7NT with all aces and 3+ kings, 6NT with 3+ aces, else 5NT.
    After aces: 7NT with all four, 6NT with three, 5NT over a 4S reply, else 4NT.
    """
    total_aces = count_aces(ctx.hand) + infer_opener_aces(ctx)

    if any(auction_matches_exact(ctx.auction, p) for p in KING_RESPONSE_PATTERNS):
        total_kings = count_kings(ctx.hand) + infer_opener_kings(ctx)
        if total_aces >= 4 and total_kings >= 3:
            return _nt(7)
        if total_aces >= 3:
            return _nt(6)
        return _nt(5)

    if total_aces == 4:
        return _nt(7)
    if total_aces >= 3:
        return _nt(6)
    if ctx.auction.entries[4].call == parse_call('4S'):
        return _nt(5)
    return _nt(4)


def _step_responses(node_prefix, rule_prefix, counter, level, word):
    """3? 2? 1? else 0-or-4, answered in steps above the ask"""
    return decision(
        f"{node_prefix}-3",
        counter(3),
        bid(f"{rule_prefix}-three", _nt(level), NodeMetadata(f"{level}NT shows three {word}")),
        decision(
            f"{node_prefix}-2",
            counter(2),
            bid(f"{rule_prefix}-two", parse_call(f"{level}S"), NodeMetadata(f"{level}S shows two {word}")),
            decision(
                f"{node_prefix}-1",
                counter(1),
                bid(f"{rule_prefix}-one", parse_call(f"{level}H"), NodeMetadata(f"{level}H shows one {word[:-1]}")),
                bid(f"{rule_prefix}-zero-four", parse_call(f"{level}D"),
                    NodeMetadata(f"{level}D shows zero or four {word}")),
            ),
        ),
    )


gerber_tree = decision(
    'after-nt-opening',
    auction_matches_any([['1NT', 'P'], ['2NT', 'P']]),
    decision(
        'hcp-and-no-void',
        and_(hcp_min(16), no_void()),
        bid('gerber-ask', parse_call('4C'),
            NodeMetadata("Bid 4C (Gerber) to ask partner for aces with slam values")),
        fallback('not-slam-strength'),
    ),
    decision(
        'after-ace-ask',
        auction_matches_any(ACE_ASK_PATTERNS),
        _step_responses('ace', 'gerber-response', ace_count, 4, 'aces'),
        decision(
            'king-ask-check',
            gerber_king_ask_condition(),
            bid('gerber-king-ask', parse_call('5C'),
                NodeMetadata("Bid 5C to ask for kings when the partnership holds three or more aces")),
            decision(
                'after-king-ask',
                auction_matches_any(KING_ASK_PATTERNS),
                _step_responses('king', 'gerber-king-response', king_count, 5, 'kings'),
                decision(
                    'signoff-check',
                    gerber_signoff_condition(),
                    bid('gerber-signoff', gerber_signoff_call,
                        NodeMetadata("Place the contract in notrump from the combined ace and king count")),
                    fallback('not-gerber-auction'),
                ),
            ),
        ),
    ),
)


def gerber_default_auction(seat):
    """Responder practises after North's 1NT - P"""
    if seat in (Player.south, Player.east):
        return build_auction(Player.north, ['1NT', 'P'])
    return None


gerber_config = ConventionConfig(
    id='gerber',
    name='Gerber',
    description='Gerber convention: 4C response to NT opening asking for aces, '
                'then 5C for kings (slam exploration)',
    category=ConventionCategory.ASKING,
    rule_tree=gerber_tree,
    default_auction=gerber_default_auction,
)
