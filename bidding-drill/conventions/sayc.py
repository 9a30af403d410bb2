"""
Standard American Yellow Card
The natural system the drill's other seats bid with.

Unlike the conventions it is a flat, ordered list of rules: the first rule
whose conditions pass and whose call is legal wins, and sayc-pass catches
everything else.
"""

from endplay.types import Denom

from auction import compare_bids, last_bid_entry
from bridge_model import MAJORS, SUIT_NAMES, SUIT_ORDER, Call, partner_seat, parse_call
from condition_evaluator import conditioned_rule
from conditions import (HAND, Condition, has_four_card_major, hcp_min, hcp_range, is_balanced, is_opener,
                        is_responder, longer_major, no_five_card_major, no_prior_bid, not_, opponent_bid,
                        partner_opened, partner_opened_at, partner_opened_major, partner_opened_minor,
                        partner_opening_strain, seat_has_bid, suit_below, suit_min)
from rule_tree import ConventionCategory, ConventionConfig


def _length(ctx, suit):
    return ctx.evaluation.shape[SUIT_ORDER.index(suit)]


def _fixed(text):
    call = parse_call(text)
    return lambda ctx: call


def seat_first_bid_strain(ctx):
    """Strain of this seat's first contract bid, or None"""
    for entry in ctx.auction.entries:
        if entry.call.is_bid and entry.seat == ctx.seat:
            return entry.call.strain
    return None


def partner_last_bid_strain(ctx):
    partner = partner_seat(ctx.seat)
    for entry in reversed(ctx.auction.entries):
        if entry.call.is_bid and entry.seat == partner:
            return entry.call.strain
    return None


def biddable_suit(ctx, level):
    """Longest 5+ card suit that can be bid at `level` over the last bid"""
    last = last_bid_entry(ctx.auction)
    if last is None:
        return None
    best, best_length = None, 0
    for suit in SUIT_ORDER:
        length = _length(ctx, suit)
        if length >= 5 and length > best_length and compare_bids(Call.bid(level, suit), last.call) > 0:
            best, best_length = suit, length
    return best


# ---------------------------------------------------------------------------
# Conditions that read the auction to find the suit, then judge the hand
# ---------------------------------------------------------------------------

def opened_major_support(name, count, wording):
    """`count`+ cards in the major partner opened"""

    def length(ctx):
        strain = partner_opening_strain(ctx)
        return _length(ctx, strain) if strain in MAJORS else None

    def test(ctx):
        held = length(ctx)
        return held is not None and held >= count

    def describe(ctx):
        held = length(ctx)
        if held is None:
            return "Partner did not open a major"
        suit_name = SUIT_NAMES[partner_opening_strain(ctx)]
        if held >= count:
            return f"{held} {suit_name} ({wording})"
        return f"Only {held} {suit_name}"

    return Condition(name, f"{count}+ in partner's opened major", test, describe, category=HAND,
                     inference={'type': 'suit-min', 'params': {'suit_index': -1, 'suit_name': 'major', 'min': count}})


def partner_raised_our_major():
    def raised(ctx):
        ours = seat_first_bid_strain(ctx)
        return ours in MAJORS and partner_last_bid_strain(ctx) == ours

    def describe(ctx):
        if raised(ctx):
            return f"Partner raised our {SUIT_NAMES[seat_first_bid_strain(ctx)]}"
        return "Partner did not raise our major"

    return Condition('partner-raised-our-major', "Partner raised our major suit", raised, describe,
                     category=HAND)


def support_for_partner_major():
    """4+ cards in the major partner responded with"""

    def responded(ctx):
        strain = partner_last_bid_strain(ctx)
        return strain if strain in MAJORS else None

    def test(ctx):
        strain = responded(ctx)
        return strain is not None and _length(ctx, strain) >= 4

    def describe(ctx):
        strain = responded(ctx)
        if strain is None:
            return "Partner did not respond with a major"
        held = _length(ctx, strain)
        if held >= 4:
            return f"{held} {SUIT_NAMES[strain]} (4+ support for partner's response)"
        return f"Only {held} {SUIT_NAMES[strain]}"

    return Condition('partner-responded-major-with-support', "4+ support for partner's major response",
                     test, describe, category=HAND)


def six_in_opened_suit():
    def held(ctx):
        ours = seat_first_bid_strain(ctx)
        return _length(ctx, ours) if ours in SUIT_ORDER else None

    def describe(ctx):
        ours = seat_first_bid_strain(ctx)
        if ours is None:
            return "No previous bid"
        if ours not in SUIT_ORDER:
            return "Not a suit bid"
        length = held(ctx)
        if length >= 6:
            return f"{length} {SUIT_NAMES[ours]} (rebiddable)"
        return f"Only {length} {SUIT_NAMES[ours]} (need 6+)"

    return Condition('6-plus-in-opened-suit', "6+ cards in opened suit",
                     lambda ctx: (held(ctx) or 0) >= 6, describe, category=HAND)


def five_card_suit_at(level):
    def describe(ctx):
        suit = biddable_suit(ctx, level)
        if suit is not None:
            return f"{_length(ctx, suit)} {SUIT_NAMES[suit]} biddable at the {level}-level"
        return f"No 5+ card suit biddable at the {level}-level"

    return Condition(f"good-5-card-suit-at-{level}", f"5+ card suit biddable at {level}-level",
                     lambda ctx: biddable_suit(ctx, level) is not None, describe, category=HAND)


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------

def raise_partner_opening(level):
    return lambda ctx: Call.bid(level, partner_opening_strain(ctx))


def rebid_own_suit(level):
    return lambda ctx: Call.bid(level, seat_first_bid_strain(ctx))


def raise_partner_response(ctx):
    return Call.bid(2, partner_last_bid_strain(ctx))


def overcall(level):
    """Longest biddable suit at `level`; pass when none is left"""
    def call(ctx):
        suit = biddable_suit(ctx, level)
        return Call.bid(level, suit) if suit is not None else Call.pass_()
    return call


def _opening():
    return [no_prior_bid(), is_opener()]


def _rebid():
    return [is_opener(), seat_has_bid()]


def _over_suit_opening():
    return [is_responder(), not_(partner_opened(Denom.nt))]


sayc_rules = [
    # Openings, strongest first
    conditioned_rule('sayc-open-2c', _opening(), [hcp_min(22)], _fixed('2C')),
    conditioned_rule('sayc-open-2nt', _opening(), [hcp_range(20, 21), is_balanced()], _fixed('2NT')),
    conditioned_rule('sayc-open-1nt', _opening(), [hcp_range(15, 17), is_balanced(), no_five_card_major()],
                     _fixed('1NT')),
    conditioned_rule('sayc-open-1s', _opening(), [hcp_min(12), longer_major(Denom.spades)], _fixed('1S')),
    conditioned_rule('sayc-open-1h', _opening(), [hcp_min(12), suit_min(Denom.hearts, 5)], _fixed('1H')),
    conditioned_rule('sayc-open-1d', _opening(),
                     [hcp_min(12), suit_below(Denom.spades, 5), suit_below(Denom.hearts, 5),
                      suit_min(Denom.diamonds, 4)],
                     _fixed('1D')),
    conditioned_rule('sayc-open-1c', _opening(),
                     [hcp_min(12), suit_below(Denom.spades, 5), suit_below(Denom.hearts, 5),
                      suit_min(Denom.clubs, 3)],
                     _fixed('1C')),
    conditioned_rule('sayc-open-weak-2h', _opening(), [hcp_range(5, 11), suit_min(Denom.hearts, 6)], _fixed('2H')),
    conditioned_rule('sayc-open-weak-2s', _opening(), [hcp_range(5, 11), suit_min(Denom.spades, 6)], _fixed('2S')),
    conditioned_rule('sayc-open-weak-2d', _opening(), [hcp_range(5, 11), suit_min(Denom.diamonds, 6)],
                     _fixed('2D')),

    # Responses to 1NT
    conditioned_rule('sayc-respond-1nt-stayman', [is_responder(), partner_opened_at(1, Denom.nt)],
                     [hcp_min(8), has_four_card_major()], _fixed('2C')),
    conditioned_rule('sayc-respond-1nt-pass', [is_responder(), partner_opened_at(1, Denom.nt)],
                     [hcp_range(0, 7)], _fixed('P')),

    # Responses to a suit opening
    conditioned_rule('sayc-respond-raise-major', [is_responder()],
                     [hcp_range(6, 10), opened_major_support('major-support-3', 3, "3+ support")],
                     raise_partner_opening(2)),
    conditioned_rule('sayc-respond-jump-raise-major', [is_responder()],
                     [hcp_range(10, 12), opened_major_support('major-support-4', 4, "4+ support")],
                     raise_partner_opening(3)),
    conditioned_rule('sayc-respond-game-raise-major', [is_responder()],
                     [hcp_min(13), opened_major_support('major-support-4-for-game', 4, "4+ for game")],
                     raise_partner_opening(4)),
    conditioned_rule('sayc-respond-1h-over-minor', [is_responder(), partner_opened_minor()],
                     [hcp_min(6), suit_min(Denom.hearts, 4)], _fixed('1H')),
    conditioned_rule('sayc-respond-1s-over-minor', [is_responder(), partner_opened_minor()],
                     [hcp_min(6), suit_min(Denom.spades, 4)], _fixed('1S')),
    conditioned_rule('sayc-respond-1s-over-1h', [is_responder(), partner_opened(Denom.hearts)],
                     [hcp_min(6), suit_min(Denom.spades, 4)], _fixed('1S')),
    conditioned_rule('sayc-respond-2c-over-major', [is_responder(), partner_opened_major()],
                     [hcp_min(12), suit_min(Denom.clubs, 4)], _fixed('2C')),
    conditioned_rule('sayc-respond-2d-over-major', [is_responder(), partner_opened_major()],
                     [hcp_min(12), suit_min(Denom.diamonds, 4)], _fixed('2D')),
    conditioned_rule('sayc-respond-1nt', _over_suit_opening(), [hcp_range(6, 10)], _fixed('1NT')),
    conditioned_rule('sayc-respond-2nt', _over_suit_opening(), [hcp_range(13, 15), is_balanced()], _fixed('2NT')),
    conditioned_rule('sayc-respond-3nt', _over_suit_opening(), [hcp_range(16, 18), is_balanced()], _fixed('3NT')),

    # Competitive
    conditioned_rule('sayc-1nt-overcall', [opponent_bid(), not_(is_opener()), not_(is_responder())],
                     [hcp_range(15, 18), is_balanced()], _fixed('1NT')),
    conditioned_rule('sayc-overcall-1level', [opponent_bid()], [hcp_range(8, 16), five_card_suit_at(1)],
                     overcall(1)),
    conditioned_rule('sayc-overcall-2level', [opponent_bid()], [hcp_range(10, 16), five_card_suit_at(2)],
                     overcall(2)),

    # Opener's rebids
    conditioned_rule('sayc-rebid-4m-after-raise', _rebid(), [hcp_min(19), partner_raised_our_major()],
                     rebid_own_suit(4)),
    conditioned_rule('sayc-rebid-3m-invite', _rebid(), [hcp_range(17, 18), partner_raised_our_major()],
                     rebid_own_suit(3)),
    conditioned_rule('sayc-rebid-pass-after-raise', _rebid(), [hcp_range(12, 16), partner_raised_our_major()],
                     _fixed('P')),
    conditioned_rule('sayc-rebid-raise-partner-major', _rebid(), [hcp_range(12, 16), support_for_partner_major()],
                     raise_partner_response),
    conditioned_rule('sayc-rebid-own-suit', _rebid(), [hcp_range(12, 17), six_in_opened_suit()], rebid_own_suit(2)),
    conditioned_rule('sayc-rebid-1nt', _rebid(), [hcp_range(12, 14), is_balanced()], _fixed('1NT')),
    conditioned_rule('sayc-rebid-2nt', _rebid(), [hcp_range(18, 19), is_balanced()], _fixed('2NT')),

    conditioned_rule('sayc-pass', [], [], _fixed('P')),
]


sayc_config = ConventionConfig(
    id='sayc',
    name='SAYC',
    description='Standard American Yellow Card: natural openings, responses, overcalls and rebids',
    category=ConventionCategory.CONSTRUCTIVE,
    bidding_rules=sayc_rules,
)
