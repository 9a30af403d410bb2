"""
Condition library for convention trees

A Condition is a named yes/no question about a bidding context:
- name: stable identifier, used when flattening trees into rules
- label: static text for rule listings
- test(ctx): the predicate
- describe(ctx): explanation using the live values ("8 HCP (8+ required)")
- category: 'auction' or 'hand'
- inference: optional {'type': ..., 'params': {...}} read by hand-inference tooling

test and describe must be pure functions of the context.
"""

from auction import auction_matches_exact
from bridge_model import Denom, MAJORS, MINORS, SUIT_NAMES, SUIT_ORDER, partner_seat, strain_letter

AUCTION = 'auction'
HAND = 'hand'

MAX_OR_BRANCHES = 4


class Condition:
    """A named, describable predicate over a BiddingContext"""

    def __init__(self, name, label, test, describe, category=None, inference=None,
                 evaluate_children=None):
        self.name = name
        self.label = label
        self.test = test
        self.describe = describe
        self.category = category
        self.inference = inference
        self.evaluate_children = evaluate_children

    def __repr__(self):
        return f"Condition({self.name!r})"


class ConditionResult:
    """Outcome of one condition against one context"""

    def __init__(self, condition, passed, description, branches=None):
        self.condition = condition
        self.passed = passed
        self.description = description
        self.branches = branches

    def __repr__(self):
        mark = 'pass' if self.passed else 'fail'
        return f"ConditionResult({self.condition.name!r}, {mark}, {self.description!r})"


class ConditionBranch:
    """One branch of an and/or compound with the results of its parts"""

    def __init__(self, results, passed):
        self.results = results
        self.passed = passed


def _plural(count, word):
    return f"{count} {word}{'' if count == 1 else 's'}"


def _pattern_label(pattern):
    return ' - '.join(pattern)


def _shape_text(shape):
    return '-'.join(str(n) for n in shape)


def _suit_index(suit):
    return SUIT_ORDER.index(suit)


# ---------------------------------------------------------------------------
# Auction-scoped conditions
# ---------------------------------------------------------------------------

def auction_matches(pattern):
    """Auction calls are exactly `pattern`, e.g. ['1NT', 'P']"""
    label = _pattern_label(pattern)

    def test(ctx):
        return auction_matches_exact(ctx.auction, pattern)

    def describe(ctx):
        if test(ctx):
            return f"After {label}"
        return f"Auction does not match {label}"

    return Condition('auction', f"After {label}", test, describe, category=AUCTION)


def auction_matches_any(patterns):
    """Auction matches one of several patterns"""
    labels = ' or '.join(_pattern_label(p) for p in patterns)

    def matched(ctx):
        for pattern in patterns:
            if auction_matches_exact(ctx.auction, pattern):
                return pattern
        return None

    def describe(ctx):
        pattern = matched(ctx)
        if pattern is not None:
            return f"After {_pattern_label(pattern)}"
        return f"Auction does not match {labels}"

    return Condition('auction', f"After {labels}", lambda ctx: matched(ctx) is not None, describe,
                     category=AUCTION)


def first_bid_entry(auction):
    for entry in auction.entries:
        if entry.call.is_bid:
            return entry
    return None


def is_opener():
    """This seat made the first contract bid (or nobody has bid yet)"""

    def test(ctx):
        entry = first_bid_entry(ctx.auction)
        return entry is None or entry.seat == ctx.seat

    def describe(ctx):
        entry = first_bid_entry(ctx.auction)
        if entry is None:
            return "No bids yet, opening position"
        if entry.seat == ctx.seat:
            return "This seat opened the bidding"
        return "This seat did not open the bidding"

    return Condition('is-opener', "Opening bidder", test, describe, category=AUCTION)


def is_responder():
    """Partner made the first contract bid"""

    def test(ctx):
        entry = first_bid_entry(ctx.auction)
        return entry is not None and entry.seat == partner_seat(ctx.seat)

    def describe(ctx):
        entry = first_bid_entry(ctx.auction)
        if entry is None:
            return "No bids yet, not in responding position"
        if entry.seat == partner_seat(ctx.seat):
            return "Partner opened, responding position"
        return "Partner did not open"

    return Condition('is-responder', "Responding to partner's opening", test, describe, category=AUCTION)


def partner_opened(strain=None):
    """Partner opened the bidding, optionally in a given strain"""
    if strain is None:
        name = 'partner opened'
        label = "Partner opened"
    else:
        name = f"partner opened {strain_letter(strain)}"
        label = f"Partner opened {strain_letter(strain)}"

    def test(ctx):
        entry = first_bid_entry(ctx.auction)
        if entry is None or entry.seat != partner_seat(ctx.seat):
            return False
        return strain is None or entry.call.strain == strain

    def describe(ctx):
        entry = first_bid_entry(ctx.auction)
        if entry is None:
            return "No opening bid found"
        if entry.seat != partner_seat(ctx.seat):
            return f"Partner did not open ({entry.seat.name} opened)"
        opened = strain_letter(entry.call.strain)
        if strain is not None and entry.call.strain != strain:
            return f"Partner opened {opened}, not {strain_letter(strain)}"
        return f"Partner opened {opened}"

    return Condition(name, label, test, describe, category=AUCTION)


def partner_opened_at(level, strain):
    """Partner's opening bid was exactly level + strain"""
    bid_text = f"{level}{strain_letter(strain)}"

    def test(ctx):
        entry = first_bid_entry(ctx.auction)
        return (entry is not None and entry.seat == partner_seat(ctx.seat)
                and entry.call.level == level and entry.call.strain == strain)

    def describe(ctx):
        entry = first_bid_entry(ctx.auction)
        if entry is None:
            return "No opening bid found"
        if entry.seat != partner_seat(ctx.seat):
            return "Partner did not open"
        if entry.call.level != level or entry.call.strain != strain:
            return f"Partner opened {entry.call}, not {bid_text}"
        return f"Partner opened {bid_text}"

    return Condition(f"partner-opened-{bid_text}", f"Partner opened {bid_text}", test, describe,
                     category=AUCTION)


def partner_bid_at(level, strain):
    """Partner bid level + strain at some point in the auction"""
    bid_text = f"{level}{strain_letter(strain)}"

    def test(ctx):
        partner = partner_seat(ctx.seat)
        return any(entry.seat == partner and entry.call.is_bid
                   and entry.call.level == level and entry.call.strain == strain
                   for entry in ctx.auction.entries)

    def describe(ctx):
        if test(ctx):
            return f"Partner bid {bid_text}"
        return f"Partner has not bid {bid_text}"

    return Condition(f"partner-bid-{bid_text}", f"Partner bid {bid_text}", test, describe, category=AUCTION)


def _opponent_entry(ctx, bids_only):
    partner = partner_seat(ctx.seat)
    for entry in ctx.auction.entries:
        if entry.seat in (ctx.seat, partner):
            continue
        if entry.call.is_bid or (not bids_only and not entry.call.is_pass):
            return entry
    return None


def opponent_bid():
    """An opponent has made a contract bid"""

    def describe(ctx):
        entry = _opponent_entry(ctx, bids_only=True)
        return f"Opponent ({entry.seat.name}) bid" if entry else "No opponent bids"

    return Condition('opponent-bid', "Opponent has bid",
                     lambda ctx: _opponent_entry(ctx, bids_only=True) is not None, describe,
                     category=AUCTION)


def opponent_acted():
    """An opponent has bid, doubled or redoubled"""

    def describe(ctx):
        entry = _opponent_entry(ctx, bids_only=False)
        return f"Opponent ({entry.seat.name}) acted" if entry else "No opponent action"

    return Condition('opponent-acted', "Opponent acted (bid/double/redouble)",
                     lambda ctx: _opponent_entry(ctx, bids_only=False) is not None, describe,
                     category=AUCTION)


def no_prior_bid():
    """Nobody has made a contract bid yet"""

    def test(ctx):
        return first_bid_entry(ctx.auction) is None

    def describe(ctx):
        return "No prior contract bids" if test(ctx) else "Prior contract bid exists"

    return Condition('no-prior-bid', "No prior contract bids", test, describe, category=AUCTION)


def _bids_by_seat(ctx):
    return sum(1 for entry in ctx.auction.entries if entry.call.is_bid and entry.seat == ctx.seat)


def bidding_round(n):
    """This seat has made exactly n contract bids so far (round 0 is the first bid)"""

    def describe(ctx):
        count = _bids_by_seat(ctx)
        if count == n:
            return f"Seat has made {_plural(n, 'prior bid')} (round {n})"
        return f"Seat has made {_plural(count, 'prior bid')} (need round {n})"

    return Condition('bidding-round', f"Bidding round {n}", lambda ctx: _bids_by_seat(ctx) == n, describe,
                     category=AUCTION)


def seat_has_bid():
    """This seat has made at least one contract bid"""

    def describe(ctx):
        return "This seat has previously bid" if _bids_by_seat(ctx) else "This seat has not bid yet"

    return Condition('seat-has-bid', "Has previously bid", lambda ctx: _bids_by_seat(ctx) > 0, describe,
                     category=AUCTION)


def advance_after_double():
    """DONT: partner doubled 1NT and RHO passed"""
    pattern = ['1NT', 'X', 'P']

    def test(ctx):
        return auction_matches_exact(ctx.auction, pattern)

    def describe(ctx):
        if test(ctx):
            return "After partner's double, relay 2C to discover suit"
        return "Not after partner's double"

    return Condition('advance-after-double', "After partner's double, relay 2C", test, describe,
                     category=AUCTION)


def partner_opening_strain(ctx):
    """Strain of partner's first contract bid, or None"""
    partner = partner_seat(ctx.seat)
    for entry in ctx.auction.entries:
        if entry.call.is_bid and entry.seat == partner:
            return entry.call.strain
    return None


def _partner_opened_group(name, label, strains, group_word):
    def test(ctx):
        return partner_opening_strain(ctx) in strains

    def describe(ctx):
        strain = partner_opening_strain(ctx)
        if strain in strains:
            return f"Partner opened {strain_letter(strain)}"
        return f"Partner did not open a {group_word}"

    return Condition(name, label, test, describe, category=AUCTION)


def partner_opened_major():
    return _partner_opened_group('partner-opened-major', "Partner opened a major suit", MAJORS, 'major')


def partner_opened_minor():
    return _partner_opened_group('partner-opened-minor', "Partner opened a minor suit", MINORS, 'minor')


# ---------------------------------------------------------------------------
# Hand-scoped conditions
# ---------------------------------------------------------------------------

def hcp_min(minimum):
    def test(ctx):
        return ctx.evaluation.hcp >= minimum

    def describe(ctx):
        hcp = ctx.evaluation.hcp
        if hcp >= minimum:
            return f"{hcp} HCP ({minimum}+ required)"
        return f"Only {hcp} HCP (need {minimum}+)"

    return Condition('hcp-min', f"{minimum}+ HCP", test, describe, category=HAND,
                     inference={'type': 'hcp-min', 'params': {'min': minimum}})


def hcp_max(maximum):
    def test(ctx):
        return ctx.evaluation.hcp <= maximum

    def describe(ctx):
        hcp = ctx.evaluation.hcp
        if hcp <= maximum:
            return f"{hcp} HCP ({maximum} max)"
        return f"{hcp} HCP ({maximum} max exceeded)"

    return Condition('hcp-max', f"{maximum} max HCP", test, describe, category=HAND,
                     inference={'type': 'hcp-max', 'params': {'max': maximum}})


def hcp_range(minimum, maximum):
    def test(ctx):
        return minimum <= ctx.evaluation.hcp <= maximum

    def describe(ctx):
        hcp = ctx.evaluation.hcp
        if test(ctx):
            return f"{hcp} HCP ({minimum}-{maximum} range)"
        return f"{hcp} HCP (need {minimum}-{maximum})"

    return Condition('hcp-range', f"{minimum}-{maximum} HCP", test, describe, category=HAND,
                     inference={'type': 'hcp-range', 'params': {'min': minimum, 'max': maximum}})


def suit_min(suit, minimum):
    """At least `minimum` cards in `suit` (an endplay Denom)"""
    index = _suit_index(suit)
    suit_name = SUIT_NAMES[suit]

    def test(ctx):
        return ctx.evaluation.shape[index] >= minimum

    def describe(ctx):
        length = ctx.evaluation.shape[index]
        if length >= minimum:
            return f"{length} {suit_name} ({minimum}+ required)"
        return f"Only {length} {suit_name} (need {minimum}+)"

    return Condition(f"{suit_name}-min", f"{minimum}+ {suit_name}", test, describe, category=HAND,
                     inference={'type': 'suit-min',
                                'params': {'suit_index': index, 'suit_name': suit_name, 'min': minimum}})


def suit_below(suit, threshold):
    """Strictly fewer than `threshold` cards in `suit`"""
    index = _suit_index(suit)
    suit_name = SUIT_NAMES[suit]

    def test(ctx):
        return ctx.evaluation.shape[index] < threshold

    def describe(ctx):
        length = ctx.evaluation.shape[index]
        if length < threshold:
            return f"{length} {suit_name} (fewer than {threshold})"
        return f"{length} {suit_name} (need fewer than {threshold})"

    return Condition(f"{suit_name}-below", f"Fewer than {threshold} {suit_name}", test, describe,
                     category=HAND,
                     inference={'type': 'suit-max',
                                'params': {'suit_index': index, 'suit_name': suit_name, 'max': threshold - 1}})


def any_suit_min(suits, minimum):
    """At least one of `suits` holds `minimum`+ cards"""
    names = '/'.join(SUIT_NAMES[suit] for suit in suits)

    def found(ctx):
        for suit in suits:
            if ctx.evaluation.shape[_suit_index(suit)] >= minimum:
                return suit
        return None

    def describe(ctx):
        suit = found(ctx)
        if suit is not None:
            return f"{ctx.evaluation.shape[_suit_index(suit)]} {SUIT_NAMES[suit]} ({minimum}+ in {names})"
        counts = ', '.join(f"{ctx.evaluation.shape[_suit_index(s)]} {SUIT_NAMES[s]}" for s in suits)
        return f"Only {counts} (need {minimum}+ in {names})"

    return Condition(f"any-{names}-min", f"{minimum}+ in {names}", lambda ctx: found(ctx) is not None,
                     describe, category=HAND)


def count_aces(hand):
    return hand.count_rank('A')


def count_kings(hand):
    return hand.count_rank('K')


def _exact_count(name, word, counter, count, inference_type):
    def test(ctx):
        return counter(ctx.hand) == count

    def describe(ctx):
        held = counter(ctx.hand)
        if held == count:
            return _plural(held, word)
        return f"{_plural(held, word)} (need exactly {count})"

    return Condition(name, f"Exactly {_plural(count, word)}", test, describe, category=HAND,
                     inference={'type': inference_type, 'params': {'count': count}})


def _any_count(name, word, counter, counts):
    counts_label = ' or '.join(str(c) for c in counts)

    def test(ctx):
        return counter(ctx.hand) in counts

    def describe(ctx):
        held = counter(ctx.hand)
        if held in counts:
            return f"{_plural(held, word)} ({counts_label})"
        return f"{_plural(held, word)} (need {counts_label})"

    return Condition(name, f"{counts_label} {word}s", test, describe, category=HAND)


def ace_count(count):
    return _exact_count('ace-count', 'ace', count_aces, count, 'ace-count')


def ace_count_any(counts):
    return _any_count('ace-count-any', 'ace', count_aces, counts)


def king_count(count):
    return _exact_count('king-count', 'king', count_kings, count, 'king-count')


def king_count_any(counts):
    return _any_count('king-count-any', 'king', count_kings, counts)


def no_void():
    def test(ctx):
        return 0 not in ctx.evaluation.shape

    def describe(ctx):
        shape = _shape_text(ctx.evaluation.shape)
        return f"No void suit ({shape})" if test(ctx) else f"Has void ({shape})"

    return Condition('no-void', "No void suit", test, describe, category=HAND)


def is_balanced():
    """No void, no singleton, at most one doubleton"""

    def test(ctx):
        shape = ctx.evaluation.shape
        return min(shape) >= 2 and shape.count(2) <= 1

    def describe(ctx):
        shape = ctx.evaluation.shape
        text = _shape_text(shape)
        if test(ctx):
            return f"Balanced hand ({text})"
        if 0 in shape:
            return f"Unbalanced, has void ({text})"
        if 1 in shape:
            return f"Unbalanced, has singleton ({text})"
        return f"Unbalanced, {shape.count(2)} doubletons ({text})"

    return Condition('balanced', "Balanced hand", test, describe, category=HAND,
                     inference={'type': 'balanced', 'params': {'balanced': True}})


def has_shortage():
    """Singleton or void somewhere"""

    def test(ctx):
        return min(ctx.evaluation.shape) <= 1

    def describe(ctx):
        shape = ctx.evaluation.shape
        shorts = [f"{n} {SUIT_NAMES[suit]}" for n, suit in zip(shape, SUIT_ORDER) if n <= 1]
        if shorts:
            return f"Has shortage: {', '.join(shorts)} ({_shape_text(shape)})"
        return f"No shortage ({_shape_text(shape)})"

    return Condition('has-shortage', "Has singleton or void", test, describe, category=HAND,
                     inference={'type': 'balanced', 'params': {'balanced': False}})


def no_five_card_major():
    def test(ctx):
        spades, hearts = ctx.evaluation.shape[0], ctx.evaluation.shape[1]
        return spades < 5 and hearts < 5

    def describe(ctx):
        spades, hearts = ctx.evaluation.shape[0], ctx.evaluation.shape[1]
        if spades < 5 and hearts < 5:
            return f"No 5-card major ({spades} spades, {hearts} hearts)"
        if spades >= 5:
            return f"Has 5+ spades ({spades})"
        return f"Has 5+ hearts ({hearts})"

    return Condition('no-5-card-major', "No 5-card major", test, describe, category=HAND)


def longer_major(suit):
    """5+ cards in `suit`, at least as long as the other major"""
    index = _suit_index(suit)
    other = Denom.hearts if suit == Denom.spades else Denom.spades
    other_index = _suit_index(other)
    suit_name = SUIT_NAMES[suit]

    def test(ctx):
        length = ctx.evaluation.shape[index]
        return length >= 5 and length >= ctx.evaluation.shape[other_index]

    def describe(ctx):
        length = ctx.evaluation.shape[index]
        other_length = ctx.evaluation.shape[other_index]
        if test(ctx):
            return f"{length} {suit_name} (longer/equal major vs {other_length} {SUIT_NAMES[other]})"
        if length < 5:
            return f"Only {length} {suit_name} (need 5+)"
        return f"{length} {suit_name} shorter than {other_length} {SUIT_NAMES[other]}"

    return Condition(f"longer-major-{suit_name}", f"5+ {suit_name} (longer/equal major)", test, describe,
                     category=HAND,
                     inference={'type': 'suit-min', 'params': {'suit_index': index, 'suit_name': suit_name, 'min': 5}})


def has_four_card_major():
    def test(ctx):
        return ctx.evaluation.shape[0] >= 4 or ctx.evaluation.shape[1] >= 4

    def describe(ctx):
        spades, hearts = ctx.evaluation.shape[0], ctx.evaluation.shape[1]
        if test(ctx):
            return f"Has 4-card major ({spades}S, {hearts}H)"
        return f"No 4-card major ({spades}S, {hearts}H)"

    return Condition('has-4-card-major', "Has 4+ card major", test, describe, category=HAND)


def major_support(count=4, or_more=False):
    """
    Support for partner's 1H/1S opening (auction 1M - P).
    Exactly `count` cards, or `count`+ when or_more is set.
    """
    suffix = f"{count}+ support" if or_more else f"exactly {count}"
    label = f"{count}+ cards in opened major" if or_more else f"Exactly {count} cards in opened major"

    def check(length):
        return length >= count if or_more else length == count

    def opened_major(ctx):
        if auction_matches_exact(ctx.auction, ['1H', 'P']):
            return Denom.hearts
        if auction_matches_exact(ctx.auction, ['1S', 'P']):
            return Denom.spades
        return None

    def test(ctx):
        suit = opened_major(ctx)
        return suit is not None and check(ctx.evaluation.shape[_suit_index(suit)])

    def describe(ctx):
        suit = opened_major(ctx)
        if suit is None:
            return "No major opening detected"
        length = ctx.evaluation.shape[_suit_index(suit)]
        if check(length):
            return f"{length} {SUIT_NAMES[suit]} ({suffix})"
        return f"{length} {SUIT_NAMES[suit]} (need {suffix})"

    return Condition('major-support', label, test, describe, category=HAND)


def has_single_long_suit():
    """One 6+ card suit other than spades, and no second 4+ card suit"""

    def test(ctx):
        spades, hearts, diamonds, clubs = ctx.evaluation.shape
        if spades >= 6:
            return False
        fours = sum(1 for n in ctx.evaluation.shape if n >= 4)
        return max(hearts, diamonds, clubs) >= 6 and fours <= 1

    def describe(ctx):
        shape = ctx.evaluation.shape
        longest = max(shape)
        suit_name = SUIT_NAMES[SUIT_ORDER[shape.index(longest)]]
        if test(ctx):
            return f"{longest} {suit_name}, single-suited"
        if shape[0] >= 6:
            return f"{shape[0]} spades (use 2S natural instead)"
        if sum(1 for n in shape if n >= 4) > 1:
            return "Two suits with 4+ cards (not single-suited)"
        return f"Longest suit only {longest} (need 6+ single-suited)"

    return Condition('single-long-suit', "Single long suit (6+, non-spades)", test, describe, category=HAND)


def is_two_suited(min_long, min_short):
    def test(ctx):
        ordered = sorted(ctx.evaluation.shape, reverse=True)
        return ordered[0] >= min_long and ordered[1] >= min_short

    def describe(ctx):
        shape = ctx.evaluation.shape
        ordered = sorted(zip(shape, SUIT_ORDER), key=lambda pair: -pair[0])
        if test(ctx):
            (long_len, long_suit), (short_len, short_suit) = ordered[0], ordered[1]
            return (f"{long_len} {SUIT_NAMES[long_suit]} + {short_len} {SUIT_NAMES[short_suit]} "
                    f"({min_long}-{min_short}+ two-suited)")
        return (f"Not {min_long}-{min_short}+ two-suited "
                f"(longest: {ordered[0][0]}, second: {ordered[1][0]})")

    return Condition('two-suited', f"Two-suited ({min_long}-{min_short}+)", test, describe, category=HAND,
                     inference={'type': 'two-suited', 'params': {'min_long': min_long, 'min_short': min_short}})


# ---------------------------------------------------------------------------
# Gerber position conditions (gate on the auction, decide on the hand)
# ---------------------------------------------------------------------------

NT_OPENINGS = ['1NT', '2NT']
GERBER_ACE_RESPONSES = ['4D', '4H', '4S', '4NT']
GERBER_KING_RESPONSES = ['5D', '5H', '5S', '5NT']


def gerber_ace_response_patterns():
    return [[opening, 'P', '4C', 'P', response, 'P']
            for opening in NT_OPENINGS for response in GERBER_ACE_RESPONSES]


def gerber_king_response_patterns():
    return [[opening, 'P', '4C', 'P', ace, 'P', '5C', 'P', king, 'P']
            for opening in NT_OPENINGS for ace in GERBER_ACE_RESPONSES for king in GERBER_KING_RESPONSES]


# Step responses: 4D/5D = 0 or 4, then 1, 2, 3
STEP_COUNTS = {Denom.diamonds: 0, Denom.hearts: 1, Denom.spades: 2, Denom.nt: 3}


def _infer_opener_count(ctx, index, level, counter):
    """Read the opener's step response at auction position `index`"""
    if len(ctx.auction.entries) <= index:
        return 0
    response = ctx.auction.entries[index].call
    if not response.is_bid or response.level != level or response.strain not in STEP_COUNTS:
        return 0
    if response.strain == Denom.diamonds:
        # 0 or 4: if we hold none, opener holds all four
        return 4 if counter(ctx.hand) == 0 else 0
    return STEP_COUNTS[response.strain]


def infer_opener_aces(ctx):
    return _infer_opener_count(ctx, 4, 4, count_aces)


def infer_opener_kings(ctx):
    return _infer_opener_count(ctx, 8, 5, count_kings)


def _matches_any(ctx, patterns):
    return any(auction_matches_exact(ctx.auction, p) for p in patterns)


def gerber_king_ask_condition():
    """After an ace response, the partnership holds 3+ aces"""
    patterns = gerber_ace_response_patterns()

    def total_aces(ctx):
        return count_aces(ctx.hand) + infer_opener_aces(ctx)

    def test(ctx):
        return _matches_any(ctx, patterns) and total_aces(ctx) >= 3

    def describe(ctx):
        if not _matches_any(ctx, patterns):
            return "Not in Gerber king-ask position"
        total = total_aces(ctx)
        if total >= 3:
            return f"{total} total aces (3+ needed), ask for kings"
        return f"Only {total} total aces (need 3+ to ask for kings)"

    return Condition('gerber-king-ask', "In Gerber king-ask position (3+ total aces after ace response)",
                     test, describe, category=HAND)


def gerber_signoff_condition():
    """Responder is placing the contract after an ace or king response"""
    ace_patterns = gerber_ace_response_patterns()
    king_patterns = gerber_king_response_patterns()

    def test(ctx):
        return _matches_any(ctx, ace_patterns) or _matches_any(ctx, king_patterns)

    def describe(ctx):
        if not test(ctx):
            return "Not in Gerber signoff position"
        responder_aces = count_aces(ctx.hand)
        opener_aces = infer_opener_aces(ctx)
        total = responder_aces + opener_aces
        if _matches_any(ctx, king_patterns):
            kings = count_kings(ctx.hand) + infer_opener_kings(ctx)
            return f"Total {total} aces, {kings} kings (after king response)"
        return f"Total {total} aces ({responder_aces} yours + {opener_aces} opener's)"

    return Condition('gerber-signoff', "In Gerber signoff position (after ace or king response)",
                     test, describe, category=HAND)


# ---------------------------------------------------------------------------
# Advancer conditions (DONT / Landy)
# ---------------------------------------------------------------------------

def advance_support_for(pattern, suit, minimum):
    """After `pattern`, hold `minimum`+ cards in partner's suit"""
    index = _suit_index(suit)
    suit_name = SUIT_NAMES[suit]
    label = _pattern_label(pattern)

    def test(ctx):
        return auction_matches_exact(ctx.auction, pattern) and ctx.evaluation.shape[index] >= minimum

    def describe(ctx):
        if not auction_matches_exact(ctx.auction, pattern):
            return f"Not after {label}"
        length = ctx.evaluation.shape[index]
        if length >= minimum:
            return f"{length} {suit_name} ({minimum}+ support)"
        return f"Only {length} {suit_name} (need {minimum}+ support)"

    return Condition(f"advance-support-{suit_name}", f"{minimum}+ {suit_name} support after {label}",
                     test, describe, category=HAND)


def advance_lack_support(pattern, suit, threshold):
    """After `pattern`, fewer than `threshold` cards in partner's suit"""
    index = _suit_index(suit)
    suit_name = SUIT_NAMES[suit]
    label = _pattern_label(pattern)

    def test(ctx):
        return auction_matches_exact(ctx.auction, pattern) and ctx.evaluation.shape[index] < threshold

    def describe(ctx):
        if not auction_matches_exact(ctx.auction, pattern):
            return f"Not after {label}"
        length = ctx.evaluation.shape[index]
        if length < threshold:
            return f"Only {length} {suit_name} (under {threshold}, ask for other suit)"
        return f"{length} {suit_name} ({threshold}+ support, no need to ask)"

    return Condition(f"advance-lack-{suit_name}", f"Fewer than {threshold} {suit_name} after {label}",
                     test, describe, category=HAND)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------

def not_(cond):
    """Invert a condition. Category is kept, inference is not."""
    return Condition(
        f"not-{cond.name}",
        f"Not: {cond.label}",
        lambda ctx: not cond.test(ctx),
        lambda ctx: f"Not: {cond.describe(ctx)}",
        category=cond.category,
    )


def _result(cond, ctx):
    return ConditionResult(cond, cond.test(ctx), cond.describe(ctx))


def and_(*conds):
    """All parts must pass"""

    def evaluate_children(ctx):
        results = [_result(c, ctx) for c in conds]
        return [ConditionBranch(results, all(r.passed for r in results))]

    return Condition(
        'and',
        '; '.join(c.label for c in conds),
        lambda ctx: all(c.test(ctx) for c in conds),
        lambda ctx: '; '.join(c.describe(ctx) for c in conds),
        evaluate_children=evaluate_children,
    )


def or_(*conds):
    """
    Any part may pass. evaluate_children always evaluates every branch so a
    display can show how close each one came.
    """
    if len(conds) > MAX_OR_BRANCHES:
        raise ValueError(f"or_() supports at most {MAX_OR_BRANCHES} branches, got {len(conds)}")

    def describe(ctx):
        for c in conds:
            if c.test(ctx):
                return c.describe(ctx)
        return ' or '.join(c.describe(ctx) for c in conds)

    def evaluate_children(ctx):
        branches = []
        for c in conds:
            if c.evaluate_children is not None:
                results = [r for branch in c.evaluate_children(ctx) for r in branch.results]
            else:
                results = [_result(c, ctx)]
            branches.append(ConditionBranch(results, c.test(ctx)))
        return branches

    return Condition(
        'or',
        ' or '.join(c.label for c in conds),
        lambda ctx: any(c.test(ctx) for c in conds),
        describe,
        evaluate_children=evaluate_children,
    )


def both_majors():
    """5-4 either way in the majors"""
    return or_(
        and_(suit_min(Denom.hearts, 5), suit_min(Denom.spades, 4)),
        and_(suit_min(Denom.spades, 5), suit_min(Denom.hearts, 4)),
    )


def diamonds_plus_major():
    return or_(
        and_(suit_min(Denom.diamonds, 5), any_suit_min(MAJORS, 4)),
        and_(suit_min(Denom.diamonds, 4), any_suit_min(MAJORS, 5)),
    )


def clubs_plus_higher():
    higher = [Denom.diamonds, Denom.hearts, Denom.spades]
    return or_(
        and_(suit_min(Denom.clubs, 5), any_suit_min(higher, 4)),
        and_(suit_min(Denom.clubs, 4), any_suit_min(higher, 5)),
    )
