"""
Auction state and legality checks.
An Auction is treated as immutable: add_call returns a new one.
"""

from bridge_model import Call, Denom, STRAIN_RANK, next_seat, parse_call, same_side

ALL_STRAINS = [Denom.clubs, Denom.diamonds, Denom.hearts, Denom.spades, Denom.nt]


class IllegalCallError(ValueError):
    """Raised when a call cannot be added to an auction"""


class AuctionEntry:
    """One call and the seat that made it"""

    def __init__(self, seat, call):
        self.seat = seat
        self.call = call

    def __eq__(self, other):
        if not isinstance(other, AuctionEntry):
            return NotImplemented
        return self.seat == other.seat and self.call == other.call

    def __hash__(self):
        return hash((self.seat, self.call))

    def __repr__(self):
        return f"AuctionEntry({self.seat.name}, {self.call})"


class Auction:
    """Ordered calls so far plus a completion flag"""

    def __init__(self, entries=(), is_complete=False):
        self.entries = tuple(entries)
        self.is_complete = is_complete

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def calls(self):
        return [entry.call for entry in self.entries]

    def __repr__(self):
        calls = ' '.join(str(call) for call in self.calls())
        return f"Auction([{calls}], complete={self.is_complete})"


def compare_bids(a, b):
    """Negative if a < b, 0 if equal, positive if a > b (level first, then strain)"""
    if a.level != b.level:
        return a.level - b.level
    return STRAIN_RANK[a.strain] - STRAIN_RANK[b.strain]


def last_non_pass_entry(auction):
    for entry in reversed(auction.entries):
        if not entry.call.is_pass:
            return entry
    return None


def last_bid_entry(auction):
    """Last contract bid in the auction, or None"""
    for entry in reversed(auction.entries):
        if entry.call.is_bid:
            return entry
    return None


def is_legal_call(auction, call, seat):
    """
    Check whether `seat` may make `call` as the next call.
    - nothing is legal once the auction is over
    - pass is always legal
    - a bid must outrank the last bid
    - double needs an opponent's bid as the last non-pass call
    - redouble needs an opponent's double as the last non-pass call
    """
    if auction.is_complete:
        return False

    if call.kind == Call.PASS:
        return True

    if call.kind == Call.BID:
        last = last_bid_entry(auction)
        if last is None:
            return True
        return compare_bids(call, last.call) > 0

    last_non_pass = last_non_pass_entry(auction)
    if last_non_pass is None:
        return False

    if call.kind == Call.DOUBLE:
        if not last_non_pass.call.is_bid:
            return False
        return not same_side(last_non_pass.seat, seat)

    if call.kind == Call.REDOUBLE:
        if last_non_pass.call.kind != Call.DOUBLE:
            return False
        return not same_side(last_non_pass.seat, seat)

    return False


def is_auction_complete(auction):
    """Four opening passes, or three passes after any other call"""
    entries = auction.entries
    if len(entries) < 4:
        return False

    if not all(entry.call.is_pass for entry in entries[-3:]):
        return False

    if len(entries) == 4 and entries[0].call.is_pass:
        return True

    return any(not entry.call.is_pass for entry in entries[:-3])


def add_call(auction, entry):
    """Return a new auction with `entry` appended"""
    if auction.is_complete:
        raise IllegalCallError("Cannot add call to completed auction")

    if not is_legal_call(auction, entry.call, entry.seat):
        raise IllegalCallError(f"Illegal call: {entry.call} by {entry.seat.name}")

    extended = Auction(auction.entries + (entry,))
    return Auction(extended.entries, is_auction_complete(extended))


def build_auction(dealer, calls):
    """
    Build an auction from pattern notation, rotating seats clockwise from the dealer.
    build_auction(Player.north, ['1NT', 'P', '2C', 'P'])
    """
    if isinstance(calls, str):
        calls = calls.split()
    auction = Auction()
    seat = dealer
    for text in calls:
        call = text if isinstance(text, Call) else parse_call(text)
        auction = add_call(auction, AuctionEntry(seat, call))
        seat = next_seat(seat)
    return auction


def next_to_call(auction, dealer):
    """Seat whose turn it is"""
    return next_seat(dealer, len(auction.entries))


def auction_matches_exact(auction, pattern):
    """True when the auction's calls are exactly the pattern (seats ignored)"""
    if len(auction.entries) != len(pattern):
        return False
    return all(entry.call == parse_call(text) for entry, text in zip(auction.entries, pattern))


def get_legal_calls(auction, seat):
    """All legal calls for `seat`: pass, the 35 bids in order, then double and redouble"""
    if auction.is_complete:
        return []
    candidates = [Call.pass_()]
    candidates += [Call.bid(level, strain) for level in range(1, 8) for strain in ALL_STRAINS]
    candidates += [Call.double(), Call.redouble()]
    return [call for call in candidates if is_legal_call(auction, call, seat)]


def seat_has_bid(auction, seat):
    """True if `seat` has made any non-pass call"""
    return any(entry.seat == seat and not entry.call.is_pass for entry in auction.entries)

