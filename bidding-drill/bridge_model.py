"""
Bridge model for the bidding drill
Seats, strains, calls and hands on top of endplay's card types.

Features:
- Seat helpers (partner, left/right-hand opponent) over endplay Player
- Calls (pass, double, redouble, contract bids) with pattern notation ("1NT", "P", "X")
- Hands parsed from LIN ('SAKQJHAKT9D8765C432') or card tokens ('SA SK ...')
- Hand evaluation (HCP + distribution points)
"""

from endplay.types import Card, Denom, Player, Rank

SEAT_ORDER = [Player.north, Player.east, Player.south, Player.west]
SEAT_LETTERS = {Player.north: 'N', Player.east: 'E', Player.south: 'S', Player.west: 'W'}

SUIT_MAP = {'S': Denom.spades, 'H': Denom.hearts, 'D': Denom.diamonds, 'C': Denom.clubs}
SUIT_LETTERS = {denom: letter for letter, denom in SUIT_MAP.items()}
SUIT_SYMBOLS = {Denom.spades: '♠', Denom.hearts: '♥', Denom.diamonds: '♦', Denom.clubs: '♣', Denom.nt: 'NT'}
SUIT_NAMES = {Denom.spades: 'spades', Denom.hearts: 'hearts', Denom.diamonds: 'diamonds', Denom.clubs: 'clubs'}

# Shape tuples are ordered spades, hearts, diamonds, clubs
SUIT_ORDER = [Denom.spades, Denom.hearts, Denom.diamonds, Denom.clubs]
MAJORS = [Denom.spades, Denom.hearts]
MINORS = [Denom.diamonds, Denom.clubs]

# Bid comparison order, lowest first
STRAIN_RANK = {Denom.clubs: 1, Denom.diamonds: 2, Denom.hearts: 3, Denom.spades: 4, Denom.nt: 5}
STRAIN_LETTERS = {Denom.clubs: 'C', Denom.diamonds: 'D', Denom.hearts: 'H', Denom.spades: 'S', Denom.nt: 'NT'}

RANK_MAP = {'A': Rank.RA, 'K': Rank.RK, 'Q': Rank.RQ, 'J': Rank.RJ, 'T': Rank.RT,
            '9': Rank.R9, '8': Rank.R8, '7': Rank.R7, '6': Rank.R6, '5': Rank.R5,
            '4': Rank.R4, '3': Rank.R3, '2': Rank.R2}
RANK_CHARS = 'AKQJT98765432'

HCP_VALUES = {'A': 4, 'K': 3, 'Q': 2, 'J': 1}
BALANCED_SHAPES = [[4, 3, 3, 3], [4, 4, 3, 2], [5, 3, 3, 2]]


def next_seat(seat, steps=1):
    """Seat that calls `steps` turns after `seat` (clockwise)"""
    idx = SEAT_ORDER.index(seat)
    return SEAT_ORDER[(idx + steps) % 4]


def partner_seat(seat):
    """Get partner's seat"""
    return next_seat(seat, 2)


def lho_seat(seat):
    """Get left-hand opponent"""
    return next_seat(seat, 1)


def rho_seat(seat):
    """Get right-hand opponent"""
    return next_seat(seat, 3)


def same_side(a, b):
    """True when both seats belong to the same partnership"""
    return a == b or partner_seat(a) == b


def parse_seat(text):
    """Parse 'N', 'north', 'South' ... into an endplay Player"""
    key = text.strip().upper()[:1]
    for seat, letter in SEAT_LETTERS.items():
        if letter == key:
            return seat
    raise ValueError(f"Unknown seat: {text!r}")


def seat_letter(seat):
    return SEAT_LETTERS[seat]


def strain_letter(strain):
    return STRAIN_LETTERS[strain]


class Call:
    """
    A single call in the auction: pass, double, redouble or a contract bid.
    Calls compare by value, so Call.bid(2, Denom.clubs) == parse_call('2C').
    """

    PASS = 'pass'
    DOUBLE = 'double'
    REDOUBLE = 'redouble'
    BID = 'bid'

    def __init__(self, kind, level=None, strain=None):
        if kind not in (self.PASS, self.DOUBLE, self.REDOUBLE, self.BID):
            raise ValueError(f"Unknown call type: {kind!r}")
        if kind == self.BID:
            if level not in range(1, 8):
                raise ValueError(f"Bid level must be 1-7, got {level!r}")
            if strain not in STRAIN_RANK:
                raise ValueError(f"Unknown strain: {strain!r}")
        else:
            level = None
            strain = None
        self.kind = kind
        self.level = level
        self.strain = strain

    @classmethod
    def pass_(cls):
        return cls(cls.PASS)

    @classmethod
    def double(cls):
        return cls(cls.DOUBLE)

    @classmethod
    def redouble(cls):
        return cls(cls.REDOUBLE)

    @classmethod
    def bid(cls, level, strain):
        return cls(cls.BID, level, strain)

    @property
    def is_pass(self):
        return self.kind == self.PASS

    @property
    def is_bid(self):
        return self.kind == self.BID

    def _key(self):
        return (self.kind, self.level, self.strain)

    def __eq__(self, other):
        if not isinstance(other, Call):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        if self.kind == self.PASS:
            return 'P'
        if self.kind == self.DOUBLE:
            return 'X'
        if self.kind == self.REDOUBLE:
            return 'XX'
        return f"{self.level}{STRAIN_LETTERS[self.strain]}"

    def __repr__(self):
        return f"Call({str(self)!r})"

    def display(self):
        """Human-friendly form, e.g. '2♣', 'Pass', 'Double'"""
        if self.kind == self.BID:
            return f"{self.level}{SUIT_SYMBOLS[self.strain]}"
        return {self.PASS: 'Pass', self.DOUBLE: 'Double', self.REDOUBLE: 'Redouble'}[self.kind]


def parse_call(text):
    """
    Parse pattern notation into a Call.
    Accepts 'P'/'Pass', 'X', 'XX' and contract bids '1C'..'7NT' (also '3N').
    """
    token = text.strip().upper()
    if token in ('P', 'PASS'):
        return Call.pass_()
    if token in ('X', 'DBL'):
        return Call.double()
    if token in ('XX', 'RDBL'):
        return Call.redouble()

    if len(token) >= 2 and token[0].isdigit():
        level = int(token[0])
        strain_text = token[1:]
        if strain_text in ('N', 'NT'):
            strain = Denom.nt
        else:
            strain = SUIT_MAP.get(strain_text)
        if strain is not None and 1 <= level <= 7:
            return Call.bid(level, strain)

    raise ValueError(f"Cannot parse call: {text!r}")


class Hand:
    """Represents a 13-card bridge hand with evaluation methods"""

    def __init__(self, cards):
        """
        Initialize hand from a list of endplay Card objects
        """
        self.cards = list(cards)
        self.suits = {'S': [], 'H': [], 'D': [], 'C': []}
        seen = set()
        for card in self.cards:
            suit = SUIT_LETTERS[card.suit]
            rank = str(card.rank.abbr)
            if (suit, rank) in seen:
                raise ValueError(f"Duplicate card in hand: {suit}{rank}")
            seen.add((suit, rank))
            self.suits[suit].append(rank)

        if len(self.cards) != 13:
            raise ValueError(f"A hand must hold 13 cards, got {len(self.cards)}")

        for ranks in self.suits.values():
            ranks.sort(key=RANK_CHARS.index)

        self.hcp = self.count_hcp()
        self.distribution = self.get_distribution()
        self.shape = self.get_shape_pattern()

    @classmethod
    def from_lin(cls, lin_str):
        """Parse LIN format (e.g., 'SAKQJHAKT9D8765C432')"""
        cards = []
        current_suit = None
        for char in lin_str.strip():
            upper = char.upper()
            if upper in SUIT_MAP:
                current_suit = upper
            elif upper in RANK_MAP:
                if current_suit is None:
                    raise ValueError(f"Rank before suit in LIN hand: {lin_str!r}")
                cards.append(Card(suit=SUIT_MAP[current_suit], rank=RANK_MAP[upper]))
            elif char.isspace():
                continue
            else:
                raise ValueError(f"Unexpected character {char!r} in LIN hand")
        return cls(cards)

    @classmethod
    def from_cards(cls, tokens):
        """Parse card tokens like ['SA', 'SK', 'H7'] or 'SA SK H7 ...'"""
        if isinstance(tokens, str):
            tokens = tokens.split()
        cards = []
        for token in tokens:
            token = token.strip().upper()
            if len(token) != 2 or token[0] not in SUIT_MAP or token[1] not in RANK_MAP:
                raise ValueError(f"Cannot parse card: {token!r}")
            cards.append(Card(suit=SUIT_MAP[token[0]], rank=RANK_MAP[token[1]]))
        return cls(cards)

    @classmethod
    def parse(cls, text):
        """Accept either notation"""
        tokens = text.split()
        if len(tokens) > 1 and all(len(token) == 2 for token in tokens):
            return cls.from_cards(tokens)
        return cls.from_lin(text)

    def to_lin(self):
        return ''.join(suit + ''.join(ranks) for suit, ranks in self.suits.items())

    def __str__(self):
        return ' '.join(
            f"{SUIT_SYMBOLS[SUIT_MAP[suit]]}{''.join(ranks) or '-'}" for suit, ranks in self.suits.items()
        )

    def __repr__(self):
        return f"Hand({self.to_lin()!r})"

    def count_hcp(self):
        """Count high card points (A=4, K=3, Q=2, J=1)"""
        return sum(HCP_VALUES.get(card, 0) for suit in self.suits.values() for card in suit)

    def get_distribution(self):
        """Get distribution (length of each suit)"""
        return {suit: len(cards) for suit, cards in self.suits.items()}

    def get_shape_pattern(self):
        """Get shape pattern sorted by length (e.g., [5,4,2,2])"""
        return sorted((len(cards) for cards in self.suits.values()), reverse=True)

    def suit_length(self, suit):
        """Length of a suit given as an endplay Denom"""
        return len(self.suits[SUIT_LETTERS[suit]])

    def count_rank(self, rank):
        """Number of cards of a given rank character ('A', 'K', ...)"""
        return sum(1 for cards in self.suits.values() if rank in cards)

    def is_balanced(self):
        """Check if hand is balanced (4-3-3-3, 4-4-3-2 or 5-3-3-2)"""
        return self.shape in BALANCED_SHAPES


class DistributionPoints:
    """Shortness (void 3, singleton 2, doubleton 1) and length (1 per card past 4) points"""

    def __init__(self, shortness, length):
        self.shortness = shortness
        self.length = length
        self.total = shortness + length

    def __repr__(self):
        return f"DistributionPoints(shortness={self.shortness}, length={self.length})"


class HandEvaluation:
    """Precomputed numbers every condition reads"""

    def __init__(self, hcp, shape, distribution):
        self.hcp = hcp
        self.shape = shape
        self.distribution = distribution
        self.total_points = hcp + distribution.total

    def __repr__(self):
        return f"HandEvaluation(hcp={self.hcp}, shape={self.shape}, total_points={self.total_points})"


def calculate_distribution_points(shape):
    shortness = 0
    length = 0
    for count in shape:
        if count == 0:
            shortness += 3
        elif count == 1:
            shortness += 2
        elif count == 2:
            shortness += 1
        if count > 4:
            length += count - 4
    return DistributionPoints(shortness, length)


def evaluate_hand(hand):
    """Evaluate a hand: HCP, (S, H, D, C) shape tuple and distribution points"""
    shape = tuple(hand.suit_length(suit) for suit in SUIT_ORDER)
    return HandEvaluation(hand.hcp, shape, calculate_distribution_points(shape))


class BiddingContext:
    """
    Everything a condition may look at: the hand, the auction so far,
    the seat to act and the hand's evaluation.
    """

    def __init__(self, hand, auction, seat, evaluation):
        self.hand = hand
        self.auction = auction
        self.seat = seat
        self.evaluation = evaluation


def create_bidding_context(hand, auction, seat, evaluation=None):
    """Build a context, evaluating the hand unless an evaluation is supplied"""
    if evaluation is None:
        evaluation = evaluate_hand(hand)
    return BiddingContext(hand, auction, seat, evaluation)
