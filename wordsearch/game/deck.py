"""
Enhancement cards.

The deck holds a few randomly drawn cards. Playing a card yields a Modifier
for the round state machine; timed cards stay active until they expire.
"""

import logging
import random
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Hint, Modifier, ScoreMultiplier, TimeSlow, WildCard


logger = logging.getLogger(__name__)

Rarity = Literal["common", "uncommon", "rare", "epic"]
CardKind = Literal["double_points", "time_slow", "hint", "wild_card", "chain_bonus"]
CardFailure = Literal["no_cards", "cooldown", "card_not_found", "max_active_cards"]

RARITY_WEIGHTS: Dict[str, int] = {
    "common": 10,
    "uncommon": 5,
    "rare": 2,
    "epic": 1,
}

# Chance of a bonus card after each found word
REWARD_CHANCE = 0.2


class CardType(BaseModel):
    kind: CardKind
    name: str
    description: str
    duration: int = 0  # seconds, 0 for instant cards
    rarity: Rarity = "common"


CARD_TYPES: List[CardType] = [
    CardType(kind="double_points", name="Double Points",
             description="Double all points for 30 seconds", duration=30, rarity="common"),
    CardType(kind="time_slow", name="Time Slow",
             description="Slow down the timer for 20 seconds", duration=20, rarity="rare"),
    CardType(kind="hint", name="Hint Card",
             description="Reveal one random word on the grid", rarity="uncommon"),
    CardType(kind="wild_card", name="Wild Card",
             description="Count any word as found", rarity="epic"),
    CardType(kind="chain_bonus", name="Chain Bonus",
             description="Increase chain multiplier for 45 seconds", duration=45, rarity="uncommon"),
]


class Card(BaseModel):
    """A card instance in the deck, hand or active area."""
    id: str
    type: CardType
    expires_at: Optional[float] = None


class CardResult(BaseModel):
    """Outcome of drawing or playing a card."""
    success: bool
    card: Optional[Card] = None
    modifier: Optional[Modifier] = None
    reason: Optional[CardFailure] = None
    cooldown_remaining: float = 0


def card_modifier(card_type: CardType, now: float) -> Modifier:
    """Build the modifier a card applies when played at round time `now`."""
    expires_at = now + card_type.duration if card_type.duration > 0 else None
    if card_type.kind == "double_points":
        return ScoreMultiplier(factor=2.0, expires_at=expires_at)
    if card_type.kind == "chain_bonus":
        return ScoreMultiplier(factor=1.5, expires_at=expires_at)
    if card_type.kind == "time_slow":
        return TimeSlow(factor=0.5, expires_at=expires_at)
    if card_type.kind == "hint":
        return Hint()
    return WildCard()


class CardDeck(BaseModel):
    """
    Draw pile, hand and active cards for one round.

    Attributes:
        deck_size: Cards dealt at the start of a round, and the draw pile cap
        max_active_cards: Timed cards that may be active at once
        draw_cooldown: Seconds between draws
        draw_pile: Cards waiting to be drawn
        hand: Drawn cards waiting to be played
        active_cards: Played timed cards that have not expired
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    deck_size: int = Field(default=3, ge=1)
    max_active_cards: int = Field(default=2, ge=1)
    draw_cooldown: float = Field(default=30, ge=0)
    draw_pile: List[Card] = Field(default_factory=list)
    hand: List[Card] = Field(default_factory=list)
    active_cards: List[Card] = Field(default_factory=list)
    last_draw_at: Optional[float] = None
    seed: Optional[int] = None
    _rng: random.Random = None
    _counter: int = 0

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    def random_card(self) -> Card:
        """Pick a card type weighted by rarity and wrap it in a new card."""
        weights = [RARITY_WEIGHTS.get(t.rarity, 1) for t in CARD_TYPES]
        card_type = self._rng.choices(CARD_TYPES, weights=weights, k=1)[0]
        self._counter += 1
        return Card(id=f"{card_type.kind}_{self._counter}", type=card_type)

    def deal(self) -> None:
        """Reset the deck for a new round with deck_size fresh cards."""
        self.draw_pile = [self.random_card() for _ in range(self.deck_size)]
        self.hand = []
        self.active_cards = []
        self.last_draw_at = None

    def cooldown_remaining(self, now: float) -> float:
        if self.last_draw_at is None:
            return 0
        return max(0, self.last_draw_at + self.draw_cooldown - now)

    def draw_card(self, now: float) -> CardResult:
        """
        Move the top card of the draw pile into the hand.

        Args:
            now: Current round time in seconds

        Returns:
            The drawn card, or the reason nothing was drawn
        """
        if not self.draw_pile:
            return CardResult(success=False, reason="no_cards")

        remaining = self.cooldown_remaining(now)
        if remaining > 0:
            return CardResult(success=False, reason="cooldown", cooldown_remaining=remaining)

        card = self.draw_pile.pop(0)
        self.hand.append(card)
        self.last_draw_at = now
        logger.debug("Drew card %s", card.id)
        return CardResult(success=True, card=card, cooldown_remaining=self.draw_cooldown)

    def play_card(self, card_id: str, now: float) -> CardResult:
        """
        Play a card from the hand.

        Timed cards are refused while max_active_cards are already active.

        Args:
            card_id: Id of a card in the hand
            now: Current round time in seconds

        Returns:
            The played card and the modifier to activate, or the failure reason
        """
        card = next((c for c in self.hand if c.id == card_id), None)
        if card is None:
            return CardResult(success=False, reason="card_not_found")

        timed = card.type.duration > 0
        if timed and len(self.active_cards) >= self.max_active_cards:
            return CardResult(success=False, card=card, reason="max_active_cards")

        self.hand.remove(card)
        modifier = card_modifier(card.type, now)
        if timed:
            card.expires_at = now + card.type.duration
            self.active_cards.append(card)

        logger.debug("Played card %s", card.id)
        return CardResult(success=True, card=card, modifier=modifier)

    def expire(self, now: float) -> List[Card]:
        """Drop active cards whose time is up. Returns the expired cards."""
        expired = [c for c in self.active_cards if c.expires_at is not None and now >= c.expires_at]
        if expired:
            self.active_cards = [c for c in self.active_cards if c not in expired]
        return expired

    def reward(self, rng: Optional[random.Random] = None) -> Optional[Card]:
        """
        Maybe add a bonus card to the draw pile after a found word.

        Args:
            rng: Random source for the roll (defaults to the deck's own)

        Returns:
            The new card, or None if the roll failed or the pile is full
        """
        rng = rng or self._rng
        if len(self.draw_pile) >= self.deck_size:
            return None
        if rng.random() >= REWARD_CHANCE:
            return None

        card = self.random_card()
        self.draw_pile.append(card)
        return card

    def get_state(self) -> Dict:
        return {
            "draw_pile": [c.id for c in self.draw_pile],
            "hand": [c.id for c in self.hand],
            "active_cards": [c.id for c in self.active_cards],
        }
