"""
console.py - Text front-end for the hold 'em engine

ConsoleObserver narrates the engine's event stream as plain text and
ConsoleDecisionProvider collects the human participant's decisions from the
keyboard. Both take injectable input/output callables so they can be driven
from tests.
"""

from typing import Callable, Optional

from holdem.engine.decisions import DecisionProvider
from holdem.engine.events import (
    ActionTaken, BlindsPosted, CardDealt, CommunityCardRevealed, Event, GameOver,
    HandCategoryUpdated, HumanIdentified, InfoRequested, PotAwarded, PotsRecomputed,
    RoundObserver, RoundStarted, ShowdownHandsRevealed,
)
from holdem.engine.game_state import Action, Decision, Participant, Street, TableView
from holdem.engine.rules import RaiseStatus, ValidationResult


def describe_table(table: TableView, print_fn: Callable[..., None] = print) -> None:
    """Print the table snapshot shown on an info request."""
    print_fn("Current players:")
    for participant in table.participants:
        print_fn(f"{participant.name} -- ${participant.stack} {'(folded)' if participant.folded else ''}")
    print_fn()
    for participant in table.participants:
        if participant.hole_cards:
            print_fn(f"Your cards: {', '.join(card.pretty() for card in participant.hole_cards)}")
    print_fn(f"Community cards: {', '.join(card.pretty() for card in table.community_cards) or 'none'}")
    for pot in table.pots:
        if pot.value:
            print_fn(f"Pot: ${pot.value} between {', '.join(pot.eligible)}")
    print_fn(f"Money in the current pot: ${table.amount_in_street}")
    print_fn()


class ConsoleObserver(RoundObserver):
    """Prints a running commentary of the game."""

    def __init__(self, print_fn: Callable[..., None] = print):
        self.print_fn = print_fn
        self.human_name: Optional[str] = None

    def notify(self, event: Event) -> None:
        handler = getattr(self, f"_on_{type(event).__name__}", None)
        if handler is not None:
            handler(event)

    def _on_HumanIdentified(self, event: HumanIdentified) -> None:
        self.human_name = event.participant.name
        self.print_fn(f"You are playing as {self.human_name}.")

    def _on_RoundStarted(self, event: RoundStarted) -> None:
        self.print_fn(f"========== Round {event.round_number} ==========")

    def _on_BlindsPosted(self, event: BlindsPosted) -> None:
        self.print_fn(f"{event.big_blind.name} posted a big blind amount of ${event.big_blind_amount}")
        self.print_fn(f"{event.small_blind.name} posted a small blind amount of ${event.small_blind_amount}")
        self.print_fn(f"Pot value: ${event.big_blind_amount + event.small_blind_amount}")
        self.print_fn()

    def _on_CardDealt(self, event: CardDealt) -> None:
        if event.participant.name == self.human_name:
            self.print_fn(f"You were dealt the {event.card.pretty()}")

    def _on_CommunityCardRevealed(self, event: CommunityCardRevealed) -> None:
        self.print_fn(f"Community card: {event.card.pretty()}")

    def _on_HandCategoryUpdated(self, event: HandCategoryUpdated) -> None:
        self.print_fn(f"Your hand: {event.name}")

    def _on_ActionTaken(self, event: ActionTaken) -> None:
        name = event.participant.name
        if event.action is Action.CALL:
            if event.amount:
                self.print_fn(f"{name} called and added ${event.amount} to the pot")
            else:
                self.print_fn(f"{name} checked.")
        elif event.action is Action.RAISE:
            self.print_fn(f"{name} raised the bet ${event.amount} to ${event.bet_level}")
        elif event.action is Action.FOLD:
            self.print_fn(f"{name} folded.")

    def _on_InfoRequested(self, event: InfoRequested) -> None:
        describe_table(event.table, self.print_fn)

    def _on_ShowdownHandsRevealed(self, event: ShowdownHandsRevealed) -> None:
        for participant in event.participants:
            cards = ', '.join(card.pretty() for card in participant.hole_cards)
            self.print_fn(f"{participant.name}'s cards: {cards}")

    def _on_PotsRecomputed(self, event: PotsRecomputed) -> None:
        self.print_fn("Pot values:")
        for pot in event.pots:
            self.print_fn(f"${pot.value} between {', '.join(pot.eligible)}")
        self.print_fn()

    def _on_PotAwarded(self, event: PotAwarded) -> None:
        total = sum(event.amounts)
        if len(event.winners) > 1:
            self.print_fn(f"{' and '.join(event.winners)} split ${total}"
                          + (f" with {event.category_name}" if event.category_name else ""))
        elif event.category_name:
            self.print_fn(f"{event.winners[0]} wins ${total} with {event.category_name}")
        else:
            self.print_fn(f"{event.winners[0]} wins ${total}!")

    def _on_GameOver(self, event: GameOver) -> None:
        if event.winner is not None:
            self.print_fn(f"{event.winner.name} wins the game after {event.rounds_played} rounds!")
        else:
            self.print_fn(f"Game stopped after {event.rounds_played} rounds.")


class ConsoleDecisionProvider(DecisionProvider):
    """Reads the human participant's decisions from the keyboard."""

    CALL, RAISE, FOLD, INFO = 1, 2, 3, 4

    def __init__(self, input_fn: Callable[[str], str] = input, print_fn: Callable[..., None] = print):
        self.input_fn = input_fn
        self.print_fn = print_fn

    def _read_int(self, prompt: str) -> Optional[int]:
        text = self.input_fn(prompt).strip()
        try:
            return int(text)
        except ValueError:
            return None

    def decide(self, participant: Participant, bet_level: int, street: Street,
               table: TableView) -> Decision:
        cost = bet_level - participant.posted
        while True:
            if street != Street.PREFLOP:
                self.print_fn(f"Community cards: {', '.join(card.pretty() for card in table.community_cards)}")
            self.print_fn(f"Your cards: {', '.join(card.pretty() for card in participant.hole_cards)}")
            self.print_fn(f"Your money: ${participant.stack}")

            if cost > 0:
                prompt = f"Enter 1 to call ${cost}, 2 to raise, 3 to fold, or 4 for more info ===>> "
            else:
                prompt = "Enter 1 to check, 2 to raise, 3 to fold, or 4 for more info ===>> "
            choice = self._read_int(prompt)

            if choice is None:
                self.print_fn("You did not provide a valid input.")
            elif choice == self.CALL:
                return Decision.call()
            elif choice == self.RAISE:
                if cost >= participant.stack:
                    self.print_fn("You don't have enough money to raise.")
                    continue
                return Decision.raise_by(self._read_raise(bet_level))
            elif choice == self.FOLD:
                return Decision.fold()
            elif choice == self.INFO:
                return Decision.info()
            else:
                self.print_fn("Invalid choice given.")

    def _read_raise(self, bet_level: int) -> int:
        self.print_fn("Enter the amount to raise by or 0 to cancel.")
        while True:
            amount = self._read_int(f"(current bet is ${bet_level}) ===>> $")
            if amount is not None:
                return amount
            self.print_fn("Invalid amount.")

    def on_rejected(self, participant: Participant, result: ValidationResult) -> None:
        if result.status is not RaiseStatus.CANCELLED:
            self.print_fn(f"Invalid amount. {result.reason}")
