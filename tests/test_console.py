import unittest
from unittest.mock import Mock
import sys
import os

# Add source directory to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(project_root, 'src'))

from holdem.engine.cards import parse_cards
from holdem.engine.decisions import ScriptedDecisionProvider
from holdem.engine.events import ActionTaken, PotAwarded
from holdem.engine.game import HoldemGame
from holdem.engine.game_state import Action, Decision, Participant, PotView, Street, table_view
from holdem.engine.rules import RaiseStatus, ValidationResult
from holdem.interface.console import ConsoleDecisionProvider, ConsoleObserver


class TestConsoleDecisionProvider(unittest.TestCase):
    def setUp(self):
        """Setup a human participant and captured console output."""
        self.lines = []
        self.participant = Participant("You", 1000, is_human=True, hole_cards=parse_cards("As Kd"))

    def print_line(self, *args):
        self.lines.append(" ".join(str(arg) for arg in args))

    def decide(self, answers, bet_level=10, street=Street.PREFLOP):
        input_fn = Mock(side_effect=answers)
        provider = ConsoleDecisionProvider(input_fn=input_fn, print_fn=self.print_line)
        table = table_view(street, bet_level, parse_cards("7h 6c 2h") if street != Street.PREFLOP else [],
                           [self.participant], [])
        return provider.decide(self.participant, bet_level, street, table), input_fn

    def test_menu_choices(self):
        """Test each menu entry."""
        self.assertEqual(self.decide(["1"])[0], Decision.call())
        self.assertEqual(self.decide(["2", "50"])[0], Decision.raise_by(50))
        self.assertEqual(self.decide(["3"])[0], Decision.fold())
        self.assertEqual(self.decide(["4"])[0], Decision.info())

    def test_call_and_check_prompts(self):
        """Test the call amount shown in the prompt."""
        _, input_fn = self.decide(["1"], bet_level=10)
        self.assertIn("Enter 1 to call $10", input_fn.call_args[0][0])

        _, input_fn = self.decide(["1"], bet_level=0, street=Street.FLOP)
        self.assertIn("Enter 1 to check", input_fn.call_args[0][0])
        self.assertIn("Community cards: Seven of Hearts, Six of Clubs, Two of Hearts", self.lines)

    def test_invalid_input_asks_again(self):
        """Test non-numeric and unknown choices."""
        decision, input_fn = self.decide(["abc", "9", "1"])

        self.assertEqual(decision, Decision.call())
        self.assertEqual(input_fn.call_count, 3)
        self.assertIn("You did not provide a valid input.", self.lines)
        self.assertIn("Invalid choice given.", self.lines)

    def test_raise_amount_reprompts(self):
        """Test that a non-numeric raise amount is asked again."""
        decision, _ = self.decide(["2", "lots", "25"])
        self.assertEqual(decision, Decision.raise_by(25))
        self.assertIn("Invalid amount.", self.lines)

    def test_cannot_raise_when_short(self):
        """Test that raising is refused when the call takes the whole stack."""
        self.participant.stack = 10
        decision, _ = self.decide(["2", "1"], bet_level=10)
        self.assertEqual(decision, Decision.call())
        self.assertIn("You don't have enough money to raise.", self.lines)

    def test_rejection_messages(self):
        """Test that rejected raises are explained except for a cancel."""
        provider = ConsoleDecisionProvider(input_fn=Mock(), print_fn=self.print_line)
        provider.on_rejected(self.participant, ValidationResult(RaiseStatus.CANCELLED, "Raise cancelled"))
        self.assertEqual(self.lines, [])

        provider.on_rejected(self.participant, ValidationResult(RaiseStatus.EXCEEDS_STACK, "Too much"))
        self.assertEqual(self.lines, ["Invalid amount. Too much"])


class TestConsoleObserver(unittest.TestCase):
    def setUp(self):
        """Setup an observer writing to a list."""
        self.lines = []
        self.observer = ConsoleObserver(print_fn=lambda *args: self.lines.append(" ".join(map(str, args))))

    def test_action_narration(self):
        """Test the wording of actions."""
        view = Participant("Bot", 990).view()
        self.observer.notify(ActionTaken(view, Action.CALL, 0, 10))
        self.observer.notify(ActionTaken(view, Action.CALL, 10, 10))
        self.observer.notify(ActionTaken(view, Action.RAISE, 20, 30))
        self.observer.notify(ActionTaken(view, Action.FOLD, 0, 30))

        self.assertEqual(self.lines, [
            "Bot checked.",
            "Bot called and added $10 to the pot",
            "Bot raised the bet $20 to $30",
            "Bot folded.",
        ])

    def test_award_narration(self):
        """Test uncontested, contested and split awards."""
        pot = PotView(100, ("A", "B"))
        self.observer.notify(PotAwarded(pot, ("A",), "", (100,)))
        self.observer.notify(PotAwarded(pot, ("A",), "a flush", (100,)))
        self.observer.notify(PotAwarded(pot, ("A", "B"), "one pair", (50, 50)))

        self.assertEqual(self.lines, [
            "A wins $100!",
            "A wins $100 with a flush",
            "A and B split $100 with one pair",
        ])

    def test_full_game_commentary(self):
        """Test that the observer narrates a scripted game from start to finish."""
        human = ScriptedDecisionProvider(fallback=Decision.call())
        game = HoldemGame(num_participants=3, starting_stack=200, big_blind=10, human_seat=0,
                          human_provider=human, automated_provider=ScriptedDecisionProvider(),
                          observer=self.observer, seed=3)
        game.play(max_rounds=2)

        self.assertEqual(self.lines[0], "You are playing as Player 1.")
        self.assertIn("========== Round 1 ==========", self.lines)
        self.assertTrue(any(line.startswith("You were dealt the ") for line in self.lines))
        self.assertTrue(any(line.startswith("Your hand: ") for line in self.lines))
        self.assertEqual(self.lines[-1], "Game stopped after 2 rounds.")


if __name__ == '__main__':
    unittest.main()
