"""
Baccarat tracker CLI and simulation interface.

Track a live shoe from the keyboard, or simulate shoes to see how the
count-based recommendation performs.
"""

import argparse
import logging
from typing import List, Optional

from shoecount.baccarat.constants import RANKS, lookup
from shoecount.baccarat.recommendation import Recommendation, favored_side
from shoecount.baccarat.rules import BaccaratRules
from shoecount.baccarat.simulation import SimulationReport, run_simulation
from shoecount.common.io_interface import ConsoleIOInterface, IOInterface
from shoecount.engine.session import CountingSession
from shoecount.state.models import GamePhase

QUIT_COMMANDS = ("quit", "exit")

HELP_TEXT = """Commands:
  A 2-10 J Q K   enter a card (1 = A, 0 or T = 10)
  u              undo the last input
  b              finish the burn phase
  reset          start a new shoe (asks for confirmation)
  s              show the status board
  help           show this help
  quit           leave the tracker"""


def format_keypad() -> str:
    """One line per count weight, so the keypad shows which ranks favour which side."""
    groups = {side: [] for side in Recommendation}
    for rank in RANKS:
        config = lookup(rank)
        groups[favored_side(config)].append(f"{rank}({config.count_value:+d})")
    return "\n".join(
        f"  {side.value:<8} {' '.join(ranks)}" for side, ranks in groups.items()
    )


def format_road(session: CountingSession, limit: int = 30) -> str:
    """Most recent results as a compact road of P/B/T."""
    road = "".join(winner.value[0] for winner in session.results[-limit:])
    return road if road else "(no results yet)"


def render_status(session: CountingSession) -> str:
    """
    Build the status board.

    Args:
        session: Session to describe

    Returns:
        Multi-line status text
    """
    lines = [
        "=" * 50,
        f"RC {session.running_count:+d}   TC {session.true_count:+.1f}   "
        f"Cards left {session.cards_remaining}",
    ]

    if session.phase is GamePhase.BURN:
        lines.append(f"BURN PHASE: {session.burn_count} cards burned ('b' to start play)")
    elif session.phase is GamePhase.PLAYING:
        player = " ".join(str(card) for card in session.player_cards) or "-"
        banker = " ".join(str(card) for card in session.banker_cards) or "-"
        lines.append(f"ROUND {session.round_count}")
        lines.append(f"  Player: {player:<12} = {session.player_value}")
        lines.append(f"  Banker: {banker:<12} = {session.banker_value}")
        if session.is_finished:
            natural = " (natural)" if session.is_natural else ""
            lines.append(f"  Winner: {session.winner.value}{natural}")
        else:
            lines.append(f"  Next card: {session.next_expected_slot.value}")
        if session.recommendation_visible:
            advice = session.recommendation
            marker = "" if advice is Recommendation.NEUTRAL else " <<"
            lines.append(f"  Advice: {advice.label}{marker}")
        lines.append(f"  Road: {format_road(session)}")
    else:
        lines.append("LOCKED")

    lines.append("=" * 50)
    return "\n".join(lines)


def handle_command(session: CountingSession, io: IOInterface, command: str) -> bool:
    """
    Apply one line of tracker input.

    Args:
        session: Session being tracked
        io: Interface for messages and confirmations
        command: The text entered

    Returns:
        False when the user asked to quit, True otherwise
    """
    command = command.strip()
    lowered = command.lower()

    if not command:
        return True
    if lowered in QUIT_COMMANDS:
        return False
    if lowered in ("help", "?"):
        io.output(HELP_TEXT)
        io.output(format_keypad())
        return True
    if lowered == "s":
        io.output(render_status(session))
        return True

    if lowered == "u":
        if not session.undo():
            io.output("Nothing to undo.")
    elif lowered == "b":
        if not session.finish_burn_phase():
            io.output("Not in the burn phase.")
    elif lowered == "reset":
        if io.confirm("End this shoe and reset all data?"):
            session.reset_shoe()
            io.output("Shoe reset. Burn phase started.")
        else:
            io.output("Reset cancelled.")
    else:
        try:
            session.submit_card(command)
        except ValueError as e:
            io.output(f"{e}. Type 'help' for commands.")
            return True

    io.output(render_status(session))
    return True


def run_tracker(io: IOInterface, rules: Optional[BaccaratRules] = None) -> CountingSession:
    """
    Run the interactive tracker until the user quits.

    Args:
        io: Interface to read commands from and write the board to
        rules: Shoe and recommendation configuration

    Returns:
        The session, as left when the user quit
    """
    session = CountingSession(rules)
    session.start()
    io.output(HELP_TEXT)
    io.output(render_status(session))

    while True:
        try:
            command = io.input("> ")
        except EOFError:
            break
        if not handle_command(session, io, command):
            break

    summary = session.summary()
    io.output(
        f"Rounds: {summary['rounds_finished']}  "
        f"P {summary['player_wins']}  B {summary['banker_wins']}  T {summary['ties']}"
    )
    return session


def format_report(report: SimulationReport) -> str:
    """Render a simulation report as text."""
    rounds = report.rounds or 1
    lines = [
        "",
        f"Baccarat Count Simulation ({report.num_shoes:,} shoes)",
        "=" * 60,
        f"Rounds played: {report.rounds:,}",
        f"  Player wins: {report.player_wins:,} ({report.player_wins / rounds * 100:.1f}%)",
        f"  Banker wins: {report.banker_wins:,} ({report.banker_wins / rounds * 100:.1f}%)",
        f"  Ties: {report.ties:,} ({report.ties / rounds * 100:.1f}%)",
        f"  Naturals: {report.naturals:,} ({report.naturals / rounds * 100:.1f}%)",
        f"True count at round start: mean {report.true_count_mean:+.2f}, "
        f"std {report.true_count_std:.2f}",
        "",
        f"{'Advice':<10} {'Rounds':>8} {'Decisive':>9} {'Hit rate':>9}  Interval",
        "-" * 60,
    ]
    for rec in (Recommendation.PLAYER, Recommendation.BANKER):
        rec_stats = report.by_recommendation[rec]
        ci = rec_stats.confidence_interval
        lines.append(
            f"{rec.label:<10} {rec_stats.rounds:>8,} {rec_stats.decisive_rounds:>9,} "
            f"{rec_stats.hit_rate * 100:>8.1f}%  "
            f"[{ci.lower * 100:.1f}%, {ci.upper * 100:.1f}%] @ {ci.confidence:.0%}"
        )
    neutral = report.by_recommendation[Recommendation.NEUTRAL]
    lines.append(f"{Recommendation.NEUTRAL.label:<10} {neutral.rounds:>8,}")
    lines.append("-" * 60)
    lines.append(f"Duration: {report.duration:.2f} seconds")
    lines.append("=" * 60)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Baccarat shoe tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Track a live 8-deck shoe
  shoecount

  # Simulate 200 shoes with a fixed seed
  shoecount --simulate --num_shoes 200 --seed 7

  # Stricter advice thresholds
  shoecount --player_threshold 2 --banker_threshold -2
        """,
    )

    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Run simulation mode instead of the interactive tracker",
    )
    parser.add_argument(
        "--num_shoes",
        type=int,
        default=100,
        help="Number of shoes to simulate (default: 100)",
    )
    parser.add_argument(
        "--num_decks",
        type=int,
        default=8,
        help="Number of decks in shoe (default: 8)",
    )
    parser.add_argument(
        "--penetration",
        type=float,
        default=0.8,
        help="Fraction of the shoe dealt in simulation (default: 0.8)",
    )
    parser.add_argument(
        "--burn_cards",
        type=int,
        default=1,
        help="Cards burned at the start of each simulated shoe (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the simulation",
    )
    parser.add_argument(
        "--player_threshold",
        type=float,
        default=1.5,
        help="True count at or above which Player is advised (default: 1.5)",
    )
    parser.add_argument(
        "--banker_threshold",
        type=float,
        default=-1.5,
        help="True count at or below which Banker is advised (default: -1.5)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None, io: Optional[IOInterface] = None) -> int:
    """Main CLI interface for the tracker."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        rules = BaccaratRules(
            num_decks=args.num_decks,
            player_threshold=args.player_threshold,
            banker_threshold=args.banker_threshold,
        )
    except ValueError as e:
        parser.error(str(e))

    io = io if io else ConsoleIOInterface()

    if args.simulate:
        try:
            report = run_simulation(
                num_shoes=args.num_shoes,
                rules=rules,
                penetration=args.penetration,
                burn_cards=args.burn_cards,
                seed=args.seed,
            )
        except ValueError as e:
            parser.error(str(e))
        io.output(format_report(report))
    else:
        run_tracker(io, rules)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
