"""Interactive CLI application."""
import logging
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from thaivocab.assessment import apply_interim_result, record_post_test
from thaivocab.config import DEFAULT_DB_PATH
from thaivocab.dashboard import (
    get_level_distribution, get_mastery_color, get_mastery_label, get_study_stats,
)
from thaivocab.db import init_db
from thaivocab.exceptions import ThaiVocabError
from thaivocab.flashcards import get_due_cards, record_flashcard_result
from thaivocab.games import HANGMAN
from thaivocab.hangman import HangmanRound
from thaivocab.models import ReviewOutcome
from thaivocab.progress import load_pool, record_round
from thaivocab.quiz import check_answer, get_quiz_questions, record_quiz_round
from thaivocab.review import get_weak_words
from thaivocab.sampler import build_interim_test, build_post_test
from thaivocab.seed import is_seeded, seed_all
from thaivocab.session import BREAK, COMPLETED, InterimTestSession, PostTestSession
from thaivocab.study import get_current_user, get_deadline_days

console = Console()
logger = logging.getLogger("thaivocab")

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the learner leaves a session part-way through."""
    pass


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list[str]) -> int:
    answer = session_prompt(prompt, choices=choices + list(EXIT_WORDS), show_choices=False)
    return int(answer)


def timed_prompt(prompt: str, **kwargs) -> tuple[str, float]:
    started = time.monotonic()
    answer = session_prompt(prompt, **kwargs)
    return answer, time.monotonic() - started


def show_welcome():
    console.print(Panel(
        "[bold]Thai Vocabulary Trainer[/bold]\n[dim]คำศัพท์ภาษาอังกฤษสำหรับผู้เรียนชาวไทย[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("flashcards", "Review due cards"),
        ("quiz", "Multiple-choice quiz game"),
        ("hangman", "Spell the word"),
        ("interim", "Interim test (weak + mastered words)"),
        ("posttest", "Final exam"),
        ("dashboard", "Progress overview"),
        ("weak", "Hardest words"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def run_flashcard_session(db_path: str, user_id: str, cards: list) -> None:
    if not cards:
        console.print("[yellow]No flashcards due right now![/yellow]")
        return
    deadline_days = get_deadline_days(db_path)
    console.print(f"\n[bold]Flashcard Session[/bold] - {len(cards)} cards\n")
    for i, card in enumerate(cards, 1):
        console.print(Panel(card["front_text"], title=f"Card {i}/{len(cards)}", border_style="cyan"))
        _, seconds = timed_prompt("[dim]Press Enter to reveal the meaning[/dim]", default="", show_default=False)
        console.print(Panel(card["back_text"], border_style="green"))
        knew_it = session_int_prompt("Did you know it? (1=yes, 0=no)", choices=["0", "1"])
        record_flashcard_result(
            db_path, user_id, card["id"], bool(knew_it), seconds=seconds, deadline_days=deadline_days,
        )
        console.print()


def run_quiz_session(db_path: str, user_id: str, questions: list) -> tuple[int, int]:
    if not questions:
        console.print("[yellow]No questions available![/yellow]")
        return 0, 0
    answers = []
    console.print(f"\n[bold]Quiz[/bold] - {len(questions)} questions\n")
    for i, q in enumerate(questions, 1):
        console.print(f"[bold]Q{i}.[/bold] {q.front_text}\n")
        for n, option in enumerate(q.options, 1):
            console.print(f"  [cyan]{n})[/cyan] {option}")
        choices = [str(n) for n in range(1, len(q.options) + 1)]
        choice, seconds = timed_prompt("\nYour answer", choices=choices + list(EXIT_WORDS), show_choices=False)
        is_correct = check_answer(q, q.options[int(choice) - 1])
        answers.append((q, is_correct, seconds))
        if is_correct:
            console.print("[green]Correct![/green]\n")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{q.correct_answer}[/green]\n")
    record_quiz_round(db_path, user_id, answers, deadline_days=get_deadline_days(db_path))
    correct = sum(1 for _, ok, _ in answers if ok)
    console.print(f"[bold]Score: {correct}/{len(questions)} ({correct/len(questions)*100:.0f}%)[/bold]\n")
    return correct, len(questions)


def run_hangman_session(db_path: str, user_id: str, cards: list) -> None:
    if not cards:
        console.print("[yellow]No words to play![/yellow]")
        return
    outcomes = []
    for card in cards:
        game = HangmanRound(card["front_text"])
        console.print(Panel(card["back_text"], title="Meaning", border_style="cyan"))
        while not game.finished:
            console.print(f"  {game.masked}   [red]{game.wrong_guesses}/{game.max_wrong}[/red]")
            letter = session_prompt("Letter")
            try:
                game.guess(letter)
            except ValueError as e:
                console.print(f"[yellow]{e}[/yellow]")
        if game.won:
            console.print(f"[green]{card['front_text']}[/green]\n")
        else:
            console.print(f"[red]Out of guesses.[/red] The word was [green]{card['front_text']}[/green]\n")
        outcomes.append(ReviewOutcome(card["id"], HANGMAN, game.signal))
    record_round(db_path, user_id, outcomes, deadline_days=get_deadline_days(db_path))


def run_test_session(session) -> None:
    """Drive an interim or post test until it completes or the learner quits."""
    session.start()
    try:
        _run_questions(session)
    except SessionExitRequested:
        session.cancel()
        raise


def _run_questions(session) -> None:
    while session.state != COMPLETED:
        if session.state == BREAK:
            console.print(Panel(
                f"Set {session.set_index + 1} completed! {session.total_sets - session.set_index - 1} set(s) left.",
                border_style="magenta",
            ))
            session_prompt("[dim]Press Enter to continue[/dim]", default="", show_default=False)
            session.continue_after_break()
            continue
        q = session.current_question
        header = f"Set {session.set_index + 1}/{session.total_sets} - Question {session.question_index + 1}/{session.questions_in_current_set}"
        if q.is_weak:
            header += "  [red]Weak Word[/red]"
        console.print(f"\n[dim]{header}[/dim]  [bold]{session.time_limit}s[/bold]")
        console.print(Panel(q.front_text, subtitle=q.part_of_speech or "", border_style="cyan"))
        for n, option in enumerate(q.options, 1):
            console.print(f"  [cyan]{n})[/cyan] {option}")
        choices = [str(n) for n in range(1, len(q.options) + 1)]
        choice, seconds = timed_prompt("Answer", choices=choices + list(EXIT_WORDS), show_choices=False)
        record = session.answer(q.options[int(choice) - 1], elapsed=seconds)
        if record.user_answer is None:
            console.print("[red]Time's up![/red]")
        elif record.is_correct:
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{q.correct_answer}[/green]")


def cmd_flashcards(db_path: str, user_id: str):
    console.print("\n[bold]Flashcard Drill[/bold]")
    run_flashcard_session(db_path, user_id, get_due_cards(db_path, user_id, limit=15))


def cmd_quiz(db_path: str, user_id: str):
    console.print("\n[bold]Quiz Game[/bold]")
    count = max(1, IntPrompt.ask("Number of questions", default=10, console=console))
    run_quiz_session(db_path, user_id, get_quiz_questions(db_path, user_id, count=count))


def cmd_hangman(db_path: str, user_id: str):
    console.print("\n[bold]Hangman[/bold]")
    run_hangman_session(db_path, user_id, get_due_cards(db_path, user_id, limit=5))


def get_interim_questions(db_path: str, user_id: str, rng=None) -> list:
    """Interim questions drawn from every card with progress, leeches included."""
    return build_interim_test(load_pool(db_path, user_id, reviewed_only=False), rng=rng)


def cmd_interim(db_path: str, user_id: str):
    questions = get_interim_questions(db_path, user_id)
    if not questions:
        console.print("[yellow]Review some words first - nothing to test yet.[/yellow]")
        return
    weak = sum(1 for q in questions if q.is_weak)
    console.print(Panel(
        f"{len(questions)} questions: [red]{weak} weak[/red] + [green]{len(questions) - weak} mastered[/green]\n"
        f"{InterimTestSession.time_limit} seconds per question. Wrong answers reset the word.",
        title="Interim Test", border_style="magenta",
    ))
    session = InterimTestSession(questions)
    run_test_session(session)
    result = session.result
    failed = apply_interim_result(db_path, user_id, result)
    console.print(
        f"\n[bold]{result.correct}/{result.total} correct.[/bold] "
        f"{len(result.leech_ids)} leech(es) reset, {len(result.bonus_ids)} word(s) boosted."
    )
    if failed:
        console.print(f"[yellow]{len(failed)} word(s) could not be saved.[/yellow]")


def cmd_posttest(db_path: str, user_id: str):
    mode = Prompt.ask("Test mode", choices=["retest", "all"], default="retest")
    questions = build_post_test(load_pool(db_path, user_id, reviewed_only=False), mode=mode)
    if not questions:
        console.print("[yellow]No words available for this test mode.[/yellow]")
        return
    session = PostTestSession(questions)
    run_test_session(session)
    result = session.result
    record_post_test(db_path, user_id, result)
    console.print(f"\n[bold]Final score: {result.score}% ({result.correct}/{result.total})[/bold]")
    if result.wrong_words:
        table = Table(title="Missed Words")
        table.add_column("Word", style="cyan")
        table.add_column("Your answer", style="red")
        table.add_column("Correct", style="green")
        for w in result.wrong_words:
            table.add_row(w.front, w.back, w.correct)
        console.print(table)


def cmd_dashboard(db_path: str, user_id: str):
    stats = get_study_stats(db_path, user_id)
    color = get_mastery_color(stats["avg_srs_score"])
    label = get_mastery_label(stats["avg_srs_score"])
    console.print(Panel(
        f"Average SRS score: [bold]{stats['avg_srs_score']}[/bold] [{color}]{label}[/{color}]",
        title="Progress Dashboard", border_style="blue",
    ))
    table = Table(title="Words by Level")
    table.add_column("Level", justify="right")
    table.add_column("Words", justify="right")
    for level, n in get_level_distribution(db_path, user_id).items():
        table.add_row(str(level), str(n))
    console.print(table)
    console.print(f"\n  Reviewed: [bold]{stats['cards_reviewed']}[/bold]/{stats['total_cards']}  |  "
                  f"Weak: [bold red]{stats['weak']}[/bold red]  |  "
                  f"Mastered: [bold green]{stats['mastered']}[/bold green]  |  "
                  f"Due today: [bold]{stats['due_today']}[/bold]  |  "
                  f"Sessions: [bold]{stats['sessions_completed']}[/bold]")


def cmd_weak(db_path: str, user_id: str):
    words = get_weak_words(db_path, user_id, limit=10)
    if not words:
        console.print("[green]No weak words detected! Keep up the good work.[/green]")
        return
    table = Table(title="Hardest Words")
    table.add_column("Word", style="cyan")
    table.add_column("Meaning")
    table.add_column("Misses", justify="right")
    table.add_column("Difficulty", justify="right")
    for w in words:
        table.add_row(w["word"], w["meaning"], str(w["times_wrong"]), f"{w['difficulty_score']:.2f}")
    console.print(table)


COMMANDS = {
    "flashcards": cmd_flashcards,
    "quiz": cmd_quiz,
    "hangman": cmd_hangman,
    "interim": cmd_interim,
    "posttest": cmd_posttest,
    "dashboard": cmd_dashboard,
    "weak": cmd_weak,
}


def main():
    logging.basicConfig(
        level=logging.WARNING, format="%(message)s", handlers=[RichHandler(console=console)],
    )
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_all(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")
    user_id = get_current_user(db_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="flashcards").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]See you next time![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(db_path, user_id)
        except SessionExitRequested:
            console.print("\n[dim]Left the session.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except ThaiVocabError as e:
            logger.exception("Command %s failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
