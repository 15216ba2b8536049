"""Interactive CLI application."""
import logging
import string
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from edugenie.config import Settings
from edugenie.db import init_db
from edugenie.doubt import DoubtScreen
from edugenie.gemini import NOTES_EMPTY, NOTES_FAILED, GenerationClient
from edugenie.models import BOARDS, CLASS_LEVELS, LANGUAGES, NOTE_STYLES, STREAMS, UserProfile
from edugenie.notes import NotesScreen, export_notes
from edugenie.planner import MAX_HOURS, MIN_HOURS, PlannerScreen
from edugenie.profile import OnboardingWizard, clear_profile, load_profile, save_profile
from edugenie.quiz import QuizSession, QuizState
from edugenie.voice import VoiceInput, VoiceUnavailableError

console = Console()

OPTION_LABELS = string.ascii_lowercase


class View(Enum):
    DOUBT = "doubt"
    NOTES = "notes"
    QUIZ = "quiz"
    PLANNER = "plan"


@dataclass
class AppState:
    settings: Settings
    client: GenerationClient
    profile: UserProfile | None = None


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def show_welcome(profile: UserProfile):
    details = f"Class {profile.class_level} | {profile.board}"
    if profile.stream:
        details += f" | {profile.stream}"
    console.print(Panel(
        f"[bold]Hi {profile.name}![/bold]\n[dim]{details} | {profile.language}[/dim]",
        title="EduGenie", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("doubt", "Ask a doubt (text, image or voice)"),
        ("notes", "Notes generator"),
        ("quiz", "Quiz master"),
        ("plan", "Study planner"),
        ("profile", "Redo onboarding"),
        ("logout", "Forget your profile"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def notice(message: str) -> None:
    """Blocking notice the student has to acknowledge."""
    console.print(Panel(message, border_style="yellow"))
    Prompt.ask("[dim]Press Enter to continue[/dim]", default="", show_default=False)


# --- Onboarding ---


def run_onboarding() -> UserProfile:
    wizard = OnboardingWizard()
    console.print(Panel("[bold]Welcome to EduGenie[/bold]\n[dim]Your AI Study Companion[/dim]", border_style="blue"))
    while True:
        console.print(f"\n[dim]Step {wizard.step} of {wizard.STEPS}[/dim]")
        if wizard.step == 1:
            wizard.set_name(Prompt.ask("What's your name?"))
            wizard.set_class_level(Prompt.ask("Which class are you in?", choices=list(CLASS_LEVELS)))
        elif wizard.step == 2:
            wizard.set_board(Prompt.ask("Select your board", choices=list(BOARDS), default=wizard.board))
            if wizard.needs_stream:
                wizard.set_stream(Prompt.ask("Stream", choices=list(STREAMS)))
        else:
            wizard.set_language(Prompt.ask("Preferred language", choices=list(LANGUAGES), default=wizard.language))
        if not wizard.can_advance():
            console.print("[red]Please enter your name to continue.[/red]")
            continue
        profile = wizard.next()
        if profile is not None:
            return profile


# --- Doubt solver ---


def render_message(message) -> None:
    if message.role == "user":
        body = message.text or "[dim](image)[/dim]"
        if message.image:
            body += "\n[dim]📎 image attached[/dim]"
        console.print(Panel(body, title="You", title_align="right", border_style="cyan"))
    else:
        console.print(Panel(Markdown(message.text), title="EduGenie", border_style="green"))


def capture_voice(screen: DoubtScreen, profile: UserProfile) -> None:
    try:
        voice = VoiceInput(profile.language)
        with console.status(f"Listening ({voice.locale})..."):
            transcript = voice.listen()
    except VoiceUnavailableError:
        notice("Voice input is not supported on this machine.")
        return
    if transcript:
        screen.append_transcript(transcript)
        console.print(f"[dim]Heard:[/dim] {screen.input}")
    else:
        console.print("[yellow]Didn't catch that. Try again or type your doubt.[/yellow]")


def cmd_doubt(state: AppState):
    screen = DoubtScreen()
    console.print(
        "\n[bold]Ask a Doubt[/bold] [dim]/image <path>  /voice  /fun  /back[/dim]"
    )
    while True:
        mode = "[magenta]fun[/magenta] " if screen.funny_mode else ""
        text = Prompt.ask(f"\n{mode}[bold]?[/bold]", default=screen.input, show_default=bool(screen.input))
        command = text.strip()
        if command == "/back":
            screen.tracker.abandon()
            return
        if command == "/fun":
            on = screen.toggle_funny_mode()
            console.print(f"[dim]Fun mode {'on' if on else 'off'}.[/dim]")
            continue
        if command == "/voice":
            capture_voice(screen, state.profile)
            continue
        if command.startswith("/image"):
            path = command[len("/image"):].strip() or Prompt.ask("Image path")
            try:
                screen.attach_image(path)
            except (OSError, ValueError) as e:
                console.print(f"[red]Could not attach image: {e}[/red]")
                continue
            console.print(f"[green]Attached {Path(path).name}[/green]")
            continue
        screen.input = text
        started = screen.begin()
        if started is None:
            continue
        token, message = started
        render_message(message)
        with console.status("EduGenie is thinking..."):
            answer = state.client.solve_doubt(message.text, message.image, state.profile, screen.funny_mode)
        if screen.receive(token, answer):
            render_message(screen.messages[-1])


# --- Notes ---


def cmd_notes(state: AppState):
    screen = NotesScreen()
    console.print("\n[bold]Magic Notes[/bold]")
    while True:
        topic = Prompt.ask(
            "Topic (e.g. Photosynthesis, Newton's Laws)",
            default=screen.topic, show_default=bool(screen.topic),
        ).strip()
        if not topic:
            console.print("[yellow]Enter a topic to generate notes.[/yellow]")
            return
        screen.set_style(Prompt.ask("Style", choices=list(NOTE_STYLES), default=screen.style))
        token = screen.begin(topic)
        with console.status("Writing your notes..."):
            notes = state.client.generate_notes(screen.topic, screen.style, state.profile)
        screen.receive(token, notes)
        if screen.notes in (NOTES_FAILED, NOTES_EMPTY):
            console.print(f"[red]{screen.notes} Please try again.[/red]")
            if Confirm.ask("Try again?", default=True):
                continue
            return
        console.print(Panel(Markdown(screen.notes), title=f"{screen.topic} ({screen.style})", border_style="green"))
        if Confirm.ask("Save these notes to a file?", default=False):
            directory = Prompt.ask("Folder", default=str(Path.cwd()))
            path = export_notes(screen.notes, screen.topic, screen.style, directory)
            console.print(f"[green]Saved to {path}[/green]")
        return


# --- Quiz ---


def run_quiz(session: QuizSession) -> None:
    while session.state is QuizState.PLAYING:
        q = session.current_question
        console.print(
            f"\n[dim]Question {session.index + 1} of {session.total}[/dim]"
            f"  [bold]Score: {session.score}[/bold]"
        )
        console.print(f"[bold]{q.question}[/bold]\n")
        labels = list(OPTION_LABELS[:len(q.options)])
        for label, option in zip(labels, q.options):
            console.print(f"  [cyan]{label})[/cyan] {option}")
        answer = Prompt.ask("\nYour answer", choices=labels)
        idx = labels.index(answer)
        session.select_option(idx)
        if q.is_correct(idx):
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{labels[q.correct_answer]}) {q.options[q.correct_answer]}[/green]")
        if q.explanation:
            console.print(Panel(q.explanation, title="Explanation", border_style="blue"))
        next_label = "Finish quiz" if session.is_last_question else "Next question"
        Prompt.ask(f"[dim]Press Enter: {next_label}[/dim]", default="", show_default=False)
        session.advance()


def cmd_quiz(state: AppState):
    session = QuizSession(count=state.settings.quiz_size)
    console.print("\n[bold]Quiz Master[/bold]")
    while True:
        topic = Prompt.ask("Topic (e.g. Thermodynamics, Algebra)").strip()
        if not topic:
            console.print("[yellow]Enter a topic to start a quiz.[/yellow]")
            return
        token = session.begin(topic)
        with console.status("Preparing your quiz..."):
            questions = state.client.generate_quiz(session.topic, session.count, state.profile)
        if not session.receive(token, questions):
            console.print("[red]Couldn't create a quiz for that topic. Please try again.[/red]")
            continue
        run_quiz(session)
        console.print(Panel(
            f"[bold]{session.score}/{session.total}[/bold]",
            title="Quiz Completed!", border_style="yellow",
        ))
        session.restart()
        if not Confirm.ask("Try another topic?", default=True):
            return


# --- Planner ---


def render_plan(plan) -> None:
    for day in plan:
        table = Table(title=day.day, title_style="bold cyan", show_lines=False)
        table.add_column("Time", style="dim")
        table.add_column("Subject", style="bold")
        table.add_column("Topic")
        for slot in day.sessions:
            table.add_row(slot.time, slot.subject, slot.topic)
        console.print(table)


def cmd_planner(state: AppState):
    screen = PlannerScreen()
    console.print("\n[bold]Smart Study Planner[/bold] [dim](blank line to finish, -Name to remove)[/dim]")
    while True:
        entry = Prompt.ask("Subject", default="", show_default=False).strip()
        if not entry:
            break
        if entry.startswith("-"):
            screen.remove_subject(entry[1:].strip())
        elif not screen.add_subject(entry):
            console.print(f"[dim]{entry} is already on the list.[/dim]")
        console.print(f"[dim]Subjects: {', '.join(screen.subjects) or 'none yet'}[/dim]")
    if not screen.subjects:
        console.print("[yellow]No subjects added yet.[/yellow]")
        return
    hours = IntPrompt.ask(
        f"Study hours per day ({MIN_HOURS}-{MAX_HOURS})",
        choices=[str(h) for h in range(MIN_HOURS, MAX_HOURS + 1)],
        default=screen.hours,
        show_choices=False,
    )
    screen.set_hours(hours)
    while True:
        token = screen.begin()
        with console.status("Building your timetable..."):
            plan = state.client.generate_study_plan(screen.hours, list(screen.subjects), state.profile)
        if screen.receive(token, plan):
            render_plan(screen.plan)
            return
        console.print("[red]Couldn't build a timetable.[/red]")
        if not Confirm.ask(f"Try again with {', '.join(screen.subjects)}?", default=True):
            return


VIEW_HANDLERS = {
    View.DOUBT: cmd_doubt,
    View.NOTES: cmd_notes,
    View.QUIZ: cmd_quiz,
    View.PLANNER: cmd_planner,
}


def render_view(view: View, state: AppState) -> None:
    handler = VIEW_HANDLERS.get(view, cmd_doubt)
    handler(state)


def parse_view(choice: str) -> View | None:
    try:
        return View(choice)
    except ValueError:
        return None


def onboard(state: AppState) -> None:
    state.profile = run_onboarding()
    save_profile(state.settings.db_path, state.profile)
    show_welcome(state.profile)


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    init_db(settings.db_path)
    state = AppState(settings=settings, client=GenerationClient(settings))
    state.profile = load_profile(settings.db_path)
    if state.profile is not None:
        show_welcome(state.profile)

    while True:
        if state.profile is None:
            # no feature runs without a profile
            try:
                onboard(state)
            except KeyboardInterrupt:
                console.print("\n[dim]Finish onboarding to continue.[/dim]")
            continue
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default=View.DOUBT.value).strip().lower()
        try:
            view = parse_view(choice)
            if view is not None:
                render_view(view, state)
            elif choice == "profile":
                onboard(state)
            elif choice == "logout":
                clear_profile(settings.db_path)
                state.profile = None
                console.print("[dim]Logged out.[/dim]")
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Happy studying![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
