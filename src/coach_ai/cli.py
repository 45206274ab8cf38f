#!/usr/bin/env python3
"""
Coach AI CLI.

Terminal stand-in for the app screens, talking to the local database and
the coach functions.

Usage:
    coach-ai onboard            # Onboarding questions
    coach-ai generate           # Generate a new AI routine
    coach-ai dashboard          # Streak, XP, weekly activity, coach insight
    coach-ai train              # Guided session over the active routine
    coach-ai free-train "Press banca" "Sentadilla"
    coach-ai vision --auto      # Camera form analysis every 4 s
    coach-ai chat --voice       # Chat with the coach, replies spoken
    coach-ai summary            # Last session summary
    coach-ai profile            # Profile and stats
    coach-ai goal --goal strength --level advanced
    coach-ai notifications --time 07:00 --days lunes jueves
    coach-ai serve              # Run the functions API
"""

import argparse
import asyncio
import base64
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import httpx
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from .client.api_client import CoachAPIClient
from .client.audio import VoiceClient
from .client.camera import AUTO_INTERVAL_SECONDS, AutoAnalyzer, Camera, CameraError
from .config import Settings, get_settings
from .db import create_adapter
from .db.repositories import (
    NotificationRepository,
    ProfileRepository,
    RoutineRepository,
    SessionRepository,
)
from .exceptions import CoachAIError
from .models.chat import ChatMessage
from .models.form_analysis import FormAnalysis, Severity
from .models.notice import Notice, NoticeLevel
from .models.notifications import TRAINING_TIMES, WEEK_DAYS, PushSubscription
from .models.profile import (
    ONBOARDING_LEVELS,
    ONBOARDING_OBJECTIVES,
    TRAINING_FREQUENCIES,
    ExperienceLevel,
    Goal,
    OnboardingAnswers,
)
from .services.coach_chat import collect_user_context
from .services.insights import WEEKDAY_INITIALS, InsightService, format_duration
from .services.profile_service import ProfileService
from .training.catalog import search_exercises, select_exercise
from .training.controller import (
    FreeTrainingController,
    TrainingController,
    TrainingSessionController,
)
from .training.state_machine import ChoosingRest, Exercising, Resting, format_weight
from .utils.log_sanitizer import install_log_sanitizer

console = Console()

SEVERITY_COLORS = {
    Severity.GOOD: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}

NOTICE_COLORS = {
    NoticeLevel.SUCCESS: "green",
    NoticeLevel.ERROR: "red",
    NoticeLevel.INFO: "cyan",
}


@dataclass
class Stores:
    """Repositories over one database adapter."""
    profiles: ProfileRepository
    routines: RoutineRepository
    sessions: SessionRepository
    notifications: NotificationRepository

    @classmethod
    def from_settings(cls, settings: Settings) -> "Stores":
        adapter = create_adapter(settings)
        return cls(
            profiles=ProfileRepository(adapter),
            routines=RoutineRepository(adapter),
            sessions=SessionRepository(adapter),
            notifications=NotificationRepository(adapter),
        )


def require_user(settings: Settings) -> str:
    if not settings.cli_user_id:
        console.print("[red]CLI_USER_ID is not configured.[/red] Set it in .env or the environment.")
        sys.exit(1)
    return settings.cli_user_id


def print_notice(notice: Notice) -> None:
    color = NOTICE_COLORS.get(notice.level, "white")
    console.print(f"[{color}]{notice.message}[/{color}]")


def print_error(error: Exception) -> None:
    message = error.message if isinstance(error, CoachAIError) else str(error)
    console.print(f"[red]Error:[/red] {message}")


# =============================================================================
# Onboarding / profile
# =============================================================================

def cmd_onboard(args, stores: Stores, settings: Settings):
    """Ask the onboarding questions and store the answers."""
    user_id = require_user(settings)
    console.print()
    console.print(Panel("[bold]¡Hola! Soy tu Coach IA[/bold]\nVamos a conocerte para crear tu plan."))

    objective = args.objective or Prompt.ask(
        "¿Cuál es tu objetivo principal?", choices=list(ONBOARDING_OBJECTIVES)
    )
    frequency = args.frequency or Prompt.ask(
        "¿Cuántos días a la semana puedes entrenar?", choices=list(TRAINING_FREQUENCIES)
    )
    level = args.level or Prompt.ask(
        "¿Cuál es tu nivel de experiencia?", choices=list(ONBOARDING_LEVELS)
    )

    service = ProfileService(stores.profiles, stores.notifications)
    try:
        profile = service.onboard(
            user_id,
            OnboardingAnswers(
                objective=objective,
                frequency=frequency,
                level=level,
                full_name=args.name,
                weight_kg=args.weight,
                height_cm=args.height,
            ),
        )
    except CoachAIError as e:
        print_error(e)
        sys.exit(1)

    console.print()
    console.print(f"[green]¡Perfecto![/green] Objetivo: {profile.goal_enum.label}, nivel: {profile.level_enum.label}")
    console.print("Genera tu primer plan con: [cyan]coach-ai generate[/cyan]")


def cmd_profile(args, stores: Stores, settings: Settings):
    """Show profile, stats and reminder preferences."""
    user_id = require_user(settings)
    service = ProfileService(stores.profiles, stores.notifications)
    profile = service.profile(user_id)
    if profile is None:
        console.print("[yellow]No profile yet.[/yellow] Run [cyan]coach-ai onboard[/cyan] first.")
        return

    table = Table(title=profile.full_name or "Perfil", box=box.ROUNDED)
    table.add_column("Campo", style="cyan")
    table.add_column("Valor", style="white")
    table.add_row("Objetivo", profile.goal_enum.label if profile.goal_enum else "-")
    table.add_row("Nivel", profile.level_enum.label if profile.level_enum else "-")
    table.add_row("Peso", f"{profile.weight_kg} kg" if profile.weight_kg else "-")
    table.add_row("Altura", f"{profile.height_cm} cm" if profile.height_cm else "-")
    table.add_row("Racha", f"{profile.streak_days} días")
    table.add_row("XP total", str(profile.total_xp))

    preferences = service.preferences(user_id)
    table.add_row("Notificaciones", "activadas" if preferences.notifications_enabled else "desactivadas")
    table.add_row("Hora preferida", preferences.preferred_training_time)
    table.add_row("Días", ", ".join(preferences.training_days) or "-")
    console.print(table)


def cmd_goal(args, stores: Stores, settings: Settings):
    """Change goal and experience level."""
    user_id = require_user(settings)
    service = ProfileService(stores.profiles, stores.notifications)
    profile = service.profile(user_id)
    if profile is None:
        console.print("[yellow]No profile yet.[/yellow] Run [cyan]coach-ai onboard[/cyan] first.")
        return
    goal = args.goal or profile.goal or Goal.MAINTAIN.value
    level = args.level or profile.experience_level or ExperienceLevel.BEGINNER.value
    print_notice(service.update_goal(user_id, goal, level))


def cmd_notifications(args, stores: Stores, settings: Settings):
    """Reminder time, training days and the push subscription."""
    user_id = require_user(settings)
    service = ProfileService(stores.profiles, stores.notifications)

    if args.subscribe:
        try:
            data = json.loads(Path(args.subscribe).read_text(encoding="utf-8"))
            subscription = PushSubscription.from_dict(data)
        except (OSError, ValueError, KeyError) as e:
            console.print(f"[red]Invalid subscription file:[/red] {e}")
            sys.exit(1)
        print_notice(service.subscribe(user_id, subscription))
    elif args.unsubscribe:
        print_notice(service.unsubscribe(user_id))

    if args.time or args.days:
        current = service.preferences(user_id)
        try:
            notice = service.save_preferences(
                user_id,
                args.time or current.preferred_training_time,
                args.days or current.training_days,
            )
        except CoachAIError as e:
            print_error(e)
            sys.exit(1)
        print_notice(notice)

    if args.test:
        result = asyncio.run(_send_test_push(settings, user_id))
        if result.success:
            console.print("[green]Notificación de prueba enviada[/green]")
        else:
            console.print(f"[red]No se pudo enviar:[/red] {result.reason}")

    preferences = service.preferences(user_id)
    console.print(
        f"Notificaciones: {'[green]activadas[/green]' if preferences.notifications_enabled else '[dim]desactivadas[/dim]'}"
        f" | {preferences.preferred_training_time} | {', '.join(preferences.training_days)}"
    )


async def _send_test_push(settings: Settings, user_id: str):
    async with CoachAPIClient(settings, access_token=settings.supabase_service_key) as api:
        return await api.send_push(user_id, body="Notificación de prueba de tu Coach IA")


# =============================================================================
# Routine generation / dashboard / summary
# =============================================================================

def print_routine(routine) -> None:
    header = routine.name
    if routine.estimated_duration_minutes:
        header += f" ({routine.estimated_duration_minutes} min)"
    table = Table(title=header, box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Ejercicio", style="cyan")
    table.add_column("Series", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Peso")
    table.add_column("Descanso", justify="right")
    for exercise in routine.exercises:
        table.add_row(
            str(exercise.order_index + 1),
            exercise.name,
            str(exercise.sets),
            exercise.reps,
            exercise.weight_suggestion or "-",
            f"{exercise.rest_seconds}s",
        )
    if routine.description:
        console.print(routine.description)
    console.print(table)


def cmd_generate(args, stores: Stores, settings: Settings):
    """Generate a new routine (replaces the active one)."""
    console.print()
    try:
        with console.status("Creando tu plan personalizado..."):
            routine = asyncio.run(_generate(settings))
    except (CoachAIError, httpx.HTTPError) as e:
        print_error(e)
        sys.exit(1)
    console.print("[green]¡Tu plan está listo![/green]")
    print_routine(routine)


async def _generate(settings: Settings):
    async with CoachAPIClient(settings) as api:
        return await api.generate_workout()


def cmd_dashboard(args, stores: Stores, settings: Settings):
    """Streak, XP, this week's sessions and the coach insight."""
    user_id = require_user(settings)
    dashboard = InsightService(stores.profiles, stores.sessions).dashboard(user_id)
    profile = dashboard.profile

    console.print()
    name = profile.first_name if profile and profile.first_name else "atleta"
    stats = Text()
    stats.append(f"Racha: {profile.streak_days if profile else 0} días", style="bold yellow")
    stats.append("   ")
    stats.append(f"XP: {profile.total_xp if profile else 0}", style="bold cyan")
    console.print(Panel(stats, title=f"Hola, {name}"))

    console.print(Panel(dashboard.insight, title="Coach IA", border_style="magenta"))

    week = Table(title="Esta semana", box=box.SIMPLE)
    for initial in WEEKDAY_INITIALS:
        week.add_column(initial, justify="center")
    week.add_row(*["●" * count if count else "·" for count in dashboard.week.sessions_per_day])
    console.print(week)
    console.print(
        f"{dashboard.week.total_sessions} sesiones, {dashboard.week.total_minutes} min, "
        f"{dashboard.week.total_xp} XP"
    )

    routine = stores.routines.get_active(user_id)
    if routine:
        console.print()
        print_routine(routine)
    else:
        console.print("\nNo tienes rutina activa. Genera una con [cyan]coach-ai generate[/cyan]")


def cmd_summary(args, stores: Stores, settings: Settings):
    """Summary of the most recent completed session."""
    user_id = require_user(settings)
    session = stores.sessions.last_completed(user_id)
    if session is None:
        console.print("[yellow]Todavía no has completado ningún entrenamiento.[/yellow]")
        return
    sets = stores.sessions.sets_for_session(session.id)
    exercises = len({s.exercise_name for s in sets})

    table = Table(title="¡Entrenamiento completado!", box=box.ROUNDED, show_header=False)
    table.add_column("", style="cyan")
    table.add_column("", style="bold white")
    table.add_row("Duración", format_duration(session.duration_seconds or 0))
    table.add_row("XP ganada", f"+{session.xp_earned or 0}")
    table.add_row("Ejercicios", str(exercises))
    table.add_row("Series", str(len(sets)))
    console.print(table)


# =============================================================================
# Training
# =============================================================================

def sync_clock(controller: TrainingController, since: float) -> float:
    """Feed elapsed wall-clock seconds to the session; returns the new mark."""
    seconds = int(time.monotonic() - since)
    for _ in range(seconds):
        controller.tick()
    return since + seconds


def run_rest(controller: TrainingController) -> None:
    """Count the rest down in real time; Ctrl+C skips it."""
    try:
        with console.status("") as status:
            while isinstance(controller.state.phase, Resting):
                status.update(f"Descanso: {controller.state.rest_remaining}s  (Ctrl+C para saltar)")
                time.sleep(1)
                controller.tick()
    except KeyboardInterrupt:
        if isinstance(controller.state.phase, Resting):
            controller.skip_rest()


def print_exercise(controller: TrainingController) -> None:
    exercise = controller.current_exercise
    state = controller.state
    console.print()
    title = f"{exercise.name}  [dim]{controller.progress:.0f}%  {format_duration(state.elapsed_seconds)}[/dim]"
    if state.paused:
        title += "  [yellow]PAUSA[/yellow]"
    lines = [
        f"Serie {state.set_number} de {exercise.sets}  |  {exercise.reps} reps",
        f"Peso: {format_weight(controller.current_weight)}",
    ]
    if exercise.notes:
        lines.append(f"[dim]{exercise.notes}[/dim]")
    console.print(Panel("\n".join(lines), title=title))


def run_session(controller: TrainingController) -> None:
    """Interactive loop shared by guided and free training."""
    mark = time.monotonic()
    while not controller.finished:
        for notice in controller.drain_notices():
            print_notice(notice)
        phase = controller.state.phase

        if isinstance(phase, Exercising):
            print_exercise(controller)
            choice = console.input("[Enter] serie hecha  [+/-] peso  [p] pausa  [f] fin > ").strip().lower()
            mark = sync_clock(controller, mark)
            if choice == "":
                controller.complete_set()
            elif choice in ("+", "-"):
                controller.adjust_weight(2.5 if choice == "+" else -2.5)
            elif choice == "p":
                controller.toggle_pause()
            elif choice == "f":
                controller.finish()

        elif isinstance(phase, ChoosingRest):
            choice = Prompt.ask(f"¿Descansar {phase.rest_seconds}s o continuar?", choices=["d", "c"], default="d")
            mark = sync_clock(controller, mark)
            if choice == "d":
                controller.choose_rest()
                run_rest(controller)
                mark = time.monotonic()
            else:
                controller.choose_continue()

    for notice in controller.drain_notices():
        print_notice(notice)
    summary = controller.summary
    if summary:
        console.print()
        console.print(Panel(
            f"Duración: {format_duration(summary.duration_seconds)}\n"
            f"XP ganada: +{summary.xp_earned}\n"
            f"Ejercicios completados: {summary.exercises_completed}",
            title="¡Entrenamiento completado!",
            border_style="green",
        ))


def cmd_train(args, stores: Stores, settings: Settings):
    """Guided session over the active routine."""
    user_id = require_user(settings)
    controller = TrainingSessionController(user_id, stores.routines, stores.sessions, stores.profiles)
    routine = controller.load()
    if routine is None:
        for notice in controller.drain_notices():
            print_notice(notice)
        console.print("No tienes rutina activa. Genera una con [cyan]coach-ai generate[/cyan]")
        return
    console.print(Panel(f"[bold]{routine.name}[/bold]\n{len(routine.exercises)} ejercicios"))
    run_session(controller)


def cmd_free_train(args, stores: Stores, settings: Settings):
    """Free session over exercises picked from the catalog."""
    if args.search is not None or not args.exercises:
        results = search_exercises(args.search or "")
        if not results:
            console.print("[yellow]Sin resultados[/yellow]")
            return
        for group, names in results.items():
            console.print(f"[bold cyan]{group}[/bold cyan]: {', '.join(names)}")
        return

    user_id = require_user(settings)
    try:
        selected = [select_exercise(name) for name in args.exercises]
    except KeyError as e:
        console.print(f"[red]Ejercicio desconocido:[/red] {e.args[0]}")
        sys.exit(1)
    for item in selected:
        item.sets = args.sets
        item.reps = args.reps

    controller = FreeTrainingController(user_id, stores.sessions, stores.profiles)
    controller.start(selected)
    run_session(controller)


# =============================================================================
# Vision
# =============================================================================

def print_analysis(analysis: FormAnalysis) -> None:
    score = analysis.overall_score
    color = "green" if score >= 80 else "yellow" if score >= 60 else "red"
    header = Text(f"Puntuación: {score:.0f}/100", style=f"bold {color}")
    if analysis.depth_score:
        header.append(f"   Profundidad: {analysis.depth_score}")
    if analysis.tempo is not None:
        header.append(f"   Tempo: {analysis.tempo:.1f}s")
    console.print(header)

    if analysis.issues:
        table = Table(box=box.SIMPLE)
        table.add_column("Zona", style="cyan")
        table.add_column("Estado")
        table.add_column("Corrección")
        for issue in analysis.issues:
            issue_color = SEVERITY_COLORS[issue.severity]
            table.add_row(
                issue.body_part,
                Text(issue.message, style=issue_color),
                issue.correction,
            )
        console.print(table)


def cmd_vision(args, stores: Stores, settings: Settings):
    """Form analysis from an image file or the camera."""
    try:
        asyncio.run(_vision(args, settings))
    except (CoachAIError, CameraError, httpx.HTTPError) as e:
        print_error(e)
        sys.exit(1)


async def _vision(args, settings: Settings) -> None:
    async with CoachAPIClient(settings) as api:
        async def analyze(image: str) -> FormAnalysis:
            return await api.analyze_form(image, args.exercise, args.detailed)

        if args.image:
            image = base64.b64encode(Path(args.image).read_bytes()).decode("ascii")
            print_analysis(await analyze(image))
            return

        with Camera(args.camera) as camera:
            if not args.auto:
                print_analysis(await analyze(camera.capture_base64()))
                return

            console.print(f"Análisis automático cada {args.interval:.0f}s. Ctrl+C para detener.")
            analyzer = AutoAnalyzer(
                frames=camera.read,
                analyze=analyze,
                on_result=print_analysis,
                on_error=print_error,
                interval=args.interval,
            )
            await analyzer.run()


# =============================================================================
# Chat
# =============================================================================

def cmd_chat(args, stores: Stores, settings: Settings):
    """Chat with the coach; ``--voice`` speaks the replies."""
    user_id = require_user(settings)
    context = collect_user_context(user_id, stores.profiles, stores.routines, stores.sessions)
    try:
        asyncio.run(_chat(args, settings, context))
    except KeyboardInterrupt:
        console.print()


async def _chat(args, settings: Settings, context) -> None:
    history: List[ChatMessage] = []
    async with CoachAPIClient(settings) as api:
        voice = VoiceClient(api) if args.voice or args.audio_file else None

        first: Optional[str] = args.message
        if args.audio_file:
            first = await voice.transcribe_file(Path(args.audio_file))
            if not first:
                console.print("[red]No se pudo transcribir el audio[/red]")
                return
            console.print(f"[bold]Tú:[/bold] {first}")

        console.print(Panel("Pregúntame lo que quieras sobre tu entrenamiento. 'salir' para terminar.", title="Coach IA"))
        while True:
            text = first if first is not None else console.input("[bold]Tú:[/bold] ").strip()
            first = None
            if not text:
                continue
            if text.lower() in ("salir", "exit", "quit"):
                return

            history.append(ChatMessage(role="user", content=text))
            console.print("[bold magenta]Coach:[/bold magenta] ", end="")
            reply = ""
            try:
                async for delta in api.stream_chat(history, context):
                    reply += delta
                    console.print(delta, end="", markup=False, highlight=False)
            except (CoachAIError, httpx.HTTPError) as e:
                console.print()
                print_error(e)
                history.pop()
                if args.message or args.audio_file:
                    return
                continue
            console.print()

            history.append(ChatMessage(role="assistant", content=reply))
            if voice and args.voice:
                await voice.speak(reply)
            if args.message or args.audio_file:
                return


# =============================================================================
# Server
# =============================================================================

def cmd_serve(args, stores: Optional[Stores], settings: Settings):
    """Run the functions API with uvicorn."""
    import uvicorn
    uvicorn.run(
        "coach_ai.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Coach AI - your AI personal trainer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  coach-ai onboard --objective "Ganar músculo" --frequency "4-5 días" --level Intermedio
  coach-ai generate
  coach-ai train
  coach-ai free-train --search press
  coach-ai vision --exercise Sentadilla --auto
  coach-ai chat --message "¿Cuánto debo descansar?"
  coach-ai notifications --time 07:00 --days lunes miércoles viernes
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    onboard_p = subparsers.add_parser("onboard", help="Answer the onboarding questions")
    onboard_p.add_argument("--objective", choices=list(ONBOARDING_OBJECTIVES))
    onboard_p.add_argument("--frequency", choices=list(TRAINING_FREQUENCIES))
    onboard_p.add_argument("--level", choices=list(ONBOARDING_LEVELS))
    onboard_p.add_argument("--name", help="Full name")
    onboard_p.add_argument("--weight", type=float, help="Weight in kg")
    onboard_p.add_argument("--height", type=float, help="Height in cm")

    subparsers.add_parser("generate", help="Generate a new AI routine")
    subparsers.add_parser("dashboard", help="Show streak, XP and weekly activity")
    subparsers.add_parser("train", help="Train the active routine")

    free_p = subparsers.add_parser("free-train", help="Free training from the exercise catalog")
    free_p.add_argument("exercises", nargs="*", help="Exercise names from the catalog")
    free_p.add_argument("--search", "-s", help="Search the catalog instead of training")
    free_p.add_argument("--sets", type=int, default=3, help="Sets per exercise")
    free_p.add_argument("--reps", default="12", help="Reps per set")

    vision_p = subparsers.add_parser("vision", help="Analyze exercise form")
    vision_p.add_argument("--exercise", "-e", help="Exercise being performed")
    vision_p.add_argument("--image", "-i", help="Analyze an image file instead of the camera")
    vision_p.add_argument("--camera", type=int, default=0, help="Camera index")
    vision_p.add_argument("--auto", action="store_true", help="Analyze continuously")
    vision_p.add_argument("--interval", type=float, default=AUTO_INTERVAL_SECONDS, help="Seconds between analyses")
    vision_p.add_argument("--detailed", action="store_true", help="Ask for body point statuses")

    chat_p = subparsers.add_parser("chat", help="Chat with the coach")
    chat_p.add_argument("--message", "-m", help="Send one message and exit")
    chat_p.add_argument("--voice", action="store_true", help="Speak the coach replies")
    chat_p.add_argument("--audio-file", help="Transcribe a recording and send it")

    subparsers.add_parser("summary", help="Show the last session summary")
    subparsers.add_parser("profile", help="Show profile and stats")

    goal_p = subparsers.add_parser("goal", help="Change goal and level")
    goal_p.add_argument("--goal", choices=[g.value for g in Goal])
    goal_p.add_argument("--level", choices=[lvl.value for lvl in ExperienceLevel])

    notif_p = subparsers.add_parser("notifications", help="Reminder preferences")
    notif_p.add_argument("--time", choices=list(TRAINING_TIMES), help="Preferred training time")
    notif_p.add_argument("--days", nargs="+", choices=list(WEEK_DAYS), help="Training days")
    notif_p.add_argument("--subscribe", metavar="FILE", help="Store a PushSubscription JSON file")
    notif_p.add_argument("--unsubscribe", action="store_true", help="Disable notifications")
    notif_p.add_argument("--test", action="store_true", help="Send a test notification")

    serve_p = subparsers.add_parser("serve", help="Run the functions API")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)
    serve_p.add_argument("--reload", action="store_true")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    install_log_sanitizer()
    settings = get_settings()

    commands = {
        "onboard": cmd_onboard,
        "generate": cmd_generate,
        "dashboard": cmd_dashboard,
        "train": cmd_train,
        "free-train": cmd_free_train,
        "vision": cmd_vision,
        "chat": cmd_chat,
        "summary": cmd_summary,
        "profile": cmd_profile,
        "goal": cmd_goal,
        "notifications": cmd_notifications,
    }

    if args.command == "serve":
        cmd_serve(args, None, settings)
        return

    stores = Stores.from_settings(settings)
    try:
        commands[args.command](args, stores, settings)
    except KeyboardInterrupt:
        console.print("\n[dim]Interrumpido[/dim]")
    except CoachAIError as e:
        print_error(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
