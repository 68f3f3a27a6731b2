"""CLI entry point for TalkForge."""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv

# Load environment variables from .env.local
# Path: main.py -> talkforge/ -> src/ -> project root
load_dotenv(Path(__file__).parent.parent.parent / ".env.local")

import typer  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.logging import RichHandler  # noqa: E402
from rich.panel import Panel  # noqa: E402

from talkforge.config import get_settings  # noqa: E402
from talkforge.errors import (  # noqa: E402
    ClassificationRejection,
    ExtractionFailure,
    LookupFailure,
    ValidationError,
)
from talkforge.extractors.classifier import require_linkedin_profile  # noqa: E402
from talkforge.extractors.pdf_text import extract_text_from_pdf  # noqa: E402
from talkforge.github.client import GitHubClient  # noqa: E402
from talkforge.llm.base import DEFAULT_MODELS  # noqa: E402
from talkforge.models.topics import Topic  # noqa: E402
from talkforge.output.markdown import (  # noqa: E402
    count_formats,
    format_topics_markdown,
    save_markdown,
)
from talkforge.processors.identity import compare_names  # noqa: E402
from talkforge.processors.validation import validate_github_username  # noqa: E402
from talkforge.session.controller import SessionController  # noqa: E402
from talkforge.session.state import SpeakerKey, SpeakerState  # noqa: E402

app = typer.Typer(
    name="talkforge",
    help="TalkForge - conference talk ideas from your LinkedIn profile",
    add_completion=False,
)
console = Console()

ProviderOption = Annotated[
    str | None,
    typer.Option("--provider", "-p", help="LLM provider: google, openai or anthropic"),
]
ApiKeyOption = Annotated[
    str | None,
    typer.Option("--api-key", help="API key for the provider (default from environment)"),
]
EventOption = Annotated[
    str | None,
    typer.Option("--event", "-e", help="Event description to tailor topics to"),
]
OutputOption = Annotated[
    Path | None, typer.Option("--output", "-o", help="Save topics to a markdown file")
]

PROGRESS_LABELS = {
    "fetching-github": "Fetching GitHub data",
    "generating": "Generating topics",
    "complete": "Done",
}


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs")] = False,
) -> None:
    """Configure logging for every command."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def read_pdf(path: Path) -> bytes:
    """Read a PDF file as bytes."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    return path.read_bytes()


def content_type_for(path: Path) -> str | None:
    return mimetypes.guess_type(path.name)[0]


def print_speaker_report(label: str, speaker: SpeakerState) -> None:
    """Show name detection and GitHub lookup results for one speaker."""
    name = speaker.linkedin_name or "[dim](not detected)[/dim]"
    console.print(f"[bold]{label}[/bold] LinkedIn name: {name}")
    if speaker.gh_profile:
        console.print(f"  [green]GitHub:[/green] {speaker.gh_profile.display_name}")
    if speaker.gh_error:
        console.print(f"  [yellow]GitHub:[/yellow] {speaker.gh_error}")
    if speaker.name_warning:
        console.print(f"  [yellow]Warning:[/yellow] {speaker.name_warning}")


def print_topics(topics: list[Topic], collaborative: bool) -> None:
    """Display generated topics as panels."""
    counts = count_formats(topics)
    title = "Collaborative Talk Topics" if collaborative else "Your Talk Topics"
    console.print(
        f"\n[bold]{title}[/bold] "
        f"[dim]({counts['talks']} talks, {counts['workshops']} workshops)[/dim]"
    )
    for i, topic in enumerate(topics, start=1):
        console.print(
            Panel(
                f"{topic.description}\n\n"
                f"[dim]{topic.format_label} | {topic.duration} | {topic.audience}[/dim]",
                title=f"{i}. {topic.title}",
                title_align="left",
                border_style="blue",
            )
        )


async def _run_session(
    uploads: list[tuple[SpeakerKey, Path, bytes, str | None]],
    event: str | None,
    provider: str | None,
    api_key: str | None,
) -> SessionController:
    def on_progress(step: str) -> None:
        if step in PROGRESS_LABELS:
            console.print(f"  [green]OK[/green] {PROGRESS_LABELS[step]}")

    controller = SessionController(provider=provider, on_progress=on_progress)
    collaborative = len(uploads) > 1
    controller.set_mode("collaboration" if collaborative else "solo")

    for key, path, data, github in uploads:
        await controller.load_profile_pdf(key, path.name, data, content_type_for(path))
        speaker = controller.state.speaker(key)
        if speaker.file_error:
            return controller
        if github:
            controller.set_github_username(key, github)
            controller.commit_github_username(key)

    await controller.wait_for_lookups()

    controller.state.event_description = event or ""
    controller.state.api_key = api_key or ""

    console.print()
    if collaborative:
        await controller.generate_collab()
    else:
        await controller.generate_solo()
    return controller


def _generate(
    uploads: list[tuple[SpeakerKey, Path, str | None]],
    event: str | None,
    output: Path | None,
    provider: str | None,
    api_key: str | None,
) -> None:
    if provider is not None and provider not in DEFAULT_MODELS:
        console.print(f"[red]Error:[/red] Unknown provider: {provider}")
        raise typer.Exit(1)

    collaborative = len(uploads) > 1
    loaded = [(key, path, read_pdf(path), github) for key, path, github in uploads]
    controller = asyncio.run(_run_session(loaded, event, provider, api_key))
    state = controller.state

    for number, (key, path, _) in enumerate(uploads, start=1):
        speaker = state.speaker(key)
        label = f"Speaker {number}" if collaborative else "Profile"
        if speaker.file_error:
            console.print(f"[red]Error ({path.name}):[/red] {speaker.file_error}")
            raise typer.Exit(1)
        print_speaker_report(label, speaker)

    if state.error:
        console.print(f"\n[red]Error:[/red] {state.error}")
        raise typer.Exit(1)

    print_topics(state.topics, collaborative)

    if output:
        save_markdown(format_topics_markdown(state.topics), output)
        console.print(f"\n[green]Topics saved to:[/green] {output}")


@app.command()
def check(
    pdf: Annotated[Path, typer.Argument(help="Path to a LinkedIn profile PDF export")],
    github: Annotated[
        str | None,
        typer.Option("--github", "-g", help="GitHub username to cross-check the name with"),
    ] = None,
) -> None:
    """Check that a PDF is a LinkedIn export and detect the profile name."""
    console.print(
        Panel.fit(
            "[bold blue]TalkForge[/bold blue] - Checking profile export",
            border_style="blue",
        )
    )

    try:
        text = extract_text_from_pdf(read_pdf(pdf))
        result = require_linkedin_profile(text)
    except (ExtractionFailure, ClassificationRejection) as e:
        console.print(f"[red]Rejected:[/red] {e.message}")
        raise typer.Exit(1) from e

    console.print(f"[green]Accepted[/green] ({len(text):,} characters)")
    console.print(f"[bold]Name:[/bold] {result.extracted_name or '[dim](not detected)[/dim]'}")

    if not github:
        return

    try:
        validate_github_username(github.strip()).raise_for_error()
    except ValidationError as e:
        console.print(f"[red]GitHub:[/red] {e.message}")
        raise typer.Exit(1) from e

    settings = get_settings()
    client = GitHubClient(api_base=settings.github_api_base, user_agent=settings.github_user_agent)
    try:
        profile = asyncio.run(client.fetch_profile(github.strip()))
    except LookupFailure as e:
        console.print(f"[yellow]GitHub:[/yellow] {e.message}")
        return

    if profile is None:
        console.print("[yellow]GitHub:[/yellow] GitHub user not found")
        return

    console.print(f"[bold]GitHub:[/bold] {profile.display_name}")
    comparison = compare_names(result.extracted_name, profile.name)
    if comparison.match:
        console.print("[green]Names match[/green]")
    else:
        console.print(f"[yellow]Warning:[/yellow] {comparison.warning}")


@app.command()
def generate(
    pdf: Annotated[Path, typer.Argument(help="Path to your LinkedIn profile PDF export")],
    github: Annotated[
        str | None, typer.Option("--github", "-g", help="Your GitHub username")
    ] = None,
    event: EventOption = None,
    output: OutputOption = None,
    provider: ProviderOption = None,
    api_key: ApiKeyOption = None,
) -> None:
    """Generate talk and workshop ideas for one speaker."""
    console.print(
        Panel.fit(
            "[bold blue]TalkForge[/bold blue] - Generating talk topics",
            border_style="blue",
        )
    )
    _generate([("solo", pdf, github)], event, output, provider, api_key)


@app.command()
def collab(
    pdf1: Annotated[Path, typer.Argument(help="First speaker's LinkedIn PDF export")],
    pdf2: Annotated[Path, typer.Argument(help="Second speaker's LinkedIn PDF export")],
    github1: Annotated[
        str | None, typer.Option("--github1", help="First speaker's GitHub username")
    ] = None,
    github2: Annotated[
        str | None, typer.Option("--github2", help="Second speaker's GitHub username")
    ] = None,
    event: EventOption = None,
    output: OutputOption = None,
    provider: ProviderOption = None,
    api_key: ApiKeyOption = None,
) -> None:
    """Generate topics two speakers can present together."""
    console.print(
        Panel.fit(
            "[bold blue]TalkForge[/bold blue] - Generating collaborative topics",
            border_style="blue",
        )
    )
    _generate(
        [("speaker1", pdf1, github1), ("speaker2", pdf2, github2)],
        event,
        output,
        provider,
        api_key,
    )


@app.command("compare-names")
def compare_names_command(
    linkedin_name: Annotated[str, typer.Argument(help="Name from the LinkedIn profile")],
    github_name: Annotated[str, typer.Argument(help="Display name from GitHub")],
) -> None:
    """Cross-check two display names the way uploads are checked."""
    comparison = compare_names(linkedin_name, github_name)
    if comparison.match:
        console.print("[green]Names match[/green]")
    else:
        console.print(f"[yellow]Warning:[/yellow] {comparison.warning}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from talkforge import __version__

    console.print(f"TalkForge v{__version__}")


if __name__ == "__main__":
    app()
