"""Interactive command-line fact checker."""

import asyncio

from rich import print
from rich.markup import escape

from .domain.errors import FactCheckError
from .domain.models.verification import Verdict, VerdictStatus
from .infrastructure.config import FactCheckConfig, configure_logging
from .infrastructure.dependencies import ServiceContainer

QUIT_WORDS = ("quit", "exit", "q")

STATUS_STYLES = {
    VerdictStatus.TRUE: "green",
    VerdictStatus.FALSE: "red",
    VerdictStatus.MIXED: "yellow",
    VerdictStatus.UNVERIFIED: "dim",
}


def format_verdict(verdict: Verdict, cached: bool) -> str:
    """Render a verdict as rich console markup."""
    style = STATUS_STYLES[verdict.status]
    lines = [
        "",
        "[bold]Results:[/bold]" + (" [dim](cached)[/dim]" if cached else ""),
        f"[bold]Status:[/bold] [{style}]{verdict.status.value}[/{style}]",
        f"[bold]Confidence:[/bold] {verdict.confidence:.2%}",
        "",
        f"[bold]Reasoning:[/bold] {escape(verdict.reasoning)}",
    ]
    if verdict.sources:
        lines.extend(["", "[bold blue]Sources:[/bold blue]"])
        lines.extend(f"{i}. {escape(url)}" for i, url in enumerate(verdict.sources, 1))
    return "\n".join(lines)


async def main():
    """Run the fact checker loop."""
    config = FactCheckConfig.from_env()
    configure_logging("WARNING" if config.log_level == "INFO" else config.log_level)

    print("[bold blue]FactCheckr - multi-source fact checking[/bold blue]")
    print("---------------------------------------")

    container = ServiceContainer(config=config)
    try:
        service = await container.get_fact_checking_service()
        while True:
            statement = await asyncio.to_thread(
                input, "\nEnter a claim to fact-check (or 'quit' to exit): "
            )
            if statement.strip().lower() in QUIT_WORDS:
                break
            if not statement.strip():
                continue

            print("\n[yellow]Checking facts...[/yellow]")
            try:
                verdict, cached = await service.check(statement)
                print(format_verdict(verdict, cached))
            except (FactCheckError, ValueError) as e:
                print(f"\n[red]Error checking facts:[/red] {escape(str(e))}")
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        await container.shutdown()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
