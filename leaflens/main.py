"""Entry point — wires Config → GeminiVisionClient → LeafAnalyzer."""
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown

from leaflens.analyzer import AnalysisReport, LeafAnalyzer
from leaflens.config import Config
from leaflens.constants import MSG_USAGE
from leaflens.models import BinaryAsset
from leaflens.vision.gemini import GeminiVisionClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def _render(console: Console, path: str, report: AnalysisReport) -> None:
    console.rule(path)
    match report:
        case AnalysisReport(text=str() as text, error=None):
            console.print(Markdown(text))
        case AnalysisReport(error=error):
            console.print(f"[bold red]{error}[/]")


async def _analyze_all(paths: list[str], analyzer: LeafAnalyzer, console: Console) -> int:
    failures = 0
    for path in paths:
        report = await analyzer.analyze(BinaryAsset.from_path(path))
        _render(console, path, report)
        failures += 0 if report.ok else 1
    return 1 if failures else 0


async def _run(paths: list[str], config: Config, console: Console) -> int:
    vision = GeminiVisionClient(config)
    try:
        return await _analyze_all(paths, LeafAnalyzer(vision), console)
    finally:
        await vision.aclose()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    console = Console()
    match args:
        case [] | ["-h"] | ["--help"]:
            console.print(MSG_USAGE)
            return 2
        case _:
            pass

    config = Config.from_env()
    _setup_logging(config.log_level)

    return asyncio.run(_run(args, config, console))


if __name__ == "__main__":
    sys.exit(main())
