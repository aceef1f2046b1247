"""Main entry point for CV-Tailor."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from cv_tailor import __version__
from cv_tailor.config.settings import Settings
from cv_tailor.utils.logging import configure_logging

logger = logging.getLogger("cv_tailor")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cv-tailor",
        description="CV-Tailor: tailor a CV to a job description and export a one-page PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cv_tailor tailor --cv cv.yaml --jd-url https://example.com/jobs/123
  python -m cv_tailor tailor --cv cv.yaml --generate-only
  python -m cv_tailor tinker --cv cv.yaml --prompt "Emphasise leadership"
  python -m cv_tailor extract https://example.com/jobs/123
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG-level logs to this file",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available operating modes",
    )

    # Tailor mode
    tailor_parser = subparsers.add_parser(
        "tailor",
        help="Tailor a CV to a job description and export it",
    )
    _add_cv_arguments(tailor_parser)
    jd_group = tailor_parser.add_mutually_exclusive_group()
    jd_group.add_argument(
        "--jd",
        type=Path,
        default=None,
        help="Path to a previously extracted job description JSON",
    )
    jd_group.add_argument(
        "--jd-url",
        default=None,
        help="URL of the job posting to scrape",
    )
    tailor_parser.add_argument(
        "--generate-only",
        action="store_true",
        help="Skip tailoring and export the CV as is",
    )
    tailor_parser.add_argument(
        "--visualise-scraping",
        action="store_true",
        help="Show the browser window while scraping",
    )

    # Tinker mode
    tinker_parser = subparsers.add_parser(
        "tinker",
        help="Rewrite a CV following a free-form prompt and export it",
    )
    _add_cv_arguments(tinker_parser)
    tinker_parser.add_argument(
        "--prompt",
        required=True,
        help="Instructions for rewriting the CV",
    )

    # Extract mode
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract a job description only (component mode)",
    )
    extract_parser.add_argument(
        "url",
        nargs="?",
        help="URL of the job posting to scrape",
    )
    extract_parser.add_argument(
        "--text",
        default=None,
        help="Job description text (instead of a URL)",
    )
    extract_parser.add_argument(
        "--visualise-scraping",
        action="store_true",
        help="Show the browser window while scraping",
    )

    return parser


def _add_cv_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cv",
        type=Path,
        default=Path("cv.yaml"),
        help="Path to the CV (YAML or JSON, default: cv.yaml)",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output file name (without extension)",
    )
    parser.add_argument(
        "--accept-all",
        action="store_true",
        help="Accept every proposal without review",
    )
    parser.add_argument(
        "--allow-multipage",
        action="store_true",
        help="Export even if the CV does not fit on one page",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also write the rendered HTML next to the PDF",
    )


def _load_cv(path: Path):
    """Load the CV, printing a diagnostic and returning None on failure."""
    from cv_tailor.cv.loader import CVValidationError, load_cv

    try:
        return load_cv(path)
    except CVValidationError as e:
        print(e.report(), file=sys.stderr)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
    print("CV loading failed", file=sys.stderr)
    return None


async def _read_job_text(url: str | None, *, visualise: bool) -> str:
    """Get raw job description text from a URL or, if none, interactively."""
    from cv_tailor.extractor.scraper import scrape_url
    from cv_tailor.hitl.tools import prompt_choice, prompt_free_text

    if url is None:
        source = prompt_choice(
            "How do you want to enter the job description?", ["URL", "Plain text"]
        )
        if source == "Plain text":
            return prompt_free_text("Enter the job description")
        url = prompt_free_text("Enter the job description URL")
        if not url:
            return ""

    return await scrape_url(url, visualise=visualise)


async def _extract_job(raw: str, settings: Settings):
    from cv_tailor.extractor.service import JobExtractor
    from cv_tailor.utils.io import write_artifact

    job = await JobExtractor().extract(raw)
    path = write_artifact(settings.tmp_dir, f"jd-{job.label}", job)
    print(f"Wrote: {path}")
    return job


async def _export(cv, out_name: str, parsed: argparse.Namespace, settings: Settings) -> int:
    """Write the CV YAML, fit it to one page and export the PDF."""
    from cv_tailor.rendering.browser import open_page_engine
    from cv_tailor.rendering.config import get_rendering_config
    from cv_tailor.rendering.fit import fit_to_page
    from cv_tailor.rendering.renderer import HTMLRenderer
    from cv_tailor.utils.io import generate_file_name, write_artifact

    yaml_path = write_artifact(settings.output_dir, out_name, cv, fmt="yaml")
    print(f"Wrote: {yaml_path}")

    config = get_rendering_config()
    renderer = HTMLRenderer(config)
    stem = settings.output_dir / generate_file_name(out_name)

    async with open_page_engine(config) as engine:
        result = await fit_to_page(
            cv,
            renderer.render,
            engine.measure,
            allow_multipage=parsed.allow_multipage,
            max_attempts=config.max_shrink_attempts,
            min_achievements=config.min_achievements,
        )
        if not result.succeeded:
            print(
                f"Failed to fit the CV on one page after {result.attempts} attempts "
                f"({result.measurement.describe()}). Use --allow-multipage to export anyway.",
                file=sys.stderr,
            )
            return 1
        if result.measurement.exceeds_one_page:
            print(f"Warning: CV spans {result.measurement.describe()}")

        pdf_path = await engine.export_pdf(result.markup, stem.with_suffix(".pdf"))

    if parsed.html:
        html_path = stem.with_suffix(".html")
        html_path.write_text(result.markup, encoding="utf-8")
        print(f"Wrote: {html_path}")

    print(f"Exported: {pdf_path}")
    return 0


async def _run_tailor(parsed: argparse.Namespace, settings: Settings) -> int:
    from cv_tailor.extractor.models import JobDescription
    from cv_tailor.hitl.tools import prompt_review
    from cv_tailor.tailoring.merge import merge
    from cv_tailor.tailoring.service import TailoringService
    from cv_tailor.utils.io import write_artifact

    cv = _load_cv(parsed.cv)
    if cv is None:
        return 1

    if parsed.generate_only:
        out_name = parsed.out or "-".join(["cv", cv.name, *cv.titles[:1]])
        return await _export(cv, out_name, parsed, settings)

    if parsed.jd is not None:
        try:
            job = JobDescription.load_json(parsed.jd)
        except (OSError, ValueError) as e:
            print(f"Error: failed to load job description: {e}", file=sys.stderr)
            return 1
    else:
        raw = await _read_job_text(parsed.jd_url, visualise=parsed.visualise_scraping)
        if not raw:
            print("No job description provided or failed to scrape", file=sys.stderr)
            return 1
        print("Extracting job description (this may take a while)")
        job = await _extract_job(raw, settings)

    result = await TailoringService().run(
        cv, job, reviewer=prompt_review, accept_all=parsed.accept_all
    )
    if not result.success:
        print(f"Tailoring aborted: {result.rejected_stage} rejected", file=sys.stderr)
        return 1

    path = write_artifact(settings.tmp_dir, f"optimised-cv-{job.label}", result.tailored)
    print(f"Wrote: {path}")

    merged = merge(cv, result.tailored)
    return await _export(merged, parsed.out or f"cv-{job.label}", parsed, settings)


async def _run_tinker(parsed: argparse.Namespace, settings: Settings) -> int:
    from cv_tailor.hitl.tools import prompt_review
    from cv_tailor.tailoring.merge import merge
    from cv_tailor.tailoring.models import utc_timestamp
    from cv_tailor.tailoring.tinker import TinkerService
    from cv_tailor.utils.io import write_artifact

    cv = _load_cv(parsed.cv)
    if cv is None:
        return 1

    result = await TinkerService().run(
        cv, parsed.prompt, reviewer=prompt_review, accept_all=parsed.accept_all
    )
    if not result.success:
        print(f"Tinkering aborted: {result.rejected_stage} rejected", file=sys.stderr)
        return 1

    label = f"{cv.name}-{result.tailored.created_at}"
    path = write_artifact(settings.tmp_dir, f"tinkered-cv-{label}", result.tailored)
    print(f"Wrote: {path}")

    merged = merge(cv, result.tailored)
    out_name = parsed.out or f"cv-{cv.name}-tinkered-{utc_timestamp()}"
    return await _export(merged, out_name, parsed, settings)


async def _run_extract(parsed: argparse.Namespace, settings: Settings) -> int:
    if parsed.text:
        raw = parsed.text
    elif parsed.url:
        raw = await _read_job_text(parsed.url, visualise=parsed.visualise_scraping)
    else:
        print("Error: a URL or --text is required", file=sys.stderr)
        return 1

    job = await _extract_job(raw, settings)
    print(f"Role: {job.structured.job_title}")
    print(f"Company: {job.structured.company_name}")
    if job.structured.location:
        print(f"Location: {job.structured.location}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    configure_logging(level=log_level, log_file=parsed.log_file)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"CV-Tailor v{__version__} starting in {parsed.mode} mode")

    from playwright.async_api import Error as PlaywrightError

    from cv_tailor.extractor.scraper import ScrapeError
    from cv_tailor.tailoring.llm import LLMError

    handlers = {
        "tailor": _run_tailor,
        "tinker": _run_tinker,
        "extract": _run_extract,
    }
    try:
        return asyncio.run(handlers[parsed.mode](parsed, settings))
    except (LLMError, ScrapeError, PlaywrightError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
