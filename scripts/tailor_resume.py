#!/usr/bin/env python3
"""
Resume Tailoring CLI

Injects job keywords into a plain-text resume and writes ATS-friendly
.txt, .docx and .pdf versions.

Commands:
    tailor   - Parse, inject keywords, export all formats and report the match score
    validate - Run the ATS compatibility checks on a plain-text resume

Keyword files are YAML or JSON with any of the priority buckets:

    highROI: [Kubernetes, Terraform]
    mediumROI: [CI/CD]
    lowROI: [Agile]
    unclassified: []

Examples:\n

    tailor_resume.py tailor resume.txt keywords.yaml                    # Write outs/tailored/ATS_CV.*

    tailor_resume.py tailor resume.txt keywords.json --location Remote  # Override location

    tailor_resume.py tailor resume.txt keywords.yaml --seed 7           # Reproducible phrasing

    tailor_resume.py validate outs/tailored/ATS_CV.txt                  # ATS checks only
"""

import os
import random
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from cvinject.contexts.intake import InvalidKeywordGroupsError
from cvinject.contexts.rendering import export_all_formats, validate_ats_compatibility
from cvinject.contexts.targeting import load_injection_config
from cvinject.pipeline import run_pipeline
from cvinject.utils.logger import setup_logger

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
DEFAULT_OUTPUT_DIR = Path("outs/tailored")


def load_keyword_groups(path: Path) -> dict:
    """Read a YAML or JSON keyword file into a plain dict."""
    groups = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    if not isinstance(groups, dict):
        raise InvalidKeywordGroupsError(f"Keyword file must contain a mapping: {path}")
    return groups


def display_checks(checks: dict) -> None:
    for name, passed in checks.items():
        mark, color = ("✓", typer.colors.GREEN) if passed else ("✗", typer.colors.RED)
        typer.secho(f"  {mark} {name}", fg=color)


app = typer.Typer(
    help="Inject job keywords into a plain-text resume and export TXT/DOCX/PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("tailor")
def tailor_command(
    resume_path: Annotated[
        Path,
        typer.Argument(help="Plain-text resume", exists=True, dir_okay=False),
    ],
    keywords_path: Annotated[
        Path,
        typer.Argument(help="YAML or JSON keyword groups", exists=True, dir_okay=False),
    ],
    location: Annotated[
        Optional[str],
        typer.Option("--location", "-l", help="Replace the resume's location"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file overriding injection limits"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Seed for metric phrase selection"),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the exported files"),
    ] = DEFAULT_OUTPUT_DIR,
    base_name: Annotated[
        str,
        typer.Option("--base-name", "-n", help="File name stem for the exported files"),
    ] = "ATS_CV",
):
    """
    Tailor a resume to a keyword set and export it in every format.

    Examples:\n

        $ tailor_resume.py tailor resume.txt keywords.yaml

        $ tailor_resume.py tailor resume.txt keywords.yaml -o outs/acme -n Jane_Doe_CV
    """
    log_dir = LOGS_PATH / f"tailor_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    log_file = setup_logger(
        context_name="pipeline",
        log_dir=log_dir,
        extra_provenance={"Resume": resume_path, "Keywords": keywords_path},
    )

    typer.secho(f"\nTailoring: {resume_path}", fg=typer.colors.BLUE, bold=True)

    try:
        config = load_injection_config(config_path=config_path)
        keyword_groups = load_keyword_groups(keywords_path)
        result = run_pipeline(
            resume_path.read_text(encoding="utf-8"),
            keyword_groups,
            config=config,
            location_override=location,
            rng=random.Random(seed) if seed is not None else None,
        )
    except (ValueError, OmegaConfBaseException, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not result.success:
        typer.secho(f"✗ {result.error}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    export = export_all_formats(
        result.document, base_name=base_name, max_bullets=config.max_rendered_bullets
    )
    output_dir.mkdir(parents=True, exist_ok=True)
    for exported in export.files:
        (output_dir / exported.filename).write_bytes(exported.content)
        typer.echo(f"  {exported.format}: {output_dir / exported.filename} ({exported.size} bytes)")

    if not export.success:
        typer.secho(f"✗ {export.error}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    stats = result.stats
    typer.echo("")
    typer.secho(f"✓ Match score: {result.match_score}%", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Skills added: {stats.skills_added}")
    typer.echo(f"  Bullets modified: {stats.bullets_modified}")
    typer.echo(f"  New bullets: {stats.new_bullets_created}")
    typer.echo(f"  Total injections: {stats.total_injections}")
    if result.missing:
        typer.echo(f"  Missing: {', '.join(result.missing)}")

    validation = validate_ats_compatibility(result.text)
    typer.echo("\nATS checks:")
    display_checks(validation.checks)

    if log_file:
        typer.echo(f"\n  Log: {log_file}")
    typer.echo("")


@app.command("validate")
def validate_command(
    text_path: Annotated[
        Path,
        typer.Argument(help="Plain-text resume to check", exists=True, dir_okay=False),
    ],
):
    """
    Run the ATS compatibility checks on a plain-text resume.

    Examples:\n

        $ tailor_resume.py validate outs/tailored/ATS_CV.txt
    """
    setup_logger(context_name="validate", console_level="WARNING")

    result = validate_ats_compatibility(text_path.read_text(encoding="utf-8"))

    if result.is_valid:
        typer.secho("\n✓ ATS validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ ATS validation failed", fg=typer.colors.RED, bold=True)
    display_checks(result.checks)
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


if __name__ == "__main__":
    app()
