# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Main entry point for the ResumeAI CLI.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from resumeai.config import load_settings, set_ca_bundle_override
from resumeai.errors import ResumeAIError
from resumeai.generator import ResumeGenerator
from resumeai.ingest import read_job_description
from resumeai.llm_client import LLMClient
from resumeai.models import Profile, sample_profile
from resumeai.session import Session

logger = logging.getLogger(__name__)

console = Console()

DEFAULT_PROFILE = "user_content/profile.json"


def setup_logging(verbosity: int, quiet: bool = False, log_dir: str = "user_content/logs"):
    """
    Configures logging:
    - File: user_content/logs/resumeai.log (DEBUG)
    - Console: default=WARNING, -v=INFO, -vv=DEBUG, -q=ERROR
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_path / "resumeai.log")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)

    # Silence noisy SDK transports unless in full debug
    if verbosity < 2:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def load_profile(path: str) -> Profile:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ResumeAIError(f"Profile not found: {path}. Run 'resumeai sample' to create one.") from None
    except json.JSONDecodeError as e:
        raise ResumeAIError(f"Profile {path} is not valid JSON: {e}") from e
    return Profile.from_dict(data)


def save_profile(profile: Profile, path: str):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(profile.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Profile saved to: {path}")


def print_score(session: Session):
    report = session.score
    console.print(f"Profile score: [bold]{report.score}%[/bold]")
    if report.hint:
        console.print(f"  Next: {report.hint.text} [green](+{report.hint.amount}%)[/green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resumeai", description="AI Powered Resume Builder")
    parser.add_argument("--profile", default=DEFAULT_PROFILE, help="Path to the profile JSON file")
    parser.add_argument("--provider", choices=["gemini", "vertex", "openai"], help="Model provider (default: $RESUMEAI_PROVIDER or gemini)")
    parser.add_argument("--model", help="Model id (default: $RESUMEAI_MODEL or the provider default)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("sample", help="Write the example profile to --profile")
    sub.add_parser("score", help="Show the profile completeness score")
    sub.add_parser("summary", help="Write the profile summary with AI")

    bullets = sub.add_parser("bullets", help="Draft bullet points for one experience entry")
    bullets.add_argument("entry_id", help="Id of the experience entry")

    sub.add_parser("skills", help="Suggest skills for the most recent role")

    optimize = sub.add_parser("optimize", help="Generate optimized resume content")
    optimize.add_argument("--output", help="Export the resume to this DOCX file")

    match = sub.add_parser("match", help="Score the resume against a job description")
    match.add_argument("--jd", required=True, help="URL or file path to the Job Description")

    letter = sub.add_parser("cover-letter", help="Draft a cover letter for a job description")
    letter.add_argument("--jd", required=True, help="URL or file path to the Job Description")
    letter.add_argument("--output", help="Export the letter to this DOCX file")
    return parser


async def _run_command(args, session: Session):
    if args.command == "score":
        print_score(session)

    elif args.command == "summary":
        await session.generate_summary()
        save_profile(session.profile, args.profile)
        console.print(session.profile.summary)

    elif args.command == "bullets":
        await session.draft_experience_bullets(args.entry_id)
        save_profile(session.profile, args.profile)
        console.print(session.profile.get_entry("experience", args.entry_id).description)

    elif args.command == "skills":
        await session.suggest_skills()
        save_profile(session.profile, args.profile)
        console.print(session.profile.skills)

    elif args.command == "optimize":
        resume = await session.optimize_resume()
        console.print(f"[bold]Summary:[/bold] {resume.professional_summary}")
        console.print(f"[bold]Skills:[/bold] {', '.join(resume.skills_list)}")
        if args.output:
            ResumeGenerator().generate(session.profile, resume, args.output)
            console.print(f"Resume written to {args.output}")

    elif args.command == "match":
        jd_text = read_job_description(args.jd)
        logger.info("Tailoring resume before matching (this may take a moment)...")
        await session.optimize_resume()
        result = await session.analyze_match(jd_text)
        console.print(f"Match score: [bold]{result.score}[/bold]/100")
        if result.missing_keywords:
            console.print("Missing keywords: " + ", ".join(result.missing_keywords))
        for suggestion in result.suggestions:
            console.print(f"  - {suggestion}")

    elif args.command == "cover-letter":
        jd_text = read_job_description(args.jd)
        await session.draft_cover_letter(jd_text)
        letter = session.cover_letter_text()
        console.print(letter)
        if args.output:
            ResumeGenerator().generate_cover_letter(letter, args.output)
            console.print(f"Cover letter written to {args.output}")


def run(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, quiet=args.quiet)
    if args.ca_bundle:
        set_ca_bundle_override(args.ca_bundle)

    try:
        if args.command == "sample":
            save_profile(sample_profile(), args.profile)
            console.print(f"Sample profile written to {args.profile}")
            return 0

        profile = load_profile(args.profile)
        client = LLMClient(load_settings(provider=args.provider, model=args.model))
        session = Session(client=client, profile=profile)
        asyncio.run(_run_command(args, session))
    except (ResumeAIError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


def main():
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


if __name__ == "__main__":
    main()
