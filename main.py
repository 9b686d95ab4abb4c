"""
Candidate Portal - CLI Entry Point.

Walks one job application through the wizard from the terminal.
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from portal.config import configure_logging, settings
from portal.db import User
from portal.db.base import get_session_factory, init_db
from portal.db.seed import seed_demo
from portal.errors import JobNotFoundError, PortalError, ResumePolicyError, SubmissionError
from portal.models import CandidateIdentity, ResumeFile
from portal.stores import build_collaborators
from portal.wizard import ApplicationWizard, StepOutcome, open_wizard


def print_outcome(outcome: StepOutcome) -> None:
    if outcome.ok:
        print(f"-> Step {int(outcome.state)}: {outcome.state.title}")
        return
    if outcome.notice:
        print(f"[!] {outcome.notice}" + (f": {outcome.description}" if outcome.description else ""))
    for name, message in outcome.errors.items():
        print(f"  {name}: {message}")


def print_review(wizard: ApplicationWizard) -> None:
    summary = wizard.summary()
    print(f"\nApplying for {summary['job']['title']} ({summary['job']['location']})")
    print(f"Name: {summary['full_name']}  Email: {summary['email']}")
    for section in ("personal", "academic", "professional"):
        print(f"\n{section.title()}")
        for name, value in summary[section].items():
            print(f"  {name}: {value or '-'}")
    resume = summary["resume"]
    print(f"\nResume: {resume['filename'] or resume['existing_url'] or 'none'}")
    print(f"Save to profile: {'yes' if summary['save_to_profile'] else 'no'}\n")


def load_resume(path: Path) -> ResumeFile:
    content_type = "application/pdf" if path.suffix.lower() == ".pdf" else "application/octet-stream"
    return ResumeFile(filename=path.name, content_type=content_type, content=path.read_bytes())


def main():
    """Run the application wizard CLI."""
    configure_logging("WARNING")
    print("Candidate Portal - Apply")
    print("=" * 40)

    if not settings.database_url:
        print("Warning: DATABASE_URL not set, using an in-memory SQLite database")
        settings.database_url = "sqlite://"
    init_db()

    session_factory = get_session_factory()
    with session_factory() as db:
        user_id, job_ids = seed_demo(db)
        email = db.get(User, user_id).email

    job_id = sys.argv[1] if len(sys.argv) > 1 else job_ids[0]
    identity = CandidateIdentity(user_id=user_id, email=email)
    collaborators = build_collaborators(session_factory)

    try:
        wizard = asyncio.run(open_wizard(identity, job_id, collaborators))
    except JobNotFoundError as e:
        print(f"Job Not Found: {e}")
        return

    if wizard.is_submitted:
        print(f"You have already applied for {wizard.job.title}.")
        return

    print(f"Apply for {wizard.job.title} • {wizard.job.location} • {wizard.job.job_type}")
    print("Commands: /set field=value, /next, /back, /jump N, /resume <path>, /review, /submit, /quit")
    print("-" * 40)
    print(f"-> Step 1: {wizard.state.title}")

    while not wizard.is_submitted:
        try:
            user_input = input("> ").strip()
            if not user_input:
                continue

            command, _, arg = user_input.partition(" ")
            if command == "/quit":
                wizard.close()
                break
            elif command == "/set":
                name, _, value = arg.partition("=")
                if name.strip() == "save_to_profile":
                    wizard.set_save_to_profile(value.strip().lower() in ("y", "yes", "true", "1"))
                else:
                    wizard.update_draft(**{name.strip(): value.strip()})
            elif command == "/next":
                print_outcome(wizard.advance())
            elif command == "/back":
                print_outcome(wizard.retreat())
            elif command == "/jump":
                print_outcome(wizard.jump_to(int(arg)))
            elif command == "/resume":
                path = Path(arg.strip())
                if not path.exists():
                    print(f"Not found: {path}")
                    continue
                wizard.attach_resume(load_resume(path))
                print(f"Attached {path.name}")
            elif command == "/review":
                print_review(wizard)
            elif command == "/submit":
                asyncio.run(wizard.submit())
                print(f"\nApplication Submitted! Your application for {wizard.job.title} has been received.")
            else:
                print("Unknown command")

        except ResumePolicyError as e:
            print(f"[!] {e.title}: {e.message}")
        except SubmissionError as e:
            print(f"[!] {e.title}: {e.message}")
        except (PortalError, ValueError) as e:
            print(f"[!] {e}")
        except (KeyboardInterrupt, EOFError):
            wizard.close()
            break

    print("Goodbye!")


if __name__ == "__main__":
    main()
