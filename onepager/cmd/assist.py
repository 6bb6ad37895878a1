"""Text suggestion command."""

import argparse
import asyncio
from pathlib import Path

from onepager.config import load_settings
from onepager.shared import Color, CollaboratorFailureError, echo
from onepager.cmd.resume import dump_document, load_document
from onepager.resume import Assistant, EditingSession


def cmd_suggest(args: argparse.Namespace) -> int:
    """Handle requesting (and optionally applying) a section suggestion."""
    document = load_document(args.input)
    if document is None:
        return 1

    settings = load_settings()
    assistant = Assistant(
        api_key=args.api_key or settings.api_key,
        model=args.model or settings.model,
    )
    session = EditingSession(document, assistant=assistant, verbose=args.verbose)

    try:
        suggestion = asyncio.run(session.suggest(args.target, args.index, args.prompt or ""))
    except CollaboratorFailureError as e:
        echo(str(e), Color.ERROR)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print(suggestion)

    if not args.apply:
        return 0

    try:
        applied = session.apply_suggestion(args.target, suggestion, args.index)
    except IndexError:
        echo(f"No experience entry at index {args.index}", Color.ERROR)
        return 1

    if not applied:
        echo("Suggestion was empty; document left unchanged", Color.WARNING)
        return 0

    output = Path(args.output or args.input)
    output.write_text(dump_document(session.document, output.suffix))
    echo(f"Suggestion applied: {output}", Color.SUCCESS)
    return 0
