"""Resume fitting and export commands."""

import argparse
import asyncio
import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from onepager.shared import Color, ExportError, echo
from onepager.resume import EditingSession, ExportKind, ResumeDocument
from onepager.resume.layout import available_height

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def _load_resume_data(input_path: Path) -> dict | None:
    suffix = input_path.suffix.lower()

    try:
        with open(input_path) as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f) or {}
    except json.JSONDecodeError as e:
        echo(f"Invalid JSON: {e}", Color.ERROR)
    except yaml.YAMLError as e:
        echo(f"Invalid YAML: {e}", Color.ERROR)
    return None


def load_document(path: str) -> ResumeDocument | None:
    """Read and validate a resume file, echoing any problem found."""
    input_path = Path(path)

    if not input_path.exists():
        echo(f"Input file not found: {input_path}", Color.ERROR)
        return None

    if input_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        echo("Unsupported file format. Use .json or .yaml", Color.ERROR)
        return None

    data = _load_resume_data(input_path)
    if data is None:
        return None

    try:
        return ResumeDocument.model_validate(data)
    except ValidationError as e:
        echo("Resume validation failed:", Color.ERROR)
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            echo(f"  {loc}: {error['msg']}", Color.ERROR)
        return None


def dump_document(document: ResumeDocument, suffix: str = ".yaml") -> str:
    data = document.model_dump()
    if suffix.lower() == ".json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def cmd_template(args: argparse.Namespace) -> int:
    """Handle writing the session-start document."""
    if not args.output:
        print(dump_document(ResumeDocument.default()), end="")
        return 0

    output = Path(args.output)
    text = dump_document(ResumeDocument.default(), output.suffix)
    if output.exists() and not args.overwrite:
        echo(f"File already exists: {output}. Use --overwrite to replace", Color.ERROR)
        return 1

    output.write_text(text)
    echo(f"Template written: {output}", Color.SUCCESS)
    return 0


def cmd_fit(args: argparse.Namespace) -> int:
    """Handle reporting the auto-fit scale for a resume."""
    document = load_document(args.input)
    if document is None:
        return 1

    session = EditingSession(document, verbose=args.verbose)
    if args.container_height:
        session.resize(args.container_height)

    content = session.measure()
    available = available_height(args.container_height)

    if args.json:
        print(
            json.dumps(
                {
                    "content_height": round(content, 2),
                    "available_height": round(available, 2),
                    "scale": round(session.scale, 4),
                },
                indent=2,
            )
        )
        return 0

    echo(f"Content height: {content:.1f}pt", Color.INFO)
    echo(f"Available height: {available:.1f}pt", Color.INFO)
    echo(f"Auto-fit: {session.scale * 100:.0f}%", Color.SUCCESS)
    return 0


def _export_kinds(fmt: str) -> list[ExportKind]:
    if fmt == "all":
        return list(ExportKind)
    return [ExportKind(fmt)]


async def _export_all(session: EditingSession, kinds: list[ExportKind], out_dir: Path) -> list[Path]:
    paths = []
    for kind in kinds:
        artifact = await session.export(kind)
        if artifact is not None:
            paths.append(artifact.write(out_dir))
    return paths


def cmd_export(args: argparse.Namespace) -> int:
    """Handle exporting a resume to PDF, DOCX and/or raster PDF."""
    document = load_document(args.input)
    if document is None:
        return 1

    session = EditingSession(document, dpi=args.dpi, verbose=args.verbose)
    if args.container_height:
        session.resize(args.container_height)

    echo(f"Auto-fit: {session.scale * 100:.0f}%", Color.INFO)

    try:
        paths = asyncio.run(_export_all(session, _export_kinds(args.format), Path(args.out)))
    except ExportError as e:
        echo(f"Export failed: {e}", Color.ERROR)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    for path in paths:
        echo(f"Resume exported: {path}", Color.SUCCESS)
    return 0
