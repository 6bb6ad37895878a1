import argparse
import sys

from onepager.cmd import cmd_export, cmd_fit, cmd_suggest, cmd_template
from onepager.config import DEFAULT_DPI
from onepager.resume import AssistTarget, ExportKind


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fit a resume onto one A4 page and export it."
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    template_parser = subparsers.add_parser(
        "template", help="Write the blank starting resume"
    )
    template_parser.add_argument(
        "-o", "--output", help="Output .yaml or .json path (default: print)"
    )
    template_parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing files"
    )

    fit_parser = subparsers.add_parser("fit", help="Report the auto-fit scale")
    fit_parser.add_argument("input", help="Resume file (.json or .yaml)")
    fit_parser.add_argument(
        "--container-height",
        type=float,
        help="Preview container height in points (default: one A4 page)",
    )
    fit_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    fit_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    export_parser = subparsers.add_parser("export", help="Export a resume")
    export_parser.add_argument("input", help="Resume file (.json or .yaml)")
    export_parser.add_argument(
        "-f",
        "--format",
        default=ExportKind.PDF.value,
        choices=[kind.value for kind in ExportKind] + ["all"],
        help="Export format (default: pdf)",
    )
    export_parser.add_argument(
        "-o", "--out", default=".", help="Output directory (default: .)"
    )
    export_parser.add_argument(
        "--dpi",
        type=int,
        default=DEFAULT_DPI,
        help=f"Capture resolution for raster export (default: {DEFAULT_DPI})",
    )
    export_parser.add_argument(
        "--container-height",
        type=float,
        help="Preview container height in points (default: one A4 page)",
    )
    export_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    suggest_parser = subparsers.add_parser(
        "suggest", help="Ask the assistant for section text"
    )
    suggest_parser.add_argument("input", help="Resume file (.json or .yaml)")
    suggest_parser.add_argument(
        "-t",
        "--target",
        required=True,
        choices=[target.value for target in AssistTarget],
        help="Section to suggest text for",
    )
    suggest_parser.add_argument(
        "-i", "--index", type=int, default=0, help="Experience entry index"
    )
    suggest_parser.add_argument(
        "-p", "--prompt", default="", help="Additional instructions"
    )
    suggest_parser.add_argument(
        "--apply", action="store_true", help="Write the suggestion into the resume"
    )
    suggest_parser.add_argument(
        "-o", "--output", help="Where to write the updated resume (default: input)"
    )
    suggest_parser.add_argument("--api-key", help="OpenAI API key")
    suggest_parser.add_argument("--model", help="Chat model name")
    suggest_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "template":
        return cmd_template(args)
    elif args.command == "fit":
        return cmd_fit(args)
    elif args.command == "export":
        return cmd_export(args)
    elif args.command == "suggest":
        return cmd_suggest(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
