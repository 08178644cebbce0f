"""
CLI to use the tool in the command line.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from contractguard import ContractGuardian, Settings, list_models, redact
from contractguard.parsers.documents import load_document


def build_parser():
    parser = argparse.ArgumentParser(
        prog="contractguard",
        description="Analyze contract risk with an LLM after redacting identifying details locally",
    )

    parser.add_argument(
        "file_path",
        type=Path,
        nargs="?",
        help="Path to the contract (.txt, .md, .pdf, .docx, or an image)",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=None,
        help="Model to use (default: CONTRACTGUARD_MODEL or the built-in default)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON output",
    )
    parser.add_argument(
        "--redact-only",
        action="store_true",
        help="Only redact locally and print the redacted text; nothing is sent",
    )
    parser.add_argument(
        "--show-mapping",
        action="store_true",
        help="With --redact-only, print JSON including the placeholder mapping",
    )
    parser.add_argument(
        "--restore",
        action="store_true",
        help="Put original values back into the report (done locally)",
    )
    parser.add_argument(
        "--allow-images",
        action="store_true",
        help="Allow sending scanned images, which cannot be redacted",
    )
    parser.add_argument(
        "--list-models",
        action="store_true",
        help="List available models and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def print_models(default_model: str):
    """Print available models grouped by provider."""
    providers = {}
    for name, info in list_models().items():
        providers.setdefault(info.get("provider", "unknown"), []).append((name, info))

    print("\nAvailable models:")
    print("=" * 50)

    for provider, model_list in sorted(providers.items()):
        print(f"\n{provider.upper()}:")
        for name, info in sorted(model_list):
            vision = " (vision)" if info.get("supports_vision") else ""
            print(f"  {name:<20} ${info.get('input_cost', 0)}/M tokens{vision}")

    print(f"\nDefault: {default_model}")
    print()


def run_redact_only(args, indent) -> str:
    document = load_document(args.file_path)
    if document.is_image:
        raise ValueError("Scanned images cannot be redacted locally")

    result = redact(document.text)
    if args.show_mapping:
        return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
    return result.redacted_text


def run_analysis(args, settings: Settings, indent) -> str:
    guardian = ContractGuardian.from_settings(settings)
    result = guardian.analyze_file(args.file_path)

    if not result.success:
        raise RuntimeError(result.error)

    report = result.restored() if args.restore else result.analysis
    output = {
        "document_id": result.document_id,
        "model": result.model,
        "analysis": report.model_dump(),
        "placeholders": result.redaction.placeholders if result.redaction else [],
        "usage": {
            "input_tokens": result.input_tokens,
            "output_tokens": result.output_tokens,
            "cost": result.cost,
            "latency": result.latency,
        },
    }
    return json.dumps(output, indent=indent, ensure_ascii=False, default=str)


def main(argv=None):
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.model:
            settings.model = args.model
        if args.allow_images:
            settings.allow_unredacted_images = True
    except ValueError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_models:
        print_models(settings.model)
        sys.exit(0)

    if not args.file_path:
        parser.error("file_path is required")

    if not args.file_path.exists():
        print(f"Error: File not found: {args.file_path}", file=sys.stderr)
        sys.exit(1)

    indent = 2 if args.pretty else None

    try:
        if args.redact_only:
            output = run_redact_only(args, indent)
        else:
            output = run_analysis(args, settings, indent)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
    else:
        print(output)


if __name__ == "__main__":
    main()
