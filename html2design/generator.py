#!/usr/bin/env python3
"""
Command-line entry point: compile an HTML file and write a PPTX and/or JSON tree.
"""

import json
import logging
import sys
from pathlib import Path

from .compiler import DesignCompiler
from .errors import CompileError
from .pptx_renderer import PPTXRenderer
from .theme_loader import list_available_themes, validate_theme

logger = logging.getLogger(__name__)


def generate(html_text: str, *, output_path=None, json_path=None, theme: str = "default", debug: bool = False):
    """
    Compile *html_text* and write the requested outputs.

    Returns:
        The CompileResult
    """
    result = DesignCompiler(theme=theme, debug=debug).compile(html_text)

    for warning in result.warnings:
        logger.info(f"Skipped: {warning}")

    if json_path:
        json_path = Path(json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"✅ Design tree written to {json_path}")

    if output_path:
        PPTXRenderer(theme=theme, debug=debug).render(result, str(output_path))
        logger.info(f"✅ Presentation written to {output_path}")

    return result


def main(argv=None):
    """Command-line entry point for the HTML to design tree compiler."""
    import argparse

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="html2design", description="Compile HTML into a positioned design tree.")
        p.add_argument("html", type=Path, help="HTML file to compile")
        p.add_argument("--output", "-o", type=Path, help="Destination PPTX path")
        p.add_argument("--json", type=Path, dest="json_path", help="Write the design tree as JSON to this path")
        p.add_argument("--theme", "-t", default="default", help="CSS theme to use (default, compact, …)")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")

    args = _build_parser().parse_args(argv)

    html_path: Path = args.html
    if not html_path.exists():
        logger.error(f"HTML file '{html_path}' not found")
        return 1

    if not validate_theme(args.theme):
        logger.error(f"❌ Unknown theme '{args.theme}'. Available themes: {', '.join(list_available_themes())}")
        return 1

    output_path = args.output
    if output_path is None and args.json_path is None:
        output_path = html_path.with_suffix(".pptx")
    if output_path is not None and output_path.suffix != ".pptx":
        output_path = output_path.with_name(f"{output_path.name}.pptx")

    try:
        generate(
            html_path.read_text(encoding="utf-8"),
            output_path=output_path,
            json_path=args.json_path,
            theme=args.theme,
            debug=args.debug,
        )
    except (CompileError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
