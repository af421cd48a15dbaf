#!/usr/bin/env python3
"""
🎯 Comprehensive Feature Demo - html2design
===========================================

Compiles ``landing_page.html`` with every bundled theme and writes, per theme:
• the design tree as JSON
• a single-slide PowerPoint rendering of the tree

Run this file from anywhere; outputs land in ``./output``.
"""

import json
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import our modules
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from html2design import PPTXRenderer, compile_html
from html2design.theme_loader import list_available_themes

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


def generate_theme_demos():
    """Generate a JSON tree and a PPTX for each available theme."""
    demo_path = Path(__file__).parent / "landing_page.html"
    if not demo_path.exists():
        raise FileNotFoundError(f"Demo content file not found: {demo_path}")

    html = demo_path.read_text(encoding="utf-8")

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)

    generated = []
    for theme_name in list_available_themes():
        logger.info(f"Compiling with the {theme_name} theme...")

        result = compile_html(html, theme=theme_name, debug=True)
        node_count = sum(1 for _ in result.walk())

        json_path = output_dir / f"landing_page_{theme_name}.json"
        json_path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")

        pptx_path = output_dir / f"landing_page_{theme_name}.pptx"
        PPTXRenderer(theme=theme_name).render(result, str(pptx_path))

        logger.info(f"✅ {theme_name}: {node_count} nodes, {len(result.warnings)} warnings")
        generated.extend([json_path, pptx_path])

    return generated


def main():
    try:
        files = generate_theme_demos()
    except Exception as e:
        logger.error(f"❌ Demo failed: {e}")
        return 1

    print("\n🎉 Demo outputs:")
    for path in files:
        print(f"   • {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
