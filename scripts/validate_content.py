#!/usr/bin/env python3
"""
validate_content.py - Check content bundles and the library catalog.

Loads every data/content/*.yaml bundle through the same validation the
reader uses, parses each section diagram, and checks the catalog for
duplicate ids and available books without a bundle to open.

Usage:
  python scripts/validate_content.py
  python scripts/validate_content.py --content-dir data/content --catalog data/catalog.yaml
  python scripts/validate_content.py --render-diagrams
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from philoreader.config import CATALOG_PATH, CONTENT_DIR, setup_logging
from philoreader.reader import ContentValidationError, load_bundle, load_catalog, resolve_reading_path
from philoreader.viewer import DiagramSyntaxError, DiagramTheme, parse_flowchart, render_definition

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Checks
# -----------------------------------------------------------------------------

def check_bundle(path: Path, render: bool = False) -> tuple[str | None, list[str]]:
    """
    Validate one bundle.

    Returns:
        (reading path or None if the bundle failed to load, list of problems)
    """
    try:
        bundle = load_bundle(path)
    except ContentValidationError as e:
        return None, [e.reason]

    problems = []
    theme = DiagramTheme()
    for section in bundle.sections:
        if not section.diagram:
            continue
        try:
            if render:
                render_definition(section.diagram.definition, theme)
            else:
                parse_flowchart(section.diagram.definition)
        except DiagramSyntaxError as e:
            problems.append(f"section {section.id}: diagram: {e}")

    quizzes = sum(len(section.quiz) for section in bundle.sections)
    logger.info(f"  {path.name}: {len(bundle.sections)} sections, {quizzes} quiz questions")
    return bundle.book.reading_path or f"/read/{bundle.book.id}", problems


def check_catalog(path: Path, reading_paths: set[str]) -> list[str]:
    """
    Validate the catalog.

    Unreadable files and duplicate ids are problems; the app keys its widgets
    by id. Available books without a bundle are only warned about.
    """
    try:
        catalog = load_catalog(path)
    except ContentValidationError as e:
        return [e.reason]

    problems = []
    for kind, entries in (
        ("book", catalog.books),
        ("achievement", catalog.achievements),
        ("quest", catalog.quests),
    ):
        ids = [entry.id for entry in entries]
        for entry_id in sorted({i for i in ids if ids.count(i) > 1}):
            problems.append(f"duplicate {kind} id {entry_id}")

    for book in catalog.books:
        target = resolve_reading_path(book)
        if target and target not in reading_paths:
            # Listed but not readable yet; the app shows a notice instead
            logger.warning(f"  Book {book.id} ({book.title}): no bundle for {target}")
    return problems


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main():
    parser = argparse.ArgumentParser(
        description="Validate reader content bundles and the library catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=CONTENT_DIR,
        help="Directory of content bundle YAML files"
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=CATALOG_PATH,
        help="Path to catalog YAML"
    )
    parser.add_argument(
        "--render-diagrams",
        action="store_true",
        help="Draw every diagram instead of only parsing it"
    )

    args = parser.parse_args()
    setup_logging()

    bundle_files = sorted(args.content_dir.glob("*.yaml"))
    if not bundle_files:
        logger.error(f"No content bundles found in {args.content_dir}")
        sys.exit(1)

    logger.info(f"Checking {len(bundle_files)} bundles...")
    failures = 0
    reading_paths = set()
    for path in bundle_files:
        reading_path, problems = check_bundle(path, render=args.render_diagrams)
        if reading_path:
            if reading_path in reading_paths:
                problems.append(f"duplicate reading path {reading_path}")
            reading_paths.add(reading_path)
        for problem in problems:
            logger.error(f"  {path.name}: {problem}")
        failures += len(problems)

    if args.catalog.exists():
        logger.info("Checking catalog...")
        problems = check_catalog(args.catalog, reading_paths)
        for problem in problems:
            logger.error(f"  {args.catalog.name}: {problem}")
        failures += len(problems)
    else:
        logger.warning(f"Catalog not found: {args.catalog}")

    if failures:
        logger.error(f"Validation failed with {failures} problems")
        sys.exit(1)

    logger.info("All content valid")


if __name__ == "__main__":
    main()
