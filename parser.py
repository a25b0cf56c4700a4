"""
Plan of Study parser: CLI entry point.

Usage:
    python parser.py parse <plan.xlsx> [--output <plan.json>] [--strict]
    python parser.py upload <plan.xlsx> [--force]
    python parser.py delete <department_id>
    python parser.py list

Reads the first worksheet of a Plan of Study workbook, builds the
department / course / prerequisite-link graph, and writes it as JSON or
sends it to the plan-of-study API (configured via POS_API_* env vars).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

import dotenv

from api.factory import get_plan_service
from dto.result import ParseResult
from errors import DecodeError, PlanOfStudyApiError, SchemaError, StructuralError
from pipeline import parse_plan_of_study_file
from utils.integrity import DanglingReference, find_dangling_links

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 1
EXIT_UNPARSEABLE = 2
EXIT_API_FAILURE = 3


# -------------------------------------------------------------------
# Reporting
# -------------------------------------------------------------------


def _report(result: ParseResult) -> List[DanglingReference]:
    """Log row issues and dangling link endpoints; return the latter."""
    for issue in result.issues:
        log = logger.error if issue.severity == "error" else logger.warning
        log("Row %d [%s] %s", issue.row, issue.error, issue.message)

    dangling = find_dangling_links(result.plan)
    for ref in dangling:
        logger.warning(
            "Link on %s names unknown %s %s",
            ref.course_code,
            ref.field,
            ref.missing_code,
        )

    plan = result.plan
    logger.info(
        "Department %d (%s): %d course(s), %d link(s), %d error(s), %d warning(s)",
        plan.department.id,
        plan.department.name,
        len(plan.courses),
        len(plan.links),
        len(result.errors),
        len(result.warnings),
    )
    return dangling


def _parse(excel_path: str) -> ParseResult:
    if not os.path.isfile(excel_path):
        logger.error("File not found: %s", excel_path)
        sys.exit(EXIT_INVALID_INPUT)
    try:
        return parse_plan_of_study_file(excel_path)
    except (DecodeError, StructuralError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(EXIT_UNPARSEABLE)


# -------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace) -> int:
    result = _parse(args.excel_file)
    dangling = _report(result)

    output_path = args.output or f"{Path(args.excel_file).stem}_pos.json"
    json_str = result.model_dump_json(indent=2, by_alias=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(json_str)
    logger.info("Output written to %s", output_path)

    if args.strict and (result.errors or dangling):
        return EXIT_INVALID_INPUT
    return 0


def _cmd_upload(args: argparse.Namespace) -> int:
    result = _parse(args.excel_file)
    _report(result)
    if result.errors and not args.force:
        logger.error(
            "Refusing to upload a plan with %d row error(s); use --force to override",
            len(result.errors),
        )
        return EXIT_INVALID_INPUT

    message = get_plan_service().submit(result.plan)
    logger.info("%s", message)
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    message = get_plan_service().remove(args.department_id)
    logger.info("%s", message)
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    plans = get_plan_service().list_all()
    for plan in plans:
        print(
            f"{plan.department.id}\t{plan.department.name}\t"
            f"{len(plan.courses)} courses\t{len(plan.links)} links"
        )
    logger.info("%d plan(s) stored", len(plans))
    return 0


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse Plan of Study workbooks into a curriculum graph.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse a workbook and write JSON")
    p_parse.add_argument("excel_file", help="Path to the .xlsx file to parse")
    p_parse.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: <input_name>_pos.json)",
    )
    p_parse.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on row errors or links to unknown courses",
    )
    p_parse.set_defaults(func=_cmd_parse)

    p_upload = sub.add_parser("upload", help="Parse a workbook and submit it")
    p_upload.add_argument("excel_file", help="Path to the .xlsx file to upload")
    p_upload.add_argument(
        "--force",
        action="store_true",
        help="Upload even when some rows failed to parse",
    )
    p_upload.set_defaults(func=_cmd_upload)

    p_delete = sub.add_parser("delete", help="Remove a department's stored plan")
    p_delete.add_argument("department_id", type=int)
    p_delete.set_defaults(func=_cmd_delete)

    p_list = sub.add_parser("list", help="List stored plans")
    p_list.set_defaults(func=_cmd_list)

    return parser


def main(argv: List[str] | None = None) -> int:
    dotenv.load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    args = build_arg_parser().parse_args(argv)
    try:
        return args.func(args)
    except (PlanOfStudyApiError, SchemaError) as exc:
        logger.error("%s", exc)
        return EXIT_API_FAILURE


if __name__ == "__main__":
    sys.exit(main())
