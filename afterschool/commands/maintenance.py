#!/usr/bin/env python
# afterschool/commands/maintenance.py
"""
Inventory maintenance commands.

Usage:
    python -m afterschool.commands.maintenance export --output ./export
    python -m afterschool.commands.maintenance restock --spaces 5
    python -m afterschool.commands.maintenance set-space "English Literature" 8
"""

import argparse
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import sys
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_RESTOCK_SPACES
from ..core.exceptions import DomainException
from ..database import SessionLocal, init_db
from ..schemas.lesson import LessonResponse
from ..schemas.order import OrderResponse
from ..services.lesson_service import LessonService
from ..services.order_service import OrderService

logger = logging.getLogger(__name__)


class MaintenanceCommand:
    """Maintenance command handler."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self.session_factory = session_factory

    def export(self, output_dir: Path) -> Dict[str, Any]:
        """
        Write lessons.json and orders.json into ``output_dir``.

        Returns:
            dict: Paths written and record counts
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        db = self.session_factory()
        try:
            lessons = [
                LessonResponse.model_validate(lesson).model_dump(mode="json")
                for lesson in LessonService(db).list_lessons()
            ]
            orders = [
                OrderResponse(**order.to_dict()).model_dump(mode="json")
                for order in OrderService(db).list_orders()
            ]
        finally:
            db.close()

        lessons_path = output_dir / "lessons.json"
        orders_path = output_dir / "orders.json"
        lessons_path.write_text(json.dumps(lessons, indent=2), encoding="utf-8")
        orders_path.write_text(json.dumps(orders, indent=2), encoding="utf-8")
        logger.info("Exported %s lessons to %s", len(lessons), lessons_path)
        logger.info("Exported %s orders to %s", len(orders), orders_path)

        return {
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "lessons": {"path": str(lessons_path), "count": len(lessons)},
            "orders": {"path": str(orders_path), "count": len(orders)},
        }

    def restock(self, spaces: int = DEFAULT_RESTOCK_SPACES) -> List[Dict[str, Any]]:
        """Give every sold-out lesson ``spaces`` spaces."""
        db = self.session_factory()
        try:
            restocked = LessonService(db).restock_sold_out(spaces)
            result = [
                {"id": lesson.id, "subject": lesson.subject, "space": lesson.space}
                for lesson in restocked
            ]
        finally:
            db.close()

        if not result:
            logger.info("No sold out lessons found. All lessons have available spaces.")
        for item in result:
            logger.info("Updated %s: 0 -> %s spaces", item["subject"], item["space"])
        return result

    def set_space(self, subject: str, spaces: int) -> Dict[str, Any]:
        """Set the remaining spaces of the lesson with this subject."""
        db = self.session_factory()
        try:
            lesson = LessonService(db).set_space_by_subject(subject, spaces)
            result = {"id": lesson.id, "subject": lesson.subject, "space": lesson.space}
        finally:
            db.close()
        logger.info("%s updated to %s spaces", result["subject"], result["space"])
        return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lesson inventory maintenance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export lessons and orders to JSON")
    export_parser.add_argument("--output", type=Path, default=Path("export"))

    restock_parser = subparsers.add_parser("restock", help="Restock sold-out lessons")
    restock_parser.add_argument("--spaces", type=int, default=DEFAULT_RESTOCK_SPACES)

    set_space_parser = subparsers.add_parser("set-space", help="Set spaces for one lesson")
    set_space_parser.add_argument("subject")
    set_space_parser.add_argument("spaces", type=int)

    return parser


def main(
    argv: Optional[List[str]] = None,
    command: Optional[MaintenanceCommand] = None,
) -> int:
    args = build_parser().parse_args(argv)

    if command is None:
        init_db()
        command = MaintenanceCommand()

    try:
        if args.command == "export":
            result: Any = command.export(args.output)
        elif args.command == "restock":
            result = command.restock(args.spaces)
        else:
            result = command.set_space(args.subject, args.spaces)
    except DomainException as exc:
        logger.error("%s: %s", exc.code, exc.message)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    sys.exit(main())
