#!/usr/bin/env python3
"""ProjektMester CLI commands.

Usage:
    python -m projektmester.cli init-db
    python -m projektmester.cli seed
    python -m projektmester.cli add-status <value>
    python -m projektmester.cli export-pdf --project <id> [--out PATH]
"""

import argparse
import sys
from pathlib import Path

from projektmester.database import Base, SessionLocal, engine
from projektmester.demo import seed_demo_data
from projektmester.labels import project_status_label
from projektmester.records import RecordStore
from projektmester.services.project_data_service import ProjectDataService
from projektmester.services.report_service import compose_report, report_filename


def cmd_init_db(args):
    """Create the database tables."""
    Base.metadata.create_all(bind=engine)
    print(f"Database initialized: {engine.url.render_as_string(hide_password=True)}")
    return 0


def cmd_seed(args):
    """Seed demo users and a demo project."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed_demo_data(ProjectDataService(RecordStore(db)))
        for kind, count in created.items():
            print(f"  {kind}: {count} created")
        print("Demo data seeded.")
        return 0
    finally:
        db.close()


def cmd_add_status(args):
    """Register a custom project status."""
    value = args.value.strip()
    if not value:
        print("Error: status must not be blank", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        statuses = ProjectDataService(RecordStore(db)).add_status(value)
        print(f"{'Value':<20} {'Label':<20}")
        print("-" * 40)
        for status in statuses:
            print(f"{status:<20} {project_status_label(status):<20}")
        return 0
    finally:
        db.close()


def cmd_export_pdf(args):
    """Write a project's data sheet to disk."""
    db = SessionLocal()
    try:
        data = ProjectDataService(RecordStore(db))
        project = data.get_project(args.project)
        if not project:
            print(f"Error: Project '{args.project}' not found", file=sys.stderr)
            return 1

        pdf = compose_report(
            project,
            data.list_tasks(project.id),
            data.list_materials(project.id),
            data.list_costs(project.id),
        )
        out = Path(args.out) if args.out else Path(report_filename(project.name))
        out.write_bytes(pdf)
        print(f"Wrote {len(pdf)} bytes to {out}")
        return 0
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="ProjektMester CLI",
        prog="python -m projektmester.cli",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    seed_parser = subparsers.add_parser("seed", help="Seed demo data (idempotent)")
    seed_parser.set_defaults(func=cmd_seed)

    status_parser = subparsers.add_parser("add-status", help="Register a project status")
    status_parser.add_argument("value", help="Status value, e.g. 'garancia'")
    status_parser.set_defaults(func=cmd_add_status)

    export_parser = subparsers.add_parser("export-pdf", help="Export a project data sheet")
    export_parser.add_argument(
        "--project", "-p",
        required=True,
        help="Project ID",
    )
    export_parser.add_argument(
        "--out", "-o",
        help="Output path (default: <project name>_adatlap.pdf)",
    )
    export_parser.set_defaults(func=cmd_export_pdf)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if hasattr(args, "func"):
        return args.func(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
