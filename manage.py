#!/usr/bin/env python3
"""
HomeHub management CLI.

Usage:
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Server and migration status
    python manage.py verify      Check database integrity
    python manage.py generate    Generate reminders from source entities
    python manage.py serve       Start the API server (foreground)
    python manage.py start       Start the API server in the background
    python manage.py stop        Stop a background server
"""

import argparse
import asyncio
import os
import platform
import signal
import subprocess
import sys
import time
from datetime import datetime
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".homehub.pid"
APP_PATH = "homehub.api.main:app"

IS_WINDOWS = platform.system() == "Windows"


def _is_pid_alive(pid: int) -> bool:
    """Check if a process with the given PID is running."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
            return str(pid) in result.stdout
        except OSError:
            return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _read_pid() -> int | None:
    """Read PID from the PID file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _kill_pid(pid: int) -> bool:
    """Send termination signal to a process. Returns True if successful."""
    try:
        if IS_WINDOWS:
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
        else:
            os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _uvicorn_cmd(args: argparse.Namespace, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", args.host,
        "--port", str(args.port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    from homehub.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_verify(args: argparse.Namespace) -> None:
    """Check database integrity and required tables."""
    from homehub.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity(args.db_path))
    failed = False
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            failed = True
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")
    if failed:
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Show server and migration status."""
    from homehub.infrastructure.storage.sqlite.migrations import get_migration_status

    pid = _read_pid()
    print(f"Server: {'running (PID ' + str(pid) + ')' if pid else 'not running'}")

    status = asyncio.run(get_migration_status(args.db_path))
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate reminders from source entity dates."""
    from homehub.application.use_cases import GenerateRemindersUseCase
    from homehub.config import configure_logging
    from homehub.infrastructure.storage.sqlite import close_pool

    configure_logging(level=args.log_level)

    async def run():
        try:
            return await GenerateRemindersUseCase().execute(
                datetime.now(),
                lookahead_days=args.lookahead_days,
                domains=args.domain or None,
            )
        finally:
            await close_pool()

    result = asyncio.run(run())
    print(f"Scanned {result.sources_scanned} source entities.")
    print(f"  created:          {result.reminders_created}")
    print(f"  updated:          {result.reminders_updated}")
    print(f"  unchanged:        {result.unchanged}")
    print(f"  already resolved: {result.already_resolved}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API server in the foreground."""
    subprocess.run(_uvicorn_cmd(args, reload=args.reload), cwd=str(ROOT_DIR))


def cmd_start(args: argparse.Namespace) -> None:
    """Start the API server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'stop' first.")
        sys.exit(1)

    if IS_WINDOWS:
        proc = subprocess.Popen(
            _uvicorn_cmd(args),
            cwd=str(ROOT_DIR),
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
        )
    else:
        proc = subprocess.Popen(_uvicorn_cmd(args), cwd=str(ROOT_DIR))

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}) on http://{args.host}:{args.port}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop a background server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid):
        for _ in range(30):
            if not _is_pid_alive(pid):
                break
            time.sleep(0.1)
        else:
            print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    print("Server stopped." if not _is_pid_alive(pid) else "Warning: Server may still be running.")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="HomeHub management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_db_path(p: argparse.ArgumentParser) -> None:
        p.add_argument("--db-path", type=Path, help="Database path (default from settings)")

    def add_server_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
        p.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")

    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    add_db_path(p_migrate)
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    p_migrate.set_defaults(func=cmd_migrate)

    p_verify = sub.add_parser("verify", help="Check database integrity")
    add_db_path(p_verify)
    p_verify.set_defaults(func=cmd_verify)

    p_status = sub.add_parser("status", help="Server and migration status")
    add_db_path(p_status)
    p_status.set_defaults(func=cmd_status)

    p_generate = sub.add_parser("generate", help="Generate reminders from source entities")
    p_generate.add_argument("--lookahead-days", type=int, default=None, help="Days ahead to scan")
    p_generate.add_argument(
        "--domain",
        action="append",
        choices=["finance", "household"],
        help="Restrict to a domain (repeatable)",
    )
    p_generate.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override LOG_LEVEL for this run",
    )
    p_generate.set_defaults(func=cmd_generate)

    p_serve = sub.add_parser("serve", help="Run the API server in the foreground")
    add_server_args(p_serve)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    p_start = sub.add_parser("start", help="Start the API server in the background")
    add_server_args(p_start)
    p_start.set_defaults(func=cmd_start)

    p_stop = sub.add_parser("stop", help="Stop a background server")
    p_stop.set_defaults(func=cmd_stop)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
