"""Convenience launcher for the portafs development API.

Usage:
    Windows: python start_dev.py
    Linux:   python3 start_dev.py

Press Ctrl+C to stop. The script detects a virtual environment at the
repository root and uses it to run Uvicorn with --reload.
"""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

VENV_PYTHON = ROOT_DIR / (
    ".venv\\Scripts\\python.exe" if os.name == "nt" else ".venv/bin/python"
)

# ANSI colors (disabled on Windows without VT support)
if os.name == "nt":
    os.system("")  # enable VT100 on Windows 10+

CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"


def log(level: str, msg: str) -> None:
    colors = {"info": CYAN, "start": GREEN, "stop": YELLOW, "error": RED}
    color = colors.get(level, "")
    print(f"{color}[{level}]{RESET} {msg}")


def resolve_python() -> str:
    """Find the best Python interpreter for the API."""
    if VENV_PYTHON.exists():
        return str(VENV_PYTHON)
    log("info", "No venv found — using system Python")
    return sys.executable


def check_dependencies(python: str) -> bool:
    """Verify critical packages are importable."""
    result = subprocess.run(
        [python, "-c", "import fastapi; import uvicorn; import pydantic_settings"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log("error", "Missing dependencies. Run:")
        log("error", f"  cd {ROOT_DIR} && pip install -e '.[dev]'")
        return False
    return True


def start_process(cmd: list[str], cwd: Path) -> subprocess.Popen:
    log("start", " ".join(cmd))
    if os.name == "nt":
        return subprocess.Popen(
            cmd, cwd=cwd, creationflags=subprocess.CREATE_NEW_PROCESS_GROUP
        )
    return subprocess.Popen(cmd, cwd=cwd, start_new_session=True)


def terminate_process(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    log("stop", "api")
    try:
        if os.name == "nt":
            proc.send_signal(signal.CTRL_BREAK_EVENT)
        else:
            try:
                os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
            except ProcessLookupError:
                pass
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()


def main() -> int:
    python = resolve_python()
    log("info", f"Python: {python}")

    if not check_dependencies(python):
        return 1

    os.environ.setdefault("PORTAFS_DEBUG", "true")
    os.environ.setdefault("PORTAFS_LOG_LEVEL", "DEBUG")

    cmd = [
        python, "-m", "uvicorn", "portafs.main:app",
        "--reload", "--host", "127.0.0.1", "--port", "8000",
    ]
    proc = start_process(cmd, BACKEND_DIR)
    log("info", "  API:     http://localhost:8000/api")
    log("info", "  Docs:    http://localhost:8000/docs")
    log("info", "Press Ctrl+C to stop")

    try:
        while True:
            retcode = proc.poll()
            if retcode is not None:
                log("info", f"api exited with code {retcode}")
                return retcode or 0
            time.sleep(0.5)
    except KeyboardInterrupt:
        print()
        log("info", "Ctrl+C received, shutting down...")
        return 0
    finally:
        terminate_process(proc)


if __name__ == "__main__":
    raise SystemExit(main())
