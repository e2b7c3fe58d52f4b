"""
main.py — Application entry point for the layer-by-layer cube webview UI
========================================================================

This module launches the pywebview-based GUI and wires the Python <-> JS API.

Features & behavior:
 - Creates a single webview window hosting `templates/index.html`.
 - Supports CLI flags for debug mode, the HTML entrypoint, the preview server
   and the delay between narrated solve steps.
 - Provides robust startup/shutdown: ensures API.shutdown() is called on exit,
   handles SIGINT/SIGTERM, and logs exceptions.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

import argparse
import atexit
import logging
import signal
import sys
from pathlib import Path
from typing import Optional, Sequence

import webview

from api import API
from config import DEFAULT_HTML, STEP_DELAY

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("main")


def create_arg_parser() -> argparse.ArgumentParser:
    """
    Build and return the CLI argument parser.
    """
    p = argparse.ArgumentParser(
        description="Rubik's Cube layer-by-layer simulator",
        allow_abbrev=False,
    )

    p.add_argument("--debug", action="store_true", help="Enable webview debug mode.")
    p.add_argument("--html", default=str(DEFAULT_HTML), help="HTML file to load in the webview.")
    p.add_argument("--no-server", dest="server", action="store_false",
                   help="Do not start the Flask preview server.")
    p.set_defaults(server=True)
    p.add_argument("--step-delay", type=float, default=STEP_DELAY,
                   help="Seconds between narrated solve steps.")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible scrambles.")

    return p


def _install_signal_handlers(shutdown_callable):
    """
    Install safe signal handlers for SIGINT & SIGTERM.
    """
    def _handler(signum, frame):
        logger.info("Received signal %s, initiating shutdown...", signum)
        try:
            shutdown_callable()
        except Exception as e:
            logger.exception("Error during shutdown handler: %s", e)
        raise SystemExit(0)

    for sig_name in ("SIGINT", "SIGTERM"):
        if hasattr(signal, sig_name):
            signal.signal(getattr(signal, sig_name), _handler)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point. Returns integer exit code.
    """
    args = create_arg_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled (verbose logging + webview debugging).")

    html_path = Path(args.html)
    if not html_path.is_absolute():
        html_path = (Path(__file__).parent / html_path).resolve()
    if not html_path.exists():
        logger.error("HTML file not found: %s", html_path)
        return 2

    api: Optional[API] = None
    try:
        api = API(start_server=args.server, step_delay=args.step_delay, seed=args.seed)
    except Exception as e:
        logger.exception("Failed to initialize API: %s", e)
        return 3

    def _shutdown_safely():
        nonlocal api
        if api:
            try:
                api.shutdown()
            except Exception as e:
                logger.exception("Exception during API.shutdown(): %s", e)
            finally:
                api = None

    atexit.register(_shutdown_safely)
    _install_signal_handlers(_shutdown_safely)

    try:
        window = webview.create_window(
            "Rubik's Cube Simulator", str(html_path), js_api=api, resizable=True,
        )
        api.window = window
        logger.info("Starting webview (debug=%s)...", args.debug)
        webview.start(debug=args.debug)
    except SystemExit:
        logger.info("Shutdown requested (SystemExit).")
    except Exception as e:
        logger.exception("Unhandled exception while running webview: %s", e)
        _shutdown_safely()
        return 1
    finally:
        _shutdown_safely()

    return 0


if __name__ == "__main__":
    sys.exit(main())
