"""api.py — pywebview JS API + integrated preview server
=========================================================

This file implements the Python <-> JavaScript API used by the pywebview GUI and
hosts a small Flask server that serves previews of the current cube.

High-level responsibilities
- Own one `CubeStatus` session (cube, solver, in-progress flag).
- Expose a pywebview-friendly API (`API` class) with the commands used by the
  frontend: the 12 quarter turns, scramble, reset, step-by-step solve, hints.
- Serve `/cube.svg`, `/cube.png` and `/state` from a Flask app running on a
  background Werkzeug server so the page (or a developer) can fetch previews.
- Forward status messages to the page through `window.evaluate_js` when a
  window is attached.

Threading model / shared state
- API methods are called from the pywebview thread; Flask handlers run in the
  server thread. Both go through `self.lock` before touching the session.
- Solving never blocks a thread: the page calls `start_solve()` and then
  `next_step()` on its own timer, which is where the narration delay lives.
------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import json
import logging
import threading
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, make_response, request
from flask_cors import CORS
from werkzeug.serving import make_server

from config import DEFAULT_SCRAMBLE_MOVES, PREVIEW_HOST, PREVIEW_PORT, STEP_DELAY
from cube_status import CubeStatus
from moves import ALL_MOVES
from renderer import render_svg

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# ---------- Flask server wrapper ----------
class _Server(threading.Thread):
    """Run Werkzeug/Flask in a background daemon thread using `make_server`.

    This wrapper keeps the Flask server lifecycle separate from pywebview so
    we can stop it gracefully on shutdown.
    """

    def __init__(self, app, host, port):
        super().__init__(daemon=True)
        self._app = app
        self._host = host
        self._port = port
        self._server = None

    def run(self):
        try:
            self._server = make_server(self._host, self._port, self._app, threaded=True)
            self._server.serve_forever()
        except Exception as e:
            logger.exception("[Preview] Flask server stopped with error: %s", e)

    def shutdown(self):
        if self._server:
            self._server.shutdown()


# ---------- API class (pywebview JS API + Flask endpoints) ----------
class API:
    """Main JS API object exposed to the frontend via pywebview"""

    def __init__(self, start_server: bool = True, step_delay: float = STEP_DELAY,
                 seed: Optional[int] = None):
        self.window = None  # set by main.py once the webview window exists
        self.step_delay = step_delay
        self.lock = threading.Lock()
        self.last_status = {"message": "", "in_progress": False}

        self.session = CubeStatus(status_sink=self._on_status, seed=seed)

        self._flask_app = self._create_flask_app()
        self._flask_thread = None
        if start_server:
            self._flask_thread = _Server(self._flask_app, PREVIEW_HOST, PREVIEW_PORT)
            try:
                self._flask_thread.start()
                logger.info("[Preview] server started at http://%s:%s/cube.svg", PREVIEW_HOST, PREVIEW_PORT)
            except Exception as e:
                logger.exception("[Preview] failed to start server: %s", e)

    # ----- status sink -----

    def _on_status(self, message: str, in_progress: bool = False) -> None:
        self.last_status = {"message": message, "in_progress": bool(in_progress)}
        logger.info("[status] %s", message)
        if self.window is not None:
            try:
                self.window.evaluate_js(
                    f"window.setStatus && window.setStatus({json.dumps(message)}, {json.dumps(bool(in_progress))})"
                )
            except Exception as e:
                logger.warning("[API] could not push status to window: %s", e)

    # ----- Flask app / endpoints -----

    def _create_flask_app(self):
        """Create and return a Flask application configured with CORS.

        Endpoints include:
        - GET /health     -> basic liveness JSON
        - GET /state      -> current state, history and in-progress flag
        - GET /cube.svg   -> SVG front view of the current state
        - GET /cube.png   -> unfolded net as PNG
        - POST /move      -> {"move": "R'"} apply one quarter turn
        - POST /scramble  -> {"moves": 20} scramble the cube
        """
        app = Flask(__name__)

        # allow CORS for local development only
        CORS(app, resources={r"/*": {"origins": "*"}})

        @app.route("/health")
        def _health():
            return jsonify({"ok": True})

        @app.route("/state")
        def _state():
            return jsonify(self.get_state())

        @app.route("/cube.svg")
        def _cube_svg():
            with self.lock:
                svg = self.session.render_svg()
            return Response(svg, mimetype="image/svg+xml")

        @app.route("/cube.png")
        def _cube_png():
            try:
                with self.lock:
                    png = self.session.render_png()
            except RuntimeError as e:
                logger.exception("[Preview] PNG render failed: %s", e)
                return make_response(("Encode failed", 500))
            return Response(png, mimetype="image/png")

        @app.route("/move", methods=["POST"])
        def _move():
            data = request.get_json(silent=True) or {}
            result = self.move(str(data.get("move", "")))
            return jsonify(result), (200 if result["ok"] else 400)

        @app.route("/scramble", methods=["POST"])
        def _scramble():
            data = request.get_json(silent=True) or {}
            result = self.scramble(data.get("moves", DEFAULT_SCRAMBLE_MOVES))
            return jsonify(result), (200 if result["ok"] else 400)

        return app

    # ----- pywebview-facing functions (API surface) -----

    def get_state(self) -> Dict[str, Any]:
        with self.lock:
            data = self.session.to_dict()
        data["status"] = dict(self.last_status)
        return data

    def render_svg(self, state: Optional[str] = None) -> str:
        """SVG for `state` (a step snapshot) or for the current cube."""
        if state is None:
            with self.lock:
                return self.session.render_svg()
        return render_svg(state)

    def available_moves(self):
        return [str(m) for m in ALL_MOVES]

    def move(self, move: str) -> Dict[str, Any]:
        """Apply a single quarter turn (e.g. "R", "U'")."""
        try:
            with self.lock:
                ok = self.session.move(move)
                state = self.session.cube.serialize()
            if not ok:
                return {"ok": False, "error": f"Move rejected: {move}", "state": state}
            return {"ok": True, "state": state}
        except Exception as e:
            logger.exception("[API.move] Error applying move %r: %s", move, e)
            return {"ok": False, "error": str(e)}

    def send_sequence(self, seq: str) -> Dict[str, Any]:
        """Apply a whole sequence such as "R U R' U'" or "F2 B"."""
        try:
            with self.lock:
                ok = self.session.apply_sequence(seq)
                state = self.session.cube.serialize()
            return {"ok": ok, "state": state}
        except Exception as e:
            logger.exception("[API.send_sequence] Exception: %s", e)
            return {"ok": False, "error": str(e)}

    def scramble(self, num_moves: int = DEFAULT_SCRAMBLE_MOVES) -> Dict[str, Any]:
        try:
            n = int(num_moves)
            with self.lock:
                if self.session.in_progress:
                    return {"ok": False, "error": "Solve in progress"}
                moves = self.session.scramble(n)
                state = self.session.cube.serialize()
            logger.info("Scramble: %s", " ".join(map(str, moves)))
            return {"ok": True, "scramble": " ".join(map(str, moves)), "state": state}
        except (TypeError, ValueError) as e:
            return {"ok": False, "error": str(e)}
        except Exception as e:
            logger.exception("[API.scramble] Error scrambling the cube: %s", e)
            return {"ok": False, "error": str(e)}

    def reset_cube_state(self) -> Dict[str, Any]:
        """Reset internal cube state to solved."""
        try:
            with self.lock:
                self.session.reset()
                state = self.session.cube.serialize()
            return {"ok": True, "state": state}
        except Exception as e:
            logger.exception("[API.reset_cube_state] Cube cannot be reset: %s", e)
            return {"ok": False, "error": str(e)}

    def start_solve(self) -> Dict[str, Any]:
        """Begin a step-by-step solve; the page then polls `next_step()` every `step_delay_ms`."""
        try:
            with self.lock:
                ok = self.session.start_solve()
            if not ok:
                return {"ok": False, "error": "Solve already in progress"}
            return {"ok": True, "step_delay_ms": int(self.step_delay * 1000)}
        except Exception as e:
            logger.exception("[API.start_solve] %s", e)
            return {"ok": False, "error": str(e)}

    def next_step(self) -> Dict[str, Any]:
        """Next narrated step as {description, moves, state}; `done` once finished."""
        try:
            with self.lock:
                step = self.session.next_step()
                solved = self.session.cube.is_solved()
            if step is None:
                return {"ok": True, "done": True, "solved": solved,
                        "message": self.last_status["message"]}
            return {"ok": True, "done": False, "step": step.to_dict()}
        except Exception as e:
            logger.exception("[API.next_step] %s", e)
            with self.lock:
                self.session.abandon_solve()
            return {"ok": False, "error": str(e)}

    def solve(self) -> Dict[str, Any]:
        """Run the whole solve at once and return every step."""
        try:
            with self.lock:
                result = self.session.solve()
                state = self.session.cube.serialize()
            return {
                "ok": True,
                "solved": result.solved,
                "message": result.message,
                "steps": [s.to_dict() for s in result.steps],
                "state": state,
            }
        except Exception as e:
            logger.exception("[API.solve] %s", e)
            return {"ok": False, "error": str(e)}

    def hint(self) -> Dict[str, Any]:
        """Kociemba solution for the current state (not used by the narrated solve)."""
        try:
            with self.lock:
                sol = self.session.hint()
            if sol is None:
                return {"ok": False, "error": "Solver rejected the cube state"}
            return {"ok": True, "solution": sol}
        except Exception as e:
            logger.exception("[API.hint] %s", e)
            return {"ok": False, "error": str(e)}

    def validate(self) -> Dict[str, Any]:
        with self.lock:
            ok, msg = self.session.validate()
        return {"ok": ok, "message": msg}

    def shutdown(self):
        """Shut down the Flask server and drop any running solve."""
        with self.lock:
            self.session.abandon_solve()
        try:
            if self._flask_thread:
                self._flask_thread.shutdown()
        except Exception as e:
            logger.exception("[API.shutdown] %s", e)
        self._flask_thread = None
