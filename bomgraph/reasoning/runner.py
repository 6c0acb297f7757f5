# ============================================================
# bomgraph/reasoning/runner.py - Reasoner invocation
# ============================================================
# Calls a black-box reasoner on its own daemon thread with a
# timeout and turns whatever comes back into a ReasoningReport.
#
# Reasoner contract:
#   reasoner(graph, ruleset, master_item_code) -> dict
#
# Failure mapping (never raised to the caller):
#   - timeout   -> {"error": "Reasoning timed out after Ns"}
#   - exception -> {"error": str(exc)}
#
# A timed-out call is abandoned on its thread; it holds no
# shared resource, so later calls are unaffected.
# ============================================================

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional

from ..config import get_settings
from ..exceptions import ReasonerTimeoutError
from ..ontology.graph import KnowledgeGraph
from .extractor import extract
from .models import ReasoningReport

logger = logging.getLogger(__name__)

Reasoner = Callable[[KnowledgeGraph, Any, Optional[str]], Mapping[str, Any]]


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}"


class _ReasonerCall:
    """One reasoner invocation on a daemon thread"""

    def __init__(self, reasoner: Reasoner, args: tuple, name: str):
        self.started = threading.Event()
        self.finished = threading.Event()
        self.result: Any = None
        self.error: Optional[BaseException] = None
        self._reasoner = reasoner
        self._args = args
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        self.started.set()
        try:
            self.result = self._reasoner(*self._args)
        except Exception as e:
            self.error = e
        finally:
            self.finished.set()


class ReasonerRunner:
    """
    Timeout-bounded reasoner calls

    Usage:
        runner = ReasonerRunner(OwlRlReasoner(schema), ruleset=load_ruleset())
        report = runner.validate(graph, "3110A063000150Y1")
        report = runner.reason_hierarchy(graph, "3110A063000150Y1")
        runner.close()
    """

    def __init__(
        self,
        reasoner: Reasoner,
        ruleset: Any = None,
        reasoner_type: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            reasoner: black-box reasoner callable
            ruleset: passed to the reasoner unchanged
            reasoner_type: report label (default: reasoner.reasoner_type or settings)
            timeout_seconds: per-call timeout, counted from the moment the
                reasoner starts (default: settings.reasoner.timeout_seconds)
        """
        settings = get_settings().reasoner
        self.reasoner = reasoner
        self.ruleset = ruleset
        self.reasoner_type = reasoner_type or getattr(reasoner, "reasoner_type", None) or settings.type
        self.timeout_seconds = settings.timeout_seconds if timeout_seconds is None else timeout_seconds
        self._call_count = 0
        self._count_lock = threading.Lock()
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Refuse further calls; abandoned reasoner threads are daemons and are not joined"""
        self._closed = True

    # --------------------------------------------------------
    # [1] Public calls
    # --------------------------------------------------------

    def validate(self, graph: KnowledgeGraph, master_item_code: Optional[str] = None) -> ReasoningReport:
        """Consistency check (no hierarchy in the report)"""
        return self._run(graph, master_item_code, include_hierarchy=False)

    def infer(self, graph: KnowledgeGraph, master_item_code: Optional[str] = None) -> ReasoningReport:
        """Inferred statements and subclasses (no hierarchy in the report)"""
        return self._run(graph, master_item_code, include_hierarchy=False)

    def reason_hierarchy(self, graph: KnowledgeGraph, master_item_code: str) -> ReasoningReport:
        """Full reasoning including the master's BOM hierarchy"""
        return self._run(graph, master_item_code, include_hierarchy=True)

    # --------------------------------------------------------
    # [2] Internals
    # --------------------------------------------------------

    def _call(self, graph: KnowledgeGraph, master_item_code: Optional[str]) -> Any:
        if self._closed:
            raise RuntimeError("ReasonerRunner is closed")
        with self._count_lock:
            self._call_count += 1
            name = f"reasoner-{self._call_count}"
        call = _ReasonerCall(self.reasoner, (graph, self.ruleset, master_item_code), name)
        call.start()
        call.started.wait()
        if not call.finished.wait(timeout=self.timeout_seconds):
            logger.warning(f"Abandoning reasoner thread {name} for {master_item_code}")
            raise ReasonerTimeoutError(
                f"Reasoning timed out after {_format_seconds(self.timeout_seconds)}s"
            )
        if call.error is not None:
            raise call.error
        return call.result

    def _run(self, graph: KnowledgeGraph, master_item_code: Optional[str], include_hierarchy: bool) -> ReasoningReport:
        started = time.monotonic()
        try:
            raw = self._call(graph, master_item_code)
        except ReasonerTimeoutError as e:
            raw = {"error": str(e)}
        except Exception as e:
            logger.exception(f"Reasoner raised for {master_item_code}")
            raw = {"error": str(e) or type(e).__name__}
        elapsed_ms = int((time.monotonic() - started) * 1000)

        return extract(
            raw,
            master_item_code=master_item_code,
            reasoner_type=self.reasoner_type,
            elapsed_ms=elapsed_ms,
            include_hierarchy=include_hierarchy,
        )
