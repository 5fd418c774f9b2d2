from .simulator import (
    GuessItem,
    PlayoutSimulator,
    SimulationReport,
    simulate,
    ENDGAME_POOL_SIZE,
    MAX_TRACKED_TURNS,
)
from .exact import ExpectedTurnSearch, exact_expected_turns
from .io import write_csv, write_manifest, report_summary

__all__ = [
    "GuessItem", "PlayoutSimulator", "SimulationReport", "simulate", "ENDGAME_POOL_SIZE",
    "MAX_TRACKED_TURNS", "ExpectedTurnSearch", "exact_expected_turns",
    "write_csv", "write_manifest", "report_summary",
]
