"""
Trace recording and pretty printing for AES operations.

Contains:
- TraceRecorder: JSON Lines trace + compact verbose stdout
- print_header / print_result: shared formatting helpers
"""

from __future__ import annotations

import json
from typing import Any, TextIO

from .utils import bytes_to_hex


class TraceRecorder:
    """
    Records and outputs traces of AES execution.

    The block cipher calls ``record()`` after every round transform with
    the round number, operation name and a copy of the state.

    Supports:
    - JSON Lines file output  (when trace_file is set)
    - Compact verbose stdout  (when verbose is set)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, (bytes, bytearray)):
            return bytes(obj).hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        """Compact verbose line: block, round, operation, state."""
        block = record.get("block_index", 0)
        round_num = record.get("round", "?")
        operation = record.get("operation", "unknown")

        if "state" in record:
            state_hex = bytes_to_hex(record["state"])
            print(f"B{block:04d} R{round_num:>2}  {operation:16s} STATE:{state_hex}")

    def operations(self) -> list[str]:
        """Operation names in the order they were recorded."""
        return [r.get("operation", "") for r in self._records]

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_result(output_hex: str, passed: bool | None = None) -> None:
    """Print final cipher result."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"Output: {output_hex}")

    if passed is not None:
        status = "PASS" if passed else "FAIL"
        marker = "[OK]" if passed else "[ERROR]"
        print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
