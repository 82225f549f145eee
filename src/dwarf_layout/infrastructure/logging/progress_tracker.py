#!/usr/bin/env python3

"""Progress tracking for full scans over the debug-info units."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time
from typing import Any


class ProgressTracker:
    """
    Track and report scan progress with per-unit statistics.

    Counts units, entries and structs seen during a scan and logs a summary
    line at the end. A progress line is logged at INFO every ``report_every``
    units so long scans over large binaries stay visible.
    """

    def __init__(self, logger: logging.Logger, report_every: int = 100):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
            report_every: Log an INFO progress line every N units (0 disables)
        """
        self.logger = logger
        self.report_every = report_every
        self.start_time = time()
        self.cu_count = 0
        self.die_count = 0
        self.struct_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a high-level operation with timing.

        Args:
            operation_name: Name of the operation being tracked
        """
        start_time = time()
        self.operation_stack.append((operation_name, start_time))
        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise
        finally:
            self.operation_stack.pop()

    @contextmanager
    def track_cu(self, cu: Any) -> Iterator[None]:
        """
        Track processing of one compilation unit.

        Args:
            cu: Compilation unit being processed
        """
        self.cu_count += 1
        cu_start = time()

        cu_offset = getattr(cu, "cu_offset", 0)
        initial_die_count = self.die_count

        try:
            yield
        except Exception as e:
            elapsed = time() - cu_start
            self.logger.error(
                f"[{self.get_current_context()}] CU #{self.cu_count} at 0x{cu_offset:x} "
                f"failed after {elapsed:.3f}s: {e}"
            )
            raise

        elapsed = time() - cu_start
        dies_processed = self.die_count - initial_die_count
        self.logger.debug(
            f"CU #{self.cu_count} at 0x{cu_offset:x} completed in {elapsed:.3f}s "
            f"({dies_processed} DIEs processed)"
        )
        if self.report_every and self.cu_count % self.report_every == 0:
            self.logger.info(
                f"  Scanned {self.cu_count} CUs, {self.die_count:,} DIEs, "
                f"{self.struct_count} structs so far"
            )

    def count_die(self) -> None:
        """Increment DIE counter for statistics."""
        self.die_count += 1

    def count_struct(self) -> None:
        """Increment the counter of struct entries that were registered."""
        self.struct_count += 1

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time

        avg_cu_time = total_time / self.cu_count if self.cu_count > 0 else 0
        avg_die_rate = self.die_count / total_time if total_time > 0 else 0

        self.logger.info(
            f"Processing complete: {self.cu_count} CUs, {self.die_count:,} DIEs, "
            f"{self.struct_count} structs in {total_time:.2f}s "
            f"(avg: {avg_cu_time:.3f}s/CU, {avg_die_rate:.1f} DIEs/s)"
        )

    def get_current_context(self) -> str:
        """
        Get current operation context for logging.

        Returns:
            String describing current operation stack
        """
        if not self.operation_stack:
            return "idle"

        return " -> ".join(op[0] for op in self.operation_stack)
