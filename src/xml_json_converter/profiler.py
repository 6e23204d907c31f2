"""Performance profiler for conversion operations."""

import json
import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one conversion."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float
    elements_processed: int
    size_ratio: float
    success: bool


class PerformanceProfiler:
    """
    Records duration, memory and throughput of conversions.

    Memory figures are the process RSS reported by psutil, sampled at
    start, at stop and whenever ``sample_performance`` is called.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0

    @contextmanager
    def profile_operation(self, operation_name: str):
        """
        Context manager for profiling an operation.

        Call ``stop_profiling`` inside the block to record sizes; if the
        block exits without doing so (for example on an exception) the
        operation is recorded as failed.
        """
        self.start_profiling(operation_name)
        try:
            yield self
        finally:
            if self.current_operation is not None:
                self.stop_profiling(success=False)

    def start_profiling(self, operation_name: str) -> None:
        """Start profiling an operation."""
        self.current_operation = operation_name
        self.start_time = time.perf_counter()
        self.start_memory = self._current_memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self) -> None:
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._current_memory_mb())

    def stop_profiling(self, input_size: int = 0, output_size: int = 0,
                       elements_processed: int = 0, success: bool = True) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            input_size: Size of input data in bytes
            output_size: Size of output data in bytes
            elements_processed: Number of XML elements converted
            success: Whether the operation completed

        Returns:
            PerformanceMetrics object with collected data

        Raises:
            ValueError: If no operation is being profiled
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        end_time = time.perf_counter()
        duration = end_time - self.start_time
        end_memory = self._current_memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        throughput = (input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s
        size_ratio = output_size / input_size if input_size > 0 else 1.0

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=input_size,
            output_size=output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput,
            elements_processed=elements_processed,
            size_ratio=size_ratio,
            success=success
        )
        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {self.current_operation}:")
        self.logger.info(f"  Duration: {duration:.4f}s")
        self.logger.info(f"  Throughput: {throughput:.2f} MB/s")
        self.logger.info(f"  Memory Peak: {self.peak_memory:.1f} MB")
        self.logger.info(f"  Elements: {elements_processed}")

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded conversions.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_output = sum(m.output_size for m in self.metrics_history)

        return {
            "total_operations": count,
            "failed_operations": sum(1 for m in self.metrics_history if not m.success),
            "total_duration": sum(m.duration for m in self.metrics_history),
            "total_input_mb": total_input / 1024 / 1024,
            "total_output_mb": total_output / 1024 / 1024,
            "total_elements": sum(m.elements_processed for m in self.metrics_history),
            "average_throughput_mbps": sum(m.throughput_mbps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "overall_size_ratio": total_output / total_input if total_input > 0 else 1.0,
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in the given format ("json" or "summary").
        """
        if format == "json":
            return json.dumps([asdict(m) for m in self.metrics_history], indent=2)

        elif format == "summary":
            summary = self.get_performance_summary()
            if not summary["total_operations"]:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Failed Operations: {summary['failed_operations']}",
                f"  Total Duration: {summary['total_duration']:.4f}s",
                f"  Total Input: {summary['total_input_mb']:.2f} MB",
                f"  Total Output: {summary['total_output_mb']:.2f} MB",
                f"  Total Elements: {summary['total_elements']}",
                f"  Average Memory Peak: {summary['average_memory_peak_mb']:.1f} MB",
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
