"""
Observability & Audit Layer

RESPONSIBILITY: Audit logging and metrics for layout computations
ALLOWED INPUTS: Audit entries and metric values from other layers
OUTPUTS: AuditLogEntry lists, MetricPoint series, aggregates

WHAT THIS LAYER MUST NOT DO:
============================
- Modify layout behavior
- Filter or interpret events (only record them)
- Make decisions based on logged data
- Block or delay layout computation

BOUNDARY ENFORCEMENT:
=====================
- Receives immutable entries (frozen dataclasses)
- NEVER modifies events or engine state
- Provides read-only access to logs and metrics
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum
import hashlib
import itertools

import numpy as np

from ..contracts.base import Error, Timestamp
from ..contracts.events import AuditEventType, AuditLogEntry, MetricPoint


# =============================================================================
# LOG COLLECTORS (One per layer)
# =============================================================================

class LogCollector:
    """
    Append-only audit log for one layer.
    """

    def __init__(self, layer_name: str):
        self._layer_name = layer_name
        self._entries: List[AuditLogEntry] = []

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only)."""
        self._entries.append(entry)

    def get_entries(
        self,
        event_type: Optional[AuditEventType] = None
    ) -> List[AuditLogEntry]:
        """Get entries, optionally filtered by type."""
        if event_type:
            return [e for e in self._entries if e.event_type == event_type]
        return list(self._entries)

    @property
    def layer_name(self) -> str:
        return self._layer_name


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

class MetricType(Enum):
    """Types of metrics collected."""
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    TIMING = "timing"


@dataclass
class MetricDefinition:
    """Definition of a metric to collect."""
    name: str
    metric_type: MetricType
    description: str
    labels: Tuple[str, ...] = field(default_factory=tuple)


class MetricsCollector:
    """
    Collect and aggregate layout metrics.

    Metrics are append-only series of data points.
    """

    def __init__(self):
        self._metrics: Dict[str, List[MetricPoint]] = {}
        self._definitions: Dict[str, MetricDefinition] = {}
        self._register_default_metrics()

    def _register_default_metrics(self):
        """Register standard metrics."""
        defaults = [
            MetricDefinition(
                name="layout_duration_ms",
                metric_type=MetricType.TIMING,
                description="Wall time of one full layout pass in milliseconds"
            ),
            MetricDefinition(
                name="layout_events_total",
                metric_type=MetricType.COUNTER,
                description="Events laid out per pass"
            ),
            MetricDefinition(
                name="layout_breaks",
                metric_type=MetricType.GAUGE,
                description="Axis breaks emitted by the last pass"
            ),
            MetricDefinition(
                name="layout_layer1_events",
                metric_type=MetricType.GAUGE,
                description="Cards pushed to the outer layer by the last pass"
            ),
            MetricDefinition(
                name="layout_invalid_events_total",
                metric_type=MetricType.COUNTER,
                description="Event records rejected at the boundary",
                labels=("error_code",)
            ),
            MetricDefinition(
                name="layout_total_width_px",
                metric_type=MetricType.HISTOGRAM,
                description="Final content width per pass"
            ),
        ]

        for definition in defaults:
            self.register_metric(definition)

    def register_metric(self, definition: MetricDefinition):
        """Register a new metric definition."""
        self._definitions[definition.name] = definition
        if definition.name not in self._metrics:
            self._metrics[definition.name] = []

    def definition(self, metric_name: str) -> Optional[MetricDefinition]:
        return self._definitions.get(metric_name)

    def record(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Record a metric data point."""
        if metric_name not in self._metrics:
            self._metrics[metric_name] = []

        label_tuple = tuple(sorted(labels.items())) if labels else ()

        point = MetricPoint(
            metric_name=metric_name,
            value=float(value),
            timestamp=Timestamp.now(),
            labels=label_tuple
        )
        self._metrics[metric_name].append(point)

    def get_metric(self, metric_name: str) -> List[MetricPoint]:
        return list(self._metrics.get(metric_name, []))

    def get_latest(self, metric_name: str) -> Optional[MetricPoint]:
        """Get the latest value for a metric."""
        points = self._metrics.get(metric_name, [])
        return points[-1] if points else None

    def metric_names(self) -> List[str]:
        return sorted(self._metrics.keys())

    def compute_aggregates(self, metric_name: str) -> Dict[str, float]:
        """Compute aggregate statistics for a metric."""
        points = self._metrics.get(metric_name, [])

        if not points:
            return {}

        values = np.array([p.value for p in points], dtype=float)

        return {
            'count': int(values.size),
            'sum': float(values.sum()),
            'min': float(values.min()),
            'max': float(values.max()),
            'avg': float(values.mean()),
            'p50': float(np.percentile(values, 50)),
            'p95': float(np.percentile(values, 95)),
        }


# =============================================================================
# OBSERVABILITY ENGINE (Orchestrates all observability)
# =============================================================================

@dataclass
class ObservabilityConfig:
    """Configuration for observability engine."""
    enable_metrics: bool = True
    enable_audit: bool = True


class ObservabilityEngine:
    """
    Central Observability Engine.

    BOUNDARY ENFORCEMENT:
    - ONLY observes, never modifies
    - Provides read-only access to collected data
    """

    LAYERS = ('engine', 'validation', 'api')

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._collectors: Dict[str, LogCollector] = {
            layer: LogCollector(layer) for layer in self.LAYERS
        }
        self._metrics = MetricsCollector() if self._config.enable_metrics else None
        self._sequence = itertools.count(1)

    def collect_audit(self, entry: AuditLogEntry):
        """Collect an audit log entry from any layer."""
        if not self._config.enable_audit:
            return
        collector = self._collectors.get(entry.layer)
        if collector:
            collector.collect(entry)

    def log_audit(
        self,
        action: str,
        event_type: AuditEventType = AuditEventType.SYSTEM,
        entity_id: Optional[str] = None,
        layer: str = "engine",
        **metadata: str
    ) -> AuditLogEntry:
        """Helper to log audit entry directly."""
        sequence = next(self._sequence)
        entry_id = hashlib.sha256(
            f"{layer}_{action}|{sequence}".encode()
        ).hexdigest()[:16]

        entry = AuditLogEntry(
            entry_id=f"audit_{entry_id}",
            event_type=event_type,
            timestamp=Timestamp.now(),
            layer=layer,
            action=action,
            entity_id=entity_id,
            metadata=tuple((k, str(v)) for k, v in sorted(metadata.items()))
        )
        self.collect_audit(entry)
        return entry

    def log_error(self, error: Error, layer: str = "validation") -> AuditLogEntry:
        """Record a boundary error as an audit entry."""
        return self.log_audit(
            action=error.code.name.lower(),
            event_type=AuditEventType.ERROR,
            layer=layer,
            message=error.message,
            **dict(error.context)
        )

    def collect_metric(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Collect a metric data point."""
        if self._metrics:
            self._metrics.record(metric_name, value, labels)

    def get_unified_log(self, layers: Optional[List[str]] = None) -> List[AuditLogEntry]:
        """Get entries from all or specified layers, oldest first."""
        target_layers = layers or list(self._collectors.keys())

        entries = []
        for layer_name in target_layers:
            collector = self._collectors.get(layer_name)
            if collector:
                entries.extend(collector.get_entries())

        entries.sort(key=lambda e: e.timestamp.value)
        return entries

    def get_metric_aggregates(self) -> Dict[str, Dict[str, float]]:
        """Aggregates for every metric that has data."""
        if not self._metrics:
            return {}
        aggregates = {}
        for name in self._metrics.metric_names():
            values = self._metrics.compute_aggregates(name)
            if values:
                aggregates[name] = values
        return aggregates

    @property
    def metrics(self) -> Optional[MetricsCollector]:
        return self._metrics
