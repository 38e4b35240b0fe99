"""
Track Assignment
================

Minimum-distance nudging and cost-based greedy assignment of event cards
to the four display tracks (Top/Bottom x Layer 0/1).

ORDERING:
=========
Both passes walk events left to right by pixel position (event id breaks
ties). The zigzag and crowd terms of the cost model remember the previous
placement, so the walk order is part of the algorithm. assign_tracks()
sorts its input itself; callers cannot feed it an order-dependent input.

KNOWN LIMITATION:
=================
The choice is greedy per event with no backtracking. It is fast enough
for interactive re-layout but NOT globally optimal.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import TrackCostConfig
from ..contracts.events import TimelineEvent
from ..contracts.layout import Track, TrackPosition, TRACK_ORDER


Span = Tuple[float, float]


@dataclass(frozen=True)
class PositionedEvent:
    """An event with its mapped and (possibly) nudged pixel center."""
    event: TimelineEvent
    pixel_original: float
    pixel_center: float
    color_token: str


def _walk_key(item: PositionedEvent) -> Tuple[float, str]:
    return (item.pixel_original, item.event.id)


def _placement_key(item: PositionedEvent) -> Tuple[float, float, str]:
    return (item.pixel_center, item.pixel_original, item.event.id)


# =============================================================================
# NUDGING
# =============================================================================

def nudge_positions(
    positioned: Iterable[PositionedEvent],
    min_spacing: float
) -> List[PositionedEvent]:
    """
    Enforce a minimum center-to-center distance, left to right.

    A center closer than min_spacing to its (already nudged) predecessor
    is pushed to predecessor + min_spacing. Centers only ever move right,
    so a crowded run drifts rightward as a block. The drift is unbounded.
    """
    nudged: List[PositionedEvent] = []
    previous_center: Optional[float] = None

    for item in sorted(positioned, key=_walk_key):
        center = item.pixel_original
        if previous_center is not None and center - previous_center < min_spacing:
            center = previous_center + min_spacing
        nudged.append(replace(item, pixel_center=center))
        previous_center = center

    return nudged


# =============================================================================
# TRACK OCCUPANCY
# =============================================================================

class TrackOccupancy:
    """
    Card spans already claimed on each track during one layout pass.

    Engine-local: built incrementally and discarded with the pass.
    """

    def __init__(self):
        self._intervals: Dict[Track, List[Span]] = {track: [] for track in TRACK_ORDER}

    def intervals(self, track: Track) -> List[Span]:
        return list(self._intervals[track])

    def commit(self, track: Track, span: Span):
        self._intervals[track].append(span)

    def overlap_ratio(self, track: Track, span: Span) -> float:
        """Fraction of span covered by the union of the track's occupants."""
        start, end = span
        width = end - start
        if width <= 0:
            return 0.0

        pieces = sorted(
            (max(start, occ_start), min(end, occ_end))
            for occ_start, occ_end in self._intervals[track]
            if occ_start < end and start < occ_end
        )
        if not pieces:
            return 0.0

        covered = 0.0
        run_start, run_end = pieces[0]
        for piece_start, piece_end in pieces[1:]:
            if piece_start > run_end:
                covered += run_end - run_start
                run_start, run_end = piece_start, piece_end
            else:
                run_end = max(run_end, piece_end)
        covered += run_end - run_start

        return min(1.0, covered / width)

    def nearest_prior_end(self, track: Track, start: float) -> Optional[float]:
        """Right edge of the closest occupant that ends at or before start."""
        ends = [occ_end for _, occ_end in self._intervals[track] if occ_end <= start]
        return max(ends) if ends else None

    def occupant_containing(self, track: Track, pixel: float) -> Optional[Span]:
        for occ_start, occ_end in self._intervals[track]:
            if occ_start <= pixel <= occ_end:
                return (occ_start, occ_end)
        return None

    def snapshot(self) -> Tuple[Tuple[Track, Tuple[Span, ...]], ...]:
        return tuple((track, tuple(self._intervals[track])) for track in TRACK_ORDER)


# =============================================================================
# COST MODEL
# =============================================================================

@dataclass(frozen=True)
class TrackCost:
    """Cost breakdown of placing one card on one track."""
    track: Track
    layer: float = 0.0
    zigzag: float = 0.0
    crowd: float = 0.0
    overlap: float = 0.0
    connector: float = 0.0

    @property
    def total(self) -> float:
        return self.layer + self.zigzag + self.crowd + self.overlap + self.connector


def track_cost(
    track: Track,
    center: float,
    previous_position: Optional[TrackPosition],
    occupancy: TrackOccupancy,
    config: TrackCostConfig
) -> TrackCost:
    """Score one candidate track for a card centered at center."""
    half = config.card_width / 2
    start, end = center - half, center + half

    layer_cost = track.layer * config.layer_penalty

    zigzag_cost = 0.0
    if previous_position is not None and track.position == previous_position:
        zigzag_cost = config.zigzag_penalty

    crowd_cost = 0.0
    prior_end = occupancy.nearest_prior_end(track, start)
    if prior_end is not None and start - prior_end <= config.crowd_distance:
        crowd_cost = config.crowd_penalty

    overlap_cost = 0.0
    ratio = occupancy.overlap_ratio(track, (start, end))
    if ratio > 0:
        overlap_cost = config.overlap_base_penalty + config.overlap_ratio_penalty * ratio ** 2

    connector_cost = 0.0
    if track.layer == 1:
        inner = Track(track.position, 0)
        obstruction = occupancy.occupant_containing(inner, center)
        if obstruction is not None:
            obstruction_center = (obstruction[0] + obstruction[1]) / 2
            if abs(center - obstruction_center) <= config.connector_distance:
                connector_cost = config.connector_penalty

    return TrackCost(
        track=track,
        layer=layer_cost,
        zigzag=zigzag_cost,
        crowd=crowd_cost,
        overlap=overlap_cost,
        connector=connector_cost,
    )


def choose_track(
    center: float,
    previous_position: Optional[TrackPosition],
    occupancy: TrackOccupancy,
    config: TrackCostConfig
) -> TrackCost:
    """Cheapest track; ties go to the earlier track in TRACK_ORDER."""
    best: Optional[TrackCost] = None
    for track in TRACK_ORDER:
        cost = track_cost(track, center, previous_position, occupancy, config)
        if best is None or cost.total < best.total:
            best = cost
    return best


def assign_tracks(
    positioned: Iterable[PositionedEvent],
    config: Optional[TrackCostConfig] = None
) -> Tuple[List[Tuple[PositionedEvent, Track]], TrackOccupancy]:
    """
    Greedily place every event on a track, left to right.

    Returns the placements in processing order and the committed occupancy.
    """
    config = config or TrackCostConfig()
    occupancy = TrackOccupancy()
    placements: List[Tuple[PositionedEvent, Track]] = []
    previous_position: Optional[TrackPosition] = None
    half = config.card_width / 2

    for item in sorted(positioned, key=_placement_key):
        chosen = choose_track(item.pixel_center, previous_position, occupancy, config)
        occupancy.commit(chosen.track, (item.pixel_center - half, item.pixel_center + half))
        placements.append((item, chosen.track))
        previous_position = chosen.track.position

    return placements, occupancy
