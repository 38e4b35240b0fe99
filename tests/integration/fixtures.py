"""
Integration Test Fixtures

Versioned, explicit fixtures for deterministic testing.
All fixtures are explicit - no random generation.
"""

from typing import Any, Dict, List, Tuple

from timeline_engine.contracts import TimelineInfo, TimelineTheme


# =============================================================================
# RAW RECORD FIXTURES
# =============================================================================

def create_records_minimal() -> List[Dict[str, Any]]:
    """Single well-formed record."""
    return [{"id": "rel_001", "year": 2020, "title": "First release", "type": "major"}]


def create_records_standard() -> List[Dict[str, Any]]:
    """Eight records spread over two active periods."""
    return [
        {"id": "rel_001", "year": 2003, "title": "Prototype", "type": "milestone"},
        {"id": "rel_002", "year": 2005, "title": "Company founded", "type": "milestone"},
        {"id": "rel_003", "year": 2005, "month": 9, "title": "Outdoor radio", "type": "major"},
        {"id": "rel_004", "year": 2006, "month": 6, "title": "Distance record",
         "type": "milestone", "highlight": ["record"]},
        {"id": "rel_005", "year": 2007, "title": "Integrated antenna", "type": "major"},
        {"id": "rel_006", "year": 2019, "month": 3, "title": "Video platform", "type": "major"},
        {"id": "rel_007", "year": 2019, "month": 3, "title": "Fiber line", "type": "minor"},
        {"id": "rel_008", "year": 2020, "month": 1, "title": "Patch train", "type": "patch"},
    ]


def create_records_with_errors() -> Tuple[List[Any], int]:
    """Three valid records mixed with malformed ones; returns (records, valid count)."""
    records = [
        {"id": "ok_1", "year": 2010},
        {"id": "", "year": 2010},                        # empty id
        {"id": "bad_year", "year": "2010"},              # string year
        {"id": "bad_month", "year": 2010, "month": 13},  # month out of range
        {"id": "bad_hl", "year": 2010, "highlight": "x"},  # highlight not a list
        "not a mapping",
        {"id": 42, "year": 2011.0},                      # coerced id and year
        {"id": "ok_1", "year": 2012},                    # duplicate id
        {"id": "ok_3", "year": 2012, "month": 12},
    ]
    return records, 3


# =============================================================================
# TIMELINE INFO FIXTURES
# =============================================================================

INFO_TEAL = TimelineInfo(title="Milestones", company="SAMPLE NETWORKS")
INFO_RAINBOW = TimelineInfo(title="Milestones", theme=TimelineTheme.RAINBOW, event_types={})
