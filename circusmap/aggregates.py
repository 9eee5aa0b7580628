"""
Derived read models for the map: date range and venue grouping.

These work on anything with the show attributes (ORM rows or CanonicalShow)
and are recomputed on every request; nothing here is stored.
"""
from typing import Any, Dict, Iterable, List

from circusmap.settings import DEFAULT_END_DATE, DEFAULT_START_DATE


def show_coords(show) -> List[float]:
    return [float(show.latitude), float(show.longitude)]


def with_coords(show) -> Dict[str, Any]:
    """Serialize a show and add a numeric [lat, lon] pair for the map."""
    out = {
        "id": getattr(show, "id", None),
        "circus_name": show.circus_name,
        "venue_name": show.venue_name,
        "address": show.address,
        "city": show.city,
        "state": show.state,
        "zip": show.zip,
        "latitude": show.latitude,
        "longitude": show.longitude,
        "show_date": show.show_date.isoformat(),
        "file_name": show.file_name,
        "coords": show_coords(show),
    }
    uploaded_at = getattr(show, "uploaded_at", None)
    if uploaded_at is not None:
        out["uploaded_at"] = uploaded_at.isoformat()
    return out


def compute_date_range(shows: Iterable) -> Dict[str, str]:
    """Earliest and latest show date; a default season when there are none."""
    dates = [s.show_date for s in shows]
    if not dates:
        return {"start_date": DEFAULT_START_DATE, "end_date": DEFAULT_END_DATE}
    return {"start_date": min(dates).isoformat(), "end_date": max(dates).isoformat()}


def group_venues(shows: Iterable) -> List[Dict[str, Any]]:
    """
    Group shows by (venue_name, city, state).

    Address and coordinates come from the first show seen for the venue;
    the date span covers all of its shows. Order is first appearance.
    """
    groups: Dict[tuple, Dict[str, Any]] = {}
    for s in shows:
        key = (s.venue_name, s.city, s.state)
        g = groups.get(key)
        if g is None:
            groups[key] = {
                "venue_name": s.venue_name,
                "city": s.city,
                "state": s.state,
                "address": s.address,
                "coords": show_coords(s),
                "dates": [s.show_date],
            }
        else:
            g["dates"].append(s.show_date)

    venues = []
    for idx, g in enumerate(groups.values(), start=1):
        dates = g.pop("dates")
        venues.append({
            "id": idx,
            **g,
            "start_date": min(dates).isoformat(),
            "end_date": max(dates).isoformat(),
            "show_count": len(dates),
        })
    return venues
