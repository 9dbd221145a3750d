"""Builders for dataset documents shaped like the dashboard JSON."""


def record(geography, values=None, cagr=None, segment=None):
    """One geography_segment_matrix row as it appears in the JSON payload."""
    row = {"geography": geography, "time_series": {str(y): v for y, v in (values or {}).items()}}
    if cagr is not None:
        row["cagr"] = cagr
    if segment is not None:
        row["segment"] = segment
    return row


def payload(geographies=(), segments=None, records=None):
    doc = {
        "dimensions": {
            "geographies": {"all_geographies": list(geographies)},
            "segments": segments or {},
        },
        "data": {},
    }
    if records is not None:
        doc["data"]["value"] = {"geography_segment_matrix": list(records)}
    return doc
