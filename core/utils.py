# core/utils.py

def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before a write:
    - Empty strings → None
    - Strip string whitespace
    - Preserve booleans, None values and everything else
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        clean[k] = v

    return clean


def first_row(result):
    """First row of a Supabase response, or None."""
    data = getattr(result, "data", None) or []
    if isinstance(data, dict):
        return data
    return data[0] if data else None
