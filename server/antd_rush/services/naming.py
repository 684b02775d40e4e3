def normalize(raw: str) -> str:
    """Comparison form of a component name: `Table.Column` -> `tablecolumn`."""
    return raw.replace(".", "").lower()
