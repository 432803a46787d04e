import json
import os
from pathlib import Path
from typing import Dict, List, Optional

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
REPORT_FILENAME = os.getenv("REPORT_FILENAME", "eligibility-report.pdf")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Reference institutions per country, in recommendation order
DEFAULT_INSTITUTIONS: Dict[str, List[dict]] = {
    "USA": [
        {"name": "Massachusetts Institute of Technology", "website_url": "https://www.mit.edu"},
        {"name": "Stanford University", "website_url": "https://www.stanford.edu"},
        {"name": "Harvard University", "website_url": "https://www.harvard.edu"},
    ],
    "Canada": [
        {"name": "University of Toronto", "website_url": "https://www.utoronto.ca"},
        {"name": "University of British Columbia", "website_url": "https://www.ubc.ca"},
        {"name": "McGill University", "website_url": "https://www.mcgill.ca"},
    ],
}


def institutions_file() -> Optional[Path]:
    raw = os.getenv("INSTITUTIONS_FILE", "").strip()
    return Path(raw) if raw else None


def load_institutions(path: Optional[Path] = None) -> Dict[str, List[dict]]:
    """Return the country -> institutions mapping.

    Reads ``path`` (or ``INSTITUTIONS_FILE``) when set, otherwise the built-in
    defaults. The file must hold a JSON object mapping a country name to a
    list of ``{"name": ..., "website_url": ...}`` entries.
    """
    path = path or institutions_file()
    if path is None:
        return DEFAULT_INSTITUTIONS

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read institutions file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Institutions file {path} must contain a JSON object keyed by country.")

    catalog: Dict[str, List[dict]] = {}
    for country, entries in data.items():
        if not isinstance(entries, list):
            raise ValueError(f"Institutions for {country} must be a list.")
        rows = []
        for entry in entries:
            if not isinstance(entry, dict) or not str(entry.get("name", "")).strip():
                raise ValueError(f"Invalid institution entry for {country}: {entry!r}")
            rows.append({"name": str(entry["name"]).strip(), "website_url": entry.get("website_url") or None})
        catalog[str(country)] = rows
    return catalog
