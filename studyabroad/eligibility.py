
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import load_institutions

SCORE_TYPES = ("IELTS", "TOEFL")

# Ordered rule table per country: profile value, minimum, and the label shown to the applicant.
# Canada deliberately has no work experience rule.
RULE_TABLE = [
    {"country":"USA","field":"cgpa","minimum":3.0,"description":"CGPA requirement (≥3.0)"},
    {"country":"USA","field":"ielts_equivalent","minimum":6.5,"description":"English proficiency requirement (≥6.5 IELTS)"},
    {"country":"USA","field":"work_experience_years","minimum":1.0,"description":"Work experience requirement (≥1 year)"},

    {"country":"Canada","field":"cgpa","minimum":2.8,"description":"CGPA requirement (≥2.8)"},
    {"country":"Canada","field":"ielts_equivalent","minimum":6.0,"description":"English proficiency requirement (≥6.0 IELTS)"},
]

RULES_DF = pd.DataFrame(RULE_TABLE)


@dataclass(frozen=True)
class ApplicantProfile:
    cgpa: float
    work_experience_years: float
    english_score: float
    score_type: str = "IELTS"
    target_country: str = ""


@dataclass(frozen=True)
class Criterion:
    description: str
    satisfied: bool


@dataclass(frozen=True)
class Institution:
    name: str
    website_url: Optional[str] = None


@dataclass(frozen=True)
class Verdict:
    eligible: bool
    criteria: Tuple[Criterion, ...]
    recommended_institutions: Tuple[Institution, ...]
    ielts_equivalent: float


@dataclass
class ValidationResult:
    ok: bool
    errors: List[str]


def catalog_frame(catalog: Dict[str, List[dict]]) -> pd.DataFrame:
    rows = []
    for country, entries in catalog.items():
        for position, entry in enumerate(entries):
            url = entry.get("website_url")
            rows.append({
                "country": country,
                "position": position,
                "name": entry["name"],
                "website_url": url if isinstance(url, str) and url else None,
            })
    return pd.DataFrame(rows, columns=["country", "position", "name", "website_url"])


INSTITUTIONS_DF = catalog_frame(load_institutions())


def supported_countries() -> List[str]:
    return RULES_DF["country"].drop_duplicates().tolist()


def rules_for(country: str) -> List[str]:
    return RULES_DF[RULES_DF["country"] == country]["description"].tolist()


def normalize_english_score(score: float, score_type: str) -> float:
    """Convert a test score to the IELTS scale.

    IELTS scores pass through untouched. TOEFL scores use the linear
    approximation ``(score - 31) / 10`` rounded half up to one decimal place,
    with no clamping, so out-of-range TOEFL values map to out-of-range IELTS
    values.
    """
    score = float(score)
    if score_type == "IELTS":
        return score
    converted = (score - 31) / 10
    if not math.isfinite(converted):
        return converted
    # Round the shortest decimal form so 6.45 becomes 6.5, not 6.4
    return float(Decimal(repr(converted)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def institutions_for(country: str, frame: Optional[pd.DataFrame] = None) -> Tuple[Institution, ...]:
    frame = INSTITUTIONS_DF if frame is None else frame
    rows = frame[frame["country"] == country].sort_values("position")
    return tuple(Institution(name=r.name, website_url=r.website_url) for r in rows.itertuples(index=False))


def evaluate(profile: ApplicantProfile, institutions: Optional[pd.DataFrame] = None) -> Verdict:
    ielts_equivalent = normalize_english_score(profile.english_score, profile.score_type)
    values = {
        "cgpa": float(profile.cgpa),
        "ielts_equivalent": ielts_equivalent,
        "work_experience_years": float(profile.work_experience_years),
    }

    rules = RULES_DF[RULES_DF["country"] == profile.target_country]
    # NaN inputs compare False, so a malformed number reads as an unmet criterion
    criteria = tuple(
        Criterion(description=rule.description, satisfied=bool(values[rule.field] >= rule.minimum))
        for rule in rules.itertuples(index=False)
    )

    # An unknown or empty country has no rules and is never eligible
    eligible = len(criteria) > 0 and bool(np.all([c.satisfied for c in criteria]))
    recommended = institutions_for(profile.target_country, institutions) if eligible else ()

    return Verdict(
        eligible=eligible,
        criteria=criteria,
        recommended_institutions=recommended,
        ielts_equivalent=ielts_equivalent,
    )


def status_message(verdict: Verdict) -> str:
    return "You are eligible!" if verdict.eligible else "Not eligible at this time"


def _as_number(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_payload(payload: dict) -> ValidationResult:
    errors = []

    # CGPA
    cgpa = _as_number(payload.get("cgpa"))
    if cgpa is None or not (0 <= cgpa <= 5):
        errors.append("Invalid cgpa: must be a number between 0 and 5.")

    # Work experience
    years = _as_number(payload.get("work_experience_years"))
    if years is None or not (years >= 0):
        errors.append("Invalid work_experience_years: must be a number of years, 0 or more.")

    # English score
    score = _as_number(payload.get("english_score"))
    if score is None or not math.isfinite(score):
        errors.append("Invalid english_score: must be a finite number.")

    # Score type
    score_type = str(payload.get("score_type", ""))
    if score_type not in SCORE_TYPES:
        errors.append('Invalid score_type: must be one of "IELTS", "TOEFL".')

    # target_country is left unchecked; unsupported countries are simply not eligible
    return ValidationResult(ok = len(errors)==0, errors = errors)


def profile_from_payload(payload: dict) -> ApplicantProfile:
    return ApplicantProfile(
        cgpa=float(payload["cgpa"]),
        work_experience_years=float(payload["work_experience_years"]),
        english_score=float(payload["english_score"]),
        score_type=str(payload["score_type"]),
        target_country=str(payload.get("target_country") or ""),
    )
