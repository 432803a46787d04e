
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

class ScoreType(str, Enum):
    IELTS = "IELTS"
    TOEFL = "TOEFL"

class ApplicantInput(BaseModel):
    cgpa: float = Field(..., description="Cumulative GPA on a 0-5 scale")
    work_experience_years: float = Field(..., description="Years of work experience")
    english_score: float = Field(..., description="IELTS band or TOEFL total")
    score_type: ScoreType = ScoreType.IELTS
    target_country: str = Field("", description="e.g. 'USA' or 'Canada'; anything else is not eligible")

class CriterionOutput(BaseModel):
    description: str
    satisfied: bool

class InstitutionOutput(BaseModel):
    name: str
    website_url: Optional[str] = None

class EligibilityOutput(BaseModel):
    target_country: str
    eligible: bool
    status_message: str
    ielts_equivalent: float
    criteria: List[CriterionOutput]
    recommended_institutions: List[InstitutionOutput]

class CountryRules(BaseModel):
    country: str
    criteria: List[str]
