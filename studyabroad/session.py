from datetime import date
from typing import Optional

from .eligibility import ApplicantProfile, Verdict, evaluate
from .report import Report, build_report


class EligibilitySession:
    """Holds the latest submitted profile and its verdict.

    Each submission replaces both values together; nothing is updated in place.
    """

    def __init__(self):
        self.profile: Optional[ApplicantProfile] = None
        self.verdict: Optional[Verdict] = None

    def submit(self, profile: ApplicantProfile) -> Verdict:
        verdict = evaluate(profile)
        self.profile, self.verdict = profile, verdict
        return verdict

    def report(self, generated_on: Optional[date] = None) -> Report:
        if self.verdict is None:
            raise RuntimeError("No eligibility result yet: submit a profile before requesting a report.")
        return build_report(self.profile, self.verdict, generated_on)
