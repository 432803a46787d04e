# Shared fixtures: API client and profile factories.
import pytest
from fastapi.testclient import TestClient

from studyabroad.eligibility import ApplicantProfile


@pytest.fixture()
def client():
    from studyabroad.main import app
    return TestClient(app)


@pytest.fixture()
def profile_factory():
    # Defaults describe an applicant eligible for the USA
    def make(**kw):
        fields = {
            "cgpa": 3.2,
            "work_experience_years": 2,
            "english_score": 7.0,
            "score_type": "IELTS",
            "target_country": "USA",
        }
        fields.update(kw)
        return ApplicantProfile(**fields)
    return make


@pytest.fixture()
def payload_factory():
    def make(**kw):
        body = {
            "cgpa": 3.2,
            "work_experience_years": 2,
            "english_score": 7.0,
            "score_type": "IELTS",
            "target_country": "USA",
        }
        body.update(kw)
        return body
    return make
