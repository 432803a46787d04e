import logging
from typing import Any, Dict, List

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse, Response

from .config import HOST, LOG_LEVEL, PORT, REPORT_FILENAME
from .schemas import ApplicantInput, CountryRules, EligibilityOutput
from .eligibility import (
    Verdict,
    profile_from_payload,
    rules_for,
    status_message,
    supported_countries,
    validate_payload,
)
from .report import render_pdf
from .session import EligibilitySession
from .logger import log_payload

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Study Abroad Eligibility API", version="1.0.0")

# --- Convenience routes ---
@app.get("/", include_in_schema=False)
def home():
    return RedirectResponse(url="/docs", status_code=307)

@app.get("/health", include_in_schema=False)
def health():
    return {"status": "healthy"}

@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    # Avoid 404 log spam from browsers requesting a favicon.
    return Response(status_code=204)
# --- End convenience routes ---


def verdict_to_dict(country: str, verdict: Verdict) -> Dict[str, Any]:
    return {
        "target_country": country,
        "eligible": verdict.eligible,
        "status_message": status_message(verdict),
        "ielts_equivalent": verdict.ielts_equivalent,
        "criteria": [
            {"description": c.description, "satisfied": c.satisfied} for c in verdict.criteria
        ],
        "recommended_institutions": [
            {"name": i.name, "website_url": i.website_url} for i in verdict.recommended_institutions
        ],
    }


def _validated(payload: ApplicantInput) -> Dict[str, Any]:
    # Convert to dict early for logging and range validation
    payload_dict: Dict[str, Any] = payload.model_dump(mode="json")
    log_payload("in", payload_dict)

    v = validate_payload(payload_dict)
    if not v.ok:
        log_payload("out", {"eligible": False, "errors": v.errors})
        raise HTTPException(status_code=422, detail=v.errors)
    return payload_dict


@app.get("/countries", response_model=List[CountryRules])
async def countries():
    return [{"country": c, "criteria": rules_for(c)} for c in supported_countries()]


@app.post("/check_eligibility", response_model=EligibilityOutput)
async def check_eligibility(payload: ApplicantInput):
    payload_dict = _validated(payload)

    try:
        profile = profile_from_payload(payload_dict)
        response = verdict_to_dict(profile.target_country, EligibilitySession().submit(profile))
    except Exception as e:
        logger.exception("Eligibility check failed")
        log_payload("out", {"eligible": False, "errors": [f"Internal error: {e}"]})
        raise HTTPException(status_code=500, detail="Internal Server Error")

    log_payload("out", response)
    return JSONResponse(content=response)


@app.post("/report")
async def download_report(payload: ApplicantInput):
    payload_dict = _validated(payload)

    try:
        profile = profile_from_payload(payload_dict)
        session = EligibilitySession()
        verdict = session.submit(profile)
        pdf = render_pdf(session.report())
    except Exception as e:
        logger.exception("Report generation failed")
        log_payload("out", {"eligible": False, "errors": [f"Internal error: {e}"]})
        raise HTTPException(status_code=500, detail="Internal Server Error")

    log_payload("out", {"report": REPORT_FILENAME, "eligible": verdict.eligible, "bytes": len(pdf)})
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )


if __name__ == "__main__":
    uvicorn.run("studyabroad.main:app", host=HOST, port=PORT, reload=False)
