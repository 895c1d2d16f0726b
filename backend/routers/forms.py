# routers/forms.py

import json
import math
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from db.deps import get_db
from models.form_schemas import DraftResponse, FieldMappingResponse
from services.draft_store import DraftStore
from services.errors import ResultKind
from services.field_extractor import CURRENT_MAPPING_VERSION, describe_mapping
from services.master_store import MasterStore
from services.submission_workflow import SubmissionWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])

_STATUS_BY_KIND = {
    ResultKind.SUBMITTED: status.HTTP_200_OK,
    ResultKind.NOTHING_TO_SUBMIT: status.HTTP_200_OK,
    ResultKind.TRANSFORM_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ResultKind.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ResultKind.UNEXPECTED_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_draft_store(db: Session = Depends(get_db)) -> DraftStore:
    return DraftStore(db)


def get_submission_workflow(db: Session = Depends(get_db)) -> SubmissionWorkflow:
    return SubmissionWorkflow(db, drafts=DraftStore(db), masters=MasterStore(db))


def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")


def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"number out of range: {token}")
    return value


def _parse_draft_body(raw: bytes) -> dict:
    if not raw.strip():
        raise HTTPException(status_code=400, detail="Empty draft body.")
    try:
        document = json.loads(
            raw,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Malformed JSON body: {exc}")
    if not isinstance(document, dict):
        raise HTTPException(status_code=400, detail="Draft body must be a JSON object.")
    return document


@router.post("/saveDraft", response_model=DraftResponse)
async def save_draft(
    request: Request,
    user_id: int = Query(..., alias="userId"),
    form_number: int | None = Query(None, alias="formNumber"),
    db: Session = Depends(get_db),
    drafts: DraftStore = Depends(get_draft_store),
):
    form_data = _parse_draft_body(await request.body())

    draft = drafts.save(user_id=user_id, form_number=form_number, form_data=form_data)
    db.commit()
    db.refresh(draft)

    logger.info(
        "DRAFT: user=%s form=%s draft_id=%s keys=%s",
        user_id,
        form_number,
        draft.id,
        len(form_data),
    )
    return DraftResponse.model_validate(draft)


@router.get("/getDraft", response_model=list[DraftResponse])
def get_draft(
    user_id: int = Query(..., alias="userId"),
    drafts: DraftStore = Depends(get_draft_store),
):
    return [DraftResponse.model_validate(d) for d in drafts.list_by_user(user_id)]


@router.post("/finalSubmit", response_class=PlainTextResponse)
def final_submit(
    user_id: int = Query(..., alias="userId"),
    workflow: SubmissionWorkflow = Depends(get_submission_workflow),
):
    result = workflow.submit(user_id)
    return PlainTextResponse(result.message, status_code=_STATUS_BY_KIND[result.kind])


@router.get("/fieldMapping", response_model=FieldMappingResponse)
def field_mapping():
    return {
        "version": CURRENT_MAPPING_VERSION,
        "fields": describe_mapping(CURRENT_MAPPING_VERSION),
    }
