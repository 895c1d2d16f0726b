import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.master_records import MasterRecord
from services.draft_store import DraftStore
from services.errors import ResultKind, StorageError, TransformError
from services.field_extractor import CURRENT_MAPPING_VERSION, merge_documents
from services.master_store import MasterStore

logger = logging.getLogger(__name__)

NO_DRAFTS_MESSAGE = "No draft data found for user."
SUCCESS_MESSAGE = "Final submission successful!"
FAILURE_PREFIX = "Error during final submission: "


@dataclass
class SubmissionResult:
    kind: ResultKind
    message: str
    record_id: int | None = None
    unmapped_keys: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.kind in (ResultKind.SUBMITTED, ResultKind.NOTHING_TO_SUBMIT)


def _failure(kind: ResultKind, detail: str) -> SubmissionResult:
    return SubmissionResult(kind=kind, message=f"{FAILURE_PREFIX}{detail}")


class SubmissionWorkflow:
    def __init__(
        self,
        db: Session,
        drafts: DraftStore,
        masters: MasterStore,
        mapping_version: int = CURRENT_MAPPING_VERSION,
    ):
        self.db = db
        self.drafts = drafts
        self.masters = masters
        self.mapping_version = mapping_version

    def _run(self, user_id: int) -> SubmissionResult | None:
        drafts = self.drafts.list_by_user(user_id)
        if not drafts:
            return None

        extraction = merge_documents(
            (d.form_data for d in drafts),
            version=self.mapping_version,
        )
        if extraction.unmapped_keys:
            logger.warning(
                "SUBMIT: user=%s unmapped draft keys=%s (mapping v%s)",
                user_id,
                extraction.unmapped_keys,
                extraction.mapping_version,
            )

        try:
            record = self.masters.save(
                MasterRecord(
                    user_id=user_id,
                    mapping_version=extraction.mapping_version,
                    unmapped_keys=extraction.unmapped_keys,
                    **extraction.fields.as_columns(),
                )
            )
            record_id = record.id
            # same transaction as the insert: a failed commit keeps the drafts
            self.drafts.delete_by_user(user_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

        logger.info(
            "SUBMIT: user=%s drafts=%s master_id=%s",
            user_id,
            len(drafts),
            record_id,
        )
        return SubmissionResult(
            kind=ResultKind.SUBMITTED,
            message=SUCCESS_MESSAGE,
            record_id=record_id,
            unmapped_keys=extraction.unmapped_keys,
        )

    def submit(self, user_id: int) -> SubmissionResult:
        try:
            result = self._run(user_id)
        except TransformError as exc:
            self.db.rollback()
            logger.warning("SUBMIT: user=%s transform failed: %s", user_id, exc)
            return _failure(exc.kind, str(exc))
        except StorageError as exc:
            self.db.rollback()
            logger.exception("SUBMIT: user=%s storage failed", user_id)
            return _failure(exc.kind, str(exc))
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("SUBMIT: user=%s draft read failed", user_id)
            return _failure(ResultKind.STORAGE_ERROR, str(exc))
        except Exception as exc:
            self.db.rollback()
            logger.exception("SUBMIT: user=%s failed", user_id)
            return _failure(ResultKind.UNEXPECTED_ERROR, str(exc) or type(exc).__name__)

        if result is None:
            logger.info("SUBMIT: user=%s has no drafts", user_id)
            return SubmissionResult(kind=ResultKind.NOTHING_TO_SUBMIT, message=NO_DRAFTS_MESSAGE)
        return result
