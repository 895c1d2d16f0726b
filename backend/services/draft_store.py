from typing import Any

from sqlalchemy.orm import Session

from models.form_drafts import FormDraft


class DraftStore:
    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        user_id: int,
        form_number: int | None,
        form_data: dict[str, Any],
    ) -> FormDraft:
        # always a new row, drafts are never updated in place
        draft = FormDraft(user_id=user_id, form_number=form_number, form_data=form_data)
        self.db.add(draft)
        self.db.flush()
        self.db.refresh(draft)
        return draft

    def list_by_user(self, user_id: int) -> list[FormDraft]:
        return (
            self.db.query(FormDraft)
            .filter(FormDraft.user_id == user_id)
            .order_by(FormDraft.id.asc())
            .all()
        )

    def delete_by_user(self, user_id: int) -> int:
        deleted = (
            self.db.query(FormDraft)
            .filter(FormDraft.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return int(deleted or 0)
