from sqlalchemy.orm import Session

from models.master_records import MasterRecord


class MasterStore:
    def __init__(self, db: Session):
        self.db = db

    def save(self, record: MasterRecord) -> MasterRecord:
        """
        Insert only. Earlier records for the same user are left untouched,
        so a repeated final submission yields another row.
        """
        self.db.add(record)
        self.db.flush()
        return record
