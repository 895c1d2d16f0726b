import argparse
import logging

from db.base import Base
from db.session import engine
from models.form_drafts import FormDraft  # noqa: F401
from models.master_records import MasterRecord  # noqa: F401

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Create the draft and master tables.")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="drop existing tables first (deletes all drafts and submissions)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if args.drop:
        Base.metadata.drop_all(bind=engine)
        logger.info("Dropped tables: %s", ", ".join(Base.metadata.tables))

    Base.metadata.create_all(bind=engine)
    print(f"Tables ready: {', '.join(Base.metadata.tables)} on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
