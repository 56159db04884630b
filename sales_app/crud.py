import logging

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from . import models
from .months import month_clause

logger = logging.getLogger(__name__)

#Here we have the store side of the seed loader and the transaction listing

def seed_transactions(db: Session, rows): #Replacing seeded transactions by id, then bulk inserting
    ids = [row["id"] for row in rows]
    try:
        if ids:
            db.query(models.Transaction).filter(models.Transaction.id.in_(ids)).delete(synchronize_session=False)
        db.bulk_insert_mappings(models.Transaction, rows)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Seeded %d transactions", len(rows))
    return len(rows)

def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

def search_clause(search: str):
    # price is compared through its text form, so "150" finds a price of 150
    pattern = f"%{escape_like(search)}%"
    return or_(
        models.Transaction.title.ilike(pattern, escape="\\"),
        models.Transaction.description.ilike(pattern, escape="\\"),
        cast(models.Transaction.price, String).ilike(pattern, escape="\\"),
    )

def month_query(db: Session, month_index: int, search: str = ""): #Transactions of a month, optionally searched
    query = db.query(models.Transaction).filter(month_clause(models.Transaction.date_of_sale, month_index))
    if search:
        query = query.filter(search_clause(search))
    return query

def get_transactions(db: Session, month_index: int, search: str = "", page: int = 1, per_page: int = 10):
    skip = (page - 1) * per_page
    return month_query(db, month_index, search).order_by(models.Transaction.id).offset(skip).limit(per_page).all()

def count_transactions(db: Session, month_index: int, search: str = ""):
    return month_query(db, month_index, search).count()
