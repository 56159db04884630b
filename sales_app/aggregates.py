"""
Month scoped aggregations backing the dashboard charts.

Each function runs its own queries against the session it is given and returns
plain dicts shaped like the JSON the endpoints send.
"""

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from . import models
from .months import month_clause

# (label, upper bound); a price lands in the first bucket whose bound it does not exceed
PRICE_RANGES = [
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
]


def _bucket_expression():
    price = models.Transaction.price
    whens = [(price <= upper, label) for label, upper in PRICE_RANGES if upper is not None]
    return case(*whens, else_=PRICE_RANGES[-1][0])


def get_statistics(db: Session, month_index: int) -> dict:
    sold = models.Transaction.sold.is_(True)
    row = (
        db.query(
            func.coalesce(func.sum(case((sold, models.Transaction.price), else_=0)), 0),
            func.count(case((sold, 1))),
            func.count(case((models.Transaction.sold.is_(False), 1))),
        )
        .filter(month_clause(models.Transaction.date_of_sale, month_index))
        .one()
    )
    total_sale_amount, total_sold, total_not_sold = row
    return {
        "totalSaleAmount": float(total_sale_amount or 0),
        "totalSoldItems": int(total_sold or 0),
        "totalNotSoldItems": int(total_not_sold or 0),
    }


def get_bar_chart(db: Session, month_index: int) -> list:
    bucket = _bucket_expression().label("bucket")
    rows = (
        db.query(bucket, func.count())
        .filter(month_clause(models.Transaction.date_of_sale, month_index))
        .group_by(bucket)
        .all()
    )
    counts = {label: count for label, count in rows}
    return [{"range": label, "count": int(counts.get(label, 0))} for label, _ in PRICE_RANGES]


def get_pie_chart(db: Session, month_index: int) -> list:
    rows = (
        db.query(models.Transaction.category, func.count())
        .filter(month_clause(models.Transaction.date_of_sale, month_index))
        .group_by(models.Transaction.category)
        .order_by(func.min(models.Transaction.id))
        .all()
    )
    return [{"_id": category, "count": int(count)} for category, count in rows]
