import logging

import numpy as np
import pandas as pd

#this module turns the raw seed payload into rows ready for the transactions table

logger = logging.getLogger(__name__)

COLUMN_NAMES = {
    "id": "id",
    "title": "title",
    "description": "description",
    "price": "price",
    "dateOfSale": "date_of_sale",
    "category": "category",
    "sold": "sold",
    "image": "image",
}
REQUIRED_COLUMNS = ["id", "price", "date_of_sale"]


class SeedPayloadError(ValueError):
    """Raised when the seed payload does not look like a list of transactions."""


def convert_payload_to_dataframe(payload):
    if not isinstance(payload, list):
        raise SeedPayloadError(f"expected a JSON array, got {type(payload).__name__}")
    if not all(isinstance(item, dict) for item in payload):
        raise SeedPayloadError("every seed entry must be a JSON object")

    df = pd.DataFrame(payload).rename(columns=COLUMN_NAMES)
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if payload and missing:
        raise SeedPayloadError(f"seed payload is missing fields: {', '.join(missing)}")

    # keep only known columns, adding the optional ones that the payload left out
    return df.reindex(columns=list(COLUMN_NAMES.values()))


def parse_sale_dates(series):
    # stored as naive UTC so EXTRACT(month) agrees across databases
    parsed = pd.to_datetime(series, utc=True, errors="coerce", format="mixed")
    return parsed.dt.tz_convert(None)


def parse_sold(value):
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return False
    return bool(value)


def preprocessing_data(payload):
    df = convert_payload_to_dataframe(payload)
    if df.empty:
        return []

    df['date_of_sale'] = parse_sale_dates(df['date_of_sale'])
    df['id'] = pd.to_numeric(df['id'], errors="coerce")
    df['price'] = pd.to_numeric(df['price'], errors="coerce").astype(np.float64)

    # fractional ids would be truncated onto another record's id
    invalid = df['id'].isna() | (df['id'] % 1 != 0) | df['date_of_sale'].isna() | df['price'].isna()
    if invalid.any():
        logger.warning("Dropping %d seed rows with an unusable id, price or dateOfSale", int(invalid.sum()))
        df = df[~invalid].copy()

    df['id'] = df['id'].astype(np.int64)
    df['sold'] = df['sold'].apply(parse_sold)
    df[['title', 'description']] = df[['title', 'description']].fillna("").astype(str)
    df = df.drop_duplicates(subset="id", keep="last")

    rows = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    for row in rows:
        row['id'] = int(row['id'])
        row['price'] = float(row['price'])
        row['sold'] = bool(row['sold'])
        row['date_of_sale'] = row['date_of_sale'].to_pydatetime()
    return rows
