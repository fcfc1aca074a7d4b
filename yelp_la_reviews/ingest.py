import pandas as pd

from . import config


def load_reviews(path=config.DATA_PATH):
    """Load the scraped review CSV and return a cleaned copy."""
    raw = pd.read_csv(path, encoding='utf-8')

    missing = [c for c in config.REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise ValueError(f"❌ CSV is missing columns: {missing}")

    print(f"Loaded {len(raw)} reviews from {path}")
    return clean_reviews(raw)


def clean_reviews(df):
    """
    Drop the scrape-date column and coerce types.

    Nothing is validated or imputed: bad dates become NaT, bad numbers NaN,
    and rows are never filtered or deduplicated.
    """
    df = df.copy()  # caller's frame stays untouched
    df = df.drop(columns=[c for c in config.DROP_COLUMNS if c in df.columns])

    for col in config.CATEGORICAL_COLUMNS:
        df[col] = df[col].astype('category')

    for col in config.NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors='coerce')

    df['CommentDate'] = pd.to_datetime(df['CommentDate'], errors='coerce')
    return df
