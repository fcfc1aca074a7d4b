import re

import nltk
from nltk.corpus import stopwords
from sklearn.base import BaseEstimator, TransformerMixin

from . import config


def get_stop_words(extra=config.DOMAIN_STOPWORDS):
    """NLTK English stopwords plus the domain words."""
    try:
        words = stopwords.words('english')
    except LookupError:
        nltk.download('stopwords', quiet=True)
        words = stopwords.words('english')
    return set(words).union(extra)


def normalize_text(text):
    """Lowercase and keep letters only; digits, punctuation and symbols become spaces."""
    if not isinstance(text, str):
        return ""
    text = text.lower()
    text = re.sub(r'[^a-z\s]', ' ', text)
    return re.sub(r'\s+', ' ', text).strip()


def tokenize(text, stop_words=None, min_length=config.MIN_TOKEN_LENGTH):
    """Whitespace tokens of the normalized text, source order kept, no stemming."""
    tokens = normalize_text(text).split()
    if stop_words:
        tokens = [t for t in tokens if t not in stop_words]
    return [t for t in tokens if len(t) >= min_length]


class TextPreprocessor(BaseEstimator, TransformerMixin):
    """Adds a 'tokens' column built from the comment column."""

    def __init__(self, column=config.TEXT_COLUMN, stop_words=None):
        self.column = column
        self.stop_words = stop_words

    def fit(self, X, y=None):
        self.stop_words_ = get_stop_words() if self.stop_words is None else set(self.stop_words)
        return self

    def transform(self, X):
        X = X.copy()  # Prevent SettingWithCopyWarning
        X['tokens'] = X[self.column].apply(lambda text: tokenize(text, self.stop_words_))
        return X
