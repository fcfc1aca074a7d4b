"""
Latent semantic analysis: TF-IDF weighting followed by truncated SVD.

The TF-IDF matrix is built here from the token lists, independently of the
LDA count matrix.
"""
from dataclasses import dataclass
from typing import List

import numpy as np
import pandas as pd
from sklearn.decomposition import TruncatedSVD
from sklearn.feature_extraction.text import TfidfVectorizer

from . import config
from .plotting import save_figure, topic_wordclouds


def _identity(tokens):
    return tokens


@dataclass
class LsaResult:
    doc_scores: np.ndarray          # U * Sigma, documents x components
    term_loadings: np.ndarray       # V * Sigma, terms x components
    singular_values: np.ndarray
    explained_variance_ratio: np.ndarray
    vocabulary: List[str]
    doc_index: List[int]            # input row of each scored document

    @property
    def doc_topics(self):
        # argmax keeps the first column on ties
        return self.doc_scores.argmax(axis=1)


def build_tfidf(token_lists, min_df=config.LSA_MIN_DF, max_df=config.LSA_MAX_DF):
    """
    TF-IDF matrix over pre-tokenized documents.

    Documents without any token are left out; returns (matrix, vocabulary,
    input row of each kept document).
    """
    doc_index = [i for i, tokens in enumerate(token_lists) if len(tokens) > 0]
    docs = [list(token_lists[i]) for i in doc_index]
    vectorizer = TfidfVectorizer(analyzer=_identity, token_pattern=None,
                                 lowercase=False, min_df=min_df, max_df=max_df)
    X = vectorizer.fit_transform(docs)
    return X, list(vectorizer.get_feature_names_out()), doc_index


def fit_lsa(X, vocabulary, doc_index=None, n_components=config.LSA_COMPONENTS,
            random_state=config.RANDOM_STATE):
    svd = TruncatedSVD(n_components=n_components, random_state=random_state)
    doc_scores = svd.fit_transform(X)
    term_loadings = svd.components_.T * svd.singular_values_
    if doc_index is None:
        doc_index = list(range(X.shape[0]))
    return LsaResult(doc_scores, term_loadings, svd.singular_values_,
                     svd.explained_variance_ratio_, list(vocabulary), list(doc_index))


def top_loading_terms(result, n=config.TOP_N_TERMS):
    """component -> [(term, loading), ...] ordered by absolute loading."""
    top = {}
    for k in range(result.term_loadings.shape[1]):
        col = result.term_loadings[:, k]
        order = np.argsort(-np.abs(col))[:n]
        top[k] = [(result.vocabulary[i], float(col[i])) for i in order]
    return top


def topic_distribution(result):
    """Documents assigned to each component, zero-count components included."""
    n_components = result.doc_scores.shape[1]
    counts = pd.Series(result.doc_topics).value_counts()
    return counts.reindex(range(n_components), fill_value=0).rename('documents')


def run_lsa(token_lists, n_components=config.LSA_COMPONENTS, output_dir=config.FIGURE_DIR):
    X, vocabulary, doc_index = build_tfidf(token_lists)
    print(f"TF-IDF shape: {X.shape}")

    result = fit_lsa(X, vocabulary, doc_index, n_components=n_components)
    print(f"Explained variance (SVD): {result.explained_variance_ratio.sum():.3f}")

    print("\n📌 Documents per LSA component:")
    print(topic_distribution(result))

    top = top_loading_terms(result)
    for k, terms in top.items():
        print(f"\n🔹 Component {k}: " + ", ".join(f"{w} ({v:+.3f})" for w, v in terms))

    # word size follows absolute loading, sign is lost in the cloud
    weights = {k: {w: abs(v) for w, v in terms} for k, terms in top.items()}
    save_figure(topic_wordclouds(weights, title_prefix="Component"), "lsa_wordclouds", output_dir)
    return result
