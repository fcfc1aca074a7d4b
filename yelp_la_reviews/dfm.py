"""
Document-term (document-frequency) matrix built from token lists.

Terms outside the document-frequency band are removed first, then documents
left without any term are dropped, since an empty row makes the topic model
fit ill-defined. The surviving column set is fixed from then on.
"""
import math
from dataclasses import dataclass
from typing import List

import numpy as np
from gensim import corpora
from gensim.matutils import corpus2csc


@dataclass
class DocumentTermMatrix:
    dictionary: corpora.Dictionary
    corpus: List[list]          # bag-of-words per surviving document
    doc_index: List[int]        # row position of each surviving document in the input
    num_docs_total: int         # documents before empty rows were dropped

    @property
    def shape(self):
        return (len(self.corpus), len(self.dictionary))

    @property
    def vocabulary(self):
        return [self.dictionary[i] for i in range(len(self.dictionary))]

    def to_sparse(self):
        """Documents x terms CSR matrix of counts."""
        return corpus2csc(self.corpus, num_terms=len(self.dictionary), num_docs=len(self.corpus)).T.tocsr()

    def document_frequencies(self):
        """term -> number of documents containing it."""
        return {self.dictionary[i]: self.dictionary.dfs[i] for i in range(len(self.dictionary))}


def docfreq_bounds(num_docs, min_docfreq, max_docfreq, docfreq_type='prop'):
    """Inclusive [lo, hi] document counts a term must fall in."""
    if docfreq_type == 'prop':
        return math.ceil(min_docfreq * num_docs), math.floor(max_docfreq * num_docs)
    if docfreq_type == 'count':
        return int(min_docfreq), int(max_docfreq)
    raise ValueError("docfreq_type must be 'prop' or 'count'")


def build_dfm(token_lists, min_docfreq, max_docfreq, docfreq_type='prop'):
    token_lists = [list(tokens) for tokens in token_lists]
    dictionary = corpora.Dictionary(token_lists)
    lo, hi = docfreq_bounds(len(token_lists), min_docfreq, max_docfreq, docfreq_type)

    bad_ids = [term_id for term_id, df in dictionary.dfs.items() if not lo <= df <= hi]
    dictionary.filter_tokens(bad_ids=bad_ids)

    corpus, doc_index = [], []
    for i, tokens in enumerate(token_lists):
        bow = dictionary.doc2bow(tokens)
        if bow:
            corpus.append(bow)
            doc_index.append(i)

    dropped = len(token_lists) - len(corpus)
    print(f"DFM: {len(corpus)} documents x {len(dictionary)} terms "
          f"(docfreq band [{lo}, {hi}], {dropped} empty documents dropped)")
    return DocumentTermMatrix(dictionary, corpus, doc_index, len(token_lists))


def term_frequencies(dtm):
    """Column sums of the count matrix, i.e. corpus-wide term frequency."""
    counts = np.asarray(dtm.to_sparse().sum(axis=0)).ravel()
    return dict(zip(dtm.vocabulary, counts))
