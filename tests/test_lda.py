import numpy as np

from yelp_la_reviews.dfm import build_dfm
from yelp_la_reviews.lda import (document_topics, dominant_topics, fit_lda, run_lda,
                                 search_num_topics, topic_term_matrix, top_terms)
from yelp_la_reviews.preprocess import tokenize

SCENARIO = ["great food great service", "terrible food", "great service"]


def _scenario_model():
    dtm = build_dfm([tokenize(t) for t in SCENARIO], 1, 3, docfreq_type='count')
    return dtm, fit_lda(dtm, num_topics=2, passes=5, iterations=50)


def test_scenario_two_topics():
    dtm, model = _scenario_model()
    top = top_terms(model, n=10)

    assert sorted(top) == [0, 1]
    for terms in top.values():
        assert 0 < len(terms) <= 4
        assert {w for w, _ in terms} <= {'great', 'food', 'service', 'terrible'}


def test_beta_rows_are_distributions():
    dtm, model = _scenario_model()
    beta = topic_term_matrix(model)

    assert beta.shape == (2, 4)
    np.testing.assert_allclose(beta.sum(axis=1), 1.0, rtol=1e-5)


def test_document_topics():
    dtm, model = _scenario_model()
    theta = document_topics(model, dtm)

    assert theta.shape == (3, 2)
    np.testing.assert_allclose(theta.sum(axis=1), 1.0, rtol=1e-4)
    assert set(dominant_topics(model, dtm)) <= {0, 1}


def test_fixed_seed_is_reproducible():
    _, first = _scenario_model()
    _, second = _scenario_model()
    np.testing.assert_allclose(topic_term_matrix(first), topic_term_matrix(second))


def test_run_lda_saves_figures(reviews, stop_words, tmp_path):
    token_lists = [tokenize(t, stop_words) for t in reviews['Comment']]
    out = run_lda(token_lists, num_topics=3, output_dir=str(tmp_path),
                  min_docfreq=0.1, max_docfreq=0.9)

    assert len(out['top_terms']) == 3
    assert len(out['assigned_topic']) == out['dtm'].shape[0]
    assert out['coherence'] is None
    assert {p.name for p in tmp_path.iterdir()} == {
        'lda_top_terms.png', 'lda_wordclouds.png', 'lda_topic_counts.png'}


def test_search_num_topics_small_range(reviews, stop_words):
    token_lists = [tokenize(t, stop_words) for t in reviews['Comment']]
    dtm = build_dfm(token_lists, 0.1, 0.9)
    texts = [token_lists[i] for i in dtm.doc_index]

    table, best = search_num_topics(dtm, texts, topic_range=range(2, 4))

    assert table.shape == (2, 2)
    assert list(table['num_topics']) == [2, 3]
    assert best in {2, 3}


def test_run_lda_with_topic_search(reviews, stop_words, tmp_path):
    token_lists = [tokenize(t, stop_words) for t in reviews['Comment']]
    out = run_lda(token_lists, num_topics=5, output_dir=str(tmp_path),
                  min_docfreq=0.1, max_docfreq=0.9, search=True, topic_range=range(2, 4))

    assert list(out['coherence']['num_topics']) == [2, 3]
    assert len(out['top_terms']) in {2, 3}
    assert out['model'].num_topics == len(out['top_terms'])
