import math

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from gensim.models import LdaModel
from gensim.models.coherencemodel import CoherenceModel

from . import config
from .dfm import build_dfm, term_frequencies
from .plotting import save_figure, topic_wordclouds


def fit_lda(dtm, num_topics=config.LDA_NUM_TOPICS, random_state=config.RANDOM_STATE,
            passes=config.LDA_PASSES, iterations=config.LDA_ITERATIONS):
    return LdaModel(dtm.corpus, num_topics=num_topics, id2word=dtm.dictionary,
                    random_state=random_state, passes=passes, iterations=iterations,
                    alpha='auto', eta='auto')


def top_terms(model, n=config.TOP_N_TERMS):
    """topic id -> [(term, probability), ...], highest probability first."""
    return {topic_id: model.show_topic(topic_id, topn=n) for topic_id in range(model.num_topics)}


def topic_term_matrix(model):
    """Beta: topics x terms probability matrix, rows sum to 1."""
    return model.get_topics()


def document_topics(model, dtm):
    """Documents x topics matrix of topic proportions."""
    theta = np.zeros((len(dtm.corpus), model.num_topics))
    for row, bow in enumerate(dtm.corpus):
        for topic_id, prob in model.get_document_topics(bow, minimum_probability=0.0):
            theta[row, topic_id] = prob
    return theta


def dominant_topics(model, dtm):
    return document_topics(model, dtm).argmax(axis=1)


def search_num_topics(dtm, texts, topic_range=config.TOPIC_SEARCH_RANGE,
                      random_state=config.RANDOM_STATE):
    """
    Fit one model per topic count and score it with c_v coherence.

    Returns (table of num_topics/coherence, best num_topics).
    """
    rows = []
    for num_topics in topic_range:
        lda_model = fit_lda(dtm, num_topics=num_topics, random_state=random_state)
        coherence_model_lda = CoherenceModel(model=lda_model, texts=texts,
                                             dictionary=dtm.dictionary, coherence='c_v', processes=1)
        rows.append({'num_topics': num_topics, 'coherence': coherence_model_lda.get_coherence()})

    table = pd.DataFrame(rows)
    best = int(table.loc[table['coherence'].idxmax(), 'num_topics'])
    print(f"\nOptimal number of topics: {best}, Coherence Score: {table['coherence'].max():.4f}")
    return table, best


def plot_top_terms(top, ncols=3):
    n = len(top)
    nrows = math.ceil(n / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 3.5 * nrows), squeeze=False)

    for ax, (topic_id, terms) in zip(axes.flat, top.items()):
        words = [w for w, _ in terms][::-1]
        weights = [p for _, p in terms][::-1]
        ax.barh(words, weights, color='lightcoral', alpha=0.8)
        ax.set_title(f"Topic {topic_id}")
        ax.set_xlabel("beta")

    for ax in list(axes.flat)[n:]:
        ax.axis("off")
    return fig


def plot_topic_counts(assigned):
    counts = pd.Series(assigned).value_counts().sort_index()
    fig, ax = plt.subplots(figsize=(10, 5))
    counts.plot(kind='bar', color='lightcoral', alpha=0.8, ax=ax)
    ax.set_title("Number of Reviews per Topic")
    ax.set_xlabel("Topic ID")
    ax.set_ylabel("Review Count")
    ax.grid(axis='y', linestyle='--', alpha=0.7)
    for p in ax.patches:
        ax.annotate(f'{int(p.get_height())}',
                    (p.get_x() + p.get_width() / 2, p.get_height()),
                    ha='center', va='bottom', fontsize=10)
    return fig


def run_lda(token_lists, num_topics=config.LDA_NUM_TOPICS, output_dir=config.FIGURE_DIR,
            min_docfreq=config.MIN_DOCFREQ, max_docfreq=config.MAX_DOCFREQ,
            docfreq_type=config.DOCFREQ_TYPE, search=config.RUN_TOPIC_SEARCH,
            topic_range=config.TOPIC_SEARCH_RANGE, tag="lda"):
    dtm = build_dfm(token_lists, min_docfreq, max_docfreq, docfreq_type)

    freqs = sorted(term_frequencies(dtm).items(), key=lambda kv: kv[1], reverse=True)
    print("\n🔍 Most frequent terms:", [w for w, _ in freqs[:15]])

    coherence = None
    if search:
        texts = [token_lists[i] for i in dtm.doc_index]
        coherence, num_topics = search_num_topics(dtm, texts, topic_range)

    model = fit_lda(dtm, num_topics=num_topics)
    top = top_terms(model)

    print("\n📌 LDA Topic Word Probabilities:")
    for topic_id, topic_words in top.items():
        print(f"\n🔹 Topic {topic_id}:")
        for word, weight in topic_words:
            print(f"   {word}: {weight:.4f}")

    assigned = dominant_topics(model, dtm)
    save_figure(plot_top_terms(top), f"{tag}_top_terms", output_dir)
    save_figure(topic_wordclouds({k: dict(v) for k, v in top.items()}), f"{tag}_wordclouds", output_dir)
    save_figure(plot_topic_counts(assigned), f"{tag}_topic_counts", output_dir)

    return {'dtm': dtm, 'model': model, 'top_terms': top,
            'assigned_topic': assigned, 'coherence': coherence}
