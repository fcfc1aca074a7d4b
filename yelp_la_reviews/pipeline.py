"""
End-to-end run of the LA Yelp review analysis.

Steps run in order, each taking the previous step's output as an argument:
1) Ingestion           load + clean the review CSV
2) Descriptive stats   tables and charts
3) Text normalization  token list per review
4-5) LDA               trimmed DFM, topic model, top terms
6) LSA                 TF-IDF + truncated SVD
7) Embeddings          Word2Vec on the raw comments, cached by corpus and settings hash
8) Prediction          star rating regressions on averaged word vectors
"""
import os
import warnings

from . import config
from .eda import run_eda
from .embeddings import prepare_embeddings, print_neighbors
from .ingest import load_reviews
from .lda import run_lda
from .lsa import run_lsa
from .modeling import build_features, evaluate_models
from .plotting import set_theme
from .preprocess import TextPreprocessor, get_stop_words


def run_pipeline(data_path=config.DATA_PATH, output_dir=config.OUTPUT_DIR,
                 num_topics=config.LDA_NUM_TOPICS, extended=False,
                 extended_num_topics=config.LDA_EXTENDED_NUM_TOPICS, stop_words=None, w2v_params=None):
    warnings.filterwarnings('ignore')
    set_theme()
    figure_dir = os.path.join(output_dir, "figures")
    cache_dir = os.path.join(output_dir, "cache")

    print("Step 1: ingestion")
    reviews = load_reviews(data_path)

    print("\nStep 2: descriptive analysis")
    figures = run_eda(reviews, figure_dir)

    print("\nStep 3: text normalization")
    if stop_words is None:
        stop_words = get_stop_words()
    processed = TextPreprocessor(stop_words=stop_words).fit_transform(reviews)
    token_lists = processed['tokens'].tolist()

    print("\nStep 4-5: LDA")
    lda = run_lda(token_lists, num_topics=num_topics, output_dir=figure_dir)
    if extended:
        lda_extended = run_lda(token_lists, num_topics=extended_num_topics,
                               output_dir=figure_dir, tag="lda_extended")
    else:
        lda_extended = None

    print("\nStep 6: LSA")
    lsa = run_lsa(token_lists, output_dir=figure_dir)

    print("\nStep 7: word embeddings")
    kv = prepare_embeddings(reviews[config.TEXT_COLUMN], work_dir=cache_dir, **(w2v_params or {}))
    print_neighbors(kv)

    print("\nStep 8: star rating prediction")
    X, y = build_features(reviews, kv, stop_words)
    metrics = evaluate_models(X, y)
    print("\n📌 Held-out metrics:")
    print(metrics)

    print("\n✅ Pipeline completed. Figures in:", figure_dir)
    return {
        'reviews': processed,
        'figures': figures,
        'lda': lda,
        'lda_extended': lda_extended,
        'lsa': lsa,
        'vectors': kv,
        'metrics': metrics,
    }
