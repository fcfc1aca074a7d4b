import math
import os

import matplotlib.pyplot as plt
import seaborn as sns
from wordcloud import WordCloud

from . import config


def set_theme():
    sns.set(style="whitegrid")


def plain_label(value):
    """Escape dollar signs so price tiers like '$$' are not parsed as mathtext."""
    if isinstance(value, str):
        return value.replace("$", r"\$")
    return value


def save_figure(fig, name, output_dir=config.FIGURE_DIR):
    """Save a figure as PNG under output_dir and close it."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{name}.png")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Saved figure: {path}")
    return path


def topic_wordclouds(topic_weights, title_prefix="Topic", ncols=2):
    """
    One word cloud panel per topic.

    topic_weights maps topic id -> {term: weight}. Weights must be positive,
    WordCloud sizes words by relative frequency.
    """
    n = max(len(topic_weights), 1)
    nrows = math.ceil(n / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(6 * ncols, 4 * nrows), squeeze=False)

    for ax, (topic_id, weights) in zip(axes.flat, topic_weights.items()):
        # WordCloud wants plain strings, bigrams may carry spaces
        freqs = {term.replace(" ", "_"): w for term, w in weights.items() if w > 0}
        if freqs:
            wc = WordCloud(width=400, height=300, background_color='white').generate_from_frequencies(freqs)
            ax.imshow(wc, interpolation="bilinear")
        ax.set_title(f"{title_prefix} {topic_id}")

    for ax in axes.flat:
        ax.axis("off")

    return fig
