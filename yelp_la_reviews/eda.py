"""
Descriptive statistics and charts over the cleaned review table.

Nothing here mutates the frame; every function reads it and returns a new
table or figure.
"""
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from . import config
from .plotting import plain_label, save_figure

WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
MONTHS = list(range(1, 13))


def frequency_table(df, column):
    counts = df[column].value_counts(dropna=False)
    table = pd.DataFrame({'count': counts, 'share': counts / counts.sum()})
    return table.sort_values('count', ascending=False)


def rating_summary(df):
    return df[['StarRating', 'NumberOfReviews']].describe()


def monthly_review_counts(df):
    """Number of reviews per calendar month, reviews without a date skipped."""
    dated = df.dropna(subset=['CommentDate'])
    return dated.set_index('CommentDate').resample('MS').size().rename('reviews')


def weekday_month_counts(df):
    """Weekday x month grid of review counts (rows Monday..Sunday, columns 1..12)."""
    dated = df.dropna(subset=['CommentDate'])
    grid = pd.crosstab(dated['CommentDate'].dt.day_name(), dated['CommentDate'].dt.month)
    return grid.reindex(index=WEEKDAYS, columns=MONTHS, fill_value=0)


def comment_lengths(df):
    return df[config.TEXT_COLUMN].fillna('').astype(str).str.split().str.len()


# ---- charts

def plot_frequency(df, column, top_n=20):
    counts = frequency_table(df, column)['count'].head(top_n)
    fig, ax = plt.subplots(figsize=(10, 6))
    labels = [plain_label(str(v)) for v in counts.index]
    sns.barplot(x=counts.values, y=labels, ax=ax, color='lightcoral')
    ax.set_title(f"Reviews by {column}")
    ax.set_xlabel("Review Count")
    ax.set_ylabel(column)
    return fig


def plot_rating_histogram(df):
    fig, ax = plt.subplots(figsize=(8, 4))
    sns.histplot(df['StarRating'].dropna(), bins=10, ax=ax)
    ax.set_title("Star Rating Distribution")
    ax.set_xlabel("Star Rating")
    return fig


def plot_rating_boxplot(df, by='Price'):
    fig, ax = plt.subplots(figsize=(10, 5))
    data = df.assign(**{by: df[by].astype(object).map(plain_label)})
    sns.boxplot(data=data, x=by, y='StarRating', ax=ax)
    ax.set_title(f"Star Rating by {by}")
    ax.tick_params(axis='x', rotation=45)
    return fig


def plot_monthly_trend(df):
    monthly = monthly_review_counts(df)
    fig, ax = plt.subplots(figsize=(15, 5))
    ax.plot(monthly.index, monthly.values, marker='o')
    ax.set_title("Reviews per Month")
    ax.set_ylabel("Review Count")
    return fig


def plot_weekday_month_heatmap(df):
    grid = weekday_month_counts(df).astype(int)
    fig, ax = plt.subplots(figsize=(12, 5))
    sns.heatmap(grid, annot=True, fmt="d", cmap="coolwarm", ax=ax)
    ax.set_title("Reviews by Weekday and Month")
    ax.set_xlabel("Month")
    ax.set_ylabel("Weekday")
    return fig


def plot_comment_length(df):
    fig, ax = plt.subplots(figsize=(8, 4))
    sns.histplot(comment_lengths(df), kde=True, ax=ax)
    ax.set_title("Comment Length Distribution (Word Count)")
    ax.set_xlabel("Word Count")
    return fig


def run_eda(df, output_dir=config.FIGURE_DIR):
    print("\n📌 Price tiers:")
    print(frequency_table(df, 'Price'))
    print("\n📌 Cuisine styles:")
    print(frequency_table(df, 'Style').head(15))
    print("\n📌 Rating summary:")
    print(rating_summary(df))

    figures = {
        'restaurants': plot_frequency(df, 'RestaurantName'),
        'styles': plot_frequency(df, 'Style'),
        'rating_hist': plot_rating_histogram(df),
        'rating_by_price': plot_rating_boxplot(df, by='Price'),
        'rating_by_style': plot_rating_boxplot(df, by='Style'),
        'monthly_trend': plot_monthly_trend(df),
        'weekday_month_heatmap': plot_weekday_month_heatmap(df),
        'comment_length': plot_comment_length(df),
    }
    return {name: save_figure(fig, name, output_dir) for name, fig in figures.items()}
