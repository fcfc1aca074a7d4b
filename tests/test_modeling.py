import numpy as np
import pandas as pd
import pytest
from gensim.models import KeyedVectors

from yelp_la_reviews.modeling import (build_features, evaluate_models, fit_ols, regression_metrics,
                                      rmse, split_data)


@pytest.mark.parametrize("seed", [0, 1, 42])
def test_split_sizes_and_disjoint(seed):
    X = np.arange(50).reshape(25, 2)
    y = pd.Series(np.arange(25, dtype=float))
    X_train, X_test, y_train, y_test = split_data(X, y, test_size=0.2, random_state=seed)

    assert len(X_train) + len(X_test) == 25
    assert len(y_test) == 5
    assert set(y_train.index).isdisjoint(y_test.index)
    assert set(y_train.index) | set(y_test.index) == set(range(25))


def test_rmse_zero_only_on_exact_match():
    y = np.array([1.0, 3.5, 5.0])
    assert rmse(y, y) == 0.0
    assert rmse(y, y + np.array([0.0, 0.0, 1e-3])) > 0.0
    assert rmse(y, y[::-1]) > 0.0


def test_regression_metrics():
    metrics = regression_metrics([1.0, 2.0, 3.0, 4.0], [2.0, 2.0, 3.0, 6.0])

    assert metrics['rmse'] == pytest.approx(np.sqrt(5 / 4))
    assert metrics['mae'] == pytest.approx(0.75)
    assert metrics['r2'] == pytest.approx(0.0)


def test_build_features(reviews, stop_words):
    kv = KeyedVectors(vector_size=2)
    kv.add_vectors(['tacos', 'sushi'], np.array([[1.0, 0.0], [0.0, 2.0]], dtype=np.float32))
    reviews = reviews.copy()
    reviews.loc[3, 'StarRating'] = np.nan

    X, y = build_features(reviews, kv, stop_words)

    assert X.shape == (len(reviews) - 1, 2)
    assert len(y) == len(X)
    np.testing.assert_allclose(X[0], [1.0, 0.0])      # "great tacos ..."
    assert not X[1].any()                              # ramen review, nothing in vocabulary
    np.testing.assert_allclose(X[2], [0.0, 2.0])      # sushi


def test_ols_matches_exact_linear_data():
    rng = np.random.RandomState(0)
    X = rng.normal(size=(30, 3))
    y = 1.5 + X @ np.array([2.0, -1.0, 0.5])

    model = fit_ols(X, y)
    np.testing.assert_allclose(model.predict(X), y, atol=1e-8)


def test_evaluate_models_reports_every_model():
    rng = np.random.RandomState(1)
    X = rng.normal(size=(60, 4))
    y = pd.Series(3 + X[:, 0] - 0.5 * X[:, 1] + rng.normal(scale=0.1, size=60))

    metrics = evaluate_models(X, y, svr_grid={'C': [1, 10]}, rf_grid={'n_estimators': [20]})

    assert list(metrics.index) == ['SVR (RBF)', 'OLS', 'Ridge', 'Lasso', 'Elastic Net', 'Random Forest']
    assert set(metrics.columns) == {'train_r2', 'rmse', 'mae', 'r2'}
    assert (metrics['rmse'] >= 0).all()
    assert metrics.loc['OLS', 'r2'] > 0.9
