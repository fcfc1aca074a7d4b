"""
Star rating regression on averaged Word2Vec features.

1) Average each review's in-vocabulary word vectors into one feature vector
2) Single seeded 80/20 train/test split
3) SVR and random forest tuned by grid search, OLS / ridge / lasso /
   elastic net untuned
4) RMSE, MAE and R^2 on held-out data; train R^2 kept to show the gap
"""
import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.ensemble import RandomForestRegressor
from sklearn.linear_model import ElasticNet, Lasso, Ridge
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from sklearn.model_selection import GridSearchCV, ShuffleSplit, train_test_split
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVR

from . import config
from .embeddings import average_vector
from .preprocess import tokenize


def build_features(df, kv, stop_words=None):
    """Averaged word vectors (n x vector_size) and star labels; unlabeled rows dropped."""
    labeled = df.dropna(subset=[config.TARGET_COLUMN])
    tokens = labeled[config.TEXT_COLUMN].apply(lambda text: tokenize(text, stop_words))
    X = np.vstack([average_vector(t, kv) for t in tokens]) if len(tokens) else np.empty((0, kv.vector_size))
    y = labeled[config.TARGET_COLUMN].astype(float).reset_index(drop=True)

    n_empty = int((~X.any(axis=1)).sum())
    print(f"Features: {X.shape}, {n_empty} reviews without any in-vocabulary token")
    return X, y


def split_data(X, y, test_size=config.TEST_SIZE, random_state=config.RANDOM_STATE):
    return train_test_split(X, y, test_size=test_size, random_state=random_state)


def rmse(y_true, y_pred):
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def regression_metrics(y_true, y_pred):
    return {
        'rmse': rmse(y_true, y_pred),
        'mae': float(mean_absolute_error(y_true, y_pred)),
        'r2': float(r2_score(y_true, y_pred)),
    }


def _validation_split(random_state):
    # one seeded hold-out inside the training data for every grid candidate
    return ShuffleSplit(n_splits=1, test_size=0.2, random_state=random_state)


def fit_svr(X_train, y_train, param_grid=config.SVR_PARAM_GRID, random_state=config.RANDOM_STATE):
    search = GridSearchCV(SVR(kernel='rbf'), param_grid, cv=_validation_split(random_state),
                          scoring='neg_root_mean_squared_error')
    search.fit(X_train, y_train)
    print(f"SVR best params: {search.best_params_}")
    return search.best_estimator_


def fit_random_forest(X_train, y_train, param_grid=config.RF_PARAM_GRID, random_state=config.RANDOM_STATE):
    search = GridSearchCV(RandomForestRegressor(random_state=random_state), param_grid,
                          cv=_validation_split(random_state), scoring='neg_root_mean_squared_error')
    search.fit(X_train, y_train)
    print(f"Random forest best params: {search.best_params_}")
    return search.best_estimator_


class OLSRegressor:
    """statsmodels OLS behind fit/predict, intercept added."""

    def fit(self, X, y):
        self.results_ = sm.OLS(np.asarray(y, dtype=float), sm.add_constant(X, has_constant='add')).fit()
        return self

    def predict(self, X):
        return self.results_.predict(sm.add_constant(X, has_constant='add'))


def fit_ols(X_train, y_train):
    return OLSRegressor().fit(X_train, y_train)


def fit_ridge(X_train, y_train, alpha=config.RIDGE_ALPHA):
    return Ridge(alpha=alpha).fit(X_train, y_train)


def fit_lasso(X_train, y_train, alpha=config.LASSO_ALPHA):
    return Lasso(alpha=alpha, max_iter=10000).fit(X_train, y_train)


def fit_elastic_net(X_train, y_train, alpha=config.ELASTIC_NET_ALPHA, l1_ratio=config.ELASTIC_NET_L1_RATIO):
    return ElasticNet(alpha=alpha, l1_ratio=l1_ratio, max_iter=10000).fit(X_train, y_train)


def evaluate_models(X, y, test_size=config.TEST_SIZE, random_state=config.RANDOM_STATE,
                    svr_grid=config.SVR_PARAM_GRID, rf_grid=config.RF_PARAM_GRID):
    X_train, X_test, y_train, y_test = split_data(X, y, test_size, random_state)

    scaler = StandardScaler()
    X_train = scaler.fit_transform(X_train)
    X_test = scaler.transform(X_test)

    fitters = {
        'SVR (RBF)': lambda: fit_svr(X_train, y_train, svr_grid, random_state),
        'OLS': lambda: fit_ols(X_train, y_train),
        'Ridge': lambda: fit_ridge(X_train, y_train),
        'Lasso': lambda: fit_lasso(X_train, y_train),
        'Elastic Net': lambda: fit_elastic_net(X_train, y_train),
        'Random Forest': lambda: fit_random_forest(X_train, y_train, rf_grid, random_state),
    }

    rows = []
    for name, fit in fitters.items():
        model = fit()
        row = {'model': name, 'train_r2': float(r2_score(y_train, model.predict(X_train)))}
        row.update(regression_metrics(y_test, model.predict(X_test)))
        print(f"{name} - Train R^2: {row['train_r2']:.4f}, Test R^2: {row['r2']:.4f}, "
              f"RMSE: {row['rmse']:.4f}, MAE: {row['mae']:.4f}")
        rows.append(row)

    return pd.DataFrame(rows).set_index('model')
