import numpy as np
import pandas as pd

from adopter_analysis.preprocessor import Preprocessor


def _make_small_X():
    return pd.DataFrame(
        {
            "age": [22.0, 35.0, 51.0],
            "songsListened": [1200.0, 300.0, 5000.0],
            "male": pd.Categorical([1, 0, 1]),
            "good_country": pd.Categorical([0, 1, 1]),
        }
    )


def test_preprocessor_routes_columns_by_dtype():
    transformer = Preprocessor().build(_make_small_X())
    routes = {name: cols for name, _, cols in transformer.transformers}
    assert routes["num"] == ["age", "songsListened"]
    assert routes["nom"] == ["male", "good_country"]


def test_preprocessor_one_hot_encodes_nominal_columns():
    X = _make_small_X()
    Xt = Preprocessor().build(X).fit_transform(X)
    # 2 numeric + 2 levels for each nominal flag
    assert Xt.shape == (3, 6)
    assert np.isfinite(Xt).all()


def test_preprocessor_scaler_standardizes_numeric():
    X = _make_small_X()[["age", "songsListened"]]
    Xt = Preprocessor(use_scaler=True).build(X).fit_transform(X)
    np.testing.assert_allclose(Xt.mean(axis=0), 0.0, atol=1e-12)


def test_preprocessor_transform_handles_unseen_categories():
    X_train = _make_small_X()
    X_test = pd.DataFrame(
        {
            "age": [40.0],
            "songsListened": [100.0],
            "male": pd.Categorical([2]),
            "good_country": pd.Categorical([1]),
        }
    )
    transformer = Preprocessor().build(X_train)
    transformer.fit(X_train)
    assert transformer.transform(X_test).shape[0] == 1
