# model_logistic.py
import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from sklearn.metrics import accuracy_score, confusion_matrix

import config
from data_prep import clean_bookings, load_bookings, sample_and_split


def is_cancelled(df):
    return (df[config.TARGET] == "cancelled").astype(int)


def fit_logit(train, predictors=config.LOGIT_PREDICTORS):
    """Binomial GLM of cancellation on the given numeric predictors."""
    constant = [col for col in predictors if train[col].nunique() < 2]
    if constant:
        raise ValueError(f"Constant predictors in training split: {constant}")
    data = train[predictors].assign(cancelled=is_cancelled(train))
    formula = "cancelled ~ " + " + ".join(predictors)
    return smf.glm(formula, data=data, family=sm.families.Binomial()).fit()


def odds_ratio_table(result, z=config.Z_95):
    coef, se = result.params, result.bse
    return pd.DataFrame({
        "coef": coef,
        "std_err": se,
        "z": result.tvalues,
        "p": result.pvalues,
        "odds_ratio": np.exp(coef),
        "ci_lower": np.exp(coef - z * se),
        "ci_upper": np.exp(coef + z * se),
    })


def predict_status(result, test, threshold=config.THRESHOLD):
    """Probability of cancellation and the thresholded label per row."""
    prob = result.predict(test)
    labels = pd.Series(np.where(prob > threshold, "cancelled", "kept"), index=test.index)
    return prob, labels


def evaluate(actual, predicted):
    """Accuracy and confusion matrix (rows actual, columns predicted)."""
    actual = pd.Series(actual).astype(str).to_numpy()
    predicted = pd.Series(predicted).astype(str).to_numpy()
    matrix = pd.DataFrame(
        confusion_matrix(actual, predicted, labels=config.LABELS),
        index=pd.Index(config.LABELS, name="actual"),
        columns=pd.Index(config.LABELS, name="predicted"),
    )
    return accuracy_score(actual, predicted), matrix


if __name__ == "__main__":
    df = clean_bookings(load_bookings())
    train, test = sample_and_split(df)
    result = fit_logit(train)
    print(result.summary())
    print(odds_ratio_table(result))
    _, labels = predict_status(result, test)
    accuracy, matrix = evaluate(test[config.TARGET], labels)
    print(matrix)
    print(f"Logistic regression accuracy: {accuracy:.4f}")
