# report.py
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

import config


def plot_oob_curve(curve, path):
    long = curve.reset_index().melt(id_vars="n_trees", var_name="error", value_name="rate")
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.lineplot(data=long, x="n_trees", y="rate", hue="error", ax=ax)
    ax.set_xlabel("Number of trees")
    ax.set_ylabel("Error rate")
    ax.set_title("Out-of-bag error by number of trees")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_importance(importance, path):
    fig, axes = plt.subplots(1, 2, figsize=(12, 6))
    for ax, measure in zip(axes, ["MeanDecreaseAccuracy", "MeanDecreaseGini"]):
        ordered = importance[measure].sort_values(ascending=False)
        sns.pointplot(x=ordered.values, y=list(ordered.index), linestyle="none", ax=ax)
        ax.set_title(measure)
        ax.set_xlabel(measure)
        ax.set_ylabel("")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def _table(df, fmt="{:.4g}"):
    return "```\n" + df.to_string(float_format=lambda x: fmt.format(x)) + "\n```\n"


def render(results):
    """Markdown text of the whole report."""
    lr = results["logistic"]
    rf = results["forest"]
    odds = lr["odds_ratios"]
    significant = ", ".join(odds.index[(odds["p"] < 0.001) & (odds.index != "Intercept")]) or "none"

    parts = [
        "# Predicting hotel booking cancellations\n",
        "## Data\n",
        f"The cleaned table holds {results['n_rows']} bookings with "
        f"{results['n_missing']} missing values and {results['n_negative']} negative "
        "lead times or room prices. Room prices were converted "
        f"from euros to US dollars at {config.EUR_TO_USD}. A random subsample of "
        f"{results['n_train'] + results['n_test']} bookings (seed {results['seed']}) was "
        f"split into {results['n_train']} training and {results['n_test']} test rows.\n",
        _table(results["outcomes"]),
        "## Logistic regression\n",
        "Cancellation was modelled with a binomial GLM. Odds ratios are the "
        "exponentiated coefficients; the 95% intervals are "
        f"exp(coef ± {config.Z_95}·SE).\n",
        _table(odds),
        f"Predictors significant at p < .001: {significant}.\n",
        f"With a {config.THRESHOLD} probability threshold the model classifies "
        f"{lr['accuracy']:.2%} of the test bookings correctly.\n",
        _table(lr["confusion"]),
        "## Hypothesis tests\n",
        "Welch two-sample t-tests compare kept and cancelled bookings without "
        "assuming equal variances.\n",
        _table(results["ttests"]),
        f"The chi-square test of meal plan against booking status gives "
        f"X² = {results['chi_square']['chi2']:.3f} on {results['chi_square']['df']} "
        f"degrees of freedom (p = {results['chi_square']['p']:.4g}).\n",
        _table(results["chi_square"]["table"]),
        "## Random forest\n",
        f"Forests of {rf['n_trees']} trees were grown for each number of candidate "
        "predictors per split; the out-of-bag error of each fit is below.\n",
        _table(rf["sweep"]),
        f"The final model uses {rf['max_features']} candidate predictors per split, "
        "the smallest value whose out-of-bag error is close to the best one. "
        f"Its out-of-bag error is {rf['oob_error']:.2%}.\n",
        f"![Out-of-bag error]({config.OOB_PLOT_NAME})\n",
        f"On the test bookings the forest is {rf['accuracy']:.2%} accurate.\n",
        _table(rf["confusion"]),
        "Variable importance, as the mean decrease in accuracy when a predictor "
        "is permuted and the mean decrease in Gini impurity:\n",
        _table(rf["importance"]),
        f"![Variable importance]({config.IMPORTANCE_PLOT_NAME})\n",
    ]
    return "\n".join(parts)


def write_report(results, out_dir=config.OUTPUT_DIR):
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    plot_oob_curve(results["forest"]["oob_curve"], out_dir / config.OOB_PLOT_NAME)
    plot_importance(results["forest"]["importance"], out_dir / config.IMPORTANCE_PLOT_NAME)
    path = out_dir / config.REPORT_NAME
    path.write_text(render(results), encoding="utf-8")
    return path
