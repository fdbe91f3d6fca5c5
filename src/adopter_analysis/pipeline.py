import warnings
from textwrap import indent
from typing import Any, Dict

from .balancer import Balancer
from .config import Config
from .data_loader import DataLoader
from .evaluator import Evaluator, evaluate
from .feature_ranker import FeatureRanker, top_features
from .hyper_tuner import GridSearch
from .model_trainer import ModelTrainer, compare_algorithms, feature_count_sweep
from .partitioner import stratified_three_way_split
from .report_plotter import ReportPlotter
from .utils.logger import get_logger


class PipelineRunner:
    """End-to-end premium adopter analysis.

    Steps:
      1. Load and validate the user table
      2. Stratified train/validation/test split
      3. Oversample the minority class in the training part
      4. Rank features by information gain, keep the configured top-k
      5. Compare classifiers on the test part
      6. Grid-search decision-tree minsplit/maxdepth on the validation part
      7. Evaluate the tuned tree on test and with stratified cross-validation
      8. Sweep feature count and write metrics/figures"""

    def __init__(self, config_path: str):
        self.config = Config.from_yaml(config_path)
        self.logger = get_logger(self.__class__.__name__)
        warnings.filterwarnings(
            "ignore",
            message="X does not have valid feature names",
            category=UserWarning,
            module="sklearn",
        )

    def run(self) -> Dict[str, Any]:
        cfg = self.config
        seed = cfg.validation.get("random_state", 42)
        self.logger.info("Starting adopter analysis pipeline")

        dataset = DataLoader(
            cfg.data["path"],
            target_col=cfg.data.get("target_col", "adopter"),
            id_col=cfg.data.get("id_col", "net_user"),
            nominal_cols=cfg.data.get("nominal_cols", ["male", "good_country"]),
        ).load()

        train, validation, test = stratified_three_way_split(
            dataset,
            train_fraction=cfg.validation.get("train_fraction", 0.6),
            validation_fraction=cfg.validation.get("validation_fraction", 0.2),
            seed=seed,
        )
        self.logger.info(
            f"Split sizes: train={len(train):,} validation={len(validation):,} test={len(test):,}"
        )

        balancer = Balancer(cfg.balancing.get("target_minority_fraction", 0.33))
        balanced = balancer.oversample(train, seed=seed)

        ranking = FeatureRanker(n_bins=cfg.features.get("n_bins", 10)).rank(balanced)
        ranking_str = indent(
            "\n".join(f"{name}: {score:.4f}" for name, score in ranking), " " * 4
        )
        self.logger.info(f"Information gain ranking:\n{ranking_str}")

        features = cfg.features.get("columns") or top_features(ranking, cfg.features.get("top_k", 2))
        dataset.require_features(features)
        self.logger.info(f"Modeling with features: {features}")

        comparison = compare_algorithms(
            balanced,
            test,
            features,
            names=cfg.model.get("algorithms", ["decision_tree", "naive_bayes"]),
            hyperparameters=cfg.model.get("params", {}),
        )

        evaluator = Evaluator(
            cfg.output.get("metrics_path", "artifacts/metrics.json"),
            cfg.output.get("figures_dir", "artifacts"),
        )
        for name, result in comparison.items():
            evaluator.log_result(name, result)

        search = GridSearch(
            minsplit_values=range(*cfg.search.get("minsplit", [2, 51, 2])),
            maxdepth_values=range(*cfg.search.get("maxdepth", [3, 11, 1])),
            n_jobs=cfg.search.get("n_jobs", 1),
        ).search(balanced, validation, features, seed=seed)

        tree_params = dict(cfg.model.get("params", {}).get("decision_tree", {}))
        tree_params.update(search.best_params)
        tuner = ModelTrainer(
            "decision_tree",
            hyperparameters=tree_params,
            balancer=balancer,
            n_splits=cfg.validation.get("n_splits", 5),
        )
        tuned_model = tuner.fit(balanced, features)
        tuned_result = evaluate(tuned_model, test)
        evaluator.log_result("tuned_decision_tree", tuned_result)

        cv = tuner.cross_validate(dataset, features, seed)

        sweep_algorithm = cfg.features.get("sweep_algorithm", "decision_tree")
        sweep = feature_count_sweep(
            balanced,
            validation,
            ranking,
            sweep_algorithm,
            max_features=cfg.features.get("sweep_max"),
            hyperparameters=cfg.model.get("params", {}).get(sweep_algorithm),
        )
        best_n, best_auc = max(sweep, key=lambda item: item[1])
        self.logger.info(f"Feature sweep peak: top-{best_n} features, AUC={best_auc:.4f}")

        report: Dict[str, Any] = {
            "features": list(features),
            "ranking": [{"feature": n, "information_gain": s} for n, s in ranking],
            "comparison": comparison,
            "grid_search": {
                "best": search.best_params | {"auc": search.best.auc},
                "points": search.to_frame().to_dict(orient="records"),
            },
            "tuned_decision_tree": tuned_result,
            "cross_validation": {
                "fold_aucs": list(cv.fold_aucs),
                "mean_auc": cv.mean_auc,
                "std_auc": cv.std_auc,
            },
            "feature_count_sweep": [{"n_features": n, "auc": a} for n, a in sweep],
        }
        evaluator.save_metrics(report)

        if cfg.output.get("plots", True):
            plotter = ReportPlotter(cfg.output.get("figures_dir", "artifacts"))
            plotter.roc_curves({**comparison, "tuned_decision_tree": tuned_result})
            plotter.feature_sweep(sweep)
            plotter.decision_tree(tuned_model)
            evaluator.plot_confusion_matrix(tuned_result, "tuned_decision_tree")

        self.logger.info("Pipeline finished")
        return report
