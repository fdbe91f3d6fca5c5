"""
Premium Adopter Analysis — Modular Classification Pipeline

This package analyses which free users of a music social network become
premium subscribers ("adopters"). It balances classes, ranks features by
information gain, compares off-the-shelf classifiers, and grid-searches
decision-tree pruning parameters, reporting ROC/AUC and confusion metrics.

Modules:
    config          — Load YAML configuration safely.
    exceptions      — LoadError / ConfigError / EvaluationError.
    dataset         — Immutable Dataset value passed between stages.
    data_loader     — Read, validate and type the CSV.
    partitioner     — Stratified splits and k-fold indices.
    balancer        — Random over-sampling to a target minority fraction.
    feature_ranker  — Univariate information-gain ranking.
    preprocessor    — One-hot encode nominal columns, optionally scale.
    algorithms      — Classifier capability interface and variants.
    evaluator       — ROC/AUC, precision/recall/F1, confusion matrix.
    model_trainer   — Fitting, cross-validation, comparison, feature sweep.
    hyper_tuner     — minsplit x maxdepth grid search.
    report_plotter  — ROC, feature-sweep and tree figures.
    pipeline        — Orchestrates all components.
    utils.logger    — Unified timestamped console logger.
"""

from .config import Config
from .exceptions import AdopterAnalysisError, ConfigError, EvaluationError, LoadError
from .dataset import Dataset
from .data_loader import DataLoader
from .partitioner import k_fold_indices, k_fold_splits, stratified_split, stratified_three_way_split
from .balancer import Balancer, oversample
from .feature_ranker import FeatureRanker, rank_features, top_features
from .preprocessor import Preprocessor
from .algorithms import ClassificationAlgorithm, TrainedModel, get_algorithm
from .evaluator import EvaluationResult, Evaluator, evaluate, evaluate_scores
from .model_trainer import ModelTrainer, compare_algorithms, cross_validate, feature_count_sweep
from .hyper_tuner import GridSearch, SearchResult
from .report_plotter import ReportPlotter
from .pipeline import PipelineRunner

__all__ = [
    "Config",
    "AdopterAnalysisError",
    "ConfigError",
    "EvaluationError",
    "LoadError",
    "Dataset",
    "DataLoader",
    "stratified_split",
    "stratified_three_way_split",
    "k_fold_indices",
    "k_fold_splits",
    "Balancer",
    "oversample",
    "FeatureRanker",
    "rank_features",
    "top_features",
    "Preprocessor",
    "ClassificationAlgorithm",
    "TrainedModel",
    "get_algorithm",
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_scores",
    "ModelTrainer",
    "compare_algorithms",
    "cross_validate",
    "feature_count_sweep",
    "GridSearch",
    "SearchResult",
    "ReportPlotter",
    "PipelineRunner",
]
